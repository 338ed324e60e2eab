from dusty.commands import whereabouts

ALL_COMMANDS = [whereabouts]
