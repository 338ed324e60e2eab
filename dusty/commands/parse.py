"""Parse object for the command system.

whereabouts.parse(text) returns a Parse, or None when the text isn't a
command we know. The router passes the Parse on to handle(parse, store).
"""

from dataclasses import dataclass, field


@dataclass
class Parse:
    command: str          # "where_is" or "put_back"
    args: dict = field(default_factory=dict)
