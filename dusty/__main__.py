"""Entry point for `python -m dusty`.

Usage:
    python -m dusty                          # run the Telegram bot
    python -m dusty -say Dusty is at P1.303  # answer one message and exit
    python -m dusty -forget                  # delete the saved location
"""

import sys


def _say(text):
    """Answer a single message, as if it had come in over chat."""
    from dusty.commands import router

    print(f"> {text}")
    print(router.dispatch(text, source="[cli]"))


def _forget():
    from dusty.commands import router
    from dusty.store import StoreError

    store = router.default_store()
    try:
        store.clear()
    except StoreError as e:
        print(f"Couldn't forget Dusty's location: {e}")
        return 1
    print(f"Forgot Dusty's location ({store.path}).")
    return 0


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    if len(argv) >= 2 and argv[0] == "-say":
        _say(" ".join(argv[1:]))
        return 0
    if argv == ["-forget"]:
        return _forget()
    if argv:
        print(__doc__.strip())
        return 2

    from dusty.telegram_bot import run_bot
    return 0 if run_bot() else 1


if __name__ == "__main__":
    sys.exit(main())
