"""Command router: the one entry point from chat text to reply text.

Each command module must provide:
    parse(text: str) -> Parse | None        # classify + extract args, None if no match
    handle(parse: Parse, store) -> str      # do it, using the state store

dispatch() never raises: whatever goes wrong, the sender gets a reply.
"""

import os
import traceback
from datetime import datetime

from dusty.commands import ALL_COMMANDS
from dusty.store import StateStore

HELP_TEXT = (
    "Sorry, I didn't understand that. Ask \"Where is Dusty?\" or tell me "
    "where Dusty is, e.g. \"Dusty is at P1.303\"."
)

INTERNAL_ERROR_TEXT = "Sorry, something went wrong (internal error)."

_store = None

# Log file: lives next to the dusty package directory
_LOG_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "dusty.log")


def _log(msg):
    print(msg, flush=True)


def _log_request(text, best_parse, source="[cli]"):
    """Append a compact 2-line entry to the log file."""
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    if best_parse is None:
        parse_line = "  -> none"
    else:
        parts = [best_parse.command]
        for k, v in best_parse.args.items():
            parts.append(f"{k}={v!r}")
        parse_line = f"  -> {', '.join(parts)}"
    try:
        with open(_LOG_PATH, "a") as f:
            f.write(f"{ts} {source}  {text}\n{parse_line}\n")
    except OSError:
        pass


def default_store():
    """The file-backed store used when dispatch() isn't given one."""
    global _store
    if _store is None:
        _store = StateStore()
    return _store


def dispatch(text, store=None, source="[cli]"):
    """Interpret one chat message and return the reply.

    Args:
        text: Message text, as sent.
        store: Where to read/write Dusty's state; defaults to default_store().
        source: Source tag for logging, e.g. "[cli]" or "[Telegram:Ana]".

    Returns:
        The reply text (never None).
    """
    try:
        return _dispatch(text, store, source)
    except Exception as e:
        _log(f"  Error handling {text!r}: {e}")
        _log(traceback.format_exc())
        return INTERNAL_ERROR_TEXT


def _dispatch(text, store, source):
    for cmd in ALL_COMMANDS:
        p = cmd.parse(text)
        if p is not None:
            break
    else:
        _log_request(text, None, source)
        return HELP_TEXT

    _log_request(text, p, source)
    if store is None:
        store = default_store()
    return cmd.handle(p, store)
