"""Whereabouts command: ask where Dusty is, or report where you left it.

Handles:
    "Where is Dusty?"
    "Dusty is at P1.303"

Triggers are case-insensitive; the location itself is not ("P1.303", not
"p1.303").
"""

import os

from dusty.commands.parse import Parse
from dusty.location import LocationError, parse_location
from dusty.store import State, StoreError

QUERY_PHRASE = "where is dusty?"
UPDATE_PREFIX = "dusty is at "

ACK = "Got it!"

STALE_AFTER_QUERY_VAR = "DUSTY_STALE_AFTER_QUERY"


def _log(msg):
    print(msg, flush=True)


def _stale_after_query():
    """After answering "where is Dusty?", mark the location unconfirmed?

    Whoever asked has probably gone to fetch it. Off unless
    $DUSTY_STALE_AFTER_QUERY is set; read on every query.
    """
    return os.environ.get(STALE_AFTER_QUERY_VAR, "").lower() in ("1", "true", "yes")


def parse(text):
    t = text.strip()
    normalized = t.lower()

    if normalized == QUERY_PHRASE:
        return Parse(command="where_is")

    if normalized.startswith(UPDATE_PREFIX):
        # Slice the original text so the location keeps its case
        payload = t[len(UPDATE_PREFIX):].strip().rstrip("!?,.")
        return Parse(command="put_back", args={"location": payload})

    return None


def _where_is(store):
    try:
        state = store.load()
    except StoreError as e:
        _log(f"  Couldn't load state from {store!r}: {e}")
        return f"Sorry, something went wrong reading Dusty's location ({e.kind})."

    if state is None:
        return "I don't know where Dusty is yet. If you find it, tell me \"Dusty is at P1.303\"."

    if not state.confirmed:
        return f"Dusty was last seen at {state.location}, but nobody has confirmed it since."

    if _stale_after_query():
        try:
            store.save(State(state.location, confirmed=False))
        except StoreError as e:
            _log(f"  Couldn't mark location stale in {store!r}: {e}")

    return f"Dusty is at {state.location}."


def _put_back(text, store):
    try:
        location = parse_location(text)
    except LocationError as e:
        return str(e)

    try:
        store.save(State(location, confirmed=True))
    except StoreError as e:
        _log(f"  Couldn't save {location} to {store!r}: {e}")
        return f"Sorry, something went wrong saving Dusty's location ({e.kind})."

    _log(f"  Dusty is now at {location}")
    return ACK


def handle(p, store):
    if p.command == "where_is":
        return _where_is(store)
    elif p.command == "put_back":
        return _put_back(p.args["location"], store)

    return "Sorry, I didn't understand that Dusty command."
