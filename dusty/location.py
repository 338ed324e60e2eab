"""Dusty's location: a floor and a parking space, written as P<floor>.<space>.

Examples:
    >>> parse_location("P1.303")
    Location(floor=1, space=303)
    >>> format_location(Location(-2, 7))
    'P-2.7'

Floors run from -4 to 4 and spaces from 0 to 400. A Location can't be built
outside those ranges, so anything holding one can trust it.
"""

import re
from dataclasses import dataclass

MIN_FLOOR = -4
MAX_FLOOR = 4
MIN_SPACE = 0
MAX_SPACE = 400

EXAMPLE = "P1.303"

_LOCATION_RE = re.compile(r"P(-?[0-9]+)\.([0-9]+)")

# Anything with more significant digits than this is out of range anyway
_MAX_DIGITS = 6


def _clip(value, limit=40):
    """Shorten user text echoed back in a reply."""
    text = str(value)
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


class LocationError(ValueError):
    """A location the user typed that we can't accept.

    The message is meant to be shown to the user as-is.
    """
    kind = "invalid location"


class InvalidFormat(LocationError):
    kind = "invalid format"

    def __init__(self, text):
        self.text = text
        super().__init__(
            f"Sorry, \"{_clip(text)}\" doesn't look like a location. "
            f"Use P<floor>.<space>, like {EXAMPLE}.")


class InvalidFloor(LocationError):
    kind = "invalid floor"

    def __init__(self, floor):
        self.floor = floor
        super().__init__(
            f"Sorry, there's no floor {_clip(floor)}. "
            f"Floors go from {MIN_FLOOR} to {MAX_FLOOR}.")


class InvalidSpace(LocationError):
    kind = "invalid space"

    def __init__(self, space):
        self.space = space
        super().__init__(
            f"Sorry, there's no space {_clip(space)}. "
            f"Spaces go from {MIN_SPACE} to {MAX_SPACE}.")


def _check_int(name, value):
    # bool is an int subclass, but True isn't a floor
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, not {type(value).__name__}")


@dataclass(frozen=True)
class Location:
    floor: int
    space: int

    def __post_init__(self):
        _check_int("floor", self.floor)
        _check_int("space", self.space)
        if not MIN_FLOOR <= self.floor <= MAX_FLOOR:
            raise InvalidFloor(self.floor)
        if not MIN_SPACE <= self.space <= MAX_SPACE:
            raise InvalidSpace(self.space)

    def __str__(self):
        return format_location(self)


def parse_location(text):
    """Parse "P<floor>.<space>" into a Location.

    Raises InvalidFormat, InvalidFloor or InvalidSpace (checked in that order).
    """
    t = text.strip()
    m = _LOCATION_RE.fullmatch(t)
    if m is None:
        raise InvalidFormat(t)
    floor_text, space_text = m.group(1), m.group(2)
    floor = _to_int(floor_text)
    if floor is None:
        raise InvalidFloor(floor_text)
    space = _to_int(space_text)
    if space is None:
        if not MIN_FLOOR <= floor <= MAX_FLOOR:
            raise InvalidFloor(floor)
        raise InvalidSpace(space_text)
    return Location(floor, space)


def _to_int(digits):
    """int(digits), or None when the number is far too big to be in range."""
    negative = digits.startswith("-")
    significant = digits.lstrip("-").lstrip("0") or "0"
    if len(significant) > _MAX_DIGITS:
        return None
    value = int(significant)
    return -value if negative else value


def format_location(location):
    """Canonical text for a Location, e.g. "P1.303" (space is not zero-padded)."""
    return f"P{location.floor}.{location.space}"
