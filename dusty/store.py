"""Persisted state: where Dusty is, and whether anyone has confirmed it.

The state lives in a small JSON file (data/location.json relative to the
project root, or $DUSTY_LOCATION_FILE):

    {
      "location": "P1.303",
      "confirmed": true
    }

Every command reads the file fresh and writes it back whole; nothing is
cached between messages. There is no locking, so the last writer wins.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dusty.location import Location, LocationError, parse_location

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_DEFAULT_PATH = _DATA_DIR / "location.json"


class StoreError(Exception):
    """Reading or writing the state file failed.

    `kind` is a short description that's OK to show users; the message has
    the details and is for the log.
    """
    kind = "storage error"


class FileError(StoreError):
    kind = "file error"


class CorruptState(StoreError):
    kind = "corrupt state"


class InternalError(StoreError):
    kind = "internal error"


@dataclass(frozen=True)
class State:
    location: Location
    confirmed: bool = True

    def to_dict(self):
        return {"location": str(self.location), "confirmed": self.confirmed}

    @classmethod
    def from_dict(cls, data):
        """Build a State from a decoded JSON record. Raises CorruptState."""
        if not isinstance(data, dict):
            raise CorruptState(f"expected a JSON object, got {type(data).__name__}")

        # Older versions stored {"floor": 1, "space": 303} with no confirmation
        if "location" not in data and "floor" in data and "space" in data:
            try:
                return cls(Location(data["floor"], data["space"]), confirmed=False)
            except (TypeError, LocationError) as e:
                raise CorruptState(f"bad legacy location {data!r}: {e}") from e

        text = data.get("location")
        confirmed = data.get("confirmed")
        if not isinstance(text, str):
            raise CorruptState(f"missing or non-string 'location' in {data!r}")
        if not isinstance(confirmed, bool):
            raise CorruptState(f"missing or non-boolean 'confirmed' in {data!r}")
        try:
            location = parse_location(text)
        except LocationError as e:
            raise CorruptState(f"bad location {text!r}: {e}") from e
        return cls(location, confirmed)


class StateStore:
    """Loads and saves the State in a single JSON file."""

    def __init__(self, path=None):
        if path is None:
            path = os.environ.get("DUSTY_LOCATION_FILE") or _DEFAULT_PATH
        self.path = Path(path)

    def __repr__(self):
        return f"StateStore({str(self.path)!r})"

    def load(self):
        """Return the saved State, or None if nothing has been saved yet.

        A missing file is created empty. Raises FileError if the file can't be
        read and CorruptState if it holds something other than a valid state.
        """
        try:
            if not self.path.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.touch()
                return None
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CorruptState(f"{self.path} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise FileError(f"can't read {self.path}: {e}") from e

        if not text.strip():
            return None
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise CorruptState(f"{self.path} is not valid JSON: {e}") from e
        except RecursionError as e:
            raise CorruptState(f"{self.path} is nested too deeply to decode") from e
        return State.from_dict(data)

    def save(self, state):
        """Replace the saved state. Raises FileError or InternalError."""
        try:
            text = json.dumps(state.to_dict(), indent=2) + "\n"
        except (TypeError, ValueError) as e:
            raise InternalError(f"can't serialize {state!r}: {e}") from e

        tmp = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, encoding="utf-8")
            tmp.replace(self.path)
        except OSError as e:
            try:
                tmp.unlink(missing_ok=True)
            except OSError:
                pass
            raise FileError(f"can't write {self.path}: {e}") from e

    def clear(self):
        """Forget the saved location (deletes the file)."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise FileError(f"can't delete {self.path}: {e}") from e
