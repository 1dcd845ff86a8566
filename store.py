# SPDX-License-Identifier: GPL-3.0-or-later
import logging
import os
import tempfile
import tomllib
from typing import Any, Dict, List, Optional, Tuple

import tomli_w

from config import macros_dir
from errors import IOFailure, MacroCorrupt, MacroExists, MacroNotFound
from models import (
    Event, KeyPress, KeyRelease, Macro, MouseMove, MousePress, MouseRelease,
    Wait,
)

logger = logging.getLogger(__name__)

EXT = ".toml"
EVENTS_MARKER = "[[events]]"


# ---- Serialization helpers -----------------------------------------

def event_to_dict(e: Event) -> Dict[str, Any]:
    if isinstance(e, (KeyPress, KeyRelease)):
        return {"kind": e.kind, "key": e.key}
    if isinstance(e, (MousePress, MouseRelease)):
        return {"kind": e.kind, "button": e.button, "x": float(e.x), "y": float(e.y)}
    if isinstance(e, MouseMove):
        return {"kind": e.kind, "x": float(e.x), "y": float(e.y)}
    if isinstance(e, Wait):
        return {"kind": e.kind, "ms": int(e.ms)}
    raise TypeError(f"not an event: {e!r}")

def event_from_dict(d: Any) -> Event:
    """Raises ValueError describing the first schema problem found."""
    if not isinstance(d, dict):
        raise ValueError("event record is not a table")
    kind = d.get("kind")
    if kind in ("key_press", "key_release"):
        cls = KeyPress if kind == "key_press" else KeyRelease
        return cls(_field(d, "key", str))
    if kind in ("mouse_press", "mouse_release"):
        cls = MousePress if kind == "mouse_press" else MouseRelease
        return cls(_field(d, "button", str), _coord(d, "x"), _coord(d, "y"))
    if kind == "mouse_move":
        return MouseMove(_coord(d, "x"), _coord(d, "y"))
    if kind == "wait":
        ms = _field(d, "ms", int)
        if isinstance(ms, bool) or ms < 0:
            raise ValueError(f"wait ms must be a non-negative integer, got {ms!r}")
        return Wait(ms)
    raise ValueError(f"unknown event kind {kind!r}")

def _field(d: Dict[str, Any], key: str, typ: type) -> Any:
    if key not in d:
        raise ValueError(f"{d.get('kind')} event is missing '{key}'")
    v = d[key]
    if not isinstance(v, typ):
        raise ValueError(f"'{key}' of {d.get('kind')} event has the wrong type")
    return v

def _coord(d: Dict[str, Any], key: str) -> float:
    v = _field(d, key, (int, float))
    if isinstance(v, bool):
        raise ValueError(f"'{key}' of {d.get('kind')} event has the wrong type")
    return float(v)

def dumps(macro: Macro) -> str:
    # markers are written here; tomli-w may otherwise inline short tables
    parts = [tomli_w.dumps({"description": macro.description})]
    for e in macro.events:
        parts.append(f"\n{EVENTS_MARKER}\n" + tomli_w.dumps(event_to_dict(e)))
    text = "".join(parts)
    # keep each marker glued to its fields
    return text.replace(EVENTS_MARKER + "\n\n", EVENTS_MARKER + "\n")

def loads(text: str, name: str = "<string>") -> Macro:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as ex:
        raise MacroCorrupt(name, str(ex)) from ex
    description = data.get("description", "")
    if not isinstance(description, str):
        raise MacroCorrupt(name, "description must be a string")
    raw_events = data.get("events", [])
    if not isinstance(raw_events, list):
        raise MacroCorrupt(name, "events must be an array of tables")
    events: List[Event] = []
    for i, raw in enumerate(raw_events):
        try:
            events.append(event_from_dict(raw))
        except ValueError as ex:
            raise MacroCorrupt(name, f"event {i + 1}: {ex}") from ex
    return Macro(description=description, events=events)


# ---- Store ---------------------------------------------------------

class MacroStore:
    """One TOML file per macro in a directory; the file stem is the macro name."""
    def __init__(self, root: Optional[str] = None) -> None:
        self.root = root or macros_dir()

    def path_for(self, name: str) -> str:
        if not name or name in (".", "..") or "/" in name or (os.sep in name) or \
                (os.altsep and os.altsep in name):
            raise IOFailure(f"invalid macro name: {name!r}")
        return os.path.join(self.root, name + EXT)

    def exists(self, name: str) -> bool:
        return os.path.isfile(self.path_for(name))

    def save(self, name: str, macro: Macro, overwrite: bool = False) -> str:
        path = self.path_for(name)
        if os.path.exists(path) and not overwrite:
            raise MacroExists(name)
        text = dumps(macro)
        try:
            os.makedirs(self.root, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self.root)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                os.replace(tmp, path)
            except BaseException:
                if os.path.exists(tmp):
                    os.remove(tmp)
                raise
        except OSError as ex:
            raise IOFailure(f"could not save macro {name!r}: {ex}") from ex
        logger.debug("Wrote %s", path)
        return path

    def read_text(self, name: str) -> str:
        path = self.path_for(name)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            raise MacroNotFound(name) from None
        except UnicodeDecodeError as ex:
            raise MacroCorrupt(name, f"not valid UTF-8: {ex}") from ex
        except OSError as ex:
            raise IOFailure(f"could not read macro {name!r}: {ex}") from ex

    def load(self, name: str) -> Macro:
        return loads(self.read_text(name), name)

    def list(self) -> List[Tuple[str, str]]:
        if not os.path.isdir(self.root):
            return []
        items: List[Tuple[str, str]] = []
        for entry in sorted(os.listdir(self.root)):
            stem, ext = os.path.splitext(entry)
            if ext != EXT or stem.startswith(".") or not os.path.isfile(os.path.join(self.root, entry)):
                continue
            items.append((stem, self.load(stem).description))
        return items

    def remove(self, name: str) -> None:
        try:
            os.remove(self.path_for(name))
        except FileNotFoundError:
            raise MacroNotFound(name) from None
        except OSError as ex:
            raise IOFailure(f"could not remove macro {name!r}: {ex}") from ex
