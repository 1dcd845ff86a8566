# SPDX-License-Identifier: GPL-3.0-or-later
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Union

# ---- Recorded events -----------------------------------------------

@dataclass(frozen=True)
class KeyPress:
    key: str                 # canonical key name, see utils.KEY_NAMES
    kind: ClassVar[str] = "key_press"

@dataclass(frozen=True)
class KeyRelease:
    key: str
    kind: ClassVar[str] = "key_release"

@dataclass(frozen=True)
class MousePress:
    button: str              # 'Left', 'Right', 'Middle', 'Unknown'
    x: float
    y: float
    kind: ClassVar[str] = "mouse_press"

@dataclass(frozen=True)
class MouseRelease:
    button: str
    x: float
    y: float
    kind: ClassVar[str] = "mouse_release"

@dataclass(frozen=True)
class MouseMove:
    x: float
    y: float
    kind: ClassVar[str] = "mouse_move"

@dataclass(frozen=True)
class Wait:
    ms: int                  # milliseconds, never negative
    kind: ClassVar[str] = "wait"

Event = Union[KeyPress, KeyRelease, MousePress, MouseRelease, MouseMove, Wait]

EVENT_TYPES = (KeyPress, KeyRelease, MousePress, MouseRelease, MouseMove, Wait)
EVENT_KINDS: Dict[str, type] = {t.kind: t for t in EVENT_TYPES}

@dataclass
class Macro:
    description: str = ""
    events: List[Event] = field(default_factory=list)

# ---- Raw hook events -----------------------------------------------

@dataclass
class HookEvent:
    t: float                 # seconds, monotonic clock at capture time
    kind: str                # 'move','click','scroll','kpress','krelease'
    data: Dict[str, Any]
