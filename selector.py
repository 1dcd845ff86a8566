# SPDX-License-Identifier: GPL-3.0-or-later
"""
Action selectors: `<kind>[.<detail>]:<ordinal>` picks one event of a macro,
e.g. `mouse_press.Left:19th` is the 19th left-button press.
"""
from dataclasses import dataclass
from typing import Optional, Sequence

from errors import SelectorParseError, SelectorUnresolved
from models import Event, KeyPress, KeyRelease, MousePress, MouseRelease
from store import EVENTS_MARKER
from utils import names_equal

KINDS = ("mouse_press", "mouse_release", "mouse_move", "wait", "key_press", "key_release")
_ASCII_DIGITS = "0123456789"


@dataclass(frozen=True)
class ActionSelector:
    kind: str
    detail: Optional[str]
    ordinal: int

    def matches(self, e: Event) -> bool:
        if e.kind != self.kind:
            return False
        if self.detail is None:
            return True
        if isinstance(e, (MousePress, MouseRelease)):
            return names_equal(self.detail, e.button)
        if isinstance(e, (KeyPress, KeyRelease)):
            return names_equal(self.detail, e.key)
        # mouse_move and wait carry no name
        return True


def parse_action(raw: str) -> ActionSelector:
    parts = raw.split(":")
    if len(parts) < 2:
        raise SelectorParseError("missing ordinal after ':'")
    if len(parts) > 2:
        raise SelectorParseError("too many ':' segments")
    head, ord_raw = parts

    digits = "".join(c for c in ord_raw if c in _ASCII_DIGITS)
    if not digits:
        raise SelectorParseError("ordinal is not a number")
    ordinal = int(digits)

    name_parts = head.split(".")
    if len(name_parts) > 2:
        raise SelectorParseError("too many '.' segments")
    kind = name_parts[0]
    detail = name_parts[1] if len(name_parts) == 2 else None
    if detail == "":
        raise SelectorParseError("empty detail after '.'")
    if kind not in KINDS:
        raise SelectorParseError(f"unsupported event kind: {kind}")
    if ordinal == 0:
        raise SelectorParseError("ordinal must be 1 or greater")
    return ActionSelector(kind=kind, detail=detail, ordinal=ordinal)


def find_event_index(events: Sequence[Event], selector: ActionSelector) -> Optional[int]:
    seen = 0
    for i, e in enumerate(events):
        if selector.matches(e):
            seen += 1
            if seen == selector.ordinal:
                return i
    return None


def resolve(events: Sequence[Event], raw: str) -> int:
    """Parse `raw` and return the index it selects; raises on either failure."""
    idx = find_event_index(events, parse_action(raw))
    if idx is None:
        raise SelectorUnresolved(raw)
    return idx


def event_start_line(contents: str, index: int) -> Optional[int]:
    """1-based line of the index-th `[[events]]` marker in a stored macro."""
    seen = 0
    for line_no, line in enumerate(contents.splitlines(), start=1):
        if line.strip() == EVENTS_MARKER:
            if seen == index:
                return line_no
            seen += 1
    return None
