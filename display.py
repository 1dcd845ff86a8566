# SPDX-License-Identifier: GPL-3.0-or-later
from collections import Counter
from dataclasses import dataclass
from typing import List, Optional, Sequence

from models import (
    Event, KeyPress, KeyRelease, Macro, MouseMove, MousePress, MouseRelease,
    Wait,
)


@dataclass(frozen=True)
class ClickCollapse:
    """A press, any waits, then the matching release, shown as one click."""
    release_index: int
    waits_consumed: int
    total_wait_ms: int
    button: str
    x: float
    y: float


def _xy(x: float, y: float) -> str:
    return f"({int(x)}, {int(y)})"

def describe_event(e: Event) -> str:
    if isinstance(e, Wait):
        return f"wait {e.ms} ms"
    if isinstance(e, (MousePress, MouseRelease)):
        return f"{e.kind} {e.button} at {_xy(e.x, e.y)}"
    if isinstance(e, MouseMove):
        return f"mouse_move to {_xy(e.x, e.y)}"
    if isinstance(e, (KeyPress, KeyRelease)):
        return f"{e.kind} {e.key}"
    raise TypeError(f"not an event: {e!r}")

def stat_label(e: Event) -> str:
    if isinstance(e, (MousePress, MouseRelease)):
        return f"{e.kind}.{e.button}"
    if isinstance(e, (KeyPress, KeyRelease)):
        return f"{e.kind}.{e.key}"
    return e.kind


def try_collapse_click(events: Sequence[Event], start: int) -> Optional[ClickCollapse]:
    press = events[start]
    if not isinstance(press, MousePress):
        return None
    waits = 0
    total_ms = 0
    for i in range(start + 1, len(events)):
        e = events[i]
        if isinstance(e, Wait):
            waits += 1
            total_ms += e.ms
            continue
        if isinstance(e, MouseRelease) and (e.button, e.x, e.y) == (press.button, press.x, press.y):
            return ClickCollapse(i, waits, total_ms, press.button, press.x, press.y)
        return None
    return None


def _walk(events: Sequence[Event], show_waits: bool):
    """Yield (label, text, waits_consumed) for each displayed item."""
    i = 0
    while i < len(events):
        e = events[i]
        if isinstance(e, Wait) and not show_waits:
            i += 1
            continue
        if isinstance(e, MousePress):
            c = try_collapse_click(events, i)
            if c is not None:
                text = f"click {c.button} at {_xy(c.x, c.y)}"
                if show_waits and c.total_wait_ms > 0:
                    text += f" (+wait {c.total_wait_ms} ms)"
                yield f"click.{c.button}", text, c.waits_consumed
                i = c.release_index + 1
                continue
        yield stat_label(e), describe_event(e), 0
        i += 1


def format_listing(macro: Macro, show_waits: bool = False) -> List[str]:
    return [f"{n:>4}: {text}"
            for n, (_label, text, _w) in enumerate(_walk(macro.events, show_waits), start=1)]


def format_stats(macro: Macro, show_waits: bool = False) -> List[str]:
    counts: Counter = Counter()
    for label, _text, waits in _walk(macro.events, show_waits):
        counts[label] += 1
        if show_waits and waits:
            counts["wait"] += waits
    return [f"{label}: {counts[label]}" for label in sorted(counts)]
