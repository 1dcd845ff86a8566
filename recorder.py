# SPDX-License-Identifier: GPL-3.0-or-later
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from config import RecordingConfig
from models import (
    Event, HookEvent, KeyPress, KeyRelease, Macro, MouseMove, MousePress,
    MouseRelease, Wait,
)
from store import MacroStore

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Everything a capture session mutates between hook callbacks."""
    events: List[Event] = field(default_factory=list)
    recent_keys: List[str] = field(default_factory=list)
    last_event_t: Optional[float] = None
    pointer: Tuple[float, float] = (0.0, 0.0)
    button_down: bool = False
    finished: bool = False


class CaptureSession:
    """
    Turns raw hook events into the recorded event stream.

    Feed every hook event to handle() in delivery order; once the configured
    stop sequence has been typed, `finished` turns true and macro() returns
    the recording with the stop keys trimmed off.
    """
    def __init__(self, cfg: RecordingConfig, description: str = "",
                 pointer: Tuple[float, float] = (0.0, 0.0)) -> None:
        self.cfg = cfg
        self.description = description
        self.state = SessionState(pointer=(float(pointer[0]), float(pointer[1])))
        # lead-in so playback never starts the instant the command is run
        self.state.events.append(Wait(cfg.recording_initial_wait_ms))

    @property
    def finished(self) -> bool:
        return self.state.finished

    # ---- normalizer ----
    def handle(self, raw: HookEvent) -> None:
        if self.state.finished:
            return
        ev = self._normalize(raw)
        if ev is not None:
            self._record(ev, raw.t)
        if ends_with(self.state.recent_keys, self.cfg.stop_keystrokes):
            logger.debug("Stop sequence detected")
            self.state.finished = True

    def _normalize(self, raw: HookEvent) -> Optional[Event]:
        st = self.state
        d = raw.data
        if raw.kind == "kpress":
            st.recent_keys.append(d["key"])
            return KeyPress(d["key"])
        if raw.kind == "krelease":
            return KeyRelease(d["key"])
        if raw.kind == "click":
            st.recent_keys.clear()
            x, y = st.pointer
            if d["pressed"]:
                st.button_down = True
                return MousePress(d["button"], x, y)
            st.button_down = False
            return MouseRelease(d["button"], x, y)
        if raw.kind == "move":
            st.pointer = (float(d["x"]), float(d["y"]))
            st.recent_keys.clear()
            if self.cfg.record_non_drag_mouse_moves or st.button_down:
                return MouseMove(*st.pointer)
            return None
        if raw.kind == "scroll":
            return None
        raise ValueError(f"unknown hook event kind: {raw.kind!r}")

    def _record(self, ev: Event, t: float) -> None:
        st = self.state
        strategy = self.cfg.wait_strategy
        if strategy.is_actual:
            if st.last_event_t is not None:
                ms = max(0, int((t - st.last_event_t) * 1000))
                st.events.append(Wait(ms))
            st.last_event_t = t
        else:
            st.events.append(Wait(strategy.ms))
        st.events.append(ev)
        logger.debug("adding event: %s", ev)

    # ---- result ----
    def macro(self) -> Macro:
        events = list(self.state.events)
        if self.state.finished:
            events = trim_stop_sequence(events, self.cfg.stop_keystrokes)
        return Macro(description=self.description, events=events)


def ends_with(keys: Sequence[str], suffix: Sequence[str]) -> bool:
    n = len(suffix)
    return n > 0 and len(keys) >= n and list(keys[-n:]) == list(suffix)


def trim_stop_sequence(events: List[Event], stop_keys: Sequence[str]) -> List[Event]:
    """
    Drop the trailing stop-key presses and whatever was recorded among them.

    Walks backward popping events, matching KeyPress events against the stop
    keys from last to first, and stops right after the first stop key has been
    matched. If the walk runs out first, everything from the earliest matched
    stop-key press onward is removed.
    """
    out = list(events)
    to_match = list(stop_keys)
    earliest: Optional[int] = None
    for i in range(len(out) - 1, -1, -1):
        ev = out[i]
        if isinstance(ev, KeyPress) and to_match and ev.key == to_match[-1]:
            to_match.pop()
            earliest = i
            if not to_match:
                return out[:i]
    logger.warning("Could not match every stop key while trimming; %d left unmatched", len(to_match))
    return out[:earliest] if earliest is not None else out


class Recorder:
    """
    Drives one capture session from the global input hook and saves the
    result when the stop sequence is typed.
    """
    def __init__(self, cfg: RecordingConfig, store: MacroStore,
                 listen: Optional[Callable] = None,
                 pointer: Optional[Callable[[], Tuple[float, float]]] = None) -> None:
        if listen is None or pointer is None:
            import hooks
            listen = listen or hooks.listen
            pointer = pointer or hooks.current_position
        self.cfg = cfg
        self.store = store
        self._listen = listen
        self._pointer = pointer
        self.session: Optional[CaptureSession] = None

    def record(self, name: str, description: str, overwrite: bool = False) -> Macro:
        self.session = CaptureSession(self.cfg, description, pointer=self._pointer())
        session = self.session
        self._listen(session.handle, lambda: session.finished)
        macro = session.macro()
        self.store.save(name, macro, overwrite=overwrite)
        logger.info("Saved macro %r with %d events", name, len(macro.events))
        return macro
