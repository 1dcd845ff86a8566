# SPDX-License-Identifier: GPL-3.0-or-later
"""
pynput adapter: global input hook and input synthesis.

Everything that touches pynput lives here so the rest of the program deals
only in canonical key/button names.
"""
import logging
import queue
import time
from typing import Any, Callable, Optional, Tuple

from pynput import keyboard, mouse

from models import HookEvent
from utils import (
    BUTTON_NAMES, KEY_MEMBERS, KEY_NAMES, UNKNOWN_BUTTON, char_to_name,
    name_to_vk, vk_to_name,
)

logger = logging.getLogger(__name__)

# ---- Name conversion -----------------------------------------------

def key_to_str(k: Any) -> str:
    """Canonical name for a pynput Key/KeyCode."""
    if isinstance(k, keyboard.Key):
        name = KEY_NAMES.get(k.name)
        if name:
            return name
        k = k.value
    char = getattr(k, "char", None)
    if char:
        return char_to_name(char)
    vk = getattr(k, "vk", None)
    if vk is not None:
        return vk_to_name(vk)
    raise ValueError(f"cannot name key {k!r}")

def str_to_key(s: str):
    """pynput key for a canonical name. Returns None if unknown."""
    if len(s) == 1:
        return keyboard.KeyCode.from_char(s.lower())
    member = KEY_MEMBERS.get(s.lower())
    if member is not None:
        return getattr(keyboard.Key, member, None)
    vk = name_to_vk(s)
    if vk is not None:
        return keyboard.KeyCode.from_vk(vk)
    return None

def button_to_str(b: mouse.Button) -> str:
    return BUTTON_NAMES.get(getattr(b, "name", ""), UNKNOWN_BUTTON)

def str_to_button(s: str) -> Optional[mouse.Button]:
    for member, canon in BUTTON_NAMES.items():
        if canon.lower() == s.lower():
            return getattr(mouse.Button, member)
    return None

def current_position() -> Tuple[float, float]:
    x, y = mouse.Controller().position
    return float(x), float(y)

# ---- Global hook ---------------------------------------------------

def listen(handle: Callable[[HookEvent], None], should_stop: Callable[[], bool],
           poll_interval: float = 0.05) -> None:
    """
    Deliver global input events to `handle` until `should_stop()` is true.

    The pynput listeners run on their own threads and only enqueue events;
    `handle` is always called from the calling thread, one event at a time.
    """
    events: "queue.Queue[HookEvent]" = queue.Queue()

    def put(kind: str, **data) -> None:
        events.put(HookEvent(t=time.perf_counter(), kind=kind, data=data))

    def on_move(x, y):
        put("move", x=float(x), y=float(y))

    def on_click(x, y, button, pressed):
        put("click", button=button_to_str(button), pressed=bool(pressed))

    def on_scroll(x, y, dx, dy):
        put("scroll", dx=int(dx), dy=int(dy))

    def on_key(kind: str, k) -> None:
        try:
            put(kind, key=key_to_str(k))
        except ValueError as ex:
            logger.warning("Ignoring key: %s", ex)

    m_listener = mouse.Listener(on_move=on_move, on_click=on_click, on_scroll=on_scroll)
    k_listener = keyboard.Listener(
        on_press=lambda k: on_key("kpress", k),
        on_release=lambda k: on_key("krelease", k),
    )
    m_listener.daemon = True
    k_listener.daemon = True
    m_listener.start()
    k_listener.start()
    try:
        while not should_stop():
            try:
                ev = events.get(timeout=poll_interval)
            except queue.Empty:
                continue
            handle(ev)
    finally:
        m_listener.stop()
        k_listener.stop()

# ---- Synthesis -----------------------------------------------------

class PynputSynth:
    """Issues synthetic input through pynput controllers."""
    def __init__(self) -> None:
        self._mouse = mouse.Controller()
        self._kbd = keyboard.Controller()

    def press_key(self, name: str) -> None:
        self._kbd.press(self._key(name))

    def release_key(self, name: str) -> None:
        self._kbd.release(self._key(name))

    def move(self, x: float, y: float) -> None:
        self._mouse.position = (x, y)

    def press_button(self, name: str) -> None:
        self._mouse.press(self._button(name))

    def release_button(self, name: str) -> None:
        self._mouse.release(self._button(name))

    @staticmethod
    def _key(name: str):
        k = str_to_key(name)
        if k is None:
            raise ValueError(f"unknown key {name!r}")
        return k

    @staticmethod
    def _button(name: str) -> mouse.Button:
        b = str_to_button(name)
        if b is None:
            raise ValueError(f"unknown button {name!r}")
        return b
