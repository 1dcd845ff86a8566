# SPDX-License-Identifier: GPL-3.0-or-later
import re
from typing import Dict, Optional

# ---- Name tables ---------------------------------------------------
#
# Keys and buttons are stored by canonical name only. Backend objects
# (pynput Key/Button) are mapped through these tables, never through str().

# pynput Key member name -> canonical name
KEY_NAMES: Dict[str, str] = {
    "alt": "Alt",
    "alt_l": "AltLeft",
    "alt_r": "AltRight",
    "alt_gr": "AltGr",
    "backspace": "Backspace",
    "caps_lock": "CapsLock",
    "cmd": "Cmd",
    "cmd_l": "CmdLeft",
    "cmd_r": "CmdRight",
    "ctrl": "Ctrl",
    "ctrl_l": "CtrlLeft",
    "ctrl_r": "CtrlRight",
    "delete": "Delete",
    "down": "Down",
    "end": "End",
    "enter": "Enter",
    "esc": "Esc",
    "home": "Home",
    "insert": "Insert",
    "left": "Left",
    "menu": "Menu",
    "num_lock": "NumLock",
    "page_down": "PageDown",
    "page_up": "PageUp",
    "pause": "Pause",
    "print_screen": "PrintScreen",
    "right": "Right",
    "scroll_lock": "ScrollLock",
    "shift": "Shift",
    "shift_l": "ShiftLeft",
    "shift_r": "ShiftRight",
    "space": "Space",
    "tab": "Tab",
    "up": "Up",
    "media_play_pause": "MediaPlayPause",
    "media_volume_mute": "VolumeMute",
    "media_volume_down": "VolumeDown",
    "media_volume_up": "VolumeUp",
    "media_previous": "MediaPrevious",
    "media_next": "MediaNext",
}
KEY_NAMES.update({f"f{i}": f"F{i}" for i in range(1, 21)})

# canonical name (lower-cased) -> pynput Key member name
KEY_MEMBERS: Dict[str, str] = {v.lower(): k for k, v in KEY_NAMES.items()}

# pynput Button member name -> canonical name
BUTTON_NAMES: Dict[str, str] = {
    "left": "Left",
    "right": "Right",
    "middle": "Middle",
}
UNKNOWN_BUTTON = "Unknown"

_VK_RE = re.compile(r"^vk(\d+)$", re.IGNORECASE)


def char_to_name(ch: str) -> str:
    """Name a character key by its physical key: 'a' and 'A' are both 'A'."""
    return ch.upper() if ch.isalpha() else ch


def vk_to_name(vk: int) -> str:
    return f"Vk{int(vk)}"


def name_to_vk(name: str) -> Optional[int]:
    m = _VK_RE.match(name)
    return int(m.group(1)) if m else None


def canonical_key(name: str) -> str:
    """
    Normalize a user-supplied key name ('esc', 'ESC', 'a', 'vk65') to its
    canonical spelling. Raises ValueError for names outside the table.
    """
    if not isinstance(name, str) or not name:
        raise ValueError(f"invalid key name: {name!r}")
    if len(name) == 1:
        return char_to_name(name)
    member = KEY_MEMBERS.get(name.lower())
    if member is not None:
        return KEY_NAMES[member]
    if name.lower() in KEY_NAMES:
        return KEY_NAMES[name.lower()]
    vk = name_to_vk(name)
    if vk is not None:
        return vk_to_name(vk)
    raise ValueError(f"unknown key name: {name!r}")


def canonical_button(name: str) -> str:
    if not isinstance(name, str):
        raise ValueError(f"invalid button name: {name!r}")
    for canon in list(BUTTON_NAMES.values()) + [UNKNOWN_BUTTON]:
        if canon.lower() == name.lower():
            return canon
    raise ValueError(f"unknown button name: {name!r}")


def names_equal(a: str, b: str) -> bool:
    """Case-insensitive comparison used by selectors."""
    return a.lower() == b.lower()
