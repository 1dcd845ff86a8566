# SPDX-License-Identifier: GPL-3.0-or-later
"""
Settings for tinytask.

Storage:
- $TINYTASK_HOME/settings.toml     (recording settings, created with defaults)
- $TINYTASK_HOME/macros/<name>.toml (one file per macro)

$TINYTASK_HOME defaults to ~/.config/tinytask.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import tomli_w

from errors import ConfigError
from utils import canonical_key

logger = logging.getLogger(__name__)

HOME_ENV = "TINYTASK_HOME"

# --- Defaults ---
DEFAULT_STOP_KEYSTROKES = ["Esc", "Esc", "Esc"]
DEFAULT_CONSTANT_MS = 100
DEFAULT_COUNTDOWN_SECONDS = 3
DEFAULT_INITIAL_WAIT_MS = 100


def app_dir() -> str:
    return os.environ.get(HOME_ENV) or os.path.join(os.path.expanduser("~"), ".config", "tinytask")

def settings_path() -> str:
    return os.path.join(app_dir(), "settings.toml")

def macros_dir() -> str:
    return os.path.join(app_dir(), "macros")

def _ensure_dirs():
    os.makedirs(macros_dir(), exist_ok=True)


@dataclass(frozen=True)
class WaitStrategy:
    """Either 'actual' (measured gaps) or 'constant' (a fixed ms before every event)."""
    mode: str = "constant"
    ms: int = DEFAULT_CONSTANT_MS

    @classmethod
    def actual(cls) -> "WaitStrategy":
        return cls(mode="actual", ms=0)

    @classmethod
    def constant(cls, ms: int) -> "WaitStrategy":
        return cls(mode="constant", ms=ms)

    @property
    def is_actual(self) -> bool:
        return self.mode == "actual"

    def to_toml(self) -> Any:
        if self.is_actual:
            return "actual"
        return {"constant_ms": self.ms}

    @classmethod
    def from_toml(cls, raw: Any) -> "WaitStrategy":
        if isinstance(raw, str) and raw.lower() == "actual":
            return cls.actual()
        if isinstance(raw, dict) and set(raw) == {"constant_ms"}:
            return cls.constant(_non_negative_int("wait_strategy.constant_ms", raw["constant_ms"]))
        raise ConfigError(f"wait_strategy must be \"actual\" or {{ constant_ms = <ms> }}, got {raw!r}")


@dataclass(frozen=True)
class RecordingConfig:
    stop_keystrokes: List[str] = field(default_factory=lambda: list(DEFAULT_STOP_KEYSTROKES))
    wait_strategy: WaitStrategy = field(default_factory=WaitStrategy)
    countdown_seconds: int = DEFAULT_COUNTDOWN_SECONDS
    record_non_drag_mouse_moves: bool = False
    recording_initial_wait_ms: int = DEFAULT_INITIAL_WAIT_MS

    def to_toml(self) -> Dict[str, Any]:
        return {
            "stop_keystrokes": list(self.stop_keystrokes),
            "wait_strategy": self.wait_strategy.to_toml(),
            "countdown_seconds": self.countdown_seconds,
            "record_non_drag_mouse_moves": self.record_non_drag_mouse_moves,
            "recording_initial_wait_ms": self.recording_initial_wait_ms,
        }

    @classmethod
    def from_toml(cls, data: Dict[str, Any]) -> "RecordingConfig":
        """Build from a parsed settings table. Missing keys take their defaults."""
        known = {"stop_keystrokes", "wait_strategy", "countdown_seconds",
                 "record_non_drag_mouse_moves", "recording_initial_wait_ms"}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"unknown setting(s): {', '.join(unknown)}")

        default = cls()
        stop = data.get("stop_keystrokes", default.stop_keystrokes)
        if not isinstance(stop, list) or not stop:
            raise ConfigError("stop_keystrokes must be a non-empty list of key names")
        try:
            stop = [canonical_key(k) for k in stop]
        except ValueError as ex:
            raise ConfigError(f"stop_keystrokes: {ex}") from ex

        strategy = default.wait_strategy
        if "wait_strategy" in data:
            strategy = WaitStrategy.from_toml(data["wait_strategy"])

        moves = data.get("record_non_drag_mouse_moves", default.record_non_drag_mouse_moves)
        if not isinstance(moves, bool):
            raise ConfigError("record_non_drag_mouse_moves must be true or false")

        return cls(
            stop_keystrokes=stop,
            wait_strategy=strategy,
            countdown_seconds=_non_negative_int(
                "countdown_seconds", data.get("countdown_seconds", default.countdown_seconds)),
            record_non_drag_mouse_moves=moves,
            recording_initial_wait_ms=_non_negative_int(
                "recording_initial_wait_ms",
                data.get("recording_initial_wait_ms", default.recording_initial_wait_ms)),
        )


def _non_negative_int(key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigError(f"{key} must be a non-negative integer, got {value!r}")
    return value


def load_config(path: Optional[str] = None) -> RecordingConfig:
    """
    Read settings.toml, writing the defaults first if it does not exist yet.
    Raises ConfigError when the file cannot be parsed or holds bad values.
    """
    _ensure_dirs()
    path = path or settings_path()
    if not os.path.exists(path):
        save_config(RecordingConfig(), path)
        logger.info("Wrote default settings to %s", path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as ex:
        raise ConfigError(f"{path}: {ex}") from ex
    except OSError as ex:
        raise ConfigError(f"could not read {path}: {ex}") from ex
    return RecordingConfig.from_toml(data)


def save_config(cfg: RecordingConfig, path: Optional[str] = None) -> None:
    _ensure_dirs()
    path = path or settings_path()
    with open(path, "wb") as f:
        tomli_w.dump(cfg.to_toml(), f)
