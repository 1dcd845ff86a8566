# SPDX-License-Identifier: GPL-3.0-or-later
import os

import pytest

from config import RecordingConfig, WaitStrategy, load_config, macros_dir, settings_path
from errors import ConfigError
from utils import canonical_button, canonical_key


def write_settings(text):
    os.makedirs(os.path.dirname(settings_path()), exist_ok=True)
    with open(settings_path(), "w", encoding="utf-8") as f:
        f.write(text)


def test_bootstraps_defaults(home):
    cfg = load_config()
    assert cfg == RecordingConfig()
    assert cfg.stop_keystrokes == ["Esc", "Esc", "Esc"]
    assert cfg.wait_strategy == WaitStrategy.constant(100)
    assert os.path.isfile(settings_path())
    assert os.path.isdir(macros_dir())
    with open(settings_path(), encoding="utf-8") as f:
        assert "constant_ms = 100" in f.read()
    assert load_config() == cfg


def test_reads_actual_strategy_and_normalizes_keys(home):
    write_settings(
        'stop_keystrokes = ["f12", "q"]\n'
        'wait_strategy = "actual"\n'
        "record_non_drag_mouse_moves = true\n"
    )
    cfg = load_config()
    assert cfg.stop_keystrokes == ["F12", "Q"]
    assert cfg.wait_strategy.is_actual
    assert cfg.record_non_drag_mouse_moves
    assert cfg.countdown_seconds == 3


@pytest.mark.parametrize("text", [
    "stop_keystrokes = [\n",
    "stop_keystrokes = []\n",
    'stop_keystrokes = ["NotAKey"]\n',
    'wait_strategy = "sometimes"\n',
    "wait_strategy = { constant_ms = -1 }\n",
    "countdown_seconds = 1.5\n",
    'record_non_drag_mouse_moves = "yes"\n',
    "colour = 1\n",
])
def test_invalid_settings(home, text):
    write_settings(text)
    with pytest.raises(ConfigError):
        load_config()


def test_name_tables():
    assert canonical_key("ESC") == "Esc"
    assert canonical_key("page_down") == "PageDown"
    assert canonical_key("pagedown") == "PageDown"
    assert canonical_key("a") == "A"
    assert canonical_key("vk65") == "Vk65"
    assert canonical_button("left") == "Left"
    with pytest.raises(ValueError):
        canonical_key("hyper")
