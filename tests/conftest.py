# SPDX-License-Identifier: GPL-3.0-or-later
from typing import List, Tuple

import pytest

from store import MacroStore


class FakeSynth:
    """Records synthesis calls instead of touching the real input devices."""
    def __init__(self, fail_on: str = "") -> None:
        self.calls: List[Tuple] = []
        self.fail_on = fail_on

    def _call(self, *call):
        if call[0] == self.fail_on:
            raise RuntimeError(f"{call[0]} refused")
        self.calls.append(call)

    def press_key(self, name):
        self._call("press_key", name)

    def release_key(self, name):
        self._call("release_key", name)

    def move(self, x, y):
        self._call("move", x, y)

    def press_button(self, name):
        self._call("press_button", name)

    def release_button(self, name):
        self._call("release_button", name)


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("TINYTASK_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def store(home):
    return MacroStore()


@pytest.fixture
def synth():
    return FakeSynth()
