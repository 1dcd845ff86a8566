# SPDX-License-Identifier: GPL-3.0-or-later
import pytest

from conftest import FakeSynth
from errors import SynthesisFailure
from models import KeyPress, KeyRelease, Macro, MouseMove, MousePress, MouseRelease, Wait
from player import Player


@pytest.fixture
def slept():
    return []


@pytest.fixture
def player(synth, slept):
    return Player(synth=synth, sleep=slept.append)


def test_mouse_buttons_move_then_settle(player, synth, slept):
    player.simulate(MousePress("Left", 4.0, 5.0))
    player.simulate(MouseRelease("Left", 6.0, 7.0))
    assert synth.calls == [
        ("move", 4.0, 5.0), ("press_button", "Left"),
        ("move", 6.0, 7.0), ("release_button", "Left"),
    ]
    assert slept == [0.001, 0.001]


def test_keys_and_moves(player, synth, slept):
    for e in (KeyPress("A"), KeyRelease("A"), MouseMove(1.5, 2.5)):
        player.simulate(e)
    assert synth.calls == [("press_key", "A"), ("release_key", "A"), ("move", 1.5, 2.5)]
    assert slept == []


def test_wait_blocks_for_duration(player, synth, slept):
    player.simulate(Wait(250))
    assert slept == [0.25]
    assert synth.calls == []


def test_play_repeats_with_waits(player, synth, slept):
    m = Macro("", [Wait(100), KeyPress("A"), Wait(50), KeyRelease("A")])
    statuses = []
    player.play(m, repeat=3, on_status=statuses.append)
    assert synth.calls == [("press_key", "A"), ("release_key", "A")] * 3
    assert slept == [0.1, 0.05] * 3
    assert statuses == ["Playing...", "Playback finished."]


def test_play_rejects_zero_repeat(player):
    with pytest.raises(ValueError):
        player.play(Macro("", [KeyPress("A")]), repeat=0)


def test_play_single_ignores_preceding_waits(player, synth, slept):
    player.play_single(KeyPress("B"))
    assert synth.calls == [("press_key", "B")]
    assert slept == []


def test_synthesis_failure_aborts_playback(slept):
    synth = FakeSynth(fail_on="release_key")
    p = Player(synth=synth, sleep=slept.append)
    m = Macro("", [KeyPress("A"), KeyRelease("A"), KeyPress("B")])
    with pytest.raises(SynthesisFailure):
        p.play(m)
    assert synth.calls == [("press_key", "A")]


def test_simulate_rejects_non_events(player):
    with pytest.raises(TypeError):
        player.simulate("key_press A")
