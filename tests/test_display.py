# SPDX-License-Identifier: GPL-3.0-or-later
from display import (
    ClickCollapse, describe_event, format_listing, format_stats, try_collapse_click,
)
from models import KeyPress, KeyRelease, Macro, MouseMove, MousePress, MouseRelease, Wait


def test_collapse_across_waits():
    events = [MousePress("Left", 3.7, 4.2), Wait(20), Wait(30), MouseRelease("Left", 3.7, 4.2)]
    assert try_collapse_click(events, 0) == ClickCollapse(3, 2, 50, "Left", 3.7, 4.2)


def test_collapse_requires_same_button_and_position():
    press = MousePress("Left", 1, 1)
    assert try_collapse_click([press, MouseRelease("Right", 1, 1)], 0) is None
    assert try_collapse_click([press, MouseRelease("Left", 1, 2)], 0) is None
    assert try_collapse_click([press, Wait(5), MouseMove(1, 1), MouseRelease("Left", 1, 1)], 0) is None
    assert try_collapse_click([press, Wait(5)], 0) is None
    assert try_collapse_click([KeyPress("A")], 0) is None


def test_listing_hides_waits_and_collapses_clicks():
    m = Macro("", [
        Wait(100),
        MousePress("Left", 10, 20), Wait(40), MouseRelease("Left", 10, 20),
        KeyPress("A"), KeyRelease("A"),
    ])
    assert format_listing(m) == [
        "   1: click Left at (10, 20)",
        "   2: key_press A",
        "   3: key_release A",
    ]
    assert format_listing(m, show_waits=True) == [
        "   1: wait 100 ms",
        "   2: click Left at (10, 20) (+wait 40 ms)",
        "   3: key_press A",
        "   4: key_release A",
    ]


def test_failed_collapse_shows_events_individually():
    m = Macro("", [MousePress("Left", 0, 0), MouseMove(5, 5), MouseRelease("Left", 5, 5)])
    assert format_listing(m) == [
        "   1: mouse_press Left at (0, 0)",
        "   2: mouse_move to (5, 5)",
        "   3: mouse_release Left at (5, 5)",
    ]


def test_stats_example():
    m = Macro("", [
        Wait(100),
        MousePress("Left", 1, 1), Wait(100), MouseRelease("Left", 1, 1),
        Wait(100), KeyPress("B"), Wait(100), KeyPress("A"),
    ])
    assert format_stats(m) == ["click.Left: 1", "key_press.A: 1", "key_press.B: 1"]


def test_stats_count_waits_only_when_shown():
    m = Macro("", [
        Wait(100),
        MousePress("Right", 1, 1), Wait(7), MouseRelease("Right", 1, 1),
        MousePress("Left", 2, 2), MouseMove(3, 3), MouseRelease("Left", 3, 3),
    ])
    assert format_stats(m, show_waits=True) == [
        "click.Right: 1",
        "mouse_move: 1",
        "mouse_press.Left: 1",
        "mouse_release.Left: 1",
        "wait: 2",
    ]


def test_describe_truncates_coordinates():
    assert describe_event(MouseMove(-1.9, 2.9)) == "mouse_move to (-1, 2)"
    assert describe_event(MouseRelease("Middle", 0.5, 7)) == "mouse_release Middle at (0, 7)"
    assert describe_event(Wait(0)) == "wait 0 ms"
