# SPDX-License-Identifier: GPL-3.0-or-later
import logging
import time
from typing import Callable

from errors import SynthesisFailure
from models import (
    EVENT_TYPES, Event, KeyPress, KeyRelease, Macro, MouseMove, MousePress, MouseRelease,
    Wait,
)

logger = logging.getLogger(__name__)

SETTLE_DELAY_MS = 1   # pointer must be in place before a button transition


class Player:
    """
    Plays back a recorded Macro on the calling thread.
    Wait events sleep for real; there is no way to stop once started.
    """
    def __init__(self, synth=None, sleep: Callable[[float], None] = time.sleep) -> None:
        if synth is None:
            from hooks import PynputSynth
            synth = PynputSynth()
        self._synth = synth
        self._sleep = sleep

    def simulate(self, e: Event) -> None:
        if not isinstance(e, EVENT_TYPES):
            raise TypeError(f"not an event: {e!r}")
        if isinstance(e, Wait):
            self._sleep(e.ms / 1000.0)
            return
        try:
            if isinstance(e, KeyPress):
                self._synth.press_key(e.key)
            elif isinstance(e, KeyRelease):
                self._synth.release_key(e.key)
            elif isinstance(e, MouseMove):
                self._synth.move(e.x, e.y)
            elif isinstance(e, (MousePress, MouseRelease)):
                self._synth.move(e.x, e.y)
                self._sleep(SETTLE_DELAY_MS / 1000.0)
                if isinstance(e, MousePress):
                    self._synth.press_button(e.button)
                else:
                    self._synth.release_button(e.button)
        except Exception as ex:
            raise SynthesisFailure(f"could not simulate {e}: {ex}") from ex

    def play(self, macro: Macro, repeat: int = 1,
             on_status: Callable[[str], None] = lambda _msg: None) -> None:
        if repeat < 1:
            raise ValueError("repeat must be 1 or greater")
        if not macro.events:
            on_status("Nothing to play.")
            return
        on_status("Playing...")
        for i in range(repeat):
            logger.debug("Playback pass %d/%d", i + 1, repeat)
            for e in macro.events:
                self.simulate(e)
        on_status("Playback finished.")

    def play_single(self, e: Event) -> None:
        self.simulate(e)
