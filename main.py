# SPDX-License-Identifier: GPL-3.0-or-later
"""
tinytask: record global keyboard/mouse input into named macros and play them back.

  tinytask rec NAME [-d DESC] [-o]      record until the stop keys (Esc Esc Esc)
  tinytask run NAME [-n N] [-a ACTION]  play a macro, or a single action of it
  tinytask ls                           list macros with their descriptions
  tinytask show NAME [-s] [--all]       list the events of a macro, or stats
  tinytask rm NAME                      delete a macro
  tinytask edit NAME [ACTION]           open a macro in $EDITOR
"""
import argparse
import logging
import sys
import time
from typing import List, Optional

import feedback
from config import RecordingConfig, load_config
from display import format_listing, format_stats
from errors import MacroError, MacroExists, MacroNotFound
from player import Player
from recorder import Recorder
from selector import event_start_line, resolve
from store import MacroStore

logger = logging.getLogger(__name__)

COUNTDOWN_TICK = 0.95   # seconds per countdown step


def countdown(title: str, secs: int) -> None:
    print(title)
    for i in range(secs, 0, -1):
        print(f"{i}...")
        time.sleep(COUNTDOWN_TICK)

# ---- Commands ----------------------------------------------------------------

def cmd_rec(args, cfg: RecordingConfig, store: MacroStore) -> int:
    if store.exists(args.name) and not args.overwrite:
        raise MacroExists(args.name)
    keys = "+".join(cfg.stop_keystrokes)
    print(f"Beginning recording, press {keys} to end the recording")
    countdown("Recording starts in...", cfg.countdown_seconds)
    print("Start!")
    feedback.beep()
    macro = Recorder(cfg, store).record(args.name, args.desc, overwrite=args.overwrite)
    feedback.beep()
    print(f"Recorded {len(macro.events)} events → {args.name}")
    return 0

def cmd_run(args, cfg: RecordingConfig, store: MacroStore) -> int:
    if args.repeat < 1:
        raise MacroError("repeat must be 1 or greater")
    macro = store.load(args.name)
    single = None
    if args.action:
        idx = resolve(macro.events, args.action)
        single = macro.events[idx]
        print(f"Running action {args.action} from macro {args.name} (match #{idx + 1})")
    else:
        print(f"Running macro: {args.name} for {args.repeat} time(s)")

    player = Player()
    countdown("Playback starts in...", cfg.countdown_seconds)
    print("Begin!")
    feedback.beep()
    if single is not None:
        for _ in range(args.repeat):
            player.play_single(single)
    else:
        player.play(macro, repeat=args.repeat, on_status=logger.info)
    return 0

def cmd_ls(args, cfg: RecordingConfig, store: MacroStore) -> int:
    for name, description in store.list():
        lines = description.splitlines() or [""]
        print(f"{name:<27} - {lines[0]}")
        for line in lines[1:]:
            print(f"{'':<30}{line}")
    return 0

def cmd_show(args, cfg: RecordingConfig, store: MacroStore) -> int:
    macro = store.load(args.name)
    lines = format_stats(macro, args.all) if args.stat else format_listing(macro, args.all)
    for line in lines:
        print(line)
    return 0

def cmd_rm(args, cfg: RecordingConfig, store: MacroStore) -> int:
    store.remove(args.name)
    print(f"Removed {args.name}")
    return 0

def cmd_edit(args, cfg: RecordingConfig, store: MacroStore) -> int:
    if not store.exists(args.name):
        raise MacroNotFound(args.name)
    action = args.action_flag or args.action
    line = None
    if action:
        contents = store.read_text(args.name)
        macro = store.load(args.name)
        idx = resolve(macro.events, action)
        line = event_start_line(contents, idx)
        if line is None:
            raise MacroError(f"could not locate event position in file for action {action}")
    return 0 if feedback.launch_editor(store.path_for(args.name), line) else 1

# ---- CLI ---------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tinytask", description="Record and replay keyboard/mouse macros")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser("rec", help="Start recording a macro")
    pr.add_argument("name", help="Name of the macro to record")
    pr.add_argument("-d", "--desc", default="add a description", help="Description of the macro")
    pr.add_argument("-o", "--overwrite", action="store_true", help="Allow overwriting an existing macro")
    pr.set_defaults(func=cmd_rec)

    pp = sub.add_parser("run", help="Run a recorded macro")
    pp.add_argument("name", help="Name of the macro to run")
    pp.add_argument("-n", "--repeat", type=int, default=1, help="Number of times to repeat")
    pp.add_argument("-a", "--action", metavar="ACTION",
                    help="Run only one event, e.g. mouse_press.Left:19th")
    pp.set_defaults(func=cmd_run)

    pl = sub.add_parser("ls", help="List all recorded macros")
    pl.set_defaults(func=cmd_ls)

    ps = sub.add_parser("show", help="Show the events of a macro")
    ps.add_argument("name", help="Name of the macro to inspect")
    ps.add_argument("-s", "--stat", action="store_true", help="Show counts per event kind")
    ps.add_argument("--all", action="store_true", help="Include wait events")
    ps.set_defaults(func=cmd_show)

    pm = sub.add_parser("rm", help="Remove a macro")
    pm.add_argument("name", help="Name of the macro to remove")
    pm.set_defaults(func=cmd_rm)

    pe = sub.add_parser("edit", help="Edit a macro using $EDITOR")
    pe.add_argument("name", help="Name of the macro to edit (without .toml)")
    group = pe.add_mutually_exclusive_group()
    group.add_argument("action", nargs="?", metavar="ACTION",
                       help="Open at this event, e.g. mouse_press.Left:19th")
    group.add_argument("-a", "--action", dest="action_flag", metavar="ACTION",
                       help="Same as the positional ACTION")
    pe.set_defaults(func=cmd_edit)
    return p

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    try:
        cfg = load_config()
        return args.func(args, cfg, MacroStore())
    except MacroError as ex:
        print(f"error: {ex}", file=sys.stderr)
        return 1

if __name__ == "__main__":
    sys.exit(main())
