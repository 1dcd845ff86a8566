# SPDX-License-Identifier: GPL-3.0-or-later
import logging
import os
import shlex
import subprocess
import sys
from typing import Optional

from errors import ConfigError

logger = logging.getLogger(__name__)


def beep() -> None:
    """Terminal bell marking the start/end of recording and playback."""
    sys.stdout.write("\a")
    sys.stdout.flush()


def launch_editor(path: str, line: Optional[int] = None) -> bool:
    """Open `path` in $EDITOR (at `line` if given); True if the editor exited cleanly."""
    editor = os.environ.get("EDITOR", "").strip()
    if not editor:
        raise ConfigError("$EDITOR is not set; set EDITOR to your preferred editor")
    target = f"{path}:{line}" if line is not None else path
    try:
        result = subprocess.run(shlex.split(editor) + [target])
    except OSError as ex:
        logger.warning("failed to launch editor: %s", ex)
        return False
    if result.returncode != 0:
        logger.warning("editor exited with status: %s", result.returncode)
        return False
    return True
