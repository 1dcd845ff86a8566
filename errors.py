# SPDX-License-Identifier: GPL-3.0-or-later


class MacroError(Exception):
    """Base class for every failure reported to the user."""


class ConfigError(MacroError):
    pass


class IOFailure(MacroError):
    pass


class MacroNotFound(MacroError):
    def __init__(self, name: str) -> None:
        super().__init__(f'macro "{name}" not found')
        self.name = name


class MacroExists(MacroError):
    def __init__(self, name: str) -> None:
        super().__init__(f'macro "{name}" already exists, use --overwrite to overwrite')
        self.name = name


class MacroCorrupt(MacroError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f'macro "{name}" could not be read: {reason}')
        self.name = name
        self.reason = reason


class SelectorParseError(MacroError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"invalid action: {reason}")
        self.reason = reason


class SelectorUnresolved(MacroError):
    def __init__(self, selector: str) -> None:
        super().__init__(f"no matching event found for action {selector}")
        self.selector = selector


class SynthesisFailure(MacroError):
    pass
