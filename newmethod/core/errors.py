from __future__ import annotations


class NewMethodError(RuntimeError):
    """Failure whose message is meant for the user."""


class InputCancelled(NewMethodError):
    def __init__(self, msg: str = "") -> None:
        super().__init__(msg)


class NoActiveTarget(NewMethodError):
    def __init__(self, msg: str = "no selected file") -> None:
        super().__init__(msg)


class FileError(NewMethodError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(NewMethodError):
    pass
