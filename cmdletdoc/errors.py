"""Exit codes and the exception that carries them."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    MODULE_NOT_FOUND = 1
    MODULE_LOAD_ERROR = 2
    DOC_COMMENTS_NOT_FOUND = 3
    DOC_COMMENTS_LOAD_ERROR = 4
    UNHANDLED_EXCEPTION = 5
    WARNINGS_AS_ERRORS = 6


class EngineError(RuntimeError):
    """Raised for failures that end a generation run with a specific exit code."""

    def __init__(self, exit_code: ExitCode, message: str) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.message = message


__all__ = ["EngineError", "ExitCode"]
