"""
Engine error types.

Only driver overlays (bad path or bad value), IRR (no solution) and individual
sweep evaluations have failure outcomes. All are normally reported as values;
the exceptions below are for callers that ask for one via
OverlayResult.unwrap().
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    PATH_NOT_FOUND = "PATH_NOT_FOUND"
    INVALID_VALUE = "INVALID_VALUE"
    EVALUATION_FAILED = "EVALUATION_FAILED"


class EngineError(Exception):
    """Base class for engine errors."""

    code: ErrorCode

    def __init__(self, path: str, detail: str):
        super().__init__(f"{self.code.value}: {path!r} ({detail})")
        self.path = path
        self.detail = detail


class PathNotFoundError(EngineError, LookupError):
    code = ErrorCode.PATH_NOT_FOUND


class InvalidValueError(EngineError, ValueError):
    code = ErrorCode.INVALID_VALUE


def error_for(code: ErrorCode, path: str, detail: str) -> EngineError:
    if code == ErrorCode.INVALID_VALUE:
        return InvalidValueError(path, detail)
    return PathNotFoundError(path, detail)
