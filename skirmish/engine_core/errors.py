"""Engine-level exceptions."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for errors that reject an intent without changing state."""

    code = "ENGINE_ERROR"


class NotFoundError(EngineError):
    """Raised when a referenced fighter, side, or coordinate does not resolve."""

    code = "NOT_FOUND"


class InvalidStateError(EngineError):
    """Raised when the current state cannot satisfy the requested operation."""

    code = "INVALID_STATE"


ERRORS_BY_CODE: dict[str, type[EngineError]] = {
    cls.code: cls for cls in (EngineError, NotFoundError, InvalidStateError)
}
