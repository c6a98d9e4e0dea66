# lhc/core/exceptions.py
"""Exception hierarchy for the compliance engine.

Every error carries an optional ``context`` dict; the log formatter copies
it onto the record so failures can be traced to a bank file, question id or
assessment without parsing the message.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class LHCException(Exception):
    """Base exception for the engine and its HTTP layer."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class PoolConfigurationError(LHCException):
    """Raised when a domain bank cannot be turned into a valid pool.

    Covers unreadable or malformed bank files, severity tokens without a
    mapping entry and question ids that collide across banks.
    """

    pass


class AssessmentValidationError(LHCException):
    """Raised when an evaluation request cannot be scored at all."""

    def __init__(
        self, message: str, field: Optional[str] = None, context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, context)
        self.field = field


class AssessmentNotFoundError(LHCException):
    """Raised when a stored assessment does not exist for the caller."""

    pass


class PersistenceError(LHCException):
    """Raised when the assessment store fails."""

    pass


__all__ = [
    "LHCException",
    "PoolConfigurationError",
    "AssessmentValidationError",
    "AssessmentNotFoundError",
    "PersistenceError",
]
