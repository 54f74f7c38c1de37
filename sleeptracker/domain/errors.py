"""Domain-level error types shared across adapters, use cases and viewmodels."""
from __future__ import annotations

from typing import Optional


class StoreFailure(Exception):
    """Raised by session-store adapters when the storage engine fails.

    The original engine exception (if any) is kept on ``cause`` and chained via
    ``raise ... from``.
    """

    def __init__(self, operation: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.message = message
        self.cause = cause


class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


__all__ = ["StoreFailure", "UseCaseError"]
