"""Translate store errors into user-facing UseCaseError instances."""

from __future__ import annotations


from typing import Optional

from sleeptracker.domain.errors import StoreFailure, UseCaseError


def map_store_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by the store or the use case itself.
        default_code: Code reported for every failure of the calling use case.
        default_message: Message used when ``exc`` carries no text.

    Returns:
        UseCaseError: ``exc`` itself when it already is one, otherwise a new
        error carrying ``default_code``.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, StoreFailure):
        return UseCaseError(default_code, _compose_error_message("Sleep database error", exc.message))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    """Compose a user-facing error message with optional hint text."""
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_store_error"]
