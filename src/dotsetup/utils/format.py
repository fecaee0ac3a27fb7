"""Formatting helpers for user-facing error messages."""

from __future__ import annotations

from pydantic import ValidationError


def format_validation_error(subject: str, exc: ValidationError) -> str:
    """Collapse a pydantic ValidationError into a single readable line."""
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        details.append(f"{location}: {message}" if location else message)

    if not details:
        return f"Invalid {subject}"
    return f"Invalid {subject}: " + "; ".join(details)
