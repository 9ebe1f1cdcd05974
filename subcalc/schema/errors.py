from __future__ import annotations

from typing import Optional


class RosterError(Exception):
    """Base error for malformed or inconsistent roster documents."""


class ValidationError(RosterError):
    """Raised when a roster document fails validation."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)
