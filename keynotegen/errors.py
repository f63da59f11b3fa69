"""Custom exceptions for deck compilation errors."""

from __future__ import annotations


class KeynoteError(Exception):
    """Base class for all deck compilation failures."""


class InvalidInputError(ValueError, KeynoteError):
    """Raised when a render request is invalid and nothing can be rendered."""

    def __init__(self, issues: list[str]):
        self.issues = [str(i).strip() for i in issues if str(i).strip()]
        if not self.issues:
            self.issues = ["Invalid input"]
        super().__init__(self._format())

    def _format(self) -> str:
        lines = ["Input validation failed:"]
        for issue in self.issues:
            lines.append(f"- {issue}")
        return "\n".join(lines)


class SerializationError(KeynoteError):
    """Raised when a slide package cannot be built or written."""


class RenderCancelled(KeynoteError):
    """Raised when the caller cancels a render between slides or parts."""
