"""Errors raised while translating GIR repositories"""

from typing import Any, Optional


class TranslationError(Exception):
    """Base exception for all translation errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({context})"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvalidSchemaError(TranslationError):
    """The parser rejected a GIR document."""


class FileSystemError(TranslationError):
    """A repository or output file could not be opened, read or written."""


class CyclicDependencyError(TranslationError):
    """Include resolution re-entered a repository it is still expanding."""

    def __init__(self, cycle: list[str]) -> None:
        super().__init__(
            "Cyclic repository dependency: " + " -> ".join(cycle),
            {"cycle": cycle},
        )
        self.cycle = cycle
