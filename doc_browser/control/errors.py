"""Failure conditions raised by the content control pipeline."""
from __future__ import annotations


class ControlError(RuntimeError):
    """Base class for every failure surfaced by `Control`."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.__cause__ = cause


class UnsupportedScheme(ControlError):
    """Raised when a location uses a scheme no fetcher handles."""


class UnsupportedExtension(ControlError):
    """Raised when a location's file extension has no registered content type."""


class UnsupportedContentType(ControlError):
    """Raised when no pre-parse step or parse engine exists for a content type."""


class ParseFailure(ControlError):
    """Raised when bytes cannot be decoded or an engine cannot build content."""


class InitializationFailure(ControlError):
    """Raised when the item source fails to initialise.

    Captured once by `Control` and re-raised to every later caller.
    """
