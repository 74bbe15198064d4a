"""Error taxonomy. Every condition here is recovered locally by the pipeline."""

from __future__ import annotations

from typing import Any


class QuizIntegrityError(Exception):
    """Base class for checker errors."""


class SourceLoadError(QuizIntegrityError):
    """A source could not be read or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason


class MalformedRecordError(QuizIntegrityError):
    """A record lacks a usable prompt or option sequence."""

    def __init__(self, record: Any, reason: str) -> None:
        super().__init__(reason)
        self.record = record
        self.reason = reason


class ConfigurationLoadError(QuizIntegrityError):
    """The prefix-filter configuration could not be loaded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
