"""Diagnostics — observable, non-fatal reports produced while transforming."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel

from .syntax_tree import NO_SOURCE_LOCATION, SourceLocation


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[self]


_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class DiagnosticKind(str, Enum):
    METHOD_ATTACHMENT = "method_attachment"
    UNRESOLVED_CLASS = "unresolved_class"


class Diagnostic(BaseModel):
    kind: DiagnosticKind
    severity: Severity
    message: str
    class_name: str = ""
    member_name: str = ""
    location: SourceLocation = NO_SOURCE_LOCATION

    def __str__(self) -> str:
        return f"{self.location}: {self.severity.value}: {self.message}"


class DiagnosticSink:
    """Collects diagnostics for one invocation and mirrors them to a logger."""

    def __init__(self):
        self.diagnostics: list[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic, logger: logging.Logger) -> Diagnostic:
        self.diagnostics.append(diagnostic)
        logger.log(
            diagnostic.severity.log_level,
            "%s (at %s)",
            diagnostic.message,
            diagnostic.location,
        )
        return diagnostic

    def by_severity(self, severity: Severity) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == severity]

    def __iter__(self):
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)
