"""Diagnostics reported during a generation pass.

Non-fatal problems (a declaration of the wrong kind, an unresolvable type) do not stop the
pass. They are recorded here, attributed to the offending symbol, and forwarded to the
``funcgen`` logger so that tools can surface them.
"""

from __future__ import annotations

import enum
import logging
import typing
from dataclasses import dataclass

logger = logging.getLogger("funcgen")


class Severity(enum.Enum):
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    message: str
    symbol: str = ""

    def __str__(self) -> str:
        if self.symbol:
            return f"{self.message}: {self.symbol}"
        return self.message


class DiagnosticLogger:
    def __init__(self, log: typing.Optional[logging.Logger] = None):
        self._log = log or logger
        self.diagnostics: list[Diagnostic] = []

    def _report(self, severity: Severity, message: str, symbol: object) -> None:
        diagnostic = Diagnostic(severity, message, str(symbol) if symbol is not None else "")
        self.diagnostics.append(diagnostic)
        self._log.log(severity.value, "%s", diagnostic)

    def info(self, message: str, symbol: object = None) -> None:
        self._report(Severity.INFO, message, symbol)

    def warn(self, message: str, symbol: object = None) -> None:
        self._report(Severity.WARNING, message, symbol)

    def error(self, message: str, symbol: object = None) -> None:
        self._report(Severity.ERROR, message, symbol)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
