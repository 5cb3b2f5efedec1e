"""Side channel for reporting API failures before falling back."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger("ossinsight_mcp")


@runtime_checkable
class DiagnosticSink(Protocol):
    """Receives a record of every recovered API failure."""

    def record(self, message: str, error: BaseException | None = None) -> None:
        """Record a failure."""
        ...


class LoggingSink:
    """DiagnosticSink that writes to the ossinsight_mcp logger."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def record(self, message: str, error: BaseException | None = None) -> None:
        if error is None:
            self._log.warning("%s", message)
        else:
            self._log.warning("%s: %s", message, error)
