"""Verbose-gated diagnostic logging.

Diagnostic lines are only emitted when the resource enables ``verbose``;
warnings and errors go through unconditionally.
"""

from __future__ import annotations

import logging
from typing import Any

PREFIX = "ResourcePlugin"


class DiagnosticLogger(logging.LoggerAdapter):
    """Logger adapter that prefixes messages and gates ``diag`` on verbose."""

    def __init__(self, logger: logging.Logger, verbose: bool = False) -> None:
        super().__init__(logger, {})
        self.verbose = verbose

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        return f"{PREFIX}: {msg}", kwargs

    def diag(self, msg: str, *args: Any) -> None:
        if self.verbose:
            self.info(msg, *args)


def get_diagnostic_logger(name: str, verbose: bool = False) -> DiagnosticLogger:
    return DiagnosticLogger(logging.getLogger(name), verbose)


__all__ = ["DiagnosticLogger", "get_diagnostic_logger"]
