from __future__ import annotations

import logging
import sys
from typing import Any

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

# Points caller info at the code calling trace(), the frame layout changed in 3.11
_STACK_LEVEL = 2 if sys.version_info >= (3, 11) else 3


class TraceLogger(logging.Logger):
    """Logger with a ``trace`` method, used for per-component path resolution messages."""

    def trace(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, stacklevel=_STACK_LEVEL, **kwargs)


logging.setLoggerClass(TraceLogger)


def get_logger(name: str) -> TraceLogger:
    return logging.getLogger(name)


class FilesystemLogAdapter(logging.LoggerAdapter):
    """Prefix log messages with the ``repr`` of the filesystem they concern."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        return f"{self.extra['fs']!r}: {msg}", kwargs

    def trace(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        self.log(TRACE_LEVEL, msg, *args, stacklevel=_STACK_LEVEL, **kwargs)
