"""
upckeys Logging
================

:class:`ToolLogger` binds a component name and a current *operation*
(``"scan"``, ``"recover"``) to every record it emits.  Records go to a
Rich handler on stderr and, when configured, to a rotating log file as
plain text or JSON lines.

stdout carries recovered keys only; no handler here writes to it.

References:
    - Python logging HOWTO. https://docs.python.org/3/howto/logging.html
    - Rich library. https://github.com/Textualize/rich
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(operation)s | %(message)s"
_MAX_LOG_BYTES = 10_485_760
_LOG_BACKUPS = 5


class _JSONLineFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, operation, message.

    Keyword arguments passed to :meth:`ToolLogger.info` and friends land
    under ``"extra"``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        operation = getattr(record, "operation", "-")
        if operation != "-":
            entry["operation"] = operation
        fields = getattr(record, "upc_fields", None)
        if fields:
            entry["extra"] = fields
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _stderr_handler(level: int) -> logging.Handler:
    return RichHandler(
        console=Console(stderr=True),
        level=level,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )


def _file_handler(path: Path, level: int, json_lines: bool) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_LOG_BACKUPS,
        encoding="utf-8",
    )
    handler.setLevel(level)
    if json_lines:
        handler.setFormatter(_JSONLineFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")
        )
    return handler


@dataclass
class Stopwatch:
    """Elapsed-time reading handed out by :meth:`ToolLogger.timed`."""

    started: float = field(default_factory=time.perf_counter)
    stopped: Optional[float] = None

    @property
    def elapsed(self) -> float:
        end = self.stopped if self.stopped is not None else time.perf_counter()
        return end - self.started


class ToolLogger:
    """Logger for one upckeys component.

    Usage::

        log = ToolLogger("engine", log_level="DEBUG")
        with log.operation("scan"):
            log.debug("Tuple %s matches", digits, band="2.4")
        with log.timed("recovery for UPC1234567") as watch:
            run()
        print(watch.elapsed)

    Args:
        tool_name:       Component name; the stdlib logger is ``upckeys.<tool_name>``.
        log_level:       Minimum severity name.
        log_file:        Rotating log file, or ``None`` for none.
        json_logs:       Write the log file as JSON lines.
        console_output:  Attach the Rich stderr handler.
    """

    def __init__(
        self,
        tool_name: str,
        *,
        log_level: str = "WARNING",
        log_file: str | Path | None = None,
        json_logs: bool = False,
        console_output: bool = True,
    ) -> None:
        self._tool_name = tool_name
        self._operation: Optional[str] = None

        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

        self._logger = logging.getLogger(f"upckeys.{tool_name}")
        self._logger.setLevel(level)
        self._logger.propagate = False
        # Engines are rebuilt per CLI call; replace earlier handlers.
        for old in list(self._logger.handlers):
            self._logger.removeHandler(old)
            old.close()

        if console_output:
            self._logger.addHandler(_stderr_handler(level))
        if log_file is not None:
            self._logger.addHandler(_file_handler(Path(log_file), level, json_logs))

    @classmethod
    def from_config(cls, tool_name: str, config: Any) -> ToolLogger:
        """Build a logger from the ``[global]`` section of a config."""
        settings = config.global_settings
        return cls(
            tool_name,
            log_level="DEBUG" if settings.debug else settings.log_level,
            log_file=settings.log_file,
            json_logs=settings.log_json,
        )

    @contextmanager
    def operation(self, name: str) -> Iterator[ToolLogger]:
        """Tag records emitted inside the block with *name*."""
        previous, self._operation = self._operation, name
        try:
            yield self
        finally:
            self._operation = previous

    @contextmanager
    def timed(self, label: str) -> Iterator[Stopwatch]:
        """Log start and completion of *label*; yields the running stopwatch."""
        watch = Stopwatch()
        self.debug("Started: %s", label)
        try:
            yield watch
        finally:
            watch.stopped = time.perf_counter()
            self.info("Completed: %s (%.3f sec)", label, watch.elapsed)

    def debug(self, msg: str, *args: Any, **fields: Any) -> None:
        self._emit(logging.DEBUG, msg, args, fields)

    def info(self, msg: str, *args: Any, **fields: Any) -> None:
        self._emit(logging.INFO, msg, args, fields)

    def _emit(
        self, level: int, msg: str, args: tuple[Any, ...], fields: dict[str, Any]
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(
            level,
            msg,
            *args,
            extra={"operation": self._operation or "-", "upc_fields": fields},
        )

    @property
    def tool_name(self) -> str:
        return self._tool_name

    @property
    def underlying(self) -> logging.Logger:
        """The wrapped :class:`logging.Logger`."""
        return self._logger
