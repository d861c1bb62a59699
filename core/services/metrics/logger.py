"""
Structured logging for generation events.

Provides JSON-formatted logs with timestamps and structured fields.
"""
import json
import logging
import os
import sys
from datetime import datetime
from typing import Any, Optional


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter."""

    EXCLUDED_ATTRS = {
        'name', 'msg', 'args', 'levelname', 'levelno',
        'pathname', 'filename', 'module', 'exc_info',
        'exc_text', 'stack_info', 'lineno', 'funcName',
        'created', 'msecs', 'relativeCreated', 'thread',
        'threadName', 'processName', 'process', 'message',
        'asctime', 'taskName'
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON formatted string
        """
        log_data = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "event": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self.EXCLUDED_ATTRS:
                try:
                    json.dumps(value)
                    log_data[key] = value
                except (TypeError, ValueError):
                    log_data[key] = str(value)

        return json.dumps(log_data)


class StructuredLogger:
    """Structured logger wrapper with convenience methods."""

    def __init__(
        self,
        name: str = "testgen",
        level: int = logging.INFO,
        enable_console: bool = True,
        enable_file: bool = False,
        log_file: Optional[str] = None
    ):
        """Initialize structured logger.

        Args:
            name: Logger name
            level: Logging level
            enable_console: Output to console (stderr, so CLI progress on stdout stays readable)
            enable_file: Output to file
            log_file: Path to log file
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level)
        self._logger.handlers = []  # Clear existing handlers

        formatter = StructuredFormatter()

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
            self._logger.addHandler(console_handler)

        if enable_file and log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(formatter)
            self._logger.addHandler(file_handler)

    @property
    def name(self) -> str:
        return self._logger.name

    def info(self, event: str, **kwargs: Any) -> None:
        """Log info level message.

        Args:
            event: Event name/message
            **kwargs: Additional structured fields
        """
        self._logger.info(event, extra=kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        """Log warning level message.

        Args:
            event: Event name/message
            **kwargs: Additional structured fields
        """
        self._logger.warning(event, extra=kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        """Log error level message.

        Args:
            event: Event name/message
            **kwargs: Additional structured fields
        """
        self._logger.error(event, extra=kwargs)

    def debug(self, event: str, **kwargs: Any) -> None:
        """Log debug level message."""
        self._logger.debug(event, extra=kwargs)

    def log_parsing(
        self,
        parser: str,
        duration_ms: float,
        actions: int,
        unrecognized: int,
        fallback_used: bool = False
    ) -> None:
        """Log a parsing operation.

        Args:
            parser: Parser type used
            duration_ms: Duration in milliseconds
            actions: Number of actions extracted
            unrecognized: Number of lines no pattern matched
            fallback_used: Whether the synthetic navigation fallback was used
        """
        level = logging.WARNING if fallback_used else logging.INFO
        self._logger.log(
            level,
            "parsing_completed",
            extra={
                "parser": parser,
                "duration_ms": round(duration_ms, 2),
                "actions": actions,
                "unrecognized": unrecognized,
                "fallback_used": fallback_used
            }
        )

    def log_duplicate(self, scope: str, unit: str, value: str) -> None:
        """Log a suppressed duplicate.

        Args:
            scope: Artifact whose deduplicator rejected the unit
            unit: selector, constant, method or step
            value: The duplicated value
        """
        self._logger.info(
            "duplicate_skipped",
            extra={
                "scope": scope,
                "unit": unit,
                "value": value
            }
        )

    def log_artifact(self, artifact: str, path: str, size: int) -> None:
        """Log a written artifact."""
        self._logger.info(
            "artifact_written",
            extra={
                "artifact": artifact,
                "path": path,
                "size_bytes": size
            }
        )

    def log_generation(
        self,
        class_name: str,
        mode: str,
        duration_ms: float,
        constants: int,
        methods: int,
        steps: int,
        skipped: int,
        story_key: Optional[str] = None
    ) -> None:
        """Log generation run completion.

        Args:
            class_name: Generated page class name
            mode: recording or ticket
            duration_ms: Total duration
            constants: Number of selector constants emitted
            methods: Number of page methods emitted
            steps: Number of glue handlers emitted
            skipped: Number of suppressed duplicates
            story_key: Requirement key the artifacts are tagged with
        """
        self._logger.info(
            "generation_completed",
            extra={
                "class_name": class_name,
                "mode": mode,
                "duration_ms": round(duration_ms, 2),
                "constants": constants,
                "methods": methods,
                "steps": steps,
                "skipped_duplicates": skipped,
                "story_key": story_key
            }
        )


_global_logger: Optional[StructuredLogger] = None


def get_logger() -> StructuredLogger:
    """Get or create the global structured logger.

    Level comes from the LOG_LEVEL environment variable (default INFO).
    """
    global _global_logger
    if _global_logger is None:
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()
        _global_logger = StructuredLogger(level=getattr(logging, level_name, logging.INFO))
    return _global_logger


def reset_logger() -> None:
    """Reset global logger."""
    global _global_logger
    _global_logger = None
