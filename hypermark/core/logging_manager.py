#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Logging for Hypermark validation runs.

Each run of the CLI appends to two rotating files under the log directory:

    <log_dir>/
    ├── <component>.log   # operations, per-file summaries, diagnostics
    └── errors.log        # load failures and internal faults, with traceback

The console only shows warnings and above, so diagnostics printed by the
CLI are not echoed twice.

Library code never requires a logger: functions take an optional
HypermarkLogger and go through safe_logger(), which substitutes a no-op
NullLogger.

Usage:
    logger = HypermarkLogger(LOG_DIR / "operations", "validators")
    report = TreeValidator(schema, logger).validate_report(tree, "a.json")
    # operations log now holds:
    # OPERATION - validate_file: {"source": "a.json", "valid": false, ...}
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional

# --- Third party imports ---
import click

if TYPE_CHECKING:
    from hypermark.validators.tree import ValidationReport


FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s - %(message)s"


def _to_json(details: Dict[str, Any]) -> str:
    return json.dumps(details, default=str, sort_keys=True)


class HypermarkLogger:
    """
    File logger for schema loading and tree validation.

    Attributes:
        log_dir: Directory holding the log files (created if missing)
        component_name: Prefix of the logger names and of the operations log
        operations: Logger writing <component>.log
        errors: Logger writing errors.log
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "hypermark",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.operations = self._logger(
            "operations", f"{component_name}.log", logging.DEBUG, max_bytes, backup_count
        )
        self.errors = self._logger(
            "errors", "errors.log", logging.ERROR, max_bytes, backup_count
        )

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        self.operations.addHandler(console)

    def _logger(
        self, suffix: str, filename: str, level: int, max_bytes: int, backup_count: int
    ) -> logging.Logger:
        """Fresh named logger with one rotating file handler."""
        logger = logging.getLogger(f"{self.component_name}.{suffix}")
        logger.setLevel(level)
        # Repeated CLI invocations in one process must not stack handlers
        logger.handlers = []
        logger.propagate = False

        handler = RotatingFileHandler(
            self.log_dir / filename,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)
        return logger

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Log a named operation ('load_schema', 'validate_tree', ...)."""
        self.operations.info(f"OPERATION - {operation}: {_to_json(details or {})}")

    def log_report(self, report: "ValidationReport") -> None:
        """
        Log the outcome of validating one file.

        Writes a 'validate_file' operation with the report summary (source,
        validity, diagnostic count, count per code), followed by one debug
        line per diagnostic in rendered form.

        Args:
            report: Report of a single tree
        """
        self.log_operation("validate_file", report.summary())
        for error in report.errors:
            self.operations.debug(f"DIAGNOSTIC - {report.source or '-'}: {error.format()}")

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        if details:
            message = f"{message}: {_to_json(details)}"
        self.operations.debug(f"DEBUG - {message}")

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        if details:
            message = f"{message}: {_to_json(details)}"
        self.operations.info(f"INFO - {message}")

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Record a failed command in errors.log and build its terminal message.

        Args:
            error: The load error or internal fault that stopped the command
            context: Where it happened (operation, schema and tree paths)
            show_traceback: Append the traceback to the returned message

        Returns:
            "❌ <ErrorType>: <message>", plus the traceback if requested
        """
        lines = [f"ERROR - {type(error).__name__}: {error}"]
        if context:
            lines.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
        lines.append(f"Traceback:\n{traceback.format_exc()}")
        self.errors.error("\n".join(lines))

        message = _cli_message(error)
        if show_traceback:
            return f"{message}\n\n{traceback.format_exc()}"
        return message


def _cli_message(error: Exception) -> str:
    return f"❌ {type(error).__name__}: {error}"


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 2,
) -> None:
    """
    Report a failed command and exit.

    Logs through the logger on the Click context, prints a one-line message
    to stderr (with traceback under --verbose) and exits with exit_code:
    2 for files that could not be loaded, 3 for internal faults.

    Note:
        This function never returns.
    """
    logger: Optional[HypermarkLogger] = ctx.obj.get("logger")
    verbose: bool = ctx.obj.get("verbose", False)

    context = {"operation": operation}
    context.update(additional_context or {})

    click.echo(safe_logger(logger).log_cli_error(error, context, show_traceback=verbose), err=True)
    sys.exit(exit_code)


class NullLogger:
    """No-op stand-in for HypermarkLogger, used when no logger is given."""

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_report(self, report: "ValidationReport") -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return _cli_message(error)


_null_logger = NullLogger()


def safe_logger(logger: Optional[HypermarkLogger]) -> HypermarkLogger:
    """Return logger, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
