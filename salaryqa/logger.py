"""
Structured logging system for salaryqa.

Provides centralized logging with multiple output destinations,
log levels, and metrics tracking for monitoring entry review health.
"""

import logging
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json

from .env import get_settings


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for anomaly and duplicate detection runs.
    """

    def __init__(
        self,
        name: str = "salaryqa",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to the console (stderr)
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers

        # Metrics tracking
        self.metrics = {
            "entries_analyzed": 0,
            "anomalies_flagged": 0,
            "status_counts": {},
            "duplicate_checks": 0,
            "duplicates_found": 0,
            "store_errors": 0,
            "errors_by_operation": {},
        }

        # Console handler
        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        # File handler
        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"salaryqa_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_analysis(self, review_status: str, is_anomaly: bool):
        """Record a finished anomaly analysis and the status it produced."""
        self.metrics["entries_analyzed"] += 1
        if is_anomaly:
            self.metrics["anomalies_flagged"] += 1
        counts = self.metrics["status_counts"]
        counts[review_status] = counts.get(review_status, 0) + 1

    def record_duplicate_check(self, is_duplicate: bool):
        """Record a duplicate check."""
        self.metrics["duplicate_checks"] += 1
        if is_duplicate:
            self.metrics["duplicates_found"] += 1

    def record_store_error(self, operation: str):
        """Record a record store failure for an operation."""
        self.metrics["store_errors"] += 1

        if operation not in self.metrics["errors_by_operation"]:
            self.metrics["errors_by_operation"][operation] = 0
        self.metrics["errors_by_operation"][operation] += 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = self.metrics.copy()
        analyzed = metrics_copy["entries_analyzed"]
        if analyzed > 0:
            metrics_copy["anomaly_rate"] = round(
                metrics_copy["anomalies_flagged"] / analyzed, 3
            )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        analyzed = metrics["entries_analyzed"]
        flagged = metrics["anomalies_flagged"]
        rate = metrics.get("anomaly_rate", 0) * 100

        self.info("=== Review Session Metrics ===")
        self.info(f"Entries analyzed: {analyzed} ({flagged} anomalous, {rate:.1f}%)")
        self.info(f"Duplicate checks: {metrics['duplicate_checks']} ({metrics['duplicates_found']} duplicates)")

        if metrics["status_counts"]:
            self.info("Review statuses:")
            for status, count in metrics["status_counts"].items():
                self.info(f"  {status}: {count}")

        if metrics["errors_by_operation"]:
            self.info("Store errors:")
            for operation, count in metrics["errors_by_operation"].items():
                self.info(f"  {operation}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "salaryqa",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Defaults for level, log directory and file output come from the
    SALARYQA_* environment settings.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        settings = get_settings()
        kwargs.setdefault("log_dir", settings.log_dir)
        kwargs.setdefault("enable_file", settings.log_to_file)
        _global_logger = StructuredLogger(name=name, level=level or settings.log_level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
