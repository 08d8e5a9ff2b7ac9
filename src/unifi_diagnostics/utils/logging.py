"""Structured JSON logging for diagnostics runs.

Every record carries the run's correlation id and, inside an analyzer, the
analyzer name, so one run can be followed through the JSON log.
"""

import sys
from loguru import logger
from pathlib import Path
from typing import Any

DEFAULT_LOG_DIR = Path.home() / '.unifi-diagnostics' / 'logs'


def configure_logging(
    log_file: str | None = None,
    log_level: str = 'INFO',
    include_console: bool = False,
) -> None:
    """Configure structured JSON logging.

    Args:
        log_file: Path to log file (defaults to ~/.unifi-diagnostics/logs/diagnostics.log)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        include_console: Whether to also log to stderr
    """
    logger.remove()

    if not log_file:
        DEFAULT_LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_file = str(DEFAULT_LOG_DIR / 'diagnostics.log')

    # JSON file sink, no variable values in tracebacks
    logger.add(
        log_file,
        format='{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {extra[correlation_id]} | {extra[analyzer]} | {message}',
        serialize=True,
        rotation='10 MB',
        retention='7 days',
        compression='gz',
        level=log_level,
        backtrace=True,
        diagnose=False,
    )

    if include_console:
        logger.add(
            sys.stderr,
            format='<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[analyzer]}</cyan> - <level>{message}</level>',
            level=log_level,
            colorize=True,
        )

    logger.configure(extra={'correlation_id': '', 'analyzer': ''})


def get_logger(correlation_id: str = '', analyzer: str = '') -> Any:
    """Get a logger bound to one diagnostics run.

    Args:
        correlation_id: Unique identifier of the run
        analyzer: Name of the analyzer logging, empty for the engine itself

    Returns:
        Logger instance with both fields bound
    """
    return logger.bind(correlation_id=correlation_id, analyzer=analyzer)


def log_analyzer_started(analyzer: str, correlation_id: str = '') -> None:
    """Log that an analyzer is about to run."""
    get_logger(correlation_id, analyzer).debug('Analyzer started')


def log_analyzer_finished(
    analyzer: str,
    findings: int,
    duration_ms: float,
    correlation_id: str = '',
) -> None:
    """Log a completed analyzer with its finding count and run time.

    Args:
        analyzer: Name of the analyzer
        findings: Number of findings it produced
        duration_ms: Wall time of the analyzer in milliseconds
        correlation_id: Run correlation ID
    """
    get_logger(correlation_id, analyzer).info(
        f'Analyzer completed: {findings} findings in {duration_ms:.1f}ms',
        findings=findings,
        duration_ms=round(duration_ms, 3),
    )
