"""Shared utilities: logging and structured errors."""

from unifi_diagnostics.utils.errors import DiagnosticsError, ErrorCodes
from unifi_diagnostics.utils.logging import (
    configure_logging,
    get_logger,
    log_analyzer_finished,
    log_analyzer_started,
)


__all__ = [
    'DiagnosticsError',
    'ErrorCodes',
    'configure_logging',
    'get_logger',
    'log_analyzer_finished',
    'log_analyzer_started',
]
