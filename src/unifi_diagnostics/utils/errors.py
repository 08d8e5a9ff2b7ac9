"""Structured errors for the diagnostics engine."""


class DiagnosticsError(Exception):
    """Structured error raised (or recorded) by the diagnostics engine."""

    def __init__(
        self,
        message: str,
        error_code: str,
        suggestion: str | None = None,
    ):
        """Initialize diagnostics error with structured context.

        Args:
            message: Human-readable error description
            error_code: Structured error code (e.g., 'INVALID_SNAPSHOT')
            suggestion: Optional recovery suggestion for the user
        """
        self.message = message
        self.error_code = error_code
        self.suggestion = suggestion
        super().__init__(self._format())

    def _format(self) -> str:
        """Format error message with structured information."""
        parts = [f'[{self.error_code}] {self.message}']

        if self.suggestion:
            parts.append(f'Suggestion: {self.suggestion}')

        return '\n'.join(parts)

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for structured logging and result payloads."""
        return {
            'error_code': self.error_code,
            'message': self.message,
            'suggestion': self.suggestion or '',
        }


class ErrorCodes:
    """Standard error codes for the diagnostics engine."""

    # Input errors
    INVALID_SNAPSHOT = 'INVALID_SNAPSHOT'
    INVALID_THRESHOLD = 'INVALID_THRESHOLD'

    # Runtime errors
    ANALYZER_FAILED = 'ANALYZER_FAILED'
