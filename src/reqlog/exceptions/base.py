"""
Custom exceptions for the request logger.
"""

# canonical package-level exception

class ReqlogError(Exception):
    """
    Base exception for request logger errors.

    - message: human-friendly message
    - field: optional name of the setting or argument related to the error (e.g., 'LOG_PALETTE')
    """

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.message} (field: {self.field})"
        return self.message


class ConfigurationError(ReqlogError):
    """
    Raised at startup when the logger cannot be configured.

    Examples: a palette with fewer than two colours, an unknown colour name,
    an unknown log prefix format. Never raised while a request is in flight.
    """


__all__ = [
    "ReqlogError",
    "ConfigurationError",
]
