"""
Custom exceptions for monitoring-read-bridge.
"""


class BridgeError(Exception):
    """Base exception for all bridge errors."""
    pass


class BackendError(BridgeError):
    """Base exception for errors talking to the monitoring backend."""
    pass


class BackendConnectionError(BackendError):
    """Raised when connection to the monitoring backend fails."""
    pass


class BackendQueryError(BackendError):
    """Raised when a backend request fails or returns an error."""
    pass


class BackendAuthError(BackendError):
    """Raised when authentication to the monitoring backend fails."""
    pass


class TranslationError(BridgeError):
    """Base exception for errors translating a query or its results."""
    pass


class UnsupportedMatcherError(TranslationError):
    """Raised when a label matcher has no backend filter equivalent."""
    pass


class UnsupportedValueTypeError(TranslationError):
    """Raised when a backend series carries a non-numeric value type."""
    pass


class TimestampParseError(TranslationError):
    """Raised when a backend point timestamp cannot be parsed."""
    pass


class QueryCancelledError(TranslationError):
    """Raised when a query is cancelled while paging through results."""
    pass


class ValueParseError(TranslationError):
    """Raised when a backend point value cannot be converted to a float."""
    pass
