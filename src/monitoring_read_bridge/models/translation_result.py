"""
TranslationResult model representing the outcome of translating one query.
"""

from dataclasses import dataclass, field
from enum import Enum

from .time_series import TimeSeries


class FailureReason(Enum):
    """Why a query translation produced no series."""

    UNSUPPORTED_MATCHER = "unsupported_matcher"
    BACKEND_ERROR = "backend_error"
    TIMESTAMP_PARSE = "timestamp_parse"
    UNSUPPORTED_VALUE_TYPE = "unsupported_value_type"
    VALUE_PARSE = "value_parse"
    CANCELLED = "cancelled"


@dataclass
class TranslationResult:
    """
    Result of translating one query: either series or a failure reason.

    A failed result never carries partial series.

    Attributes:
        series: Output time series (empty on failure, possibly empty on success).
        failure: Failure reason, or None on success.
        message: Human readable failure detail.
    """

    series: list[TimeSeries] = field(default_factory=list)
    failure: FailureReason | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        """Whether the translation succeeded."""
        return self.failure is None

    @property
    def total_samples(self) -> int:
        """
        Get total number of samples across all series.

        Returns:
            Total sample count.
        """
        return sum(len(s.samples) for s in self.series)

    @classmethod
    def failed(cls, reason: FailureReason, message: str = "") -> "TranslationResult":
        """
        Create a failed result with no series.

        Args:
            reason: Failure reason.
            message: Failure detail for logs and callers.

        Returns:
            TranslationResult instance.
        """
        return cls(series=[], failure=reason, message=message)

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with series, failure and message.
        """
        return {
            "series": [s.to_dict() for s in self.series],
            "failure": self.failure.value if self.failure else None,
            "message": self.message
        }
