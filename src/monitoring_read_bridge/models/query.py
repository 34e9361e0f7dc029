"""
Query model representing one remote read query.
"""

from dataclasses import dataclass, field

from .label_matcher import LabelMatcher


@dataclass
class Query:
    """
    A remote read query: label matchers over an inclusive millisecond time range.

    Attributes:
        matchers: Label matchers, applied in order.
        start_timestamp_ms: Range start in Unix milliseconds.
        end_timestamp_ms: Range end in Unix milliseconds.
    """

    matchers: list[LabelMatcher] = field(default_factory=list)
    start_timestamp_ms: int = 0
    end_timestamp_ms: int = 0

    def __post_init__(self) -> None:
        if self.start_timestamp_ms > self.end_timestamp_ms:
            raise ValueError(
                f"Query start ({self.start_timestamp_ms}) is after end ({self.end_timestamp_ms})"
            )

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with matchers and time range.
        """
        return {
            "matchers": [m.to_dict() for m in self.matchers],
            "start_timestamp_ms": self.start_timestamp_ms,
            "end_timestamp_ms": self.end_timestamp_ms
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Query":
        """
        Create Query from dictionary.

        Accepts both snake_case keys and the camelCase keys used by the
        JSON form of a remote read request.

        Args:
            data: Dictionary with matchers and start/end timestamps.

        Returns:
            Query instance.
        """
        start = data.get("start_timestamp_ms", data.get("startTimestampMs", 0))
        end = data.get("end_timestamp_ms", data.get("endTimestampMs", 0))
        return cls(
            matchers=[LabelMatcher.from_dict(m) for m in data.get("matchers", [])],
            start_timestamp_ms=int(start),
            end_timestamp_ms=int(end)
        )
