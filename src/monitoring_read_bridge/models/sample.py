"""
Sample model representing a single datapoint of an output time series.
"""

from dataclasses import dataclass


@dataclass
class Sample:
    """
    A single datapoint in remote read response form.

    Attributes:
        value: The numeric value at this timestamp.
        timestamp: Unix timestamp in milliseconds.
    """

    value: float
    timestamp: int

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with value and timestamp.
        """
        return {
            "value": self.value,
            "timestamp": self.timestamp
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Sample":
        """
        Create Sample from dictionary.

        Args:
            data: Dictionary with value and timestamp keys.

        Returns:
            Sample instance.
        """
        return cls(
            value=float(data["value"]),
            timestamp=int(data["timestamp"])
        )
