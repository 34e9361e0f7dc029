"""
TimeSeries model representing one reassembled output series.
"""

from dataclasses import dataclass, field

from .sample import Sample


@dataclass(frozen=True)
class Label:
    """
    A single label name/value pair.

    Attributes:
        name: Label name.
        value: Label value.
    """

    name: str
    value: str

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value}


@dataclass
class TimeSeries:
    """
    A labelled sequence of samples in remote read response form.

    Labels are an ordered list so the wire order ("__name__" first, then
    metric labels, then resource labels) survives serialization.

    Attributes:
        labels: Ordered Label list, unique by name.
        samples: Samples ordered by timestamp.
    """

    labels: list[Label] = field(default_factory=list)
    samples: list[Sample] = field(default_factory=list)

    @property
    def labels_dict(self) -> dict[str, str]:
        """
        Get labels as a name to value mapping.

        Returns:
            Dictionary of label values keyed by name.
        """
        return {label.name: label.value for label in self.labels}

    @property
    def name(self) -> str:
        """
        Get the metric name carried by the "__name__" label.

        Returns:
            Metric name, or "" when the series has none.
        """
        return self.labels_dict.get("__name__", "")

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary with labels and samples.
        """
        return {
            "labels": [label.to_dict() for label in self.labels],
            "samples": [sample.to_dict() for sample in self.samples]
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimeSeries":
        """
        Create TimeSeries from dictionary.

        Args:
            data: Dictionary with labels and samples keys.

        Returns:
            TimeSeries instance.
        """
        labels = [Label(name=item["name"], value=item["value"]) for item in data.get("labels", [])]
        samples = [Sample.from_dict(s) for s in data.get("samples", [])]
        return cls(labels=labels, samples=samples)
