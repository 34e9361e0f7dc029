"""
BackendSeries model representing one time series returned by the Cloud Monitoring API.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BackendPoint:
    """
    A single point of a backend time series.

    Attributes:
        end_time: RFC 3339 end time of the point's interval, as returned by the API.
        value: TypedValue mapping (e.g. {"doubleValue": 0.5} or {"int64Value": "3"}).
    """

    end_time: str
    value: dict[str, Any]

    @classmethod
    def from_api(cls, data: dict) -> "BackendPoint":
        """
        Create BackendPoint from Cloud Monitoring API Point format.

        Args:
            data: Dictionary with 'interval' and 'value' keys.

        Returns:
            BackendPoint instance.
        """
        interval = data.get("interval") or {}
        return cls(
            end_time=interval.get("endTime", ""),
            value=data.get("value") or {}
        )


@dataclass
class BackendSeries:
    """
    A raw time series from the backend, before reassembly.

    Metric-scoped and resource-scoped labels are kept as two separate
    mappings and only merged when output labels are built.

    Attributes:
        metric_type: Backend metric type (e.g. "compute.googleapis.com/instance/cpu/usage_time").
        metric_labels: Labels scoped to the metric.
        resource_labels: Labels scoped to the monitored resource.
        value_type: Declared value type ("BOOL", "INT64", "DOUBLE", "DISTRIBUTION", ...).
        points: Points in backend return order.
    """

    metric_type: str
    value_type: str
    metric_labels: dict[str, str] = field(default_factory=dict)
    resource_labels: dict[str, str] = field(default_factory=dict)
    points: list[BackendPoint] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict) -> "BackendSeries":
        """
        Create BackendSeries from Cloud Monitoring API TimeSeries format.

        Format: {"metric": {"type", "labels"}, "resource": {"type", "labels"},
        "valueType": ..., "points": [...]}

        Args:
            data: TimeSeries dictionary from a timeSeries.list response.

        Returns:
            BackendSeries instance.
        """
        metric = data.get("metric") or {}
        resource = data.get("resource") or {}
        return cls(
            metric_type=metric.get("type", ""),
            value_type=data.get("valueType", "VALUE_TYPE_UNSPECIFIED"),
            metric_labels=dict(metric.get("labels") or {}),
            resource_labels=dict(resource.get("labels") or {}),
            points=[BackendPoint.from_api(p) for p in data.get("points") or []]
        )
