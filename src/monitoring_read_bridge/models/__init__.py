"""
Data models for monitoring-read-bridge.
"""

from .backend_series import BackendPoint, BackendSeries
from .label_matcher import LabelMatcher, MatchType
from .query import Query
from .sample import Sample
from .time_series import Label, TimeSeries
from .translation_result import FailureReason, TranslationResult

__all__ = [
    "BackendPoint",
    "BackendSeries",
    "FailureReason",
    "Label",
    "LabelMatcher",
    "MatchType",
    "Query",
    "Sample",
    "TimeSeries",
    "TranslationResult",
]
