"""
Serve Prometheus remote read queries from Google Cloud Monitoring
"""

from .client import MonitoringClient
from .config import BridgeConfig, load_config
from .exceptions import (
    BackendAuthError,
    BackendConnectionError,
    BackendError,
    BackendQueryError,
    BridgeError,
    QueryCancelledError,
    TimestampParseError,
    TranslationError,
    UnsupportedMatcherError,
    UnsupportedValueTypeError,
    ValueParseError,
)
from .filters import compile_matcher, compile_query
from .models import (
    FailureReason,
    Label,
    LabelMatcher,
    MatchType,
    Query,
    Sample,
    TimeSeries,
    TranslationResult,
)
from .translator import QueryTranslator
from .utils import sanitize_metric_name

__version__ = "0.1.0"

__all__ = [
    "MonitoringClient",
    "QueryTranslator",
    "BridgeConfig",
    "load_config",
    "compile_matcher",
    "compile_query",
    "sanitize_metric_name",
    "FailureReason",
    "Label",
    "LabelMatcher",
    "MatchType",
    "Query",
    "Sample",
    "TimeSeries",
    "TranslationResult",
    "BridgeError",
    "BackendError",
    "BackendConnectionError",
    "BackendQueryError",
    "BackendAuthError",
    "TranslationError",
    "UnsupportedMatcherError",
    "UnsupportedValueTypeError",
    "TimestampParseError",
    "QueryCancelledError",
    "ValueParseError",
]
