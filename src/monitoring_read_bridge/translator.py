"""
Translate remote read queries into Cloud Monitoring requests and back.

The flow for one query is: compile matchers into a filter, page through
timeSeries.list until the continuation token runs out, then reassemble each
backend series into a Prometheus-shaped TimeSeries. Any failure along the way
fails the whole query; no partial results are returned.
"""

import logging
import threading
from itertools import chain
from typing import Optional

from .client import MonitoringClient, project_resource
from .config import BridgeConfig, configure_logging
from .exceptions import (
    BackendError,
    QueryCancelledError,
    TimestampParseError,
    UnsupportedMatcherError,
    UnsupportedValueTypeError,
    ValueParseError,
)
from .filters import METRIC_NAME_LABEL, FilterExpression, compile_query
from .models import (
    BackendSeries,
    FailureReason,
    Label,
    Query,
    Sample,
    TimeSeries,
    TranslationResult,
)
from .utils import ns_to_ms_truncated, parse_rfc3339_ns, sanitize_metric_name

logger = logging.getLogger(__name__)


def _bool_value(value: dict) -> float:
    return 1.0 if value.get("boolValue") else 0.0


def _int64_value(value: dict) -> float:
    # int64 values arrive as JSON strings
    return float(int(value.get("int64Value", 0)))


def _double_value(value: dict) -> float:
    return float(value.get("doubleValue", 0.0))


VALUE_COERCIONS = {
    "BOOL": _bool_value,
    "INT64": _int64_value,
    "DOUBLE": _double_value,
}


def fetch_series(
    client: MonitoringClient,
    project_id: str,
    expression: FilterExpression,
    cancel: Optional[threading.Event] = None,
) -> list[BackendSeries]:
    """
    Run a compiled filter against the backend and drain every result page.

    Args:
        client: Backend client exposing list_time_series.
        project_id: Cloud project identifier.
        expression: Compiled filter and interval.
        cancel: Optional event; when set, paging stops before the next request.

    Returns:
        All series from all pages, in backend return order.

    Raises:
        BackendError: If any page request fails.
        QueryCancelledError: If cancel is set before a page request.
    """
    name = project_resource(project_id)
    series: list[BackendSeries] = []
    page_token = None
    pages = 0

    while True:
        if cancel is not None and cancel.is_set():
            raise QueryCancelledError(f"Query cancelled after {pages} page(s)")

        page = client.list_time_series(
            name=name,
            filter=expression.filter,
            start_time=expression.start_time,
            end_time=expression.end_time,
            page_token=page_token,
        )
        if page is None:
            break
        pages += 1

        series.extend(BackendSeries.from_api(ts) for ts in page.get("timeSeries") or [])
        page_token = page.get("nextPageToken", "")
        if not page_token:
            break

    logger.debug(f"Fetched {len(series)} backend series in {pages} page(s)")
    return series


def reassemble_series(backend: BackendSeries) -> TimeSeries:
    """
    Convert one backend series into remote read form.

    Labels are "__name__" (the sanitized metric type), then metric labels,
    then resource labels; a name already emitted is not repeated. Points are
    sorted by end time and each becomes a sample at whole-second resolution.

    Args:
        backend: Raw backend series.

    Returns:
        TimeSeries with ordered labels and samples.

    Raises:
        UnsupportedValueTypeError: If the series has points of a non-numeric type.
        TimestampParseError: If a point end time cannot be parsed.
        ValueParseError: If a point value does not match its declared type.
    """
    labels = [Label(name=METRIC_NAME_LABEL, value=sanitize_metric_name(backend.metric_type))]
    seen = {METRIC_NAME_LABEL}
    for name, value in chain(backend.metric_labels.items(), backend.resource_labels.items()):
        if name in seen:
            logger.debug(f"Dropping duplicate label {name!r} on {backend.metric_type}")
            continue
        seen.add(name)
        labels.append(Label(name=name, value=value))

    if not backend.points:
        return TimeSeries(labels=labels, samples=[])

    coerce = VALUE_COERCIONS.get(backend.value_type)
    if coerce is None:
        raise UnsupportedValueTypeError(
            f"Unsupported value type {backend.value_type} for metric {backend.metric_type}"
        )

    timed_points = [(parse_rfc3339_ns(point.end_time), point) for point in backend.points]
    timed_points.sort(key=lambda item: item[0])

    samples = []
    for end_ns, point in timed_points:
        try:
            value = coerce(point.value)
        except (TypeError, ValueError) as e:
            raise ValueParseError(
                f"Invalid {backend.value_type} value {point.value!r} at {point.end_time} "
                f"for metric {backend.metric_type}: {e}"
            ) from e
        samples.append(Sample(value=value, timestamp=ns_to_ms_truncated(end_ns)))
    return TimeSeries(labels=labels, samples=samples)


class QueryTranslator:
    """
    Answers remote read queries from Cloud Monitoring.

    Example:
        translator = QueryTranslator(MonitoringClient(access_token=token), "my-project")

        result = translator.run_query(query)
        if result.ok:
            series = result.series
    """

    def __init__(self, client: MonitoringClient, project_id: str):
        """
        Initialize the translator.

        Args:
            client: Backend client exposing list_time_series. Shared across queries.
            project_id: Cloud project whose time series are read.
        """
        self.client = client
        self.project_id = project_id

    @classmethod
    def from_config(cls, config: BridgeConfig) -> "QueryTranslator":
        """
        Create a translator and its backend client from configuration.

        Also applies the configured log level to process logging.

        Args:
            config: Validated bridge configuration.

        Returns:
            QueryTranslator instance.
        """
        configure_logging(config.log_level)
        client = MonitoringClient(
            base_url=config.api_base_url,
            access_token=config.access_token,
            timeout=config.timeout,
            page_size=config.page_size,
        )
        return cls(client=client, project_id=config.project_id)

    def run_query(
        self,
        query: Query,
        cancel: Optional[threading.Event] = None,
    ) -> TranslationResult:
        """
        Translate one query and return its series or a failure reason.

        Errors never propagate: each kind is logged and reported as a failed
        result carrying no series.

        Args:
            query: Remote read query.
            cancel: Optional event checked before every backend page request.

        Returns:
            TranslationResult with all series, or a failure and no series.
        """
        try:
            expression = compile_query(query)
            logger.debug(
                f"Filter {expression.filter!r} over [{expression.start_time}, {expression.end_time}]"
            )
            backend_series = fetch_series(self.client, self.project_id, expression, cancel)
            series = [reassemble_series(s) for s in backend_series]
        except UnsupportedMatcherError as e:
            logger.error(f"Unsupported matcher: {e}")
            return TranslationResult.failed(FailureReason.UNSUPPORTED_MATCHER, str(e))
        except BackendError as e:
            logger.error(f"Backend request failed: {e}")
            return TranslationResult.failed(FailureReason.BACKEND_ERROR, str(e))
        except TimestampParseError as e:
            logger.error(f"Failed to parse point timestamp: {e}")
            return TranslationResult.failed(FailureReason.TIMESTAMP_PARSE, str(e))
        except UnsupportedValueTypeError as e:
            logger.error(f"Unsupported type: {e}")
            return TranslationResult.failed(FailureReason.UNSUPPORTED_VALUE_TYPE, str(e))
        except ValueParseError as e:
            logger.error(f"Invalid point value: {e}")
            return TranslationResult.failed(FailureReason.VALUE_PARSE, str(e))
        except QueryCancelledError as e:
            logger.warning(str(e))
            return TranslationResult.failed(FailureReason.CANCELLED, str(e))

        logger.info(f"Returned {len(series)} time series.")
        return TranslationResult(series=series)

    def translate(
        self,
        query: Query,
        cancel: Optional[threading.Event] = None,
    ) -> list[TimeSeries]:
        """
        Translate one query, returning an empty list on any failure.

        Args:
            query: Remote read query.
            cancel: Optional cancellation event.

        Returns:
            List of TimeSeries, never None.
        """
        return self.run_query(query, cancel).series

    def read(
        self,
        queries: list[Query],
        cancel: Optional[threading.Event] = None,
    ) -> list[TimeSeries]:
        """
        Serve a read request, which must carry exactly one query.

        Args:
            queries: Queries decoded from the read request.
            cancel: Optional cancellation event.

        Returns:
            List of TimeSeries for the single query.

        Raises:
            ValueError: If the request does not contain exactly one query.
        """
        if len(queries) != 1:
            raise ValueError("Can only handle one query.")
        return self.translate(queries[0], cancel)

    def close(self) -> None:
        """Close the backend client."""
        self.client.close()

    def __enter__(self) -> "QueryTranslator":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - closes the backend client."""
        self.close()
