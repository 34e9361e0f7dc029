"""
Compile Prometheus label matchers into a Cloud Monitoring filter expression.

Compilation happens in two stages: each matcher becomes one filter clause,
then the clauses are joined with AND and paired with the query interval.
"""

from dataclasses import dataclass

from .exceptions import UnsupportedMatcherError
from .models import LabelMatcher, MatchType, Query
from .utils import ms_to_rfc3339

METRIC_NAME_LABEL = "__name__"
METRIC_TYPE_FIELD = "metric.type"

# Prometheus-safe label prefixes and the backend field paths they stand for.
LABEL_PREFIXES = {
    "metric_labels_": "metric.labels.",
    "resource_labels_": "resource.labels.",
}

_COMPARISON_OPERATORS = {
    MatchType.EQUAL: "=",
    MatchType.REGEX_MATCH: "=",
    MatchType.NOT_EQUAL: "!=",
    MatchType.REGEX_NO_MATCH: "!=",
}

_WILDCARD = ".*"


@dataclass(frozen=True)
class FilterExpression:
    """
    A compiled backend filter bound to a time interval.

    Attributes:
        filter: Clauses joined with " AND ".
        start_time: RFC 3339 interval start.
        end_time: RFC 3339 interval end.
    """

    filter: str
    start_time: str
    end_time: str


def _quote(value: str) -> str:
    return f'"{value}"'


def map_label_name(name: str) -> str:
    """
    Map a Prometheus label name to its backend field path.

    Args:
        name: Label name from a matcher.

    Returns:
        "metric.type" for "__name__", a dotted path for namespaced labels
        (e.g. "metric_labels_foo" -> "metric.labels.foo"), otherwise the name unchanged.
    """
    if name == METRIC_NAME_LABEL:
        return METRIC_TYPE_FIELD
    for prefix, path in LABEL_PREFIXES.items():
        if name.startswith(prefix):
            return path + name[len(prefix):]
    return name


def regex_to_predicate(pattern: str) -> str:
    """
    Rewrite a regex pattern into a backend string predicate call.

    Only four shapes are recognized, checked in this order:
    alternation ("a|b" -> one_of), trailing wildcard ("a.*" -> starts_with),
    leading wildcard (".*a" -> ends_with), anything else -> has_substring
    with the pattern taken literally.

    Args:
        pattern: Regex text from a matcher.

    Returns:
        Predicate call string, e.g. 'starts_with("kube")'.
    """
    if "|" in pattern:
        return "one_of(" + ", ".join(_quote(v) for v in pattern.split("|")) + ")"
    if pattern.endswith(_WILDCARD):
        return f"starts_with({_quote(pattern[:-len(_WILDCARD)])})"
    if pattern.startswith(_WILDCARD):
        return f"ends_with({_quote(pattern[len(_WILDCARD):])})"
    return f"has_substring({_quote(pattern)})"


def compile_matcher(matcher: LabelMatcher) -> str:
    """
    Compile one label matcher into a backend filter clause.

    Args:
        matcher: Label matcher to compile.

    Returns:
        Filter clause such as 'metric.type="cpu/usage"' or
        'resource.labels.zone!=starts_with("us-")'.

    Raises:
        UnsupportedMatcherError: If the match type has no backend operator.
    """
    operator = _COMPARISON_OPERATORS.get(matcher.type)
    if operator is None:
        raise UnsupportedMatcherError(
            f"Unsupported matcher type {matcher.type!r} for label {matcher.name!r}"
        )

    if matcher.type.is_regex:
        value = regex_to_predicate(matcher.value)
    else:
        value = _quote(matcher.value)

    return f"{map_label_name(matcher.name)}{operator}{value}"


def build_filter(clauses: list[str]) -> str:
    """Join filter clauses with AND, preserving order."""
    return " AND ".join(clauses)


def build_interval(start_timestamp_ms: int, end_timestamp_ms: int) -> tuple[str, str]:
    """
    Build the RFC 3339 interval bounds for a millisecond time range.

    Sub-second precision is dropped, not rounded.

    Args:
        start_timestamp_ms: Range start in Unix milliseconds.
        end_timestamp_ms: Range end in Unix milliseconds.

    Returns:
        Tuple of (start_time, end_time) strings.
    """
    return ms_to_rfc3339(start_timestamp_ms), ms_to_rfc3339(end_timestamp_ms)


def compile_query(query: Query) -> FilterExpression:
    """
    Compile a query's matchers and time range into a FilterExpression.

    Args:
        query: Remote read query.

    Returns:
        FilterExpression ready for a timeSeries.list request.

    Raises:
        UnsupportedMatcherError: If any matcher cannot be compiled.
    """
    clauses = [compile_matcher(m) for m in query.matchers]
    start_time, end_time = build_interval(query.start_timestamp_ms, query.end_timestamp_ms)
    return FilterExpression(filter=build_filter(clauses), start_time=start_time, end_time=end_time)
