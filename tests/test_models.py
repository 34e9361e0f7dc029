"""Tests for data models."""

import pytest

from monitoring_read_bridge.models import (
    BackendPoint,
    BackendSeries,
    FailureReason,
    Label,
    LabelMatcher,
    MatchType,
    Query,
    Sample,
    TimeSeries,
    TranslationResult,
)


class TestMatchType:
    """Test MatchType parsing and properties."""

    def test_parse_member(self) -> None:
        assert MatchType.parse(MatchType.NOT_EQUAL) is MatchType.NOT_EQUAL

    def test_parse_name(self) -> None:
        assert MatchType.parse("regex_match") is MatchType.REGEX_MATCH

    def test_parse_short_alias(self) -> None:
        assert MatchType.parse("NRE") is MatchType.REGEX_NO_MATCH

    def test_parse_operator(self) -> None:
        assert MatchType.parse("=~") is MatchType.REGEX_MATCH
        assert MatchType.parse("!=") is MatchType.NOT_EQUAL

    def test_parse_wire_value(self) -> None:
        assert MatchType.parse(0) is MatchType.EQUAL
        assert MatchType.parse(3) is MatchType.REGEX_NO_MATCH

    def test_parse_invalid_name(self) -> None:
        with pytest.raises(ValueError):
            MatchType.parse("LIKE")

    def test_parse_invalid_wire_value(self) -> None:
        with pytest.raises(ValueError):
            MatchType.parse(7)

    def test_is_regex(self) -> None:
        assert MatchType.REGEX_MATCH.is_regex is True
        assert MatchType.REGEX_NO_MATCH.is_regex is True
        assert MatchType.EQUAL.is_regex is False
        assert MatchType.NOT_EQUAL.is_regex is False


class TestLabelMatcher:
    """Test LabelMatcher model."""

    def test_default_type(self) -> None:
        matcher = LabelMatcher(name="job", value="api")
        assert matcher.type is MatchType.EQUAL

    def test_str(self) -> None:
        matcher = LabelMatcher("job", "api.*", MatchType.REGEX_MATCH)
        assert str(matcher) == 'job=~"api.*"'

    def test_to_dict(self) -> None:
        matcher = LabelMatcher("job", "api", MatchType.NOT_EQUAL)
        assert matcher.to_dict() == {"name": "job", "value": "api", "type": "NOT_EQUAL"}

    def test_from_dict_operator(self) -> None:
        matcher = LabelMatcher.from_dict({"name": "job", "value": "a|b", "type": "=~"})
        assert matcher == LabelMatcher("job", "a|b", MatchType.REGEX_MATCH)

    def test_from_dict_defaults(self) -> None:
        matcher = LabelMatcher.from_dict({"name": "job"})
        assert matcher.value == ""
        assert matcher.type is MatchType.EQUAL

    def test_immutable(self) -> None:
        matcher = LabelMatcher("job", "api")
        with pytest.raises(AttributeError):
            matcher.value = "web"  # type: ignore[misc]


class TestQuery:
    """Test Query model."""

    def test_create_query(self) -> None:
        query = Query(
            matchers=[LabelMatcher("__name__", "up")],
            start_timestamp_ms=1000,
            end_timestamp_ms=2000,
        )
        assert len(query.matchers) == 1
        assert query.start_timestamp_ms == 1000

    def test_equal_bounds_allowed(self) -> None:
        query = Query(matchers=[], start_timestamp_ms=1000, end_timestamp_ms=1000)
        assert query.start_timestamp_ms == query.end_timestamp_ms

    def test_inverted_range_rejected(self) -> None:
        with pytest.raises(ValueError, match="after end"):
            Query(matchers=[], start_timestamp_ms=2000, end_timestamp_ms=1000)

    def test_from_dict_camel_case(self) -> None:
        data = {
            "startTimestampMs": "1704067200000",
            "endTimestampMs": "1704070800000",
            "matchers": [
                {"name": "__name__", "value": "up", "type": 0},
                {"name": "job", "value": "api.*", "type": 2},
            ],
        }
        query = Query.from_dict(data)
        assert query.start_timestamp_ms == 1704067200000
        assert query.end_timestamp_ms == 1704070800000
        assert query.matchers[1].type is MatchType.REGEX_MATCH

    def test_to_dict(self) -> None:
        query = Query(
            matchers=[LabelMatcher("job", "api")],
            start_timestamp_ms=1000,
            end_timestamp_ms=2000,
        )
        assert query.to_dict() == {
            "matchers": [{"name": "job", "value": "api", "type": "EQUAL"}],
            "start_timestamp_ms": 1000,
            "end_timestamp_ms": 2000,
        }


class TestBackendSeries:
    """Test BackendSeries model."""

    def test_from_api(self) -> None:
        data = {
            "metric": {
                "type": "kubernetes.io/container/restart_count",
                "labels": {"state": "running"},
            },
            "resource": {
                "type": "k8s_container",
                "labels": {"namespace_name": "default", "pod_name": "web-0"},
            },
            "metricKind": "CUMULATIVE",
            "valueType": "INT64",
            "points": [
                {
                    "interval": {
                        "startTime": "2024-01-01T00:00:00Z",
                        "endTime": "2024-01-01T00:01:00Z",
                    },
                    "value": {"int64Value": "3"},
                }
            ],
        }

        series = BackendSeries.from_api(data)

        assert series.metric_type == "kubernetes.io/container/restart_count"
        assert series.value_type == "INT64"
        assert series.metric_labels == {"state": "running"}
        assert series.resource_labels == {"namespace_name": "default", "pod_name": "web-0"}
        assert series.points == [
            BackendPoint(end_time="2024-01-01T00:01:00Z", value={"int64Value": "3"})
        ]

    def test_from_api_missing_fields(self) -> None:
        series = BackendSeries.from_api({"metric": {"type": "up"}})
        assert series.metric_labels == {}
        assert series.resource_labels == {}
        assert series.points == []
        assert series.value_type == "VALUE_TYPE_UNSPECIFIED"

    def test_point_without_interval(self) -> None:
        point = BackendPoint.from_api({"value": {"doubleValue": 1.5}})
        assert point.end_time == ""
        assert point.value == {"doubleValue": 1.5}


class TestSample:
    """Test Sample model."""

    def test_to_dict(self) -> None:
        assert Sample(value=1.5, timestamp=1000).to_dict() == {"value": 1.5, "timestamp": 1000}

    def test_from_dict_coerces(self) -> None:
        sample = Sample.from_dict({"value": "2", "timestamp": "3000"})
        assert sample.value == 2.0
        assert sample.timestamp == 3000


class TestTimeSeries:
    """Test TimeSeries model."""

    def _series(self) -> TimeSeries:
        return TimeSeries(
            labels=[Label("__name__", "up"), Label("job", "api")],
            samples=[Sample(value=1.0, timestamp=1000)],
        )

    def test_labels_dict(self) -> None:
        assert self._series().labels_dict == {"__name__": "up", "job": "api"}

    def test_name(self) -> None:
        assert self._series().name == "up"

    def test_name_missing(self) -> None:
        assert TimeSeries().name == ""

    def test_to_dict_keeps_label_order(self) -> None:
        result = self._series().to_dict()
        assert [label["name"] for label in result["labels"]] == ["__name__", "job"]
        assert result["samples"] == [{"value": 1.0, "timestamp": 1000}]

    def test_from_dict(self) -> None:
        original = self._series()
        restored = TimeSeries.from_dict(original.to_dict())
        assert restored == original


class TestTranslationResult:
    """Test TranslationResult model."""

    def test_default_is_ok(self) -> None:
        result = TranslationResult()
        assert result.ok is True
        assert result.series == []

    def test_failed(self) -> None:
        result = TranslationResult.failed(FailureReason.BACKEND_ERROR, "quota exceeded")
        assert result.ok is False
        assert result.series == []
        assert result.failure is FailureReason.BACKEND_ERROR
        assert result.message == "quota exceeded"

    def test_total_samples(self) -> None:
        result = TranslationResult(series=[
            TimeSeries(samples=[Sample(1.0, 1000), Sample(2.0, 2000)]),
            TimeSeries(samples=[Sample(3.0, 1000)]),
        ])
        assert result.total_samples == 3

    def test_to_dict(self) -> None:
        result = TranslationResult.failed(FailureReason.UNSUPPORTED_VALUE_TYPE, "DISTRIBUTION")
        assert result.to_dict() == {
            "series": [],
            "failure": "unsupported_value_type",
            "message": "DISTRIBUTION",
        }
