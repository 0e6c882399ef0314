"""
Unit tests for metricgen.core.derivation.

Tests cover:
- type_name for every kind
- common_fields keys, order and literal values
- extra_fields per kind
- Fault annotation with the metric and field being rendered
"""

import dataclasses

import pytest

from metricgen.core.derivation import COMMON_FIELD_KEYS, common_fields, extra_fields, type_name
from metricgen.core.errors import SerializationFault
from metricgen.core.literals import LiteralPolicy
from metricgen.core.metrics import METRIC_KINDS, TYPE_NAMES, decode_metric
from tests.conftest import metric_data


class TestTypeName:
    """Tests for type_name."""

    def test_every_kind(self):
        names = {kind.TYPE_NAME for kind in METRIC_KINDS}
        assert names == TYPE_NAMES
        assert len(names) == 18

    def test_matches_document_tag(self):
        for tag in ("counter", "labeled_string", "custom_distribution", "rate"):
            metric = decode_metric(metric_data(tag, **_required_extras(tag)))
            assert type_name(metric) == tag
            assert type_name(metric) == type_name(metric)

    def test_external_rate(self):
        metric = decode_metric(metric_data("rate", denominator_metric="a.b"))
        assert type_name(metric) == "rate"

    def test_ignores_field_contents(self):
        first = decode_metric(metric_data("counter", description="one"))
        second = decode_metric(metric_data("counter", description="two", lifetime="user"))
        assert type_name(first) == type_name(second)


def _required_extras(tag):
    if tag == "custom_distribution":
        return {"range_min": 1, "range_max": 2, "bucket_count": 3, "histogram_type": "linear"}
    return {}


class TestCommonFields:
    """Tests for common_fields."""

    def test_keys_in_order(self):
        metric = decode_metric(metric_data("counter"))
        assert tuple(common_fields(metric, "core", "baseline_count")) == COMMON_FIELD_KEYS

    def test_values_are_literals(self):
        metric = decode_metric(metric_data("counter", description='Counts "baseline" pings'))
        fields = common_fields(metric, "core", "baseline_count")
        assert fields == {
            "category": '"core"',
            "name": '"baseline_count"',
            "lifetime": ".ping",
            "description": '"Counts \\"baseline\\" pings"',
            "send_in_pings": '["metrics"]',
            "disabled": "false",
        }

    def test_lifetime_case(self):
        metric = decode_metric(metric_data("string", lifetime="application"))
        assert common_fields(metric, "c", "m")["lifetime"] == ".application"

    def test_custom_policy(self):
        policy = LiteralPolicy(name="test", quote=lambda text: f"'{text}'", true="yes", false="no")
        metric = decode_metric(metric_data("counter"))
        fields = common_fields(metric, "core", "count", policy)
        assert fields["category"] == "'core'"
        assert fields["disabled"] == "no"
        assert fields["send_in_pings"] == "['metrics']"


class TestExtraFields:
    """Tests for extra_fields."""

    @pytest.mark.parametrize(
        "tag,unit,literal",
        [
            ("timespan", "millisecond", ".millisecond"),
            ("timing_distribution", "second", ".second"),
            ("datetime", "day", ".day"),
        ],
    )
    def test_time_unit(self, tag, unit, literal):
        metric = decode_metric(metric_data(tag, time_unit=unit))
        assert extra_fields(metric) == {"time_unit": literal}

    def test_memory_unit(self):
        metric = decode_metric(metric_data("memory_distribution", memory_unit="kilobyte"))
        assert extra_fields(metric) == {"memory_unit": ".kilobyte"}

    def test_custom_distribution(self):
        metric = decode_metric(
            metric_data(
                "custom_distribution",
                range_min=1,
                range_max=100,
                bucket_count=10,
                histogram_type="linear",
            )
        )
        fields = extra_fields(metric)
        assert fields == {
            "range_min": "1",
            "range_max": "100",
            "bucket_count": "10",
            "histogram_type": ".linear",
        }
        assert list(fields) == ["range_min", "range_max", "bucket_count", "histogram_type"]

    @pytest.mark.parametrize(
        "data",
        [
            metric_data("boolean"),
            metric_data("counter"),
            metric_data("labeled_counter", labels=["a"]),
            metric_data("string_list"),
            metric_data("uuid"),
            metric_data("event", extra_keys={"k": {"type": "string"}}),
            metric_data("rate"),
            metric_data("rate", denominator_metric="a.b"),
            metric_data("quantity", unit="px"),
        ],
    )
    def test_empty_for_other_kinds(self, data):
        assert extra_fields(decode_metric(data)) == {}


class TestFaultContext:
    """Serialization faults name the metric and field being rendered."""

    def test_common_field_fault(self):
        metric = decode_metric(metric_data("counter"))
        broken = dataclasses.replace(
            metric, common=dataclasses.replace(metric.common, description=None)
        )
        with pytest.raises(SerializationFault) as exc_info:
            common_fields(broken, "core", "baseline_count")
        fault = exc_info.value
        assert fault.metric == "core.baseline_count"
        assert fault.field == "description"
        assert "core.baseline_count" in fault.message

    def test_extra_field_fault(self):
        metric = decode_metric(
            metric_data(
                "custom_distribution",
                range_min=1,
                range_max=100,
                bucket_count=10,
                histogram_type="linear",
            )
        )
        broken = dataclasses.replace(metric, range_max={"not": "a number"})
        with pytest.raises(SerializationFault) as exc_info:
            extra_fields(broken, qualified_name="timing.tab_count")
        assert exc_info.value.metric == "timing.tab_count"
        assert exc_info.value.field == "range_max"

    def test_extra_field_fault_defaults_to_type_name(self):
        metric = decode_metric(metric_data("timespan", time_unit="second"))
        broken = dataclasses.replace(metric, time_unit=float("nan"))
        with pytest.raises(SerializationFault) as exc_info:
            extra_fields(broken)
        assert exc_info.value.metric == "timespan"
