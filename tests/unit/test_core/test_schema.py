"""
Unit tests for metricgen.core.schema and the bundled schemas.
"""

import pytest

from metricgen.core.document import load_document
from metricgen.core.errors import SchemaValidationError
from metricgen.core.schema import MetricsSchema
from metricgen.schemas import CURRENT_VERSION, available_versions, load_schema
from tests.conftest import SCHEMA_URI, metric_data


def _document(**categories):
    document = {"$schema": SCHEMA_URI}
    document.update(categories)
    return document


class TestBundledSchemas:
    """Tests for metricgen.schemas."""

    def test_current_version_is_bundled(self):
        assert CURRENT_VERSION in available_versions()

    def test_load_schema(self):
        schema = load_schema()
        assert schema["$id"] == SCHEMA_URI

    def test_unknown_version(self):
        with pytest.raises(FileNotFoundError, match="9-9-9"):
            load_schema("9-9-9")


class TestMetricsSchema:
    """Tests for MetricsSchema."""

    def test_load(self, schema):
        assert schema.version == CURRENT_VERSION
        assert schema.identifier == SCHEMA_URI

    def test_load_unknown_version(self):
        with pytest.raises(FileNotFoundError):
            MetricsSchema.load("0-0-1")

    def test_rejects_invalid_schema(self):
        from jsonschema.exceptions import SchemaError

        with pytest.raises(SchemaError):
            MetricsSchema({"type": 12})

    def test_valid_fixture(self, schema, fixtures_dir):
        document = load_document(fixtures_dir / "all_kinds.yaml")
        assert schema.validate(document) == []
        schema.check(document)

    def test_dates_are_valid_expiry(self, schema, fixtures_dir):
        assert schema.validate(load_document(fixtures_dir / "core_counter.yaml")) == []

    def test_empty_document_with_schema(self, schema):
        assert schema.validate(_document()) == []


class TestViolations:
    """Tests for violation reporting."""

    def test_unknown_type_path(self, schema, fixtures_dir):
        document = load_document(fixtures_dir / "invalid_type.yaml")
        violations = schema.validate(document)
        assert violations
        assert "/core/baseline_count/type" in {v.path for v in violations}

    def test_check_raises_with_all_violations(self, schema):
        document = _document(
            core={
                "first": metric_data("counter", lifetime="forever"),
                "second": metric_data("timespan"),
            }
        )
        with pytest.raises(SchemaValidationError) as exc_info:
            schema.check(document)
        paths = {v.path for v in exc_info.value.violations}
        assert "/core/first/lifetime" in paths
        assert "/core/second" in paths
        assert exc_info.value.details["violations"]

    def test_violations_sorted_by_path(self, schema):
        document = _document(
            zeta={"m": metric_data("counter", expires=1)},
            alpha={"m": metric_data("counter", expires=2)},
        )
        paths = [v.path for v in schema.validate(document)]
        assert paths == sorted(paths)

    def test_list_indices_sort_numerically(self, schema):
        bugs = [f"https://example.com/{i}" for i in range(11)]
        bugs[2] = 2
        bugs[10] = 10
        document = _document(core={"m": metric_data("counter", bugs=bugs)})
        paths = [v.path for v in schema.validate(document)]
        assert paths == ["/core/m/bugs/2", "/core/m/bugs/10"]

    def test_missing_schema_key(self, schema):
        violations = schema.validate({"core": {}})
        assert any(v.path == "/" and v.validator == "required" for v in violations)

    def test_wrong_schema_uri(self, schema):
        violations = schema.validate({"$schema": "moz://mozilla.org/schemas/glean/metrics/1-0-0"})
        assert [v.path for v in violations] == ["/$schema"]

    def test_not_a_mapping(self, schema):
        violations = schema.validate(["a"])
        assert violations[0].path == "/"

    @pytest.mark.parametrize("name", ["Upper", "has space", "9starts_with_digit", "a" * 31])
    def test_bad_metric_names(self, schema, name):
        assert schema.validate(_document(core={name: metric_data("counter")}))

    def test_bad_category_name(self, schema):
        assert schema.validate(_document(**{"Core": {}}))

    @pytest.mark.parametrize(
        "data",
        [
            metric_data("counter", time_unit="second"),
            metric_data("event"),
            metric_data("custom_distribution", range_min=1, range_max=2, bucket_count=3),
            metric_data("memory_distribution", memory_unit="terabyte"),
            metric_data("custom_distribution", range_min=-1, range_max=2, bucket_count=3,
                        histogram_type="linear"),
            metric_data("quantity", unit=5),
            metric_data("labeled_counter", labels="a"),
            metric_data("rate", denominator_metric=["a"]),
        ],
    )
    def test_kind_rules(self, schema, data):
        assert schema.validate(_document(core={"m": data}))

    def test_violation_str(self, schema, fixtures_dir):
        violation = schema.validate(load_document(fixtures_dir / "invalid_type.yaml"))[0]
        assert str(violation).startswith(violation.path + ": ")
