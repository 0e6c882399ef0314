"""
Unit tests for metricgen.core.document.

Tests cover:
- Anchor, alias and merge-key expansion
- Dates kept as strings
- NormalizationError for malformed YAML, undefined aliases, unreadable
  files and values with no JSON form
"""

import pytest

from metricgen.core.document import load_document, parse_document
from metricgen.core.errors import NormalizationError


class TestParseDocument:
    """Tests for parse_document."""

    def test_plain_mapping(self):
        assert parse_document("a: 1\nb: [x, y]\n") == {"a": 1, "b": ["x", "y"]}

    def test_merge_keys_are_expanded(self):
        text = """
base: &base
  bugs: [one]
  expires: never
metric:
  <<: *base
  expires: "2030"
"""
        data = parse_document(text)
        assert data["metric"] == {"bugs": ["one"], "expires": "2030"}
        assert "<<" not in data["metric"]

    def test_aliases_become_independent_copies(self):
        data = parse_document("a: &x [1, 2]\nb: *x\n")
        assert data["a"] == data["b"]
        assert data["a"] is not data["b"]

    def test_dates_stay_strings(self):
        data = parse_document("expires: 2030-01-01\nwhen: 2001-12-14t21:59:43.10-05:00\n")
        assert data["expires"] == "2030-01-01"
        assert isinstance(data["when"], str)

    def test_keeps_key_order(self):
        data = parse_document("zeta: 1\nalpha: 2\nmid: 3\n")
        assert list(data) == ["zeta", "alpha", "mid"]

    def test_malformed_yaml(self):
        with pytest.raises(NormalizationError) as exc_info:
            parse_document("a: [unclosed\n", source="broken.yaml")
        assert exc_info.value.source == "broken.yaml"
        assert "broken.yaml" in exc_info.value.message

    def test_undefined_alias(self):
        with pytest.raises(NormalizationError):
            parse_document("a: *missing\n")

    def test_unsafe_tags_rejected(self):
        with pytest.raises(NormalizationError):
            parse_document("a: !!python/object/apply:os.getcwd []\n")

    def test_non_json_value(self):
        with pytest.raises(NormalizationError, match="no JSON form"):
            parse_document("a: !!binary aGVsbG8=\n")

    def test_nan_rejected(self):
        with pytest.raises(NormalizationError):
            parse_document("a: .nan\n")

    def test_non_string_keys_become_strings(self):
        assert parse_document("1: one\n") == {"1": "one"}


class TestLoadDocument:
    """Tests for load_document."""

    def test_reads_file(self, tmp_path):
        path = tmp_path / "metrics.yaml"
        path.write_text("core: {}\n", encoding="utf-8")
        assert load_document(path) == {"core": {}}

    def test_missing_file(self, tmp_path):
        path = tmp_path / "missing.yaml"
        with pytest.raises(NormalizationError) as exc_info:
            load_document(path)
        assert exc_info.value.source == str(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "latin1.yaml"
        path.write_bytes(b"a: caf\xe9\n")
        with pytest.raises(NormalizationError):
            load_document(path)

    def test_malformed_fixture(self, fixtures_dir):
        with pytest.raises(NormalizationError):
            load_document(fixtures_dir / "malformed.yaml")
