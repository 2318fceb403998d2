"""Tests for result aggregation."""

import logging

import pytest
from modctl.core.aggregate import EvaluatorMismatchError, aggregate_changes, format_module_list
from modctl.models.module import FilterRule


@pytest.fixture
def rules() -> list[FilterRule]:
    """Rules for modules {a, a/v2, b}."""
    return [
        FilterRule(id="a", include=("a/**",), excludes=("a/v2/**",)),
        FilterRule(id="a/v2", include=("a/v2/**",)),
        FilterRule(id="b", include=("b/**",)),
    ]


class TestAggregateChanges:
    """Tests for aggregate_changes."""

    def test_returns_true_ids_in_rule_order(self, rules: list[FilterRule]) -> None:
        """Changed ids follow the rule order, not the result order."""
        results = {"b": True, "a/v2": False, "a": True}

        assert aggregate_changes(rules, results) == ["a", "b"]

    def test_nothing_changed(self, rules: list[FilterRule]) -> None:
        """All-false results give an empty list."""
        assert aggregate_changes(rules, {"a": False, "a/v2": False, "b": False}) == []

    def test_no_rules(self) -> None:
        """No rules and no results give an empty list."""
        assert aggregate_changes([], {}) == []

    def test_missing_result_treated_as_unchanged(
        self, rules: list[FilterRule], caplog: pytest.LogCaptureFixture
    ) -> None:
        """A missing id fails closed and logs a warning."""
        with caplog.at_level(logging.WARNING, logger="modctl"):
            changed = aggregate_changes(rules, {"a": True, "b": True})

        assert changed == ["a", "b"]
        assert "a/v2" in caplog.text

    def test_missing_result_strict(self, rules: list[FilterRule]) -> None:
        """With on_missing='error' a missing id aborts."""
        with pytest.raises(EvaluatorMismatchError, match="no result"):
            aggregate_changes(rules, {"a": True, "b": True}, on_missing="error")

    def test_unknown_id_raises(self, rules: list[FilterRule]) -> None:
        """Results for ids that were never emitted abort the run."""
        results = {"a": True, "a/v2": False, "b": False, "c": True}

        with pytest.raises(EvaluatorMismatchError, match="unknown modules"):
            aggregate_changes(rules, results)


class TestFormatModuleList:
    """Tests for format_module_list."""

    def test_compact_json_array(self) -> None:
        """Output is a compact JSON array of strings."""
        assert format_module_list(["a", "b"]) == '["a","b"]'

    def test_empty_list(self) -> None:
        """An empty result is '[]'."""
        assert format_module_list([]) == "[]"
