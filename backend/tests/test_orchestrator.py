"""
Test Project Analyzer

End-to-end tests for the full project analysis.
"""

import json

import pytest
from pydantic import ValidationError

from analysis.orchestrator import ProjectAnalyzer, analyze, normalize_rows
from config import AnalyzerSettings
from schemas.analysis import DataType


MANUFACTURERS = ["הראל", "מגדל", "כלל", "הפניקס"]
STATUSES = ["פעיל", "ממתין", "נדחה", "הושלם"]


@pytest.fixture
def analyzer():
    return ProjectAnalyzer(AnalyzerSettings())


@pytest.fixture
def policy_rows():
    """100 policy rows: manufacturer, amount, status and opening date."""
    return [
        {
            "יצרן": MANUFACTURERS[i % 4],
            "סכום": 100 + (i % 17) * 25,
            "סטטוס": STATUSES[i % 4],
            "תאריך_פתיחה": f"2024-{(i % 12) + 1:02d}-{(i % 28) + 1:02d}",
        }
        for i in range(100)
    ]


class TestEmptyInput:
    def test_empty_rows(self, analyzer):
        result = analyzer.analyze("p1", "policies", [])

        assert result.total_rows == 0
        assert result.total_columns == 0
        assert result.column_matches == []
        assert result.category_analyses == []
        assert result.detected_categories == []
        assert result.suggested_template.id == "general"
        assert result.suggested_filters == []
        assert result.suggested_cards == []
        assert result.suggested_charts == []


class TestEndToEnd:
    def test_policy_table(self, analyzer, policy_rows):
        result = analyzer.analyze("p1", "policies", policy_rows)

        assert result.project_id == "p1"
        assert result.table_name == "policies"
        assert result.total_rows == 100
        assert result.total_columns == 4
        assert set(result.detected_category_ids) == {
            "manufacturers", "financial", "processes", "dates",
        }
        assert result.suggested_template.id == "commission_report"
        assert len(result.suggested_cards) == 4
        assert [c.column_name for c in result.suggested_charts] == ["יצרן", "סטטוס"]

    def test_column_types(self, analyzer, policy_rows):
        result = analyzer.analyze("p1", "policies", policy_rows)
        types = {c.column_name: c.data_type for c in result.column_matches}

        assert types == {
            "יצרן": DataType.TEXT,
            "סכום": DataType.NUMBER,
            "סטטוס": DataType.TEXT,
            "תאריך_פתיחה": DataType.DATE,
        }

    def test_financial_totals(self, analyzer, policy_rows):
        result = analyzer.analyze("p1", "policies", policy_rows)
        financial = next(a for a in result.category_analyses if a.category.id == "financial")

        expected = sum(row["סכום"] for row in policy_rows)
        assert financial.metrics[0].value == expected
        assert financial.metrics[0].formatted.startswith("₪")

    def test_categories_sorted_by_column_count(self, analyzer):
        rows = [
            {"יצרן": MANUFACTURERS[i % 4], "סטטוס": STATUSES[i % 4], "סוג_פעולה": f"t{i % 3}"}
            for i in range(12)
        ]

        result = analyzer.analyze("p1", "t", rows)

        assert [a.category.id for a in result.category_analyses] == ["processes", "manufacturers"]
        assert [c.column_name for c in result.category_analyses[0].columns] == ["סטטוס", "סוג_פעולה"]

    def test_deterministic(self, analyzer, policy_rows):
        first = analyzer.analyze("p1", "policies", policy_rows)
        second = analyzer.analyze("p1", "policies", policy_rows)

        assert first == second


class TestIrregularInput:
    def test_inconsistent_keys(self, analyzer):
        rows = [
            {"סטטוס": "פעיל", "יצרן": "הראל"},
            {"סטטוס": "נדחה"},
            {"other": 1, "סטטוס": "ממתין"},
        ]

        result = analyzer.analyze("p1", "t", rows)

        assert result.total_columns == 2
        manufacturer = next(c for c in result.column_matches if c.column_name == "יצרן")
        assert manufacturer.null_count == 2

    def test_non_string_column_names(self, analyzer):
        result = analyzer.analyze("p1", "t", [{1: "a", "סטטוס": "פעיל"}])

        assert [c.column_name for c in result.column_matches] == ["1", "סטטוס"]

    def test_all_null_column(self, analyzer):
        rows = [{"סכום": None} for _ in range(3)]

        result = analyzer.analyze("p1", "t", rows)

        column = result.column_matches[0]
        assert column.data_type == DataType.TEXT
        assert column.unique_count == 0
        assert result.category_analyses[0].metrics[0].value == 0

    def test_normalize_rows(self):
        assert normalize_rows([{1: "a"}, {"b": 2}]) == [{"1": "a"}, {"b": 2}]


class TestResultModels:
    def test_serializes_to_json(self, policy_rows):
        result = analyze("p1", "policies", policy_rows)

        payload = json.loads(json.dumps(result.model_dump(mode="json"), ensure_ascii=False))

        assert payload["total_rows"] == 100
        assert payload["suggested_template"]["id"] == "commission_report"
        assert payload["suggested_filters"][0]["filter_type"] in {
            "dropdown", "search", "range", "dateRange",
        }

    def test_results_are_immutable(self, policy_rows):
        result = analyze("p1", "policies", policy_rows)

        with pytest.raises(ValidationError):
            result.total_rows = 5
