"""
Test Suggestions

Unit tests for filter, card and chart suggestions.
"""

import pytest

from analysis.category_aggregator import analyze_category
from analysis.column_classifier import classify_column
from analysis.suggestions import SuggestionGenerator
from catalog.categories import get_category
from config import AnalyzerSettings
from schemas.analysis import AggregationKind, FilterType


STATUSES = ["פעיל", "ממתין", "בוטל"]
MANUFACTURERS = ["הראל", "מגדל", "כלל", "הפניקס"]


@pytest.fixture
def generator():
    return SuggestionGenerator(AnalyzerSettings())


@pytest.fixture
def rows():
    """30 rows with a key, two enum columns, amounts, dates and free notes."""
    return [
        {
            "id": i,
            "סטטוס": STATUSES[i % 3],
            "יצרן": MANUFACTURERS[i % 4],
            "סכום": [100, 200, 300][i % 3],
            "תאריך": ["2024-01-01", "2024-02-01", "2024-03-01"][i % 3],
            "הערות": f"note {i}",
        }
        for i in range(30)
    ]


def classify_rows(rows):
    return [classify_column(name, [row.get(name) for row in rows]) for name in rows[0]]


def analyses_for(rows, columns):
    grouped = {}
    for col in columns:
        if col.primary_category:
            grouped.setdefault(col.primary_category.id, []).append(col)
    return [analyze_category(get_category(cid), cols, rows) for cid, cols in grouped.items()]


class TestFilters:
    def test_filter_types_and_order(self, generator, rows):
        filters = generator.suggest_filters(classify_rows(rows), rows)

        assert [f.column_name for f in filters] == ["סטטוס", "יצרן", "תאריך", "סכום"]
        assert [f.filter_type for f in filters] == [
            FilterType.DROPDOWN, FilterType.DROPDOWN, FilterType.DATE_RANGE, FilterType.RANGE,
        ]
        assert [f.priority for f in filters] == [0, 10, 50, 60]

    def test_dropdown_values_sorted(self, generator, rows):
        filters = generator.suggest_filters(classify_rows(rows), rows)

        assert filters[0].unique_values == ["בוטל", "ממתין", "פעיל"]
        assert filters[2].unique_values is None

    def test_dropdown_lower_case_first(self, generator):
        rows = [{"סטטוס": v} for v in ["b", "A", "B", "a"]]

        filters = generator.suggest_filters(classify_rows(rows), rows)

        assert filters[0].unique_values == ["a", "A", "b", "B"]

    def test_keys_and_uncategorized_excluded(self, generator, rows):
        names = [f.column_name for f in generator.suggest_filters(classify_rows(rows), rows)]

        assert "id" not in names
        assert "הערות" not in names

    def test_search_filter_for_high_cardinality(self, generator):
        rows = [{"לקוח": f"client {i % 25}"} for i in range(30)]

        filters = generator.suggest_filters(classify_rows(rows), rows)

        assert len(filters) == 1
        assert filters[0].filter_type == FilterType.SEARCH
        assert filters[0].priority == 45

    def test_capped_at_five(self, generator):
        names = ["סטטוס", "יצרן", "סוכן", "מוצר", "לקוח", "עיר", "מבטח"]
        rows = [{name: f"v{i % 3}" for name in names} for i in range(12)]

        filters = generator.suggest_filters(classify_rows(rows), rows)

        assert len(filters) == 5
        assert [f.priority for f in filters] == sorted(f.priority for f in filters)


class TestCards:
    @pytest.mark.parametrize("count", [0, 1, 2, 5])
    def test_always_four_cards(self, generator, rows, count):
        analyses = analyses_for(rows, classify_rows(rows))[:count]

        cards = generator.suggest_cards(analyses)

        assert len(cards) == 4

    def test_padding_cards(self, generator):
        cards = generator.suggest_cards([])

        assert all(c.category.id == "identifiers" for c in cards)
        assert all(c.metric_type == AggregationKind.COUNT for c in cards)
        assert cards[0].title == 'סה"כ רשומות'

    def test_category_cards_use_first_metric(self, generator, rows):
        analyses = analyses_for(rows, classify_rows(rows))

        cards = generator.suggest_cards(analyses)

        assert cards[0].category.id == analyses[0].category.id
        assert cards[0].title == analyses[0].category.name
        assert cards[0].value == analyses[0].metrics[0].value
        assert cards[0].formatted == analyses[0].metrics[0].formatted
        assert all(c.metric_type == AggregationKind.DISTINCT for c in cards[:4])


class TestCharts:
    def test_tally_with_status_colors(self, generator):
        values = ["פעיל"] * 5 + ["נדחה"] * 3 + ["ממתין"] * 2
        rows = [{"סטטוס": v} for v in values]
        analyses = analyses_for(rows, classify_rows(rows))

        charts = generator.suggest_charts(analyses, rows)

        assert len(charts) == 1
        chart = charts[0]
        assert chart.chart_type == "funnel"
        assert chart.column_name == "סטטוס"
        assert chart.title == "תהליכים - סטטוס"
        assert [(d.name, d.value, d.color) for d in chart.data] == [
            ("פעיל", 5, "#10b981"),
            ("נדחה", 3, "#ef4444"),
            ("ממתין", 2, "#f59e0b"),
        ]

    def test_empty_values_counted_as_unknown(self, generator):
        rows = [{"יצרן": v} for v in ["הראל", "מגדל", None, ""]]
        analyses = analyses_for(rows, classify_rows(rows))

        data = generator.suggest_charts(analyses, rows)[0].data

        assert ("לא ידוע", 2) in [(d.name, d.value) for d in data]

    def test_non_enum_columns_skipped(self, generator):
        rows = [{"סטטוס": "פעיל", "יצרן": f"m{i}"} for i in range(25)]
        analyses = analyses_for(rows, classify_rows(rows))

        assert generator.suggest_charts(analyses, rows) == []

    def test_top_ten_values(self, generator):
        rows = [{"יצרן": f"m{i % 15}"} for i in range(30)]
        analyses = analyses_for(rows, classify_rows(rows))

        charts = generator.suggest_charts(analyses, rows)

        assert len(charts[0].data) == 10

    def test_capped_at_four(self, generator):
        names = ["סטטוס", "יצרן", "סוכן", "מוצר", "לקוח", "ספק_ראשי"]
        rows = [{name: f"v{i % 3}" for name in names} for i in range(12)]
        analyses = analyses_for(rows, classify_rows(rows))

        charts = generator.suggest_charts(analyses, rows)

        assert len(analyses) == 5
        assert len(charts) == 4
        assert all(1 < len(c.data) <= 20 for c in charts)
