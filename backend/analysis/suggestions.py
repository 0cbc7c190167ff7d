"""
Dashboard Suggestions

Derives ranked filter, card and chart suggestions from column
classifications and category analyses.
"""

from typing import Any, Mapping, Optional, Sequence

import polars as pl

from catalog.categories import get_category
from catalog.value_patterns import get_status_hex_color
from config import AnalyzerSettings, get_settings
from core.values import is_truthy, stringify
from schemas.analysis import (
    CategoryAnalysis,
    ChartDatum,
    ColumnClassification,
    DataType,
    FilterType,
    SuggestedCard,
    SuggestedChart,
    SuggestedFilter,
)
from schemas.catalog import AggregationKind


# Filter preference by category; unlisted categories rank last
FILTER_PRIORITY_ORDER = [
    "processes", "manufacturers", "agents", "products", "clients", "dates", "financial",
]
UNRANKED_PRIORITY = 100
LOW_CARDINALITY = 10

TOTAL_RECORDS_TITLE = 'סה"כ רשומות'
TOTAL_RECORDS_CATEGORY = "identifiers"


def locale_sort_key(text: str) -> tuple[str, str]:
    """Case-insensitive order with lower case first on ties ("a" before "A")."""
    return (text.casefold(), text.swapcase())


class SuggestionGenerator:
    """Builds filter, card and chart suggestions."""

    def __init__(self, settings: Optional[AnalyzerSettings] = None):
        self.settings = settings or get_settings().analyzer

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def suggest_filters(
        self,
        columns: Sequence[ColumnClassification],
        rows: Sequence[Mapping[str, Any]],
    ) -> list[SuggestedFilter]:
        """
        Suggest filters for categorized, non-key columns.

        Date columns get a date range, numbers a numeric range, low
        cardinality columns a dropdown and everything else a search box.
        Ranked ascending by priority and capped.
        """
        filters = []
        for col in columns:
            if col.primary_category is None or col.is_key:
                continue

            unique_values = None
            if col.data_type == DataType.DATE:
                filter_type = FilterType.DATE_RANGE
            elif col.data_type == DataType.NUMBER:
                filter_type = FilterType.RANGE
            elif col.unique_count <= self.settings.dropdown_max_values:
                filter_type = FilterType.DROPDOWN
                unique_values = self._dropdown_values(col.column_name, rows)
            else:
                filter_type = FilterType.SEARCH

            filters.append(SuggestedFilter(
                column_name=col.column_name,
                category=col.primary_category,
                filter_type=filter_type,
                unique_values=unique_values,
                priority=self.filter_priority(col),
            ))

        filters.sort(key=lambda f: f.priority)
        return filters[: self.settings.max_filters]

    @staticmethod
    def filter_priority(col: ColumnClassification) -> int:
        """Lower is more important."""
        category_id = col.primary_category.id if col.primary_category else None
        if category_id not in FILTER_PRIORITY_ORDER:
            return UNRANKED_PRIORITY
        index = FILTER_PRIORITY_ORDER.index(category_id)
        return index * 10 + (0 if col.unique_count < LOW_CARDINALITY else 5)

    @staticmethod
    def _dropdown_values(column: str, rows: Sequence[Mapping[str, Any]]) -> list[str]:
        seen = dict.fromkeys(
            stringify(row.get(column)) for row in rows if is_truthy(row.get(column))
        )
        return sorted(seen, key=locale_sort_key)

    # ------------------------------------------------------------------
    # Cards
    # ------------------------------------------------------------------

    def suggest_cards(self, analyses: Sequence[CategoryAnalysis]) -> list[SuggestedCard]:
        """
        Suggest exactly `card_count` summary cards.

        One distinct-type card per leading category analysis, showing its
        first metric; remaining slots are filled with a total-records card.
        """
        cards = []
        for analysis in list(analyses)[: self.settings.card_count]:
            if not analysis.metrics:
                continue
            main_metric = analysis.metrics[0]
            cards.append(SuggestedCard(
                title=analysis.category.name,
                category=analysis.category,
                metric_type=AggregationKind.DISTINCT,
                value=main_metric.value,
                formatted=main_metric.formatted,
            ))

        while len(cards) < self.settings.card_count:
            cards.append(SuggestedCard(
                title=TOTAL_RECORDS_TITLE,
                category=get_category(TOTAL_RECORDS_CATEGORY),
                metric_type=AggregationKind.COUNT,
            ))

        return cards

    # ------------------------------------------------------------------
    # Charts
    # ------------------------------------------------------------------

    def suggest_charts(
        self,
        analyses: Sequence[CategoryAnalysis],
        rows: Sequence[Mapping[str, Any]],
    ) -> list[SuggestedChart]:
        """
        Suggest one value-distribution chart per category with an
        enum-like text column, capped at `max_charts`.
        """
        charts = []
        for analysis in analyses:
            if len(charts) >= self.settings.max_charts:
                break

            column = self.find_enum_column(analysis.columns)
            if column is None:
                continue

            charts.append(SuggestedChart(
                title=f"{analysis.category.name} - {column.column_name}",
                category=analysis.category,
                chart_type=analysis.category.chart_type,
                column_name=column.column_name,
                data=self.tally_values(column.column_name, rows),
            ))

        return charts

    def find_enum_column(
        self, columns: Sequence[ColumnClassification]
    ) -> Optional[ColumnClassification]:
        """First text column with between 2 and `enum_max_values` distinct values."""
        for col in columns:
            if (
                col.data_type == DataType.TEXT
                and 1 < col.unique_count <= self.settings.enum_max_values
            ):
                return col
        return None

    def tally_values(
        self, column: str, rows: Sequence[Mapping[str, Any]]
    ) -> list[ChartDatum]:
        """Top value counts of a column, most frequent first, ties by first appearance."""
        labels = pl.DataFrame(
            {
                "name": [
                    stringify(row.get(column)) if is_truthy(row.get(column))
                    else self.settings.unknown_label
                    for row in rows
                ]
            },
            schema={"name": pl.Utf8},
        )
        if labels.height == 0:
            return []

        counts = (
            labels.group_by("name", maintain_order=True)
            .agg(pl.len().alias("value"))
            .sort("value", descending=True, maintain_order=True)
            .head(self.settings.chart_top_values)
        )

        return [
            ChartDatum(
                name=item["name"],
                value=item["value"],
                color=get_status_hex_color(item["name"]),
            )
            for item in counts.iter_rows(named=True)
        ]


# Global generator instance
suggestion_generator = SuggestionGenerator()


def suggest_filters(
    columns: Sequence[ColumnClassification],
    rows: Sequence[Mapping[str, Any]],
) -> list[SuggestedFilter]:
    return suggestion_generator.suggest_filters(columns, rows)


def suggest_cards(analyses: Sequence[CategoryAnalysis]) -> list[SuggestedCard]:
    return suggestion_generator.suggest_cards(analyses)


def suggest_charts(
    analyses: Sequence[CategoryAnalysis],
    rows: Sequence[Mapping[str, Any]],
) -> list[SuggestedChart]:
    return suggestion_generator.suggest_charts(analyses, rows)
