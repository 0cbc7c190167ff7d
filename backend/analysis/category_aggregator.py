"""
Category Aggregator

Computes a category's declared metrics over the full row set, using the
category's member columns to pick what to aggregate.
"""

from typing import Any, Mapping, Optional, Sequence

import polars as pl

from config import AnalyzerSettings, get_settings
from core.formatting import format_metric_value
from core.values import is_truthy, numeric_cells, stringify
from schemas.analysis import CategoryAnalysis, ColumnClassification, DataType, MetricValue
from schemas.catalog import AggregationKind, Category, MetricDefinition


class CategoryAggregator:
    """Aggregates category metrics from raw rows."""

    def __init__(self, settings: Optional[AnalyzerSettings] = None):
        self.settings = settings or get_settings().analyzer

    def analyze(
        self,
        category: Category,
        columns: Sequence[ColumnClassification],
        rows: Sequence[Mapping[str, Any]],
    ) -> CategoryAnalysis:
        """
        Analyze one category.

        Args:
            category: The detected category
            columns: Classifications of the columns grouped under it
            rows: Full row set

        Returns:
            CategoryAnalysis with one MetricValue per declared metric
        """
        columns = list(columns)
        rows = list(rows)

        unique_values: dict[str, list[str]] = {}
        for col in columns:
            seen = dict.fromkeys(
                stringify(row.get(col.column_name))
                for row in rows
                if row.get(col.column_name) is not None
            )
            unique_values[col.column_name] = list(seen)

        number_columns = [c for c in columns if c.data_type == DataType.NUMBER]
        text_columns = [c for c in columns if c.data_type == DataType.TEXT]

        metrics = []
        for metric in category.metrics:
            value = self.compute_metric(metric, rows, number_columns, text_columns)
            metrics.append(MetricValue(
                metric_id=metric.id,
                metric_name=metric.name,
                value=value,
                formatted=format_metric_value(
                    value, metric.format, self.settings.currency_symbol
                ),
            ))

        return CategoryAnalysis(
            category=category,
            columns=columns,
            record_count=len(rows),
            unique_values=unique_values,
            metrics=metrics,
        )

    def compute_metric(
        self,
        metric: MetricDefinition,
        rows: list[Mapping[str, Any]],
        number_columns: list[ColumnClassification],
        text_columns: list[ColumnClassification],
    ) -> float:
        """
        Compute a single metric value.

        count is the row count. distinct reads the first text column;
        sum/avg/min/max read the first number column unless the metric
        names its own field. Missing columns yield 0.
        """
        kind = metric.kind

        if kind == AggregationKind.COUNT:
            return len(rows)

        if kind == AggregationKind.DISTINCT:
            column = metric.field or (text_columns[0].column_name if text_columns else None)
            if column is None:
                return 0
            return len({
                stringify(row.get(column)) for row in rows if is_truthy(row.get(column))
            })

        column = metric.field or (number_columns[0].column_name if number_columns else None)
        if column is None:
            return 0

        numbers = numeric_cells(row.get(column) for row in rows)

        if kind == AggregationKind.SUM:
            # Unparseable cells count as 0 and stay in the sum
            return float(numbers.fill_null(0.0).sum())

        parsed = numbers.drop_nulls()
        if parsed.len() == 0:
            return 0
        if kind == AggregationKind.AVG:
            return float(parsed.mean())
        if kind == AggregationKind.MIN:
            return float(parsed.min())
        if kind == AggregationKind.MAX:
            return float(parsed.max())
        return 0


# Global aggregator instance
category_aggregator = CategoryAggregator()


def analyze_category(
    category: Category,
    columns: Sequence[ColumnClassification],
    rows: Sequence[Mapping[str, Any]],
) -> CategoryAnalysis:
    """Analyze a category with the default settings."""
    return category_aggregator.analyze(category, columns, rows)
