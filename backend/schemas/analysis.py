"""
Analysis Schemas

Pydantic value objects produced by a project analysis.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.catalog import AggregationKind, Category, ChartType, DashboardTemplate


class DataType(str, Enum):
    """Inferred type of a column's values."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


class FilterType(str, Enum):
    """Kinds of suggested filters."""

    DROPDOWN = "dropdown"
    SEARCH = "search"
    RANGE = "range"
    DATE_RANGE = "dateRange"


class ColumnClassification(BaseModel):
    """Classification of one source column."""

    model_config = ConfigDict(frozen=True)

    column_name: str
    categories: list[Category] = []
    primary_category: Optional[Category] = None
    data_type: DataType
    unique_count: int
    null_count: int
    sample_values: list[Any] = []
    is_key: bool = False

    @property
    def category_ids(self) -> list[str]:
        return [c.id for c in self.categories]


class MetricValue(BaseModel):
    """A computed category metric."""

    model_config = ConfigDict(frozen=True)

    metric_id: str
    metric_name: str
    value: float
    formatted: str


class CategoryAnalysis(BaseModel):
    """Aggregated view of one detected category."""

    model_config = ConfigDict(frozen=True)

    category: Category
    columns: list[ColumnClassification]
    record_count: int
    unique_values: dict[str, list[str]] = Field(
        default={},
        description="Column name -> distinct stringified values"
    )
    metrics: list[MetricValue] = []


class SuggestedFilter(BaseModel):
    """A filter the dashboard should offer."""

    model_config = ConfigDict(frozen=True)

    column_name: str
    category: Category
    filter_type: FilterType
    unique_values: Optional[list[str]] = None
    priority: int


class SuggestedCard(BaseModel):
    """A summary card the dashboard should show."""

    model_config = ConfigDict(frozen=True)

    title: str
    category: Category
    metric_type: AggregationKind
    column_name: Optional[str] = None
    value: Optional[float] = None
    formatted: Optional[str] = None


class ChartDatum(BaseModel):
    """One bar/slice of a suggested chart."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: int
    color: Optional[str] = None


class SuggestedChart(BaseModel):
    """A chart the dashboard should show."""

    model_config = ConfigDict(frozen=True)

    title: str
    category: Category
    chart_type: ChartType
    column_name: str
    data: list[ChartDatum] = []


class ProjectAnalysis(BaseModel):
    """Complete analysis of one project table."""

    model_config = ConfigDict(frozen=True)

    project_id: str
    table_name: str
    total_rows: int
    total_columns: int
    column_matches: list[ColumnClassification] = []
    category_analyses: list[CategoryAnalysis] = []
    detected_categories: list[Category] = []
    suggested_template: DashboardTemplate
    suggested_filters: list[SuggestedFilter] = []
    suggested_cards: list[SuggestedCard] = []
    suggested_charts: list[SuggestedChart] = []

    @property
    def detected_category_ids(self) -> list[str]:
        return [c.id for c in self.detected_categories]
