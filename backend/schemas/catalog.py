"""
Catalog Schemas

Pydantic models for the static category and dashboard template catalogs.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChartType(str, Enum):
    """Preferred chart rendering for a category."""

    PIE = "pie"
    BAR = "bar"
    FUNNEL = "funnel"
    LEADERBOARD = "leaderboard"
    TIMELINE = "timeline"
    GAUGE = "gauge"


class AggregationKind(str, Enum):
    """How a metric reduces a column to a single number."""

    COUNT = "count"
    SUM = "sum"
    AVG = "avg"
    MIN = "min"
    MAX = "max"
    DISTINCT = "distinct"


class DisplayFormat(str, Enum):
    """How a metric value is rendered."""

    NUMBER = "number"
    CURRENCY = "currency"
    PERCENT = "percent"


class LayoutItemType(str, Enum):
    """Kinds of blocks in a dashboard layout."""

    CARD = "card"
    CHART = "chart"
    TABLE = "table"
    FILTER = "filter"


class MetricDefinition(BaseModel):
    """A metric declared on a category."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: AggregationKind
    format: DisplayFormat = DisplayFormat.NUMBER
    field: Optional[str] = Field(
        default=None,
        description="Explicit target column; otherwise picked from member columns by type"
    )


class Category(BaseModel):
    """A business category a column can belong to."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    name_en: str
    icon: str
    color: str
    description: str
    patterns: tuple[str, ...]
    chart_type: ChartType
    metrics: tuple[MetricDefinition, ...]


class LayoutItem(BaseModel):
    """A single block in a dashboard grid."""

    model_config = ConfigDict(frozen=True)

    type: LayoutItemType
    category: Optional[str] = None
    span: int = Field(..., ge=1, le=4, description="Grid columns out of 4")
    height: Optional[str] = Field(default=None, pattern="^(sm|md|lg)$")
    config: Optional[dict[str, Any]] = None


class DashboardTemplate(BaseModel):
    """A dashboard layout chosen by the categories it needs."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    required_categories: tuple[str, ...] = ()
    layout: tuple[LayoutItem, ...]

    @property
    def is_generic(self) -> bool:
        return not self.required_categories
