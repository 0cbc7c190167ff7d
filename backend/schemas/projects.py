"""
Project Configuration Schemas

Pydantic models for the dashboard configuration a caller persists after
reviewing an analysis.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from schemas.catalog import DashboardTemplate


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CustomMetric(BaseModel):
    """A user-defined metric over one column."""

    name: str = Field(..., min_length=1)
    type: str = Field(..., pattern="^(sum|avg|count|distinct)$")
    column_name: str


class FilterPreset(BaseModel):
    """A named set of filter values."""

    name: str = Field(..., min_length=1)
    filters: dict[str, Any] = {}


class ProjectConfiguration(BaseModel):
    """Saved dashboard configuration for a project table."""

    project_id: str
    table_name: str
    selected_categories: list[str] = []
    dashboard_layout: DashboardTemplate
    custom_metrics: list[CustomMetric] = []
    filter_presets: list[FilterPreset] = []
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
