"""
Project Configuration Builder

Turns an analysis (plus the user's choices) into a ProjectConfiguration.
"""

from typing import Iterable, Optional

from catalog.templates import DASHBOARD_TEMPLATES
from schemas.analysis import ProjectAnalysis
from schemas.projects import CustomMetric, FilterPreset, ProjectConfiguration


def create_default_configuration(analysis: ProjectAnalysis) -> ProjectConfiguration:
    """Configuration selecting every detected category and the suggested template."""
    return ProjectConfiguration(
        project_id=analysis.project_id,
        table_name=analysis.table_name,
        selected_categories=analysis.detected_category_ids,
        dashboard_layout=analysis.suggested_template,
    )


def build_configuration(
    analysis: ProjectAnalysis,
    selected_categories: Optional[Iterable[str]] = None,
    template_id: Optional[str] = None,
    custom_metrics: Optional[Iterable[CustomMetric]] = None,
    filter_presets: Optional[Iterable[FilterPreset]] = None,
) -> ProjectConfiguration:
    """
    Build a configuration from user choices.

    Args:
        analysis: The analysis the user reviewed
        selected_categories: Category ids to show; defaults to detected ones
        template_id: Chosen template; unknown ids fall back to the suggestion
        custom_metrics: User-defined metrics
        filter_presets: Saved filter sets

    Returns:
        ProjectConfiguration ready to persist
    """
    template = next(
        (t for t in DASHBOARD_TEMPLATES if t.id == template_id),
        analysis.suggested_template,
    )
    if selected_categories is None:
        selected_categories = analysis.detected_category_ids

    return ProjectConfiguration(
        project_id=analysis.project_id,
        table_name=analysis.table_name,
        selected_categories=list(selected_categories),
        dashboard_layout=template,
        custom_metrics=list(custom_metrics or []),
        filter_presets=list(filter_presets or []),
    )


def default_column_selection(analysis: ProjectAnalysis) -> dict[str, list[str]]:
    """Category id -> member column names, as pre-selected in the setup flow."""
    return {
        ca.category.id: [c.column_name for c in ca.columns]
        for ca in analysis.category_analyses
    }
