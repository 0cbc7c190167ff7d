"""
Project Analyzer

Runs the full analysis of a project table: classify every column, group
columns by primary category, aggregate each category, pick a dashboard
template and derive filter/card/chart suggestions. Pure computation; the
returned ProjectAnalysis is the only output.
"""

from typing import Any, Mapping, Optional, Sequence

from analysis.category_aggregator import CategoryAggregator
from analysis.column_classifier import ColumnClassifier
from analysis.suggestions import SuggestionGenerator
from analysis.template_selector import TemplateSelector
from catalog.templates import get_generic_template
from config import AnalyzerSettings, get_settings
from core.logging_config import analysis_logger as logger
from schemas.analysis import CategoryAnalysis, ColumnClassification, ProjectAnalysis


def normalize_rows(rows: Sequence[Mapping[Any, Any]]) -> list[dict[str, Any]]:
    """Copy rows into plain dicts keyed by string column names."""
    return [{str(key): value for key, value in row.items()} for row in rows]


class ProjectAnalyzer:
    """
    Orchestrates the analysis steps in order.

    Flow:
    1. Classify every column of the first row's schema
    2. Group columns by primary category
    3. Aggregate each category, most member columns first
    4. Select a dashboard template
    5. Suggest filters, cards and charts
    """

    def __init__(self, settings: Optional[AnalyzerSettings] = None):
        settings = settings or get_settings().analyzer
        self.classifier = ColumnClassifier(settings)
        self.aggregator = CategoryAggregator(settings)
        self.selector = TemplateSelector()
        self.suggestions = SuggestionGenerator(settings)
        self.logger = logger

    def analyze(
        self,
        project_id: str,
        table_name: str,
        rows: Sequence[Mapping[Any, Any]],
    ) -> ProjectAnalysis:
        """
        Analyze a project table.

        Args:
            project_id: Owning project
            table_name: Source table
            rows: Homogeneous rows; the first row's keys define the schema

        Returns:
            ProjectAnalysis for the rows
        """
        rows = list(rows)
        if not rows:
            self.logger.debug(f"No rows for {project_id}/{table_name}, returning empty analysis")
            return ProjectAnalysis(
                project_id=project_id,
                table_name=table_name,
                total_rows=0,
                total_columns=0,
                suggested_template=get_generic_template(),
            )

        self.logger.info(f"=== PROJECT ANALYSIS STARTED: {project_id}/{table_name} ===")
        data = normalize_rows(rows)
        column_names = list(data[0].keys())
        self.logger.info(f"Analyzing {len(data):,} rows x {len(column_names)} columns")

        column_matches = [
            self.classifier.classify(name, [row.get(name) for row in data])
            for name in column_names
        ]
        primaries = {
            c.column_name: c.primary_category.id
            for c in column_matches
            if c.primary_category is not None
        }
        self.logger.debug(f"Primary categories: {primaries}")

        category_analyses = self._analyze_categories(column_matches, data)
        detected_categories = [a.category for a in category_analyses]
        detected_ids = [c.id for c in detected_categories]
        self.logger.debug(f"Detected categories: {detected_ids}")

        template = self.selector.select(detected_ids)
        self.logger.debug(f"Selected template: {template.id}")

        filters = self.suggestions.suggest_filters(column_matches, data)
        cards = self.suggestions.suggest_cards(category_analyses)
        charts = self.suggestions.suggest_charts(category_analyses, data)
        self.logger.debug(
            f"Suggested {len(filters)} filters, {len(cards)} cards, {len(charts)} charts"
        )

        self.logger.success(
            f"=== PROJECT ANALYSIS COMPLETE: {len(detected_ids)} categories, template {template.id} ==="
        )

        return ProjectAnalysis(
            project_id=project_id,
            table_name=table_name,
            total_rows=len(data),
            total_columns=len(column_names),
            column_matches=column_matches,
            category_analyses=category_analyses,
            detected_categories=detected_categories,
            suggested_template=template,
            suggested_filters=filters,
            suggested_cards=cards,
            suggested_charts=charts,
        )

    def _analyze_categories(
        self,
        column_matches: list[ColumnClassification],
        data: list[dict[str, Any]],
    ) -> list[CategoryAnalysis]:
        """Aggregate each primary category, sorted by member column count."""
        grouped: dict[str, list[ColumnClassification]] = {}
        for col in column_matches:
            if col.primary_category is not None:
                grouped.setdefault(col.primary_category.id, []).append(col)

        analyses = [
            self.aggregator.analyze(columns[0].primary_category, columns, data)
            for columns in grouped.values()
        ]
        # Stable: ties keep first-column order
        analyses.sort(key=lambda a: len(a.columns), reverse=True)
        return analyses


# Global analyzer instance
project_analyzer = ProjectAnalyzer()


def analyze(
    project_id: str,
    table_name: str,
    rows: Sequence[Mapping[Any, Any]],
) -> ProjectAnalysis:
    """Analyze rows with the default settings."""
    return project_analyzer.analyze(project_id, table_name, rows)
