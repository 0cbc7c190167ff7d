"""
Project Setup Service

The setup flow around the analyzer: fetch a project's rows, analyze them
(reusing a recent analysis when cached) and save the chosen configuration.
"""

from typing import Iterable, Optional

from analysis.orchestrator import ProjectAnalyzer, project_analyzer
from config import get_settings
from core.cache import TTLCache, analysis_cache
from core.logging_config import projects_logger
from projects.collaborators import ConfigurationStore, RowSource
from projects.configuration import build_configuration
from schemas.analysis import ProjectAnalysis
from schemas.projects import CustomMetric, FilterPreset, ProjectConfiguration


class ProjectDataNotFoundError(LookupError):
    """The project has no tables, or the chosen table has no rows."""


class ProjectSetupService:
    """Coordinates row fetching, analysis and configuration storage."""

    def __init__(
        self,
        row_source: RowSource,
        store: ConfigurationStore,
        analyzer: Optional[ProjectAnalyzer] = None,
        cache: Optional[TTLCache] = None,
        row_limit: Optional[int] = None,
    ):
        self.row_source = row_source
        self.store = store
        self.analyzer = analyzer or project_analyzer
        self.cache = cache if cache is not None else analysis_cache
        self.row_limit = row_limit or get_settings().row_fetch_limit
        self.logger = projects_logger

    def resolve_table(self, project_id: str, table_name: Optional[str] = None) -> str:
        """Use the given table, else the saved one, else the project's first table."""
        if table_name:
            return table_name

        saved = self.store.load(project_id)
        if saved is not None:
            return saved.table_name

        tables = list(self.row_source.list_tables(project_id))
        if not tables:
            raise ProjectDataNotFoundError(f"No tables found for project {project_id}")
        return tables[0]

    def analyze_project(
        self,
        project_id: str,
        table_name: Optional[str] = None,
        use_cache: bool = True,
    ) -> ProjectAnalysis:
        """
        Fetch and analyze a project table.

        Raises:
            ProjectDataNotFoundError: if there is no table or no rows
        """
        table = self.resolve_table(project_id, table_name)
        key = TTLCache.analysis_key(project_id, table, self.row_limit)

        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                self.logger.debug(f"Using cached analysis for {project_id}/{table}")
                return cached

        rows = self.row_source.fetch_rows(project_id, table, self.row_limit)
        if not rows:
            raise ProjectDataNotFoundError(f"No rows found in {project_id}/{table}")

        self.logger.info(f"Fetched {len(rows):,} rows from {project_id}/{table}")
        analysis = self.analyzer.analyze(project_id, table, rows)
        self.cache.set(key, analysis)
        return analysis

    def save_configuration(
        self,
        analysis: ProjectAnalysis,
        selected_categories: Optional[Iterable[str]] = None,
        template_id: Optional[str] = None,
        custom_metrics: Optional[Iterable[CustomMetric]] = None,
        filter_presets: Optional[Iterable[FilterPreset]] = None,
    ) -> ProjectConfiguration:
        """Build a configuration from the user's choices and store it."""
        configuration = build_configuration(
            analysis,
            selected_categories=selected_categories,
            template_id=template_id,
            custom_metrics=custom_metrics,
            filter_presets=filter_presets,
        )
        self.store.save(configuration)
        self.logger.success(
            f"Saved configuration for {analysis.project_id} "
            f"(template {configuration.dashboard_layout.id})"
        )
        return self.store.load(analysis.project_id) or configuration

    def invalidate(self, project_id: str, table_name: Optional[str] = None) -> int:
        """Drop cached analyses so the next load re-fetches rows; all tables when none is given."""
        if table_name is None:
            return self.cache.invalidate_project(project_id)
        return int(self.cache.delete(TTLCache.analysis_key(project_id, table_name, self.row_limit)))
