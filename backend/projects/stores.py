"""
Configuration Stores

In-memory ConfigurationStore, one saved configuration per project.
"""

from threading import Lock
from typing import Optional

from core.logging_config import projects_logger as logger
from schemas.projects import ProjectConfiguration, utc_now_iso


class InMemoryConfigurationStore:
    """Thread-safe configuration storage keyed by project id."""

    def __init__(self):
        self._configurations: dict[str, ProjectConfiguration] = {}
        self._lock = Lock()

    def save(self, configuration: ProjectConfiguration) -> None:
        """Save a configuration, keeping the original creation time on update."""
        with self._lock:
            existing = self._configurations.get(configuration.project_id)
            if existing is not None:
                configuration = configuration.model_copy(update={
                    "created_at": existing.created_at,
                    "updated_at": utc_now_iso(),
                })
            self._configurations[configuration.project_id] = configuration
        logger.debug(f"Saved configuration for project {configuration.project_id}")

    def load(self, project_id: str) -> Optional[ProjectConfiguration]:
        """Get the saved configuration of a project."""
        with self._lock:
            return self._configurations.get(project_id)

    def delete(self, project_id: str) -> bool:
        """Delete a project's configuration."""
        with self._lock:
            if project_id in self._configurations:
                del self._configurations[project_id]
                return True
            return False

    def list_projects(self) -> list[str]:
        """Ids of projects with a saved configuration."""
        with self._lock:
            return list(self._configurations)
