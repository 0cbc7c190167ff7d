"""
Collaborator Interfaces

What the analyzer needs from the surrounding application: somewhere to
read project rows from and somewhere to keep saved configurations.
"""

from typing import Any, Mapping, Optional, Protocol, Sequence

from schemas.projects import ProjectConfiguration


class RowSource(Protocol):
    """Read access to a project's tabular data."""

    def list_tables(self, project_id: str) -> Sequence[str]:
        """Table names of a project, in display order."""
        ...

    def fetch_rows(
        self, project_id: str, table_name: str, limit: int
    ) -> Sequence[Mapping[str, Any]]:
        """Up to `limit` rows of a table."""
        ...


class ConfigurationStore(Protocol):
    """Persistence for saved project configurations."""

    def save(self, configuration: ProjectConfiguration) -> None:
        ...

    def load(self, project_id: str) -> Optional[ProjectConfiguration]:
        ...
