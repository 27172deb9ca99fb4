"""Project configuration, process settings and project-root discovery.

Quick start::

    from praxis.core.config import ProjectConfig, PraxisSettings, find_project_root

    root = find_project_root()
    config = ProjectConfig.load(root)
    settings = PraxisSettings()

Architecture::

    loader.py      find_project_root() (.praxis / .git markers)
    project.py     ProjectConfig (.praxis/config.json, pydantic)
    settings.py    PraxisSettings (PRAXIS_* env vars, pydantic-settings)
"""

from .loader import PROJECT_MARKER, find_project_root
from .project import CONFIG_FILE, ProjectConfig
from .settings import PraxisSettings

__all__ = [
    "CONFIG_FILE",
    "PROJECT_MARKER",
    "PraxisSettings",
    "ProjectConfig",
    "find_project_root",
]
