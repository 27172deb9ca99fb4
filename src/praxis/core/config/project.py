"""
Per-project configuration read from ``.praxis/config.json``.

Manifesto:
    Older projects have no config file at all, so every key falls back
    to a default. Newer projects opt into plugin output or disable the
    pure profile directory by writing a small JSON file. Paths are kept
    relative in the file and resolved against the project root on access.

Examples:
    >>> config = ProjectConfig.load(Path("/work/my-praxis"))
    >>> config.roles_path
    PosixPath('/work/my-praxis/content/roles')
    >>> ProjectConfig.from_dict({"agentProfilesOutputDir": False}, root).agent_profiles_path is None
    True

Tags:
    praxis, configuration, pydantic, json

Doc-Types:
    api-reference
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PrivateAttr
from pydantic import ValidationError as PydanticValidationError

from praxis.core.errors import InvalidConfigError

CONFIG_FILE = Path(".praxis") / "config.json"


class ProjectConfig(BaseModel):
    """Loads and provides access to ``.praxis/config.json`` settings."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    agent_profiles_output_dir: str | Literal[False] = Field(
        default="./agent-profiles",
        validation_alias=AliasChoices(
            "agentProfilesOutputDir", "agentProfilesDir", "agent_profiles_output_dir"
        ),
    )
    plugins: list[str] = Field(default_factory=list)
    sources: list[str] = Field(
        default_factory=lambda: [
            "content/roles",
            "content/responsibilities",
            "content/reference",
            "content/context",
        ]
    )
    roles_dir: str = Field(
        default="content/roles", validation_alias=AliasChoices("rolesDir", "roles_dir")
    )
    plugins_output_dir: str = Field(
        default="./plugins",
        validation_alias=AliasChoices("pluginsOutputDir", "plugins_output_dir"),
    )
    plugin_name: str = Field(
        default="praxis", validation_alias=AliasChoices("pluginName", "plugin_name")
    )
    content_dir: str = Field(
        default="content", validation_alias=AliasChoices("contentDir", "content_dir")
    )
    cache_dir: str = Field(
        default=".praxis/cache/validation",
        validation_alias=AliasChoices("cacheDir", "cache_dir"),
    )

    _root: Path = PrivateAttr(default_factory=Path.cwd)

    # ── Loading ──────────────────────────────────────────────────

    @classmethod
    def load(cls, root: Path) -> ProjectConfig:
        """Load the config for *root*, falling back to defaults when absent.

        Raises:
            InvalidConfigError: the file is not valid JSON or a value has
                the wrong type.
        """
        root = Path(root)
        config_path = root / CONFIG_FILE

        data: dict[str, Any] = {}
        if config_path.exists():
            try:
                data = json.loads(config_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise InvalidConfigError(
                    str(CONFIG_FILE), None, f"Malformed {CONFIG_FILE}: {e}"
                ) from e
            if not isinstance(data, dict):
                raise InvalidConfigError(str(CONFIG_FILE), data, f"{CONFIG_FILE} must be a JSON object")

        return cls.from_dict(data, root)

    @classmethod
    def from_dict(cls, data: dict[str, Any], root: Path) -> ProjectConfig:
        """Create config from a raw dictionary."""
        try:
            config = cls.model_validate(data)
        except PydanticValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first["loc"])
            raise InvalidConfigError(key, first.get("input"), f"Invalid configuration for {key}: {first['msg']}") from e
        config._root = Path(root).resolve()
        return config

    # ── Resolved paths ───────────────────────────────────────────

    @property
    def root(self) -> Path:
        return self._root

    @property
    def agent_profiles_path(self) -> Path | None:
        """Absolute path for pure profile output, or None if disabled."""
        if self.agent_profiles_output_dir is False:
            return None
        return (self._root / self.agent_profiles_output_dir).resolve()

    @property
    def roles_path(self) -> Path:
        return (self._root / self.roles_dir).resolve()

    @property
    def source_paths(self) -> list[Path]:
        """Absolute directories ``praxis validate`` checks when given no paths."""
        return [(self._root / source).resolve() for source in self.sources]

    @property
    def plugins_output_path(self) -> Path:
        return (self._root / self.plugins_output_dir).resolve()

    @property
    def content_path(self) -> Path:
        return (self._root / self.content_dir).resolve()

    @property
    def cache_path(self) -> Path:
        return (self._root / self.cache_dir).resolve()
