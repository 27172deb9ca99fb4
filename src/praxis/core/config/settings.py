"""
Process-level settings for praxis.

``PraxisSettings`` is the only place environment variables are read. The
CLI builds one instance and hands the relevant values (debug flag, API
key, model) to the components that need them, so nothing deep inside the
compiler or cache consults ``os.environ``.

Tags:
    praxis, configuration, settings, pydantic

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PraxisSettings(BaseSettings):
    """Praxis runtime configuration.

    All fields can be set via ``PRAXIS_*`` environment variables (e.g.
    ``PRAXIS_DEBUG=1``) or a ``.env`` file. The OpenRouter key is also
    accepted under its conventional name ``OPENROUTER_API_KEY``.
    """

    model_config = SettingsConfigDict(
        env_prefix="PRAXIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Diagnostics ──────────────────────────────────────────────
    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("PRAXIS_DEBUG", "DEBUG"),
    )
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="auto", description="console, json or auto")

    # ── Verification service ─────────────────────────────────────
    openrouter_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("PRAXIS_OPENROUTER_API_KEY", "OPENROUTER_API_KEY"),
    )
    openrouter_model: str = Field(default="x-ai/grok-4.1-fast")
    openrouter_url: str = Field(default="https://openrouter.ai/api/v1")
    request_timeout: float = Field(default=60.0)

    @property
    def json_logs(self) -> bool | None:
        """Map ``log_format`` onto :func:`configure_logging`'s ``json_format``."""
        if self.log_format == "json":
            return True
        if self.log_format == "console":
            return False
        return None
