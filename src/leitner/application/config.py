from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from leitner.domain.constants import (
    DEFAULT_RETIRED_BUCKET,
    IMPROVEMENT_WINDOW_DAYS,
    MAX_DIFFICULT_CARDS,
)


class AppConfig(BaseSettings):
    """
    Configuration model for leitner.
    Supports loading from:
    1. Environment variables (LEITNER_*)
    2. Config file (~/.config/leitner/config.toml or ~/.leitner.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEITNER_",
        extra="ignore",
    )

    # Scheduling
    retired_bucket: int = Field(default=DEFAULT_RETIRED_BUCKET, ge=0)
    start_day: int = Field(default=1, ge=1)

    # Progress insights
    improvement_window_days: int = Field(default=IMPROVEMENT_WINDOW_DAYS, ge=0)
    max_difficult_cards: int = Field(default=MAX_DIFFICULT_CARDS, ge=0)

    # Paths
    state_file: Path | None = None

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Home is looked up per call so tests can redirect it
        toml_files = [
            Path.home() / ".config/leitner/config.toml",
            Path.home() / ".leitner.toml",
        ]
        toml_file = next((f for f in toml_files if f.exists()), None)

        # Earlier sources win
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("state_file", mode="before")
    @classmethod
    def resolve_state_file(cls, v: Any) -> Path | None:
        if v is None:
            return None
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/leitner/config.toml (if exists)
    3. Environment variables (LEITNER_*)
    4. cli_overrides (passed from Typer; None values are dropped)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
