"""Configuration schema using Pydantic."""

from pathlib import Path
from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

LogLevel: TypeAlias = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
FormatName: TypeAlias = Literal["table", "csv", "json", "yaml", "ids", "count"]


class OutputConfig(BaseModel):
    """Defaults for list/get output."""

    model_config = ConfigDict(extra="ignore")

    default_format: FormatName = "table"


class GenerateConfig(BaseModel):
    """Defaults for synthetic data generation."""

    model_config = ConfigDict(extra="ignore")

    default_count: int = Field(default=100, ge=0)
    default_component: str = "groups"
    default_action: str = "comment_reply"


class ListConfig(BaseModel):
    """Defaults for list commands."""

    model_config = ConfigDict(extra="ignore")

    default_count: int = Field(default=50, ge=1)


class Config(BaseSettings):
    """Root configuration for socialcli."""

    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
        env_prefix="SOCIALCLI_",
        env_nested_delimiter="__",
    )

    config_version: int = 1
    store_path: str = ""
    log_level: LogLevel = "WARNING"
    output: OutputConfig = Field(default_factory=OutputConfig)
    generate: GenerateConfig = Field(default_factory=GenerateConfig)
    listing: ListConfig = Field(default_factory=ListConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # SOCIALCLI_* variables win over values read from config.json.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @property
    def resolved_store_path(self) -> Path:
        """Get the host store file, defaulting to ~/.socialcli/data/host.json."""
        from socialcli.utils.helpers import get_data_path, get_default_store_path

        if not self.store_path.strip():
            return get_default_store_path()
        candidate = Path(self.store_path).expanduser()
        return candidate if candidate.is_absolute() else get_data_path() / candidate
