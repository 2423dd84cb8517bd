import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from mcp_isi_server.isi.renderer import (
    DEFAULT_BULLET_COLOR,
    DEFAULT_FONT_COLOR,
    DEFAULT_FONT_SIZE,
    DEFAULT_GUTTER_WIDTH,
    DEFAULT_LINE_HEIGHT,
    DEFAULT_PADDING,
    DEFAULT_TABLE_COLOR,
)
from mcp_isi_server.log import logger

DEFAULT_CONFIG_PATH = "~/.config/mcp_isi_server/config.toml"
CONFIG_PATH = Path(os.getenv("MCP_ISI_SERVER_CONFIG_PATH", DEFAULT_CONFIG_PATH)).expanduser().resolve()


class StyleDefaults(BaseModel):
    """House style applied to style fields the caller leaves unset"""

    padding: float = DEFAULT_PADDING
    font_size: float = DEFAULT_FONT_SIZE
    font_color: str = DEFAULT_FONT_COLOR
    table_color: str = DEFAULT_TABLE_COLOR
    line_height: float = DEFAULT_LINE_HEIGHT
    gutter_width: float = DEFAULT_GUTTER_WIDTH
    bullet_color: str = DEFAULT_BULLET_COLOR


class Settings(BaseSettings):
    style_defaults: StyleDefaults = Field(default_factory=StyleDefaults)

    model_config = SettingsConfigDict(
        env_prefix="MCP_ISI_SERVER_",
        env_nested_delimiter="__",
        toml_file=CONFIG_PATH,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, TomlConfigSettingsSource(settings_cls))


_settings = None


def get_settings(reload: bool = False) -> Settings:
    global _settings
    if not _settings or reload:
        logger.info(f"Loading settings (config file: {CONFIG_PATH})")
        _settings = Settings()
    return _settings
