from pathlib import Path
from typing import Any, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from ascend.domain.constants import DEFAULT_API_URL, REQUEST_TIMEOUT


def config_files() -> list[Path]:
    """Candidate TOML config locations, highest priority first."""
    return [
        Path.home() / ".config/ascend/config.toml",
        Path.home() / ".ascend.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for ascend.
    Supports loading from:
    1. Environment variables (ASCEND_*)
    2. Config file (~/.config/ascend/config.toml)
    3. Manual overrides (CLI)

    The resolved object is passed explicitly to whatever builds a session
    store; nothing reads it from global state.
    """

    model_config = SettingsConfigDict(
        env_prefix="ASCEND_",
        extra="ignore",
    )

    # Store selection
    backend: Literal["file", "api"] = "file"
    sessions_file: Path = Field(
        default_factory=lambda: Path.home() / ".config/ascend/sessions.json"
    )

    # Sessions API
    api_url: str = DEFAULT_API_URL
    api_token: SecretStr | None = None
    request_timeout: float = REQUEST_TIMEOUT

    # Logging
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
        from pydantic_settings import TomlConfigSettingsSource

        # Find the first existing file
        toml_file = None
        for f in config_files():
            if f.exists():
                toml_file = f
                break

        # Earlier sources win: overrides > env > TOML
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("sessions_file", mode="before")
    @classmethod
    def resolve_sessions_file(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/ascend/config.toml (if exists)
    3. Environment variables (ASCEND_*)
    4. cli_overrides (None values are ignored)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
