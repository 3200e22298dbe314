"""Configuration handling for the CLI."""

import json
import pathlib
import typing

import platformdirs
import structlog

try:
    import pydantic
    import pydantic_settings
except ImportError as err:
    raise ImportError(
        "The 'cli' extra is required for this feature. Install it with: pip install printhost-client[cli]"
    ) from err

from printhost.client import consts as sdk_consts
from printhost.client import hosts
from printhost.client.cli import consts

logger = structlog.get_logger(sdk_consts.APP_NAME)


def get_config_file() -> pathlib.Path:
    """Location of config.json in the platform's user config directory."""
    config_dir = pathlib.Path(platformdirs.user_config_dir(sdk_consts.APP_NAME, sdk_consts.APP_AUTHOR))
    return config_dir / consts.CONFIG_FILENAME


def load_json_config() -> dict[str, typing.Any]:
    """Load configuration from config.json."""
    config_file = get_config_file()
    logger.info("Attempting to load config.json", config_file=config_file)
    if config_file.exists():
        try:
            with config_file.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError):
            logger.exception("Failed to read config.json", config_file=config_file)
            return {}
    logger.info("No config.json found.")
    return {}


class Settings(pydantic_settings.BaseSettings):
    """Print host connection settings loaded from env, .env or config.json."""

    host_type: hosts.HostType = hosts.HostType.REPETIER
    host: str | None = None
    api_key: pydantic.SecretStr = pydantic.SecretStr("")
    cafile: str = ""
    printer_name: str = ""
    timeout: float = sdk_consts.DEFAULT_TIMEOUT

    model_config = pydantic_settings.SettingsConfigDict(env_prefix=consts.ENV_PREFIX, env_file=".env", extra="ignore")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[pydantic_settings.BaseSettings],
        init_settings: pydantic_settings.PydanticBaseSettingsSource,
        env_settings: pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[pydantic_settings.PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include config.json."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            pydantic_settings.InitSettingsSource(settings_cls, load_json_config()),
            file_secret_settings,
        )


if typing.TYPE_CHECKING:
    settings: Settings

_settings: Settings | None = None


def __getattr__(name: str) -> typing.Any:
    """Implement lazy loading for settings to allow logging initialization first."""
    if name == "settings":
        global _settings
        if _settings is None:
            _settings = Settings()
        return _settings
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
