"""Configuration loading: the YAML command map plus credentials from env / .env."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from menta.errors import ConfigurationError
from menta.models import CommandEntry

DEFAULT_CONFIG_PATH = Path("./internal/config/config.yaml")


class DebugConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    log_level: str = "info"  # "debug" enables verbose logging


class SystemConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    debug: DebugConfig = DebugConfig()


class AiConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    provider: str = "openai"
    model: str
    commands: dict[str, CommandEntry] = {}


class MentaConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    system: SystemConfig = SystemConfig()
    ai: AiConfig

    @property
    def debug(self) -> bool:
        return self.system.debug.log_level.lower() == "debug"


class Credentials(BaseSettings):
    """Fallback credentials for flags left empty on the command line."""

    model_config = SettingsConfigDict(
        env_prefix="MENTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_token: SecretStr | None = None
    api_key: SecretStr | None = None


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> MentaConfig:
    """Read and validate the YAML config at path.

    Raises ConfigurationError when the file is missing, is not valid YAML,
    or does not match the expected shape.
    """
    path = Path(path)
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")

    try:
        return MentaConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid config in {path}: {exc}") from exc
