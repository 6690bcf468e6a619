"""Configuration management for Buckets TUI."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

import toml

from bucketstui.errors import ConfigError

ALLOWED_THEMES = ["textual-dark", "dracula", "nord", "solarized-light"]
ALLOWED_LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
CONFIG_FILE_PATH = Path.home() / ".bucketstui.config"


@dataclass
class AppConfig:
    """Connection, theme and logging settings."""

    endpoint_url: Optional[str] = None
    region_name: Optional[str] = None
    profile_name: Optional[str] = None
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_session_token: Optional[str] = None
    theme: str = "textual-dark"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """Validate configuration settings."""
        if self.theme not in ALLOWED_THEMES:
            raise ConfigError(f"Invalid theme '{self.theme}'. Allowed themes: {', '.join(ALLOWED_THEMES)}")

        self.log_level = self.log_level.upper()
        if self.log_level not in ALLOWED_LOG_LEVELS:
            raise ConfigError(
                f"Invalid log level '{self.log_level}'. Allowed levels: {', '.join(ALLOWED_LOG_LEVELS)}"
            )

        # S3-compatible services need an explicit region
        if self.endpoint_url and not self.region_name:
            raise ConfigError("region_name is required when endpoint_url is set")

        if bool(self.aws_access_key_id) != bool(self.aws_secret_access_key):
            raise ConfigError("aws_access_key_id and aws_secret_access_key must be provided together")


def _resolve_path(config_file_path: Optional[str]) -> Path:
    if config_file_path:
        return Path(config_file_path)
    return CONFIG_FILE_PATH


def load_config(config_file_path: Optional[str] = None) -> AppConfig:
    """Load configuration from file."""
    config_path = _resolve_path(config_file_path)

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, "r") as f:
            config_data = toml.load(f)
    except (OSError, toml.TomlDecodeError) as e:
        raise ConfigError(f"Error loading config file {config_path}: {e}")

    # Extract only the fields that belong to AppConfig
    valid_fields = set(AppConfig.__dataclass_fields__)
    filtered_config = {key: value for key, value in config_data.items() if key in valid_fields}

    return AppConfig(**filtered_config)


def save_config(config: AppConfig, config_file_path: Optional[str] = None) -> Path:
    """Write the non-empty settings to the config file."""
    config_path = _resolve_path(config_file_path)
    data = {key: value for key, value in asdict(config).items() if value is not None}

    with open(config_path, "w") as f:
        toml.dump(data, f)

    return config_path


def merge_config_with_cli_args(config: AppConfig, **cli_args) -> AppConfig:
    """Merge configuration with CLI arguments, giving priority to CLI args."""
    merged_config = asdict(config)

    # Override with CLI args where provided (not None)
    for key, value in cli_args.items():
        if value is not None:
            merged_config[key] = value

    return AppConfig(**merged_config)
