from pathlib import Path

import click
import toml
from loguru import logger

from bucketstui.config import (
    ALLOWED_THEMES,
    CONFIG_FILE_PATH,
    AppConfig,
    load_config,
    merge_config_with_cli_args,
    save_config,
)
from bucketstui.errors import ConfigError
from bucketstui.logging import configure_logging


@click.group(invoke_without_command=True)
@click.pass_context
@click.option(
    "--endpoint-url",
    type=str,
    help="Custom S3 endpoint URL (e.g., for S3-compatible services like MinIO)",
    default=None,
)
@click.option(
    "--region-name",
    type=str,
    help="AWS region name (required when using custom endpoint-url)",
    default=None,
)
@click.option(
    "--profile-name",
    type=str,
    help="AWS profile name to use for authentication",
    default=None,
)
@click.option(
    "--aws-access-key-id",
    type=str,
    help="AWS access key ID for authentication",
    default=None,
    envvar="AWS_ACCESS_KEY_ID",
)
@click.option(
    "--aws-secret-access-key",
    type=str,
    help="AWS secret access key for authentication",
    default=None,
    envvar="AWS_SECRET_ACCESS_KEY",
)
@click.option(
    "--aws-session-token",
    type=str,
    help="AWS session token for temporary credentials",
    default=None,
    envvar="AWS_SESSION_TOKEN",
)
@click.option(
    "--theme",
    type=click.Choice(ALLOWED_THEMES, case_sensitive=False),
    help="Theme to use for the UI",
    default=None,
)
@click.option(
    "--log-level",
    type=str,
    help="Log level (DEBUG, INFO, WARNING, ...)",
    default=None,
)
@click.option(
    "--log-file",
    type=str,
    help="Log file path, or '-' for stderr (default: ~/.bucketstui.log)",
    default=None,
)
@click.option(
    "--config",
    type=click.Path(exists=True, readable=True, path_type=str),
    help="Path to configuration file (default: ~/.bucketstui.config)",
    default=None,
)
def cli(
    ctx,
    endpoint_url: str | None = None,
    region_name: str | None = None,
    profile_name: str | None = None,
    aws_access_key_id: str | None = None,
    aws_secret_access_key: str | None = None,
    aws_session_token: str | None = None,
    theme: str | None = None,
    log_level: str | None = None,
    log_file: str | None = None,
    config: str | None = None,
):
    """Buckets TUI - Create, filter, sort and manage retention of S3 buckets."""
    if ctx.invoked_subcommand is None:
        main(
            endpoint_url=endpoint_url,
            region_name=region_name,
            profile_name=profile_name,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            aws_session_token=aws_session_token,
            theme=theme,
            log_level=log_level,
            log_file=log_file,
            config=config,
        )


def _prompt(label: str, existing_config: dict, key: str, **kwargs) -> str:
    current = existing_config.get(key, "")
    return click.prompt(label, default=current, show_default=bool(current), type=str, **kwargs).strip()


@cli.command()
@click.option(
    "--config",
    type=click.Path(path_type=str),
    help="Path to configuration file (default: ~/.bucketstui.config)",
    default=None,
)
def configure(config: str | None = None):
    """Interactive configuration setup for Buckets TUI"""
    config_path = Path(config) if config else CONFIG_FILE_PATH

    click.echo("Buckets TUI Configuration Setup")
    click.echo("=" * 31)
    click.echo("Press Space and Enter without typing anything to remove an existing value.")
    click.echo("Leave fields empty to use defaults or skip optional settings.")
    click.echo()

    existing_config = {}
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                existing_config = toml.load(f)
            click.echo(f"Found existing configuration at {config_path}")
            click.echo()
        except (OSError, toml.TomlDecodeError) as e:
            click.echo(f"Ignoring unreadable configuration at {config_path}: {e}")

    values = {}

    # S3 Configuration
    click.echo("S3 Configuration:")
    click.echo("-" * 16)

    values["endpoint_url"] = _prompt("Endpoint URL (for S3-compatible services like MinIO)", existing_config, "endpoint_url")
    values["region_name"] = _prompt("AWS Region Name", existing_config, "region_name")
    values["profile_name"] = _prompt("AWS Profile Name", existing_config, "profile_name")

    # Only ask for credentials if profile is not set
    if not values["profile_name"]:
        click.echo()
        click.echo("AWS Credentials (leave empty if using profile or environment variables):")
        values["aws_access_key_id"] = _prompt("AWS Access Key ID", existing_config, "aws_access_key_id")
        values["aws_secret_access_key"] = _prompt(
            "AWS Secret Access Key", existing_config, "aws_secret_access_key", hide_input=True
        )
        values["aws_session_token"] = _prompt("AWS Session Token (optional)", existing_config, "aws_session_token")

    # Theme Configuration
    click.echo()
    click.echo("Theme Configuration:")
    click.echo("-" * 18)

    current_theme = existing_config.get("theme", ALLOWED_THEMES[0])
    click.echo("Available themes:")
    for i, theme in enumerate(ALLOWED_THEMES, 1):
        marker = " (current)" if theme == current_theme else ""
        click.echo(f"  {i}. {theme}{marker}")

    theme_choice = click.prompt(
        f"Select theme (1-{len(ALLOWED_THEMES)})",
        default=ALLOWED_THEMES.index(current_theme) + 1 if current_theme in ALLOWED_THEMES else 1,
        type=click.IntRange(1, len(ALLOWED_THEMES)),
    )
    values["theme"] = ALLOWED_THEMES[theme_choice - 1]

    values = {key: value for key, value in values.items() if value}

    # Validate configuration
    click.echo()
    try:
        app_config = AppConfig(**values)
        click.echo("✓ Configuration validated successfully!")
    except ConfigError as e:
        click.echo(f"✗ Configuration validation failed: {e}")
        click.echo("Configuration cancelled.")
        return

    click.echo()
    try:
        saved_path = save_config(app_config, str(config_path))
        click.echo(f"✓ Configuration saved to {saved_path}")
    except OSError as e:
        click.echo(f"✗ Failed to save configuration: {e}")


def main(config: str | None = None, **cli_args):
    """Load configuration, set up logging and run the app."""
    try:
        # CLI arguments take priority over the configuration file
        config_obj = merge_config_with_cli_args(load_config(config), **cli_args)
    except ConfigError as e:
        raise click.ClickException(str(e))

    configure_logging(config_obj.log_level, config_obj.log_file)
    logger.debug(f"Starting with endpoint={config_obj.endpoint_url} region={config_obj.region_name}")

    # Imported late so `configure` does not pay for loading Textual
    from bucketstui.ui.app import BucketsApp

    app = BucketsApp(
        endpoint_url=config_obj.endpoint_url,
        region_name=config_obj.region_name,
        profile_name=config_obj.profile_name,
        aws_access_key_id=config_obj.aws_access_key_id,
        aws_secret_access_key=config_obj.aws_secret_access_key,
        aws_session_token=config_obj.aws_session_token,
        theme=config_obj.theme,
    )
    app.run()
