"""Config commands for archivectl."""

from __future__ import annotations

from typing import Optional

import click

from archivectl.core.config import CONFIG_FILE, Config, Profile
from archivectl.core.exceptions import ConfigurationError
from archivectl.core.output import OutputFormat, print_error, print_key_value, print_output, print_success
from archivectl.uploaders.constants import (
    DEFAULT_CLIENT_LIFE,
    DEFAULT_PART_SIZE,
    DEFAULT_UPLOAD_WORKERS,
)


@click.group()
def config() -> None:
    """Manage archivectl configuration."""
    pass


@config.command("init")
@click.option("--profile", default="default", help="Profile name")
@click.option("--aws-profile", default=None, help="AWS named profile for credentials")
@click.option("--part-size", type=int, default=DEFAULT_PART_SIZE, show_default=True, help="Part size in bytes")
@click.option("--workers", type=int, default=DEFAULT_UPLOAD_WORKERS, show_default=True, help="Parallel upload workers")
@click.option("--client-life", type=int, default=DEFAULT_CLIENT_LIFE, show_default=True, help="Requests per connection before recycling")
@click.option("--force", is_flag=True, help="Overwrite existing profile")
def config_init(
    profile: str,
    aws_profile: Optional[str],
    part_size: int,
    workers: int,
    client_life: int,
    force: bool,
) -> None:
    """Create configuration file with a new profile.

    Example:
        archivectl config init --aws-profile backup --part-size 67108864
    """
    try:
        new_profile = Profile(
            aws_profile=aws_profile,
            part_size=part_size,
            upload_workers=workers,
            client_life=client_life,
        )
    except ConfigurationError as e:
        print_error(str(e))
        raise SystemExit(1)

    if CONFIG_FILE.exists():
        cfg = Config.load(CONFIG_FILE)
        if cfg.has_profile(profile) and not force:
            print_error(f"Profile '{profile}' already exists. Use --force to overwrite.")
            raise SystemExit(1)
    else:
        cfg = Config()

    cfg.add_profile(profile, new_profile)

    # Set as default if it's the first profile
    if len(cfg.profiles) == 1:
        cfg.default_profile = profile

    cfg.save(CONFIG_FILE)

    print_success(f"Configuration saved to {CONFIG_FILE}")
    print_key_value({"profile": profile, **new_profile.to_dict()})


@config.command("show")
@click.option("--output", "-o", type=click.Choice(["json", "table"]), default="table")
def config_show(output: str) -> None:
    """Show current configuration."""
    try:
        cfg = Config.load(CONFIG_FILE)
    except ConfigurationError as e:
        print_error(str(e))
        raise SystemExit(1)

    if not cfg.profiles:
        print_error("No configuration found. Run 'archivectl config init' first.")
        raise SystemExit(1)

    data = {
        "config_file": str(CONFIG_FILE),
        "default_profile": cfg.default_profile,
        "output_format": cfg.output_format,
        "profiles": list(cfg.profiles.keys()),
    }

    if output == "json":
        data["profile_details"] = {name: p.to_dict() for name, p in cfg.profiles.items()}
        print_output(data, format=OutputFormat.JSON)
        return

    print_key_value(data, title="Configuration")
    click.echo()
    for name, profile in cfg.profiles.items():
        marker = " (default)" if name == cfg.default_profile else ""
        click.echo(f"Profile: {name}{marker}")
        print_key_value(profile.to_dict())
        click.echo()


@config.command("use-context")
@click.argument("profile")
def config_use_context(profile: str) -> None:
    """Switch the active profile.

    Example:
        archivectl config use-context production
    """
    try:
        cfg = Config.load(CONFIG_FILE)
    except ConfigurationError as e:
        print_error(str(e))
        raise SystemExit(1)

    if not cfg.has_profile(profile):
        print_error(f"Profile '{profile}' not found.")
        click.echo(f"Available profiles: {', '.join(cfg.profiles.keys())}")
        raise SystemExit(1)

    cfg.set_default_profile(profile)
    cfg.save(CONFIG_FILE)

    print_success(f"Switched to profile '{profile}'")
