"""Upload command for archivectl."""

from __future__ import annotations

import logging
import sys
from typing import Any, Callable, Optional, TypeVar

import click

from archivectl.cli.common import Context, ExitCode, handle_errors, pass_context
from archivectl.core.connection import create_provider
from archivectl.core.output import (
    OutputFormat,
    create_progress,
    format_size,
    print_output,
    print_success,
)
from archivectl.core.validation import (
    validate_endpoint,
    validate_region,
    validate_source_file,
    validate_vault_name,
)
from archivectl.models.progress import OperationPhase, UploadProgress
from archivectl.services.archives import ArchiveUploadService

F = TypeVar("F", bound=Callable[..., Any])

logger = logging.getLogger(__name__)

# (parameter name, option, description); every one is required
UPLOAD_OPTIONS: list[tuple[str, str, str]] = [
    ("file_path", "--file", "file to upload"),
    ("description", "--description", "intended archive name in vault"),
    ("vault_name", "--vault-name", "aws glacier vault name; this vault must already exist"),
    (
        "service_endpoint",
        "--service-endpoint",
        "aws service endpoint, e.g. 'glacier.eu-central-1.amazonaws.com'",
    ),
    ("signing_region", "--signing-region", "aws signing region, e.g. 'eu-central-1'"),
]


def upload_options(f: F) -> F:
    """Add the named upload options.

    They are declared optional for click so that every missing option can be
    reported at once.
    """
    for name, flag, description in reversed(UPLOAD_OPTIONS):
        f = click.option(flag, name, metavar="TEXT", help=description)(f)
    return f


def describe_option(flag: str, description: str) -> str:
    return f"  {flag} TEXT  {description}"


def check_required(values: dict[str, Optional[str]]) -> None:
    """Exit with the required options listed if any is missing."""
    missing = [(flag, desc) for name, flag, desc in UPLOAD_OPTIONS if not values.get(name)]
    if not missing:
        return

    click.echo("Required options:")
    for _, flag, description in UPLOAD_OPTIONS:
        click.echo(describe_option(flag, description))
    click.echo("Missing required options:")
    for flag, description in missing:
        click.echo(describe_option(flag, description))
    sys.exit(ExitCode.GENERAL_ERROR)


@click.command("upload")
@upload_options
@pass_context
@handle_errors
def upload(
    ctx: Context,
    file_path: Optional[str],
    description: Optional[str],
    vault_name: Optional[str],
    service_endpoint: Optional[str],
    signing_region: Optional[str],
) -> None:
    """Upload a file to a vault as a single archive.

    The file is split into parts that are uploaded in parallel; the archive
    tree hash is verified by the vault on completion.

    Example:
        archivectl upload --file backup.tar --description backup-2026 \\
            --vault-name my-vault \\
            --service-endpoint glacier.eu-central-1.amazonaws.com \\
            --signing-region eu-central-1
    """
    check_required(
        {
            "file_path": file_path,
            "description": description,
            "vault_name": vault_name,
            "service_endpoint": service_endpoint,
            "signing_region": signing_region,
        }
    )
    assert file_path and description and vault_name and service_endpoint and signing_region

    source = validate_source_file(file_path)
    vault_name = validate_vault_name(vault_name)
    endpoint = validate_endpoint(service_endpoint)
    region = validate_region(signing_region)
    profile = ctx.get_profile()

    logger.info("------------")
    logger.info("file: %s", source)
    logger.info("description: %s", description)
    logger.info("vault name: %s", vault_name)
    logger.info("service endpoint: %s", endpoint)
    logger.info("signing region: %s", region)
    logger.info("------------")

    provider = create_provider(
        endpoint=endpoint,
        region=region,
        aws_profile=profile.aws_profile,
        client_life=profile.client_life,
        **profile.client_options(),
    )
    service = ArchiveUploadService(
        provider,
        part_size=profile.part_size,
        workers=profile.upload_workers,
    )

    show_progress = not ctx.quiet and ctx.output_format == OutputFormat.TABLE
    if show_progress:
        with create_progress() as progress:
            task_id = progress.add_task("Uploading", total=source.stat().st_size)

            def on_progress(update: UploadProgress) -> None:
                if update.phase == OperationPhase.UPLOADING:
                    progress.update(task_id, completed=update.bytes_sent)
                progress.update(task_id, description=update.message or update.phase.value)

            summary = service.upload_archive(
                source,
                vault_name=vault_name,
                description=description,
                progress_callback=on_progress,
            )
    else:
        summary = service.upload_archive(
            source,
            vault_name=vault_name,
            description=description,
        )

    if ctx.output_format == OutputFormat.JSON:
        print_output(summary.to_dict(), format=OutputFormat.JSON)
        return

    if ctx.quiet:
        click.echo(summary.archive_id)
        return

    print_success(
        f"Upload finished: {summary.total} parts, {format_size(summary.archive_size)}"
    )
    print_output(summary.to_dict(), format=OutputFormat.TABLE)
