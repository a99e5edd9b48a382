"""Main CLI entry point for archivectl."""

from __future__ import annotations

from typing import Optional

import click

from archivectl import __version__
from archivectl.cli.common import Context
from archivectl.cli.config_cmd import config
from archivectl.cli.treehash import treehash
from archivectl.cli.upload import upload
from archivectl.core.logging import setup_logging
from archivectl.core.output import OutputFormat

# =============================================================================
# Main CLI Group
# =============================================================================


@click.group()
@click.version_option(version=__version__, prog_name="archivectl")
@click.option("--profile", "-p", envvar="ARCHIVECTL_PROFILE", help="Config profile to use")
@click.option(
    "--output",
    "-o",
    "output_format",
    type=click.Choice(["json", "table"]),
    default="table",
    help="Output format",
)
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (archive ID only)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(
    ctx: click.Context,
    profile: Optional[str],
    output_format: str,
    quiet: bool,
    verbose: bool,
) -> None:
    """archivectl - Multipart archive uploads to Glacier vaults.

    Large files are split into parts, uploaded in parallel, and verified
    with a SHA-256 tree hash.

    Get started:

      archivectl config init      # Create config file

      archivectl upload --help    # Required upload options
    """
    cli_ctx = ctx.ensure_object(Context)
    cli_ctx.profile_name = profile
    cli_ctx.output_format = OutputFormat.from_string(output_format)
    cli_ctx.quiet = quiet
    cli_ctx.verbose = verbose

    setup_logging(quiet=quiet, verbose=verbose)


# =============================================================================
# Register Commands
# =============================================================================

cli.add_command(config)
cli.add_command(upload)
cli.add_command(treehash)


# =============================================================================
# Entry Point
# =============================================================================


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
