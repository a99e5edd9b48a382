"""Local tree hash command for archivectl."""

from __future__ import annotations

from pathlib import Path

import click

from archivectl.cli.common import Context, handle_errors, pass_context
from archivectl.core.exceptions import SourceReadError
from archivectl.core.output import OutputFormat, print_output
from archivectl.core.validation import validate_source_file
from archivectl.uploaders.treehash import file_tree_hash, to_hex


@click.command("treehash")
@click.argument("file_path", metavar="FILE")
@pass_context
@handle_errors
def treehash(ctx: Context, file_path: str) -> None:
    """Print the SHA-256 tree hash of a local file.

    The value matches the checksum a vault reports for the uploaded archive.

    Example:
        archivectl treehash backup.tar
    """
    source: Path = validate_source_file(file_path)
    try:
        digest, size = file_tree_hash(source)
    except OSError as e:
        raise SourceReadError(str(source), 0, e) from e

    if ctx.quiet:
        click.echo(to_hex(digest))
        return

    print_output(
        {"file": str(source), "size": size, "tree_hash": to_hex(digest)},
        format=ctx.output_format,
        column_labels={"tree_hash": "Tree Hash"},
    )
