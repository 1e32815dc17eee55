# ABOUTME: CLI package for epubshelf, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click

from epubshelf.cli.commands import (
    edit_cmd,
    export_cmd,
    import_cmd,
    info_cmd,
    inspect_cmd,
    ls_cmd,
    rm_cmd,
)


@click.group()
@click.version_option(package_name="epubshelf")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """epubshelf - read, catalog, and edit EPUB metadata."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(import_cmd.import_command)
cli.add_command(inspect_cmd.inspect)
cli.add_command(ls_cmd.ls)
cli.add_command(info_cmd.info)
cli.add_command(edit_cmd.edit)
cli.add_command(export_cmd.export)
cli.add_command(rm_cmd.rm)
