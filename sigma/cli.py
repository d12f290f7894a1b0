"""
Command line entry point.

    sigma              start the interactive prompt
    sigma FILE         evaluate FILE, printing the value of each bare expression
"""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import SigmaConfig
from .diagnostics import SigmaError, render_error
from .interpreter import run
from .repl import Repl

logger = logging.getLogger(__name__)
err_console = Console(stderr=True)


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
            ),
        ],
    )


@click.command()
@click.argument("file", required=False, type=click.Path(dir_okay=False))
@click.option("-v", "--verbose", is_flag=True, help="Log import and configuration lookups.")
@click.option("--no-constants", is_flag=True, help="Do not auto-import the constants file.")
@click.version_option(__version__, prog_name="sigma")
def main(file: Optional[str], verbose: bool, no_constants: bool):
    """Unit-aware calculator. Runs FILE, or starts a prompt without one."""
    _configure_logging(verbose)
    config = SigmaConfig.from_env()
    logger.debug("Configuration directory: %s", config.config_dir)

    if file is None:
        Repl(config, load_constants=not no_constants).loop()
        return

    try:
        source = Path(file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read %s: %s", file, exc)
        click.echo(f"Failed to read file '{file}'", err=True)
        raise click.exceptions.Exit(1)

    try:
        run(
            source,
            {},
            is_repl=False,
            current_filename=file,
            output=click.echo,
            config=config,
            load_constants=not no_constants,
        )
    except SigmaError as error:
        render_error(error, source)
        raise click.exceptions.Exit(1)


if __name__ == "__main__":
    main()
