"""
Claude Quest installer - CLI entrypoint.

Usage:
    cq-install
    cq-install --root ~/.claude-quest --debug
    python -m claude_quest_installer
"""

import asyncio
import os
import sys
from pathlib import Path

import click

from . import __version__
from .config import InstallerConfig
from .exceptions import InstallerError
from .logging_config import ENV_LOG_LEVEL
from .logging_config import setup_logging
from .orchestrator import run_install


@click.command()
@click.version_option(version=__version__, prog_name="cq-install")
@click.option(
    "--root",
    "install_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Installation root; the binary goes to <root>/bin (default: $CLAUDE_QUEST_HOME or ~/.claude-quest).",
)
@click.option("--quiet", "-q", is_flag=True, help="Only report errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
def main(install_root: Path | None, quiet: bool, debug: bool) -> None:
    """Download and install the latest Claude Quest (cq) binary."""
    if debug:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get(ENV_LOG_LEVEL, "INFO")
    setup_logging(level)

    if not quiet:
        click.echo("Installing Claude Quest...")

    try:
        config = InstallerConfig.from_env(install_root=install_root)
        result = asyncio.run(run_install(config))
    except InstallerError as e:
        click.echo(f"Installation failed: {e.message}", err=True)
        sys.exit(1)

    if not quiet:
        click.echo("Claude Quest installed successfully!")
        click.echo(f"Binary: {result.binary_path}")
        click.echo('Run "cq demo" to see animations or "cq" to watch your current project.')
