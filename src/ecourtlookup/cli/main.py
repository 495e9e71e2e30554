"""
Main CLI entry point for ecourtlookup.

This module provides the primary command-line interface using Click.
All commands are organized into subcommands for different lookups.
"""

from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from .. import __version__
from ..utils import setup_logging
from ..utils.config import ClientConfig
from .case import case, health
from .cause_list import cause_list
from .common import run_lookup
from .courts import courts


@click.group()
@click.version_option(version=__version__, prog_name="ecourtlookup")
@click.option(
    "--base-url",
    default=None,
    help="eCourts backend URL (default: $ECOURTS_API_BASE_URL or http://localhost:8000)",
)
@click.option(
    "--token-cache",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="File used to cache the bearer credential between runs",
)
@click.option(
    "--no-token-cache",
    is_flag=True,
    help="Keep the credential in memory only for this run",
)
@click.pass_context
def main(
    ctx: click.Context,
    base_url: Optional[str],
    token_cache: Optional[Path],
    no_token_cache: bool,
):
    """
    ecourtlookup - eCourts court-records lookup from the command line.

    Browse states, districts, court complexes and courts, fetch daily cause
    lists (for one court or a whole complex), and look up cases by CNR.

    \b
    Examples:
        ecourtlookup courts states
        ecourtlookup courts names UP 1 1010001
        ecourtlookup cause-list bulk UP 1 1010001 --date 2026-10-18 --output-dir lists
        ecourtlookup case UPBL060053572018
    """
    load_dotenv()
    setup_logging()

    config = ClientConfig()
    if base_url:
        config.base_url = base_url.rstrip("/")
    if no_token_cache:
        config.token_cache_path = None
    elif token_cache is not None:
        config.token_cache_path = token_cache.expanduser()
    ctx.obj = {"config": config}


@main.command()
@click.pass_context
def login(ctx: click.Context):
    """
    Acquire (or confirm) a bearer credential and cache it.

    Example:
        ecourtlookup login
    """

    async def _login(client) -> bool:
        return await client.initialize()

    if run_lookup(ctx, _login):
        click.echo("✅ Credential ready")
    else:
        click.echo("❌ Could not obtain a credential", err=True)
        ctx.exit(1)


# Register subcommands
main.add_command(courts)
main.add_command(cause_list)
main.add_command(case)
main.add_command(health)


if __name__ == "__main__":
    main()
