"""
Case lookup and backend health CLI commands.
"""

import click

from .common import echo_json, run_lookup


@click.command()
@click.argument("cnr")
@click.pass_context
def case(ctx: click.Context, cnr: str):
    """
    Show the details of a case by its CNR (Case Number Reference).

    Exits with status 2 when no case matches the CNR.

    Example:
        ecourtlookup case UPBL060053572018
    """
    data = run_lookup(ctx, lambda client: client.get_case_details(cnr.strip()))
    echo_json(data)


@click.command()
@click.pass_context
def health(ctx: click.Context):
    """
    Check that the eCourts backend is reachable.

    Example:
        ecourtlookup health
    """
    data = run_lookup(ctx, lambda client: client.check_health())
    echo_json(data)
