"""
Court hierarchy CLI commands.

Walks the backend's state → district → court complex → court hierarchy. The
codes printed by each command are the arguments of the next one.
"""

from dataclasses import asdict

import click

from .common import describe, echo_json, run_lookup

json_option = click.option("--json", "as_json", is_flag=True, help="Print raw JSON")


@click.group()
def courts():
    """
    Browse states, districts, court complexes and courts.

    Commands:
        states     - List states
        districts  - List districts of a state
        complexes  - List court complexes of a district
        names      - List courts sitting in a court complex
    """
    pass


def _print_listing(items, as_json: bool, empty_message: str) -> None:
    if as_json:
        echo_json(items)
        return
    if not items:
        click.echo(empty_message)
        return
    for item in items:
        click.echo(describe(item))


@courts.command()
@json_option
@click.pass_context
def states(ctx: click.Context, as_json: bool):
    """
    List states.

    Example:
        ecourtlookup courts states
    """
    items = run_lookup(ctx, lambda client: client.list_states())
    _print_listing(items, as_json, "No states returned.")


@courts.command()
@click.argument("state_code")
@json_option
@click.pass_context
def districts(ctx: click.Context, state_code: str, as_json: bool):
    """
    List districts of STATE_CODE.

    Example:
        ecourtlookup courts districts UP
    """
    items = run_lookup(ctx, lambda client: client.list_districts(state_code))
    _print_listing(items, as_json, f"No districts found for state {state_code}.")


@courts.command()
@click.argument("state_code")
@click.argument("district_code")
@json_option
@click.pass_context
def complexes(ctx: click.Context, state_code: str, district_code: str, as_json: bool):
    """
    List court complexes of a district.

    Example:
        ecourtlookup courts complexes UP 1
    """
    items = run_lookup(
        ctx, lambda client: client.list_complexes(state_code, district_code)
    )
    _print_listing(items, as_json, "No court complexes found.")


@courts.command()
@click.argument("state_code")
@click.argument("district_code")
@click.argument("complex_code")
@json_option
@click.pass_context
def names(
    ctx: click.Context,
    state_code: str,
    district_code: str,
    complex_code: str,
    as_json: bool,
):
    """
    List courts sitting in a court complex.

    Each line shows the court code and court number to pass to
    "cause-list fetch", followed by the court's name.

    Example:
        ecourtlookup courts names UP 1 1010001
    """
    records = run_lookup(
        ctx,
        lambda client: client.list_court_names(state_code, district_code, complex_code),
    )
    if as_json:
        echo_json([asdict(record) for record in records])
        return
    if not records:
        click.echo("No courts found in this complex.")
        return
    for record in records:
        click.echo(f"{record.group_code:>3} {record.court_number:>4}  {record.display_name}")
