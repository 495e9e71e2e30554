"""
Cause-list CLI commands.

Fetches a court's daily cause list, either for a single court or for every
court sitting in a court complex. Cause lists are HTML tables published by the
courts; they are written to files (or stdout) unchanged.
"""

import re
from datetime import date
from pathlib import Path
from typing import Optional

import click

from ..apis.cause_list import fetch_bulk_cause_lists
from ..apis.models import CauseListCriteria, CourtCauseList
from .common import echo_json, run_lookup

STATUS_ICONS = {"success": "✅", "no-data": "📭", "error": "❌"}

type_option = click.option(
    "--type",
    "cause_list_type",
    type=click.Choice(["CIVIL", "CRIMINAL"], case_sensitive=False),
    default="CIVIL",
    show_default=True,
    help="Cause list type",
)
date_option = click.option(
    "--date",
    "list_date",
    default=None,
    help="Hearing date as YYYY-MM-DD or DD-MM-YYYY (default: today)",
)


def _safe_filename(text: str) -> str:
    return re.sub(r"[^A-Za-z0-9._-]+", "_", text).strip("_")[:80] or "court"


@click.group(name="cause-list")
def cause_list():
    """
    Fetch daily cause lists.

    Commands:
        fetch - Cause list of a single court
        bulk  - Cause lists of every court in a court complex
    """
    pass


@cause_list.command()
@click.argument("state_code")
@click.argument("district_code")
@click.argument("court_code")
@click.argument("court_number")
@type_option
@date_option
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the cause-list HTML to this file instead of stdout",
)
@click.pass_context
def fetch(
    ctx: click.Context,
    state_code: str,
    district_code: str,
    court_code: str,
    court_number: str,
    cause_list_type: str,
    list_date: Optional[str],
    output: Optional[Path],
):
    """
    Fetch the cause list of one court.

    COURT_CODE and COURT_NUMBER are the first two columns printed by
    "courts names".

    Example:
        ecourtlookup cause-list fetch UP 1 3 1 --type CRIMINAL --date 2026-10-18
    """

    async def _fetch(client) -> str:
        criteria = CauseListCriteria(
            state_code=state_code,
            district_code=district_code,
            court_code=court_code,
            court_number=court_number,
            cause_list_type=cause_list_type,
            date=list_date or date.today(),
        )
        return await client.get_cause_list(criteria)

    html = run_lookup(ctx, _fetch)
    if output is None:
        click.echo(html)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    click.echo(f"Saved cause list to {output}")


@cause_list.command()
@click.argument("state_code")
@click.argument("district_code")
@click.argument("complex_code")
@type_option
@date_option
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write one HTML file per court with cases listed",
)
@click.option(
    "--delay",
    type=float,
    default=None,
    help="Seconds between courts (default: $ECOURTS_BULK_DELAY or 0.5)",
)
@click.option("--json", "as_json", is_flag=True, help="Print a JSON summary")
@click.pass_context
def bulk(
    ctx: click.Context,
    state_code: str,
    district_code: str,
    complex_code: str,
    cause_list_type: str,
    list_date: Optional[str],
    output_dir: Optional[Path],
    delay: Optional[float],
    as_json: bool,
):
    """
    Fetch the cause list of every court in a court complex.

    Example:
        ecourtlookup cause-list bulk UP 1 1010001 --date 2026-10-18 --output-dir lists
    """

    def _progress(done: int, total: int, result: CourtCauseList) -> None:
        if not as_json:
            icon = STATUS_ICONS.get(result.status, "")
            click.echo(f"[{done}/{total}] {icon} {result.court.display_name}")

    async def _bulk(client):
        return await fetch_bulk_cause_lists(
            client,
            state_code,
            district_code,
            complex_code,
            cause_list_type,
            list_date or date.today(),
            delay=delay,
            on_progress=_progress,
        )

    results = run_lookup(ctx, _bulk)

    saved = []
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        for result in results:
            if result.status != "success":
                continue
            court = result.court
            filename = _safe_filename(
                f"{court.group_code}-{court.court_number}-{court.display_name}"
            )
            path = output_dir / f"{filename}.html"
            path.write_text(result.html or "", encoding="utf-8")
            saved.append(str(path))

    if as_json:
        echo_json(
            [
                {
                    "court_code": r.court.group_code,
                    "court_number": r.court.court_number,
                    "name": r.court.display_name,
                    "status": r.status,
                    "error": r.error,
                }
                for r in results
            ]
        )
        return

    ready = sum(1 for r in results if r.status == "success")
    click.echo(f"\nCourts with cases listed: {ready}/{len(results)}")
    for path in saved:
        click.echo(f"  saved {path}")
