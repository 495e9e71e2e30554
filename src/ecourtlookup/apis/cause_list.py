"""
Bulk cause-list retrieval for every court in a court complex.

A court complex typically seats a dozen or more courts, each publishing its own
daily cause list. fetch_bulk_cause_lists() decodes the complex's courts and then
requests each court's list one after another, pausing between courts so the
backend is not hit with a burst of requests.

Each court yields a CourtCauseList with one of three statuses:
    - "success": the HTML contains at least one case row
    - "no-data": the backend answered 404, answered 2xx without a successful
                 envelope, or the HTML holds only headers or a single
                 "no cases" colspan row
    - "error":   any other EcourtsError; the message is kept on the result so
                 one failing court does not abort the rest of the complex

Python Learning Notes:
    - BeautifulSoup's html.parser needs no extra C dependencies
    - tr.find("td", colspan=True) matches cells that carry a colspan attribute
      with any value
"""

import asyncio
from datetime import date
from typing import Callable, List, Optional, Union

from bs4 import BeautifulSoup

from ..errors import EcourtsError, NotFoundError, UnexpectedResponseError
from ..utils import get_logger
from .ecourts import CourtLookupClient
from .models import CauseListCriteria, CourtCauseList

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int, CourtCauseList], None]


def _answered_ok(error: UnexpectedResponseError) -> bool:
    return error.status_code is not None and 200 <= error.status_code < 300


def has_table_data(html: Optional[str]) -> bool:
    """
    Check whether cause-list HTML lists at least one case.

    Courts with nothing listed still return a table: a header row plus a
    single row whose cell spans the whole table ("No cases listed"). Only
    rows made of ordinary <td> cells count as data.

    Args:
        html: Cause-list HTML as returned by the backend.

    Returns:
        bool: True when the first table has a data row.

    Examples:
        >>> has_table_data("<table><tr><th>Case</th></tr><tr><td>CS 1/2024</td></tr></table>")
        True
        >>> has_table_data('<table><tr><td colspan="4">No cases</td></tr></table>')
        False
    """
    if not html:
        return False

    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table")
    if table is None:
        return False

    for index, row in enumerate(table.find_all("tr")):
        if index == 0 and row.find("th") is not None:
            continue
        if row.find("td", colspan=True) is not None:
            continue
        if row.find("td") is not None:
            return True
    return False


async def fetch_bulk_cause_lists(
    client: CourtLookupClient,
    state_code: str,
    district_code: str,
    complex_code: str,
    cause_list_type: str,
    list_date: Union[str, date],
    delay: Optional[float] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> List[CourtCauseList]:
    """
    Fetch the cause list of every court in a court complex.

    Args:
        client: Client used for all backend calls.
        state_code: State code, e.g. "UP".
        district_code: District code within the state.
        complex_code: Court complex code within the district.
        cause_list_type: "CIVIL" or "CRIMINAL" (case-insensitive).
        list_date: The hearing date, as a date or a DD-MM-YYYY / YYYY-MM-DD string.
        delay: Seconds to pause between courts. Defaults to the client's
            configured bulk_request_delay.
        on_progress: Called as on_progress(done, total, result) after each court.

    Returns:
        List[CourtCauseList]: One result per court, in backend order.

    Raises:
        EcourtsError: If the court names themselves cannot be retrieved.
        pydantic.ValidationError: If the list type or date is invalid.
    """
    if delay is None:
        delay = client.config.bulk_request_delay

    courts = await client.list_court_names(state_code, district_code, complex_code)
    logger.info(f"Fetching cause lists for {len(courts)} courts in complex {complex_code}")

    results: List[CourtCauseList] = []
    for index, court in enumerate(courts):
        criteria = CauseListCriteria(
            state_code=state_code,
            district_code=district_code,
            court_code=court.group_code,
            court_number=court.court_number,
            cause_list_type=cause_list_type,
            date=list_date,
        )
        try:
            html = await client.get_cause_list(criteria)
        except NotFoundError:
            result = CourtCauseList(court=court, status="no-data")
        except UnexpectedResponseError as e:
            if _answered_ok(e):
                logger.debug(f"No usable cause list for {court.display_name}: {e}")
                result = CourtCauseList(court=court, status="no-data")
            else:
                logger.warning(f"Cause list for {court.display_name} failed: {e}")
                result = CourtCauseList(court=court, status="error", error=str(e))
        except EcourtsError as e:
            logger.warning(f"Cause list for {court.display_name} failed: {e}")
            result = CourtCauseList(court=court, status="error", error=str(e))
        else:
            if has_table_data(html):
                result = CourtCauseList(court=court, status="success", html=html)
            else:
                result = CourtCauseList(court=court, status="no-data")

        results.append(result)
        if on_progress is not None:
            on_progress(index + 1, len(courts), result)

        if delay and index < len(courts) - 1:
            await asyncio.sleep(delay)

    return results
