"""
Decoder for the backend's compact court-name string.

The /court/names endpoint does not return JSON records. It returns a single
string in which each court is a segment:

    "<group>^<number>~<name>#<group>^<number>~<name>#..."

For example:

    "0~Select Court Name#3^1~1-Moushumi De-District and Sessions Judge#D~--------"

Segments without "^" are placeholder rows the backend inserts for its own
drop-down ("Select Court Name", visual separators) and carry no data. Court
numbers "0" and "D" mark the same placeholders when they do appear after a "^".

The display name is everything after the first "~" in the detail field. Names
that themselves contain "~" are kept whole rather than cut at the second "~".

Python Learning Notes:
    - str.partition() splits on the first occurrence only and always returns
      a 3-tuple, which avoids index errors on malformed input
    - frozenset gives O(1) membership tests for the sentinel values
"""

from typing import List, Optional

from .models import CourtRecord

RECORD_DELIMITER = "#"
GROUP_DELIMITER = "^"
NAME_DELIMITER = "~"

# Court numbers the backend uses for "select a court" and separator rows
SENTINEL_COURT_NUMBERS = frozenset({"0", "D"})


def decode_segment(segment: str) -> Optional[CourtRecord]:
    """
    Decode one "#"-separated segment into a CourtRecord.

    Args:
        segment: A single segment such as "3^1~1-Judge A".

    Returns:
        Optional[CourtRecord]: The decoded court, or None when the segment is a
            placeholder row or is missing a required field.

    Example:
        >>> decode_segment("3^2~2-Akhtabul Ala-Asstt Sessions Judge").court_number
        '2'
        >>> decode_segment("0~Select Court Name") is None
        True
    """
    if GROUP_DELIMITER not in segment:
        return None

    group_code, _, detail = segment.partition(GROUP_DELIMITER)
    court_number, found, display_name = detail.partition(NAME_DELIMITER)
    if not found:
        return None

    group_code = group_code.strip()
    court_number = court_number.strip()
    display_name = display_name.strip()

    if not group_code or not court_number or not display_name:
        return None
    if court_number in SENTINEL_COURT_NUMBERS:
        return None

    return CourtRecord(
        group_code=group_code,
        court_number=court_number,
        display_name=display_name,
        raw_segment=segment,
    )


def decode_court_names(raw: Optional[str]) -> List[CourtRecord]:
    """
    Decode the full court-name string into structured records.

    Placeholder and malformed segments are skipped; the order of the remaining
    courts follows the backend's order.

    Args:
        raw: The courtNames field from a /court/names response. None or an
             empty string yields an empty list.

    Returns:
        List[CourtRecord]: One record per real court.

    Examples:
        >>> [r.court_number for r in decode_court_names("3^1~Judge A#3^2~Judge B")]
        ['1', '2']
        >>> decode_court_names("0~Select#D~----")
        []
    """
    if not raw:
        return []

    records = []
    for segment in raw.split(RECORD_DELIMITER):
        record = decode_segment(segment)
        if record is not None:
            records.append(record)
    return records
