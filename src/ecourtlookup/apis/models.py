"""
Data models shared by the eCourts API client.

This module defines the structures that cross the boundary between the backend
and callers of CourtLookupClient:

Key Components:
    - CourtRecord: One decoded court from the backend's court-name string
    - CourtCauseList: Outcome of fetching one court's cause list in a bulk run
    - ApiEnvelope: Validation model for the {status, data} response wrapper
    - CauseListCriteria: Validated parameters for a cause-list request
    - to_api_date(): Normalises dates to the backend's DD-MM-YYYY format

Design Patterns:
    - Frozen dataclasses for decoded values that must not be mutated
    - Pydantic models where input arrives from users or the network and must
      be validated before use

Python Learning Notes:
    - @dataclass(frozen=True): Instances are immutable and hashable
    - pydantic BaseModel: Validates and coerces fields at construction time
    - field_validator(mode="before"): Runs before pydantic's own type checks
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

API_DATE_FORMAT = "%d-%m-%Y"


@dataclass(frozen=True)
class CourtRecord:
    """
    A single court decoded from the backend's court-name string.

    The backend describes the courts in a complex as one delimited string such
    as "3^1~1-Moushumi De-District and Sessions Judge#3^2~2-...". Each data
    segment decodes to one CourtRecord; placeholder segments never do.

    Attributes:
        group_code (str): Backend database group the court belongs to (the
                          text before "^"). Sent as court_code when requesting
                          a cause list for this court.

        court_number (str): Court number within the group (the text between
                            "^" and the first "~"). Never "0" or "D", which
                            the backend uses for placeholder rows.

        display_name (str): Human-readable court name, trimmed and non-empty.
                            Everything after the first "~" in the segment.

        raw_segment (str): The undecoded segment, retained for debugging.
                           Decoding it again yields this same record.

    Usage Example:
        record = CourtRecord(
            group_code="3",
            court_number="1",
            display_name="1-Moushumi De-District and Sessions Judge",
            raw_segment="3^1~1-Moushumi De-District and Sessions Judge",
        )
    """

    group_code: str
    court_number: str
    display_name: str
    raw_segment: str


@dataclass
class CourtCauseList:
    """
    Result of fetching one court's cause list during a bulk fetch.

    Attributes:
        court (CourtRecord): The court the cause list belongs to.
        status (str): "success" when the HTML holds at least one case row,
                      "no-data" when the backend had nothing to list, or
                      "error" when the request failed.
        html (Optional[str]): Cause-list HTML, only set for "success".
        error (Optional[str]): Failure message, only set for "error".
    """

    court: CourtRecord
    status: str
    html: Optional[str] = None
    error: Optional[str] = None


def to_api_date(value: Union[str, date, datetime]) -> str:
    r"""
    Convert a date to the DD-MM-YYYY string the backend expects.

    Accepts date and datetime objects, backend-format strings ("18-10-2026")
    and ISO strings ("2026-10-18"). Strings are checked for both shape and
    calendar validity, so "31-02-2026" is rejected.

    Args:
        value: The date to convert.

    Returns:
        str: The date formatted as DD-MM-YYYY.

    Raises:
        ValueError: If the value is neither a date nor a valid date string in
            one of the accepted formats.

    Examples:
        >>> to_api_date("2026-10-18")
        '18-10-2026'
        >>> to_api_date(date(2026, 1, 5))
        '05-01-2026'
    """
    if isinstance(value, datetime):
        return value.date().strftime(API_DATE_FORMAT)
    if isinstance(value, date):
        return value.strftime(API_DATE_FORMAT)
    if not isinstance(value, str):
        raise ValueError(f"Unsupported date value: {value!r}")

    text = value.strip()
    for fmt in (API_DATE_FORMAT, "%Y-%m-%d"):
        try:
            return datetime.strptime(text, fmt).strftime(API_DATE_FORMAT)
        except ValueError:
            continue
    raise ValueError(f"Date '{value}' must be DD-MM-YYYY or YYYY-MM-DD")


class ApiEnvelope(BaseModel):
    """The {status, data} wrapper every backend response arrives in."""

    model_config = ConfigDict(extra="allow")

    status: str
    data: Dict[str, Any] = Field(default_factory=dict)
    message: Optional[str] = None

    @field_validator("data", mode="before")
    @classmethod
    def _null_data_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def is_success(self) -> bool:
        return self.status == "success"


class CauseListType(str, Enum):
    CIVIL = "CIVIL"
    CRIMINAL = "CRIMINAL"


class CauseListCriteria(BaseModel):
    """
    Validated parameters for a single court's cause list.

    Codes are accepted as strings or integers (the backend's state and
    district listings are not consistent about which) and stored as trimmed
    strings. The list type is case-insensitive and the date is normalised by
    to_api_date().

    Example:
        >>> criteria = CauseListCriteria(
        ...     state_code="UP", district_code="D1", court_code="3",
        ...     court_number="1", cause_list_type="civil", date="2026-10-18",
        ... )
        >>> criteria.to_payload()["date"]
        '18-10-2026'
    """

    state_code: str
    district_code: str
    court_code: str
    court_number: str
    cause_list_type: CauseListType = CauseListType.CIVIL
    date: str

    @field_validator(
        "state_code", "district_code", "court_code", "court_number", mode="before"
    )
    @classmethod
    def _non_empty_code(cls, value: Any) -> str:
        text = str(value).strip() if value is not None else ""
        if not text:
            raise ValueError("code must not be empty")
        return text

    @field_validator("cause_list_type", mode="before")
    @classmethod
    def _upper_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("date", mode="before")
    @classmethod
    def _api_date(cls, value: Any) -> str:
        return to_api_date(value)

    def to_payload(self) -> Dict[str, str]:
        """Return the JSON body for POST /court/cause-list."""
        return self.model_dump(mode="json")
