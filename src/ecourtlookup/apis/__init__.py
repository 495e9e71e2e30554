"""
API Clients Module for the eCourts lookup backend.

This module provides the typed, authenticated interface to the eCourts
court-records service. It standardizes how the application talks to the
backend and hides credential handling from callers entirely.

The module is organised as:
    - ecourts.py: CourtLookupClient, the typed call surface
    - pipeline.py: RequestPipeline, bearer credential attachment and one-shot
      401 recovery
    - court_names.py: Decoder for the compact court-name string format
    - cause_list.py: Bulk cause-list retrieval across a court complex
    - models.py: CourtRecord, CauseListCriteria and response envelope models

Usage Example:
    from ecourtlookup.apis import CauseListCriteria, CourtLookupClient

    async with CourtLookupClient() as client:
        courts = await client.list_court_names("UP", "D1", "C1")
        html = await client.get_cause_list(
            CauseListCriteria(
                state_code="UP",
                district_code="D1",
                court_code=courts[0].group_code,
                court_number=courts[0].court_number,
                cause_list_type="CIVIL",
                date="2026-10-18",
            )
        )

Python Learning Notes:
    - __all__: Controls what's imported with 'from module import *'
    - Re-exports: Makes submodule classes available at package level
"""

from .cause_list import fetch_bulk_cause_lists, has_table_data
from .court_names import decode_court_names
from .ecourts import CourtLookupClient
from .models import (
    ApiEnvelope,
    CauseListCriteria,
    CauseListType,
    CourtCauseList,
    CourtRecord,
    to_api_date,
)
from .pipeline import RequestPipeline

__all__ = [
    "ApiEnvelope",
    "CauseListCriteria",
    "CauseListType",
    "CourtCauseList",
    "CourtLookupClient",
    "CourtRecord",
    "RequestPipeline",
    "decode_court_names",
    "fetch_bulk_cause_lists",
    "has_table_data",
    "to_api_date",
]
