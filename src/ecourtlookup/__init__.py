"""
ecourtlookup: Async client and command-line tool for the eCourts lookup service.

This is the main package initialization file for ecourtlookup, a Python library
for querying an eCourts court-records backend: the state/district/complex/court
hierarchy, daily cause lists, and case details by CNR (Case Number Reference).

The ecourtlookup system provides:
    - An authenticated request pipeline that attaches a bearer credential to
      every call and recovers once from credential expiry (HTTP 401)
    - Single-flight credential acquisition shared by concurrent callers
    - A durable credential cache that survives process restarts
    - A decoder for the backend's compact "group^number~name#..." court strings
    - Bulk cause-list retrieval for every court in a court complex
    - A Click-based command-line interface

Package Structure:
    - apis/: Backend client, request pipeline, models, errors and decoders
    - auth/: Credential storage and single-flight token management
    - utils/: Logging setup and environment-driven configuration
    - cli/: Command-line entry points

Environment Requirements:
    - Python 3.11+ (specified in pyproject.toml)
    - ECOURTS_API_BASE_URL (defaults to http://localhost:8000)

Version History:
    - 0.1.0: Initial release
"""

__version__ = "0.1.0"
