"""
Test suite for ecourtlookup.

This package contains all unit tests for the ecourtlookup client, organized by
module to mirror the source code structure.

Test Organization:
    - test_apis/: Court-name decoding, models, request pipeline, client and
      bulk cause-list retrieval
    - test_auth/: Credential storage and single-flight token management
    - test_utils/: Configuration helpers
    - test_cli/: Click command-line interface

Python Learning Notes:
    - __init__.py makes this directory a Python package
    - Tests are discovered automatically by pytest
    - Test files should start with test_ prefix
"""
