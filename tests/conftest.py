"""
Shared test fixtures and configuration for ecourtlookup tests.

This module provides reusable fixtures for testing the API session layer
without a real backend. HTTP traffic is intercepted with respx, and every
client gets an isolated credential cache under pytest's tmp_path.

Key Fixtures:
    - client_config: ClientConfig pointing at a fake base URL and a temp cache
    - credential_store: CredentialStore backed by a temp file
    - respx_router: respx mock router scoped to the fake base URL
    - lookup_client: CourtLookupClient wired to the above
    - Sample payloads mirroring real backend responses

Python Learning Notes:
    - conftest.py is automatically discovered by pytest
    - Fixtures defined here are available to all tests without import
    - yield in fixtures allows teardown code after the test
"""

from typing import Any, Dict

import httpx
import pytest
import pytest_asyncio
import respx

from ecourtlookup.apis.ecourts import CourtLookupClient
from ecourtlookup.auth.credential_store import CredentialStore
from ecourtlookup.utils.config import ClientConfig

BASE_URL = "http://ecourts.test"

COURT_NAMES_RAW = (
    "0~Select Court Name"
    "#3^1~1-Moushumi De-District and Sessions Judge"
    "#3^2~2-Akhtabul Ala-Asstt Sessions Judge"
    "#D~--------"
    "#1^0~Placeholder"
    "#1^4~4-Civil Judge (Sr. Div.)~Court Room 2"
)


def envelope(data: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap data the way every successful backend response is wrapped."""
    return {"status": "success", "data": data}


@pytest.fixture
def token_cache_path(tmp_path):
    return tmp_path / "cache" / "credentials.json"


@pytest.fixture
def client_config(token_cache_path):
    """ClientConfig isolated from the developer's environment."""
    return ClientConfig(
        base_url=BASE_URL,
        token_cache_path=token_cache_path,
        request_timeout=5.0,
        issuance_timeout=2.0,
        bulk_request_delay=0.0,
    )


@pytest.fixture
def credential_store(token_cache_path):
    return CredentialStore(token_cache_path)


@pytest.fixture
def respx_router():
    """
    respx router that intercepts every request to BASE_URL.

    Routes not explicitly mocked by a test raise an error instead of reaching
    the network.
    """
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        yield router


@pytest.fixture
def token_route(respx_router):
    """Credential endpoint issuing "token-1", "token-2", ... on each call."""
    counter = {"n": 0}

    def _issue(request):
        counter["n"] += 1
        return httpx.Response(
            200, json=envelope({"token": f"token-{counter['n']}"})
        )

    return respx_router.post("/auth/token").mock(side_effect=_issue)


@pytest_asyncio.fixture
async def lookup_client(client_config, respx_router):
    client = CourtLookupClient(client_config)
    yield client
    await client.aclose()


@pytest.fixture
def states_payload():
    return envelope(
        {
            "states": [
                {"state_code": "UP", "state_name": "Uttar Pradesh"},
                {"state_code": "WB", "state_name": "West Bengal"},
            ]
        }
    )


@pytest.fixture
def court_names_payload():
    return envelope({"courtNames": COURT_NAMES_RAW})


@pytest.fixture
def cause_list_html():
    return (
        "<table>"
        "<tr><th>Sr No</th><th>Case</th><th>Party</th></tr>"
        "<tr><td>1</td><td>CS 12/2024</td><td>A vs B</td></tr>"
        "</table>"
    )


@pytest.fixture
def empty_cause_list_html():
    return (
        "<table>"
        "<tr><th>Sr No</th><th>Case</th><th>Party</th></tr>"
        '<tr><td colspan="3">No cases listed</td></tr>'
        "</table>"
    )
