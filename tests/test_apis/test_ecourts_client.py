"""
Tests for CourtLookupClient.

Covers the typed call surface, the envelope handling, the mapping of HTTP
statuses to exceptions, and credential issuance and persistence as seen from
the client.
"""

import json

import httpx
import pytest

from ecourtlookup.apis.ecourts import CourtLookupClient
from ecourtlookup.apis.models import CauseListCriteria
from ecourtlookup.auth.credential_store import CredentialStore
from ecourtlookup.errors import (
    ApiStatusError,
    AuthorizationExpiredError,
    InvalidParametersError,
    IssuanceError,
    NetworkError,
    NotFoundError,
    UnexpectedResponseError,
)
from ecourtlookup.utils.config import ClientConfig
from tests.conftest import envelope


class TestListings:
    """Tests for the state → district → complex → court listings."""

    @pytest.mark.asyncio
    async def test_list_states(self, lookup_client, respx_router, token_route, states_payload):
        respx_router.get("/court/states").respond(200, json=states_payload)

        states = await lookup_client.list_states()

        assert [s["state_code"] for s in states] == ["UP", "WB"]
        assert token_route.call_count == 1

    @pytest.mark.asyncio
    async def test_list_districts_posts_state_code(self, lookup_client, respx_router, token_route):
        route = respx_router.post("/court/districts").respond(
            200, json=envelope({"districts": [{"dist_code": "1", "dist_name": "Agra"}]})
        )

        districts = await lookup_client.list_districts("UP")

        assert districts == [{"dist_code": "1", "dist_name": "Agra"}]
        assert json.loads(route.calls.last.request.content) == {"state_code": "UP"}

    @pytest.mark.asyncio
    async def test_list_complexes(self, lookup_client, respx_router, token_route):
        route = respx_router.post("/court/complex").respond(
            200, json=envelope({"courtComplex": [{"complex_code": "C1"}]})
        )

        complexes = await lookup_client.list_complexes("UP", "D1")

        assert complexes == [{"complex_code": "C1"}]
        assert json.loads(route.calls.last.request.content) == {
            "state_code": "UP",
            "district_code": "D1",
        }

    @pytest.mark.asyncio
    async def test_missing_listing_field_is_empty(self, lookup_client, respx_router, token_route):
        respx_router.post("/court/districts").respond(200, json=envelope({}))

        assert await lookup_client.list_districts("UP") == []

    @pytest.mark.asyncio
    async def test_list_court_names_excludes_placeholders(
        self, lookup_client, respx_router, token_route, court_names_payload
    ):
        route = respx_router.post("/court/names").respond(200, json=court_names_payload)

        records = await lookup_client.list_court_names("UP", "D1", "C1")

        assert [(r.group_code, r.court_number) for r in records] == [
            ("3", "1"),
            ("3", "2"),
            ("1", "4"),
        ]
        assert all(r.court_number not in ("0", "D") for r in records)
        assert json.loads(route.calls.last.request.content) == {
            "state_code": "UP",
            "district_code": "D1",
            "court_code": "C1",
        }

    @pytest.mark.asyncio
    async def test_empty_codes_are_rejected_before_sending(self, lookup_client, respx_router):
        route = respx_router.post("/court/names")

        with pytest.raises(ValueError, match="complex_code"):
            await lookup_client.list_court_names("UP", "D1", "  ")

        assert route.call_count == 0


class TestCauseListAndCases:
    """Tests for get_cause_list() and get_case_details()."""

    @pytest.mark.asyncio
    async def test_get_cause_list_sends_criteria(
        self, lookup_client, respx_router, token_route, cause_list_html
    ):
        route = respx_router.post("/court/cause-list").respond(
            200, json=envelope({"cases": cause_list_html})
        )
        criteria = CauseListCriteria(
            state_code="UP",
            district_code="1",
            court_code="3",
            court_number="1",
            cause_list_type="criminal",
            date="2026-10-18",
        )

        html = await lookup_client.get_cause_list(criteria)

        assert html == cause_list_html
        assert json.loads(route.calls.last.request.content) == {
            "state_code": "UP",
            "district_code": "1",
            "court_code": "3",
            "court_number": "1",
            "cause_list_type": "CRIMINAL",
            "date": "18-10-2026",
        }

    @pytest.mark.asyncio
    async def test_get_case_details(self, lookup_client, respx_router, token_route):
        route = respx_router.get("/cases/details").respond(
            200, json=envelope({"cnr": "UPBL060053572018", "history": []})
        )

        details = await lookup_client.get_case_details(" UPBL060053572018 ")

        assert details["history"] == []
        assert route.calls.last.request.url.params["cnr"] == "UPBL060053572018"

    @pytest.mark.asyncio
    async def test_empty_cnr_is_rejected(self, lookup_client):
        with pytest.raises(ValueError, match="cnr"):
            await lookup_client.get_case_details("")


class TestErrorMapping:
    """Tests for how failing responses surface to callers."""

    @pytest.mark.asyncio
    async def test_not_found_is_distinct_from_auth_and_bad_parameters(
        self, lookup_client, respx_router, token_route
    ):
        respx_router.get("/cases/details").respond(404, text="No case found")

        with pytest.raises(NotFoundError) as exc_info:
            await lookup_client.get_case_details("UPBL060053572018")

        error = exc_info.value
        assert error.status_code == 404
        assert "No case found" in error.detail
        assert not isinstance(error, AuthorizationExpiredError)
        assert not isinstance(error, InvalidParametersError)

    @pytest.mark.asyncio
    async def test_bad_parameters(self, lookup_client, respx_router, token_route):
        respx_router.get("/cases/details").respond(400, text="Invalid CNR")

        with pytest.raises(InvalidParametersError) as exc_info:
            await lookup_client.get_case_details("XX")

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_persistent_unauthorized(self, lookup_client, respx_router, token_route):
        route = respx_router.get("/cases/details").respond(401)

        with pytest.raises(AuthorizationExpiredError):
            await lookup_client.get_case_details("UPBL060053572018")

        assert route.call_count == 2
        assert token_route.call_count == 2

    @pytest.mark.asyncio
    async def test_server_error(self, lookup_client, respx_router, token_route):
        respx_router.get("/court/states").respond(503, text="maintenance")

        with pytest.raises(ApiStatusError) as exc_info:
            await lookup_client.list_states()

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_unauthorized_once_is_recovered(
        self, lookup_client, respx_router, token_route, states_payload
    ):
        route = respx_router.get("/court/states").mock(
            side_effect=[httpx.Response(401), httpx.Response(200, json=states_payload)]
        )

        states = await lookup_client.list_states()

        assert len(states) == 2
        assert route.calls[1].request.headers["Authorization"] == "Bearer token-2"

    @pytest.mark.asyncio
    async def test_non_json_body(self, lookup_client, respx_router, token_route):
        respx_router.get("/court/states").respond(200, text="<html>oops</html>")

        with pytest.raises(UnexpectedResponseError):
            await lookup_client.list_states()

    @pytest.mark.asyncio
    async def test_envelope_without_status(self, lookup_client, respx_router, token_route):
        respx_router.get("/court/states").respond(200, json={"data": {"states": []}})

        with pytest.raises(UnexpectedResponseError):
            await lookup_client.list_states()

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope(self, lookup_client, respx_router, token_route):
        respx_router.get("/court/states").respond(
            200, json={"status": "error", "message": "session expired upstream"}
        )

        with pytest.raises(UnexpectedResponseError, match="session expired upstream"):
            await lookup_client.list_states()

    @pytest.mark.asyncio
    async def test_network_failure(self, lookup_client, respx_router, token_route):
        respx_router.get("/court/states").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(NetworkError):
            await lookup_client.list_states()


class TestCredentials:
    """Tests for issuance, initialize() and the durable cache."""

    @pytest.mark.asyncio
    async def test_issue_token_sends_no_authorization(self, lookup_client, token_route):
        token = await lookup_client.issue_token()

        assert token == "token-1"
        assert "Authorization" not in token_route.calls.last.request.headers

    @pytest.mark.asyncio
    async def test_issue_token_error_status(self, lookup_client, respx_router):
        respx_router.post("/auth/token").respond(500)

        with pytest.raises(IssuanceError) as exc_info:
            await lookup_client.issue_token()

        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_issue_token_without_token(self, lookup_client, respx_router):
        respx_router.post("/auth/token").respond(200, json=envelope({}))

        with pytest.raises(IssuanceError, match="did not return a token"):
            await lookup_client.issue_token()

    @pytest.mark.asyncio
    async def test_issue_token_malformed_body(self, lookup_client, respx_router):
        respx_router.post("/auth/token").respond(200, text="not json")

        with pytest.raises(IssuanceError, match="Malformed"):
            await lookup_client.issue_token()

    @pytest.mark.asyncio
    async def test_initialize_acquires_and_persists(
        self, lookup_client, token_route, token_cache_path
    ):
        assert await lookup_client.initialize() is True

        cached = json.loads(token_cache_path.read_text(encoding="utf-8"))
        assert cached == {"ecourt_token": "token-1"}

    @pytest.mark.asyncio
    async def test_initialize_reports_failure(self, lookup_client, respx_router):
        respx_router.post("/auth/token").respond(500)

        assert await lookup_client.initialize() is False

    @pytest.mark.asyncio
    async def test_cached_credential_survives_new_client(
        self, client_config, respx_router, token_route, states_payload
    ):
        route = respx_router.get("/court/states").respond(200, json=states_payload)

        async with CourtLookupClient(client_config) as first:
            await first.list_states()
        async with CourtLookupClient(client_config) as second:
            await second.list_states()

        assert token_route.call_count == 1
        assert route.calls.last.request.headers["Authorization"] == "Bearer token-1"

    @pytest.mark.asyncio
    async def test_injected_store_and_http_client(self, respx_router, states_payload):
        respx_router.get("/court/states").respond(200, json=states_payload)
        store = CredentialStore()
        store.write("preset")
        config = ClientConfig(base_url="http://ecourts.test", token_cache_path=None)

        async with httpx.AsyncClient(base_url="http://ecourts.test") as http_client:
            client = CourtLookupClient(config, http_client=http_client, credential_store=store)
            await client.list_states()
            await client.aclose()

            assert not http_client.is_closed


class TestHealth:
    """Tests for check_health()."""

    @pytest.mark.asyncio
    async def test_healthy(self, lookup_client, respx_router):
        route = respx_router.get("/health").respond(200, json={"status": "ok"})

        assert await lookup_client.check_health() == {"status": "ok"}
        assert "Authorization" not in route.calls.last.request.headers

    @pytest.mark.asyncio
    async def test_non_json_health_body(self, lookup_client, respx_router):
        respx_router.get("/health").respond(200, text="<html>ok</html>")

        with pytest.raises(UnexpectedResponseError) as exc_info:
            await lookup_client.check_health()

        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_unhealthy(self, lookup_client, respx_router):
        respx_router.get("/health").respond(503, text="down")

        with pytest.raises(ApiStatusError):
            await lookup_client.check_health()

    @pytest.mark.asyncio
    async def test_unreachable(self, lookup_client, respx_router):
        respx_router.get("/health").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(NetworkError):
            await lookup_client.check_health()


class TestConstruction:
    """Tests for client construction."""

    def test_invalid_base_url(self):
        with pytest.raises(ValueError, match="http"):
            CourtLookupClient(ClientConfig(base_url="ftp://x", token_cache_path=None))
