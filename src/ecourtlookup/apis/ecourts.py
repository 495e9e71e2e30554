"""
eCourts lookup API client.

This module provides the typed call surface over the eCourts backend: the
state → district → court complex → court hierarchy, a court's daily cause list,
and case details by CNR (Case Number Reference).

Backend Endpoints:
    POST /auth/token                      issue a bearer credential (no body)
    GET  /court/states                    list states
    POST /court/districts                 {state_code}
    POST /court/complex                   {state_code, district_code}
    POST /court/names                     {state_code, district_code, court_code}
    POST /court/cause-list                {state_code, district_code, court_code,
                                           court_number, cause_list_type, date}
    GET  /cases/details?cnr=...           case details
    GET  /health                          unauthenticated health check

Every successful response carries a {"status": "success", "data": {...}}
envelope. Failures arrive as HTTP 400 (bad parameters), 404 (nothing found) or
401 (credential rejected, which RequestPipeline recovers from once).

Authentication:
    No API key is configured. The client obtains a bearer credential from
    /auth/token on first use, caches it durably (see CredentialStore), and
    replaces it when the backend rejects it.

Integration Points:
    - Builds its own TokenManager and RequestPipeline around one
      httpx.AsyncClient
    - Decodes court-name strings with court_names.decode_court_names()
    - Used by the CLI commands and by cause_list.fetch_bulk_cause_lists()

Python Learning Notes:
    - async with: The client is an async context manager that closes its
      HTTP connection pool on exit
    - Dependency injection: http_client and credential_store can be passed in,
      which is how the tests substitute mocked transports
"""

from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from ..auth import CredentialStore, TokenManager
from ..errors import (
    IssuanceError,
    NetworkError,
    UnexpectedResponseError,
    error_for_status,
)
from ..utils import get_logger
from ..utils.config import ClientConfig
from .court_names import decode_court_names
from .models import ApiEnvelope, CauseListCriteria, CourtRecord
from .pipeline import ISSUANCE_PATH, RequestPipeline


def _require(value: Any, name: str) -> str:
    text = str(value).strip() if value is not None else ""
    if not text:
        raise ValueError(f"{name} must not be empty")
    return text


class CourtLookupClient:
    """
    Async client for the eCourts court-records lookup backend.

    Each public method performs exactly one logical backend call through the
    RequestPipeline. The single refresh-and-retry on a rejected credential
    happens inside the pipeline and is invisible here.

    Args:
        config (Optional[ClientConfig]): Connection settings. Defaults to a
            ClientConfig read from the environment.
        http_client (Optional[httpx.AsyncClient]): Pre-built HTTP client. Must
            have the backend base URL set. The caller keeps ownership of an
            injected client; aclose() will not close it.
        credential_store (Optional[CredentialStore]): Credential holder.
            Defaults to a store backed by config.token_cache_path.

    Example Usage:
        >>> async with CourtLookupClient() as client:
        ...     states = await client.list_states()
        ...     courts = await client.list_court_names("UP", "D1", "C1")
        ...     print(courts[0].display_name)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        credential_store: Optional[CredentialStore] = None,
    ):
        self.config = config or ClientConfig()
        self.config.validate()
        self.logger = get_logger(__name__)

        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            base_url=self.config.base_url,
            headers={
                "Content-Type": "application/json",
                "User-Agent": self.config.user_agent,
            },
            timeout=self.config.request_timeout,
        )
        self.credential_store = credential_store or CredentialStore(
            self.config.token_cache_path
        )
        self.token_manager = TokenManager(
            self.credential_store,
            issue=self.issue_token,
            timeout=self.config.issuance_timeout,
        )
        self.pipeline = RequestPipeline(self.http_client, self.token_manager)
        self.logger.info(
            f"CourtLookupClient initialized for {self.config.base_url}"
        )

    async def __aenter__(self) -> "CourtLookupClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http_client.aclose()

    async def issue_token(self) -> str:
        """
        Obtain a brand-new bearer credential from the backend.

        This is the issuance operation injected into TokenManager; callers
        normally never call it directly. The request is sent through the
        pipeline, which recognises the issuance path and sends it without an
        Authorization header.

        Returns:
            str: The new credential.

        Raises:
            IssuanceError: On any non-2xx status or a body without a token.
            NetworkError: If the request could not be sent.
        """
        response = await self.pipeline.send("POST", ISSUANCE_PATH)
        if response.is_error:
            raise IssuanceError(
                f"Credential endpoint returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            envelope = ApiEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise IssuanceError(f"Malformed credential response: {e}") from e

        token = envelope.data.get("token") if envelope.is_success else None
        if not isinstance(token, str) or not token:
            raise IssuanceError("Credential endpoint did not return a token")
        return token

    async def initialize(self) -> bool:
        """
        Make sure a credential is available before the first real request.

        Returns:
            bool: True when a credential is cached or was just acquired,
                False when acquisition failed (the failure is logged).
        """
        try:
            await self.token_manager.get_valid()
            return True
        except IssuanceError as e:
            self.logger.error(f"Failed to initialize credential: {e}")
            return False

    async def check_health(self) -> Dict[str, Any]:
        """
        Query the backend's unauthenticated health endpoint.

        Returns:
            Dict[str, Any]: The decoded JSON body.

        Raises:
            ApiStatusError: On a non-2xx status.
            UnexpectedResponseError: If the body is not JSON.
            NetworkError: If the request could not be sent.
        """
        try:
            response = await self.http_client.get("/health")
        except httpx.TransportError as e:
            raise NetworkError(f"Health check failed: {e}") from e
        if response.is_error:
            raise error_for_status(response.status_code, response.text)
        try:
            return response.json()
        except ValueError as e:
            raise UnexpectedResponseError(
                f"Malformed health response: {e}",
                status_code=response.status_code,
            ) from e

    async def list_states(self) -> List[Dict[str, Any]]:
        """Return the states known to the backend (GET /court/states)."""
        data = await self._call("GET", "/court/states")
        return data.get("states") or []

    async def list_districts(self, state_code: str) -> List[Dict[str, Any]]:
        """Return the districts of a state (POST /court/districts)."""
        payload = {"state_code": _require(state_code, "state_code")}
        data = await self._call("POST", "/court/districts", json=payload)
        return data.get("districts") or []

    async def list_complexes(
        self, state_code: str, district_code: str
    ) -> List[Dict[str, Any]]:
        """Return the court complexes of a district (POST /court/complex)."""
        payload = {
            "state_code": _require(state_code, "state_code"),
            "district_code": _require(district_code, "district_code"),
        }
        data = await self._call("POST", "/court/complex", json=payload)
        return data.get("courtComplex") or []

    async def list_court_names(
        self, state_code: str, district_code: str, complex_code: str
    ) -> List[CourtRecord]:
        """
        Return the courts sitting in a court complex.

        The backend returns the courts as one encoded string; it is decoded
        here so placeholder rows ("Select Court Name", separators, court
        numbers "0" and "D") never reach the caller.

        Args:
            state_code: State code, e.g. "UP".
            district_code: District code within the state.
            complex_code: Court complex code within the district.

        Returns:
            List[CourtRecord]: Real courts, in backend order.

        Raises:
            ValueError: If any code is empty.
            InvalidParametersError: 400 from the backend.
            NotFoundError: 404 from the backend.
        """
        payload = {
            "state_code": _require(state_code, "state_code"),
            "district_code": _require(district_code, "district_code"),
            "court_code": _require(complex_code, "complex_code"),
        }
        data = await self._call("POST", "/court/names", json=payload)
        raw = data.get("courtNames") or ""
        self.logger.debug(f"Raw court names: {raw!r}")
        records = decode_court_names(raw)
        self.logger.info(
            f"Decoded {len(records)} courts for {state_code}/{district_code}/{complex_code}"
        )
        return records

    async def get_cause_list(self, criteria: CauseListCriteria) -> str:
        """
        Return one court's cause list for a date.

        Args:
            criteria: Validated request parameters. Use group_code of a
                CourtRecord as court_code and its court_number as court_number.

        Returns:
            str: The cause-list HTML as published by the court. Empty when the
                backend returned no "cases" field.

        Raises:
            InvalidParametersError: 400 from the backend.
            NotFoundError: No cause list for that court and date.
        """
        data = await self._call(
            "POST", "/court/cause-list", json=criteria.to_payload()
        )
        return data.get("cases") or ""

    async def get_case_details(self, cnr: str) -> Dict[str, Any]:
        """
        Return the details of one case by its CNR.

        Args:
            cnr: Case Number Reference, e.g. "UPBL060053572018".

        Returns:
            Dict[str, Any]: The response data; case history is under "history".

        Raises:
            ValueError: If cnr is empty.
            InvalidParametersError: Malformed CNR.
            NotFoundError: No case with that CNR.
        """
        params = {"cnr": _require(cnr, "cnr")}
        return await self._call("GET", "/cases/details", params=params)

    async def _call(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        response = await self.pipeline.send(method, path, **kwargs)
        if response.is_error:
            self.logger.warning(f"{method} {path} returned HTTP {response.status_code}")
            raise error_for_status(response.status_code, response.text)

        try:
            envelope = ApiEnvelope.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise UnexpectedResponseError(
                f"Malformed response from {path}: {e}",
                status_code=response.status_code,
            ) from e

        if not envelope.is_success:
            raise UnexpectedResponseError(
                f"{path} returned status {envelope.status!r}"
                + (f": {envelope.message}" if envelope.message else ""),
                status_code=response.status_code,
            )
        return envelope.data
