"""
Authenticated request pipeline for the eCourts backend.

Every backend call made by CourtLookupClient goes through RequestPipeline.send(),
which moves each logical call through these states:

    PREPARING -> SENT -> SUCCESS
                      -> AUTH_FAILED -> REFRESHING -> RETRIED -> SUCCESS | FAILED

Rules:
    - A credential from TokenManager.get_valid() is attached as
      "Authorization: Bearer <token>" to the outgoing request only; the shared
      httpx client's default headers are never touched.
    - The issuance endpoint (/auth/token) is sent without any credential.
    - A 401 triggers exactly one TokenManager.force_refresh() and one resend.
      A second 401 is returned to the caller as-is; there is no backoff loop.
    - Every other status passes through untouched for the caller to interpret.
    - Transport failures are raised as NetworkError and never retried.

The single resend is written out in send() rather than counted, so retry state
is per logical call and never stored on a shared request object. The rejected
credential is passed to force_refresh(), which reuses a newer credential that
another call has already obtained instead of issuing again.
"""

from enum import Enum
from typing import Any, Dict, Optional

import httpx

from ..auth.token_manager import TokenManager
from ..errors import NetworkError
from ..utils import get_logger

ISSUANCE_PATH = "/auth/token"


class CallState(str, Enum):
    PREPARING = "PREPARING"
    SENT = "SENT"
    SUCCESS = "SUCCESS"
    AUTH_FAILED = "AUTH_FAILED"
    REFRESHING = "REFRESHING"
    RETRIED = "RETRIED"
    FAILED = "FAILED"


class RequestPipeline:
    """
    Sends backend requests with a bearer credential and one-shot 401 recovery.

    Args:
        http_client (httpx.AsyncClient): Client configured with the backend
            base URL. The pipeline does not own it and never closes it.
        token_manager (TokenManager): Source of valid credentials.

    Example:
        >>> pipeline = RequestPipeline(httpx.AsyncClient(base_url=url), manager)
        >>> response = await pipeline.send("GET", "/court/states")
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_manager: TokenManager,
    ):
        self.http_client = http_client
        self.token_manager = token_manager
        self.logger = get_logger(__name__)

    @staticmethod
    def is_issuance_request(path: str) -> bool:
        return httpx.URL(path).path.rstrip("/").endswith(ISSUANCE_PATH)

    async def send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Send one logical request, recovering once from an expired credential.

        Args:
            method: HTTP method, e.g. "GET" or "POST".
            path: Path relative to the client's base URL.
            **kwargs: Passed to httpx.AsyncClient.request (json, params, ...).

        Returns:
            httpx.Response: The final response. This can still be a 401 if the
                refreshed credential was also rejected.

        Raises:
            NetworkError: If the request could not be sent or no response
                arrived.
            IssuanceError: If a credential could not be acquired or refreshed.
        """
        headers: Dict[str, str] = dict(kwargs.pop("headers", None) or {})
        self._trace(CallState.PREPARING, method, path)

        if self.is_issuance_request(path):
            headers.pop("Authorization", None)
            response = await self._dispatch(method, path, headers, kwargs)
            self._trace(CallState.SENT, method, path, response.status_code)
            return response

        token = await self.token_manager.get_valid()
        response = await self._send_with(token, method, path, headers, kwargs)
        self._trace(CallState.SENT, method, path, response.status_code)
        if response.status_code != httpx.codes.UNAUTHORIZED:
            self._trace(CallState.SUCCESS, method, path, response.status_code)
            return response

        self._trace(CallState.AUTH_FAILED, method, path, response.status_code)
        self._trace(CallState.REFRESHING, method, path)
        token = await self.token_manager.force_refresh(rejected=token)

        # Exactly one resend; a second 401 goes back to the caller
        response = await self._send_with(token, method, path, headers, kwargs)
        self._trace(CallState.RETRIED, method, path, response.status_code)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            self.logger.warning(
                f"{method} {path} still unauthorized after credential refresh"
            )
            self._trace(CallState.FAILED, method, path, response.status_code)
        else:
            self._trace(CallState.SUCCESS, method, path, response.status_code)
        return response

    async def _send_with(
        self,
        token: str,
        method: str,
        path: str,
        headers: Dict[str, str],
        kwargs: Dict[str, Any],
    ) -> httpx.Response:
        return await self._dispatch(
            method, path, {**headers, "Authorization": f"Bearer {token}"}, kwargs
        )

    async def _dispatch(
        self,
        method: str,
        path: str,
        headers: Dict[str, str],
        kwargs: Dict[str, Any],
    ) -> httpx.Response:
        try:
            return await self.http_client.request(
                method, path, headers=headers, **kwargs
            )
        except httpx.TransportError as e:
            self.logger.error(f"{method} {path} failed: {e!r}")
            raise NetworkError(f"Request to {path} failed: {e}") from e

    def _trace(
        self,
        state: CallState,
        method: str,
        path: str,
        status_code: Optional[int] = None,
    ) -> None:
        suffix = f" (HTTP {status_code})" if status_code is not None else ""
        self.logger.debug(f"{method} {path}: {state.value}{suffix}")
