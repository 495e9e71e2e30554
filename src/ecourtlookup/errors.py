"""
Error taxonomy for the eCourts API session layer.

Every failure a CourtLookupClient caller can observe is one of these classes,
so callers can branch on type instead of inspecting raw HTTP responses:

    EcourtsError
    ├── NetworkError               transport failure, never retried
    ├── IssuanceError              the credential endpoint itself failed
    ├── UnexpectedResponseError    body is not a {status, data} success envelope
    └── ApiStatusError             any other non-2xx backend status
        ├── InvalidParametersError     400
        ├── AuthorizationExpiredError  401 that survived the one refresh-and-retry
        └── NotFoundError              404, the domain-level "no result"

Python Learning Notes:
    - Exception hierarchies let callers catch broadly (EcourtsError) or narrowly
      (NotFoundError) with ordinary except clauses
    - "raise ... from exc" keeps the underlying httpx error as __cause__
"""

from typing import Optional


class EcourtsError(Exception):
    """Base class for every error raised by the ecourtlookup client."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NetworkError(EcourtsError):
    """The request never produced an HTTP response (DNS, connect, read timeout)."""


class IssuanceError(EcourtsError):
    """
    Acquiring a new bearer credential failed.

    Raised to every caller that was waiting on the same acquisition, whether
    the issuance call timed out, failed at the transport level, returned a
    non-success status, or returned a body without a usable token.
    """


class UnexpectedResponseError(EcourtsError):
    """The backend answered 2xx but the body was not a success envelope."""


class ApiStatusError(EcourtsError):
    """
    The backend answered with a non-success HTTP status.

    Attributes:
        status_code (int): HTTP status returned by the backend.
        detail (str): Backend-supplied error text, truncated for logging.
    """

    def __init__(self, message: str, status_code: int, detail: str = ""):
        super().__init__(message, status_code=status_code)
        self.detail = detail


class InvalidParametersError(ApiStatusError):
    """400: the backend rejected the request parameters."""


class AuthorizationExpiredError(ApiStatusError):
    """401: the credential was still rejected after one refresh-and-retry."""


class NotFoundError(ApiStatusError):
    """404: no case, cause list or court matched the query."""


_STATUS_ERRORS = {
    400: InvalidParametersError,
    401: AuthorizationExpiredError,
    404: NotFoundError,
}


def error_for_status(status_code: int, detail: str = "") -> ApiStatusError:
    """
    Build the typed error for a non-success HTTP status.

    Args:
        status_code: HTTP status returned by the backend.
        detail: Response body text, included in the message when present.

    Returns:
        ApiStatusError: The most specific subclass for the status.

    Example:
        >>> type(error_for_status(404)).__name__
        'NotFoundError'
    """
    error_cls = _STATUS_ERRORS.get(status_code, ApiStatusError)
    detail = detail[:300]
    message = f"Backend returned HTTP {status_code}"
    if detail:
        message = f"{message}: {detail}"
    return error_cls(message, status_code=status_code, detail=detail)
