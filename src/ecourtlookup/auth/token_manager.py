"""
Single-flight bearer credential acquisition.

TokenManager guarantees that at most one credential issuance call is in flight
at any moment, no matter how many coroutines ask for a credential at once.
Every caller that arrives while an acquisition is pending awaits that same
acquisition and observes the same outcome: the same token, or the same
IssuanceError.

Concurrency Model:
    The package runs on a single asyncio event loop. The sequence
    "check for a pending acquisition / start a new one / clear the slot"
    contains no await, so it cannot interleave with another coroutine and needs
    no lock. Callers await the shared task through asyncio.shield(), so a
    cancelled caller does not cancel the acquisition other callers depend on.

Integration Points:
    - CourtLookupClient constructs one TokenManager and injects its own
      issue_token() coroutine as the issuance operation
    - RequestPipeline calls get_valid() before each request and
      force_refresh() after a 401

Python Learning Notes:
    - asyncio.ensure_future(): Schedules a coroutine as a Task
    - asyncio.shield(): Protects the shared task from a waiter's cancellation
    - asyncio.wait_for(): Imposes a timeout on an awaitable
"""

import asyncio
from typing import Awaitable, Callable, Optional

from ..errors import IssuanceError
from ..utils import get_logger
from .credential_store import CredentialStore

IssueCredential = Callable[[], Awaitable[str]]


class TokenManager:
    """
    Shares one credential-acquisition operation between concurrent callers.

    Args:
        store (CredentialStore): Holds the current credential.
        issue (IssueCredential): Async callable that obtains a brand-new
            credential from the backend.
        timeout (Optional[float]): Seconds to wait on a single issuance call.
            None waits indefinitely.

    Example:
        >>> manager = TokenManager(CredentialStore(), client.issue_token, timeout=15)
        >>> token = await manager.get_valid()
    """

    def __init__(
        self,
        store: CredentialStore,
        issue: IssueCredential,
        timeout: Optional[float] = 15.0,
    ):
        self.store = store
        self._issue = issue
        self.timeout = timeout
        self._pending: Optional[asyncio.Task] = None
        self.logger = get_logger(__name__)

    @property
    def acquisition_pending(self) -> bool:
        return self._pending is not None

    async def get_valid(self) -> str:
        """
        Return a credential, acquiring one only if none is stored.

        Returns:
            str: The stored credential, or the result of the (possibly shared)
                acquisition.

        Raises:
            IssuanceError: If the acquisition this call waited on failed.
        """
        token = self.store.read()
        if token:
            return token
        return await self._join_or_start()

    async def force_refresh(self, rejected: Optional[str] = None) -> str:
        """
        Discard the stored credential and acquire a new one.

        Used after the backend has rejected the current credential. If an
        acquisition is already pending, this call joins it instead of
        starting a second one.

        Args:
            rejected: The credential the backend refused. When the store
                already holds a different credential, another call has
                refreshed in the meantime and that credential is returned
                without a new issuance.

        Raises:
            IssuanceError: If the acquisition failed.
        """
        if rejected is not None and self._pending is None:
            current = self.store.read()
            if current and current != rejected:
                self.logger.debug("Credential already replaced by another call")
                return current

        self.logger.info("Discarding rejected credential")
        self.store.clear()
        return await self._join_or_start()

    async def _join_or_start(self) -> str:
        if self._pending is None:
            self.logger.debug("Starting credential acquisition")
            self._pending = asyncio.ensure_future(self._acquire())
        else:
            self.logger.debug("Joining pending credential acquisition")
        return await asyncio.shield(self._pending)

    async def _acquire(self) -> str:
        try:
            try:
                token = await asyncio.wait_for(self._issue(), timeout=self.timeout)
            except IssuanceError:
                raise
            except asyncio.TimeoutError as e:
                raise IssuanceError(
                    f"Credential issuance timed out after {self.timeout}s"
                ) from e
            except Exception as e:
                raise IssuanceError(f"Credential issuance failed: {e}") from e

            if not isinstance(token, str) or not token:
                raise IssuanceError("Credential issuance returned an empty token")

            self.store.write(token)
            self.logger.info("Acquired new credential")
            return token
        except IssuanceError as e:
            self.logger.error(str(e))
            raise
        finally:
            self._pending = None
