"""
Credential handling for the eCourts API session layer.

Available Components:
    - CredentialStore: Holds the bearer credential in memory and in a durable
      JSON cache that survives process restarts
    - TokenManager: Guarantees a single in-flight credential acquisition shared
      by every concurrent caller

Usage Example:
    from ecourtlookup.auth import CredentialStore, TokenManager

    store = CredentialStore(Path("~/.cache/ecourtlookup/credentials.json").expanduser())
    manager = TokenManager(store, issue=client.issue_token)
    token = await manager.get_valid()
"""

from .credential_store import CredentialStore
from .token_manager import TokenManager

__all__ = ["CredentialStore", "TokenManager"]
