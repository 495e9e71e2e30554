"""
In-memory and durable storage for the backend bearer credential.

CredentialStore is a pure state holder: it performs no network I/O and has no
concurrency behaviour of its own. TokenManager is the only component that
writes or clears it.

The durable cache is a small JSON object file keyed by "ecourt_token", so a
later process (the next CLI invocation) can pick up the credential without a
new issuance call. Reads that fail for any reason, such as a missing file,
unreadable directory or corrupt JSON, degrade to "no cached credential".
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from ..utils import get_logger

TOKEN_KEY = "ecourt_token"


class CredentialStore:
    """
    Holds the current bearer credential in memory and in a durable cache.

    Args:
        cache_path (Optional[Path]): JSON file used as the durable key-value
            cache. None keeps the credential in memory only.
        key (str): Key the credential is stored under inside the cache file.

    Example:
        >>> store = CredentialStore(Path("/tmp/ecourts.json"))
        >>> store.write("abc123")
        >>> CredentialStore(Path("/tmp/ecourts.json")).read()
        'abc123'
    """

    def __init__(self, cache_path: Optional[Path] = None, key: str = TOKEN_KEY):
        self.cache_path = Path(cache_path) if cache_path is not None else None
        self.key = key
        self._token: Optional[str] = None
        self.logger = get_logger(__name__)

    def read(self) -> Optional[str]:
        """
        Return the current credential, promoting a cached one into memory.

        Returns:
            Optional[str]: The in-memory credential if set, otherwise the
                durably cached credential if present, otherwise None.
        """
        if self._token:
            return self._token

        cached = self._load().get(self.key)
        if isinstance(cached, str) and cached:
            self.logger.debug("Loaded credential from durable cache")
            self._token = cached
        return self._token

    def write(self, token: str) -> None:
        """Store the credential in memory and in the durable cache."""
        self._token = token
        data = self._load()
        data[self.key] = token
        self._save(data)

    def clear(self) -> None:
        """Remove the credential from memory and from the durable cache."""
        self._token = None
        if self.cache_path is None or not self.cache_path.exists():
            return
        data = self._load()
        if self.key in data:
            del data[self.key]
            self._save(data)

    def _load(self) -> Dict[str, Any]:
        if self.cache_path is None:
            return {}
        try:
            with open(self.cache_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            self.logger.warning(
                f"Ignoring unreadable credential cache {self.cache_path}: {e}"
            )
            return {}
        if not isinstance(data, dict):
            self.logger.warning(
                f"Ignoring credential cache {self.cache_path}: not a JSON object"
            )
            return {}
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        if self.cache_path is None:
            return
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            # Write to a sibling temp file so readers never see a partial file
            fd, tmp_name = tempfile.mkstemp(
                dir=self.cache_path.parent, prefix=".ecourt-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f)
                os.replace(tmp_name, self.cache_path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            self.logger.warning(
                f"Could not update credential cache {self.cache_path}: {e}"
            )
