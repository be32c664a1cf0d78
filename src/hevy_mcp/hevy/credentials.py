"""Per-user Hevy API key lookup."""

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

KEY_PREFIX = "hevy_key:"


@runtime_checkable
class CredentialStore(Protocol):
    """Anything that can hand out the Hevy API key for a user."""

    def get_credential(self, user_id: str) -> str | None:
        ...


class EnvCredentialStore:
    """Single-user store: every caller shares the key from the environment."""

    def __init__(self, api_key: str | None):
        self._api_key = api_key or None

    def get_credential(self, user_id: str) -> str | None:
        if self._api_key is None:
            logger.info("No HEVY_API_KEY configured (user %s)", user_id)
        return self._api_key


class InMemoryCredentialStore:
    """Keys held in a dict, namespaced ``hevy_key:<user>``."""

    def __init__(self, keys: dict[str, str] | None = None):
        self._data: dict[str, str] = {}
        for user_id, api_key in (keys or {}).items():
            self.set_credential(user_id, api_key)

    @staticmethod
    def _key(user_id: str) -> str:
        return f"{KEY_PREFIX}{user_id}"

    def set_credential(self, user_id: str, api_key: str) -> None:
        self._data[self._key(user_id)] = api_key
        logger.info("Stored Hevy API key %s for user %s", mask_api_key(api_key), user_id)

    def get_credential(self, user_id: str) -> str | None:
        api_key = self._data.get(self._key(user_id))
        if api_key is None:
            logger.info("No Hevy API key stored for user %s", user_id)
        return api_key

    def delete_credential(self, user_id: str) -> None:
        self._data.pop(self._key(user_id), None)

    @property
    def user_count(self) -> int:
        return len(self._data)


def mask_api_key(api_key: str) -> str:
    """Hide all but the last four characters."""
    if len(api_key) <= 4:
        return "****"
    return "*" * (len(api_key) - 4) + api_key[-4:]
