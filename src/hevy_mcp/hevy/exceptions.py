"""Hevy exceptions."""

from typing import Any


class HevyError(Exception):
    """Base exception for Hevy errors."""
    pass


class HevyAPIError(HevyError):
    """Raised when the Hevy API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int, data: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.data = data


class ValidationError(HevyError):
    """Raised when a request breaks a domain rule before it is sent."""
    pass


class CredentialsNotConfiguredError(HevyError):
    """Raised when no Hevy API key is stored for the calling user."""

    def __init__(self, user_id: str):
        super().__init__(f"Hevy API key not configured for user {user_id}.")
        self.user_id = user_id


class ConfigurationError(HevyError):
    """Raised when server settings cannot be loaded."""
    pass
