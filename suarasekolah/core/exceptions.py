"""Application exceptions.

Every error the portal surfaces to a caller derives from PortalError and
carries the HTTP status it maps to. The provisioning route turns them into
``{"error": message}`` JSON bodies.
"""

from __future__ import annotations


class PortalError(Exception):
    """Base exception for all portal errors."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingAuthorizationError(PortalError):
    """Raised when a request carries no bearer credential."""

    status_code = 401

    def __init__(self, message: str = "Missing authorization header"):
        super().__init__(message)


class InvalidTokenError(PortalError):
    """Raised when the auth provider does not recognise the credential."""

    status_code = 401

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class InsufficientPermissionsError(PortalError):
    """Raised when the caller is authenticated but not an administrator."""

    status_code = 403

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(message)


class ValidationError(PortalError):
    """Raised when request data fails validation."""

    status_code = 400


class ProvisioningError(PortalError):
    """Raised when a downstream system rejects part of account creation.

    The message is passed through from the auth provider or the store.
    """

    status_code = 400


class DisplayIdExhaustedError(PortalError):
    """Raised when no unique display id was found within the attempt limit."""

    status_code = 500

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__("Could not allocate a unique display id")


class AuthProviderError(Exception):
    """Raised when the auth provider answers a request with an error.

    Args:
        message: Error text reported by the provider.
        status_code: HTTP status of the provider response, if any.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
