"""MoMo-specific exceptions for error handling."""
from __future__ import annotations
from typing import Any, Optional


class MomoError(Exception):
    """Base exception for all MoMo client operations."""
    pass


class ConfigurationError(MomoError):
    """Required configuration or credentials are missing or invalid."""
    pass


class ValidationError(MomoError, ValueError):
    """Request payload failed shape or format checks before being sent."""
    pass


class AuthenticationFailure(MomoError):
    """Token endpoint rejected the credentials, or a request was rejected twice."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class TransportError(MomoError):
    """Network-level failure: no response was received."""
    pass


class RemoteError(MomoError):
    """Non-success response from a MoMo business endpoint.
    
    Attributes:
        status_code: HTTP status code
        body: Decoded error body, unmodified (dict, str or None)
        endpoint: Endpoint that failed
        code: Error code reported by the API, if any
        message: Error message reported by the API, if any
    """
    
    def __init__(self, status_code: int, body: Any, endpoint: str):
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        self.code: Optional[str] = None
        self.message: Optional[str] = None
        if isinstance(body, dict):
            self.code = body.get("code")
            self.message = body.get("message")
        detail = self.message or (body if isinstance(body, str) else "") or self.code or ""
        super().__init__(f"[{status_code}] {endpoint}: {detail}".rstrip(": "))


class PayerNotFoundError(RemoteError):
    """Payer does not exist."""
    pass


class PayeeNotFoundError(RemoteError):
    """Payee does not exist."""
    pass


class NotAllowedError(RemoteError):
    """Authorization failed: the user lacks permission for the operation."""
    pass


class NotEnoughFundsError(RemoteError):
    """Payer does not have enough funds."""
    pass


class PayerLimitReachedError(RemoteError):
    """Payer limit has been reached."""
    pass


class InvalidCallbackUrlHostError(RemoteError):
    """Callback URL host does not match the one registered for the API user."""
    pass


class InvalidCurrencyError(RemoteError):
    """Currency is not supported."""
    pass


class ResourceNotFoundError(RemoteError):
    """Requested resource was not found."""
    pass


class ResourceAlreadyExistError(RemoteError):
    """Resource already exists (duplicated reference id)."""
    pass


class ServiceUnavailableError(RemoteError):
    """Service temporarily unavailable."""
    pass


class InternalProcessingError(RemoteError):
    """Generic error on the MoMo side."""
    pass


_ERRORS_BY_CODE = {
    "PAYER_NOT_FOUND": PayerNotFoundError,
    "PAYEE_NOT_FOUND": PayeeNotFoundError,
    "NOT_ALLOWED": NotAllowedError,
    "NOT_ALLOWED_TARGET_ENVIRONMENT": NotAllowedError,
    "NOT_ENOUGH_FUNDS": NotEnoughFundsError,
    "PAYER_LIMIT_REACHED": PayerLimitReachedError,
    "INVALID_CALLBACK_URL_HOST": InvalidCallbackUrlHostError,
    "INVALID_CURRENCY": InvalidCurrencyError,
    "RESOURCE_NOT_FOUND": ResourceNotFoundError,
    "RESOURCE_ALREADY_EXIST": ResourceAlreadyExistError,
    "SERVICE_UNAVAILABLE": ServiceUnavailableError,
    "INTERNAL_PROCESSING_ERROR": InternalProcessingError,
}


def error_for_code(status_code: int, body: Any, endpoint: str) -> RemoteError:
    """Build the most specific RemoteError for an error response body."""
    code = body.get("code") if isinstance(body, dict) else None
    error_cls = _ERRORS_BY_CODE.get(code, RemoteError)
    return error_cls(status_code, body, endpoint)
