"""Error hierarchy for identity-provider adapters.

A raised ``ProviderError`` means the adapter or the provider malfunctioned.
An authorization denial is never an error: adapters return an empty email.
"""

from __future__ import annotations

from typing import Any


class ProviderError(Exception):
    """Base exception for all adapter errors."""

    def __init__(
        self,
        message: str,
        code: str = "PROVIDER_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class RequestBuildError(ProviderError):
    """Raised when a request URL cannot be built."""

    def __init__(self, message: str = "Failed building request", **kwargs: Any) -> None:
        super().__init__(message=message, code="REQUEST_BUILD_FAILED", **kwargs)


class TransportError(ProviderError):
    """Raised on network failure or a non-2xx response."""

    def __init__(
        self,
        message: str = "Request to identity provider failed",
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        self.status_code = status_code
        super().__init__(message=message, code="TRANSPORT_FAILED", **kwargs)


class DecodeError(ProviderError):
    """Raised when a response body is not JSON of the expected shape."""

    def __init__(self, message: str = "Malformed provider response", **kwargs: Any) -> None:
        super().__init__(message=message, code="DECODE_FAILED", **kwargs)


class MissingAccountIdError(ProviderError):
    """Raised when the user lookup returns no account identifier."""

    def __init__(self, message: str = "Could not find account_id", **kwargs: Any) -> None:
        super().__init__(message=message, code="MISSING_ACCOUNT_ID", **kwargs)


class NotInGroupError(ProviderError):
    """Raised when the account is absent from the configured group roster."""

    def __init__(self, message: str = "User not found in group list", **kwargs: Any) -> None:
        super().__init__(message=message, code="NOT_IN_GROUP", **kwargs)
