"""Error taxonomy for cloud provider operations.

Every error raised by this package derives from ``CloudProviderError`` so
callers can catch the whole family at once. Remote failures are normalised
into ``ProviderUnavailable`` at the registry boundary; credential-shape
errors are raised before any network call.
"""
from __future__ import annotations


class CloudProviderError(Exception):
    """Base class for all cloud provider errors."""


class ProviderNotFound(CloudProviderError, LookupError):
    def __init__(self, provider_type: str):
        self.provider_type = provider_type
        super().__init__(f"cloud provider not found: {provider_type}")


class DuplicateProvider(CloudProviderError):
    def __init__(self, provider_type: str):
        self.provider_type = provider_type
        super().__init__(f"cloud provider already registered: {provider_type}")


class NilProvider(CloudProviderError, TypeError):
    def __init__(self):
        super().__init__("cannot register a None provider")


class InvalidCredentials(CloudProviderError, ValueError):
    def __init__(self, message: str = "invalid credentials"):
        super().__init__(message)


class ProviderTypeMismatch(InvalidCredentials):
    """Credentials were built for a different provider."""

    def __init__(self, expected: str, got: str):
        self.expected = expected
        self.got = got
        super().__init__(f"invalid provider type: expected {expected}, got {got}")


class AuthenticationFailed(CloudProviderError):
    def __init__(self, message: str = "authentication failed"):
        super().__init__(message)


class RateLimited(CloudProviderError):
    def __init__(self, message: str = "rate limited by provider"):
        super().__init__(message)


class OperationCancelled(CloudProviderError):
    """The caller's context was cancelled or its deadline expired."""

    def __init__(self, reason: str = "context cancelled"):
        self.reason = reason
        super().__init__(reason)


class ProviderUnavailable(CloudProviderError):
    """
    A provider could not complete a remote call.

    Wraps any downstream cause (timeouts, cancellation, SDK failures,
    unimplemented features). ``cause`` is also chained as ``__cause__``
    when raised with ``raise ... from``.
    """

    def __init__(
        self,
        message: str = "cloud provider unavailable",
        provider_type: str = "",
        cause: BaseException | None = None,
    ):
        self.provider_type = provider_type
        self.cause = cause
        detail = message
        if provider_type:
            detail = f"{provider_type}: {detail}"
        if cause is not None and str(cause) and str(cause) not in detail:
            detail = f"{detail}: {cause}"
        super().__init__(detail)


class SyncError(CloudProviderError):
    """A reconciliation run was aborted by a failed listing call."""

    def __init__(self, stage: str, provider_type: str, cause: BaseException):
        self.stage = stage
        self.provider_type = provider_type
        self.cause = cause
        super().__init__(f"{provider_type}: failed to list {stage}: {cause}")
