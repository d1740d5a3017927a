"""Exceptions raised by quayd.

The handler never catches these; they surface to the webhook resource where
Falcon error handlers translate them into HTTP responses.
"""

from __future__ import annotations

_BODY_PREVIEW_LIMIT = 100


class QuaydError(Exception):
    """Base class for every quayd error."""


class UnrecognizedStateError(QuaydError):
    """Raised when a build state is not pending, success or failure."""

    def __init__(self, state: object) -> None:
        """Initialise with the rejected state value."""
        self.state = state
        super().__init__(f"Unknown build status: {state!r}")


class MalformedRepositoryError(QuaydError):
    """Raised when a repository is not of the form ``owner/name``."""

    def __init__(self, repository: str) -> None:
        """Initialise with the rejected repository string."""
        self.repository = repository
        super().__init__(
            f"Repository {repository!r} must have the form 'owner/name'"
        )


class TransportError(QuaydError):
    """Raised when a remote service cannot be reached."""

    def __init__(self, message: str, *, service: str) -> None:
        """Initialise with a message and the name of the remote service."""
        self.service = service
        super().__init__(message)

    @classmethod
    def network_error(cls, service: str, detail: str) -> TransportError:
        """Return an error for DNS, connection or TLS failures."""
        return cls(f"{service} request failed: {detail}", service=service)


class UpstreamRejectionError(QuaydError):
    """Raised when a remote service answers with an unsuccessful status."""

    def __init__(
        self,
        message: str,
        *,
        service: str,
        status_code: int,
        reason: str = "",
    ) -> None:
        """Initialise with the upstream status code and status text."""
        self.service = service
        self.status_code = status_code
        self.reason = reason
        super().__init__(message)

    @classmethod
    def unsuccessful(
        cls, service: str, status_code: int, reason: str
    ) -> UpstreamRejectionError:
        """Return an error carrying the server-provided status line."""
        status_text = f"{status_code} {reason}".strip()
        return cls(
            f"Unsuccessful request to {service}: {status_text}",
            service=service,
            status_code=status_code,
            reason=reason,
        )


class RegistryResponseShapeError(QuaydError):
    """Raised when the registry answers a tag lookup with an unexpected body."""

    @classmethod
    def not_an_image_id(cls, body: str) -> RegistryResponseShapeError:
        """Return an error previewing the body that failed to decode."""
        preview = (
            body[:_BODY_PREVIEW_LIMIT] + "..."
            if len(body) > _BODY_PREVIEW_LIMIT
            else body
        )
        return cls(f"Registry tag lookup did not return a JSON string: {preview}")


class InvalidPayloadError(QuaydError):
    """Raised when a webhook body cannot be turned into a build event."""

    def __init__(self, reason: str, *, field: str | None = None) -> None:
        """Initialise with a reason and the offending field, if known."""
        self.reason = reason
        self.field = field
        message = f"{field}: {reason}" if field is not None else reason
        super().__init__(message)


class ConfigError(QuaydError):
    """Raised when service configuration is missing or invalid."""

    @classmethod
    def missing(cls, variable: str) -> ConfigError:
        """Return an error for a required environment variable."""
        return cls(f"{variable} environment variable is required")

    @classmethod
    def empty_token(cls) -> ConfigError:
        """Return an error for a blank GitHub token."""
        return cls("GitHub token must be non-empty")

    @classmethod
    def invalid_registry_auth(cls) -> ConfigError:
        """Return an error for a credential pair without ``user:password``."""
        return cls("Registry credentials must have the form 'username:password'")


__all__ = [
    "ConfigError",
    "InvalidPayloadError",
    "MalformedRepositoryError",
    "QuaydError",
    "RegistryResponseShapeError",
    "TransportError",
    "UnrecognizedStateError",
    "UpstreamRejectionError",
]
