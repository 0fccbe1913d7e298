"""Error taxonomy shared by metadata providers."""

from __future__ import annotations

from typing import Any


class ProviderError(Exception):
    """Base error raised by provider operations, tagged with call context."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        operation: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.operation = operation
        self.context = context or {}

    def __str__(self) -> str:
        prefix = ".".join(part for part in (self.source, self.operation) if part)
        details = ", ".join(f"{key}={value!r}" for key, value in self.context.items())
        text = f"{prefix}: {self.message}" if prefix else self.message
        return f"{text} ({details})" if details else text


class TransportError(ProviderError):
    """Network failure, timeout, or non-2xx upstream response."""

    def __init__(self, message: str, *, status_code: int | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code


class DecodeError(ProviderError):
    """Upstream payload is not JSON or does not match the expected shape."""


class UnsupportedOperationError(ProviderError):
    """Provider does not offer the requested catalog operation."""


class MissingCredentialsError(ProviderError):
    """Provider was constructed without the credential it needs."""


class InvariantViolation(RuntimeError):
    """Programming error: a value outside a closed mapping reached the normalizer."""
