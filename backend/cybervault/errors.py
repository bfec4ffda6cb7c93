from __future__ import annotations


class ProviderError(Exception):
    """Failure talking to, or making sense of, a third-party provider."""

    def __init__(self, message: str, status: int = 500, provider: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.provider = provider

    def __str__(self) -> str:
        return self.message


class ConfigurationError(ProviderError):
    """A required credential or identifier is missing."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__(message, status=500, provider=provider)


class UpstreamError(ProviderError):
    """The provider answered with a non-2xx status, timed out or was unreachable."""


class TransformError(ProviderError):
    """The provider payload did not have the expected shape."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__(message, status=500, provider=provider)
