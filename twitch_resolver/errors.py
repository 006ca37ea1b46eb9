"""Failures raised while resolving a channel into playable URLs.

Connection-level problems are not wrapped: they surface as the
``requests.RequestException`` raised by the transport.
"""

from __future__ import annotations

from typing import Iterable, List, Optional


class TwitchResolverError(Exception):
    """Base class for every failure raised by this package."""


class AuthorizationError(TwitchResolverError):
    """Raised when the authorization endpoint refuses to hand out a playback token."""

    def __init__(self, message: str = "unable to obtain authorization", status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ManifestFetchError(TwitchResolverError):
    """Raised when the delivery endpoint answers with an unexpected status."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class ChannelOfflineError(ManifestFetchError):
    """The delivery endpoint reported the channel as not found, i.e. not broadcasting."""

    def __init__(self, channel: str) -> None:
        super().__init__(f"{channel} is offline", status_code=404)
        self.channel = channel


class QualityNotFoundError(TwitchResolverError):
    def __init__(self, requested: Iterable[str]) -> None:
        self.requested: List[str] = list(requested)
        super().__init__(f"none of the requested qualities are available: {', '.join(self.requested)}")


class MetadataError(TwitchResolverError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
