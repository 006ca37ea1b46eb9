"""Resolve Twitch live channels into playable HLS URLs per quality."""

from .config import ResolverConfig
from .errors import (
    AuthorizationError,
    ChannelOfflineError,
    ManifestFetchError,
    MetadataError,
    QualityNotFoundError,
    TwitchResolverError,
)
from .models import ChannelIdentity, ParsedManifest, StreamMeta, StreamVariant
from .resolver import StreamResolver

__all__ = [
    "StreamResolver",
    "ResolverConfig",
    "ChannelIdentity",
    "ParsedManifest",
    "StreamVariant",
    "StreamMeta",
    "TwitchResolverError",
    "AuthorizationError",
    "ManifestFetchError",
    "ChannelOfflineError",
    "QualityNotFoundError",
    "MetadataError",
]
