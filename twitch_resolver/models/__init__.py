"""Data models for channels, playback tokens, and parsed playlists."""

from .channel_models import UNKNOWN_GAME, UNKNOWN_TITLE, AuthToken, ChannelIdentity, StreamMeta
from .playlist_models import AttributeRecord, AttributeValue, ParsedManifest, QualityLabel, StreamVariant

__all__ = [
    "ChannelIdentity",
    "AuthToken",
    "StreamMeta",
    "UNKNOWN_TITLE",
    "UNKNOWN_GAME",
    "AttributeRecord",
    "AttributeValue",
    "QualityLabel",
    "StreamVariant",
    "ParsedManifest",
]
