"""API layer for playback tokens, master playlists, and stream metadata."""

from .auth_api import GQLTokenProvider, LegacyTokenProvider, TokenProvider, build_token_provider
from .metadata_api import MetadataAPI
from .usher_api import UsherAPI

__all__ = [
    "TokenProvider",
    "GQLTokenProvider",
    "LegacyTokenProvider",
    "build_token_provider",
    "UsherAPI",
    "MetadataAPI",
]
