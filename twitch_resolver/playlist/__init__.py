"""Parsing of usher master playlists."""

from .attributes import normalize_value, parse_attributes
from .playlist_parser import PlaylistParser

__all__ = ["PlaylistParser", "parse_attributes", "normalize_value"]
