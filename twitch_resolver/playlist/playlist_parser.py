"""Parser for the master playlists served by the usher endpoint.

Usher does not emit general HLS. After the ``#EXTM3U`` header and an
optional ``#EXT-X-TWITCH-INFO`` line, every rendition is exactly three lines::

    #EXT-X-MEDIA:TYPE=VIDEO,GROUP-ID="chunked",NAME="1080p60 (source)",...
    #EXT-X-STREAM-INF:BANDWIDTH=6000000,RESOLUTION=1920x1080,...
    https://video-weaver.example.hls.ttvnw.net/v1/playlist/....m3u8

The parser walks that fixed cadence rather than interpreting tags.
"""

from __future__ import annotations

import enum
import logging
import re
from typing import List

from ..models import ParsedManifest, QualityLabel, StreamVariant
from .attributes import parse_attributes, render_value

HEADER_LINE = "#EXTM3U"
TWITCH_INFO_PREFIX = "#EXT-X-TWITCH-INFO"
SOURCE_MARKER = "(source)"
SOURCE_LABEL = "source"
AUDIO_LABEL = "audio"
AUDIO_ONLY_NAME = "audio_only"

LINE_SPLIT = re.compile(r"[\r\n]")


class CycleState(enum.Enum):
    EXPECT_MEDIA = "media"
    EXPECT_STREAM_INFO = "stream_info"
    EXPECT_URL = "url"


NEXT_STATE = {
    CycleState.EXPECT_MEDIA: CycleState.EXPECT_STREAM_INFO,
    CycleState.EXPECT_STREAM_INFO: CycleState.EXPECT_URL,
    CycleState.EXPECT_URL: CycleState.EXPECT_MEDIA,
}


def strip_source_marker(name: str) -> str:
    return name.replace(SOURCE_MARKER, "").strip()


class PlaylistParser:
    """Turns master playlist text into a :class:`ParsedManifest`."""

    def parse(self, text: str) -> ParsedManifest:
        manifest = ParsedManifest()
        state = CycleState.EXPECT_MEDIA
        variant = StreamVariant()
        labels: List[QualityLabel] = []

        for line in LINE_SPLIT.split(text):
            if not line or line == HEADER_LINE:
                continue
            if line.startswith(TWITCH_INFO_PREFIX):
                manifest.twitch_info = parse_attributes(line)
                continue

            if state is CycleState.EXPECT_MEDIA:
                variant.media = parse_attributes(line)
                labels = self._quality_labels(variant)
            elif state is CycleState.EXPECT_STREAM_INFO:
                variant.stream_info = parse_attributes(line)
            else:
                variant.url = line
                self._finalize(manifest, variant, labels)
                variant = StreamVariant()
                labels = []
            state = NEXT_STATE[state]

        if state is not CycleState.EXPECT_MEDIA:
            logging.warning("Playlist ended mid-rendition; discarding %s", variant.media.get("name"))
        if not manifest.streams:
            logging.warning("Playlist did not contain any renditions")
        return manifest

    @staticmethod
    def _quality_labels(variant: StreamVariant) -> List[QualityLabel]:
        media_type = variant.media.get("type")
        name = render_value(variant.media.get("name", ""))
        if media_type == "VIDEO":
            if SOURCE_MARKER in name:
                return [SOURCE_LABEL, strip_source_marker(name)]
            return [name]
        if media_type == "AUDIO":
            return [AUDIO_LABEL]
        return []

    @staticmethod
    def _finalize(manifest: ParsedManifest, variant: StreamVariant, labels: List[QualityLabel]) -> None:
        name = render_value(variant.media.get("name", ""))
        if SOURCE_MARKER in name:
            manifest.streams[SOURCE_LABEL] = variant
            manifest.streams[strip_source_marker(name)] = variant
        elif name == AUDIO_ONLY_NAME or variant.media.get("type") == "AUDIO":
            manifest.streams[AUDIO_LABEL] = variant
        else:
            manifest.streams[name] = variant
        manifest.stream_qualities.extend(labels)
        logging.debug("Parsed rendition %s -> %s", name, variant.url)
