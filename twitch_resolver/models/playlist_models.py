"""Pydantic models for the parsed master playlist."""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

AttributeValue = Union[bool, float, str]
AttributeRecord = Dict[str, AttributeValue]
QualityLabel = str


class StreamVariant(BaseModel):
    """One rendition: its media tag, its stream-info tag and the playlist URL."""

    media: AttributeRecord = Field(default_factory=dict)
    stream_info: AttributeRecord = Field(default_factory=dict)
    url: Optional[str] = None


class ParsedManifest(BaseModel):
    """Quality-indexed view of a master playlist.

    ``streams`` may hold the same variant under two labels (``"source"`` and
    the rendition's own name); both entries are the same object.
    """

    twitch_info: AttributeRecord = Field(default_factory=dict)
    streams: Dict[QualityLabel, StreamVariant] = Field(default_factory=dict)
    stream_qualities: List[QualityLabel] = Field(default_factory=list)

    def get(self, quality: QualityLabel) -> Optional[StreamVariant]:
        return self.streams.get(quality)

    def url_for(self, quality: QualityLabel) -> Optional[str]:
        variant = self.streams.get(quality)
        return variant.url if variant else None
