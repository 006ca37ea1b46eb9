"""Models describing the channel being resolved and the answers about it."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

UNKNOWN_TITLE = "Unknown stream title"
UNKNOWN_GAME = "Unknown stream game"


class ChannelIdentity(BaseModel):
    """Immutable identity of a channel plus the per-channel request options."""

    model_config = ConfigDict(frozen=True)

    name: str
    auth: Optional[str] = None
    low_latency: bool = False

    @field_validator("name")
    @classmethod
    def _lower_case_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("channel name must be set")
        return value.lower()


class AuthToken(BaseModel):
    """Signed playback token returned by the authorization endpoint."""

    signature: str
    token: str


class StreamMeta(BaseModel):
    """Current title and game of a live broadcast."""

    title: str = UNKNOWN_TITLE
    game: str = UNKNOWN_GAME
