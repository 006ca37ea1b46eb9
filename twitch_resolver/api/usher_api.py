"""API client for downloading a channel's master playlist from usher."""

from __future__ import annotations

import logging
import random
from typing import Dict

from ..errors import ChannelOfflineError, ManifestFetchError
from ..models import AuthToken, ChannelIdentity
from ..utils.http_client import HttpClient

USHER_CHANNEL_URL = "https://usher.ttvnw.net/api/channel/hls/{channel}.m3u8"


class UsherAPI:
    """Fetches master playlists and maps usher status codes onto failures."""

    def __init__(self, http_client: HttpClient, supported_codecs: str = "avc1") -> None:
        self._client = http_client
        self.supported_codecs = supported_codecs

    def build_params(self, channel: ChannelIdentity, token: AuthToken) -> Dict[str, str]:
        return {
            "player": "twitchweb",
            "p": str(random.randint(0, 9999999)),
            "type": "any",
            "allow_source": "true",
            "allow_audio_only": "true",
            "allow_spectre": "false",
            "playlist_include_framerate": "true",
            "supported_codecs": self.supported_codecs,
            "fast_bread": "true" if channel.low_latency else "false",
            "sig": token.signature,
            "token": token.token,
        }

    def build_url(self, channel: ChannelIdentity, token: AuthToken) -> str:
        """Return the fully encoded playlist URL, e.g. to hand to a player."""

        url = USHER_CHANNEL_URL.format(channel=channel.name)
        return self._client.prepare_url(url, self.build_params(channel, token))

    def fetch_manifest(self, channel: ChannelIdentity, token: AuthToken) -> str:
        url = USHER_CHANNEL_URL.format(channel=channel.name)
        response = self._client.get(url, params=self.build_params(channel, token))

        if response.status_code == 200:
            return response.text
        if response.status_code == 404:
            logging.info("%s is offline", channel.name)
            raise ChannelOfflineError(channel.name)

        detail = (response.text or "").strip()[:200]
        logging.error("Usher returned status %s for %s: %s", response.status_code, channel.name, detail)
        raise ManifestFetchError(
            f"invalid status code {response.status_code}",
            status_code=response.status_code,
            detail=detail,
        )
