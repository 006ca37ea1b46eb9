"""Facade that turns a channel name into playable URLs per quality."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Union

from .api.auth_api import TokenProvider, build_token_provider
from .api.metadata_api import MetadataAPI
from .api.usher_api import UsherAPI
from .config import ResolverConfig
from .errors import ChannelOfflineError, QualityNotFoundError
from .models import ChannelIdentity, ParsedManifest, QualityLabel, StreamMeta
from .playlist import PlaylistParser
from .utils.http_client import HttpClient


class StreamResolver:
    """Resolves one channel's live stream.

    Every public call negotiates a fresh playback token and downloads a fresh
    playlist; tokens expire quickly upstream so nothing is cached between
    calls.
    """

    def __init__(
        self,
        channel: Union[ChannelIdentity, str],
        *,
        auth: Optional[str] = None,
        low_latency: bool = False,
        config: Optional[ResolverConfig] = None,
        http_client: Optional[HttpClient] = None,
        token_provider: Optional[TokenProvider] = None,
    ) -> None:
        if isinstance(channel, ChannelIdentity):
            self.channel = channel
        else:
            self.channel = ChannelIdentity(name=channel, auth=auth, low_latency=low_latency)
        self.config = config or ResolverConfig()

        self._owns_client = http_client is None
        self._client = http_client or HttpClient(client_id=self.config.client_id, timeout=self.config.timeout)
        self._token_provider = token_provider or build_token_provider(
            self.config.token_protocol, self._client, player_type=self.config.player_type
        )
        self._usher = UsherAPI(self._client, supported_codecs=self.config.supported_codecs)
        self._metadata = MetadataAPI(self._client)
        self._parser = PlaylistParser()

    def manifest_url(self) -> str:
        """Negotiate a token and return the master playlist URL without fetching it."""

        token = self._token_provider.get_token(self.channel)
        return self._usher.build_url(self.channel, token)

    def fetch_manifest_text(self) -> str:
        token = self._token_provider.get_token(self.channel)
        return self._usher.fetch_manifest(self.channel, token)

    def resolve_manifest(self) -> ParsedManifest:
        manifest = self._parser.parse(self.fetch_manifest_text())
        logging.debug("%s offers qualities: %s", self.channel.name, ", ".join(manifest.stream_qualities))
        return manifest

    def resolve_stream_url(self, qualities: Union[str, Sequence[QualityLabel]]) -> str:
        """Return the URL of the first of ``qualities`` the channel currently offers."""

        candidates = [qualities] if isinstance(qualities, str) else list(qualities)
        manifest = self.resolve_manifest()
        for quality in candidates:
            if quality in manifest.stream_qualities:
                url = manifest.url_for(quality)
                if url:
                    logging.info("Resolved %s at quality %s", self.channel.name, quality)
                    return url
        raise QualityNotFoundError(candidates)

    def list_qualities(self) -> List[QualityLabel]:
        return list(self.resolve_manifest().stream_qualities)

    def is_live(self) -> bool:
        try:
            self.fetch_manifest_text()
        except ChannelOfflineError:
            return False
        return True

    def get_stream_meta(self) -> StreamMeta:
        """Return the broadcast's title and game, or placeholders if the query fails."""

        try:
            return self._metadata.get_stream_meta(self.channel)
        except Exception as exc:
            logging.warning("Unable to fetch stream metadata for %s: %s", self.channel.name, exc)
            return StreamMeta()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "StreamResolver":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
