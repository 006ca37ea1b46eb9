"""API client for the current title and game of a broadcast."""

from __future__ import annotations

from ..errors import MetadataError
from ..models import UNKNOWN_GAME, UNKNOWN_TITLE, ChannelIdentity, StreamMeta
from ..utils.http_client import HttpClient

STREAM_META_QUERY = (
    "query StreamMeta($login: String!) {"
    "  user(login: $login) {"
    "    stream {"
    "      title"
    "      game {"
    "        name"
    "      }"
    "    }"
    "  }"
    "}"
)


class MetadataAPI:
    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    def get_stream_meta(self, channel: ChannelIdentity) -> StreamMeta:
        """Fields the channel does not report (e.g. while offline) keep their placeholder."""

        payload = {
            "operationName": "StreamMeta",
            "query": STREAM_META_QUERY,
            "variables": {"login": channel.name},
        }
        response = self._client.post_gql(payload)

        if response.status_code != 200:
            raise MetadataError(f"metadata query returned status {response.status_code}", status_code=response.status_code)

        data = response.json() or {}
        if data.get("errors"):
            raise MetadataError(f"metadata query failed: {data['errors'][0].get('message')}", status_code=200)

        user = (data.get("data") or {}).get("user") or {}
        stream = user.get("stream") or {}
        game = stream.get("game") or {}
        return StreamMeta(
            title=stream.get("title") or UNKNOWN_TITLE,
            game=game.get("name") or UNKNOWN_GAME,
        )
