"""Playback access token negotiation.

Two generations of the upstream protocol exist: the GQL
``streamPlaybackAccessToken`` query (current) and the keyed GET on
``api.twitch.tv`` (legacy). Both are exposed behind :class:`TokenProvider`.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Dict, Optional

import requests

from ..errors import AuthorizationError
from ..models import AuthToken, ChannelIdentity
from ..utils.http_client import HttpClient

LEGACY_TOKEN_URL = "https://api.twitch.tv/api/channels/{channel}/access_token"

PLAYBACK_ACCESS_TOKEN_QUERY = (
    "query PlaybackAccessToken($login: String!, $playerType: String!) {"
    "  streamPlaybackAccessToken("
    "    channelName: $login,"
    '    params: {platform: "web", playerBackend: "mediaplayer", playerType: $playerType}'
    "  ) {"
    "    value"
    "    signature"
    "  }"
    "}"
)


def oauth_headers(channel: ChannelIdentity) -> Dict[str, str]:
    if not channel.auth:
        return {}
    return {"Authorization": f"OAuth {channel.auth}"}


def decode_json(response: requests.Response, channel: ChannelIdentity) -> Dict[str, Any]:
    try:
        return response.json() or {}
    except ValueError as exc:
        logging.error("Token response for %s is not JSON: %s", channel.name, exc)
        raise AuthorizationError(
            "unable to obtain authorization: malformed response", status_code=response.status_code
        ) from exc


class TokenProvider(abc.ABC):
    """Exchanges a channel identity for a signed playback token."""

    def __init__(self, http_client: HttpClient) -> None:
        self._client = http_client

    @abc.abstractmethod
    def get_token(self, channel: ChannelIdentity) -> AuthToken:
        raise NotImplementedError


class GQLTokenProvider(TokenProvider):
    """Requests the token through the GQL ``streamPlaybackAccessToken`` field."""

    def __init__(self, http_client: HttpClient, player_type: str = "site") -> None:
        super().__init__(http_client)
        self.player_type = player_type

    def get_token(self, channel: ChannelIdentity) -> AuthToken:
        payload = {
            "operationName": "PlaybackAccessToken",
            "query": PLAYBACK_ACCESS_TOKEN_QUERY,
            "variables": {"login": channel.name, "playerType": self.player_type},
        }
        response = self._client.post_gql(payload, headers=oauth_headers(channel))

        if response.status_code != 200:
            logging.error("Token request for %s returned status %s", channel.name, response.status_code)
            raise AuthorizationError(status_code=response.status_code)

        data: Dict[str, Any] = decode_json(response, channel)
        errors = data.get("errors")
        if errors:
            message = (errors[0] or {}).get("message") or "unknown error"
            raise AuthorizationError(f"unable to obtain authorization: {message}", status_code=response.status_code)

        access_token: Optional[Dict[str, Any]] = (data.get("data") or {}).get("streamPlaybackAccessToken")
        if not access_token or not access_token.get("signature") or not access_token.get("value"):
            raise AuthorizationError(
                f"unable to obtain authorization: no playback token for {channel.name}",
                status_code=response.status_code,
            )

        logging.debug("Obtained playback token for %s", channel.name)
        return AuthToken(signature=access_token["signature"], token=access_token["value"])


class LegacyTokenProvider(TokenProvider):
    """Requests the token with a keyed GET against the retired v5 API."""

    def get_token(self, channel: ChannelIdentity) -> AuthToken:
        url = LEGACY_TOKEN_URL.format(channel=channel.name)
        response = self._client.get(url, headers=oauth_headers(channel))

        if response.status_code != 200:
            logging.error("Legacy token request for %s returned status %s", channel.name, response.status_code)
            raise AuthorizationError(status_code=response.status_code)

        data = decode_json(response, channel)
        if not data.get("sig") or not data.get("token"):
            raise AuthorizationError("unable to obtain authorization: response lacks sig/token", status_code=200)
        return AuthToken(signature=data["sig"], token=data["token"])


def build_token_provider(protocol: str, http_client: HttpClient, player_type: str = "site") -> TokenProvider:
    """Instantiate the provider for ``protocol`` (``"gql"`` or ``"legacy"``)."""

    if protocol == "gql":
        return GQLTokenProvider(http_client, player_type=player_type)
    if protocol == "legacy":
        return LegacyTokenProvider(http_client)
    raise ValueError(f"Unknown token protocol {protocol!r}; expected 'gql' or 'legacy'")
