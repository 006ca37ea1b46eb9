"""Resolver settings and the environment helpers used to populate them."""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel

from .utils.http_client import DEFAULT_CLIENT_ID


def env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value


def env_float(name: str) -> float | None:
    value = env_str(name)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def env_bool(name: str) -> bool:
    value = env_str(name)
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_list(name: str) -> list[str] | None:
    raw = env_str(name)
    if not raw:
        return None
    items = [item.strip() for item in raw.split(",") if item.strip()]
    return items or None


class ResolverConfig(BaseModel):
    """Process-wide settings shared by every channel a resolver handles."""

    client_id: str = DEFAULT_CLIENT_ID
    timeout: float = 10
    token_protocol: Literal["gql", "legacy"] = "gql"
    supported_codecs: str = "avc1"
    player_type: str = "site"

    @classmethod
    def from_env(cls) -> "ResolverConfig":
        overrides = {
            "client_id": env_str("TWITCH_CLIENT_ID"),
            "timeout": env_float("TWITCH_HTTP_TIMEOUT"),
            "token_protocol": env_str("TWITCH_TOKEN_PROTOCOL"),
            "supported_codecs": env_str("TWITCH_SUPPORTED_CODECS"),
            "player_type": env_str("TWITCH_PLAYER_TYPE"),
        }
        return cls(**{key: value for key, value in overrides.items() if value is not None})
