from __future__ import annotations

import argparse
import logging
import sys

import requests
from dotenv import load_dotenv
from pydantic import ValidationError

from .config import ResolverConfig, env_bool, env_list, env_str
from .errors import TwitchResolverError
from .models import ChannelIdentity
from .resolver import StreamResolver

load_dotenv()

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_OFFLINE = 2


def _csv_arg(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Resolve a Twitch channel into playable HLS URLs.")
    try:
        config = ResolverConfig.from_env()
    except ValidationError as exc:
        parser.error(f"invalid TWITCH_* environment settings: {exc}")
    parser.add_argument("channel", nargs="?", default=env_str("TWITCH_CHANNEL"), help="Channel login name")
    parser.add_argument(
        "--quality",
        type=_csv_arg,
        default=env_list("TWITCH_QUALITIES") or ["source"],
        help="Comma-separated qualities in order of preference (e.g. 720p60,source)",
    )
    parser.add_argument("--audio-only", action="store_true", help="Shortcut for --quality audio")
    parser.add_argument("--list-qualities", action="store_true", help="List available qualities and exit")
    parser.add_argument("--is-live", action="store_true", help="Report whether the channel is live (exit 2 if offline)")
    parser.add_argument("--meta", action="store_true", help="Print the stream title and game")
    parser.add_argument(
        "--print-manifest-url",
        action="store_true",
        help="Print the signed master playlist URL instead of a media playlist URL",
    )
    parser.add_argument("--oauth-token", default=env_str("TWITCH_OAUTH_TOKEN"), help="OAuth token sent to the authorization endpoint")
    parser.add_argument(
        "--low-latency",
        action="store_true",
        default=env_bool("TWITCH_LOW_LATENCY"),
        help="Request the low latency playlist",
    )
    parser.add_argument(
        "--token-protocol",
        choices=["gql", "legacy"],
        default=config.token_protocol,
        help="Authorization protocol generation to use",
    )
    parser.add_argument("--timeout", type=float, default=config.timeout, help="Per-request timeout in seconds")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    if not args.channel:
        parser.error("a channel name is required (argument or TWITCH_CHANNEL)")
    if args.audio_only:
        args.quality = ["audio"]
    args.config = config.model_copy(update={"token_protocol": args.token_protocol, "timeout": args.timeout})
    return args


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def run(args: argparse.Namespace) -> int:
    channel = ChannelIdentity(name=args.channel, auth=args.oauth_token, low_latency=args.low_latency)
    with StreamResolver(channel, config=args.config) as resolver:
        if args.is_live:
            live = resolver.is_live()
            print("live" if live else "offline")
            return EXIT_OK if live else EXIT_OFFLINE

        if args.meta:
            meta = resolver.get_stream_meta()
            print(f"{meta.title}\n{meta.game}")
            return EXIT_OK

        if args.print_manifest_url:
            print(resolver.manifest_url())
            return EXIT_OK

        if args.list_qualities:
            for quality in resolver.list_qualities():
                print(quality)
            return EXIT_OK

        print(resolver.resolve_stream_url(args.quality))
        return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    try:
        return run(args)
    except TwitchResolverError as exc:
        logging.error("%s", exc)
        return EXIT_FAILURE
    except requests.RequestException as exc:
        logging.error("Request failed: %s", exc)
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
