"""Decoding of ``#EXT-TAG:KEY="value",KEY=value`` attribute lines."""

from __future__ import annotations

import logging
import re
from typing import Any, List

from ..models import AttributeRecord, AttributeValue

NUMBER_PATTERN = re.compile(r"\d+\.\d+|\d+", re.ASCII)
TRUE_TOKENS = {"true", "yes"}
FALSE_TOKENS = {"false", "no"}


def normalize_value(value: Any) -> Any:
    """Coerce a scalar token into a bool, a float, or leave it as it is.

    Values that are not strings are returned untouched, which makes the
    function idempotent.
    """

    if not isinstance(value, str):
        return value
    token = value.strip()
    lowered = token.lower()
    if lowered in TRUE_TOKENS:
        return True
    if lowered in FALSE_TOKENS:
        return False
    if NUMBER_PATTERN.fullmatch(token):
        return float(token)
    return value


def render_value(value: AttributeValue) -> str:
    """Print a normalized value back the way it appeared in the playlist."""

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_key(key: str) -> str:
    return key.replace("-", "_").lower()


def parse_attributes(line: str) -> AttributeRecord:
    """Parse one playlist attribute line into an ordered record.

    Quoted values may contain commas, which the naive comma split breaks
    apart. A token without ``=`` is glued back onto the value of the key at
    the previous token position.
    """

    _, _, remainder = line.partition(":")
    record: AttributeRecord = {}
    keys: List[str] = []
    for index, prop in enumerate(remainder.split(",")):
        key, separator, value = prop.replace('"', "").partition("=")
        if separator:
            normalized = normalize_key(key)
            if normalized not in record:
                keys.append(normalized)
            record[normalized] = normalize_value(value)
            continue

        if index < 1 or index - 1 >= len(keys):
            logging.debug("Dropping orphan attribute token %r in %r", prop, line)
            continue
        previous_key = keys[index - 1]
        record[previous_key] = normalize_value(f"{render_value(record[previous_key])},{key}")

    if "type" in record:
        if record.get("name") == "audio_only":
            record["type"] = "AUDIO"
    elif record.get("video") == "audio_only":
        del record["video"]
    return record
