"""Two-stage payload decoding: gzip first, plain UTF-8 text otherwise."""

import gzip
import json
import zlib
from dataclasses import dataclass
from typing import Any, Literal

from loguru import logger

from plant_catalog.errors import ParseError


@dataclass(frozen=True)
class DecodedPayload:
    """Text recovered from a payload, tagged with the path that produced it."""

    encoding: Literal["gzip", "plain"]
    text: str


def _try_gunzip(payload: bytes) -> bytes | None:
    # A proxy may already have stripped the gzip framing; that is not an error.
    try:
        return gzip.decompress(payload)
    except (OSError, EOFError, zlib.error):
        return None


def decode_payload(payload: bytes, *, source: str = "payload") -> DecodedPayload:
    """Decode a fetched payload to text.

    Gzip decompression is attempted first. If the bytes are not a gzip stream
    they are read as UTF-8 text directly.

    Args:
        payload: Raw bytes as returned by the transport.
        source: Name used in log and error messages.

    Returns:
        DecodedPayload tagged "gzip" or "plain".

    Raises:
        ParseError: If the resulting bytes are not valid UTF-8.
    """
    raw = _try_gunzip(payload)
    encoding: Literal["gzip", "plain"] = "gzip"
    if raw is None:
        logger.debug("{} is not gzip-compressed, reading as plain text", source)
        raw = payload
        encoding = "plain"

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        msg = f"{source} is not UTF-8 text ({encoding}): {e}"
        raise ParseError(msg) from e
    return DecodedPayload(encoding=encoding, text=text)


def parse_json_text(text: str, *, source: str = "payload") -> Any:
    """Parse a JSON document, raising ParseError when it is malformed."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        msg = f"{source} is not valid JSON: {e}"
        raise ParseError(msg) from e
