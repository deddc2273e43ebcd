"""Base64 codecs: standard (padded) and URL-safe (padding-free)."""

import base64
import binascii
import re

from core.errors import InvalidArgument, MalformedInputError

_URL_SAFE = re.compile(r"[A-Za-z0-9_-]*")


def _as_bytes(data):
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidArgument("Data must be bytes-like", field="data", value=type(data).__name__)
    return bytes(data)


def _as_text(text):
    if not isinstance(text, str):
        raise InvalidArgument("Encoded text must be a string", field="text", value=type(text).__name__)
    if not text.isascii():
        raise MalformedInputError("Base64 text must be ASCII")
    return text


def encode(data):
    """Encode bytes with the standard alphabet and '=' padding."""
    return base64.b64encode(_as_bytes(data)).decode("ascii")


def decode(text):
    """Strict standard Base64 decode."""
    text = _as_text(text)
    try:
        raw = base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise MalformedInputError(f"Invalid base64: {exc}", cause=exc) from exc
    # Unused low bits of the last symbol must be zero
    if encode(raw) != text:
        raise MalformedInputError("Non-canonical base64", value=text)
    return raw


def encode_url_safe(data):
    """Encode bytes with the URL-safe alphabet, padding stripped."""
    return base64.urlsafe_b64encode(_as_bytes(data)).decode("ascii").rstrip("=")


def decode_url_safe(text):
    """Decode padding-free URL-safe Base64."""
    text = _as_text(text)
    if not _URL_SAFE.fullmatch(text):
        bad = next(i for i, symbol in enumerate(text) if not _URL_SAFE.fullmatch(symbol))
        raise MalformedInputError(
            f"Invalid base64url character {text[bad]!r}", value=text[bad], position=bad
        )
    if len(text) % 4 == 1:
        raise MalformedInputError("Invalid base64url length", value=len(text))

    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
    except binascii.Error as exc:
        raise MalformedInputError(f"Invalid base64url: {exc}", cause=exc) from exc
    if encode_url_safe(raw) != text:
        raise MalformedInputError("Non-canonical base64url", value=text)
    return raw


def encode_string(text):
    """UTF-8 encode a string, then Base64 it."""
    if not isinstance(text, str):
        raise InvalidArgument("Text must be a string", field="text", value=type(text).__name__)
    return encode(text.encode("utf-8"))


def decode_string(text):
    """Base64 decode, then read the bytes as UTF-8."""
    raw = decode(text)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedInputError("Decoded bytes are not valid UTF-8", cause=exc) from exc
