"""Random (not time-ordered) identifiers and UUID text helpers."""

import re
import uuid

from core.errors import InvalidArgument

DIGITS36 = "0123456789abcdefghijklmnopqrstuvwxyz"

_CANONICAL = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")


def _to_base36(num):
    if num == 0:
        return DIGITS36[0]
    chars = []
    while num:
        num, remainder = divmod(num, 36)
        chars.append(DIGITS36[remainder])
    return "".join(reversed(chars))


def _halves(value):
    return value.int >> 64, value.int & ((1 << 64) - 1)


def generate_random_uuid():
    """Random UUID v4 in canonical form."""
    return str(uuid.uuid4())


def generate_short_id():
    """Both 64-bit halves of a random UUID as base36, concatenated."""
    high, low = _halves(uuid.uuid4())
    return _to_base36(high) + _to_base36(low)


def generate_numeric_id():
    """Digits-only ID from both halves of a random UUID."""
    high, low = _halves(uuid.uuid4())
    return f"{high}{low}"


def remove_uuid_hyphens(text):
    if not isinstance(text, str):
        raise InvalidArgument("UUID must be a string", field="uuid", value=type(text).__name__)
    return text.replace("-", "")


def add_uuid_hyphens(text):
    """Turn a 32-character hex UUID into 8-4-4-4-12 form."""
    if not isinstance(text, str) or len(text) != 32:
        raise InvalidArgument("UUID must be 32 characters long", field="uuid", value=str(text))
    return f"{text[:8]}-{text[8:12]}-{text[12:16]}-{text[16:20]}-{text[20:]}"


def is_valid_uuid(text):
    return isinstance(text, str) and _CANONICAL.fullmatch(text) is not None
