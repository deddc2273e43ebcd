"""
ULID - Universally Unique Lexicographically Sortable Identifier.

Format: 10 Crockford base32 symbols of ms timestamp + 16 symbols of
80 random bits = 26 characters. Plain string sort is chronological.
"""

import secrets

from codec import crockford
from core.errors import FormatError, InvalidArgument
from utils.timestamp import now_millis

LENGTH = 26
TIMESTAMP_LENGTH = 10
RANDOM_LENGTH = 16
RANDOM_BYTES = 10
MAX_TIMESTAMP = (1 << 48) - 1


def generate_sortable_id(timestamp_ms=None):
    """Generate a 26-character sortable ID, optionally for a given ms timestamp.

    The timestamp field holds 50 bits but values are capped at 48 bits
    (MAX_TIMESTAMP), the range standard ULIDs allow.
    """
    if timestamp_ms is None:
        timestamp_ms = now_millis()
    elif isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, int):
        raise InvalidArgument("Timestamp must be an integer", field="timestamp_ms", value=str(timestamp_ms))
    elif timestamp_ms < 0:
        raise InvalidArgument("Timestamp cannot be negative", field="timestamp_ms", value=timestamp_ms)
    elif timestamp_ms > MAX_TIMESTAMP:
        raise InvalidArgument("Timestamp exceeds 48 bits", field="timestamp_ms", value=timestamp_ms)

    randomness = int.from_bytes(secrets.token_bytes(RANDOM_BYTES), byteorder="big")

    return (crockford.encode_int(timestamp_ms, TIMESTAMP_LENGTH)
            + crockford.encode_int(randomness, RANDOM_LENGTH))


def is_valid_sortable_id(text):
    return isinstance(text, str) and len(text) == LENGTH and crockford.is_valid(text)


def extract_sortable_id_timestamp(text):
    """Decode the ms timestamp from the first 10 symbols."""
    if not is_valid_sortable_id(text):
        raise FormatError("Invalid sortable ID", value=str(text))
    return crockford.decode_int(text[:TIMESTAMP_LENGTH])


def compare_sortable_ids_by_time(a, b):
    """Return -1, 0 or 1 comparing the embedded timestamps."""
    ts_a = extract_sortable_id_timestamp(a)
    ts_b = extract_sortable_id_timestamp(b)
    return (ts_a > ts_b) - (ts_a < ts_b)
