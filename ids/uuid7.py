"""
UUID version 7 - time-ordered UUID.

Layout (128 bits): 48 bits ms timestamp | 4 bits version (7) | 12 bits random
| 2 bits variant (0b10) | 62 bits random. Sorts by creation time numerically.
"""

import random
import threading
import uuid

from core.errors import FormatError, InvalidArgument
from ids.random_ids import is_valid_uuid
from utils.timestamp import now_millis

TIMESTAMP_MASK = (1 << 48) - 1
VERSION = 7

# One generator per thread; random.Random instances are not shared
_local = threading.local()


def _rng():
    rng = getattr(_local, "rng", None)
    if rng is None:
        rng = _local.rng = random.Random()
    return rng


def generate_time_ordered_uuid(timestamp_ms=None):
    """Generate a canonical UUIDv7 string. Timestamps wrap at 48 bits."""
    if timestamp_ms is None:
        timestamp_ms = now_millis()
    elif isinstance(timestamp_ms, bool) or not isinstance(timestamp_ms, int) or timestamp_ms < 0:
        raise InvalidArgument("Timestamp must be a non-negative integer", field="timestamp_ms", value=str(timestamp_ms))
    rng = _rng()

    value = (timestamp_ms & TIMESTAMP_MASK) << 80
    value |= VERSION << 76
    value |= rng.getrandbits(12) << 64
    value |= 0b10 << 62
    value |= rng.getrandbits(62)

    return str(uuid.UUID(int=value))


def extract_uuid_timestamp(text):
    """Recover the millisecond timestamp from a UUIDv7 string."""
    if not is_valid_uuid(text):
        raise FormatError("Not a canonical UUID string", value=str(text))

    # Only the version nibble is checked; the variant bits are not
    value = uuid.UUID(text).int
    if (value >> 76) & 0xF != VERSION:
        raise FormatError(f"Not a version {VERSION} UUID", value=text)

    return value >> 80
