"""
Base36 byte codec.

Arbitrary-length bytes <-> text over a 36-symbol lowercase alphabet.
Leading zero bytes survive the trip: each one becomes a leading 'a'.
"""

from core.errors import InvalidArgument, MalformedInputError

# Symbol value is the index, so 'a' is zero and '9' is 35
ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
BASE = len(ALPHABET)
ZERO = ALPHABET[0]

_VALUES = {symbol: value for value, symbol in enumerate(ALPHABET)}


def encode(data):
    """Encode bytes as base36 text."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidArgument("Data must be bytes-like", field="data", value=type(data).__name__)
    data = bytes(data)
    if not data:
        return ""

    leading_zeros = len(data) - len(data.lstrip(b"\x00"))
    n = int.from_bytes(data, byteorder="big")
    if n == 0:
        return ZERO * len(data)

    chars = []
    while n > 0:
        n, remainder = divmod(n, BASE)
        chars.append(ALPHABET[remainder])

    return ZERO * leading_zeros + "".join(reversed(chars))


def decode(text):
    """Decode base36 text back into the original bytes."""
    if not isinstance(text, str):
        raise InvalidArgument("Encoded text must be a string", field="text", value=type(text).__name__)
    if not text:
        return b""

    for position, symbol in enumerate(text):
        if symbol not in _VALUES:
            raise MalformedInputError(
                f"Invalid base36 character {symbol!r}", value=symbol, position=position
            )

    leading_zeros = len(text) - len(text.lstrip(ZERO))
    if leading_zeros == len(text):
        return bytes(leading_zeros)

    n = 0
    for symbol in text[leading_zeros:]:
        n = n * BASE + _VALUES[symbol]

    return bytes(leading_zeros) + n.to_bytes((n.bit_length() + 7) // 8, byteorder="big")
