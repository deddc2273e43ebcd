"""Crockford Base32 integer rendering (no I, L, O, U)."""

from core.errors import MalformedInputError

ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
BASE = len(ALPHABET)

_VALUES = {symbol: value for value, symbol in enumerate(ALPHABET)}


def encode_int(value, length):
    """Render a non-negative integer as exactly `length` symbols, most significant first.

    Bits above 5 * length are discarded.
    """
    chars = []
    for _ in range(length):
        value, remainder = divmod(value, BASE)
        chars.append(ALPHABET[remainder])
    return "".join(reversed(chars))


def decode_int(text):
    n = 0
    for position, symbol in enumerate(text):
        try:
            n = n * BASE + _VALUES[symbol]
        except KeyError:
            raise MalformedInputError(
                f"Invalid base32 character {symbol!r}", value=symbol, position=position
            ) from None
    return n


def is_valid(text):
    return all(symbol in _VALUES for symbol in text)
