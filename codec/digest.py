"""Message digest helpers over hashlib."""

import base64
import hashlib
import hmac
from pathlib import Path

from core.errors import InvalidArgument

BUFFER_SIZE = 8192
ALGORITHMS = ("md5", "sha1", "sha256", "sha384", "sha512")


def _new(algorithm):
    name = str(algorithm).lower().replace("-", "")
    if name not in ALGORITHMS:
        raise InvalidArgument(f"Unsupported digest algorithm {algorithm!r}", field="algorithm", value=str(algorithm))
    return hashlib.new(name)


def _as_bytes(data):
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise InvalidArgument("Data must be str or bytes-like", field="data", value=type(data).__name__)


def digest_hex(data, algorithm="sha256", uppercase=False):
    """Hex digest of str (UTF-8) or bytes."""
    hasher = _new(algorithm)
    hasher.update(_as_bytes(data))
    digest = hasher.hexdigest()
    return digest.upper() if uppercase else digest


def digest_base64(data, algorithm="sha256"):
    hasher = _new(algorithm)
    hasher.update(_as_bytes(data))
    return base64.b64encode(hasher.digest()).decode("ascii")


def digest_file(path, algorithm="sha256"):
    """Hex digest of a file, streamed in BUFFER_SIZE chunks."""
    hasher = _new(algorithm)
    with open(Path(path), "rb") as file:
        for chunk in iter(lambda: file.read(BUFFER_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def md5(data, uppercase=False):
    return digest_hex(data, "md5", uppercase)


def sha1(data, uppercase=False):
    return digest_hex(data, "sha1", uppercase)


def sha256(data, uppercase=False):
    return digest_hex(data, "sha256", uppercase)


def sha384(data, uppercase=False):
    return digest_hex(data, "sha384", uppercase)


def sha512(data, uppercase=False):
    return digest_hex(data, "sha512", uppercase)


def _matches(actual, expected):
    expected = str(expected).lower()
    if not expected.isascii():
        return False
    return hmac.compare_digest(actual, expected)


def verify(data, expected, algorithm="sha256"):
    """Compare against an expected hex digest, case-insensitive."""
    return _matches(digest_hex(data, algorithm), expected)


def verify_file(path, expected, algorithm="sha256"):
    return _matches(digest_file(path, algorithm), expected)
