"""Byte/text codec routes. Bytes travel as hex in JSON."""

from fastapi import APIRouter
from pydantic import BaseModel

from codec import b64, base36
from core.errors import InvalidArgument

router = APIRouter(prefix="/api/v1/codec", tags=["codec"])

SCHEMES = {
    "base36": (base36.encode, base36.decode),
    "base64": (b64.encode, b64.decode),
    "base64url": (b64.encode_url_safe, b64.decode_url_safe),
}


class EncodeRequest(BaseModel):
    hex: str


class DecodeRequest(BaseModel):
    text: str


def _scheme(name):
    try:
        return SCHEMES[name]
    except KeyError:
        raise InvalidArgument(f"Unknown scheme {name!r}", field="scheme", value=name) from None


@router.post("/{scheme}/encode")
async def encode(scheme: str, body: EncodeRequest):
    encoder, _ = _scheme(scheme)
    try:
        data = bytes.fromhex(body.hex)
    except ValueError:
        raise InvalidArgument("Field 'hex' is not valid hex", field="hex") from None
    return {"scheme": scheme, "text": encoder(data)}


@router.post("/{scheme}/decode")
async def decode(scheme: str, body: DecodeRequest):
    _, decoder = _scheme(scheme)
    return {"scheme": scheme, "hex": decoder(body.text).hex()}
