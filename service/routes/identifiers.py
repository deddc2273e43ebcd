"""Identifier issuing and inspection routes."""

from fastapi import APIRouter, Query
from pydantic import BaseModel

from ids.ulid import compare_sortable_ids_by_time, extract_sortable_id_timestamp
from ids.uuid7 import extract_uuid_timestamp
from utils.timestamp import format_millis

router = APIRouter(prefix="/api/v1/ids", tags=["ids"])

# Set by app.py
_issuer = None


def init(issuer):
    """Initialize with the identifier issuer."""
    global _issuer
    _issuer = issuer


class CompareRequest(BaseModel):
    a: str
    b: str


def _timestamp_body(value, timestamp_ms):
    return {"id": value, "timestamp_ms": timestamp_ms, "timestamp": format_millis(timestamp_ms)}


@router.get("/ulid/{value}/timestamp")
async def ulid_timestamp(value: str):
    """Timestamp embedded in a ULID."""
    return _timestamp_body(value, extract_sortable_id_timestamp(value))


@router.get("/uuid7/{value}/timestamp")
async def uuid7_timestamp(value: str):
    """Timestamp embedded in a UUIDv7."""
    return _timestamp_body(value, extract_uuid_timestamp(value))


@router.post("/ulid/compare")
async def ulid_compare(body: CompareRequest):
    """Order two ULIDs by embedded timestamp: -1, 0 or 1."""
    return {"order": compare_sortable_ids_by_time(body.a, body.b)}


@router.get("/{kind}")
async def issue(kind: str, count: int = Query(1), timestamp: int | None = Query(None)):
    """Issue one or more identifiers of the given kind."""
    values = _issuer.issue_batch(kind, count, timestamp)
    return {"kind": _issuer.parse_kind(kind).value, "count": len(values), "ids": values}
