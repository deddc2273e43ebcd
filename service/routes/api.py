"""API routes for stats."""

from fastapi import APIRouter, Depends

from utils.timestamp import format_timestamp
from service.auth import verify_basic_auth

router = APIRouter(prefix="/api/v1", tags=["api"])

# These will be set by app.py
_issuer = None
_audit_log = None


def init(issuer, audit_log):
    """Initialize with issuer and audit logger references."""
    global _issuer, _audit_log
    _issuer = issuer
    _audit_log = audit_log


@router.get("/stats")
async def stats(username=Depends(verify_basic_auth)):
    """Return issuance and audit log statistics (requires basic auth)."""
    return {
        "timestamp": format_timestamp(),
        "ids": _issuer.get_stats(),
        "audit_log": _audit_log.get_stats(),
    }
