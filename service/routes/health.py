"""Health and liveness routes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from internal.health import Status
from utils.timestamp import format_timestamp

router = APIRouter(prefix="/api/v1", tags=["health"])

# Set by app.py
_issuer = None
_health_checker = None


def init(issuer, health_checker):
    """Initialize with issuer and health checker references."""
    global _issuer, _health_checker
    _issuer = issuer
    _health_checker = health_checker


@router.get("/health")
async def health():
    """Aggregated component health; 503 when a critical check fails."""
    report = await _health_checker.check()
    status_code = 503 if report["status"] == Status.FAIL.value else 200
    return JSONResponse(content=report, status_code=status_code)


@router.get("/heartbeat")
async def heartbeat():
    return {
        "status": "ok",
        "timestamp": format_timestamp(),
        "uptime_s": round(_health_checker.uptime, 1),
        "total_issued": _issuer.get_stats()["total_issued"],
    }
