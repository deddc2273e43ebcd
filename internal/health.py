"""Service health: registered async checks folded into one report."""

import asyncio
import secrets
import time
from enum import Enum

from codec import base36, crockford
from ids.ulid import extract_sortable_id_timestamp, generate_sortable_id
from utils.timestamp import format_timestamp, now_millis

CHECK_TIMEOUT = 5


class Status(Enum):
    OK = "healthy"
    DEGRADED = "degraded"
    FAIL = "unhealthy"


class CheckResult:
    __slots__ = ("name", "status", "msg")

    def __init__(self, name, status, msg=""):
        self.name = name
        self.status = status
        self.msg = msg

    def to_dict(self):
        return {"name": self.name, "status": self.status.value, "msg": self.msg}


def overall_status(results):
    """Critical failures fail the service; anything else not OK degrades it."""
    if any(result.status is Status.FAIL and critical for result, critical in results):
        return Status.FAIL
    if any(result.status is not Status.OK for result, _ in results):
        return Status.DEGRADED
    return Status.OK


class HealthChecker:
    def __init__(self, ttl=1.0):
        self.ttl = ttl
        self.started = time.monotonic()
        self._checks = {}
        self._report = None
        self._report_at = 0.0

    @property
    def uptime(self):
        return time.monotonic() - self.started

    def register(self, name, check_fn, critical=True):
        self._checks[name] = (check_fn, critical)

    async def _run(self, name, check_fn):
        try:
            return await asyncio.wait_for(check_fn(), timeout=CHECK_TIMEOUT)
        except asyncio.TimeoutError:
            return CheckResult(name, Status.FAIL, "timeout")
        except Exception as exc:
            return CheckResult(name, Status.FAIL, f"{type(exc).__name__}: {exc}")

    async def check(self):
        """Run every check, reusing the last report within `ttl` seconds."""
        now = time.monotonic()
        if self._report is not None and now - self._report_at < self.ttl:
            return self._report

        names = list(self._checks)
        outcomes = await asyncio.gather(*(self._run(name, self._checks[name][0]) for name in names))
        results = [(outcome, self._checks[name][1]) for name, outcome in zip(names, outcomes)]

        self._report = {
            "status": overall_status(results).value,
            "timestamp": format_timestamp(),
            "uptime": round(self.uptime, 1),
            "checks": [outcome.to_dict() for outcome in outcomes],
        }
        self._report_at = now
        return self._report


async def check_event_loop():
    await asyncio.sleep(0)
    return CheckResult("loop", Status.OK)


async def check_codec():
    """Round-trip a zero-prefixed random payload through base36."""
    sample = b"\x00\x00" + secrets.token_bytes(14)
    if base36.decode(base36.encode(sample)) != sample:
        return CheckResult("codec", Status.FAIL, "base36 round trip")
    return CheckResult("codec", Status.OK)


async def check_clock():
    now = now_millis()
    value = generate_sortable_id(now)
    if extract_sortable_id_timestamp(value) != now or not crockford.is_valid(value):
        return CheckResult("clock", Status.FAIL, f"ulid timestamp mismatch at {now}")
    return CheckResult("clock", Status.OK, value[:10])


def create_audit_check(audit_log, high_water=0.9):
    async def check():
        if not audit_log.running:
            return CheckResult("audit_log", Status.DEGRADED, "stopped")
        depth, capacity = audit_log.queue.qsize(), audit_log.queue.maxsize
        if depth >= capacity * high_water:
            return CheckResult("audit_log", Status.DEGRADED, f"{depth}/{capacity}")
        return CheckResult("audit_log", Status.OK, f"{audit_log.written} written")
    return check
