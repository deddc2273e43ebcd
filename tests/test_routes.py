"""Integration tests for API routes."""

import pytest

from codec import base36
from ids.ulid import generate_sortable_id, is_valid_sortable_id
from ids.uuid7 import generate_time_ordered_uuid


class TestIdRoutes:
    """Tests for identifier endpoints."""

    @pytest.mark.asyncio
    async def test_issue_ulid(self, client):
        """GET /ids/ulid issues one ULID."""
        response = await client.get("/api/v1/ids/ulid")
        assert response.status_code == 200
        data = response.json()
        assert data["kind"] == "ulid"
        assert data["count"] == 1
        assert is_valid_sortable_id(data["ids"][0])

    @pytest.mark.asyncio
    async def test_issue_batch_with_timestamp(self, client):
        """count and timestamp query parameters are honoured."""
        response = await client.get("/api/v1/ids/uuid7", params={"count": 3, "timestamp": 1234})
        assert response.status_code == 200
        ids = response.json()["ids"]
        assert len(ids) == 3
        assert all(value.startswith("00000000-04d2-7") for value in ids)

    @pytest.mark.asyncio
    async def test_unknown_kind(self, client):
        """Unknown kinds are 422 with an error body."""
        response = await client.get("/api/v1/ids/snowflake")
        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "InvalidArgument"
        assert "error_id" in data

    @pytest.mark.asyncio
    async def test_batch_limit(self, client):
        """count above max_batch is rejected."""
        response = await client.get("/api/v1/ids/uuid4", params={"count": 11})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_ulid_timestamp(self, client):
        """Timestamp is extracted from a ULID."""
        response = await client.get(f"/api/v1/ids/ulid/{generate_sortable_id(1000)}/timestamp")
        assert response.status_code == 200
        data = response.json()
        assert data["timestamp_ms"] == 1000
        assert data["timestamp"] == "1970-01-01T00:00:01.000Z"

    @pytest.mark.asyncio
    async def test_ulid_timestamp_invalid(self, client):
        """Invalid ULIDs are 400 FormatError."""
        response = await client.get("/api/v1/ids/ulid/nope/timestamp")
        assert response.status_code == 400
        assert response.json()["error"] == "FormatError"

    @pytest.mark.asyncio
    async def test_uuid7_timestamp(self, client):
        """Timestamp is extracted from a UUIDv7."""
        response = await client.get(f"/api/v1/ids/uuid7/{generate_time_ordered_uuid(42)}/timestamp")
        assert response.status_code == 200
        assert response.json()["timestamp_ms"] == 42

    @pytest.mark.asyncio
    async def test_ulid_max_timestamp(self, client):
        """The largest ULID timestamp is returned without an ISO rendering."""
        response = await client.get("/api/v1/ids/ulid/7ZZZZZZZZZZZZZZZZZZZZZZZZZ/timestamp")
        assert response.status_code == 200
        data = response.json()
        assert data["timestamp_ms"] == 2 ** 48 - 1
        assert data["timestamp"] is None

    @pytest.mark.asyncio
    async def test_uuid7_max_timestamp(self, client):
        """The largest UUIDv7 timestamp is returned without an ISO rendering."""
        response = await client.get("/api/v1/ids/uuid7/ffffffff-ffff-7fff-bfff-ffffffffffff/timestamp")
        assert response.status_code == 200
        data = response.json()
        assert data["timestamp_ms"] == 2 ** 48 - 1
        assert data["timestamp"] is None

    @pytest.mark.asyncio
    async def test_uuid7_timestamp_v4(self, client):
        """A v4 UUID is rejected."""
        response = await client.get("/api/v1/ids/uuid7/8c6f0a2e-3b1d-4f5a-9e7c-1d2b3c4d5e6f/timestamp")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_compare(self, client):
        """ULIDs compare by embedded time."""
        body = {"a": generate_sortable_id(1), "b": generate_sortable_id(2)}
        response = await client.post("/api/v1/ids/ulid/compare", json=body)
        assert response.status_code == 200
        assert response.json() == {"order": -1}


class TestCodecRoutes:
    """Tests for codec endpoints."""

    @pytest.mark.asyncio
    async def test_base36_encode(self, client):
        """Hex bytes encode with leading zeros kept."""
        response = await client.post("/api/v1/codec/base36/encode", json={"hex": "000001"})
        assert response.status_code == 200
        assert response.json()["text"] == "aab"

    @pytest.mark.asyncio
    async def test_base36_decode(self, client):
        """Text decodes back to hex."""
        text = base36.encode(b"\x00hello")
        response = await client.post("/api/v1/codec/base36/decode", json={"text": text})
        assert response.json()["hex"] == b"\x00hello".hex()

    @pytest.mark.asyncio
    async def test_base36_decode_malformed(self, client):
        """Bad symbols are 400 MalformedInputError."""
        response = await client.post("/api/v1/codec/base36/decode", json={"text": "g!"})
        assert response.status_code == 400
        assert response.json()["error"] == "MalformedInputError"

    @pytest.mark.asyncio
    async def test_base64url(self, client):
        """URL-safe encoding has no padding."""
        response = await client.post("/api/v1/codec/base64url/encode", json={"hex": "fbff"})
        assert response.json()["text"] == "-_8"

    @pytest.mark.asyncio
    async def test_base64_padding_error(self, client):
        """Improper padding is rejected."""
        response = await client.post("/api/v1/codec/base64/decode", json={"text": "YWI"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_bad_hex(self, client):
        """Non-hex input is 422."""
        response = await client.post("/api/v1/codec/base36/encode", json={"hex": "zz"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_scheme(self, client):
        """Unknown schemes are 422."""
        response = await client.post("/api/v1/codec/base58/encode", json={"hex": "00"})
        assert response.status_code == 422


class TestHealthRoutes:
    """Tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_health_endpoint(self, client):
        """GET /health returns health status."""
        response = await client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] in ("healthy", "degraded")
        assert "timestamp" in data
        assert {check["name"] for check in data["checks"]} == {"loop", "codec", "clock", "audit_log"}

    @pytest.mark.asyncio
    async def test_heartbeat_endpoint(self, client):
        """GET /heartbeat returns uptime and issuance count."""
        await client.get("/api/v1/ids/short")
        response = await client.get("/api/v1/heartbeat")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["total_issued"] == 1
        assert "uptime_s" in data


class TestAPIRoutes:
    """Tests for API endpoints (require basic auth)."""

    @pytest.mark.asyncio
    async def test_stats_requires_auth(self, client):
        """GET /stats requires authentication."""
        response = await client.get("/api/v1/stats")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_stats_wrong_password(self, client, auth_header):
        """Wrong credentials are 401."""
        response = await client.get("/api/v1/stats", headers=auth_header(password="nope"))
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_stats(self, client, auth_header):
        """GET /stats reports issuance and audit log counters."""
        await client.get("/api/v1/ids/ulid", params={"count": 2})
        response = await client.get("/api/v1/stats", headers=auth_header())
        assert response.status_code == 200
        data = response.json()
        assert data["ids"]["issued"]["ulid"] == 2
        assert data["audit_log"]["queued"] == 2
