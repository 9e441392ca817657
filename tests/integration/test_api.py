"""Integration tests for the report API endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.config import settings
from app.config.database import get_reports_collection
from app.main import app


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def collection():
    return AsyncMongoMockClient()["reportsystem"]["reports"]


@pytest.fixture
def upload_root(tmp_path, monkeypatch):
    root = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(root))
    return root


@pytest_asyncio.fixture
async def client(collection, upload_root):
    app.dependency_overrides[get_reports_collection] = lambda: collection
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def _form(**overrides):
    data = {
        "heading": "Leaking pipe",
        "description": "Water under the sink in the east restroom",
        "concern": "Plumbing",
        "building": "Library",
    }
    data.update(overrides)
    return data


class _BrokenCollection:
    async def insert_one(self, document):
        raise RuntimeError("database unavailable")

    def find(self, *args, **kwargs):
        raise RuntimeError("database unavailable")


# ---------------------------------------------------------------------------
# POST /api/reports
# ---------------------------------------------------------------------------

async def test_create_report_without_image(client):
    resp = await client.post("/api/reports", data=_form())
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    report = body["report"]
    assert report["id"]
    assert report["heading"] == "Leaking pipe"
    assert report["status"] == "Pending"
    assert report["image"] is None
    assert "createdAt" in report


async def test_create_report_persists_document(client, collection):
    resp = await client.post("/api/reports", data=_form())
    report_id = resp.json()["report"]["id"]

    documents = await collection.find().to_list(length=None)
    assert len(documents) == 1
    assert str(documents[0]["_id"]) == report_id
    assert documents[0]["status"] == "Pending"
    assert isinstance(documents[0]["created_at"], datetime)


async def test_create_report_with_image_is_served(client, upload_root):
    resp = await client.post(
        "/api/reports",
        data=_form(),
        files={"imageFile": ("photo.png", PNG_BYTES, "image/png")},
    )
    assert resp.status_code == 200
    image = resp.json()["report"]["image"]
    assert image.startswith("/uploads/")
    assert image.endswith("-photo.png")

    stored = list(upload_root.iterdir())
    assert [p.name for p in stored] == [image.rsplit("/", 1)[1]]

    served = await client.get(image)
    assert served.status_code == 200
    assert served.content == PNG_BYTES


async def test_missing_fields_are_persisted_as_null(client):
    resp = await client.post("/api/reports", data={"concern": "Safety"})
    assert resp.status_code == 200
    report = resp.json()["report"]
    assert report["heading"] is None
    assert report["description"] is None
    assert report["building"] is None
    assert report["concern"] == "Safety"


async def test_oversized_upload_rejected(client, upload_root, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 16)
    resp = await client.post(
        "/api/reports",
        data=_form(),
        files={"imageFile": ("photo.png", PNG_BYTES, "image/png")},
    )
    assert resp.status_code == 413
    assert resp.json()["success"] is False
    assert list(upload_root.iterdir()) == []


async def test_create_report_storage_failure(client):
    app.dependency_overrides[get_reports_collection] = lambda: _BrokenCollection()
    resp = await client.post("/api/reports", data=_form())
    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert "database unavailable" in body["message"]


# ---------------------------------------------------------------------------
# GET /api/reports
# ---------------------------------------------------------------------------

async def test_list_reports_empty(client):
    resp = await client.get("/api/reports")
    assert resp.status_code == 200
    assert resp.json() == []


async def test_list_reports_newest_first(client, collection):
    t1 = datetime(2025, 3, 1, 9, 0)
    for heading, created in [("older", t1), ("newest", t1 + timedelta(hours=2)), ("middle", t1 + timedelta(hours=1))]:
        await collection.insert_one({
            "heading": heading,
            "description": "x",
            "concern": "Plumbing",
            "building": "Library",
            "status": "Pending",
            "image": None,
            "created_at": created,
        })

    resp = await client.get("/api/reports")
    assert resp.status_code == 200
    assert [r["heading"] for r in resp.json()] == ["newest", "middle", "older"]


async def test_list_includes_created_report_with_null_image(client):
    created = await client.post("/api/reports", data=_form())
    report_id = created.json()["report"]["id"]

    listed = (await client.get("/api/reports")).json()
    assert len(listed) == 1
    assert listed[0]["id"] == report_id
    assert listed[0]["image"] is None


async def test_list_reports_failure(client):
    app.dependency_overrides[get_reports_collection] = lambda: _BrokenCollection()
    resp = await client.get("/api/reports")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Error fetching reports"}


# ---------------------------------------------------------------------------
# GET /uploads/{name}
# ---------------------------------------------------------------------------

async def test_unknown_upload_returns_404(client, upload_root):
    resp = await client.get("/uploads/1700000000000-nothing.png")
    assert resp.status_code == 404


async def test_upload_head_request(client):
    created = await client.post(
        "/api/reports",
        data=_form(),
        files={"imageFile": ("photo.png", PNG_BYTES, "image/png")},
    )
    resp = await client.head(created.json()["report"]["image"])
    assert resp.status_code == 200


async def test_process_time_header(client):
    resp = await client.get("/api/reports")
    assert "x-process-time" in resp.headers


# ---------------------------------------------------------------------------
# Persisted values and upload names
# ---------------------------------------------------------------------------

async def test_created_at_matches_persisted_value(client):
    created = (await client.post("/api/reports", data=_form())).json()["report"]
    listed = (await client.get("/api/reports")).json()
    assert listed[0]["id"] == created["id"]
    assert listed[0]["createdAt"] == created["createdAt"]


async def test_long_upload_name_is_accepted(client, upload_root):
    resp = await client.post(
        "/api/reports",
        data=_form(),
        files={"imageFile": ("a" * 300 + ".png", PNG_BYTES, "image/png")},
    )
    assert resp.status_code == 200
    image = resp.json()["report"]["image"]
    assert image.endswith(".png")

    served = await client.get(image)
    assert served.content == PNG_BYTES


def test_error_envelope_documented():
    responses = app.openapi()["paths"]["/api/reports"]
    assert set(responses["post"]["responses"]) >= {"200", "413", "500"}
    assert "500" in responses["get"]["responses"]
    schema = responses["post"]["responses"]["500"]["content"]["application/json"]["schema"]
    assert schema["$ref"].endswith("/ErrorOut")
