# ============================================================================
# API ROUTE TESTS
# ============================================================================
# STATUS: Tests - HTTP surface
# PURPOSE: Verify shim invocation and listing over HTTP
# CREATED: 19 OCT 2026
# ============================================================================
"""
API Route Tests

Uses FastAPI TestClient against a bare app with the shim router.

Run with:
    pytest tests/test_api_routes.py -v
"""

import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from PIL import Image

from api.routes import REQUEST_ID_HEADER, router
from core.config import reset_defaults
from shims.registry import clear_shims, preload_shims


# ============================================================================
# FIXTURES
# ============================================================================

def _make_test_app():
    """Create a test FastAPI app with the shim routes."""
    app = FastAPI()
    app.include_router(router, prefix="/api/v1")
    return app


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("IMAGE_ROOT", str(tmp_path))
    reset_defaults()
    clear_shims()
    yield TestClient(_make_test_app())
    clear_shims()
    reset_defaults()


# ============================================================================
# INVOKE
# ============================================================================

class TestInvokeShim:
    """Tests for /api/v1/shims/{name}."""

    def test_json_response_from_query(self, client):
        response = client.get("/api/v1/shims/jsonResponse", params={"addon-name": "EE Shim"})
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"addon-name": "EE Shim"}

    def test_json_response_from_body(self, client):
        body = {"shim-info": {"name": "jsonResponse"}}
        response = client.post("/api/v1/shims/eeshim_jsonResponse", content=json.dumps(body))
        assert response.status_code == 200
        assert response.json() == body

    def test_unknown_shim_404(self, client):
        response = client.get("/api/v1/shims/nothing")
        assert response.status_code == 404
        assert response.json() == {
            "error": "shim_not_found",
            "detail": "Shim not found: eeshim_nothing",
            "shim": "eeshim_nothing",
        }

    def test_crop_success(self, client, tmp_path):
        source = tmp_path / "raw.png"
        Image.new("RGB", (200, 100), (10, 20, 30)).save(source)
        out = tmp_path / "out.png"

        response = client.post(
            "/api/v1/shims/crop",
            params={"in": str(source), "out": str(out), "scale": "50"},
        )

        assert response.status_code == 200
        payload = response.json()
        assert payload["success"] is True
        assert payload["status"] == "succeeded"
        assert payload["data"] == {"path": str(out.resolve())}
        assert payload["errors"] == []

    def test_crop_failure_422(self, client, tmp_path):
        missing = str(tmp_path / "missing.png")
        response = client.post("/api/v1/shims/crop", params={"in": missing, "scale": "50"})
        assert response.status_code == 422
        payload = response.json()
        assert payload["success"] is False
        assert payload["status"] == "failed"
        assert payload["errors"] == [f"Cannot read source image: {missing}"]

    def test_crop_outside_image_root_422(self, client, tmp_path_factory):
        outside = tmp_path_factory.mktemp("outside") / "victim.png"
        Image.new("RGB", (200, 100)).save(outside)

        response = client.post(
            "/api/v1/shims/crop",
            params={"in": str(outside), "out": str(outside), "scale": "50"},
        )

        assert response.status_code == 422
        assert response.json()["errors"] == [
            f"Source image is outside the image root: {outside}"
        ]
        with Image.open(outside) as image:
            assert image.size == (200, 100)

    def test_crop_destination_outside_image_root_422(self, client, tmp_path):
        source = tmp_path / "raw.png"
        Image.new("RGB", (200, 100)).save(source)

        response = client.post(
            "/api/v1/shims/crop",
            params={"in": str(source), "out": "../escaped.png", "scale": "50"},
        )

        assert response.status_code == 422
        assert response.json()["errors"] == [
            "Destination image is outside the image root: ../escaped.png"
        ]
        assert not (tmp_path.parent / "escaped.png").exists()


# ============================================================================
# REQUEST ID
# ============================================================================

class TestRequestId:
    """Tests for X-Request-ID handling."""

    def test_caller_request_id_echoed(self, client):
        response = client.get(
            "/api/v1/shims/jsonResponse", headers={REQUEST_ID_HEADER: "req-123"}
        )
        assert response.headers[REQUEST_ID_HEADER] == "req-123"

    def test_request_id_generated(self, client, tmp_path):
        response = client.post(
            "/api/v1/shims/crop", params={"in": str(tmp_path / "missing.png")}
        )
        assert response.status_code == 422
        assert len(response.headers[REQUEST_ID_HEADER]) == 32

    def test_request_id_on_404(self, client):
        response = client.get("/api/v1/shims/nothing", headers={REQUEST_ID_HEADER: "abc"})
        assert response.status_code == 404
        assert response.headers[REQUEST_ID_HEADER] == "abc"

    def test_request_id_on_success(self, client, tmp_path):
        source = tmp_path / "raw.png"
        Image.new("RGB", (200, 100)).save(source)
        response = client.post(
            "/api/v1/shims/crop",
            params={"in": str(source), "scale": "50"},
            headers={REQUEST_ID_HEADER: "ok-1"},
        )
        assert response.status_code == 200
        assert response.headers[REQUEST_ID_HEADER] == "ok-1"


# ============================================================================
# LIST
# ============================================================================

class TestListShims:
    """Tests for /api/v1/shims."""

    def test_empty(self, client):
        response = client.get("/api/v1/shims")
        assert response.status_code == 200
        assert response.json() == {"shims": [], "total": 0}

    def test_lists_preloaded(self, client):
        preload_shims(["crop", "jsonResponse"])
        response = client.get("/api/v1/shims")
        names = sorted(shim["name"] for shim in response.json()["shims"])
        assert names == ["eeshim_crop", "eeshim_jsonResponse"]
        crop = next(s for s in response.json()["shims"] if s["shim"] == "crop")
        assert crop["defaults"]["quality"] == 80
