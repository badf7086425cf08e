"""
==============================================================================
API Integration Tests
==============================================================================

Tests for REST API endpoints and application startup.

==============================================================================
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from hashcatalog.catalog.store import close_store, get_store
from hashcatalog.config import get_settings
from hashcatalog.core.exceptions import CatalogNotFoundError, InvalidPathError

from catalog_data import ACME_HASH, KNOWN_HASH, SECOND_HASH, UNKNOWN_HASH, VERSION_ROW


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_check(self, client: TestClient):
        """Test health check returns catalog status."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        data = response.json()
        assert data["healthy"] is True
        assert data["status"] == "OK"
        assert data["version_info"]["version"] == VERSION_ROW["version"]
        assert data["database_path"].endswith("catalog.db")

    def test_top_level_health(self, client: TestClient):
        """Test the top-level /health endpoint mirrors the API one."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "OK"

    def test_readiness_probe(self, client: TestClient):
        """Test readiness probe."""
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["ready"] is True

    def test_liveness_probe(self, client: TestClient):
        """Test liveness probe."""
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["alive"] is True

    def test_root_banner(self, client: TestClient):
        """Test the root endpoint points at the lookup API."""
        response = client.get("/")
        assert response.status_code == 200
        assert "/api/v1/hashes/check" in response.text


class TestHashEndpoints:
    """Tests for hash lookup endpoints."""

    def test_single_known_hash(self, client: TestClient):
        """Test a known hash returns found files."""
        response = client.post("/api/v1/hashes/check", json={"sha256_hashes": [KNOWN_HASH]})
        assert response.status_code == 200
        data = response.json()
        assert len(data["found_files"]) > 0
        assert data["found_files"][0]["sha256"] == KNOWN_HASH
        assert data["not_found_hashes"] == []
        assert data["error_message"] == ""

    def test_single_unknown_hash(self, client: TestClient):
        """Test an unknown hash returns no files."""
        response = client.post("/api/v1/hashes/check", json={"sha256_hashes": [UNKNOWN_HASH]})
        data = response.json()
        assert data["found_files"] == []
        assert data["not_found_hashes"] == [UNKNOWN_HASH]
        assert data["error_message"] == ""

    def test_multiple_hashes(self, client: TestClient):
        """Test a mixed batch with blanks and nulls."""
        response = client.post(
            "/api/v1/hashes/check",
            json={"sha256_hashes": [KNOWN_HASH, "", None, "  ", SECOND_HASH.lower(), UNKNOWN_HASH]}
        )
        data = response.json()
        found = {item["sha256"] for item in data["found_files"]}
        assert found == {KNOWN_HASH, SECOND_HASH}
        assert data["not_found_hashes"] == [UNKNOWN_HASH]

    def test_entry_fields(self, client: TestClient):
        """Test every descriptive field is a string."""
        response = client.post("/api/v1/hashes/check", json={"sha256_hashes": [ACME_HASH, KNOWN_HASH]})
        for item in response.json()["found_files"]:
            for field in ("package_name", "application_type", "os_name", "manufacturer_name"):
                assert isinstance(item[field], str)

    def test_empty_request(self, client: TestClient):
        """Test an empty batch returns an empty response."""
        response = client.post("/api/v1/hashes/check", json={"sha256_hashes": []})
        assert response.status_code == 200
        assert response.json() == {"found_files": [], "not_found_hashes": [], "error_message": ""}

    def test_missing_body_field_defaults_to_empty(self, client: TestClient):
        """Test a body without sha256_hashes is an empty batch."""
        response = client.post("/api/v1/hashes/check", json={})
        assert response.status_code == 200
        assert response.json()["found_files"] == []

    def test_storage_failure_is_structured(self, client: TestClient):
        """Test a store failure is reported in error_message with 200."""
        get_store().close()
        response = client.post("/api/v1/hashes/check", json={"sha256_hashes": [KNOWN_HASH]})
        assert response.status_code == 200
        data = response.json()
        assert data["found_files"] == []
        assert "STORAGE_UNAVAILABLE" in data["error_message"]

    def test_version(self, client: TestClient):
        """Test the version endpoint."""
        response = client.get("/api/v1/version")
        assert response.status_code == 200
        data = response.json()
        assert data["error_message"] == ""
        assert data["version_info"]["build_set"] == VERSION_ROW["build_set"]


class TestDegradedCatalog:
    """Tests against a catalog without a version row."""

    def test_health_unhealthy(self, settings_env, versionless_catalog_path: Path):
        """Test health answers 503 with a DEGRADED body."""
        from hashcatalog.main import Application

        settings_env.setenv("DATABASE_PATH", str(versionless_catalog_path))
        get_settings.cache_clear()

        with TestClient(Application().app) as client:
            health = client.get("/api/v1/health")
            version = client.get("/api/v1/version")

        assert health.status_code == 503
        assert health.json()["status"] == "DEGRADED"
        assert version.status_code == 200
        assert version.json()["version_info"] is None
        assert version.json()["error_message"] != ""


class TestStartup:
    """Tests for application lifespan."""

    def test_missing_database_path_stops_startup(self, settings_env):
        """Test startup fails when DATABASE_PATH is not set."""
        from hashcatalog.main import Application

        with pytest.raises(InvalidPathError):
            with TestClient(Application().app):
                pass
        assert get_store() is None

    def test_missing_database_file_stops_startup(self, settings_env, tmp_path: Path):
        """Test startup fails when the catalog file does not exist."""
        from hashcatalog.main import Application

        settings_env.setenv("DATABASE_PATH", str(tmp_path / "missing.db"))
        get_settings.cache_clear()

        with pytest.raises(CatalogNotFoundError):
            with TestClient(Application().app):
                pass

    def test_relative_database_path(self, settings_env, catalog_path: Path):
        """Test a relative DATABASE_PATH resolves against the working directory."""
        from hashcatalog.main import Application

        settings_env.chdir(catalog_path.parent)
        settings_env.setenv("DATABASE_PATH", catalog_path.name)
        get_settings.cache_clear()

        with TestClient(Application().app) as client:
            assert client.get("/health").status_code == 200

    def test_shutdown_closes_store(self, settings_env, catalog_path: Path):
        """Test the store is released when the app stops."""
        from hashcatalog.main import Application

        settings_env.setenv("DATABASE_PATH", str(catalog_path))
        get_settings.cache_clear()

        with TestClient(Application().app) as client:
            client.get("/api/v1/version")
            store = get_store()
            assert store.is_open is True

        assert store.is_closed is True
        assert get_store() is None

    def test_store_not_loaded(self, settings_env):
        """Test endpoints answer 503 when no store is initialized."""
        from hashcatalog.main import Application

        close_store()
        client = TestClient(Application().app)
        response = client.post("/api/v1/hashes/check", json={"sha256_hashes": [KNOWN_HASH]})

        assert response.status_code == 503
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "STORE_NOT_LOADED"


class TestApiDocs:
    """Tests for the interactive API docs."""

    def test_docs_served_in_development(self, client: TestClient):
        """Test /docs and /redoc are available outside production."""
        assert client.get("/docs").status_code == 200
        assert client.get("/redoc").status_code == 200

    def test_docs_hidden_in_production(self, settings_env):
        """Test APP_ENV=production turns the docs off."""
        from hashcatalog.main import Application

        settings_env.setenv("APP_ENV", "production")
        get_settings.cache_clear()

        client = TestClient(Application().app)

        assert client.get("/docs").status_code == 404
        assert client.get("/redoc").status_code == 404
