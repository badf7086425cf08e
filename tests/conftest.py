"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides fixture catalogs, store, service and API client fixtures.

==============================================================================
"""

from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from hashcatalog.catalog.store import CatalogStore, close_store
from hashcatalog.config import get_settings
from hashcatalog.services.lookup_service import LookupService

from catalog_data import build_catalog


# ============================================================================
# CATALOG FILE FIXTURES
# ============================================================================

@pytest.fixture
def catalog_path(tmp_path: Path) -> Path:
    """Fixture catalog with a version row."""
    return build_catalog(tmp_path / "catalog.db")


@pytest.fixture
def versionless_catalog_path(tmp_path: Path) -> Path:
    """Fixture catalog whose VERSION table is empty."""
    return build_catalog(tmp_path / "versionless.db", with_version=False)


@pytest.fixture
def garbage_path(tmp_path: Path) -> Path:
    """A file that is not a SQLite database."""
    path = tmp_path / "garbage.db"
    path.write_bytes(b"this is not a sqlite database\n" * 64)
    return path


# ============================================================================
# STORE & SERVICE FIXTURES
# ============================================================================

@pytest.fixture
def store(catalog_path: Path) -> Generator[CatalogStore, None, None]:
    """Store over the fixture catalog, closed after the test."""
    catalog_store = CatalogStore(catalog_path)
    try:
        yield catalog_store
    finally:
        catalog_store.close()


@pytest.fixture
def service(store: CatalogStore) -> LookupService:
    """Lookup service over the fixture store."""
    return LookupService(store, service_version="9.9.9")


# ============================================================================
# API FIXTURES
# ============================================================================

@pytest.fixture
def settings_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Isolate settings from the developer's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_PATH", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def client(settings_env: pytest.MonkeyPatch, catalog_path: Path) -> Generator[TestClient, None, None]:
    """Test client running the real lifespan against the fixture catalog."""
    from hashcatalog.main import Application

    settings_env.setenv("DATABASE_PATH", str(catalog_path))
    get_settings.cache_clear()

    with TestClient(Application().app) as test_client:
        yield test_client

    close_store()
