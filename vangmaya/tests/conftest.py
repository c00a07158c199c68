"""
Pytest configuration and shared fixtures for Vangmaya tests.

Provides:
- Test client setup with FastAPI TestClient and a tmp_path artifact store
- Sample scripture documents (see factories.py)
- Test logging
"""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from vangmaya.app.config import settings
from vangmaya.app.dependencies.scripture import get_artifact_store
from vangmaya.app.main import app
from vangmaya.scripture import FilesystemArtifactStore

from .factories import ADMIN_SECRET, build_gita_document, build_minimal_document

# ============================================================================
# Logging Configuration for Tests
# ============================================================================


def setup_test_logging():
    """Configure console logging for test runs."""
    logger = logging.getLogger("tests")
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)-20s | %(funcName)-25s | %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    app_logger = logging.getLogger("vangmaya")
    app_logger.setLevel(logging.WARNING)

    return logger


test_logger = setup_test_logging()


# ============================================================================
# Sample Documents
# ============================================================================


@pytest.fixture
def gita_document() -> dict:
    return build_gita_document()


@pytest.fixture
def minimal_document() -> dict:
    return build_minimal_document()


# ============================================================================
# Artifact Stores
# ============================================================================


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "scripture"


@pytest.fixture
def artifact_store(data_dir: Path) -> FilesystemArtifactStore:
    return FilesystemArtifactStore(data_dir, slug="bhagavad-gita")


# ============================================================================
# Test Client Fixtures
# ============================================================================


@pytest.fixture
def admin_secret(monkeypatch) -> str:
    monkeypatch.setattr(settings, "SCRIPTURE_ADMIN_SECRET", ADMIN_SECRET)
    return ADMIN_SECRET


@pytest.fixture
def store_override():
    """Install an artifact store for the app; callable again mid-test to swap it."""

    def install(store) -> None:
        app.dependency_overrides[get_artifact_store] = lambda: store

    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def client(artifact_store, admin_secret, store_override) -> Generator[TestClient, None, None]:
    """
    Provide a TestClient whose artifact store writes beneath tmp_path.

    The admin secret is set to ``ADMIN_SECRET`` for the duration of the test.
    """
    store_override(artifact_store)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        test_logger.debug("TestClient ready")
        yield test_client


@pytest.fixture
def ingest(client):
    """Post a payload to the ingestion endpoint with the right password."""

    def post(payload, password: str = ADMIN_SECRET):
        return client.post(
            "/v1/scripture/ingest",
            json={"admin_password": password, "payload": payload},
        )

    return post


# ============================================================================
# Pytest Hooks for Enhanced Reporting
# ============================================================================


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Hook to log failing tests with the first lines of their error."""
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        test_logger.error(f"[FAIL] {item.nodeid}")
        if report.longrepr:
            for line in str(report.longreprtext).split("\n")[:5]:
                if line.strip():
                    test_logger.error(f"  {line}")
