"""
Tests for the scripture ingestion and reading endpoints.

Tests cover:
- POST /v1/scripture/ingest - envelope, auth, validation, persistence outcomes
- GET /v1/scripture/chapters - chapter listing
- GET /v1/scripture/chapters/{chapter} - chapter detail
- GET /v1/scripture/chapters/{chapter}/verses/{verse} - verse with navigation
- GET /v1/scripture/chapters/{chapter}/verses/{verse}/commentaries[/{author_id}]
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from vangmaya.app.config import settings
from vangmaya.app.dependencies.scripture import _ingestion_service_for, get_ingestion_service
from vangmaya.scripture import FilesystemArtifactStore

from .factories import FlakyArtifactStore, make_commentary, make_verse

pytestmark = pytest.mark.integration


class TestIngestEnvelope:
    """Request-level checks performed before validation."""

    def test_missing_secret_configuration(self, client: TestClient, monkeypatch, minimal_document):
        """Should refuse ingestion while no admin secret is configured."""
        monkeypatch.setattr(settings, "SCRIPTURE_ADMIN_SECRET", "")

        response = client.post(
            "/v1/scripture/ingest",
            json={"admin_password": "", "payload": minimal_document},
        )

        assert response.status_code == 500
        assert response.json()["ok"] is False
        assert "SCRIPTURE_ADMIN_SECRET" in response.json()["message"]

    def test_invalid_json_body(self, client: TestClient):
        """Should return 400 for a body that is not JSON."""
        response = client.post(
            "/v1/scripture/ingest",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"ok": False, "message": "Invalid JSON body."}

    def test_deeply_nested_body(self, client: TestClient):
        """Should return 400 rather than fail while decoding extreme nesting."""
        depth = 200_000
        body = '{"admin_password": "x", "payload": ' + "[" * depth + "]" * depth + "}"

        response = client.post(
            "/v1/scripture/ingest",
            content=body.encode(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"ok": False, "message": "Invalid JSON body."}

    @pytest.mark.parametrize(
        "body",
        [[], {"payload": {}}, {"admin_password": "x"}, "text"],
    )
    def test_malformed_envelope(self, client: TestClient, body):
        """Should return 400 when admin_password or payload is absent."""
        response = client.post("/v1/scripture/ingest", json=body)

        assert response.status_code == 400
        assert "admin_password and payload" in response.json()["message"]

    def test_non_string_password(self, client: TestClient, minimal_document):
        response = client.post(
            "/v1/scripture/ingest",
            json={"admin_password": 1234, "payload": minimal_document},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "admin_password must be a string."

    def test_wrong_password(self, ingest, data_dir: Path, minimal_document):
        """Should return 401 and write nothing."""
        response = ingest(minimal_document, password="guess")

        assert response.status_code == 401
        assert response.json() == {"ok": False, "message": "Unauthorized"}
        assert not data_dir.exists()


class TestIngestOutcomes:
    """Validation, persistence and success responses."""

    def test_successful_ingest(self, ingest, minimal_document):
        response = ingest(minimal_document)

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["message"] == "Ingest successful"
        assert data["summary"] == {"chapters": 1, "verses": 1}
        assert Path(data["raw_path"]).exists()
        assert Path(data["normalized_path"]).name == "normalized-bhagavad-gita.json"
        assert data["ephemeral_warning"] is None

    def test_ephemeral_warning(self, ingest, monkeypatch, minimal_document):
        monkeypatch.setattr(settings, "SCRIPTURE_FS_EPHEMERAL", True)

        response = ingest(minimal_document)

        assert response.status_code == 200
        assert "ephemeral" in response.json()["ephemeral_warning"]

    def test_validation_failure_lists_every_error(self, ingest, data_dir: Path):
        payload = {
            "chapters": {
                "1": {"number": 1, "verses": {"2": make_verse(3, "drift")}},
                "2": {
                    "number": 2,
                    "verses": {
                        "1": make_verse(
                            1,
                            "t",
                            commentaries={
                                "shankara": make_commentary("ramanuja", "Ramanujacharya", "x")
                            },
                        )
                    },
                },
            }
        }

        response = ingest(payload)

        assert response.status_code == 400
        data = response.json()
        assert data["ok"] is False
        assert data["message"] == "Validation failed"
        assert data["errors"] == [
            {"path": "chapters.1.verses.2", "reason": "key/value mismatch"},
            {"path": "chapters.2.verses.1.commentaries.shankara", "reason": "key/value mismatch"},
        ]
        assert not data_dir.exists()

    def test_duplicate_keys_in_request_body(self, client: TestClient):
        body = (
            '{"admin_password": "test-admin-secret", "payload": {"chapters": {'
            '"1": {"number": 1, "verses": {}},'
            '"1": {"number": 1, "verses": {}}}}}'
        )

        response = client.post(
            "/v1/scripture/ingest",
            content=body.encode(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [{"path": "chapters.1", "reason": "duplicate key"}]

    def test_persistence_failure(self, ingest, store_override, data_dir: Path, minimal_document):
        store_override(FlakyArtifactStore(data_dir, fail_raw=True))

        response = ingest(minimal_document)

        assert response.status_code == 500
        data = response.json()
        assert data["ok"] is False
        assert data["details"] == "disk full"
        assert data["partial"] is False

    def test_partial_persistence_failure(
        self, ingest, store_override, data_dir: Path, minimal_document
    ):
        store_override(FlakyArtifactStore(data_dir, fail_normalized=True))

        response = ingest(minimal_document)

        assert response.status_code == 500
        data = response.json()
        assert data["partial"] is True
        assert data["details"] == "read-only filesystem"

    def test_reingest_produces_identical_normalized_bytes(self, ingest, gita_document):
        first = ingest(gita_document).json()
        first_bytes = Path(first["normalized_path"]).read_bytes()
        second = ingest(gita_document).json()

        assert second["normalized_path"] == first["normalized_path"]
        assert Path(second["normalized_path"]).read_bytes() == first_bytes


class TestReading:
    """Reading endpoints served from the normalized artifact."""

    def test_unavailable_before_ingestion(self, client: TestClient):
        response = client.get("/v1/scripture/chapters")

        assert response.status_code == 503
        assert response.json()["detail"] == "scripture data not available"

    def test_list_chapters(self, client: TestClient, ingest, gita_document):
        ingest(gita_document)

        response = client.get("/v1/scripture/chapters")

        assert response.status_code == 200
        data = response.json()
        assert [c["number"] for c in data] == [1, 2]
        assert data[0]["verse_count"] == 2
        assert data[0]["title"]["sa"] == "अर्जुनविषादयोग"
        assert data[1]["first_verse"] == 47

    def test_get_chapter(self, client: TestClient, ingest, gita_document):
        ingest(gita_document)

        response = client.get("/v1/scripture/chapters/2")

        assert response.status_code == 200
        assert response.json()["verse_numbers"] == [47]

    def test_get_verse_with_navigation(self, client: TestClient, ingest, gita_document):
        ingest(gita_document)

        response = client.get("/v1/scripture/chapters/1/verses/2")

        assert response.status_code == 200
        data = response.json()
        assert data["verse"]["location"] == {"chapter": 1, "verse": 2}
        assert data["navigation"]["previous"] == {"chapter": 1, "verse": 1}
        assert data["navigation"]["next"] == {"chapter": 2, "verse": 47}
        assert data["navigation"]["is_first"] is False
        assert data["navigation"]["is_last"] is False
        assert data["chapter_title"]["en"] == "Arjuna's Despondency"

    def test_first_and_last_verse_flags(self, client: TestClient, ingest, gita_document):
        ingest(gita_document)

        first = client.get("/v1/scripture/chapters/1/verses/1").json()
        last = client.get("/v1/scripture/chapters/2/verses/47").json()

        assert first["navigation"]["is_first"] is True
        assert first["navigation"]["previous"] is None
        assert last["navigation"]["is_last"] is True
        assert last["navigation"]["next"] is None

    def test_missing_verse_and_chapter(self, client: TestClient, ingest, gita_document):
        ingest(gita_document)

        assert client.get("/v1/scripture/chapters/2/verses/1").status_code == 404
        assert client.get("/v1/scripture/chapters/9").status_code == 404
        assert client.get("/v1/scripture/chapters/0").status_code == 400
        assert client.get("/v1/scripture/chapters/one").status_code == 422

    def test_commentaries(self, client: TestClient, ingest, gita_document):
        ingest(gita_document)

        response = client.get("/v1/scripture/chapters/2/verses/47/commentaries")

        assert response.status_code == 200
        data = response.json()
        assert data["location"] == {"chapter": 2, "verse": 47}
        assert {c["author"]["id"] for c in data["commentaries"]} == {"shankara", "ramanuja"}

    def test_commentary_by_author(self, client: TestClient, ingest, gita_document):
        ingest(gita_document)

        found = client.get("/v1/scripture/chapters/2/verses/47/commentaries/ramanuja")
        missing = client.get("/v1/scripture/chapters/2/verses/47/commentaries/madhva")

        assert found.status_code == 200
        assert found.json()["author"]["name"] == "Ramanujacharya"
        assert missing.status_code == 404
        assert missing.json()["detail"] == "commentary not found"

    def test_verse_without_commentaries(self, client: TestClient, ingest, gita_document):
        ingest(gita_document)

        response = client.get("/v1/scripture/chapters/1/verses/1/commentaries")

        assert response.status_code == 200
        assert response.json()["commentaries"] == []


class TestDependencies:
    """Dependency providers behind the ingestion endpoint."""

    def test_one_ingestion_service_per_store(self, artifact_store):
        first = get_ingestion_service(artifact_store)

        assert get_ingestion_service(artifact_store) is first
        assert get_ingestion_service(FilesystemArtifactStore(artifact_store.base_dir)) is not first

    def test_service_cache_is_bounded(self):
        assert _ingestion_service_for.cache_info().maxsize == 1
