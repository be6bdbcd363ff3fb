"""API integration tests for the Debt Communication Assistant."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from src.api.errors import MessageGenerationError
from src.api.models.responses import GeneratedMessage
from src.db.models import Base
from src.main import app

ALICE = {"X-User-Id": "alice-oid", "X-User-Name": "Alice"}
BOB = {"X-User-Id": "bob-oid"}


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    @patch("src.api.routes.health.llm_client.health_check", new_callable=AsyncMock)
    def test_health_check(self, mock_health, client, database):
        mock_health.return_value = {"status": "healthy"}

        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database_available"] is True
        assert "provider" in data
        assert "model" in data
        assert "uptime_seconds" in data

    @patch("src.api.routes.health.llm_client.health_check", new_callable=AsyncMock)
    def test_health_degraded(self, mock_health, client, no_database):
        mock_health.return_value = {"status": "unhealthy", "error": "no key"}

        response = client.get("/health")

        data = response.json()
        assert data["status"] == "degraded"
        assert data["model_available"] is False
        assert data["database_available"] is False


class TestGenerateEndpoint:
    """Tests for /generate-message endpoint."""

    def test_generate_requires_profile_fields(self, client):
        response = client.post("/generate-message", json={"name": "Jane"})

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_generate_rejects_unknown_segment(self, client, sample_profile):
        payload = sample_profile.model_dump(mode="json")
        payload["customer_segment"] = "vip"

        response = client.post("/generate-message", json=payload)

        assert response.status_code == 422

    def test_generate_rejects_negative_amount(self, client, sample_profile):
        payload = sample_profile.model_dump(mode="json")
        payload["debt_amount"] = -5

        response = client.post("/generate-message", json=payload)

        assert response.status_code == 422

    def test_generate_rejects_blank_name(self, client, sample_profile):
        payload = sample_profile.model_dump(mode="json")
        payload["name"] = "   "

        response = client.post("/generate-message", json=payload)

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @patch("src.api.routes.generate.generator")
    def test_generate_success(self, mock_generator, client, sample_profile):
        mock_generator.generate = AsyncMock(
            return_value=GeneratedMessage(
                channel="email",
                tone="professional and helpful",
                subject="Payment Reminder",
                content="Please contact us.",
            )
        )

        response = client.post("/generate-message", json=sample_profile.model_dump(mode="json"))

        assert response.status_code == 200
        assert response.json() == {
            "channel": "email",
            "tone": "professional and helpful",
            "subject": "Payment Reminder",
            "content": "Please contact us.",
        }
        assert "X-Request-ID" in response.headers

    @patch("src.api.routes.generate.generator")
    def test_generate_omits_missing_subject(self, mock_generator, client, hardship_profile):
        mock_generator.generate = AsyncMock(
            return_value=GeneratedMessage(
                channel="sms", tone="highly empathetic and supportive", content="Hi Peter."
            )
        )

        response = client.post(
            "/generate-message", json=hardship_profile.model_dump(mode="json")
        )

        assert response.status_code == 200
        assert "subject" not in response.json()

    @patch("src.engine.generator.llm_client.complete", new_callable=AsyncMock)
    def test_generate_llm_failure(self, mock_complete, client, sample_profile):
        mock_complete.side_effect = RuntimeError("503 from provider")

        response = client.post("/generate-message", json=sample_profile.model_dump(mode="json"))

        assert response.status_code == 503
        data = response.json()
        assert data["error"] == "Failed to generate message"
        assert data["error_code"] == "GENERATION_FAILED"
        assert data["request_id"] is not None

    @patch("src.api.routes.generate.generator")
    def test_generate_error_is_structured(self, mock_generator, client, sample_profile):
        mock_generator.generate = AsyncMock(side_effect=MessageGenerationError(provider="gemini"))

        response = client.post("/generate-message", json=sample_profile.model_dump(mode="json"))

        assert response.status_code == 503
        assert response.json()["details"] == {"provider": "gemini"}


class TestDownloadEndpoint:
    def test_download_attachment(self, client):
        response = client.post(
            "/messages/download",
            json={"channel": "email", "tone": "t", "subject": "Reminder", "content": "Body"},
        )

        assert response.status_code == 200
        assert response.text == "Reminder\n\nBody"
        assert response.headers["content-type"].startswith("text/plain")
        assert 'filename="message.txt"' in response.headers["content-disposition"]


class TestRequestTracing:
    """Tests for request ID and timing headers."""

    def test_client_request_id_is_echoed(self, client):
        response = client.post(
            "/messages/download",
            json={"channel": "sms", "tone": "t", "content": "Body"},
            headers={"X-Request-ID": "trace-7", "X-User-Id": "alice-oid"},
        )

        assert response.headers["X-Request-ID"] == "trace-7"
        assert float(response.headers["X-Response-Time-Ms"]) >= 0

    @patch("src.api.routes.generate.generator")
    def test_unhandled_error_keeps_request_id(self, mock_generator, sample_profile):
        mock_generator.generate = AsyncMock(side_effect=RuntimeError("unexpected"))
        client = TestClient(app, raise_server_exceptions=False)

        response = client.post(
            "/generate-message",
            json=sample_profile.model_dump(mode="json"),
            headers={"X-Request-ID": "trace-42"},
        )

        assert response.status_code == 500
        assert response.json()["error_code"] == "INTERNAL_ERROR"
        assert response.json()["request_id"] == "trace-42"
        assert response.headers["X-Request-ID"] == "trace-42"


class TestTemplateEndpoints:
    """Tests for /templates endpoints."""

    def test_requires_identity(self, client, database):
        response = client.get("/templates")

        assert response.status_code == 401
        assert response.json()["error_code"] == "AUTHENTICATION_REQUIRED"

    def test_save_and_list(self, client, database, sample_template_request):
        payload = sample_template_request.model_dump(mode="json")

        saved = client.post("/templates", json=payload, headers=ALICE)

        assert saved.status_code == 201
        body = saved.json()
        assert body["name"] == "Jane Wanjiku - new"
        assert body["customer_segment"] == "new"
        assert body["is_public"] is False

        listed = client.get("/templates", headers=ALICE).json()
        assert [t["id"] for t in listed] == [body["id"]]
        assert client.get("/templates", headers=BOB).json() == []

    def test_save_rejects_blank_content(self, client, database, sample_template_request):
        payload = sample_template_request.model_dump(mode="json")
        payload["content"] = "   "

        response = client.post("/templates", json=payload, headers=ALICE)

        assert response.status_code == 422

    def test_list_by_segment(self, client, database, sample_template_request):
        payload = sample_template_request.model_dump(mode="json")
        client.post("/templates", json=payload, headers=ALICE)
        client.post(
            "/templates", json={**payload, "customer_segment": "long-term"}, headers=ALICE
        )

        response = client.get("/templates/segments/long-term", headers=ALICE)

        assert response.status_code == 200
        assert [t["customer_segment"] for t in response.json()] == ["long-term"]

    def test_list_by_unknown_segment(self, client, database):
        response = client.get("/templates/segments/vip", headers=ALICE)

        assert response.status_code == 422

    def test_delete_scoped_to_owner(self, client, database, sample_template_request):
        saved = client.post(
            "/templates", json=sample_template_request.model_dump(mode="json"), headers=ALICE
        ).json()

        as_bob = client.delete(f"/templates/{saved['id']}", headers=BOB)
        assert as_bob.json() == {"success": False}
        assert len(client.get("/templates", headers=ALICE).json()) == 1

        as_alice = client.delete(f"/templates/{saved['id']}", headers=ALICE)
        assert as_alice.json() == {"success": True}
        assert client.get("/templates", headers=ALICE).json() == []

    def test_store_unavailable(self, client, no_database, sample_template_request):
        listed = client.get("/templates", headers=ALICE)
        assert listed.status_code == 200
        assert listed.json() == []

        saved = client.post(
            "/templates", json=sample_template_request.model_dump(mode="json"), headers=ALICE
        )
        assert saved.status_code == 500
        assert saved.json()["error"] == "Failed to save template"

        deleted = client.delete("/templates/1", headers=ALICE)
        assert deleted.json() == {"success": False}

    def test_list_newest_first(self, client, database, sample_template_request):
        payload = sample_template_request.model_dump(mode="json")
        ids = [
            client.post("/templates", json={**payload, "name": name}, headers=ALICE).json()["id"]
            for name in ("first", "second", "third")
        ]

        listed = client.get("/templates", headers=ALICE).json()
        by_segment = client.get("/templates/segments/new", headers=ALICE).json()

        assert [t["id"] for t in listed] == list(reversed(ids))
        assert [t["name"] for t in by_segment] == ["third", "second", "first"]

    def test_failing_store_degrades(self, client, database, sample_template_request):
        Base.metadata.drop_all(database.kw["bind"])

        listed = client.get("/templates", headers=ALICE)
        assert listed.status_code == 200
        assert listed.json() == []

        by_segment = client.get("/templates/segments/new", headers=ALICE)
        assert by_segment.status_code == 200
        assert by_segment.json() == []

        saved = client.post(
            "/templates", json=sample_template_request.model_dump(mode="json"), headers=ALICE
        )
        assert saved.status_code == 500
        assert saved.json()["error"] == "Failed to save template"

        deleted = client.delete("/templates/1", headers=ALICE)
        assert deleted.status_code == 200
        assert deleted.json() == {"success": False}
