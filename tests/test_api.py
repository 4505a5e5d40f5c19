"""Tests for the HTTP API.

Tests cover:
- Reading and rendering plans, with 404 before any generation
- PDF export headers and body
- Text-to-speech and image endpoints
- TrainifyError responses: JSON body, status code and Retry-After
- Streak endpoints
"""

from typing import Iterator
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from conftest import EXAMPLE_WORKOUT, FakeSynthesizer
from trainify.app import app
from trainify.dependencies import get_image_generator, get_plan_manager, get_speech_synthesizer
from trainify.errors import ImageGenerationError, RateLimitError
from trainify.plan_manager import PlanManager
from trainify.schemas import UserDetails


@pytest.fixture
def client(manager: PlanManager, synthesizer: FakeSynthesizer, image_generator: MagicMock) -> Iterator[TestClient]:
    """Test client with every collaborator replaced by a mock."""
    app.dependency_overrides[get_plan_manager] = lambda: manager
    app.dependency_overrides[get_speech_synthesizer] = lambda: synthesizer
    app.dependency_overrides[get_image_generator] = lambda: image_generator
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_plans_404_before_generation(client: TestClient):
    response = client.get("/api/plans")
    assert response.status_code == 404
    assert "No plans generated yet" in response.json()["detail"]


async def test_get_plans_after_generation(client: TestClient, manager: PlanManager, user_details: UserDetails):
    await manager.generate_plans(user_details)

    body = client.get("/api/plans").json()
    assert body["userDetails"]["name"] == "Alex"
    assert set(body["plans"]) == {"workout", "diet", "motivation"}


def test_render_explicit_plan(client: TestClient):
    response = client.post("/api/plans/render", json={"category": "workout", "plan": EXAMPLE_WORKOUT})

    assert response.status_code == 200
    body = response.json()
    assert body["category"] == "workout"
    keys = [block["action_key"] for block in body["blocks"]]
    assert keys == ["day-1", "workout-1", "workout-2"]
    assert body["blocks"][0]["spoken_content"] == "Day 1: Legs. Squats: 3x10 (60s). Lunges: 3x12 (45s)."


def test_render_without_session_plan_is_404(client: TestClient):
    assert client.post("/api/plans/render", json={"category": "diet"}).status_code == 404


def test_render_rejects_unknown_category(client: TestClient):
    assert client.post("/api/plans/render", json={"category": "sleep", "plan": "x"}).status_code == 422


def test_export_pdf(client: TestClient):
    response = client.post("/api/export", json={"workout": EXAMPLE_WORKOUT, "diet": "", "motivation": ""})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="trainify-ai-plan.pdf"'
    assert response.content.startswith(b"%PDF")


def test_export_without_plans_is_404(client: TestClient):
    assert client.post("/api/export", json={}).status_code == 404


def test_text_to_speech(client: TestClient, synthesizer: FakeSynthesizer):
    response = client.post("/api/text-to-speech", json={"text": "Day 1: Legs.", "voice": "nova"})

    assert response.status_code == 200
    assert response.json() == {"audioContent": "SUQzLWZha2UtbXAz", "mimeType": "audio/mpeg", "voice": "nova"}
    assert synthesizer.calls == ["Day 1: Legs."]


def test_text_to_speech_requires_text(client: TestClient):
    assert client.post("/api/text-to-speech", json={"text": ""}).status_code == 422


def test_text_to_speech_rate_limited(client: TestClient, synthesizer: FakeSynthesizer):
    synthesizer.error = RateLimitError("Please try again in 30 seconds.", retry_after_seconds=30)

    response = client.post("/api/text-to-speech", json={"text": "Day 1."})

    assert response.status_code == 429
    assert response.json() == {"error": "Please try again in 30 seconds."}
    assert response.headers["retry-after"] == "30"


def test_generate_image(client: TestClient, image_generator: MagicMock):
    response = client.post("/api/generate-image", json={"prompt": "oatmeal", "type": "meal"})

    assert response.json() == {"imageUrl": "https://img.example/squats.png"}
    image_generator.generate.assert_awaited_once_with("oatmeal", "meal")


def test_generate_image_failure(client: TestClient, image_generator: MagicMock):
    image_generator.generate = AsyncMock(side_effect=ImageGenerationError("Failed to generate image. Please try again."))

    response = client.post("/api/generate-image", json={"prompt": "squats"})

    assert response.status_code == 502
    assert response.json() == {"error": "Failed to generate image. Please try again."}


def test_streak_endpoints(client: TestClient):
    assert client.get("/api/streak").json()["current"] == 0

    body = client.post("/api/streak/mark", json={}).json()
    assert body["current"] == 1
    assert len(body["record"]) == 1
    assert len(body["calendar"]) == 14


def test_generate_plan_rejects_invalid_details(client: TestClient):
    response = client.post("/api/generate_plan", json={"name": "Alex", "age": 0})
    assert response.status_code == 422
