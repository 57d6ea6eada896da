"""Shared fixtures: fake external services behind ``httpx.MockTransport``."""

import json
from collections.abc import Callable

import httpx
import pytest

from moodboard_service.config import Settings
from moodboard_service.services import Services

Handler = Callable[[httpx.Request], httpx.Response]


def chat_completion(content: str | None) -> dict:
    """Build a minimal OpenAI chat completion payload."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def unsplash_results(count: int) -> dict:
    """Build an Unsplash search payload with ``count`` photos."""
    return {
        "total": count,
        "results": [
            {"urls": {"regular": f"https://images.example.com/photo-{i}.jpg"}}
            for i in range(count)
        ],
    }


class FakeBackends:
    """Routes outbound requests to per-service handlers and records them."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.quote: Handler = lambda request: httpx.Response(
            200, json=chat_completion("Joy grows wherever you choose to plant it today.")
        )
        self.vision: Handler = lambda request: httpx.Response(
            200, json=chat_completion("Excited!")
        )
        self.images: Handler = lambda request: httpx.Response(
            200, json=unsplash_results(4)
        )

    def answer_quote(self, content: str | None) -> None:
        self.quote = lambda request: httpx.Response(200, json=chat_completion(content))

    def answer_vision(self, content: str | None) -> None:
        self.vision = lambda request: httpx.Response(200, json=chat_completion(content))

    def answer_images(self, count: int) -> None:
        self.images = lambda request: httpx.Response(200, json=unsplash_results(count))

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.host == host]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.unsplash.com":
            return self.images(request)

        body = json.loads(request.content)
        user_content = body["messages"][-1]["content"]
        if isinstance(user_content, list):
            return self.vision(request)
        return self.quote(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def fake_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "text_service_key": "sk-text",
        "vision_service_key": "sk-vision",
        "image_service_key": "unsplash-key",
    }
    values.update(overrides)
    return Settings.model_validate(values)


@pytest.fixture
def backends() -> FakeBackends:
    return FakeBackends()


@pytest.fixture
def settings() -> Settings:
    return fake_settings()


@pytest.fixture
def services(backends: FakeBackends, settings: Settings) -> Services:
    return Services.from_settings(settings, http_client=backends.client())
