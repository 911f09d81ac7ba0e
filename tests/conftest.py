"""Pytest configuration and fixtures."""

import asyncio
import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Set test environment before importing app modules
_TEST_DIR = tempfile.mkdtemp(prefix="content_studio_test_")
os.environ["STORE_BACKEND"] = "local"
os.environ["LOCAL_STORE_PATH"] = str(Path(_TEST_DIR) / "content_os.json")
os.environ["LLM_PROVIDER"] = "stub"
os.environ["IMAGE_GEN_PROVIDER"] = "stub"
os.environ["LOG_LEVEL"] = "WARNING"

from content_studio.adapters.llm.base import LLMProvider, LLMResponse  # noqa: E402
from content_studio.adapters.llm.stub import StubLLMProvider  # noqa: E402

SECTION_TEXT = "Narration for this part of the video, long enough to count as filled. " * 3


class FakeLLMProvider(LLMProvider):
    """Scripted provider for pipeline tests.

    Structured calls return queued ``responses`` if any, else the stub
    payload. Free-text calls return ``SECTION_TEXT``. Any prompt that
    contains one of ``fail_when`` raises. Tracks peak concurrency.
    """

    def __init__(
        self,
        responses: list[str] | None = None,
        prompt_tokens: int = 1000,
        completion_tokens: int = 500,
        fail_when: tuple[str, ...] = (),
        delay: float = 0.0,
        configured: bool = True,
    ) -> None:
        self.responses = list(responses or [])
        self.prompt_tokens = prompt_tokens
        self.completion_tokens = completion_tokens
        self.fail_when = fail_when
        self.delay = delay
        self.configured = configured
        self.calls: list[dict] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._stub = StubLLMProvider()

    @property
    def name(self) -> str:
        return "fake"

    @property
    def is_configured(self) -> bool:
        return self.configured

    @property
    def supports_vision(self) -> bool:
        return True

    async def complete(
        self,
        messages,
        model,
        temperature=0.7,
        max_tokens=None,
        response_schema=None,
    ) -> LLMResponse:
        prompt = "\n".join(m.content for m in messages)
        return await self._answer(prompt, model, temperature, max_tokens, response_schema, 0)

    async def complete_with_vision(
        self,
        messages,
        model,
        temperature=0.7,
        max_tokens=None,
        response_schema=None,
    ) -> LLMResponse:
        prompt = "\n".join(m.text for m in messages)
        images = sum(len(m.image_urls) for m in messages)
        return await self._answer(prompt, model, temperature, max_tokens, response_schema, images)

    async def _answer(self, prompt, model, temperature, max_tokens, response_schema, images):
        self.calls.append(
            {
                "prompt": prompt,
                "model": model,
                "temperature": temperature,
                "max_tokens": max_tokens,
                "schema": response_schema,
                "images": images,
            }
        )
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            for marker in self.fail_when:
                if marker in prompt:
                    raise RuntimeError(f"upstream failure for {marker.strip()}")
            if response_schema is None:
                content = SECTION_TEXT
            elif self.responses:
                content = self.responses.pop(0)
            else:
                stub = await self._stub.complete([], model, response_schema=response_schema)
                content = stub.content
        finally:
            self.in_flight -= 1
        return LLMResponse(
            content=content,
            model=model,
            usage={
                "prompt_tokens": self.prompt_tokens,
                "completion_tokens": self.completion_tokens,
                "total_tokens": self.prompt_tokens + self.completion_tokens,
            },
        )


def section_marker(title: str) -> str:
    """Prompt fragment that identifies one section's content call."""
    return f"SECTION TITLE: {title}\n"


@pytest.fixture
def fake_llm():
    """Scripted LLM provider."""
    return FakeLLMProvider()


@pytest.fixture
def fake_generator(store, fake_llm, stub_image_gen):
    """ContentGenerator wired to the scripted LLM."""
    from content_studio.services.content_generator import ContentGenerator

    return ContentGenerator(store, llm_provider=fake_llm, image_provider=stub_image_gen)


@pytest.fixture
def store(tmp_path):
    """A local store in a fresh temporary file."""
    from content_studio.adapters.store.local import LocalProjectStore

    return LocalProjectStore(tmp_path / "store.json")


@pytest.fixture
def stub_llm():
    """Get a stub LLM provider."""
    from content_studio.adapters.llm.stub import StubLLMProvider

    return StubLLMProvider()


@pytest.fixture
def stub_image_gen():
    """Get a stub image generation provider."""
    from content_studio.adapters.image_gen.stub import StubImageGenProvider

    return StubImageGenProvider()


@pytest.fixture
def generator(store, stub_llm, stub_image_gen):
    """ContentGenerator wired to stub providers."""
    from content_studio.services.content_generator import ContentGenerator

    return ContentGenerator(store, llm_provider=stub_llm, image_provider=stub_image_gen)


@pytest.fixture
def tech_channel():
    """The built-in tech channel profile."""
    from content_studio.presets import get_default_channels

    return get_default_channels()[0]


@pytest.fixture
def make_project():
    """Factory for committed projects with a chosen set of filled sections."""
    from content_studio.domain.enums import Language, VideoMode
    from content_studio.domain.models import (
        ScriptSection,
        SeoPackage,
        ThumbnailPackage,
        TokenUsage,
        VideoProject,
        new_id,
    )

    def _make(
        sections: int = 12,
        filled: tuple[int, ...] = (),
        channel_id: str = "ch_tech",
        usage: TokenUsage | None = None,
    ) -> VideoProject:
        return VideoProject(
            id=new_id(),
            channel_id=channel_id,
            topic="Quantum Computing",
            mode=VideoMode.ORIGINAL,
            language=Language.EN,
            target_audience="Students",
            created_by="Admin User",
            script=[
                ScriptSection(
                    section_title=f"Section {i + 1}",
                    visual_prompt=f"Visual {i + 1}",
                    voiceover_text=("Filled narration. " * 10) if i in filled else "",
                )
                for i in range(sections)
            ],
            seo=SeoPackage(youtube_title="Qubits Explained", youtube_description="desc", tags=["q"]),
            thumbnail=ThumbnailPackage(
                thumbnail_text="QUBITS", thumbnail_visual_prompt="glowing chip"
            ),
            selected_hook="What if your computer could be in two states at once?",
            token_usage=usage or TokenUsage(input_tokens=100, output_tokens=50, estimated_cost=0.00003),
        )

    return _make


@pytest.fixture
def test_client(tmp_path) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app backed by a temporary store."""
    from content_studio.adapters.store.local import LocalProjectStore
    from content_studio.api.deps import get_store
    from content_studio.main import app

    store = LocalProjectStore(tmp_path / "api_store.json")
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as client:
        client.store = store  # type: ignore[attr-defined]
        yield client

    app.dependency_overrides.clear()
