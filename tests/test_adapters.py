"""Tests for adapter implementations."""

import base64
import json

import pytest

from content_studio.adapters.image_gen.base import ImageGenRequest, ImageGenResult
from content_studio.adapters.image_gen.imagen import ImagenProvider
from content_studio.adapters.llm.base import LLMMessage
from content_studio.adapters.llm.gemini import GeminiProvider, parse_data_uri
from content_studio.exceptions import ValidationError
from content_studio.schemas import BlueprintResponse, HooksResponse


@pytest.mark.asyncio
async def test_stub_llm_structured_blueprint(stub_llm) -> None:
    """Test that the stub answers with a payload matching the schema."""
    response = await stub_llm.complete(
        [LLMMessage(role="user", content="Topic: Quantum Computing")],
        model="gemini-2.0-flash",
        response_schema=BlueprintResponse,
    )

    blueprint = BlueprintResponse.model_validate_json(response.content)
    assert len(blueprint.script_sections) == 12
    assert all(s.voiceover_text == "" for s in blueprint.script_sections)
    assert response.prompt_tokens > 0


@pytest.mark.asyncio
async def test_stub_llm_hooks(stub_llm) -> None:
    response = await stub_llm.complete(
        [LLMMessage(role="user", content="Generate hooks")],
        model="gemini-2.0-flash",
        response_schema=HooksResponse,
    )

    hooks = json.loads(response.content)["hooks"]
    assert len(hooks) == 4


@pytest.mark.asyncio
async def test_stub_llm_free_text(stub_llm) -> None:
    response = await stub_llm.complete(
        [LLMMessage(role="user", content="Write the section")],
        model="gemini-2.0-flash",
    )

    assert len(response.content) > 50
    assert response.model == "gemini-2.0-flash"


@pytest.mark.asyncio
async def test_stub_image_gen(stub_image_gen) -> None:
    result = await stub_image_gen.generate(ImageGenRequest(prompt="a lab", model="imagen-4.0-generate-001"))

    assert result.success is True
    assert result.to_data_uri().startswith("data:image/jpeg;base64,")
    assert result.metadata["model"] == "imagen-4.0-generate-001"


def test_image_request_defaults() -> None:
    request = ImageGenRequest(prompt="x", model="imagen-3.0-generate-001")

    assert request.aspect_ratio == "16:9"
    assert request.number_of_images == 1
    assert request.output_mime_type == "image/jpeg"


def test_image_result_data_uri() -> None:
    result = ImageGenResult(success=True, image_data=b"abc", mime_type="image/png")

    assert result.to_data_uri() == "data:image/png;base64," + base64.b64encode(b"abc").decode()


class TestParseDataUri:
    """Tests for reference image decoding."""

    def test_valid(self) -> None:
        uri = "data:image/png;base64," + base64.b64encode(b"png-bytes").decode()

        assert parse_data_uri(uri) == ("image/png", b"png-bytes")

    @pytest.mark.parametrize(
        "uri",
        [
            "https://example.com/image.png",
            "data:image/png,not-base64-flagged",
            "data:;base64,AAAA",
            "data:image/png;base64,%%%",
        ],
    )
    def test_invalid(self, uri: str) -> None:
        assert parse_data_uri(uri) is None


class TestGeminiProvider:
    """Tests for the Gemini provider without network access."""

    def test_not_configured_without_key(self, monkeypatch) -> None:
        monkeypatch.setattr("content_studio.adapters.llm.gemini.settings.google_api_key", None)
        provider = GeminiProvider()

        assert provider.is_configured is False
        with pytest.raises(ValidationError, match="GOOGLE_API_KEY"):
            _ = provider.client

    def test_configured_with_key(self) -> None:
        provider = GeminiProvider(api_key="test-key")

        assert provider.is_configured is True
        assert provider.name == "gemini"


class TestImagenProvider:
    """Tests for the Imagen provider without network access."""

    @pytest.mark.asyncio
    async def test_missing_key_reports_failure(self, monkeypatch) -> None:
        monkeypatch.setattr("content_studio.adapters.image_gen.imagen.settings.google_api_key", None)
        provider = ImagenProvider()

        result = await provider.generate(ImageGenRequest(prompt="x", model="imagen-4.0-generate-001"))

        assert provider.is_configured is False
        assert result.success is False
        assert "not configured" in result.error_message
