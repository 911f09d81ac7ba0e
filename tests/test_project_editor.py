"""Tests for viewer-side project operations."""

import asyncio

import pytest
import pytest_asyncio
from conftest import FakeLLMProvider, section_marker

from content_studio.adapters.image_gen.base import ImageGenProvider, ImageGenRequest, ImageGenResult
from content_studio.exceptions import BusyError, GenerationError, ImageGenerationError, ValidationError
from content_studio.services.content_generator import ContentGenerator
from content_studio.services.project_editor import ProjectEditor, export_filename, export_script


class FailingImageProvider(ImageGenProvider):
    @property
    def name(self) -> str:
        return "failing"

    async def generate(self, request: ImageGenRequest) -> ImageGenResult:
        return ImageGenResult(success=False, error_message="blocked by safety filter")


@pytest_asyncio.fixture
async def saved_project(store, make_project):
    project = make_project(sections=12, filled=(0, 1))
    await store.save_project(project)
    return project


class TestFillSection:
    """Tests for single-section fills."""

    @pytest.mark.asyncio
    async def test_fill_section_saves_and_adds_usage(self, store, fake_generator, saved_project):
        editor = ProjectEditor(fake_generator, store, saved_project)
        before = saved_project.token_usage

        text = await editor.fill_section(5)

        assert saved_project.script[5].voiceover_text == text
        assert saved_project.script[5].is_filled
        assert saved_project.token_usage.input_tokens == before.input_tokens + 1000
        stored = await store.get_project(saved_project.id)
        assert stored.script[5].voiceover_text == text
        assert len(stored.script) == 12

    @pytest.mark.asyncio
    async def test_refill_overwrites_filled_section(self, store, fake_generator, saved_project):
        editor = ProjectEditor(fake_generator, store, saved_project)
        old = saved_project.script[0].voiceover_text

        await editor.fill_section(0)

        assert saved_project.script[0].voiceover_text != old

    @pytest.mark.asyncio
    async def test_out_of_range(self, store, fake_generator, fake_llm, saved_project):
        editor = ProjectEditor(fake_generator, store, saved_project)

        with pytest.raises(ValidationError):
            await editor.fill_section(12)
        assert fake_llm.calls == []

    @pytest.mark.asyncio
    async def test_failure_leaves_project_unchanged(self, store, stub_image_gen, saved_project):
        llm = FakeLLMProvider(fail_when=(section_marker("Section 4"),))
        editor = ProjectEditor(ContentGenerator(store, llm, stub_image_gen), store, saved_project)

        with pytest.raises(GenerationError):
            await editor.fill_section(3)

        assert saved_project.script[3].voiceover_text == ""
        assert editor.last_error

    @pytest.mark.asyncio
    async def test_dangling_channel_uses_fallback(self, store, fake_generator, fake_llm, make_project):
        """Test that a project whose channel was deleted still generates."""
        project = make_project(channel_id="ch_deleted")
        editor = ProjectEditor(fake_generator, store, project)

        await editor.fill_section(0)

        assert "Lead scriptwriter" in fake_llm.calls[0]["prompt"]

    @pytest.mark.asyncio
    async def test_next_unfilled_index(self, store, fake_generator, saved_project):
        editor = ProjectEditor(fake_generator, store, saved_project)

        assert editor.next_unfilled_index == 2


class TestFillAll:
    """Tests for bulk fills through the editor."""

    @pytest.mark.asyncio
    async def test_fill_all(self, store, fake_generator, saved_project):
        editor = ProjectEditor(fake_generator, store, saved_project)
        progress = []

        result = await editor.fill_all(on_progress=lambda c, t: progress.append((c, t)))

        assert result.completed == 10
        assert progress[-1] == (10, 10)
        assert saved_project.unfilled_indices() == []

    @pytest.mark.asyncio
    async def test_busy_while_bulk_runs(self, store, stub_image_gen, saved_project):
        llm = FakeLLMProvider(delay=0.02)
        editor = ProjectEditor(ContentGenerator(store, llm, stub_image_gen), store, saved_project)

        bulk = asyncio.create_task(editor.fill_all())
        await asyncio.sleep(0.005)

        with pytest.raises(BusyError):
            await editor.fill_section(0)

        await bulk
        assert editor.is_busy is False


class TestImages:
    """Tests for section and thumbnail images."""

    @pytest.mark.asyncio
    async def test_section_image_saved(self, store, fake_generator, saved_project):
        editor = ProjectEditor(fake_generator, store, saved_project)

        image_url = await editor.generate_section_image(2)

        assert image_url.startswith("data:image/jpeg;base64,")
        stored = await store.get_project(saved_project.id)
        assert stored.script[2].image_url == image_url

    @pytest.mark.asyncio
    async def test_thumbnail_image_saved(self, store, fake_generator, saved_project):
        editor = ProjectEditor(fake_generator, store, saved_project)

        image_url = await editor.generate_thumbnail_image()

        assert saved_project.thumbnail.image_url == image_url

    @pytest.mark.asyncio
    async def test_image_failure_keeps_content(self, store, fake_llm, saved_project):
        """Test that an image failure is reported without touching the script."""
        generator = ContentGenerator(store, fake_llm, FailingImageProvider())
        editor = ProjectEditor(generator, store, saved_project)
        script_before = [s.voiceover_text for s in saved_project.script]

        with pytest.raises(ImageGenerationError):
            await editor.generate_section_image(0)

        assert saved_project.script[0].image_url is None
        assert [s.voiceover_text for s in saved_project.script] == script_before

        # Text generation still works afterwards
        await editor.fill_section(4)
        assert saved_project.script[4].is_filled


class TestRepurposeAndExport:
    """Tests for repurposing and export."""

    @pytest.mark.asyncio
    async def test_repurpose_attaches_package(self, store, fake_generator, saved_project):
        editor = ProjectEditor(fake_generator, store, saved_project)

        package = await editor.repurpose()

        assert saved_project.repurposing == package
        stored = await store.get_project(saved_project.id)
        assert stored.repurposing == package

    def test_export_script(self, make_project):
        project = make_project(sections=2, filled=(0,))

        text = export_script(project)

        assert text.startswith("TITLE: Qubits Explained\n\nHOOK: What if")
        assert "[SECTION 1: Section 1]" in text
        assert "VISUAL: Visual 2" in text
        assert text.count("AUDIO: ") == 2
        assert export_filename(project) == "Quantum Computi_script.txt"
