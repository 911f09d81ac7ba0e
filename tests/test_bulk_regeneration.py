"""Tests for batched bulk section regeneration."""

from unittest.mock import AsyncMock

import pytest
from conftest import FakeLLMProvider, section_marker

from content_studio.exceptions import BulkAbortError, ValidationError
from content_studio.services.bulk_regeneration import BulkRegenerationScheduler
from content_studio.services.content_generator import ContentGenerator
from content_studio.services.usage import calculate_usage


def counting_store(store):
    """Wrap save_project so calls can be counted."""
    store.save_project = AsyncMock(wraps=store.save_project)
    return store


class TestBulkRegeneration:
    """Tests for BulkRegenerationScheduler."""

    @pytest.mark.asyncio
    async def test_five_unfilled_two_batches(self, store, fake_generator, tech_channel, make_project):
        """Test 5 unfilled sections: batches of 3 and 2, two saves, progress 3/5 then 5/5."""
        store = counting_store(store)
        project = make_project(sections=12, filled=tuple(range(7)))
        scheduler = BulkRegenerationScheduler(fake_generator, store, batch_size=3)
        progress: list[tuple[int, int]] = []

        result = await scheduler.run(project, tech_channel, on_progress=lambda c, t: progress.append((c, t)))

        assert result.total == 5
        assert result.completed == 5
        assert result.batches == 2
        assert result.filled_indices == [7, 8, 9, 10, 11]
        assert store.save_project.await_count == 2
        assert progress == [(3, 5), (5, 5)]
        assert project.unfilled_indices() == []
        assert len(project.script) == 12

    @pytest.mark.asyncio
    @pytest.mark.parametrize("unfilled", [1, 3, 4, 7, 12])
    async def test_one_save_per_batch(self, store, fake_generator, tech_channel, make_project, unfilled):
        store = counting_store(store)
        project = make_project(sections=12, filled=tuple(range(12 - unfilled)))
        scheduler = BulkRegenerationScheduler(fake_generator, store, batch_size=3)

        await scheduler.run(project, tech_channel)

        assert store.save_project.await_count == -(-unfilled // 3)

    @pytest.mark.asyncio
    async def test_no_unfilled_is_noop(self, store, fake_generator, fake_llm, tech_channel, make_project):
        """Test that filled sections are never regenerated."""
        store = counting_store(store)
        project = make_project(sections=4, filled=(0, 1, 2, 3))
        progress = []

        result = await BulkRegenerationScheduler(fake_generator, store).run(
            project, tech_channel, on_progress=lambda c, t: progress.append((c, t))
        )

        assert result.skipped
        assert fake_llm.calls == []
        assert store.save_project.await_count == 0
        assert progress == []

    @pytest.mark.asyncio
    async def test_concurrency_bounded_by_batch(self, store, stub_image_gen, tech_channel, make_project):
        """Test that a batch runs concurrently and batches never overlap."""
        llm = FakeLLMProvider(delay=0.02)
        generator = ContentGenerator(store, llm, stub_image_gen)
        project = make_project(sections=8)

        await BulkRegenerationScheduler(generator, store, batch_size=3).run(project, tech_channel)

        assert llm.max_in_flight == 3
        assert len(llm.calls) == 8

    @pytest.mark.asyncio
    async def test_only_unfilled_sections_requested(self, store, fake_generator, fake_llm, tech_channel, make_project):
        project = make_project(sections=5, filled=(1, 3))

        await BulkRegenerationScheduler(fake_generator, store).run(project, tech_channel)

        prompts = [c["prompt"] for c in fake_llm.calls]
        for title in ("Section 1", "Section 3", "Section 5"):
            assert any(section_marker(title) in p for p in prompts)
        for title in ("Section 2", "Section 4"):
            assert not any(section_marker(title) in p for p in prompts)

    @pytest.mark.asyncio
    async def test_usage_added_to_project(self, store, fake_generator, tech_channel, make_project):
        project = make_project(sections=4, filled=(0,))
        before = project.token_usage

        result = await BulkRegenerationScheduler(fake_generator, store).run(project, tech_channel)

        per_call = calculate_usage(1000, 500, "gemini-2.0-flash")
        assert result.usage == per_call + per_call + per_call
        assert project.token_usage.input_tokens == before.input_tokens + 3000
        assert project.token_usage.estimated_cost == pytest.approx(
            before.estimated_cost + result.usage.estimated_cost, abs=1e-9
        )

    @pytest.mark.asyncio
    async def test_failure_commits_siblings_and_stops(self, store, stub_image_gen, tech_channel, make_project):
        """Test partial-batch commit: successes saved once, later batches skipped."""
        store = counting_store(store)
        llm = FakeLLMProvider(fail_when=(section_marker("Section 5"),))
        generator = ContentGenerator(store, llm, stub_image_gen)
        project = make_project(sections=9)
        progress = []
        scheduler = BulkRegenerationScheduler(generator, store, batch_size=3)

        with pytest.raises(BulkAbortError) as exc_info:
            await scheduler.run(project, tech_channel, on_progress=lambda c, t: progress.append((c, t)))

        error = exc_info.value
        assert error.failed_indices == [4]
        assert error.completed == 5
        assert error.total == 9
        assert isinstance(error.__cause__, Exception)

        # Batch 1 fully, batch 2 minus the failed section, batch 3 never started
        assert project.unfilled_indices() == [4, 6, 7, 8]
        assert len(llm.calls) == 6
        assert store.save_project.await_count == 2
        assert progress == [(3, 9), (5, 9)]

        stored = await store.get_project(project.id)
        assert stored.unfilled_indices() == [4, 6, 7, 8]

    @pytest.mark.asyncio
    async def test_whole_batch_failure_saves_nothing(self, store, stub_image_gen, tech_channel, make_project):
        store = counting_store(store)
        llm = FakeLLMProvider(fail_when=("SECTION TITLE:",))
        generator = ContentGenerator(store, llm, stub_image_gen)
        project = make_project(sections=3)

        with pytest.raises(BulkAbortError) as exc_info:
            await BulkRegenerationScheduler(generator, store).run(project, tech_channel)

        assert exc_info.value.failed_indices == [0, 1, 2]
        assert exc_info.value.completed == 0
        assert store.save_project.await_count == 0

    @pytest.mark.asyncio
    async def test_rerun_after_abort_fills_the_rest(self, store, stub_image_gen, tech_channel, make_project):
        """Test that re-running resumes from stored state."""
        failing = FakeLLMProvider(fail_when=(section_marker("Section 2"),))
        project = make_project(sections=4)
        with pytest.raises(BulkAbortError):
            await BulkRegenerationScheduler(ContentGenerator(store, failing, stub_image_gen), store).run(
                project, tech_channel
            )

        healthy = FakeLLMProvider()
        stored = await store.get_project(project.id)
        result = await BulkRegenerationScheduler(ContentGenerator(store, healthy, stub_image_gen), store).run(
            stored, tech_channel
        )

        assert result.filled_indices == [1, 3]
        assert stored.unfilled_indices() == []

    def test_invalid_batch_size(self, fake_generator, store):
        with pytest.raises(ValueError):
            BulkRegenerationScheduler(fake_generator, store, batch_size=-1)

    @pytest.mark.asyncio
    async def test_missing_credential_fails_before_any_call(
        self, store, stub_image_gen, tech_channel, make_project
    ):
        """Test that a missing API key surfaces as ValidationError, not an abort."""
        store = counting_store(store)
        llm = FakeLLMProvider(configured=False)
        generator = ContentGenerator(store, llm, stub_image_gen)
        project = make_project(sections=12)
        progress = []

        with pytest.raises(ValidationError, match="GOOGLE_API_KEY"):
            await BulkRegenerationScheduler(generator, store).run(
                project, tech_channel, on_progress=lambda c, t: progress.append((c, t))
            )

        assert llm.calls == []
        assert store.save_project.await_count == 0
        assert progress == []
        assert project.unfilled_indices() == list(range(12))
