"""Tests for logging helpers."""

import pytest
import structlog

from content_studio.logging import bind_project, shorten_data_uris
from content_studio.services.project_editor import ProjectEditor


def test_long_data_uri_is_shortened() -> None:
    image = "data:image/jpeg;base64," + "A" * 5000

    event = shorten_data_uris(None, "info", {"event": "image_generated", "image_url": image})

    assert event["image_url"] == f"data:image/jpeg;base64,<{len(image)} chars>"
    assert event["event"] == "image_generated"


def test_other_values_untouched() -> None:
    event = {"event": "x", "topic": "data: why it matters", "count": 3}

    assert shorten_data_uris(None, "info", dict(event)) == event


def test_bind_project_scopes_context() -> None:
    with bind_project("p-123"):
        assert structlog.contextvars.get_contextvars()["project_id"] == "p-123"

    assert "project_id" not in structlog.contextvars.get_contextvars()


@pytest.mark.asyncio
async def test_editor_operations_carry_project_id(store, fake_generator, make_project) -> None:
    """Test that saves issued by an editor operation see the project id in context."""
    project = make_project(sections=2)
    seen: list[dict] = []
    save = store.save_project

    async def recording_save(p):
        seen.append(structlog.contextvars.get_contextvars())
        await save(p)

    store.save_project = recording_save
    editor = ProjectEditor(fake_generator, store, project)

    await editor.fill_all()

    assert seen
    assert all(ctx.get("project_id") == project.id for ctx in seen)
    assert "project_id" not in structlog.contextvars.get_contextvars()
