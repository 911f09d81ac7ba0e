"""Local JSON file store.

Holds four flat key-value slots in a single JSON object on disk:
projects list, channels list, global prompt text and preferred model id.
Reads and writes never raise: a missing, unreadable or corrupt file yields
the empty/default value and a failed write is logged.
"""

import asyncio
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from content_studio.adapters.store.base import ProjectStore
from content_studio.config import settings
from content_studio.domain.models import ChannelProfile, VideoProject
from content_studio.exceptions import StoreError
from content_studio.logging import get_logger
from content_studio.presets import DEFAULT_GLOBAL_INSTRUCTION, get_default_channels

logger = get_logger(__name__)

T = TypeVar("T")

PROJECTS_KEY = "content_os_projects"
CHANNELS_KEY = "content_os_channels"
GLOBAL_PROMPT_KEY = "content_os_global_system_prompt"
PREFERRED_MODEL_KEY = "content_os_preferred_model"


class KeyValueFile:
    """A JSON object on disk used as a tiny key-value store."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StoreError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Any:
        """Read a slot. Raises StoreError if the file is unreadable."""
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        """Write a slot, keeping the others."""
        try:
            data = self._read_all()
        except StoreError as e:
            # Corrupt file; start over rather than refuse to save
            logger.warning("local_store_reset", path=str(self.path), error=str(e))
            data = {}
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise StoreError(f"Cannot write {self.path}: {e}") from e

    def get_or_default(self, key: str, default: Any) -> Any:
        try:
            value = self.get(key)
        except StoreError as e:
            logger.warning("local_store_read_failed", key=key, error=str(e))
            return default
        return default if value is None else value


class LocalProjectStore(ProjectStore):
    """Best-effort local persistence in a JSON file.

    File access runs in the default executor so bulk fills do not stall
    the event loop. The preferred model accessors stay synchronous.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.kv = KeyValueFile(path or settings.local_store_path)

    @property
    def name(self) -> str:
        return "local"

    async def _run(self, fn: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, fn)

    async def _read(self, key: str, default: Any) -> Any:
        return await self._run(lambda: self.kv.get_or_default(key, default))

    def _write_sync(self, key: str, value: Any) -> None:
        try:
            self.kv.set(key, value)
        except StoreError as e:
            logger.error("local_store_write_failed", key=key, error=str(e))

    async def _write(self, key: str, value: Any) -> None:
        await self._run(lambda: self._write_sync(key, value))

    async def list_projects(self) -> list[VideoProject]:
        raw = await self._read(PROJECTS_KEY, [])
        if not isinstance(raw, list):
            return []
        projects = []
        for item in raw:
            try:
                projects.append(VideoProject.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("local_project_parse_failed", error=str(e))
        return sorted(projects, key=lambda p: p.created_at, reverse=True)

    async def save_project(self, project: VideoProject) -> None:
        projects = await self.list_projects()
        for i, existing in enumerate(projects):
            if existing.id == project.id:
                projects[i] = project
                break
        else:
            projects.insert(0, project)
        await self._write(PROJECTS_KEY, [p.to_dict() for p in projects])
        logger.debug("local_project_saved", project_id=project.id)

    async def delete_project(self, project_id: str) -> None:
        projects = [p for p in await self.list_projects() if p.id != project_id]
        await self._write(PROJECTS_KEY, [p.to_dict() for p in projects])

    async def list_channel_profiles(self) -> list[ChannelProfile]:
        """Saved profiles; the built-in defaults only when none were ever saved.

        An explicitly saved empty list stays empty.
        """
        raw = await self._read(CHANNELS_KEY, None)
        if raw is None:
            return get_default_channels()
        if not isinstance(raw, list):
            logger.warning("local_channels_parse_failed", error="channels slot is not a list")
            return get_default_channels()
        try:
            return [ChannelProfile.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("local_channels_parse_failed", error=str(e))
            return get_default_channels()

    async def save_channel_profile(self, channel: ChannelProfile) -> None:
        channels = await self.list_channel_profiles()
        for i, existing in enumerate(channels):
            if existing.id == channel.id:
                channels[i] = channel
                break
        else:
            channels.append(channel)
        await self._write(CHANNELS_KEY, [c.to_dict() for c in channels])

    async def delete_channel_profile(self, channel_id: str) -> None:
        channels = [c for c in await self.list_channel_profiles() if c.id != channel_id]
        await self._write(CHANNELS_KEY, [c.to_dict() for c in channels])

    async def get_global_instruction(self) -> str:
        value = await self._read(GLOBAL_PROMPT_KEY, "")
        return value if isinstance(value, str) and value else DEFAULT_GLOBAL_INSTRUCTION

    async def set_global_instruction(self, text: str) -> None:
        await self._write(GLOBAL_PROMPT_KEY, text)

    def get_preferred_model(self) -> str:
        value = self.kv.get_or_default(PREFERRED_MODEL_KEY, "")
        return value if isinstance(value, str) and value else settings.default_model

    def set_preferred_model(self, model_id: str) -> None:
        self._write_sync(PREFERRED_MODEL_KEY, model_id)
