"""MongoDB document store.

Collections ``projects`` and ``channels`` hold one document per entity,
keyed by the entity id; the global prompt lives in ``settings`` under
``_id="global_prompt"``. The preferred model stays in a local preference
file and is never synchronized to the database.
"""

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from pymongo import DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from content_studio.adapters.store.base import ProjectStore
from content_studio.adapters.store.local import PREFERRED_MODEL_KEY, KeyValueFile
from content_studio.config import settings
from content_studio.domain.models import ChannelProfile, VideoProject
from content_studio.exceptions import StoreError
from content_studio.logging import get_logger
from content_studio.presets import DEFAULT_GLOBAL_INSTRUCTION, get_default_channels

logger = get_logger(__name__)

T = TypeVar("T")

GLOBAL_PROMPT_DOC_ID = "global_prompt"


def _to_document(entity_id: str, data: dict[str, Any]) -> dict[str, Any]:
    return {"_id": entity_id, **data}


def _from_document(doc: dict[str, Any]) -> dict[str, Any]:
    data = dict(doc)
    data.pop("_id", None)
    return data


class MongoProjectStore(ProjectStore):
    """Project store backed by MongoDB via pymongo.

    pymongo is synchronous, so every call runs in the default executor.
    """

    def __init__(
        self,
        uri: str | None = None,
        db_name: str | None = None,
        client: MongoClient | None = None,
        preferences_path: Path | None = None,
    ) -> None:
        self._client = client or MongoClient(uri or settings.mongodb_uri)
        self.db: Database = self._client[db_name or settings.mongodb_db_name]
        self.preferences = KeyValueFile(preferences_path or settings.local_store_path)

    @property
    def name(self) -> str:
        return "mongo"

    async def _run(self, fn: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, fn)

    async def _write(self, action: str, fn: Callable[[], Any]) -> None:
        try:
            await self._run(fn)
        except PyMongoError as e:
            logger.error("mongo_write_failed", action=action, error=str(e))
            raise StoreError(f"Failed to {action}: {e}") from e

    # Projects

    async def list_projects(self) -> list[VideoProject]:
        try:
            docs = await self._run(
                lambda: list(self.db.projects.find().sort("created_at", DESCENDING))
            )
        except PyMongoError as e:
            logger.error("mongo_read_failed", collection="projects", error=str(e))
            return []

        projects = []
        for doc in docs:
            try:
                projects.append(VideoProject.from_dict(_from_document(doc)))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("mongo_project_parse_failed", doc_id=str(doc.get("_id")), error=str(e))
        return projects

    async def get_project(self, project_id: str) -> VideoProject | None:
        try:
            doc = await self._run(lambda: self.db.projects.find_one({"_id": project_id}))
        except PyMongoError as e:
            raise StoreError(f"Failed to load project {project_id}: {e}") from e
        return VideoProject.from_dict(_from_document(doc)) if doc else None

    async def save_project(self, project: VideoProject) -> None:
        doc = _to_document(project.id, project.to_dict())
        await self._write(
            "save project",
            lambda: self.db.projects.replace_one({"_id": project.id}, doc, upsert=True),
        )
        logger.debug("mongo_project_saved", project_id=project.id)

    async def delete_project(self, project_id: str) -> None:
        await self._write(
            "delete project",
            lambda: self.db.projects.delete_one({"_id": project_id}),
        )

    # Channel profiles

    async def list_channel_profiles(self) -> list[ChannelProfile]:
        try:
            docs = await self._run(lambda: list(self.db.channels.find()))
        except PyMongoError as e:
            logger.warning("mongo_read_failed", collection="channels", error=str(e))
            return get_default_channels()
        if not docs:
            return get_default_channels()
        return [ChannelProfile.from_dict(_from_document(doc)) for doc in docs]

    async def save_channel_profile(self, channel: ChannelProfile) -> None:
        doc = _to_document(channel.id, channel.to_dict())
        await self._write(
            "save channel",
            lambda: self.db.channels.replace_one({"_id": channel.id}, doc, upsert=True),
        )

    async def delete_channel_profile(self, channel_id: str) -> None:
        await self._write(
            "delete channel",
            lambda: self.db.channels.delete_one({"_id": channel_id}),
        )

    # Settings

    async def get_global_instruction(self) -> str:
        try:
            doc = await self._run(lambda: self.db.settings.find_one({"_id": GLOBAL_PROMPT_DOC_ID}))
        except PyMongoError as e:
            logger.warning("mongo_read_failed", collection="settings", error=str(e))
            return DEFAULT_GLOBAL_INSTRUCTION
        if doc and doc.get("content"):
            return doc["content"]
        return DEFAULT_GLOBAL_INSTRUCTION

    async def set_global_instruction(self, text: str) -> None:
        await self._write(
            "save global prompt",
            lambda: self.db.settings.replace_one(
                {"_id": GLOBAL_PROMPT_DOC_ID},
                {"_id": GLOBAL_PROMPT_DOC_ID, "content": text},
                upsert=True,
            ),
        )

    def get_preferred_model(self) -> str:
        value = self.preferences.get_or_default(PREFERRED_MODEL_KEY, "")
        return value if isinstance(value, str) and value else settings.default_model

    def set_preferred_model(self, model_id: str) -> None:
        try:
            self.preferences.set(PREFERRED_MODEL_KEY, model_id)
        except StoreError as e:
            logger.error("preferred_model_write_failed", error=str(e))

    async def health_check(self) -> bool:
        try:
            await self._run(lambda: self._client.admin.command("ping"))
            return True
        except PyMongoError as e:
            logger.error("mongo_health_check_failed", error=str(e))
            return False
