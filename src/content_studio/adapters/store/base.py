"""Base interface for project stores."""

from abc import ABC, abstractmethod

from content_studio.domain.models import ChannelProfile, VideoProject


class ProjectStore(ABC):
    """Abstract base class for project persistence.

    Implementations:
    - LocalProjectStore: JSON key-value file on the local disk
    - MongoProjectStore: MongoDB document collections

    The backend is chosen once at startup (see ``create_store``) and
    passed explicitly to the services that need it.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name identifier."""
        ...

    # Projects

    @abstractmethod
    async def list_projects(self) -> list[VideoProject]:
        """All projects, newest first."""
        ...

    async def get_project(self, project_id: str) -> VideoProject | None:
        """Find a project by id."""
        for project in await self.list_projects():
            if project.id == project_id:
                return project
        return None

    @abstractmethod
    async def save_project(self, project: VideoProject) -> None:
        """Insert or replace a project by id. Last writer wins."""
        ...

    @abstractmethod
    async def delete_project(self, project_id: str) -> None:
        ...

    # Channel profiles

    @abstractmethod
    async def list_channel_profiles(self) -> list[ChannelProfile]:
        """Saved channel profiles, or the built-in defaults if none exist yet."""
        ...

    async def get_channel_profile(self, channel_id: str) -> ChannelProfile | None:
        """Find a channel profile, falling back to the first profile.

        Projects keep a plain channel id which may dangle after the profile
        is deleted, so lookups for existing projects never fail outright.
        """
        channels = await self.list_channel_profiles()
        for channel in channels:
            if channel.id == channel_id:
                return channel
        return channels[0] if channels else None

    @abstractmethod
    async def save_channel_profile(self, channel: ChannelProfile) -> None:
        ...

    @abstractmethod
    async def delete_channel_profile(self, channel_id: str) -> None:
        ...

    # Settings

    @abstractmethod
    async def get_global_instruction(self) -> str:
        """The instruction preamble sent with every call, or the built-in default."""
        ...

    @abstractmethod
    async def set_global_instruction(self, text: str) -> None:
        ...

    @abstractmethod
    def get_preferred_model(self) -> str:
        """Locally cached model preference."""
        ...

    @abstractmethod
    def set_preferred_model(self, model_id: str) -> None:
        ...

    async def health_check(self) -> bool:
        """Check if the backend is reachable."""
        return True
