"""API route modules."""

from content_studio.api.routes import channels, health, projects, settings

__all__ = ["channels", "health", "projects", "settings"]
