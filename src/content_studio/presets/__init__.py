"""Built-in channel profiles and global instructions."""

from content_studio.presets.channels import (
    DEFAULT_CHANNEL_PRESETS,
    DEFAULT_GLOBAL_INSTRUCTION,
    get_default_channels,
)

__all__ = [
    "DEFAULT_CHANNEL_PRESETS",
    "DEFAULT_GLOBAL_INSTRUCTION",
    "get_default_channels",
]
