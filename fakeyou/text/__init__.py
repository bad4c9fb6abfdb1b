"""Text helpers used by the CLI."""

from .slug import slugify_voice_title

__all__ = ["slugify_voice_title"]
