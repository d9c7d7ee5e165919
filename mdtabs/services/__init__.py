"""Concrete service implementations and export strategies."""

from .file_service import FileService
from .markdown_renderer import MarkdownRenderer
from .preview_sync import PreviewSync, RenderSequencer
from .settings_service import SettingsService

__all__ = ["FileService", "MarkdownRenderer", "PreviewSync", "RenderSequencer", "SettingsService"]
