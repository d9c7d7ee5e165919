"""Domain layer: interfaces and simple models (dataclasses)."""

from .interfaces import (
    IConfigService,
    IExporter,
    IExporterRegistry,
    IFileService,
    IMarkdownRenderer,
    IPreviewSurface,
    ISettingsService,
)
from .models import Document, RenderResult

__all__ = [
    "IMarkdownRenderer",
    "IPreviewSurface",
    "IFileService",
    "ISettingsService",
    "IConfigService",
    "IExporter",
    "IExporterRegistry",
    "Document",
    "RenderResult",
]
