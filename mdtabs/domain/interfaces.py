from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from mdtabs.domain.models import RenderResult


class IMarkdownRenderer(Protocol):
    """Convert Markdown text to a full HTML document (including CSS)."""

    def render(self, markdown_text: str) -> RenderResult: ...
    def to_html(self, markdown_text: str) -> str: ...


@runtime_checkable
class IPreviewSurface(Protocol):
    """Anything that can show a complete HTML document. Must accept any renderer output."""

    def display(self, html: str) -> None: ...


class IFileService(Protocol):
    """Read/write text files. Writes should be atomic when possible."""

    def read_text(self, path: Path) -> str: ...
    def write_text_atomic(self, path: Path, text: str) -> None: ...


class ISettingsService(Protocol):
    """Persist and retrieve lightweight UI state."""

    def get_geometry(self) -> bytes | None: ...
    def set_geometry(self, blob: bytes) -> None: ...
    def get_tab_index(self) -> int: ...
    def set_tab_index(self, index: int) -> None: ...
    def get_recent(self) -> list[str]: ...
    def set_recent(self, recent: Iterable[str]) -> None: ...


class IConfigService(Protocol):
    """Read-only access to user configuration (INI sections/keys)."""

    def get(self, section: str, key: str, default: str | None = None) -> str | None: ...
    def get_int(self, section: str, key: str, default: int | None = None) -> int | None: ...
    def get_bool(self, section: str, key: str, default: bool | None = None) -> bool | None: ...
    def as_dict(self) -> Mapping[str, Mapping[str, str]]: ...


class IExporter(ABC):
    """Export strategy interface. Implementations export HTML to a given format/path."""

    name: str  # e.g. "html"
    label: str  # e.g. "Export HTML…"
    file_ext: str = "html"

    @abstractmethod
    def export(self, html: str, out_path: Path) -> None:
        """Perform export. 'html' contains a full HTML document string."""
        raise NotImplementedError


class IExporterRegistry(Protocol):
    def register(self, e: IExporter) -> None: ...
    def get(self, name: str) -> IExporter: ...
    def all(self) -> list[IExporter]: ...
