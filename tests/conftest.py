from __future__ import annotations

import os
from pathlib import Path

# Headless Qt for CI; must be set before QApplication exists.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PyQt6.QtCore import QSettings  # noqa: E402
from PyQt6.QtWidgets import QApplication  # noqa: E402

from mdtabs.services.file_service import FileService  # noqa: E402
from mdtabs.services.markdown_renderer import MarkdownRenderer  # noqa: E402
from mdtabs.services.settings_service import SettingsService  # noqa: E402


# --- Fallback QApplication fixture (works with or without pytest-qt) ---
@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication for tests that need Qt.
    Creates one if not present; reuses existing otherwise.
    """
    app = QApplication.instance()
    created = False
    if app is None:
        app = QApplication([])
        created = True
    try:
        yield app
    finally:
        if created:
            app.quit()


# --- Other common fixtures ---


@pytest.fixture()
def tmp_settings_path(tmp_path: Path) -> Path:
    return tmp_path / "settings.ini"


@pytest.fixture()
def qsettings(tmp_settings_path: Path) -> QSettings:
    # Use an INI file so we don't touch system registry / platform stores
    s = QSettings(str(tmp_settings_path), QSettings.Format.IniFormat)
    s.clear()
    return s


@pytest.fixture()
def settings_service(qsettings: QSettings) -> SettingsService:
    return SettingsService(qsettings)


@pytest.fixture()
def file_service() -> FileService:
    return FileService()


@pytest.fixture()
def renderer() -> MarkdownRenderer:
    return MarkdownRenderer()


class RecordingSurface:
    """Preview surface double that remembers every document it was asked to show."""

    def __init__(self) -> None:
        self.shown: list[str] = []

    def display(self, html: str) -> None:
        self.shown.append(html)

    @property
    def last(self) -> str | None:
        return self.shown[-1] if self.shown else None


@pytest.fixture()
def surface() -> RecordingSurface:
    return RecordingSurface()
