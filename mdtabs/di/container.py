from __future__ import annotations

import sys
from pathlib import Path

from PyQt6.QtCore import QSettings

from mdtabs.domain.interfaces import (
    IConfigService,
    IExporterRegistry,
    IFileService,
    IMarkdownRenderer,
    ISettingsService,
)
from mdtabs.services.config.ini_config_service import IniConfigService
from mdtabs.services.config.options import PreviewOptions, RenderOptions
from mdtabs.services.exporters.base import ExporterRegistryInst
from mdtabs.services.exporters.html_exporter import HtmlExporter
from mdtabs.services.file_service import FileService
from mdtabs.services.markdown_renderer import MarkdownRenderer
from mdtabs.services.settings_service import SettingsService
from mdtabs.services.ui.main_window import MainWindow
from mdtabs.utils.constants import APP_NAME, APP_ORG


def _project_root_fallback() -> Path:
    """
    Directory holding the project's config/ folder:
      - PyInstaller bundles unpack to sys._MEIPASS
      - otherwise walk up from mdtabs/di/container.py to the repository root
    """
    meipass = getattr(sys, "_MEIPASS", None)  # type: ignore[attr-defined]
    if meipass:
        return Path(meipass)
    return Path(__file__).resolve().parents[2]


class Container:
    """
    Lightweight DI container:
      - Reads configuration and derives render/preview options from it
      - Wires default services if not provided
      - Owns the exporter registry and makes sure the HTML exporter is in it
    """

    def __init__(
        self,
        renderer: IMarkdownRenderer | None = None,
        files: IFileService | None = None,
        settings: ISettingsService | None = None,
        qsettings: QSettings | None = None,
        config: IConfigService | None = None,
        exporters: IExporterRegistry | None = None,
    ) -> None:
        self.config: IConfigService = config or IniConfigService()
        self.render_options = RenderOptions.from_config(self.config)
        self.preview_options = PreviewOptions.from_config(self.config)

        self.renderer: IMarkdownRenderer = renderer or MarkdownRenderer(
            max_nesting=self.render_options.max_nesting,
            highlight_code=self.render_options.highlight_code,
        )
        self.file_service: IFileService = files or FileService()
        self.settings_service: ISettingsService = settings or SettingsService(
            qsettings or QSettings()
        )
        self.exporters: IExporterRegistry = exporters or ExporterRegistryInst()
        self._ensure_builtin_exporters()

    @staticmethod
    def default(
        qsettings: QSettings | None = None,
        *,
        config_path: Path | None = None,
        project_root: Path | None = None,
        organization: str = APP_ORG,
        application: str = APP_NAME,
    ) -> Container:
        if qsettings is None:
            qsettings = QSettings(organization, application)
        config = IniConfigService(
            explicit_path=config_path,
            project_root=project_root or _project_root_fallback(),
        )
        return Container(qsettings=qsettings, config=config)

    # ---------- Internals ----------

    def _ensure_builtin_exporters(self) -> None:
        try:
            self.exporters.get("html")
        except KeyError:
            self.exporters.register(HtmlExporter())

    # ---------- UI factories ----------

    def build_main_window(
        self,
        *,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> MainWindow:
        return MainWindow(
            renderer=self.renderer,
            file_service=self.file_service,
            settings=self.settings_service,
            exporter_registry=self.exporters,
            preview_options=self.preview_options,
            start_path=start_path,
            app_title=app_title,
        )
