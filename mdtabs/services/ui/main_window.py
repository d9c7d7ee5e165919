from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from PyQt6.QtCore import QByteArray
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QFileDialog,
    QMainWindow,
    QMenu,
    QMessageBox,
    QStatusBar,
    QTabWidget,
    QTextEdit,
)

from mdtabs.domain.interfaces import (
    IExporter,
    IExporterRegistry,
    IFileService,
    IMarkdownRenderer,
    ISettingsService,
)
from mdtabs.domain.models import Document, RenderResult
from mdtabs.services.config.options import PreviewOptions
from mdtabs.services.exporters.base import ExporterRegistryInst
from mdtabs.services.exporters.html_exporter import HtmlExporter
from mdtabs.services.preview_sync import PreviewSync
from mdtabs.services.ui.preview_pane import PreviewPane
from mdtabs.utils.constants import APP_NAME, MAX_RECENTS

logger = logging.getLogger(__name__)

EDITOR_TAB = 0
PREVIEW_TAB = 1

_MARKDOWN_FILTER = "Markdown (*.md *.markdown *.mdown);;Text (*.txt);;All files (*)"


class MainWindow(QMainWindow):
    """
    Editor and Preview tabs over one Document.

    The editor writes into the Document; the Document notifies PreviewSync,
    which renders and pushes HTML into the PreviewPane.
    """

    def __init__(
        self,
        renderer: IMarkdownRenderer,
        file_service: IFileService,
        settings: ISettingsService,
        *,
        exporter_registry: IExporterRegistry | None = None,
        preview_options: PreviewOptions | None = None,
        start_path: Path | None = None,
        app_title: str = APP_NAME,
    ) -> None:
        super().__init__()
        self.app_title = app_title
        self.renderer = renderer
        self.file_service = file_service
        self.settings = settings
        opts = preview_options or PreviewOptions()

        if exporter_registry is None:
            exporter_registry = ExporterRegistryInst()
            exporter_registry.register(HtmlExporter())
        self._exporters = exporter_registry
        self.recents: list[str] = self.settings.get_recent()

        self.editor = QTextEdit(self)
        self.editor.setAcceptRichText(False)
        self.editor.setTabStopDistance(4 * self.editor.fontMetrics().horizontalAdvance(" "))
        self.preview = PreviewPane(self, prefer_webengine=opts.prefer_webengine)
        self.tabs = QTabWidget(self)
        self.tabs.addTab(self.editor, "Editor")
        self.tabs.addTab(self.preview, "Preview")
        self.setCentralWidget(self.tabs)
        self.setStatusBar(QStatusBar(self))
        self.resize(1000, 720)

        self.sync = PreviewSync(
            self.renderer,
            self.preview,
            debounce_ms=opts.debounce_ms,
            asynchronous=opts.asynchronous,
            parent=self,
        )
        self.sync.rendered.connect(self._on_rendered)

        self.doc = Document(path=None, text="")
        self._unsubscribe = self.doc.subscribe(self.sync.request)
        self.editor.textChanged.connect(self._on_text_changed)

        self._build_menus()
        self._restore_state()
        self.setAcceptDrops(True)

        if start_path:
            self._open_path(start_path)
        else:
            self._update_title()
            self._render_now()

    # ---------- Menus ----------
    def _action(
        self,
        text: str,
        slot: Callable[..., object],
        shortcut: QKeySequence.StandardKey | str | None = None,
    ) -> QAction:
        act = QAction(text, self)
        if shortcut is not None:
            act.setShortcut(QKeySequence(shortcut))
        act.triggered.connect(slot)
        return act

    def _build_menus(self) -> None:
        keys = QKeySequence.StandardKey
        bar = self.menuBar()

        file_menu = bar.addMenu("&File")
        file_menu.addAction(self._action("New", self._new_file, keys.New))
        file_menu.addAction(self._action("Open…", self._open_dialog, keys.Open))
        self.recent_menu = QMenu("Open Recent", self)
        file_menu.addMenu(self.recent_menu)
        file_menu.addSeparator()
        file_menu.addAction(self._action("Save", self._save, keys.Save))
        file_menu.addAction(self._action("Save As…", self._save_as, keys.SaveAs))
        self.export_actions = [
            self._action(e.label, lambda _=False, e=e: self._export_with(e))
            for e in self._exporters.all()
        ]
        file_menu.addActions(self.export_actions)
        file_menu.addSeparator()
        file_menu.addAction(self._action("Quit", self.close, keys.Quit))

        view_menu = bar.addMenu("&View")
        view_menu.addAction(
            self._action("Editor", lambda: self.tabs.setCurrentIndex(EDITOR_TAB), "Ctrl+1")
        )
        view_menu.addAction(
            self._action("Preview", lambda: self.tabs.setCurrentIndex(PREVIEW_TAB), "Ctrl+2")
        )
        view_menu.addSeparator()
        wrap = self._action("Word Wrap", self._toggle_wrap)
        wrap.setCheckable(True)
        wrap.setChecked(True)
        view_menu.addAction(wrap)
        view_menu.addAction(self._action("Re-render", self._render_now, "Ctrl+R"))

        bar.addMenu("&Help").addAction(self._action("About", self._show_about))
        self._refresh_recent_menu()

    def _refresh_recent_menu(self) -> None:
        self.recent_menu.clear()
        for p in self.recents:
            self.recent_menu.addAction(self._action(p, lambda _=False, p=p: self._open_recent(p)))
        self.recent_menu.setEnabled(bool(self.recents))

    def _restore_state(self) -> None:
        geo = self.settings.get_geometry()
        if isinstance(geo, (bytes, bytearray)):
            self.restoreGeometry(QByteArray(geo))
        tab = self.settings.get_tab_index()
        if 0 <= tab < self.tabs.count():
            self.tabs.setCurrentIndex(tab)

    # ---------- Document lifecycle ----------
    def _set_document(self, doc: Document) -> None:
        self._unsubscribe()
        self.doc = doc
        self._unsubscribe = doc.subscribe(self.sync.request)
        # textChanged feeds the editor's text back into doc; if Qt normalised
        # any separators the document now differs from disk and stays modified.
        self.editor.setPlainText(doc.text)
        self._update_title()
        self._render_now()

    def _new_file(self) -> None:
        if self._confirm_discard():
            self._set_document(Document(path=None, text=""))

    def _open_dialog(self) -> None:
        path_str, _ = QFileDialog.getOpenFileName(self, "Open Markdown", "", _MARKDOWN_FILTER)
        if path_str:
            self._open_path(Path(path_str))

    def _open_recent(self, path_str: str) -> None:
        path = Path(path_str)
        if path.exists():
            self._open_path(path)
            return
        QMessageBox.warning(self, "Missing", f"File not found:\n{path}")
        self._store_recents([p for p in self.recents if p != path_str])

    def _open_path(self, path: Path) -> None:
        if not self._confirm_discard():
            return
        try:
            text = self.file_service.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to open %s: %s", path, e)
            QMessageBox.critical(self, "Open Error", f"Failed to open file:\n{e}")
            return
        self._set_document(Document(path=path, text=text))
        self.statusBar().showMessage(f"Opened: {path}", 3000)
        self._remember(path)

    def _save(self) -> None:
        if self.doc.path is None:
            self._save_as()
        else:
            self._write_to(self.doc.path)

    def _save_as(self) -> None:
        start = str(self.doc.path) if self.doc.path else ""
        path_str, _ = QFileDialog.getSaveFileName(
            self, "Save As", start, "Markdown (*.md);;All files (*)"
        )
        if path_str and self._write_to(Path(path_str)):
            self.doc.path = Path(path_str)
            self._update_title()
            self._remember(self.doc.path)

    def _write_to(self, path: Path) -> bool:
        try:
            self.file_service.write_text_atomic(path, self.doc.snapshot())
        except OSError as e:
            logger.error("Failed to save %s: %s", path, e)
            QMessageBox.critical(self, "Save Error", f"Failed to save file:\n{e}")
            return False
        self.doc.modified = False
        self._update_title()
        self.statusBar().showMessage(f"Saved: {path}", 3000)
        return True

    def _export_with(self, exporter: IExporter) -> None:
        stem = self.doc.path.stem if self.doc.path else "document"
        kind = exporter.name.upper()
        out_str, _ = QFileDialog.getSaveFileName(
            self, exporter.label, f"{stem}.{exporter.file_ext}", f"{kind} (*.{exporter.file_ext})"
        )
        if not out_str:
            return
        try:
            exporter.export(self.renderer.to_html(self.doc.snapshot()), Path(out_str))
        except OSError as e:
            logger.error("Export to %s failed: %s", out_str, e)
            QMessageBox.critical(self, "Export Error", f"Failed to export {kind}:\n{e}")
            return
        self.statusBar().showMessage(f"Exported {kind}: {out_str}", 3000)

    # ---------- Slots ----------
    def _toggle_wrap(self, on: bool) -> None:
        mode = QTextEdit.LineWrapMode.WidgetWidth if on else QTextEdit.LineWrapMode.NoWrap
        self.editor.setLineWrapMode(mode)

    def _show_about(self) -> None:
        QMessageBox.information(
            self,
            "About",
            f"{self.app_title}\nMarkdown editor with a live HTML preview tab.\n\n"
            "Built with PyQt6 + Python-Markdown.",
        )

    def _render_now(self) -> None:
        self.sync.request(self.doc.snapshot())
        self.sync.flush()

    def _on_text_changed(self) -> None:
        self.doc.set_text(self.editor.toPlainText())
        self._update_title()

    def _on_rendered(self, result: RenderResult) -> None:
        if not result.ok:
            self.statusBar().showMessage(f"Preview error: {result.error_message}", 5000)

    # ---------- Helpers ----------
    def _update_title(self) -> None:
        name = self.doc.path.name if self.doc.path else "Untitled"
        star = " •" if self.doc.modified else ""
        self.setWindowTitle(f"{name}{star} — {self.app_title}")

    def _confirm_discard(self) -> bool:
        if not self.doc.modified:
            return True
        buttons = QMessageBox.StandardButton
        answer = QMessageBox.question(
            self,
            "Discard changes?",
            "You have unsaved changes. Discard them?",
            buttons.Yes | buttons.No,
        )
        return answer == buttons.Yes

    def _remember(self, path: Path) -> None:
        s = str(path)
        self._store_recents([s] + [p for p in self.recents if p != s])

    def _store_recents(self, recents: list[str]) -> None:
        self.recents = recents[:MAX_RECENTS]
        self.settings.set_recent(self.recents)
        self._refresh_recent_menu()

    # ---------- Qt events ----------
    def dragEnterEvent(self, e):  # noqa: N802
        if e.mimeData().hasUrls():
            e.acceptProposedAction()

    def dropEvent(self, e):  # noqa: N802
        urls = e.mimeData().urls()
        local = urls[0].toLocalFile() if urls else ""
        if local:
            self._open_path(Path(local))

    def closeEvent(self, event):  # noqa: N802
        if not self._confirm_discard():
            event.ignore()
            return
        self.settings.set_geometry(bytes(self.saveGeometry()))
        self.settings.set_tab_index(self.tabs.currentIndex())
        super().closeEvent(event)
