from __future__ import annotations

import logging

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import QTextBrowser, QVBoxLayout, QWidget

logger = logging.getLogger(__name__)


def _open_external(url: QUrl) -> None:
    if url.scheme() in ("http", "https", "mailto"):
        QDesktopServices.openUrl(url)


def _create_webengine_view(parent: QWidget) -> QWidget:
    """QWebEngineView with scripting off; clicked links go to the system browser."""
    from PyQt6.QtWebEngineCore import QWebEnginePage, QWebEngineSettings  # type: ignore
    from PyQt6.QtWebEngineWidgets import QWebEngineView  # type: ignore

    class _StaticPage(QWebEnginePage):
        def acceptNavigationRequest(self, url, nav_type, is_main_frame):  # noqa: N802
            if nav_type == QWebEnginePage.NavigationType.NavigationTypeLinkClicked:
                _open_external(url)
                return False
            return super().acceptNavigationRequest(url, nav_type, is_main_frame)

    view = QWebEngineView(parent)
    page = _StaticPage(view)
    page.settings().setAttribute(QWebEngineSettings.WebAttribute.JavascriptEnabled, False)
    view.setPage(page)
    return view


def _create_text_browser(parent: QWidget) -> QTextBrowser:
    w = QTextBrowser(parent)
    w.setOpenLinks(False)
    w.anchorClicked.connect(_open_external)
    return w


class PreviewPane(QWidget):
    """
    Static HTML viewer for the Preview tab (satisfies IPreviewSurface).

    Prefers Qt WebEngine (better CSS) and falls back to QTextBrowser when the
    PyQt6-WebEngine package is not installed or cannot start.
    """

    def __init__(self, parent: QWidget | None = None, *, prefer_webengine: bool = True) -> None:
        super().__init__(parent)
        self.last_html: str = ""
        self.view = self._create_view(prefer_webengine)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.view)

    @property
    def uses_webengine(self) -> bool:
        return not isinstance(self.view, QTextBrowser)

    def display(self, html: str) -> None:
        self.last_html = html
        # Both QWebEngineView and QTextBrowser implement setHtml(html).
        self.view.setHtml(html)

    def _create_view(self, prefer_webengine: bool) -> QWidget:
        if prefer_webengine:
            try:
                view = _create_webengine_view(self)
                logger.info("Preview uses QWebEngineView")
                return view
            except (ImportError, RuntimeError) as e:
                logger.info("QWebEngineView unavailable (%s); falling back to QTextBrowser", e)
        return _create_text_browser(self)
