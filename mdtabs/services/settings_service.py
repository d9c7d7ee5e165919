from __future__ import annotations
from typing import Iterable
from PyQt6.QtCore import QSettings, QByteArray

from mdtabs.domain.interfaces import ISettingsService
from mdtabs.utils.constants import SETTINGS_GEOMETRY, SETTINGS_RECENTS, SETTINGS_TAB


class SettingsService(ISettingsService):
    """Persist small UI bits like geometry, the selected tab, and recent files."""

    def __init__(self, qsettings: QSettings) -> None:
        self._s = qsettings

    def get_geometry(self) -> bytes | None:
        v = self._s.value(SETTINGS_GEOMETRY)
        return bytes(v) if isinstance(v, QByteArray) else None

    def set_geometry(self, blob: bytes) -> None:
        self._s.setValue(SETTINGS_GEOMETRY, QByteArray(blob))

    def get_tab_index(self) -> int:
        v = self._s.value(SETTINGS_TAB, 0)
        try:
            return max(0, int(v))
        except (TypeError, ValueError):
            return 0

    def set_tab_index(self, index: int) -> None:
        self._s.setValue(SETTINGS_TAB, int(index))

    def get_recent(self) -> list[str]:
        v = self._s.value(SETTINGS_RECENTS, [])
        # INI-backed QSettings hands back a bare str for single-item lists
        if isinstance(v, str):
            return [v] if v else []
        return [str(x) for x in v] if isinstance(v, list) else []

    def set_recent(self, recent: Iterable[str]) -> None:
        self._s.setValue(SETTINGS_RECENTS, list(recent))
