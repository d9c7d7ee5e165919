from __future__ import annotations

from pathlib import Path

import pytest
from PyQt6.QtCore import Qt

import mdtabs.app as app_mod


class FakeQGuiApplication:
    set_attribute_calls: list[tuple[object, bool]] = []

    @classmethod
    def setAttribute(cls, attr: object, on: bool) -> None:
        cls.set_attribute_calls.append((attr, on))


class FakeQApplication:
    org_name: str | None = None
    app_name: str | None = None

    def __init__(self, argv: list[str]) -> None:
        self.argv = list(argv)
        self.exec_called = 0

    @classmethod
    def setOrganizationName(cls, name: str) -> None:
        cls.org_name = name

    @classmethod
    def setApplicationName(cls, name: str) -> None:
        cls.app_name = name

    def exec(self) -> int:
        self.exec_called += 1
        return 7


class FakeWindow:
    def __init__(self) -> None:
        self.shown = False

    def show(self) -> None:
        self.shown = True


class FakeConfig:
    loaded_from = None

    def get(self, section: str, key: str, default: str | None = None) -> str | None:
        return "DEBUG" if (section, key) == ("logging", "level") else default


class FakeContainer:
    last: FakeContainer | None = None

    def __init__(self) -> None:
        self.config = FakeConfig()
        self.window = FakeWindow()
        self.build_kwargs: dict | None = None
        FakeContainer.last = self

    @classmethod
    def default(cls) -> FakeContainer:
        return cls()

    def build_main_window(self, **kwargs) -> FakeWindow:
        self.build_kwargs = kwargs
        return self.window


@pytest.fixture()
def patched(monkeypatch):
    levels: list[str] = []
    monkeypatch.setattr(app_mod, "QGuiApplication", FakeQGuiApplication)
    monkeypatch.setattr(app_mod, "QApplication", FakeQApplication)
    monkeypatch.setattr(app_mod, "Container", FakeContainer)
    monkeypatch.setattr(app_mod, "configure_logging", lambda level: levels.append(level))
    return levels


def test_run_app_without_path(patched):
    rc = app_mod.run_app(["mdtabs"])
    assert rc == 7
    c = FakeContainer.last
    assert c is not None
    assert c.window.shown is True
    assert c.build_kwargs["start_path"] is None
    assert FakeQApplication.org_name == "mdtabs"
    assert patched == ["DEBUG"]
    assert (Qt.ApplicationAttribute.AA_ShareOpenGLContexts, True) in FakeQGuiApplication.set_attribute_calls


def test_run_app_opens_first_argument(patched):
    app_mod.run_app(["mdtabs", "notes.md"])
    c = FakeContainer.last
    assert c is not None
    assert c.build_kwargs["start_path"] == Path("notes.md")
