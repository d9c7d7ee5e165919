from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path


TextListener = Callable[[str], None]


@dataclass
class Document:
    """
    The authoritative Markdown source being edited.

    Listeners registered with subscribe() receive a snapshot of the text every
    time it actually changes.
    """

    path: Path | None
    text: str
    modified: bool = False
    _listeners: list[TextListener] = field(default_factory=list, repr=False, compare=False)

    def snapshot(self) -> str:
        # str is immutable, so the current value is already a safe copy.
        return self.text

    def set_text(self, text: str) -> None:
        if text == self.text:
            return
        self.text = text
        self.modified = True
        self._notify()

    def subscribe(self, listener: TextListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)


@dataclass(frozen=True)
class RenderResult:
    """Outcome of one render call. `error_message` is set iff `ok` is False."""

    html: str
    ok: bool
    error_message: str | None = None

    def __post_init__(self) -> None:
        if not self.html:
            raise ValueError("RenderResult.html must be a non-empty document")
        if self.ok and self.error_message is not None:
            raise ValueError("successful RenderResult cannot carry an error message")
        if not self.ok and not self.error_message:
            raise ValueError("failed RenderResult requires an error message")

    @classmethod
    def success(cls, html: str) -> RenderResult:
        return cls(html=html, ok=True)

    @classmethod
    def failure(cls, html: str, message: str) -> RenderResult:
        return cls(html=html, ok=False, error_message=message)
