# mdtabs/services/preview_sync.py
from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, QTimer, pyqtSignal

from mdtabs.domain.interfaces import IMarkdownRenderer, IPreviewSurface
from mdtabs.domain.models import RenderResult

logger = logging.getLogger(__name__)


class RenderSequencer:
    """
    Latest-request-wins bookkeeping for render requests.

    Every request takes a ticket; a finished render is only accepted if its
    ticket is the newest one handed out. Safe to use from several threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._issued = 0
        self._accepted = 0

    @property
    def latest(self) -> int:
        with self._lock:
            return self._issued

    def next_ticket(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def accept(self, ticket: int) -> bool:
        with self._lock:
            if ticket != self._issued or ticket <= self._accepted:
                return False
            self._accepted = ticket
            return True


class _RenderSignals(QObject):
    done = pyqtSignal(int, object)


class _RenderJob(QRunnable):
    """Renders one snapshot on a pool thread and reports back through a signal."""

    def __init__(self, renderer: IMarkdownRenderer, ticket: int, text: str) -> None:
        super().__init__()
        self.signals = _RenderSignals()
        self._renderer = renderer
        self._ticket = ticket
        self._text = text

    def run(self) -> None:
        result = self._renderer.render(self._text)
        self.signals.done.emit(self._ticket, result)


class PreviewSync(QObject):
    """
    Keeps a preview surface in step with the document text.

    request() is wired to Document change notifications. Renders are debounced
    by a single-shot timer and can optionally run on a thread pool; either way
    only the result of the most recent request reaches the surface.
    """

    rendered = pyqtSignal(object)  # RenderResult

    def __init__(
        self,
        renderer: IMarkdownRenderer,
        surface: IPreviewSurface,
        *,
        debounce_ms: int = 150,
        asynchronous: bool = False,
        thread_pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._renderer = renderer
        self._surface = surface
        self._asynchronous = asynchronous
        self._pool = thread_pool or QThreadPool.globalInstance()
        self._sequencer = RenderSequencer()
        self._pending: str | None = None
        self._in_flight: dict[int, _RenderJob] = {}
        self.last_result: RenderResult | None = None

        self._debounce = QTimer(self)
        self._debounce.setSingleShot(True)
        self._debounce.setInterval(max(0, debounce_ms))
        self._debounce.timeout.connect(self.flush)

    @property
    def debounce_ms(self) -> int:
        return self._debounce.interval()

    @property
    def sequencer(self) -> RenderSequencer:
        return self._sequencer

    def request(self, text: str) -> None:
        self._pending = text
        if self._debounce.interval() == 0:
            self.flush()
        else:
            self._debounce.start()

    def flush(self) -> None:
        """Render the pending snapshot right away (no-op if nothing is pending)."""
        self._debounce.stop()
        if self._pending is None:
            return
        text, self._pending = self._pending, None
        ticket = self._sequencer.next_ticket()

        if not self._asynchronous:
            self._deliver(ticket, self._renderer.render(text))
            return

        job = _RenderJob(self._renderer, ticket, text)
        job.setAutoDelete(False)
        job.signals.done.connect(self._deliver)
        self._in_flight[ticket] = job
        self._pool.start(job)

    def _deliver(self, ticket: int, result: RenderResult) -> None:
        self._in_flight.pop(ticket, None)
        if not self._sequencer.accept(ticket):
            logger.debug("Dropping stale preview render #%d", ticket)
            return
        self.last_result = result
        self._surface.display(result.html)
        self.rendered.emit(result)
