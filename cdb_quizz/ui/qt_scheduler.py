"""QTimer-backed implementation of the core scheduler protocol."""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer

from cdb_quizz.core.services.scheduler import TimerCallback


class QtTimerHandle:
    """Cancellable wrapper around one ``QTimer``."""

    def __init__(self, timer: QTimer, owner: "QtScheduler") -> None:
        self._timer = timer
        self._owner = owner

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    def cancel(self) -> None:
        self._timer.stop()
        self._owner._release(self._timer)


class QtScheduler(QObject):
    """Runs core timers on the Qt event loop of the UI thread."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        # Parentless timers are collected unless something holds them until they fire.
        self._live: set[QTimer] = set()

    def call_later(self, delay_ms: int, callback: TimerCallback) -> QtTimerHandle:
        timer = QTimer()
        timer.setSingleShot(True)
        timer.setInterval(max(0, delay_ms))

        def fire() -> None:
            self._release(timer)
            callback()

        timer.timeout.connect(fire)
        return self._start(timer)

    def call_every(self, interval_ms: int, callback: TimerCallback) -> QtTimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        timer = QTimer()
        timer.setInterval(interval_ms)
        timer.timeout.connect(callback)
        return self._start(timer)

    def _start(self, timer: QTimer) -> QtTimerHandle:
        self._live.add(timer)
        timer.start()
        return QtTimerHandle(timer, self)

    def _release(self, timer: QTimer) -> None:
        self._live.discard(timer)
