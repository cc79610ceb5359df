"""
Background playback polling.

PlaybackPoller reads the player clock at a fixed interval (150 ms by
default) and reports active-cue changes. It owns its thread: start() and
stop() bound its lifetime, and it can be used as a context manager.
"""

import logging
import threading
from typing import Callable, Optional

from .session import LyricSession

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 150


class PlaybackPoller:
    """Cancellable fixed-interval task feeding a session's clock into cue selection."""

    def __init__(
        self,
        session: LyricSession,
        interval_ms: Optional[int] = None,
        on_change: Optional[Callable[[Optional[int]], None]] = None,
    ):
        self.session = session
        self.interval_ms = interval_ms or session.config.poll_interval_ms or DEFAULT_POLL_INTERVAL_MS
        self.on_change = on_change
        self.active_index: Optional[int] = None
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        # One event per run: a thread left over from a timed-out stop() keeps
        # its own, already set.
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run, args=(self._stop_event,), name="lyricsync-poller", daemon=True
        )
        self._thread.start()
        logger.debug(f"Playback poller started ({self.interval_ms}ms)")

    def stop(self, timeout: Optional[float] = None) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        logger.debug("Playback poller stopped")

    def poll_once(self) -> Optional[int]:
        """Run one tick: read the clock, recompute, notify on change."""
        index = self.session.tick()
        if index != self.active_index:
            self.active_index = index
            if self.on_change is not None:
                try:
                    self.on_change(index)
                except Exception as e:
                    logger.error(f"Active cue callback failed: {e}", exc_info=True)
        return index

    def _run(self, stop_event: threading.Event) -> None:
        interval = self.interval_ms / 1000.0
        while not stop_event.is_set():
            try:
                self.poll_once()
            except Exception as e:
                logger.warning(f"Playback poll failed: {e}")
            stop_event.wait(interval)

    def __enter__(self) -> "PlaybackPoller":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
