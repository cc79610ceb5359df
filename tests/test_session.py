import threading

import pytest

from lyricsync.exceptions import (
    CaptionParseError,
    IncompleteTimingError,
    NoLyricsError,
    PlayerUnavailableError,
)
from lyricsync.models import Cue, ProjectSnapshot, SyncConfig
from lyricsync.poller import PlaybackPoller
from lyricsync.session import CallableClock, LyricSession, PlaybackClock

CAPTIONS = (
    "WEBVTT\n\n"
    "00:00:00.000 --> 00:00:02.000\nhello\n\n"
    "00:00:02.000 --> 00:00:04.000\nworld\n"
)


class FakeClock(PlaybackClock):
    def __init__(self, now=None):
        self.now = now

    def current_ms(self):
        return self.now


class StalledClock(PlaybackClock):
    """Blocks inside current_ms until released."""

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()

    def current_ms(self):
        self.entered.set()
        self.release.wait(5.0)
        return 0


def test_load_captions_and_export():
    session = LyricSession()
    session.load_captions(CAPTIONS, "a\nb")
    assert session.export("lrc") == "[00:00.00]a\n[00:02.00]b\n"


def test_failed_load_keeps_previous_cues():
    session = LyricSession()
    session.load_captions(CAPTIONS, "a\nb")
    with pytest.raises(CaptionParseError):
        session.load_captions("garbage", "x")
    assert [c.text for c in session.cues] == ["a", "b"]
    assert session.caption_text == CAPTIONS


def test_tick_reads_clock_and_selects():
    clock = FakeClock(2500)
    session = LyricSession(clock=clock)
    session.load_captions(CAPTIONS, "a\nb")
    assert session.tick() == 1
    assert session.active_cue().text == "b"

    clock.now = None  # player stalled: keep the last known position
    assert session.tick() == 1
    assert session.current_ms == 2500


def test_tick_without_clock():
    session = LyricSession()
    session.load_captions(CAPTIONS)
    assert session.current_time_ms() is None
    assert session.tick() == 0


def test_offset_shifts_selection_without_touching_cues():
    session = LyricSession(config=SyncConfig(global_offset_ms=0))
    session.load_captions(CAPTIONS)
    session.set_offset(2500)
    assert session.active_index(current_ms=0) == 1
    assert session.adjust_offset(-2500) == 0
    assert session.active_index(current_ms=0) == 0
    assert session.cues[0].start_ms == 0


def test_nudge_active_cue():
    session = LyricSession(config=SyncConfig(nudge_step_ms=100))
    session.load_captions(CAPTIONS)
    session.current_ms = 3000
    assert session.nudge_active() is True
    assert (session.cues[1].start_ms, session.cues[1].end_ms) == (2100, 4100)
    assert session.nudge_active(-600) is True
    assert (session.cues[1].start_ms, session.cues[1].end_ms) == (1500, 3500)
    assert (session.cues[0].start_ms, session.cues[0].end_ms) == (0, 2000)


def test_nudge_without_active_cue():
    session = LyricSession()
    session.load_captions(CAPTIONS)
    session.current_ms = 10000
    assert session.nudge_active(100) is False


def test_edit_text_and_navigation():
    session = LyricSession()
    session.load_captions(CAPTIONS, "a\nb")
    session.edit_text(0, "edited")
    assert session.cues[0].text == "edited"
    assert session.cues[0].source_text == "hello"
    with pytest.raises(IndexError):
        session.edit_text(5, "x")

    session.current_ms = 500
    assert session.next_index() == 1
    assert session.previous_index() == 0
    assert session.next_index(1) == 1
    assert session.seek_target_ms(1) == 2000
    assert session.seek_target_ms(9) is None


def test_manual_timing_through_session():
    clock = FakeClock()
    session = LyricSession(clock=clock)
    session.load_captions(CAPTIONS, "a\nb")

    assert session.start_manual_timing() == 2
    with pytest.raises(PlayerUnavailableError):
        session.tap()

    for now in (5000, 6000):
        clock.now = now
        session.tap()
    with pytest.raises(IncompleteTimingError):
        session.apply_manual_timing()
    assert [c.text for c in session.cues] == ["a", "b"]
    assert session.cues[0].start_ms == 0

    clock.now = 8000
    session.tap()
    cues = session.apply_manual_timing()
    assert [(c.start_ms, c.end_ms, c.text) for c in cues] == [(5000, 6000, "a"), (6000, 8000, "b")]
    assert session.cues == cues


def test_manual_timing_needs_lyrics():
    session = LyricSession()
    with pytest.raises(NoLyricsError):
        session.start_manual_timing("\n  \n")
    assert session.lyrics_text == ""


def test_snapshot_round_trip_through_session():
    session = LyricSession()
    session.load_captions(CAPTIONS, "a\nb")
    session.set_offset(-300)
    snapshot = session.to_snapshot()

    other = LyricSession()
    other.import_snapshot(snapshot)
    assert other.cues == session.cues
    assert other.offset_ms == -300
    assert other.lyrics_text == "a\nb"


def test_import_snapshot_sets_default_video_url():
    session = LyricSession()
    session.import_snapshot(ProjectSnapshot(video_id="xyz", caption_text=CAPTIONS))
    assert session.youtube_url == "https://youtu.be/xyz"
    assert len(session.cues) == 2


def test_import_snapshot_failure_is_atomic():
    session = LyricSession()
    session.load_captions(CAPTIONS, "a\nb")
    bad = ProjectSnapshot(video_id="new", caption_text="no cues here", global_offset_ms=999)
    with pytest.raises(CaptionParseError):
        session.import_snapshot(bad)
    assert session.video_id is None
    assert session.offset_ms == 0
    assert len(session.cues) == 2


def test_reset():
    session = LyricSession()
    session.load_captions(CAPTIONS, "a\nb")
    session.reset()
    assert session.cues == []
    assert session.caption_text == ""


def test_callable_clock_converts_seconds():
    assert CallableClock(lambda: 1.2345).current_ms() == 1234
    assert CallableClock(lambda: 2).current_ms() == 2000
    assert CallableClock(lambda: None).current_ms() is None
    assert CallableClock(lambda: float("nan")).current_ms() is None
    assert CallableClock(lambda: True).current_ms() is None


def test_poller_poll_once_reports_changes():
    clock = FakeClock(500)
    session = LyricSession(clock=clock)
    session.load_captions(CAPTIONS)
    seen = []
    poller = PlaybackPoller(session, on_change=seen.append)

    assert poller.poll_once() == 0
    assert poller.poll_once() == 0
    clock.now = 3000
    poller.poll_once()
    clock.now = 9000
    poller.poll_once()
    assert seen == [0, 1, None]


def test_poller_callback_errors_do_not_escape():
    session = LyricSession(clock=FakeClock(500))
    session.load_captions(CAPTIONS)

    def boom(index):
        raise RuntimeError("display failed")

    poller = PlaybackPoller(session, on_change=boom)
    assert poller.poll_once() == 0


def test_poller_thread_lifecycle():
    session = LyricSession(clock=FakeClock(2500))
    session.load_captions(CAPTIONS)
    changed = threading.Event()
    poller = PlaybackPoller(session, interval_ms=10, on_change=lambda index: changed.set())

    with poller:
        assert poller.running
        assert changed.wait(2.0)
    assert not poller.running
    assert poller.active_index == 1


def test_poller_uses_configured_interval():
    session = LyricSession(config=SyncConfig(poll_interval_ms=200))
    assert PlaybackPoller(session).interval_ms == 200


def test_poller_restart_after_timed_out_stop_leaves_one_thread():
    clock = StalledClock()
    poller = PlaybackPoller(LyricSession(clock=clock), interval_ms=10)
    poller.start()
    assert clock.entered.wait(2.0)
    stale = poller._thread

    poller.stop(timeout=0.01)
    assert stale.is_alive()
    poller.start()
    clock.release.set()
    try:
        stale.join(2.0)
        assert not stale.is_alive()
        alive = [t for t in threading.enumerate() if t.name == "lyricsync-poller"]
        assert alive == [poller._thread]
    finally:
        poller.stop(timeout=2.0)
