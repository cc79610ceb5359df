"""Custom exceptions for LyricSync."""


class LyricSyncError(Exception):
    """Base class for exceptions in this package."""
    pass


class CaptionParseError(LyricSyncError):
    """Raised when caption text yields no usable cues."""
    pass


class EmptyCaptionError(CaptionParseError):
    """Raised when caption input is empty or whitespace only."""
    pass


class ManualTimingError(LyricSyncError):
    """Base class for manual tap-timing failures."""
    pass


class NoLyricsError(ManualTimingError):
    """Raised when manual timing is started without any lyric lines."""
    pass


class PlayerUnavailableError(ManualTimingError):
    """Raised when a tap arrives but no playback time can be read."""
    pass


class IncompleteTimingError(ManualTimingError):
    """Raised when applying manual timing while some lines lack boundaries."""

    def __init__(self, message: str, incomplete_indices=None):
        super().__init__(message)
        self.incomplete_indices = list(incomplete_indices or [])


class ProjectImportError(LyricSyncError):
    """Raised when a project snapshot is not valid JSON or has the wrong shape."""
    pass


class ConfigurationError(LyricSyncError):
    """Raised for errors in configuration loading."""
    pass
