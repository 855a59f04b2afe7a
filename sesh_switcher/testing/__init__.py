"""Test helpers for code that drives a switcher."""

from sesh_switcher.testing.recording_host import RecordingHost

__all__ = ["RecordingHost"]
