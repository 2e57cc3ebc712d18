"""Tests for frames module."""

from chainerr.callsite import Frame
from chainerr.config import ChainConfig, ChainSettings, configure
from chainerr.frames import (
    ENTRY_MARKERS,
    PANIC_MARKERS,
    format_frame,
    format_frames,
    trim_frames,
    visible_frames,
)

PANIC = next(iter(PANIC_MARKERS))
ENTRY = "chainerr.panic.recover_to_error"


def make_frames(*functions: str) -> list[Frame]:
    return [Frame(file=f"/app/{name}.py", line=i + 1, function=name)
            for i, name in enumerate(functions)]


class TestMarkers:
    def test_recovery_routines_are_entry_markers(self):
        assert ENTRY in ENTRY_MARKERS
        assert "chainerr.panic.recovered.<locals>.wrapper" in ENTRY_MARKERS

    def test_raise_panic_is_panic_marker(self):
        assert PANIC == "chainerr.panic.raise_panic"


class TestTrimFrames:
    def test_trims_between_markers_and_reverses(self):
        frames = make_frames("aa", PANIC, "cc", "bb", ENTRY, "top")
        assert trim_frames(frames) == [frames[3], frames[2]]

    def test_no_markers_only_reverses(self):
        frames = make_frames("cc", "bb")
        assert trim_frames(frames) == [frames[1], frames[0]]

    def test_only_panic_marker(self):
        frames = make_frames("aa", PANIC, "cc", "bb")
        assert trim_frames(frames) == [frames[3], frames[2]]

    def test_only_entry_marker(self):
        frames = make_frames("cc", "bb", ENTRY, "top")
        assert trim_frames(frames) == [frames[1], frames[0]]

    def test_first_marker_wins(self):
        frames = make_frames(PANIC, "cc", ENTRY, "bb", ENTRY)
        assert trim_frames(frames) == [frames[1]]

    def test_empty_span(self):
        frames = make_frames(PANIC, ENTRY, "top")
        assert trim_frames(frames) == []

    def test_empty_input(self):
        assert trim_frames([]) == []

    def test_does_not_mutate_input(self):
        frames = make_frames("cc", "bb")
        trim_frames(frames)
        assert [f.function for f in frames] == ["cc", "bb"]


class TestFormatFrames:
    def test_single_frame(self):
        frame = Frame(file="/app/main.py", line=12, function="app.main.run")
        assert format_frame(frame) == "PANIC: /app/main.py:12 app.main.run()"

    def test_joins_in_order(self):
        frames = make_frames("aa", "bb")
        assert format_frames(frames) == "PANIC: /app/aa.py:1 aa()\nPANIC: /app/bb.py:2 bb()"

    def test_empty(self):
        assert format_frames([]) == ""


class TestVisibleFrames:
    def test_default_keeps_everything(self):
        frames = make_frames("aa", "bb")
        assert visible_frames(frames) == frames

    def test_drops_ignored_files(self):
        configure(ChainConfig(settings=ChainSettings(ignore_patterns=["bb.py"])))
        frames = make_frames("aa", "bb", "cc")
        assert visible_frames(frames) == [frames[0], frames[2]]

    def test_patterns_match_source_path_with_short_paths(self):
        configure(ChainConfig(settings=ChainSettings(
            full_paths=False, ignore_patterns=["site-packages/"])))
        frames = [
            Frame(file="parser.py", line=3, function="yaml.parser.parse",
                  path="/usr/lib/python3/site-packages/yaml/parser.py"),
            Frame(file="main.py", line=9, function="app.main.run", path="/app/main.py"),
        ]
        assert visible_frames(frames) == [frames[1]]
