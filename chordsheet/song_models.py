"""Data models for segmented chord sheets."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class SongFormat(str, Enum):
    """How the chords of a song were written in its source text."""

    BRACKET_INLINE = "bracket-inline"
    CHORDS_ABOVE = "chords-above"
    MIXED = "mixed"


class LineKind(str, Enum):
    LYRICS = "lyrics"
    HEADING = "heading"
    INSTRUMENTAL = "instrumental"
    BLANK = "blank"


@dataclass(frozen=True)
class ChordPosition:
    """A chord token and the column it starts at."""

    chord: str
    column: int
    line: int

    @property
    def end(self) -> int:
        """Column just past the original token."""
        return self.column + len(self.chord)


@dataclass(frozen=True)
class ProcessedLine:
    """
    One display line: lyric text plus the chords written over it.

    Attributes:
        lyrics:       Display text, whitespace untouched.
        chords:       Chord positions in strictly increasing column order.
        kind:         Line category driving how it is rendered.
        source_index: Index of the first raw line this entry was built from.
        source_lines: Raw lines consumed (2 for a chord row paired with lyrics).
    """

    lyrics: str
    chords: tuple[ChordPosition, ...] = ()
    kind: LineKind = LineKind.LYRICS
    source_index: int = 0
    source_lines: int = 1

    @property
    def heading(self) -> str | None:
        """Heading text without its brackets, for heading lines."""
        if self.kind is not LineKind.HEADING:
            return None
        return self.lyrics.strip()[1:-1]


@dataclass(frozen=True)
class ProcessedSong:
    """Segmented song, computed once per raw lyrics text."""

    lines: tuple[ProcessedLine, ...] = field(default_factory=tuple)
    format: SongFormat = SongFormat.CHORDS_ABOVE

    @property
    def source_line_count(self) -> int:
        """Number of raw lines covered; always the raw text's line count."""
        return sum(line.source_lines for line in self.lines)

    def chords(self) -> Iterator[ChordPosition]:
        for line in self.lines:
            yield from line.chords
