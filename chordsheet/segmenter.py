"""Chord-line segmentation: turns raw lyrics into a ProcessedSong."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Final

from chordsheet.chord_grammar import parse_chord
from chordsheet.song_models import ChordPosition, LineKind, ProcessedLine, ProcessedSong, SongFormat

_HEADING_RE: Final[re.Pattern[str]] = re.compile(r"^\[([^\]]+)\]$")
_INLINE_CHORD_RE: Final[re.Pattern[str]] = re.compile(r"\[([^\]]+)\]")
# Chord-row tokens are delimited by whitespace and parentheses: "(Am)" reads as "Am".
_TOKEN_RE: Final[re.Pattern[str]] = re.compile(r"[^\s()]+")


def split_lines(raw_lyrics: str) -> list[str]:
    """Split raw text into lines; an empty text is a single blank line."""
    return raw_lyrics.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def is_section_heading(line: str) -> bool:
    """True for a bracketed heading such as '[Chorus]'; '[C]' is a chord, not a heading."""
    match = _HEADING_RE.match(line.strip())
    return match is not None and parse_chord(match.group(1)) is None


def is_chord_line(line: str) -> bool:
    """
    Heuristic: a line is a chord row when every token on it is a chord.

    A line of lone capitals such as "A E" is taken as chords, not initials.
    """
    if not line.strip() or is_section_heading(line):
        return False
    tokens = _TOKEN_RE.findall(line)
    return bool(tokens) and all(parse_chord(token) is not None for token in tokens)


def extract_chords_above(line: str, line_index: int) -> tuple[ChordPosition, ...]:
    """Chord tokens of a chord row with their columns in the untrimmed line."""
    return tuple(
        ChordPosition(chord=match.group(0), column=match.start(), line=line_index)
        for match in _TOKEN_RE.finditer(line)
        if parse_chord(match.group(0)) is not None
    )


def extract_inline_chords(line: str, line_index: int) -> tuple[str, tuple[ChordPosition, ...]]:
    """
    Strip ``[Chord]`` spans out of a lyric line.

    Returns:
        The lyric text without the chord brackets, and each chord placed at the
        column where it stood in that text. A chord that would start inside the
        previous one (as in ``[C][G]``) is moved one column past it, so columns
        stay unique; chords that only touch keep their place.
    """
    pieces: list[str] = []
    chords: list[ChordPosition] = []
    text_length = 0
    cursor = 0

    for match in _INLINE_CHORD_RE.finditer(line):
        content = match.group(1).strip()
        if parse_chord(content) is None:
            continue

        before = line[cursor:match.start()]
        pieces.append(before)
        text_length += len(before)
        cursor = match.end()

        column = text_length
        if chords and column < chords[-1].end:
            column = chords[-1].end + 1
        chords.append(ChordPosition(chord=content, column=column, line=line_index))

    pieces.append(line[cursor:])
    return "".join(pieces), tuple(chords)


def _merge_chords(
    above: tuple[ChordPosition, ...], inline: tuple[ChordPosition, ...]
) -> tuple[ChordPosition, ...]:
    """Combine chord-row and inline chords of one line in column order, columns kept unique."""
    merged: list[ChordPosition] = []
    for position in sorted(above + inline, key=lambda p: p.column):
        if merged and position.column < merged[-1].end:
            position = replace(position, column=merged[-1].end + 1)
        merged.append(position)
    return tuple(merged)


def _detect_format(has_above: bool, has_inline: bool) -> SongFormat:
    if has_above and has_inline:
        return SongFormat.MIXED
    if has_inline:
        return SongFormat.BRACKET_INLINE
    return SongFormat.CHORDS_ABOVE


def segment(raw_lyrics: str) -> ProcessedSong:
    """
    Segment raw lyrics into display lines.

    A chord row directly above a lyric line is paired with it. A chord row
    with nothing to annotate (end of text, a blank line, a heading or another
    chord row below it) becomes an instrumental line. Any ``[Chord]`` spans on
    a paired lyric line are merged into the row. Everything else is a heading,
    a blank line, or a lyric line with its ``[Chord]`` spans pulled out.
    Never raises: text that fits no category is plain lyrics.
    """
    lines = split_lines(raw_lyrics)
    processed: list[ProcessedLine] = []
    has_above = False
    has_inline = False

    i = 0
    while i < len(lines):
        line = lines[i]
        line_index = len(processed)

        if is_chord_line(line):
            has_above = True
            chords = extract_chords_above(line, line_index)
            next_line = lines[i + 1] if i + 1 < len(lines) else None

            if (
                next_line is not None
                and next_line.strip()
                and not is_chord_line(next_line)
                and not is_section_heading(next_line)
            ):
                text, inline = extract_inline_chords(next_line, line_index)
                has_inline = has_inline or bool(inline)
                processed.append(
                    ProcessedLine(
                        lyrics=text,
                        chords=_merge_chords(chords, inline),
                        kind=LineKind.LYRICS,
                        source_index=i,
                        source_lines=2,
                    )
                )
                i += 2
                continue

            processed.append(
                ProcessedLine(lyrics="", chords=chords, kind=LineKind.INSTRUMENTAL, source_index=i)
            )
            i += 1
            continue

        if not line.strip():
            processed.append(ProcessedLine(lyrics=line, kind=LineKind.BLANK, source_index=i))
        elif is_section_heading(line):
            processed.append(ProcessedLine(lyrics=line, kind=LineKind.HEADING, source_index=i))
        else:
            text, chords = extract_inline_chords(line, line_index)
            has_inline = has_inline or bool(chords)
            processed.append(ProcessedLine(lyrics=text, chords=chords, source_index=i))
        i += 1

    return ProcessedSong(lines=tuple(processed), format=_detect_format(has_above, has_inline))
