"""Unit tests for chord-line segmentation."""

import pytest

from chordsheet.segmenter import (
    extract_chords_above,
    extract_inline_chords,
    is_chord_line,
    is_section_heading,
    segment,
    split_lines,
)
from chordsheet.song_models import ChordPosition, LineKind, SongFormat

ABOVE_SONG = """[Verse]
C           F
Imagine there's no heaven
C           F
It's easy if you try

Am  Dm  F  G
"""

INLINE_SONG = """[Refrão]
[Am7]Praticam todo [F]dia
Com [G]muito amor"""


def test_chord_line_detection() -> None:
    assert is_chord_line("C           F")
    assert is_chord_line("  Am7  (G)  D/F#")
    assert not is_chord_line("Imagine there's no heaven")
    assert not is_chord_line("")
    assert not is_chord_line("   ")
    assert not is_chord_line("( )")


def test_lone_capitals_are_treated_as_chords() -> None:
    assert is_chord_line("A E")


def test_section_heading_detection() -> None:
    assert is_section_heading("[Refrão]")
    assert is_section_heading("  [Chorus]  ")
    assert not is_section_heading("[C]")
    assert not is_section_heading("[Am7]Praticam")
    assert not is_chord_line("[Refrão]")


def test_extract_chords_above_uses_untrimmed_columns() -> None:
    chords = extract_chords_above("   G    D/F#", 3)
    assert chords == (
        ChordPosition(chord="G", column=3, line=3),
        ChordPosition(chord="D/F#", column=8, line=3),
    )


def test_extract_inline_chords() -> None:
    text, chords = extract_inline_chords("[Am7]Praticam todo [F]dia", 0)
    assert text == "Praticam todo dia"
    assert [(c.chord, c.column) for c in chords] == [("Am7", 0), ("F", 14)]


def test_extract_inline_keeps_non_chord_brackets() -> None:
    text, chords = extract_inline_chords("[G]Sing [loud] now", 0)
    assert text == "Sing [loud] now"
    assert [c.chord for c in chords] == ["G"]


def test_extract_inline_columns_stay_unique() -> None:
    text, chords = extract_inline_chords("[C][G]word [Dm] [F]", 0)
    assert text == "word  "
    columns = [c.column for c in chords]
    assert columns == [0, 2, 5, 8]
    assert columns == sorted(set(columns))


def test_chords_above_scenario() -> None:
    song = segment("C           F\nImagine there's no heaven")
    assert song.format is SongFormat.CHORDS_ABOVE
    assert len(song.lines) == 1
    line = song.lines[0]
    assert line.lyrics == "Imagine there's no heaven"
    assert [(c.chord, c.column) for c in line.chords] == [("C", 0), ("F", 12)]
    assert line.source_lines == 2


def test_segment_above_song() -> None:
    song = segment(ABOVE_SONG)
    kinds = [line.kind for line in song.lines]
    assert kinds == [
        LineKind.HEADING,
        LineKind.LYRICS,
        LineKind.LYRICS,
        LineKind.BLANK,
        LineKind.INSTRUMENTAL,
        LineKind.BLANK,
    ]
    assert song.lines[0].heading == "Verse"
    assert [c.chord for c in song.lines[4].chords] == ["Am", "Dm", "F", "G"]
    assert song.lines[4].lyrics == ""


def test_chord_positions_point_at_their_line() -> None:
    song = segment(ABOVE_SONG)
    for index, line in enumerate(song.lines):
        assert all(position.line == index for position in line.chords)


def test_segment_inline_song() -> None:
    song = segment(INLINE_SONG)
    assert song.format is SongFormat.BRACKET_INLINE
    assert song.lines[0].kind is LineKind.HEADING
    assert song.lines[1].lyrics == "Praticam todo dia"
    assert [c.chord for c in song.lines[2].chords] == ["G"]


def test_segment_mixed_song() -> None:
    song = segment("G  D\nHello there\n[C]Goodbye")
    assert song.format is SongFormat.MIXED


def test_song_without_chords_defaults_to_chords_above() -> None:
    assert segment("just words\nmore words").format is SongFormat.CHORDS_ABOVE


def test_chord_line_followed_by_heading_is_instrumental() -> None:
    song = segment("C G\n[Chorus]\nla la")
    assert [line.kind for line in song.lines] == [LineKind.INSTRUMENTAL, LineKind.HEADING, LineKind.LYRICS]


def test_two_chord_lines_pair_only_the_second() -> None:
    song = segment("C G\nAm F\nwords here")
    assert song.lines[0].kind is LineKind.INSTRUMENTAL
    assert song.lines[1].lyrics == "words here"
    assert [c.chord for c in song.lines[1].chords] == ["Am", "F"]


def test_blank_lines_keep_their_whitespace() -> None:
    song = segment("a\n   \nb")
    assert song.lines[1].kind is LineKind.BLANK
    assert song.lines[1].lyrics == "   "


def test_crlf_line_endings() -> None:
    assert split_lines("a\r\nb\rc") == ["a", "b", "c"]


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "\n\n\n",
        ABOVE_SONG,
        INLINE_SONG,
        "C\nD\nE",
        "[\n]\n[[C]]\n(((\n[Am",
        "G\n",
        "}{ weird ] text [ here",
        "\tC\tG\n\twords",
    ],
)
def test_segmentation_covers_every_line(raw: str) -> None:
    song = segment(raw)
    assert song.source_line_count == len(split_lines(raw))
    for line in song.lines:
        columns = [position.column for position in line.chords]
        assert columns == sorted(set(columns))


def test_inline_chords_touching_the_previous_one_keep_their_column() -> None:
    text, chords = extract_inline_chords("[Am7]Pra[F]ticam", 0)
    assert text == "Praticam"
    assert [(c.chord, c.column) for c in chords] == [("Am7", 0), ("F", 3)]


def test_paired_lyric_line_with_inline_chords_is_mixed() -> None:
    song = segment("G  D\n[C]Hello [F]there")
    assert song.format is SongFormat.MIXED
    assert len(song.lines) == 1
    line = song.lines[0]
    assert line.lyrics == "Hello there"
    # The inline C collides with G and moves one column past it.
    assert [(c.chord, c.column) for c in line.chords] == [("G", 0), ("C", 2), ("D", 3), ("F", 6)]


def test_merged_chords_keep_unique_columns() -> None:
    line = segment("C\n[G]la [Am]la").lines[0]
    assert line.lyrics == "la la"
    assert [(c.chord, c.column) for c in line.chords] == [("C", 0), ("G", 2), ("Am", 3)]
    assert all(position.line == 0 for position in line.chords)
