"""Unit tests for chord transposition."""

import pytest

from chordsheet.chord_grammar import parse_chord
from chordsheet.keys import PITCH_CLASSES, UnknownKeyError, all_keys, cycle_key, normalize_note
from chordsheet.transposer import (
    semitone_interval,
    transpose_chord,
    transpose_inline_text,
    transpose_note,
)

SAMPLE_CHORDS = [
    "C", "Am", "Am7", "C#sus4", "Bb/D", "G°", "Ebmaj7", "F#m11", "Dadd9",
    "Bø", "E+", "Gsus2/B", "Abdim", "Cmadd9", "B7", "Db/Ab",
]


def _normalized(chord: str) -> tuple[str, str, str, str | None]:
    parts = parse_chord(chord)
    assert parts is not None
    bass = normalize_note(parts.bass) if parts.bass else None
    return normalize_note(parts.root), parts.quality, parts.extension, bass


def test_slash_chord_with_flat_respelled() -> None:
    assert transpose_chord("Bb/D", "C", "D") == "C/E"


def test_simple_step_up() -> None:
    assert transpose_chord("C", "C", "D") == "D"
    assert transpose_chord("F", "C", "D") == "G"


def test_quality_and_extension_carried_through() -> None:
    assert transpose_chord("Am7", "A", "C") == "Cm7"
    assert transpose_chord("C#sus4", "C", "F") == "F#sus4"


def test_inline_scenario_in_sharp_spelling() -> None:
    assert transpose_chord("F", "A", "C") == "G#"


def test_wraps_past_b() -> None:
    assert transpose_chord("B", "C", "C#") == "C"
    assert transpose_chord("C", "C#", "C") == "B"
    assert transpose_note("C", "C", "B") == "B"


def test_same_key_respells_to_sharps() -> None:
    assert transpose_chord("Bb", "F", "F") == "A#"
    assert transpose_chord("Am7", "F", "F") == "Am7"


def test_unparseable_chord_returned_unchanged() -> None:
    assert transpose_chord("hello", "C", "D") == "hello"
    assert transpose_chord("Amor", "C", "D") == "Amor"


def test_unknown_key_raises() -> None:
    with pytest.raises(UnknownKeyError):
        transpose_chord("C", "H", "D")
    with pytest.raises(UnknownKeyError):
        transpose_chord("not a chord", "C", "Z")


def test_transpose_note_off_circle_unchanged() -> None:
    assert transpose_note("X", "C", "D") == "X"


def test_minor_keys_transpose_positionally() -> None:
    assert transpose_chord("Am", "Am", "Bm") == "Bm"
    assert transpose_chord("E7", "Am", "Cm") == "G7"


def test_semitone_interval() -> None:
    assert semitone_interval("C", "D") == 2
    assert semitone_interval("D", "C") == 10
    assert semitone_interval("Bb", "A#") == 0


@pytest.mark.parametrize("chord", SAMPLE_CHORDS)
def test_same_key_is_semantically_identity(chord: str) -> None:
    for key in all_keys(include_minor=True):
        assert _normalized(transpose_chord(chord, key, key)) == _normalized(chord)


@pytest.mark.parametrize("chord", SAMPLE_CHORDS)
def test_round_trip_returns_normalized_chord(chord: str) -> None:
    for first in all_keys():
        for second in all_keys():
            there = transpose_chord(chord, first, second)
            back = transpose_chord(there, second, first)
            assert _normalized(back) == _normalized(chord)


@pytest.mark.parametrize("chord", SAMPLE_CHORDS)
def test_twelve_steps_up_closes_the_circle(chord: str) -> None:
    start = all_keys()[0]
    current_key, current = start, transpose_chord(chord, start, start)
    for _ in range(12):
        next_key = cycle_key(current_key)
        current = transpose_chord(current, current_key, next_key)
        current_key = next_key
    assert current == transpose_chord(chord, start, start)


def test_every_root_moves_by_the_key_interval() -> None:
    for root in PITCH_CLASSES:
        moved = transpose_chord(root, "C", "E")
        assert (PITCH_CLASSES.index(moved) - PITCH_CLASSES.index(root)) % 12 == 4


def test_transpose_inline_text() -> None:
    lyrics = "[Chorus]\n[Am7]Praticam todo [F]dia"
    assert transpose_inline_text(lyrics, "A", "C") == "[Chorus]\n[Cm7]Praticam todo [G#]dia"
