"""Diatonic helpers: chord suggestions and common progression detection."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from chordsheet.chord_grammar import parse_chord
from chordsheet.keys import PITCH_CLASSES, SEMITONES_PER_OCTAVE, Key, normalize_note, parse_key

#: Semitone offsets of the major scale degrees 1-7.
MAJOR_SCALE: Final[tuple[int, ...]] = (0, 2, 4, 5, 7, 9, 11)

# A minor key borrows the scale of its relative major, three semitones up.
RELATIVE_MAJOR_OFFSET = 3

COMMON_PROGRESSIONS: Final[dict[tuple[int, ...], str]] = {
    (1, 5, 6, 4): "I-V-vi-IV (pop progression)",
    (6, 4, 1, 5): "vi-IV-I-V (alternative pop progression)",
    (1, 4, 5, 1): "I-IV-V-I (classic cadence)",
    (1, 6, 4, 5): "I-vi-IV-V (fifties progression)",
    (2, 5, 1): "ii-V-I (jazz cadence)",
    (1, 3, 4, 5): "I-iii-IV-V (romantic progression)",
}

CUSTOM_PROGRESSION = "Custom progression"


def _major_tonic_index(key: Key) -> int:
    if key.minor:
        return (key.index + RELATIVE_MAJOR_OFFSET) % SEMITONES_PER_OCTAVE
    return key.index


def _degree_note(tonic_index: int, degree: int) -> str:
    return PITCH_CLASSES[(tonic_index + MAJOR_SCALE[degree - 1]) % SEMITONES_PER_OCTAVE]


def suggested_chords(key: str | Key) -> list[str]:
    """
    Return the chords a writer most often reaches for in a key.

    The list is I, ii, iii, IV, V, vi, I7, V7, IVmaj7 and vim7 of the key's
    major scale (the relative major's scale for a minor key).
    """
    tonic = _major_tonic_index(parse_key(key))
    one, two, three, four, five, six = (_degree_note(tonic, d) for d in range(1, 7))
    return [
        one,
        f"{two}m",
        f"{three}m",
        four,
        five,
        f"{six}m",
        f"{one}7",
        f"{five}7",
        f"{four}maj7",
        f"{six}m7",
    ]


def chord_degrees(chords: Iterable[str], key: str | Key) -> list[int | None]:
    """Scale degree (1-7) of each chord root, or None when off the scale."""
    tonic = _major_tonic_index(parse_key(key))
    degrees: list[int | None] = []
    for chord in chords:
        parts = parse_chord(chord)
        root = normalize_note(parts.root) if parts else None
        if root not in PITCH_CLASSES:
            degrees.append(None)
            continue
        offset = (PITCH_CLASSES.index(root) - tonic) % SEMITONES_PER_OCTAVE
        degrees.append(MAJOR_SCALE.index(offset) + 1 if offset in MAJOR_SCALE else None)
    return degrees


def detect_progression(chords: Iterable[str], key: str | Key) -> str:
    """Name a well-known progression, or return 'Custom progression'."""
    degrees = chord_degrees(chords, key)
    if not degrees or None in degrees:
        return CUSTOM_PROGRESSION
    return COMMON_PROGRESSIONS.get(tuple(d for d in degrees if d is not None), CUSTOM_PROGRESSION)


def opening_progression(chords: Iterable[str], key: str | Key) -> str:
    """
    Name the progression a song opens with.

    Repeated chords are collapsed, then the first four chords (or, failing
    that, the first three) are matched against the common progressions.
    """
    collapsed: list[str] = []
    for chord in chords:
        if not collapsed or collapsed[-1] != chord:
            collapsed.append(chord)

    for length in (4, 3):
        if len(collapsed) >= length:
            name = detect_progression(collapsed[:length], key)
            if name != CUSTOM_PROGRESSION:
                return name
    return CUSTOM_PROGRESSION
