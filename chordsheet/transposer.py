"""Transposition engine: moves chord roots and bass notes between keys."""

from __future__ import annotations

import re
from typing import Final

from chordsheet.chord_grammar import ChordParts, parse_chord
from chordsheet.keys import SEMITONES_PER_OCTAVE, Key, normalize_note, parse_key

_INLINE_CHORD_RE: Final[re.Pattern[str]] = re.compile(r"\[([^\]]+)\]")


def semitone_interval(from_key: str | Key, to_key: str | Key) -> int:
    """Return the upward interval from one key to another (0-11)."""
    return (parse_key(to_key).index - parse_key(from_key).index) % SEMITONES_PER_OCTAVE


def transpose_note(note: str, from_key: str | Key, to_key: str | Key) -> str:
    """
    Map a note from one key to another by its position in the key progression.

    The note's index in *from_key*'s progression selects the note at the same
    index in *to_key*'s progression. Notes that are not on the circle are
    returned unchanged.
    """
    source = parse_key(from_key).progression
    target = parse_key(to_key).progression

    normalized = normalize_note(note)
    if normalized not in source:
        return note
    return target[source.index(normalized)]


def transpose_parts(parts: ChordParts, from_key: str | Key, to_key: str | Key) -> ChordParts:
    """Transpose an already parsed chord; quality and extension are carried over."""
    root = transpose_note(parts.root, from_key, to_key)
    bass = transpose_note(parts.bass, from_key, to_key) if parts.bass else None
    return ChordParts(
        root=root,
        accidental=root[1:],
        quality=parts.quality,
        extension=parts.extension,
        bass=bass,
    )


def transpose_chord(chord: str, from_key: str | Key, to_key: str | Key) -> str:
    """
    Transpose a chord symbol, e.g. ``transpose_chord("Bb/D", "C", "D") == "C/E"``.

    Roots come out in canonical sharp spelling, so transposing to the same key
    re-spells flats as sharps. Text that does not parse as a chord is returned
    unchanged.

    Raises:
        UnknownKeyError: If either key is not a supported key.
    """
    source = parse_key(from_key)
    target = parse_key(to_key)

    parts = parse_chord(chord)
    if parts is None:
        return chord
    return transpose_parts(parts, source, target).symbol


def transpose_inline_text(lyrics: str, from_key: str | Key, to_key: str | Key) -> str:
    """
    Rewrite every ``[Chord]`` span of raw lyrics into the target key.

    Bracketed text that is not a chord, such as a ``[Chorus]`` heading, is
    left as written.
    """
    source = parse_key(from_key)
    target = parse_key(to_key)

    def _replace(match: re.Match[str]) -> str:
        content = match.group(1)
        if parse_chord(content) is None:
            return match.group(0)
        return f"[{transpose_chord(content, source, target)}]"

    return _INLINE_CHORD_RE.sub(_replace, lyrics)
