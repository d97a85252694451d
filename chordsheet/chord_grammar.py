"""Chord grammar: recognises chord symbols and splits them into their parts."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

# Anchored: the whole token must be consumed, so words like "Amor" never match.
CHORD_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<letter>[A-G])"
    r"(?P<accidental>[#b]?)"
    r"(?P<quality>maj|min|m|M|sus[24]?|dim|aug|add|\+|°|ø)?"
    r"(?P<extension>1[0-3]|[2-9]|add[2-9]|add1[0-3])?"
    r"(?:/(?P<bass>[A-G][#b]?))?$"
)


@dataclass(frozen=True)
class ChordParts:
    """
    A chord symbol decomposed into its grammatical parts.

    Attributes:
        root:       Root letter with its accidental folded in, e.g. "Bb".
        accidental: "", "#" or "b".
        quality:    Quality keyword ("m", "maj", "sus4", "°", ...) or "".
        extension:  Numeric tension ("7", "11", "add9") or "".
        bass:       Slash-chord bass note, e.g. "E" in "C/E", or None.
    """

    root: str
    accidental: str = ""
    quality: str = ""
    extension: str = ""
    bass: str | None = None

    @property
    def symbol(self) -> str:
        """Serialise the parts back into a chord symbol the grammar accepts."""
        text = f"{self.root}{self.quality}{self.extension}"
        if self.bass:
            text += f"/{self.bass}"
        return text

    def __str__(self) -> str:
        return self.symbol


def parse_chord(token: str) -> ChordParts | None:
    """
    Parse a single chord token.

    Surrounding whitespace is ignored. Root letters are strictly uppercase,
    which is what separates the note "A" from the word "a".

    Returns:
        The decomposed chord, or None when the token is not a chord.
    """
    match = CHORD_PATTERN.match(token.strip())
    if match is None:
        return None

    accidental = match.group("accidental")
    return ChordParts(
        root=match.group("letter") + accidental,
        accidental=accidental,
        quality=match.group("quality") or "",
        extension=match.group("extension") or "",
        bass=match.group("bass"),
    )


def is_valid_chord(token: str) -> bool:
    return parse_chord(token) is not None


def describe_chord(token: str) -> str:
    """Return a short human label for a chord, e.g. 'Minor with 7'."""
    parts = parse_chord(token)
    if parts is None:
        return "Unknown"

    quality, extension = parts.quality, parts.extension

    if quality in ("maj", "M") or (not quality and not extension):
        return f"Major with {extension}" if extension else "Major"
    if quality in ("min", "m"):
        return f"Minor with {extension}" if extension else "Minor"
    if quality.startswith("sus"):
        return f"Suspended {quality[3:] or '4'}"
    if quality in ("dim", "°"):
        return "Diminished"
    if quality in ("aug", "+"):
        return "Augmented"
    if quality == "ø":
        return "Half-diminished"
    if quality == "add":
        return f"Added {extension}" if extension else "Added"

    # Bare root with an extension only, e.g. "C7".
    return f"Dominant {extension}" if extension == "7" else f"Major with {extension}"
