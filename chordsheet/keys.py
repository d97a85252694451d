"""Key/pitch model: the 12-tone circle, enharmonic folding and key progressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

# Chromatic pitch class names (index 0 = C), canonical sharp spelling
PITCH_CLASSES: Final[tuple[str, ...]] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)

SEMITONES_PER_OCTAVE = 12

#: The five commonly written flats, folded to their sharp spelling.
ENHARMONIC_ALIASES: Final[dict[str, str]] = {
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

# Rarely written spellings the chord grammar still accepts.
_EDGE_SPELLINGS: Final[dict[str, str]] = {
    "Cb": "B",
    "Fb": "E",
    "E#": "F",
    "B#": "C",
}

SOLFEGE_NAMES: Final[dict[str, str]] = {
    "C": "Do", "C#": "Do#", "D": "Re", "D#": "Re#", "E": "Mi", "F": "Fa",
    "F#": "Fa#", "G": "Sol", "G#": "Sol#", "A": "La", "A#": "La#", "B": "Si",
}


class UnknownKeyError(ValueError):
    """Raised when a caller asks for a key outside the 24 supported keys."""


def normalize_note(note: str) -> str:
    """Fold flat (and edge) spellings onto the sharp-spelled pitch class.

    Anything that is not an alias is returned unchanged.
    """
    return ENHARMONIC_ALIASES.get(note, _EDGE_SPELLINGS.get(note, note))


@dataclass(frozen=True)
class Key:
    """
    A tonal centre on the chromatic circle.

    Transposition is positional: a key is nothing more than the chromatic
    scale rotated to start at its tonic. Minor keys rotate from their own
    tonic; there is no relative-major mapping.

    Attributes:
        tonic: Canonical (sharp-spelled) pitch class of the tonic.
        minor: True for a minor key.
    """

    tonic: str
    minor: bool = False

    def __post_init__(self) -> None:
        if self.tonic not in PITCH_CLASSES:
            raise UnknownKeyError(f"Unknown key tonic: {self.tonic!r}")

    @property
    def name(self) -> str:
        """Key name as displayed, e.g. 'A#m'."""
        return f"{self.tonic}m" if self.minor else self.tonic

    @property
    def index(self) -> int:
        """Rotation offset of the tonic within PITCH_CLASSES."""
        return PITCH_CLASSES.index(self.tonic)

    @property
    def progression(self) -> tuple[str, ...]:
        """The 12 pitch classes in order, starting at the tonic."""
        offset = self.index
        return PITCH_CLASSES[offset:] + PITCH_CLASSES[:offset]

    def __str__(self) -> str:
        return self.name


def parse_key(value: str | Key) -> Key:
    """
    Resolve a key name such as 'D', 'Bb' or 'F#m' into a Key.

    Raises:
        UnknownKeyError: If the value is not one of the 12 major or 12 minor keys.
    """
    if isinstance(value, Key):
        return value

    name = value.strip()
    minor = name.endswith("m") and len(name) > 1
    tonic = normalize_note(name[:-1] if minor else name)
    if tonic not in PITCH_CLASSES:
        raise UnknownKeyError(f"Unknown key: {value!r}")
    return Key(tonic=tonic, minor=minor)


def key_progression(key: str | Key) -> tuple[str, ...]:
    return parse_key(key).progression


def all_keys(include_minor: bool = False) -> list[Key]:
    """Return the 12 major keys, followed by the 12 minor keys if requested."""
    keys = [Key(tonic) for tonic in PITCH_CLASSES]
    if include_minor:
        keys += [Key(tonic, minor=True) for tonic in PITCH_CLASSES]
    return keys


def solfege_name(key: str | Key) -> str:
    """Fixed-do name of a key, e.g. 'Re' for D or 'La m' for Am."""
    resolved = parse_key(key)
    name = SOLFEGE_NAMES[resolved.tonic]
    return f"{name} m" if resolved.minor else name


def cycle_key(key: str | Key, step: int = 1) -> Key:
    """Move *step* semitones around the circle, keeping the key's mode."""
    resolved = parse_key(key)
    tonic = PITCH_CLASSES[(resolved.index + step) % SEMITONES_PER_OCTAVE]
    return Key(tonic=tonic, minor=resolved.minor)
