"""chordsheet: chord-sheet parsing, transposition and layout-preserving rendering."""

__version__ = "0.1.0"
