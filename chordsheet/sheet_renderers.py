"""Renderer implementations for chord sheet output formats."""

from __future__ import annotations

from abc import ABC, abstractmethod

from chordsheet.keys import Key, parse_key
from chordsheet.song_models import LineKind, ProcessedLine, ProcessedSong
from chordsheet.transposer import transpose_chord

PRE_STYLE = 'style="white-space: pre;"'


def _escape_html(text: str) -> str:
    """Escape the three characters that are unsafe in HTML text content."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _display_chord(chord: str, source: Key, target: Key) -> str:
    # The original key shows chords exactly as written.
    if source == target:
        return chord
    return transpose_chord(chord, source, target)


def chord_cells(line: ProcessedLine, from_key: str | Key, to_key: str | Key) -> list[tuple[str, int | None]]:
    """
    Lay out the chord row of a line as (character, chord index) cells.

    The row is as wide as the lyrics or the furthest original chord, whichever
    is longer. Each transposed chord is written at its original column, left
    to right; a chord that grew in transposition may be overwritten by the next
    one or extend the row, but never moves a later chord. Cells not covered by
    a chord hold a space and index None.
    """
    source = parse_key(from_key)
    target = parse_key(to_key)

    width = max([len(line.lyrics)] + [position.end for position in line.chords])
    cells: list[tuple[str, int | None]] = [(" ", None)] * width

    for index, position in enumerate(line.chords):
        text = _display_chord(position.chord, source, target)
        for offset, char in enumerate(text):
            column = position.column + offset
            if column >= len(cells):
                cells.extend([(" ", None)] * (column - len(cells) + 1))
            cells[column] = (char, index)
    return cells


def chord_row(line: ProcessedLine, from_key: str | Key, to_key: str | Key) -> str:
    """The chord row of a line as plain monospaced text."""
    return "".join(char for char, _ in chord_cells(line, from_key, to_key))


def _chord_row_html(line: ProcessedLine, from_key: Key, to_key: Key) -> str:
    runs: list[str] = []
    run_owner: int | None = None
    run_chars: list[str] = []

    def _flush() -> None:
        if not run_chars:
            return
        text = _escape_html("".join(run_chars))
        runs.append(text if run_owner is None else f'<b class="chord">{text}</b>')

    for char, owner in chord_cells(line, from_key, to_key):
        if owner != run_owner:
            _flush()
            run_owner, run_chars = owner, []
        run_chars.append(char)
    _flush()
    return "".join(runs)


class SheetRenderer(ABC):
    """Abstract chord sheet renderer."""

    @property
    @abstractmethod
    def default_extension(self) -> str:
        """Default filename extension for this renderer."""

    @abstractmethod
    def render(
        self,
        song: ProcessedSong,
        *,
        from_key: str | Key,
        to_key: str | Key,
        title: str = "",
        artist: str = "",
    ) -> str:
        """Render a segmented song in the target key."""


class HtmlFragmentRenderer(SheetRenderer):
    """Render a song into an HTML fragment of chord rows above lyric rows."""

    @property
    def default_extension(self) -> str:
        return ".html"

    def render(
        self,
        song: ProcessedSong,
        *,
        from_key: str | Key,
        to_key: str | Key,
        title: str = "",
        artist: str = "",
    ) -> str:
        source = parse_key(from_key)
        target = parse_key(to_key)
        return "\n".join(self.render_line(line, source, target) for line in song.lines)

    def render_line(self, line: ProcessedLine, from_key: Key, to_key: Key) -> str:
        if line.kind is LineKind.HEADING:
            return f'<div class="song-topic"><b>{_escape_html(line.heading or "")}</b></div>'

        # Empty rows get a placeholder so the div keeps its height.
        lyrics_text = _escape_html(line.lyrics) if line.lyrics and line.kind is not LineKind.BLANK else "&nbsp;"
        lyrics_html = f'<div class="lyrics-line" {PRE_STYLE}>{lyrics_text}</div>'
        if not line.chords:
            return lyrics_html

        chords_html = f'<div class="chord-line" {PRE_STYLE}>{_chord_row_html(line, from_key, to_key)}</div>'
        if line.kind is LineKind.INSTRUMENTAL:
            return chords_html
        return f"{chords_html}\n{lyrics_html}"


class HtmlDocumentRenderer(HtmlFragmentRenderer):
    """Wrap the HTML fragment in a self-contained, printable HTML document."""

    def render(
        self,
        song: ProcessedSong,
        *,
        from_key: str | Key,
        to_key: str | Key,
        title: str = "",
        artist: str = "",
    ) -> str:
        source = parse_key(from_key)
        target = parse_key(to_key)
        fragment = super().render(song, from_key=source, to_key=target)
        return self.build_html(title, artist, source, target, fragment)

    def build_html(self, title: str, artist: str, from_key: Key, to_key: Key, fragment: str) -> str:
        """
        Wrap a rendered fragment in an HTML document.

        The header carries the title, the artist and the displayed key; when
        the song is transposed the original key is shown next to it.
        """
        title_safe = _escape_html(title)
        heading = f"  <h1>{title_safe}</h1>\n" if title else ""
        byline = f'  <p class="artist">{_escape_html(artist)}</p>\n' if artist else ""
        key_label = f"Key: {to_key.name}"
        if to_key != from_key:
            key_label += f" (original: {from_key.name})"

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1.0" />
  <title>{title_safe}</title>
  <style>
    body {{
      font-family: Georgia, serif;
      background: #f0f0f0;
      margin: 0;
      padding: 2rem;
    }}
    h1 {{
      font-size: 1.6rem;
      margin-bottom: 0.25rem;
      color: #222;
    }}
    .sheet {{
      background: #fff;
      box-shadow: 0 2px 8px rgba(0, 0, 0, 0.15);
      margin: 0 auto;
      max-width: 860px;
      padding: 1.5rem;
      overflow-x: auto;
    }}
    .chord-line, .lyrics-line {{
      font-family: "Courier New", monospace;
      line-height: 1.3;
    }}
    .chord {{
      color: #1d4ed8;
    }}
    .song-topic {{
      margin-top: 1rem;
    }}
    @media print {{
      body {{
        background: #fff;
        padding: 0;
      }}
      .sheet {{
        box-shadow: none;
        max-width: 100%;
        padding: 0;
      }}
    }}
  </style>
</head>
<body>
  <div class="sheet">
{heading}{byline}  <p class="key">{key_label}</p>
{fragment}
  </div>
</body>
</html>"""


class PlainTextRenderer(SheetRenderer):
    """Render a song as monospaced text with chord rows above the lyrics."""

    @property
    def default_extension(self) -> str:
        return ".txt"

    def render(
        self,
        song: ProcessedSong,
        *,
        from_key: str | Key,
        to_key: str | Key,
        title: str = "",
        artist: str = "",
    ) -> str:
        source = parse_key(from_key)
        target = parse_key(to_key)

        out: list[str] = []
        if title:
            out.append(f"{title} - {artist}" if artist else title)
            out.append("")

        for line in song.lines:
            if line.kind is LineKind.HEADING:
                out.append(f"[{line.heading}]")
                continue
            if line.chords:
                out.append(chord_row(line, source, target))
            if line.kind is not LineKind.INSTRUMENTAL:
                out.append(line.lyrics)
        return "\n".join(out) + "\n"


def render(song: ProcessedSong, from_key: str | Key, to_key: str | Key) -> str:
    """Render a song as column-aligned HTML markup in the target key."""
    return HtmlFragmentRenderer().render(song, from_key=from_key, to_key=to_key)
