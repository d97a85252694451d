"""SheetExporter: renders raw lyrics to HTML or text chord sheets."""

from __future__ import annotations

from typing import Final

from chordsheet.keys import Key, parse_key
from chordsheet.logging import log
from chordsheet.segmenter import segment
from chordsheet.sheet_renderers import (
    HtmlDocumentRenderer,
    HtmlFragmentRenderer,
    PlainTextRenderer,
    SheetRenderer,
)

SUPPORTED_FORMATS: Final[set[str]] = {"html", "html-fragment", "text"}


class SheetExporter:
    """
    Turn raw lyrics into a chord sheet via a pluggable renderer.

    Supported formats:
    - ``html``: self-contained, printable HTML document.
    - ``html-fragment``: bare markup for embedding in a page.
    - ``text``: monospaced plain text.
    """

    def __init__(self, title: str = "", artist: str = "", output_format: str = "html") -> None:
        self.title = title
        self.artist = artist
        normalized = output_format.strip().lower()
        if normalized not in SUPPORTED_FORMATS:
            supported = ", ".join(sorted(SUPPORTED_FORMATS))
            raise ValueError(f"Unsupported output format '{output_format}'. Use one of: {supported}.")
        self.output_format = normalized
        self.renderer = self._build_renderer(normalized)

    def _build_renderer(self, output_format: str) -> SheetRenderer:
        if output_format == "html":
            return HtmlDocumentRenderer()
        if output_format == "html-fragment":
            return HtmlFragmentRenderer()
        return PlainTextRenderer()

    @property
    def default_extension(self) -> str:
        return self.renderer.default_extension

    def render(self, lyrics: str, from_key: str | Key, to_key: str | Key) -> str:
        """
        Segment and render lyrics in the target key.

        Raises:
            UnknownKeyError: If either key is not supported.
        """
        source = parse_key(from_key)
        target = parse_key(to_key)
        song = segment(lyrics)
        log.debug(
            "sheet_rendered",
            format=self.output_format,
            song_format=song.format.value,
            lines=len(song.lines),
            from_key=source.name,
            to_key=target.name,
        )
        return self.renderer.render(
            song,
            from_key=source,
            to_key=target,
            title=self.title,
            artist=self.artist,
        )

    def export(self, lyrics: str, from_key: str | Key, to_key: str | Key, output_path: str) -> None:
        """
        Render lyrics and write the sheet to disk.

        Raises:
            OSError: If the output file cannot be written.
        """
        content = self.render(lyrics, from_key, to_key)
        with open(output_path, "w", encoding="utf-8") as fh:
            fh.write(content)
        log.info("sheet_exported", path=output_path, format=self.output_format)
