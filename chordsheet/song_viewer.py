"""SongViewer: one viewing session of a song, with key switching."""

from __future__ import annotations

from chordsheet.keys import Key, cycle_key, parse_key
from chordsheet.logging import log
from chordsheet.schemas import Song
from chordsheet.segmenter import segment
from chordsheet.sheet_renderers import HtmlFragmentRenderer, SheetRenderer
from chordsheet.song_models import ProcessedSong
from chordsheet.transposer import transpose_inline_text


class SongViewer:
    """
    Holds the display key for a song and caches its segmentation.

    The song is segmented once per lyrics text; switching keys only
    re-renders. Changing the lyrics drops the cached segmentation.

    Usage:

        viewer = SongViewer(song)
        viewer.transpose_up()
        html = viewer.render()
    """

    def __init__(self, song: Song, display_key: str | Key | None = None) -> None:
        self.song = song
        self.original_key = parse_key(song.original_key)
        self.display_key = parse_key(display_key) if display_key is not None else self.original_key
        self._processed: ProcessedSong | None = None
        self._processed_lyrics: str | None = None

    @property
    def processed(self) -> ProcessedSong:
        if self._processed is None or self._processed_lyrics != self.song.lyrics:
            self._processed = segment(self.song.lyrics)
            self._processed_lyrics = self.song.lyrics
            log.debug(
                "song_segmented",
                title=self.song.title,
                format=self._processed.format.value,
                lines=len(self._processed.lines),
            )
        return self._processed

    @property
    def is_transposed(self) -> bool:
        return self.display_key != self.original_key

    def update_lyrics(self, lyrics: str) -> None:
        self.song = self.song.model_copy(update={"lyrics": lyrics})

    def set_key(self, key: str | Key) -> Key:
        """Switch the display key; unknown keys raise UnknownKeyError."""
        self.display_key = parse_key(key)
        log.debug("display_key_changed", title=self.song.title, key=self.display_key.name)
        return self.display_key

    def transpose_up(self, steps: int = 1) -> Key:
        return self.set_key(cycle_key(self.display_key, steps))

    def transpose_down(self, steps: int = 1) -> Key:
        return self.set_key(cycle_key(self.display_key, -steps))

    def reset_key(self) -> Key:
        return self.set_key(self.original_key)

    def render(self, renderer: SheetRenderer | None = None) -> str:
        renderer = renderer or HtmlFragmentRenderer()
        return renderer.render(
            self.processed,
            from_key=self.original_key,
            to_key=self.display_key,
            title=self.song.title,
            artist=self.song.artist,
        )

    def transposed_source(self) -> str:
        """The raw lyrics with every inline ``[Chord]`` moved to the display key."""
        return transpose_inline_text(self.song.lyrics, self.original_key, self.display_key)
