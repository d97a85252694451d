"""chordsheet CLI entry point."""

import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from chordsheet import __version__
from chordsheet.chord_grammar import describe_chord, parse_chord
from chordsheet.config import get_settings
from chordsheet.harmony import opening_progression
from chordsheet.keys import Key, UnknownKeyError, all_keys, parse_key, solfege_name
from chordsheet.logging import log, setup_logging
from chordsheet.schemas import Song
from chordsheet.segmenter import segment
from chordsheet.sheet_exporter import SUPPORTED_FORMATS, SheetExporter
from chordsheet.transposer import transpose_chord


def _key_option(ctx: click.Context, param: click.Parameter, value: str | None) -> Key | None:
    """Click callback turning a key name into a Key."""
    if value is None:
        return None
    try:
        return parse_key(value)
    except UnknownKeyError as exc:
        raise click.BadParameter(str(exc)) from exc


def _load_song(source: Path, key: Key | None) -> Song:
    """Read a song record (.json) or raw lyrics text (any other file)."""
    text = source.read_text(encoding="utf-8")
    if source.suffix.lower() == ".json":
        song = Song.model_validate_json(text)
        if key is not None:
            song = song.model_copy(update={"original_key": key.name})
        return song

    original_key = key.name if key is not None else get_settings().default_key
    return Song(title=source.stem.replace("_", " "), original_key=original_key, lyrics=text)


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="chordsheet")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging on stderr.")
def main(verbose: bool) -> None:
    """chordsheet — chord sheet transposer and column-aligned renderer."""
    settings = get_settings()
    setup_logging(logging.DEBUG if verbose else settings.log_level, json=settings.log_json)
    if verbose:
        log.debug("verbose_enabled")


# ── render subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path))
@click.option(
    "--from",
    "from_key",
    default=None,
    callback=_key_option,
    metavar="KEY",
    help="Key the chords are written in. Defaults to the song's key (or the configured default).",
)
@click.option(
    "--to",
    "to_key",
    default=None,
    callback=_key_option,
    metavar="KEY",
    help="Key to display. Defaults to the original key.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(sorted(SUPPORTED_FORMATS), case_sensitive=False),
    default=None,
    help="Output format. Defaults to the configured format (html).",
)
@click.option(
    "--output",
    "-o",
    default=None,
    metavar="PATH",
    help="Destination file. Prints to stdout when omitted.",
)
@click.option("--title", default=None, metavar="TEXT", help="Title shown in the header.")
def render(
    source: Path,
    from_key: Key | None,
    to_key: Key | None,
    output_format: str | None,
    output: str | None,
    title: str | None,
) -> None:
    """
    Render a song as a column-aligned chord sheet, optionally transposed.

    SOURCE is a .json song record (title, artist, original_key, lyrics) or a
    plain text file of lyrics with chords above the lines or as [Chord]word.

    \b
    Examples:
      chordsheet render imagine.txt --from C --to D
      chordsheet render song.json --to F# --format text
      chordsheet render song.json -o sheet.html --title "My Song"
    """
    try:
        song = _load_song(source, from_key)
    except (ValidationError, ValueError) as exc:
        click.echo(f"  ERROR: Could not read song — {exc}", err=True)
        sys.exit(1)

    original = parse_key(song.original_key)
    target = to_key or original
    exporter = SheetExporter(
        title=title if title is not None else song.title,
        artist=song.artist,
        output_format=output_format or get_settings().output_format,
    )

    if output is None:
        click.echo(exporter.render(song.lyrics, original, target), nl=False)
        return

    click.echo(f"chordsheet v{__version__}")
    click.echo(f"  Song   : {song.title}")
    click.echo(f"  Key    : {original.name} → {target.name}")
    click.echo(f"  Format : {exporter.output_format}")
    click.echo(f"  Output : {output}")
    try:
        exporter.export(song.lyrics, original, target, output)
    except OSError as exc:
        click.echo(f"  ERROR: Could not write output file — {exc}", err=True)
        sys.exit(1)

    click.echo()
    click.echo(f"Done!  Open '{output}' to view the sheet.")


# ── transpose subcommand ───────────────────────────────────────────────────────

@main.command()
@click.argument("chords", nargs=-1, required=True)
@click.option("--from", "from_key", required=True, callback=_key_option, metavar="KEY", help="Source key.")
@click.option("--to", "to_key", required=True, callback=_key_option, metavar="KEY", help="Target key.")
def transpose(chords: tuple[str, ...], from_key: Key, to_key: Key) -> None:
    """
    Transpose chord symbols from one key to another, one per line.

    Tokens that are not chords are echoed unchanged.

    \b
    Example:
      chordsheet transpose Am7 F Bb/D --from C --to D
    """
    for chord in chords:
        click.echo(transpose_chord(chord, from_key, to_key))


# ── chord subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("token")
def chord(token: str) -> None:
    """Show how TOKEN is read as a chord."""
    parts = parse_chord(token)
    if parts is None:
        click.echo(f"  ERROR: '{token}' is not a chord.", err=True)
        sys.exit(1)

    click.echo(f"Chord     : {parts.symbol}")
    click.echo(f"  Root    : {parts.root}")
    click.echo(f"  Quality : {parts.quality or '-'}")
    click.echo(f"  Ext.    : {parts.extension or '-'}")
    click.echo(f"  Bass    : {parts.bass or '-'}")
    click.echo(f"  Type    : {describe_chord(token)}")


# ── keys subcommand ────────────────────────────────────────────────────────────

@main.command()
@click.option(
    "--minor/--no-minor",
    "include_minor",
    default=None,
    help="Include the 12 minor keys. Defaults to the configured setting.",
)
def keys(include_minor: bool | None) -> None:
    """List the supported keys with their solfège names."""
    if include_minor is None:
        include_minor = get_settings().include_minor_keys
    for key in all_keys(include_minor=include_minor):
        click.echo(f"{key.name:<4} {solfege_name(key)}")


# ── analyze subcommand ─────────────────────────────────────────────────────────

@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False, readable=True, path_type=Path))
@click.option("--key", "key", default=None, callback=_key_option, metavar="KEY", help="Key of the song.")
def analyze(source: Path, key: Key | None) -> None:
    """Report the chord format, chord count and opening progression of a song."""
    try:
        song = _load_song(source, key)
    except (ValidationError, ValueError) as exc:
        click.echo(f"  ERROR: Could not read song — {exc}", err=True)
        sys.exit(1)

    processed = segment(song.lyrics)
    chords = [position.chord for position in processed.chords()]

    click.echo(f"Song        : {song.title}")
    click.echo(f"Key         : {song.original_key}")
    click.echo(f"Format      : {processed.format.value}")
    click.echo(f"Lines       : {processed.source_line_count}")
    click.echo(f"Chords      : {len(chords)} ({len(set(chords))} distinct)")
    click.echo(f"Progression : {opening_progression(chords, song.original_key)}")
