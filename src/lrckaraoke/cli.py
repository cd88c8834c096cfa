"""Command-line interface using Click."""

import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import AssConfig, Paths, parse_resolution
from .exceptions import LrcKaraokeError
from .core.karaoke import KaraokePipeline, convert_lrc_file
from .core.lyrics_fetch import LyricsFetcher
from .utils.logging import setup_logging
from .utils.validation import validate_transition, validate_url


def _build_config(
    resolution: Optional[str], font: Optional[str], transition: Optional[float]
) -> AssConfig:
    config = AssConfig()
    if resolution:
        try:
            config.resolution_x, config.resolution_y = parse_resolution(resolution)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--resolution")
    if font:
        config.font_name = font
    if transition is not None:
        config.transition_duration = validate_transition(transition)
    config.validate()
    return config


style_options = [
    click.option('--resolution', type=str, default=None,
                 help="Video resolution (e.g., '1920x1080', '720p', '4k')"),
    click.option('--font', type=str, default=None, help='Subtitle font family'),
    click.option('--transition', type=float, default=None,
                 help='Maximum fade/move transition in seconds (default: 0.3)'),
]


def with_style_options(func):
    for option in reversed(style_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Log file path')
@click.pass_context
def cli(ctx, verbose, log_file):
    """LRC Karaoke - Generate karaoke videos from synced lyrics."""
    ctx.ensure_object(dict)
    logger = setup_logging(
        level="DEBUG" if verbose else "INFO",
        log_file=Path(log_file) if log_file else None,
        verbose=verbose
    )
    ctx.obj['logger'] = logger
    ctx.obj['verbose'] = verbose


@cli.command()
@click.argument('url')
@click.option('--artist', help='Override artist for lyrics search')
@click.option('--title', help='Override song title for lyrics search')
@click.option('--separate', is_flag=True, help='Isolate the instrumental track')
@click.option('--separator', type=click.Path(), default=None,
              help='Separator executable (<input.wav> <output.wav>)')
@click.option('--work-dir', type=click.Path(), default=None,
              help='Directory for intermediate files')
@click.option('--output-dir', type=click.Path(), default=None,
              help='Directory for the rendered video')
@click.option('-o', '--output', help='Output video filename')
@with_style_options
@click.pass_context
def generate(ctx, url, artist, title, separate, separator, work_dir, output_dir,
             output, resolution, font, transition):
    """Generate a karaoke video from a song URL."""
    logger = ctx.obj['logger']

    try:
        url = validate_url(url)
        config = _build_config(resolution, font, transition)

        paths = Paths(separator_binary=Path(separator) if separator else None)
        if work_dir:
            paths.temp_dir = Path(work_dir)
        if output_dir:
            paths.output_dir = Path(output_dir)

        pipeline = KaraokePipeline(config=config, paths=paths)
        result = pipeline.run(
            url,
            artist=artist,
            title=title,
            separate=separate,
            output_name=output,
        )
        logger.info(f"✅ Karaoke video generated: {result.output_path}")

    except LrcKaraokeError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)


@cli.command()
@click.argument('lrc_file', type=click.Path(exists=True, dir_okay=False))
@click.argument('ass_file', type=click.Path(dir_okay=False))
@with_style_options
@click.pass_context
def convert(ctx, lrc_file, ass_file, resolution, font, transition):
    """Convert an LRC file into an animated ASS subtitle file."""
    logger = ctx.obj['logger']

    try:
        config = _build_config(resolution, font, transition)
        result = convert_lrc_file(Path(lrc_file), Path(ass_file), config)
        logger.info(f"✅ Wrote {len(result.lines)} lines to {ass_file}")
    except LrcKaraokeError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)


@cli.command()
@click.argument('artist')
@click.argument('title')
@click.option('-o', '--output', type=click.Path(dir_okay=False),
              help='Save lyrics to this file instead of printing')
@click.pass_context
def fetch(ctx, artist, title, output):
    """Fetch synced lyrics for a track."""
    logger = ctx.obj['logger']

    lrc_text = LyricsFetcher().fetch_lyrics(artist, title)
    if not lrc_text:
        logger.error(f"❌ No synced lyrics found for '{title}' by '{artist}'")
        sys.exit(1)

    if output:
        try:
            Path(output).write_text(lrc_text, encoding="utf-8")
        except OSError as e:
            logger.error(f"❌ Cannot write lyrics to {output}: {e}")
            sys.exit(1)
        logger.info(f"✅ Saved lyrics to {output}")
    else:
        click.echo(lrc_text)


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
