"""Command-line interface using Click."""

import json
import sys
from pathlib import Path

import click

from . import __version__
from .config import DEFAULT_DEMO_DURATION_MS, TICK_INTERVAL_MS
from .exceptions import LyricSyncError
from .core.engine import SyncEngine
from .core.models import ParsePolicy
from .core.parser import parse_lyrics
from .core.serialization import lines_to_json, load_lyric_file
from .core.timing import create_demo_timing
from .utils.logging import setup_logging
from .utils.validation import validate_timeline


def format_timestamp(time_ms: int) -> str:
    """Format milliseconds as ``mm:ss.mmm`` (negative times get a sign)."""
    sign = "-" if time_ms < 0 else ""
    time_ms = abs(int(time_ms))
    minutes, rest = divmod(time_ms, 60000)
    seconds, millis = divmod(rest, 1000)
    return f"{sign}{minutes:02d}:{seconds:02d}.{millis:03d}"


def build_engine(lyric_file, delay, merge, lenient, clean=False) -> SyncEngine:
    """Load a lyric file into a SyncEngine with the given controls."""
    raw = load_lyric_file(lyric_file)
    policy = ParsePolicy.LENIENT if lenient else None
    return SyncEngine(
        raw, delay_ms=delay, merge_enabled=merge, policy=policy, clean=clean
    )


def _emit_json(data, output) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
    else:
        click.echo(text)


def _fail(ctx, logger, error) -> None:
    if isinstance(error, LyricSyncError):
        logger.error(f"❌ {error}")
    else:
        logger.error(f"❌ Unexpected error: {error}")
        if ctx.obj.get('verbose'):
            import traceback
            traceback.print_exc()
    sys.exit(1)


def timing_options(func):
    """Attach the delay/merge/parse options shared by timeline commands."""
    func = click.option('--lenient', is_flag=True,
                        help='Synthesize missing word timing (default: LYRICSYNC_PARSE_POLICY)')(func)
    func = click.option('--merge', is_flag=True,
                        help='Merge each line into a single timed unit')(func)
    func = click.option('--delay', type=int, default=0,
                        help='Delay in ms (negative = earlier), clamped to ±10000')(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Log to file')
@click.pass_context
def cli(ctx, verbose, log_file):
    """lyricsync - word-level lyric timing for audio playback."""
    ctx.ensure_object(dict)
    logger = setup_logging(
        level="DEBUG" if verbose else "INFO",
        log_file=Path(log_file) if log_file else None,
        verbose=verbose
    )
    ctx.obj['logger'] = logger
    ctx.obj['verbose'] = verbose


@cli.command()
@click.argument('lyric_file', type=click.Path())
@timing_options
@click.option('--clean', is_flag=True,
              help='Drop single-word and symbol-only lines')
@click.option('-o', '--output', type=click.Path(), help='Write JSON to this file')
@click.pass_context
def process(ctx, lyric_file, delay, merge, lenient, clean, output):
    """Parse and normalize a lyric file, printing the timeline as JSON."""
    logger = ctx.obj['logger']
    try:
        engine = build_engine(lyric_file, delay, merge, lenient, clean)
        lines = engine.lines
        if not lines:
            logger.warning("No valid lyric lines found")
        _emit_json(lines_to_json(lines), output)
        if output:
            logger.info(f"✅ Wrote {len(lines)} lines to {output}")
    except Exception as e:
        _fail(ctx, logger, e)


@cli.command()
@click.argument('lyric_file', type=click.Path())
@click.argument('times', type=int, nargs=-1, required=True)
@timing_options
@click.pass_context
def locate(ctx, lyric_file, times, delay, merge, lenient):
    """Show the active line and word at each playback time (ms)."""
    logger = ctx.obj['logger']
    try:
        engine = build_engine(lyric_file, delay, merge, lenient)
        for time_ms in times:
            state = engine.tick(time_ms)
            line = state.line
            text = line.text if line is not None else ""
            click.echo(
                f"{format_timestamp(time_ms)}\tline={state.line_index}"
                f"\tword={state.word_index}\t{text}"
            )
    except Exception as e:
        _fail(ctx, logger, e)


@cli.command()
@click.argument('lyric_file', type=click.Path())
@timing_options
@click.option('--start', type=int, default=0, help='Playback start in ms')
@click.option('--end', type=int, default=None,
              help='Playback end in ms (default: end of the last line)')
@click.option('--step', type=int, default=TICK_INTERVAL_MS,
              help='Clock tick interval in ms')
@click.pass_context
def play(ctx, lyric_file, delay, merge, lenient, start, end, step):
    """Simulate the playback clock and print each line change."""
    logger = ctx.obj['logger']
    try:
        if step <= 0:
            raise click.BadParameter("--step must be positive")
        engine = build_engine(lyric_file, delay, merge, lenient)
        lines = engine.lines
        if not lines:
            logger.warning("No valid lyric lines found")
            return
        if end is None:
            end = lines[-1].end_time

        current = -1
        for time_ms in range(start, end + 1, step):
            state = engine.tick(time_ms)
            if state.line_index != current and state.line is not None:
                current = state.line_index
                click.echo(
                    f"[{format_timestamp(time_ms)}] {current + 1:>3}  {state.line.text}"
                )
        stats = engine.cache.stats()
        logger.debug(f"Cache: {stats['hits']} hits, {stats['misses']} misses")
    except click.BadParameter:
        raise
    except Exception as e:
        _fail(ctx, logger, e)


@cli.command()
@click.argument('lyric_file', type=click.Path())
@timing_options
@click.pass_context
def check(ctx, lyric_file, delay, merge, lenient):
    """Verify minimum word duration and gap rules on the processed timeline."""
    logger = ctx.obj['logger']
    try:
        engine = build_engine(lyric_file, delay, merge, lenient)
        lines = engine.lines
        validate_timeline(lines)
        words = sum(len(line.words) for line in lines)
        click.echo(f"✅ {len(lines)} lines, {words} words OK")
    except Exception as e:
        _fail(ctx, logger, e)


@cli.command()
@click.argument('lyric_file', type=click.Path())
@click.option('--duration', type=int, default=DEFAULT_DEMO_DURATION_MS,
              help='Total duration in ms to spread the lines over')
@click.option('--lenient', is_flag=True,
              help='Synthesize missing word timing (default: LYRICSYNC_PARSE_POLICY)')
@click.option('-o', '--output', type=click.Path(), help='Write JSON to this file')
@click.pass_context
def demo(ctx, lyric_file, duration, lenient, output):
    """Spread lyric lines evenly over a duration (no audio timing needed)."""
    logger = ctx.obj['logger']
    try:
        if duration <= 0:
            raise click.BadParameter("--duration must be positive")
        policy = ParsePolicy.LENIENT if lenient else None
        lines = create_demo_timing(
            parse_lyrics(load_lyric_file(lyric_file), policy), duration
        )
        _emit_json(lines_to_json(lines), output)
    except click.BadParameter:
        raise
    except Exception as e:
        _fail(ctx, logger, e)


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
