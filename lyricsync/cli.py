"""Command-line interface for LyricSync."""

import argparse
import logging
import sys
from typing import List, Optional

from .aligner import parse_and_align
from .config_loader import ConfigLoader
from .exceptions import ConfigurationError, LyricSyncError
from .exporter import EXPORT_FORMATS, export_cues
from .log_setup import setup_logging
from .models import ProjectSnapshot, SyncConfig
from .project import dump_project, read_project_file, resolve_cues
from .selector import find_active_index
from .utils import format_timecode, parse_time_argument

logger = logging.getLogger(__name__)


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lyricsync",
        description="Align WebVTT/SRT captions with lyric lines and export VTT, LRC or SRT.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("-c", "--config", default=None, help="Path to a YAML configuration file.")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (overrides the config file; WARNING when neither is set).",
    )
    parser.add_argument("--log-dir", default=None, help="Also write logs to a rotating file in this directory.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    align = subparsers.add_parser("align", help="Parse captions, attach lyrics and export the result.")
    align.add_argument("captions", help="Path to a .vtt or .srt file.")
    align.add_argument("-l", "--lyrics", default=None, help="Path to a plain-text lyrics file, one line per row.")
    align.add_argument(
        "-f", "--format",
        default="vtt",
        choices=list(EXPORT_FORMATS) + ["project"],
        help="Output format.",
    )
    align.add_argument("-o", "--output", default=None, help="Output path (stdout when omitted).")
    align.add_argument("--offset", type=int, default=None, help="Global offset in ms stored in project output.")

    at = subparsers.add_parser("at", help="Show the line active at a playback time in a project file.")
    at.add_argument("project", help="Path to a project JSON file.")
    at.add_argument("time", help="Playback time as HH:MM:SS.mmm or milliseconds.")
    at.add_argument("--offset", type=int, default=0, help="Extra offset in ms added to the project's offset.")

    return parser


def _read_text(path: str) -> str:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise LyricSyncError(f"{path} is not UTF-8 text: {e}") from e


def _write_output(content: str, output: Optional[str]) -> None:
    if output is None:
        sys.stdout.write(content)
        return
    with open(output, 'w', encoding='utf-8') as f:
        f.write(content)
    logger.info(f"Wrote {output}")


def _run_align(args: argparse.Namespace, config: SyncConfig) -> int:
    caption_text = _read_text(args.captions)
    lyrics_text = _read_text(args.lyrics) if args.lyrics else ""
    cues = parse_and_align(caption_text, lyrics_text)

    if args.format == "project":
        offset = config.global_offset_ms if args.offset is None else args.offset
        snapshot = ProjectSnapshot(
            caption_text=caption_text,
            lyrics_text=lyrics_text,
            global_offset_ms=offset,
            cues=cues,
        )
        content = dump_project(snapshot) + "\n"
    else:
        content = export_cues(cues, args.format)

    _write_output(content, args.output)
    return 0


def _run_at(args: argparse.Namespace, config: SyncConfig) -> int:
    position = parse_time_argument(args.time)
    if position is None:
        raise LyricSyncError(f"Not a time value: {args.time}")

    snapshot = read_project_file(args.project)
    cues = resolve_cues(snapshot)
    offset = snapshot.global_offset_ms if snapshot.global_offset_ms is not None else config.global_offset_ms
    offset += args.offset

    index = find_active_index(cues, position, offset)
    if index is None:
        print(f"{format_timecode(position + offset)}\t-\t(no active line)")
    else:
        print(f"{format_timecode(position + offset)}\t{index}\t{cues[index].text}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    config = SyncConfig()
    if args.config:
        try:
            config = ConfigLoader().load_sync_config(args.config)
        except (ConfigurationError, FileNotFoundError) as e:
            setup_logging(log_level=logging.ERROR, log_dir=None)
            logger.critical(f"Failed to load configuration from {args.config}: {e}")
            return 1

    level_name = (args.log_level or (config.log_level if args.config else "WARNING")).upper()
    log_level = getattr(logging, level_name, logging.WARNING)
    log_dir = args.log_dir or (config.log_dir if args.config else None)
    setup_logging(log_level=log_level, log_dir=log_dir, log_file=config.log_file)

    try:
        if args.command == "align":
            return _run_align(args, config)
        return _run_at(args, config)
    except LyricSyncError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
