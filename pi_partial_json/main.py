"""
Main entry point for the pi-partial-json CLI.
"""

import argparse
import logging
import os
import sys
from typing import Optional

from pi_partial_json import __version__
from pi_partial_json.errors import PartialJSONError
from pi_partial_json.options import TypeOptions
from pi_partial_json.parser import parse_malformed_string
from pi_partial_json.settings import SettingsManager
from pi_partial_json.stream import iter_completions, split_chunks

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Log to stderr; LOG_LEVEL overrides the WARNING default."""
    fmt = "%(asctime)s %(name)s: %(levelname)s: %(message)s"
    level = logging.WARNING
    log_level_name = (os.environ.get("LOG_LEVEL") or "").upper()
    if log_level_name:
        level = getattr(logging, log_level_name, level) or level
    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pi-partial-json",
        description="Complete a truncated JSON fragment into valid JSON.",
    )
    parser.add_argument("text", nargs="?", help="JSON fragment (default: read stdin)")
    parser.add_argument(
        "--allow",
        help="Comma-separated value kinds that may be completed, e.g. str,num,arr,obj "
        "(groups: special, atom, collection, all)",
    )
    parser.add_argument("--format", action="store_true", default=None, help="Pretty-print the result")
    parser.add_argument("--indent", type=int, help="Indentation for --format")
    parser.add_argument(
        "--stream",
        action="store_true",
        help="Replay the input chunk by chunk and print every intermediate completion",
    )
    parser.add_argument("--chunk-size", type=int, help="Characters per chunk for --stream (default: lines)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_stream(text: str, allowed: TypeOptions, format: bool, indent: int, chunk_size: Optional[int]) -> int:
    """Print one line per chunk; exit status reflects the final chunk."""
    ok = False
    for update in iter_completions(split_chunks(text, chunk_size), allowed, format, indent):
        print(f"received : {update.chunk.rstrip()}")
        if update.ok:
            print(f"parsed json {update.completed}")
        else:
            print(f"err {update.error}")
        print("-" * 14)
        ok = update.ok
    return 0 if ok else 1


def main(args: Optional[list] = None) -> int:
    """
    Main entry point.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    configure_logging()
    parser = build_parser()
    opts = parser.parse_args(args)

    settings = SettingsManager().load()
    try:
        allowed = TypeOptions.from_names(opts.allow.split(",")) if opts.allow else settings.allowed()
    except ValueError as e:
        parser.error(str(e))

    format = settings.completion.format if opts.format is None else opts.format
    indent = settings.completion.indent if opts.indent is None else opts.indent
    if opts.chunk_size is not None and opts.chunk_size <= 0:
        parser.error("--chunk-size must be positive")

    text = opts.text if opts.text is not None else sys.stdin.read()

    if opts.stream:
        return run_stream(text, allowed, format, indent, opts.chunk_size)

    try:
        print(parse_malformed_string(text, allowed, format, indent))
    except PartialJSONError as e:
        logger.debug("Completion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
