#!/usr/bin/env python3
"""
CLI tool for self-play records and opening book generation.

Usage:
    python tools/selfplay.py play \\
        --games 200 \\
        --output data/record.db \\
        --depth 4 \\
        --workers 4

    python tools/selfplay.py build-book \\
        data/record.db \\
        --output data/opening.db \\
        --max-depth 20
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from othello_engine.book.builder import build_book
from othello_engine.config import EngineConfig, MatchConfig
from othello_engine.selfplay.matcher import default_factory, run_matches
from othello_engine.selfplay.records import read_records


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def play_games(args):
    """Run self-play and append game records."""
    book_path = None if args.no_book else Path(args.book)

    engine_config = EngineConfig(
        search_depth=args.depth,
        ending_turns=args.ending_turns,
        ending_opt=not args.no_ending_opt,
        book_path=book_path,
    )
    match_config = MatchConfig(
        games=args.games,
        output_path=Path(args.output),
        workers=args.workers,
        seed=args.seed,
    )

    written = run_matches(match_config, default_factory(engine_config))
    print(f"\n{written} games appended to {match_config.output_path}")


def build(args):
    """Build an opening book from a record file."""
    records_path = Path(args.records)
    if not records_path.exists():
        print(f"Error: Record file not found: {records_path}")
        sys.exit(1)

    output_path = Path(args.output)
    if output_path.exists() and not args.overwrite:
        print(f"Error: Output file already exists: {output_path}")
        print("Use --overwrite to replace it")
        sys.exit(1)

    games = read_records(records_path)
    data = build_book(games, max_depth=args.max_depth, min_games=args.min_games)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(data)
    print(f"\nBook written: {output_path} ({len(data)} bytes)")


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Play self-play games or build an opening book",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play self-play games")

    play_parser.add_argument(
        "--games",
        type=int,
        default=100,
        help="Number of games to play",
    )
    play_parser.add_argument(
        "--output",
        default="data/record.db",
        help="Record file to append to",
    )
    play_parser.add_argument(
        "--depth",
        type=int,
        default=4,
        help="Alpha-beta search depth",
    )
    play_parser.add_argument(
        "--ending-turns",
        type=int,
        default=10,
        help="Empty cells at which the exact solver takes over",
    )
    play_parser.add_argument(
        "--no-ending-opt",
        action="store_true",
        help="Keep every opponent reply in the endgame tree",
    )
    play_parser.add_argument(
        "--book",
        default="data/opening.db",
        help="Opening book file",
    )
    play_parser.add_argument(
        "--no-book",
        action="store_true",
        help="Play without an opening book",
    )
    play_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Games played concurrently",
    )
    play_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Base random seed (default: random)",
    )
    play_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    book_parser = subparsers.add_parser("build-book", help="Build an opening book from records")

    book_parser.add_argument(
        "records",
        help="Record file produced by 'play'",
    )
    book_parser.add_argument(
        "--output",
        default="data/opening.db",
        help="Book file to write",
    )
    book_parser.add_argument(
        "--max-depth",
        type=int,
        default=20,
        help="Moves per game kept after the first one",
    )
    book_parser.add_argument(
        "--min-games",
        type=int,
        default=1,
        help="Drop lines seen in fewer games",
    )
    book_parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite existing output file",
    )
    book_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    setup_logging(verbose=args.verbose)

    try:
        if args.command == "play":
            play_games(args)
        elif args.command == "build-book":
            build(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\n\nError: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
