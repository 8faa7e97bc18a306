"""Command-line access to the word dictionary.

Usage:
    python -m wordtris check 사과 바나나
    python -m wordtris suggest 사
    python -m wordtris suggest '*과'
    python -m wordtris stats --load-all
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from wordtris.config import EngineConfig
from wordtris.config import config as default_config
from wordtris.dictionary import DictionaryService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wordtris", description=__doc__.splitlines()[0])
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help=f"corpus directory (default: {default_config.data_dir})",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="more logging")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="check whether words are in the dictionary")
    check.add_argument("words", nargs="+")

    suggest = sub.add_parser("suggest", help="list words by prefix, or by '*fragment'")
    suggest.add_argument("pattern")
    suggest.add_argument("-n", "--limit", type=int, default=None)

    stats = sub.add_parser("stats", help="show dictionary statistics")
    stats.add_argument("--load-all", action="store_true", help="load every shard first")
    return parser


async def run(args: argparse.Namespace, cfg: EngineConfig) -> int:
    """Execute one CLI command.  Returns the process exit code."""
    dictionary = DictionaryService(cfg)
    dictionary.load_seed()

    if args.command == "check":
        results = [(word, await dictionary.is_valid(word)) for word in args.words]
        for word, valid in results:
            print(f"{word}\t{'valid' if valid else 'invalid'}")
        return 0 if all(valid for _, valid in results) else 1

    if args.command == "suggest":
        for word in await dictionary.suggest_words(args.pattern, args.limit):
            print(word)
        return 0

    if args.load_all:
        dictionary.start_background_loading()
        await dictionary.wait_until_loaded()
    for key, value in dictionary.stats().items():
        print(f"{key}: {value}")
    return 0


def main() -> None:
    """Main entry point for the wordtris command."""
    args = build_parser().parse_args()
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cfg = default_config
    if args.data_dir is not None:
        cfg = default_config.model_copy(update={"data_dir": args.data_dir})
    sys.exit(asyncio.run(run(args, cfg)))


if __name__ == "__main__":
    main()
