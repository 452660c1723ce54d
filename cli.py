"""
Command line front end for the isogram finder.

Reads a wordlist (one word per line, or the bundled list for a language),
runs one search and prints the ranked combinations. Ctrl-C stops the search
and prints what was found so far.
"""

from __future__ import annotations

import argparse
import logging
import sys

from models import SEARCH_MODES, SearchEvent, SearchSettings, Solution
from session import SearchSession
from solver import sort_results
from utils import (
    DEFAULT_LANGUAGE,
    LANGUAGE_LETTERS,
    default_wordlist_path,
    load_wordlist,
    prepare_wordlist,
    setup_logging,
)


def build_parser() -> argparse.ArgumentParser:
    defaults = SearchSettings()
    ap = argparse.ArgumentParser(description="Find combinations of words that share no letter.")
    ap.add_argument("wordlist", nargs="?", help="Wordlist file; defaults to the bundled list for --language.")
    ap.add_argument("--language", choices=sorted(LANGUAGE_LETTERS), default=DEFAULT_LANGUAGE)
    ap.add_argument("--min-len", type=int, default=defaults.min_len)
    ap.add_argument("--max-len", type=int, default=defaults.max_len, help="0 for unlimited.")
    ap.add_argument("--top", type=int, default=defaults.top_n, help="Results kept per ranking, 0 for all.")
    ap.add_argument("--mode", choices=SEARCH_MODES, default=defaults.search_mode)
    ap.add_argument("--start-size", type=int, default=defaults.start_size, help="Anchor words in split mode.")
    ap.add_argument("--top-percent", type=int, default=defaults.high_low_top_percent, help="High-low mode.")
    ap.add_argument("--bottom-percent", type=int, default=defaults.high_low_bottom_percent, help="High-low mode.")
    ap.add_argument("--sort", choices=["score", "length"], default="score")
    ap.add_argument("--prepare", action="store_true", help="Print the extracted isogram wordlist and exit.")
    ap.add_argument("--progress", action="store_true", help="Print progress to stderr.")
    ap.add_argument("--verbose", action="store_true", help="Log to stderr instead of the log file.")
    return ap


def format_solution(rank: int, solution: Solution) -> str:
    return f"#{rank:<3} {solution.text:<30} len={solution.length:<3} score={solution.score:7.2f}  {solution.display}"


def _print_progress(event: SearchEvent) -> None:
    progress = event.payload
    best = progress.best_score.text if progress.best_score else "-"
    longest = progress.longest.text if progress.longest else "-"
    print(
        f"found={progress.solutions_found} scanned={progress.words_scanned} best={best} longest={longest}",
        file=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    else:
        setup_logging()

    try:
        settings = SearchSettings(
            min_len=args.min_len,
            max_len=args.max_len,
            top_n=args.top,
            search_mode=args.mode,
            start_size=args.start_size,
            high_low_top_percent=args.top_percent,
            high_low_bottom_percent=args.bottom_percent,
        )
        path = args.wordlist or default_wordlist_path(args.language)
        text = load_wordlist(path)
    except (ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.prepare:
        for word in prepare_wordlist(text, args.language):
            print(word)
        return 0

    outcome: dict[str, object] = {}

    def on_event(event: SearchEvent) -> None:
        if event.kind == "progress" and args.progress:
            _print_progress(event)
        elif event.kind in ("done", "error"):
            outcome[event.kind] = event.payload

    session = SearchSession(on_event)
    try:
        session.start_search(text, settings, language=args.language)
    except KeyboardInterrupt:
        print("Search interrupted, showing partial results.", file=sys.stderr)
        if session.context is not None:
            outcome["done"] = session.context.merged_results()

    if "error" in outcome:
        print(f"error: {outcome['error']['message']}", file=sys.stderr)
        return 1

    results = sort_results(outcome.get("done", []), by=args.sort, top_n=settings.top_n)
    if not results:
        print("No combinations found.")
        return 0
    for rank, solution in enumerate(results, start=1):
        print(format_solution(rank, solution))
    return 0


if __name__ == "__main__":
    sys.exit(main())
