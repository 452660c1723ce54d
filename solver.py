"""Backtracking isogram combination search, result trackers, and search modes."""

from __future__ import annotations

import math
from typing import Callable, Iterable

from models import Entry, ProgressState, SearchEvent, SearchSettings, Solution
from scoring import compute_score

EventCallback = Callable[[SearchEvent], None]
Clock = Callable[[], float]
SortKey = Callable[[Solution], tuple]

# Throttle windows, in seconds.
PROGRESS_INTERVAL = 0.1
FIRST_SOLUTION_DELAY = 0.5
SOLUTION_INTERVAL = 3.0

MIN_HIGH_LOW_BOTTOM_LEN = 4


def by_score(solution: Solution) -> tuple:
    return (-solution.score,)


def by_length(solution: Solution) -> tuple:
    return (-solution.length, -solution.score)


class TopTracker:
    """Keep the best ``limit`` solutions under ``sort_key`` (all of them when ``limit`` is 0)."""

    def __init__(self, sort_key: SortKey, limit: int) -> None:
        self.sort_key = sort_key
        self.limit = limit
        self.items: list[Solution] = []

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def offer(self, candidate: Solution) -> bool:
        """Insert ``candidate`` if it qualifies; returns whether it was kept."""
        if self.limit == 0:
            self.items.append(candidate)
            return True
        if len(self.items) < self.limit or self.sort_key(candidate) < self.sort_key(self.items[-1]):
            self.items.append(candidate)
            self.items.sort(key=self.sort_key)
            if len(self.items) > self.limit:
                return self.items.pop() is not candidate
            return True
        return False

    def finalize(self) -> list[Solution]:
        self.items.sort(key=self.sort_key)
        return self.items


def merge_solutions(*groups: Iterable[Solution]) -> list[Solution]:
    """Union of solution groups keyed by concatenated text."""
    combined: dict[str, Solution] = {}
    for group in groups:
        for solution in group:
            combined[solution.text] = solution
    return list(combined.values())


def sort_results(results: Iterable[Solution], by: str = "score", top_n: int = 0) -> list[Solution]:
    """Order results for display by ``"score"`` or ``"length"`` and cut to ``top_n``."""
    if by not in ("score", "length"):
        raise ValueError(f"Unknown sort order: {by!r}")
    ordered = sorted(results, key=by_score if by == "score" else by_length)
    return ordered[:top_n] if top_n > 0 else ordered


class SearchContext:
    """Mutable state of one search invocation, shared by the whole recursion."""

    def __init__(
        self,
        settings: SearchSettings,
        emit: EventCallback,
        should_stop: Callable[[], bool],
        clock: Clock,
    ) -> None:
        self.settings = settings
        self.emit = emit
        self.should_stop = should_stop
        self.clock = clock
        self.top_by_score = TopTracker(by_score, settings.top_n)
        self.top_by_length = TopTracker(by_length, settings.top_n)
        self.progress = ProgressState()
        now = clock()
        self.last_progress_at = now
        self.last_solution_at = now
        self.sent_first_solutions = False

    def merged_results(self) -> list[Solution]:
        return merge_solutions(self.top_by_score, self.top_by_length)

    def final_results(self) -> list[Solution]:
        # Unbounded trackers are appended to without sorting.
        if self.settings.top_n == 0:
            self.top_by_score.finalize()
        return self.merged_results()

    def tick(self) -> None:
        """Emit progress and solution batches when their throttle windows have passed."""
        now = self.clock()
        if now - self.last_progress_at > PROGRESS_INTERVAL:
            self.emit(SearchEvent("progress", self.progress.snapshot()))
            self.last_progress_at = now

        interval = SOLUTION_INTERVAL if self.sent_first_solutions else FIRST_SOLUTION_DELAY
        if now - self.last_solution_at > interval:
            batch = self.merged_results()
            if batch:
                self.emit(SearchEvent("solution", batch))
                self.sent_first_solutions = True
            self.last_solution_at = now

    def record(self, combo: list[Entry], length: int) -> Solution:
        """Turn the current combination into a solution and update trackers."""
        candidate = Solution(words=tuple(combo), length=length, score=compute_score(combo))
        progress = self.progress
        progress.solutions_found += 1
        if progress.longest is None or candidate.length > progress.longest.length:
            progress.longest = candidate
        if progress.best_score is None or candidate.score > progress.best_score.score:
            progress.best_score = candidate
        self.top_by_score.offer(candidate)
        self.top_by_length.offer(candidate)
        return candidate


def backtrack(
    ctx: SearchContext,
    entries: list[Entry],
    start: int,
    combo: list[Entry],
    used: set[str],
    length: int,
) -> None:
    """Depth-first enumeration of character-disjoint combinations from ``entries[start:]``."""
    if ctx.should_stop():
        return
    ctx.tick()

    settings = ctx.settings
    if combo and length >= settings.min_len and (settings.max_len == 0 or length <= settings.max_len):
        ctx.record(combo, length)

    if settings.max_len > 0 and length >= settings.max_len:
        return

    for idx in range(start, len(entries)):
        if ctx.should_stop():
            return
        entry = entries[idx]
        ctx.progress.words_scanned += 1
        if not used.isdisjoint(entry.chars):
            continue

        combo.append(entry)
        used |= entry.chars
        backtrack(ctx, entries, idx + 1, combo, used, length + entry.length)
        used -= entry.chars
        combo.pop()


def run_classic(ctx: SearchContext, entries: list[Entry]) -> None:
    backtrack(ctx, entries, 0, [], set(), 0)


def run_split(ctx: SearchContext, entries: list[Entry]) -> None:
    """Anchor each of the ``start_size`` longest entries and search only the entries after it."""
    anchors = entries[:min(ctx.settings.start_size, len(entries))]
    for idx, anchor in enumerate(anchors):
        if ctx.should_stop():
            break
        backtrack(ctx, entries, idx + 1, [anchor], set(anchor.chars), anchor.length)


def high_low_entries(entries: list[Entry], top_percent: int, bottom_percent: int) -> list[Entry]:
    """Longest ``top_percent`` plus shortest ``bottom_percent`` (of at least 4 letters), longest first."""
    top_count = math.floor(len(entries) * top_percent / 100)
    bottom_count = math.floor(len(entries) * bottom_percent / 100)

    top = entries[:top_count]
    bottom = [entry for entry in reversed(entries) if entry.length >= MIN_HIGH_LOW_BOTTOM_LEN][:bottom_count]

    unique: dict[str, Entry] = {}
    for entry in top + bottom:
        unique.setdefault(entry.word, entry)
    return sorted(unique.values(), key=lambda entry: entry.length, reverse=True)


def run_high_low(ctx: SearchContext, entries: list[Entry]) -> None:
    settings = ctx.settings
    reduced = high_low_entries(entries, settings.high_low_top_percent, settings.high_low_bottom_percent)
    backtrack(ctx, reduced, 0, [], set(), 0)


MODE_RUNNERS: dict[str, Callable[[SearchContext, list[Entry]], None]] = {
    "classic": run_classic,
    "split": run_split,
    "high-low": run_high_low,
}


def run_search(ctx: SearchContext, entries: list[Entry]) -> None:
    """Run the search strategy selected in ``ctx.settings``."""
    MODE_RUNNERS[ctx.settings.search_mode](ctx, entries)
