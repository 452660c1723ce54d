"""Search session controller: start/cancel commands and outbound events."""

from __future__ import annotations

import logging
import threading
import time

from models import SearchEvent, SearchSettings, SearchState
from solver import Clock, EventCallback, SearchContext, run_search
from utils import DEFAULT_LANGUAGE, build_entries

logger = logging.getLogger(__name__)


class SearchSession:
    """
    Run one isogram search at a time and report it through ``emit``.

    Events are delivered synchronously in the order they are computed. Once a
    search is cancelled, nothing more is emitted for it, and a new search can
    only start after the cancelled one has returned.
    """

    def __init__(self, emit: EventCallback, clock: Clock = time.monotonic) -> None:
        self.emit = emit
        self.clock = clock
        self.state = SearchState.IDLE
        self.outcome: SearchState | None = None
        self.context: SearchContext | None = None
        self._gate = threading.Lock()
        self._running = False
        self._cancelled = threading.Event()

    @property
    def is_searching(self) -> bool:
        return self.state is SearchState.SEARCHING

    def start_search(
        self,
        word_list: str,
        settings: SearchSettings,
        language: str = DEFAULT_LANGUAGE,
    ) -> bool:
        """Run a full search; returns False without doing anything while one is still running."""
        with self._gate:
            if self._running:
                logger.info("Ignoring start request, a search is still running")
                return False
            self._running = True
            cancelled = threading.Event()
            self._cancelled = cancelled
            self.state = SearchState.SEARCHING
            self.outcome = None
            self.context = None

        def publish(event: SearchEvent) -> None:
            if not cancelled.is_set():
                self.emit(event)

        try:
            if not isinstance(settings, SearchSettings):
                raise TypeError(f"settings must be SearchSettings, got {type(settings).__name__}")
            ctx = SearchContext(settings, publish, cancelled.is_set, self.clock)
            self.context = ctx
            entries = build_entries(word_list, language)
            logger.info("Starting %s search over %d entries", settings.search_mode, len(entries))
            run_search(ctx, entries)

            if cancelled.is_set():
                self.outcome = SearchState.CANCELLED
                logger.info("Search cancelled after %d solutions", ctx.progress.solutions_found)
            else:
                results = ctx.final_results()
                publish(SearchEvent("done", results))
                self.outcome = SearchState.DONE
                logger.info(
                    "Search finished: %d solutions found, %d words scanned, %d reported",
                    ctx.progress.solutions_found,
                    ctx.progress.words_scanned,
                    len(results),
                )
        except Exception as exc:
            logger.exception("Search failed")
            self.outcome = SearchState.ERRORED
            publish(SearchEvent("error", {"message": str(exc) or type(exc).__name__}))
        finally:
            with self._gate:
                self.state = SearchState.IDLE
                self._running = False
        return True

    def cancel_search(self) -> bool:
        """Ask the running search to stop at its next checkpoint."""
        with self._gate:
            if not self.is_searching:
                return False
            self._cancelled.set()
            self.state = SearchState.CANCELLED
        logger.info("Cancellation requested")
        return True
