import threading

from models import SearchSettings, SearchState

WORDS = "wuchs\nbild\nform\nzug\npelz\nhaus\nbrot\nkampf"


def texts(results) -> list[str]:
    return [found.text for found in results]


def test_finds_two_word_combinations(make_session) -> None:
    session = make_session()
    session.start_search("wuchs\nbild\nform", SearchSettings(min_len=9, max_len=0, top_n=10))

    results = session.payload("done")
    assert len(results) == 3
    assert "wuchsbild" in texts(results)
    assert "wuchsform" in texts(results)
    assert "wuchsbildform" in texts(results)
    assert session.outcome is SearchState.DONE
    assert session.state is SearchState.IDLE


def test_finds_single_word_solutions(make_session) -> None:
    session = make_session()
    session.start_search("hallo\nwelt\nfoo", SearchSettings(min_len=4))
    assert texts(session.payload("done")) == ["welt"]


def test_min_len_above_any_combination_yields_nothing(make_session) -> None:
    session = make_session()
    session.start_search("wuchs\nbild", SearchSettings(min_len=10))
    assert session.payload("done") == []


def test_done_orders_score_results_when_unbounded(make_session) -> None:
    session = make_session()
    session.start_search(WORDS, SearchSettings(min_len=0, top_n=0))
    scores = [found.score for found in session.payload("done")]
    assert scores == sorted(scores, reverse=True)


def test_top_n_bounds_both_rankings(make_session) -> None:
    session = make_session()
    session.start_search(WORDS, SearchSettings(min_len=0, top_n=2))
    ctx = session.context
    assert len(ctx.top_by_score) == 2
    assert len(ctx.top_by_length) == 2
    assert 2 <= len(session.payload("done")) <= 4
    assert ctx.progress.solutions_found > 4


def test_repeated_search_is_idempotent(make_session) -> None:
    settings = SearchSettings(min_len=6, top_n=5, search_mode="split", start_size=3)
    first = make_session()
    first.start_search(WORDS, settings)
    second = make_session()
    second.start_search(WORDS, settings)
    second.start_search(WORDS, settings)

    expected = [(found.text, found.score) for found in first.payload("done")]
    runs = [event.payload for event in second.events if event.kind == "done"]
    assert len(runs) == 2
    for run in runs:
        assert [(found.text, found.score) for found in run] == expected


def test_emits_throttled_progress_and_solution_events(make_session) -> None:
    session = make_session(step=0.2)
    session.start_search("wuchs\nbild\nform", SearchSettings(min_len=9))

    kinds = session.kinds()
    assert "progress" in kinds
    assert "solution" in kinds
    assert kinds[-1] == "done"
    done_texts = set(texts(session.payload("done")))
    for event in session.events:
        if event.kind == "solution":
            assert set(texts(event.payload)) <= done_texts
            assert len(set(texts(event.payload))) == len(event.payload)


def test_progress_payload_is_a_snapshot(make_session) -> None:
    session = make_session(step=0.2)
    session.start_search("wuchs\nbild\nform", SearchSettings(min_len=0))
    first_progress = next(event.payload for event in session.events if event.kind == "progress")
    assert first_progress is not session.context.progress
    assert first_progress.solutions_found <= session.context.progress.solutions_found


def test_cancel_stops_all_further_events(make_session) -> None:
    session = make_session(step=0.2)

    def cancel_on_progress(event) -> None:
        session.events.append(event)
        if event.kind == "progress":
            session.cancel_search()

    session.emit = cancel_on_progress
    session.start_search(WORDS, SearchSettings(min_len=0, top_n=0))

    assert session.kinds() == ["progress"]
    assert session.outcome is SearchState.CANCELLED
    assert session.state is SearchState.IDLE


def test_cancel_mid_search_reports_no_done(make_session) -> None:
    session = make_session(step=0.2)

    def cancel_on_second_progress(event) -> None:
        session.events.append(event)
        if session.kinds().count("progress") == 2:
            session.cancel_search()

    session.emit = cancel_on_second_progress
    session.start_search(WORDS, SearchSettings(min_len=0, top_n=0))

    assert session.kinds() == ["progress", "progress"]
    assert session.outcome is SearchState.CANCELLED
    assert session.context.progress.solutions_found == 1


def test_cancel_when_idle_is_a_no_op(make_session) -> None:
    session = make_session()
    assert session.cancel_search() is False
    assert session.state is SearchState.IDLE
    assert session.events == []


def test_start_is_ignored_while_searching(make_session) -> None:
    session = make_session(step=0.2)
    nested: list[bool] = []

    def start_again(event) -> None:
        session.events.append(event)
        if event.kind == "progress" and not nested:
            nested.append(session.start_search("haus", SearchSettings(min_len=0)))

    session.emit = start_again
    session.start_search("wuchs\nbild\nform", SearchSettings(min_len=9))

    assert nested == [False]
    assert session.kinds().count("done") == 1
    assert set(texts(session.payload("done"))) == {"wuchsbild", "wuchsform", "wuchsbildform"}


def test_failure_is_reported_once_as_error(make_session) -> None:
    session = make_session()
    session.start_search(None, SearchSettings())

    assert session.kinds() == ["error"]
    assert session.payload("error")["message"]
    assert session.outcome is SearchState.ERRORED
    assert session.state is SearchState.IDLE


def test_session_can_search_again_after_error(make_session) -> None:
    session = make_session()
    session.start_search(None, SearchSettings())
    session.start_search("welt", SearchSettings(min_len=4))
    assert session.kinds() == ["error", "done"]


def test_bad_settings_report_error_and_leave_session_reusable(make_session) -> None:
    session = make_session()
    assert session.start_search("welt", {"minLen": 4}) is True

    assert session.kinds() == ["error"]
    assert "SearchSettings" in session.payload("error")["message"]
    assert session.outcome is SearchState.ERRORED
    assert session.state is SearchState.IDLE

    session.start_search("welt", SearchSettings(min_len=4))
    assert texts(session.payload("done")) == ["welt"]


def test_cancelled_search_stays_cancelled_while_another_start_is_attempted(make_session) -> None:
    session = make_session(step=0.2)
    paused = threading.Event()
    release = threading.Event()

    def pause_on_first_progress(event) -> None:
        session.events.append(event)
        if event.kind == "progress" and not paused.is_set():
            paused.set()
            release.wait(5)

    session.emit = pause_on_first_progress
    worker = threading.Thread(
        target=session.start_search,
        args=(WORDS, SearchSettings(min_len=0, top_n=0)),
        daemon=True,
    )
    worker.start()
    assert paused.wait(5)

    assert session.cancel_search() is True
    assert session.start_search("welt", SearchSettings(min_len=4)) is False
    release.set()
    worker.join(5)

    assert not worker.is_alive()
    assert session.kinds() == ["progress"]
    assert session.outcome is SearchState.CANCELLED
    assert session.state is SearchState.IDLE

    session.start_search("welt", SearchSettings(min_len=4))
    assert texts(session.payload("done")) == ["welt"]
