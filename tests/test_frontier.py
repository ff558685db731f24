import pytest

from sitecrawl.frontier import Frontier


ORIGIN = "https://example.test"
SEED = f"{ORIGIN}/"


def test_new_frontier_holds_seed():
    frontier = Frontier(SEED)
    assert len(frontier) == 1
    assert frontier.peek() == SEED
    assert frontier.visited == []
    assert frontier.unprocessable == []


def test_peek_on_empty_frontier_raises():
    frontier = Frontier(SEED)
    frontier.record_unprocessable(SEED)
    assert frontier.empty()
    with pytest.raises(IndexError):
        frontier.peek()


def test_advance_replaces_head_with_admitted_links():
    frontier = Frontier(SEED)
    frontier.record_visit(SEED)

    results = frontier.advance(
        [SEED, f"{ORIGIN}/a", f"{ORIGIN}/a", f"{ORIGIN}/private/x"],
        seed_origin=ORIGIN,
        disallowed_paths=["/private/"],
    )

    assert frontier.queue == [f"{ORIGIN}/a"]
    assert [r.admitted for r in results] == [False, True, False, False]
    assert frontier.snapshot() == {
        "queue_size": 1,
        "visited": 1,
        "unprocessable": 0,
        "excluded": 2,
        "enqueued": 2,
        "dequeued": 1,
    }


def test_unprocessable_urls_are_not_readmitted():
    frontier = Frontier(SEED)
    frontier.record_visit(SEED)
    frontier.advance([f"{ORIGIN}/bad", f"{ORIGIN}/good"], seed_origin=ORIGIN, disallowed_paths=[])
    frontier.record_unprocessable(f"{ORIGIN}/bad")
    frontier.record_visit(f"{ORIGIN}/good")

    frontier.advance([f"{ORIGIN}/bad"], seed_origin=ORIGIN, disallowed_paths=[])

    assert frontier.empty()
    assert frontier.unprocessable == [f"{ORIGIN}/bad"]
    assert frontier.visited == [SEED, f"{ORIGIN}/good"]


def test_record_visit_is_idempotent():
    frontier = Frontier(SEED)
    frontier.record_visit(SEED)
    frontier.record_visit(SEED)
    assert frontier.visited == [SEED]
