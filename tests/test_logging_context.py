"""Tests for scoped logging context."""

import pytest

from nepa_watch.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    clear_log_context()
    yield
    clear_log_context()


def test_context_starts_empty():
    assert get_log_context() == {}


def test_push_and_pop_restore_previous_layer():
    run_token = push_log_context(run_id="4f2a")
    term_token = push_log_context(term="solar NV", label="solar")
    assert get_log_context() == {"run_id": "4f2a", "term": "solar NV", "label": "solar"}

    pop_log_context(term_token)
    assert get_log_context() == {"run_id": "4f2a"}

    pop_log_context(run_token)
    assert get_log_context() == {}


def test_inner_push_overrides_same_key():
    outer = push_log_context(term="solar NV")
    inner = push_log_context(term="solar UT")
    assert get_log_context() == {"term": "solar UT"}

    pop_log_context(inner)
    assert get_log_context() == {"term": "solar NV"}
    pop_log_context(outer)


def test_context_manager_nests_per_term():
    with log_context(run_id="4f2a"):
        for term in ("solar NV", "solar UT"):
            with log_context(term=term):
                assert get_log_context() == {"run_id": "4f2a", "term": term}
            assert get_log_context() == {"run_id": "4f2a"}
    assert get_log_context() == {}


def test_context_manager_restores_after_exception():
    with pytest.raises(RuntimeError):
        with log_context(run_id="4f2a"):
            raise RuntimeError("boom")

    assert get_log_context() == {}


def test_get_log_context_returns_copy():
    token = push_log_context(run_id="4f2a")

    snapshot = get_log_context()
    snapshot["term"] = "mutated"

    assert get_log_context() == {"run_id": "4f2a"}
    pop_log_context(token)


def test_clear_drops_everything():
    push_log_context(run_id="4f2a", term="solar")
    clear_log_context()
    assert get_log_context() == {}
