import streamlit as st

from founderhq.utils.caching import cached, clear_all_caches, memoize_by_identity


def test_memoize_reuses_result_for_same_list():
    calls = []

    @memoize_by_identity
    def total(items, scale=1):
        calls.append(1)
        return sum(items) * scale

    items = [1, 2, 3]
    assert total(items) == 6
    assert total(items) == 6
    assert len(calls) == 1

    assert total([1, 2, 3]) == 6
    assert len(calls) == 2

    assert total(items, scale=2) == 12
    assert len(calls) == 3


def test_memoize_compares_scalars_by_value():
    calls = []

    @memoize_by_identity
    def echo(items, n):
        calls.append(n)
        return n

    items = []
    echo(items, 10 ** 6)
    echo(items, int("1000000"))
    assert calls == [10 ** 6]

    echo.cache_clear()
    echo(items, 10 ** 6)
    assert len(calls) == 2


def test_cached_keys_on_arguments_until_cleared():
    calls = []

    @cached(ttl=60)
    def load(workspace_id):
        calls.append(workspace_id)
        return {"workspace": workspace_id}

    assert load("ws-1") == {"workspace": "ws-1"}
    assert load("ws-1") == {"workspace": "ws-1"}
    assert load("ws-2") == {"workspace": "ws-2"}
    assert calls == ["ws-1", "ws-2"]

    clear_all_caches()
    load("ws-1")
    assert calls == ["ws-1", "ws-2", "ws-1"]


def test_clear_all_caches_clears_cache_data(monkeypatch):
    cleared = []
    monkeypatch.setattr(st.cache_data, "clear", lambda: cleared.append(True))
    clear_all_caches()
    assert cleared == [True]
