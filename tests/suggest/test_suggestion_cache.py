"""Tests for the insertion-ordered suggestion cache."""

from __future__ import annotations

import pytest

from pictoboard.suggest.cache import DEFAULT_CACHE_SIZE, SuggestionCache


def test_get_returns_cached_words_and_none_on_miss(words):
    cache = SuggestionCache()
    cache.put("yo", [words["quiero"], words["tengo"]])

    assert [word.id for word in cache.get("yo")] == ["quiero", "tengo"]
    assert cache.get("tu") is None


def test_overflow_evicts_oldest_inserted_entry(words):
    cache = SuggestionCache()
    payload = [words["agua"]]

    for index in range(DEFAULT_CACHE_SIZE + 1):
        cache.put(f"fp{index}", payload)

    assert len(cache) == DEFAULT_CACHE_SIZE
    assert "fp0" not in cache
    assert cache.get("fp0") is None
    assert all(f"fp{index}" in cache for index in range(1, DEFAULT_CACHE_SIZE + 1))


def test_reads_do_not_protect_entries_from_eviction(words):
    cache = SuggestionCache(max_size=2)
    cache.put("a", [words["agua"]])
    cache.put("b", [words["agua"]])

    assert cache.get("a") is not None
    cache.put("c", [words["agua"]])

    assert "a" not in cache
    assert "b" in cache and "c" in cache


def test_reinsert_replaces_value_in_place(words):
    cache = SuggestionCache(max_size=2)
    cache.put("a", [words["agua"]])
    cache.put("b", [words["agua"]])
    cache.put("a", [words["comida"]])
    cache.put("c", [words["agua"]])

    assert len(cache) == 2
    assert "a" not in cache
    assert [word.id for word in cache.get("b")] == ["agua"]


def test_empty_results_are_rejected():
    with pytest.raises(ValueError):
        SuggestionCache().put("yo", [])


def test_returned_list_is_a_copy(words):
    cache = SuggestionCache()
    cache.put("yo", [words["quiero"]])

    cache.get("yo").clear()

    assert [word.id for word in cache.get("yo")] == ["quiero"]
