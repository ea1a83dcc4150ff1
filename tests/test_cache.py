"""Test processed timeline caching."""

import copy

import pytest

from lyricsync.core.cache import ProcessingCache, process_lyric_data
from lyricsync.core.models import ParsePolicy


class TestProcessingCache:
    """Test single-slot cache behavior."""

    def test_identical_calls_return_same_object(self, raw_payload):
        cache = ProcessingCache()
        first = cache.get_processed(raw_payload, 100, False)
        second = cache.get_processed(raw_payload, 100, False)
        assert second is first
        assert cache.hits == 1
        assert cache.misses == 1

    def test_delay_change_recomputes(self, raw_payload):
        cache = ProcessingCache()
        first = cache.get_processed(raw_payload, 0, False)
        second = cache.get_processed(raw_payload, 200, False)
        assert second is not first
        assert second[0].start_time == first[0].start_time + 200
        assert cache.misses == 2

    def test_merge_change_recomputes(self, raw_payload):
        cache = ProcessingCache()
        words = cache.get_processed(raw_payload, 0, False)
        merged = cache.get_processed(raw_payload, 0, True)
        assert len(words[0].words) == 3
        assert len(merged[0].words) == 1
        assert merged[0].end_time == words[0].end_time

    def test_equal_but_distinct_data_misses(self, raw_payload):
        cache = ProcessingCache()
        first = cache.get_processed(raw_payload, 0, False)
        second = cache.get_processed(copy.deepcopy(raw_payload), 0, False)
        assert second is not first
        assert second == first
        assert cache.misses == 2

    def test_single_slot(self, raw_payload):
        cache = ProcessingCache()
        cache.get_processed(raw_payload, 0, False)
        cache.get_processed(raw_payload, 50, False)
        cache.get_processed(raw_payload, 0, False)
        assert cache.misses == 3

    def test_invalidate_forces_miss(self, raw_payload):
        cache = ProcessingCache()
        first = cache.get_processed(raw_payload, 0, False)
        raw_payload["data"]["sentences"].pop(0)
        assert cache.get_processed(raw_payload, 0, False) is first

        cache.invalidate()
        second = cache.get_processed(raw_payload, 0, False)
        assert len(second) == len(first) - 1

    def test_delay_is_clamped_into_key(self, raw_payload):
        cache = ProcessingCache()
        first = cache.get_processed(raw_payload, 50000, False)
        assert cache.get_processed(raw_payload, 10000, False) is first
        assert first[0].start_time == 1000 + 10000

    def test_status(self, raw_payload):
        cache = ProcessingCache()
        assert cache.status == "none"
        cache.get_processed(raw_payload)
        assert cache.status == "fresh"
        cache.get_processed(raw_payload)
        assert cache.status == "cached"
        cache.invalidate()
        assert cache.status == "none"

    def test_is_valid(self, raw_payload):
        cache = ProcessingCache()
        assert not cache.is_valid(raw_payload, 0, False)
        cache.get_processed(raw_payload, 0, False)
        assert cache.is_valid(raw_payload, 0, False)
        assert not cache.is_valid(raw_payload, 0, True)
        assert not cache.is_valid({}, 0, False)

    def test_empty_result_is_cached(self):
        cache = ProcessingCache()
        raw = {"err": 1}
        first = cache.get_processed(raw)
        assert first == ()
        assert cache.get_processed(raw) is first
        assert cache.status == "cached"

    def test_policy_fixed_at_construction(self):
        raw = [{"words": [{"text": "x", "start": 0}]}]
        assert ProcessingCache(policy=ParsePolicy.STRICT).get_processed(raw) == ()
        lenient = ProcessingCache(policy=ParsePolicy.LENIENT).get_processed(raw)
        assert lenient[0].words[0].end_time == 500

    def test_stats(self, raw_payload):
        cache = ProcessingCache()
        cache.get_processed(raw_payload, 30, True)
        cache.get_processed(raw_payload, 30, True)
        assert cache.stats() == {
            "status": "cached",
            "hits": 1,
            "misses": 1,
            "lines": 2,
            "delay_ms": 30,
            "merge_enabled": True,
        }


def test_process_lyric_data_clean(raw_payload):
    raw_payload["data"]["sentences"].append(
        {"words": [{"startTime": 9000, "endTime": 9500, "data": "solo"}]}
    )
    assert len(process_lyric_data(raw_payload)) == 3
    assert len(process_lyric_data(raw_payload, clean=True)) == 2
