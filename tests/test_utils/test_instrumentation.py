"""
Unit tests for stage instrumentation.
"""

import tracemalloc

import pytest
from movie_index.utils.instrumentation import measure_stage


def test_measure_stage_records_timing():
    """Test elapsed time and item count are recorded."""
    with measure_stage("ratings") as timing:
        timing.item_count = 3

    assert timing.stage == "ratings"
    assert timing.elapsed_seconds >= 0.0
    assert timing.item_count == 3
    assert timing.peak_memory_bytes is None


def test_measure_stage_tracks_memory():
    """Test peak memory is recorded and tracing is stopped afterwards."""
    assert not tracemalloc.is_tracing()

    with measure_stage("join", track_memory=True) as timing:
        data = [str(i) * 10 for i in range(10000)]
        timing.item_count = len(data)

    assert timing.peak_memory_bytes is not None
    assert timing.peak_memory_bytes > 0
    assert not tracemalloc.is_tracing()


def test_measure_stage_leaves_existing_tracing_on():
    """Test an outer tracemalloc session is not stopped."""
    tracemalloc.start()
    try:
        with measure_stage("sort", track_memory=True) as timing:
            pass
        assert tracemalloc.is_tracing()
        assert timing.peak_memory_bytes is not None
    finally:
        tracemalloc.stop()


def test_measure_stage_on_error():
    """Test the timing is completed even when the stage fails."""
    with pytest.raises(RuntimeError):
        with measure_stage("collect") as timing:
            raise RuntimeError("boom")

    assert timing.elapsed_seconds >= 0.0


# Run tests if executed directly
if __name__ == "__main__":
    pytest.main([__file__, "-v"])
