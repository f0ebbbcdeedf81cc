import pytest

from snap.imaging.metrics import _Metrics


def test_transform_counts_success_and_timing():
    m = _Metrics()

    with m.transform("resize") as outcome:
        outcome.ok = True

    snap = m.snapshot()
    assert snap["counters"] == {"resize.success": 1}
    assert len(snap["timings"]["resize.duration"]) == 1
    assert snap["timings"]["resize.duration"][0] >= 0


def test_transform_exception_counts_failure():
    m = _Metrics()

    with pytest.raises(RuntimeError):
        with m.transform("mockup") as outcome:
            raise RuntimeError("boom")

    assert outcome.ok is False
    assert m.snapshot()["counters"] == {"mockup.failure": 1}


def test_snapshot_is_a_copy_and_reset_clears():
    m = _Metrics()
    m.inc("a", 2)
    m.add_timing("t", 0.5)

    snap = m.snapshot()
    m.inc("a")
    assert snap["counters"]["a"] == 2

    m.reset()
    assert m.snapshot() == {"counters": {}, "timings": {}}
