from gazesmoothkit.filters.samples import RawPoint
from gazesmoothkit.filters.window import WindowBuffer, elapsed, estimate_interval, U64

def fill(buf, stamps):
    flags = [buf.insert(RawPoint(t, 0.0, 0.0)) for t in stamps]
    return flags

def ts(buf):
    return [s.timestamp for s in buf]

def test_fills_after_window_span_and_evicts():
    buf = WindowBuffer(100)
    assert fill(buf, [0, 33, 66, 99, 132]) == [False, False, False, False, True]
    assert ts(buf) == [33, 66, 99, 132]

def test_needs_more_than_three_samples():
    buf = WindowBuffer(100)
    assert not any(fill(buf, [0, 50, 100, 150, 200]))
    assert ts(buf) == [150, 200]

def test_stays_full_after_gap():
    buf = WindowBuffer(100)
    fill(buf, [0, 33, 66, 99, 132])
    assert buf.insert(RawPoint(1000, 0.0, 0.0))
    assert ts(buf) == [1000]
    buf.clear()
    assert not buf.full and len(buf) == 0

def test_newest_always_kept():
    buf = WindowBuffer(0)
    fill(buf, [0, 0, 5])
    assert ts(buf) == [5]

def test_non_monotonic_stamp_wraps_around():
    assert elapsed(40, 50) == U64 - 10
    buf = WindowBuffer(100)
    # a stamp older than the head looks like a huge span: buffer goes full and drops everything else
    assert fill(buf, [50, 60, 70, 40]) == [False, False, False, True]
    assert ts(buf) == [40]

def test_estimate_interval():
    buf = WindowBuffer(10**6)
    assert estimate_interval(buf, RawPoint(0, 0, 0)) == 0
    fill(buf, [0])
    assert estimate_interval(buf, RawPoint(0, 0, 0)) == 0
    fill(buf, [33, 66, 99])
    assert estimate_interval(buf, buf.samples[-1]) == 33

def test_estimate_interval_truncates():
    buf = WindowBuffer(10**6)
    fill(buf, [0, 10, 20])
    assert estimate_interval(buf, RawPoint(25, 0, 0)) == 12

def test_estimate_interval_narrows_to_int32():
    buf = WindowBuffer(10**12)
    fill(buf, [0, 1])
    assert estimate_interval(buf, RawPoint(2**32 + 100, 0, 0)) == 100
    buf = WindowBuffer(10**12)
    fill(buf, [50, 60, 70])
    # negative span: truncated toward zero, then read as unsigned
    assert estimate_interval(buf, RawPoint(40, 0, 0)) == U64 - 5
