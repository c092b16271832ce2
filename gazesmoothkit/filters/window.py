from __future__ import annotations
from collections import deque
from typing import Deque, Generic, Iterator, TypeVar
from .samples import RawSample

T = TypeVar("T", bound=RawSample)

U64 = 1 << 64
MIN_SAMPLES = 4  # buffer counts as full only with more than 3 samples

def elapsed(newer: int, older: int) -> int:
    """Unsigned 64-bit difference; a newer stamp older than `older` wraps around."""
    return (newer - older) % U64

def _to_int32(v: int) -> int:
    v &= 0xFFFFFFFF
    return v - (1 << 32) if v & 0x80000000 else v

class WindowBuffer(Generic[T]):
    """
    Keeps the samples whose timestamps fall within the last `time_window` ms.
    Oldest first; the newest sample always stays.
    """
    def __init__(self, time_window: int = 100):
        self.time_window = time_window
        self.samples: Deque[T] = deque()
        self.full = False

    def __len__(self) -> int: return len(self.samples)
    def __iter__(self) -> Iterator[T]: return iter(self.samples)

    @property
    def head(self) -> T:
        return self.samples[0]

    def insert(self, sample: T) -> bool:
        self.samples.append(sample)
        first_ts = self.head.timestamp
        if not self.full:
            self.full = elapsed(sample.timestamp, first_ts) >= self.time_window and len(self.samples) >= MIN_SAMPLES
        while len(self.samples) > 1 and elapsed(sample.timestamp, self.head.timestamp) >= self.time_window:
            self.samples.popleft()
        return self.full

    def clear(self):
        self.samples.clear()
        self.full = False

def estimate_interval(buffer: WindowBuffer, sample: RawSample) -> int:
    """
    Average sampling interval in ms between the buffer head and `sample`.
    The span is narrowed to int32 and divided with truncation, the result read back as uint64.
    """
    n = len(buffer)
    if n < 2: return 0
    duration = _to_int32(elapsed(sample.timestamp, buffer.head.timestamp))
    q = abs(duration) // (n - 1)
    return (q if duration >= 0 else -q) % U64
