from __future__ import annotations
from enum import Enum
from typing import Iterable
import numpy as np
from ..filters.samples import RawSample
from ..filters.window import elapsed

class GazeState(str, Enum):
    UNKNOWN = "unknown"     # not enough spread in the window to decide
    FIXATION = "fixation"
    SACCADE = "saccade"

def classify(samples: Iterable[RawSample], time_window: int, saccade_threshold: float) -> GazeState:
    """
    Splits the window at half its length (relative to the oldest sample) and compares
    the centroids of both halves: farther apart than `saccade_threshold` means saccade.
    """
    samples = list(samples)
    if not samples: return GazeState.UNKNOWN
    oldest = samples[0].timestamp
    half = time_window // 2
    xy = np.array([(s.x, s.y) for s in samples], dtype=float)
    newer = np.array([elapsed(s.timestamp, oldest) > half for s in samples], dtype=bool)
    if newer.all() or not newer.any():
        return GazeState.UNKNOWN
    dx, dy = xy[newer].mean(axis=0) - xy[~newer].mean(axis=0)
    dist = float(np.hypot(dx, dy))
    return GazeState.SACCADE if dist > saccade_threshold else GazeState.FIXATION
