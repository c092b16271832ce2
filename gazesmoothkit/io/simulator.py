from __future__ import annotations
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple
import numpy as np
from ..runtime.events import Device, GazeMessage, Sample, State, StateFlag

SAMPLING_INTERVAL_MS = 33

def simulate(positions: Iterable[Tuple[float,float]], interval_ms:int=SAMPLING_INTERVAL_MS,
             pupil:float=6.0, device:str="Simulator") -> Iterator[GazeMessage]:
    """
    Emits the message sequence of a tracking session: device name, ready state,
    tracking on, one sample per position, tracking off.
    """
    ready = StateFlag.CONNECTED | StateFlag.CALIBRATED
    yield Device(name=device)
    yield State(value=int(ready))
    yield State(value=int(ready | StateFlag.TRACKING))
    ts = 0
    for x, y in positions:
        ts += interval_ms
        yield Sample(ts=ts, x=float(x), y=float(y), p=pupil)
    yield State(value=int(ready))

def scripted_path(targets: Sequence[Tuple[float,float]], samples_per_target:int=20,
                  noise:float=5.0, seed:Optional[int]=None) -> List[Tuple[float,float]]:
    """Fixations on each target with gaussian jitter; jumps between targets are single-sample saccades."""
    rng = np.random.default_rng(seed)
    out = []
    for tx, ty in targets:
        jitter = rng.normal(0.0, noise, size=(samples_per_target, 2)) if noise > 0 else np.zeros((samples_per_target, 2))
        out.extend((float(tx + dx), float(ty + dy)) for dx, dy in jitter)
    return out

def random_targets(n:int, screen=(1280,720), margin:int=50, seed:Optional[int]=None) -> List[Tuple[float,float]]:
    rng = np.random.default_rng(seed)
    w, h = screen
    xs = rng.uniform(margin, w - margin, size=n); ys = rng.uniform(margin, h - margin, size=n)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]
