from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Protocol, Tuple, TypeVar
import numpy as np

S = TypeVar("S", bound="RawSample")

class RawSample(Protocol):
    """
    Capability of any raw positional datum the smoother can filter.
    timestamp is in ms; x/y are planar coordinates whose meaning depends on the representation.
    """
    timestamp: int
    x: float
    y: float

    def blend_toward(self, reference: RawSample, alpha: float, timestamp: int) -> None: ...
    def copy(self: S) -> S: ...

def _blend(ref: float, own: float, alpha: float) -> float:
    return (ref + alpha*own) / (1.0 + alpha)

@dataclass
class RawPoint:
    """Raw 2D gaze point (screen pixels)."""
    timestamp: int
    x: float
    y: float

    def __post_init__(self):
        self.timestamp = int(self.timestamp)

    def blend_toward(self, reference: RawSample, alpha: float, timestamp: int) -> None:
        self.timestamp = int(timestamp)
        self.x = _blend(reference.x, self.x, alpha)
        self.y = _blend(reference.y, self.y, alpha)

    def copy(self) -> RawPoint:
        return RawPoint(self.timestamp, self.x, self.y)

def _reconstruct_z(x: float, y: float) -> float:
    # clamp: a smoothed tangent projection may leave the unit disc
    return math.sqrt(max(0.0, 1.0 - x*x - y*y))

@dataclass
class RawVector:
    """
    Raw 3D gaze direction (unit vector).
    x/y hold the tangent-of-angle projection of the original vector; z is rebuilt
    from the unit-sphere constraint whenever x/y change.
    """
    timestamp: int
    original: Tuple[float,float,float]
    x: float = field(init=False)
    y: float = field(init=False)
    z: float = field(init=False)

    def __post_init__(self):
        self.original = tuple(float(v) for v in self.original)
        self.timestamp = int(self.timestamp)
        # rounding can push a unit component just past 1
        vx, vy = np.clip(self.original[:2], -1.0, 1.0)
        self.x = math.tan(math.asin(vx))
        self.y = math.tan(math.asin(vy))
        self.z = _reconstruct_z(self.x, self.y)

    @classmethod
    def from_vector(cls, timestamp: int, vector) -> RawVector:
        v = np.asarray(vector, dtype=float).reshape(3)
        return cls(timestamp, (float(v[0]), float(v[1]), float(v[2])))

    @property
    def shifted(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def blend_toward(self, reference: RawSample, alpha: float, timestamp: int) -> None:
        self.timestamp = int(timestamp)
        self.x = _blend(reference.x, self.x, alpha)
        self.y = _blend(reference.y, self.y, alpha)
        self.z = _reconstruct_z(self.x, self.y)

    def copy(self) -> RawVector:
        c = RawVector(self.timestamp, self.original)
        c.x, c.y, c.z = self.x, self.y, self.z
        return c
