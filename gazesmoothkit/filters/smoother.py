from __future__ import annotations
import logging
from typing import Generic, Optional, TypeVar
from .config import SmootherConfig
from .samples import RawSample
from .window import WindowBuffer, estimate_interval
from ..eye.saccade import GazeState, classify

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=RawSample)

class Smoother(Generic[T]):
    """
    Adaptive exponential smoothing of gaze samples.

    Samples are kept in a time window; the window is classified as fixation or
    saccade and the matching damping (strong for fixations, mild for saccades)
    is applied relative to the sampling interval:

        alpha   = damp / interval
        current = (sample + alpha*current) / (1 + alpha)

    Until the window is full, or while its state is unknown, samples pass through as is.
    Use `Smoother[RawPoint]` or `Smoother[RawVector]`; one instance per stream.
    """
    def __init__(self, config: Optional[SmootherConfig]=None):
        self.config = (config or SmootherConfig()).model_copy()
        self._buffer: WindowBuffer[T] = WindowBuffer(self.config.time_window)
        self._current: Optional[T] = None
        self._state = GazeState.FIXATION
        self._interval = self.config.interval

    # configuration
    @property
    def damp_fixation(self) -> int: return self.config.damp_fixation
    @damp_fixation.setter
    def damp_fixation(self, v: int): self.config.damp_fixation = v

    @property
    def damp_saccade(self) -> int: return self.config.damp_saccade
    @damp_saccade.setter
    def damp_saccade(self, v: int): self.config.damp_saccade = v

    @property
    def time_window(self) -> int: return self.config.time_window
    @time_window.setter
    def time_window(self, v: int):
        self.config.time_window = v
        self._buffer.time_window = self.config.time_window

    @property
    def saccade_threshold(self) -> float: return self.config.saccade_threshold
    @saccade_threshold.setter
    def saccade_threshold(self, v: float): self.config.saccade_threshold = v

    @property
    def interval(self) -> int:
        """Sampling interval, ms; 0 until estimated from the first full window."""
        return self._interval
    @interval.setter
    def interval(self, v: int):
        if v < 0: raise ValueError("interval must be >= 0")
        self._interval = int(v)

    # state
    @property
    def state(self) -> GazeState: return self._state
    @property
    def buffer_full(self) -> bool: return self._buffer.full
    @property
    def current(self) -> Optional[T]: return self._current

    @property
    def _damp(self) -> int:
        return self.damp_fixation if self._state == GazeState.FIXATION else self.damp_saccade

    def reset(self):
        self._buffer.clear()
        self._current = None
        self._interval = 0
        self._state = GazeState.UNKNOWN

    def feed(self, sample: T) -> T:
        """Takes a raw sample and returns the smoothed one (owned by the smoother, updated in place)."""
        if not self._buffer.insert(sample):
            return self._passthrough(sample)

        state = classify(self._buffer, self.time_window, self.saccade_threshold)
        if state != self._state:
            logger.debug("gaze state %s -> %s at %d ms", self._state.value, state.value, sample.timestamp)
        self._state = state
        if state == GazeState.UNKNOWN:
            return self._passthrough(sample)

        if self._interval == 0:
            self._interval = estimate_interval(self._buffer, sample)
            logger.debug("sampling interval estimated: %d ms", self._interval)
            self._current = sample.copy()
            if self._interval == 0:
                # zero-span window, nothing to scale the damping by yet
                return self._current

        alpha = self._damp / self._interval
        self._current.blend_toward(sample, alpha, sample.timestamp)
        return self._current

    def _passthrough(self, sample: T) -> T:
        self._current = sample.copy()
        return self._current
