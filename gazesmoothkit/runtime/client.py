from __future__ import annotations
import logging
from typing import Optional, Union
from .events import Device, GazeMessage, Sample, State, parse_message
from ..filters.config import SmootherConfig
from ..filters.samples import RawPoint
from ..filters.smoother import Smoother

logger = logging.getLogger(__name__)

class GazeClient:
    """
    Consumes tracker-service messages and keeps the smoothed gaze location.
    Smoothing restarts each time tracking is switched on.
    """
    def __init__(self, smoother: Optional[Smoother[RawPoint]]=None):
        self.smoother: Smoother[RawPoint] = smoother or Smoother(SmootherConfig.cursor())
        self.is_tracking = False
        self.state: Optional[State] = None
        self.device_name = ""
        self.last_sample: Optional[Sample] = None
        self.location = RawPoint(0, 0.0, 0.0)

    def handle(self, message: Union[str, bytes, GazeMessage]) -> Optional[RawPoint]:
        """Returns the smoothed point for sample messages, None for anything else."""
        msg = parse_message(message) if isinstance(message, (str, bytes)) else message
        if isinstance(msg, Sample):
            return self._on_sample(msg)
        if isinstance(msg, State):
            self._on_state(msg)
        elif isinstance(msg, Device):
            self.device_name = msg.name
            logger.info("device: %s", msg.name)
        return None

    def _on_sample(self, sample: Sample) -> RawPoint:
        self.last_sample = sample
        self.location = self.smoother.feed(RawPoint(sample.ts, sample.x, sample.y))
        return self.location

    def _on_state(self, state: State):
        self.state = state
        if state.is_tracking == self.is_tracking:
            return
        self.is_tracking = state.is_tracking
        if self.is_tracking:
            self.smoother.reset()
        logger.info("tracking %s", "started" if self.is_tracking else "stopped")
