from __future__ import annotations
import logging
from enum import Enum, IntFlag
from typing import Any, AsyncIterator, Callable, Dict, Iterable, Literal, Optional, Union
from pydantic import BaseModel, Field, TypeAdapter
import websockets

logger = logging.getLogger(__name__)

class StateFlag(IntFlag):
    CONNECTED = 0x01
    CALIBRATED = 0x02
    TRACKING = 0x04
    BUSY = 0x08

class Request(str, Enum):
    """Argument-less commands understood by the tracker service."""
    SHOW_OPTIONS = "SHOW_OPTIONS"
    CALIBRATE = "CALIBRATE"
    TOGGLE_TRACKING = "TOGGLE_TRACKING"

class EyesInCamera(BaseModel):
    xl:float=0.0; yl:float=0.0; xr:float=0.0; yr:float=0.0

class Sample(BaseModel):
    type: Literal["sample"] = "sample"
    ts: int = Field(0, ge=0)   # ms
    x: float = 0.0
    y: float = 0.0
    p: float = 0.0             # pupil size
    ec: EyesInCamera = Field(default_factory=EyesInCamera)

class State(BaseModel):
    type: Literal["state"] = "state"
    value: int = -1

    def _has(self, flag: StateFlag) -> bool:
        return self.value >= 0 and bool(self.value & flag)

    @property
    def is_connected(self) -> bool: return self._has(StateFlag.CONNECTED)
    @property
    def is_calibrated(self) -> bool: return self._has(StateFlag.CALIBRATED)
    @property
    def is_tracking(self) -> bool: return self._has(StateFlag.TRACKING)
    @property
    def is_busy(self) -> bool: return self._has(StateFlag.BUSY)

class Device(BaseModel):
    type: Literal["device"] = "device"
    name: str = ""

GazeMessage = Union[Sample, State, Device]
_MODELS = {"sample": Sample, "state": State, "device": Device}
_OBJECT = TypeAdapter(Dict[str, Any])

class Gaze(BaseModel):
    """Smoothed gaze point as emitted by the CLI."""
    ts:int; x:float; y:float; raw_x:float; raw_y:float; state:str

def parse_message(text: str|bytes) -> Optional[GazeMessage]:
    """
    Decodes one JSON message of the tracker service.
    Returns None for message types the filter does not consume (e.g. "custom");
    raises pydantic.ValidationError on malformed input.
    """
    data = _OBJECT.validate_json(text)
    typ = data.get("type")
    model = _MODELS.get(typ) if isinstance(typ, str) else None
    if model is None:
        logger.debug("ignoring message of type %r", typ)
        return None
    return model.model_validate(data)

async def ws_stream(url: str, requests: Iterable[str]=(),
                    closing: Optional[Callable[[], Iterable[str]]]=None) -> AsyncIterator[str]:
    """
    Yields raw text messages from a tracker service websocket, after sending `requests`.
    `closing` is called when the stream ends (exhausted, closed or cancelled); the
    requests it returns are sent before the socket closes.
    """
    async with websockets.connect(url) as ws:
        logger.info("connected to %s", url)
        try:
            for r in requests:
                await ws.send(_text(r))
            async for msg in ws:
                yield msg if isinstance(msg, str) else msg.decode()
        finally:
            for r in (closing() if closing else ()):
                try:
                    await ws.send(_text(r))
                except websockets.ConnectionClosed:
                    logger.warning("connection closed before %s could be sent", _text(r))
                    break
    logger.info("disconnected from %s", url)

def _text(r: str) -> str:
    return r.value if isinstance(r, Request) else r
