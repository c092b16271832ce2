from __future__ import annotations
import yaml
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field

class SmootherConfig(BaseModel):
    """
    Smoothing parameters.
    time_window should be long enough to hold at least 6 samples; smaller
    saccade_threshold values make the mild (saccade) damping kick in more often.
    """
    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    damp_fixation: int = Field(100, ge=0)
    damp_saccade: int = Field(1, ge=0)
    time_window: int = Field(100, ge=0)       # ms
    saccade_threshold: float = Field(0.02, ge=0.0)
    interval: int = Field(0, ge=0)            # ms, 0 = estimate from data

    @classmethod
    def cursor(cls) -> "SmootherConfig":
        """Screen-pixel preset used for cursor control at ~30 Hz."""
        return cls(time_window=150, damp_fixation=700, saccade_threshold=30)

def load_config(path: str|Path|None) -> SmootherConfig:
    if path is None:
        return SmootherConfig()
    with open(path, "r") as f: cfg = yaml.safe_load(f)
    return SmootherConfig.model_validate(cfg or {})
