from __future__ import annotations
import logging
import pyautogui
from ..filters.samples import RawSample

logger = logging.getLogger(__name__)

pyautogui.FAILSAFE = False  # gaze regularly reaches the screen corners

def move_cursor(point: RawSample, screen: tuple[int,int]|None=None):
    """Move the OS cursor to a smoothed gaze point, clipped to the screen."""
    w, h = screen or pyautogui.size()
    x = min(max(int(round(point.x)), 0), w - 1)
    y = min(max(int(round(point.y)), 0), h - 1)
    try:
        pyautogui.moveTo(x, y, duration=0.0)
    except pyautogui.PyAutoGUIException as e:
        logger.warning("cursor move failed: %s", e)
