# utils.py

import re
from typing import List

from engine import Action

# Frame count bounds accepted from the UI
MIN_FRAMES = 3
MAX_FRAMES = 10
DEFAULT_FRAMES = 4

DEFAULT_REFERENCES = "7 0 1 2 0 3 0 4 2 3 0 3 2"

# Playback speed slider; the step delay is derived from it
SPEED_MIN = 100
SPEED_MAX = 2000
SPEED_DEFAULT = 1000

# Theme colors
COLOR_BG = "#1a1a1a"
COLOR_FRAME = "#2a2a2a"
COLOR_ACCENT = "#00ffff"
COLOR_HIT = "#00ff00"
COLOR_FAULT = "#ff3333"
COLOR_TEXT_PRIMARY = "#e0e0e0"
COLOR_WARNING = "#ffff00"
COLOR_MUTED = "#6a6a6a"


def parse_reference_string(raw: str) -> List[int]:
    """
    Parse a page reference string such as "7 0 1" or "7,0,1".

    Tokens that are not non-negative integers are dropped.

    Raises:
        ValueError: If no valid page number remains
    """
    references = []
    for token in re.split(r"[\s,]+", raw.strip()):
        if re.fullmatch(r"[0-9]+", token):
            references.append(int(token))
    if not references:
        raise ValueError("ERROR // INVALID REF_STRING")
    return references


def validate_frame_count(frame_count) -> int:
    try:
        value = int(frame_count)
    except (TypeError, ValueError):
        raise ValueError(f"ERROR // FRAME_COUNT [{MIN_FRAMES}-{MAX_FRAMES}]")
    if value < MIN_FRAMES or value > MAX_FRAMES:
        raise ValueError(f"ERROR // FRAME_COUNT [{MIN_FRAMES}-{MAX_FRAMES}]")
    return value


def action_color(action):
    """Return the theme color for an action tag."""
    if action == Action.HIT:
        return COLOR_HIT
    if action in (Action.FAULT, Action.REPLACEMENT):
        return COLOR_FAULT
    return COLOR_ACCENT


def action_label(action) -> str:
    if action == Action.REPLACEMENT:
        return "FAULT+REPLACE"
    return action or ""
