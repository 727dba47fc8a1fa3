"""
vttcue/geometry.py

Default cue geometry, following the WebVTT cue-settings processing rules
(https://www.w3.org/TR/webvtt1/#processing-cue-settings).
Pure functions; they only run when a cue is finalized.
"""

import logging
from typing import Optional

from .errors import UnresolvedAnchorError
from .models import TextAlignment, Alignment, LineType, AnchorType

LOGGER = logging.getLogger(__name__)

DEFAULT_POSITION = 0.5


def compute_line(line: Optional[float], line_type: LineType) -> Optional[float]:
    """
    Resolves the line value. None means "let the stacking algorithm decide",
    which only happens for an unset snap-to-lines line.
    """
    if line is not None and line_type == LineType.FRACTION and not 0.0 <= line <= 1.0:
        return 1.0
    if line is not None:
        return line
    if line_type == LineType.FRACTION:
        return 1.0
    return None


def derive_position(text_alignment: TextAlignment) -> float:
    if text_alignment == TextAlignment.LEFT:
        return 0.0
    if text_alignment == TextAlignment.RIGHT:
        return 1.0
    return DEFAULT_POSITION


def derive_position_anchor(text_alignment: TextAlignment) -> AnchorType:
    if text_alignment in (TextAlignment.LEFT, TextAlignment.START):
        return AnchorType.START
    if text_alignment in (TextAlignment.RIGHT, TextAlignment.END):
        return AnchorType.END
    return AnchorType.MIDDLE


def convert_text_alignment(text_alignment: TextAlignment,
                           logger: Optional[logging.Logger] = None) -> Optional[Alignment]:
    if text_alignment in (TextAlignment.START, TextAlignment.LEFT):
        return Alignment.NORMAL
    if text_alignment == TextAlignment.CENTER:
        return Alignment.CENTER
    if text_alignment in (TextAlignment.END, TextAlignment.RIGHT):
        return Alignment.OPPOSITE
    (logger or LOGGER).warning("Unknown text alignment: %r", text_alignment)
    return None


def derive_max_size(position_anchor: AnchorType, position: float) -> float:
    """Largest size that keeps the cue box inside the viewport."""
    if position_anchor == AnchorType.START:
        return 1.0 - position
    if position_anchor == AnchorType.END:
        return position
    if position_anchor == AnchorType.MIDDLE:
        if position <= 0.5:
            return position * 2
        return (1.0 - position) * 2
    raise UnresolvedAnchorError(f"Position anchor must be resolved, got {position_anchor!r}")
