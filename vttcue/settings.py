"""
vttcue/settings.py

Cue Header & Settings Parser.
Reads the "start --> end settings..." timing line into a mutable CueInfoBuilder,
which is frozen into a CueResult once the text has been parsed.

Settings mini-language:  (key ':' value whitespace*)*
Known keys: line, align, position, size, vertical. A bad value only drops that one setting.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from .geometry import (compute_line, derive_position, derive_position_anchor,
                       convert_text_alignment, derive_max_size)
from .models import (TextAlignment, LineType, AnchorType, VerticalType,
                     StyledText, CueResult)
from .timestamps import parse_timestamp_us, parse_percentage

LOGGER = logging.getLogger(__name__)

CUE_HEADER_RE = re.compile(r'^(\S+)\s+-->\s+(\S+)(.*)?$')
CUE_SETTING_RE = re.compile(r'(\S+?):(\S+)')
LINE_NUMBER_RE = re.compile(r'[+-]?[0-9]+')
MAX_LINE_NUMBER = 2**31 - 1
MIN_LINE_NUMBER = -2**31

ANCHORS = {
    "start": AnchorType.START,
    "center": AnchorType.MIDDLE,
    "middle": AnchorType.MIDDLE,
    "end": AnchorType.END,
}

ALIGNMENTS = {
    "start": TextAlignment.START,
    "left": TextAlignment.LEFT,
    "center": TextAlignment.CENTER,
    "middle": TextAlignment.CENTER,
    "end": TextAlignment.END,
    "right": TextAlignment.RIGHT,
}

VERTICALS = {
    "rl": VerticalType.RIGHT_TO_LEFT,
    "lr": VerticalType.LEFT_TO_RIGHT,
}


@dataclass
class CueInfoBuilder:
    """
    Mutable cue state while a block is being parsed.
    Defaults are the WebVTT ones: centered text, snap-to-lines with an
    automatic line, line anchored at its start, full width.
    """
    start_time_us: int = 0
    end_time_us: int = 0
    cue_id: Optional[str] = None
    text: Optional[StyledText] = None

    text_alignment: TextAlignment = TextAlignment.CENTER
    line: Optional[float] = None
    line_type: LineType = LineType.NUMBER
    line_anchor: AnchorType = AnchorType.START
    position: Optional[float] = None
    position_anchor: AnchorType = AnchorType.UNSET
    size: float = 1.0
    vertical_type: VerticalType = VerticalType.NONE

    def build(self, logger: Optional[logging.Logger] = None) -> CueResult:
        """Resolves every derived field and freezes the cue."""
        position = self.position if self.position is not None else derive_position(self.text_alignment)
        position_anchor = self.position_anchor
        if position_anchor == AnchorType.UNSET:
            position_anchor = derive_position_anchor(self.text_alignment)

        return CueResult(
            start_time_us=self.start_time_us,
            end_time_us=self.end_time_us,
            text=self.text if self.text is not None else StyledText(),
            cue_id=self.cue_id,
            text_alignment=convert_text_alignment(self.text_alignment, logger),
            line=compute_line(self.line, self.line_type),
            line_type=self.line_type,
            line_anchor=self.line_anchor,
            position=position,
            position_anchor=position_anchor,
            size=min(self.size, derive_max_size(position_anchor, position)),
            vertical_type=self.vertical_type,
        )


def parse_cue_header(header_match: re.Match, builder: CueInfoBuilder,
                     logger: Optional[logging.Logger] = None):
    """
    Fills timestamps and settings from a CUE_HEADER_RE match.
    Raises InvalidTimestamp when either timing token is malformed.
    """
    builder.start_time_us = parse_timestamp_us(header_match.group(1))
    builder.end_time_us = parse_timestamp_us(header_match.group(2))
    parse_cue_settings(header_match.group(3) or "", builder, logger)


def parse_cue_settings(settings: str, builder: CueInfoBuilder,
                       logger: Optional[logging.Logger] = None):
    log = logger or LOGGER
    for match in CUE_SETTING_RE.finditer(settings):
        name, value = match.group(1), match.group(2)
        try:
            if name == "line":
                _parse_line(value, builder, log)
            elif name == "align":
                builder.text_alignment = _parse_text_alignment(value, log)
            elif name == "position":
                _parse_position(value, builder, log)
            elif name == "size":
                builder.size = parse_percentage(value)
            elif name == "vertical":
                builder.vertical_type = _parse_vertical(value, log)
            else:
                log.warning("Unknown cue setting %s:%s", name, value)
        except ValueError:
            log.warning("Skipping bad cue setting: %s", match.group(0))


def parse_cue_settings_list(settings: str, logger: Optional[logging.Logger] = None) -> CueResult:
    """Geometry for a bare settings string, with empty text."""
    builder = CueInfoBuilder()
    parse_cue_settings(settings, builder, logger)
    return builder.build(logger)


def new_cue_for_text(text: StyledText) -> CueResult:
    """A cue carrying `text` with default WebVTT geometry."""
    return CueInfoBuilder(text=text).build()


def _parse_line(value: str, builder: CueInfoBuilder, log: logging.Logger):
    value, comma, anchor = value.partition(',')
    if comma:
        builder.line_anchor = _parse_anchor(anchor, log)

    if value.endswith('%'):
        builder.line = parse_percentage(value)
        builder.line_type = LineType.FRACTION
    else:
        if not LINE_NUMBER_RE.fullmatch(value):
            raise ValueError(f"Invalid line number: {value!r}")
        line_number = int(value)
        if not MIN_LINE_NUMBER <= line_number <= MAX_LINE_NUMBER:
            raise ValueError(f"Line number out of range: {value!r}")
        if line_number < 0:
            # WebVTT's line -1 is the last visible row; ours is the first row that's not visible.
            line_number -= 1
        builder.line = float(line_number)
        builder.line_type = LineType.NUMBER


def _parse_position(value: str, builder: CueInfoBuilder, log: logging.Logger):
    value, comma, anchor = value.partition(',')
    if comma:
        builder.position_anchor = _parse_anchor(anchor, log)
    builder.position = parse_percentage(value)


def _parse_anchor(value: str, log: logging.Logger) -> AnchorType:
    anchor = ANCHORS.get(value)
    if anchor is None:
        log.warning("Invalid anchor value: %s", value)
        return AnchorType.UNSET
    return anchor


def _parse_vertical(value: str, log: logging.Logger) -> VerticalType:
    vertical = VERTICALS.get(value)
    if vertical is None:
        log.warning("Invalid 'vertical' value: %s", value)
        return VerticalType.NONE
    return vertical


def _parse_text_alignment(value: str, log: logging.Logger) -> TextAlignment:
    alignment = ALIGNMENTS.get(value)
    if alignment is None:
        log.warning("Invalid alignment value: %s", value)
        # https://www.w3.org/TR/webvtt1/#webvtt-cue-text-alignment
        return TextAlignment.CENTER
    return alignment
