"""
vttcue/ingest.py

Logic for reading WebVTT cues into the Cue Data Model.

Key Responsibilities:
1. Line Reading: a forward-only cursor over the document lines.
2. Cue Parsing: optional id line, timing header, blank-terminated payload.
3. Document Walking: WEBVTT signature, NOTE / STYLE / REGION blocks, then cues.
"""

import logging
import re
from typing import Iterable, List, Optional, Sequence, Union

from .config import IngestConfig
from .css import parse_style_block
from .errors import InvalidTimestamp, InvalidHeader
from .markup import parse_cue_text
from .models import StyleRule, CueResult, SubtitleTrack
from .settings import CUE_HEADER_RE, CueInfoBuilder, parse_cue_header

LOGGER = logging.getLogger(__name__)

LINE_BREAK_RE = re.compile(r'\r\n|\r|\n')
BOM = "\ufeff"


class LineReader:
    """
    Forward-only cursor over lines, without their terminators.
    read_line() returns None once the input is exhausted.
    """

    def __init__(self, source: Union[str, Iterable[str]]):
        if isinstance(source, str):
            lines = LINE_BREAK_RE.split(source)
            # A trailing newline does not start another line
            if lines and lines[-1] == "":
                lines.pop()
        else:
            lines = [l.rstrip('\r\n') for l in source]
        self._lines: List[str] = lines
        self._pos = 0

    @property
    def position(self) -> int:
        return self._pos

    def peek_line(self) -> Optional[str]:
        if self._pos >= len(self._lines):
            return None
        return self._lines[self._pos]

    def read_line(self) -> Optional[str]:
        line = self.peek_line()
        if line is not None:
            self._pos += 1
        return line

    def skip_block(self):
        """Consumes lines up to and including the next blank line."""
        line = self.read_line()
        while line:
            line = self.read_line()


def parse_cue(reader: LineReader, styles: Sequence[StyleRule],
              logger: Optional[logging.Logger] = None) -> Optional[CueResult]:
    """
    Parses the next cue from `reader`.

    The timing header must be on the first line, or on the second one when the
    first is the cue id. Returns None when neither line is a header (or the
    input is exhausted), and also when a timestamp is malformed; in that case
    the rest of the block is consumed so the caller resumes at the next block.
    """
    log = logger or LOGGER

    first_line = reader.read_line()
    if not first_line:
        return None
    header = CUE_HEADER_RE.fullmatch(first_line)
    if header:
        return _parse_cue(None, header, reader, styles, log)

    # The first line may be the cue id
    second_line = reader.read_line()
    if second_line is None:
        return None
    header = CUE_HEADER_RE.fullmatch(second_line)
    if header:
        return _parse_cue(first_line.strip(), header, reader, styles, log)
    return None


def _parse_cue(cue_id, header, reader, styles, log) -> Optional[CueResult]:
    builder = CueInfoBuilder(cue_id=cue_id)
    try:
        parse_cue_header(header, builder, log)
    except InvalidTimestamp:
        log.warning("Skipping cue with bad header: %s", header.group(0))
        reader.skip_block()
        return None

    payload = []
    line = reader.read_line()
    while line:
        payload.append(line.strip())
        line = reader.read_line()

    builder.text = parse_cue_text(cue_id, "\n".join(payload), styles, log)
    return builder.build(log)


class WebVTTIngester:
    """
    Parses WebVTT documents.
    STYLE blocks are only honoured before the first cue; NOTE and REGION blocks are skipped.
    """

    def __init__(self, config: Optional[IngestConfig] = None, logger: Optional[logging.Logger] = None):
        self.config = config or IngestConfig()
        self.logger = logger or LOGGER

    def parse(self, path: str) -> SubtitleTrack:
        with open(path, 'r', encoding=self.config.encoding) as f:
            content = f.read()
        return self.parse_text(content)

    def parse_text(self, content: str) -> SubtitleTrack:
        if self.config.strip_zero_width:
            content = content.replace("\u200b", "")

        reader = LineReader(content)
        self._read_header(reader)

        track = SubtitleTrack()
        while True:
            line = self._skip_blank_lines(reader)
            if line is None:
                break

            if line.startswith("NOTE"):
                reader.skip_block()
            elif line.strip() == "STYLE":
                self._read_style_block(reader, track)
            elif line.startswith("REGION"):
                self.logger.debug("Skipping REGION block")
                reader.skip_block()
            else:
                cue = parse_cue(reader, track.styles, self.logger)
                if cue is None:
                    continue
                if self.config.skip_empty_cues and not cue.text.text:
                    continue
                track.cues.append(cue)
        return track

    def _read_header(self, reader: LineReader):
        first_line = reader.read_line()
        if first_line is not None and first_line.startswith(BOM):
            first_line = first_line[len(BOM):]
        if first_line is None or not re.match(r'WEBVTT(?:[ \t].*)?$', first_line):
            raise InvalidHeader(f"Expected WEBVTT signature, got {first_line!r}")
        # Header metadata (e.g. X-TIMESTAMP-MAP) runs until the first blank line
        reader.skip_block()

    def _read_style_block(self, reader: LineReader, track: SubtitleTrack):
        reader.read_line()  # "STYLE"
        lines = []
        line = reader.read_line()
        while line:
            lines.append(line)
            line = reader.read_line()

        if track.cues:
            self.logger.warning("Ignoring STYLE block after the first cue")
            return
        if self.config.parse_style_blocks:
            track.styles.extend(parse_style_block("\n".join(lines), self.logger))

    def _skip_blank_lines(self, reader: LineReader) -> Optional[str]:
        line = reader.peek_line()
        while line is not None and not line.strip():
            reader.read_line()
            line = reader.peek_line()
        return line
