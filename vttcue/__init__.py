"""
vttcue

WebVTT cue decoding: timing/settings headers, markup with tag-stack styling,
::cue style cascading and WebVTT geometry defaults.
"""

from .errors import (VttCueError, InvalidTimestamp, InvalidPercentage,
                     InvalidHeader, UnresolvedAnchorError)
from .models import (TextAlignment, Alignment, LineType, AnchorType, VerticalType,
                     FontStyle, FontSizeUnit, SpanKind, Span, Fragment, StyleRule, StyledText,
                     StyledTextBuilder, CueResult, SubtitleTrack)
from .timestamps import parse_timestamp_us, parse_percentage
from .markup import parse_cue_text
from .settings import CueInfoBuilder, parse_cue_settings, parse_cue_settings_list, new_cue_for_text
from .ingest import LineReader, parse_cue, WebVTTIngester
from .css import parse_style_block
from .config import IngestConfig

__version__ = "1.0.0"
