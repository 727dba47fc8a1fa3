"""
vttcue/models.py

The Cue Data Model.
Holds the enums shared by the settings parser and geometry rules, the declared
style rules (from ::cue blocks), the styled-text value produced by the markup
parser, and the immutable per-cue result.

Unset dimensions (line, position) are stored as None.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum, IntFlag
from typing import List, Optional, Tuple, Set, Sequence, Any

# RGBA, each channel 0..255
Color = Tuple[int, int, int, int]


# --- GEOMETRY ENUMS ---
class TextAlignment(IntEnum):
    """
    Values of the 'align' cue setting.
    START/LEFT and END/RIGHT are kept apart because they derive different
    default positions and anchors.
    """
    START = 1
    CENTER = 2
    END = 3
    LEFT = 4
    RIGHT = 5


class Alignment(Enum):
    """Layout alignment handed to the renderer."""
    NORMAL = "normal"      # start-aligned
    CENTER = "center"
    OPPOSITE = "opposite"  # end-aligned


class LineType(Enum):
    NUMBER = 0    # snap-to-lines
    FRACTION = 1  # percentage of the viewport


class AnchorType(Enum):
    UNSET = -1
    START = 0
    MIDDLE = 1
    END = 2


class VerticalType(Enum):
    NONE = 0
    RIGHT_TO_LEFT = 1  # vertical:rl
    LEFT_TO_RIGHT = 2  # vertical:lr


# --- STYLE ENUMS ---
class FontStyle(IntFlag):
    NORMAL = 0
    BOLD = 1
    ITALIC = 2
    BOLD_ITALIC = 3


class FontSizeUnit(Enum):
    UNSPECIFIED = 0
    PIXEL = 1
    EM = 2
    PERCENT = 3


class SpanKind(Enum):
    STYLE = "style"                        # value: FontStyle
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"
    FOREGROUND_COLOR = "foreground_color"  # value: Color
    BACKGROUND_COLOR = "background_color"  # value: Color
    FONT_FAMILY = "font_family"            # value: str
    ALIGNMENT = "alignment"                # value: Alignment
    ABSOLUTE_SIZE = "absolute_size"        # value: int, device independent pixels
    RELATIVE_SIZE = "relative_size"        # value: float multiplier


# --- STYLE RULE MODEL ---
@dataclass
class StyleRule:
    """
    A declared ::cue style.
    Empty selector fields match anything; a rule with no selector at all only
    applies to the whole cue.
    """
    # -- Selector --
    target_id: str = ""
    target_tag: str = ""
    target_classes: Set[str] = field(default_factory=set)
    target_voice: str = ""

    # -- Properties --
    # None means "not declared"
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    linethrough: bool = False
    underline: bool = False

    font_color: Optional[Color] = None
    background_color: Optional[Color] = None
    font_family: Optional[str] = None
    text_align: Optional[Alignment] = None

    font_size: float = 0.0
    font_size_unit: FontSizeUnit = FontSizeUnit.UNSPECIFIED

    @property
    def style_mask(self) -> Optional[FontStyle]:
        """Combined bold/italic mask, or None when neither was declared."""
        if self.bold is None and self.italic is None:
            return None
        mask = FontStyle.NORMAL
        if self.bold:
            mask |= FontStyle.BOLD
        if self.italic:
            mask |= FontStyle.ITALIC
        return mask

    def specificity(self, cue_id: Optional[str], tag_name: Optional[str],
                    classes: Sequence[str], voice: Optional[str]) -> int:
        """
        Scores how precisely this rule's selector matches a tag context.
        0 means no match. Higher scores win the cascade.
        """
        if (not self.target_id and not self.target_tag
                and not self.target_classes and not self.target_voice):
            # Universal selector: matches the whole cue only, with the lowest score.
            return 0 if tag_name else 1

        score = 0
        for target, actual, weight in ((self.target_id, cue_id, 0x40000000),
                                       (self.target_tag, tag_name, 2),
                                       (self.target_voice, voice, 4)):
            if not target:
                continue
            if target != actual:
                return 0
            score += weight

        if not self.target_classes.issubset(classes):
            return 0
        return score + len(self.target_classes) * 4


# --- STYLED TEXT MODEL ---
@dataclass(frozen=True)
class Span:
    """One annotation over the half-open range [start, end)."""
    start: int
    end: int
    kind: SpanKind
    value: Any = None

    def covers(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass(frozen=True)
class Fragment:
    """A run of text over which the same set of spans applies."""
    text: str
    spans: Tuple[Span, ...] = ()


@dataclass(frozen=True)
class StyledText:
    """
    Plain characters plus the spans stamped on them.
    Spans are kept in the order they were applied; when two spans of the same
    kind cover one character the later one takes precedence.
    """
    text: str = ""
    spans: Tuple[Span, ...] = ()

    def __str__(self):
        return self.text

    def __len__(self):
        return len(self.text)

    def spans_of(self, kind: SpanKind) -> List[Span]:
        return [s for s in self.spans if s.kind == kind]

    def spans_at(self, offset: int) -> List[Span]:
        return [s for s in self.spans if s.covers(offset)]

    def effective(self, kind: SpanKind, offset: int) -> Any:
        """The value of the last-applied span of `kind` covering `offset`, or None."""
        value = None
        for s in self.spans:
            if s.kind == kind and s.covers(offset):
                value = s.value
        return value

    def fragments(self) -> List[Fragment]:
        """Cuts the text at every span boundary."""
        if not self.text:
            return []
        cuts = {0, len(self.text)}
        for s in self.spans:
            cuts.add(s.start)
            cuts.add(s.end)
        bounds = sorted(c for c in cuts if 0 <= c <= len(self.text))

        results = []
        for start, end in zip(bounds, bounds[1:]):
            active = tuple(s for s in self.spans if s.start <= start and end <= s.end)
            results.append(Fragment(text=self.text[start:end], spans=active))
        return results


class StyledTextBuilder:
    """Mutable counterpart of StyledText used while walking the markup."""

    def __init__(self):
        self._chars: List[str] = []
        self._length = 0
        self._spans: List[Span] = []

    def __len__(self):
        return self._length

    def append(self, text: str):
        self._chars.append(text)
        self._length += len(text)

    def set_span(self, kind: SpanKind, start: int, end: int, value: Any = None):
        # Zero-length ranges carry no text to style.
        if end <= start:
            return
        self._spans.append(Span(start=start, end=end, kind=kind, value=value))

    def build(self) -> StyledText:
        return StyledText(text="".join(self._chars), spans=tuple(self._spans))


# --- CUE MODELS ---
@dataclass(frozen=True)
class CueResult:
    """
    A finalized cue. Every field is resolved except `line`, which stays None
    when the cue stacking algorithm has to place it.
    """
    start_time_us: int
    end_time_us: int
    text: StyledText
    cue_id: Optional[str] = None

    text_alignment: Optional[Alignment] = Alignment.CENTER
    line: Optional[float] = None
    line_type: LineType = LineType.NUMBER
    line_anchor: AnchorType = AnchorType.START
    position: float = 0.5
    position_anchor: AnchorType = AnchorType.MIDDLE
    size: float = 1.0
    vertical_type: VerticalType = VerticalType.NONE

    @property
    def duration_us(self) -> int:
        return self.end_time_us - self.start_time_us


@dataclass
class SubtitleTrack:
    """Everything read from one WebVTT document."""
    cues: List[CueResult] = field(default_factory=list)
    styles: List[StyleRule] = field(default_factory=list)
