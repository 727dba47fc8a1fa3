"""
vttcue/cascade.py

Style Cascade Resolver.
Finds the declared ::cue rules that match a tag context and stamps their
properties onto a range of the output text, least specific first, so that
more specific (or later declared, on a tie) rules win.
"""

from typing import List, NamedTuple, Optional, Sequence

from .lexer import TagContext
from .models import StyleRule, StyledTextBuilder, SpanKind, FontSizeUnit


class StyleMatch(NamedTuple):
    score: int
    rule: StyleRule


def get_applicable_styles(rules: Sequence[StyleRule], cue_id: Optional[str],
                          tag: TagContext) -> List[StyleMatch]:
    """
    Rules with a positive specificity for `tag`, ordered by ascending score.
    sorted() is stable, so equal scores keep declaration order.
    """
    matches = []
    for rule in rules:
        score = rule.specificity(cue_id, tag.name, tag.classes, tag.voice)
        if score > 0:
            matches.append(StyleMatch(score, rule))
    return sorted(matches, key=lambda m: m.score)


def apply_style_to_text(text: StyledTextBuilder, rule: StyleRule, start: int, end: int):
    if rule is None:
        return
    mask = rule.style_mask
    if mask is not None:
        text.set_span(SpanKind.STYLE, start, end, mask)
    if rule.linethrough:
        text.set_span(SpanKind.STRIKETHROUGH, start, end)
    if rule.underline:
        text.set_span(SpanKind.UNDERLINE, start, end)
    if rule.font_color is not None:
        text.set_span(SpanKind.FOREGROUND_COLOR, start, end, rule.font_color)
    if rule.background_color is not None:
        text.set_span(SpanKind.BACKGROUND_COLOR, start, end, rule.background_color)
    if rule.font_family is not None:
        text.set_span(SpanKind.FONT_FAMILY, start, end, rule.font_family)
    if rule.text_align is not None:
        text.set_span(SpanKind.ALIGNMENT, start, end, rule.text_align)

    unit = rule.font_size_unit
    if unit == FontSizeUnit.PIXEL:
        text.set_span(SpanKind.ABSOLUTE_SIZE, start, end, int(rule.font_size))
    elif unit == FontSizeUnit.EM:
        text.set_span(SpanKind.RELATIVE_SIZE, start, end, rule.font_size)
    elif unit == FontSizeUnit.PERCENT:
        text.set_span(SpanKind.RELATIVE_SIZE, start, end, rule.font_size / 100)
    # FontSizeUnit.UNSPECIFIED: nothing to apply


def apply_cascade(text: StyledTextBuilder, rules: Sequence[StyleRule], cue_id: Optional[str],
                  tag: TagContext, start: int, end: int):
    for match in get_applicable_styles(rules, cue_id, tag):
        apply_style_to_text(text, match.rule, start, end)
