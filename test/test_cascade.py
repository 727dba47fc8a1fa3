"""Tests for matching ::cue rules and stamping their properties."""
from vttcue.cascade import get_applicable_styles, apply_style_to_text, apply_cascade
from vttcue.lexer import TagContext
from vttcue.models import (StyleRule, StyledTextBuilder, SpanKind, FontStyle, FontSizeUnit,
                           Alignment)

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def _builder(text="hello"):
    builder = StyledTextBuilder()
    builder.append(text)
    return builder


def test_applicable_styles_sorted_by_specificity():
    tag_and_class = StyleRule(target_tag="c", target_classes={"a"})
    class_only = StyleRule(target_classes={"a"})
    unrelated = StyleRule(target_classes={"z"})
    tag = TagContext.build("c.a", 0)

    matches = get_applicable_styles([tag_and_class, unrelated, class_only], None, tag)

    assert [m.rule for m in matches] == [class_only, tag_and_class]
    assert [m.score for m in matches] == [4, 6]


def test_equal_specificity_keeps_declaration_order():
    first = StyleRule(target_classes={"a"}, font_color=RED)
    second = StyleRule(target_classes={"a"}, font_color=BLUE)

    matches = get_applicable_styles([first, second], None, TagContext.build("c.a", 0))
    assert [m.rule for m in matches] == [first, second]


def test_later_equal_rule_wins_scalar_properties():
    builder = _builder()
    rules = [StyleRule(target_classes={"a"}, font_color=RED),
             StyleRule(target_classes={"a"}, font_color=BLUE)]

    apply_cascade(builder, rules, None, TagContext.build("c.a", 0), 0, 5)
    text = builder.build()

    assert [s.value for s in text.spans_of(SpanKind.FOREGROUND_COLOR)] == [RED, BLUE]
    assert text.effective(SpanKind.FOREGROUND_COLOR, 2) == BLUE


def test_more_specific_rule_wins_regardless_of_order():
    builder = _builder()
    rules = [StyleRule(target_tag="c", target_classes={"a"}, font_color=RED),
             StyleRule(target_classes={"a"}, font_color=BLUE)]

    apply_cascade(builder, rules, None, TagContext.build("c.a", 0), 0, 5)

    assert builder.build().effective(SpanKind.FOREGROUND_COLOR, 0) == RED


def test_property_mapping():
    builder = _builder()
    rule = StyleRule(bold=True, italic=True, linethrough=True, underline=True,
                     font_color=RED, background_color=BLUE, font_family="serif",
                     text_align=Alignment.CENTER, font_size=16, font_size_unit=FontSizeUnit.PIXEL)

    apply_style_to_text(builder, rule, 1, 4)
    spans = {s.kind: s for s in builder.build().spans}

    assert spans[SpanKind.STYLE].value == FontStyle.BOLD_ITALIC
    assert SpanKind.STRIKETHROUGH in spans
    assert SpanKind.UNDERLINE in spans
    assert spans[SpanKind.FOREGROUND_COLOR].value == RED
    assert spans[SpanKind.BACKGROUND_COLOR].value == BLUE
    assert spans[SpanKind.FONT_FAMILY].value == "serif"
    assert spans[SpanKind.ALIGNMENT].value == Alignment.CENTER
    assert spans[SpanKind.ABSOLUTE_SIZE].value == 16
    assert all((s.start, s.end) == (1, 4) for s in spans.values())


def test_relative_font_sizes():
    builder = _builder()
    apply_style_to_text(builder, StyleRule(font_size=1.5, font_size_unit=FontSizeUnit.EM), 0, 5)
    apply_style_to_text(builder, StyleRule(font_size=50, font_size_unit=FontSizeUnit.PERCENT), 0, 5)
    apply_style_to_text(builder, StyleRule(font_size=99), 0, 5)

    sizes = [s.value for s in builder.build().spans_of(SpanKind.RELATIVE_SIZE)]
    assert sizes == [1.5, 0.5]
    assert builder.build().spans_of(SpanKind.ABSOLUTE_SIZE) == []


def test_rule_without_properties_adds_nothing():
    builder = _builder()
    apply_style_to_text(builder, StyleRule(), 0, 5)
    apply_style_to_text(builder, None, 0, 5)
    assert builder.build().spans == ()
