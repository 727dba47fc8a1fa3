"""Tests for cue text markup parsing."""
import logging

from vttcue.markup import parse_cue_text, pop_until
from vttcue.lexer import TagContext
from vttcue.models import StyleRule, Span, SpanKind, FontStyle

YELLOW = (255, 255, 0, 255)


def _parse(markup, styles=(), cue_id=None):
    return parse_cue_text(cue_id, markup, list(styles))


def test_plain_text_has_no_spans():
    text = _parse("Hello world\nsecond line")
    assert text.text == "Hello world\nsecond line"
    assert text.spans == ()


def test_bold_tag():
    text = _parse("Hello <b>world</b>")
    assert text.text == "Hello world"
    assert text.spans == (Span(6, 11, SpanKind.STYLE, FontStyle.BOLD),)


def test_italic_and_underline_tags():
    text = _parse("<i>a</i><u>b</u>")
    assert text.text == "ab"
    assert text.spans == (Span(0, 1, SpanKind.STYLE, FontStyle.ITALIC),
                          Span(1, 2, SpanKind.UNDERLINE))


def test_unclosed_tag_closes_at_end():
    text = _parse("<b>bold")
    assert text.text == "bold"
    assert text.spans == (Span(0, 4, SpanKind.STYLE, FontStyle.BOLD),)


def test_nested_tags_close_innermost_first():
    text = _parse("<u><b>x</b>y</u>")
    assert text.text == "xy"
    assert text.spans == (Span(0, 1, SpanKind.STYLE, FontStyle.BOLD),
                          Span(0, 2, SpanKind.UNDERLINE))


def test_mismatched_closer_closes_up_to_match():
    text = _parse("<b><i>text</b> more</i>")
    assert text.text == "text more"
    assert text.spans == (Span(0, 4, SpanKind.STYLE, FontStyle.ITALIC),
                          Span(0, 4, SpanKind.STYLE, FontStyle.BOLD))


def test_closer_without_opener_is_ignored():
    text = _parse("x</c>y")
    assert text.text == "xy"
    assert text.spans == ()


def test_unsupported_tags_are_stripped():
    text = _parse("<ruby>漢<rt>kan</rt></ruby> <00:00:01.000>x")
    assert text.text == "漢kan x"
    assert text.spans == ()


def test_void_and_empty_tags():
    assert _parse("<b/>x").spans == ()
    assert _parse("<b/>x").text == "x"
    assert _parse("a<>b").text == "ab"
    assert _parse("a</ >b").text == "ab"


def test_lone_and_unterminated_lt():
    assert _parse("a<").text == "a"
    assert _parse("a<b").text == "a"
    assert _parse("a<b c").spans == ()


def test_entities():
    assert _parse("a&nbsp;b").text == "a\u00a0b"
    assert _parse("&lt;i&gt; &amp; co").text == "<i> & co"


def test_space_terminated_entity_keeps_space():
    assert _parse("a &lt b").text == "a < b"


def test_ampersand_without_terminator_is_literal():
    assert _parse("AT&T").text == "AT&T"


def test_unknown_entity_is_dropped(caplog):
    with caplog.at_level(logging.WARNING):
        text = _parse("a&foo;b")
    assert text.text == "ab"
    assert "&foo;" in caplog.text


def test_custom_logger_receives_diagnostics(caplog):
    custom = logging.getLogger("cue-diagnostics")
    with caplog.at_level(logging.WARNING):
        parse_cue_text(None, "&bogus;", [], logger=custom)
    assert [r.name for r in caplog.records] == ["cue-diagnostics"]


def test_class_rule_applies_to_class_tag():
    rule = StyleRule(target_classes={"yellow"}, font_color=YELLOW)
    text = _parse("say <c.yellow>hi</c>", [rule])
    assert text.spans == (Span(4, 6, SpanKind.FOREGROUND_COLOR, YELLOW),)


def test_voice_rule_applies_to_voice_tag():
    rule = StyleRule(target_tag="v", target_voice="Bob", underline=True)
    text = _parse("<v Bob>Hi</v> <v Alice>Yo</v>", [rule])
    assert text.text == "Hi Yo"
    assert text.spans == (Span(0, 2, SpanKind.UNDERLINE),)


def test_bold_tag_and_rule_both_apply():
    rule = StyleRule(target_tag="b", font_color=YELLOW)
    text = _parse("<b>x</b>", [rule])
    assert text.spans == (Span(0, 1, SpanKind.STYLE, FontStyle.BOLD),
                          Span(0, 1, SpanKind.FOREGROUND_COLOR, YELLOW))


def test_universal_rule_applies_once_to_whole_cue():
    rule = StyleRule(background_color=YELLOW)
    text = _parse("<b>x</b>yz", [rule])
    assert text.spans_of(SpanKind.BACKGROUND_COLOR) == [Span(0, 3, SpanKind.BACKGROUND_COLOR, YELLOW)]


def test_id_rule_applies_to_matching_cue():
    rule = StyleRule(target_id="intro", underline=True)
    assert _parse("hi", [rule], cue_id="intro").spans == (Span(0, 2, SpanKind.UNDERLINE),)
    assert _parse("hi", [rule], cue_id="outro").spans == ()


def test_pop_until_stops_at_first_match():
    stack = [TagContext.build("c", 0), TagContext.build("b", 0), TagContext.build("i", 1)]
    popped = pop_until(stack, "b")
    assert [t.name for t in popped] == ["i", "b"]
    assert [t.name for t in stack] == ["c"]


def test_pop_until_without_match_empties_stack():
    stack = [TagContext.build("c", 0), TagContext.build("i", 1)]
    assert [t.name for t in pop_until(stack, "u")] == ["i", "c"]
    assert stack == []
