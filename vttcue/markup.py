"""
vttcue/markup.py

Markup Parser.
Walks a cue payload one character at a time, keeping a stack of open tags.
Characters and decoded entities go to the output; each time a tag closes, its
built-in style (b/i/u) and any matching ::cue rules are stamped over the range
the tag covered.

Recovery rules:
- Unknown tags are stripped, their content kept.
- A closer pops every open tag up to and including the first one with its name.
- Tags still open at the end are closed there.
- A whole-cue virtual tag is applied last.
"""

import logging
from typing import List, Optional, Sequence

from .cascade import apply_cascade
from .lexer import (TagContext, find_end_of_tag, find_entity_end, get_tag_name, is_supported_tag,
                    decode_entity, TAG_BOLD, TAG_ITALIC, TAG_UNDERLINE, TAG_CLASS, TAG_VOICE, TAG_LANG)
from .models import StyleRule, StyledText, StyledTextBuilder, SpanKind, FontStyle

LOGGER = logging.getLogger(__name__)


def parse_cue_text(cue_id: Optional[str], markup: str, styles: Sequence[StyleRule],
                   logger: Optional[logging.Logger] = None) -> StyledText:
    """
    Parses the text payload of a cue into a StyledText.

    :param cue_id: id line of the cue, None when absent. Used by '#id' rules.
    :param markup: payload lines joined with '\\n'.
    :param styles: declared ::cue rules, in declaration order.
    """
    log = logger or LOGGER
    text = StyledTextBuilder()
    stack: List[TagContext] = []
    pos = 0
    length = len(markup)

    while pos < length:
        curr = markup[pos]

        if curr == '<':
            if pos + 1 >= length:
                # Lone '<' at the very end
                pos += 1
                continue
            lt_pos = pos
            is_closing = markup[lt_pos + 1] == '/'
            pos = find_end_of_tag(markup, lt_pos + 1)
            if pos == length and markup[-1] != '>':
                log.debug("Unterminated tag at offset %d: %r", lt_pos, markup[lt_pos:])
            is_void = markup[pos - 2] == '/'
            body_start = lt_pos + (2 if is_closing else 1)
            body_end = pos - 2 if is_void else pos - 1
            tag_expression = markup[body_start:body_end]
            if not tag_expression.strip():
                continue

            tag_name = get_tag_name(tag_expression)
            if not is_supported_tag(tag_name):
                log.debug("Ignoring unsupported tag <%s>", tag_name)
                continue

            if is_closing:
                for tag in pop_until(stack, tag_name):
                    apply_spans_for_tag(cue_id, tag, text, styles)
            elif not is_void:
                stack.append(TagContext.build(tag_expression, len(text)))

        elif curr == '&':
            entity_end = find_entity_end(markup, pos + 1)
            if entity_end == -1:
                text.append(curr)
                pos += 1
                continue
            entity = markup[pos + 1:entity_end]
            decoded = decode_entity(entity)
            if decoded is None:
                log.warning("Ignoring unsupported entity: '&%s;'", entity)
            else:
                text.append(decoded)
            if markup[entity_end] == ' ':
                text.append(' ')
            pos = entity_end + 1

        else:
            text.append(curr)
            pos += 1

    # Unclosed tags end with the text
    while stack:
        apply_spans_for_tag(cue_id, stack.pop(), text, styles)
    apply_spans_for_tag(cue_id, TagContext.whole_cue(), text, styles)
    return text.build()


def pop_until(stack: List[TagContext], tag_name: str) -> List[TagContext]:
    """
    Pops open tags, innermost first, up to and including the first one named
    `tag_name`. Pops everything when no open tag has that name.
    """
    popped = []
    while stack:
        tag = stack.pop()
        popped.append(tag)
        if tag.name == tag_name:
            break
    return popped


def apply_spans_for_tag(cue_id: Optional[str], tag: TagContext, text: StyledTextBuilder,
                        styles: Sequence[StyleRule]):
    start = tag.position
    end = len(text)

    if tag.name == TAG_BOLD:
        text.set_span(SpanKind.STYLE, start, end, FontStyle.BOLD)
    elif tag.name == TAG_ITALIC:
        text.set_span(SpanKind.STYLE, start, end, FontStyle.ITALIC)
    elif tag.name == TAG_UNDERLINE:
        text.set_span(SpanKind.UNDERLINE, start, end)
    elif tag.name in (TAG_CLASS, TAG_LANG, TAG_VOICE, ""):
        pass
    else:
        return

    apply_cascade(text, styles, cue_id, tag, start, end)
