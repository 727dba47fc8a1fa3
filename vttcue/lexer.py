"""
vttcue/lexer.py

Scanning primitives for cue markup: locating the end of a tag, splitting a tag
expression into name/classes/voice, and decoding character entities.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

TAG_BOLD = "b"
TAG_ITALIC = "i"
TAG_UNDERLINE = "u"
TAG_CLASS = "c"
TAG_VOICE = "v"
TAG_LANG = "lang"

SUPPORTED_TAGS = {TAG_BOLD, TAG_ITALIC, TAG_UNDERLINE, TAG_CLASS, TAG_VOICE, TAG_LANG}

ENTITIES = {
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "nbsp": "\u00a0",
}

# Tag names end at the first space or dot: "c.yellow" -> "c", "v Bob" -> "v"
TAG_NAME_SPLIT_RE = re.compile(r'[ .]')


@dataclass
class TagContext:
    """An open tag waiting for its closer, plus the output offset where it began."""
    name: str
    position: int
    voice: str = ""
    classes: List[str] = field(default_factory=list)

    @classmethod
    def build(cls, tag_expression: str, position: int) -> 'TagContext':
        """
        Builds a context from the text between '<' and '>'.
        "v.loud.red Bob Smith" -> name 'v', classes ['loud', 'red'], voice 'Bob Smith'.
        """
        tag_expression = tag_expression.strip()
        if not tag_expression:
            raise ValueError("Empty tag expression")

        name_and_classes, _, voice = tag_expression.partition(' ')
        parts = name_and_classes.split('.')
        return cls(name=parts[0], position=position, voice=voice.strip(),
                   classes=[c for c in parts[1:] if c])

    @classmethod
    def whole_cue(cls) -> 'TagContext':
        """The virtual tag spanning the whole cue, so untargeted rules reach every character."""
        return cls(name="", position=0)


def find_end_of_tag(markup: str, start: int) -> int:
    """Position just past the next '>', or len(markup) when the tag is unterminated."""
    index = markup.find('>', start)
    return len(markup) if index == -1 else index + 1


def get_tag_name(tag_expression: str) -> str:
    tag_expression = tag_expression.strip()
    if not tag_expression:
        raise ValueError("Empty tag expression")
    return TAG_NAME_SPLIT_RE.split(tag_expression, maxsplit=1)[0]


def is_supported_tag(tag_name: str) -> bool:
    return tag_name in SUPPORTED_TAGS


def decode_entity(name: str) -> Optional[str]:
    """Character for a named entity (without '&' and ';'), or None if unsupported."""
    return ENTITIES.get(name)


def find_entity_end(markup: str, start: int) -> int:
    """
    Index of the nearer of the next ';' or ' ' after `start`, or -1.
    A space terminator is kept by the caller as a literal character.
    """
    candidates = [i for i in (markup.find(';', start), markup.find(' ', start)) if i != -1]
    return min(candidates) if candidates else -1
