"""
vttcue/css.py

Reads the ::cue rules of a WebVTT STYLE block into StyleRule objects.

Supported selectors (inside ::cue(...)):  #id, tag, .class.class, [voice="Name"]
and their combinations, e.g. ::cue(v.loud[voice="Esme"]). A bare ::cue applies to
the whole cue.
"""

import logging
import re
from typing import List, Optional

from PIL import ImageColor

from .models import StyleRule, Alignment, FontSizeUnit, Color

LOGGER = logging.getLogger(__name__)

RULE_RE = re.compile(r'::cue(?:\((.*?)\))?\s*\{(.*?)\}', re.DOTALL)
COMMENT_RE = re.compile(r'/\*.*?\*/', re.DOTALL)
VOICE_RE = re.compile(r'\[voice="([^"]*)"\]')
FONT_SIZE_RE = re.compile(r'^([0-9]+(?:\.[0-9]+)?|\.[0-9]+)(px|em|%)$')
# CSS alpha is 0..1; ImageColor expects 0..255 so these are converted here.
RGBA_RE = re.compile(r'^rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*([0-9]*\.?[0-9]+)\s*\)$')

TEXT_ALIGNS = {
    "start": Alignment.NORMAL,
    "left": Alignment.NORMAL,
    "center": Alignment.CENTER,
    "end": Alignment.OPPOSITE,
    "right": Alignment.OPPOSITE,
}


def parse_style_block(block: str, logger: Optional[logging.Logger] = None) -> List[StyleRule]:
    """Returns the rules of `block` in declaration order."""
    log = logger or LOGGER
    block = COMMENT_RE.sub('', block)

    rules = []
    for selector, content in RULE_RE.findall(block):
        rule = StyleRule()
        if not _apply_selector(selector.strip(), rule, log):
            continue
        props = [p.strip() for p in content.split(';') if ':' in p]
        for prop in props:
            k, v = [x.strip() for x in prop.split(':', 1)]
            _apply_property(k.lower(), v, rule, log)
        rules.append(rule)
    return rules


def parse_color(value: str) -> Color:
    """CSS color -> RGBA tuple. Raises ValueError when unrecognized."""
    value = value.strip().lower()
    m = RGBA_RE.match(value)
    if m:
        r, g, b = (min(int(x), 255) for x in m.group(1, 2, 3))
        alpha = min(float(m.group(4)), 1.0)
        return r, g, b, int(round(alpha * 255))
    return ImageColor.getcolor(value, "RGBA")


def _apply_selector(selector: str, rule: StyleRule, log: logging.Logger) -> bool:
    if not selector:
        return True

    voice_start = selector.find('[')
    if voice_start != -1:
        m = VOICE_RE.match(selector[voice_start:])
        if not m:
            log.warning("Unsupported ::cue selector: %s", selector)
            return False
        rule.target_voice = m.group(1)
        selector = selector[:voice_start]

    tag_and_id, *classes = selector.split('.')
    tag, hash_sign, cue_id = tag_and_id.partition('#')
    rule.target_tag = tag
    rule.target_id = cue_id if hash_sign else ""
    rule.target_classes = {c for c in classes if c}
    return True


def _apply_property(k: str, v: str, rule: StyleRule, log: logging.Logger):
    try:
        if k == 'color':
            rule.font_color = parse_color(v)
        elif k == 'background-color':
            rule.background_color = parse_color(v)
        elif k == 'font-family':
            rule.font_family = v.split(',')[0].strip().strip('"\'')
        elif k == 'font-weight':
            if v == 'bold':
                rule.bold = True
        elif k == 'font-style':
            if v == 'italic':
                rule.italic = True
        elif k == 'text-decoration':
            if 'underline' in v:
                rule.underline = True
            if 'line-through' in v:
                rule.linethrough = True
        elif k == 'font-size':
            _parse_font_size(v, rule)
        elif k == 'text-align':
            if v not in TEXT_ALIGNS:
                raise ValueError(v)
            rule.text_align = TEXT_ALIGNS[v]
        else:
            log.debug("Ignoring ::cue property %s", k)
    except ValueError:
        log.warning("Ignoring bad ::cue property %s: %s", k, v)


def _parse_font_size(value: str, rule: StyleRule):
    m = FONT_SIZE_RE.match(value.strip().lower())
    if not m:
        raise ValueError(value)
    rule.font_size = float(m.group(1))
    rule.font_size_unit = {
        'px': FontSizeUnit.PIXEL,
        'em': FontSizeUnit.EM,
        '%': FontSizeUnit.PERCENT,
    }[m.group(2)]
