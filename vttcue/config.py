"""
vttcue/config.py

Ingest options. Every field can be overridden from the environment (VTTCUE_*).
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off"}:
        return False
    return default


@dataclass
class IngestConfig:
    encoding: str = "utf-8"
    # Drop U+200B (zero width space) before parsing
    strip_zero_width: bool = True
    # Read ::cue rules from STYLE blocks
    parse_style_blocks: bool = True
    # Drop cues whose text is empty after markup parsing
    skip_empty_cues: bool = False

    @classmethod
    def from_env(cls) -> "IngestConfig":
        defaults = cls()
        return cls(
            encoding=os.getenv("VTTCUE_ENCODING", "").strip() or defaults.encoding,
            strip_zero_width=_env_flag("VTTCUE_STRIP_ZERO_WIDTH", defaults.strip_zero_width),
            parse_style_blocks=_env_flag("VTTCUE_PARSE_STYLES", defaults.parse_style_blocks),
            skip_empty_cues=_env_flag("VTTCUE_SKIP_EMPTY", defaults.skip_empty_cues),
        )
