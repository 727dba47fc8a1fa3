"""
vttcue/errors.py

Exception types raised by the cue decoder.
Only InvalidTimestamp is fatal to a cue; the ingester catches it and moves on to the next block.
"""


class VttCueError(Exception):
    """Base class for every error raised by vttcue."""


class InvalidTimestamp(VttCueError, ValueError):
    """A cue timing token could not be read as a timestamp."""


class InvalidPercentage(VttCueError, ValueError):
    """A setting value is not a finite 'N%' percentage."""


class InvalidHeader(VttCueError, ValueError):
    """The document does not start with the WEBVTT signature."""


class UnresolvedAnchorError(VttCueError, RuntimeError):
    """An anchor reached geometry derivation without being resolved."""
