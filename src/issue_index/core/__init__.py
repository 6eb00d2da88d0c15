"""Core functionality for issue index processing."""

from . import models
from . import segmenters
from . import parsers
from .config import DEFAULT_CONFIG, PatternConfig

__all__ = ["models", "segmenters", "parsers", "DEFAULT_CONFIG", "PatternConfig"]
