from .vector import Vector2, V2, Vdir
from .path import Path
from .errors import DiagramError, ParameterRangeError, AnchorError, VariantError, MarkupError
from .markup import TextRun, ParseResult, parse_markup
from .diagram import (
    Diagram, DiagramType, ANCHORS, TEXTVAR_TAG,
    polygon, curve, line, empty, text, textvar, image, multiline, multiline_bb,
    diagram_combine,
)
from .config import CoreConfig, DEFAULT_CONFIG
from .logging_utils import configure_logging
from . import transform, modifier, utils

__version__ = "0.1.0"

__all__ = [
    "Vector2", "V2", "Vdir", "Path",
    "DiagramError", "ParameterRangeError", "AnchorError", "VariantError", "MarkupError",
    "TextRun", "ParseResult", "parse_markup",
    "Diagram", "DiagramType", "ANCHORS", "TEXTVAR_TAG",
    "polygon", "curve", "line", "empty", "text", "textvar", "image",
    "multiline", "multiline_bb", "diagram_combine",
    "CoreConfig", "DEFAULT_CONFIG", "configure_logging",
    "transform", "modifier", "utils",
]
