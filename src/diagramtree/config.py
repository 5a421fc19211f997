"""
config.py - Core configuration and default style maps.

The defaults are exposed read-only; the renderer layers a node's own style
over them (see Diagram.resolved_style).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Optional

__all__ = [
    "LOGGER_NAME", "CoreConfig", "DEFAULT_CONFIG",
    "DEFAULT_DIAGRAM_STYLE", "DEFAULT_TEXT_DIAGRAM_STYLE", "DEFAULT_TEXTDATA",
]

LOGGER_NAME = "diagramtree"


@dataclass(frozen=True)
class CoreConfig:
    """Immutable configuration shared by the diagram core."""
    logger_level: int = logging.INFO
    log_dir: Optional[Path] = None
    linespace: str = "1em"
    text_scale_factor: float = 1.0

    def __post_init__(self):
        if self.text_scale_factor <= 0:
            raise ValueError(f"text_scale_factor must be positive, got {self.text_scale_factor}")
        if self.log_dir is not None and not isinstance(self.log_dir, Path):
            object.__setattr__(self, "log_dir", Path(self.log_dir))


DEFAULT_CONFIG = CoreConfig()

DEFAULT_DIAGRAM_STYLE = MappingProxyType({
    "fill"             : "none",
    "stroke"           : "black",
    "stroke-width"     : "1",
    "stroke-linecap"   : "butt",
    "stroke-dasharray" : "none",
    "stroke-linejoin"  : "round",
    "vector-effect"    : "non-scaling-stroke",
    "opacity"          : "1",
})

DEFAULT_TEXT_DIAGRAM_STYLE = MappingProxyType({
    "fill"             : "black",
    "stroke"           : "none",
    "stroke-width"     : "0",
    "stroke-linecap"   : "butt",
    "stroke-dasharray" : "none",
    "stroke-linejoin"  : "round",
    "vector-effect"    : "non-scaling-stroke",
    "opacity"          : "1",
})

DEFAULT_TEXTDATA = MappingProxyType({
    "text"        : "",
    "font-family" : "Latin Modern Math, sans-serif",
    "font-size"   : "18",
    "font-weight" : "normal",
    "font-style"  : "normal",
    "text-anchor" : "middle",
    "dy"          : "0.25em",
    "angle"       : "0",
    "font-scale"  : "auto",
})
