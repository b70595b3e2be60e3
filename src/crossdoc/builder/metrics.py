"""
Module: builder.metrics

Purpose:
    Text-height estimation used by flow. The default is a coarse
    average-character-width model; callers can swap in a different
    TextMetrics implementation through DocumentBuilder.

Key Classes:
    - TextMetrics: Protocol for text-height collaborators
    - AverageCharWidthMetrics: Default estimate

Used By:
    - builder.node_builder: Min-height from text
"""

from __future__ import annotations

import math
from typing import Protocol

from crossdoc.core.errors import DivisionHazardError
from crossdoc.core.models.geom import Font

from .config import FlowConfig


class TextMetrics(Protocol):
    """Estimates the height needed to render text at a width."""

    def estimate_height(self, text: str, font: Font, width: float) -> float:
        ...


class AverageCharWidthMetrics:
    """
    Estimate wrapped text height from an average character width.

    lines = ceil(len(text) * font.size * ratio / width)
    height = (font.line_height or default_line_height) * lines

    The estimate ignores explicit line breaks and per-glyph widths.

    Example:
        >>> metrics = AverageCharWidthMetrics()
        >>> metrics.line_count("x" * 500, Font(size=12), 468)
        7
    """

    def __init__(self, config: FlowConfig | None = None):
        self.config = config or FlowConfig()

    def line_count(self, text: str, font: Font, width: float) -> int:
        if width <= 0:
            raise DivisionHazardError(f"Cannot wrap text into non-positive width {width}")
        return math.ceil(len(text) * font.size * self.config.char_width_ratio / width)

    def estimate_height(self, text: str, font: Font, width: float) -> float:
        line_height = font.line_height or self.config.default_line_height
        return line_height * self.line_count(text, font, width)
