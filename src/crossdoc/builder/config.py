"""
Module: builder.config

Purpose:
    Configuration for the flow layout engine and page defaults.

Key Classes:
    - FlowConfig: Text-height estimation constants
    - PageDefaults: Attributes applied to pages that do not set them

Dependencies:
    - dataclasses (std)
    - core.paper: Preset validation

Used By:
    - builder.metrics: Average character width ratio
    - builder.page_builder: Page presets
    - builder.document_builder: Passed to every builder it creates
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from crossdoc.core.paper import get_dimensions, page_margin_size


# Average glyph width as a fraction of the font size
DEFAULT_CHAR_WIDTH_RATIO = 0.48

# Points per line when a font has no line_height
DEFAULT_LINE_HEIGHT = 1.0


@dataclass(frozen=True)
class FlowConfig:
    """
    Configuration for flow (immutable).

    Attributes:
        char_width_ratio: Average character width / font size used by the
            text-height estimate
        default_line_height: Line height used when a font has none

    Example:
        >>> FlowConfig().char_width_ratio
        0.48
    """

    char_width_ratio: float = DEFAULT_CHAR_WIDTH_RATIO
    default_line_height: float = DEFAULT_LINE_HEIGHT

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.char_width_ratio <= 0:
            raise ValueError(f"char_width_ratio must be positive: {self.char_width_ratio}")
        if self.default_line_height < 0:
            raise ValueError(f"default_line_height must be >= 0: {self.default_line_height}")


@dataclass(frozen=True)
class PageDefaults:
    """
    Default page attributes (immutable).

    Attributes:
        orientation: "portrait" or "landscape"
        size: Paper preset, see core.paper.PAPER_SIZES
        page_margin: Uniform page margin shorthand
    """

    orientation: str = "portrait"
    size: str = "us-letter"
    page_margin: str = "0.75in"

    def __post_init__(self) -> None:
        """Fail fast on unknown presets."""
        get_dimensions(self.size, self.orientation)
        page_margin_size(self.page_margin)

    def to_dict(self) -> dict:
        return asdict(self)
