"""
Module: builder.page_builder

Purpose:
    Builder for one page. Opens with the paper size as its box and the
    page margin as uniform padding, then flows its children vertically.

Key Classes:
    - PageBuilder: NodeBuilder subclass producing a Page

Dependencies:
    - core.paper: Paper-size lookup and page-margin parsing
    - builder.node_builder: Flow algorithm

Used By:
    - builder.document_builder: DocumentBuilder.page()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional

from crossdoc.core.models.geom import Inset
from crossdoc.core.models.tree import BlockOrientation, Page
from crossdoc.core.paper import get_dimensions, page_margin_size

from .node_builder import NodeBuilder

if TYPE_CHECKING:
    from .document_builder import DocumentBuilder

logger = logging.getLogger(__name__)


class PageBuilder(NodeBuilder):
    """
    Builder for a page.

    Attributes are merged over the document's PageDefaults
    (portrait, us-letter, 0.75in unless configured otherwise).

    Presets are stored lowercased. Pages always flow vertically; a
    horizontal block_orientation raises ValueError.

    Attributes:
        orientation: Orientation preset
        size: Paper size preset
        page_margin: Page margin shorthand

    Example:
        >>> page = PageBuilder(doc, {"size": "us-letter", "page_margin": "0.5in"})
        >>> page.box.width, page.padding.left
        (612.0, 36.0)
    """

    def __init__(self, doc_builder: DocumentBuilder, attrs: Optional[Mapping[str, Any]] = None):
        raw = {**doc_builder.page_defaults.to_dict(), **dict(attrs or {})}
        self.orientation = str(raw.pop("orientation")).strip().lower()
        self.size = str(raw.pop("size")).strip().lower()
        self.page_margin = str(raw.pop("page_margin"))
        raw.setdefault("tag", "PAGE")
        orientation = raw.pop("block_orientation", None)
        if orientation is not None and BlockOrientation.parse(orientation) is not BlockOrientation.VERTICAL:
            raise ValueError(f"pages flow their children vertically, got block_orientation={orientation!r}")
        super().__init__(doc_builder, raw)

        dimensions = get_dimensions(self.size, self.orientation)
        self.box.x = 0
        self.box.y = 0
        self.box.width = dimensions["width"]
        self.box.height = dimensions["height"]

        self.padding = Inset.uniform(page_margin_size(self.page_margin))

    @property
    def content_height(self) -> float:
        """Height available to children inside the page margin."""
        return self.box.height - self.padding.top - self.padding.bottom

    def to_page(self) -> Page:
        """
        Flow the page's children and convert to an immutable Page.

        The page box keeps its paper size. Content taller than the page is
        left in place for a pagination step and logged as a warning.
        """
        used = self._flow_children_vertical()
        if used > self.content_height:
            logger.warning(
                f"Page content overflows: {used:.1f}pt needed, "
                f"{self.content_height:.1f}pt available ({self.size}, {self.orientation})"
            )
        logger.debug(f"Flowed page with {len(self.children)} children, {used:.1f}pt used")

        return Page(
            orientation=self.orientation,
            size=self.size,
            page_margin=self.page_margin,
            **self._node_kwargs(),
        )
