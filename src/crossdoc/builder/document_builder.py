"""
Module: builder.document_builder

Purpose:
    Top-level construction API: owns the ordered pages and the
    content-addressed image registry, and assembles the final Document.

Key Classes:
    - DocumentBuilder: Document construction entry point

Dependencies:
    - builder.page_builder: Pages
    - builder.config / builder.metrics: Flow configuration
    - builder.styler: Optional automatic style cascade

Used By:
    - Library callers and scripts/build_demo_doc.py
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional

from crossdoc.core.models.geom import ImageRef
from crossdoc.core.models.tree import Document

from .config import FlowConfig, PageDefaults
from .metrics import AverageCharWidthMetrics, TextMetrics
from .page_builder import PageBuilder
from .styler import Styler

logger = logging.getLogger(__name__)


class DocumentBuilder:
    """
    Builds a Document from pages of nested nodes.

    Args:
        config: Flow configuration
        page_defaults: Attributes for pages that do not set them
        metrics: Text-height collaborator (defaults to the average
            character width estimate)
        styler: If given, every node created through node() is styled
            before its configure callback runs

    Example:
        >>> builder = DocumentBuilder()
        >>> page = builder.page({"page_margin": "0.5in"})
        >>> _ = page.node("p", {"text": "Hello"}, lambda p: p.default_font(size=12))
        >>> doc = builder.to_doc()
        >>> doc.page_count
        1
    """

    def __init__(
        self,
        *,
        config: Optional[FlowConfig] = None,
        page_defaults: Optional[PageDefaults] = None,
        metrics: Optional[TextMetrics] = None,
        styler: Optional[Styler] = None,
    ):
        self.config = config or FlowConfig()
        self.page_defaults = page_defaults or PageDefaults()
        self.metrics: TextMetrics = metrics or AverageCharWidthMetrics(self.config)
        self.styler = styler
        self._page_builders: List[PageBuilder] = []
        self._images: Dict[str, ImageRef] = {}

    @property
    def pages(self) -> tuple[PageBuilder, ...]:
        return tuple(self._page_builders)

    @property
    def images(self) -> Mapping[str, ImageRef]:
        """Read-only view of the image registry."""
        return MappingProxyType(self._images)

    def page(
        self,
        attrs: Optional[Mapping[str, Any]] = None,
        configure: Optional[Callable[[PageBuilder], Any]] = None,
    ) -> PageBuilder:
        """Open, configure and append a page."""
        page_builder = PageBuilder(self, attrs)
        if configure is not None:
            configure(page_builder)
        self._page_builders.append(page_builder)
        return page_builder

    def add_image(self, src: str, hash: str) -> ImageRef:
        """
        Register an image by hash.

        Registering a hash that is already present keeps the first entry.

        Returns:
            The registered ImageRef for the hash
        """
        existing = self._images.get(hash)
        if existing is not None:
            logger.debug(f"Image {hash[:12]} already registered")
            return existing
        ref = ImageRef(src=src, hash=hash)
        self._images[hash] = ref
        logger.debug(f"Registered image {hash[:12]} ({src})")
        return ref

    def to_doc(self) -> Document:
        """Flow every page and assemble the immutable Document."""
        pages = tuple(pb.to_page() for pb in self._page_builders)
        doc = Document(pages=pages, images=dict(self._images))
        logger.info(f"Built document with {doc.page_count} pages and {len(doc.images)} images")
        return doc
