"""
Module: builder

Purpose:
    Declarative construction API and flow layout engine.
    Builders are mutable while a document is assembled; to_doc() flows
    every page and returns the immutable Document.

Key Classes:
    - DocumentBuilder: Entry point, owns pages and the image registry
    - PageBuilder: One page (paper size + page margin)
    - NodeBuilder: Nested nodes and the flow algorithm
    - Styler: Style cascade over built-in defaults
    - FlowConfig / PageDefaults: Configuration
    - TextMetrics / AverageCharWidthMetrics: Text-height estimate

Used By:
    - scripts/build_demo_doc.py
"""

from .config import FlowConfig, PageDefaults
from .metrics import AverageCharWidthMetrics, TextMetrics
from .node_builder import NodeBuilder
from .page_builder import PageBuilder
from .document_builder import DocumentBuilder
from .styler import DEFAULT_STYLE, FontFamily, Styler

__all__ = [
    # Config
    "FlowConfig",
    "PageDefaults",
    # Metrics
    "AverageCharWidthMetrics",
    "TextMetrics",
    # Builders
    "NodeBuilder",
    "PageBuilder",
    "DocumentBuilder",
    # Styles
    "DEFAULT_STYLE",
    "FontFamily",
    "Styler",
]
