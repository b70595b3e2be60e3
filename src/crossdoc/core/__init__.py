"""
CrossDoc Core Package

Shared data models, errors and pure utilities. Nothing in this package
performs layout; see crossdoc.builder for the flow algorithm.
"""

from .errors import (
    CrossDocError,
    DivisionHazardError,
    FlowOrderError,
    LayoutError,
    MalformedShorthandError,
    ParseError,
    StyleError,
)
from .models import Document, Node, Page

__all__ = [
    "CrossDocError",
    "DivisionHazardError",
    "FlowOrderError",
    "LayoutError",
    "MalformedShorthandError",
    "ParseError",
    "StyleError",
    "Document",
    "Node",
    "Page",
]
