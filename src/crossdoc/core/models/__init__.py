"""
Core Models Package

Value types and the finalized document tree.

Geometry values (Box, Inset, Border...) are mutable while builders lay
out a document. The tree types (Node, Page, Document) are frozen
dataclasses holding copies of those values, produced once after flow.
"""

from .geom import Background, Border, BorderSide, Box, Font, ImageRef, Inset, hash_src
from .tree import BlockOrientation, Document, Node, Page

__all__ = [
    "Background",
    "Border",
    "BorderSide",
    "Box",
    "Font",
    "ImageRef",
    "Inset",
    "hash_src",
    "BlockOrientation",
    "Document",
    "Node",
    "Page",
]
