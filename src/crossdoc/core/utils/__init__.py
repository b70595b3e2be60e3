"""
Utils Package

Style-table merging and document serialization.
"""

from .merge import deep_merge
from .serialization import (
    serialize_document,
    deserialize_document,
    save_document_json,
    load_document_json,
)

__all__ = [
    "deep_merge",
    "serialize_document",
    "deserialize_document",
    "save_document_json",
    "load_document_json",
]
