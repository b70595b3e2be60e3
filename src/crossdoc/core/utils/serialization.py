"""
Serialization Utilities

To/from JSON utilities for finalized documents.

- `serialize_document` / `deserialize_document` convert between Document
  and plain dictionaries (validated before deserialization)
- `save_document_json` / `load_document_json` wrap them with file I/O
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..models.tree import Document
from ..schemas.validator import validate_document

logger = logging.getLogger(__name__)


def serialize_document(document: Document) -> dict[str, Any]:
    """
    Serialize a Document to a dictionary.

    The output can be written to JSON and will pass validate_document().
    """
    return document.to_dict()


def deserialize_document(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Document:
    """
    Deserialize a Document from a dictionary.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate before deserializing
        strict: Also validate against the JSON schema

    Returns:
        Document instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If data cannot be parsed
    """
    if validate:
        validate_document(data, strict=strict)
    return Document.from_dict(data)


def save_document_json(document: Document, path: Path, *, indent: int = 2) -> None:
    """Write a document to a JSON file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_document(document), f, indent=indent)
    logger.debug(f"Saved document with {document.page_count} pages to {path}")


def load_document_json(path: Path, *, strict: bool = False) -> Document:
    """Load and validate a document from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return deserialize_document(data, strict=strict)
