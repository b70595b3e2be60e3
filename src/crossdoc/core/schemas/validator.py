"""
Schema Validation Utilities

Validates serialized documents before they are turned back into
Document instances.

Two levels:
- Basic (default): required keys, tag labels, geometry presence, checked
  recursively with a precise error path
- Strict: additionally validates against document.schema.json with
  jsonschema
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when serialized data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_document(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a serialized document.

    Args:
        data: Dictionary produced by Document.to_dict() or read from JSON
        strict: If True, also validate against the JSON schema

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("document must be a dict", path="")

    missing = [f for f in ("pages", "images") if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing],
        )

    pages = data["pages"]
    if not isinstance(pages, list):
        raise ValidationError("pages must be a list", path="pages")
    for i, page in enumerate(pages):
        _validate_node(page, f"pages[{i}]")

    images = data["images"]
    if not isinstance(images, dict):
        raise ValidationError("images must be a dict", path="images")
    for key, ref in images.items():
        if not isinstance(ref, dict) or not ref.get("src"):
            raise ValidationError(f"Image {key!r} has no src", path=f"images.{key}")
        if ref.get("hash") != key:
            raise ValidationError(
                f"Image key {key!r} does not match hash {ref.get('hash')!r}",
                path=f"images.{key}.hash",
            )

    if strict:
        schema = _load_schema("document")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e


def _validate_node(data: Any, path: str) -> None:
    """Validate a node recursively."""
    if not isinstance(data, dict):
        raise ValidationError("node must be a dict", path=path)

    tag = data.get("tag")
    if not isinstance(tag, str) or not tag.strip():
        raise ValidationError(f"Invalid tag: {tag!r}", path=f"{path}.tag")

    box = data.get("box")
    if not isinstance(box, dict):
        raise ValidationError("box must be a dict", path=f"{path}.box")
    missing = [k for k in ("x", "y", "width", "height") if box.get(k) is None]
    if missing:
        raise ValidationError(
            f"Box missing geometry: {missing}",
            path=f"{path}.box",
            errors=[f"Missing field: {k}" for k in missing],
        )

    weight = data.get("weight", 1.0)
    if not isinstance(weight, (int, float)) or weight < 0:
        raise ValidationError(f"Invalid weight: {weight!r}", path=f"{path}.weight")

    children = data.get("children", [])
    if not isinstance(children, list):
        raise ValidationError("children must be a list", path=f"{path}.children")
    for i, child in enumerate(children):
        _validate_node(child, f"{path}.children[{i}]")
