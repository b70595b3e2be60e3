"""
Module: core.utils.merge

Purpose:
    Pure helpers for combining nested style tables.

Key Functions:
    - deep_merge(): Key-wise recursive merge returning a new mapping
    - sanitize_style_keys(): Canonical (uppercase) tag keys
    - freeze(): Read-only deep copy of a nested mapping

Used By:
    - builder.styler: Merging user styles over DEFAULT_STYLE
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping

# Style table sections that are not tag rules.
RESERVED_SECTIONS = frozenset({"font_families"})


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge ``override`` on top of ``base`` without mutating either.

    Nested mappings are merged key by key, so an override only replaces
    the keys it supplies. Any other value replaces the base value.

    Example:
        >>> deep_merge({"P": {"font": {"size": 12}, "margin": {"bottom": 12}}},
        ...            {"P": {"margin": {"bottom": 4}}})
        {'P': {'font': {'size': 12}, 'margin': {'bottom': 4}}}
    """
    merged: Dict[str, Any] = {key: _thaw(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = _thaw(value)
    return merged


def sanitize_style_keys(styles: Mapping[Any, Any]) -> Dict[str, Any]:
    """
    Normalize a user style table.

    Top-level tag keys are uppercased; nested keys are converted to
    strings. Reserved lowercase sections (font_families) are kept as-is.
    """
    result: Dict[str, Any] = {}
    for key, value in styles.items():
        name = str(key)
        if name not in RESERVED_SECTIONS:
            name = name.upper()
        result[name] = _stringify_keys(value)
    return result


def freeze(value: Any) -> Any:
    """Return a read-only deep copy of nested mappings."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(v) for key, v in value.items()})
    return value


def _stringify_keys(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {str(k): _stringify_keys(v) for k, v in value.items()}
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(v) for key, v in value.items()}
    return value
