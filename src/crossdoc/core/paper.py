"""
Module: core.paper

Purpose:
    Paper-size presets and length shorthands in document units (points).
    These are the size-lookup and page-margin collaborators the page
    builder consults when a page is opened.

Key Functions:
    - parse_length(): "0.75in" / "2cm" / "12" -> points
    - get_dimensions(): (size preset, orientation preset) -> width/height
    - page_margin_size(): page-margin shorthand -> uniform inset

Dependencies:
    - reportlab.lib.pagesizes: Standard paper sizes
    - reportlab.lib.units: inch/cm/mm conversion factors

Used By:
    - core.models.geom: Inset and border shorthands
    - builder.page_builder: Initial page box and padding
"""

from __future__ import annotations

import re
from typing import Dict, Tuple

from reportlab.lib import pagesizes
from reportlab.lib.units import cm, inch, mm

from .errors import MalformedShorthandError, ParseError


# Conversion factors to points. px is treated as a point, the same as the
# document unit, so "1px" borders stay one unit wide.
UNIT_FACTORS: Dict[str, float] = {
    "": 1.0,
    "pt": 1.0,
    "px": 1.0,
    "in": inch,
    "cm": cm,
    "mm": mm,
}

PAPER_SIZES: Dict[str, Tuple[float, float]] = {
    "us-letter": pagesizes.letter,
    "us-legal": pagesizes.legal,
    "tabloid": pagesizes.TABLOID,
    "a3": pagesizes.A3,
    "a4": pagesizes.A4,
    "a5": pagesizes.A5,
    "b5": pagesizes.B5,
}

ORIENTATIONS = ("portrait", "landscape")

_LENGTH_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?|-?\.\d+)\s*([a-z]*)\s*$", re.IGNORECASE)


def parse_length(value: object, kind: str = "length") -> float:
    """
    Convert a length shorthand to points.

    Numbers pass through unchanged. Strings are a number followed by an
    optional unit (pt, px, in, cm, mm).

    Args:
        value: Number or shorthand string like "0.75in"
        kind: Shorthand name used in the error message

    Returns:
        Length in points

    Raises:
        MalformedShorthandError: If the string does not match the grammar

    Example:
        >>> parse_length("0.5in")
        36.0
    """
    if isinstance(value, bool):
        raise MalformedShorthandError(kind, value)
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        raise MalformedShorthandError(kind, value)

    match = _LENGTH_RE.match(value)
    if not match:
        raise MalformedShorthandError(kind, value)
    number, unit = match.group(1), match.group(2).lower()
    if unit not in UNIT_FACTORS:
        raise MalformedShorthandError(kind, value)
    return float(number) * UNIT_FACTORS[unit]


def get_dimensions(size: str = "us-letter", orientation: str = "portrait") -> Dict[str, float]:
    """
    Look up the page dimensions for a paper preset.

    Args:
        size: Paper preset name (case-insensitive), see PAPER_SIZES
        orientation: "portrait" or "landscape"

    Returns:
        Dict with "width" and "height" in points

    Raises:
        ParseError: If the size or orientation preset is unknown
    """
    key = str(size).strip().lower()
    if key not in PAPER_SIZES:
        raise ParseError(f"Unknown paper size: {size!r} (expected one of {sorted(PAPER_SIZES)})")

    orient = str(orientation).strip().lower()
    if orient not in ORIENTATIONS:
        raise ParseError(f"Unknown page orientation: {orientation!r}")

    base = PAPER_SIZES[key]
    width, height = pagesizes.landscape(base) if orient == "landscape" else pagesizes.portrait(base)
    return {"width": float(width), "height": float(height)}


def page_margin_size(shorthand: object) -> float:
    """
    Parse a page-margin shorthand into a single inset value.

    Raises:
        MalformedShorthandError: If the value is malformed or negative
    """
    size = parse_length(shorthand, kind="page margin")
    if size < 0:
        raise MalformedShorthandError("page margin", shorthand)
    return size
