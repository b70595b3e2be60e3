"""
Module: core.errors

Purpose:
    Exception hierarchy for the CrossDoc layout core. Every error is
    raised synchronously from the operation that detects it and is never
    recovered inside the core.

Key Classes:
    - CrossDocError: Root of the hierarchy
    - ParseError / MalformedShorthandError: Bad shorthand or preset strings
    - LayoutError / DivisionHazardError / FlowOrderError: Flow failures
    - StyleError: Invalid style table

Used By:
    - core.models.geom: Shorthand parsing
    - core.paper: Paper and margin presets
    - builder: Flow and style cascade
"""


class CrossDocError(Exception):
    """Base exception for all CrossDoc errors."""
    pass


class ParseError(CrossDocError):
    """Raised when a preset or attribute string cannot be parsed."""
    pass


class MalformedShorthandError(ParseError):
    """Raised when a border, inset or page-margin shorthand is malformed."""

    def __init__(self, kind: str, value: object):
        self.kind = kind
        self.value = value
        super().__init__(f"Malformed {kind} shorthand: {value!r}")


class LayoutError(CrossDocError):
    """Base class for flow errors."""
    pass


class DivisionHazardError(LayoutError):
    """Raised when flow would divide by a zero weight total or width."""
    pass


class FlowOrderError(LayoutError):
    """Raised when a node's width is read before its parent assigned it."""
    pass


class StyleError(CrossDocError):
    """Raised when a style table is inconsistent."""
    pass
