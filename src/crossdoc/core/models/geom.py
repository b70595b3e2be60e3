"""
Module: core.models.geom

Purpose:
    Geometry and styling value types shared by builders and the
    finalized document tree: boxes, insets, borders, backgrounds, fonts
    and image references.

Key Classes:
    - Freezable: Mutable-until-frozen mixin for the value types
    - Box: Layout rectangle (x, y, width, height)
    - Inset: Four-sided spacing used for both margin and padding
    - BorderSide / Border: Per-side border settings
    - Background: Fill color
    - Font: Font settings with default-filling construction
    - ImageRef: Content-addressed image reference

Dependencies:
    - dataclasses (std)
    - hashlib (std): Image content hash
    - core.paper: Length shorthand parsing

Used By:
    - core.models.tree: Node fields
    - builder: Flow and style cascade

Note:
    Builders mutate these values during construction. The finished tree
    holds frozen() copies, so it never shares an instance with a builder
    and cannot be changed after to_doc().
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import FrozenInstanceError, dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional

from ..errors import MalformedShorthandError
from ..paper import parse_length

SIDES = ("top", "right", "bottom", "left")

_COLOR_RE = re.compile(r"^(#[0-9a-fA-F]{3,8}|[a-zA-Z]+)$")


class Freezable:
    """
    Mixin for value types that builders mutate and finished trees freeze.

    Instances start mutable. frozen() returns a read-only deep copy; any
    assignment on it raises FrozenInstanceError. copy() of a frozen value
    is mutable again.
    """

    __slots__ = ()

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise FrozenInstanceError(f"cannot assign to field {name!r} of a finished {type(self).__name__}")
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        if getattr(self, "_frozen", False):
            raise FrozenInstanceError(f"cannot delete field {name!r} of a finished {type(self).__name__}")
        object.__delattr__(self, name)

    @property
    def is_frozen(self) -> bool:
        return getattr(self, "_frozen", False)

    def frozen(self):
        """Read-only deep copy (self if already frozen)."""
        if self.is_frozen:
            return self
        values = {
            f.name: _frozen_value(getattr(self, f.name))
            for f in fields(self) if f.init
        }
        result = type(self)(**values)
        object.__setattr__(result, "_frozen", True)
        return result


def _frozen_value(value: Any) -> Any:
    return value.frozen() if isinstance(value, Freezable) else value


@dataclass(slots=True)
class Box(Freezable):
    """
    Layout rectangle in points.

    ``width`` stays None until flow assigns it, which lets builders detect
    reads that happen too early. Coordinates are relative to the parent
    node's box origin.
    """

    x: float = 0
    y: float = 0
    width: Optional[float] = None
    height: Optional[float] = None
    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def copy(self) -> Box:
        return replace(self)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Box:
        return cls(
            x=data.get("x", 0),
            y=data.get("y", 0),
            width=data.get("width"),
            height=data.get("height"),
        )


@dataclass(slots=True)
class Inset(Freezable):
    """
    Spacing on four sides, used for both margin and padding.

    Attributes:
        top, right, bottom, left: Side values in points (default 0)

    Example:
        >>> inset = Inset.from_s("8 4")
        >>> (inset.top, inset.right, inset.bottom, inset.left)
        (8.0, 4.0, 8.0, 4.0)
    """

    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0
    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def set_all(self, value: float) -> None:
        """Set all four sides to the same value."""
        self.top = value
        self.right = value
        self.bottom = value
        self.left = value

    @property
    def horizontal(self) -> float:
        """Sum of left and right."""
        return self.left + self.right

    @property
    def vertical(self) -> float:
        """Sum of top and bottom."""
        return self.top + self.bottom

    def copy(self) -> Inset:
        return replace(self)

    def to_dict(self) -> dict:
        return {side: getattr(self, side) for side in SIDES}

    @classmethod
    def uniform(cls, value: float) -> Inset:
        return cls(value, value, value, value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Inset:
        """Build from a side mapping; missing sides are zero."""
        unknown = set(data) - set(SIDES)
        if unknown:
            raise ValueError(f"Unknown inset sides: {sorted(unknown)}")
        return cls(**{side: parse_length(data.get(side, 0), "inset") for side in SIDES})

    @classmethod
    def from_s(cls, s: str) -> Inset:
        """
        Parse a CSS-style inset shorthand.

        One value sets all sides, two set vertical/horizontal, three set
        top/horizontal/bottom and four set top/right/bottom/left.

        Raises:
            MalformedShorthandError: On an empty string, too many values
                or a bad length
        """
        if not isinstance(s, str):
            raise MalformedShorthandError("inset", s)
        parts = s.split()
        if not 1 <= len(parts) <= 4:
            raise MalformedShorthandError("inset", s)
        values = [parse_length(p, "inset") for p in parts]
        if len(values) == 1:
            return cls.uniform(values[0])
        if len(values) == 2:
            return cls(values[0], values[1], values[0], values[1])
        if len(values) == 3:
            return cls(values[0], values[1], values[2], values[1])
        return cls(*values)

    @classmethod
    def coerce(cls, value: Any) -> Inset:
        """Accept an Inset, a side mapping, a shorthand string or a number."""
        if isinstance(value, Inset):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        if isinstance(value, str):
            return cls.from_s(value)
        return cls.uniform(parse_length(value, "inset"))


@dataclass(slots=True)
class BorderSide(Freezable):
    """One side of a border: width in points, line style and color."""

    width: float
    style: str = "solid"
    color: str = "#000000ff"
    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def to_dict(self) -> dict:
        return {"width": self.width, "style": self.style, "color": self.color}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BorderSide:
        return cls(
            width=data["width"],
            style=data.get("style", "solid"),
            color=data.get("color", "#000000ff"),
        )

    @classmethod
    def from_s(cls, s: str) -> BorderSide:
        """
        Parse a "<width><unit> <style> <color>" shorthand.

        Example:
            >>> BorderSide.from_s("1px solid #aaaaaaff")
            BorderSide(width=1.0, style='solid', color='#aaaaaaff')

        Raises:
            MalformedShorthandError: Unless all three components are valid
        """
        if not isinstance(s, str):
            raise MalformedShorthandError("border", s)
        parts = s.split()
        if len(parts) != 3:
            raise MalformedShorthandError("border", s)
        width_s, style, color = parts
        try:
            width = parse_length(width_s, "border")
        except MalformedShorthandError:
            raise MalformedShorthandError("border", s) from None
        if width < 0 or not style.isalpha() or not _COLOR_RE.match(color):
            raise MalformedShorthandError("border", s)
        return cls(width=width, style=style.lower(), color=color)


@dataclass(slots=True)
class Border(Freezable):
    """Container for the four optional border sides."""

    top: Optional[BorderSide] = None
    right: Optional[BorderSide] = None
    bottom: Optional[BorderSide] = None
    left: Optional[BorderSide] = None
    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def copy(self) -> Border:
        return Border(*(replace(s) if s else None for s in (self.top, self.right, self.bottom, self.left)))

    def to_dict(self) -> dict:
        return {side: getattr(self, side).to_dict() for side in SIDES if getattr(self, side)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Border:
        return cls(**{side: BorderSide.from_dict(data[side]) for side in SIDES if data.get(side)})


@dataclass(slots=True)
class Background(Freezable):
    color: Optional[str] = None
    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def copy(self) -> Background:
        return replace(self)

    def to_dict(self) -> dict:
        return {"color": self.color}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Background:
        return cls(color=data.get("color"))


@dataclass(slots=True)
class Font(Freezable):
    """
    Font settings.

    ``line_height`` is optional; flow treats a missing value as one point
    per line. ``family`` is filled by the style cascade when the style table
    declares a default font family.
    """

    size: float = 12
    family: Optional[str] = None
    color: str = "#000000ff"
    align: str = "left"
    line_height: Optional[float] = None
    weight: str = "normal"
    style: str = "normal"
    _frozen: bool = field(default=False, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError(f"font size must be positive: {self.size}")
        if self.line_height is not None and self.line_height < 0:
            raise ValueError(f"line_height must be >= 0: {self.line_height}")

    @classmethod
    def default(cls, adjustments: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Font:
        """
        Build a font from the defaults with the given fields replaced.

        Example:
            >>> Font.default({"size": 24}).size
            24
        """
        values: Dict[str, Any] = dict(adjustments or {})
        values.update(kwargs)
        names = {f.name for f in fields(cls) if f.init}
        unknown = set(values) - names
        if unknown:
            raise ValueError(f"Unknown font attributes: {sorted(unknown)}")
        return cls(**values)

    def copy(self) -> Font:
        return replace(self)

    def to_dict(self) -> dict:
        d = {"size": self.size, "color": self.color, "align": self.align,
             "weight": self.weight, "style": self.style}
        if self.family is not None:
            d["family"] = self.family
        if self.line_height is not None:
            d["line_height"] = self.line_height
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Font:
        return cls.default(data)


@dataclass(frozen=True, slots=True)
class ImageRef:
    """
    Image reference keyed by a content hash of its source.

    Attributes:
        src: Image source (URL or path)
        hash: Deterministic key derived from src, see hash_src()
    """

    src: str
    hash: str = field(default="")

    def __post_init__(self) -> None:
        if not self.src:
            raise ValueError("image src must be non-empty")
        if not self.hash:
            object.__setattr__(self, "hash", hash_src(self.src))

    def to_dict(self) -> dict:
        return {"src": self.src, "hash": self.hash}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ImageRef:
        return cls(src=data["src"], hash=data.get("hash", ""))


def hash_src(src: str) -> str:
    """Deterministic content-addressing key for an image source."""
    return hashlib.sha1(src.encode("utf-8")).hexdigest()
