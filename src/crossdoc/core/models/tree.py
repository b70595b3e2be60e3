"""
Module: core.models.tree

Purpose:
    Finalized document tree produced by the builders: nodes, pages and
    the document with its image registry. Frozen dataclasses, created
    once after flow and never re-laid out.

Key Classes:
    - BlockOrientation: Vertical (stacked) or horizontal (weighted) children
    - Node: Positioned element with style attributes and ordered children
    - Page: Root node carrying its paper presets
    - Document: Ordered pages plus hash -> ImageRef mapping

Dependencies:
    - dataclasses (std)
    - core.models.geom: Value types

Used By:
    - builder: NodeBuilder.to_node(), PageBuilder.to_page()
    - core.utils.serialization: JSON round trip
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .geom import Background, Border, Box, Font, ImageRef, Inset

# Keys with a typed field on Node. Anything else in a raw mapping is kept
# verbatim in Node.attrs.
NODE_KEYS = frozenset({
    "tag", "box", "padding", "margin", "block_orientation", "weight",
    "border", "background", "font", "text", "src", "hash", "children",
})
PAGE_KEYS = NODE_KEYS | {"orientation", "size", "page_margin"}


class BlockOrientation(str, Enum):
    """How a container lays out its children."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @classmethod
    def parse(cls, value: Any) -> BlockOrientation:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Invalid block orientation: {value!r}") from None


def normalize_tag(tag: Any) -> str:
    """Validate a tag label and return its canonical uppercase form."""
    if not isinstance(tag, str) or not tag.strip():
        raise ValueError(f"tag must be a non-empty string: {tag!r}")
    return tag.strip().upper()


@dataclass(frozen=True)
class Node:
    """
    Positioned document element (immutable).

    Attributes:
        tag: Uppercase element label ("DIV", "P", "IMG"...)
        box: Flowed rectangle, relative to the parent's box origin
        padding: Inner spacing
        margin: Outer spacing reserved by the parent
        block_orientation: Child layout direction
        weight: Share of a horizontal parent's content width
        border, background, font: Optional visual attributes
        text: Optional text content
        src, hash: Image source and its registry key (images only)
        children: Child nodes in flow/render order
        attrs: Passthrough attributes preserved verbatim

    Invariants:
        - tag is non-empty and uppercase
        - weight >= 0
        - box, padding, margin, border, background and font are frozen
          copies; attrs is a read-only view
    """

    tag: str
    box: Box = field(default_factory=Box)
    padding: Inset = field(default_factory=Inset)
    margin: Inset = field(default_factory=Inset)
    block_orientation: BlockOrientation = BlockOrientation.VERTICAL
    weight: float = 1.0
    border: Optional[Border] = None
    background: Optional[Background] = None
    font: Optional[Font] = None
    text: Optional[str] = None
    src: Optional[str] = None
    hash: Optional[str] = None
    children: Tuple[Node, ...] = ()
    attrs: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tag", normalize_tag(self.tag))
        object.__setattr__(self, "block_orientation", BlockOrientation.parse(self.block_orientation))
        object.__setattr__(self, "children", tuple(self.children))
        for name in ("box", "padding", "margin", "border", "background", "font"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, value.frozen())
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))
        if self.weight < 0:
            raise ValueError(f"weight must be >= 0: {self.weight}")

    # ─────────────────────────────────────────────────────────────────────────
    # Traversal
    # ─────────────────────────────────────────────────────────────────────────

    def walk(self, origin_x: float = 0, origin_y: float = 0, depth: int = 0) -> Iterator[Tuple[Node, float, float, int]]:
        """
        Yield every node depth-first with its absolute position.

        Args:
            origin_x: Absolute x of the parent's box origin
            origin_y: Absolute y of the parent's box origin
            depth: Depth of this node (root is 0)

        Yields:
            (node, abs_x, abs_y, depth) in render order
        """
        abs_x = origin_x + self.box.x
        abs_y = origin_y + self.box.y
        yield self, abs_x, abs_y, depth
        for child in self.children:
            yield from child.walk(abs_x, abs_y, depth + 1)

    def iter_text(self) -> Iterator[Node]:
        """Yield all nodes carrying text, in render order."""
        for node, _, _, _ in self.walk():
            if node.text:
                yield node

    @property
    def is_image(self) -> bool:
        return self.src is not None

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        d: Dict[str, Any] = dict(self.attrs)
        d.update({
            "tag": self.tag,
            "box": self.box.to_dict(),
            "padding": self.padding.to_dict(),
            "margin": self.margin.to_dict(),
            "block_orientation": self.block_orientation.value,
            "weight": self.weight,
        })
        if self.border is not None:
            d["border"] = self.border.to_dict()
        if self.background is not None:
            d["background"] = self.background.to_dict()
        if self.font is not None:
            d["font"] = self.font.to_dict()
        if self.text is not None:
            d["text"] = self.text
        if self.src is not None:
            d["src"] = self.src
            d["hash"] = self.hash
        d["children"] = [child.to_dict() for child in self.children]
        return d

    @classmethod
    def _kwargs_from_dict(cls, data: Mapping[str, Any], known: frozenset) -> Dict[str, Any]:
        if not isinstance(data, Mapping):
            raise ValueError(f"node must be a mapping, got {type(data).__name__}")
        children = data.get("children") or []
        if not isinstance(children, (list, tuple)):
            raise ValueError("children must be a list")
        return {
            "tag": data.get("tag"),
            "box": Box.from_dict(data.get("box") or {}),
            "padding": Inset.coerce(data.get("padding") or {}),
            "margin": Inset.coerce(data.get("margin") or {}),
            "block_orientation": data.get("block_orientation", BlockOrientation.VERTICAL),
            "weight": data.get("weight", 1.0),
            "border": Border.from_dict(data["border"]) if data.get("border") is not None else None,
            "background": Background.from_dict(data["background"]) if data.get("background") is not None else None,
            "font": Font.from_dict(data["font"]) if data.get("font") is not None else None,
            "text": data.get("text"),
            "src": data.get("src"),
            "hash": data.get("hash"),
            "children": tuple(Node.from_dict(child) for child in children),
            "attrs": {k: v for k, v in data.items() if k not in known},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Node:
        """
        Build a node tree from a raw mapping.

        Raises:
            ValueError: If tag is missing/empty or children is not a list
        """
        return cls(**cls._kwargs_from_dict(data, NODE_KEYS))


@dataclass(frozen=True)
class Page(Node):
    """
    Root node of one page.

    The box is the full paper size and the padding is the uniform page
    margin, both fixed when the page is opened.
    """

    tag: str = "PAGE"
    orientation: str = "portrait"
    size: str = "us-letter"
    page_margin: str = "0.75in"

    @property
    def content_height(self) -> float:
        """Height available to children inside the page margin."""
        return (self.box.height or 0) - self.padding.vertical

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({"orientation": self.orientation, "size": self.size, "page_margin": self.page_margin})
        return d

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Page:
        kwargs = cls._kwargs_from_dict({"tag": "PAGE", **data}, PAGE_KEYS)
        return cls(
            orientation=data.get("orientation", "portrait"),
            size=data.get("size", "us-letter"),
            page_margin=str(data.get("page_margin", "0.75in")),
            **kwargs,
        )


@dataclass(frozen=True)
class Document:
    """
    Finalized document (immutable).

    Attributes:
        pages: Pages in order
        images: Image registry, one entry per distinct hash

    Example:
        >>> doc = Document(pages=(page,), images={})
        >>> doc.page_count
        1
    """

    pages: Tuple[Page, ...] = ()
    images: Mapping[str, ImageRef] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pages", tuple(self.pages))
        object.__setattr__(self, "images", MappingProxyType(dict(self.images)))
        for key, ref in self.images.items():
            if key != ref.hash:
                raise ValueError(f"image registry key {key!r} does not match hash {ref.hash!r}")

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def to_dict(self) -> dict:
        return {
            "pages": [page.to_dict() for page in self.pages],
            "images": {key: ref.to_dict() for key, ref in self.images.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Document:
        images = {key: ImageRef.from_dict(raw) for key, raw in (data.get("images") or {}).items()}
        return cls(
            pages=tuple(Page.from_dict(p) for p in data.get("pages", [])),
            images=images,
        )
