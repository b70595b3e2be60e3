"""
Module: builder.node_builder

Purpose:
    Mutable construction-time node with the declarative construction API
    and the recursive flow algorithm that assigns final geometry.

Key Classes:
    - NodeBuilder: Builder for one node and its children

Algorithm (flow):
    flow(x, y, w) places the node at (x + margin.left, y + margin.top)
    with width w minus horizontal margins, then lays out children:
    1. Vertical: children stacked from (padding.left, padding.top) at the
       full content width; the stacked height raises min_height.
    2. Horizontal: each child gets round(weight / total * content width),
       rounded per child; the tallest child raises min_height.
    Text then raises min_height to the estimated text height. The box
    height is min_height plus vertical padding, and flow returns the box
    height plus vertical margins.

    Child coordinates are relative to the parent's box origin.

Dependencies:
    - core.models: Geometry values and the immutable Node
    - builder.metrics: Text-height estimate (via the document builder)

Used By:
    - builder.page_builder: PageBuilder subclass
    - builder.document_builder: Root of every page
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Tuple

from crossdoc.core.errors import DivisionHazardError, FlowOrderError
from crossdoc.core.models.geom import Background, Border, BorderSide, Box, Font, Inset, hash_src
from crossdoc.core.models.tree import BlockOrientation, Node, normalize_tag

if TYPE_CHECKING:
    from .document_builder import DocumentBuilder

logger = logging.getLogger(__name__)

Configure = Callable[["NodeBuilder"], Any]


class NodeBuilder:
    """
    Builder for a single node.

    Known attribute keys (tag, block_orientation, weight, box, padding,
    margin, border, background, font, text, src) become typed fields; all
    other keys pass through to Node.attrs unchanged.

    Attributes:
        tag: Uppercase tag
        block_orientation: Child layout direction (default vertical)
        weight: Share of a horizontal parent's content width (default 1.0)
        min_height: Running maximum of content height (default 0)
        box: Geometry assigned by flow
        margin: Outer spacing (default zero)
        padding: Inner spacing (default zero)
        border, background, font, text: Optional visual attributes
        src, hash: Image source and registry key

    Example:
        >>> doc = DocumentBuilder()
        >>> page = doc.page()
        >>> row = page.horizontal_div()
        >>> left = row.node("div", {"weight": 2})
    """

    def __init__(self, doc_builder: DocumentBuilder, attrs: Optional[Mapping[str, Any]] = None):
        raw: Dict[str, Any] = dict(attrs or {})
        self._doc_builder = doc_builder

        self.tag = normalize_tag(raw.pop("tag", "DIV"))
        self.block_orientation = BlockOrientation.parse(
            raw.pop("block_orientation", None) or BlockOrientation.VERTICAL
        )

        weight = raw.pop("weight", None)
        self.weight = 1.0 if weight is None else float(weight)
        if self.weight < 0:
            raise ValueError(f"weight must be >= 0: {self.weight}")

        self.box = Box.from_dict(raw.pop("box")) if "box" in raw else Box()
        self.padding = _mutable(Inset.coerce(raw.pop("padding"))) if "padding" in raw else Inset()
        self.margin = _mutable(Inset.coerce(raw.pop("margin"))) if "margin" in raw else Inset()

        border = raw.pop("border", None)
        self.border: Optional[Border] = Border.from_dict(border) if isinstance(border, Mapping) else _mutable(border)
        background = raw.pop("background", None)
        self.background: Optional[Background] = (
            Background.from_dict(background) if isinstance(background, Mapping) else _mutable(background)
        )
        font = raw.pop("font", None)
        self.font: Optional[Font] = Font.from_dict(font) if isinstance(font, Mapping) else _mutable(font)
        self.text: Optional[str] = raw.pop("text", None)

        self.src: Optional[str] = None
        self.hash: Optional[str] = None
        src = raw.pop("src", None)
        raw.pop("hash", None)

        self.min_height: float = 0
        self.attrs: Dict[str, Any] = raw
        self._child_builders: List[NodeBuilder] = []

        if src is not None:
            self.image_src(src)

    @property
    def children(self) -> Tuple[NodeBuilder, ...]:
        return tuple(self._child_builders)

    def push_min_height(self, h: float) -> None:
        """Raise min_height to h; never lowers it."""
        if h > self.min_height:
            self.min_height = h

    # ─────────────────────────────────────────────────────────────────────────
    # Attribute helpers
    # ─────────────────────────────────────────────────────────────────────────

    def default_font(self, adjustments: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        """Assign Font.default(adjustments) unless the node already has a font."""
        if self.font is None:
            self.font = Font.default(adjustments, **kwargs)

    def border_all(self, s: str) -> None:
        """Set all four sides from one border shorthand."""
        side = BorderSide.from_s(s)
        # copy() gives each side its own instance
        self.border = Border(top=side, right=side, bottom=side, left=side).copy()

    def border_top(self, s: str) -> None:
        self._set_border_side("top", s)

    def border_right(self, s: str) -> None:
        self._set_border_side("right", s)

    def border_bottom(self, s: str) -> None:
        self._set_border_side("bottom", s)

    def border_left(self, s: str) -> None:
        self._set_border_side("left", s)

    def background_color(self, c: str) -> None:
        if self.background is None:
            self.background = Background()
        self.background.color = c

    def image_src(self, src: str) -> None:
        """Record an image source and register it with the document."""
        if not src:
            raise ValueError("image src must be non-empty")
        self.src = src
        self.hash = hash_src(src)
        self._doc_builder.add_image(src, self.hash)

    def _set_border_side(self, side: str, s: str) -> None:
        parsed = BorderSide.from_s(s)
        if self.border is None:
            self.border = Border()
        setattr(self.border, side, parsed)

    # ─────────────────────────────────────────────────────────────────────────
    # Children
    # ─────────────────────────────────────────────────────────────────────────

    def node(
        self,
        tag: str,
        attrs: Optional[Mapping[str, Any]] = None,
        configure: Optional[Configure] = None,
    ) -> NodeBuilder:
        """
        Append a child node.

        When the document builder has a styler, the child is styled before
        ``configure`` runs, so anything set in ``configure`` (or passed as
        margin/padding in attrs) wins over the cascade.

        Args:
            tag: Child tag (uppercased)
            attrs: Attribute mapping for the child
            configure: Called with the child builder

        Returns:
            The new child builder
        """
        raw = dict(attrs or {})
        raw["tag"] = tag
        child = NodeBuilder(self._doc_builder, raw)

        styler = self._doc_builder.styler
        if styler is not None:
            explicit = {key: getattr(child, key) for key in ("margin", "padding") if key in raw}
            styler.style_node(child)
            for key, value in explicit.items():
                setattr(child, key, value)

        if configure is not None:
            configure(child)
        self._child_builders.append(child)
        return child

    def horizontal_div(self, attrs: Optional[Mapping[str, Any]] = None, configure: Optional[Configure] = None) -> NodeBuilder:
        raw = dict(attrs or {})
        raw["block_orientation"] = BlockOrientation.HORIZONTAL
        return self.node("DIV", raw, configure)

    def vertical_div(self, attrs: Optional[Mapping[str, Any]] = None, configure: Optional[Configure] = None) -> NodeBuilder:
        raw = dict(attrs or {})
        raw["block_orientation"] = BlockOrientation.VERTICAL
        return self.node("DIV", raw, configure)

    div = vertical_div

    def image(self, src: str, attrs: Optional[Mapping[str, Any]] = None, configure: Optional[Configure] = None) -> NodeBuilder:
        """Append an IMG child for ``src``."""
        raw = dict(attrs or {})
        raw["src"] = src
        return self.node("IMG", raw, configure)

    # ─────────────────────────────────────────────────────────────────────────
    # Flow
    # ─────────────────────────────────────────────────────────────────────────

    def child_width(self) -> float:
        """Content width available to children (box width minus padding)."""
        if self.box.width is None:
            raise FlowOrderError(f"{self.tag} width read before its parent assigned it")
        return self.box.width - self.padding.left - self.padding.right

    def flow(self, x: float, y: float, w: float) -> float:
        """
        Position and size this node and its descendants.

        Args:
            x: Left edge offered by the parent (margin not applied)
            y: Top edge offered by the parent
            w: Width offered by the parent, including margins

        Returns:
            Height consumed in the parent, including vertical margins

        Raises:
            DivisionHazardError: Zero total weight under horizontal
                orientation, or text with no content width
        """
        self.box.x = x + self.margin.left
        self.box.y = y + self.margin.top
        self.box.width = w - self.margin.left - self.margin.right

        if self.block_orientation is BlockOrientation.HORIZONTAL:
            self._flow_children_horizontal()
        else:
            self._flow_children_vertical()

        if self.text and self.font is not None:
            metrics = self._doc_builder.metrics
            self.push_min_height(metrics.estimate_height(self.text, self.font, self.child_width()))

        self.box.height = self.min_height + self.padding.top + self.padding.bottom
        return self.box.height + self.margin.top + self.margin.bottom

    def to_node(self) -> Node:
        """Convert this flowed builder and its children to immutable Nodes."""
        return Node(**self._node_kwargs())

    def _node_kwargs(self) -> Dict[str, Any]:
        if self.box.width is None or self.box.height is None:
            raise FlowOrderError(f"{self.tag} converted before flow")
        return {
            "tag": self.tag,
            "box": self.box,
            "padding": self.padding,
            "margin": self.margin,
            "block_orientation": self.block_orientation,
            "weight": self.weight,
            "border": self.border,
            "background": self.background,
            "font": self.font,
            "text": self.text,
            "src": self.src,
            "hash": self.hash,
            "children": tuple(b.to_node() for b in self._child_builders),
            "attrs": dict(self.attrs),
        }

    def _total_child_weight(self) -> float:
        return sum(b.weight for b in self._child_builders)

    def _flow_children_vertical(self) -> float:
        """Stack children top to bottom; returns the stacked height."""
        width = self.child_width()
        x = self.padding.left
        y_top = self.padding.top
        y = y_top
        for b in self._child_builders:
            y += b.flow(x, y, width)
        self.push_min_height(y - y_top)
        return y - y_top

    def _flow_children_horizontal(self) -> None:
        """Distribute content width across children by weight."""
        total_weight = self._total_child_weight()
        if total_weight <= 0:
            raise DivisionHazardError(
                f"{self.tag} is horizontal but its {len(self._child_builders)} children have zero total weight"
            )
        width = self.child_width()
        x = self.padding.left
        y = self.padding.top
        for b in self._child_builders:
            w = round_half_up(b.weight / total_weight * width)
            dy = b.flow(x, y, w)
            x += w
            self.push_min_height(dy)

        used = x - self.padding.left
        if used != width:
            logger.debug(f"{self.tag}: rounded child widths use {used}pt of {width}pt")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _mutable(value: Any) -> Any:
    """Builders own mutable values; frozen ones from a finished tree are copied."""
    if value is not None and value.is_frozen:
        return value.copy()
    return value
