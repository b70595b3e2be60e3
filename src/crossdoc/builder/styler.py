"""
Module: builder.styler

Purpose:
    Style cascade. Resolves a builder node's unset visual attributes
    from a tag-keyed style table merged over built-in defaults.

Key Classes:
    - Styler: Resolved style table + per-tag margin/padding cache
    - FontFamily: Named font-family descriptor for renderers

Key Constants:
    - DEFAULT_STYLE: Read-only built-in style table

Dependencies:
    - core.utils.merge: Deep merge of style tables
    - core.models.geom: Inset

Used By:
    - builder.node_builder: Automatic styling of new children
    - Rendering collaborators: register_fonts() hook

Shared Insets:
    The margin and padding Insets assigned by style_node() are created
    once per tag and the same instance is given to every node styled
    with that tag. Mutating ``node.margin.top`` in place therefore
    changes every node of that tag styled by this Styler. Assign a new
    Inset (``node.margin = Inset(...)``) to change one node only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping, Optional, Tuple

from crossdoc.core.errors import StyleError
from crossdoc.core.models.geom import Inset
from crossdoc.core.utils.merge import deep_merge, freeze, sanitize_style_keys

if TYPE_CHECKING:
    from .node_builder import NodeBuilder

logger = logging.getLogger(__name__)


DEFAULT_STYLE: Mapping[str, Any] = freeze({
    "FOOTER_LEFT": {
        "font": {"size": 10},
    },
    "FOOTER_CENTER": {
        "font": {"size": 10, "align": "center"},
    },
    "FOOTER_RIGHT": {
        "font": {"size": 10, "align": "right"},
    },
    "H1": {
        "font": {"size": 24},
        "margin": {"bottom": 6},
    },
    "H2": {
        "font": {"size": 20},
        "margin": {"bottom": 6},
    },
    "H3": {
        "font": {"size": 18},
        "margin": {"bottom": 6},
    },
    "P": {
        "font": {"size": 12},
        "margin": {"bottom": 12},
    },
    "UL": {
        "margin": {"bottom": 12, "left": 20},
    },
    "OL": {
        "margin": {"bottom": 12, "left": 20},
    },
    "LI": {
        "font": {"size": 12, "line_height": 24},
    },
})

FONT_FACES = ("normal", "bold", "italic", "bold_italic")


@dataclass(frozen=True)
class FontFamily:
    """
    Font-family descriptor declared in a style table.

    The styler never loads font files; renderers receive these through
    Styler.register_fonts() and embed them.

    Attributes:
        name: Family name assigned to fonts
        default: Whether this is the document's default family
        normal, bold, italic, bold_italic: Font file per face
    """

    name: str
    default: bool = False
    normal: Optional[str] = None
    bold: Optional[str] = None
    italic: Optional[str] = None
    bold_italic: Optional[str] = None

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> FontFamily:
        if not name:
            raise StyleError("font family name must be non-empty")
        if not isinstance(data, Mapping):
            raise StyleError(f"font family {name!r} must be a mapping")
        unknown = set(data) - set(FONT_FACES) - {"default"}
        if unknown:
            raise StyleError(f"Unknown keys for font family {name!r}: {sorted(unknown)}")
        return cls(
            name=name,
            default=bool(data.get("default", False)),
            **{face: data.get(face) for face in FONT_FACES},
        )

    @property
    def faces(self) -> Dict[str, str]:
        """Declared font files keyed by face."""
        return {face: getattr(self, face) for face in FONT_FACES if getattr(self, face)}


class Styler:
    """
    Applies a style table to builder nodes.

    The user table is merged over DEFAULT_STYLE once at construction; a
    user rule only replaces the nested keys it supplies. If the table has
    a ``font_families`` section with exactly one family marked default,
    that family name is filled into every rule font lacking a family.

    Example:
        >>> styler = Styler({"p": {"margin": {"bottom": 4}}})
        >>> styler.rule_for("P")["font"]["size"]
        12
    """

    def __init__(self, styles: Optional[Mapping[Any, Any]] = None):
        merged = deep_merge(DEFAULT_STYLE, sanitize_style_keys(styles or {}))

        families = merged.pop("font_families", None) or {}
        if not isinstance(families, Mapping):
            raise StyleError("font_families must be a mapping of name -> descriptor")
        self._font_families: Tuple[FontFamily, ...] = tuple(
            FontFamily.from_dict(name, raw) for name, raw in families.items()
        )
        self._default_family = self._find_default_family()
        if self._default_family is not None:
            _apply_default_family(merged, self._default_family.name)

        self._styles: Mapping[str, Any] = freeze(merged)
        self._margin_cache: Dict[str, Inset] = {}
        self._padding_cache: Dict[str, Inset] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def styles(self) -> Mapping[str, Any]:
        """Resolved (read-only) style table."""
        return self._styles

    @property
    def font_families(self) -> Tuple[FontFamily, ...]:
        return self._font_families

    @property
    def default_font_family(self) -> Optional[FontFamily]:
        return self._default_family

    # ─────────────────────────────────────────────────────────────────────────
    # Cascade
    # ─────────────────────────────────────────────────────────────────────────

    def rule_for(self, tag: str) -> Mapping[str, Any]:
        """Resolved rule for a tag; unknown tags get an empty rule."""
        return self._styles.get(str(tag).upper(), freeze({}))

    def style_node(self, node: NodeBuilder, tag: Optional[str] = None) -> None:
        """
        Fill a node's defaults from the rule for ``tag`` (or node.tag).

        The rule font is applied with node.default_font(), so a node that
        already has a font keeps it. A rule without a font (UL, OL, unknown
        tags) yields Font.default() with no family, even when a default
        font family is declared. Margin and padding are always assigned,
        using the per-tag shared Insets.

        Args:
            node: Builder node to style
            tag: Tag whose rule to use instead of node.tag
        """
        key = str(tag or node.tag).upper()
        rule = self._styles.get(key)
        if rule is None:
            logger.debug(f"No style rule for {key}, using built-in defaults")
            rule = {}

        node.default_font(rule.get("font") or {})
        node.margin = self._cached_inset(self._margin_cache, key, rule.get("margin"))
        node.padding = self._cached_inset(self._padding_cache, key, rule.get("padding"))

    def register_fonts(self, register: Callable[[FontFamily], None]) -> int:
        """
        Hand every declared font family to a renderer callback.

        Args:
            register: Called once per FontFamily, in declaration order

        Returns:
            Number of families registered
        """
        for family in self._font_families:
            register(family)
        logger.debug(f"Registered {len(self._font_families)} font families")
        return len(self._font_families)

    # ─────────────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────────────

    def _find_default_family(self) -> Optional[FontFamily]:
        defaults = [f for f in self._font_families if f.default]
        if len(defaults) > 1:
            raise StyleError(
                f"Only one default font family allowed, got {[f.name for f in defaults]}"
            )
        if self._font_families and not defaults:
            logger.warning("font_families declared without a default family")
        return defaults[0] if defaults else None

    @staticmethod
    def _cached_inset(cache: Dict[str, Inset], key: str, raw: Any) -> Inset:
        inset = cache.get(key)
        if inset is None:
            inset = Inset.coerce(raw) if raw is not None else Inset()
            if inset is raw:
                inset = raw.copy()
            cache[key] = inset
            logger.debug(f"Cached inset for {key}: {inset}")
        return inset


def _apply_default_family(styles: Dict[str, Any], family: str) -> None:
    """
    Fill ``family`` into every rule font that has none (in place).

    Rules without a font section are left without one.
    """
    for rule in styles.values():
        if not isinstance(rule, dict):
            continue
        font = rule.get("font")
        if isinstance(font, dict) and not font.get("family"):
            font["family"] = family
