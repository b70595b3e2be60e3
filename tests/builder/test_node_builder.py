"""
Unit Tests for NodeBuilder

Tests for attribute parsing, the construction helpers and the flow
algorithm (vertical stacking, weighted horizontal distribution and text
height).
"""

import pytest

from crossdoc import DocumentBuilder, Styler
from crossdoc.builder.node_builder import NodeBuilder, round_half_up
from crossdoc.core.errors import DivisionHazardError, FlowOrderError, MalformedShorthandError
from crossdoc.core.models.geom import Font, Inset, hash_src
from crossdoc.core.models.tree import BlockOrientation, Node


class TestConstruction:
    """Tests for attribute parsing in NodeBuilder.__init__."""

    def test_init_when_no_attrs_then_defaults(self, make_node):
        node = make_node()
        assert node.tag == "DIV"
        assert node.block_orientation is BlockOrientation.VERTICAL
        assert node.weight == 1.0
        assert node.min_height == 0
        assert node.margin == Inset()
        assert node.padding == Inset()
        assert node.box.width is None
        assert node.border is None
        assert node.background is None
        assert node.font is None

    def test_init_when_tag_missing_then_div(self, doc_builder):
        assert NodeBuilder(doc_builder).tag == "DIV"

    def test_init_when_negative_weight_then_raises(self, make_node):
        with pytest.raises(ValueError, match="weight"):
            make_node(weight=-1)

    def test_init_when_unknown_keys_then_kept_in_attrs(self, make_node):
        node = make_node(id="intro", role="banner")
        assert node.attrs == {"id": "intro", "role": "banner"}

    def test_init_when_shorthand_insets_then_parsed(self, make_node):
        node = make_node(margin="8 4", padding={"left": 20})
        assert node.margin == Inset(8, 4, 8, 4)
        assert node.padding == Inset(left=20)

    def test_init_when_font_mapping_then_font(self, make_node):
        node = make_node(font={"size": 14, "line_height": 18})
        assert node.font == Font(size=14, line_height=18)

    def test_init_when_src_then_registers_image(self, make_node, doc_builder):
        node = make_node("img", src="logo.png", hash="ignored")
        assert node.hash == hash_src("logo.png")
        assert list(doc_builder.images) == [node.hash]

    def test_init_when_values_from_finished_node_then_mutable_copies(self, make_node):
        finished = Node(tag="p", margin=Inset(bottom=4), font=Font(size=10))
        node = make_node("p", margin=finished.margin, font=finished.font)

        node.margin.bottom = 8
        node.font.size = 14

        assert finished.margin.bottom == 4
        assert finished.font.size == 10

    def test_push_min_height_never_lowers(self, make_node):
        node = make_node()
        for h in (5, 3, 10, 7):
            node.push_min_height(h)
        assert node.min_height == 10


class TestAttributeHelpers:
    """Tests for default_font, border and background helpers."""

    def test_default_font_when_no_font_then_assigns(self, make_node):
        node = make_node()
        node.default_font(size=24, align="right")
        assert node.font.size == 24
        assert node.font.align == "right"

    def test_default_font_when_font_present_then_keeps_it(self, make_node):
        node = make_node()
        node.font = Font(size=9)
        node.default_font({"size": 24})
        assert node.font.size == 9

    def test_border_all_sets_every_side(self, make_node):
        node = make_node()
        node.border_all("1px solid #aaaaaaff")
        for side in (node.border.top, node.border.right, node.border.bottom, node.border.left):
            assert side.width == 1.0
            assert side.color == "#aaaaaaff"

    def test_border_side_when_no_border_then_creates_one_side(self, make_node):
        node = make_node()
        node.border_top("2px dashed red")
        assert node.border.top.style == "dashed"
        assert node.border.right is None
        assert node.border.bottom is None
        assert node.border.left is None

    def test_border_side_when_border_exists_then_keeps_other_sides(self, make_node):
        node = make_node()
        node.border_left("1px solid #000")
        node.border_right("3px dotted #fff")
        assert node.border.left.width == 1.0
        assert node.border.right.width == 3.0

    def test_border_when_malformed_then_raises_and_leaves_border(self, make_node):
        node = make_node()
        with pytest.raises(MalformedShorthandError):
            node.border_all("1px solid")
        with pytest.raises(MalformedShorthandError):
            node.border_bottom("wide solid #000")
        assert node.border is None

    def test_background_color_creates_background(self, make_node):
        node = make_node()
        node.background_color("#ff0000ff")
        assert node.background.color == "#ff0000ff"
        node.background_color("#00ff00ff")
        assert node.background.color == "#00ff00ff"


class TestChildren:
    """Tests for node(), div helpers and image()."""

    def test_node_appends_in_order(self, make_node):
        parent = make_node()
        first = parent.node("h1")
        second = parent.node("p")
        assert parent.children == (first, second)
        assert second.tag == "P"

    def test_node_when_configure_given_then_called_with_child(self, make_node):
        parent = make_node()
        child = parent.node("p", {"text": "Hi"}, lambda c: c.default_font(size=10))
        assert child.font.size == 10

    def test_div_helpers_set_orientation(self, make_node):
        parent = make_node()
        assert parent.horizontal_div().block_orientation is BlockOrientation.HORIZONTAL
        assert parent.vertical_div().block_orientation is BlockOrientation.VERTICAL
        assert parent.div().block_orientation is BlockOrientation.VERTICAL

    def test_horizontal_div_overrides_orientation_attr(self, make_node):
        parent = make_node()
        child = parent.horizontal_div({"block_orientation": "vertical", "weight": 2})
        assert child.block_orientation is BlockOrientation.HORIZONTAL
        assert child.weight == 2

    def test_image_when_same_src_twice_then_one_registry_entry(self, make_node, doc_builder):
        parent = make_node()
        a = parent.image("logo.png")
        b = parent.image("logo.png")
        parent.image("other.png")
        assert a.tag == "IMG"
        assert a.hash == b.hash
        assert len(doc_builder.images) == 2

    def test_image_when_empty_src_then_raises(self, make_node):
        with pytest.raises(ValueError):
            make_node().image("")


class TestAutoStyling:
    """Tests for the document builder's styler applied by node()."""

    @pytest.fixture
    def page(self):
        return DocumentBuilder(styler=Styler()).page()

    def test_node_when_styler_then_rule_applied(self, page):
        p = page.node("p")
        assert p.font.size == 12
        assert p.margin.bottom == 12

    def test_node_when_explicit_margin_then_wins_over_rule(self, page):
        p = page.node("p", {"margin": {"bottom": 2}})
        assert p.margin.bottom == 2
        assert p.font.size == 12

    def test_node_when_explicit_font_then_kept(self, page):
        h1 = page.node("h1", {"font": {"size": 40}})
        assert h1.font.size == 40

    def test_configure_runs_after_styling(self, page):
        p = page.node("p", configure=lambda c: setattr(c, "margin", Inset()))
        assert p.margin == Inset()


class TestVerticalFlow:
    """Tests for stacking children top to bottom."""

    def test_flow_positions_node_inside_margin(self, make_node):
        node = make_node(margin=Inset(top=5, right=7, bottom=3, left=10))
        consumed = node.flow(0, 0, 100)

        assert (node.box.x, node.box.y, node.box.width) == (10, 5, 83)
        assert node.box.height == 0
        assert consumed == 8

    def test_flow_stacks_children_and_sums_heights(self, make_node):
        parent = make_node(padding=Inset.uniform(8))
        heights = (10, 20, 5)
        children = []
        for h in heights:
            child = parent.div()
            child.push_min_height(h)
            children.append(child)
        children[1].margin = Inset(top=5, bottom=5)

        consumed = parent.flow(0, 0, 300)

        assert [c.box.y for c in children] == [8, 23, 48]
        assert all(c.box.x == 8 for c in children)
        assert children[0].box.width == 284
        assert parent.min_height == 45
        assert parent.box.height == 61
        assert consumed == 61

    def test_flow_when_min_height_larger_then_kept(self, make_node):
        parent = make_node()
        parent.push_min_height(100)
        parent.div().push_min_height(10)
        parent.flow(0, 0, 100)
        assert parent.box.height == 100

    def test_flow_when_no_children_then_height_is_padding(self, make_node):
        node = make_node(padding=Inset(top=4, bottom=6))
        node.flow(0, 0, 50)
        assert node.box.height == 10


class TestHorizontalFlow:
    """Tests for weighted width distribution."""

    def _row(self, make_node, weights, **attrs):
        row = make_node(block_orientation="horizontal", **attrs)
        children = [row.node("div", {"weight": w}) for w in weights]
        return row, children

    def test_flow_splits_width_by_weight(self, make_node):
        row, (left, right) = self._row(make_node, [2, 1])
        row.flow(0, 0, 300)

        assert (left.box.x, left.box.width) == (0, 200)
        assert (right.box.x, right.box.width) == (200, 100)

    def test_flow_rounds_each_child_independently(self, make_node):
        row, children = self._row(make_node, [1, 1, 1])
        row.flow(0, 0, 100)

        assert [c.box.width for c in children] == [33, 33, 33]
        assert [c.box.x for c in children] == [0, 33, 66]

    def test_flow_rounds_halves_up(self, make_node):
        row, children = self._row(make_node, [1, 1])
        row.flow(0, 0, 101)
        assert [c.box.width for c in children] == [51, 51]

    def test_flow_height_is_tallest_child_with_margins(self, make_node):
        row, (a, b) = self._row(make_node, [1, 1], padding=Inset(top=2, bottom=2, left=10))
        a.push_min_height(30)
        b.push_min_height(20)
        b.margin = Inset(top=8, bottom=8)

        row.flow(0, 0, 110)

        assert a.box.y == 2
        assert b.box.y == 10
        assert a.box.x == 10
        assert row.min_height == 36
        assert row.box.height == 40

    def test_flow_when_zero_weights_then_raises(self, make_node):
        row, _ = self._row(make_node, [0, 0])
        with pytest.raises(DivisionHazardError):
            row.flow(0, 0, 100)

    def test_flow_when_no_children_then_raises(self, make_node):
        row = make_node(block_orientation="horizontal")
        with pytest.raises(DivisionHazardError):
            row.flow(0, 0, 100)

    def test_flow_when_zero_weight_child_then_zero_width(self, make_node):
        row, (a, b) = self._row(make_node, [1, 0])
        row.flow(0, 0, 100)
        assert a.box.width == 100
        assert b.box.width == 0


class TestTextFlow:
    """Tests for text-height estimation during flow."""

    def test_flow_when_text_then_min_height_from_lines(self, make_node, lorem_500):
        node = make_node("p", text=lorem_500, font={"size": 12, "line_height": 14})
        node.flow(0, 0, 468)
        assert node.min_height == 98
        assert node.box.height == 98

    def test_flow_when_padding_then_text_wraps_in_content_width(self, make_node, lorem_500):
        node = make_node("p", text=lorem_500, font={"size": 12, "line_height": 14})
        node.padding = Inset(top=10, right=36, bottom=10, left=36)
        consumed = node.flow(0, 0, 540)

        assert node.child_width() == 468
        assert node.box.height == 118
        assert consumed == 118

    def test_flow_when_no_line_height_then_one_point_per_line(self, make_node, lorem_500):
        node = make_node("p", text=lorem_500, font={"size": 12})
        node.flow(0, 0, 468)
        assert node.box.height == 7

    def test_flow_when_text_without_font_then_no_height(self, make_node):
        node = make_node("p", text="Hello")
        node.flow(0, 0, 100)
        assert node.box.height == 0

    def test_flow_when_text_has_no_width_then_raises(self, make_node):
        node = make_node("p", text="Hello", font={"size": 12})
        with pytest.raises(DivisionHazardError):
            node.flow(0, 0, 0)


class TestConversion:
    """Tests for to_node() and flow ordering."""

    def test_child_width_when_not_flowed_then_raises(self, make_node):
        with pytest.raises(FlowOrderError):
            make_node().child_width()

    def test_to_node_when_not_flowed_then_raises(self, make_node):
        with pytest.raises(FlowOrderError):
            make_node().to_node()

    def test_to_node_builds_immutable_tree(self, make_node):
        parent = make_node(id="root")
        parent.node("p", {"text": "Hi"})
        parent.flow(0, 0, 100)

        node = parent.to_node()

        assert isinstance(node, Node)
        assert node.attrs == {"id": "root"}
        assert node.children[0].tag == "P"
        assert node.children[0].text == "Hi"

    def test_to_node_copies_mutable_values(self, make_node):
        parent = make_node(margin=Inset(bottom=4))
        parent.border_all("1px solid #000")
        parent.flow(0, 0, 100)
        node = parent.to_node()

        parent.margin.bottom = 99
        parent.border.top.width = 9
        parent.box.width = 1

        assert node.margin.bottom == 4
        assert node.border.top.width == 1.0
        assert node.box.width == 100


@pytest.mark.parametrize("value, expected", [
    (0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (-0.5, -1), (33.33, 33), (0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
