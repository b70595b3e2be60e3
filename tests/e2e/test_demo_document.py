"""
End-to-End Tests for the demo document script.

Builds the demo document (header with logo and company info, two-column
body) and checks the flowed geometry, serialization and the CLI.
"""

import importlib.util
import json
import sys
from pathlib import Path

import pytest

from crossdoc import Styler
from crossdoc.core.models.geom import hash_src
from crossdoc.core.utils.serialization import deserialize_document, serialize_document

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "build_demo_doc.py"


@pytest.fixture(scope="module")
def demo_module():
    spec = importlib.util.spec_from_file_location("build_demo_doc", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def demo_doc(demo_module):
    return demo_module.build_demo_doc()


class TestDemoDocument:
    """Geometry of the unstyled demo document."""

    def test_single_page_with_one_image(self, demo_doc, demo_module):
        assert demo_doc.page_count == 1
        assert list(demo_doc.images) == [hash_src(demo_module.LOGO_SRC)]

    def test_page_is_us_letter_with_half_inch_margin(self, demo_doc):
        page = demo_doc.pages[0]
        assert (page.box.width, page.box.height) == (612.0, 792.0)
        assert page.padding.left == 36.0
        assert [c.block_orientation.value for c in page.children] == ["horizontal", "horizontal"]

    def test_header_columns_split_content_width(self, demo_doc):
        header = demo_doc.pages[0].children[0]
        left, right = header.children
        assert (header.box.x, header.box.y, header.box.width) == (36.0, 36.0, 540.0)
        assert (left.box.width, right.box.width) == (270, 270)
        assert right.box.x == 270

    def test_logo_min_height_and_margin(self, demo_doc):
        left_header = demo_doc.pages[0].children[0].children[0]
        logo = left_header.children[0]
        assert logo.tag == "IMG"
        assert (logo.box.x, logo.box.y) == (8, 8)
        assert logo.box.height == 100
        assert left_header.box.height == 116

    def test_body_columns_weighted_two_to_one(self, demo_doc):
        header, content = demo_doc.pages[0].children
        left, right = content.children
        assert (left.box.width, right.box.width) == (360, 180)
        assert content.box.y == header.box.y + header.box.height + 20

    def test_bordered_box_has_all_sides(self, demo_doc):
        right = demo_doc.pages[0].children[1].children[1]
        bordered = right.children[0]
        assert bordered.text == "This content should have a border around it"
        assert bordered.border.top.color == "#aaaaaaff"
        assert bordered.border.left.width == 1.0
        assert bordered.box.width == 164

    def test_paragraph_heights_follow_text_estimate(self, demo_doc, demo_module):
        left = demo_doc.pages[0].children[1].children[0]
        first, second = left.children
        # 445 chars * 12 * 0.48 / 344 -> 8 lines of 16pt, plus padding
        assert len(demo_module.LOREM) == 445
        assert first.box.height == 8 * 16 + 16
        assert second.box.y == first.box.y + first.box.height

    def test_text_nodes_in_render_order(self, demo_doc):
        texts = [n.text for n in demo_doc.pages[0].iter_text()]
        assert texts[:4] == ["ACME LLC", "952-555-1234", "Hello World", "Subheader"]

    def test_serialized_document_passes_strict_validation(self, demo_doc):
        restored = deserialize_document(serialize_document(demo_doc), strict=True)
        assert restored == demo_doc


class TestStyledDemoDocument:

    def test_styled_headings_use_cascade_fonts(self, demo_module):
        doc = demo_module.build_demo_doc(Styler())
        right_header = doc.pages[0].children[0].children[1]
        h1, h2 = right_header.children
        assert h1.font.size == 24
        assert h1.margin.bottom == 6
        assert h2.font.size == 20

    def test_unstyled_headings_use_explicit_fonts(self, demo_doc):
        h1, h2 = demo_doc.pages[0].children[0].children[1].children
        assert h1.font.size == 32
        assert h1.font.align == "right"
        assert h2.font.size == 24


class TestMain:

    def test_main_writes_json(self, demo_module, tmp_path, monkeypatch, capsys):
        output = tmp_path / "out" / "demo.json"
        monkeypatch.setattr(sys, "argv", ["build_demo_doc.py", "--output", str(output)])

        demo_module.main()

        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["pages"]) == 1
        assert "[OK] Wrote 1 page(s), 1 image(s)" in capsys.readouterr().out
