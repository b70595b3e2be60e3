"""
Build the demo document (header with logo and company info, two-column
body with text and a bordered box) and write it as JSON for review.

Usage:
    python scripts/build_demo_doc.py --output workspace/demo.json [--styled]
"""

import argparse
import logging
from pathlib import Path

from crossdoc import DocumentBuilder, Styler
from crossdoc.core.models.geom import Font, Inset
from crossdoc.core.utils.serialization import save_document_json

HEADER_COLOR = "#008888ff"
BODY_COLOR = "#222222ff"
LOGO_SRC = "https://placeholdit.imgix.net/~text?txtsize=60&txt=Photo&w=400&h=300&fm=png"

LOREM = (
    "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor "
    "incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud "
    "exercitation ullamco laboris nisi ut aliquip ex ea commodo consequat. Duis aute irure "
    "dolor in reprehenderit in voluptate velit esse cillum dolore eu fugiat nulla pariatur. "
    "Excepteur sint occaecat cupidatat non proident, sunt in culpa qui officia deserunt "
    "mollit anim id est laborum."
)


def build_demo_doc(styler=None):
    builder = DocumentBuilder(styler=styler)
    page = builder.page({"size": "us-letter", "orientation": "portrait", "page_margin": "0.5in"})

    header = page.horizontal_div()
    left_header = header.horizontal_div()

    logo = left_header.image(LOGO_SRC)
    logo.push_min_height(100)
    logo.margin = Inset.uniform(8)

    info_font = Font.default(size=8, color=BODY_COLOR)
    company_info = left_header.div()
    for line in ("ACME LLC", "952-555-1234"):
        row = company_info.div()
        row.font = info_font
        row.padding = Inset.uniform(4)
        row.text = line

    right_header = header.div()
    h1 = right_header.node("h1", {"text": "Hello World"})
    h1.default_font(size=32, align="right", color=HEADER_COLOR)
    h2 = right_header.node("h2", {"text": "Subheader"})
    h2.default_font(size=24, align="right", color=HEADER_COLOR)

    content = page.horizontal_div()
    content.margin = Inset(top=20)

    left_content = content.node("div", {"weight": 2})
    for text in (LOREM, LOREM[::-1]):
        p = left_content.node("p", {"text": text})
        p.default_font(size=12, color=BODY_COLOR, line_height=16)
        p.padding = Inset.uniform(8)

    right_content = content.node("div", {"weight": 1})
    bordered = right_content.div()
    bordered.border_all("1px solid #aaaaaaff")
    bordered.padding = Inset.uniform(8)
    bordered.margin = Inset.uniform(8)
    bordered.default_font(size=14, color=BODY_COLOR, line_height=18)
    bordered.text = "This content should have a border around it"

    return builder.to_doc()


def main():
    parser = argparse.ArgumentParser(description="Build the CrossDoc demo document")
    parser.add_argument("--output", type=Path, default=Path("workspace/demo.json"))
    parser.add_argument("--styled", action="store_true", help="Apply the default style cascade")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    doc = build_demo_doc(Styler() if args.styled else None)
    save_document_json(doc, args.output)
    print(f"[OK] Wrote {doc.page_count} page(s), {len(doc.images)} image(s) to {args.output}")


if __name__ == "__main__":
    main()
