import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import crossdoc
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from crossdoc.builder import DocumentBuilder, NodeBuilder  # noqa: E402


# Common test fixtures
@pytest.fixture
def doc_builder():
    """Return an empty document builder with default configuration."""
    return DocumentBuilder()


@pytest.fixture
def make_node(doc_builder):
    """Factory for detached node builders sharing one document builder."""
    def _create(tag: str = "div", **attrs) -> NodeBuilder:
        return NodeBuilder(doc_builder, {"tag": tag, **attrs})
    return _create


@pytest.fixture
def lorem_500() -> str:
    """Text of exactly 500 characters."""
    text = ("lorem ipsum dolor sit amet " * 20)[:500]
    assert len(text) == 500
    return text
