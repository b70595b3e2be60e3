"""Top-level package for CrossDoc.

Builds paginated document trees from a declarative API and lays them out
with a recursive flow algorithm.

Provides subpackages:
- crossdoc.core – value types, the immutable document tree, serialization
- crossdoc.builder – construction API, style cascade and flow layout
"""

from importlib.metadata import PackageNotFoundError


def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import version as pkg_version
    try:
        return pkg_version("crossdoc")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

from .builder import DocumentBuilder, FlowConfig, PageDefaults, Styler  # noqa: E402
from .core import Document, Node, Page  # noqa: E402

__all__: list[str] = [
    "__version__",
    "DocumentBuilder",
    "FlowConfig",
    "PageDefaults",
    "Styler",
    "Document",
    "Node",
    "Page",
]
