"""
figmark: deterministic design-tree to markup compiler.

Translates a design-tool node tree, plus prefetched assets, design tokens,
and component bindings, into inline-styled HTML or a React component module.
"""

from importlib.metadata import PackageNotFoundError, version

from figmark.core import (
    ConfigError,
    DocumentError,
    FigmarkError,
    MarkupNode,
    Node,
    SerializationError,
    SnapshotError,
    TranslationContext,
    load_document,
)
from figmark.engine import TreeWalker, plan_prefetch, translate
from figmark.serializers import serialize

try:
    __version__ = version("figmark")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "Node",
    "MarkupNode",
    "TranslationContext",
    "TreeWalker",
    "translate",
    "serialize",
    "load_document",
    "plan_prefetch",
    "FigmarkError",
    "DocumentError",
    "SnapshotError",
    "ConfigError",
    "SerializationError",
]
