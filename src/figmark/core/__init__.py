"""Core figmark types: node schema, markup output, snapshots, manifest, errors."""

from .context import (
    AssetResolver,
    AssetSnapshot,
    BindingEntry,
    BindingSnapshot,
    BindingTable,
    TokenSnapshot,
    TokenTable,
    TranslationContext,
    load_asset_snapshot,
    load_binding_snapshot,
    load_token_snapshot,
)
from .errors import (
    ConfigError,
    DocumentError,
    ErrorContext,
    FigmarkError,
    SerializationError,
    SnapshotError,
)
from .manifest import ProjectManifest, load_manifest
from .markup import (
    ComponentBinding,
    DesignToken,
    MarkupNode,
    MediaClassification,
    MediaKind,
    StyleDeclaration,
)
from .nodes import Node, NodeKind, PaintKind, SizingMode, load_document

__all__ = [
    "FigmarkError",
    "DocumentError",
    "SnapshotError",
    "ConfigError",
    "SerializationError",
    "ErrorContext",
    "Node",
    "NodeKind",
    "PaintKind",
    "SizingMode",
    "load_document",
    "MarkupNode",
    "StyleDeclaration",
    "ComponentBinding",
    "DesignToken",
    "MediaKind",
    "MediaClassification",
    "AssetResolver",
    "TokenTable",
    "BindingTable",
    "AssetSnapshot",
    "TokenSnapshot",
    "BindingSnapshot",
    "BindingEntry",
    "TranslationContext",
    "load_asset_snapshot",
    "load_token_snapshot",
    "load_binding_snapshot",
    "ProjectManifest",
    "load_manifest",
]
