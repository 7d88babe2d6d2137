"""
Read-only lookup tables handed to the translation engine.

The engine never fetches anything. A prefetch phase owned by collaborators
resolves assets, design tokens, and component bindings into the snapshot
types below, and a ``TranslationContext`` threads them through a compile.
Any object satisfying the protocols can stand in for a snapshot.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from .errors import ErrorContext, SnapshotError
from .markup import DesignToken
from .strings import css_var_name

# =============================================================================
# Protocols
# =============================================================================


@runtime_checkable
class AssetResolver(Protocol):
    """Prefetched media assets keyed by node id."""

    def get_image_url(self, node_id: str) -> str | None: ...

    def get_svg_content(self, node_id: str) -> str | None: ...

    def get_video_url(self, node_id: str) -> str | None: ...

    def get_gif_url(self, node_id: str) -> str | None: ...


@runtime_checkable
class TokenTable(Protocol):
    """Design variables keyed by variable id."""

    def resolve(self, variable_id: str) -> DesignToken | None: ...


@runtime_checkable
class BindingTable(Protocol):
    """Component bindings discovered for instance nodes."""

    def lookup(self, node_id: str) -> BindingEntry | None: ...


# =============================================================================
# Snapshots
# =============================================================================


class AssetSnapshot(BaseModel):
    """In-memory asset tables, one mapping per media kind."""

    model_config = ConfigDict(frozen=True)

    images: dict[str, str] = Field(default_factory=dict)
    svgs: dict[str, str] = Field(default_factory=dict)
    videos: dict[str, str] = Field(default_factory=dict)
    gifs: dict[str, str] = Field(default_factory=dict)

    def get_image_url(self, node_id: str) -> str | None:
        return self.images.get(node_id) or None

    def get_svg_content(self, node_id: str) -> str | None:
        return self.svgs.get(node_id) or None

    def get_video_url(self, node_id: str) -> str | None:
        return self.videos.get(node_id) or None

    def get_gif_url(self, node_id: str) -> str | None:
        return self.gifs.get(node_id) or None


class TokenEntry(BaseModel):
    """A design variable definition: slash-separated name and literal value."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: Any = None


class TokenSnapshot(BaseModel):
    """Design variables keyed by variable id."""

    model_config = ConfigDict(frozen=True)

    variables: dict[str, TokenEntry] = Field(default_factory=dict)

    def resolve(self, variable_id: str) -> DesignToken | None:
        entry = self.variables.get(variable_id)
        if entry is None or not entry.name:
            return None
        return DesignToken(
            variable_id=variable_id,
            symbolic_name=css_var_name(entry.name),
            resolved_fallback=None if entry.value is None else str(entry.value),
        )


class BindingEntry(BaseModel):
    """Raw binding for one node, as produced by component discovery."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    component_name: str = Field(validation_alias=AliasChoices("componentName", "component_name"))
    raw_props: dict[str, Any] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("rawProps", "raw_props", "props"),
    )


class BindingSnapshot(BaseModel):
    """Component bindings keyed by node id."""

    model_config = ConfigDict(frozen=True)

    bindings: dict[str, BindingEntry] = Field(default_factory=dict)

    def lookup(self, node_id: str) -> BindingEntry | None:
        return self.bindings.get(node_id)


# =============================================================================
# Context
# =============================================================================

DEFAULT_KNOWN_EXPORTS: frozenset[str] = frozenset(
    {
        "Alert", "Avatar", "Badge", "BadgePosition", "Breadcrumbs", "BreadcrumbsItem",
        "BreadcrumbsLink", "BreadcrumbsList", "Button", "Card", "CardBlock", "Carousel",
        "Checkbox", "Chip", "CrossCorner", "DateInput", "DatePicker", "Details", "Dialog", "Divider",
        "Dropdown", "DropdownButton", "DropdownHeading", "DropdownItem", "DropdownList",
        "DropdownTrigger", "DropdownTriggerContext", "ErrorSummary", "Field", "FieldCounter", "FieldDescription",
        "Fieldset", "Footer", "Header", "Heading", "Input", "Label", "LanguageProvider", "Link", "List",
        "Pagination", "PaginationButton", "PaginationItem", "PaginationList", "Paragraph",
        "Popover", "Radio", "Search", "Select", "SkeletonLoader", "SkipLink", "Spinner",
        "Suggestion", "Switch", "Table", "Tabs", "Tag", "Textarea", "Textfield",
        "ToggleGroup", "Tooltip", "ValidationMessage",
    }
)  # fmt: skip

DEFAULT_NAME_MAP: dict[str, str] = {"Body": "Paragraph"}


@dataclass(frozen=True)
class TranslationContext:
    """
    Everything a compile may consult besides the node tree itself.

    Attributes:
        assets: Prefetched media
        tokens: Design variables
        bindings: Component bindings
        known_exports: Component names the target package exports; ``None``
            accepts any name
        name_map: Source component name to export name renames
    """

    assets: AssetResolver = field(default_factory=AssetSnapshot)
    tokens: TokenTable = field(default_factory=TokenSnapshot)
    bindings: BindingTable = field(default_factory=BindingSnapshot)
    known_exports: frozenset[str] | None = DEFAULT_KNOWN_EXPORTS
    name_map: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_NAME_MAP))


# =============================================================================
# Loading
# =============================================================================

_SnapshotT = TypeVar("_SnapshotT", bound=BaseModel)


def _load_snapshot(path: Path, model: type[_SnapshotT], wrap_key: str | None) -> _SnapshotT:
    context = ErrorContext(file=path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot: {e}", context) from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {e}", context) from e

    # Token and binding files may be a bare id -> entry mapping
    if wrap_key and isinstance(data, dict) and wrap_key not in data:
        data = {wrap_key: data}

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Snapshot does not match schema: {e}", context) from e


def load_asset_snapshot(path: Path) -> AssetSnapshot:
    """Load ``{"images": {...}, "svgs": {...}, "videos": {...}, "gifs": {...}}``."""
    return _load_snapshot(path, AssetSnapshot, None)


def load_token_snapshot(path: Path) -> TokenSnapshot:
    """Load ``{"<variableId>": {"name": "color/text", "value": "#000"}}``."""
    return _load_snapshot(path, TokenSnapshot, "variables")


def load_binding_snapshot(path: Path) -> BindingSnapshot:
    """Load ``{"<nodeId>": {"componentName": "Button", "props": {...}}}``."""
    return _load_snapshot(path, BindingSnapshot, "bindings")
