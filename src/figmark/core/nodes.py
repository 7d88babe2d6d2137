"""
Design-tree input schema.

Mirrors the subset of the design-tool REST document format that the
translation engine reads. Field names are snake_case in Python and accept
the tool's camelCase keys on input. Unknown fields are ignored and absent
fields take defaults, so sparse or newer documents always validate.
"""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .errors import DocumentError, ErrorContext

_SCHEMA_CONFIG = ConfigDict(
    frozen=True,
    populate_by_name=True,
    alias_generator=to_camel,
    extra="ignore",
)


# =============================================================================
# Kinds
# =============================================================================


class NodeKind(StrEnum):
    """Structural node types the engine dispatches on."""

    DOCUMENT = "DOCUMENT"
    CANVAS = "CANVAS"
    FRAME = "FRAME"
    GROUP = "GROUP"
    SECTION = "SECTION"
    COMPONENT = "COMPONENT"
    COMPONENT_SET = "COMPONENT_SET"
    INSTANCE = "INSTANCE"
    RECTANGLE = "RECTANGLE"
    ELLIPSE = "ELLIPSE"
    LINE = "LINE"
    TEXT = "TEXT"
    VECTOR = "VECTOR"
    BOOLEAN_OPERATION = "BOOLEAN_OPERATION"
    STAR = "STAR"
    REGULAR_POLYGON = "REGULAR_POLYGON"
    SLICE = "SLICE"
    UNKNOWN = "UNKNOWN"


VECTOR_KINDS: frozenset[NodeKind] = frozenset(
    {
        NodeKind.VECTOR,
        NodeKind.BOOLEAN_OPERATION,
        NodeKind.STAR,
        NodeKind.REGULAR_POLYGON,
        NodeKind.SLICE,
    }
)

# Kinds that may be replaced wholesale by a component binding
COMPOSITE_KINDS: frozenset[NodeKind] = frozenset(
    {
        NodeKind.FRAME,
        NodeKind.GROUP,
        NodeKind.SECTION,
        NodeKind.COMPONENT,
        NodeKind.COMPONENT_SET,
        NodeKind.INSTANCE,
    }
)


class PaintKind(StrEnum):
    """Fill and stroke paint types."""

    SOLID = "SOLID"
    GRADIENT_LINEAR = "GRADIENT_LINEAR"
    GRADIENT_RADIAL = "GRADIENT_RADIAL"
    GRADIENT_ANGULAR = "GRADIENT_ANGULAR"
    GRADIENT_DIAMOND = "GRADIENT_DIAMOND"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    UNKNOWN = "UNKNOWN"

    @property
    def is_gradient(self) -> bool:
        return self.value.startswith("GRADIENT_")


class EffectKind(StrEnum):
    """Layer effect types."""

    DROP_SHADOW = "DROP_SHADOW"
    INNER_SHADOW = "INNER_SHADOW"
    LAYER_BLUR = "LAYER_BLUR"
    BACKGROUND_BLUR = "BACKGROUND_BLUR"
    UNKNOWN = "UNKNOWN"


class SizingMode(StrEnum):
    """Per-axis sizing policy."""

    FIXED = "FIXED"
    HUG = "HUG"
    FILL = "FILL"


def _coerce(enum_type: type[StrEnum], raw: str | None) -> Any:
    try:
        return enum_type(raw or "UNKNOWN")
    except ValueError:
        return enum_type("UNKNOWN")


# =============================================================================
# Value types
# =============================================================================


class Color(BaseModel):
    """RGBA color with 0-1 float channels."""

    model_config = _SCHEMA_CONFIG

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 1.0


class Vector(BaseModel):
    """A 2D point in unit design space."""

    model_config = _SCHEMA_CONFIG

    x: float = 0.0
    y: float = 0.0


class BoundingBox(BaseModel):
    """Absolute bounding box of a node."""

    model_config = _SCHEMA_CONFIG

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


class ColorStop(BaseModel):
    """A gradient color stop at a 0-1 position."""

    model_config = _SCHEMA_CONFIG

    position: float = 0.0
    color: Color = Field(default_factory=Color)


class Paint(BaseModel):
    """A fill or stroke paint."""

    model_config = _SCHEMA_CONFIG

    type: str = "SOLID"
    visible: bool = True
    color: Color | None = None
    opacity: float | None = None
    gradient_stops: list[ColorStop] = Field(default_factory=list)
    gradient_handle_positions: list[Vector] = Field(default_factory=list)
    scale_mode: str | None = None
    image_ref: str | None = None
    bound_variables: dict[str, Any] = Field(default_factory=dict)

    @property
    def kind(self) -> PaintKind:
        return _coerce(PaintKind, self.type)


class Effect(BaseModel):
    """A shadow or blur effect."""

    model_config = _SCHEMA_CONFIG

    type: str = "DROP_SHADOW"
    visible: bool = True
    color: Color = Field(default_factory=lambda: Color(a=0.25))
    offset: Vector = Field(default_factory=Vector)
    radius: float = 0.0
    spread: float = 0.0

    @property
    def kind(self) -> EffectKind:
        return _coerce(EffectKind, self.type)


class ArcData(BaseModel):
    """Arc sweep of an ellipse, in radians."""

    model_config = _SCHEMA_CONFIG

    starting_angle: float = 0.0
    ending_angle: float = 6.283185307179586


class TypeStyle(BaseModel):
    """Text run styling."""

    model_config = _SCHEMA_CONFIG

    font_family: str | None = None
    font_post_script_name: str | None = None
    font_style: str | None = None
    font_size: float | None = None
    font_weight: float | None = None
    italic: bool = False
    text_decoration: str | None = None
    text_align_horizontal: str | None = None
    text_auto_resize: str | None = None
    line_height_px: float | None = None
    line_height_percent: float | None = None
    line_height_percent_font_size: float | None = None
    letter_spacing: float | None = None


# =============================================================================
# Node
# =============================================================================


class Node(BaseModel):
    """
    A design-tree node.

    The tree is acyclic and each node is owned by exactly one parent.
    Nodes are immutable for the lifetime of a compile.
    """

    model_config = _SCHEMA_CONFIG

    id: str = ""
    name: str = ""
    type: str = ""
    visible: bool = True

    absolute_bounding_box: BoundingBox | None = None

    # Auto Layout
    layout_mode: str | None = None
    primary_axis_align_items: str | None = None
    counter_axis_align_items: str | None = None
    item_spacing: float | None = None
    padding_left: float = 0.0
    padding_right: float = 0.0
    padding_top: float = 0.0
    padding_bottom: float = 0.0
    layout_sizing_horizontal: str | None = None
    layout_sizing_vertical: str | None = None
    layout_align: str | None = None
    min_width: float | None = None
    max_width: float | None = None
    min_height: float | None = None
    max_height: float | None = None
    clips_content: bool = False

    # Appearance
    fills: list[Paint] = Field(default_factory=list)
    strokes: list[Paint] = Field(default_factory=list)
    stroke_weight: float | None = None
    effects: list[Effect] = Field(default_factory=list)
    corner_radius: float | list[float] | None = None
    rectangle_corner_radii: list[float] | None = None
    opacity: float | None = None
    background_color: Color | None = None
    arc_data: ArcData | None = None

    # Text
    style: TypeStyle | None = None
    characters: str | None = None
    text_auto_resize: str | None = None

    # Bindings
    bound_variables: dict[str, Any] = Field(default_factory=dict)
    component_id: str | None = None
    component_properties: dict[str, Any] = Field(default_factory=dict)
    overrides: list[dict[str, Any]] = Field(default_factory=list)

    children: list[Node] = Field(default_factory=list)

    @property
    def kind(self) -> NodeKind:
        return _coerce(NodeKind, self.type)

    @property
    def has_auto_layout(self) -> bool:
        return bool(self.layout_mode) and self.layout_mode != "NONE"

    def first_visible_fill(self, kind: PaintKind | None = None) -> Paint | None:
        for fill in self.fills:
            if fill.visible and (kind is None or fill.kind == kind):
                return fill
        return None

    def sizing(self, axis: str) -> SizingMode:
        """Resolved sizing mode for ``"horizontal"`` or ``"vertical"``; absent means FIXED."""
        raw = self.layout_sizing_horizontal if axis == "horizontal" else self.layout_sizing_vertical
        try:
            return SizingMode(raw) if raw else SizingMode.FIXED
        except ValueError:
            return SizingMode.FIXED


Node.model_rebuild()


# =============================================================================
# Loading
# =============================================================================


def extract_document(payload: Any) -> dict[str, Any]:
    """
    Pull the root node mapping out of a design-tool API response.

    Accepts a bare node, a whole-file response (``{"document": ...}``), or a
    node-query response (``{"nodes": {"<id>": {"document": ...}}}``), in
    which case the first entry wins.

    Raises:
        DocumentError: If no root node can be found.
    """
    if not isinstance(payload, dict) or not payload:
        raise DocumentError("Design document is empty or not an object")

    nodes = payload.get("nodes")
    if isinstance(nodes, dict):
        for entry in nodes.values():
            if isinstance(entry, dict) and isinstance(entry.get("document"), dict):
                return entry["document"]
        raise DocumentError("Node query response contains no document")

    document = payload.get("document")
    if isinstance(document, dict):
        return document

    return payload


def load_document_file(path: Path) -> Node:
    """
    Read and validate a design document saved as JSON.

    Raises:
        DocumentError: If the file is unreadable, not JSON, or has no root node.
    """
    context = ErrorContext(file=path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise DocumentError(f"Cannot read design document: {e}", context) from e
    except json.JSONDecodeError as e:
        raise DocumentError(f"Design document is not valid JSON: {e}", context) from e
    try:
        return load_document(payload)
    except DocumentError as e:
        raise DocumentError(e.message, context) from e


def load_document(payload: Any) -> Node:
    """
    Validate a design-tool response into a root ``Node``.

    Raises:
        DocumentError: If the payload has no root node or fails validation.
    """
    raw = extract_document(payload)
    try:
        return Node.model_validate(raw)
    except ValidationError as e:
        raise DocumentError(f"Invalid design document: {e}") from e
