"""
Layout resolution: per-axis sizing and Auto Layout to flexbox.

Exactly one sizing outcome applies per axis:

- FILL: the node flexes (``flex: 1`` horizontally, ``flex-grow: 1`` vertically)
- HUG: no dimension, content decides
- FIXED: the bounding-box dimension, rounded to one decimal
"""

from __future__ import annotations

from ..core.markup import StyleDeclaration, decl
from ..core.nodes import Node, SizingMode
from ..core.strings import fmt_number, px

# Min/max values at or above this are the design tool's "unset"
CONSTRAINT_SENTINEL = 10000

JUSTIFY_CONTENT = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
    "SPACE_BETWEEN": "space-between",
}

ALIGN_ITEMS = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
    "BASELINE": "baseline",
}


def sizing_declarations(
    node: Node, horizontal: SizingMode, vertical: SizingMode
) -> list[StyleDeclaration]:
    """Width/height declarations for already-resolved sizing modes."""
    styles: list[StyleDeclaration] = []
    bbox = node.absolute_bounding_box

    match horizontal:
        case SizingMode.FILL:
            styles.append(decl("flex", "1"))
            styles.append(decl("align-self", "stretch"))
        case SizingMode.HUG:
            pass
        case _:
            if bbox is not None:
                styles.append(decl("width", px(bbox.width)))

    match vertical:
        case SizingMode.FILL:
            styles.append(decl("flex-grow", "1"))
        case SizingMode.HUG:
            pass
        case _:
            if bbox is not None:
                styles.append(decl("height", px(bbox.height)))

    return styles


def constraint_declarations(node: Node) -> list[StyleDeclaration]:
    """Min/max constraints; zero minimums and sentinel maximums mean unset."""
    styles: list[StyleDeclaration] = []
    if node.min_width is not None and node.min_width > 0:
        styles.append(decl("min-width", px(node.min_width)))
    if node.max_width is not None and node.max_width < CONSTRAINT_SENTINEL:
        styles.append(decl("max-width", px(node.max_width)))
    if node.min_height is not None and node.min_height > 0:
        styles.append(decl("min-height", px(node.min_height)))
    if node.max_height is not None and node.max_height < CONSTRAINT_SENTINEL:
        styles.append(decl("max-height", px(node.max_height)))
    return styles


def justify_content(node: Node) -> str | None:
    """
    ``justify-content`` for an Auto Layout container.

    SPACE_BETWEEN with a single child degenerates to centering, which is
    how the design tool draws it.
    """
    alignment = node.primary_axis_align_items
    if not alignment:
        return None
    if alignment == "SPACE_BETWEEN" and len(node.children) == 1:
        alignment = "CENTER"
    return JUSTIFY_CONTENT.get(alignment, "flex-start")


def auto_layout_declarations(node: Node) -> list[StyleDeclaration]:
    """Flexbox declarations for an Auto Layout container, empty otherwise."""
    if not node.has_auto_layout:
        return []

    direction = "column" if node.layout_mode == "VERTICAL" else "row"
    styles = [decl("display", "flex"), decl("flex-direction", direction)]

    justify = justify_content(node)
    if justify is not None:
        styles.append(decl("justify-content", justify))

    if node.counter_axis_align_items:
        styles.append(
            decl("align-items", ALIGN_ITEMS.get(node.counter_axis_align_items, "stretch"))
        )

    if node.item_spacing is not None:
        styles.append(decl("gap", f"{fmt_number(node.item_spacing)}px"))

    padding = (node.padding_top, node.padding_right, node.padding_bottom, node.padding_left)
    if any(padding):
        styles.append(decl("padding", " ".join(f"{fmt_number(p)}px" for p in padding)))

    return styles


def resolve_layout(node: Node, parent_has_auto_layout: bool = False) -> list[StyleDeclaration]:
    """
    Sizing, constraints, and flexbox declarations for ``node``.

    Args:
        node: Node to resolve
        parent_has_auto_layout: Whether the parent is an Auto Layout container;
            a legacy ``layoutAlign=STRETCH`` child then stretches on the
            counter axis unless it already fills

    Returns:
        Declarations in a fixed order: sizing, constraints, stretch, flexbox
    """
    horizontal = node.sizing("horizontal")
    vertical = node.sizing("vertical")

    styles = sizing_declarations(node, horizontal, vertical)
    styles.extend(constraint_declarations(node))
    styles.extend(stretch_declarations(node, parent_has_auto_layout, horizontal, vertical))
    styles.extend(auto_layout_declarations(node))
    return styles


def stretch_declarations(
    node: Node,
    parent_has_auto_layout: bool,
    horizontal: SizingMode,
    vertical: SizingMode,
) -> list[StyleDeclaration]:
    if not parent_has_auto_layout or node.layout_align != "STRETCH":
        return []
    if SizingMode.FILL in (horizontal, vertical):
        return []
    return [decl("align-self", "stretch")]
