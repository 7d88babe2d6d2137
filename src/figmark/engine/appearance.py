"""
Style compositor: fills, strokes, corner radius, effects, and opacity.

Only the first visible fill paints the background. Effects are emitted in
array order, so with several shadows the last ``box-shadow`` wins.
"""

from __future__ import annotations

import logging
import math

from ..core.context import AssetResolver
from ..core.markup import StyleDeclaration, decl
from ..core.nodes import Effect, EffectKind, Node, Paint, PaintKind
from ..core.strings import fmt_number, px, round1
from .colors import css_color, paint_color
from .gradients import gradient_css
from .tokens import TokenResolver

logger = logging.getLogger(__name__)

FULL_TURN = 2 * math.pi


# =============================================================================
# Background
# =============================================================================


def image_fill_declarations(paint: Paint, url: str) -> list[StyleDeclaration]:
    """``background-*`` declarations for an image fill, by scale mode."""
    styles = [decl("background-image", f"url('{url}')")]
    match paint.scale_mode:
        case "FIT":
            styles.append(decl("background-size", "contain"))
            styles.append(decl("background-repeat", "no-repeat"))
        case "TILE":
            styles.append(decl("background-size", "auto"))
            styles.append(decl("background-repeat", "repeat"))
        case _:
            styles.append(decl("background-size", "cover"))
            styles.append(decl("background-position", "center"))
    return styles


def background_declarations(
    node: Node, tokens: TokenResolver, assets: AssetResolver
) -> list[StyleDeclaration]:
    fill = node.first_visible_fill()
    if fill is None:
        # Legacy field, only consulted when there are no fills at all
        if not node.fills and node.background_color is not None:
            return [decl("background-color", css_color(node.background_color))]
        return []

    kind = fill.kind
    if kind == PaintKind.SOLID:
        color = paint_color(fill)
        if color is None:
            return []
        return [decl("background-color", tokens.resolve_fill(node, fill, color))]
    if kind == PaintKind.IMAGE:
        url = assets.get_image_url(node.id)
        if url is None:
            logger.debug("No image asset for %s (%s)", node.id, node.name)
            return []
        return image_fill_declarations(fill, url)
    if kind.is_gradient:
        value = gradient_css(fill)
        return [decl("background", value)] if value else []
    # Video fills are rendered by the media path
    return []


# =============================================================================
# Borders, radius, effects
# =============================================================================


def corner_radius_value(node: Node) -> str | None:
    """
    ``border-radius`` value from a scalar or per-corner radius.

    Per-corner radii are ordered top-left, top-right, bottom-right,
    bottom-left, the same as the CSS shorthand.
    """
    radii = node.rectangle_corner_radii
    if radii is None and isinstance(node.corner_radius, list):
        radii = node.corner_radius
    if radii:
        if len(set(radii)) == 1:
            return px(radii[0]) if radii[0] else None
        return " ".join(px(r) for r in radii)
    if isinstance(node.corner_radius, (int, float)) and node.corner_radius:
        return px(node.corner_radius)
    return None


def first_solid_stroke(node: Node) -> Paint | None:
    """The first visible stroke, if it is solid; other stroke paints are dropped."""
    for stroke in node.strokes:
        if stroke.visible:
            return stroke if stroke.kind == PaintKind.SOLID and stroke.color else None
    return None


def stroke_declarations(node: Node) -> list[StyleDeclaration]:
    if not node.stroke_weight:
        return []
    stroke = first_solid_stroke(node)
    if stroke is None:
        return []
    return [decl("border", f"{px(node.stroke_weight)} solid {paint_color(stroke)}")]


def effect_declaration(effect: Effect) -> StyleDeclaration | None:
    """Map one effect to a declaration, or None for unknown types."""
    match effect.kind:
        case EffectKind.DROP_SHADOW | EffectKind.INNER_SHADOW:
            parts = [
                f"{fmt_number(effect.offset.x)}px",
                f"{fmt_number(effect.offset.y)}px",
                f"{fmt_number(effect.radius)}px",
            ]
            if effect.spread:
                parts.append(f"{fmt_number(effect.spread)}px")
            parts.append(css_color(effect.color))
            if effect.kind == EffectKind.INNER_SHADOW:
                parts.insert(0, "inset")
            return decl("box-shadow", " ".join(parts))
        case EffectKind.LAYER_BLUR:
            return decl("filter", f"blur({fmt_number(effect.radius)}px)")
        case EffectKind.BACKGROUND_BLUR:
            return decl("backdrop-filter", f"blur({fmt_number(effect.radius)}px)")
        case _:
            return None


def effect_declarations(node: Node) -> list[StyleDeclaration]:
    styles: list[StyleDeclaration] = []
    for effect in node.effects:
        if not effect.visible:
            continue
        declaration = effect_declaration(effect)
        if declaration is not None:
            styles.append(declaration)
    return styles


def opacity_declarations(node: Node) -> list[StyleDeclaration]:
    styles: list[StyleDeclaration] = []
    if node.clips_content:
        styles.append(decl("overflow", "hidden"))
    if node.opacity is not None and node.opacity < 1:
        styles.append(decl("opacity", fmt_number(round(node.opacity, 2))))
    return styles


def resolve_appearance(
    node: Node, tokens: TokenResolver, assets: AssetResolver
) -> list[StyleDeclaration]:
    """
    Appearance declarations for a box-like node.

    Order: background, corner radius, border, effects, overflow/opacity.
    """
    styles = background_declarations(node, tokens, assets)
    radius = corner_radius_value(node)
    if radius is not None:
        styles.append(decl("border-radius", radius))
    styles.extend(stroke_declarations(node))
    styles.extend(effect_declarations(node))
    styles.extend(opacity_declarations(node))
    return styles


# =============================================================================
# Shape-specific
# =============================================================================


def fixed_size_declarations(node: Node) -> list[StyleDeclaration]:
    bbox = node.absolute_bounding_box
    if bbox is None:
        return []
    return [decl("width", px(bbox.width)), decl("height", px(bbox.height))]


def resolve_ellipse(
    node: Node, tokens: TokenResolver, assets: AssetResolver
) -> list[StyleDeclaration]:
    """
    Ellipse as a fixed-size box with ``border-radius: 50%``.

    A partial arc with a solid fill becomes a ``conic-gradient`` pie.
    """
    styles = fixed_size_declarations(node)
    styles.append(decl("border-radius", "50%"))

    arc = node.arc_data
    if arc is not None and (arc.starting_angle != 0 or not math.isclose(arc.ending_angle, FULL_TURN)):
        start = round1(math.degrees(arc.starting_angle))
        sweep = round1(round1(math.degrees(arc.ending_angle)) - start)
        fill = node.first_visible_fill(PaintKind.SOLID)
        if fill is not None and fill.color is not None:
            color = paint_color(fill)
            styles.append(
                decl(
                    "background",
                    f"conic-gradient(from {fmt_number(start)}deg, {color} {fmt_number(sweep)}deg, "
                    f"transparent {fmt_number(sweep)}deg)",
                )
            )
    else:
        styles.extend(background_declarations(node, tokens, assets))

    styles.extend(stroke_declarations(node))
    styles.extend(effect_declarations(node))
    styles.extend(opacity_declarations(node))
    return styles


def resolve_line(node: Node) -> list[StyleDeclaration]:
    """Line as a fixed-size box with a bottom border from its stroke."""
    styles = fixed_size_declarations(node)
    stroke = first_solid_stroke(node)
    if stroke is not None:
        styles.append(decl("border-bottom", f"{px(node.stroke_weight or 1)} solid {paint_color(stroke)}"))
    styles.extend(opacity_declarations(node))
    return styles
