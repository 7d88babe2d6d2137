"""
Text style resolution and semantic tag inference.

Tag inference is a presentation heuristic on font size and weight. It does
not guarantee a meaningful document outline.
"""

from __future__ import annotations

from ..core.markup import StyleDeclaration, decl
from ..core.nodes import Node, PaintKind, SizingMode
from ..core.strings import fmt_number, px, round1
from .colors import paint_color
from .layout import constraint_declarations, sizing_declarations
from .tokens import TokenResolver

TEXT_ALIGN = {
    "LEFT": "left",
    "CENTER": "center",
    "RIGHT": "right",
    "JUSTIFIED": "justify",
}

TEXT_DECORATION = {
    "UNDERLINE": "underline",
    "STRIKETHROUGH": "line-through",
}


def infer_tag(font_size: float | None, font_weight: float | None) -> str:
    """
    Pick a heading level or paragraph from font metrics.

    Examples:
        >>> infer_tag(48, 400)
        'h1'
        >>> infer_tag(30, 700)
        'h2'
        >>> infer_tag(20, 600)
        'h3'
        >>> infer_tag(16, 400)
        'p'
    """
    size = font_size or 0
    weight = font_weight or 400
    bold = weight >= 600
    if size >= 48 or (size >= 32 and bold):
        return "h1"
    if size >= 32 or (size >= 24 and bold):
        return "h2"
    if size >= 24 or (size >= 18 and bold):
        return "h3"
    return "p"


def text_tag(node: Node) -> str:
    style = node.style
    if style is None:
        return "p"
    return infer_tag(style.font_size, style.font_weight)


def text_sizing(node: Node) -> tuple[SizingMode, SizingMode]:
    """
    Per-axis sizing for a text node.

    Explicit FILL wins. Otherwise explicit HUG or the legacy auto-resize
    mode (``WIDTH_AND_HEIGHT`` hugs both axes, ``HEIGHT`` hugs vertically)
    hugs, and anything else is fixed.
    """
    auto_resize = (node.style.text_auto_resize if node.style else None) or node.text_auto_resize
    raw_h, raw_v = node.layout_sizing_horizontal, node.layout_sizing_vertical

    if raw_h == "FILL":
        horizontal = SizingMode.FILL
    elif raw_h == "HUG" or auto_resize == "WIDTH_AND_HEIGHT":
        horizontal = SizingMode.HUG
    else:
        horizontal = SizingMode.FIXED

    if raw_v == "FILL":
        vertical = SizingMode.FILL
    elif raw_v == "HUG" or auto_resize in ("WIDTH_AND_HEIGHT", "HEIGHT"):
        vertical = SizingMode.HUG
    else:
        vertical = SizingMode.FIXED

    return horizontal, vertical


def font_declarations(node: Node, tokens: TokenResolver) -> list[StyleDeclaration]:
    style = node.style
    if style is None:
        return []
    styles: list[StyleDeclaration] = []

    if style.font_family:
        fallback = f"'{style.font_family}', sans-serif"
        styles.append(decl("font-family", tokens.resolve(node, "fontFamily", fallback)))
    if style.font_size:
        styles.append(decl("font-size", tokens.resolve(node, "fontSize", px(style.font_size))))
    if style.font_weight:
        styles.append(decl("font-weight", fmt_number(style.font_weight)))

    post_script = (style.font_post_script_name or "").lower()
    if style.italic or "italic" in post_script or style.font_style == "ITALIC":
        styles.append(decl("font-style", "italic"))

    decoration = TEXT_DECORATION.get(style.text_decoration or "")
    if decoration:
        styles.append(decl("text-decoration", decoration))

    if style.text_align_horizontal:
        styles.append(decl("text-align", TEXT_ALIGN.get(style.text_align_horizontal, "left")))

    # Only one line-height form is emitted
    if style.line_height_percent_font_size:
        styles.append(decl("line-height", f"{fmt_number(round1(style.line_height_percent_font_size))}%"))
    elif style.line_height_percent:
        styles.append(decl("line-height", f"{fmt_number(round1(style.line_height_percent))}%"))
    elif style.line_height_px:
        styles.append(decl("line-height", px(style.line_height_px)))

    if style.letter_spacing:
        styles.append(decl("letter-spacing", px(style.letter_spacing)))

    return styles


def color_declarations(node: Node, tokens: TokenResolver) -> list[StyleDeclaration]:
    fill = node.first_visible_fill(PaintKind.SOLID)
    if fill is None:
        return []
    color = paint_color(fill)
    if color is None:
        return []
    return [decl("color", tokens.resolve_fill(node, fill, color))]


def resolve_text(node: Node, tokens: TokenResolver) -> tuple[list[StyleDeclaration], str]:
    """
    Resolve a TEXT node to declarations and an HTML tag.

    Returns:
        ``(declarations, tag)``; declarations start with a ``margin: 0``
        reset since the tag may be a heading.
    """
    horizontal, vertical = text_sizing(node)
    styles = [decl("margin", "0")]
    styles.extend(sizing_declarations(node, horizontal, vertical))
    styles.extend(constraint_declarations(node))
    styles.extend(font_declarations(node, tokens))
    styles.extend(color_declarations(node, tokens))
    if node.opacity is not None and node.opacity < 1:
        styles.append(decl("opacity", fmt_number(round(node.opacity, 2))))
    return styles, text_tag(node)
