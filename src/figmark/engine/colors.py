"""Design-tool colors to CSS color strings."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..core.nodes import Color, Paint
from ..core.strings import fmt_number, js_round


def _channel(value: float) -> int:
    return max(0, min(255, js_round(value * 255)))


def _alpha(value: float) -> str:
    rounded = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return fmt_number(float(rounded))


def css_color(color: Color, opacity: float | None = None) -> str:
    """
    Format a color as uppercase hex when opaque, else ``rgba()``.

    ``opacity`` overrides the color's own alpha, matching how paint opacity
    replaces it in the design tool.

    Examples:
        >>> css_color(Color(r=1, g=0, b=0))
        '#FF0000'
        >>> css_color(Color(r=0, g=0, b=0), opacity=0.5)
        'rgba(0, 0, 0, 0.5)'
    """
    alpha = color.a if opacity is None else opacity
    r, g, b = _channel(color.r), _channel(color.g), _channel(color.b)
    if alpha >= 1:
        return f"#{r:02X}{g:02X}{b:02X}"
    return f"rgba({r}, {g}, {b}, {_alpha(alpha)})"


def paint_color(paint: Paint) -> str | None:
    """CSS color of a solid paint, or None if it carries no color."""
    if paint.color is None:
        return None
    return css_color(paint.color, paint.opacity)
