"""
Gradient paints to CSS ``background`` values.

The design tool stores a gradient as color stops plus handle positions in
unit space. The angle between the first two handles becomes the CSS angle.
"""

from __future__ import annotations

import logging
import math

from ..core.nodes import ColorStop, Paint, PaintKind
from ..core.strings import js_round
from .colors import css_color

logger = logging.getLogger(__name__)

_DIAMOND_QUADRANTS = (
    ("to bottom right", "bottom right"),
    ("to bottom left", "bottom left"),
    ("to top left", "top left"),
    ("to top right", "top right"),
)


def handle_angle(paint: Paint) -> float:
    """Mathematical angle in degrees of the start->end handle vector."""
    start, end = paint.gradient_handle_positions[0], paint.gradient_handle_positions[1]
    return math.atan2(end.y - start.y, end.x - start.x) * 180 / math.pi


def linear_angle(paint: Paint) -> int:
    """
    CSS ``linear-gradient`` angle for a paint.

    CSS measures 0deg pointing up and clockwise, so the design-space
    angle is shifted by 90 degrees.

    Examples:
        >>> from figmark.core.nodes import Vector
        >>> linear_angle(Paint(type="GRADIENT_LINEAR",
        ...     gradient_handle_positions=[Vector(x=0, y=0), Vector(x=1, y=0)]))
        90
    """
    return js_round(90 + handle_angle(paint))


def _percent_stops(stops: list[ColorStop]) -> str:
    return ", ".join(f"{css_color(s.color)} {js_round(s.position * 100)}%" for s in stops)


def _degree_stops(stops: list[ColorStop]) -> str:
    return ", ".join(f"{css_color(s.color)} {js_round(s.position * 360)}deg" for s in stops)


def _diamond(stops: list[ColorStop]) -> str:
    # No CSS diamond gradient: four corner-anchored linear layers
    inner = css_color(stops[0].color)
    outer = css_color(stops[-1].color)
    return ", ".join(
        f"linear-gradient({direction}, {inner} 0%, {outer} 50%) {anchor} / 50% 50% no-repeat"
        for direction, anchor in _DIAMOND_QUADRANTS
    )


def gradient_css(paint: Paint) -> str | None:
    """
    Build the CSS ``background`` value for a gradient paint.

    Returns:
        The value, or None when the paint is malformed (fewer than two
        handles or no stops) or not a gradient at all.
    """
    kind = paint.kind
    if not kind.is_gradient:
        return None
    if len(paint.gradient_handle_positions) < 2 or not paint.gradient_stops:
        logger.debug("Dropping malformed %s paint", kind)
        return None

    stops = paint.gradient_stops
    match kind:
        case PaintKind.GRADIENT_LINEAR:
            return f"linear-gradient({linear_angle(paint)}deg, {_percent_stops(stops)})"
        case PaintKind.GRADIENT_RADIAL:
            return f"radial-gradient(circle, {_percent_stops(stops)})"
        case PaintKind.GRADIENT_ANGULAR:
            start = js_round(handle_angle(paint) + 90)
            return f"conic-gradient(from {start}deg at 50% 50%, {_degree_stops(stops)})"
        case PaintKind.GRADIENT_DIAMOND:
            return _diamond(stops)
        case _:
            return None
