"""
Media classification.

Classification runs an ordered table of rules and the first match wins:
Lottie URL in the layer name, animated GIF asset, video, image fill,
vector geometry. Naming conventions live in small predicate tables so a new
convention is one more row, not another branch.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from ..core.context import AssetResolver
from ..core.markup import MediaClassification, MediaKind, NO_MEDIA
from ..core.nodes import VECTOR_KINDS, Node, PaintKind, SizingMode
from ..core.strings import fmt_number, round1

logger = logging.getLogger(__name__)

LOTTIE_DIRECT_URL = re.compile(
    r"https://(?:assets\d*\.lottiefiles\.com|lottie\.host)/[^\s]+\.(?:json|lottie)",
    re.IGNORECASE,
)
LOTTIE_APP_URL = re.compile(r"https://app\.lottiefiles\.com/[^\s]+", re.IGNORECASE)


# =============================================================================
# Name heuristics
# =============================================================================


@dataclass(frozen=True)
class NameRule:
    """Classify a layer by case-insensitive substrings of its name."""

    kind: MediaKind
    needles: tuple[str, ...]

    def matches(self, name: str) -> bool:
        lowered = name.lower()
        return any(needle in lowered for needle in self.needles)


# GIF is checked before video
NAME_RULES: tuple[NameRule, ...] = (
    NameRule(MediaKind.GIF, ("gif", ".gif")),
    NameRule(MediaKind.VIDEO, ("video", ".mp4", ".webm", ".mov")),
)


def classify_name(name: str) -> MediaKind:
    """
    Raster media kind implied by a layer name.

    Examples:
        >>> classify_name("Hero loop.gif")
        <MediaKind.GIF: 'gif'>
        >>> classify_name("Product Video")
        <MediaKind.VIDEO: 'video'>
        >>> classify_name("Photo")
        <MediaKind.IMAGE: 'image'>
    """
    for rule in NAME_RULES:
        if rule.matches(name):
            return rule.kind
    return MediaKind.IMAGE


def find_lottie_url(name: str) -> str | None:
    """Return the first Lottie URL embedded in a layer name, direct URLs first."""
    if not name:
        return None
    match = LOTTIE_DIRECT_URL.search(name) or LOTTIE_APP_URL.search(name)
    return match.group(0) if match else None


def is_direct_lottie_url(url: str) -> bool:
    return url.lower().endswith((".json", ".lottie"))


# =============================================================================
# Classification rules
# =============================================================================

MediaRule = Callable[[Node, AssetResolver], MediaClassification | None]


def lottie_rule(node: Node, assets: AssetResolver) -> MediaClassification | None:
    url = find_lottie_url(node.name)
    if url is None:
        return None
    playable = is_direct_lottie_url(url)
    if not playable:
        logger.debug("Lottie app URL on %s cannot play directly: %s", node.id, url)
    return MediaClassification(kind=MediaKind.LOTTIE, asset_ref=url, playable=playable)


def gif_rule(node: Node, assets: AssetResolver) -> MediaClassification | None:
    url = assets.get_gif_url(node.id)
    if url is None:
        return None
    return MediaClassification(kind=MediaKind.GIF, asset_ref=url)


def video_rule(node: Node, assets: AssetResolver) -> MediaClassification | None:
    url = assets.get_video_url(node.id)
    if url is None and node.first_visible_fill(PaintKind.VIDEO) is None:
        return None
    return MediaClassification(kind=MediaKind.VIDEO, asset_ref=url)


def image_rule(node: Node, assets: AssetResolver) -> MediaClassification | None:
    if node.first_visible_fill(PaintKind.IMAGE) is None:
        return None
    return MediaClassification(kind=MediaKind.IMAGE, asset_ref=assets.get_image_url(node.id))


def vector_rule(node: Node, assets: AssetResolver) -> MediaClassification | None:
    if node.kind not in VECTOR_KINDS:
        return None
    return MediaClassification(kind=MediaKind.VECTOR, asset_ref=assets.get_svg_content(node.id))


MEDIA_RULES: tuple[MediaRule, ...] = (
    lottie_rule,
    gif_rule,
    video_rule,
    image_rule,
    vector_rule,
)


class MediaClassifier:
    """Runs ``MEDIA_RULES`` against a node and the asset snapshot."""

    def __init__(self, assets: AssetResolver, rules: tuple[MediaRule, ...] = MEDIA_RULES):
        self.assets = assets
        self.rules = rules

    def classify(self, node: Node) -> MediaClassification:
        for rule in self.rules:
            result = rule(node, self.assets)
            if result is not None:
                if result.asset_ref is None and result.kind != MediaKind.VIDEO:
                    logger.debug("No %s asset for %s (%s)", result.kind, node.id, node.name)
                return result
        return NO_MEDIA


# =============================================================================
# Inline SVG
# =============================================================================

_PROLOGUE = re.compile(r"<\?xml[^>]*\?>\s*|<!DOCTYPE[^>]*>\s*", re.IGNORECASE)
_SVG_OPEN_TAG = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_WIDTH_ATTR = re.compile(r'(\s)width="[^"]*"')
_HEIGHT_ATTR = re.compile(r'(\s)height="[^"]*"')
_STYLE_ATTR = re.compile(r'(\s)style="([^"]*)"')


def _dimension(mode: SizingMode, length: float | None) -> str | None:
    match mode:
        case SizingMode.FILL:
            return "100%"
        case SizingMode.HUG:
            return None
        case _:
            return None if length is None else fmt_number(round1(length))


def _with_style_hints(tag: str, hints: str) -> str:
    """Append flex hints to the tag's ``style`` attribute, adding one if absent."""
    existing = _STYLE_ATTR.search(tag)
    if existing is not None:
        value = existing.group(2).strip()
        if value and not value.endswith(";"):
            value += ";"
        merged = f"{value} {hints}".strip()
        return tag[: existing.start()] + f'{existing.group(1)}style="{merged}"' + tag[existing.end():]
    closing = "/>" if tag.endswith("/>") else ">"
    return tag[: -len(closing)].rstrip() + f' style="{hints}"' + closing


def rewrite_svg(svg: str, node: Node, css_class: str) -> str:
    """
    Fit prefetched SVG text to the node's sizing.

    This is literal attribute substitution on the root ``<svg>`` tag, not an
    SVG parse: FILL axes become ``100%`` with a flex hint, HUG axes keep the
    source value, FIXED axes take the rounded bounding box. ``class`` and
    ``data-node-id`` are injected and XML/DOCTYPE prologues removed.
    """
    text = _PROLOGUE.sub("", svg).strip()
    match = _SVG_OPEN_TAG.search(text)
    if match is None:
        logger.debug("SVG for %s has no <svg> root, emitting as-is", node.id)
        return text

    bbox = node.absolute_bounding_box
    horizontal = node.sizing("horizontal")
    vertical = node.sizing("vertical")
    width = _dimension(horizontal, bbox.width if bbox else None)
    height = _dimension(vertical, bbox.height if bbox else None)

    tag = match.group(0)
    if width is not None:
        tag = _WIDTH_ATTR.sub(rf'\g<1>width="{width}"', tag, count=1)
    if height is not None:
        tag = _HEIGHT_ATTR.sub(rf'\g<1>height="{height}"', tag, count=1)

    hints = []
    if horizontal == SizingMode.FILL:
        hints.append("flex: 1;")
    if vertical == SizingMode.FILL:
        hints.append("flex-grow: 1;")

    injected = f'<svg class="{css_class}" data-node-id="{node.id}"'
    tag = injected + tag[len("<svg"):]
    if hints:
        tag = _with_style_hints(tag, " ".join(hints))

    return text[: match.start()] + tag + text[match.end():]
