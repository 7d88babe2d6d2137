"""
Component binding resolution.

A bound instance node is replaced wholesale by a component from the target
package. Prop values arrive in the design tool's vocabulary and are
remapped to the component package's vocabulary here.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from ..core.context import TranslationContext
from ..core.markup import ComponentBinding, StyleDeclaration, decl
from ..core.nodes import Node, NodeKind
from ..core.strings import fmt_number, pascal_case, prop_name
from .text import text_tag

logger = logging.getLogger(__name__)

SIZE_MAP = {
    "xxlarge": "2xl",
    "xlarge": "xl",
    "large": "lg",
    "medium": "md",
    "small": "sm",
    "xsmall": "xs",
    "xxsmall": "2xs",
}

COLOR_MAP = {
    "main": "accent",
}

# Expressed through CSS by the target components, not props
DROPPED_PROPS = frozenset({"weight", "state"})

HEADING_COMPONENT = "Heading"

_HEADING_TAG = re.compile(r"^h([1-6])$")


# =============================================================================
# Prop extraction
# =============================================================================


def extract_props(node: Node) -> dict[str, Any]:
    """
    Props from an instance node's variant properties and text overrides.

    Variant keys carry a ``#id`` suffix which is stripped, and names are
    camelCased into identifiers (``Show Icon#1:2`` becomes ``showIcon``).
    A ``characters`` override becomes ``children``.

    Examples:
        >>> extract_props(Node(component_properties={"Size#12:0": {"value": "large"}}))
        {'size': 'large'}
    """
    props: dict[str, Any] = {}
    for key, value in node.component_properties.items():
        name = prop_name(key.split("#", 1)[0])
        if not name:
            continue
        props[name] = value.get("value", value) if isinstance(value, dict) else value
    for override in node.overrides:
        if "characters" in override.get("overriddenFields", []):
            props["children"] = override.get("characters", "")
    return props


def remap_props(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Translate prop names and values to the target vocabulary.

    Examples:
        >>> remap_props({"size": "xxlarge", "color": "main", "state": "hover"})
        {'data-size': '2xl', 'data-color': 'accent'}
    """
    props: dict[str, Any] = {}
    for key, value in raw.items():
        lower_key = key.lower()
        lower_value = value.lower() if isinstance(value, str) else value
        if lower_key == "size":
            props["data-size"] = SIZE_MAP.get(lower_value, value)
        elif lower_key == "color":
            props["data-color"] = COLOR_MAP.get(lower_value, value)
        elif lower_key in DROPPED_PROPS:
            continue
        else:
            props[key] = value
    return props


def first_visible_text(node: Node) -> Node | None:
    """Depth-first search for the first visible TEXT node under ``node``."""
    for child in node.children:
        if not child.visible:
            continue
        if child.kind == NodeKind.TEXT:
            return child
        found = first_visible_text(child)
        if found is not None:
            return found
    return None


def heading_level(node: Node) -> int:
    """Heading level from the tag the nested text run would render as; defaults to 1."""
    text = first_visible_text(node)
    if text is None:
        return 1
    match = _HEADING_TAG.match(text_tag(text))
    return int(match.group(1)) if match else 1


def heading_style(node: Node) -> list[StyleDeclaration]:
    """Font weight of the text run the heading level was taken from."""
    text = first_visible_text(node)
    if text is None or text.style is None or not text.style.font_weight:
        return []
    return [decl("font-weight", fmt_number(text.style.font_weight))]


def collect_text(node: Node) -> str:
    """Concatenate visible text under ``node``, space separated."""
    parts: list[str] = []
    for child in node.children:
        if not child.visible:
            continue
        if child.kind == NodeKind.TEXT and child.characters:
            parts.append(child.characters.strip())
        else:
            nested = collect_text(child)
            if nested:
                parts.append(nested)
    return " ".join(p for p in parts if p)


# =============================================================================
# Resolver
# =============================================================================


class ComponentBindingResolver:
    """Looks up, validates, and remaps component bindings for nodes."""

    def __init__(self, context: TranslationContext):
        self.bindings = context.bindings
        self.known_exports = context.known_exports
        self.name_map = context.name_map

    def component_name(self, raw_name: str) -> str | None:
        """Normalize and rename; None if the target package does not export it."""
        name = pascal_case(raw_name)
        name = self.name_map.get(name, name)
        if not name:
            return None
        if self.known_exports is not None and name not in self.known_exports:
            return None
        return name

    def lookup(self, node: Node) -> ComponentBinding | None:
        """
        Resolve the binding for ``node``, if any.

        Returns None when the node has no entry or its component is not in
        the export allow-list, in which case the node is translated
        structurally.
        """
        entry = self.bindings.lookup(node.id)
        if entry is None:
            return None

        name = self.component_name(entry.component_name)
        if name is None:
            logger.debug(
                "Binding for %s names unknown component %r, translating structurally",
                node.id,
                entry.component_name,
            )
            return None

        raw = extract_props(node)
        raw.update(entry.raw_props)
        props = remap_props(raw)

        style_overrides: list[StyleDeclaration] = []
        if name == HEADING_COMPONENT:
            props["level"] = heading_level(node)
            style_overrides = heading_style(node)

        text = props.pop("children", None)
        if not isinstance(text, str) or not text:
            text = collect_text(node)

        return ComponentBinding(
            source_node_id=node.id,
            target_component_name=name,
            props=props,
            text_content=text,
            style_overrides=style_overrides,
        )
