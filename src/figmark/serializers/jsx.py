"""
Component-descriptor serializer: a MarkupNode tree to a React module.

Bound nodes become ``<ComponentName ... />`` elements imported from the
configured component package; everything else becomes a plain element
with a style object.
"""

from __future__ import annotations

import json
import re
from typing import Any

from ..core.markup import ComponentBinding, MarkupNode
from ..core.strings import camel_case_property, pascal_case

DEFAULT_PACKAGE = "rk-designsystem"

# HTML attribute names that differ in JSX
JSX_ATTRIBUTE_NAMES = {
    "class": "className",
    "for": "htmlFor",
    "crossorigin": "crossOrigin",
}

# Attribute names JSX accepts directly; others go through an object spread
_JSX_ATTRIBUTE_NAME = re.compile(r"[A-Za-z_$][\w$-]*")

_JSX_TEXT_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "{": "&#123;",
    "}": "&#125;",
}


def escape_jsx(text: str) -> str:
    """
    Escape text for use as JSX children.

    Examples:
        >>> escape_jsx("a < b {c}")
        'a &lt; b &#123;c&#125;'
    """
    return "".join(_JSX_TEXT_ESCAPES.get(ch, ch) for ch in text)


def prop_string(key: str, value: Any) -> str:
    """
    Format one JSX prop.

    Strings are quoted, ``True`` is a bare key, ``False`` and ``None`` are
    omitted, anything else is a JSON expression. A key that is not a valid
    attribute name is passed as a spread object.

    Examples:
        >>> prop_string("variant", "primary")
        ' variant="primary"'
        >>> prop_string("disabled", True)
        ' disabled'
        >>> prop_string("level", 2)
        ' level={2}'
        >>> prop_string("show icon", True)
        ' {...{"show icon": true}}'
    """
    if value is None or value is False:
        return ""
    if not _JSX_ATTRIBUTE_NAME.fullmatch(key):
        return f" {{...{{{json.dumps(key)}: {json.dumps(value, ensure_ascii=False)}}}}}"
    if value is True:
        return f" {key}"
    if isinstance(value, str) and '"' not in value:
        return f' {key}="{value}"'
    return f" {key}={{{json.dumps(value, ensure_ascii=False)}}}"


def style_object(styles: dict[str, str]) -> str:
    if not styles:
        return ""
    body = ", ".join(
        f"{camel_case_property(prop)}: {json.dumps(value, ensure_ascii=False)}"
        for prop, value in styles.items()
    )
    return f" style={{{{ {body} }}}}"


def _attributes(node: MarkupNode) -> str:
    parts = []
    for name, value in node.attributes.items():
        jsx_name = JSX_ATTRIBUTE_NAMES.get(name, name)
        parts.append(f" {jsx_name}" if value == "" else prop_string(jsx_name, value))
    return "".join(parts) + style_object(node.effective_styles())


def _bound_lines(node: MarkupNode, binding: ComponentBinding, pad: str) -> list[str]:
    name = binding.target_component_name
    props = "".join(prop_string(key, value) for key, value in binding.props.items())
    if binding.style_overrides:
        overrides = {d.property: d.value for d in binding.style_overrides}
        props += style_object(overrides)
    props += prop_string("data-node-id", node.node_id)
    if node.text:
        return [f"{pad}<{name}{props}>{escape_jsx(node.text)}</{name}>"]
    return [f"{pad}<{name}{props} />"]


def _element_lines(node: MarkupNode, depth: int, indent: int) -> list[str]:
    pad = " " * (indent * depth)
    if node.binding is not None:
        return _bound_lines(node, node.binding, pad)

    if node.raw is not None:
        inner = f" dangerouslySetInnerHTML={{{{ __html: {json.dumps(node.raw, ensure_ascii=False)} }}}}"
        if node.tag == "svg":
            return [f'{pad}<span style={{{{ display: "contents" }}}}{inner} />']
        return [f"{pad}<{node.tag}{_attributes(node)}{inner} />"]

    attrs = _attributes(node)
    if node.children:
        lines = [f"{pad}<{node.tag}{attrs}>"]
        if node.text:
            lines.append(" " * (indent * (depth + 1)) + escape_jsx(node.text))
        for child in node.children:
            lines.extend(_element_lines(child, depth + 1, indent))
        lines.append(f"{pad}</{node.tag}>")
        return lines
    if node.text:
        return [f"{pad}<{node.tag}{attrs}>{escape_jsx(node.text)}</{node.tag}>"]
    return [f"{pad}<{node.tag}{attrs} />"]


def used_components(markup: MarkupNode | None) -> list[str]:
    """Sorted names of the bound components in a tree."""
    if markup is None:
        return []
    return sorted(
        {e.binding.target_component_name for e in markup.iter_tree() if e.binding is not None}
    )


def render_jsx(
    markup: MarkupNode | None,
    component_name: str | None = None,
    package: str = DEFAULT_PACKAGE,
    indent: int = 2,
) -> str:
    """
    Serialize a tree to an ES module with a default-exported component.

    Args:
        markup: Translated tree
        component_name: Name of the exported function; derived from the root
            element's class when omitted
        package: Module the bound components are imported from
        indent: Spaces per nesting level
    """
    if component_name is None:
        root_class = markup.attributes.get("class", "") if markup is not None else ""
        component_name = pascal_case(root_class.split(" ")[0]) or "Design"
        if component_name[0].isdigit():
            component_name = f"Design{component_name}"

    lines = ["import React from 'react';"]
    components = used_components(markup)
    if components:
        lines.append(f"import {{ {', '.join(components)} }} from '{package}';")
    lines.append("")
    lines.append(f"export default function {component_name}() {{")
    if markup is None:
        lines.append(" " * indent + "return null;")
    else:
        lines.append(" " * indent + "return (")
        lines.extend(_element_lines(markup, 2, indent))
        lines.append(" " * indent + ");")
    lines.append("}")
    return "\n".join(lines) + "\n"
