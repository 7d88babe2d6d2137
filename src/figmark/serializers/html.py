"""
HTML serializer: a MarkupNode tree to an indented, inline-styled fragment,
or to a standalone page rendered from a Jinja2 template.
"""

from __future__ import annotations

import json
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from ..core.markup import ComponentBinding, MarkupNode, MediaKind

TEMPLATES_DIR = Path(__file__).parent / "templates"

VOID_TAGS = frozenset({"img", "br", "hr", "input", "meta", "link"})
BOOLEAN_ATTRIBUTES = frozenset({"loop", "autoplay", "muted", "controls", "crossorigin"})


def _attr(value: str) -> str:
    # Values are always double-quoted, so single quotes stay readable
    return str(escape(value)).replace("&#39;", "'")


def _attribute_string(attributes: dict[str, str], style: str) -> str:
    parts: list[str] = []
    for name, value in attributes.items():
        if name in BOOLEAN_ATTRIBUTES and value == "":
            parts.append(name)
        else:
            parts.append(f'{name}="{_attr(value)}"')
    if style:
        parts.append(f'style="{_attr(style)}"')
    return (" " + " ".join(parts)) if parts else ""


def _bound_element(node: MarkupNode, binding: ComponentBinding, pad: str) -> list[str]:
    attributes = dict(node.attributes)
    attributes["data-component"] = binding.target_component_name
    attributes["data-props"] = json.dumps(binding.props, sort_keys=True)
    style = "; ".join(d.css() for d in binding.style_overrides)
    text = escape(node.text or "")
    return [f"{pad}<div{_attribute_string(attributes, style)}>{text}</div>"]


def _element_lines(node: MarkupNode, depth: int, indent: int) -> list[str]:
    pad = " " * (indent * depth)
    if node.binding is not None:
        return _bound_element(node, node.binding, pad)

    if node.tag == "svg" and node.raw is not None:
        return [pad + node.raw]

    attrs = _attribute_string(node.attributes, node.style_attribute())
    if node.tag in VOID_TAGS:
        return [f"{pad}<{node.tag}{attrs} />"]

    open_tag = f"{pad}<{node.tag}{attrs}>"
    close_tag = f"</{node.tag}>"

    if not node.children and node.raw is None:
        return [f"{open_tag}{escape(node.text or '')}{close_tag}"]

    lines = [open_tag]
    if node.text:
        lines.append(" " * (indent * (depth + 1)) + str(escape(node.text)))
    if node.raw is not None:
        lines.append(" " * (indent * (depth + 1)) + node.raw)
    for child in node.children:
        lines.extend(_element_lines(child, depth + 1, indent))
    lines.append(pad + close_tag)
    return lines


def render_html(markup: MarkupNode | None, indent: int = 2) -> str:
    """
    Serialize a tree to an HTML fragment, one element per line.

    Bound components become hydration placeholders carrying
    ``data-component`` and JSON ``data-props``.
    """
    if markup is None:
        return ""
    return "\n".join(_element_lines(markup, 0, indent)) + "\n"


# =============================================================================
# Page
# =============================================================================


def create_jinja_env() -> Environment:
    """Create the Jinja2 environment for page templates."""
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "html.j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


_env: Environment | None = None


def get_jinja_env() -> Environment:
    """Get the shared Jinja2 environment (lazy singleton)."""
    global _env
    if _env is None:
        _env = create_jinja_env()
    return _env


def render_page(markup: MarkupNode | None, title: str | None = None, indent: int = 2) -> str:
    """Render a complete HTML document around the fragment."""
    uses_lottie = markup is not None and any(
        element.media == MediaKind.LOTTIE for element in markup.iter_tree()
    )
    template = get_jinja_env().get_template("page.html.j2")
    return template.render(
        title=title or "figmark",
        body=Markup(render_html(markup, indent)),
        uses_lottie=uses_lottie,
    )
