"""Serializers from MarkupNode trees to output text."""

from __future__ import annotations

from ..core.errors import SerializationError
from ..core.markup import MarkupNode
from .html import render_html, render_page
from .jsx import render_jsx

TARGETS = ("html", "page", "jsx")


def serialize(
    markup: MarkupNode | None,
    target: str = "html",
    *,
    title: str | None = None,
    package: str = "rk-designsystem",
    indent: int = 2,
) -> str:
    """
    Render a translated tree for an output target.

    Raises:
        SerializationError: If ``target`` is not one of ``TARGETS``.
    """
    match target:
        case "html":
            return render_html(markup, indent)
        case "page":
            return render_page(markup, title=title, indent=indent)
        case "jsx":
            return render_jsx(markup, package=package, indent=indent)
        case _:
            raise SerializationError(
                f"Unknown output target '{target}'. Expected one of: {', '.join(TARGETS)}"
            )


__all__ = ["serialize", "render_html", "render_page", "render_jsx", "TARGETS"]
