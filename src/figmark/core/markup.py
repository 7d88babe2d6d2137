"""
Translation output types.

A ``MarkupNode`` tree is the single intermediate form every serializer
walks. Style declarations are an ordered list rather than a mapping:
when the same property appears twice the later one wins, exactly as
repeated properties behave inside one inline ``style`` attribute.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StyleDeclaration(BaseModel):
    """A single ``property: value`` pair."""

    model_config = ConfigDict(frozen=True)

    property: str
    value: str

    def css(self) -> str:
        return f"{self.property}: {self.value}"


def decl(prop: str, value: str) -> StyleDeclaration:
    """Shorthand constructor used throughout the resolvers."""
    return StyleDeclaration(property=prop, value=value)


class DesignToken(BaseModel):
    """A design variable resolved to a CSS custom property."""

    model_config = ConfigDict(frozen=True)

    variable_id: str
    symbolic_name: str
    resolved_fallback: str | None = None


class ComponentBinding(BaseModel):
    """
    A design node bound to a target-framework component.

    Attributes:
        source_node_id: Id of the bound design node
        target_component_name: Export name in the target component package
        props: Props already remapped to the target vocabulary
        text_content: Visible text under the bound node, used as children
        style_overrides: Inline style the component should receive
    """

    model_config = ConfigDict(frozen=True)

    source_node_id: str
    target_component_name: str
    props: dict[str, Any] = Field(default_factory=dict)
    text_content: str = ""
    style_overrides: list[StyleDeclaration] = Field(default_factory=list)


class MediaKind(StrEnum):
    """Media classification outcomes."""

    VECTOR = "vector"
    IMAGE = "image"
    VIDEO = "video"
    GIF = "gif"
    LOTTIE = "lottie"
    NONE = "none"


class MediaClassification(BaseModel):
    """
    Result of classifying a node's media.

    Attributes:
        kind: Media kind
        asset_ref: URL or inline SVG text from the asset snapshot, if resolved
        playable: False only for Lottie app URLs that cannot be played directly
    """

    model_config = ConfigDict(frozen=True)

    kind: MediaKind = MediaKind.NONE
    asset_ref: str | None = None
    playable: bool = True


NO_MEDIA = MediaClassification()


class MarkupNode(BaseModel):
    """
    One element of the translated output tree.

    ``children`` and ``binding`` are mutually exclusive: a bound node has
    its subtree replaced by the component. ``raw`` holds pre-rendered
    markup (inline SVG) that serializers emit verbatim.
    """

    model_config = ConfigDict(frozen=True)

    tag: str = "div"
    styles: list[StyleDeclaration] = Field(default_factory=list)
    attributes: dict[str, str] = Field(default_factory=dict)
    children: list[MarkupNode] = Field(default_factory=list)
    text: str | None = None
    raw: str | None = None
    binding: ComponentBinding | None = None
    media: MediaKind = MediaKind.NONE

    @property
    def node_id(self) -> str:
        return self.attributes.get("data-node-id", "")

    def effective_styles(self) -> dict[str, str]:
        """Collapse declarations into a mapping where the last declaration of a property wins."""
        result: dict[str, str] = {}
        for declaration in self.styles:
            result.pop(declaration.property, None)
            result[declaration.property] = declaration.value
        return result

    def style_attribute(self) -> str:
        return "; ".join(d.css() for d in self.styles)

    def iter_tree(self):
        """Yield this node and all descendants, pre-order."""
        yield self
        for child in self.children:
            yield from child.iter_tree()


MarkupNode.model_rebuild()
