"""
Tree walker: depth-first, pre-order translation of a design tree.

``walk`` dispatches on node kind with one arm per kind family and a default
arm that keeps unknown kinds as plain containers. The only state threaded
down the recursion is whether the parent is an Auto Layout container.
"""

from __future__ import annotations

import logging

from ..core.context import TranslationContext
from ..core.errors import DocumentError
from ..core.markup import (
    ComponentBinding,
    MarkupNode,
    MediaClassification,
    MediaKind,
    StyleDeclaration,
    decl,
)
from ..core.nodes import COMPOSITE_KINDS, Node, NodeKind, SizingMode
from ..core.strings import class_name, px
from .appearance import (
    corner_radius_value,
    fixed_size_declarations,
    resolve_appearance,
    resolve_ellipse,
    resolve_line,
)
from .bindings import ComponentBindingResolver
from .layout import resolve_layout, stretch_declarations
from .media import MediaClassifier, rewrite_svg
from .text import resolve_text
from .tokens import TokenResolver

logger = logging.getLogger(__name__)

PLAY_ICON_SVG = (
    '<svg width="24" height="24" viewBox="0 0 24 24" fill="white"><path d="M8 5v14l11-7z"/></svg>'
)
LOTTIE_PLACEHOLDER_BACKGROUND = "linear-gradient(135deg, #667eea 0%, #764ba2 100%)"

# Kinds whose media fills are rendered as media elements
MEDIA_HOST_KINDS = frozenset(
    {NodeKind.RECTANGLE, NodeKind.FRAME, NodeKind.COMPONENT, NodeKind.INSTANCE}
)


class TreeWalker:
    """
    Translate ``Node`` trees against one read-only ``TranslationContext``.

    A walker holds no per-compile state, so one instance may translate any
    number of trees, concurrently if desired.
    """

    def __init__(self, context: TranslationContext | None = None):
        self.context = context or TranslationContext()
        self.assets = self.context.assets
        self.tokens = TokenResolver(self.context.tokens)
        self.media = MediaClassifier(self.context.assets)
        self.bindings = ComponentBindingResolver(self.context)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def walk(self, node: Node, parent_has_auto_layout: bool = False) -> MarkupNode | None:
        """
        Translate ``node`` and its visible descendants.

        Returns:
            The translated element, or None when the node is hidden.
        """
        if not node.visible:
            return None

        kind = node.kind
        if kind in COMPOSITE_KINDS:
            binding = self.bindings.lookup(node)
            if binding is not None:
                return self._bound(node, binding)

        if kind in MEDIA_HOST_KINDS:
            media = self.media.classify(node)
            if media.kind != MediaKind.NONE:
                element = self._media(node, media, parent_has_auto_layout)
                if element is not None:
                    return element

        match kind:
            case NodeKind.TEXT:
                return self._text(node, parent_has_auto_layout)
            case NodeKind.RECTANGLE:
                return self._box(node, parent_has_auto_layout)
            case NodeKind.ELLIPSE:
                return self._element(node, resolve_ellipse(node, self.tokens, self.assets))
            case NodeKind.LINE:
                return self._element(node, resolve_line(node))
            case (
                NodeKind.VECTOR
                | NodeKind.BOOLEAN_OPERATION
                | NodeKind.STAR
                | NodeKind.REGULAR_POLYGON
                | NodeKind.SLICE
            ):
                return self._vector(node)
            case (
                NodeKind.FRAME
                | NodeKind.SECTION
                | NodeKind.COMPONENT
                | NodeKind.COMPONENT_SET
                | NodeKind.INSTANCE
            ):
                return self._container(node, parent_has_auto_layout)
            case NodeKind.GROUP | NodeKind.DOCUMENT | NodeKind.CANVAS:
                return self._passthrough(node, parent_has_auto_layout)
            case _:
                logger.debug("Unknown node type %r on %s, emitting container", node.type, node.id)
                return self._passthrough(node, parent_has_auto_layout)

    def walk_children(self, node: Node, has_auto_layout: bool) -> list[MarkupNode]:
        children: list[MarkupNode] = []
        for child in node.children:
            element = self.walk(child, has_auto_layout)
            if element is not None:
                children.append(element)
        return children

    # =========================================================================
    # Structural arms
    # =========================================================================

    def _attributes(self, node: Node, *extra_classes: str) -> dict[str, str]:
        classes = " ".join((class_name(node.name), *extra_classes))
        return {"class": classes, "data-node-id": node.id}

    def _element(
        self,
        node: Node,
        styles: list[StyleDeclaration],
        tag: str = "div",
        children: list[MarkupNode] | None = None,
    ) -> MarkupNode:
        return MarkupNode(
            tag=tag,
            styles=styles,
            attributes=self._attributes(node),
            children=children or [],
        )

    def _container(self, node: Node, parent_has_auto_layout: bool) -> MarkupNode:
        styles = resolve_layout(node, parent_has_auto_layout)
        styles.extend(resolve_appearance(node, self.tokens, self.assets))
        children = self.walk_children(node, node.has_auto_layout)

        # Childless instance rendered upstream as a flat image
        if not node.children and node.kind == NodeKind.INSTANCE:
            url = self.assets.get_image_url(node.id)
            if url is not None:
                attributes = self._attributes(node)
                attributes.update(src=url, alt=node.name)
                return MarkupNode(tag="img", styles=styles, attributes=attributes)

        return self._element(node, styles, children=children)

    def _passthrough(self, node: Node, parent_has_auto_layout: bool) -> MarkupNode:
        # Groups have no box of their own; children see the enclosing layout
        children = self.walk_children(node, parent_has_auto_layout)
        return self._element(node, [], children=children)

    def _box(self, node: Node, parent_has_auto_layout: bool) -> MarkupNode:
        styles = resolve_layout(node, parent_has_auto_layout)
        styles.extend(resolve_appearance(node, self.tokens, self.assets))
        return self._element(node, styles)

    def _text(self, node: Node, parent_has_auto_layout: bool) -> MarkupNode:
        styles, tag = resolve_text(node, self.tokens)
        horizontal, vertical = node.sizing("horizontal"), node.sizing("vertical")
        styles.extend(stretch_declarations(node, parent_has_auto_layout, horizontal, vertical))
        return MarkupNode(
            tag=tag,
            styles=styles,
            attributes=self._attributes(node),
            text=node.characters or "",
        )

    def _vector(self, node: Node) -> MarkupNode:
        media = self.media.classify(node)
        svg = media.asset_ref if media.kind == MediaKind.VECTOR else None
        if svg:
            return MarkupNode(
                tag="svg",
                attributes=self._attributes(node),
                raw=rewrite_svg(svg, node, class_name(node.name)),
                media=MediaKind.VECTOR,
            )

        styles = fixed_size_declarations(node)
        styles.append(decl("object-fit", "contain"))
        url = self.assets.get_image_url(node.id)
        if url is not None:
            attributes = self._attributes(node)
            attributes.update(src=url, alt="")
            return MarkupNode(tag="img", styles=styles, attributes=attributes, media=MediaKind.IMAGE)
        return self._element(node, styles)

    def _bound(self, node: Node, binding: ComponentBinding) -> MarkupNode:
        return MarkupNode(
            tag="div",
            attributes=self._attributes(node),
            binding=binding,
            text=binding.text_content or None,
        )

    # =========================================================================
    # Media arms
    # =========================================================================

    def _media(
        self, node: Node, media: MediaClassification, parent_has_auto_layout: bool
    ) -> MarkupNode | None:
        if media.kind == MediaKind.LOTTIE:
            return self._lottie(node, media)
        # Containers keep their children; only leaves become media elements
        if any(child.visible for child in node.children):
            return None
        match media.kind:
            case MediaKind.GIF:
                return self._gif(node, media)
            case MediaKind.VIDEO:
                return self._video(node, media)
            case MediaKind.IMAGE:
                return self._image(node, media)
            case _:
                return None

    def _media_box(self, node: Node) -> list[StyleDeclaration]:
        """Sizing for media elements: FILL axes take the full parent length."""
        styles: list[StyleDeclaration] = []
        bbox = node.absolute_bounding_box
        match node.sizing("horizontal"):
            case SizingMode.FILL:
                styles.extend([decl("flex", "1"), decl("width", "100%")])
            case SizingMode.HUG:
                pass
            case _:
                if bbox is not None:
                    styles.append(decl("width", px(bbox.width)))
        match node.sizing("vertical"):
            case SizingMode.FILL:
                styles.extend([decl("flex-grow", "1"), decl("height", "100%")])
            case SizingMode.HUG:
                pass
            case _:
                if bbox is not None:
                    styles.append(decl("height", px(bbox.height)))
        styles.append(decl("object-fit", "cover"))
        radius = corner_radius_value(node)
        if radius is not None:
            styles.append(decl("border-radius", radius))
        return styles

    def _lottie(self, node: Node, media: MediaClassification) -> MarkupNode:
        url = media.asset_ref or ""
        styles = self._media_box(node)
        if media.playable:
            attributes = self._attributes(node)
            attributes.update(src=url, speed="1", loop="", autoplay="")
            return MarkupNode(
                tag="dotlottie-wc", styles=styles, attributes=attributes, media=MediaKind.LOTTIE
            )

        attributes = self._attributes(node, "lottie-placeholder")
        attributes["data-lottie-app-url"] = url
        styles.extend(
            [
                decl("background", LOTTIE_PLACEHOLDER_BACKGROUND),
                decl("display", "flex"),
                decl("align-items", "center"),
                decl("justify-content", "center"),
                decl("position", "relative"),
            ]
        )
        caption = MarkupNode(
            styles=[
                decl("text-align", "center"),
                decl("color", "white"),
                decl("font-size", "12px"),
                decl("padding", "8px"),
            ],
            children=[
                MarkupNode(text="Lottie Animation"),
                MarkupNode(
                    styles=[decl("font-size", "10px"), decl("opacity", "0.8")],
                    text="Use direct .json/.lottie URL",
                ),
            ],
        )
        return MarkupNode(
            styles=styles, attributes=attributes, children=[caption], media=MediaKind.LOTTIE
        )

    def _poster(self, node: Node, url: str | None) -> list[StyleDeclaration]:
        styles = self._media_box(node)
        if url:
            styles.extend(
                [
                    decl("background-image", f"url('{url}')"),
                    decl("background-size", "cover"),
                    decl("background-position", "center"),
                ]
            )
        styles.append(decl("position", "relative"))
        return styles

    def _gif(self, node: Node, media: MediaClassification) -> MarkupNode:
        attributes = self._attributes(node, "gif-container")
        attributes["data-gif-name"] = node.name
        badge = MarkupNode(
            styles=[
                decl("position", "absolute"),
                decl("bottom", "4px"),
                decl("right", "4px"),
                decl("padding", "2px 6px"),
                decl("background", "rgba(0, 0, 0, 0.6)"),
                decl("border-radius", "4px"),
                decl("font-size", "10px"),
                decl("color", "white"),
            ],
            text="GIF",
        )
        return MarkupNode(
            styles=self._poster(node, media.asset_ref),
            attributes=attributes,
            children=[badge],
            media=MediaKind.GIF,
        )

    def _video(self, node: Node, media: MediaClassification) -> MarkupNode:
        attributes = self._attributes(node, "video-container")
        attributes["data-video-name"] = node.name
        play = MarkupNode(
            styles=[
                decl("position", "absolute"),
                decl("top", "50%"),
                decl("left", "50%"),
                decl("transform", "translate(-50%, -50%)"),
                decl("width", "48px"),
                decl("height", "48px"),
                decl("background", "rgba(0, 0, 0, 0.6)"),
                decl("border-radius", "50%"),
                decl("display", "flex"),
                decl("align-items", "center"),
                decl("justify-content", "center"),
            ],
            raw=PLAY_ICON_SVG,
        )
        poster = media.asset_ref or self.assets.get_image_url(node.id)
        return MarkupNode(
            styles=self._poster(node, poster),
            attributes=attributes,
            children=[play],
            media=MediaKind.VIDEO,
        )

    def _image(self, node: Node, media: MediaClassification) -> MarkupNode | None:
        if media.asset_ref is None:
            return None

        bbox = node.absolute_bounding_box
        is_instance = node.kind in (NodeKind.INSTANCE, NodeKind.COMPONENT)
        styles: list[StyleDeclaration] = []

        if node.sizing("horizontal") == SizingMode.FILL:
            styles.append(decl("width", "100%"))
        elif bbox is not None:
            styles.append(decl("width", px(bbox.width)))
            if is_instance:
                styles.append(decl("max-width", "100%"))

        if is_instance:
            if bbox is not None and bbox.width and bbox.height:
                styles.append(decl("aspect-ratio", f"{bbox.width / bbox.height:.4f}"))
            height = "100%" if node.sizing("vertical") == SizingMode.FILL else "auto"
            styles.append(decl("height", height))
        elif node.sizing("vertical") == SizingMode.FILL:
            styles.append(decl("height", "100%"))
        elif bbox is not None:
            styles.append(decl("height", px(bbox.height)))

        styles.extend([decl("object-fit", "cover"), decl("display", "block")])
        radius = corner_radius_value(node)
        if radius is not None:
            styles.append(decl("border-radius", radius))

        attributes = self._attributes(node)
        attributes.update(src=media.asset_ref, alt=node.name)
        return MarkupNode(tag="img", styles=styles, attributes=attributes, media=MediaKind.IMAGE)


def translate(root: Node | None, context: TranslationContext | None = None) -> MarkupNode | None:
    """
    Translate a whole design tree.

    Args:
        root: Root node of the tree
        context: Prefetched assets, tokens, and bindings; empty when omitted

    Returns:
        The root element, or None if the root itself is hidden

    Raises:
        DocumentError: If ``root`` is None
    """
    if root is None:
        raise DocumentError("Cannot translate a missing root node")

    markup = TreeWalker(context).walk(root)
    if markup is None:
        logger.info("Root node %s is hidden, nothing to translate", root.id)
        return None

    elements = list(markup.iter_tree())
    bound = sum(1 for element in elements if element.binding is not None)
    media = sum(1 for element in elements if element.media != MediaKind.NONE)
    logger.info(
        "Translated %s into %d elements (%d bound components, %d media)",
        root.id or root.name,
        len(elements),
        bound,
        media,
    )
    return markup
