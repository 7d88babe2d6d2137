"""
Prefetch planning.

The engine never performs I/O. Before a compile, a collaborator fetches
whatever the tree needs; ``plan_prefetch`` tells it what that is, and
``sort_raster_assets`` files the fetched raster URLs into an
``AssetSnapshot``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import parse_qs, urlparse

from ..core.context import AssetSnapshot
from ..core.errors import DocumentError
from ..core.markup import MediaKind
from ..core.nodes import VECTOR_KINDS, Node, NodeKind, PaintKind
from .media import classify_name
from .tokens import variable_id

logger = logging.getLogger(__name__)

# Instances nested deeper than this are not offered for binding discovery
MAX_INSTANCE_DEPTH = 10

DESIGN_HOSTS = ("figma.com", "www.figma.com")


@dataclass
class PrefetchPlan:
    """
    Everything a compile of one tree may look up.

    Attributes:
        vector_ids: Nodes needing inline SVG text
        image_ids: Nodes with a visible image fill
        video_ids: Nodes with a visible video fill
        variable_ids: Design variables referenced by bindings
        instance_ids: Component instances for binding discovery
        image_refs: Image fill reference per node, for original-asset lookup
    """

    vector_ids: list[str] = field(default_factory=list)
    image_ids: list[str] = field(default_factory=list)
    video_ids: list[str] = field(default_factory=list)
    variable_ids: list[str] = field(default_factory=list)
    instance_ids: list[str] = field(default_factory=list)
    image_refs: dict[str, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (
            self.vector_ids
            or self.image_ids
            or self.video_ids
            or self.variable_ids
            or self.instance_ids
        )


def _collect_variables(node: Node, seen: dict[str, None]) -> None:
    for reference in node.bound_variables.values():
        references = reference if isinstance(reference, list) else [reference]
        for item in references:
            var_id = variable_id(item)
            if var_id is not None:
                seen.setdefault(var_id)
    for paint in (*node.fills, *node.strokes):
        var_id = variable_id(paint.bound_variables.get("color"))
        if var_id is not None:
            seen.setdefault(var_id)


def _scan(node: Node, plan: PrefetchPlan, variables: dict[str, None], depth: int) -> None:
    if not node.visible:
        return

    if node.kind in VECTOR_KINDS:
        plan.vector_ids.append(node.id)

    video = node.first_visible_fill(PaintKind.VIDEO)
    image = node.first_visible_fill(PaintKind.IMAGE)
    if video is not None:
        plan.video_ids.append(node.id)
    elif image is not None:
        plan.image_ids.append(node.id)
        if image.image_ref:
            plan.image_refs[node.id] = image.image_ref

    _collect_variables(node, variables)

    if depth < MAX_INSTANCE_DEPTH and (node.kind == NodeKind.INSTANCE or node.component_id):
        plan.instance_ids.append(node.id)

    for child in node.children:
        _scan(child, plan, variables, depth + 1)


def plan_prefetch(root: Node) -> PrefetchPlan:
    """
    Scan visible nodes for the assets, variables, and instances a compile needs.

    Hidden subtrees are skipped since they are never translated.
    """
    plan = PrefetchPlan()
    variables: dict[str, None] = {}
    _scan(root, plan, variables, 0)
    plan.variable_ids = list(variables)
    logger.debug(
        "Prefetch plan: %d vectors, %d images, %d videos, %d variables, %d instances",
        len(plan.vector_ids),
        len(plan.image_ids),
        len(plan.video_ids),
        len(plan.variable_ids),
        len(plan.instance_ids),
    )
    return plan


def _index(node: Node, index: dict[str, Node]) -> None:
    index[node.id] = node
    for child in node.children:
        _index(child, index)


def sort_raster_assets(
    plan: PrefetchPlan,
    urls: dict[str, str],
    root: Node,
    *,
    svgs: dict[str, str] | None = None,
    video_urls: dict[str, str] | None = None,
    fill_assets: dict[str, str] | None = None,
) -> AssetSnapshot:
    """
    File fetched raster URLs by the media kind their layer name implies.

    Args:
        plan: Plan the URLs were fetched for
        urls: Rendered raster URL per node id
        root: Tree the plan was made from, for layer names
        svgs: Fetched SVG text per node id
        video_urls: Video URLs per node id, from the video fills' references
        fill_assets: Original asset URL per image reference; GIFs prefer it
            over the rendered still so they stay animated

    Returns:
        An ``AssetSnapshot`` ready for translation
    """
    index: dict[str, Node] = {}
    _index(root, index)
    fill_assets = fill_assets or {}

    images: dict[str, str] = {}
    gifs: dict[str, str] = {}
    videos: dict[str, str] = dict(video_urls or {})

    for node_id, url in urls.items():
        if not url:
            continue
        node = index.get(node_id)
        name = node.name if node is not None else ""
        match classify_name(name):
            case MediaKind.GIF:
                image_ref = plan.image_refs.get(node_id)
                gifs[node_id] = fill_assets.get(image_ref, url) if image_ref else url
            case MediaKind.VIDEO:
                videos.setdefault(node_id, url)
            case _:
                images[node_id] = url

    return AssetSnapshot(images=images, svgs=dict(svgs or {}), videos=videos, gifs=gifs)


def parse_design_url(url: str) -> tuple[str, str | None]:
    """
    Extract the file key and node id from a design-tool URL.

    Examples:
        >>> parse_design_url("https://www.figma.com/design/AbC123/My-File?node-id=12-34")
        ('AbC123', '12:34')
        >>> parse_design_url("https://www.figma.com/file/AbC123/My-File")
        ('AbC123', None)

    Raises:
        DocumentError: If the URL is not a design-tool file URL.
    """
    parsed = urlparse(url)
    if parsed.hostname not in DESIGN_HOSTS:
        raise DocumentError(f"Not a design file URL: {url}")

    segments = parsed.path.split("/")
    # ["", "design", "<key>", "<title>"]
    if len(segments) < 3 or not segments[2]:
        raise DocumentError(f"No file key in URL: {url}")
    file_key = segments[2]

    node_ids = parse_qs(parsed.query).get("node-id")
    node_id = node_ids[0].replace("-", ":", 1) if node_ids and node_ids[0] else None
    return file_key, node_id
