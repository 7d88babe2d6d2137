"""Design-tree translation engine."""

from .appearance import resolve_appearance
from .bindings import ComponentBindingResolver, remap_props
from .layout import resolve_layout
from .media import MediaClassifier, classify_name, rewrite_svg
from .prefetch import PrefetchPlan, parse_design_url, plan_prefetch, sort_raster_assets
from .text import infer_tag, resolve_text
from .tokens import TokenResolver
from .walker import TreeWalker, translate

__all__ = [
    "TreeWalker",
    "translate",
    "resolve_layout",
    "resolve_appearance",
    "resolve_text",
    "infer_tag",
    "TokenResolver",
    "MediaClassifier",
    "classify_name",
    "rewrite_svg",
    "ComponentBindingResolver",
    "remap_props",
    "PrefetchPlan",
    "plan_prefetch",
    "sort_raster_assets",
    "parse_design_url",
]
