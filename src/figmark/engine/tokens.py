"""
Design token resolution.

A node property bound to a design variable is emitted as
``var(--token-name, <literal>)`` so the output follows the design system
while still rendering if the custom property is never defined.
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.context import TokenTable
from ..core.nodes import Node, Paint

logger = logging.getLogger(__name__)


def variable_id(reference: Any) -> str | None:
    """
    Extract a variable id from a bound-variable reference.

    References are ``{"type": "VARIABLE_ALIAS", "id": "..."}`` objects, or a
    list of them for array properties such as ``fills`` (first entry wins).

    Examples:
        >>> variable_id({"id": "VariableID:1:2"})
        'VariableID:1:2'
        >>> variable_id([{"id": "a"}, {"id": "b"}])
        'a'
        >>> variable_id([]) is None
        True
    """
    if isinstance(reference, list):
        reference = reference[0] if reference else None
    if isinstance(reference, dict):
        ref_id = reference.get("id")
        return ref_id if isinstance(ref_id, str) and ref_id else None
    if isinstance(reference, str) and reference:
        return reference
    return None


class TokenResolver:
    """Wraps a token table with node-property lookups."""

    def __init__(self, tokens: TokenTable):
        self.tokens = tokens

    def resolve_reference(self, reference: Any, fallback: str) -> str:
        var_id = variable_id(reference)
        if var_id is None:
            return fallback
        token = self.tokens.resolve(var_id)
        if token is None:
            logger.debug("Unresolved design token %s, using literal %s", var_id, fallback)
            return fallback
        return f"var({token.symbolic_name}, {fallback})"

    def resolve(self, node: Node, property: str, fallback: str) -> str:
        """
        Resolve ``node.boundVariables[property]`` to a CSS value.

        Never fails: an absent binding or unknown variable returns
        ``fallback`` unchanged.
        """
        return self.resolve_reference(node.bound_variables.get(property), fallback)

    def resolve_fill(self, node: Node, paint: Paint, fallback: str) -> str:
        """Resolve a fill color via the node's ``fills`` binding, then the paint's own."""
        if "fills" in node.bound_variables:
            return self.resolve(node, "fills", fallback)
        return self.resolve_reference(paint.bound_variables.get("color"), fallback)
