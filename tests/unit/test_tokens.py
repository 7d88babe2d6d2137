"""Tests for figmark.engine.tokens module."""

import pytest
from conftest import make_node

from figmark.core.context import TokenSnapshot
from figmark.engine.tokens import TokenResolver, variable_id


class TestVariableId:
    @pytest.mark.parametrize(
        ("reference", "expected"),
        [
            ({"type": "VARIABLE_ALIAS", "id": "VariableID:1:2"}, "VariableID:1:2"),
            ([{"id": "a"}, {"id": "b"}], "a"),
            ("VariableID:3", "VariableID:3"),
            ([], None),
            ({"type": "VARIABLE_ALIAS"}, None),
            (None, None),
        ],
    )
    def test_variable_id(self, reference: object, expected: str | None) -> None:
        assert variable_id(reference) == expected


class TestTokenResolver:
    """Bound variables resolve to var() with the literal as fallback."""

    def test_bound_scalar(self, tokens: TokenSnapshot) -> None:
        node = make_node(boundVariables={"fontSize": {"id": "VariableID:1:2"}})
        assert TokenResolver(tokens).resolve(node, "fontSize", "16px") == (
            "var(--font-size-body, 16px)"
        )

    def test_bound_array_uses_first(self, tokens: TokenSnapshot) -> None:
        node = make_node(boundVariables={"fills": [{"id": "VariableID:1:1"}, {"id": "other"}]})
        assert TokenResolver(tokens).resolve(node, "fills", "#000000") == (
            "var(--color-text-default, #000000)"
        )

    def test_unknown_variable_falls_back(self, tokens: TokenSnapshot) -> None:
        node = make_node(boundVariables={"fills": [{"id": "VariableID:missing"}]})
        assert TokenResolver(tokens).resolve(node, "fills", "#123456") == "#123456"

    def test_unbound_property_falls_back(self, tokens: TokenSnapshot) -> None:
        assert TokenResolver(tokens).resolve(make_node(), "fills", "#123456") == "#123456"

    def test_paint_level_binding(self, tokens: TokenSnapshot) -> None:
        node = make_node(
            fills=[{"type": "SOLID", "boundVariables": {"color": {"id": "VariableID:1:1"}}}]
        )
        resolver = TokenResolver(tokens)
        assert resolver.resolve_fill(node, node.fills[0], "#000000") == (
            "var(--color-text-default, #000000)"
        )


class TestTokenSnapshot:
    def test_symbolic_name_and_fallback(self, tokens: TokenSnapshot) -> None:
        token = tokens.resolve("VariableID:1:2")
        assert token is not None
        assert token.symbolic_name == "--font-size-body"
        assert token.resolved_fallback == "16"

    def test_missing(self, tokens: TokenSnapshot) -> None:
        assert tokens.resolve("nope") is None
