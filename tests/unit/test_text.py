"""Tests for figmark.engine.text module."""

import pytest
from conftest import bbox, make_node, solid

from figmark.core.context import TokenSnapshot
from figmark.core.nodes import Node
from figmark.engine.text import infer_tag, resolve_text
from figmark.engine.tokens import TokenResolver

NO_TOKENS = TokenResolver(TokenSnapshot())


def text_node(**fields: object) -> Node:
    fields.setdefault("absoluteBoundingBox", bbox(200, 24))
    return make_node(type="TEXT", characters="Hello", **fields)


def css(node: Node, tokens: TokenResolver = NO_TOKENS) -> list[str]:
    styles, _ = resolve_text(node, tokens)
    return [d.css() for d in styles]


class TestInferTag:
    """Heading heuristic from font metrics."""

    @pytest.mark.parametrize(
        ("size", "weight", "tag"),
        [
            (48, 400, "h1"),
            (32, 600, "h1"),
            (30, 700, "h2"),
            (32, 400, "h2"),
            (24, 400, "h3"),
            (18, 600, "h3"),
            (18, 500, "p"),
            (16, 400, "p"),
            (None, None, "p"),
        ],
    )
    def test_infer_tag(self, size: float | None, weight: float | None, tag: str) -> None:
        assert infer_tag(size, weight) == tag

    def test_resolve_text_returns_tag(self) -> None:
        _, tag = resolve_text(text_node(style={"fontSize": 48}), NO_TOKENS)
        assert tag == "h1"

    def test_no_style_is_paragraph(self) -> None:
        _, tag = resolve_text(text_node(), NO_TOKENS)
        assert tag == "p"


class TestTextSizing:
    """Sizing honors the legacy auto-resize field."""

    def test_margin_reset_first(self) -> None:
        assert css(text_node())[0] == "margin: 0"

    def test_fixed_by_default(self) -> None:
        assert css(text_node()) == ["margin: 0", "width: 200px", "height: 24px"]

    def test_width_and_height_hugs_both(self) -> None:
        node = text_node(style={"textAutoResize": "WIDTH_AND_HEIGHT"})
        assert css(node) == ["margin: 0"]

    def test_height_hugs_vertically(self) -> None:
        node = text_node(textAutoResize="HEIGHT")
        assert css(node) == ["margin: 0", "width: 200px"]

    def test_fill_wins_over_auto_resize(self) -> None:
        node = text_node(layoutSizingHorizontal="FILL", textAutoResize="WIDTH_AND_HEIGHT")
        assert css(node) == ["margin: 0", "flex: 1", "align-self: stretch"]


class TestFontStyles:
    """Font, decoration, alignment, spacing."""

    def test_font_declarations(self) -> None:
        node = text_node(
            textAutoResize="WIDTH_AND_HEIGHT",
            style={
                "fontFamily": "Source Sans 3",
                "fontSize": 18,
                "fontWeight": 600,
                "textAlignHorizontal": "JUSTIFIED",
                "letterSpacing": -0.5,
            },
        )
        assert css(node) == [
            "margin: 0",
            "font-family: 'Source Sans 3', sans-serif",
            "font-size: 18px",
            "font-weight: 600",
            "text-align: justify",
            "letter-spacing: -0.5px",
        ]

    @pytest.mark.parametrize(
        "style",
        [
            {"italic": True},
            {"fontPostScriptName": "Inter-Italic"},
            {"fontStyle": "ITALIC"},
        ],
    )
    def test_italic_sources(self, style: dict[str, object]) -> None:
        assert "font-style: italic" in css(text_node(style=style))

    def test_decorations(self) -> None:
        assert "text-decoration: underline" in css(text_node(style={"textDecoration": "UNDERLINE"}))
        assert "text-decoration: line-through" in css(
            text_node(style={"textDecoration": "STRIKETHROUGH"})
        )

    def test_line_height_precedence(self) -> None:
        all_three = {"lineHeightPercentFontSize": 150, "lineHeightPercent": 120, "lineHeightPx": 24}
        result = css(text_node(style=all_three))
        assert [r for r in result if r.startswith("line-height")] == ["line-height: 150%"]

        percent_and_px = {"lineHeightPercent": 120, "lineHeightPx": 24}
        assert "line-height: 120%" in css(text_node(style=percent_and_px))

        assert "line-height: 24px" in css(text_node(style={"lineHeightPx": 24}))


class TestTextColor:
    def test_solid_fill_color(self) -> None:
        assert "color: #333333" in css(text_node(fills=[solid(0.2, 0.2, 0.2)]))

    def test_translucent_color(self) -> None:
        assert "color: rgba(0, 0, 0, 0.6)" in css(text_node(fills=[solid(0, 0, 0, opacity=0.6)]))

    def test_token_bound_typography(self, tokens: TokenSnapshot) -> None:
        node = text_node(
            style={"fontSize": 16},
            fills=[solid(0, 0, 0)],
            boundVariables={
                "fontSize": {"id": "VariableID:1:2"},
                "fills": [{"id": "VariableID:1:1"}],
            },
        )
        result = css(node, TokenResolver(tokens))
        assert "font-size: var(--font-size-body, 16px)" in result
        assert "color: var(--color-text-default, #000000)" in result
