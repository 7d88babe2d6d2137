"""Shared pytest fixtures for figmark tests."""

from __future__ import annotations

from typing import Any

import pytest

from figmark.core.context import (
    AssetSnapshot,
    BindingEntry,
    BindingSnapshot,
    TokenEntry,
    TokenSnapshot,
    TranslationContext,
)
from figmark.core.nodes import Node


def make_node(**fields: Any) -> Node:
    """Build a node from camelCase design-tool fields, as the API returns them."""
    fields.setdefault("id", "1:1")
    fields.setdefault("name", "Node")
    fields.setdefault("type", "FRAME")
    return Node.model_validate(fields)


def bbox(width: float, height: float) -> dict[str, float]:
    return {"x": 0, "y": 0, "width": width, "height": height}


def solid(r: float, g: float, b: float, **extra: Any) -> dict[str, Any]:
    return {"type": "SOLID", "color": {"r": r, "g": g, "b": b, "a": 1}, **extra}


@pytest.fixture
def frame_payload() -> dict[str, Any]:
    """A small Auto Layout card with a heading, body text, and a hidden badge."""
    return {
        "id": "1:1",
        "name": "Hero Card",
        "type": "FRAME",
        "absoluteBoundingBox": bbox(320, 200),
        "layoutMode": "VERTICAL",
        "primaryAxisAlignItems": "MIN",
        "counterAxisAlignItems": "CENTER",
        "itemSpacing": 16,
        "paddingTop": 24,
        "paddingRight": 24,
        "paddingBottom": 24,
        "paddingLeft": 24,
        "fills": [solid(1, 1, 1)],
        "children": [
            {
                "id": "1:2",
                "name": "Title",
                "type": "TEXT",
                "characters": "Welcome",
                "absoluteBoundingBox": bbox(272, 58),
                "style": {"fontFamily": "Inter", "fontSize": 48, "fontWeight": 700},
                "fills": [solid(0, 0, 0)],
            },
            {
                "id": "1:3",
                "name": "Body",
                "type": "TEXT",
                "characters": "Build something",
                "absoluteBoundingBox": bbox(272, 20),
                "style": {"fontFamily": "Inter", "fontSize": 16, "fontWeight": 400},
                "fills": [solid(0.2, 0.2, 0.2)],
            },
            {
                "id": "1:4",
                "name": "Badge",
                "type": "FRAME",
                "visible": False,
                "children": [{"id": "1:5", "name": "Label", "type": "TEXT", "characters": "New"}],
            },
        ],
    }


@pytest.fixture
def frame(frame_payload: dict[str, Any]) -> Node:
    return Node.model_validate(frame_payload)


@pytest.fixture
def assets() -> AssetSnapshot:
    return AssetSnapshot(
        images={"2:1": "https://cdn.example.com/photo.png"},
        svgs={
            "3:1": '<?xml version="1.0"?>\n<svg width="24" height="24" viewBox="0 0 24 24">'
            '<path stroke-width="2" d="M0 0h24"/></svg>'
        },
        videos={"4:1": "https://cdn.example.com/poster.png"},
        gifs={"5:1": "https://cdn.example.com/loop.gif"},
    )


@pytest.fixture
def tokens() -> TokenSnapshot:
    return TokenSnapshot(
        variables={
            "VariableID:1:1": TokenEntry(name="color/text/default", value="#000000"),
            "VariableID:1:2": TokenEntry(name="font/size/body", value=16),
        }
    )


@pytest.fixture
def bindings() -> BindingSnapshot:
    return BindingSnapshot(
        bindings={
            "6:1": BindingEntry(component_name="Button", raw_props={"variant": "primary"}),
            "7:1": BindingEntry(component_name="Heading"),
            "8:1": BindingEntry(component_name="Not A Component"),
        }
    )


@pytest.fixture
def context(
    assets: AssetSnapshot, tokens: TokenSnapshot, bindings: BindingSnapshot
) -> TranslationContext:
    return TranslationContext(assets=assets, tokens=tokens, bindings=bindings)
