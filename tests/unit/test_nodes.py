"""Tests for figmark.core.nodes module."""

import json
from pathlib import Path

import pytest

from figmark.core.errors import DocumentError
from figmark.core.nodes import (
    Node,
    NodeKind,
    PaintKind,
    SizingMode,
    load_document,
    load_document_file,
)


class TestLoadDocument:
    """Tests for document envelope handling."""

    def test_bare_node(self) -> None:
        root = load_document({"id": "1:1", "name": "Root", "type": "FRAME"})
        assert root.id == "1:1"
        assert root.kind == NodeKind.FRAME

    def test_file_response(self) -> None:
        root = load_document({"name": "My File", "document": {"id": "0:0", "type": "DOCUMENT"}})
        assert root.kind == NodeKind.DOCUMENT

    def test_node_query_response_first_entry_wins(self) -> None:
        payload = {
            "nodes": {
                "12:34": {"document": {"id": "12:34", "type": "FRAME"}},
                "56:78": {"document": {"id": "56:78", "type": "FRAME"}},
            }
        }
        assert load_document(payload).id == "12:34"

    def test_node_query_without_document(self) -> None:
        with pytest.raises(DocumentError):
            load_document({"nodes": {"12:34": None}})

    @pytest.mark.parametrize("payload", [None, {}, [], "frame"])
    def test_empty_or_non_mapping(self, payload: object) -> None:
        with pytest.raises(DocumentError):
            load_document(payload)

    def test_invalid_field_type(self) -> None:
        with pytest.raises(DocumentError):
            load_document({"id": "1:1", "children": "not a list"})

    def test_load_document_file(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text(json.dumps({"document": {"id": "0:1", "type": "CANVAS"}}))
        assert load_document_file(path).kind == NodeKind.CANVAS

    def test_load_document_file_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        path.write_text("{not json")
        with pytest.raises(DocumentError) as exc_info:
            load_document_file(path)
        assert "doc.json" in str(exc_info.value)

    def test_load_document_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(DocumentError):
            load_document_file(tmp_path / "missing.json")


class TestNodeSchema:
    """Tests for defaults and camelCase field mapping."""

    def test_absent_fields_take_defaults(self) -> None:
        node = Node.model_validate({"id": "1:1"})
        assert node.visible is True
        assert node.fills == []
        assert node.children == []
        assert node.absolute_bounding_box is None

    def test_camel_case_aliases(self) -> None:
        node = Node.model_validate(
            {
                "absoluteBoundingBox": {"width": 10, "height": 20},
                "layoutSizingHorizontal": "FILL",
                "paddingLeft": 8,
                "style": {"lineHeightPercentFontSize": 150},
            }
        )
        assert node.absolute_bounding_box is not None
        assert node.absolute_bounding_box.height == 20
        assert node.layout_sizing_horizontal == "FILL"
        assert node.padding_left == 8
        assert node.style is not None
        assert node.style.line_height_percent_font_size == 150

    def test_unknown_fields_are_ignored(self) -> None:
        node = Node.model_validate({"id": "1:1", "exportSettings": [{"format": "PNG"}]})
        assert node.id == "1:1"

    def test_unknown_type_maps_to_unknown_kind(self) -> None:
        node = Node.model_validate({"type": "WASHI_TAPE"})
        assert node.type == "WASHI_TAPE"
        assert node.kind == NodeKind.UNKNOWN

    def test_unknown_paint_type(self) -> None:
        node = Node.model_validate({"fills": [{"type": "PATTERN"}]})
        assert node.fills[0].kind == PaintKind.UNKNOWN

    def test_unmodelled_paint_and_arc_fields_are_dropped(self) -> None:
        node = Node.model_validate(
            {
                "fills": [{"type": "VIDEO", "videoRef": "v1"}],
                "arcData": {"startingAngle": 0, "endingAngle": 3.14, "innerRadius": 0.5},
            }
        )
        assert not hasattr(node.fills[0], "video_ref")
        assert node.arc_data is not None
        assert not hasattr(node.arc_data, "inner_radius")

    def test_nodes_are_frozen(self) -> None:
        node = Node.model_validate({"id": "1:1"})
        with pytest.raises(Exception):
            node.id = "2:2"  # type: ignore[misc]


class TestNodeHelpers:
    """Tests for Node convenience properties."""

    def test_sizing_defaults_to_fixed(self) -> None:
        node = Node.model_validate({})
        assert node.sizing("horizontal") == SizingMode.FIXED
        assert node.sizing("vertical") == SizingMode.FIXED

    def test_sizing_reads_axis(self) -> None:
        node = Node.model_validate({"layoutSizingHorizontal": "FILL", "layoutSizingVertical": "HUG"})
        assert node.sizing("horizontal") == SizingMode.FILL
        assert node.sizing("vertical") == SizingMode.HUG

    def test_has_auto_layout(self) -> None:
        assert Node.model_validate({"layoutMode": "HORIZONTAL"}).has_auto_layout
        assert not Node.model_validate({"layoutMode": "NONE"}).has_auto_layout
        assert not Node.model_validate({}).has_auto_layout

    def test_first_visible_fill(self) -> None:
        node = Node.model_validate(
            {
                "fills": [
                    {"type": "SOLID", "visible": False},
                    {"type": "IMAGE"},
                    {"type": "SOLID"},
                ]
            }
        )
        assert node.first_visible_fill().kind == PaintKind.IMAGE
        assert node.first_visible_fill(PaintKind.SOLID) is node.fills[2]
        assert node.first_visible_fill(PaintKind.VIDEO) is None
