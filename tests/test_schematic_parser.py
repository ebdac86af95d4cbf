"""Tests for symbol record decoding and document building."""

from __future__ import annotations

import json

import pytest

from easyeda_kicad.models.errors import RecordError
from easyeda_kicad.parsing.document import parse_schematic, parse_schematic_result
from easyeda_kicad.parsing.schematic import (
    decode_arc,
    decode_circle,
    decode_ellipse,
    decode_pin,
    decode_polyline,
    decode_rect,
    decode_text,
    pin_length,
)
from easyeda_kicad.parsing.tokenizer import ShapeRecord

PIN = "P~show~0~4~-40~10~180~gge5~0^^-40~10^^M -40 10 h 20~#880000^^1~-17~14~0~RST~start"


class TestDecodePin:
    def test_fields(self):
        pin = decode_pin(ShapeRecord(PIN))
        assert pin.number == "4"
        assert pin.name == "4"
        assert (pin.x, pin.y) == (-40, 10)
        assert pin.rotation == 180
        assert pin.length == 20

    def test_length_from_vertical_path(self):
        assert pin_length("P~show~0~1~0~0~90^^0~0^^M 0 0 v -15~#000") == 15

    def test_length_default(self):
        assert pin_length("P~show~0~1~0~0~0") == 10
        assert pin_length("P~show~0~1~0~0~0^^0~0^^M 0 0 L 5 5") == 10

    def test_short_pin_record(self):
        pin = decode_pin(ShapeRecord("P~show"))
        assert pin.number == ""
        assert (pin.x, pin.y, pin.rotation, pin.length) == (0, 0, 0, 10)


class TestDecodePolyline:
    def test_points(self):
        polyline = decode_polyline(ShapeRecord("PL~0 0 10 0 10 10~#880000~2"))
        assert [(p.x, p.y) for p in polyline.points] == [(0, 0), (10, 0), (10, 10)]
        assert polyline.stroke_width == 2

    def test_stroke_default(self):
        assert decode_polyline(ShapeRecord("PL~0 0 1 1")).stroke_width == 1

    def test_no_points_raises(self):
        with pytest.raises(RecordError):
            decode_polyline(ShapeRecord("PL~~#880000~1"))


class TestDecodeShapes:
    def test_circle(self):
        circle = decode_circle(ShapeRecord("C~5~6~7"))
        assert (circle.x, circle.y, circle.radius) == (5, 6, 7)

    def test_ellipse_mean_radius(self):
        circle = decode_ellipse(ShapeRecord("E~0~0~5~3"))
        assert circle.radius == 4

    def test_rect_with_empty_radius_fields(self):
        rect = decode_rect(ShapeRecord("R~0~0~~~5~3"))
        assert (rect.x, rect.y, rect.width, rect.height) == (0, 0, 5, 3)
        assert (rect.rx, rect.ry) == (0, 0)

    def test_rect_with_radius_fields(self):
        rect = decode_rect(ShapeRecord("R~1~2~1~1~40~60"))
        assert (rect.width, rect.height) == (40, 60)
        assert (rect.rx, rect.ry) == (1, 1)

    def test_rect_legacy_size_fields(self):
        rect = decode_rect(ShapeRecord("R~1~2~40~60~#880000~1"))
        assert (rect.width, rect.height) == (40, 60)
        assert (rect.rx, rect.ry) == (0, 0)

    def test_degenerate_rect_dropped(self):
        assert decode_rect(ShapeRecord("R~0~0~~~0~3")) is None
        assert decode_rect(ShapeRecord("R~0~0")) is None

    def test_text(self):
        text = decode_text(ShapeRecord("T~3~4~0~VCC~#0000FF"))
        assert (text.text, text.x, text.y, text.size) == ("VCC", 3, 4, 12)

    def test_arc_not_decoded(self):
        assert decode_arc(ShapeRecord("A~M 0 0 A 5 5 0 0 1 5 5")) is None


class TestParseSchematic:
    def test_sample(self, symbol_data: dict):
        result = parse_schematic_result(symbol_data)
        doc = result.document
        assert doc.name == "NE555"
        assert [p.number for p in doc.pins] == ["1", "2"]
        assert [p.length for p in doc.pins] == [10, 10]
        assert len(doc.polylines) == 1
        assert sorted(c.radius for c in doc.circles) == [2, 4]
        assert len(doc.rectangles) == 1
        assert doc.rectangles[0].width == 40
        assert [t.text for t in doc.texts] == ["NE555"]

    def test_sample_reports_empty_polyline(self, symbol_data: dict):
        result = parse_schematic_result(symbol_data)
        assert result.skipped == 1
        assert "PL" in result.diagnostics[0]

    def test_name_falls_back_to_package(self, make_doc):
        assert parse_schematic(make_doc(package="DIP-8")).name == "DIP-8"
        assert parse_schematic(make_doc(name="LM358", package="DIP-8")).name == "LM358"

    def test_circle_aliases(self, make_doc):
        doc = parse_schematic(make_doc("C~0~0~1", "CIRCLE~0~0~2"))
        assert [c.radius for c in doc.circles] == [1, 2]

    def test_text_aliases(self, make_doc):
        doc = parse_schematic(make_doc("T~0~0~0~A", "TEXT~0~0~0~B"))
        assert [t.text for t in doc.texts] == ["A", "B"]

    def test_accepts_json_text(self, symbol_data: dict):
        assert parse_schematic(json.dumps(symbol_data)) == parse_schematic(symbol_data)

    def test_missing_shape_array(self):
        result = parse_schematic_result('{"head": {"c_para": {"name": "X"}}}')
        assert result.document.pins == []
        assert result.diagnostics == ["Document has no 'shape' array"]

    def test_invalid_json(self):
        result = parse_schematic_result("not json")
        assert result.document.name == ""
        assert result.diagnostics[0].startswith("Invalid JSON")

    def test_deeply_nested_json(self):
        result = parse_schematic_result("[" * 100000 + "]" * 100000)
        assert result.document.pins == []
        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].startswith("Invalid JSON")
