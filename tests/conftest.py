"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import sexpdata

from easyeda_kicad.config import ConverterConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _make_doc(*shapes: Any, **c_para: str) -> dict[str, Any]:
    return {"head": {"c_para": dict(c_para)}, "shape": list(shapes)}


@pytest.fixture
def make_doc():
    """Build a minimal dataStr object around the given shape entries."""
    return _make_doc


def _normalize_sexpdata(data: Any) -> Any:
    """Convert sexpdata types to plain Python types."""
    if isinstance(data, sexpdata.Symbol):
        return str(data)
    elif isinstance(data, list):
        return [_normalize_sexpdata(item) for item in data]
    elif isinstance(data, (str, int, float)):
        return data
    else:
        return str(data)


def _read_sexp(content: str) -> list[Any]:
    # Keep "nil" and "t" as plain atoms
    return _normalize_sexpdata(sexpdata.loads(content, nil=None, true=None))


def _children(node: list[Any], tag: str) -> list[list[Any]]:
    return [child for child in node if isinstance(child, list) and child and child[0] == tag]


@pytest.fixture
def read_sexp():
    """Parse KiCad S-expression text into nested lists of str, int and float."""
    return _read_sexp


@pytest.fixture
def sexp_children():
    """Direct children of a parsed node whose head is the given tag."""
    return _children


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def footprint_path() -> Path:
    return FIXTURES_DIR / "sample_footprint.json"


@pytest.fixture
def symbol_path() -> Path:
    return FIXTURES_DIR / "sample_symbol.json"


@pytest.fixture
def footprint_data(footprint_path: Path) -> dict[str, Any]:
    return json.loads(footprint_path.read_text(encoding="utf-8"))


@pytest.fixture
def symbol_data(symbol_path: Path) -> dict[str, Any]:
    return json.loads(symbol_path.read_text(encoding="utf-8"))


@pytest.fixture
def component_response(footprint_data: dict, symbol_data: dict) -> dict[str, Any]:
    """A component API response as returned by the vendor, dataStr values as objects."""
    return {
        "success": True,
        "code": 0,
        "result": {
            "uuid": "0f6f1c8d2a7e4b3c9d5e1f2a3b4c5d6e",
            "title": "NE555DR",
            "description": "Single bipolar timer",
            "dataStr": symbol_data,
            "packageDetail": {
                "title": "SOT-23-3",
                "dataStr": footprint_data,
            },
        },
    }


@pytest.fixture
def component_path(tmp_path: Path, component_response: dict) -> Path:
    path = tmp_path / "C46749.json"
    path.write_text(json.dumps(component_response), encoding="utf-8")
    return path


@pytest.fixture
def converter_config(tmp_path: Path) -> ConverterConfig:
    return ConverterConfig(output_dir=tmp_path / "out")
