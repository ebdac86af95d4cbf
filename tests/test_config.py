"""Tests for environment-driven configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from easyeda_kicad.config import ConverterConfig, LogLevel, TransportType


class TestConverterConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.chdir(tmp_path)
        config = ConverterConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_file is None
        assert config.output_dir == Path(".")
        assert config.overwrite is False
        assert config.transport == TransportType.STDIO
        assert config.sse_port == 8765

    def test_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
        monkeypatch.setenv("EASYEDA_KICAD_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("EASYEDA_KICAD_OVERWRITE", "true")
        monkeypatch.setenv("EASYEDA_KICAD_TRANSPORT", "sse")
        monkeypatch.setenv("EASYEDA_KICAD_OUTPUT_DIR", str(tmp_path))
        config = ConverterConfig()
        assert config.log_level == LogLevel.DEBUG
        assert config.overwrite is True
        assert config.transport == TransportType.SSE
        assert config.output_dir == tmp_path

    def test_get_output_dir_creates(self, tmp_path: Path):
        config = ConverterConfig(output_dir=tmp_path / "a" / "b")
        out = config.get_output_dir()
        assert out.is_dir()
        assert out == (tmp_path / "a" / "b").resolve()
