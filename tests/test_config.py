"""Tests for TOML configuration loading."""

import logging
from pathlib import Path

import pytest

from ppstack.ansi import color_code
from ppstack.config import RenderConfig, load_config, load_full_config, load_palette
from ppstack.models import Similarity
from ppstack.palette import DEFAULT_PALETTE
from ppstack.paths import PathFormat


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch) -> Path:
    path = tmp_path / "config.toml"
    monkeypatch.setattr("ppstack.config.CONFIG_FILE", path)
    return path


def test_missing_file_gives_defaults(config_file: Path):
    assert not config_file.exists()
    assert load_full_config() == {}
    assert load_config() == RenderConfig()


def test_render_section(config_file: Path):
    config_file.write_text(
        '[render]\npath_format = "full"\nsimilarity = "any_value"\nall_routines = false\n'
    )
    config = load_config()
    assert config.path_format is PathFormat.FULL
    assert config.similarity is Similarity.ANY_VALUE
    assert config.all_routines is False


def test_palette_overrides(config_file: Path):
    config_file.write_text('[palette]\nfunc_main = "green+b"\nrace = "bold red"\n')
    palette = load_config().palette
    assert palette.func_main == color_code("green+b")
    assert palette.race == "\x1b[1;31m"
    assert palette.func_stdlib == DEFAULT_PALETTE.func_stdlib
    assert DEFAULT_PALETTE.func_main == color_code("yellow+b")


def test_bad_values_fall_back(config_file: Path, caplog):
    config_file.write_text(
        '[render]\npath_format = "sideways"\nsimilarity = "fuzzy"\nall_routines = "yes"\n'
        '[palette]\nfunc_main = "notacolor"\nnot_a_role = "red"\nrace = "cyan"\n'
    )
    with caplog.at_level(logging.WARNING, logger="ppstack.config"):
        config = load_config()
    assert config.path_format is PathFormat.REL
    assert config.similarity is Similarity.ANY_POINTER
    assert config.all_routines is True
    assert config.palette.func_main == DEFAULT_PALETTE.func_main
    assert config.palette.race == color_code("cyan")
    assert len(caplog.records) == 5


def test_malformed_file(config_file: Path, caplog):
    config_file.write_text("[render\npath_format = \n")
    with caplog.at_level(logging.WARNING, logger="ppstack.config"):
        assert load_config() == RenderConfig()
    assert "Ignoring unreadable config" in caplog.text


def test_section_must_be_table(config_file: Path):
    config_file.write_text('palette = "red"\n')
    assert load_palette() == DEFAULT_PALETTE


def test_explicit_path(tmp_path: Path):
    path = tmp_path / "other.toml"
    path.write_text('[render]\npath_format = "base"\n')
    assert load_config(path).path_format is PathFormat.BASE


def test_non_utf8_file(config_file: Path, caplog):
    config_file.write_bytes(b'[render]\npath_format = "\xff\xfe"\n')
    with caplog.at_level(logging.WARNING, logger="ppstack.config"):
        assert load_config() == RenderConfig()
    assert "Ignoring unreadable config" in caplog.text
