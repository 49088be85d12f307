"""Tests for the .gojo sidecar file."""

import logging
from dataclasses import replace
from pathlib import Path

import pytest

from gojo.config import (
    CONFIG_FILE,
    ProjectConfig,
    default_config,
    dumps,
    load_config,
    read_config,
    write_config,
)
from gojo.errors import ConfigError


@pytest.fixture()
def config(tmp_path):
    return ProjectConfig(
        project_root=str(tmp_path),
        build_dir=str(tmp_path / "out"),
        name="demo",
        std="17",
        src_ext="cpp",
        hdr_ext="hpp",
        fmt_style="llvm",
        fmt_args="--verbose",
        clang_tidy=True,
        cpplint=False,
        cpplint_args="--filter=-whitespace",
        cppcheck=True,
        cppcheck_args="",
        quiet=False,
    )


# ---------------------------------------------------------------------------
# write / read
# ---------------------------------------------------------------------------


def test_round_trip(tmp_path, config):
    write_config(config)
    assert read_config(tmp_path) == config


def test_round_trip_keeps_colons_in_values(tmp_path, config):
    config = replace(config, cppcheck_args="--template={file}:{line}")
    write_config(config)
    assert read_config(tmp_path).cppcheck_args == "--template={file}:{line}"


def test_file_layout_is_fixed(tmp_path, config):
    path = write_config(config)
    lines = path.read_text().splitlines()
    assert path == tmp_path / CONFIG_FILE
    assert [line.split(":", 1)[0] for line in lines] == [
        "project_root",
        "build_dir",
        "name",
        "std",
        "src",
        "hdr",
        "fmt_style",
        "fmt_args",
        "clang-tidy",
        "cpplint",
        "cpplint_args",
        "cppcheck",
        "cppcheck_args",
        "quiet",
    ]
    assert "clang-tidy: true" in lines
    assert "cpplint: false" in lines


def test_write_rejects_newline(config):
    config = replace(config, fmt_args="a\nb")
    with pytest.raises(ConfigError, match="fmt_args"):
        dumps(config)


def test_round_trip_keeps_other_line_break_characters(tmp_path, config):
    config = replace(config, cpplint_args="a\x0cb", fmt_args="x\x0by\u2028z", cppcheck_args="p\x85q\x1er")
    write_config(config)
    assert read_config(tmp_path) == config


def test_write_overwrites(tmp_path, config):
    write_config(config)
    write_config(config.with_style("gnu"))
    assert read_config(tmp_path).fmt_style == "gnu"


def test_read_does_not_validate_enumerations(tmp_path, config):
    text = dumps(config).replace("std: 17", "std: 99")
    (tmp_path / CONFIG_FILE).write_text(text)
    assert read_config(tmp_path).std == "99"


# ---------------------------------------------------------------------------
# missing / malformed
# ---------------------------------------------------------------------------


def test_read_missing_returns_none_with_warning(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="gojo.config"):
        assert read_config(tmp_path) is None
    assert "no gojo config file found" in caplog.text


def test_load_missing_falls_back_to_defaults(tmp_path):
    config = load_config(tmp_path)
    assert config == default_config(tmp_path)
    assert config.build_dir == str(tmp_path / "build")
    assert config.fmt_style == "google"
    assert config.std == "20"
    assert not (config.clang_tidy or config.cpplint or config.cppcheck or config.quiet)


def test_read_truncated_file_is_fatal(tmp_path, config):
    text = "\n".join(dumps(config).splitlines()[:5])
    (tmp_path / CONFIG_FILE).write_text(text)
    with pytest.raises(ConfigError, match="expected 14 lines"):
        read_config(tmp_path)


def test_read_out_of_order_key_is_fatal(tmp_path, config):
    lines = dumps(config).splitlines()
    lines[2], lines[3] = lines[3], lines[2]
    (tmp_path / CONFIG_FILE).write_text("\n".join(lines))
    with pytest.raises(ConfigError, match="expected key 'name'"):
        read_config(tmp_path)


def test_read_line_without_colon_is_fatal(tmp_path, config):
    lines = dumps(config).splitlines()
    lines[0] = "garbage"
    (tmp_path / CONFIG_FILE).write_text("\n".join(lines))
    with pytest.raises(ConfigError, match="line 1"):
        read_config(tmp_path)


def test_read_non_utf8_file_is_fatal(tmp_path):
    (tmp_path / CONFIG_FILE).write_bytes(b"\xff\xfe garbage\n")
    with pytest.raises(ConfigError, match="not valid UTF-8"):
        read_config(tmp_path)


def test_boolean_is_true_only_for_literal_true(tmp_path, config):
    text = dumps(config).replace("clang-tidy: true", "clang-tidy: yes")
    (tmp_path / CONFIG_FILE).write_text(text)
    assert read_config(tmp_path).clang_tidy is False


def test_paths(config):
    assert config.root_path == Path(config.project_root)
    assert config.build_path.name == "out"
