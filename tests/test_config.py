from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from list_renumber.config import (
    ConfigError,
    RenumberConfig,
    apply_overrides,
    build_config,
    config_from_table,
    load_config,
    normalize_config,
    validate_config,
)

PYPROJECT = "pyproject.toml"
DOTFILE = ".list-renumber.toml"


def _settings(directory: Path, filename: str, body: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


@pytest.mark.parametrize(
    ("filename", "table"),
    [
        (PYPROJECT, "tool.list-renumber"),
        (DOTFILE, "list-renumber"),
        (DOTFILE, "tool.list-renumber"),
    ],
)
def test_every_source_is_read(tmp_path: Path, filename: str, table: str):
    _settings(
        tmp_path,
        filename,
        f"""
        [{table}]
        delimiters = ".)"
        indent_size = 4
        skip_code_blocks = false
        max_file_size = 1
        max_line_length = 2
        """,
    )

    assert load_config(tmp_path) == RenumberConfig(
        delimiters=".)",
        indent_size=4,
        skip_code_blocks=False,
        max_file_size=1,
        max_line_length=2,
    )


def test_defaults_without_any_settings(tmp_path: Path):
    assert load_config(tmp_path) == RenumberConfig()


def test_nearest_settings_apply_to_nested_documents(tmp_path: Path):
    project = tmp_path / "workspace" / "project"
    _settings(project, DOTFILE, "[list-renumber]\nindent_size = 3\n")
    _settings(project.parent, DOTFILE, "[list-renumber]\nindent_size = 9\n")
    guide = project / "docs" / "guide"
    guide.mkdir(parents=True)

    assert load_config(guide).indent_size == 3


def test_pyproject_wins_over_dotfile_in_same_directory(tmp_path: Path):
    _settings(tmp_path, PYPROJECT, "[tool.list-renumber]\ndelimiters = ')'\n")
    _settings(tmp_path, DOTFILE, "[list-renumber]\ndelimiters = '.)'\n")

    assert load_config(tmp_path).delimiters == ")"


def test_pyproject_without_settings_table_is_passed_over(tmp_path: Path):
    _settings(tmp_path, PYPROJECT, "[tool.list-renumber]\nindent_size = 2\n")
    _settings(tmp_path / "pkg", PYPROJECT, "[project]\nname = 'unrelated'\n")

    assert load_config(tmp_path / "pkg").indent_size == 2


def test_empty_settings_table_resets_to_defaults(tmp_path: Path):
    _settings(tmp_path, PYPROJECT, "[tool.list-renumber]\nindent_size = 2\n")
    _settings(tmp_path / "pkg", PYPROJECT, "[tool.list-renumber]\n")

    assert load_config(tmp_path / "pkg") == RenumberConfig()


def test_unparseable_toml_is_passed_over(tmp_path: Path):
    _settings(tmp_path, DOTFILE, "[list-renumber]\ndelimiters = ')'\n")
    _settings(tmp_path / "broken", PYPROJECT, "not = {valid")

    assert load_config(tmp_path / "broken").delimiters == ")"


def test_delimiters_may_be_an_array(tmp_path: Path):
    _settings(tmp_path, DOTFILE, '[list-renumber]\ndelimiters = [")", ".", ")"]\n')

    assert load_config(tmp_path).delimiters == ")."


def test_unknown_settings_are_named(tmp_path: Path):
    _settings(tmp_path, PYPROJECT, "[tool.list-renumber]\nstart_at = 1\nstyle = 'x'\n")

    with pytest.raises(ConfigError, match="`start_at`, `style`"):
        load_config(tmp_path)


def test_settings_must_be_a_table(tmp_path: Path):
    _settings(tmp_path, PYPROJECT, "[tool]\nlist-renumber = 'yes'\n")

    with pytest.raises(ConfigError, match="must be a table"):
        load_config(tmp_path)


def test_config_from_table_reports_its_source():
    with pytest.raises(ConfigError, match="in notes.toml"):
        config_from_table({"indent": 2}, "notes.toml")


def test_normalize_config_keeps_first_seen_delimiter_order():
    assert normalize_config(RenumberConfig(delimiters=")).")).delimiters == ")."


@pytest.mark.parametrize(
    ("config", "message"),
    [
        (RenumberConfig(delimiters=""), "non-empty"),
        (RenumberConfig(delimiters=":"), "must only contain"),
        (RenumberConfig(delimiters=".-"), "must only contain"),
        (RenumberConfig(delimiters=1), "non-empty"),  # type: ignore[arg-type]
        (RenumberConfig(skip_code_blocks="yes"), "boolean"),  # type: ignore[arg-type]
        (RenumberConfig(indent_size=0), "`indent_size` must be a positive integer"),
        (RenumberConfig(indent_size=True), "`indent_size` must be an integer"),  # type: ignore[arg-type]
        (RenumberConfig(max_file_size="big"), "`max_file_size` must be an integer"),  # type: ignore[arg-type]
        (RenumberConfig(max_line_length=1.5), "`max_line_length` must be an integer"),  # type: ignore[arg-type]
        (RenumberConfig(max_line_length=-1), "`max_line_length` must be a positive"),
    ],
)
def test_validate_config_rejects(config: RenumberConfig, message: str):
    with pytest.raises(ConfigError, match=message):
        validate_config(config)


def test_validate_config_accepts_defaults():
    validate_config(RenumberConfig())


def test_apply_overrides_skips_unset_flags():
    config = RenumberConfig(indent_size=2)

    assert apply_overrides(config, indent_size=None, delimiters=None) is config
    assert apply_overrides(config, delimiters=")") == RenumberConfig(delimiters=")", indent_size=2)


def test_build_config_layers_flags_over_file(tmp_path: Path):
    _settings(tmp_path, PYPROJECT, "[tool.list-renumber]\ndelimiters = ')'\nindent_size = 2\n")

    config = build_config(tmp_path, indent_size=4, delimiters="..")

    assert config.delimiters == "."
    assert config.indent_size == 4


def test_build_config_rejects_bad_flags(tmp_path: Path):
    with pytest.raises(ConfigError, match="indent_size"):
        build_config(tmp_path, indent_size=0)
