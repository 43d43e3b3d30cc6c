"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

SUPPORTED_DELIMITERS = ".)"

# File name and the tables searched inside it, in lookup order per directory
CONFIG_SOURCES: tuple[tuple[str, tuple[tuple[str, ...], ...]], ...] = (
    ("pyproject.toml", (("tool", "list-renumber"),)),
    (".list-renumber.toml", (("list-renumber",), ("tool", "list-renumber"))),
)

_POSITIVE_INTEGER_SETTINGS = ("indent_size", "max_file_size", "max_line_length")


@dataclass
class RenumberConfig:
    """Configuration for renumbering ordered lists.

    Attributes:
        delimiters: Characters accepted between a list number and the following
            space (any combination of ``"."`` and ``")"``).
        indent_size: Whitespace characters per indentation step. Items whose
            indents fall in the same step share a nesting level.
        skip_code_blocks: Whether whole-document renumbering leaves fenced code
            blocks untouched.
        max_file_size: Maximum file size in bytes that will be processed.
        max_line_length: Maximum line length allowed while reading.

    Examples:
        RenumberConfig(delimiters=".)", indent_size=4)
    """

    # Markers
    delimiters: str = "."

    # Nesting
    indent_size: int = 1
    skip_code_blocks: bool = True

    # Limits
    max_file_size: int = 10 * 1024 * 1024
    max_line_length: int = 10_000


class ConfigError(ValueError):
    """Raised when a settings table or a setting value is unusable.

    Examples:
        raise ConfigError("`indent_size` must be a positive integer")
    """


def load_config(search_path: Path) -> RenumberConfig:
    """Load the settings that apply to documents under `search_path`.

    Each directory from `search_path` up to the filesystem root is checked
    for the sources in `CONFIG_SOURCES`. The first settings table found wins,
    even an empty one, so a project can opt out of inherited settings. Files
    that cannot be read or parsed as TOML are passed over.

    Args:
        search_path: Directory the lookup starts from.

    Returns:
        RenumberConfig: Settings from the nearest table, or defaults.

    Raises:
        ConfigError: If the nearest table is not a mapping or names a setting
            that does not exist.

    Examples:
        load_config(Path("docs"))
    """
    start = search_path.resolve()
    for directory in (start, *start.parents):
        for filename, table_paths in CONFIG_SOURCES:
            found = _find_table(directory / filename, table_paths)
            if found is not None:
                table, source = found
                return normalize_config(config_from_table(table, source))
    return RenumberConfig()


def _find_table(
    config_file: Path, table_paths: tuple[tuple[str, ...], ...]
) -> tuple[object, str] | None:
    data = _read_toml(config_file)
    if data is None:
        return None

    for table_path in table_paths:
        table: object = data
        for key in table_path:
            if not isinstance(table, dict) or key not in table:
                break
            table = table[key]
        else:
            return table, f"[{'.'.join(table_path)}] in {config_file}"
    return None


def _read_toml(config_file: Path) -> dict | None:
    if not config_file.is_file():
        return None
    try:
        with open(config_file, "rb") as stream:
            return tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None


def config_from_table(table: object, source: str = "settings") -> RenumberConfig:
    """Build a `RenumberConfig` from one parsed settings table.

    `delimiters` may be written as a string (``".)"``) or as an array of
    single characters (``[".", ")"]``).

    Raises:
        ConfigError: If `table` is not a mapping or holds unknown settings.
    """
    if not isinstance(table, dict):
        raise ConfigError(f"{source} must be a table of settings")

    known = {field.name for field in fields(RenumberConfig)}
    unknown = sorted(set(table) - known)
    if unknown:
        names = ", ".join(f"`{name}`" for name in unknown)
        raise ConfigError(f"Unknown setting(s) {names} in {source}")

    settings = dict(table)
    delimiters = settings.get("delimiters")
    if isinstance(delimiters, list) and all(isinstance(item, str) for item in delimiters):
        settings["delimiters"] = "".join(delimiters)
    return RenumberConfig(**settings)


def normalize_config(config: RenumberConfig) -> RenumberConfig:
    """Collapse duplicate delimiters while keeping their first-seen order."""
    if not isinstance(config.delimiters, str):
        return config
    return replace(config, delimiters="".join(dict.fromkeys(config.delimiters)))


def validate_config(config: RenumberConfig) -> None:
    """Check every setting of `config`.

    Raises:
        ConfigError: If delimiters are empty or unsupported, a size setting is
            not a positive integer, or `skip_code_blocks` is not a boolean.

    Examples:
        validate_config(RenumberConfig(delimiters=")"))
    """
    delimiters = config.delimiters
    if not isinstance(delimiters, str) or not delimiters:
        raise ConfigError("`delimiters` must be a non-empty string")
    if any(char not in SUPPORTED_DELIMITERS for char in delimiters):
        raise ConfigError(f"`delimiters` must only contain: {', '.join(SUPPORTED_DELIMITERS)}")

    if not isinstance(config.skip_code_blocks, bool):
        raise ConfigError("`skip_code_blocks` must be a boolean")

    for name in _POSITIVE_INTEGER_SETTINGS:
        value = getattr(config, name)
        # bool is an int subclass
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{name}` must be an integer")
        if value <= 0:
            raise ConfigError(f"`{name}` must be a positive integer")


def apply_overrides(config: RenumberConfig, **overrides: object) -> RenumberConfig:
    """Return `config` with every non-None override applied.

    `config` itself is returned when nothing is overridden.

    Raises:
        TypeError: If an override name is not a `RenumberConfig` field.

    Examples:
        apply_overrides(config, delimiters=".)", indent_size=None)
    """
    changes = {name: value for name, value in overrides.items() if value is not None}
    return replace(config, **changes) if changes else config


def build_config(search_path: Path, **overrides: object) -> RenumberConfig:
    """Resolve the effective settings: file settings, then overrides, then checks.

    Raises:
        ConfigError: If loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), indent_size=4)
    """
    config = apply_overrides(load_config(search_path), **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config
