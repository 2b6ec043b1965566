"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Error in typebind configuration."""


@dataclass(slots=True, frozen=True)
class TypebindConfig:
    """Configuration loaded from the ``[tool.typebind]`` table of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    schema: Path | None = None
    ts_out: Path | None = None
    go_out: Path | None = None
    go_package: str | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_path(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    """Read an optional path entry, resolving it against the project root.

    Raises:
        ConfigError: If the entry is not a string

    """
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.typebind].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def load_config(pyproject_path: Path) -> TypebindConfig:
    """Load and validate [tool.typebind] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed TypebindConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("typebind", {})
    if not section:
        # No [tool.typebind] section - return empty config
        return TypebindConfig(project_root=project_root)

    unknown = sorted(set(section) - {"schema", "ts-out", "go-out", "go-package"})
    if unknown:
        msg = f"Unknown [tool.typebind] keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    go_package = section.get("go-package")
    if go_package is not None and not isinstance(go_package, str):
        msg = "Invalid [tool.typebind].go-package: expected string"
        raise ConfigError(msg)

    return TypebindConfig(
        schema=_parse_path(section, "schema", project_root),
        ts_out=_parse_path(section, "ts-out", project_root),
        go_out=_parse_path(section, "go-out", project_root),
        go_package=go_package,
        project_root=project_root,
    )


def get_config() -> TypebindConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        TypebindConfig (may be empty if no pyproject.toml or no [tool.typebind] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return TypebindConfig()
    return load_config(pyproject_path)
