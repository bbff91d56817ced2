"""Where cheekygit keeps its settings, and which catalog a run uses.

Files:

* ``config.json`` in the user config directory holds a
  :class:`~cheekygit.models.GlobalConfig` (catalog override, output format).
  It lives under ``$XDG_CONFIG_HOME/cheekygit`` on Linux and the BSDs and
  under ``~/.cheekygit`` elsewhere.
* ``./cheekygit.json`` lets a repository point at its own catalog.
* Crash logs go to the data directory (:func:`get_data_dir`).

:func:`resolve_config` layers CLI options, ``CHEEKYGIT_CATALOG``, the project
file and the user file over the defaults, and :func:`load_active_catalog`
loads the catalog the result names. Files are replaced atomically
(:func:`write_text_atomic`), so an interrupted write never leaves half a
config or catalog behind.
"""

from __future__ import annotations

import contextlib
import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from cheekygit.exceptions import ConfigError
from cheekygit.models import Catalog, GlobalConfig, OutputConfig

_APP_NAME = "cheekygit"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "cheekygit.json"

CATALOG_ENV_VAR = "CHEEKYGIT_CATALOG"
"""Environment variable naming a catalog file to use instead of the bundled one."""

# kind -> (environment variable, default location under $HOME)
_XDG_LOCATIONS = {
    "config": ("XDG_CONFIG_HOME", (".config",)),
    "data": ("XDG_DATA_HOME", (".local", "share")),
}


# --- Directories ---


def _is_xdg_platform() -> bool:
    """True on Linux and the BSDs, which follow the XDG base directory layout."""
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(kind: str) -> Path:
    if _is_xdg_platform():
        env_var, default = _XDG_LOCATIONS[kind]
        root = os.environ.get(env_var) or Path.home().joinpath(*default)
        path = Path(root) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}"
        if kind != "config":
            path = path / kind
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Return the (existing) configuration directory.

    ``$XDG_CONFIG_HOME/cheekygit`` (default ``~/.config/cheekygit``) on
    Linux/BSD, ``~/.cheekygit`` on macOS and Windows.
    """
    return _app_dir("config")


def get_data_dir() -> Path:
    """Return the (existing) data directory used for crash logs.

    ``$XDG_DATA_HOME/cheekygit`` (default ``~/.local/share/cheekygit``) on
    Linux/BSD, ``~/.cheekygit/data`` on macOS and Windows.
    """
    return _app_dir("data")


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* through a temporary file in the same directory.

    Readers see the old content or the new one, never a mix. The temporary
    file is removed if anything fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


def write_text_atomic(path: Path, data: str) -> None:
    """Write a generated file (such as a built catalog) atomically."""
    _atomic_write(path, data)


# --- Global config ---


def _global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Read the user config, or return defaults when there is none.

    Raises:
        ConfigError: If the file is not valid JSON or not a valid config.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        return GlobalConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    payload = json.dumps(config.model_dump(mode="json"), indent=2)
    _atomic_write(_global_config_path(), payload + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local configuration from ``./cheekygit.json``.

    Project-local config sits between global config and environment variables
    in the precedence chain. It typically sets ``catalog`` so that a
    repository can ship explanations for its own aliases or tooling. A
    relative ``catalog`` path is resolved against the current directory.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected an object")
    return data


# --- Precedence resolution ---


def resolve_config(
    cli_catalog: Optional[str] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Resolve config with full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_catalog``, ``cli_format``)
        2. Environment variables (``CHEEKYGIT_CATALOG``)
        3. Project config (``./cheekygit.json``)
        4. User config (``~/.config/cheekygit/config.json``)
        5. Defaults (the bundled git catalog)

    Returns:
        The effective :class:`~cheekygit.models.GlobalConfig`. Its
        ``catalog`` field is ``None`` when the bundled catalog applies.
    """
    config = load_global_config()

    project = load_project_config()
    if project is not None:
        project_catalog = project.get("catalog")
        if project_catalog:
            config.catalog = str(Path.cwd() / Path(project_catalog).expanduser())
        project_output = project.get("output")
        if isinstance(project_output, dict) and project_output.get("format"):
            try:
                config.output = OutputConfig(format=str(project_output["format"]))
            except ValueError as exc:
                raise ConfigError(
                    f"Invalid project config at {Path.cwd() / _PROJECT_CONFIG_FILENAME}: {exc}"
                ) from exc

    env_catalog = os.environ.get(CATALOG_ENV_VAR)
    if env_catalog:
        config.catalog = env_catalog

    if cli_catalog is not None:
        config.catalog = cli_catalog

    if cli_format is not None:
        config.output = OutputConfig(format=cli_format)

    return config


def load_active_catalog(config: GlobalConfig) -> Catalog:
    """Load the catalog selected by *config*.

    Raises:
        CatalogParseError: If the configured catalog file is unreadable.
        CatalogConfigError: If it violates the catalog invariants.
    """
    from cheekygit.catalog import default_catalog, load_catalog

    if config.catalog:
        return load_catalog(config.catalog)
    return default_catalog()
