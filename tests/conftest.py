"""Shared test fixtures for cheekygit.

Provides reusable fixtures for loading catalog fixtures, creating isolated
config environments and resetting output state between tests.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from cheekygit.models import Catalog
from cheekygit.output import reset_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time.  When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale
    ("I/O operation on closed file").  Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_catalog_raw() -> dict[str, Any]:
    """A small catalog document using the on-disk ``isString`` spelling."""
    return {
        "prefix": "git",
        "commands": [
            {
                "name": "add",
                "description": "Adds %s to the staging area, ready to be committed.",
                "flags": [
                    {
                        "name": "verbose",
                        "aliases": ["v"],
                        "description": "Be verbose.",
                        "isString": False,
                    },
                    {
                        "name": "dry-run",
                        "aliases": ["n"],
                        "description": "Don't actually add %s.",
                        "isString": False,
                    },
                    {
                        "name": "pathspec-from-file",
                        "description": "Read paths from %s.",
                        "isString": True,
                    },
                ],
            },
            {
                "name": "commit",
                "description": "Saves changes to the local repository.",
                "flags": [
                    {
                        "name": "all",
                        "aliases": ["a"],
                        "description": "Stage every changed file.",
                    },
                    {
                        "name": "message",
                        "aliases": ["m"],
                        "description": "Set the commit message to %s",
                        "isString": True,
                    },
                ],
            },
        ],
    }


@pytest.fixture
def sample_catalog(sample_catalog_raw: dict[str, Any]) -> Catalog:
    """The sample catalog document validated into a :class:`Catalog`."""
    from cheekygit.catalog import build_catalog

    return build_catalog(sample_catalog_raw)


@pytest.fixture
def git_catalog() -> Catalog:
    """The bundled git catalog shipped with the package."""
    from cheekygit.catalog import default_catalog

    return default_catalog()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_CONFIG_HOME and XDG_DATA_HOME at subdirectories of
    tmp_path so that tests never touch real user config. Clears
    CHEEKYGIT_CATALOG and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("cheekygit.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("CHEEKYGIT_CATALOG", raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path
