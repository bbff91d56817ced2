"""Integration tests for the ``cheekygit catalog`` sub-commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from cheekygit.app import app
from cheekygit.catalog import load_catalog
from cheekygit.commands.catalog import render_catalog_document
from cheekygit.exceptions import InvalidUsageError

runner = CliRunner()

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
COMMIT_PAGE = str(FIXTURES_DIR / "git-commit.html")
PUSH_PAGE = str(FIXTURES_DIR / "git-push.html")


# ---------------------------------------------------------------------------
# catalog validate
# ---------------------------------------------------------------------------


class TestCatalogValidate:
    def test_valid_file(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["catalog", "validate", str(FIXTURES_DIR / "catalog.yaml")])
        assert result.exit_code == 0
        assert "Catalog OK: 2 'git' command(s), 2 flag(s)." in result.output

    def test_alias_collision_exits_7(self, isolated_config: Path) -> None:
        bad = isolated_config / "bad.yaml"
        bad.write_text(
            "commands:\n"
            "  - name: add\n"
            "    flags:\n"
            "      - {name: verbose, aliases: [v]}\n"
            "      - {name: version, aliases: [v]}\n",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["catalog", "validate", str(bad)])
        assert result.exit_code == 7
        assert "collides" in result.output

    def test_unparseable_file_exits_7(self, isolated_config: Path) -> None:
        bad = isolated_config / "bad.json"
        bad.write_text("{nope", encoding="utf-8")
        result = runner.invoke(app, ["catalog", "validate", str(bad)])
        assert result.exit_code == 7
        assert "Invalid JSON" in result.output

    def test_stdin(self, isolated_config: Path) -> None:
        result = runner.invoke(
            app, ["catalog", "validate", "-"], input='{"commands": [{"name": "status"}]}'
        )
        assert result.exit_code == 0
        assert "1 'git' command(s), 0 flag(s)" in result.output


# ---------------------------------------------------------------------------
# catalog show
# ---------------------------------------------------------------------------


class TestCatalogShow:
    def test_show_bundled_as_json(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["--json", "catalog", "show"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["prefix"] == "git"
        assert [c["name"] for c in data["commands"]] == ["add", "commit", "push"]
        assert data["commands"][1]["flags"][1] == {
            "name": "message",
            "aliases": ["m"],
            "description": "Set the commit message to %s",
            "isString": True,
        }

    def test_show_selected_catalog(self, isolated_config: Path) -> None:
        result = runner.invoke(
            app, ["--json", "-c", str(FIXTURES_DIR / "catalog.yaml"), "catalog", "show"]
        )
        assert result.exit_code == 0
        assert [c["name"] for c in json.loads(result.stdout)["commands"]] == ["add", "stash"]


# ---------------------------------------------------------------------------
# catalog build
# ---------------------------------------------------------------------------


class TestCatalogBuild:
    def test_build_to_file(self, isolated_config: Path) -> None:
        out = isolated_config / "built" / "catalog.yaml"
        result = runner.invoke(app, ["catalog", "build", COMMIT_PAGE, PUSH_PAGE, "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "Catalog written to" in result.output

        catalog = load_catalog(str(out))
        assert sorted(catalog.commands) == ["commit", "push"]
        assert catalog.commands["commit"].description == "Record changes to the repository."

    def test_build_yaml_to_stdout(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["catalog", "build", PUSH_PAGE])
        assert result.exit_code == 0
        data = yaml.safe_load(result.stdout)
        assert data["commands"][0]["name"] == "push"
        assert data["commands"][0]["flags"][3]["isString"] is True

    def test_build_json_to_stdout(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["catalog", "build", "--format", "json", COMMIT_PAGE])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [f["name"] for f in data["commands"][0]["flags"]] == [
            "all",
            "message",
            "verify",
            "dry-run",
            "verbose",
        ]

    def test_unknown_format_exits_2(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["catalog", "build", "--format", "toml", COMMIT_PAGE])
        assert result.exit_code == 2
        assert "Unknown catalog format" in result.output

    def test_duplicate_pages_exit_7(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["catalog", "build", PUSH_PAGE, PUSH_PAGE])
        assert result.exit_code == 7
        assert "Duplicate command 'push'" in result.output

    def test_page_without_options_warns(self, isolated_config: Path) -> None:
        page = isolated_config / "git-gc.html"
        page.write_text(
            '<html><body><h2 id="_name">NAME</h2>'
            "<div><p>git-gc - Cleanup unnecessary files</p></div></body></html>",
            encoding="utf-8",
        )
        result = runner.invoke(app, ["catalog", "build", str(page)])
        assert result.exit_code == 0
        assert "No flags found for 'gc'" in result.output

    def test_page_without_name_exits_7(self, isolated_config: Path) -> None:
        page = isolated_config / "page.html"
        page.write_text("<html><body><p>nothing here</p></body></html>", encoding="utf-8")
        result = runner.invoke(app, ["catalog", "build", str(page)])
        assert result.exit_code == 7
        assert "no command name" in result.output


# ---------------------------------------------------------------------------
# render_catalog_document
# ---------------------------------------------------------------------------


class TestRenderCatalogDocument:
    def test_yaml_keeps_key_order_and_unicode(self) -> None:
        text = render_catalog_document(
            {"prefix": "git", "commands": [{"name": "add", "description": "Don’t."}]}, "yaml"
        )
        assert text.index("prefix") < text.index("commands")
        assert "Don’t." in text

    def test_json_ends_with_newline(self) -> None:
        text = render_catalog_document({"commands": []}, "json")
        assert text.endswith("\n")
        assert json.loads(text) == {"commands": []}

    def test_unknown_format_raises(self) -> None:
        with pytest.raises(InvalidUsageError, match="Unknown catalog format"):
            render_catalog_document({"commands": []}, "toml")
