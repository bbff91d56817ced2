"""Tests for cheekygit.catalog.builder -- parsing saved documentation pages.

Covers:
- Command name and description from the NAME section (and the title fallback)
- Flags from the OPTIONS definition list: shared ``<dd>``, name and alias
  selection, string-flag detection, skipped terms and duplicates
- Rejection of pages without a usable name
- Aggregation of several pages into a catalog
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from cheekygit.catalog.builder import build_catalog_from_pages, parse_documentation_page
from cheekygit.exceptions import CatalogConfigError, CatalogParseError

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


def _page(options: str, name_line: str = "git-stash - Stash the changes away") -> str:
    return f"""
    <html><head><title>Git - git-stash Documentation</title></head><body>
      <h2 id="_name">NAME</h2>
      <div class="sectionbody"><p>{name_line}</p></div>
      <h2 id="_options">OPTIONS</h2>
      <div class="sectionbody"><div class="dlist"><dl>{options}</dl></div></div>
    </body></html>
    """


# ---------------------------------------------------------------------------
# Saved git-scm.com page
# ---------------------------------------------------------------------------


class TestParseCommitPage:
    """Parse the saved ``git-commit`` page fixture."""

    @pytest.fixture
    def commit(self):
        html = (FIXTURES_DIR / "git-commit.html").read_bytes()
        return parse_documentation_page(html)

    def test_name_from_name_section(self, commit) -> None:
        assert commit.name == "commit"

    def test_description_from_summary(self, commit) -> None:
        assert commit.description == "Record changes to the repository."

    def test_flag_names_in_page_order(self, commit) -> None:
        assert [f.name for f in commit.flags] == [
            "all",
            "message",
            "verify",
            "dry-run",
            "verbose",
        ]

    def test_short_spellings_become_aliases(self, commit) -> None:
        flags = {f.name: f for f in commit.flags}
        assert flags["all"].aliases == ("a",)
        assert flags["message"].aliases == ("m",)
        assert flags["verify"].aliases == ("n",)
        assert flags["dry-run"].aliases == ()

    def test_placeholder_marks_string_flag(self, commit) -> None:
        flags = {f.name: f for f in commit.flags}
        assert flags["message"].is_string is True
        assert flags["all"].is_string is False

    def test_description_is_first_paragraph(self, commit) -> None:
        flags = {f.name: f for f in commit.flags}
        assert flags["all"].description == (
            "Tell the command to automatically stage files that have been "
            "modified and deleted."
        )
        assert flags["message"].description == "Use the given <msg> as the commit message."


# ---------------------------------------------------------------------------
# Option list edge cases
# ---------------------------------------------------------------------------


class TestOptionEntries:
    def test_longest_long_spelling_is_name(self) -> None:
        html = _page("<dt>-k</dt><dt>--keep</dt><dt>--keep-index</dt><dd><p>Keep.</p></dd>")
        flag = parse_documentation_page(html).flags[0]
        assert flag.name == "keep-index"
        assert flag.aliases == ("k", "keep")

    def test_short_only_option(self) -> None:
        flag = parse_documentation_page(_page("<dt>-q</dt><dd><p>Quiet.</p></dd>")).flags[0]
        assert flag.name == "q"
        assert flag.aliases == ()

    def test_equals_marks_string_flag(self) -> None:
        html = _page("<dt>--repo=repository</dt><dd><p>Use this repository.</p></dd>")
        flag = parse_documentation_page(html).flags[0]
        assert flag.name == "repo"
        assert flag.is_string is True

    def test_dd_without_paragraph_uses_text(self) -> None:
        html = _page("<dt>--all</dt><dd>Everything,\n   really.</dd>")
        assert parse_documentation_page(html).flags[0].description == "Everything, really."

    def test_non_option_terms_are_skipped(self) -> None:
        html = _page(
            "<dt>&lt;stash&gt;</dt><dd><p>A stash reference.</p></dd>"
            "<dt>--quiet</dt><dd><p>Quiet.</p></dd>"
        )
        assert [f.name for f in parse_documentation_page(html).flags] == ["quiet"]

    def test_duplicate_flag_is_skipped_with_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        html = _page("<dt>--all</dt><dd><p>First.</p></dd><dt>--all</dt><dd><p>Second.</p></dd>")
        with caplog.at_level(logging.WARNING, logger="cheekygit.catalog.builder"):
            command = parse_documentation_page(html)
        assert [f.description for f in command.flags] == ["First."]
        assert "duplicate flag 'all'" in caplog.text

    def test_taken_alias_is_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        html = _page(
            "<dt>-n</dt><dt>--dry-run</dt><dd><p>Dry run.</p></dd>"
            "<dt>-n</dt><dt>--no-verify</dt><dd><p>Skip hooks.</p></dd>"
        )
        with caplog.at_level(logging.WARNING, logger="cheekygit.catalog.builder"):
            command = parse_documentation_page(html)
        flags = {f.name: f for f in command.flags}
        assert flags["dry-run"].aliases == ("n",)
        assert flags["no-verify"].aliases == ()
        assert "alias 'n'" in caplog.text

    def test_page_without_options_has_no_flags(self) -> None:
        html = """
        <html><body>
          <h2 id="_name">NAME</h2>
          <div class="sectionbody"><p>git-gc - Cleanup unnecessary files</p></div>
        </body></html>
        """
        command = parse_documentation_page(html)
        assert command.name == "gc"
        assert command.flags == ()

    def test_headings_found_by_title(self) -> None:
        html = """
        <html><body>
          <h2>Name</h2>
          <div><p>git-tag - Create a tag object.</p></div>
          <h2>Options</h2>
          <div><dl><dt>-f</dt><dt>--force</dt><dd><p>Replace an existing tag.</p></dd></dl></div>
        </body></html>
        """
        command = parse_documentation_page(html)
        assert command.name == "tag"
        assert command.description == "Create a tag object."
        assert command.flags[0].name == "force"


# ---------------------------------------------------------------------------
# Command names
# ---------------------------------------------------------------------------


class TestCommandName:
    def test_explicit_name_wins(self) -> None:
        assert parse_documentation_page(_page(""), name="save").name == "save"

    def test_title_fallback(self) -> None:
        html = _page("", name_line="not a name line")
        command = parse_documentation_page(html)
        assert command.name == "stash"
        assert command.description == ""

    def test_other_prefix(self) -> None:
        html = _page("", name_line="hg-stash - Something else")
        with pytest.raises(CatalogParseError, match="no command name"):
            parse_documentation_page(html.replace("Git - git-stash", "Mercurial"))

    def test_empty_page_rejected(self) -> None:
        with pytest.raises(CatalogParseError, match="empty"):
            parse_documentation_page("   ")

    def test_page_without_name_rejected(self) -> None:
        with pytest.raises(CatalogParseError, match="no command name"):
            parse_documentation_page("<html><body><p>Hello</p></body></html>")


# ---------------------------------------------------------------------------
# build_catalog_from_pages
# ---------------------------------------------------------------------------


class TestBuildCatalogFromPages:
    def test_aggregates_pages(self) -> None:
        catalog = build_catalog_from_pages(
            [FIXTURES_DIR / "git-commit.html", FIXTURES_DIR / "git-push.html"]
        )
        assert list(catalog.commands) == ["commit", "push"]
        push = catalog.commands["push"]
        assert push.description == "Update remote refs along with associated objects."
        assert [f.name for f in push.flags] == ["all", "prune", "dry-run", "repo"]
        assert push.flags[3].is_string is True

    def test_duplicate_pages_rejected(self) -> None:
        page = FIXTURES_DIR / "git-push.html"
        with pytest.raises(CatalogConfigError, match="Duplicate command 'push'"):
            build_catalog_from_pages([page, page])

    def test_missing_page_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogParseError, match="Failed to read"):
            build_catalog_from_pages([tmp_path / "missing.html"])
