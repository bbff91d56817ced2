"""Offline catalog builder -- parse saved git-scm.com documentation pages.

This is a batch tool, not part of the interpreter: it reads documentation
pages that were downloaded ahead of time (``git-commit.html``,
``git-push.html`` ...) and converts them into
:class:`~cheekygit.models.CommandDefinition` entries of the same shape the
bundled catalog uses. The result is written to a catalog file with
``cheekygit catalog build`` and reviewed by hand before use.

**Page layout expected** (Asciidoctor output used by git-scm.com)::

    <h2 id="_name">NAME</h2>
    <div class="sectionbody"><p>git-commit - Record changes to the repository</p></div>
    ...
    <h2 id="_options">OPTIONS</h2>
    <div class="sectionbody"><div class="dlist"><dl>
        <dt>-a</dt><dt>--all</dt><dd><p>Tell the command to ...</p></dd>
        <dt>-m &lt;msg&gt;</dt><dt>--message=&lt;msg&gt;</dt><dd>...</dd>
    </dl></div></div>

Consecutive ``<dt>`` terms share the following ``<dd>``. The longest long
spelling becomes the flag name and the other spellings its aliases; a
``<placeholder>`` or ``=`` in any spelling marks a string flag. Pages
without a NAME section fall back to the ``<title>`` for the command name.
Terms that are not
options (``<pathspec>...``) and spellings that collide with an earlier flag
are skipped with a warning. A page without a usable command name is
rejected with :class:`~cheekygit.exceptions.CatalogParseError`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from lxml import etree

from cheekygit.catalog.registry import build_catalog
from cheekygit.exceptions import CatalogParseError
from cheekygit.models import DEFAULT_PREFIX, Catalog, CommandDefinition, FlagDefinition

logger = logging.getLogger(__name__)

# "--[no-]verify", "-m <msg>", "--message=<msg>", "-S[<keyid>]"
_SPELLING_RE = re.compile(r"^(?P<dashes>-{1,2})(?:\[no-\])?(?P<name>[A-Za-z0-9][\w-]*)")
# "git-commit - Record changes to the repository"
_NAME_LINE_RE = re.compile(r"^\s*(?P<tool>[\w.]+)-(?P<command>[\w-]+)\s+-\s+(?P<summary>.+)$")
# "Git - git-commit Documentation"
_TITLE_RE = re.compile(r"(?P<tool>[\w.]+)-(?P<command>[\w-]+) Documentation")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class _Spelling:
    """One option spelling from a ``<dt>`` term."""

    name: str
    is_long: bool
    takes_value: bool


@dataclass
class _OptionEntry:
    """``<dt>`` terms collected until their ``<dd>`` arrives."""

    spellings: list[_Spelling] = field(default_factory=list)


def parse_documentation_page(
    html: Union[str, bytes],
    name: Optional[str] = None,
    prefix: str = DEFAULT_PREFIX,
) -> CommandDefinition:
    """Convert one documentation page into a command definition.

    Args:
        html: Page content.
        name: Command name override; by default taken from the NAME section
            (``git-commit - ...`` gives ``commit``).
        prefix: Tool prefix stripped from the NAME line.

    Returns:
        The validated :class:`~cheekygit.models.CommandDefinition`.

    Raises:
        CatalogParseError: If the page cannot be parsed or has no command name.
    """
    root = _parse_html(html)

    command_name, summary = _extract_name_section(root, prefix)
    command_name = name or command_name or _extract_title_name(root, prefix)
    if not command_name:
        raise CatalogParseError("Documentation page has no command name")

    flags = _extract_flags(root, command_name)
    description = summary[:1].upper() + summary[1:] if summary else ""
    if description and not description.endswith("."):
        description += "."

    logger.info("Parsed '%s' with %d flag(s)", command_name, len(flags))
    return CommandDefinition(name=command_name, description=description, flags=tuple(flags))


def build_catalog_from_pages(
    paths: Iterable[Union[str, Path]],
    prefix: str = DEFAULT_PREFIX,
) -> Catalog:
    """Parse every page in *paths* and assemble a validated catalog.

    Raises:
        CatalogParseError: If a page cannot be read or parsed.
        CatalogConfigError: If two pages describe the same command.
    """
    commands: list[dict] = []
    for path in paths:
        page = Path(path)
        try:
            content = page.read_bytes()
        except OSError as exc:
            raise CatalogParseError(f"Failed to read documentation page {page}: {exc}") from exc
        logger.debug("Parsing documentation page %s", page)
        command = parse_documentation_page(content, prefix=prefix)
        commands.append(command.model_dump(by_alias=True))

    return build_catalog({"prefix": prefix, "commands": commands})


# ------------------------------------------------------------------ #
# HTML helpers
# ------------------------------------------------------------------ #


def _parse_html(html: Union[str, bytes]) -> etree._Element:
    if isinstance(html, str):
        html = html.encode("utf-8")
    if not html.strip():
        raise CatalogParseError("Documentation page is empty")
    try:
        root = etree.fromstring(html, parser=etree.HTMLParser(recover=True))
    except etree.LxmlError as exc:
        raise CatalogParseError(f"Failed to parse documentation page: {exc}") from exc
    if root is None:
        raise CatalogParseError("Documentation page has no HTML content")
    return root


def _text(element: etree._Element) -> str:
    """Return the element's text content with whitespace collapsed."""
    return _WHITESPACE_RE.sub(" ", "".join(element.itertext())).strip()


def _section_heading(root: etree._Element, anchor: str, title: str) -> Optional[etree._Element]:
    """Find a section ``<h2>`` by its anchor id, falling back to its title."""
    found = root.xpath(f"//h2[@id='{anchor}']")
    if found:
        return found[0]
    for heading in root.iter("h2"):
        if _text(heading).upper() == title:
            return heading
    return None


def _extract_name_section(root: etree._Element, prefix: str) -> tuple[Optional[str], str]:
    """Return ``(command_name, summary)`` from the NAME section."""
    heading = _section_heading(root, "_name", "NAME")
    if heading is None:
        return None, ""
    body = heading.getnext()
    if body is None:
        return None, ""

    match = _NAME_LINE_RE.match(_text(body))
    if match is None or match.group("tool") != prefix:
        logger.warning("Unrecognised NAME line: %r", _text(body))
        return None, ""
    return match.group("command"), match.group("summary").strip()


def _extract_title_name(root: etree._Element, prefix: str) -> Optional[str]:
    title = root.find(".//title")
    if title is None:
        return None
    match = _TITLE_RE.search(_text(title))
    if match is None or match.group("tool") != prefix:
        return None
    return match.group("command")


def _extract_flags(root: etree._Element, command: str) -> list[FlagDefinition]:
    heading = _section_heading(root, "_options", "OPTIONS")
    if heading is None:
        logger.warning("'%s' has no OPTIONS section", command)
        return []
    body = heading.getnext()
    dl = body.find(".//dl") if body is not None else None
    if dl is None:
        logger.warning("'%s' OPTIONS section has no definition list", command)
        return []

    flags: list[FlagDefinition] = []
    taken: set[str] = set()
    entry = _OptionEntry()

    for child in dl:
        if not isinstance(child.tag, str):
            continue
        if child.tag == "dt":
            spelling = _parse_spelling(_text(child))
            if spelling is not None:
                entry.spellings.append(spelling)
            continue
        if child.tag != "dd":
            continue

        flag = _make_flag(entry, _describe(child), taken, command)
        if flag is not None:
            flags.append(flag)
            taken.update((flag.name, *flag.aliases))
        entry = _OptionEntry()

    return flags


def _parse_spelling(term: str) -> Optional[_Spelling]:
    match = _SPELLING_RE.match(term)
    if match is None:
        return None
    rest = term[match.end():]
    return _Spelling(
        name=match.group("name"),
        is_long=match.group("dashes") == "--",
        takes_value=rest.startswith("=") or ("<" in rest and ">" in rest),
    )


def _describe(dd: etree._Element) -> str:
    """First paragraph of a ``<dd>``, or its whole text when it has none."""
    paragraph = dd.find(".//p")
    return _text(paragraph if paragraph is not None else dd)


def _make_flag(
    entry: _OptionEntry,
    description: str,
    taken: set[str],
    command: str,
) -> Optional[FlagDefinition]:
    if not entry.spellings:
        return None

    long_names = [s.name for s in entry.spellings if s.is_long]
    candidates = long_names or [s.name for s in entry.spellings]
    name = max(candidates, key=len)
    if name in taken:
        logger.warning("'%s': skipping duplicate flag '%s'", command, name)
        return None

    aliases: list[str] = []
    for spelling in entry.spellings:
        if spelling.name == name or spelling.name in aliases:
            continue
        if spelling.name in taken:
            logger.warning(
                "'%s': alias '%s' of '%s' already used, dropping it",
                command,
                spelling.name,
                name,
            )
            continue
        aliases.append(spelling.name)

    return FlagDefinition(
        name=name,
        aliases=tuple(aliases),
        description=description,
        is_string=any(s.takes_value for s in entry.spellings),
    )
