"""Read catalog documents from disk or stdin.

A catalog document is JSON or YAML. The file extension decides which parser
runs; for stdin and unknown extensions JSON is tried first and YAML second
(every JSON document is also YAML, but JSON errors are more precise).
Nothing here touches the network: catalogs are authored or built offline
and shipped as files.

:func:`load_catalog_data` returns the raw mapping;
:func:`~cheekygit.catalog.registry.build_catalog` validates it.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import yaml

from cheekygit.exceptions import CatalogParseError

_SUFFIX_HINTS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}


def load_catalog_data(source: str) -> dict[str, Any]:
    """Return the catalog document stored at *source* (a path, or ``'-'`` for stdin).

    Raises:
        CatalogParseError: If the source is missing, empty, or not a
            JSON/YAML mapping.
    """
    if source == "-":
        return _load_from_stdin()
    return _load_from_file(source)


def _load_from_stdin() -> dict[str, Any]:
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise CatalogParseError(f"Failed to read from stdin: {exc}") from exc
    if not content.strip():
        raise CatalogParseError("No input received from stdin")
    return parse_catalog_text(content)


def _load_from_file(path: str) -> dict[str, Any]:
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise CatalogParseError(f"Catalog file not found: {path}")
    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogParseError(f"Failed to read catalog file {path}: {exc}") from exc
    if not content.strip():
        raise CatalogParseError(f"Catalog file is empty: {path}")
    return parse_catalog_text(content, hint=_SUFFIX_HINTS.get(file_path.suffix.lower(), ""))


def parse_catalog_text(content: str, hint: str = "") -> dict[str, Any]:
    """Parse *content* as a catalog mapping.

    Args:
        content: Document text.
        hint: ``"json"`` or ``"yaml"`` to use only that parser; anything
            else tries JSON, then YAML.

    Raises:
        CatalogParseError: If no parser accepts the text, or the document
            is not a mapping. Without a hint both parser errors are reported.
    """
    errors: list[str] = []

    if hint != "yaml":
        try:
            return _require_mapping(json.loads(content))
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise CatalogParseError(f"Invalid JSON: {exc}") from exc
            errors.append(f"JSON error: {exc}")

    try:
        return _require_mapping(yaml.safe_load(content))
    except yaml.YAMLError as exc:
        errors.append(f"YAML error: {exc}")

    raise CatalogParseError(
        "Failed to parse catalog as JSON or YAML" + "".join(f"\n  {e}" for e in errors)
    )


def _require_mapping(document: Any) -> dict[str, Any]:
    if isinstance(document, dict):
        return document
    kind = "empty document" if document is None else type(document).__name__
    raise CatalogParseError(f"Catalog must be a JSON/YAML object (got {kind})")
