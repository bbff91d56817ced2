"""Command catalog -- load, validate, and build the registry of known commands.

This sub-package owns the first stage of the cheekygit pipeline: turning a
catalog document (JSON or YAML, bundled or user supplied) into an immutable
:class:`~cheekygit.models.Catalog` that the interpreter consumes.

Typical usage::

    from cheekygit.catalog import default_catalog, load_catalog

    catalog = default_catalog()
    custom = load_catalog("my-commands.yaml")
    catalog.find_command("commit")

Sub-modules:

* :mod:`~cheekygit.catalog.loader` -- file/stdin I/O plus format detection.
* :mod:`~cheekygit.catalog.registry` -- validation into a
  :class:`~cheekygit.models.Catalog` and serialisation back to a document.
* :mod:`~cheekygit.catalog.builder` -- offline batch tool that parses saved
  git-scm.com documentation pages into catalog entries.
"""

from cheekygit.catalog.registry import (
    build_catalog,
    default_catalog,
    dump_catalog,
    load_catalog,
)

__all__ = ["build_catalog", "default_catalog", "dump_catalog", "load_catalog"]
