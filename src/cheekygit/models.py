"""Canonical Pydantic models shared across all cheekygit modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into three groups:

**Catalog models** -- the static, immutable description of a tool:
    :class:`FlagDefinition`, :class:`CommandDefinition`, :class:`FlagSchema`,
    and :class:`Catalog`.

**Interpreter models** -- produced fresh for every resolution and discarded
afterwards:
    :class:`ParsedFlag`, :class:`ParsedInvocation`, :class:`MatchedFlag`,
    :class:`FlagExplanation`, and :class:`ResolvedExplanation`.

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`OutputConfig` and :class:`GlobalConfig`.

Catalog and interpreter models are frozen. Catalog files spell the
string-flag marker ``isString``; :class:`FlagDefinition` accepts both that
alias and the field name ``is_string``.
"""

from __future__ import annotations

from typing import Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
    model_validator,
)

MARKER = "%s"
"""Placeholder inside description templates, replaced with arguments."""

DEFAULT_PREFIX = "git"
"""The tool whose invocations the bundled catalog describes."""

DEFAULT_SPECIAL_TOKENS: dict[str, str] = {
    ".": "all files in the current directory",
    "..": "all files in the previous directory",
}
"""Positional tokens with a fixed symbolic meaning, and their prose form."""

OUTPUT_FORMATS = ("auto", "json", "plain", "rich")


# --- Catalog ---


def _check_template(value: str) -> str:
    if value.count(MARKER) > 1:
        raise ValueError(f"description has more than one {MARKER} marker: {value!r}")
    return value


def _check_flag_spelling(value: str) -> str:
    """Flag names and aliases are stored without dashes and never contain spaces."""
    if value.startswith("-"):
        raise ValueError(f"flag spelling '{value}' must not start with '-'")
    if any(char.isspace() for char in value):
        raise ValueError(f"flag spelling {value!r} must not contain whitespace")
    return value


class FlagDefinition(BaseModel):
    """A single flag accepted by a catalog command.

    ``name`` is the canonical long spelling without leading dashes
    (``dry-run``); ``aliases`` are alternate spellings, typically single
    letters (``n``). A flag with ``is_string`` set consumes a value;
    otherwise it is a presence switch.

    Example::

        FlagDefinition(
            name="message",
            aliases=("m",),
            description="Set the commit message to %s",
            is_string=True,
        )
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1, description="Canonical long flag name")
    aliases: tuple[str, ...] = Field(
        default=(), description="Alternate (usually short) names"
    )
    description: str = Field(
        default="", description="Template with at most one %s marker"
    )
    is_string: bool = Field(
        default=False,
        alias="isString",
        description="True if the flag consumes a value",
    )

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return _check_flag_spelling(value)

    @field_validator("aliases")
    @classmethod
    def _check_alias_spellings(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for alias in value:
            if alias:
                _check_flag_spelling(alias)
        return value

    @field_validator("description")
    @classmethod
    def _check_description(cls, value: str) -> str:
        return _check_template(value)

    @model_validator(mode="after")
    def _check_aliases(self) -> FlagDefinition:
        if any(not alias for alias in self.aliases):
            raise ValueError(f"flag '{self.name}' has an empty alias")
        return self


class CommandDefinition(BaseModel):
    """A command of the catalog with its description template and flags.

    Validation enforces the per-command uniqueness invariant: flag names
    are unique, and no alias collides with a flag name or another alias.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = ""
    flags: tuple[FlagDefinition, ...] = ()

    @field_validator("description")
    @classmethod
    def _check_description(cls, value: str) -> str:
        return _check_template(value)

    @model_validator(mode="after")
    def _check_unique_flags(self) -> CommandDefinition:
        seen: dict[str, str] = {}
        for flag in self.flags:
            for spelling in (flag.name, *flag.aliases):
                owner = seen.get(spelling)
                if owner is not None:
                    raise ValueError(
                        f"command '{self.name}': '{spelling}' of flag "
                        f"'{flag.name}' collides with flag '{owner}'"
                    )
                seen[spelling] = flag.name
        return self


class FlagSchema(BaseModel):
    """Tokenizer view of a command's flags.

    Splits the flags into boolean and string-valued names and carries a
    bidirectional alias lookup (alias to canonical name, canonical name to
    its aliases). Built once per command by :meth:`Catalog.schema_for`.
    """

    model_config = ConfigDict(frozen=True)

    boolean_flags: frozenset[str] = frozenset()
    string_flags: frozenset[str] = frozenset()
    alias_to_name: dict[str, str] = Field(default_factory=dict)
    name_to_aliases: dict[str, tuple[str, ...]] = Field(default_factory=dict)

    @classmethod
    def from_flags(cls, flags: tuple[FlagDefinition, ...]) -> FlagSchema:
        """Build the schema for *flags* (assumed to be collision free)."""
        return cls(
            boolean_flags=frozenset(f.name for f in flags if not f.is_string),
            string_flags=frozenset(f.name for f in flags if f.is_string),
            alias_to_name={
                alias: flag.name for flag in flags for alias in flag.aliases
            },
            name_to_aliases={flag.name: flag.aliases for flag in flags},
        )

    def canonical(self, name: str) -> str:
        """Return the canonical flag name for *name*, or *name* itself."""
        return self.alias_to_name.get(name, name)

    def takes_value(self, name: str) -> bool:
        return name in self.string_flags


class Catalog(BaseModel):
    """Read-only registry of the commands of one tool.

    Built through :func:`~cheekygit.catalog.build_catalog`, which turns
    validation failures into
    :class:`~cheekygit.exceptions.CatalogConfigError`. The catalog is never
    mutated after construction and may be shared freely; the only internal
    state is a memo of per-command :class:`FlagSchema` objects.
    """

    model_config = ConfigDict(frozen=True)

    prefix: str = Field(default=DEFAULT_PREFIX, min_length=1)
    commands: dict[str, CommandDefinition] = Field(default_factory=dict)
    special_tokens: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_SPECIAL_TOKENS)
    )

    _schemas: dict[str, FlagSchema] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_keys(self) -> Catalog:
        for key, command in self.commands.items():
            if key != command.name:
                raise ValueError(
                    f"catalog key '{key}' does not match command '{command.name}'"
                )
        return self

    def find_command(self, name: str) -> Optional[CommandDefinition]:
        """Return the command called *name*, or ``None`` if it is not registered."""
        return self.commands.get(name)

    def schema_for(self, name: str) -> Optional[FlagSchema]:
        """Return the (memoised) :class:`FlagSchema` of command *name*."""
        command = self.find_command(name)
        if command is None:
            return None
        schema = self._schemas.get(name)
        if schema is None:
            schema = FlagSchema.from_flags(command.flags)
            self._schemas[name] = schema
        return schema

    def __len__(self) -> int:
        return len(self.commands)


# --- Interpreter ---


class ParsedFlag(BaseModel):
    """A flag as it appeared in an invocation, under its canonical name."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: Union[bool, str] = True


class ParsedInvocation(BaseModel):
    """Result of tokenizing one invocation.

    ``positionals`` keep their left-to-right order. ``flags`` keep the order
    of first appearance; a repeated flag holds the value of its last
    occurrence.
    """

    model_config = ConfigDict(frozen=True)

    command: str
    positionals: tuple[str, ...] = ()
    flags: tuple[ParsedFlag, ...] = ()

    def flag_values(self) -> dict[str, Union[bool, str]]:
        return {flag.name: flag.value for flag in self.flags}


class MatchedFlag(BaseModel):
    """A catalog flag that was supplied in the invocation, with its value."""

    model_config = ConfigDict(frozen=True)

    definition: FlagDefinition
    value: Union[bool, str] = True


class FlagExplanation(BaseModel):
    """Rendered explanation of one supplied flag."""

    model_config = ConfigDict(frozen=True)

    name: str
    aliases: tuple[str, ...] = ()
    description: str = ""


class ResolvedExplanation(BaseModel):
    """The explanation of a whole invocation, returned to the caller.

    ``flags`` only lists flags present in the invocation, in catalog
    declaration order.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    flags: tuple[FlagExplanation, ...] = ()


# --- Configuration ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )

    @field_validator("format")
    @classmethod
    def _check_format(cls, value: str) -> str:
        value = value.lower()
        if value not in OUTPUT_FORMATS:
            raise ValueError(
                f"unknown output format '{value}' (expected one of: "
                f"{', '.join(OUTPUT_FORMATS)})"
            )
        return value


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/cheekygit/config.json``.

    Loaded and saved by :func:`~cheekygit.config.load_global_config` and
    :func:`~cheekygit.config.save_global_config`. Fields here have the
    lowest precedence and can be overridden by project config, environment
    variables, or CLI flags. See :func:`~cheekygit.config.resolve_config`
    for the full precedence chain.
    """

    catalog: Optional[str] = Field(
        default=None,
        description="Path to a JSON/YAML catalog replacing the bundled one",
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
