"""Parse runner files into an ordered catalog of named commands."""

from __future__ import annotations

import dataclasses
import json
import logging
import tomllib
import typing as typ

from .errors import (
    KIND_CANNOT_OPEN,
    KIND_CANNOT_READ,
    CatalogParseError,
    CatalogSerializationError,
    RunnerFileError,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

RUNNERS_KEY = "runners"
NAME_KEY = "name"
COMMAND_KEY = "command"

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class CommandDefinition:
    """A named command line declared in a runner file."""

    name: str
    command: tuple[str, ...]

    @property
    def executable(self) -> str:
        """Return the program the runner starts."""
        return self.command[0]

    @property
    def arguments(self) -> tuple[str, ...]:
        """Return the arguments passed to the executable."""
        return self.command[1:]

    def to_dict(self) -> dict[str, typ.Any]:
        """Return the runner in the shape it is declared in."""
        return {NAME_KEY: self.name, COMMAND_KEY: list(self.command)}


@dataclasses.dataclass(frozen=True, slots=True)
class Catalog:
    """Runners loaded from a single file, in declaration order."""

    definitions: tuple[CommandDefinition, ...] = ()

    def __len__(self) -> int:
        """Return the number of runners."""
        return len(self.definitions)

    def __iter__(self) -> cabc.Iterator[CommandDefinition]:
        """Iterate over runners in declaration order."""
        return iter(self.definitions)

    def names(self) -> list[str]:
        """Return runner names in declaration order."""
        return [definition.name for definition in self.definitions]

    def lookup(self, name: str) -> CommandDefinition | None:
        """Return the first runner called `name`, or None."""
        return lookup(self, name)


def _require_string(value: object, field: str, index: int) -> str:
    if not isinstance(value, str):
        message = f"{RUNNERS_KEY}[{index}].{field} must be a string"
        raise CatalogParseError(message)
    return value


def _parse_definition(entry: object, index: int) -> CommandDefinition:
    if not isinstance(entry, dict):
        message = f"{RUNNERS_KEY}[{index}] must be a table"
        raise CatalogParseError(message)
    if NAME_KEY not in entry:
        message = f"{RUNNERS_KEY}[{index}] is missing field {NAME_KEY!r}"
        raise CatalogParseError(message)
    if COMMAND_KEY not in entry:
        message = f"{RUNNERS_KEY}[{index}] is missing field {COMMAND_KEY!r}"
        raise CatalogParseError(message)

    name = _require_string(entry[NAME_KEY], NAME_KEY, index)
    if not name:
        message = f"{RUNNERS_KEY}[{index}].{NAME_KEY} must not be empty"
        raise CatalogParseError(message)

    raw_command = entry[COMMAND_KEY]
    if not isinstance(raw_command, list):
        message = f"{RUNNERS_KEY}[{index}].{COMMAND_KEY} must be an array of strings"
        raise CatalogParseError(message)
    if not raw_command:
        message = f"runner {name!r} has an empty {COMMAND_KEY}"
        raise CatalogParseError(message)
    command = tuple(_require_string(part, COMMAND_KEY, index) for part in raw_command)
    return CommandDefinition(name=name, command=command)


def parse_catalog(text: str) -> Catalog:
    """Parse runner file text into a catalog.

    The text must be a TOML document with a `runners` array of tables, each
    carrying a string `name` and a non-empty array-of-strings `command`.
    Additional keys are ignored.
    """
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as error:
        raise CatalogParseError(str(error)) from error

    if RUNNERS_KEY not in document:
        message = f"missing field {RUNNERS_KEY!r}"
        raise CatalogParseError(message)
    entries = document[RUNNERS_KEY]
    if not isinstance(entries, list):
        message = f"{RUNNERS_KEY!r} must be an array of tables"
        raise CatalogParseError(message)

    definitions = tuple(
        _parse_definition(entry, index) for index, entry in enumerate(entries)
    )
    return Catalog(definitions=definitions)


def load_catalog(path: Path) -> Catalog:
    """Read the runner file at `path` and parse it."""
    _logger.debug("Loading runners from %s", path)
    try:
        handle = path.open("r", encoding="utf-8")
    except OSError as error:
        detail = error.strerror or str(error)
        raise RunnerFileError(path, KIND_CANNOT_OPEN, detail) from error

    with handle:
        try:
            contents = handle.read()
        except (OSError, UnicodeDecodeError) as error:
            raise RunnerFileError(path, KIND_CANNOT_READ, str(error)) from error

    return parse_catalog(contents)


def lookup(catalog: Catalog, name: str) -> CommandDefinition | None:
    """Return the first runner whose name matches exactly, or None."""
    return next(
        (definition for definition in catalog if definition.name == name),
        None,
    )


def dump_catalog(catalog: Catalog) -> str:
    """Encode the catalog as a compact JSON array in declaration order."""
    payload = [definition.to_dict() for definition in catalog]
    try:
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as error:
        raise CatalogSerializationError(str(error)) from error
