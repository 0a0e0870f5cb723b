"""Top-level run and list operations over a runner file."""

from __future__ import annotations

import logging

from .catalog import Catalog, dump_catalog, load_catalog, lookup
from .errors import RunnerNotFoundError
from .executor import ExecutionIO, execute, write_stream_output
from .resolver import ConfigSelection, resolve_config_path

_logger = logging.getLogger(__name__)


def load_runners(selection: ConfigSelection) -> Catalog:
    """Resolve the runner file for `selection` and load its catalog."""
    path = resolve_config_path(selection)
    _logger.debug("Using runner file %s", path)
    return load_catalog(path)


async def run_by_name(
    name: str,
    selection: ConfigSelection,
    io: ExecutionIO,
) -> int:
    """Run the runner called `name` and return its exit status."""
    catalog = load_runners(selection)
    if (definition := lookup(catalog, name)) is None:
        raise RunnerNotFoundError(name)
    return await execute(definition, io)


def list_runners(selection: ConfigSelection, io: ExecutionIO) -> None:
    """Write every runner in the selected file to `io.stdout` as JSON."""
    catalog = load_runners(selection)
    write_stream_output(io.stdout, dump_catalog(catalog))
