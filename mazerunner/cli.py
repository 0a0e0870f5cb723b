"""Command line entry points for the mazerunner launcher."""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from . import __version__
from .dispatcher import list_runners, run_by_name
from .errors import MazeRunnerError
from .executor import ExecutionIO
from .resolver import ConfigSelection

ENV_LOG_LEVEL = "MAZERUNNER_LOG_LEVEL"

app = App(
    name="mr",
    version=__version__,
    help="Run named commands declared in a runner.toml file.",
)

PathOption = typ.Annotated[
    Path | None,
    Parameter(
        name=["--path", "-p"],
        help="Runner file to read. Ignored when -d, -t or -r is given.",
    ),
]
DevFlag = typ.Annotated[
    bool,
    Parameter(name=["--dev", "-d"], negative=(), help="Read dev.runner.toml."),
]
TestFlag = typ.Annotated[
    bool,
    Parameter(name=["--test", "-t"], negative=(), help="Read test.runner.toml."),
]
ReleaseFlag = typ.Annotated[
    bool,
    Parameter(
        name=["--release", "-r"],
        negative=(),
        help="Read release.runner.toml.",
    ),
]


def _configure_logging() -> None:
    """Enable log output on stderr when a level is requested."""
    value = os.getenv(ENV_LOG_LEVEL)
    if not value:
        return
    level = logging.getLevelNamesMapping().get(value.strip().upper())
    if level is None:
        return
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command(name="run")
def run(
    name: str,
    *,
    path: PathOption = None,
    dev: DevFlag = False,
    test: TestFlag = False,
    release: ReleaseFlag = False,
) -> None:
    """Run the named runner, streaming its output."""
    selection = ConfigSelection(dev=dev, test=test, release=release, path=path)
    io = ExecutionIO(stdout=sys.stdout)
    asyncio.run(run_by_name(name, selection, io))


@app.command(name="list")
def list_command(
    *,
    path: PathOption = None,
    dev: DevFlag = False,
    test: TestFlag = False,
    release: ReleaseFlag = False,
) -> None:
    """Print every runner as a JSON array."""
    selection = ConfigSelection(dev=dev, test=test, release=release, path=path)
    list_runners(selection, ExecutionIO(stdout=sys.stdout))


def main(argv: list[str] | tuple[str, ...] | None = None) -> int:
    """Entry point for the mr CLI."""
    _configure_logging()
    try:
        app(argv)
    except MazeRunnerError as error:
        print(f"mr: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
