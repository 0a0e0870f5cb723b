"""Shared exception types for the mazerunner CLI."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

KIND_CANNOT_OPEN = "cannot open"
KIND_CANNOT_READ = "cannot read"


class MazeRunnerError(RuntimeError):
    """Base error for mazerunner operations."""


class RunnerFileError(MazeRunnerError):
    """Raised when the runner file cannot be opened or read."""

    def __init__(self, path: Path, kind: str, detail: str) -> None:
        """Record the offending path and which stage failed."""
        self.path = path
        self.kind = kind
        super().__init__(f"{kind.capitalize()} runner file {str(path)!r}: {detail}")


class CatalogParseError(MazeRunnerError):
    """Raised when runner file text does not describe a runner catalog."""

    def __init__(self, detail: str) -> None:
        """Initialise the error with the parse failure detail."""
        super().__init__(f"Invalid runner file: {detail}")


class RunnerNotFoundError(MazeRunnerError):
    """Raised when no runner carries the requested name."""

    def __init__(self, name: str) -> None:
        """Initialise the error with the missing runner name."""
        self.name = name
        super().__init__(f"Runner not found: {name!r}")


class SpawnError(MazeRunnerError):
    """Raised when the runner's executable cannot be started."""

    def __init__(self, argv: cabc.Sequence[str], detail: str) -> None:
        """Initialise the error with the argv that failed to start."""
        self.argv = tuple(argv)
        super().__init__(f"Failed to start {argv[0]!r}: {detail}")


class StreamError(MazeRunnerError):
    """Raised when reading a running command's output fails."""

    def __init__(self, argv: cabc.Sequence[str], detail: str) -> None:
        """Initialise the error with the argv whose output broke."""
        self.argv = tuple(argv)
        super().__init__(f"Failed to read output of {argv[0]!r}: {detail}")


class CatalogSerializationError(MazeRunnerError):
    """Raised when the runner listing cannot be encoded."""

    def __init__(self, detail: str) -> None:
        """Initialise the error with the encoder failure detail."""
        super().__init__(f"Failed to encode runners: {detail}")
