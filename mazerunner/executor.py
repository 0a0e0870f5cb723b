"""Run a single runner as a child process and stream its output."""

from __future__ import annotations

import asyncio
import contextlib
import dataclasses
import logging
import shlex
import typing as typ

from .errors import SpawnError, StreamError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .catalog import CommandDefinition

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ExecutionIO:
    """Output stream the executor forwards runner lines to."""

    stdout: typ.IO[str]


def write_stream_output(stream: typ.IO[str], content: str) -> None:
    """Write content to a stream, ensuring it ends with a newline."""
    stream.write(content)
    if not content.endswith("\n"):
        stream.write("\n")
    stream.flush()


def decode_line(raw: bytes) -> str:
    """Return a child output line without its terminator."""
    text = raw.decode("utf-8", errors="replace")
    if text.endswith("\n"):
        text = text[:-1]
        if text.endswith("\r"):
            text = text[:-1]
    return text


async def _spawn(argv: tuple[str, ...]) -> asyncio.subprocess.Process:
    try:
        return await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
        )
    except OSError as error:
        raise SpawnError(argv, error.strerror or str(error)) from error
    except ValueError as error:
        raise SpawnError(argv, str(error)) from error


async def read_lines(reader: asyncio.StreamReader) -> cabc.AsyncIterator[bytes]:
    """Yield newline-terminated chunks from `reader`, whatever their length.

    Lines longer than the reader's buffer limit are assembled piecewise. The
    final line is yielded without a terminator when the stream ends mid-line.
    """
    pending = bytearray()
    while True:
        try:
            chunk = await reader.readuntil(b"\n")
        except asyncio.LimitOverrunError as error:
            pending += await reader.readexactly(error.consumed)
            continue
        except asyncio.IncompleteReadError as error:
            pending += error.partial
            if pending:
                yield bytes(pending)
            return
        pending += chunk
        yield bytes(pending)
        pending.clear()


async def _abandon(process: asyncio.subprocess.Process) -> None:
    with contextlib.suppress(ProcessLookupError):
        process.kill()
    await process.wait()


async def execute(definition: CommandDefinition, io: ExecutionIO) -> int:
    """Run `definition` and forward each stdout line to `io.stdout`.

    The child inherits the working directory, environment, stdin and stderr
    of the launcher; only stdout is captured. Lines are written as soon as
    they arrive, in the order the child produced them, and the coroutine
    completes once the child exits.

    Returns
    -------
    int
        The child's exit status. A non-zero status is logged, not raised.

    Raises
    ------
    SpawnError
        The executable could not be started.
    StreamError
        Reading the child's output failed; the child is killed.

    """
    argv = definition.command
    _logger.debug("Starting runner %r: %s", definition.name, shlex.join(argv))
    process = await _spawn(argv)
    stdout = typ.cast("asyncio.StreamReader", process.stdout)

    try:
        async for raw_line in read_lines(stdout):
            write_stream_output(io.stdout, decode_line(raw_line))
    except OSError as error:
        await _abandon(process)
        raise StreamError(argv, str(error)) from error

    returncode = await process.wait()
    if returncode:
        _logger.info("Runner %r exited with status %d", definition.name, returncode)
    else:
        _logger.debug("Runner %r finished", definition.name)
    return returncode
