"""Shared fixtures for behaviour-driven CLI tests."""

from __future__ import annotations

import dataclasses
import shlex
import typing as typ

import pytest
from pytest_bdd import given, parsers, then, when

from mazerunner import cli
from tests.conftest import python_command, render_runner_file

if typ.TYPE_CHECKING:
    from pathlib import Path


@dataclasses.dataclass
class RunResult:
    """Record CLI invocation results."""

    stdout: str
    stderr: str
    returncode: int


@pytest.fixture
def cli_invocation() -> dict[str, RunResult]:
    """Collect the result of running the CLI within a scenario."""
    return {}


@dataclasses.dataclass
class RunnerFileState:
    """Runner files declared by a scenario, keyed by file name."""

    files: dict[str, list[tuple[str, tuple[str, ...]]]] = dataclasses.field(
        default_factory=dict
    )
    current: str = ""

    def declare(self, name: str, command: tuple[str, ...]) -> None:
        """Add a runner to the most recently declared file."""
        self.files[self.current].append((name, command))

    def runners(self, filename: str) -> list[tuple[str, tuple[str, ...]]]:
        """Return the runners declared for `filename`."""
        return self.files[filename]


@pytest.fixture
def runner_state() -> RunnerFileState:
    """Scenario state describing runner files to write."""
    return RunnerFileState()


@given(parsers.cfparse('a runner file "{filename}"'))
def given_runner_file(filename: str, runner_state: RunnerFileState) -> None:
    """Start declaring runners for a new file."""
    runner_state.files.setdefault(filename, [])
    runner_state.current = filename


@given(parsers.cfparse('the runner "{name}" runs "{command}"'))
def given_runner_command(
    name: str,
    command: str,
    runner_state: RunnerFileState,
) -> None:
    """Declare a runner from a shell-style command string."""
    runner_state.declare(name, tuple(shlex.split(command)))


@given(parsers.cfparse('the runner "{name}" prints the lines "{lines}"'))
def given_runner_printing(
    name: str,
    lines: str,
    runner_state: RunnerFileState,
) -> None:
    """Declare a runner whose child prints each comma-separated line."""
    statements = [f"print({line!r})" for line in lines.split(",")]
    runner_state.declare(name, python_command(*statements))


@when(parsers.cfparse('I run mr with "{arguments}"'))
def when_run_mr(
    arguments: str,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    runner_state: RunnerFileState,
    cli_invocation: dict[str, RunResult],
) -> None:
    """Write the declared files and invoke the CLI inside them."""
    for filename, runners in runner_state.files.items():
        (tmp_path / filename).write_text(
            render_runner_file(runners),
            encoding="utf-8",
        )
    monkeypatch.chdir(tmp_path)

    returncode = cli.main(shlex.split(arguments))

    captured = capsys.readouterr()
    cli_invocation["result"] = RunResult(
        stdout=captured.out,
        stderr=captured.err,
        returncode=returncode,
    )


@then("the command succeeds")
def then_command_succeeds(cli_invocation: dict[str, RunResult]) -> None:
    """The CLI exited zero."""
    result = cli_invocation["result"]
    assert result.returncode == 0, result.stderr


@then(parsers.cfparse('the command fails mentioning "{fragment}"'))
def then_command_fails(
    fragment: str,
    cli_invocation: dict[str, RunResult],
) -> None:
    """The CLI exited non-zero with a message and no output."""
    result = cli_invocation["result"]
    assert result.returncode != 0
    assert fragment in result.stderr
    assert result.stdout == ""
