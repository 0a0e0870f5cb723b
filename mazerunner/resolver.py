"""Select which runner file an invocation reads."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

DEFAULT_RUNNER_FILE = "runner.toml"
DEV_RUNNER_FILE = "dev.runner.toml"
TEST_RUNNER_FILE = "test.runner.toml"
RELEASE_RUNNER_FILE = "release.runner.toml"

_logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True, slots=True)
class ConfigSelection:
    """Runner file selectors collected from the command line."""

    dev: bool = False
    test: bool = False
    release: bool = False
    path: Path | None = None


def resolve_config_path(selection: ConfigSelection) -> Path:
    """Return the runner file path for the given selectors.

    The first matching selector wins, checked in a fixed order: development,
    test, release, explicit path, then the default `runner.toml`. Conflicting
    selectors are not rejected; an explicit path shadowed by one of the
    boolean flags is ignored with a warning. Relative paths are resolved
    against the current working directory when the file is opened.
    """
    if selection.dev:
        chosen = Path(DEV_RUNNER_FILE)
    elif selection.test:
        chosen = Path(TEST_RUNNER_FILE)
    elif selection.release:
        chosen = Path(RELEASE_RUNNER_FILE)
    elif selection.path is not None:
        return selection.path
    else:
        return Path(DEFAULT_RUNNER_FILE)

    if selection.path is not None:
        _logger.warning(
            "Ignoring explicit runner file %s in favour of %s",
            selection.path,
            chosen,
        )
    return chosen
