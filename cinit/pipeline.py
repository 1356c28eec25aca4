"""cinit pipeline orchestrator.

Scaffolds a Make-based C project in six strictly sequential steps:

1. Confirm   -- ask before touching the filesystem (skipped with ``--yes``).
2. Directory -- create ``./<name>`` (and ``./<name>/include``).
3. Makefile  -- render the build recipe and create ``./<name>/build``.
4. Header    -- download ``essen.h`` into the project.
5. Source    -- render ``./<name>/<name>.c``.
6. Run       -- ``make -C ./<name> run`` and echo the program's output.

The first failing step aborts the run.  Already-created files are left in
place.

Usage::

    cinit hello
    python -m cinit.pipeline hello --yes --layout flat
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import NoReturn, TextIO

from cinit.config import Config
from cinit.fetcher import FetchError, HeaderFetcher
from cinit.runner import BuildRunner
from cinit.scaffolder import (
    MAX_PROJECT_NAME_LENGTH,
    ProjectConfig,
    ProjectGenerator,
    ScaffoldError,
)
from cinit.utils import (
    CommandError,
    console,
    err_console,
    print_error,
    print_success,
    print_warning,
)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class UsageError(Exception):
    """Raised for an invalid project name."""


class AbortedError(Exception):
    """Raised when the user declines the confirmation prompt."""


class PromptError(Exception):
    """Raised when the confirmation answer cannot be read."""


# ---------------------------------------------------------------------------
# Confirmation prompt
# ---------------------------------------------------------------------------


def confirm(stream: TextIO | None = None) -> None:
    """Ask ``Proceed [Y/n]?`` and read one line from *stream* (stdin).

    An empty answer, or one containing ``y``, proceeds.  End of input reads
    as an empty answer.

    Raises:
        AbortedError: For any other answer.
        PromptError: If reading the answer fails.
    """
    stream = stream or sys.stdin
    try:
        answer = console.input("[bold cyan]\\[INFO][/bold cyan] Proceed \\[Y/n]?: ", stream=stream)
    except (OSError, ValueError) as exc:
        raise PromptError(f"Could not read answer: {exc}") from exc

    answer = answer.strip().lower()
    if answer and "y" not in answer:
        raise AbortedError("Exiting..")


def validate_project_name(name: str) -> str:
    """Return *name* if it is usable as a project name.

    Raises:
        UsageError: If the name is empty or longer than 25 characters.
    """
    if not name:
        raise UsageError("Project name must not be empty")
    if len(name) > MAX_PROJECT_NAME_LENGTH:
        raise UsageError("Project name is too long")
    return name


# ---------------------------------------------------------------------------
# Pipeline Orchestrator
# ---------------------------------------------------------------------------


class Pipeline:
    """Runs the scaffolding steps in order.

    Attributes:
        config: Global run configuration.
        project: The project being created.
    """

    def __init__(
        self,
        config: Config,
        project: ProjectConfig,
        stdin: TextIO | None = None,
    ) -> None:
        self.config = config
        self.project = project
        self.stdin = stdin
        self.generator = ProjectGenerator(project, toolchain=config.toolchain)
        self.fetcher = HeaderFetcher(config.fetch)
        self.runner = BuildRunner(config.toolchain)

    async def run(self) -> Path:
        """Execute every step, stopping at the first failure.

        Returns:
            Path to the generated project root.
        """
        if not self.config.assume_yes:
            confirm(self.stdin)

        root = await self.generator.create_directories()
        try:
            await self.generator.write_makefile()
            await self.fetcher.fetch(self.project.header_file_path)
            await self.generator.write_source()
            if self.config.run:
                await self.runner.run(self.project)
        except Exception:
            print_warning(f"Partially created project left at '{root}'")
            raise

        print_success(f"Project '{self.project.name}' created at {root}")
        return root


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


class _ArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        print_error(message)
        self.exit(1)


_FLAG_OPTIONS = frozenset({"-h", "--help", "-y", "--yes", "--no-run"})
_VALUE_OPTIONS = frozenset({"--layout", "--fetcher"})


def _positionals_last(argv: list[str]) -> list[str]:
    """Move every token that is not a known option behind a ``--``.

    Any argument is accepted as the project name, including one starting
    with ``-``, so only the options defined by ``parse_args`` are options.
    """
    options: list[str] = []
    positionals: list[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            positionals.extend(tokens)
        elif token in _VALUE_OPTIONS:
            options.append(token)
            value = next(tokens, None)
            if value is not None:
                options.append(value)
        elif token in _FLAG_OPTIONS or token.split("=", 1)[0] in _VALUE_OPTIONS:
            options.append(token)
        else:
            positionals.append(token)
    if not positionals:
        return options
    return [*options, "--", *positionals]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse the command line; exactly one positional project name."""
    parser = _ArgumentParser(
        prog="cinit",
        allow_abbrev=False,
        description="Scaffold, build and run a minimal C project",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  cinit hello\n"
            "  cinit hello --yes --layout flat\n"
            "  cinit hello --fetcher curl --no-run\n"
        ),
    )
    parser.add_argument(
        "project_name",
        help=f"Name of the project directory (at most {MAX_PROJECT_NAME_LENGTH} characters)",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        default=None,
        help="Do not ask for confirmation",
    )
    parser.add_argument(
        "--layout",
        choices=["include", "flat"],
        default=None,
        help="'include' puts the header in include/essen.h, 'flat' in ./essentials.h",
    )
    parser.add_argument(
        "--fetcher",
        choices=["wget", "curl", "httpx"],
        default=None,
        help="How to download the header (default: wget)",
    )
    parser.add_argument(
        "--no-run",
        dest="run",
        action="store_false",
        default=None,
        help="Skip building and running the project",
    )
    if argv is None:
        argv = sys.argv[1:]
    return parser.parse_args(_positionals_last(argv))


def _exit_with(message: str) -> NoReturn:
    print_error(message)
    sys.exit(1)


def main(argv: list[str] | None = None, stdin: TextIO | None = None) -> None:
    """CLI entry point for ``cinit`` / ``python -m cinit.pipeline``."""
    args = parse_args(argv)

    try:
        config = Config.from_env()
    except ValueError as exc:
        _exit_with(f"Invalid configuration: {exc}")

    if args.yes is not None:
        config.assume_yes = args.yes
    if args.layout is not None:
        config.layout = args.layout
    if args.fetcher is not None:
        config.fetch.fetcher = args.fetcher
    if args.run is not None:
        config.run = args.run

    try:
        name = validate_project_name(args.project_name)
        project = ProjectConfig(name=name, layout=config.layout, root_dir=config.root_dir)
        asyncio.run(Pipeline(config, project, stdin=stdin).run())
    except (UsageError, AbortedError, PromptError) as exc:
        _exit_with(str(exc))
    except CommandError as exc:
        print_error("Command Failed")
        err_console.out(f"Reason:\n\n{exc.stderr}", highlight=False)
        sys.exit(1)
    except (ScaffoldError, FetchError) as exc:
        _exit_with(str(exc))


if __name__ == "__main__":
    main()
