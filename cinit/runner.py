"""Build-and-run step.

Invokes the generated Makefile's ``run`` target and echoes whatever the
program printed between two separator lines.
"""

from __future__ import annotations

import shlex

from cinit.config import ToolchainConfig
from cinit.scaffolder.generator import ProjectConfig
from cinit.utils import console, print_separator, run_checked


class BuildRunner:
    """Runs ``make -C <project> run`` and prints the captured output."""

    def __init__(self, toolchain: ToolchainConfig | None = None) -> None:
        self.toolchain = toolchain or ToolchainConfig()

    def build_command(self, project: ProjectConfig) -> str:
        root = shlex.quote(str(project.root_path))
        return f"{self.toolchain.make} --no-print-directory -C {root} run"

    async def run(self, project: ProjectConfig) -> str:
        """Build and run *project*.

        Returns:
            The captured stdout of ``make run``.

        Raises:
            CommandError: If the build or the program fails.
        """
        output = await run_checked(
            self.build_command(project), timeout=self.toolchain.timeout
        )

        print_separator()
        console.out(output, highlight=False, end="")
        print_separator()
        return output
