"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` and lays down the project skeleton: the project
root (plus ``include/`` in the include layout), a Makefile with its
``build/`` output directory, and the hello-world C source file.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from cinit.config import Layout, ToolchainConfig
from cinit.utils import print_info

from .templates import TemplateRenderer

MAX_PROJECT_NAME_LENGTH = 25

HEADER_NAMES: dict[str, str] = {
    "include": "essen.h",
    "flat": "essentials.h",
}


class ScaffoldError(Exception):
    """Raised when a project file or directory cannot be created."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """The project being scaffolded.

    Every path is derived from ``name`` and ``root_dir``; nothing else is
    stored.
    """

    name: str = Field(..., min_length=1, max_length=MAX_PROJECT_NAME_LENGTH)
    layout: Layout = Field(default="include")
    root_dir: Path = Field(default=Path("."))

    @property
    def root_path(self) -> Path:
        return self.root_dir / self.name

    @property
    def include_path(self) -> Path:
        return self.root_path / "include"

    @property
    def build_dir_path(self) -> Path:
        return self.root_path / "build"

    @property
    def makefile_path(self) -> Path:
        return self.root_path / "Makefile"

    @property
    def source_file_path(self) -> Path:
        return self.root_path / f"{self.name}.c"

    @property
    def header_include(self) -> str:
        """Header path relative to the project root, as written in the sources."""
        header = HEADER_NAMES[self.layout]
        if self.layout == "include":
            return f"include/{header}"
        return header

    @property
    def header_file_path(self) -> Path:
        return self.root_path / self.header_include


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Creates the project directories and renders its files.

    Directory creation is deliberately not idempotent: an existing project
    root (or ``build/``) is an error, so a previous project is never
    silently overwritten.
    """

    def __init__(
        self,
        config: ProjectConfig,
        toolchain: ToolchainConfig | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config
        self.toolchain = toolchain or ToolchainConfig()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    async def create_directories(self) -> Path:
        """Create the project root, and ``include/`` in the include layout.

        Returns:
            Path to the project root.
        """
        root = self.config.root_path
        print_info(f"Creating project directory '{root}'")
        await _mkdir(root)
        if self.config.layout == "include":
            await _mkdir(self.config.include_path)
        return root

    async def write_makefile(self) -> Path:
        """Render the Makefile and create the empty ``build/`` directory."""
        print_info("Writing makefile contents")
        path = await self._render("Makefile.j2", self.config.makefile_path)

        print_info("Creating build directory")
        await _mkdir(self.config.build_dir_path)
        return path

    async def write_source(self) -> Path:
        """Render ``{name}.c``."""
        print_info(f"Writing to '{self.config.name}.c'")
        return await self._render("main.c.j2", self.config.source_file_path)

    # -- Context building --------------------------------------------------

    def _build_context(self) -> dict[str, Any]:
        """Build the Jinja2 template context from the project config."""
        return {
            "project_name": self.config.name,
            "header_include": self.config.header_include,
            "cc": self.toolchain.cc,
            "cflags": self.toolchain.cflags,
        }

    async def _render(self, template: str, output: Path) -> Path:
        try:
            return await self.renderer.render_to_file(
                template, output, self._build_context()
            )
        except OSError as exc:
            raise ScaffoldError(
                f"Could not write {output}: {exc.strerror or exc}", path=output
            ) from exc


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


async def _mkdir(path: Path) -> None:
    """Create a single directory; an existing entry is an error."""
    try:
        await asyncio.to_thread(path.mkdir)
    except OSError as exc:
        raise ScaffoldError(
            f"Could not create directory {path}: {exc.strerror or exc}", path=path
        ) from exc
