"""cinit configuration.

Typed configuration for the scaffolding run. All settings use Pydantic v2
models so they are validated at construction time and can be serialised
to/from JSON or read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

DEFAULT_HEADER_URL = (
    "https://raw.githubusercontent.com/BayonetArch/essen.h/refs/heads/master/essen.h"
)

Layout = Literal["include", "flat"]
Fetcher = Literal["wget", "curl", "httpx"]


class ToolchainConfig(BaseModel):
    """Compiler and build tool used by the generated Makefile."""

    cc: str = Field(default="gcc")
    cflags: str = Field(default="-Wall -Wextra -ggdb")
    make: str = Field(default="make")
    timeout: int | None = Field(
        default=None, ge=1, description="Build-and-run timeout in seconds; None waits indefinitely"
    )


class FetchConfig(BaseModel):
    """Where the header comes from and how it is downloaded."""

    url: str = Field(default=DEFAULT_HEADER_URL)
    fetcher: Fetcher = Field(default="wget")
    timeout: int | None = Field(
        default=None, ge=1, description="Download timeout in seconds; None waits indefinitely"
    )


class Config(BaseModel):
    """Global cinit configuration.

    Created once by the CLI entry point (usually via :meth:`from_env`, then
    overridden by command-line flags) and passed to the ``Pipeline``.
    """

    root_dir: Path = Field(default=Path("."))
    layout: Layout = Field(default="include")
    assume_yes: bool = Field(default=False)
    run: bool = Field(default=True)
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CINIT_ROOT_DIR, CINIT_LAYOUT, CINIT_ASSUME_YES,
            CINIT_HEADER_URL, CINIT_FETCHER, CINIT_FETCH_TIMEOUT,
            CINIT_CC, CINIT_CFLAGS, CINIT_MAKE, CINIT_BUILD_TIMEOUT.
        """
        fetch_kwargs: dict[str, Any] = {}
        if os.environ.get("CINIT_HEADER_URL"):
            fetch_kwargs["url"] = os.environ["CINIT_HEADER_URL"]
        if os.environ.get("CINIT_FETCHER"):
            fetch_kwargs["fetcher"] = os.environ["CINIT_FETCHER"]
        if os.environ.get("CINIT_FETCH_TIMEOUT"):
            fetch_kwargs["timeout"] = int(os.environ["CINIT_FETCH_TIMEOUT"])

        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("CINIT_CC"):
            toolchain_kwargs["cc"] = os.environ["CINIT_CC"]
        if os.environ.get("CINIT_CFLAGS"):
            toolchain_kwargs["cflags"] = os.environ["CINIT_CFLAGS"]
        if os.environ.get("CINIT_MAKE"):
            toolchain_kwargs["make"] = os.environ["CINIT_MAKE"]
        if os.environ.get("CINIT_BUILD_TIMEOUT"):
            toolchain_kwargs["timeout"] = int(os.environ["CINIT_BUILD_TIMEOUT"])

        assume_yes = os.environ.get("CINIT_ASSUME_YES", "").strip().lower()

        return cls(
            root_dir=Path(os.environ.get("CINIT_ROOT_DIR", ".")),
            layout=os.environ.get("CINIT_LAYOUT", "include"),
            assume_yes=assume_yes in ("1", "true", "yes", "y"),
            toolchain=ToolchainConfig(**toolchain_kwargs),
            fetch=FetchConfig(**fetch_kwargs),
        )
