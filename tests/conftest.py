"""Shared pytest fixtures for the cinit test suite.

Provides reusable fixtures for:
- Configs and projects rooted in a temporary directory
- Mock subprocess helpers
- A stand-in for the downloaded header
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from cinit.config import Config
from cinit.scaffolder import ProjectConfig


# ---------------------------------------------------------------------------
# Configs & Projects
# ---------------------------------------------------------------------------

@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config rooted in a temp directory, with no prompt."""
    return Config(root_dir=tmp_path, assume_yes=True)


@pytest.fixture
def project(tmp_path: Path) -> ProjectConfig:
    """An include-layout project named ``demo`` under tmp_path."""
    return ProjectConfig(name="demo", root_dir=tmp_path)


@pytest.fixture
def flat_project(tmp_path: Path) -> ProjectConfig:
    """A flat-layout project named ``demo`` under tmp_path."""
    return ProjectConfig(name="demo", layout="flat", root_dir=tmp_path)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's CINIT_* variables out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("CINIT_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_shell", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


# ---------------------------------------------------------------------------
# Header stand-in
# ---------------------------------------------------------------------------

HEADER_STUB = """\
#ifndef ESSEN_H
#define ESSEN_H

#include <stdio.h>

#define println(s) puts(s)

#endif
"""


@pytest.fixture
def header_stub() -> str:
    """Minimal header providing the ``println`` the generated source calls."""
    return HEADER_STUB


@pytest.fixture
def fake_fetch(header_stub: str):
    """Replacement for ``HeaderFetcher.fetch`` that writes the stub header."""
    calls: list[Path] = []

    async def _fetch(self: Any, destination: Path) -> Path:
        calls.append(destination)
        destination.write_text(header_stub, encoding="utf-8")
        return destination

    _fetch.calls = calls  # type: ignore[attr-defined]
    return _fetch
