"""Header download.

Fetches the single remote C header the generated project includes.  By
default the download is delegated to ``wget`` (or ``curl``) through the
shell; the ``httpx`` strategy downloads in-process instead.  The response is
trusted as-is: there is no checksum and no retry.
"""

from __future__ import annotations

import asyncio
import shlex
from pathlib import Path

import httpx

from cinit.config import FetchConfig
from cinit.utils import print_info, run_checked


class FetchError(Exception):
    """Raised when an in-process header download fails."""

    def __init__(self, message: str, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class HeaderFetcher:
    """Downloads ``FetchConfig.url`` to a destination path."""

    def __init__(self, config: FetchConfig | None = None) -> None:
        self.config = config or FetchConfig()

    def build_command(self, destination: Path) -> str:
        """Return the shell command that downloads the header to *destination*."""
        url = shlex.quote(self.config.url)
        dest = shlex.quote(str(destination))
        if self.config.fetcher == "curl":
            return f"curl -fsSL {url} -o {dest}"
        return f"wget {url} -O {dest}"

    async def fetch(self, destination: Path) -> Path:
        """Download the header, overwriting *destination*.

        Raises:
            CommandError: If the ``wget``/``curl`` process exits non-zero.
            FetchError: If the ``httpx`` download fails.
        """
        if self.config.fetcher == "httpx":
            await self._download(destination)
        else:
            await run_checked(
                self.build_command(destination), timeout=self.config.timeout
            )
        return destination

    async def _download(self, destination: Path) -> None:
        url = self.config.url
        print_info(f"Downloading {url}")
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout), follow_redirects=True
        ) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise FetchError(f"Failed to download {url}: {exc}", url=url) from exc

        try:
            await asyncio.to_thread(destination.write_bytes, response.content)
        except OSError as exc:
            raise FetchError(
                f"Could not write {destination}: {exc.strerror or exc}", url=url
            ) from exc
