"""The individual tiers of reference resolution.

Each tier turns an Xref into a ``Resolved`` reference or ``None`` (a miss).
Misses are never errors; tiers only raise for genuine failures.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from pathlib import Path

import httpx

from docbuilder.errors import CacheCorruptionError, RemoteLookupError
from docbuilder.markup import Resolved
from docbuilder.xref import Xref

logger = logging.getLogger(__name__)

ReferenceLoader = Callable[[Xref], Awaitable[Resolved | None]]

DEFAULT_XREF_SERVICE = "https://xref.docs.microsoft.com/query"

# Characters that cannot appear in a cache file name on common filesystems.
# They map to "-", which no C# identifier contains.
RESERVED_PATH_CHARS = '{}()`,<>:"/\\|?*'
CACHE_NAME_TABLE = str.maketrans({c: "-" for c in RESERVED_PATH_CHARS})
RECORD_LINES = 2  # title, url


async def first_hit(xref: Xref, loaders: Sequence[ReferenceLoader]) -> Resolved | None:
    """Try each loader in order and return the first hit."""
    for load in loaders:
        result = await load(xref)
        if result is not None:
            return result
    return None


class LocalReferenceLoader:
    """Looks Xrefs up in the pages built during this run."""

    def __init__(self, references: Mapping[Xref, Resolved]) -> None:
        """Initialize with the aggregate Xref table."""
        self.references = references

    def load(self, xref: Xref) -> Resolved | None:
        """Return the local target of ``xref``, if this run declares it."""
        result = self.references.get(xref)
        if result is None:
            logger.debug("No local reference %s", xref)
        else:
            logger.debug("Found local reference %s", xref)
        return result


class MemoryReferenceCache:
    """Per-run memo of lookups, including known misses.

    Concurrent requests for the same Xref share one in-flight lookup, and a
    failed lookup keeps failing for the rest of the run.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._entries: dict[Xref, asyncio.Future[Resolved | None]] = {}

    def __len__(self) -> int:
        """Return the number of Xrefs looked up so far."""
        return len(self._entries)

    def __contains__(self, xref: object) -> bool:
        """Whether ``xref`` has been looked up (or is being looked up)."""
        return xref in self._entries

    async def get_or_load(self, xref: Xref, load: ReferenceLoader) -> Resolved | None:
        """Return the memoized result for ``xref``, running ``load`` at most once."""
        entry = self._entries.get(xref)
        if entry is None:
            entry = asyncio.ensure_future(load(xref))
            self._entries[xref] = entry
        else:
            logger.info("Found xref %s in memory cache", xref)
        # A cancelled waiter must not cancel the lookup other waiters share.
        return await asyncio.shield(entry)


def cache_file_name(xref: Xref) -> str:
    """Return a filesystem-safe name for an Xref's cache record."""
    return xref.value.translate(CACHE_NAME_TABLE)


class FileSystemReferenceCache:
    """Durable cache of remote results: one two-line file per Xref.

    Line 1 is the title, line 2 the absolute URL. Only hits are stored, so
    a miss is retried against the remote service on every run.
    """

    def __init__(self, directory: Path) -> None:
        """Initialize the cache rooted at ``directory``."""
        self.directory = Path(directory)

    def path_for(self, xref: Xref) -> Path:
        """Return the record path of an Xref."""
        return self.directory / cache_file_name(xref)

    async def load(self, xref: Xref) -> Resolved | None:
        """Return the cached target of ``xref``, if any."""
        return await asyncio.to_thread(self._read, xref)

    async def store(self, xref: Xref, resolved: Resolved) -> None:
        """Write (or overwrite) the record of ``xref``."""
        await asyncio.to_thread(self._write, xref, resolved)

    def _read(self, xref: Xref) -> Resolved | None:
        path = self.path_for(xref)
        if not path.is_file():
            return None
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except UnicodeDecodeError as e:
            raise CacheCorruptionError(path) from e
        if len(lines) < RECORD_LINES or not all(lines[:RECORD_LINES]):
            raise CacheCorruptionError(path)
        logger.info("Found xref %s in filesystem cache", xref)
        return Resolved(lines[0], lines[1])

    def _write(self, xref: Xref, resolved: Resolved) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        title = " ".join(resolved.title.splitlines())
        self.path_for(xref).write_text(f"{title}\n{resolved.url}\n", encoding="utf-8")


class RemoteXrefLoader:
    """Queries an xref service (``GET <service>?uid=<id>``) for external symbols.

    The service answers with a JSON list of ``{"name": ..., "href": ...}``
    candidates; only the first one is used and an empty list is a miss.
    """

    def __init__(self, client: httpx.AsyncClient, service_url: str = DEFAULT_XREF_SERVICE) -> None:
        """Initialize with a shared HTTP client and the service endpoint."""
        self.client = client
        self.service_url = service_url

    async def load(self, xref: Xref) -> Resolved | None:
        """Look ``xref`` up remotely."""
        try:
            response = await self.client.get(self.service_url, params={"uid": xref.stripped})
            response.raise_for_status()
            candidates = response.json()
        except httpx.HTTPError as e:
            msg = f"Xref service request failed for {xref}: {e}"
            raise RemoteLookupError(msg, e) from e
        except ValueError as e:
            msg = f"Xref service returned invalid JSON for {xref}"
            raise RemoteLookupError(msg, e) from e

        if not isinstance(candidates, list):
            msg = f"Xref service returned {type(candidates).__name__}, expected a list, for {xref}"
            raise RemoteLookupError(msg)

        if not candidates:
            logger.warning("Couldn't get xref %s from remote", xref)
            return None

        resolved = _parse_candidate(candidates[0])
        if resolved is None:
            msg = f"Xref service returned a malformed candidate for {xref}: {candidates[0]!r}"
            raise RemoteLookupError(msg)

        logger.info("Got xref %s from remote", xref)
        return resolved


def _parse_candidate(candidate: object) -> Resolved | None:
    if not isinstance(candidate, dict):
        return None
    name = candidate.get("name")
    href = candidate.get("href")
    if not isinstance(name, str) or not name or not isinstance(href, str):
        return None
    try:
        if not httpx.URL(href).is_absolute_url:
            return None
    except httpx.InvalidURL:
        return None
    return Resolved(name, href)
