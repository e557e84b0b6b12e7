"""Resolve every cross-reference of the documentation to a concrete target.

Tiers are tried in a fixed order and the first hit wins:

1. local - Xrefs declared by the pages of this run (always authoritative),
2. memory - results already computed in this run, known misses included,
3. persistent - the on-disk cache of earlier remote results,
4. remote - the xref service; hits are written back to the persistent cache.

An Xref no tier knows keeps its ``Unresolved`` reference.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from functools import partial
from pathlib import Path

import httpx

from docbuilder.documentation import Documentation, update_markup
from docbuilder.errors import RemoteLookupError
from docbuilder.markup import Link, Markup, Reference, Resolved
from docbuilder.reference_loaders import (
    DEFAULT_XREF_SERVICE,
    FileSystemReferenceCache,
    LocalReferenceLoader,
    MemoryReferenceCache,
    ReferenceLoader,
    RemoteXrefLoader,
    first_hit,
)
from docbuilder.resolution_report import ResolutionReport
from docbuilder.xref import Xref

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """Runs the resolution tiers for one documentation run."""

    def __init__(
        self,
        local: LocalReferenceLoader,
        *,
        memory: MemoryReferenceCache | None = None,
        persistent: FileSystemReferenceCache | None = None,
        remote: RemoteXrefLoader | None = None,
        report: ResolutionReport | None = None,
    ) -> None:
        """Initialize the chain; the persistent and remote tiers are optional."""
        self.local = local
        self.memory = memory if memory is not None else MemoryReferenceCache()
        self.persistent = persistent
        self.remote = remote
        self.report = report if report is not None else ResolutionReport()

        self._uncached_loaders: list[ReferenceLoader] = []
        if persistent is not None:
            self._uncached_loaders.append(partial(self._load_persistent, persistent))
        if remote is not None:
            self._uncached_loaders.append(partial(self._load_remote, remote))

    async def resolve_xref(self, xref: Xref) -> Resolved | None:
        """Return the target of ``xref`` or ``None`` when every tier misses.

        Raises ``RemoteLookupError`` when the remote tier fails for this Xref,
        and ``CacheCorruptionError`` for a broken persistent cache record.
        """
        result = self.local.load(xref)
        if result is not None:
            self.report.record_hit("local")
            return result

        seen = xref in self.memory
        result = await self.memory.get_or_load(xref, self._load_uncached)
        if seen and result is not None:
            self.report.record_hit("memory")
        return result

    async def resolve(self, reference: Reference) -> Reference:
        """Resolve one reference; unresolvable ones are returned unchanged."""
        if isinstance(reference, Resolved):
            return reference
        result = await self.resolve_xref(reference.xref)
        if result is None:
            self.report.record_unresolved(reference.xref)
            return reference
        return result

    async def resolve_markup(self, markup: Markup) -> Markup:
        """Rewrite transform: resolve ``Link`` nodes, pass everything else through.

        A remote failure only affects the link at hand, which stays unresolved.
        """
        if not isinstance(markup, Link) or isinstance(markup.reference, Resolved):
            return markup
        try:
            reference = await self.resolve(markup.reference)
        except RemoteLookupError as e:
            logger.warning("Could not resolve %s: %s", markup.reference.xref, e)
            self.report.record_failure(markup.reference.xref, e)
            return markup
        return replace(markup, reference=reference)

    async def _load_uncached(self, xref: Xref) -> Resolved | None:
        return await first_hit(xref, self._uncached_loaders)

    async def _load_persistent(
        self, persistent: FileSystemReferenceCache, xref: Xref
    ) -> Resolved | None:
        result = await persistent.load(xref)
        if result is not None:
            self.report.record_hit("persistent")
        return result

    async def _load_remote(self, remote: RemoteXrefLoader, xref: Xref) -> Resolved | None:
        result = await remote.load(xref)
        if result is not None:
            self.report.record_hit("remote")
            if self.persistent is not None:
                await self.persistent.store(xref, result)
        return result


def create_resolver(
    documentation: Documentation,
    *,
    client: httpx.AsyncClient | None = None,
    cache_dir: Path | None = None,
    service_url: str = DEFAULT_XREF_SERVICE,
    report: ResolutionReport | None = None,
) -> ReferenceResolver:
    """Wire up the standard chain for a documentation run.

    Without a ``client`` the remote tier is skipped (offline mode); without a
    ``cache_dir`` there is no persistent tier.
    """
    return ReferenceResolver(
        LocalReferenceLoader(documentation.xrefs),
        persistent=FileSystemReferenceCache(cache_dir) if cache_dir is not None else None,
        remote=RemoteXrefLoader(client, service_url) if client is not None else None,
        report=report,
    )


async def resolve_all_references(
    documentation: Documentation,
    resolver: ReferenceResolver,
) -> Documentation:
    """Return the documentation with every resolvable link resolved."""
    return await update_markup(documentation, resolver.resolve_markup)
