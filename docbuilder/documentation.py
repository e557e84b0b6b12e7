"""The whole-run documentation model: every page plus the aggregate Xref table."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType

from docbuilder.doc_comments import DocCommentIndex
from docbuilder.documentation_page import (
    DEFAULT_PAGE_EXTENSION,
    DocumentationPage,
    build_namespace_page,
    build_type_page,
)
from docbuilder.markup import Markup, Resolved, rewrite
from docbuilder.symbols import TypeSymbol
from docbuilder.xref import Xref

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Documentation:
    """Ordered pages and the union of the Xrefs declared by type pages."""

    pages: tuple[DocumentationPage, ...]
    xrefs: Mapping[Xref, Resolved]


def build_documentation(
    symbol_sets: Iterable[tuple[Sequence[TypeSymbol], DocCommentIndex]],
    *,
    page_extension: str = DEFAULT_PAGE_EXTENSION,
) -> Documentation:
    """Build all pages and the read-only Xref table.

    For each symbol set, every type page comes first, followed by one page per
    namespace in order of first appearance. Types in the global namespace get
    no namespace page. When two symbols share an Xref the later one wins.
    """
    pages: list[DocumentationPage] = []
    xrefs: dict[Xref, Resolved] = {}

    for types, docs in symbol_sets:
        namespaces: dict[str, list[TypeSymbol]] = {}
        for t in types:
            page = build_type_page(t, docs, page_extension=page_extension)
            pages.append(page)
            for xref, ref in page.contained_references.items():
                previous = xrefs.get(xref)
                if previous is not None and previous != ref:
                    logger.debug("Xref collision on %s: %s replaces %s", xref, ref, previous)
                xrefs[xref] = ref
            if t.namespace:
                namespaces.setdefault(t.namespace, []).append(t)

        for ns, members in namespaces.items():
            pages.append(build_namespace_page(ns, members, docs, page_extension=page_extension))

    for url, count in Counter(p.url for p in pages).items():
        if count > 1:
            logger.warning("%d pages share the URL %s; the last one written wins", count, url)

    logger.info("Built %d pages declaring %d xrefs", len(pages), len(xrefs))
    return Documentation(tuple(pages), MappingProxyType(xrefs))


async def update_markup(
    documentation: Documentation,
    transform: Callable[[Markup], Awaitable[Markup]],
) -> Documentation:
    """Rewrite the body of every page concurrently.

    Pages are independent; if any page fails the others are cancelled and the
    first error propagates, so no partially rewritten documentation escapes.
    The Xref table is carried over unchanged.
    """

    async def update_page(page: DocumentationPage) -> DocumentationPage:
        return replace(page, body=await rewrite(page.body, transform))

    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(update_page(p)) for p in documentation.pages]
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from eg

    return replace(documentation, pages=tuple(t.result() for t in tasks))
