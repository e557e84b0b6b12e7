"""Assemble documentation pages for types and namespaces."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from xml.etree.ElementTree import Element

from docbuilder.declarations import type_declaration
from docbuilder.doc_comments import DocCommentIndex
from docbuilder.markup import (
    BulletList,
    Link,
    Markup,
    Resolved,
    Seq,
    Unresolved,
    header,
    prepend_if_not_empty,
)
from docbuilder.markup_from_xml import children_markup, code_block, markup_from_xml, placeholder
from docbuilder.member_sections import TYPE_PAGE_SECTIONS, MemberSection
from docbuilder.names import namespace_page_stem, type_name, type_page_stem
from docbuilder.namespace_sections import NAMESPACE_PAGE_SECTIONS, NamespaceSection
from docbuilder.symbols import TypeSymbol
from docbuilder.xref import Xref, xref_for_type

logger = logging.getLogger(__name__)

DEFAULT_PAGE_EXTENSION = ".html"


@dataclass(frozen=True)
class DocumentationPage:
    """One output page: its location, title, body and the Xrefs it declares."""

    url: str
    title: str
    body: Markup
    contained_references: Mapping[Xref, Resolved] = field(default_factory=dict)


def _titled_section(title: str, anchor: str, element: Element | None) -> list[Markup]:
    if element is None:
        return []
    return [header(title, 2, anchor), *children_markup(element)]


def _see_also_item(element: Element) -> Markup:
    if element.get("cref"):
        return Link(Unresolved(Xref.from_cref(element)))
    href = element.get("href")
    if href:
        return Link(Resolved("".join(element.itertext()).strip() or href, href))
    return placeholder("seealso")


def _see_also_section(doc: Element) -> list[Markup]:
    items = [_see_also_item(e) for e in doc.findall("seealso")]
    if not items:
        return []
    return [header("See Also", 2, "seealso"), BulletList(tuple(items))]


def load_member_section(
    section: MemberSection,
    type_symbol: TypeSymbol,
    page_url: str,
    docs: DocCommentIndex,
) -> tuple[dict[Xref, Resolved], list[Markup]]:
    """Run one member section over a type.

    Returns the Xrefs the section declares (pointing into ``page_url``) and its
    markup, headed by the section header unless nothing qualified.
    """
    refs: dict[Xref, Resolved] = {}
    markup: list[Markup] = []
    for item in section.select_items(type_symbol):
        xref = section.identity_of(type_symbol, item)
        fragment = section.load(type_symbol, item, docs.lookup(xref))
        refs[xref] = Resolved(fragment.name, page_url + fragment.url_fragment)
        markup.extend(fragment.markup)
    return refs, prepend_if_not_empty(section.header, markup)


def build_type_page(
    type_symbol: TypeSymbol,
    docs: DocCommentIndex,
    *,
    page_extension: str = DEFAULT_PAGE_EXTENSION,
) -> DocumentationPage:
    """Build the page of one type.

    Sections, in order: Summary, Declaration, Remarks, Examples, then the
    member sections (constructors, methods, properties, fields) and See Also.
    """
    url = type_page_stem(type_symbol) + page_extension
    title = type_name(type_symbol)
    type_xref = xref_for_type(type_symbol)
    doc = docs.lookup(type_xref)

    body: list[Markup] = []
    body += _titled_section("Summary", "summary", doc.find("summary"))
    body += [header("Declaration", 2, "declaration"), code_block(type_declaration(type_symbol))]
    body += _titled_section("Remarks", "remarks", doc.find("remarks"))
    body += prepend_if_not_empty(
        header("Examples", 2, "examples"),
        (markup_from_xml(e) for e in doc.findall("example")),
    )

    refs: dict[Xref, Resolved] = {type_xref: Resolved(title, url)}
    for section in TYPE_PAGE_SECTIONS:
        section_refs, section_markup = load_member_section(section, type_symbol, url, docs)
        refs.update(section_refs)
        body += section_markup

    body += _see_also_section(doc)

    return DocumentationPage(url, title, Seq(tuple(body)), refs)


def load_namespace_section(
    section: NamespaceSection,
    types: Iterable[TypeSymbol],
    docs: DocCommentIndex,
) -> list[Markup]:
    """Run one type-kind section over the members of a namespace."""
    entries = [
        section.load(t, docs.lookup(section.identity_of(t)))
        for t in section.select_items(types)
    ]
    return prepend_if_not_empty(section.header, entries)


def build_namespace_page(
    namespace: str,
    types: Iterable[TypeSymbol],
    docs: DocCommentIndex,
    *,
    page_extension: str = DEFAULT_PAGE_EXTENSION,
) -> DocumentationPage:
    """Build the landing page of a namespace.

    The page links to each of its types but declares no Xrefs: the type pages
    own the canonical locations.
    """
    types = list(types)
    body: list[Markup] = []
    for section in NAMESPACE_PAGE_SECTIONS:
        body += load_namespace_section(section, types, docs)
    url = namespace_page_stem(namespace) + page_extension
    return DocumentationPage(url, namespace, Seq(tuple(body)), {})
