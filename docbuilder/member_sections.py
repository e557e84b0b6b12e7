"""Extraction rules for the member sections of a type page.

The set of sections is closed: constructors, methods, properties and fields,
always loaded in that order. Each section is plain data (header, item
selector, identity and display-name functions) driving the shared
``MemberSection.load`` extraction.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any
from xml.etree.ElementTree import Element

from docbuilder.markup import Markup, SectionHeader, header
from docbuilder.markup_from_xml import children_markup
from docbuilder.names import constructor_name, member_anchor, method_name
from docbuilder.symbols import TypeSymbol
from docbuilder.xref import (
    Xref,
    xref_for_constructor,
    xref_for_field,
    xref_for_method,
    xref_for_property,
)


@dataclass(frozen=True)
class DocumentationFragment:
    """What one symbol contributes to a page."""

    name: str
    url_fragment: str
    markup: tuple[Markup, ...]


@dataclass(frozen=True)
class MemberSection:
    """Extraction rule for one kind of type member."""

    header: SectionHeader
    select_items: Callable[[TypeSymbol], Sequence[Any]]
    identity_of: Callable[[TypeSymbol, Any], Xref]
    display_name: Callable[[TypeSymbol, Any], str]

    def load(self, declaring: TypeSymbol, item: Any, doc: Element) -> DocumentationFragment:
        """Build the fragment for ``item``: a level-3 header plus its summary."""
        name = self.display_name(declaring, item)
        anchor = member_anchor(name)
        markup = (header(name, 3, anchor), *children_markup(doc.find("summary")))
        return DocumentationFragment(name, "#" + anchor, markup)


def is_documentable(member: Any) -> bool:
    """Public, declared on this type, and not compiler-special."""
    return (
        member.visibility == "public"
        and not member.is_inherited
        and not member.is_special_name
    )


def _constructors(type_symbol: TypeSymbol) -> list[Any]:
    # A delegate's constructor and Invoke methods are compiler-synthesized.
    if type_symbol.is_delegate:
        return []
    return [
        c for c in type_symbol.constructors if c.visibility == "public" and not c.is_static
    ]


def _methods(type_symbol: TypeSymbol) -> list[Any]:
    if type_symbol.is_delegate:
        return []
    return [m for m in type_symbol.methods if is_documentable(m)]


def _properties(type_symbol: TypeSymbol) -> list[Any]:
    return [p for p in type_symbol.properties if is_documentable(p)]


def _fields(type_symbol: TypeSymbol) -> list[Any]:
    return [f for f in type_symbol.fields if is_documentable(f)]


def _plain_name(_declaring: TypeSymbol, member: Any) -> str:
    return member.name


CONSTRUCTORS = MemberSection(
    header=header("Constructors", 2, "constructors"),
    select_items=_constructors,
    identity_of=xref_for_constructor,
    display_name=constructor_name,
)

METHODS = MemberSection(
    header=header("Methods", 2, "methods"),
    select_items=_methods,
    identity_of=xref_for_method,
    display_name=lambda _declaring, method: method_name(method),
)

PROPERTIES = MemberSection(
    header=header("Properties", 2, "properties"),
    select_items=_properties,
    identity_of=xref_for_property,
    display_name=_plain_name,
)

FIELDS = MemberSection(
    header=header("Fields", 2, "fields"),
    select_items=_fields,
    identity_of=xref_for_field,
    display_name=_plain_name,
)

TYPE_PAGE_SECTIONS = (CONSTRUCTORS, METHODS, PROPERTIES, FIELDS)
