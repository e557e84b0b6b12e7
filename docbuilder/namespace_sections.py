"""Extraction rules for the type-kind sections of a namespace page."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from xml.etree.ElementTree import Element

from docbuilder.markup import Link, Markup, SectionHeader, Seq, Unresolved, header
from docbuilder.markup_from_xml import children_markup
from docbuilder.symbols import TypeSymbol
from docbuilder.xref import Xref, xref_for_type


@dataclass(frozen=True)
class NamespaceSection:
    """Lists the types of one kind declared in a namespace."""

    header: SectionHeader
    kind: str

    def select_items(self, types: Iterable[TypeSymbol]) -> list[TypeSymbol]:
        """Return the types of this section's kind, in source order."""
        return [t for t in types if t.kind == self.kind]

    def identity_of(self, type_symbol: TypeSymbol) -> Xref:
        """Return the identity of a listed type."""
        return xref_for_type(type_symbol)

    def load(self, type_symbol: TypeSymbol, doc: Element) -> Markup:
        """Return a linked heading for the type followed by its summary."""
        link = Link(Unresolved(self.identity_of(type_symbol)))
        return Seq((SectionHeader(link, 3), *children_markup(doc.find("summary"))))


CLASSES = NamespaceSection(header("Classes", 2, "classes"), "class")
INTERFACES = NamespaceSection(header("Interfaces", 2, "interfaces"), "interface")
DELEGATES = NamespaceSection(header("Delegates", 2, "delegates"), "delegate")
ENUMS = NamespaceSection(header("Enums", 2, "enums"), "enum")
STRUCTS = NamespaceSection(header("Structs", 2, "structs"), "struct")

NAMESPACE_PAGE_SECTIONS = (CLASSES, INTERFACES, DELEGATES, ENUMS, STRUCTS)
