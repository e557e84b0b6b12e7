"""Index of XML doc comments keyed by Xref."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from xml.etree.ElementTree import Element, ParseError

import defusedxml.ElementTree as ET

from docbuilder.errors import SymbolSourceError
from docbuilder.xref import Xref

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class DocCommentIndex:
    """Maps Xrefs to their ``<member>`` doc-comment elements."""

    def __init__(self, members: dict[Xref, Element] | None = None) -> None:
        """Initialize the index from already-parsed member elements."""
        self.members: dict[Xref, Element] = dict(members or {})

    def __len__(self) -> int:
        """Return the number of documented members."""
        return len(self.members)

    def __contains__(self, xref: object) -> bool:
        """Whether the Xref has a doc comment."""
        return xref in self.members

    def lookup(self, xref: Xref) -> Element:
        """Return the doc element for an Xref; an empty one when undocumented."""
        element = self.members.get(xref)
        if element is None:
            return Element("member", {"name": xref.value})
        return element

    @classmethod
    def load(cls, path: Path) -> DocCommentIndex:
        """Parse a compiler-generated XML documentation file."""
        try:
            root = ET.parse(path).getroot()
        except (OSError, ParseError) as e:
            msg = f"Cannot read doc file {path}: {e}"
            raise SymbolSourceError(msg) from e

        members = root.find("members")
        if members is None:
            msg = f"Doc file {path} has no <members> element"
            raise SymbolSourceError(msg)

        index = cls({Xref.from_name(m): m for m in members})
        logger.info("Loaded %d doc comments from %s", len(index), path)
        return index

    @classmethod
    def from_fragments(cls, fragments: dict[str, str]) -> DocCommentIndex:
        """Build an index from ``{xref: "<summary>...</summary>..."}`` pairs."""
        members: dict[Xref, Element] = {}
        for name, body in fragments.items():
            xref = Xref(name)
            try:
                members[xref] = ET.fromstring(f"<member>{body}</member>")
            except ParseError as e:
                msg = f"Malformed doc comment for {name}: {e}"
                raise SymbolSourceError(msg) from e
            members[xref].set("name", name)
        return cls(members)
