"""Convert XML doc-comment nodes into Markup."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from xml.etree.ElementTree import Element

from docbuilder.markup import (
    BulletList,
    CodeBlock,
    InlineCode,
    Link,
    Markup,
    Paragraph,
    Resolved,
    Seq,
    Text,
    Unresolved,
    header,
)
from docbuilder.xref import Xref

logger = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r"\s+")

XmlNode = str | Element


def iter_xml_nodes(element: Element) -> Iterator[XmlNode]:
    """Yield the text runs and child elements of ``element`` in document order."""
    if element.text:
        yield element.text
    for child in element:
        yield child
        if child.tail:
            yield child.tail


def placeholder(name: str) -> Text:
    """Return the visible token used for content that cannot be mapped."""
    logger.warning("Unsupported doc-comment node: %s", name)
    return Text("???" + name)


def markup_from_xml(node: XmlNode) -> Markup:
    """Convert one doc-comment node (text run or element) into Markup."""
    if isinstance(node, str):
        return Text(WHITESPACE_RE.sub(" ", node))

    tag = node.tag if isinstance(node.tag, str) else "node"
    converter = CONVERTERS.get(tag)
    if converter is None:
        return placeholder(tag)
    return converter(node)


def children_markup(element: Element | None) -> list[Markup]:
    """Convert the content of ``element``; ``None`` gives no markup."""
    if element is None:
        return []
    return [markup_from_xml(n) for n in iter_xml_nodes(element)]


def code_block(code: str) -> CodeBlock:
    """Build a code block with surrounding blank space and indentation trimmed."""
    return CodeBlock("\n".join(line.strip() for line in code.strip().split("\n")))


def _see(e: Element) -> Markup:
    if e.get("cref"):
        return Link(Unresolved(Xref.from_cref(e)))
    href = e.get("href")
    if href:
        title = WHITESPACE_RE.sub(" ", "".join(e.itertext())).strip() or href
        return Link(Resolved(title, href))
    langword = e.get("langword")
    if langword:
        return InlineCode(langword)
    return placeholder("see")


def _para(e: Element) -> Markup:
    return Paragraph(Seq(tuple(children_markup(e))))


def _inline_code(e: Element) -> Markup:
    return InlineCode("".join(e.itertext()))


def _code(e: Element) -> Markup:
    return code_block("".join(e.itertext()))


def _name_ref(e: Element) -> Markup:
    name = e.get("name")
    if not name:
        return placeholder(e.tag)
    return InlineCode(name)


def _example(e: Element) -> Markup:
    body = children_markup(e)
    name = e.get("name")
    if name:
        body.insert(0, header(name, 3))
    return Seq(tuple(body))


def _list(e: Element) -> Markup:
    items = []
    for item in e.findall("item"):
        description = item.find("description")
        content = description if description is not None else item
        items.append(Seq(tuple(children_markup(content))))
    return BulletList(tuple(items))


CONVERTERS = {
    "see": _see,
    "para": _para,
    "c": _inline_code,
    "code": _code,
    "paramref": _name_ref,
    "typeparamref": _name_ref,
    "example": _example,
    "list": _list,
}
