"""Tests for converting doc-comment XML into markup."""

import defusedxml.ElementTree as ET

from docbuilder.markup import (
    BulletList,
    CodeBlock,
    InlineCode,
    Link,
    Paragraph,
    Resolved,
    SectionHeader,
    Seq,
    Text,
    Unresolved,
)
from docbuilder.markup_from_xml import children_markup, code_block, markup_from_xml
from docbuilder.xref import Xref


def convert(xml: str) -> list:
    """Convert the content of a ``<summary>`` element."""
    return children_markup(ET.fromstring(f"<summary>{xml}</summary>"))


def test_text_whitespace_is_collapsed() -> None:
    """Runs of whitespace become single spaces."""
    assert convert("Renders\n    the   widget.") == [Text("Renders the widget.")]


def test_see_cref_becomes_unresolved_link() -> None:
    """Cross-references start out unresolved."""
    assert convert("Use <see cref='T:NS.Widget'/> here") == [
        Text("Use "),
        Link(Unresolved(Xref("T:NS.Widget"))),
        Text(" here"),
    ]


def test_see_href_and_langword() -> None:
    """External links resolve immediately; language keywords are code."""
    assert convert("<see href='https://example.com'>Example</see>") == [
        Link(Resolved("Example", "https://example.com"))
    ]
    assert convert("<see langword='null'/>") == [InlineCode("null")]


def test_inline_elements() -> None:
    """Inline code and parameter references become code spans."""
    assert convert("<c>x + 1</c> <paramref name='count'/> <typeparamref name='T'/>") == [
        InlineCode("x + 1"),
        Text(" "),
        InlineCode("count"),
        Text(" "),
        InlineCode("T"),
    ]


def test_para_wraps_sequence() -> None:
    """Paragraphs wrap their converted content."""
    assert convert("<para>First <c>x</c></para>") == [
        Paragraph(Seq((Text("First "), InlineCode("x"))))
    ]


def test_code_block_trims_indentation() -> None:
    """Code blocks drop surrounding blank lines and per-line indentation."""
    assert code_block("\n    var x = 1;\n    x++;\n  ") == CodeBlock("var x = 1;\nx++;")
    assert convert("<code>\n  a();\n  b();\n</code>") == [CodeBlock("a();\nb();")]


def test_named_example_gets_header() -> None:
    """A named example is introduced by a level-3 header."""
    example = ET.fromstring("<example name='Basic'>Call it.</example>")
    assert markup_from_xml(example) == Seq(
        (SectionHeader(Text("Basic"), 3, None), Text("Call it."))
    )


def test_list_items() -> None:
    """List items become bullet entries."""
    result = convert(
        "<list type='bullet'><item><description>One</description></item>"
        "<item><description>Two</description></item></list>"
    )
    assert result == [BulletList((Seq((Text("One"),)), Seq((Text("Two"),))))]


def test_unknown_element_renders_placeholder() -> None:
    """Unsupported constructs become a visible placeholder, not an error."""
    assert convert("<blink>hi</blink>") == [Text("???blink")]
    assert convert("<see/>") == [Text("???see")]
    assert convert("<paramref/>") == [Text("???paramref")]


def test_absent_element_gives_no_markup() -> None:
    """A missing doc element is empty markup."""
    assert children_markup(None) == []
