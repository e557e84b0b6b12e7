"""Tests for building type and namespace pages."""

from docbuilder.doc_comments import DocCommentIndex
from docbuilder.documentation_page import build_namespace_page, build_type_page
from docbuilder.markup import (
    BulletList,
    CodeBlock,
    Link,
    Resolved,
    SectionHeader,
    Seq,
    Text,
    Unresolved,
    header,
    iter_nodes,
)
from docbuilder.symbols import TypeSymbol
from docbuilder.xref import Xref


def section_ids(page_body: Seq) -> list[str | None]:
    """Return the anchors of the level-2 headers, in order."""
    return [
        node.id
        for node in page_body.values
        if isinstance(node, SectionHeader) and node.level == 2
    ]


def test_widget_page(widget: TypeSymbol, widget_docs: DocCommentIndex) -> None:
    """The Widget page has a Methods section with the Render entry."""
    page = build_type_page(widget, widget_docs)

    assert page.title == "Widget"
    assert page.url == "Widget.html"
    assert isinstance(page.body, Seq)
    assert section_ids(page.body) == ["summary", "declaration", "remarks", "methods", "seealso"]
    assert header("Render()", 3, "Render__") in page.body.values
    assert page.contained_references == {
        Xref("T:NS.Widget"): Resolved("Widget", "Widget.html"),
        Xref("M:NS.Widget.Render"): Resolved("Render()", "Widget.html#Render__"),
    }


def test_widget_page_content(widget: TypeSymbol, widget_docs: DocCommentIndex) -> None:
    """Summary, declaration, remarks and see-also content are included."""
    page = build_type_page(widget, widget_docs)
    nodes = list(iter_nodes(page.body))

    assert Text("Renders the widget.") in nodes
    assert CodeBlock("public class Widget") in nodes
    assert Link(Unresolved(Xref("M:NS.Widget.Render"))) in nodes
    assert BulletList((Link(Unresolved(Xref("T:System.Object"))),)) in nodes


def test_section_order(gadget: TypeSymbol) -> None:
    """Member sections follow constructors, methods, properties, fields."""
    docs = DocCommentIndex.from_fragments(
        {
            "T:NS.Gadget": "<summary>G.</summary><example>Use it.</example>",
        }
    )
    page = build_type_page(gadget, docs)
    assert isinstance(page.body, Seq)
    assert section_ids(page.body) == [
        "summary",
        "declaration",
        "examples",
        "constructors",
        "methods",
        "properties",
        "fields",
    ]
    assert set(page.contained_references) == {
        Xref("T:NS.Gadget"),
        Xref("M:NS.Gadget.#ctor"),
        Xref("M:NS.Gadget.#ctor(System.Int32)"),
        Xref("M:NS.Gadget.Spin(System.Int32)"),
        Xref("P:NS.Gadget.Size"),
        Xref("F:NS.Gadget.MaxSize"),
    }
    assert page.contained_references[Xref("P:NS.Gadget.Size")] == Resolved(
        "Size", "Gadget.html#Size"
    )


def test_undocumented_type_page(widget: TypeSymbol) -> None:
    """Without doc comments only the declaration and member headers remain."""
    page = build_type_page(widget, DocCommentIndex(), page_extension=".md")
    assert page.url == "Widget.md"
    assert isinstance(page.body, Seq)
    assert section_ids(page.body) == ["declaration", "methods"]
    assert page.contained_references[Xref("M:NS.Widget.Render")].url == "Widget.md#Render__"


def test_malformed_see_also_is_placeholder(widget: TypeSymbol) -> None:
    """A see-also entry without a target is shown, not fatal."""
    docs = DocCommentIndex.from_fragments({"T:NS.Widget": "<seealso/>"})
    page = build_type_page(widget, docs)
    assert BulletList((Text("???seealso"),)) in list(iter_nodes(page.body))


def test_namespace_page(widget: TypeSymbol, widget_docs: DocCommentIndex) -> None:
    """Namespace pages group types by kind and declare no Xrefs."""
    types = [
        TypeSymbol(namespace="NS", name="IShape", kind="interface"),
        widget,
        TypeSymbol(namespace="NS", name="Color", kind="enum"),
    ]
    page = build_namespace_page("NS", types, widget_docs)

    assert page.title == "NS"
    assert page.url == "NS.html"
    assert page.contained_references == {}
    assert isinstance(page.body, Seq)
    assert section_ids(page.body) == ["classes", "interfaces", "enums"]
    links = [n for n in iter_nodes(page.body) if isinstance(n, Link)]
    assert links[0] == Link(Unresolved(Xref("T:NS.Widget")))
