"""Render documentation pages as Markdown."""

import re

from docbuilder.documentation_page import DocumentationPage
from docbuilder.markup import (
    BulletList,
    CodeBlock,
    InlineCode,
    Link,
    Markup,
    Nil,
    Paragraph,
    Resolved,
    SectionHeader,
    Seq,
    Text,
    Unresolved,
    fold_up,
)

CODE_LANGUAGE = "csharp"
BLANK_LINES_RE = re.compile(r"\n{3,}")


def md_codeblock(lang: str, code: str) -> str:
    """Generate a Markdown code block."""
    return f"```{lang}\n{code.rstrip()}\n```"


def md_link(reference: Resolved | Unresolved) -> str:
    """Render a reference; unresolved ones are visibly flagged."""
    if isinstance(reference, Resolved):
        return f"[{reference.title}]({reference.url})"
    return f'[⚠ {reference.xref}](#unresolved "Unresolved reference")'


def _block(text: str) -> str:
    return f"\n\n{text.strip()}\n\n"


def _render_node(children: list[str], node: Markup) -> str:
    if isinstance(node, Nil):
        return ""
    if isinstance(node, Seq):
        return "".join(children)
    if isinstance(node, SectionHeader):
        heading = "#" * node.level + " " + " ".join(children[0].split())
        if node.id:
            heading = f'<a id="{node.id}"></a>\n\n{heading}'
        return _block(heading)
    if isinstance(node, Paragraph):
        return _block(children[0])
    if isinstance(node, Text):
        return node.value
    if isinstance(node, InlineCode):
        return f"`{node.code}`"
    if isinstance(node, CodeBlock):
        return _block(md_codeblock(CODE_LANGUAGE, node.code))
    if isinstance(node, Link):
        return md_link(node.reference)
    if isinstance(node, BulletList):
        return _block("\n".join("- " + " ".join(item.split()) for item in children))
    msg = f"Unknown markup node: {node!r}"
    raise TypeError(msg)


def render_markup(markup: Markup) -> str:
    """Render a markup tree to Markdown text."""
    text = fold_up(markup, _render_node)
    return BLANK_LINES_RE.sub("\n\n", text).strip()


def render_page(page: DocumentationPage, title_suffix: str = "") -> str:
    """Render a full page: title heading followed by the body."""
    body = render_markup(page.body)
    parts = [f"# {page.title}{title_suffix}"]
    if body:
        parts.append(body)
    return "\n\n".join(parts) + "\n"
