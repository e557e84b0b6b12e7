"""Format-agnostic documentation content tree and its generic traversals.

The node set is closed. Every traversal (child count, child access, child
replacement) is an exhaustive match over it, so adding a node kind without
teaching these functions about it fails loudly instead of silently skipping
children.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, replace
from typing import TypeVar, Union

from docbuilder.xref import Xref

R = TypeVar("R")


# -----------------------------
# References
# -----------------------------


@dataclass(frozen=True)
class Unresolved:
    """A reference that is not tied to a location yet."""

    xref: Xref


@dataclass(frozen=True)
class Resolved:
    """A reference with a display title and a relative or absolute URL."""

    title: str
    url: str


Reference = Union[Unresolved, Resolved]


# -----------------------------
# Nodes
# -----------------------------


@dataclass(frozen=True)
class Nil:
    """Empty content."""


@dataclass(frozen=True)
class Seq:
    """Ordered sequence of nodes."""

    values: tuple[Markup, ...] = ()


@dataclass(frozen=True)
class SectionHeader:
    """A heading with nested title content and an optional anchor id."""

    title: Markup
    level: int
    id: str | None = None


@dataclass(frozen=True)
class Paragraph:
    """A paragraph wrapping one child."""

    content: Markup


@dataclass(frozen=True)
class Text:
    """Plain text."""

    value: str


@dataclass(frozen=True)
class InlineCode:
    """Inline code span."""

    code: str


@dataclass(frozen=True)
class CodeBlock:
    """Fenced code block."""

    code: str


@dataclass(frozen=True)
class Link:
    """A link to a (possibly unresolved) reference."""

    reference: Reference


@dataclass(frozen=True)
class BulletList:
    """Bulleted list; each item is a node."""

    items: tuple[Markup, ...] = ()


Markup = Union[Nil, Seq, SectionHeader, Paragraph, Text, InlineCode, CodeBlock, Link, BulletList]

LEAF_TYPES = (Nil, Text, InlineCode, CodeBlock, Link)


def seq(*values: Markup) -> Seq:
    """Build a sequence node from positional children."""
    return Seq(tuple(values))


def header(title: str | Markup, level: int, anchor: str | None = None) -> SectionHeader:
    """Build a section header, wrapping plain strings in ``Text``."""
    return SectionHeader(Text(title) if isinstance(title, str) else title, level, anchor)


def prepend_if_not_empty(head: Markup, items: Iterable[Markup]) -> list[Markup]:
    """Return ``[head, *items]``, or ``[]`` when there are no items."""
    items = list(items)
    return [head, *items] if items else []


# -----------------------------
# Generic child access
# -----------------------------


def count_children(markup: Markup) -> int:
    """Return the number of children, fixed by node kind."""
    if isinstance(markup, Seq):
        return len(markup.values)
    if isinstance(markup, BulletList):
        return len(markup.items)
    if isinstance(markup, (Paragraph, SectionHeader)):
        return 1
    if isinstance(markup, LEAF_TYPES):
        return 0
    msg = f"Unknown markup node: {markup!r}"
    raise TypeError(msg)


def get_children(markup: Markup) -> tuple[Markup, ...]:
    """Return the children in order."""
    if isinstance(markup, Seq):
        return markup.values
    if isinstance(markup, BulletList):
        return markup.items
    if isinstance(markup, Paragraph):
        return (markup.content,)
    if isinstance(markup, SectionHeader):
        return (markup.title,)
    if isinstance(markup, LEAF_TYPES):
        return ()
    msg = f"Unknown markup node: {markup!r}"
    raise TypeError(msg)


def with_children(markup: Markup, children: Sequence[Markup]) -> Markup:
    """Return a node of the same kind with its children replaced."""
    expected = count_children(markup)
    if not isinstance(markup, (Seq, BulletList)) and len(children) != expected:
        msg = f"{type(markup).__name__} takes {expected} children, got {len(children)}"
        raise ValueError(msg)

    if isinstance(markup, Seq):
        return replace(markup, values=tuple(children))
    if isinstance(markup, BulletList):
        return replace(markup, items=tuple(children))
    if isinstance(markup, Paragraph):
        return replace(markup, content=children[0])
    if isinstance(markup, SectionHeader):
        return replace(markup, title=children[0])
    return markup


# -----------------------------
# Traversals
# -----------------------------


async def rewrite(
    markup: Markup,
    transform: Callable[[Markup], Awaitable[Markup]],
) -> Markup:
    """Rewrite a tree bottom-up with an async transform.

    Children are rewritten first, depth-first and left to right; child ``i``
    (with all of its descendants) finishes before child ``i + 1`` starts. The
    node, rebuilt with its new children, is then passed to ``transform`` and
    the result replaces it. Leaves go through ``transform`` as well.
    """
    children = get_children(markup)
    if children:
        new_children = [await rewrite(child, transform) for child in children]
        markup = with_children(markup, new_children)
    return await transform(markup)


def fold_up(markup: Markup, combine: Callable[[list[R], Markup], R]) -> R:
    """Reduce a tree bottom-up: ``combine(child_results, node)`` per node."""
    results = [fold_up(child, combine) for child in get_children(markup)]
    return combine(results, markup)


def iter_nodes(markup: Markup) -> Iterable[Markup]:
    """Yield every node in pre-order."""
    yield markup
    for child in get_children(markup):
        yield from iter_nodes(child)
