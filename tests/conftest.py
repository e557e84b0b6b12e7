"""Shared fixtures: a small ``NS`` namespace with a documented ``Widget``."""

import pytest

from docbuilder.doc_comments import DocCommentIndex
from docbuilder.symbols import (
    ConstructorSymbol,
    FieldSymbol,
    MethodSymbol,
    Parameter,
    PropertySymbol,
    TypeRef,
    TypeSymbol,
)

INT = TypeRef("System.Int32")


def make_widget(**overrides: object) -> TypeSymbol:
    """Create ``NS.Widget`` with a single public ``Render()`` method."""
    values: dict[str, object] = {
        "namespace": "NS",
        "name": "Widget",
        "kind": "class",
        "methods": (MethodSymbol("Render"),),
    }
    values.update(overrides)
    return TypeSymbol(**values)  # type: ignore[arg-type]


@pytest.fixture
def widget() -> TypeSymbol:
    """The minimal Widget type."""
    return make_widget()


@pytest.fixture
def widget_docs() -> DocCommentIndex:
    """Doc comments for the Widget type and its Render method."""
    return DocCommentIndex.from_fragments(
        {
            "T:NS.Widget": (
                "<summary>A widget. See <see cref='M:NS.Widget.Render'/>.</summary>"
                "<remarks>Widgets are <c>cheap</c>.</remarks>"
                "<seealso cref='T:System.Object'/>"
            ),
            "M:NS.Widget.Render": "<summary>Renders the widget.</summary>",
        }
    )


@pytest.fixture
def gadget() -> TypeSymbol:
    """A richer type exercising every member section."""
    return TypeSymbol(
        namespace="NS",
        name="Gadget",
        kind="class",
        constructors=(
            ConstructorSymbol(),
            ConstructorSymbol(parameters=(Parameter("size", INT),)),
            ConstructorSymbol(visibility="private"),
            ConstructorSymbol(is_static=True, visibility="private"),
        ),
        methods=(
            MethodSymbol("Spin", parameters=(Parameter("times", INT),)),
            MethodSymbol("get_Size", is_special_name=True),
            MethodSymbol("ToString", is_inherited=True),
            MethodSymbol("Helper", visibility="internal"),
        ),
        properties=(PropertySymbol("Size", INT),),
        fields=(FieldSymbol("MaxSize", INT, is_static=True), FieldSymbol("_size", INT, visibility="private")),
    )
