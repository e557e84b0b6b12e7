"""Stable string identities ("Xrefs") for documentable symbols.

The scheme matches the IDs the C# compiler writes into XML documentation
files, so identities computed from symbol metadata line up with the ``cref``
and ``name`` attributes of doc comments without any shared registry:

- ``T:Namespace.Outer.Inner`1`` for types,
- ``P:``/``F:`` + declaring type + ``.`` + member name,
- ``M:`` + declaring type + ``.`` + name + generic arity + parameter list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from docbuilder.errors import MalformedDocCommentError

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

    from docbuilder.symbols import (
        ConstructorSymbol,
        FieldSymbol,
        MethodSymbol,
        PropertySymbol,
        TypeRef,
        TypeSymbol,
    )

# Stuff between square brackets (assembly-qualified generic arguments).
BRACKETED_RE = re.compile(r"\[.*\]")
GENERIC_ARITY_RE = re.compile(r"(`|``)\d+")

CONSTRUCTOR_NAME = "#ctor"
STATIC_CONSTRUCTOR_NAME = "#cctor"

PARAM_SUFFIXES = {"array": "[]", "pointer": "*", "byref": "@"}


@dataclass(frozen=True, order=True)
class Xref:
    """Identity of a documentable symbol, e.g. ``M:NS.Widget.Render``."""

    value: str

    def __str__(self) -> str:
        """Return the raw identity string."""
        return self.value

    @property
    def stripped(self) -> str:
        """Return the identity without its ``X:`` kind prefix."""
        return self.value[2:] if self.value[1:2] == ":" else self.value

    @classmethod
    def from_name(cls, element: Element) -> Xref:
        """Build an Xref from a doc-file ``<member name="...">`` element."""
        return cls(_required_attribute(element, "name"))

    @classmethod
    def from_cref(cls, element: Element) -> Xref:
        """Build an Xref from a ``cref`` attribute (``<see>``, ``<seealso>``)."""
        return cls(_required_attribute(element, "cref"))


def _required_attribute(element: Element, attribute: str) -> str:
    value = element.get(attribute)
    if not value:
        msg = f"<{element.tag}> has no {attribute!r} attribute"
        raise MalformedDocCommentError(msg)
    return value


def type_xref_name(full_name: str) -> str:
    """Normalize a CLR full name: drop bracketed content, ``+`` -> ``.``."""
    return BRACKETED_RE.sub("", full_name).replace("+", ".")


def xref_for_type(type_symbol: TypeSymbol) -> Xref:
    """Return the ``T:`` identity of a type."""
    return Xref("T:" + type_xref_name(type_symbol.full_name))


def xref_for_property(declaring: TypeSymbol, prop: PropertySymbol) -> Xref:
    """Return the ``P:`` identity of a property."""
    return Xref(f"P:{type_xref_name(declaring.full_name)}.{prop.name}")


def xref_for_field(declaring: TypeSymbol, field: FieldSymbol) -> Xref:
    """Return the ``F:`` identity of a field."""
    return Xref(f"F:{type_xref_name(declaring.full_name)}.{field.name}")


def xref_for_method(declaring: TypeSymbol, method: MethodSymbol) -> Xref:
    """Return the ``M:`` identity of a method."""
    generic_suffix = (
        f"``{len(method.generic_parameters)}" if method.generic_parameters else ""
    )
    return _method_xref(
        declaring, method.name + generic_suffix, [p.type for p in method.parameters]
    )


def xref_for_constructor(declaring: TypeSymbol, ctor: ConstructorSymbol) -> Xref:
    """Return the ``M:`` identity of a constructor."""
    name = STATIC_CONSTRUCTOR_NAME if ctor.is_static else CONSTRUCTOR_NAME
    return _method_xref(declaring, name, [p.type for p in ctor.parameters])


def _method_xref(declaring: TypeSymbol, name: str, param_types: list[TypeRef]) -> Xref:
    params = ",".join(param_type_name(t) for t in param_types)
    params_suffix = f"({params})" if params else ""
    return Xref(f"M:{type_xref_name(declaring.full_name)}.{name}{params_suffix}")


def param_type_name(type_ref: TypeRef) -> str:
    """Encode a parameter type the way doc-comment IDs do."""
    if type_ref.element is not None:
        suffix = PARAM_SUFFIXES.get(type_ref.modifier or "")
        if suffix is None:
            msg = f"Unknown type modifier: {type_ref.modifier!r}"
            raise ValueError(msg)
        return param_type_name(type_ref.element) + suffix

    if type_ref.generic_position is not None:
        prefix = "``" if type_ref.is_method_parameter else "`"
        return f"{prefix}{type_ref.generic_position}"

    if type_ref.generic_args:
        open_name = GENERIC_ARITY_RE.sub("", type_xref_name(type_ref.full_name))
        args = ",".join(param_type_name(a) for a in type_ref.generic_args)
        return open_name + "{" + args + "}"

    return type_xref_name(type_ref.full_name)
