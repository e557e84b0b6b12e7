"""Load symbol descriptions from a YAML symbol file.

A symbol file lists assemblies; each has its exported types and either a
compiler-generated XML doc file (``doc_file``, relative to the symbol file) or
inline ``docs`` mapping Xrefs to doc-comment XML::

    assemblies:
      - name: Widgets
        doc_file: Widgets.xml
        types:
          - namespace: NS
            name: Widget
            kind: class
            methods:
              - name: Render

A file with a top-level ``types`` list is treated as a single assembly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, NamedTuple

import yaml

from docbuilder.doc_comments import DocCommentIndex
from docbuilder.errors import SymbolSourceError
from docbuilder.symbols import (
    TYPE_KINDS,
    ConstructorSymbol,
    FieldSymbol,
    GenericParameter,
    MethodSymbol,
    Parameter,
    PropertySymbol,
    TypeRef,
    TypeSymbol,
)

logger = logging.getLogger(__name__)

TYPE_MODIFIERS = ("array", "pointer", "byref")


class SymbolSet(NamedTuple):
    """The exported types of one assembly and its doc comments."""

    types: list[TypeSymbol]
    docs: DocCommentIndex


def parse_type_ref(raw: Any) -> TypeRef:
    """Parse a signature type: a full name, or a mapping for the other shapes."""
    if isinstance(raw, str):
        return TypeRef(raw)
    if not isinstance(raw, dict):
        msg = f"Invalid type reference: {raw!r}"
        raise SymbolSourceError(msg)

    for modifier in TYPE_MODIFIERS:
        if modifier in raw:
            return TypeRef(element=parse_type_ref(raw[modifier]), modifier=modifier)

    if "generic_parameter" in raw:
        return TypeRef(
            generic_position=int(raw["generic_parameter"]),
            is_method_parameter=bool(raw.get("method", False)),
            name=str(raw.get("name") or ""),
        )

    if "name" not in raw:
        msg = f"Type reference needs a name: {raw!r}"
        raise SymbolSourceError(msg)
    return TypeRef(
        str(raw["name"]),
        generic_args=tuple(parse_type_ref(a) for a in raw.get("arguments") or []),
    )


def _generic_parameters(raw: list[Any] | None) -> tuple[GenericParameter, ...]:
    params = []
    for p in raw or []:
        if isinstance(p, str):
            params.append(GenericParameter(p))
        else:
            params.append(
                GenericParameter(
                    name=str(p["name"]),
                    variance=p.get("variance"),
                    constraints=tuple(str(c) for c in p.get("constraints") or []),
                )
            )
    return tuple(params)


def _parameters(raw: list[dict[str, Any]] | None) -> tuple[Parameter, ...]:
    return tuple(Parameter(str(p["name"]), parse_type_ref(p["type"])) for p in raw or [])


def _member_flags(raw: dict[str, Any]) -> dict[str, Any]:
    return {
        "visibility": str(raw.get("visibility", "public")),
        "is_static": bool(raw.get("static", False)),
        "is_special_name": bool(raw.get("special_name", False)),
        "is_inherited": bool(raw.get("inherited", False)),
    }


def _constructor(raw: dict[str, Any]) -> ConstructorSymbol:
    return ConstructorSymbol(
        parameters=_parameters(raw.get("parameters")),
        visibility=str(raw.get("visibility", "public")),
        is_static=bool(raw.get("static", False)),
    )


def _method(raw: dict[str, Any]) -> MethodSymbol:
    return MethodSymbol(
        name=str(raw["name"]),
        parameters=_parameters(raw.get("parameters")),
        return_type=parse_type_ref(raw.get("returns", "System.Void")),
        generic_parameters=_generic_parameters(raw.get("generic_parameters")),
        **_member_flags(raw),
    )


def _property(raw: dict[str, Any]) -> PropertySymbol:
    return PropertySymbol(
        name=str(raw["name"]),
        type=parse_type_ref(raw.get("type", "System.Object")),
        **_member_flags(raw),
    )


def _field(raw: dict[str, Any]) -> FieldSymbol:
    return FieldSymbol(
        name=str(raw["name"]),
        type=parse_type_ref(raw.get("type", "System.Object")),
        **_member_flags(raw),
    )


def parse_type(raw: dict[str, Any]) -> TypeSymbol:
    """Parse one exported type description."""
    kind = str(raw.get("kind", "class")).lower()
    if kind not in TYPE_KINDS:
        msg = f"Unknown kind {kind!r} for type {raw.get('name')!r}"
        raise SymbolSourceError(msg)

    try:
        base = raw.get("base_type")
        return TypeSymbol(
            namespace=raw.get("namespace") or None,
            name=str(raw["name"]),
            kind=kind,
            declaring_type=raw.get("declaring_type"),
            base_type=parse_type_ref(base) if base else None,
            interfaces=tuple(parse_type_ref(i) for i in raw.get("interfaces") or []),
            generic_parameters=_generic_parameters(raw.get("generic_parameters")),
            visibility=str(raw.get("visibility", "public")),
            is_abstract=bool(raw.get("abstract", False)),
            is_sealed=bool(raw.get("sealed", False)),
            is_static=bool(raw.get("static", False)),
            declaration=raw.get("declaration"),
            constructors=tuple(_constructor(c) for c in raw.get("constructors") or []),
            methods=tuple(_method(m) for m in raw.get("methods") or []),
            properties=tuple(_property(p) for p in raw.get("properties") or []),
            fields=tuple(_field(f) for f in raw.get("fields") or []),
        )
    except (KeyError, TypeError, ValueError) as e:
        msg = f"Invalid description of type {raw.get('name')!r}: {e}"
        raise SymbolSourceError(msg) from e


def _load_docs(raw: dict[str, Any], base_dir: Path) -> DocCommentIndex:
    if raw.get("doc_file"):
        return DocCommentIndex.load(base_dir / str(raw["doc_file"]))
    return DocCommentIndex.from_fragments(
        {str(k): str(v) for k, v in (raw.get("docs") or {}).items()}
    )


def load_symbol_file(path: Path) -> list[SymbolSet]:
    """Load every assembly described by a YAML symbol file."""
    try:
        doc = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        msg = f"Cannot read symbol file {path}: {e}"
        raise SymbolSourceError(msg) from e

    if not isinstance(doc, dict):
        msg = f"Symbol file {path} must contain a mapping"
        raise SymbolSourceError(msg)

    assemblies = doc.get("assemblies")
    if assemblies is None:
        assemblies = [doc]

    symbol_sets = []
    for asm in assemblies:
        types = [parse_type(t) for t in asm.get("types") or []]
        docs = _load_docs(asm, path.parent)
        logger.info("Loaded %d types from %s", len(types), asm.get("name", path.name))
        symbol_sets.append(SymbolSet(types, docs))
    return symbol_sets
