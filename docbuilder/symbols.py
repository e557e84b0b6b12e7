"""Data models describing the API symbols handed over by a symbol source."""

from __future__ import annotations

from dataclasses import dataclass, field

TYPE_KINDS = ("class", "interface", "delegate", "enum", "struct")


@dataclass(frozen=True)
class TypeRef:
    """A type as it appears in a signature.

    Exactly one shape applies: an element type wrapped by ``modifier``
    (``array``, ``pointer`` or ``byref``), a generic parameter position, or a
    named type (optionally constructed with ``generic_args``).
    """

    full_name: str = ""  # CLR name, e.g. System.Collections.Generic.List`1
    generic_args: tuple[TypeRef, ...] = ()
    element: TypeRef | None = None
    modifier: str | None = None
    generic_position: int | None = None
    is_method_parameter: bool = False
    name: str = ""  # generic parameter name, e.g. T

    @property
    def short_name(self) -> str:
        """Return the name without namespace or declaring types."""
        return self.full_name.rsplit(".", 1)[-1].rsplit("+", 1)[-1]


@dataclass(frozen=True)
class GenericParameter:
    """A generic type or method parameter."""

    name: str
    variance: str | None = None  # "in" / "out"
    constraints: tuple[str, ...] = ()


@dataclass(frozen=True)
class Parameter:
    """A method or constructor parameter."""

    name: str
    type: TypeRef


@dataclass(frozen=True)
class ConstructorSymbol:
    """A constructor declared on a type."""

    parameters: tuple[Parameter, ...] = ()
    visibility: str = "public"
    is_static: bool = False


@dataclass(frozen=True)
class MethodSymbol:
    """A method declared on, or inherited by, a type."""

    name: str
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeRef = field(default_factory=lambda: TypeRef("System.Void"))
    generic_parameters: tuple[GenericParameter, ...] = ()
    visibility: str = "public"
    is_static: bool = False
    is_special_name: bool = False
    is_inherited: bool = False


@dataclass(frozen=True)
class PropertySymbol:
    """A property declared on, or inherited by, a type."""

    name: str
    type: TypeRef = field(default_factory=lambda: TypeRef("System.Object"))
    visibility: str = "public"
    is_static: bool = False
    is_special_name: bool = False
    is_inherited: bool = False


@dataclass(frozen=True)
class FieldSymbol:
    """A field declared on, or inherited by, a type."""

    name: str
    type: TypeRef = field(default_factory=lambda: TypeRef("System.Object"))
    visibility: str = "public"
    is_static: bool = False
    is_special_name: bool = False
    is_inherited: bool = False


@dataclass(frozen=True)
class TypeSymbol:
    """An exported type together with its members."""

    namespace: str | None
    name: str  # CLR name including arity marker, e.g. Result`2
    kind: str  # class / interface / delegate / enum / struct
    declaring_type: str | None = None  # CLR full name of the outer type
    base_type: TypeRef | None = None
    interfaces: tuple[TypeRef, ...] = ()
    generic_parameters: tuple[GenericParameter, ...] = ()
    visibility: str = "public"
    is_abstract: bool = False
    is_sealed: bool = False
    is_static: bool = False
    declaration: str | None = None
    constructors: tuple[ConstructorSymbol, ...] = ()
    methods: tuple[MethodSymbol, ...] = ()
    properties: tuple[PropertySymbol, ...] = ()
    fields: tuple[FieldSymbol, ...] = ()

    @property
    def full_name(self) -> str:
        """Return the CLR full name (``+`` separates nested types)."""
        if self.declaring_type:
            return f"{self.declaring_type}+{self.name}"
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name

    @property
    def is_delegate(self) -> bool:
        """Whether the type is a delegate."""
        return self.kind == "delegate"
