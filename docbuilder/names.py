"""Display names and URL-safe names for types and members."""

import re

from docbuilder.symbols import ConstructorSymbol, MethodSymbol, Parameter, TypeRef, TypeSymbol

GENERIC_ARITY_RE = re.compile(r"(`|``)\d+")
ANCHOR_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_-]")

KEYWORD_ALIASES = {
    "System.Void": "void",
    "System.Boolean": "bool",
    "System.Byte": "byte",
    "System.SByte": "sbyte",
    "System.Char": "char",
    "System.Int16": "short",
    "System.UInt16": "ushort",
    "System.Int32": "int",
    "System.UInt32": "uint",
    "System.Int64": "long",
    "System.UInt64": "ulong",
    "System.IntPtr": "nint",
    "System.UIntPtr": "nuint",
    "System.Single": "float",
    "System.Double": "double",
    "System.Decimal": "decimal",
    "System.Object": "object",
    "System.String": "string",
}


def strip_arity(name: str) -> str:
    """Drop generic arity markers: ``List`1`` -> ``List``."""
    return GENERIC_ARITY_RE.sub("", name)


def type_ref_name(type_ref: TypeRef) -> str:
    """Return the C#-style display name of a signature type."""
    if type_ref.element is not None:
        inner = type_ref_name(type_ref.element)
        if type_ref.modifier == "array":
            return inner + "[]"
        if type_ref.modifier == "pointer":
            return inner + "*"
        return "ref " + inner
    if type_ref.generic_position is not None:
        return type_ref.name or f"T{type_ref.generic_position}"
    alias = KEYWORD_ALIASES.get(type_ref.full_name)
    if alias:
        return alias
    if type_ref.generic_args:
        args = ", ".join(type_ref_name(a) for a in type_ref.generic_args)
        return f"{strip_arity(type_ref.short_name)}<{args}>"
    return strip_arity(type_ref.short_name)


def type_name(type_symbol: TypeSymbol) -> str:
    """Return the display name of a type, e.g. ``Result<T, TError>``."""
    alias = KEYWORD_ALIASES.get(type_symbol.full_name)
    if alias:
        return alias
    if type_symbol.generic_parameters:
        params = ", ".join(p.name for p in type_symbol.generic_parameters)
        return f"{strip_arity(type_symbol.name)}<{params}>"
    return type_symbol.name


def parameter_name(param: Parameter) -> str:
    """Return ``type name`` for a parameter."""
    return f"{type_ref_name(param.type)} {param.name}"


def _signature(prefix: str, params: tuple[Parameter, ...]) -> str:
    return prefix + "(" + ", ".join(parameter_name(p) for p in params) + ")"


def method_name(method: MethodSymbol) -> str:
    """Return the display name of a method, e.g. ``Map<U>(Func<T, U> f)``."""
    prefix = strip_arity(method.name)
    if method.generic_parameters:
        prefix += "<" + ", ".join(p.name for p in method.generic_parameters) + ">"
    return _signature(prefix, method.parameters)


def constructor_name(declaring: TypeSymbol, ctor: ConstructorSymbol) -> str:
    """Return the display name of a constructor, named after its type."""
    return _signature(strip_arity(declaring.name), ctor.parameters)


def url_friendly(name: str) -> str:
    """Replace generic arity backticks with dashes."""
    return name.replace("``", "-").replace("`", "-")


def type_page_stem(type_symbol: TypeSymbol) -> str:
    """Return the page name of a type, relative to its namespace."""
    full_name = type_symbol.full_name
    if type_symbol.namespace:
        full_name = full_name[len(type_symbol.namespace) + 1 :]
    return url_friendly(full_name.replace("+", "."))


def namespace_page_stem(namespace: str) -> str:
    """Return the page name of a namespace."""
    return url_friendly(namespace)


def member_anchor(display_name: str) -> str:
    """Return an anchor id for a member: ``Render()`` -> ``Render__``."""
    return ANCHOR_UNSAFE_RE.sub("_", display_name)
