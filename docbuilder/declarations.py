"""Render C#-like declarations for the "Declaration" section of type pages."""

from docbuilder.names import parameter_name, strip_arity, type_ref_name
from docbuilder.symbols import GenericParameter, TypeSymbol

# Base types implied by the kind keyword.
IMPLICIT_BASES = {"System.Object", "System.ValueType", "System.Enum"}


def _generic_declaration(name: str, params: tuple[GenericParameter, ...]) -> str:
    if not params:
        return strip_arity(name)
    rendered = [f"{p.variance} {p.name}" if p.variance else p.name for p in params]
    return f"{strip_arity(name)}<{', '.join(rendered)}>"


def _constraint_clauses(params: tuple[GenericParameter, ...]) -> list[str]:
    return [
        f"    where {p.name} : {', '.join(p.constraints)}"
        for p in params
        if p.constraints
    ]


def _modifiers(type_symbol: TypeSymbol) -> list[str]:
    if type_symbol.kind != "class":
        return []
    if type_symbol.is_static:
        return ["static"]
    if type_symbol.is_abstract:
        return ["abstract"]
    if type_symbol.is_sealed:
        return ["sealed"]
    return []


def type_declaration(type_symbol: TypeSymbol) -> str:
    """Return the declaration of a type; an explicit one takes precedence."""
    if type_symbol.declaration:
        return type_symbol.declaration.strip()

    name = _generic_declaration(type_symbol.name, type_symbol.generic_parameters)
    constraints = _constraint_clauses(type_symbol.generic_parameters)

    if type_symbol.is_delegate:
        invoke = next((m for m in type_symbol.methods if m.name == "Invoke"), None)
        returns = type_ref_name(invoke.return_type) if invoke else "void"
        params = ", ".join(parameter_name(p) for p in invoke.parameters) if invoke else ""
        head = f"{type_symbol.visibility} delegate {returns} {name}({params})"
        return "\n".join([head, *constraints]) + ";"

    words = [type_symbol.visibility, *_modifiers(type_symbol), type_symbol.kind, name]
    head = " ".join(words)

    bases = []
    base = type_symbol.base_type
    if base is not None and base.full_name not in IMPLICIT_BASES:
        bases.append(type_ref_name(base))
    bases.extend(type_ref_name(i) for i in type_symbol.interfaces)
    if bases:
        head += " : " + ", ".join(bases)

    return "\n".join([head, *constraints])
