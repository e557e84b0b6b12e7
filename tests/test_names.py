"""Tests for display names, URL names and declarations."""

from docbuilder.declarations import type_declaration
from docbuilder.names import (
    constructor_name,
    member_anchor,
    method_name,
    namespace_page_stem,
    type_name,
    type_page_stem,
    type_ref_name,
)
from docbuilder.symbols import (
    ConstructorSymbol,
    GenericParameter,
    MethodSymbol,
    Parameter,
    TypeRef,
    TypeSymbol,
)

INT = TypeRef("System.Int32")


def test_type_ref_names() -> None:
    """Primitive aliases, generics, arrays and generic parameters."""
    assert type_ref_name(INT) == "int"
    assert type_ref_name(TypeRef("NS.Widget")) == "Widget"
    assert type_ref_name(TypeRef(element=INT, modifier="array")) == "int[]"
    assert type_ref_name(TypeRef(element=INT, modifier="byref")) == "ref int"
    assert type_ref_name(TypeRef(generic_position=0, name="T")) == "T"
    func = TypeRef("System.Func`2", generic_args=(INT, TypeRef("System.String")))
    assert type_ref_name(func) == "Func<int, string>"


def test_type_and_member_names() -> None:
    """Generic types list their parameters; methods list typed parameters."""
    result = TypeSymbol(
        namespace="NS",
        name="Result`2",
        kind="struct",
        generic_parameters=(GenericParameter("T"), GenericParameter("TError")),
    )
    assert type_name(result) == "Result<T, TError>"

    method = MethodSymbol(
        "Map",
        generic_parameters=(GenericParameter("U"),),
        parameters=(Parameter("count", INT),),
    )
    assert method_name(method) == "Map<U>(int count)"
    assert method_name(MethodSymbol("Render")) == "Render()"
    ctor = ConstructorSymbol(parameters=(Parameter("size", INT),))
    assert constructor_name(result, ctor) == "Result(int size)"


def test_url_names() -> None:
    """Page stems are namespace-relative; anchors keep only safe characters."""
    nested = TypeSymbol(namespace="NS", name="Inner`1", kind="class", declaring_type="NS.Outer")
    assert type_page_stem(nested) == "Outer.Inner-1"
    assert type_page_stem(TypeSymbol(namespace=None, name="Global", kind="class")) == "Global"
    assert namespace_page_stem("NS.Sub") == "NS.Sub"
    assert member_anchor("Render()") == "Render__"
    assert member_anchor("Map<U>(int count)") == "Map_U__int_count_"


def test_class_declaration() -> None:
    """Classes list modifiers, variance, bases and constraints."""
    widget = TypeSymbol(
        namespace="NS",
        name="Cache`1",
        kind="class",
        is_sealed=True,
        base_type=TypeRef("NS.CacheBase"),
        interfaces=(TypeRef("System.IDisposable"),),
        generic_parameters=(GenericParameter("T", constraints=("class", "new()")),),
    )
    assert type_declaration(widget) == (
        "public sealed class Cache<T> : CacheBase, IDisposable\n    where T : class, new()"
    )


def test_implicit_bases_are_omitted() -> None:
    """object, ValueType and Enum bases are implied by the keyword."""
    plain = TypeSymbol(namespace="NS", name="Plain", kind="class", base_type=TypeRef("System.Object"))
    assert type_declaration(plain) == "public class Plain"
    color = TypeSymbol(namespace="NS", name="Color", kind="enum", base_type=TypeRef("System.Enum"))
    assert type_declaration(color) == "public enum Color"


def test_interface_variance() -> None:
    """Variance annotations appear on interface parameters."""
    source = TypeSymbol(
        namespace="NS",
        name="ISource`1",
        kind="interface",
        generic_parameters=(GenericParameter("T", variance="out"),),
    )
    assert type_declaration(source) == "public interface ISource<out T>"


def test_delegate_declaration_uses_invoke() -> None:
    """Delegates are declared through their Invoke signature."""
    handler = TypeSymbol(
        namespace="NS",
        name="Handler",
        kind="delegate",
        methods=(MethodSymbol("Invoke", parameters=(Parameter("code", INT),), return_type=INT),),
    )
    assert type_declaration(handler) == "public delegate int Handler(int code);"


def test_explicit_declaration_wins() -> None:
    """A declaration provided by the symbol source is used verbatim."""
    widget = TypeSymbol(namespace="NS", name="W", kind="class", declaration="  public record W;  ")
    assert type_declaration(widget) == "public record W;"
