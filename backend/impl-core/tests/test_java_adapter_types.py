import os
import sys

import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from adapters.java_adapter import JavaAdapter, SourceUnit
from cir import builtins
from registry import TypeNotFound, TypeRegistry


def load(*sources):
    return TypeRegistry.from_sources((code, None) for code in sources)


def methods_by_name(t):
    return {m.name: m for m in t.methods}


def test_interface_methods_get_implicit_modifiers():
    code = """
    package demo;
    public interface Shape {
        double area();
        default String label() { return "shape"; }
        static Shape unit() { return null; }
    }
    """
    shape = load(code).resolve("demo.Shape")

    assert shape.kind == "interface"
    assert shape.is_interface
    assert "abstract" in shape.modifiers
    assert shape.superclass is None
    assert shape.constructors == ()

    ms = methods_by_name(shape)
    assert ms["area"].modifiers == ("public", "abstract")
    assert ms["area"].return_type is builtins.PRIMITIVES["double"]
    assert not ms["label"].is_abstract
    assert ms["label"].is_public
    assert ms["unit"].is_static
    assert not ms["unit"].is_abstract


def test_class_without_constructor_gets_default_one():
    code = """
    package demo;
    public class Visible {}
    class Hidden {}
    """
    reg = load(code)

    visible = reg.resolve("demo.Visible")
    hidden = reg.resolve("demo.Hidden")

    assert visible.superclass is builtins.OBJECT
    assert len(visible.constructors) == 1
    assert visible.constructors[0].modifiers == ("public",)
    assert visible.constructors[0].parameter_types == ()
    assert hidden.constructors[0].modifiers == ()


def test_nested_types_have_canonical_and_binary_names():
    code = """
    package demo;
    public interface Outer {
        interface Inner { void ping(); }
        class Holder { }
    }
    """
    reg = load(code)
    inner = reg.resolve("demo.Outer.Inner")

    assert inner.name == "Inner"
    assert inner.binary_name == "demo.Outer$Inner"
    assert inner.package == "demo"
    assert reg.resolve("demo.Outer$Inner") is inner

    holder = reg.resolve("demo.Outer.Holder")
    assert "public" in holder.modifiers
    assert "static" in holder.modifiers
    assert not holder.is_inner_class


def test_generics_are_erased_and_varargs_become_arrays():
    code = """
    package demo;
    public interface Box<T extends Number> {
        T get();
        <U> U map(U value);
        void put(T... items);
        java.util.List<String> names();
    }
    """
    ms = methods_by_name(load(code).resolve("demo.Box"))

    assert ms["get"].return_type.canonical_name == "java.lang.Number"
    assert ms["map"].return_type is builtins.OBJECT
    assert ms["map"].parameter_types[0] is builtins.OBJECT
    assert ms["put"].parameter_types[0].canonical_name == "java.lang.Number[]"
    assert ms["put"].parameter_types[0].is_array
    assert ms["names"].return_type.canonical_name == "java.util.List"


def test_names_resolve_through_imports_and_same_package():
    base = """
    package lib;
    public abstract class Base { }
    """
    user = """
    package app;
    import java.util.List;
    import lib.*;
    public abstract class Service extends Base {
        public abstract List<Helper> helpers() throws java.io.IOException, IllegalStateException;
    }
    """
    helper = """
    package app;
    public class Helper { }
    """
    reg = load(base, user, helper)
    service = reg.resolve("app.Service")
    m = service.methods[0]

    assert service.superclass is reg.resolve("lib.Base")
    assert m.return_type.canonical_name == "java.util.List"
    assert [e.canonical_name for e in m.exception_types] == [
        "java.io.IOException",
        "java.lang.IllegalStateException",
    ]
    assert m.declaring_type is service


def test_member_type_reference_resolves_to_enclosing_member():
    code = """
    package p;
    public class Outer {
        private static abstract class Hidden { }
        public static abstract class Visible extends Hidden { }
    }
    """
    reg = load(code)
    visible = reg.resolve("p.Outer.Visible")

    assert visible.superclass is reg.resolve("p.Outer.Hidden")
    assert visible.superclass.is_private


def test_syntax_error_raises_value_error():
    adapter = JavaAdapter()
    with pytest.raises(ValueError):
        adapter.build_types_for_code("public class {")


def test_lenient_load_skips_invalid_units():
    adapter = JavaAdapter()
    result = adapter.build_types(
        [
            SourceUnit("class Broken {", "Broken.java"),
            SourceUnit("package ok; public interface Fine { }", "Fine.java"),
        ]
    )

    assert "ok.Fine" in result.types
    assert result.errors[0]["file"] == "Broken.java"


def test_registry_resolution_rules():
    reg = load("package demo; public interface Solo { }")

    assert reg.resolve("Solo") is reg.resolve("demo.Solo")
    assert reg.resolve("int") is builtins.PRIMITIVES["int"]
    assert reg.resolve("java.lang.Enum") is builtins.ENUM
    assert reg.resolve("demo.Solo[]").canonical_name == "demo.Solo[]"
    assert "demo.Solo" in reg
    with pytest.raises(TypeNotFound):
        reg.resolve("demo.Missing")


def test_cyclic_inheritance_is_rejected():
    with pytest.raises(ValueError, match="Cyclic"):
        load("class A extends B { }", "class B extends A { }")


def test_type_graph_debug_json_lists_edges():
    reg = load(
        "package g; public interface I { }",
        "package g; public abstract class C implements I { }",
    )
    data = reg.graph.to_debug_json()
    edges = {(e["src"], e["dst"], e["type"]) for e in data["edges"]}

    assert ("g.C", "g.I", "IMPLEMENTS") in edges
    assert ("g.C", "java.lang.Object", "INHERITS") in edges
    assert reg.graph.supertypes("g.C") == ["g.I", "java.lang.Object"]
