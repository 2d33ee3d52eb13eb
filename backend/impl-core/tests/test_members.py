import os
import sys

import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from cir import builtins
from cir.model import MemberDescriptor, TypeDescriptor
from registry import TypeRegistry
from synth.errors import NoAccessibleConstructor
from synth.members import (
    default_value,
    member_modifiers,
    synthesize_constructor,
    synthesize_constructors,
    synthesize_method,
)
from synth.naming import NameGenerator

P = builtins.PRIMITIVES


def method(name, returns, params=(), mods=("public", "abstract"), throws=()):
    return MemberDescriptor(
        name=name,
        modifiers=mods,
        parameter_types=params,
        exception_types=throws,
        return_type=returns,
    )


def test_name_generator_is_sequential_and_per_instance():
    first = NameGenerator()
    assert first.names(3) == ["_0", "_1", "_2"]
    assert first.next_name() == "_3"
    assert NameGenerator().next_name() == "_0"


@pytest.mark.parametrize(
    "type_name, expected",
    [
        ("int", "0"),
        ("long", "0"),
        ("double", "0"),
        ("char", "0"),
        ("byte", "0"),
        ("boolean", "false"),
        ("void", ""),
    ],
)
def test_default_value_for_primitives(type_name, expected):
    assert default_value(P[type_name]) == expected


def test_default_value_for_references_and_arrays():
    assert default_value(builtins.java_lang("String")) == "null"
    assert default_value(builtins.array_of(P["int"])) == "null"


def test_method_bodies_follow_default_value_law():
    assert synthesize_method(method("size", P["int"])).text == \
        "public int size() { return 0; }"
    assert synthesize_method(method("ok", P["boolean"])).text == \
        "public boolean ok() { return false; }"
    assert synthesize_method(method("run", P["void"])).text == \
        "public void run() { return; }"
    assert synthesize_method(method("name", builtins.java_lang("String"))).text == \
        "public java.lang.String name() { return null; }"


def test_method_parameters_and_throws_clause():
    io = TypeDescriptor(name="IOException", canonical_name="java.io.IOException", package="java.io")
    m = method(
        "copy",
        P["long"],
        params=(builtins.array_of(P["byte"]), builtins.java_lang("String"), P["int"]),
        mods=("protected", "abstract"),
        throws=(io, builtins.java_lang("InterruptedException")),
    )
    synthesized = synthesize_method(m)

    assert synthesized.text == (
        "protected long copy(byte[] _0, java.lang.String _1, int _2) "
        "throws java.io.IOException, java.lang.InterruptedException { return 0; }"
    )
    assert synthesized.parameter_names == ("_0", "_1", "_2")


def test_excluded_modifiers_are_dropped():
    m = method("hash", P["int"], mods=("public", "abstract", "synchronized", "native", "strictfp"))
    assert member_modifiers(m) == "public synchronized strictfp"


def test_each_member_gets_fresh_parameter_names():
    a = synthesize_method(method("a", P["void"], params=(P["int"], P["int"])))
    b = synthesize_method(method("b", P["void"], params=(P["int"],)))

    assert a.parameter_names == ("_0", "_1")
    assert b.parameter_names == ("_0",)


def test_constructor_delegates_to_super_by_position():
    ctor = MemberDescriptor(
        name="Base",
        kind="constructor",
        modifiers=("protected",),
        parameter_types=(builtins.java_lang("String"), P["int"]),
    )
    synthesized = synthesize_constructor(ctor, "BaseImpl")

    assert synthesized.text == \
        "protected BaseImpl(java.lang.String _0, int _1) { super(_0, _1); }"


def test_only_non_private_constructors_are_replicated():
    code = """
    package demo;
    public abstract class Account {
        private Account() { }
        protected Account(String id) throws Exception { }
        Account(String id, long balance) { }
    }
    """
    token = TypeRegistry.from_sources([(code, None)]).resolve("demo.Account")
    ctors = synthesize_constructors(token, "AccountImpl")

    assert [c.text for c in ctors] == [
        "protected AccountImpl(java.lang.String _0) throws java.lang.Exception { super(_0); }",
        "AccountImpl(java.lang.String _0, long _1) { super(_0, _1); }",
    ]


def test_interfaces_contribute_no_constructors():
    code = "package demo; public interface Plain { }"
    token = TypeRegistry.from_sources([(code, None)]).resolve("demo.Plain")
    assert synthesize_constructors(token, "PlainImpl") == []


def test_only_private_constructors_fail():
    code = """
    package demo;
    public class Singleton {
        private Singleton() { }
        private Singleton(int x) { }
    }
    """
    token = TypeRegistry.from_sources([(code, None)]).resolve("demo.Singleton")
    with pytest.raises(NoAccessibleConstructor):
        synthesize_constructors(token, "SingletonImpl")
