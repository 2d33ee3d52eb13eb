"""
Built-in descriptors for the JDK types a program sees without loading their
source: primitives, java.lang, and the java.util / java.io interfaces user
types commonly implement.

Every modelled type carries the members a subclass has to know about: its
abstract methods and accessible constructors. Annotation types and any JDK
type outside this table are `opaque`, i.e. their members are unknown.
"""
from dataclasses import replace
from typing import Dict, Optional, Sequence, Tuple

from cir.model import MemberDescriptor, TypeDescriptor

JAVA_LANG = "java.lang"
OBJECT_NAME = "java.lang.Object"
ENUM_NAME = "java.lang.Enum"

PRIMITIVE_NAMES = ("boolean", "byte", "char", "short", "int", "long", "float", "double", "void")

# java.lang simple names resolvable without an import
JAVA_LANG_NAMES = frozenset({
    "AbstractMethodError", "Appendable", "ArithmeticException",
    "ArrayIndexOutOfBoundsException", "AssertionError", "AutoCloseable",
    "Boolean", "Byte", "CharSequence", "Character", "Class", "ClassCastException",
    "ClassLoader", "ClassNotFoundException", "CloneNotSupportedException",
    "Cloneable", "Comparable", "Deprecated", "Double", "Enum", "Error",
    "Exception", "Float", "FunctionalInterface", "IllegalAccessException",
    "IllegalArgumentException", "IllegalStateException",
    "IndexOutOfBoundsException", "InstantiationException", "Integer",
    "InterruptedException", "Iterable", "Long", "Math", "NoSuchFieldException",
    "NoSuchMethodException", "NullPointerException", "Number",
    "NumberFormatException", "Object", "Override", "Process", "Readable",
    "ReflectiveOperationException", "Runnable", "Runtime", "RuntimeException",
    "SecurityException", "Short", "StackOverflowError", "String",
    "StringBuffer", "StringBuilder", "SuppressWarnings", "System", "Thread",
    "ThreadLocal", "Throwable", "UnsupportedOperationException", "Void",
})

_LANG_INTERFACES = frozenset({
    "Appendable", "AutoCloseable", "CharSequence", "Cloneable", "Comparable",
    "Iterable", "Readable", "Runnable",
})
_LANG_ANNOTATIONS = frozenset({"Deprecated", "FunctionalInterface", "Override", "SuppressWarnings"})
_LANG_ABSTRACT = frozenset({"ClassLoader", "Enum", "Number", "Process"})
_LANG_FINAL = frozenset({
    "Boolean", "Byte", "Character", "Class", "Double", "Float", "Integer", "Long",
    "Math", "Short", "String", "StringBuffer", "StringBuilder", "System", "Void",
})

_INTERFACE = ("public", "abstract", "interface")
_ABSTRACT_METHOD = ("public", "abstract")


def _primitive(name: str) -> TypeDescriptor:
    return TypeDescriptor(
        name=name,
        canonical_name=name,
        kind="primitive",
        modifiers=("public", "abstract", "final"),
        binary_name=name,
    )


PRIMITIVES: Dict[str, TypeDescriptor] = {n: _primitive(n) for n in PRIMITIVE_NAMES}

_TYPES: Dict[str, TypeDescriptor] = {}


def _declare(canonical: str, kind: str = "class", modifiers: Tuple[str, ...] = ("public",),
             **fields) -> TypeDescriptor:
    package, _, name = canonical.rpartition(".")
    t = TypeDescriptor(
        name=name,
        canonical_name=canonical,
        kind=kind,
        package=package,
        modifiers=modifiers,
        binary_name=canonical,
        **fields,
    )
    _TYPES[canonical] = t
    return t


def _t(name: str) -> TypeDescriptor:
    return _TYPES[name if "." in name else f"{JAVA_LANG}.{name}"]


def _var(name: str) -> TypeDescriptor:
    """Type variable of a generic built-in; renders as its erasure."""
    return TypeDescriptor(name=name, canonical_name=OBJECT_NAME, kind="typevar")


def _method(owner: TypeDescriptor, name: str, returns: TypeDescriptor,
            params: Tuple[TypeDescriptor, ...] = (), throws: Tuple[TypeDescriptor, ...] = (),
            mods: Tuple[str, ...] = _ABSTRACT_METHOD) -> MemberDescriptor:
    return MemberDescriptor(
        name=name,
        kind="method",
        modifiers=mods,
        parameter_types=params,
        exception_types=throws,
        return_type=returns,
        declaring_type=owner,
    )


def _ctor(owner: TypeDescriptor, *params: TypeDescriptor,
          mods: Tuple[str, ...] = ("public",)) -> MemberDescriptor:
    return MemberDescriptor(name=owner.name, kind="constructor", modifiers=mods,
                            parameter_types=params, declaring_type=owner)


# ---------------- Declarations ----------------

OBJECT = _declare(OBJECT_NAME)

for _name in sorted(JAVA_LANG_NAMES - {"Object"}):
    _canonical = f"{JAVA_LANG}.{_name}"
    if _name in _LANG_INTERFACES:
        _declare(_canonical, "interface", _INTERFACE)
    elif _name in _LANG_ANNOTATIONS:
        _declare(_canonical, "annotation", _INTERFACE, opaque=True)
    elif _name in _LANG_FINAL:
        _declare(_canonical, modifiers=("public", "final"), superclass=OBJECT)
    elif _name in _LANG_ABSTRACT:
        _declare(_canonical, modifiers=("public", "abstract"), superclass=OBJECT)
    else:
        _declare(_canonical, superclass=OBJECT)

_declare("java.lang.annotation.Annotation", "interface", _INTERFACE, opaque=True)
_declare("java.io.Serializable", "interface", _INTERFACE)
_declare("java.io.Closeable", "interface", _INTERFACE, interfaces=(_t("AutoCloseable"),))
_declare("java.io.Flushable", "interface", _INTERFACE)
_declare("java.io.IOException", superclass=OBJECT)
_declare("java.io.InputStream", modifiers=("public", "abstract"), superclass=OBJECT,
         interfaces=(_t("java.io.Closeable"),))
_declare("java.io.OutputStream", modifiers=("public", "abstract"), superclass=OBJECT,
         interfaces=(_t("java.io.Closeable"), _t("java.io.Flushable")))
_declare("java.nio.CharBuffer", modifiers=("public", "abstract"), superclass=OBJECT, opaque=True)
_declare("java.util.Iterator", "interface", _INTERFACE, type_parameters=("E",))
_declare("java.util.Comparator", "interface", _INTERFACE, type_parameters=("T",))
_declare("java.util.concurrent.Callable", "interface", _INTERFACE, type_parameters=("V",))

# ---------------- Members ----------------

_p = PRIMITIVES
_string = _t("String")
_io = (_t("java.io.IOException"),)
_interrupted = (_t("InterruptedException"),)

OBJECT.constructors = (_ctor(OBJECT),)
OBJECT.methods = (
    _method(OBJECT, "getClass", _t("Class"), mods=("public", "final", "native")),
    _method(OBJECT, "hashCode", _p["int"], mods=("public", "native")),
    _method(OBJECT, "equals", _p["boolean"], (OBJECT,), mods=("public",)),
    _method(OBJECT, "clone", OBJECT, throws=(_t("CloneNotSupportedException"),),
            mods=("protected", "native")),
    _method(OBJECT, "toString", _string, mods=("public",)),
    _method(OBJECT, "notify", _p["void"], mods=("public", "final", "native")),
    _method(OBJECT, "notifyAll", _p["void"], mods=("public", "final", "native")),
    _method(OBJECT, "wait", _p["void"], throws=_interrupted, mods=("public", "final")),
    _method(OBJECT, "wait", _p["void"], (_p["long"],), _interrupted, ("public", "final", "native")),
    _method(OBJECT, "wait", _p["void"], (_p["long"], _p["int"]), _interrupted, ("public", "final")),
    _method(OBJECT, "finalize", _p["void"], throws=(_t("Throwable"),), mods=("protected",)),
)

ENUM = _t(ENUM_NAME)
ENUM.interfaces = (_t("Comparable"), _t("java.io.Serializable"))
ENUM.constructors = (_ctor(ENUM, _string, _p["int"], mods=("protected",)),)
ENUM.methods = (
    _method(ENUM, "name", _string, mods=("public", "final")),
    _method(ENUM, "ordinal", _p["int"], mods=("public", "final")),
    _method(ENUM, "toString", _string, mods=("public",)),
    _method(ENUM, "equals", _p["boolean"], (OBJECT,), mods=("public", "final")),
    _method(ENUM, "hashCode", _p["int"], mods=("public", "final")),
    _method(ENUM, "compareTo", _p["int"], (ENUM,), mods=("public", "final")),
)

_runnable = _t("Runnable")
_runnable.methods = (_method(_runnable, "run", _p["void"]),)

_comparable = _t("Comparable")
_comparable.type_parameters = ("T",)
_comparable.methods = (_method(_comparable, "compareTo", _p["int"], (_var("T"),)),)

_auto_closeable = _t("AutoCloseable")
_auto_closeable.methods = (_method(_auto_closeable, "close", _p["void"], throws=(_t("Exception"),)),)

_iterable = _t("Iterable")
_iterable.type_parameters = ("T",)
_iterable.methods = (_method(_iterable, "iterator", _t("java.util.Iterator")),)

_char_sequence = _t("CharSequence")
_char_sequence.methods = (
    _method(_char_sequence, "length", _p["int"]),
    _method(_char_sequence, "charAt", _p["char"], (_p["int"],)),
    _method(_char_sequence, "subSequence", _char_sequence, (_p["int"], _p["int"])),
)

_appendable = _t("Appendable")
_appendable.methods = (
    _method(_appendable, "append", _appendable, (_char_sequence,), _io),
    _method(_appendable, "append", _appendable, (_char_sequence, _p["int"], _p["int"]), _io),
    _method(_appendable, "append", _appendable, (_p["char"],), _io),
)

_readable = _t("Readable")
_readable.methods = (_method(_readable, "read", _p["int"], (_t("java.nio.CharBuffer"),), _io),)

_number = _t("Number")
_number.interfaces = (_t("java.io.Serializable"),)
_number.constructors = (_ctor(_number),)
_number.methods = tuple(
    _method(_number, f"{p}Value", _p[p]) for p in ("int", "long", "float", "double")
)

_input_stream = _t("java.io.InputStream")
_output_stream = _t("java.io.OutputStream")

_process = _t("Process")
_process.constructors = (_ctor(_process),)
_process.methods = (
    _method(_process, "getOutputStream", _output_stream),
    _method(_process, "getInputStream", _input_stream),
    _method(_process, "getErrorStream", _input_stream),
    _method(_process, "waitFor", _p["int"], throws=_interrupted),
    _method(_process, "exitValue", _p["int"]),
    _method(_process, "destroy", _p["void"]),
)

_class_loader = _t("ClassLoader")
_class_loader.constructors = (
    _ctor(_class_loader, mods=("protected",)),
    _ctor(_class_loader, _class_loader, mods=("protected",)),
)

_thread = _t("Thread")
_thread.interfaces = (_runnable,)
_thread.constructors = (_ctor(_thread), _ctor(_thread, _runnable), _ctor(_thread, _string))
_thread.methods = (_method(_thread, "run", _p["void"], mods=("public",)),)

_thread_local = _t("ThreadLocal")
_thread_local.constructors = (_ctor(_thread_local),)

_runtime = _t("Runtime")
_runtime.constructors = (_ctor(_runtime, mods=("private",)),)

for _throwable in [t for n, t in _TYPES.items() if n.endswith(("Exception", "Error", "Throwable"))]:
    _throwable.constructors = (_ctor(_throwable), _ctor(_throwable, _string))

_closeable = _t("java.io.Closeable")
_closeable.methods = (_method(_closeable, "close", _p["void"], throws=_io),)

_flushable = _t("java.io.Flushable")
_flushable.methods = (_method(_flushable, "flush", _p["void"], throws=_io),)

_input_stream.constructors = (_ctor(_input_stream),)
_input_stream.methods = (_method(_input_stream, "read", _p["int"], throws=_io),)

_output_stream.constructors = (_ctor(_output_stream),)
_output_stream.methods = (_method(_output_stream, "write", _p["void"], (_p["int"],), _io),)

_iterator = _t("java.util.Iterator")
_iterator.methods = (
    _method(_iterator, "hasNext", _p["boolean"]),
    _method(_iterator, "next", _var("E")),
)

_comparator = _t("java.util.Comparator")
_comparator.methods = (
    _method(_comparator, "compare", _p["int"], (_var("T"), _var("T"))),
    _method(_comparator, "equals", _p["boolean"], (OBJECT,)),
)

_callable = _t("java.util.concurrent.Callable")
_callable.methods = (_method(_callable, "call", _var("V"), throws=(_t("Exception"),)),)


# ---------------- Lookup ----------------

def java_lang(simple_name: str) -> TypeDescriptor:
    return _TYPES[f"{JAVA_LANG}.{simple_name}"]


def jdk(canonical: str) -> Optional[TypeDescriptor]:
    """Modelled JDK type by canonical name."""
    return _TYPES.get(canonical)


def array_of(component: TypeDescriptor, dimensions: int = 1) -> TypeDescriptor:
    t = component
    for _ in range(dimensions):
        t = TypeDescriptor(
            name=f"{t.name}[]",
            canonical_name=f"{t.canonical_name}[]",
            kind="array",
            package=t.package,
            modifiers=("public", "abstract", "final"),
            superclass=OBJECT,
            component=t,
        )
    return t


def _bind(t: Optional[TypeDescriptor], bindings: Dict[str, TypeDescriptor]) -> Optional[TypeDescriptor]:
    if t is not None and t.kind == "typevar":
        return bindings.get(t.name, OBJECT)
    return t


def parameterize(generic: TypeDescriptor, arguments: Sequence[TypeDescriptor]) -> TypeDescriptor:
    """
    `Comparable<Money>`: a copy of a generic built-in whose methods use the
    given type arguments. Without matching arguments the raw type is returned.
    """
    if not generic.type_parameters or len(arguments) != len(generic.type_parameters):
        return generic
    bindings = dict(zip(generic.type_parameters, arguments))
    view = replace(generic, type_parameters=())
    view.methods = tuple(
        replace(
            m,
            parameter_types=tuple(_bind(p, bindings) for p in m.parameter_types),
            return_type=_bind(m.return_type, bindings),
            declaring_type=view,
        )
        for m in generic.methods
    )
    return view


def lookup(name: str) -> TypeDescriptor | None:
    """Primitive, modelled JDK type by canonical name, or java.lang type by simple name."""
    if name in PRIMITIVES:
        return PRIMITIVES[name]
    if name in _TYPES:
        return _TYPES[name]
    if name in JAVA_LANG_NAMES:
        return java_lang(name)
    return None
