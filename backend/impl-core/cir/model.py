from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Literal, Optional, Tuple

Visibility = Literal["public", "protected", "private", "package"]
TypeKind = Literal["class", "interface", "enum", "annotation", "primitive", "array", "typevar"]
MemberKind = Literal["method", "constructor"]

# (name, canonical parameter type names)
Signature = Tuple[str, Tuple[str, ...]]

# Same order as java.lang.reflect.Modifier.toString
MODIFIER_ORDER = (
    "public",
    "protected",
    "private",
    "abstract",
    "static",
    "final",
    "transient",
    "volatile",
    "synchronized",
    "native",
    "strictfp",
    "interface",
)


def render_modifiers(modifiers: Iterable[str], exclude: Iterable[str] = ()) -> str:
    """
    Render modifier keywords in canonical Java order, dropping `exclude`.
    Keywords outside MODIFIER_ORDER (e.g. "default") are never rendered.
    """
    kept = set(modifiers) - set(exclude)
    return " ".join(m for m in MODIFIER_ORDER if m in kept)


def visibility_of(modifiers: Iterable[str]) -> Visibility:
    mods = set(modifiers)
    if "public" in mods:
        return "public"
    if "private" in mods:
        return "private"
    if "protected" in mods:
        return "protected"
    return "package"


@dataclass(eq=False)
class MemberDescriptor:
    name: str
    kind: MemberKind = "method"
    modifiers: Tuple[str, ...] = ()
    parameter_types: Tuple["TypeDescriptor", ...] = ()
    exception_types: Tuple["TypeDescriptor", ...] = ()
    return_type: Optional["TypeDescriptor"] = None    # None for constructors
    declaring_type: Optional["TypeDescriptor"] = field(default=None, repr=False)

    @property
    def visibility(self) -> Visibility:
        return visibility_of(self.modifiers)

    @property
    def is_abstract(self) -> bool:
        return "abstract" in self.modifiers

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers

    @property
    def is_private(self) -> bool:
        return "private" in self.modifiers

    @property
    def is_static(self) -> bool:
        return "static" in self.modifiers

    @property
    def signature(self) -> Signature:
        return self.name, tuple(p.canonical_name for p in self.parameter_types)


@dataclass(eq=False)
class TypeDescriptor:
    """
    Read-only view of a loaded Java type.

    Mirrors what java.lang.Class exposes through reflection: modifiers,
    lineage (superclass + direct interfaces), declared constructors and
    methods. Instances are created and linked by the loader (JavaAdapter /
    builtins) and are never mutated afterwards.
    """
    name: str                                   # simple name, e.g. "Entry"
    canonical_name: str                         # e.g. "java.util.Map.Entry"
    kind: TypeKind = "class"
    package: str = ""                           # "" for the unnamed package
    modifiers: Tuple[str, ...] = ()
    binary_name: Optional[str] = None           # e.g. "java.util.Map$Entry"
    superclass: Optional["TypeDescriptor"] = field(default=None, repr=False)
    interfaces: Tuple["TypeDescriptor", ...] = field(default=(), repr=False)
    constructors: Tuple[MemberDescriptor, ...] = field(default=(), repr=False)
    methods: Tuple[MemberDescriptor, ...] = field(default=(), repr=False)
    component: Optional["TypeDescriptor"] = field(default=None, repr=False)
    enclosing: Optional["TypeDescriptor"] = field(default=None, repr=False)
    origin: Optional[str] = None                # source root the type was loaded from
    type_parameters: Tuple[str, ...] = ()       # generic built-ins only; see builtins.parameterize
    opaque: bool = False                        # members unknown: no source, no built-in model

    # ---------------- Flags ----------------

    @property
    def visibility(self) -> Visibility:
        return visibility_of(self.modifiers)

    @property
    def is_interface(self) -> bool:
        return self.kind in ("interface", "annotation")

    @property
    def is_primitive(self) -> bool:
        return self.kind == "primitive"

    @property
    def is_array(self) -> bool:
        return self.kind == "array"

    @property
    def is_final(self) -> bool:
        return "final" in self.modifiers

    @property
    def is_private(self) -> bool:
        return "private" in self.modifiers

    @property
    def is_abstract(self) -> bool:
        return "abstract" in self.modifiers

    @property
    def is_inner_class(self) -> bool:
        """Non-static member class: needs an enclosing instance to construct."""
        return (
            self.enclosing is not None
            and self.kind == "class"
            and "static" not in self.modifiers
        )

    # ---------------- Lineage ----------------

    def ancestors(self) -> Iterator["TypeDescriptor"]:
        """This type followed by its superclass chain up to the root."""
        level: Optional[TypeDescriptor] = self
        while level is not None:
            yield level
            level = level.superclass

    def supertypes(self) -> List["TypeDescriptor"]:
        """
        Class chain first (most derived to root), then every reachable
        interface in breadth-first order. Each type appears once.
        """
        ordered: List[TypeDescriptor] = list(self.ancestors())
        seen = {id(t) for t in ordered}
        queue: List[TypeDescriptor] = []
        for level in ordered:
            queue.extend(level.interfaces)
        while queue:
            iface = queue.pop(0)
            if id(iface) in seen:
                continue
            seen.add(id(iface))
            ordered.append(iface)
            queue.extend(iface.interfaces)
        return ordered

    def public_methods(self) -> Tuple[MemberDescriptor, ...]:
        """
        All public member methods, declared or inherited, like
        Class.getMethods(). For one signature the most derived declaration
        wins, so a concrete method inherited from the class chain hides an
        abstract interface method with the same signature.
        """
        found: Dict[Signature, MemberDescriptor] = {}
        for t in self.supertypes():
            for m in t.methods:
                if not m.is_public:
                    continue
                # static interface methods are not inherited
                if m.is_static and t.is_interface and t is not self:
                    continue
                found.setdefault(m.signature, m)
        return tuple(found.values())

    def __str__(self) -> str:
        return self.canonical_name
