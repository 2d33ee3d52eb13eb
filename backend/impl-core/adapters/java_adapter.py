import logging
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Set, Tuple

import javalang  # type: ignore

from cir import builtins
from cir.model import MODIFIER_ORDER, MemberDescriptor, TypeDescriptor

logger = logging.getLogger(__name__)

_KINDS = {
    "ClassDeclaration": "class",
    "InterfaceDeclaration": "interface",
    "EnumDeclaration": "enum",
    "AnnotationDeclaration": "annotation",
}


@dataclass
class SourceUnit:
    code: str
    filename: Optional[str] = None
    origin: Optional[str] = None    # source root, used later as javac -sourcepath


@dataclass
class LoadResult:
    types: Dict[str, TypeDescriptor]
    errors: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class _LoadContext:
    known: Dict[str, TypeDescriptor] = field(default_factory=dict)
    opaque: Dict[str, TypeDescriptor] = field(default_factory=dict)
    pending: List["_Pending"] = field(default_factory=list)
    type_vars: Dict[str, Dict[str, TypeDescriptor]] = field(default_factory=dict)


@dataclass
class _Scope:
    """Name-resolution context of one type declaration."""
    ctx: _LoadContext
    package: str
    imports: Dict[str, str]                 # simple name -> canonical name
    wildcards: List[str]                    # on-demand import prefixes
    enclosing: List[TypeDescriptor] = field(default_factory=list)  # innermost first
    type_vars: Dict[str, TypeDescriptor] = field(default_factory=dict)


@dataclass
class _Pending:
    node: Any
    descriptor: TypeDescriptor
    scope: _Scope


def _ordered(mods: Set[str]) -> Tuple[str, ...]:
    known = tuple(m for m in MODIFIER_ORDER if m in mods)
    return known + tuple(sorted(mods - set(MODIFIER_ORDER)))


class JavaAdapter:
    """
    Java sources -> linked TypeDescriptors.

    Two passes over all compilation units:
      1. declare: one descriptor shell per (possibly nested) type, so that
         forward and cross-file references resolve to the same object
      2. link: superclass/interfaces, constructors and methods, with every
         type reference resolved to a canonical name

    Fills in what javac (and therefore reflection) would report but the
    source leaves implicit:
      - public/abstract on interface methods without a body
      - public/static on member types of interfaces, static on member
        interfaces/enums
      - the default constructor of a class that declares none
      - java.lang.Object / java.lang.Enum as implicit superclasses
    Generic types are reduced to their erasure, except the type arguments
    of generic built-in supertypes; varargs become arrays.
    """

    language = "java"

    # ---------------- Parsing entry points ----------------

    def parse_to_ast(self, code: str):
        try:
            return javalang.parse.parse(code)
        except javalang.parser.JavaSyntaxError as e:
            raise ValueError(f"Java syntax error: {e}")
        except Exception as e:
            raise ValueError(f"Failed to parse Java code: {e}")

    def package_of(self, code: str) -> str:
        tree = self.parse_to_ast(code)
        return getattr(getattr(tree, "package", None), "name", None) or ""

    def build_types_for_code(self, code: str, filename: str | None = None,
                             origin: str | None = None) -> Dict[str, TypeDescriptor]:
        """
        Single-compilation-unit helper. Syntax errors propagate as ValueError.
        """
        return self.build_types([SourceUnit(code, filename, origin)], strict=True).types

    def build_types(self, units: List[SourceUnit], strict: bool = False) -> LoadResult:
        """
        Multi-file builder. With strict=False invalid files are skipped and
        reported in LoadResult.errors; the rest are still loaded.
        """
        ctx = _LoadContext()
        errors: List[Dict[str, str]] = []

        for unit in units:
            try:
                tree = self.parse_to_ast(unit.code)
            except ValueError as e:
                if strict:
                    raise
                errors.append({"file": unit.filename or "<memory>", "error": str(e)})
                logger.warning("Skipping %s: %s", unit.filename or "<memory>", e)
                continue
            self._declare_unit(tree, unit, ctx)

        for pending in ctx.pending:
            self._link(pending)

        return LoadResult(types=dict(ctx.known), errors=errors)

    # ---------------- Pass 1: declare ----------------

    def _declare_unit(self, tree, unit: SourceUnit, ctx: _LoadContext) -> None:
        package = getattr(getattr(tree, "package", None), "name", None) or ""
        imports: Dict[str, str] = {}
        wildcards: List[str] = []
        for imp in tree.imports or []:
            if imp.static:
                continue
            if imp.wildcard:
                wildcards.append(imp.path)
            else:
                imports[imp.path.rsplit(".", 1)[-1]] = imp.path

        scope = _Scope(ctx=ctx, package=package, imports=imports, wildcards=wildcards)
        for node in tree.types:
            self._declare_type(node, scope, None, unit.origin)

    def _declare_type(self, node, scope: _Scope, enclosing: Optional[TypeDescriptor],
                      origin: Optional[str]) -> None:
        kind = _KINDS.get(type(node).__name__)
        if kind is None:
            return
        mods = set(node.modifiers or ())
        if enclosing is not None:
            if enclosing.is_interface:
                mods |= {"public", "static"}
            if kind != "class":
                mods.add("static")
        if kind in ("interface", "annotation"):
            mods |= {"abstract", "interface"}
        if kind == "enum":
            mods.add("final")

        if enclosing is not None:
            canonical = f"{enclosing.canonical_name}.{node.name}"
            binary = f"{enclosing.binary_name}${node.name}"
        else:
            canonical = f"{scope.package}.{node.name}" if scope.package else node.name
            binary = canonical

        if canonical in scope.ctx.known:
            logger.warning("Duplicate declaration of %s ignored", canonical)
            return

        t = TypeDescriptor(
            name=node.name,
            canonical_name=canonical,
            kind=kind,
            package=scope.package,
            modifiers=_ordered(mods),
            binary_name=binary,
            enclosing=enclosing,
            origin=origin,
        )
        scope.ctx.known[canonical] = t
        type_scope = replace(scope, enclosing=[t] + scope.enclosing)
        scope.ctx.pending.append(_Pending(node=node, descriptor=t, scope=type_scope))

        for decl in self._declarations(node):
            if isinstance(decl, javalang.tree.TypeDeclaration):
                self._declare_type(decl, type_scope, t, origin)

    def _declarations(self, node) -> List[Any]:
        body = getattr(node, "body", None) or []
        if isinstance(body, javalang.tree.EnumBody):
            return list(body.declarations or [])
        return list(body)

    # ---------------- Pass 2: link ----------------

    def _link(self, pending: _Pending) -> None:
        node, t = pending.node, pending.descriptor
        scope = pending.scope

        outer_vars: Dict[str, TypeDescriptor] = {}
        if t.enclosing is not None:
            outer_vars = scope.ctx.type_vars.get(t.enclosing.canonical_name, {})
        scope.type_vars = dict(outer_vars)
        scope.type_vars.update(self._type_vars(getattr(node, "type_parameters", None), scope))
        scope.ctx.type_vars[t.canonical_name] = scope.type_vars
        # <Name>Impl extends the raw type, whose supertypes are all erased
        raw = bool(getattr(node, "type_parameters", None))

        if t.kind == "class":
            extends = getattr(node, "extends", None)
            t.superclass = self._resolve_supertype(extends, scope, raw) if extends else builtins.OBJECT
            t.interfaces = tuple(self._resolve_supertype(i, scope, raw) for i in node.implements or [])
        elif t.kind == "interface":
            t.interfaces = tuple(self._resolve_supertype(i, scope, raw) for i in node.extends or [])
        elif t.kind == "enum":
            t.superclass = builtins.ENUM
            t.interfaces = tuple(self._resolve_supertype(i, scope, raw) for i in node.implements or [])
        else:
            t.interfaces = (self._known_or_opaque("java.lang.annotation.Annotation", scope.ctx),)

        decls = self._declarations(node)
        t.methods = tuple(
            self._member(d, "method", t, scope)
            for d in decls
            if isinstance(d, javalang.tree.MethodDeclaration)
        )

        if t.kind == "class":
            ctors = [
                self._member(d, "constructor", t, scope)
                for d in decls
                if isinstance(d, javalang.tree.ConstructorDeclaration)
            ]
            if not ctors:
                ctors.append(self._default_constructor(t))
            t.constructors = tuple(ctors)

    def _default_constructor(self, t: TypeDescriptor) -> MemberDescriptor:
        """Same access as the class itself."""
        vis = t.visibility
        return MemberDescriptor(
            name=t.name,
            kind="constructor",
            modifiers=() if vis == "package" else (vis,),
            declaring_type=t,
        )

    def _member(self, node, kind: str, owner: TypeDescriptor, scope: _Scope) -> MemberDescriptor:
        local = replace(scope, type_vars=dict(scope.type_vars))
        local.type_vars.update(self._type_vars(getattr(node, "type_parameters", None), local))

        mods = set(node.modifiers or ())
        if kind == "method" and owner.is_interface:
            if "private" not in mods:
                mods.add("public")
            if node.body is None and not mods & {"static", "default", "private"}:
                mods.add("abstract")

        params = tuple(self._parameter_type(p, local) for p in node.parameters or [])
        throws = tuple(self._resolve_name(n, local) for n in node.throws or [])

        return_type = None
        if kind == "method":
            rt = node.return_type
            return_type = self._resolve_type(rt, local) if rt is not None else builtins.PRIMITIVES["void"]

        return MemberDescriptor(
            name=node.name,
            kind=kind,
            modifiers=_ordered(mods),
            parameter_types=params,
            exception_types=throws,
            return_type=return_type,
            declaring_type=owner,
        )

    # ---------------- Type resolution ----------------

    def _type_vars(self, params, scope: _Scope) -> Dict[str, TypeDescriptor]:
        """
        Type variable -> erasure (first bound, or java.lang.Object).
        Variables are added one by one so later bounds may use earlier ones.
        """
        erased: Dict[str, TypeDescriptor] = {}
        if not params:
            return erased
        local = replace(scope, type_vars=dict(scope.type_vars))
        for tp in params:
            bounds = getattr(tp, "extends", None) or []
            erasure = self._resolve_type(bounds[0], local) if bounds else builtins.OBJECT
            erased[tp.name] = erasure
            local.type_vars[tp.name] = erasure
        return erased

    def _parameter_type(self, param, scope: _Scope) -> TypeDescriptor:
        t = self._resolve_type(param.type, scope)
        return builtins.array_of(t) if getattr(param, "varargs", False) else t

    def _resolve_type(self, t, scope: _Scope) -> TypeDescriptor:
        """javalang BasicType / ReferenceType -> descriptor (arrays included)."""
        parts: List[str] = []
        dims = 0
        node = t
        while node is not None:
            parts.append(node.name)
            dims += len(getattr(node, "dimensions", None) or [])
            node = getattr(node, "sub_type", None)

        if isinstance(t, javalang.tree.BasicType):
            base = builtins.PRIMITIVES[t.name]
        else:
            base = self._resolve_name(".".join(parts), scope)
        return builtins.array_of(base, dims) if dims else base

    def _resolve_supertype(self, t, scope: _Scope, raw: bool) -> TypeDescriptor:
        """
        Like _resolve_type, but keeps the type arguments of a generic
        built-in (`implements Comparable<Money>`) so its methods are seen
        with them, as javac sees them.
        """
        base = self._resolve_type(t, scope)
        if raw or not base.type_parameters:
            return base
        arguments = None
        node = t
        while node is not None:
            arguments = getattr(node, "arguments", None) or arguments
            node = getattr(node, "sub_type", None)
        if not arguments:
            return base
        resolved = [
            self._resolve_type(a.type, scope) if getattr(a, "type", None) is not None else builtins.OBJECT
            for a in arguments
        ]
        return builtins.parameterize(base, resolved)

    def _resolve_name(self, qualified: str, scope: _Scope) -> TypeDescriptor:
        head, _, rest = qualified.partition(".")
        base = self._resolve_simple(head, scope)
        if base is None:
            if rest:
                # package-qualified name
                return self._known_or_opaque(qualified, scope.ctx)
            if len(scope.wildcards) == 1:
                # e.g. `import java.util.*;` for a JDK type we have no source of
                fallback = f"{scope.wildcards[0]}.{head}"
            else:
                fallback = f"{scope.package}.{head}" if scope.package else head
            logger.debug("Unresolved type %s, assuming %s", head, fallback)
            return self._known_or_opaque(fallback, scope.ctx)
        for part in rest.split(".") if rest else []:
            base = self._known_or_opaque(f"{base.canonical_name}.{part}", scope.ctx)
        return base

    def _resolve_simple(self, name: str, scope: _Scope) -> Optional[TypeDescriptor]:
        known = scope.ctx.known
        if name in scope.type_vars:
            return scope.type_vars[name]
        if name in builtins.PRIMITIVES:
            return builtins.PRIMITIVES[name]
        # member types of the enclosing declarations, innermost first
        for enc in scope.enclosing:
            hit = known.get(f"{enc.canonical_name}.{name}")
            if hit is not None:
                return hit
        if name in scope.imports:
            return self._known_or_opaque(scope.imports[name], scope.ctx)
        same_pkg = f"{scope.package}.{name}" if scope.package else name
        if same_pkg in known:
            return known[same_pkg]
        for prefix in scope.wildcards:
            hit = known.get(f"{prefix}.{name}") or builtins.jdk(f"{prefix}.{name}")
            if hit is not None:
                return hit
        if name in builtins.JAVA_LANG_NAMES:
            return builtins.java_lang(name)
        return None

    def _known_or_opaque(self, canonical: str, ctx: _LoadContext) -> TypeDescriptor:
        """
        A loaded type, a built-in, or a member-less placeholder for a type
        outside the loaded sources (e.g. java.util.List).
        """
        if canonical in ctx.known:
            return ctx.known[canonical]
        builtin = builtins.jdk(canonical)
        if builtin is not None:
            return builtin
        t = ctx.opaque.get(canonical)
        if t is None:
            segments = canonical.split(".")
            pkg: List[str] = []
            for s in segments[:-1]:
                if s[:1].isupper():
                    break
                pkg.append(s)
            package = ".".join(pkg)
            nested = "$".join(segments[len(pkg):])
            t = TypeDescriptor(
                name=segments[-1],
                canonical_name=canonical,
                package=package,
                modifiers=("public",),
                binary_name=f"{package}.{nested}" if package else nested,
                opaque=True,
            )
            ctx.opaque[canonical] = t
        return t
