from typing import Dict, List, Set

from cir.model import MemberDescriptor, Signature, TypeDescriptor
from synth.errors import InaccessibleAncestor, OpaqueAncestor


def _check_private(token: TypeDescriptor, level: TypeDescriptor) -> None:
    if level.is_private:
        raise InaccessibleAncestor(
            f"Cannot extend {token.canonical_name}: ancestor {level.canonical_name} is private"
        )


def _check_members_known(token: TypeDescriptor) -> None:
    for t in token.supertypes():
        if t.opaque:
            raise OpaqueAncestor(
                f"Cannot implement {token.canonical_name}: members of {t.canonical_name} "
                f"are unknown, load its source to implement it"
            )


def check_ancestors(token: TypeDescriptor) -> None:
    """
    A subclass cannot extend anything whose superclass chain holds a private
    class, nor override methods of a supertype whose members are unknown.
    """
    for level in token.ancestors():
        _check_private(token, level)
    _check_members_known(token)


def abstract_methods(token: TypeDescriptor) -> List[MemberDescriptor]:
    """
    Every abstract method a concrete subclass of `token` has to override,
    in discovery order, one entry per (name, parameter types).

    Publicly reachable methods come first. Then the superclass chain is
    walked from `token` to the root for declared non-public abstract
    methods, which the public enumeration cannot see; one already covered,
    or implemented by a more derived class, is skipped.
    """
    _check_members_known(token)
    collected: Dict[Signature, MemberDescriptor] = {}
    for method in token.public_methods():
        if method.is_abstract:
            collected.setdefault(method.signature, method)

    implemented: Set[Signature] = set()
    for level in token.ancestors():
        _check_private(token, level)
        for method in level.methods:
            if not method.is_abstract or method.is_public:
                continue
            sig = method.signature
            if sig in collected or sig in implemented:
                continue
            collected[sig] = method
        implemented.update(m.signature for m in level.methods if not m.is_abstract)

    return list(collected.values())
