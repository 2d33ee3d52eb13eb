from dataclasses import dataclass
from typing import List, Tuple

from cir.model import MemberDescriptor, TypeDescriptor, render_modifiers
from synth.errors import NoAccessibleConstructor
from synth.naming import NameGenerator
from synth.text import combine_with_spaces, prefix_if_not_empty

# never valid on a concrete override; "default" only exists inside interfaces
EXCLUDED_MEMBER_MODIFIERS = ("native", "transient", "abstract", "default")


@dataclass(frozen=True)
class SynthesizedMember:
    text: str
    parameter_names: Tuple[str, ...]


def member_modifiers(member: MemberDescriptor) -> str:
    return render_modifiers(member.modifiers, exclude=EXCLUDED_MEMBER_MODIFIERS)


def default_value(return_type: TypeDescriptor) -> str:
    """Value returned by a generated method body; "" for void."""
    if not return_type.is_primitive:
        return "null"
    if return_type.name == "void":
        return ""
    if return_type.name == "boolean":
        return "false"
    return "0"


def _parameters(member: MemberDescriptor) -> Tuple[str, Tuple[str, ...]]:
    """`(T0 _0, T1 _1)` plus the generated names, from a fresh NameGenerator."""
    namer = NameGenerator()
    names = tuple(namer.names(len(member.parameter_types)))
    typed = ", ".join(
        combine_with_spaces(t.canonical_name, n) for t, n in zip(member.parameter_types, names)
    )
    return f"({typed})", names


def _throws_clause(member: MemberDescriptor) -> str:
    return prefix_if_not_empty("throws", ", ".join(e.canonical_name for e in member.exception_types))


def synthesize_method(method: MemberDescriptor) -> SynthesizedMember:
    """`<modifiers> <ret> <name>(<params>) [throws ...] { return <default>; }`"""
    params, names = _parameters(method)
    value = default_value(method.return_type)
    body = f"return {value};" if value else "return;"
    text = combine_with_spaces(
        member_modifiers(method),
        method.return_type.canonical_name,
        method.name + params,
        _throws_clause(method),
        "{", body, "}",
    )
    return SynthesizedMember(text=text, parameter_names=names)


def synthesize_constructor(ctor: MemberDescriptor, class_name: str) -> SynthesizedMember:
    """`<modifiers> <class_name>(<params>) [throws ...] { super(<names>); }`"""
    params, names = _parameters(ctor)
    text = combine_with_spaces(
        member_modifiers(ctor),
        class_name + params,
        _throws_clause(ctor),
        "{", f"super({', '.join(names)});", "}",
    )
    return SynthesizedMember(text=text, parameter_names=names)


def synthesize_constructors(token: TypeDescriptor, class_name: str) -> List[SynthesizedMember]:
    """
    One delegating constructor per non-private declared constructor of
    `token`. Interfaces have none.
    """
    if token.is_interface:
        return []
    ctors = [
        synthesize_constructor(c, class_name)
        for c in token.constructors
        if not c.is_private
    ]
    if not ctors:
        raise NoAccessibleConstructor(
            f"{token.canonical_name} has no constructor accessible to a subclass"
        )
    return ctors
