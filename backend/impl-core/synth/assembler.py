import logging
from typing import List

from cir.model import TypeDescriptor, render_modifiers
from config import CLASS_SUFFIX
from synth.hierarchy import abstract_methods, check_ancestors
from synth.members import SynthesizedMember, synthesize_constructors, synthesize_method
from synth.text import combine_blocks, combine_with_spaces
from synth.validate import check_implementable

logger = logging.getLogger(__name__)

# meaningless (or illegal) on a top-level concrete class
EXCLUDED_CLASS_MODIFIERS = ("interface", "abstract", "static", "protected")


def impl_class_name(token: TypeDescriptor) -> str:
    return token.name + CLASS_SUFFIX


def package_declaration(token: TypeDescriptor) -> str:
    """`package a.b;`, or "" for the unnamed package."""
    return f"package {token.package};" if token.package else ""


def class_header(token: TypeDescriptor) -> str:
    relation = "implements" if token.is_interface else "extends"
    return combine_with_spaces(
        render_modifiers(token.modifiers, exclude=EXCLUDED_CLASS_MODIFIERS),
        "class",
        impl_class_name(token),
        relation,
        token.canonical_name,
        "{",
    )


def assemble(token: TypeDescriptor, constructors: List[SynthesizedMember],
             methods: List[SynthesizedMember]) -> str:
    """Package declaration, header, constructors, methods, closing brace."""
    body = combine_blocks(
        class_header(token),
        combine_blocks(*(c.text for c in constructors)),
        combine_blocks(*(m.text for m in methods)),
        "}",
    )
    return combine_blocks(package_declaration(token), body)


def synthesize_class(token: TypeDescriptor) -> str:
    """
    Full source of `<Name>Impl` for `token`, before escaping.
    Raises an ImplerError subclass when the type cannot be implemented.
    """
    check_implementable(token)
    check_ancestors(token)
    methods = [synthesize_method(m) for m in abstract_methods(token)]
    constructors = synthesize_constructors(token, impl_class_name(token))
    logger.debug(
        "%s: %d constructors, %d methods",
        impl_class_name(token), len(constructors), len(methods),
    )
    return assemble(token, constructors, methods)
