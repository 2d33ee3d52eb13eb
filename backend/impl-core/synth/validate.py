from typing import Optional

from cir.builtins import ENUM_NAME
from cir.model import TypeDescriptor
from synth.errors import UnsupportedToken


def _unsupported_reason(token: TypeDescriptor) -> Optional[str]:
    if token.is_primitive:
        return "primitive types cannot be implemented"
    if token.is_array:
        return "array types cannot be implemented"
    if token.canonical_name == ENUM_NAME:
        return "java.lang.Enum cannot be extended directly"
    if token.kind == "enum":
        return "enum types cannot be extended"
    if token.kind == "annotation":
        return "annotation types are not supported"
    if token.is_final:
        return "final classes cannot be extended"
    if token.is_private:
        return "private types cannot be extended"
    if token.is_inner_class:
        return "inner classes need an enclosing instance"
    return None


def check_implementable(token: TypeDescriptor) -> None:
    """
    Single gate on whether `token` can be implemented at all. Runs before
    any synthesis or filesystem work.
    """
    reason = _unsupported_reason(token)
    if reason is not None:
        raise UnsupportedToken(f"Unsupported class token {token.canonical_name}: {reason}")
