from typing import Iterable

from config import LINE_SEPARATOR

SPACE = " "
BLOCK_SEPARATOR = LINE_SEPARATOR * 2


def combine(parts: Iterable[str], separator: str) -> str:
    """Join the non-empty parts with `separator`."""
    return separator.join(p for p in parts if p)


def combine_with_spaces(*parts: str) -> str:
    return combine(parts, SPACE)


def combine_blocks(*blocks: str) -> str:
    return combine(blocks, BLOCK_SEPARATOR)


def prefix_if_not_empty(prefix: str, text: str) -> str:
    """`prefix text`, or "" when there is no text to prefix."""
    return combine_with_spaces(prefix, text) if text else ""
