from typing import List

from config import PARAM_PREFIX


class NameGenerator:
    """
    Hands out `_0`, `_1`, ... for the parameter list of one member.
    Create a new instance per member; never share one.
    """

    def __init__(self, prefix: str = PARAM_PREFIX) -> None:
        self._prefix = prefix
        self._index = 0

    def next_name(self) -> str:
        name = f"{self._prefix}{self._index}"
        self._index += 1
        return name

    def names(self, count: int) -> List[str]:
        return [self.next_name() for _ in range(count)]
