import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from adapters.java_adapter import JavaAdapter, LoadResult, SourceUnit
from cir import builtins
from cir.graph import TypeGraph
from cir.model import TypeDescriptor

logger = logging.getLogger(__name__)

java_adapter = JavaAdapter()

# build output and tool folders never hold sources worth loading
_SKIP_DIRS = {"target", "build", "out", "node_modules", ".git", ".idea"}


class TypeNotFound(LookupError):
    """No loaded or built-in type has the requested name."""


def discover_java_files(root: str | Path) -> List[str]:
    """Walk `root` and list every .java file, in a stable order."""
    files = []
    for base, dirs, names in os.walk(root):
        dirs[:] = sorted(d for d in dirs if d.lower() not in _SKIP_DIRS)
        for n in sorted(names):
            if n.endswith(".java"):
                files.append(os.path.join(base, n))
    return files


class TypeRegistry:
    """
    Loaded Java types, addressable by canonical or binary name.
    Built once; read-only afterwards, so it can be shared between requests.
    """

    def __init__(self, result: LoadResult) -> None:
        self._types: Dict[str, TypeDescriptor] = dict(result.types)
        self._by_binary = {t.binary_name: t for t in self._types.values() if t.binary_name}
        self.parse_errors = result.errors

        self.graph = TypeGraph()
        for t in self._types.values():
            self.graph.link(t)
        self.graph.check_acyclic()

    @classmethod
    def from_sources(cls, sources: Iterable[Tuple[str, Optional[str]]],
                     origin: Optional[str] = None, strict: bool = True) -> "TypeRegistry":
        """(code, filename) pairs; syntax errors raise ValueError when strict."""
        units = [SourceUnit(code, filename, origin) for code, filename in sources]
        return cls(java_adapter.build_types(units, strict=strict))

    @classmethod
    def from_source_roots(cls, roots: Sequence[str | Path]) -> "TypeRegistry":
        """
        Load every .java file under each root. Unreadable or invalid files
        are skipped and listed in `parse_errors`.
        """
        units: List[SourceUnit] = []
        errors: List[Dict[str, str]] = []
        for root in roots:
            origin = str(Path(root).resolve())
            for path in discover_java_files(root):
                try:
                    with open(path, "r", encoding="utf-8") as f:
                        code = f.read()
                except (OSError, UnicodeDecodeError) as e:
                    errors.append({"file": path, "error": str(e)})
                    logger.warning("Skipping %s: %s", path, e)
                    continue
                units.append(SourceUnit(code, path, origin))

        result = java_adapter.build_types(units, strict=False)
        result.errors = errors + result.errors
        logger.debug("Loaded %d types from %d files", len(result.types), len(units))
        return cls(result)

    def __contains__(self, name: str) -> bool:
        try:
            self.resolve(name)
        except TypeNotFound:
            return False
        return True

    def __len__(self) -> int:
        return len(self._types)

    def types(self) -> List[TypeDescriptor]:
        return list(self._types.values())

    def resolve(self, name: str) -> TypeDescriptor:
        """
        Canonical name ("a.Outer.Inner"), binary name ("a.Outer$Inner"),
        primitive or java.lang name, optionally with trailing "[]" pairs.
        A simple name is accepted when exactly one loaded type carries it.
        """
        name = name.strip()
        dims = 0
        while name.endswith("[]"):
            name = name[:-2].rstrip()
            dims += 1

        t = self._types.get(name) or self._by_binary.get(name) or builtins.lookup(name)
        if t is None and "." not in name:
            matches = [c for c in self._types.values() if c.name == name]
            if len(matches) == 1:
                t = matches[0]
        if t is None:
            raise TypeNotFound(f"Unknown type: {name or '<empty>'}")
        return builtins.array_of(t, dims) if dims else t
