from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Set

from archive import write_jar
from cir.model import TypeDescriptor
from compiler import compile_source
from emit import output_path, write_source
from scratch import scratch_dir
from synth.assembler import impl_class_name, synthesize_class
from synth.errors import IOFailure
from synth.escape import escape_non_ascii
from synth.validate import check_implementable

logger = logging.getLogger(__name__)


class Implementor:
    """
    Generates `<Name>Impl` for a class or interface descriptor.

    - implement(token, root): write `<root>/<package path>/<Name>Impl.java`
    - implement_jar(token, jar): additionally compile it with javac and pack
      the class file into `jar`
    Every failure is an ImplerError subclass; nothing is retried.
    """

    def generate_source(self, token: TypeDescriptor) -> str:
        """Escaped source text, without touching the filesystem."""
        return escape_non_ascii(synthesize_class(token))

    def implement(self, token: TypeDescriptor, root: str | Path) -> Path:
        # rejected tokens never reach the filesystem; the whole source is
        # built before the output file is opened
        check_implementable(token)
        source = self.generate_source(token)
        try:
            path = output_path(root, token)
        except (TypeError, ValueError) as e:
            raise IOFailure(f"Invalid output root {root!r}: {e}") from e
        write_source(path, source)
        logger.info("Implemented %s as %s", token.canonical_name, path)
        return path

    def implement_jar(self, token: TypeDescriptor, jar_path: str | Path) -> Path:
        check_implementable(token)
        jar_path = Path(jar_path)
        with scratch_dir(jar_path) as tmp:
            source_file = self.implement(token, tmp)
            compile_source(source_file, tmp, source_roots(token))
            logger.debug("Compiled %s", impl_class_name(token))
            return write_jar(token, tmp, jar_path)


def source_roots(token: TypeDescriptor) -> List[str]:
    """
    Distinct source roots of every loaded type `token` refers to, directly
    or through its supertypes and member signatures; `token`'s own first.
    """
    roots: List[str] = []
    seen: Set[int] = set()
    queue: List[TypeDescriptor] = [token]
    while queue:
        t = queue.pop(0)
        if id(t) in seen:
            continue
        seen.add(id(t))
        if t.origin and t.origin not in roots:
            roots.append(t.origin)
        queue.extend(t.supertypes())
        for m in t.constructors + t.methods:
            queue.extend(m.parameter_types)
            queue.extend(m.exception_types)
            if m.return_type is not None:
                queue.append(m.return_type)
        for related in (t.component, t.enclosing):
            if related is not None:
                queue.append(related)
    return roots
