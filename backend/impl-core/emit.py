from __future__ import annotations
import logging
from pathlib import Path

from cir.model import TypeDescriptor
from config import SOURCE_EXTENSION
from synth.assembler import impl_class_name
from synth.errors import IOFailure

logger = logging.getLogger(__name__)


def package_dir(root: str | Path, token: TypeDescriptor) -> Path:
    """`root/a/b` for package `a.b`; `root` itself for the unnamed package."""
    parts = token.package.split(".") if token.package else []
    return Path(root).joinpath(*parts)


def output_path(root: str | Path, token: TypeDescriptor, extension: str = SOURCE_EXTENSION) -> Path:
    return package_dir(root, token) / f"{impl_class_name(token)}{extension}"


def write_source(path: Path, text: str) -> Path:
    """
    Create missing parent directories and write `text` (already escaped to
    ASCII). A partially written file is removed again.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except (OSError, ValueError) as e:
        raise IOFailure(f"Cannot create output directory {path.parent}: {e}") from e
    try:
        with open(path, "w", encoding="ascii", newline="") as f:
            f.write(text)
    except (OSError, ValueError) as e:
        path.unlink(missing_ok=True)
        raise IOFailure(f"Cannot write {path}: {e}") from e
    logger.debug("Wrote %s (%d chars)", path, len(text))
    return path
