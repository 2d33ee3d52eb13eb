import logging
import zipfile
from pathlib import Path

from cir.model import TypeDescriptor
from config import CLASS_EXTENSION, MANIFEST_VERSION
from synth.assembler import impl_class_name
from synth.errors import IOFailure

logger = logging.getLogger(__name__)

MANIFEST_ENTRY = "META-INF/MANIFEST.MF"


def manifest_text() -> str:
    return f"Manifest-Version: {MANIFEST_VERSION}\r\n\r\n"


def class_entry_name(token: TypeDescriptor) -> str:
    """Jar entry of the compiled implementation, e.g. `a/b/FooImpl.class`."""
    parts = token.package.split(".") if token.package else []
    return "/".join(parts + [impl_class_name(token) + CLASS_EXTENSION])


def write_jar(token: TypeDescriptor, class_root: Path, jar_path: Path) -> Path:
    """
    Write a jar holding only the manifest and the compiled implementation
    found under `class_root`.
    """
    entry = class_entry_name(token)
    compiled = Path(class_root).joinpath(*entry.split("/"))
    try:
        with zipfile.ZipFile(jar_path, "w", compression=zipfile.ZIP_DEFLATED) as jar:
            jar.writestr(MANIFEST_ENTRY, manifest_text())
            jar.write(compiled, entry)
    except (OSError, zipfile.BadZipFile) as e:
        Path(jar_path).unlink(missing_ok=True)
        raise IOFailure(f"Cannot write jar {jar_path}: {e}") from e
    logger.info("Wrote %s (%s)", jar_path, entry)
    return Path(jar_path)
