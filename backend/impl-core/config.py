from __future__ import annotations
import os

# Generated type: <SimpleName><CLASS_SUFFIX> in <PackagePath>/<...><SOURCE_EXTENSION>
CLASS_SUFFIX = os.getenv("IMPL_CLASS_SUFFIX", "Impl")
SOURCE_EXTENSION = os.getenv("IMPL_SOURCE_EXTENSION", ".java")
CLASS_EXTENSION = ".class"

# Separator between lines of generated source; blocks are split by two of them
LINE_SEPARATORS = ("\n", "\r\n", "\r")


def parse_line_separator(raw: str) -> str:
    """IMPL_LINE_SEPARATOR value, written with escapes (`\\r\\n`) or literally."""
    try:
        value = raw.encode("ascii").decode("unicode_escape")
    except UnicodeError as e:
        raise ValueError(f"IMPL_LINE_SEPARATOR must be ASCII, e.g. \\n or \\r\\n; got {raw!r}") from e
    if value not in LINE_SEPARATORS:
        raise ValueError(f"IMPL_LINE_SEPARATOR must be one of \\n, \\r\\n, \\r; got {raw!r}")
    return value


LINE_SEPARATOR = parse_line_separator(os.getenv("IMPL_LINE_SEPARATOR", "\n"))

# Parameter names are <PARAM_PREFIX>0, <PARAM_PREFIX>1, ...
PARAM_PREFIX = "_"

# External compiler
JAVAC = (os.getenv("IMPL_JAVAC") or "").strip()
COMPILE_TIMEOUT_SECONDS = int(os.getenv("IMPL_COMPILE_TIMEOUT", "60"))

# Jar packaging
MANIFEST_VERSION = "1.0"
SCRATCH_PREFIX = os.getenv("IMPL_SCRATCH_PREFIX", "tmp")

LOG_LEVEL = os.getenv("IMPL_LOG_LEVEL", "INFO").upper()
