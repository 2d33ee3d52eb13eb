import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence

from config import COMPILE_TIMEOUT_SECONDS, JAVAC
from synth.errors import CompilationFailed

logger = logging.getLogger(__name__)

_JAVAC_EXE = "javac.exe" if sys.platform == "win32" else "javac"


def find_javac() -> Optional[str]:
    """Find javac: IMPL_JAVAC, then $JAVA_HOME/bin, then PATH."""
    if JAVAC:
        return JAVAC

    java_home = os.getenv("JAVA_HOME")
    if java_home:
        candidate = Path(java_home) / "bin" / _JAVAC_EXE
        if candidate.exists() and candidate.is_file():
            return str(candidate)

    return shutil.which("javac")


def compile_source(source_file: Path, output_dir: Path, sourcepath: Sequence[str] = ()) -> None:
    """
    Compile one generated source file into `output_dir`. Types it refers to
    are read from `sourcepath` but never compiled, so the source roots are
    left untouched.
    Raises CompilationFailed when javac is missing, times out or exits non-zero.
    """
    javac = find_javac()
    if javac is None:
        raise CompilationFailed("Can not find java compiler")

    cmd = [javac, "-d", str(output_dir), "-cp", str(output_dir), "-implicit:none"]
    roots = [str(p) for p in sourcepath if p]
    if roots:
        cmd += ["-sourcepath", os.pathsep.join(roots)]
    cmd.append(str(source_file))
    logger.debug("Running %s", " ".join(cmd))

    try:
        creationflags = subprocess.CREATE_NO_WINDOW if sys.platform == "win32" else 0
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=COMPILE_TIMEOUT_SECONDS,
            creationflags=creationflags,
        )
    except subprocess.TimeoutExpired as e:
        raise CompilationFailed(f"javac timed out after {COMPILE_TIMEOUT_SECONDS}s") from e
    except OSError as e:
        raise CompilationFailed(f"javac could not be started: {e}") from e

    if proc.returncode != 0:
        detail = (proc.stderr or proc.stdout or "").strip()
        raise CompilationFailed(
            f"Can not compile generated code (exit {proc.returncode}): {detail[:2000]}"
        )
