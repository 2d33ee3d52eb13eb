import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from config import SCRATCH_PREFIX
from synth.errors import IOFailure

logger = logging.getLogger(__name__)


@contextmanager
def scratch_dir(near: Path, prefix: str = SCRATCH_PREFIX) -> Iterator[Path]:
    """
    Temporary directory next to `near`, removed recursively on exit.
    A failed removal is logged, never raised.
    """
    parent = Path(near).absolute().parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
        tmp = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
    except OSError as e:
        raise IOFailure(f"Cannot create temporary directory in {parent}: {e}") from e

    try:
        yield tmp
    finally:
        try:
            shutil.rmtree(tmp)
        except OSError as e:
            logger.warning("Failed to delete temporary directory %s: %s", tmp, e)
