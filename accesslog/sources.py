import gzip
import logging
import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Union

from .errors import SourceUnavailable

logger = logging.getLogger(__name__)

LineSource = Union[str, os.PathLike, Iterable[str], Iterable[bytes]]


def _open(path: Path) -> IO[str]:
    if path.suffix == ".gz":
        return gzip.open(path, "rt", encoding="utf-8", errors="ignore")
    return path.open("r", encoding="utf-8", errors="ignore")


def _read(f: IO[str], path: Path) -> Iterator[str]:
    try:
        yield from f
    except (OSError, EOFError) as e:
        raise SourceUnavailable(f"Cannot read {path}: {e}") from e


def _as_text(line) -> str:
    if isinstance(line, bytes):
        return line.decode("utf-8", errors="ignore")
    return line


@contextmanager
def open_source(source: LineSource):
    """
    Yield an iterator of text lines from a path (plain or .gz) or an iterable.

    A path that cannot be opened raises SourceUnavailable before anything is read.
    """
    if isinstance(source, (str, os.PathLike)):
        path = Path(source)
        try:
            f = _open(path)
        except OSError as e:
            raise SourceUnavailable(f"Cannot open {path}: {e}") from e
        logger.debug("Opened %s", path)
        with f:
            yield _read(f, path)
        return

    try:
        lines = iter(source)
    except TypeError as e:
        raise SourceUnavailable(f"Not a line source: {type(source).__name__}") from e
    yield (_as_text(line) for line in lines)
