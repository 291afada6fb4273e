from __future__ import annotations

import os
from itertools import chain
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from apiscout.domain.models import EndpointRecord
from apiscout.extractors.javascript import processor as javascript_processor
from apiscout.extractors.profiles import FrameworkProfile
from apiscout.extractors.typescript import processor as typescript_processor
from apiscout.repo.ignore import should_ignore_dir
from apiscout.utils.exceptions import FileSystemError
from apiscout.utils.logger import get_logger

logger = get_logger(name=__name__)

FileProcessor = Callable[..., tuple[EndpointRecord, ...]]

PROCESSORS: dict[str, FileProcessor] = {
    ".ts": typescript_processor.extract_endpoints_from_file,
    ".js": javascript_processor.extract_endpoints_from_file,
}


def iter_source_files(root: Path, ignore_dirs: Iterable[str] = ()) -> Iterator[Path]:
    """
    Yield every .ts/.js file under root, directories and names in sorted order.

    No depth limit; symlinked directories are not followed. Any OSError while
    listing a directory aborts the walk as FileSystemError.
    """
    ignore = frozenset(ignore_dirs)
    for current, dirs, files in _walk(root):
        current_p = Path(current)

        dirs[:] = sorted(d for d in dirs if not should_ignore_dir(current_p / d, ignore))

        for name in sorted(files):
            if Path(name).suffix in PROCESSORS:
                yield current_p / name


def walk_directory(
    root: Path,
    profile: FrameworkProfile,
    object_instance: str,
    ignore_dirs: Iterable[str] = (),
    relative_to: Optional[Path] = None,
) -> list[EndpointRecord]:
    """
    Run the matching file processor on every source file under root and
    concatenate the per-file results in walk order.

    `relative_to` switches sourceFile from the walked path to a path relative
    to that directory (used for temporary checkouts).
    """
    per_file = (
        _process(path, profile, object_instance, relative_to)
        for path in iter_source_files(root, ignore_dirs)
    )
    records = list(chain.from_iterable(per_file))
    logger.debug("Walked %s: %d endpoint(s)", root, len(records))
    return records


def _process(
    path: Path,
    profile: FrameworkProfile,
    object_instance: str,
    relative_to: Optional[Path],
) -> tuple[EndpointRecord, ...]:
    processor = PROCESSORS[path.suffix]
    source_file = path.relative_to(relative_to).as_posix() if relative_to is not None else str(path)
    try:
        return processor(path, profile, object_instance, source_file=source_file)
    except OSError as e:
        raise FileSystemError(path, e.strerror or str(e)) from e


def _walk(root: Path):
    return os.walk(root, onerror=_raise_walk_error, followlinks=False)


def _raise_walk_error(error: OSError) -> None:
    raise FileSystemError(error.filename or "", error.strerror or str(error)) from error


def _file_contains_any(path: Path | str, needles: list[str], max_bytes: int = 200_000) -> bool:
    try:
        with open(path, "rb") as f:
            data = f.read(max_bytes)
    except OSError:
        return False
    text = data.decode("utf-8", errors="ignore")
    return any(n in text for n in needles)
