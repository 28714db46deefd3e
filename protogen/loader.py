"""Discover schema files under the input root.

Walks the tree depth-first, in name order at every level, and turns each
regular file into a SchemaFile. Directories are descended into; symbolic
links (to files or directories) are skipped and never followed. Any
directory that cannot be read fails the whole walk.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from .errors import FilesystemError
from .logging import get_logger
from .models import GenerationJob, SchemaFile
from .naming import module_name_for, unit_name_for

PROTOS_DIR = Path("protos")

logger = get_logger("loader")


def _list_dir(directory: Path) -> list[tuple[Path, bool]]:
    """Return (path, is_dir) for the non-symlink entries of ``directory``, by name."""
    try:
        with os.scandir(directory) as it:
            entries = [
                (entry.name, entry.is_dir(follow_symlinks=False))
                for entry in it
                if not entry.is_symlink()
            ]
    except OSError as exc:
        raise FilesystemError(f"cannot read directory {directory}: {exc}") from exc
    return [(directory / name, is_dir) for name, is_dir in sorted(entries)]


def _walk(root: Path) -> Iterator[Path]:
    # Explicit stack of pending listings; depth is bounded only by the filesystem.
    stack = [iter(_list_dir(root))]
    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
            continue
        path, is_dir = item
        if is_dir:
            stack.append(iter(_list_dir(path)))
        else:
            yield path


def discover_schemas(input_root: Path | None = None) -> list[SchemaFile]:
    """Return one SchemaFile per regular file under ``input_root`` (default protos/)."""
    root = Path(input_root) if input_root is not None else PROTOS_DIR
    if not root.exists():
        raise FilesystemError(f"input directory {root} does not exist")
    if not root.is_dir():
        raise FilesystemError(f"input path {root} is not a directory")

    schemas = [
        SchemaFile(
            path=path,
            module_name=module_name_for(path.name),
            unit=unit_name_for(path, root),
        )
        for path in _walk(root)
    ]
    logger.info("Discovered %d schema file(s) under %s", len(schemas), root)
    return schemas


def build_job(input_root: Path, output_root: Path) -> GenerationJob:
    """Discover ``input_root`` and bundle the result with both roots."""
    input_root = Path(input_root)
    return GenerationJob(
        schemas=tuple(discover_schemas(input_root)),
        input_root=input_root,
        output_root=Path(output_root),
    )
