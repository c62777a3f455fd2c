"""Path normalization and lookup of paths inside nested tree objects."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Optional, Sequence, Union

from loguru import logger

from ..models import FileInfo, ObjectHash
from ..store.base import ObjectStore
from .errors import InvalidRepoPathError, ObjectLoadError


def normalize_repo_path(work_tree: Union[str, Path], path: Union[str, Path]) -> tuple[str, ...]:
    """Turn an absolute or work-tree-relative path into root-relative segments.

    Raises:
        InvalidRepoPathError: If the path is empty, is the work tree root
            itself, or points outside the work tree
    """
    if not str(path):
        raise InvalidRepoPathError("empty path")

    root = os.path.abspath(work_tree)
    resolved = os.path.normpath(os.path.join(root, path))
    relative = os.path.relpath(resolved, root)

    if relative == os.curdir:
        raise InvalidRepoPathError(f"{path} is the repository root")
    if relative == os.pardir or relative.startswith(os.pardir + os.sep):
        raise InvalidRepoPathError(f"{path} is outside the repository at {root}")

    return tuple(relative.replace(os.sep, "/").split("/"))


def split_tree_path(path: str) -> tuple[str, ...]:
    """Split an already root-relative ``/`` path into segments.

    Raises:
        InvalidRepoPathError: If no segments remain or a segment is '..'
    """
    segments = tuple(part for part in path.split("/") if part and part != ".")
    if not segments:
        raise InvalidRepoPathError(f"empty tree path {path!r}")
    if ".." in segments:
        raise InvalidRepoPathError(f"tree path {path!r} must not contain '..'")
    return segments


@dataclass(frozen=True)
class PathLookup:
    """Outcome of looking up a path in a tree: the entry, or not found.

    Not found covers both an absent path and any object store failure met on
    the way down; the two are deliberately not told apart.
    """
    entry: Optional[FileInfo] = None

    NOT_FOUND: ClassVar["PathLookup"]

    @property
    def found(self) -> bool:
        return self.entry is not None

    @property
    def hash(self) -> Optional[ObjectHash]:
        return self.entry.hash if self.entry is not None else None

    @classmethod
    def found_entry(cls, entry: FileInfo) -> "PathLookup":
        return cls(entry=entry)


PathLookup.NOT_FOUND = PathLookup()


class TreePathResolver:
    """Walks nested tree objects to find the entry at a path.

    Args:
        store: Object store providing tree objects
    """

    def __init__(self, store: ObjectStore) -> None:
        self._store = store

    async def lookup(self, tree_hash: ObjectHash, segments: Sequence[str]) -> PathLookup:
        """Find the entry at ``segments`` below the tree ``tree_hash``.

        The final entry may be a file or a subtree; callers interpret it.

        Raises:
            InvalidRepoPathError: If ``segments`` is empty
        """
        remaining = tuple(segments)
        if not remaining:
            raise InvalidRepoPathError("cannot look up an empty path")

        current = tree_hash
        while True:
            try:
                tree = await self._store.load_object("tree", current)
            except (ObjectLoadError, OSError) as e:
                logger.debug(f"Lookup of {'/'.join(segments)} stopped at {current}: {e}")
                return PathLookup.NOT_FOUND

            entry = tree.get(remaining[0])
            if entry is None:
                return PathLookup.NOT_FOUND
            if len(remaining) == 1:
                return PathLookup.found_entry(entry)

            current = entry.hash
            remaining = remaining[1:]

    async def find(self, tree_hash: ObjectHash, segments: Sequence[str]) -> Optional[FileInfo]:
        """Like lookup(), returning the entry or None."""
        return (await self.lookup(tree_hash, segments)).entry
