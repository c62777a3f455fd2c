"""Working-copy dirtiness detection.

A file is clean only when its blob hash, computed from the bytes on disk, is
exactly the hash HEAD records for the same path. Anything that stops the
comparison from completing (missing file, unreadable HEAD, missing commit,
untracked path, read error) produces a dirty verdict instead of an error, so
an unverifiable file is never reported as clean.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Optional, Union

import anyio
from loguru import logger

from ..models import ObjectHash
from ..store.base import ObjectStore
from .digest import DEFAULT_CHUNK_SIZE, blob_header, hash_file
from .errors import GitReaderError, InvalidRepoPathError, StreamError
from .head import HeadResolver
from .tree_path import TreePathResolver, normalize_repo_path


class DirtyReason(StrEnum):
    """Why a path received its verdict."""

    CLEAN = "clean"
    MODIFIED = "modified"
    INVALID_PATH = "invalid_path"
    WORKING_FILE_UNAVAILABLE = "working_file_unavailable"
    HEAD_UNRESOLVED = "head_unresolved"
    COMMIT_UNAVAILABLE = "commit_unavailable"
    NOT_IN_HEAD = "not_in_head"
    HASH_FAILED = "hash_failed"


@dataclass(frozen=True)
class DirtyVerdict:
    """Result of comparing one working-copy path against HEAD.

    Attributes:
        path: Path as given by the caller
        dirty: True if the file differs from HEAD or could not be verified
        reason: Which step decided the verdict
        stored_hash: Blob hash recorded at HEAD, if it was reached
        working_hash: Blob hash of the working file, if it was computed
    """
    path: str
    dirty: bool
    reason: DirtyReason
    stored_hash: Optional[ObjectHash] = None
    working_hash: Optional[ObjectHash] = None

    def __bool__(self) -> bool:
        return self.dirty


class DirtinessChecker:
    """Decides whether working-copy files differ from the HEAD commit.

    Args:
        store: Object store holding commits and trees
        head_resolver: Resolver for the current HEAD
        tree_resolver: Resolver for paths inside commit trees
        work_tree: Root of the working copy
        hash_algorithm: Algorithm the repository names objects with
        chunk_size: Read size used while hashing working files
    """

    def __init__(
        self,
        store: ObjectStore,
        head_resolver: HeadResolver,
        tree_resolver: TreePathResolver,
        work_tree: Union[str, Path],
        hash_algorithm: str = "sha1",
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._store = store
        self._head_resolver = head_resolver
        self._tree_resolver = tree_resolver
        self._work_tree = Path(work_tree)
        self._hash_algorithm = hash_algorithm
        self._chunk_size = chunk_size

    def _dirty(self, path: str, reason: DirtyReason, error: object, **hashes: Optional[str]) -> DirtyVerdict:
        logger.debug(f"{path} treated as dirty ({reason}): {error}")
        return DirtyVerdict(path=path, dirty=True, reason=reason, **hashes)

    async def check(self, path: Union[str, Path]) -> DirtyVerdict:
        """Compare the working copy of ``path`` with the version at HEAD."""
        display = str(path)

        # 1. Normalize path and stat the working file
        try:
            segments = normalize_repo_path(self._work_tree, path)
        except InvalidRepoPathError as e:
            return self._dirty(display, DirtyReason.INVALID_PATH, e)

        working_path = anyio.Path(self._work_tree.joinpath(*segments))
        try:
            stats = await working_path.stat()
        except OSError as e:
            return self._dirty(display, DirtyReason.WORKING_FILE_UNAVAILABLE, e)

        # 2. Resolve HEAD
        try:
            head = await self._head_resolver.resolve()
        except (GitReaderError, OSError, UnicodeDecodeError) as e:
            return self._dirty(display, DirtyReason.HEAD_UNRESOLVED, e)

        # 3. Load the HEAD commit
        try:
            commit = await self._store.load_object("commit", head.hash)
        except (GitReaderError, OSError) as e:
            return self._dirty(display, DirtyReason.COMMIT_UNAVAILABLE, e)

        # 4. Find the file in the commit tree
        lookup = await self._tree_resolver.lookup(commit.tree, segments)
        if not lookup.found:
            return self._dirty(display, DirtyReason.NOT_IN_HEAD, f"not tracked at {head.hash}")
        stored_hash = lookup.hash

        # 5. Hash the working file the way git hashes blobs
        try:
            working_hash = await hash_file(
                working_path,
                self._hash_algorithm,
                blob_header(stats.st_size),
                self._chunk_size,
            )
        except (StreamError, ValueError) as e:
            return self._dirty(display, DirtyReason.HASH_FAILED, e, stored_hash=stored_hash)

        # 6. Compare
        dirty = stored_hash != working_hash
        reason = DirtyReason.MODIFIED if dirty else DirtyReason.CLEAN
        if dirty:
            logger.debug(f"{display} modified: HEAD {stored_hash}, working copy {working_hash}")
        return DirtyVerdict(
            path=display,
            dirty=dirty,
            reason=reason,
            stored_hash=stored_hash,
            working_hash=working_hash,
        )

    async def is_dirty(self, path: Union[str, Path]) -> bool:
        """Return True if ``path`` differs from HEAD or could not be verified."""
        return (await self.check(path)).dirty
