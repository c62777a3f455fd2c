"""Repository facade tying the read-side components to one object store.

Every component receives the store at construction; there is no global
repository registration. Each public operation keeps its own local state, so
independent operations may run concurrently on the same Repository.
"""

import os
from pathlib import Path
from typing import AsyncIterator, Optional, Union

from loguru import logger

from ..config import Settings, get_settings
from ..models import CommitInfo, FileInfo, GetLogOptions, HeadInfo, ObjectHash
from ..store.base import ObjectStore
from ..store.loose import LooseObjectStore
from .dirty import DirtinessChecker, DirtyVerdict
from .head import HeadResolver
from .history import HistoryWalker, LogHandler
from .tree_path import PathLookup, TreePathResolver, normalize_repo_path

PathLike = Union[str, Path]


class Repository:
    """Read-only view of a working copy and its object store.

    Args:
        work_tree: Root directory of the working copy
        store: Object store holding the repository objects and refs
        settings: Settings to use (default: get_settings())

    Example:
        repo = Repository.open('/srv/project')
        head = await repo.resolve_head()
        if await repo.is_dirty('src/main.py'):
            ...
        changes = await repo.get_log(head.hash, GetLogOptions(path='src/main.py', count=5))
    """

    def __init__(
        self,
        work_tree: PathLike,
        store: ObjectStore,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        repo_config = self.settings.repository

        self.work_tree = Path(os.path.abspath(work_tree))
        self.git_dir = self.work_tree / repo_config.git_dir
        self.store = store

        self.head_resolver = HeadResolver(store, self.git_dir, repo_config.head_file)
        self.tree_resolver = TreePathResolver(store)
        self.dirtiness = DirtinessChecker(
            store,
            self.head_resolver,
            self.tree_resolver,
            self.work_tree,
            hash_algorithm=repo_config.hash_algorithm,
            chunk_size=repo_config.read_chunk_size,
        )
        self.history = HistoryWalker(store, self.tree_resolver)

    @classmethod
    def open(cls, work_tree: PathLike, settings: Optional[Settings] = None) -> "Repository":
        """Open the repository at ``work_tree`` using its on-disk git directory."""
        settings = settings or get_settings()
        repo_config = settings.repository
        git_dir = Path(os.path.abspath(work_tree)) / repo_config.git_dir
        logger.debug(f"Opening repository at {git_dir}")
        store = LooseObjectStore(git_dir, max_ref_depth=repo_config.max_ref_depth)
        return cls(work_tree, store, settings)

    def close(self) -> None:
        """Release files held open by the object store, if it holds any."""
        close = getattr(self.store, "close", None)
        if close is not None:
            close()

    def resolve(self, path: PathLike) -> Path:
        """Get absolute path to file inside working copy."""
        return Path(os.path.normpath(os.path.join(self.work_tree, path)))

    def relative(self, path: PathLike) -> str:
        """Get path to file inside working copy relative to its root, '/'-separated.

        Raises:
            InvalidRepoPathError: If the path is empty or outside the working copy
        """
        return "/".join(normalize_repo_path(self.work_tree, path))

    async def resolve_head(self) -> HeadInfo:
        """Get the branch and commit hash of the working tree HEAD."""
        return await self.head_resolver.resolve()

    async def load_commit(self, commit_hash: ObjectHash) -> CommitInfo:
        """Get info for a commit based on its hash.

        Raises:
            ObjectLoadError: If the commit cannot be loaded
        """
        return await self.store.load_object("commit", commit_hash)

    async def lookup_path(self, tree_hash: ObjectHash, path: PathLike) -> PathLookup:
        """Look up ``path`` (absolute or working-copy relative) inside a tree."""
        segments = normalize_repo_path(self.work_tree, path)
        return await self.tree_resolver.lookup(tree_hash, segments)

    async def find_path(self, tree_hash: ObjectHash, path: PathLike) -> Optional[FileInfo]:
        """Get info for the file at ``path`` inside a commit's tree, or None."""
        return (await self.lookup_path(tree_hash, path)).entry

    async def check_dirty(self, path: PathLike) -> DirtyVerdict:
        """Compare a working-copy file with HEAD and explain the verdict."""
        return await self.dirtiness.check(path)

    async def is_dirty(self, path: PathLike) -> bool:
        """True if the file differs from HEAD or could not be verified."""
        return await self.dirtiness.is_dirty(path)

    def _scoped_options(self, options: Optional[GetLogOptions]) -> GetLogOptions:
        options = options or GetLogOptions()
        if options.path is None:
            return options
        return options.model_copy(update={"path": self.relative(options.path)})

    def iter_log(
        self,
        commit_hash: ObjectHash,
        options: Optional[GetLogOptions] = None,
    ) -> AsyncIterator[CommitInfo]:
        """Iterate commits matching ``options`` from ``commit_hash`` towards the initial commit."""
        return self.history.iter_log(commit_hash, self._scoped_options(options))

    async def walk_log(
        self,
        commit_hash: ObjectHash,
        options: Optional[GetLogOptions],
        handler: LogHandler,
    ) -> None:
        """Walk the commit log, calling ``handler`` for each commit matching ``options``."""
        await self.history.walk_log(commit_hash, self._scoped_options(options), handler)

    async def get_log(
        self,
        commit_hash: ObjectHash,
        options: Optional[GetLogOptions] = None,
    ) -> list[CommitInfo]:
        """Get the list of commits matching ``options``, newest first."""
        return await self.history.get_log(commit_hash, self._scoped_options(options))
