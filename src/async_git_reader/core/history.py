"""Commit history traversal, optionally limited to commits that changed a path.

Walking a path-filtered log works with one commit of lag. Commits arrive
newest first; the walker keeps the last commit read together with the hash
the path had in it. When a newer-to-older step changes that hash, the pending
commit is the oldest one still holding the newer content, i.e. the commit
that introduced it, and it is emitted. The walk ends early once the path no
longer exists in the commit being read.
"""

import inspect
from contextlib import aclosing
from typing import AsyncIterator, Awaitable, Callable, Optional, Union

from loguru import logger

from ..models import CommitInfo, GetLogOptions, ObjectHash
from ..store.base import ObjectStore
from .tree_path import TreePathResolver, split_tree_path

LogHandler = Callable[[CommitInfo], Union[None, Awaitable[None]]]


class HistoryWalker:
    """Produces filtered commit logs from the object store's log walker.

    Args:
        store: Object store providing log walkers
        tree_resolver: Resolver used to find the filtered path in each commit
    """

    def __init__(self, store: ObjectStore, tree_resolver: TreePathResolver) -> None:
        self._store = store
        self._tree_resolver = tree_resolver

    async def iter_log(
        self,
        start_hash: ObjectHash,
        options: Optional[GetLogOptions] = None,
    ) -> AsyncIterator[CommitInfo]:
        """Yield commits matching ``options`` from ``start_hash`` towards the initial commit.

        The underlying walker is released on every exit path, including when
        the consumer stops iterating early.

        Raises:
            ObjectLoadError: If the store fails while walking; propagated as-is
        """
        options = options or GetLogOptions()
        segments = split_tree_path(options.path) if options.path else None
        remaining = options.count or None

        walker = await self._store.open_log_walker(start_hash)
        try:
            if segments is None:
                while True:
                    entry = await walker.read()
                    if entry is None:
                        break
                    yield entry
                    if remaining is not None:
                        remaining -= 1
                        if remaining == 0:
                            break
                return

            pending: Optional[CommitInfo] = None
            pending_hash: Optional[ObjectHash] = None
            while True:
                entry = await walker.read()
                if entry is None:
                    if pending is not None:
                        yield pending
                    break

                lookup = await self._tree_resolver.lookup(entry.tree, segments)
                file_hash = lookup.hash

                if pending is not None and file_hash != pending_hash:
                    yield pending
                    if remaining is not None:
                        remaining -= 1

                pending = entry
                pending_hash = file_hash

                if file_hash is None:
                    logger.debug(f"{options.path} absent at {entry.hash}, stopping walk")
                    break
                if remaining == 0:
                    break
        finally:
            await walker.abort()

    async def walk_log(
        self,
        start_hash: ObjectHash,
        options: Optional[GetLogOptions],
        handler: LogHandler,
    ) -> None:
        """Call ``handler`` for each commit matching ``options``.

        ``handler`` may be a plain function or a coroutine function. Commits
        already handed to it stay delivered if the walk later fails.
        """
        async with aclosing(self.iter_log(start_hash, options)) as commits:
            async for entry in commits:
                result = handler(entry)
                if inspect.isawaitable(result):
                    await result

    async def get_log(
        self,
        start_hash: ObjectHash,
        options: Optional[GetLogOptions] = None,
    ) -> list[CommitInfo]:
        """Return all commits matching ``options`` in emission order."""
        result: list[CommitInfo] = []
        await self.walk_log(start_hash, options, result.append)
        return result
