"""Commit-graph walker shared by the bundled object stores.

Walks from a start commit towards the initial commit, newest committer date
first among the commits reached so far. A linear history is returned newest to
oldest and merged branches are interleaved by date. Commit dates are trusted as
recorded, so a parent with a skewed future date can come out ahead of a child
on another branch.
"""

import heapq
import itertools
from typing import Awaitable, Callable, Optional

from loguru import logger

from ..models import CommitInfo, ObjectHash

CommitLoader = Callable[[ObjectHash], Awaitable[CommitInfo]]


class GraphLogWalker:
    """LogWalker implementation over any async commit loader.

    Commits are loaded lazily: the parents of a returned commit are only loaded
    by the next ``read()``. After ``abort()`` no further commits are loaded and
    ``read()`` returns None.
    """

    def __init__(self, load_commit: CommitLoader, start_hash: ObjectHash) -> None:
        self._load_commit = load_commit
        self._start_hash = start_hash
        self._heap: list[tuple[int, int, CommitInfo]] = []
        self._seen: set[ObjectHash] = set()
        self._unvisited_parents: tuple[ObjectHash, ...] = ()
        self._tiebreak = itertools.count()
        self._started = False
        self._aborted = False

    async def _push(self, commit_hash: ObjectHash) -> None:
        if commit_hash in self._seen:
            return
        self._seen.add(commit_hash)
        commit = await self._load_commit(commit_hash)
        heapq.heappush(
            self._heap,
            (-commit.committer.date.seconds, next(self._tiebreak), commit),
        )

    async def read(self) -> Optional[CommitInfo]:
        if self._aborted:
            return None
        if not self._started:
            self._started = True
            await self._push(self._start_hash)

        parents, self._unvisited_parents = self._unvisited_parents, ()
        for parent in parents:
            await self._push(parent)
        if not self._heap:
            return None

        _, _, commit = heapq.heappop(self._heap)
        self._unvisited_parents = commit.parents
        return commit

    async def abort(self) -> None:
        if not self._aborted:
            logger.debug(f"Log walker from {self._start_hash} released")
        self._aborted = True
        self._heap.clear()
        self._unvisited_parents = ()
