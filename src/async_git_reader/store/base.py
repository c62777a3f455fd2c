"""Contracts between the read-side core and an object store.

The core never reads objects or refs itself. It is handed an ObjectStore at
construction and only talks to it through the methods below.
"""

from typing import Optional, Protocol, Union, runtime_checkable

from ..models import CommitInfo, ObjectHash, ObjectType, Tree

LoadedObject = Union[CommitInfo, Tree, bytes]


@runtime_checkable
class LogWalker(Protocol):
    """Lazy, abortable iterator over a commit graph.

    Commits come out in reverse topological / chronological order, from the
    start commit towards the initial commit.
    """

    async def read(self) -> Optional[CommitInfo]:
        """Return the next commit, or None once the walk is exhausted."""
        ...

    async def abort(self) -> None:
        """Release the walker. Safe to call more than once."""
        ...


@runtime_checkable
class ObjectStore(Protocol):
    """Typed object loading, ref reading and log walking."""

    async def load_object(self, object_type: ObjectType, object_hash: ObjectHash) -> LoadedObject:
        """Load an object of the declared type.

        Raises:
            ObjectLoadError: If the object is missing, has another type or is corrupt
        """
        ...

    async def read_ref(self, ref_path: str) -> ObjectHash:
        """Resolve a ref path such as 'refs/heads/main' to a commit hash.

        Raises:
            RefReadError: If the ref does not exist or cannot be read
        """
        ...

    async def open_log_walker(self, start_hash: ObjectHash) -> LogWalker:
        """Create a walker starting at ``start_hash``."""
        ...
