"""Object store contracts and bundled implementations."""

from .base import LoadedObject, LogWalker, ObjectStore
from .codec import decode_commit, decode_tree, encode_commit, encode_tree, object_id
from .loose import LooseObjectStore
from .memory import MemoryObjectStore
from .walker import GraphLogWalker

__all__ = [
    "GraphLogWalker",
    "LoadedObject",
    "LogWalker",
    "LooseObjectStore",
    "MemoryObjectStore",
    "ObjectStore",
    "decode_commit",
    "decode_tree",
    "encode_commit",
    "encode_tree",
    "object_id",
]
