"""In-memory object store.

Objects are kept as encoded bodies keyed by their git object id, so hashes
computed here match the ones git itself would assign to the same content.
"""

from typing import Iterable, Mapping, Optional, Union

from ..core.errors import ObjectLoadError, RefReadError
from ..models import CommitInfo, FileInfo, ObjectHash, ObjectType, UserTimeInfo
from .base import LoadedObject
from .codec import decode_commit, decode_tree, encode_commit, encode_tree, object_id
from .walker import GraphLogWalker


class MemoryObjectStore:
    """ObjectStore backed by dictionaries.

    Args:
        algorithm: Hash algorithm used to name objects ('sha1' or 'sha256')
    """

    def __init__(self, algorithm: str = "sha1") -> None:
        self.algorithm = algorithm
        self._objects: dict[ObjectHash, tuple[ObjectType, bytes]] = {}
        self._refs: dict[str, ObjectHash] = {}

    @property
    def digest_size(self) -> int:
        return 32 if self.algorithm == "sha256" else 20

    def add_object(self, object_type: ObjectType, body: bytes) -> ObjectHash:
        oid = object_id(object_type, body, self.algorithm)
        self._objects[oid] = (object_type, body)
        return oid

    def add_blob(self, content: Union[bytes, str]) -> ObjectHash:
        if isinstance(content, str):
            content = content.encode("utf-8")
        return self.add_object("blob", content)

    def add_tree(self, entries: Mapping[str, FileInfo]) -> ObjectHash:
        return self.add_object("tree", encode_tree(entries))

    def add_commit(
        self,
        tree: ObjectHash,
        parents: Iterable[ObjectHash] = (),
        author: Optional[UserTimeInfo] = None,
        committer: Optional[UserTimeInfo] = None,
        message: str = "",
    ) -> ObjectHash:
        if author is None:
            raise ValueError("author is required")
        body = encode_commit(tree, parents, author, committer or author, message)
        return self.add_object("commit", body)

    def set_ref(self, ref_path: str, value: ObjectHash) -> None:
        self._refs[ref_path] = value

    def __contains__(self, object_hash: object) -> bool:
        return object_hash in self._objects

    async def load_object(self, object_type: ObjectType, object_hash: ObjectHash) -> LoadedObject:
        stored = self._objects.get(object_hash)
        if stored is None:
            raise ObjectLoadError(object_type, object_hash, "object not found")

        actual_type, body = stored
        if actual_type != object_type:
            raise ObjectLoadError(object_type, object_hash, f"object is a {actual_type}")

        if object_type == "commit":
            return decode_commit(body, object_hash)
        if object_type == "tree":
            return decode_tree(body, object_hash, self.digest_size)
        return body

    async def load_commit(self, object_hash: ObjectHash) -> CommitInfo:
        return await self.load_object("commit", object_hash)

    async def read_ref(self, ref_path: str) -> ObjectHash:
        try:
            return self._refs[ref_path]
        except KeyError:
            raise RefReadError(ref_path, "ref not found") from None

    async def open_log_walker(self, start_hash: ObjectHash) -> GraphLogWalker:
        return GraphLogWalker(self.load_commit, start_hash)
