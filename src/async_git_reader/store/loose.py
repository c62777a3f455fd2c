"""Read-only object store over a git directory on disk.

Supports:
- zlib-compressed loose objects under ``objects/xx/yyyy...``
- objects in ``objects/pack/*.pack`` files, read through dulwich
- loose ref files, including nested ``ref:`` indirections
- ``packed-refs``

Packed lookups only cover sha1 repositories.
"""

import re
import zlib
from pathlib import Path
from typing import Optional, Union

import anyio
import anyio.to_thread
from dulwich.object_store import DiskObjectStore
from dulwich.objects import Blob, Commit, Tag, Tree
from loguru import logger

from ..core.errors import ObjectLoadError, RefReadError
from ..models import CommitInfo, ObjectHash, ObjectType
from .base import LoadedObject
from .codec import decode_commit, decode_tree, split_object
from .walker import GraphLogWalker

_HASH_RE = re.compile(r"^(?:[0-9a-fA-F]{40}|[0-9a-fA-F]{64})$")

_PACK_TYPES = {cls.type_num: cls.type_name.decode("ascii") for cls in (Blob, Commit, Tag, Tree)}


class LooseObjectStore:
    """ObjectStore reading loose and packed objects and refs from a ``.git`` directory.

    Args:
        git_dir: Path to the git directory (usually ``<work tree>/.git``)
        max_ref_depth: Maximum number of symbolic ref hops followed by read_ref
    """

    def __init__(self, git_dir: Union[str, Path], max_ref_depth: int = 5) -> None:
        self.git_dir = Path(git_dir)
        self.max_ref_depth = max_ref_depth
        self._packs: Optional[DiskObjectStore] = None

    def _object_path(self, object_hash: ObjectHash) -> anyio.Path:
        return anyio.Path(self.git_dir / "objects" / object_hash[:2] / object_hash[2:])

    async def read_raw(self, object_hash: ObjectHash) -> tuple[str, bytes]:
        """Return (type, body) of an object, looking in packfiles when it is not loose."""
        if not _HASH_RE.match(object_hash):
            raise ObjectLoadError(None, object_hash, "malformed object hash")

        object_hash = object_hash.lower()
        try:
            compressed = await self._object_path(object_hash).read_bytes()
        except FileNotFoundError:
            return await self._read_packed(object_hash)
        except OSError as e:
            raise ObjectLoadError(None, object_hash, f"cannot read object: {e}") from e

        try:
            data = zlib.decompress(compressed)
        except zlib.error as e:
            raise ObjectLoadError(None, object_hash, f"corrupt object data: {e}") from e

        return split_object(data, object_hash)

    def _get_packed(self, object_hash: ObjectHash) -> tuple[int, bytes]:
        if self._packs is None:
            self._packs = DiskObjectStore(str(self.git_dir / "objects"))
        return self._packs.get_raw(object_hash.encode("ascii"))

    async def _read_packed(self, object_hash: ObjectHash) -> tuple[str, bytes]:
        if len(object_hash) != 40:
            raise ObjectLoadError(None, object_hash, "object not found")

        try:
            type_num, body = await anyio.to_thread.run_sync(self._get_packed, object_hash)
        except KeyError:
            raise ObjectLoadError(None, object_hash, "object not found") from None
        except (OSError, ValueError, zlib.error) as e:
            raise ObjectLoadError(None, object_hash, f"cannot read packed object: {e}") from e

        object_type = _PACK_TYPES.get(type_num)
        if object_type is None:
            raise ObjectLoadError(None, object_hash, f"unexpected pack object type {type_num}")
        logger.debug(f"Object {object_hash} read from pack as {object_type}")
        return object_type, body

    def close(self) -> None:
        """Close any packfiles opened by packed lookups."""
        if self._packs is not None:
            self._packs.close()
            self._packs = None

    async def load_object(self, object_type: ObjectType, object_hash: ObjectHash) -> LoadedObject:
        actual_type, body = await self.read_raw(object_hash)
        if actual_type != object_type:
            raise ObjectLoadError(object_type, object_hash, f"object is a {actual_type}")

        if object_type == "commit":
            return decode_commit(body, object_hash)
        if object_type == "tree":
            return decode_tree(body, object_hash, len(object_hash) // 2)
        return body

    async def load_commit(self, object_hash: ObjectHash) -> CommitInfo:
        return await self.load_object("commit", object_hash)

    def _ref_file(self, ref_path: str) -> anyio.Path:
        parts = ref_path.split("/")
        if not ref_path or any(part in ("", ".", "..") for part in parts):
            raise RefReadError(ref_path, "invalid ref path")
        return anyio.Path(self.git_dir.joinpath(*parts))

    async def _read_packed_ref(self, ref_path: str) -> Optional[ObjectHash]:
        packed = anyio.Path(self.git_dir / "packed-refs")
        try:
            text = await packed.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise RefReadError(ref_path, f"cannot read packed-refs: {e}") from e

        for line in text.splitlines():
            # comments and peeled tag lines
            if not line or line.startswith(("#", "^")):
                continue
            value, _, name = line.partition(" ")
            if name.strip() == ref_path:
                return value.strip()
        return None

    async def read_ref(self, ref_path: str) -> ObjectHash:
        current = ref_path
        for _ in range(self.max_ref_depth + 1):
            try:
                value = (await self._ref_file(current).read_text(encoding="utf-8")).strip()
            except (FileNotFoundError, IsADirectoryError):
                value = await self._read_packed_ref(current)
                if value is None:
                    raise RefReadError(ref_path, f"{current} not found") from None
            except OSError as e:
                raise RefReadError(ref_path, f"cannot read {current}: {e}") from e

            if value.startswith("ref:"):
                current = value[4:].strip()
                logger.debug(f"Ref {ref_path} points to {current}")
                continue
            if not _HASH_RE.match(value):
                raise RefReadError(ref_path, f"unexpected ref content {value!r}")
            return value

        raise RefReadError(ref_path, f"more than {self.max_ref_depth} symbolic ref hops")

    async def open_log_walker(self, start_hash: ObjectHash) -> GraphLogWalker:
        return GraphLogWalker(self.load_commit, start_hash)
