"""HEAD resolution.

HEAD either holds a commit hash directly (detached) or a symbolic ref such as
``ref: refs/heads/main`` that is dereferenced through the object store.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import anyio
from loguru import logger

from ..models import HeadInfo
from ..store.base import ObjectStore
from .errors import HeadParseError

HASH_RE = re.compile(r"^(?:[0-9A-Fa-f]{40}|[0-9A-Fa-f]{64})$")
SYMBOLIC_REF_RE = re.compile(r"^ref:\s*(\S+)$")
BRANCH_REF_RE = re.compile(r"^refs/heads/([A-Za-z0-9]+(?:[-./][A-Za-z0-9]+)*)$")


@dataclass(frozen=True)
class HeadPointer:
    """Parsed HEAD content: exactly one of ``hash`` or ``ref_path`` is set."""
    hash: Optional[str] = None
    ref_path: Optional[str] = None

    @property
    def symbolic(self) -> bool:
        return self.ref_path is not None


def parse_head(content: str) -> HeadPointer:
    """Parse the text of a HEAD file.

    Raises:
        HeadParseError: If the content is neither a full hash nor ``ref: <path>``
    """
    head = content.strip()

    if HASH_RE.match(head):
        return HeadPointer(hash=head)

    match = SYMBOLIC_REF_RE.match(head)
    if match:
        return HeadPointer(ref_path=match.group(1))

    raise HeadParseError(head)


def branch_name(ref_path: str) -> Optional[str]:
    """Return the branch name for ``refs/heads/<name>`` ref paths, else None."""
    match = BRANCH_REF_RE.match(ref_path)
    return match.group(1) if match else None


class HeadResolver:
    """Resolves the repository HEAD to a commit hash and optional branch.

    Args:
        store: Object store used to dereference symbolic refs
        git_dir: Path to the git directory holding the HEAD file
        head_file: Name of the HEAD file inside ``git_dir``
    """

    def __init__(self, store: ObjectStore, git_dir: Union[str, Path], head_file: str = "HEAD") -> None:
        self._store = store
        self._head_path = anyio.Path(Path(git_dir) / head_file)

    async def resolve(self) -> HeadInfo:
        """Read and resolve HEAD.

        Raises:
            OSError: If the HEAD file cannot be read
            HeadParseError: If HEAD content is unrecognized
            RefReadError: If the symbolic ref cannot be dereferenced
        """
        content = await self._head_path.read_text(encoding="utf-8")
        pointer = parse_head(content)

        if not pointer.symbolic:
            logger.debug(f"HEAD is detached at {pointer.hash}")
            return HeadInfo(hash=pointer.hash)

        commit_hash = await self._store.read_ref(pointer.ref_path)
        branch = branch_name(pointer.ref_path)
        logger.debug(f"HEAD is {pointer.ref_path} ({commit_hash})")
        return HeadInfo(branch=branch, hash=commit_hash)
