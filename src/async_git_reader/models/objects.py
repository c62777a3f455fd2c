"""Read-only views of git objects and query options.

All models use Pydantic v2 BaseModel with frozen=True for immutability.
"""

from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

ObjectHash: TypeAlias = str  # hex digest
ObjectType: TypeAlias = Literal["commit", "tree", "blob"]

TREE_MODE = 0o040000
FILE_MODE = 0o100644
EXECUTABLE_MODE = 0o100755
SYMLINK_MODE = 0o120000
SUBMODULE_MODE = 0o160000


class FileInfo(BaseModel):
    """A single tree entry: file mode plus the hash of the referenced object."""

    model_config = ConfigDict(frozen=True)

    mode: int = Field(..., ge=0, description="Git file mode (e.g. 0o100644, 0o040000)")
    hash: ObjectHash = Field(..., description="Hash of the blob or subtree")

    @property
    def is_tree(self) -> bool:
        return self.mode == TREE_MODE

    @property
    def is_file(self) -> bool:
        return self.mode in (FILE_MODE, EXECUTABLE_MODE, SYMLINK_MODE)


Tree: TypeAlias = dict[str, FileInfo]


class TimeInfo(BaseModel):
    """Commit timestamp.

    ``offset`` is the time zone offset in minutes west of UTC, so ``+0200``
    decodes to ``-120`` and ``-0500`` to ``300``.
    """

    model_config = ConfigDict(frozen=True)

    seconds: int
    offset: int = 0


class UserTimeInfo(BaseModel):
    """Author or committer signature."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: str
    date: TimeInfo


class CommitInfo(BaseModel):
    """A decoded commit together with its own hash."""

    model_config = ConfigDict(frozen=True)

    tree: ObjectHash
    parents: tuple[ObjectHash, ...] = ()
    author: UserTimeInfo
    committer: UserTimeInfo
    message: str = ""
    hash: ObjectHash


class HeadInfo(BaseModel):
    """Where HEAD points: a branch plus its commit, or a bare commit."""

    model_config = ConfigDict(frozen=True)

    branch: str | None = Field(default=None, description="Branch name when HEAD is refs/heads/<name>")
    hash: ObjectHash = Field(..., description="Commit hash HEAD resolves to")

    @property
    def detached(self) -> bool:
        return self.branch is None


class GetLogOptions(BaseModel):
    """Filtering options for retrieving logs."""

    model_config = ConfigDict(frozen=True)

    path: str | None = Field(default=None, description="Only match commits where the file at path changed")
    count: int | None = Field(default=None, ge=0, description="Only match up to this many commits; None or 0 means unbounded")
