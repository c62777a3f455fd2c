"""Core read-side functionality package."""

from .digest import blob_header, compute_digest, hash_file, iter_file_chunks
from .dirty import DirtinessChecker, DirtyReason, DirtyVerdict
from .errors import (
    GitReaderError,
    HeadParseError,
    InvalidRepoPathError,
    ObjectLoadError,
    RefReadError,
    StreamError,
)
from .head import HeadPointer, HeadResolver, branch_name, parse_head
from .history import HistoryWalker
from .repository import Repository
from .tree_path import PathLookup, TreePathResolver, normalize_repo_path, split_tree_path

__all__ = [
    "DirtinessChecker",
    "DirtyReason",
    "DirtyVerdict",
    "GitReaderError",
    "HeadParseError",
    "HeadPointer",
    "HeadResolver",
    "HistoryWalker",
    "InvalidRepoPathError",
    "ObjectLoadError",
    "PathLookup",
    "RefReadError",
    "Repository",
    "StreamError",
    "TreePathResolver",
    "blob_header",
    "branch_name",
    "compute_digest",
    "hash_file",
    "iter_file_chunks",
    "normalize_repo_path",
    "parse_head",
    "split_tree_path",
]
