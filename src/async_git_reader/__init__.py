"""Async read-side traversal and integrity checks over git object stores."""

__version__ = "0.1.0"

from .core import (
    DirtyReason,
    DirtyVerdict,
    GitReaderError,
    HeadParseError,
    InvalidRepoPathError,
    ObjectLoadError,
    PathLookup,
    RefReadError,
    Repository,
    StreamError,
)
from .models import CommitInfo, FileInfo, GetLogOptions, HeadInfo, TimeInfo, UserTimeInfo

__all__ = [
    "__version__",
    "CommitInfo",
    "DirtyReason",
    "DirtyVerdict",
    "FileInfo",
    "GetLogOptions",
    "GitReaderError",
    "HeadInfo",
    "HeadParseError",
    "InvalidRepoPathError",
    "ObjectLoadError",
    "PathLookup",
    "RefReadError",
    "Repository",
    "StreamError",
    "TimeInfo",
    "UserTimeInfo",
]
