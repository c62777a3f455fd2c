"""Data models for async-git-reader."""

from .objects import (
    EXECUTABLE_MODE,
    FILE_MODE,
    SUBMODULE_MODE,
    SYMLINK_MODE,
    TREE_MODE,
    CommitInfo,
    FileInfo,
    GetLogOptions,
    HeadInfo,
    ObjectHash,
    ObjectType,
    TimeInfo,
    Tree,
    UserTimeInfo,
)

__all__ = [
    "EXECUTABLE_MODE",
    "FILE_MODE",
    "SUBMODULE_MODE",
    "SYMLINK_MODE",
    "TREE_MODE",
    "CommitInfo",
    "FileInfo",
    "GetLogOptions",
    "HeadInfo",
    "ObjectHash",
    "ObjectType",
    "TimeInfo",
    "Tree",
    "UserTimeInfo",
]
