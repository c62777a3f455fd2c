"""Exception taxonomy for async-git-reader."""

from typing import Optional


class GitReaderError(Exception):
    """Base class for all errors raised by this package."""
    pass


class HeadParseError(GitReaderError):
    """Raised when HEAD holds neither a commit hash nor a symbolic ref."""

    def __init__(self, content: str) -> None:
        self.content = content
        super().__init__(f"Error parsing HEAD {content!r}")


class StreamError(GitReaderError):
    """Raised when a byte source fails before it is fully consumed."""
    pass


class ObjectLoadError(GitReaderError):
    """Raised when the object store cannot load an object.

    Covers missing objects, objects of an unexpected type and corrupt data.
    """

    def __init__(self, object_type: Optional[str], object_hash: str, reason: str) -> None:
        self.object_type = object_type
        self.object_hash = object_hash
        self.reason = reason
        label = object_type or "object"
        super().__init__(f"Cannot load {label} {object_hash}: {reason}")


class RefReadError(GitReaderError):
    """Raised when the object store cannot resolve a ref to a hash."""

    def __init__(self, ref_path: str, reason: str) -> None:
        self.ref_path = ref_path
        self.reason = reason
        super().__init__(f"Cannot read ref {ref_path}: {reason}")


class InvalidRepoPathError(GitReaderError, ValueError):
    """Raised for empty paths or paths outside the working tree."""
    pass
