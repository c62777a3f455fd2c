"""Shared fixtures: in-memory object stores and on-disk working copies."""

from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

import pytest

from async_git_reader.config import Settings
from async_git_reader.core import Repository
from async_git_reader.models import FILE_MODE, TREE_MODE, FileInfo, TimeInfo, UserTimeInfo
from async_git_reader.store import MemoryObjectStore


def signature(seconds: int, name: str = "Ada Lovelace", email: str = "ada@example.com") -> UserTimeInfo:
    return UserTimeInfo(name=name, email=email, date=TimeInfo(seconds=seconds, offset=-60))


def _write_tree(store: MemoryObjectStore, files: Mapping[str, bytes]) -> str:
    nested: dict = {}
    for path, content in files.items():
        *dirs, name = path.split("/")
        current = nested
        for dirname in dirs:
            current = current.setdefault(dirname, {})
        current[name] = content

    def write(node: dict) -> str:
        entries = {}
        for name, value in node.items():
            if isinstance(value, dict):
                entries[name] = FileInfo(mode=TREE_MODE, hash=write(value))
            else:
                entries[name] = FileInfo(mode=FILE_MODE, hash=store.add_blob(value))
        return store.add_tree(entries)

    return write(nested)


CommitFiles = Callable[..., str]


@pytest.fixture
def store() -> MemoryObjectStore:
    """Create an empty in-memory object store."""
    return MemoryObjectStore()


@pytest.fixture
def settings() -> Settings:
    """Create default settings."""
    return Settings()


@pytest.fixture
def commit_files(store: MemoryObjectStore) -> CommitFiles:
    """Factory committing a {path: bytes} snapshot to the store, returning the commit hash."""

    def _commit(
        files: Mapping[str, bytes],
        parents: Iterable[str] = (),
        seconds: int = 1_700_000_000,
        message: str = "commit\n",
    ) -> str:
        tree = _write_tree(store, files)
        return store.add_commit(tree, parents, author=signature(seconds), message=message)

    return _commit


@pytest.fixture
def work_tree(tmp_path: Path) -> Path:
    """Create an empty working copy with a .git directory."""
    (tmp_path / ".git").mkdir()
    return tmp_path


@pytest.fixture
def make_repo(work_tree: Path, store: MemoryObjectStore, settings: Settings) -> Callable[..., Repository]:
    """Factory writing HEAD and working files, returning a Repository over the memory store."""

    def _make(
        head: str,
        files: Optional[Mapping[str, bytes]] = None,
    ) -> Repository:
        (work_tree / ".git" / "HEAD").write_text(head + "\n", encoding="utf-8")
        for path, content in (files or {}).items():
            target = work_tree / path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
        return Repository(work_tree, store, settings)

    return _make
