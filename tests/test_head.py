"""Tests for HEAD parsing and resolution."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from async_git_reader.core.errors import HeadParseError, RefReadError
from async_git_reader.core.head import HeadResolver, branch_name, parse_head
from async_git_reader.store import MemoryObjectStore

COMMIT = "a94a8fe5ccb19ba61c4c0873d391e987982fbbd3"


def write_head(git_dir: Path, content: str) -> None:
    git_dir.mkdir(exist_ok=True)
    (git_dir / "HEAD").write_text(content, encoding="utf-8")


class TestParseHead:
    """Tests for parse_head function."""

    def test_detached_hash(self):
        """Test parsing a detached HEAD hash."""
        pointer = parse_head(COMMIT + "\n")
        assert pointer.hash == COMMIT
        assert pointer.ref_path is None
        assert not pointer.symbolic

    def test_uppercase_hash_accepted(self):
        """Test that an uppercase hash is accepted."""
        assert parse_head(COMMIT.upper()).hash == COMMIT.upper()

    def test_sha256_hash(self):
        """Test parsing a 64 character HEAD hash."""
        value = "ab" * 32
        assert parse_head(value).hash == value

    def test_symbolic_ref(self):
        """Test parsing a symbolic HEAD."""
        pointer = parse_head("ref: refs/heads/main\n")
        assert pointer.ref_path == "refs/heads/main"
        assert pointer.symbolic

    def test_symbolic_ref_without_space(self):
        """Test parsing a symbolic HEAD without a space after ref:."""
        assert parse_head("ref:refs/heads/main").ref_path == "refs/heads/main"

    @pytest.mark.parametrize("content", [
        "",
        "garbage",
        COMMIT[:39],
        COMMIT + "0",
        "ref:",
        "ref: refs/heads/a b",
        "refs/heads/main",
    ])
    def test_unrecognized_content(self, content):
        """Test that unrecognized HEAD content raises HeadParseError."""
        with pytest.raises(HeadParseError) as exc_info:
            parse_head(content)
        assert exc_info.value.content == content.strip()


class TestBranchName:
    """Tests for branch_name function."""

    @pytest.mark.parametrize("ref_path,expected", [
        ("refs/heads/main", "main"),
        ("refs/heads/feature/login-form", "feature/login-form"),
        ("refs/heads/release-1.2", "release-1.2"),
        ("refs/heads/v2", "v2"),
    ])
    def test_branch_refs(self, ref_path, expected):
        """Test branch names extracted from refs/heads paths."""
        assert branch_name(ref_path) == expected

    @pytest.mark.parametrize("ref_path", [
        "refs/remotes/origin/main",
        "refs/tags/v1.0",
        "refs/heads/",
        "refs/heads/-leading",
        "refs/heads/double--dash",
        "refs/heads/trailing.",
    ])
    def test_non_branch_refs(self, ref_path):
        """Test that non-branch refs and malformed branch names have no branch name."""
        assert branch_name(ref_path) is None


class TestHeadResolver:
    """Tests for HeadResolver against a HEAD file on disk."""

    @pytest.mark.asyncio
    async def test_detached_head(self, tmp_path: Path):
        """Test resolving a detached HEAD."""
        write_head(tmp_path / ".git", COMMIT + "\n")
        store = MemoryObjectStore()
        store.read_ref = AsyncMock()

        head = await HeadResolver(store, tmp_path / ".git").resolve()

        assert head.hash == COMMIT
        assert head.branch is None
        assert head.detached
        store.read_ref.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_branch_head(self, tmp_path: Path):
        """Test resolving HEAD on a branch."""
        write_head(tmp_path / ".git", "ref: refs/heads/main\n")
        store = MemoryObjectStore()
        store.set_ref("refs/heads/main", COMMIT)

        head = await HeadResolver(store, tmp_path / ".git").resolve()

        assert head.branch == "main"
        assert head.hash == COMMIT
        assert not head.detached

    @pytest.mark.asyncio
    async def test_single_ref_lookup(self, tmp_path: Path):
        """Test that a symbolic HEAD is dereferenced with one read_ref call."""
        write_head(tmp_path / ".git", "ref: refs/heads/feature/x\n")
        store = MemoryObjectStore()
        store.read_ref = AsyncMock(return_value=COMMIT)

        head = await HeadResolver(store, tmp_path / ".git").resolve()

        assert head.branch == "feature/x"
        store.read_ref.assert_awaited_once_with("refs/heads/feature/x")

    @pytest.mark.asyncio
    async def test_non_branch_symbolic_ref(self, tmp_path: Path):
        """Test that a symbolic HEAD outside refs/heads has no branch."""
        write_head(tmp_path / ".git", "ref: refs/remotes/origin/main\n")
        store = MemoryObjectStore()
        store.set_ref("refs/remotes/origin/main", COMMIT)

        head = await HeadResolver(store, tmp_path / ".git").resolve()

        assert head.branch is None
        assert head.hash == COMMIT

    @pytest.mark.asyncio
    async def test_unparseable_head(self, tmp_path: Path):
        """Test that unparseable HEAD content raises HeadParseError."""
        write_head(tmp_path / ".git", "not a head\n")

        with pytest.raises(HeadParseError):
            await HeadResolver(MemoryObjectStore(), tmp_path / ".git").resolve()

    @pytest.mark.asyncio
    async def test_dangling_branch(self, tmp_path: Path):
        """Test that a branch without a ref raises RefReadError."""
        write_head(tmp_path / ".git", "ref: refs/heads/unborn\n")

        with pytest.raises(RefReadError) as exc_info:
            await HeadResolver(MemoryObjectStore(), tmp_path / ".git").resolve()
        assert exc_info.value.ref_path == "refs/heads/unborn"

    @pytest.mark.asyncio
    async def test_missing_head_file(self, tmp_path: Path):
        """Test that a missing HEAD file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            await HeadResolver(MemoryObjectStore(), tmp_path / ".git").resolve()

    @pytest.mark.asyncio
    async def test_custom_head_file(self, tmp_path: Path):
        """Test resolving a HEAD file with a configured name."""
        git_dir = tmp_path / ".git"
        git_dir.mkdir()
        (git_dir / "ORIG_HEAD").write_text(COMMIT, encoding="utf-8")

        head = await HeadResolver(MemoryObjectStore(), git_dir, "ORIG_HEAD").resolve()
        assert head.hash == COMMIT
