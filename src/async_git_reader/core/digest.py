"""Streaming content hashing with git-style object headers.

This module provides digest computation over asynchronous byte sources:
- compute_digest: hex digest of an optional header prefix followed by a stream
- blob_header: the ``"blob <size>\\0"`` header git prepends before hashing
- iter_file_chunks: chunked async reads of a file via anyio
- hash_file: compute_digest over a file on disk

Raw bytes are hashed as-is, with no line ending normalization.
"""

import hashlib
import os
from typing import AsyncIterable, AsyncIterator, Optional, Union

import anyio

from .errors import StreamError

DEFAULT_CHUNK_SIZE = 64 * 1024


def blob_header(size: int) -> str:
    """Return the header git hashes in front of blob content of ``size`` bytes."""
    return f"blob {size}\0"


async def compute_digest(
    source: AsyncIterable[bytes],
    algorithm: str = "sha1",
    prefix: Optional[Union[str, bytes]] = None,
) -> str:
    """Compute the hex digest of ``prefix`` followed by every chunk of ``source``.

    Args:
        source: Async iterable of byte chunks, consumed fully and in order
        algorithm: hashlib algorithm name (e.g. 'sha1', 'sha256')
        prefix: Optional header hashed before any stream bytes. Strings are
            encoded as UTF-8.

    Returns:
        Lowercase hex digest string

    Raises:
        ValueError: If the algorithm is not supported by hashlib
        StreamError: If the source fails before it is exhausted. Nothing
            hashed so far is exposed.
    """
    digest = hashlib.new(algorithm)

    if prefix:
        digest.update(prefix.encode("utf-8") if isinstance(prefix, str) else prefix)

    try:
        async for chunk in source:
            digest.update(chunk)
    except Exception as e:
        raise StreamError(f"Byte source failed while hashing: {e}") from e

    return digest.hexdigest()


async def iter_file_chunks(
    path: Union[str, os.PathLike],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> AsyncIterator[bytes]:
    """Yield the contents of a file in binary chunks of at most ``chunk_size`` bytes."""
    async with await anyio.open_file(path, "rb") as f:
        while True:
            chunk = await f.read(chunk_size)
            if not chunk:
                break
            yield chunk


async def hash_file(
    path: Union[str, os.PathLike],
    algorithm: str = "sha1",
    prefix: Optional[Union[str, bytes]] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Hash a file on disk, optionally prefixed with a header.

    Raises:
        StreamError: If the file cannot be opened or read
    """
    return await compute_digest(iter_file_chunks(path, chunk_size), algorithm, prefix)
