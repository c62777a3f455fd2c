"""Git object wire format.

Bodies are the object content without the ``"<type> <size>\\0"`` header:
- tree: repeated ``<octal mode> <name>\\0<raw digest>`` entries, sorted by name
  with subtrees compared as if their name ended in '/'
- commit: ``tree``/``parent``/``author``/``committer`` header lines, a blank
  line, then the message
- blob: raw bytes

Malformed input raises ObjectLoadError so stores can surface it unchanged.
"""

import hashlib
import re
from typing import Iterable, Mapping, Optional

from ..core.errors import ObjectLoadError
from ..models import TREE_MODE, CommitInfo, FileInfo, ObjectType, TimeInfo, Tree, UserTimeInfo

_PERSON_RE = re.compile(r"^(.*?) ?<(.*?)> (\d+) ([+-])(\d{2})(\d{2})$")


def object_header(object_type: ObjectType, size: int) -> bytes:
    return f"{object_type} {size}\0".encode("ascii")


def object_id(object_type: ObjectType, body: bytes, algorithm: str = "sha1") -> str:
    """Hash ``body`` the way git names objects: header plus content."""
    digest = hashlib.new(algorithm)
    digest.update(object_header(object_type, len(body)))
    digest.update(body)
    return digest.hexdigest()


def split_object(data: bytes, object_hash: str = "") -> tuple[str, bytes]:
    """Split a decompressed loose object into (type, body), checking the size."""
    header, sep, body = data.partition(b"\0")
    if not sep:
        raise ObjectLoadError(None, object_hash, "missing object header")
    try:
        object_type, size = header.decode("ascii").split(" ")
        expected = int(size)
    except ValueError as e:
        raise ObjectLoadError(None, object_hash, f"bad object header {header!r}") from e
    if expected != len(body):
        raise ObjectLoadError(object_type, object_hash, f"size mismatch ({expected} != {len(body)})")
    return object_type, body


def _tree_sort_key(item: tuple[str, FileInfo]) -> bytes:
    name, entry = item
    key = name.encode("utf-8")
    return key + b"/" if entry.mode == TREE_MODE else key


def encode_tree(entries: Mapping[str, FileInfo]) -> bytes:
    out = bytearray()
    for name, entry in sorted(entries.items(), key=_tree_sort_key):
        out += f"{entry.mode:o} {name}".encode("utf-8")
        out += b"\0"
        out += bytes.fromhex(entry.hash)
    return bytes(out)


def decode_tree(body: bytes, object_hash: str = "", digest_size: int = 20) -> Tree:
    """Decode a tree body into a name -> FileInfo mapping."""
    tree: Tree = {}
    pos = 0
    while pos < len(body):
        space = body.find(b" ", pos)
        nul = body.find(b"\0", space + 1)
        if space < 0 or nul < 0 or nul + 1 + digest_size > len(body):
            raise ObjectLoadError("tree", object_hash, f"truncated entry at offset {pos}")
        try:
            mode = int(body[pos:space], 8)
            name = body[space + 1:nul].decode("utf-8")
        except ValueError as e:
            raise ObjectLoadError("tree", object_hash, f"bad entry at offset {pos}") from e
        raw = body[nul + 1:nul + 1 + digest_size]
        tree[name] = FileInfo(mode=mode, hash=raw.hex())
        pos = nul + 1 + digest_size
    return tree


def format_person(person: UserTimeInfo) -> str:
    # offset is minutes west of UTC
    east = -person.date.offset
    sign = "-" if east < 0 else "+"
    hours, minutes = divmod(abs(east), 60)
    return f"{person.name} <{person.email}> {person.date.seconds} {sign}{hours:02d}{minutes:02d}"


def parse_person(value: str, object_hash: str = "") -> UserTimeInfo:
    match = _PERSON_RE.match(value)
    if not match:
        raise ObjectLoadError("commit", object_hash, f"bad signature {value!r}")
    name, email, seconds, sign, hours, minutes = match.groups()
    east = int(hours) * 60 + int(minutes)
    if sign == "-":
        east = -east
    return UserTimeInfo(name=name, email=email, date=TimeInfo(seconds=int(seconds), offset=-east))


def encode_commit(
    tree: str,
    parents: Iterable[str],
    author: UserTimeInfo,
    committer: UserTimeInfo,
    message: str,
) -> bytes:
    lines = [f"tree {tree}"]
    lines.extend(f"parent {parent}" for parent in parents)
    lines.append(f"author {format_person(author)}")
    lines.append(f"committer {format_person(committer)}")
    return ("\n".join(lines) + "\n\n" + message).encode("utf-8")


def decode_commit(body: bytes, object_hash: str) -> CommitInfo:
    """Decode a commit body. Headers other than tree/parent/author/committer are skipped."""
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ObjectLoadError("commit", object_hash, "commit is not valid UTF-8") from e

    head, _, message = text.partition("\n\n")
    tree: Optional[str] = None
    parents: list[str] = []
    author: Optional[UserTimeInfo] = None
    committer: Optional[UserTimeInfo] = None

    for line in head.split("\n"):
        # continuation of a multi-line header such as gpgsig
        if not line or line.startswith(" "):
            continue
        key, _, value = line.partition(" ")
        if key == "tree":
            tree = value
        elif key == "parent":
            parents.append(value)
        elif key == "author":
            author = parse_person(value, object_hash)
        elif key == "committer":
            committer = parse_person(value, object_hash)

    if tree is None or author is None or committer is None:
        raise ObjectLoadError("commit", object_hash, "missing tree, author or committer header")

    return CommitInfo(
        tree=tree,
        parents=tuple(parents),
        author=author,
        committer=committer,
        message=message,
        hash=object_hash,
    )
