"""In-memory directory tree that mirrors a board's threads and replies."""

from __future__ import annotations

import enum
import os
import stat
import time as _time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from chanfs.chan_parse import (
    Fetcher,
    Post,
    Thread,
    fetch_json,
    parse_board,
    parse_thread,
)

FILENAMELEN = 20
FILE_PERMS = stat.S_IRWXU | stat.S_IRWXG | stat.S_IRWXO
DIR_PERMS = stat.S_IRWXU | stat.S_IRWXG | stat.S_IRWXO
NO_SUBJECT = "No Subject"


class FileType(enum.Enum):
    """What a file in the tree stands for."""

    THREAD_OP_TEXT = enum.auto()
    POST_TEXT = enum.auto()
    ATTACHED_FILE = enum.auto()


def _current_uid() -> int:
    getuid = getattr(os, "getuid", None)
    return getuid() if getuid else 0


def _current_gid() -> int:
    getgid = getattr(os, "getgid", None)
    return getgid() if getgid else 0


@dataclass(eq=False)
class ChanNode:
    """Attributes shared by every entry of the tree."""

    name: str
    time: int
    uid: int = field(default_factory=_current_uid)
    gid: int = field(default_factory=_current_gid)

    base_mode = 0
    permissions = 0
    nlink = 1

    @property
    def mode(self) -> int:
        return self.base_mode | self.permissions


@dataclass(eq=False)
class ChanDir(ChanNode):
    """A directory holding other nodes in insertion order."""

    children: list[ChanNode] = field(default_factory=list, repr=False)

    base_mode = stat.S_IFDIR
    permissions = DIR_PERMS
    nlink = 2

    def add_child(self, child: ChanNode) -> ChanNode:
        """Append ``child`` to this directory and return it."""
        self.children.append(child)
        if isinstance(child, ChanFile):
            child.parent = self
        return child

    def child(self, name: str) -> ChanNode | None:
        """Return the first child called ``name``, or None."""
        return next((node for node in self.children if node.name == name), None)

    def __iter__(self) -> Iterator[ChanNode]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)


@dataclass(eq=False)
class ChanFile(ChanNode):
    """A regular file of the tree."""

    type: FileType = FileType.ATTACHED_FILE
    size: int = 0
    contents: bytes = b""
    parent: ChanDir | None = field(default=None, repr=False)

    base_mode = stat.S_IFREG
    permissions = FILE_PERMS
    nlink = 1


def thread_dir_name(post: Post) -> str:
    """Name a thread's directory after its subject, comment or a placeholder."""
    if post.sub is not None:
        raw = post.sub
    elif post.com is not None:
        raw = post.com
    else:
        raw = NO_SUBJECT
    return raw[:FILENAMELEN].replace("/", "#")


def _add_dir(parent: ChanDir, name: str, when: int) -> ChanDir:
    directory = ChanDir(name, when)
    parent.add_child(directory)
    return directory


def _add_file(parent: ChanDir, name: str, when: int, kind: FileType) -> ChanFile:
    node = ChanFile(name, when, type=kind)
    parent.add_child(node)
    return node


def build_tree(
    board_posts: Iterable[Post], load_thread: Callable[[int], Thread]
) -> ChanDir:
    """Build the tree for a board from its opening posts.

    ``load_thread`` is called with each opening post's number and returns the
    whole thread, opening post first.
    """
    ops = list(board_posts)
    root = ChanDir("/", int(_time.time()))
    thread_dirs = [_add_dir(root, thread_dir_name(op), op.timestamp) for op in ops]

    for op, thread_dir in zip(ops, thread_dirs):
        _add_file(thread_dir, "Thread.txt", op.timestamp, FileType.THREAD_OP_TEXT)
        _add_file(thread_dir, "File", op.timestamp, FileType.ATTACHED_FILE)

        replies = list(load_thread(op.no))[1:]
        for reply in replies:
            post_dir = _add_dir(thread_dir, str(reply.no), reply.timestamp)
            _add_file(post_dir, "Post.txt", reply.timestamp, FileType.POST_TEXT)
            if reply.tim is not None and reply.ext is not None:
                _add_file(
                    thread_dir,
                    reply.tim + reply.ext,
                    reply.timestamp,
                    FileType.ATTACHED_FILE,
                )
    return root


def generate_fs(board: str, chan_url: str, fetch: Fetcher = fetch_json) -> ChanDir:
    """Fetch ``board`` and all of its threads and build the tree."""
    catalog = parse_board(board, chan_url, fetch)
    return build_tree(
        catalog, lambda no: parse_thread(board, no, chan_url, fetch)
    )