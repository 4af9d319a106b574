"""Filesystem operations over a tree of board nodes."""

from __future__ import annotations

import errno
import os

from chanfs.tree import ChanDir, ChanFile, ChanNode


class ChanFS:
    """Answers attribute, listing and read requests for a tree."""

    def __init__(self, root: ChanDir) -> None:
        self.root = root

    def traverse(self, path: str) -> ChanNode:
        """Return the node at ``path``; raise FileNotFoundError if none."""
        node: ChanNode = self.root
        for token in filter(None, path.split("/")):
            if not isinstance(node, ChanDir):
                raise FileNotFoundError(
                    errno.ENOENT, "attempting to traverse over a file", path
                )
            found = node.child(token)
            if found is None:
                raise FileNotFoundError(
                    errno.ENOENT, f"no such file or directory: {token}", path
                )
            node = found
        return node

    def getattr(self, path: str) -> dict[str, int]:
        """Return stat-like attributes of the node at ``path``."""
        node = self.traverse(path)
        if not isinstance(node, (ChanDir, ChanFile)):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        return {
            "st_mode": node.mode,
            "st_nlink": node.nlink,
            "st_uid": node.uid,
            "st_gid": node.gid,
            "st_atime": node.time,
            "st_mtime": node.time,
            "st_size": node.size if isinstance(node, ChanFile) else 0,
        }

    def readdir(self, path: str) -> list[str]:
        """List the entries of the directory at ``path``, dot entries first."""
        node = self.traverse(path)
        if not isinstance(node, ChanDir):
            raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)
        return [".", "..", *(child.name for child in node.children)]

    def read(self, path: str, size: int, offset: int) -> bytes:
        """Read up to ``size`` bytes at ``offset``, stopping at a NUL byte."""
        node = self.traverse(path)
        if isinstance(node, ChanDir):
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
        if not isinstance(node, ChanFile):
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        if offset > node.size:
            raise OSError(errno.EINVAL, os.strerror(errno.EINVAL), path)
        chunk = node.contents[offset : offset + size]
        return chunk.split(b"\0", 1)[0]