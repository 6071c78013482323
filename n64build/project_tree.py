"""Build the project's file tree from a directory and delete listed files."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Iterator


class NodeKind(IntEnum):
    """Kind of a tree entry; the values are the tree's icon indices."""

    DIRECTORY = 0
    SOURCE = 1
    FILE = 2


@dataclass(eq=False)
class TreeNode:
    """One entry in the project tree."""

    name: str
    kind: NodeKind
    location: Path
    parent: TreeNode | None = field(default=None, repr=False)
    children: list[TreeNode] = field(default_factory=list, repr=False)

    def walk(self) -> Iterator[TreeNode]:
        """Yield this node and all its descendants, parents first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def path(self) -> Path:
        """Filesystem path of the entry."""
        return self.location

    def _append(self, node: TreeNode) -> TreeNode:
        node.parent = self
        self.children.append(node)
        return node


def _extension(name: str) -> str:
    return os.path.splitext(name)[1][1:]


def is_whitelisted(extension: str, extensions: Iterable[str]) -> bool:
    """Whether a file extension is one the project tree shows."""
    return extension in extensions


def _fill(node: TreeNode, directory: Path, extensions: tuple[str, ...]) -> None:
    with os.scandir(directory) as entries:
        entries = sorted(entries, key=lambda entry: entry.name)
    files = [entry for entry in entries if not entry.is_dir()]
    dirs = [entry for entry in entries if entry.is_dir()]

    for entry in files:
        extension = _extension(entry.name)
        if not is_whitelisted(extension, extensions):
            continue
        kind = NodeKind.SOURCE if extension == "c" else NodeKind.FILE
        node._append(TreeNode(entry.name, kind, Path(entry.path)))

    for entry in dirs:
        child = TreeNode(Path(entry.name).stem, NodeKind.DIRECTORY, Path(entry.path))
        try:
            _fill(child, Path(entry.path), extensions)
        except OSError:
            continue
        if child.children:
            node._append(child)


def build_tree(root, extensions) -> TreeNode:
    """Scan ``root`` and return a tree of the whitelisted files in it.

    Files come before subdirectories; directories holding no shown file
    are left out. Unreadable subdirectories are skipped.
    """
    root = Path(root)
    extensions = tuple(extensions)
    node = TreeNode(root.name, NodeKind.DIRECTORY, root)
    _fill(node, root, extensions)
    return node


def delete_files(node: TreeNode, extensions) -> list[Path]:
    """Remove from disk every whitelisted file under ``node``.

    Files that cannot be removed are passed over. Returns the paths removed.
    """
    extensions = tuple(extensions)
    removed = []
    for entry in node.walk():
        if entry.kind is NodeKind.DIRECTORY:
            continue
        if not is_whitelisted(_extension(entry.name), extensions):
            continue
        try:
            entry.path().unlink()
        except OSError:
            continue
        removed.append(entry.path())
    return removed