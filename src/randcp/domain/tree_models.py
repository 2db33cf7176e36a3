from __future__ import annotations

"""
Directory Tree Structure Data Models.

Nodes discovered during traversal are stored in an arena and refer to their
enclosing directory by integer handle. Paths are rebuilt on demand by walking
the parent chain; nothing in the tree is mutated after traversal.
"""

import enum
import os
from dataclasses import dataclass, field
from typing import List, Optional

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

class NodeKind(enum.Enum):
    """Filesystem entry types kept in the tree."""
    DIRECTORY = "directory"
    REGULAR_FILE = "file"


@dataclass(frozen=True)
class Node:
    """
    One filesystem entry discovered during traversal.

    Attributes:
        kind: Directory or regular file.
        name: Base name of the entry (never a full path).
        parent: Handle of the enclosing directory, None for the traversal root.
    """
    kind: NodeKind
    name: str
    parent: Optional[int] = None


@dataclass
class NodeTree:
    """
    Arena owning every Node of a single run.

    Handles returned by `add_node` are indexes into `nodes` and stay valid
    for the lifetime of the tree.
    """
    nodes: List[Node] = field(default_factory=list)

    def add_node(self, kind: NodeKind, name: str, parent: Optional[int] = None) -> int:
        """
        Store a new node and return its handle.

        Args:
            kind: Entry type.
            name: Base name of the entry.
            parent: Handle of an existing directory node, or None for a root.

        Returns:
            int: Handle of the stored node.
        """
        if parent is not None and self.nodes[parent].kind is not NodeKind.DIRECTORY:
            raise ValueError(f"Parent handle {parent} is not a directory")
        self.nodes.append(Node(kind=kind, name=name, parent=parent))
        return len(self.nodes) - 1

    def node(self, handle: int) -> Node:
        return self.nodes[handle]

    def __len__(self) -> int:
        return len(self.nodes)

    def get_path(self, handle: int) -> str:
        """
        Rebuild the path of a node relative to the traversal root.

        Every directory component is followed by a separator, so a directory
        handle yields ``"sub/dir/"`` and a file handle ``"sub/dir/a.txt"``.
        The root itself contributes nothing.

        Args:
            handle: Node to resolve.

        Returns:
            str: Relative path from the root.
        """
        parts: List[str] = []
        current: Optional[int] = handle
        while current is not None:
            node = self.nodes[current]
            if node.parent is None:
                break
            if node.kind is NodeKind.DIRECTORY:
                parts.append(node.name + os.sep)
            else:
                parts.append(node.name)
            current = node.parent
        return "".join(reversed(parts))

    def display_path(self, handle: int) -> str:
        """Relative path prefixed with the root's base name (echo format)."""
        root = handle
        while self.nodes[root].parent is not None:
            root = self.nodes[root].parent  # type: ignore[assignment]
        root_name = self.nodes[root].name
        rel = self.get_path(handle)
        return f"{root_name}{os.sep}{rel}" if root_name else rel


@dataclass
class TreeBuildResult:
    """
    Output of a traversal.

    Attributes:
        tree: Arena holding every discovered node.
        root: Handle of the traversal root directory.
        root_path: Absolute filesystem path of the traversal root.
        leaves: Handles of regular-file nodes, in discovery order.
    """
    tree: NodeTree
    root: int
    root_path: str
    leaves: List[int] = field(default_factory=list)

    def leaf_name(self, handle: int) -> str:
        return self.tree.node(handle).name

    def full_path(self, handle: int) -> str:
        """Absolute filesystem path of a node."""
        return os.path.join(self.root_path, self.tree.get_path(handle))
