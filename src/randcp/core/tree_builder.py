from __future__ import annotations

"""
Source Tree Builder.

Walks the source directory depth-first and records every regular file as a
leaf node. Recursion is optional and bounded by a user depth limit as well as
a hard safety limit. Unreadable subdirectories are logged and skipped; an
unreadable root aborts the run.
"""

import logging
import os
from typing import List

from randcp.domain.errors import TraversalError
from randcp.domain.tree_models import NodeKind, NodeTree, TreeBuildResult

logger = logging.getLogger(__name__)

# Upper bound on nesting regardless of the requested depth
MAX_TRAVERSAL_DEPTH = 256

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_tree(source_path: str, recursive: bool = False, max_depth: int = 0) -> TreeBuildResult:
    """
    Build the node tree of a source directory and collect its regular files.

    The source root is depth 0 and its immediate subdirectories are depth 1.
    With ``max_depth = D`` (and recursion enabled) files are collected from
    directories nested at most D levels below the root; 0 means unlimited.

    Args:
        source_path: Directory to scan.
        recursive: Descend into subdirectories.
        max_depth: Deepest level to descend into, 0 for unlimited.

    Returns:
        TreeBuildResult: Arena, root handle and leaf handles.

    Raises:
        TraversalError: If the source root cannot be read.
    """
    root_path = os.path.abspath(source_path)
    tree = NodeTree()
    root = tree.add_node(NodeKind.DIRECTORY, os.path.basename(root_path))
    leaves: List[int] = []

    logger.debug(f"Scanning '{root_path}' (recursive={recursive}, max_depth={max_depth})")
    _scan_directory(tree, root, root_path, leaves, recursive, max_depth, depth=0)
    logger.info(f"Found {len(leaves)} files under {root_path}")

    return TreeBuildResult(tree=tree, root=root, root_path=root_path, leaves=leaves)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _scan_directory(
        tree: NodeTree,
        dir_handle: int,
        dir_path: str,
        leaves: List[int],
        recursive: bool,
        max_depth: int,
        depth: int,
) -> None:
    """Record the entries of one directory and recurse into subdirectories."""
    try:
        with os.scandir(dir_path) as it:
            entries = list(it)
    except OSError as e:
        if depth == 0:
            raise TraversalError(dir_path, e.strerror or str(e)) from e
        logger.warning(f"{dir_path}: {e.strerror or e}")
        return

    entries.sort(key=lambda entry: entry.name)

    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_file = not is_dir and entry.is_file()
        except OSError as e:
            logger.warning(f"{entry.path}: {e.strerror or e}")
            continue

        if is_dir:
            if not recursive:
                continue
            next_depth = depth + 1
            if max_depth > 0 and next_depth > max_depth:
                continue
            if next_depth > MAX_TRAVERSAL_DEPTH:
                logger.warning(f"{entry.path}: nesting deeper than {MAX_TRAVERSAL_DEPTH}, not descending")
                continue
            child = tree.add_node(NodeKind.DIRECTORY, entry.name, dir_handle)
            _scan_directory(tree, child, entry.path, leaves, recursive, max_depth, next_depth)
        elif is_file:
            leaves.append(tree.add_node(NodeKind.REGULAR_FILE, entry.name, dir_handle))
        else:
            logger.debug(f"Skipping non-regular entry: {entry.path}")
