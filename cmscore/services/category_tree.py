"""
Pure helpers for the category tree

Nothing here touches the database. Callers load an adjacency map
(id -> parent_id) or the category rows and pass lookups in.
"""

from typing import Callable, Dict, List, Mapping, Optional, Protocol

from cmscore.core.exceptions import CategoryCycleException, CategoryTreeCorruptedException

PATH_SEPARATOR = "/"


class TreeNode(Protocol):
    id: int
    slug: str
    parent_id: Optional[int]
    path: Optional[str]


def compute_path(node: TreeNode, lookup: Callable[[int], Optional[TreeNode]]) -> str:
    """
    Materialized path of a node from its parent's stored path

    Args:
        node: Node with slug and parent_id (possibly not yet persisted)
        lookup: Resolves a parent id to its node, or None if missing

    Returns:
        "<parent path>/<slug>", or just the slug for roots and dangling parents
    """
    if node.parent_id is None:
        return node.slug

    parent = lookup(node.parent_id)
    if parent is None:
        return node.slug

    parent_path = parent.path or parent.slug
    return f"{parent_path}{PATH_SEPARATOR}{node.slug}"


def would_create_cycle(
    node_id: int,
    proposed_parent_id: Optional[int],
    parent_of: Callable[[int], Optional[int]],
) -> bool:
    """
    Whether making proposed_parent_id the parent of node_id creates a cycle

    Walks upward from the proposed parent. A self-reparent is reported as a
    cycle too, though callers reject it earlier with its own error.

    Raises:
        CategoryTreeCorruptedException: The stored chain loops before reaching
            node_id or a root, so the answer is unknown
    """
    if proposed_parent_id is None:
        return False

    visited = set()
    current = proposed_parent_id
    while current is not None:
        if current == node_id:
            return True
        if current in visited:
            raise CategoryTreeCorruptedException(proposed_parent_id)
        visited.add(current)
        current = parent_of(current)

    return False


def recompute_paths(
    slugs: Mapping[int, str],
    parents: Mapping[int, Optional[int]],
) -> Dict[int, str]:
    """
    Compute every node's path from scratch, memoizing ancestors

    Args:
        slugs: id -> slug for every category
        parents: id -> parent_id for every category

    Returns:
        id -> path

    Raises:
        CategoryCycleException: The parent links contain a cycle
    """
    paths: Dict[int, str] = {}

    for start in slugs:
        if start in paths:
            continue

        # Climb until a node with a known path, a root, or a dangling parent
        chain: List[int] = []
        on_chain = set()
        current: Optional[int] = start
        while current is not None and current in slugs and current not in paths:
            if current in on_chain:
                raise CategoryCycleException(current, parents[current])
            chain.append(current)
            on_chain.add(current)
            current = parents.get(current)

        base = paths.get(current) if current is not None else None
        for node_id in reversed(chain):
            slug = slugs[node_id]
            base = f"{base}{PATH_SEPARATOR}{slug}" if base else slug
            paths[node_id] = base

    return paths


def children_index(parents: Mapping[int, Optional[int]]) -> Dict[Optional[int], List[int]]:
    """parent_id -> child ids; children of missing parents are filed under None"""
    index: Dict[Optional[int], List[int]] = {}
    for node_id, parent_id in parents.items():
        key = parent_id if parent_id in parents else None
        index.setdefault(key, []).append(node_id)
    return index

