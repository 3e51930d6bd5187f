"""
Traversal helpers over the document tree.

All helpers are read-only and run in O(n) over the nodes of the tree.
"""

from typing import Iterator, List, Optional, Tuple

from llmdocs.schemas import DocumentNode, NodeKind


def walk(node: DocumentNode, depth: int = 0) -> Iterator[Tuple[DocumentNode, int]]:
    """
    Traverse the tree depth-first, yielding (node, depth) pairs.

    The starting node is yielded first with the given depth, then each child
    subtree in order.
    """
    yield node, depth
    for child in node.children:
        yield from walk(child, depth + 1)


def find_by_kind(root: DocumentNode, kind: NodeKind) -> List[DocumentNode]:
    """Collect all nodes of one kind in document order."""
    return [node for node, _ in walk(root) if node.kind == kind]


def find_by_identifier(root: DocumentNode, identifier: str) -> Optional[DocumentNode]:
    """Return the first node (document order) carrying the identifier."""
    for node, _ in walk(root):
        if node.identifier == identifier:
            return node
    return None


def count_nodes(root: DocumentNode) -> int:
    """Count every node in the tree, root included."""
    return sum(1 for _ in walk(root))


def top_level_groups(root: DocumentNode) -> List[DocumentNode]:
    """Direct children of the root that are GROUP nodes."""
    return [child for child in root.children if child.kind == NodeKind.GROUP]
