"""Queries over finished member trees.

All functions here are read-only: they assume the tree has already been
built and never touch the live object graph.
"""

from typing import Iterator, List, Optional, Tuple, Type, TypeVar

from ..naming import ShadowCellConvention
from .node import MemberNode

T = TypeVar("T")

_DEFAULT_CONVENTION = ShadowCellConvention()


def find_by_name(root: MemberNode,
                 name: str,
                 recursive: bool = False,
                 convention: Optional[ShadowCellConvention] = None) -> Optional[MemberNode]:
    """Find a member by name.

    A child matches when its name is ``name``, when its name is the storage
    cell name for ``name`` (so callers may use the logical property name),
    or when its path segment is ``name``. An exact name match among the
    children wins over the other two forms.

    All immediate children are checked before any grandchild. With
    ``recursive``, each child is then searched the same way, in child
    order, and the first match wins.

    Args:
        root: Node whose children are searched
        name: Member name to look for
        recursive: Also search below the immediate children
        convention: Shadow cell convention used when the tree was built

    Returns:
        The matching node, or None
    """
    convention = convention or _DEFAULT_CONVENTION
    cell_name = convention.cell_name(name)

    children = root.get_children()
    for child in children:
        if child.name == name:
            return child
    for child in children:
        if child.name == cell_name or child.segment == name:
            return child

    if not recursive:
        return None

    for child in children:
        found = find_by_name(child, name, recursive, convention)
        if found is not None:
            return found
    return None


def find_all_by_annotation(root: MemberNode,
                           annotation_type: Type[T],
                           recursive: bool = False) -> List[Tuple[MemberNode, T]]:
    """Find members carrying an annotation of ``annotation_type``.

    Each immediate child carrying the annotation contributes one
    ``(node, annotation)`` pair, using its first matching annotation. With
    ``recursive``, the results for each child's subtree follow, in child
    order.

    Args:
        root: Node whose children are searched
        annotation_type: Annotation class to match (subclasses match too)
        recursive: Also search below the immediate children

    Returns:
        List of (node, annotation) pairs in traversal order
    """
    matches: List[Tuple[MemberNode, T]] = []
    children = root.get_children()

    for child in children:
        annotation = child.get_annotation(annotation_type)
        if annotation is not None:
            matches.append((child, annotation))

    if recursive:
        for child in children:
            matches.extend(find_all_by_annotation(child, annotation_type, recursive))

    return matches


def iter_members(root: MemberNode) -> Iterator[MemberNode]:
    """Yield every node below ``root`` in pre-order (root excluded)."""
    for child in root.get_children():
        yield child
        yield from iter_members(child)


def find_by_path(root: MemberNode, path: str) -> Optional[MemberNode]:
    """Return the node whose path is ``path``, or None.

    Paths are followed segment by segment, so only the branch that leads
    to the node is visited.
    """
    if path == root.path:
        return root
    prefix = root.path + "."
    if not path.startswith(prefix):
        return None

    node = root
    for segment in path[len(prefix):].split("."):
        node = next((c for c in node.get_children() if c.segment == segment), None)
        if node is None:
            return None
    return node

