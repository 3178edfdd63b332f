"""Walking orders for finished member trees.

A built tree is already finite and acyclic (the builder cuts back-edges),
so walking it needs no bookkeeping beyond the depth limits. Nodes that
were never expanded simply have no children to visit.
"""

from typing import Iterator, List, Optional, Tuple

from ..config import DepthConfig, TraversalStrategy
from .node import MemberNode


def walk(root: MemberNode,
         strategy: TraversalStrategy = TraversalStrategy.DEPTH_FIRST_PRE,
         depth: Optional[DepthConfig] = None) -> Iterator[Tuple[MemberNode, int]]:
    """Visit ``root`` and its descendants in the given order.

    Args:
        root: Starting node
        strategy: Visiting order
        depth: Depth limits, relative to ``root`` (default: unlimited)

    Yields:
        Tuples of (node, depth) where depth is relative to root
    """
    depth = depth or DepthConfig()

    if strategy is TraversalStrategy.DEPTH_FIRST_PRE:
        yield from _pre_order(root, 0, depth)
    elif strategy is TraversalStrategy.DEPTH_FIRST_POST:
        yield from _post_order(root, 0, depth)
    else:
        # Breadth-first and level order coincide on a tree
        for level, nodes in iter_levels(root, depth):
            if depth.should_yield(level):
                for node in nodes:
                    yield (node, level)


def iter_levels(root: MemberNode,
                depth: Optional[DepthConfig] = None) -> Iterator[Tuple[int, List[MemberNode]]]:
    """Yield ``(level, nodes)`` for each level below ``root``, root level first.

    Only ``depth.max_depth`` is honoured here; every level up to it is
    produced, whatever ``min_depth`` says.
    """
    depth = depth or DepthConfig()
    level, nodes = 0, [root]

    while nodes:
        yield level, nodes
        if not depth.should_explore(level):
            return
        nodes = [child for node in nodes for child in node.get_children()]
        level += 1


def _pre_order(node: MemberNode, level: int,
               depth: DepthConfig) -> Iterator[Tuple[MemberNode, int]]:
    if depth.should_yield(level):
        yield (node, level)
    if depth.should_explore(level):
        for child in node.get_children():
            yield from _pre_order(child, level + 1, depth)


def _post_order(node: MemberNode, level: int,
                depth: DepthConfig) -> Iterator[Tuple[MemberNode, int]]:
    if depth.should_explore(level):
        for child in node.get_children():
            yield from _post_order(child, level + 1, depth)
    if depth.should_yield(level):
        yield (node, level)
