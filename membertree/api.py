"""High-level API for MemberTree.

This module provides simple, functional interfaces for common operations.
These functions wrap the object-oriented API (TreeBuilder, walk) for
ease of use in simple cases.
"""

import dataclasses
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .config import BuildConfig, DepthConfig, FilterConfig, TraversalStrategy
from .core.builder import TreeBuilder
from .core.introspector import TypeIntrospector
from .core.node import MemberNode
from .core.traverser import walk


def build_tree(
    root_object: Any,
    max_depth: Optional[int] = None,
    include_methods: Optional[bool] = None,
    include_managed: Optional[bool] = None,
    error_policy: Any = None,
    introspector: Optional[TypeIntrospector] = None,
    config: Optional[BuildConfig] = None,
) -> MemberNode:
    """Build a member tree and return its root node.

    Keyword arguments override the matching fields of ``config``.

    Args:
        root_object: Object to introspect
        max_depth: Deepest level that is expanded
        include_methods: List methods as leaf nodes
        include_managed: Expand runtime machinery (classes, modules, ...)
        error_policy: ErrorPolicy receiving traversal errors
        introspector: Host object model (defaults to PythonIntrospector)
        config: Base configuration

    Returns:
        The fully built root MemberNode

    Example:
        >>> root = build_tree(player, max_depth=3)
        >>> [child.name for child in root.get_children()]
        ['name', 'health', 'inventory', 'heal']
    """
    overrides = {
        'max_depth': max_depth,
        'include_methods': include_methods,
        'include_managed': include_managed,
        'error_policy': error_policy,
    }
    config = dataclasses.replace(
        config or BuildConfig(),
        **{key: value for key, value in overrides.items() if value is not None},
    )

    return TreeBuilder(introspector=introspector, config=config).build(root_object)


def traverse_tree(
    root: MemberNode,
    strategy: Union[TraversalStrategy, str] = TraversalStrategy.DEPTH_FIRST_PRE,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
    include_filter: Optional[Callable[[MemberNode], bool]] = None,
    exclude_filter: Optional[Callable[[MemberNode], bool]] = None,
    include_kinds: Optional[set] = None,
) -> Iterator[MemberNode]:
    """Walk a finished tree.

    Args:
        root: Starting node
        strategy: Traversal strategy (bfs, dfs_pre, dfs_post, level)
        max_depth: Maximum depth to walk, relative to ``root``
        min_depth: Minimum depth before yielding nodes
        include_filter: Function to determine if node should be included
        exclude_filter: Function to determine if node should be excluded
        include_kinds: Only yield nodes of these NodeKinds

    Yields:
        MemberNode instances that match the criteria
    """
    depth = DepthConfig(min_depth=min_depth, max_depth=max_depth)
    node_filter = FilterConfig(
        include_filter=include_filter,
        exclude_filter=exclude_filter,
        include_kinds=include_kinds,
    )

    for node, _ in walk(root, _parse_strategy(strategy), depth):
        if node_filter.should_include(node):
            yield node


def count_nodes(root: MemberNode, **kwargs) -> int:
    """Count nodes in a tree that match criteria.

    Args:
        root: Starting node
        **kwargs: Traversal options (see traverse_tree)

    Returns:
        Number of nodes that match criteria
    """
    count = 0
    for _ in traverse_tree(root, **kwargs):
        count += 1
    return count


def find_nodes(root: MemberNode,
               predicate: Callable[[MemberNode], bool],
               **kwargs) -> Iterator[MemberNode]:
    """Find nodes that match a predicate.

    Example:
        >>> unreadable = list(find_nodes(root, lambda n: n.is_unreadable))
    """
    kwargs['include_filter'] = predicate
    yield from traverse_tree(root, **kwargs)


def get_tree_paths(root: MemberNode, **kwargs) -> List[str]:
    """Return the path of every node, in traversal order."""
    return [node.path for node in traverse_tree(root, **kwargs)]


def get_leaf_nodes(root: MemberNode, **kwargs) -> Iterator[MemberNode]:
    """Yield nodes without children (opaque values, methods, cut branches)."""
    for node in traverse_tree(root, **kwargs):
        if node.is_leaf():
            yield node


def get_tree_stats(root: MemberNode) -> Dict[str, Any]:
    """Get statistics about a tree.

    Returns:
        Dictionary with node counts overall, per kind and per depth
    """
    stats: Dict[str, Any] = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'unexpanded_nodes': 0,
        'unreadable_nodes': 0,
        'max_depth': 0,
        'kinds': {},
        'depths': {},
    }

    for node in traverse_tree(root):
        stats['total_nodes'] += 1
        if node.is_leaf():
            stats['leaf_nodes'] += 1
        if not node.is_expanded:
            stats['unexpanded_nodes'] += 1
        if node.is_unreadable:
            stats['unreadable_nodes'] += 1

        depth = node.depth - root.depth
        stats['max_depth'] = max(stats['max_depth'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1
        kind = node.kind.value
        stats['kinds'][kind] = stats['kinds'].get(kind, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    return stats


# Helper functions

def _parse_strategy(strategy: Union[TraversalStrategy, str]) -> TraversalStrategy:
    """Parse strategy from string or enum."""
    if isinstance(strategy, TraversalStrategy):
        return strategy

    strategy_map = {
        'bfs': TraversalStrategy.BREADTH_FIRST,
        'breadth_first': TraversalStrategy.BREADTH_FIRST,
        'dfs': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'depth_first_pre': TraversalStrategy.DEPTH_FIRST_PRE,
        'dfs_post': TraversalStrategy.DEPTH_FIRST_POST,
        'depth_first_post': TraversalStrategy.DEPTH_FIRST_POST,
        'level': TraversalStrategy.LEVEL_ORDER,
        'level_order': TraversalStrategy.LEVEL_ORDER,
    }

    strategy_lower = strategy.lower() if isinstance(strategy, str) else str(strategy)
    if strategy_lower in strategy_map:
        return strategy_map[strategy_lower]

    raise ValueError(f"Unknown traversal strategy: {strategy}")
