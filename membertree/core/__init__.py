"""Core abstractions for MemberTree.

This package contains the node model, the introspector interface, and
the engine that builds and queries member trees.
"""

from .node import MemberInfo, MemberNode, NodeKind, TreeNode
from .introspector import TypeIntrospector
from .policy import TraversalPolicy
from .metadata import MetadataSource
from .builder import TreeBuilder
from .query import find_all_by_annotation, find_by_name, find_by_path, iter_members
from .traverser import iter_levels, walk

__all__ = [
    "MemberInfo",
    "MemberNode",
    "NodeKind",
    "TreeNode",
    "TypeIntrospector",
    "TraversalPolicy",
    "MetadataSource",
    "TreeBuilder",
    "find_all_by_annotation",
    "find_by_name",
    "find_by_path",
    "iter_members",
    "walk",
    "iter_levels",
]
