"""MemberTree - reflective trees of live Python object graphs.

MemberTree walks an object and builds a tree of its fields, properties and
methods. Every node carries the member's current value, its metadata tags
and a stable dot-delimited path, so generic tools (editors, dumpers,
tag-driven queries) can work on any object without per-type code.

    from membertree import MemberTree

    tree = MemberTree(player)
    health = tree.find_member("health")
    health.set_value(80)
"""

__version__ = "0.4.0"

from .annotations import Deprecated, annotate
from .config import BuildConfig, DepthConfig, FilterConfig, TraversalStrategy
from .core import (
    MemberInfo,
    MemberNode,
    NodeKind,
    TypeIntrospector,
    TraversalPolicy,
    MetadataSource,
    TreeBuilder,
    find_all_by_annotation,
    find_by_name,
    find_by_path,
    iter_members,
    iter_levels,
    walk,
)
from .error_policies import (
    ErrorPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    FailFastPolicy,
)
from .errors import InvalidConfigError, InvalidRootError, MemberTreeError
from .introspectors import PythonIntrospector
from .naming import ShadowCellConvention, safe_display_name
from .tree import MemberTree
from .api import (
    build_tree,
    traverse_tree,
    count_nodes,
    find_nodes,
    get_tree_paths,
    get_leaf_nodes,
    get_tree_stats,
)

__all__ = [
    "__version__",
    # Tree
    "MemberTree",
    "MemberNode",
    "MemberInfo",
    "NodeKind",
    # Engine
    "TypeIntrospector",
    "PythonIntrospector",
    "TraversalPolicy",
    "MetadataSource",
    "TreeBuilder",
    # Queries
    "find_by_name",
    "find_all_by_annotation",
    "find_by_path",
    "iter_members",
    "walk",
    "iter_levels",
    # Metadata
    "annotate",
    "Deprecated",
    # Config
    "BuildConfig",
    "DepthConfig",
    "FilterConfig",
    "TraversalStrategy",
    "ShadowCellConvention",
    "safe_display_name",
    # Errors
    "ErrorPolicy",
    "ContinueOnErrorsPolicy",
    "CollectErrorsPolicy",
    "FailFastPolicy",
    "MemberTreeError",
    "InvalidRootError",
    "InvalidConfigError",
    # API
    "build_tree",
    "traverse_tree",
    "count_nodes",
    "find_nodes",
    "get_tree_paths",
    "get_leaf_nodes",
    "get_tree_stats",
]
