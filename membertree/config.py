"""Configuration system for MemberTree.

This module defines how users specify what a tree build should expose
(depth budget, which types stay opaque, how errors are handled) and how
a finished tree should be walked.
"""

import datetime
import decimal
import enum
import fractions
import pathlib
import re
import threading
import types
import uuid
import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Set, Tuple

from .naming import ShadowCellConvention


DEFAULT_MAX_DEPTH = 10

# Value-like types that are never expanded into children.
DEFAULT_OPAQUE_TYPES: Tuple[type, ...] = (
    bool, int, float, complex, str, bytes, bytearray, memoryview,
    decimal.Decimal, fractions.Fraction,
    datetime.date, datetime.time, datetime.timedelta, datetime.tzinfo,
    uuid.UUID, enum.Enum, pathlib.PurePath, re.Pattern, type(None),
    list, tuple, dict, set, frozenset, range,
)

# Runtime machinery that is never introspected unless the caller opts in.
DEFAULT_MANAGED_TYPES: Tuple[type, ...] = (
    type, types.ModuleType, types.FunctionType, types.BuiltinFunctionType,
    types.MethodType, types.CodeType, types.FrameType, types.TracebackType,
    types.GeneratorType, weakref.ReferenceType, threading.Thread,
    type(threading.Lock()), type(threading.RLock()),
)


class TraversalStrategy(Enum):
    """How to walk a finished tree.

    Building always expands depth-first; these strategies only affect
    the order in which an already built tree is visited.
    """
    BREADTH_FIRST = "bfs"           # Level by level
    DEPTH_FIRST_PRE = "dfs_pre"     # Parent before children
    DEPTH_FIRST_POST = "dfs_post"   # Children before parent
    LEVEL_ORDER = "level"           # Grouped by level


@dataclass
class FilterConfig:
    """Configuration for filtering nodes while walking a tree."""

    include_filter: Optional[Callable[[Any], bool]] = None  # Include predicate
    exclude_filter: Optional[Callable[[Any], bool]] = None  # Exclude predicate
    include_kinds: Optional[Set[Any]] = None                # Only these NodeKinds

    def should_include(self, node) -> bool:
        """Check if a node should be included based on filters.

        Args:
            node: Node to check

        Returns:
            True if node passes all filters
        """
        # Exclusion takes precedence
        if self.exclude_filter and self.exclude_filter(node):
            return False

        if self.include_kinds is not None and node.kind not in self.include_kinds:
            return False

        if self.include_filter:
            return self.include_filter(node)

        return True


@dataclass
class DepthConfig:
    """Configuration for depth-based filtering while walking a tree."""

    min_depth: int = 0                  # Minimum depth to yield
    max_depth: Optional[int] = None     # Maximum depth to walk

    def should_yield(self, depth: int) -> bool:
        if depth < self.min_depth:
            return False
        if self.max_depth is not None and depth > self.max_depth:
            return False
        return True

    def should_explore(self, depth: int) -> bool:
        if self.max_depth is None:
            return True
        return depth < self.max_depth


@dataclass
class BuildConfig:
    """Complete configuration for building a member tree.

    Defaults reproduce the standard behaviour: ten levels deep, methods
    listed as inert leaves, runtime machinery left opaque, and unreadable
    members degraded to sentinel nodes instead of aborting the build.
    """

    # Depth budget: nodes deeper than this are materialized but not expanded
    max_depth: int = DEFAULT_MAX_DEPTH

    # Member selection
    include_methods: bool = True
    include_managed: bool = False

    # Type classification
    opaque_types: Tuple[type, ...] = DEFAULT_OPAQUE_TYPES
    managed_types: Tuple[type, ...] = DEFAULT_MANAGED_TYPES

    # Naming strategies
    shadow_cells: ShadowCellConvention = field(default_factory=ShadowCellConvention)
    display_name: Optional[Callable[[Any], str]] = None

    # Error handling (an ErrorPolicy; None selects ContinueOnErrorsPolicy)
    error_policy: Optional[Any] = None

    # Convenience constructors for common configurations

    @classmethod
    def shallow(cls, max_depth: int = 1) -> 'BuildConfig':
        """Create config that only looks at the first few levels."""
        return cls(max_depth=max_depth)

    @classmethod
    def data_only(cls, max_depth: int = DEFAULT_MAX_DEPTH) -> 'BuildConfig':
        """Create config that lists fields and properties but no methods."""
        return cls(max_depth=max_depth, include_methods=False)

    @classmethod
    def strict(cls, max_depth: int = DEFAULT_MAX_DEPTH) -> 'BuildConfig':
        """Create config that re-raises the first traversal error.

        Useful while debugging an introspector; normal builds never fail
        because of a single unreadable member.
        """
        from .error_policies import FailFastPolicy
        return cls(max_depth=max_depth, error_policy=FailFastPolicy())

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.max_depth, int) or isinstance(self.max_depth, bool):
            errors.append("max_depth must be an integer")
        elif self.max_depth < 0:
            errors.append("max_depth cannot be negative")

        for label, types_ in (("opaque_types", self.opaque_types),
                              ("managed_types", self.managed_types)):
            if not all(isinstance(t, type) for t in types_):
                errors.append(f"{label} must contain only classes")

        if self.shadow_cells is None:
            errors.append("shadow_cells convention is required")

        if self.display_name is not None and not callable(self.display_name):
            errors.append("display_name must be callable")

        if self.error_policy is not None and not hasattr(self.error_policy, "handle"):
            errors.append("error_policy must provide handle()")

        return errors
