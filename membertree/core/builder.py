"""Tree construction for MemberTree.

The TreeBuilder turns a live object into a tree of MemberNodes. It is a
plain recursive walk: discover the members of a node's value, materialize
a child node per member, then descend into the children that are worth
expanding. Depth and a shared identity set bound the walk.
"""

import logging
from typing import Any, List, Optional, Set

from ..config import BuildConfig
from ..error_policies import ContinueOnErrorsPolicy, ErrorPolicy
from ..errors import InvalidConfigError, InvalidRootError
from ..naming import safe_display_name
from .introspector import TypeIntrospector
from .metadata import MetadataSource
from .node import MemberInfo, MemberNode, NodeKind
from .policy import TraversalPolicy

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Builds and expands member trees.

    A builder holds configuration only; every ``build`` starts from a
    fresh visited set, so one builder can be reused for many roots.
    """

    def __init__(self,
                 introspector: Optional[TypeIntrospector] = None,
                 config: Optional[BuildConfig] = None):
        """Initialize the builder.

        Args:
            introspector: Host object model (defaults to PythonIntrospector)
            config: Build configuration (defaults to BuildConfig())

        Raises:
            InvalidConfigError: If the configuration does not validate
        """
        self.config = config or BuildConfig()
        config_errors = self.config.validate()
        if config_errors:
            raise InvalidConfigError(config_errors)

        if introspector is None:
            from ..introspectors.python import PythonIntrospector
            introspector = PythonIntrospector()
        self.introspector = introspector

        self._owns_error_policy = self.config.error_policy is None
        self.error_policy: ErrorPolicy = self.config.error_policy or ContinueOnErrorsPolicy()
        self.policy = TraversalPolicy(
            introspector,
            opaque_types=self.config.opaque_types,
            managed_types=self.config.managed_types,
            include_managed=self.config.include_managed,
            shadow_cells=self.config.shadow_cells,
        )
        self.metadata = MetadataSource(
            introspector,
            shadow_cells=self.config.shadow_cells,
            error_policy=self.error_policy,
        )

    # Entry points

    def build(self, instance: Any) -> MemberNode:
        """Build the complete tree for ``instance``.

        Args:
            instance: Root object to introspect

        Returns:
            The fully expanded root node

        The builder's own default policy is cleared first, so it reports
        the errors of the latest build only. A policy passed in through
        the configuration keeps accumulating.

        Raises:
            InvalidRootError: If ``instance`` is None
        """
        if self._owns_error_policy:
            self.error_policy.clear()
        root = self.create_root(instance)
        self.expand(root, self.config.max_depth, 0, set())
        return root

    def create_root(self, instance: Any) -> MemberNode:
        """Create the (unexpanded) root node for ``instance``."""
        if instance is None:
            raise InvalidRootError("Cannot build a member tree for None")

        if self.config.display_name is not None:
            name = self.config.display_name(instance)
        else:
            name = safe_display_name(instance, self.policy.is_engine_managed_type)

        root = MemberNode(
            name=name,
            kind=NodeKind.ROOT,
            declared_type=type(instance),
            value=instance,
            introspector=self.introspector,
        )
        root.annotations = self.metadata.type_annotations(type(instance))
        return root

    # Expansion

    def expand(self,
               node: MemberNode,
               max_depth: Optional[int] = None,
               current_depth: int = 0,
               visited: Optional[Set[int]] = None) -> None:
        """Populate ``node.children`` and recurse into searchable children.

        Args:
            node: Node to expand
            max_depth: Deepest level that is still expanded
            current_depth: Depth of ``node`` relative to where the walk started
            visited: ``id()`` of every value expanded so far in this build
        """
        if max_depth is None:
            max_depth = self.config.max_depth
        if visited is None:
            visited = set()

        value = node.value
        if value is None:
            return

        # Back-edges and shared references are cut at first re-encounter
        value_id = id(value)
        if value_id in visited:
            logger.debug("Skipping %s: value already expanded", node.path)
            return
        visited.add(value_id)

        if current_depth > max_depth:
            logger.debug("Skipping %s: depth %d exceeds %d", node.path, current_depth, max_depth)
            return

        node.children = self.discover(node)

        for child in node.children:
            if self.policy.is_searchable(child):
                self.expand(child, max_depth, current_depth + 1, visited)

    def discover(self, node: MemberNode) -> List[MemberNode]:
        """Create child nodes for every valid member of ``node.value``.

        Levels are visited most-derived first and each contributes only its
        own members, so children come out derived-to-base, in declaration
        order within a class. A member redefined in a subclass is only
        listed once, for the subclass.
        """
        owner = node.value
        owner_type = type(owner)
        children: List[MemberNode] = []
        seen: Set[str] = set()

        for level in self._levels(owner_type):
            for descriptor in self._members(level, owner):
                if descriptor.name in seen:
                    continue
                if descriptor.kind is NodeKind.METHOD and not self.config.include_methods:
                    continue
                if not self._is_valid(descriptor, owner_type, owner):
                    continue
                seen.add(descriptor.name)

                child = self.materialize(descriptor, owner)
                child.parent = node
                child.depth = node.depth + 1
                child.annotations = self.metadata.annotations_for(descriptor, owner_type)
                children.append(child)

        for child, segment in zip(children, self._segments(children, seen)):
            child.path = f"{node.path}.{segment}"
        return children

    def materialize(self, descriptor: MemberInfo, owner: Any) -> MemberNode:
        """Create the node for one member of ``owner``.

        Methods are never called: their value is the descriptor. Fields and
        properties are read once; a failing read leaves the descriptor as a
        sentinel value and records the error on the node.
        """
        value: Any = descriptor
        read_error = None

        if descriptor.kind is not NodeKind.METHOD:
            try:
                value = self.introspector.read(descriptor, owner)
            except Exception as e:
                read_error = e
                self.error_policy.handle(e, 'read', descriptor, owner)

        declared_type = descriptor.declared_type
        if declared_type is None and read_error is None and descriptor.kind is not NodeKind.METHOD:
            declared_type = type(value)

        return MemberNode(
            name=descriptor.name,
            kind=descriptor.kind,
            declared_type=declared_type,
            value=value,
            owner=owner,
            descriptor=descriptor,
            read_error=read_error,
            introspector=self.introspector,
        )

    # Helpers

    def _levels(self, owner_type: type) -> List[type]:
        levels = []
        for level in self.introspector.type_levels(owner_type):
            # Members of opaque and managed classes are never exposed, and
            # neither are those of their bases
            if self.policy.is_terminal_type(level):
                break
            levels.append(level)
        return levels

    def _members(self, level: type, owner: Any) -> List[MemberInfo]:
        try:
            return list(self.introspector.members_declared(level, owner))
        except Exception as e:
            self.error_policy.handle(e, 'members', level, owner)
            return []

    def _is_valid(self, descriptor: MemberInfo, owner_type: type, owner: Any) -> bool:
        # Validity checks list members of other levels; a host that cannot
        # list them leaves the member exposed
        try:
            return self.policy.is_valid_member(descriptor, owner_type)
        except Exception as e:
            self.error_policy.handle(e, 'members', descriptor, owner)
            return True

    def _segments(self, children: List[MemberNode], names: Set[str]) -> List[str]:
        """Path segments for one sibling list, pairwise distinct.

        A property is keyed by its storage cell name unless a sibling
        already goes by that name, in which case it keeps its own name.
        Member names are unique among siblings, so neither choice can clash.
        """
        segments = []
        claimed = set(names)
        for child in children:
            segment = child.name
            if child.kind is NodeKind.PROPERTY:
                cell_name = self.config.shadow_cells.cell_name(child.name)
                if cell_name not in claimed:
                    claimed.add(cell_name)
                    segment = cell_name
            segments.append(segment)
        return segments
