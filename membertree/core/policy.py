"""Traversal policy for MemberTree.

Pure predicates deciding what the builder exposes and what it expands:
which types are opaque values, which members are visible at all, and
which nodes are worth descending into.
"""

import types
import typing
from typing import Any, Optional, Tuple

from ..config import DEFAULT_MANAGED_TYPES, DEFAULT_OPAQUE_TYPES
from ..naming import ShadowCellConvention
from .introspector import TypeIntrospector
from .node import MemberInfo, MemberNode, NodeKind

_UNION_TYPES = (typing.Union, types.UnionType)
_NONE_TYPE = type(None)


class TraversalPolicy:
    """Decides which members are exposed and which nodes are expanded."""

    def __init__(self,
                 introspector: TypeIntrospector,
                 opaque_types: Tuple[type, ...] = DEFAULT_OPAQUE_TYPES,
                 managed_types: Tuple[type, ...] = DEFAULT_MANAGED_TYPES,
                 include_managed: bool = False,
                 shadow_cells: Optional[ShadowCellConvention] = None):
        self.introspector = introspector
        self.opaque_types = tuple(opaque_types)
        self.managed_types = tuple(managed_types)
        self.include_managed = include_managed
        self.shadow_cells = shadow_cells or ShadowCellConvention()

    # Types

    def is_opaque_type(self, declared_type: Any) -> bool:
        """Check if values of this type are terminal and never expanded.

        Typing constructs are reduced to the classes they stand for: a
        union is opaque only if all of its members are, ``List[int]`` is as
        opaque as ``list``, ``Literal`` values are always opaque.
        """
        return self._classify(declared_type, self.opaque_types, literal=True)

    def is_engine_managed_type(self, declared_type: Any) -> bool:
        """Check if the type belongs to runtime machinery that is left alone."""
        return self._classify(declared_type, self.managed_types, literal=False)

    def is_terminal_type(self, declared_type: Any) -> bool:
        """Opaque, or managed while managed types are not opted in."""
        if self.is_opaque_type(declared_type):
            return True
        return not self.include_managed and self.is_engine_managed_type(declared_type)

    # Members

    def is_valid_member(self, descriptor: Optional[MemberInfo],
                        owner_type: Optional[type] = None) -> bool:
        """Check if a discovered member should be exposed at all.

        Rejects runtime-generated members, storage cells of properties
        (they are reached through their property) and deprecated members.
        """
        if descriptor is None:
            return False
        if self.introspector.is_synthesized(descriptor):
            return False
        if self.is_shadow_cell(descriptor, owner_type):
            return False
        if self.introspector.is_deprecated(descriptor):
            return False
        return True

    def is_shadow_cell(self, descriptor: MemberInfo,
                       owner_type: Optional[type] = None) -> bool:
        """Check if a field is the storage cell of a property.

        A name shaped like a cell is only a cell when the owning class
        really has the matching property.
        """
        if descriptor.kind is not NodeKind.FIELD:
            return False
        property_name = self.shadow_cells.property_name(descriptor.name)
        if not property_name:
            return False
        owner_type = owner_type or descriptor.declaring_type
        found = self.introspector.find_member(owner_type, property_name, NodeKind.PROPERTY)
        return found is not None

    # Nodes

    def is_searchable(self, node: MemberNode) -> bool:
        """Check if the builder should expand this node's children."""
        if node.kind is NodeKind.METHOD:
            return False
        if node.is_unreadable:
            return False
        return not self.is_terminal_type(node.declared_type)

    def _classify(self, declared_type: Any, classes: Tuple[type, ...], literal: bool) -> bool:
        if declared_type is None or declared_type is typing.Any:
            return False

        origin = typing.get_origin(declared_type)
        if origin is not None:
            if origin is typing.Literal:
                return literal
            if origin is typing.Annotated:
                return self._classify(typing.get_args(declared_type)[0], classes, literal)
            if origin in _UNION_TYPES:
                args = [a for a in typing.get_args(declared_type) if a is not _NONE_TYPE]
                return bool(args) and all(self._classify(a, classes, literal) for a in args)
            return isinstance(origin, type) and self._classify(origin, classes, literal)

        supertype = getattr(declared_type, "__supertype__", None)
        if supertype is not None:  # typing.NewType
            return self._classify(supertype, classes, literal)

        if isinstance(declared_type, type):
            try:
                return issubclass(declared_type, classes)
            except TypeError:
                return False
        return False
