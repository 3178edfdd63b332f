"""TypeIntrospector abstraction for MemberTree.

The introspector is what makes MemberTree independent of any particular
object model. It knows HOW to list the members a class declares, how to
read and write them on an instance, and where their metadata lives. The
builder only ever talks to this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from .node import MemberInfo, NodeKind


class TypeIntrospector(ABC):
    """Abstract view of a host object model.

    Members are reported per declaring class ("level"). Walking from the
    most-derived level to the least-derived one and concatenating the
    per-level lists gives every member of an instance exactly once per
    level, in a stable order.
    """

    def type_levels(self, cls: type) -> List[type]:
        """Return the classes to inspect for ``cls``, most-derived first.

        Default implementation follows the MRO and leaves out ``object``.

        Args:
            cls: Runtime type of the instance being expanded

        Returns:
            List of classes whose own members make up the instance
        """
        return [level for level in cls.__mro__ if level is not object]

    @abstractmethod
    def members_declared(self, level: type, instance: Any = None) -> List[MemberInfo]:
        """List the instance members declared by ``level`` itself.

        Members inherited from a base class are not reported here; they are
        reported when the base class is inspected.

        Args:
            level: The declaring class
            instance: Instance being expanded, or None for a class-only view.
                An introspector may use it to discover members that only
                exist on the instance.

        Returns:
            MemberInfo records in declaration order
        """
        pass

    @abstractmethod
    def read(self, descriptor: MemberInfo, owner: Any) -> Any:
        """Read the member's current value from ``owner``.

        Raises whatever the underlying object model raises.
        """
        pass

    @abstractmethod
    def write(self, descriptor: MemberInfo, owner: Any, value: Any) -> None:
        """Write ``value`` to the member on ``owner``.

        Raises whatever the underlying object model raises.
        """
        pass

    def annotations_of(self, descriptor: MemberInfo) -> Sequence[Any]:
        """Return the metadata tags declared directly on the member.

        Default implementation returns the tags captured on the descriptor.
        """
        return descriptor.annotations

    def type_annotations(self, cls: type) -> Sequence[Any]:
        """Return the metadata tags declared on a class itself."""
        return ()

    def is_deprecated(self, descriptor: MemberInfo) -> bool:
        """Check if the member carries a deprecation marker."""
        return False

    def is_synthesized(self, descriptor: MemberInfo) -> bool:
        """Check if the member was generated by the runtime, not written by hand.

        Storage cells of properties are handled separately by the traversal
        policy, which knows the shadow cell naming convention.
        """
        return False

    def find_member(self, cls: type, name: str,
                    kind: Optional[NodeKind] = None) -> Optional[MemberInfo]:
        """Find a member declared anywhere in ``cls``'s hierarchy.

        Default implementation scans ``members_declared`` level by level,
        most-derived first.

        Args:
            cls: Class to search
            name: Member name
            kind: Restrict the search to one NodeKind

        Returns:
            The first matching MemberInfo, or None
        """
        for level in self.type_levels(cls):
            for descriptor in self.members_declared(level):
                if descriptor.name != name:
                    continue
                if kind is None or descriptor.kind is kind:
                    return descriptor
        return None

    # Capability flags - introspectors declare what they support

    def supports_modification(self) -> bool:
        """Check if ``write`` is implemented.

        Returns:
            True if member values can be assigned
        """
        return True
