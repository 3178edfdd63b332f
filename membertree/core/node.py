"""Node types for MemberTree.

``MemberInfo`` describes a member as declared on a class; ``MemberNode``
is that member observed on one particular instance, with its value, its
metadata and its place in the tree. Navigation and expansion live in the
builder; nodes are primarily data containers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type, TypeVar

T = TypeVar("T")


class NodeKind(Enum):
    """What a node stands for."""
    FIELD = "field"
    PROPERTY = "property"
    METHOD = "method"
    ROOT = "root"


@dataclass(frozen=True, eq=False)
class MemberInfo:
    """Host description of one member of a class.

    Instances compare by identity: two lookups of the same member on the
    same class produce equal-looking but distinct records, and the record
    doubles as the sentinel value of an unreadable node.
    """
    name: str
    kind: NodeKind
    declaring_type: type
    declared_type: Any = None
    raw: Any = None
    annotations: Tuple[Any, ...] = field(default=())

    def __repr__(self) -> str:
        return (f"MemberInfo({self.kind.value} "
                f"{self.declaring_type.__qualname__}.{self.name})")


class TreeNode(ABC):
    """Abstract base class for nodes in a member tree.

    This class defines the minimal interface the walkers and queries rely on.
    """

    @abstractmethod
    def identifier(self) -> str:
        """Return a unique, stable identifier for this node.

        Must be unique within the tree and stable across rebuilds of an
        unchanged object graph, so it can serve as a persistence key.
        """
        pass

    @abstractmethod
    def is_leaf(self) -> bool:
        """Check if this node has no children."""
        pass

    @abstractmethod
    def get_children(self) -> List['TreeNode']:
        """Return the children of this node (empty list if none)."""
        pass

    @abstractmethod
    def metadata(self) -> Dict[str, Any]:
        """Return lightweight information about this node."""
        pass

    def __str__(self) -> str:
        """String representation defaults to identifier."""
        return self.identifier()

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}(id={self.identifier()!r})"


class MemberNode(TreeNode):
    """One member (or the root object) of an inspected object graph.

    Attributes:
        name: Member name; a safe display name for the root
        path: Dot-delimited path from the root, unique within the tree
        kind: NodeKind of the member
        declared_type: Static type of the member (runtime type for the root)
        value: Live value at build time; the descriptor itself for methods
            and for members that could not be read
        owner: Instance holding the member (None for the root)
        descriptor: MemberInfo of the member (None for the root)
        annotations: Metadata tags, direct ones first
        children: None until expanded, then the complete list of children
        parent: Parent node (None for the root)
        depth: Distance from the root
        read_error: Exception raised while reading the value, if any
    """

    def __init__(self,
                 name: str,
                 kind: NodeKind,
                 declared_type: Any,
                 value: Any,
                 owner: Any = None,
                 descriptor: Optional[MemberInfo] = None,
                 path: Optional[str] = None,
                 read_error: Optional[BaseException] = None,
                 introspector: Any = None):
        self.name = name
        self.kind = kind
        self.declared_type = declared_type
        self.value = value
        self.owner = owner
        self.descriptor = descriptor
        self.path = path if path is not None else name
        self.read_error = read_error
        self.annotations: List[Any] = []
        self.children: Optional[List['MemberNode']] = None
        self.parent: Optional['MemberNode'] = None
        self.depth = 0
        self._introspector = introspector

    # TreeNode interface

    def identifier(self) -> str:
        return self.path

    def is_leaf(self) -> bool:
        return not self.children

    def get_children(self) -> List['MemberNode']:
        """Return the children, or an empty list if the node was not expanded."""
        if self.children is None:
            return []
        return list(self.children)

    def metadata(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'path': self.path,
            'kind': self.kind.value,
            'type': _type_name(self.declared_type),
            'depth': self.depth,
            'annotations': len(self.annotations),
            'children': len(self.children) if self.children is not None else None,
            'unreadable': self.is_unreadable,
        }

    # State

    @property
    def is_root(self) -> bool:
        return self.kind is NodeKind.ROOT

    @property
    def is_expanded(self) -> bool:
        """True once the builder has assigned this node's children."""
        return self.children is not None

    @property
    def is_unreadable(self) -> bool:
        """True when the value is the descriptor sentinel of a failed read."""
        return self.read_error is not None

    @property
    def segment(self) -> str:
        """Last component of the path."""
        return self.path.rsplit(".", 1)[-1] if self.parent is not None else self.path

    # Annotations

    def has_annotation(self, annotation_type: Type[Any]) -> bool:
        return any(isinstance(a, annotation_type) for a in self.annotations)

    def get_annotation(self, annotation_type: Type[T]) -> Optional[T]:
        """Return the first annotation of the given type, or None."""
        for annotation in self.annotations:
            if isinstance(annotation, annotation_type):
                return annotation
        return None

    def annotations_of_type(self, annotation_type: Type[T]) -> List[T]:
        return [a for a in self.annotations if isinstance(a, annotation_type)]

    # Live value access

    def get_value(self) -> Any:
        """Read the member's current value from its owner.

        Unlike the value captured at build time, failures of the underlying
        read are raised to the caller.
        """
        if self.descriptor is None:
            return self.value
        return self._introspector.read(self.descriptor, self.owner)

    def set_value(self, value: Any) -> None:
        """Write a new value to the member on its owner.

        Failures of the underlying write (read-only members, values that
        cannot be converted to the declared type) are raised unchanged.
        The tree is not refreshed; rebuild it to see derived changes.
        """
        if self.descriptor is None:
            raise AttributeError(f"The root object {self.name!r} cannot be assigned")
        if not self._introspector.supports_modification():
            raise AttributeError(
                f"{type(self._introspector).__name__} does not support writing {self.path!r}")
        self._introspector.write(self.descriptor, self.owner, value)

    # Navigation helpers

    def iter_ancestors(self) -> Iterator['MemberNode']:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def __repr__(self) -> str:
        return (f"MemberNode({self.kind.value} {self.path!r} "
                f"type={_type_name(self.declared_type)})")


def _type_name(declared_type: Any) -> str:
    if declared_type is None:
        return "None"
    if isinstance(declared_type, type):
        return declared_type.__qualname__
    return str(declared_type)
