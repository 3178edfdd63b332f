"""The MemberTree handle.

``MemberTree`` owns the root node of one inspection session. Creating it
builds the whole tree; the query methods then work on that snapshot.
"""

import logging
from typing import Any, Iterator, List, Optional, Tuple, Type, TypeVar

from .config import BuildConfig
from .core.builder import TreeBuilder
from .core.introspector import TypeIntrospector
from .core.node import MemberNode
from .core.query import find_all_by_annotation, find_by_name, find_by_path, iter_members

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MemberTree:
    """A fully built tree of the members of ``root_object``.

    Example:
        >>> tree = MemberTree(player)
        >>> tree.find_member("health").value
        100
        >>> [n.path for n, _ in tree.find_members_with_annotation(Exposed, recursive=True)]
        ['Player.name', 'Player._health', 'Player.inventory.capacity']

    Raises:
        InvalidRootError: If ``root_object`` is None
    """

    def __init__(self,
                 root_object: Any,
                 config: Optional[BuildConfig] = None,
                 introspector: Optional[TypeIntrospector] = None):
        self.builder = TreeBuilder(introspector=introspector, config=config)
        self.root_object = root_object
        self.root: MemberNode = self.builder.build(root_object)
        logger.debug("Built member tree %s", self.root.path)

    @property
    def config(self) -> BuildConfig:
        return self.builder.config

    @property
    def error_policy(self):
        """The error policy that saw this tree's traversal errors."""
        return self.builder.error_policy

    def rebuild(self) -> MemberNode:
        """Build the tree again from the current state of the root object."""
        self.root = self.builder.build(self.root_object)
        return self.root

    # Queries

    def find_member(self, name: str, recursive: bool = False) -> Optional[MemberNode]:
        """Find a member of the root by name (see ``find_by_name``)."""
        return find_by_name(self.root, name, recursive, self.config.shadow_cells)

    def find_members_with_annotation(self, annotation_type: Type[T],
                                     recursive: bool = False) -> List[Tuple[MemberNode, T]]:
        """Find members carrying an annotation (see ``find_all_by_annotation``)."""
        return find_all_by_annotation(self.root, annotation_type, recursive)

    def find_by_path(self, path: str) -> Optional[MemberNode]:
        return find_by_path(self.root, path)

    def iter_members(self) -> Iterator[MemberNode]:
        """Yield every node below the root in pre-order."""
        return iter_members(self.root)

    def __iter__(self) -> Iterator[MemberNode]:
        return self.iter_members()

    def __len__(self) -> int:
        """Number of nodes in the tree, root included."""
        return 1 + sum(1 for _ in self.iter_members())

    def __repr__(self) -> str:
        return f"MemberTree(root={self.root.path!r})"
