"""Metadata lookup for MemberTree.

A property's metadata is split across two places: tags declared on the
property itself and tags declared on the field that stores it. The
MetadataSource merges both so a node sees everything that logically
belongs to its member.
"""

import logging
from typing import Any, List, Optional

from ..naming import ShadowCellConvention
from .introspector import TypeIntrospector
from .node import MemberInfo, NodeKind

logger = logging.getLogger(__name__)


class MetadataSource:
    """Collects the annotations of members and classes.

    Metadata is never essential: every failure is reported to the error
    policy (if any) and answered with an empty list.
    """

    def __init__(self,
                 introspector: TypeIntrospector,
                 shadow_cells: Optional[ShadowCellConvention] = None,
                 error_policy: Any = None):
        self.introspector = introspector
        self.shadow_cells = shadow_cells or ShadowCellConvention()
        self.error_policy = error_policy

    def annotations_for(self, descriptor: Optional[MemberInfo],
                        owner_type: Optional[type]) -> List[Any]:
        """Return the annotations of a member.

        Direct annotations come first. For properties, the annotations of
        the storage cell (found through the shadow cell convention on
        ``owner_type``) are appended. Tags present in both places appear
        twice.

        Args:
            descriptor: The member
            owner_type: Runtime type of the instance holding the member

        Returns:
            List of annotation objects (empty if none or unavailable)
        """
        if descriptor is None or owner_type is None:
            return []

        try:
            annotations = list(self.introspector.annotations_of(descriptor))
            if descriptor.kind is NodeKind.PROPERTY:
                cell = self.shadow_cell_of(descriptor, owner_type)
                if cell is not None:
                    annotations.extend(self.introspector.annotations_of(cell))
        except Exception as e:
            self._report(e, descriptor)
            return []

        return annotations

    def shadow_cell_of(self, descriptor: MemberInfo, owner_type: type) -> Optional[MemberInfo]:
        """Locate the storage cell of a property, or None if it has none."""
        if descriptor.kind is not NodeKind.PROPERTY:
            return None
        cell_name = self.shadow_cells.cell_name(descriptor.name)
        return self.introspector.find_member(owner_type, cell_name, NodeKind.FIELD)

    def type_annotations(self, cls: Optional[type]) -> List[Any]:
        """Return the annotations declared on ``cls`` itself."""
        if cls is None:
            return []
        try:
            return list(self.introspector.type_annotations(cls))
        except Exception as e:
            self._report(e, cls)
            return []

    def _report(self, error: Exception, subject: Any) -> None:
        if self.error_policy is None:
            logger.debug("Ignoring metadata error for %r: %s", subject, error)
            return
        self.error_policy.handle(error, 'annotations', subject)
