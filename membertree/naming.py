"""Naming strategies for MemberTree.

Two naming questions are host-specific and therefore pluggable:

- Where does a property keep its storage? ``ShadowCellConvention`` maps a
  property name to the name of its backing ("shadow") cell and back.
- What should the root node be called? ``safe_display_name`` derives a name
  without trusting ``__str__`` on objects that should not be poked.
"""

from typing import Any, Callable, Optional


class ShadowCellConvention:
    """Maps property names to the names of their storage cells.

    The default matches the common Python idiom of a ``health`` property
    backed by a ``_health`` attribute. Other conventions are a matter of
    prefix and suffix, e.g. ``ShadowCellConvention("<", ">k__BackingField")``.
    """

    def __init__(self, prefix: str = "_", suffix: str = ""):
        if not prefix and not suffix:
            raise ValueError("A shadow cell convention needs a prefix or a suffix")
        self.prefix = prefix
        self.suffix = suffix

    def cell_name(self, property_name: str) -> str:
        """Return the storage cell name for ``property_name``."""
        return f"{self.prefix}{property_name}{self.suffix}"

    def matches(self, name: str) -> bool:
        """Check if ``name`` has the shape of a storage cell name."""
        if len(name) <= len(self.prefix) + len(self.suffix):
            return False
        return name.startswith(self.prefix) and name.endswith(self.suffix)

    def property_name(self, cell_name: str) -> Optional[str]:
        """Return the property a cell name would belong to, or None."""
        if not self.matches(cell_name):
            return None
        end = len(cell_name) - len(self.suffix)
        return cell_name[len(self.prefix):end]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(prefix={self.prefix!r}, suffix={self.suffix!r})"


def safe_display_name(instance: Any, is_managed: Callable[[type], bool]) -> str:
    """Derive a display name for a root instance.

    ``str()`` is only used when the class customises ``__str__`` and is not
    managed. Everything else is named after its runtime type, which is also
    the fallback when ``str()`` raises.
    """
    cls = type(instance)
    type_name = cls.__name__
    if is_managed(cls) or cls.__str__ is object.__str__:
        return type_name
    try:
        text = str(instance)
    except Exception:
        return type_name
    return text or type_name
