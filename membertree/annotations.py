"""Attaching metadata tags to members.

Python has two natural homes for member metadata:

- ``typing.Annotated`` on field annotations and return annotations::

      health: Annotated[int, Range(0, 100)]

- the ``annotate`` decorator for methods, properties and classes::

      @annotate(Exposed())
      @property
      def name(self) -> str: ...

Tags are arbitrary objects; queries match them by type.
"""

from functools import cached_property
from typing import Any, Optional, Tuple

ANNOTATIONS_ATTR = "__member_annotations__"


class Deprecated:
    """Tag marking a member as deprecated; deprecated members are not exposed."""

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason

    def __repr__(self) -> str:
        if self.reason:
            return f"Deprecated({self.reason!r})"
        return "Deprecated()"


def annotate(*tags: Any):
    """Decorator attaching ``tags`` to a function, property or class.

    Stacked decorators keep source order: the topmost decorator's tags come
    first.
    """
    def decorator(target):
        holder = _getter_of(target)
        existing = declared_tags(holder)
        setattr(holder, ANNOTATIONS_ATTR, tuple(tags) + existing)
        return target
    return decorator


def declared_tags(target: Any) -> Tuple[Any, ...]:
    """Return the tags attached to ``target`` with ``annotate``.

    Classes only report their own tags, never those inherited from a base.
    """
    target = _getter_of(target)
    if target is None:
        return ()
    if isinstance(target, type):
        return tuple(target.__dict__.get(ANNOTATIONS_ATTR, ()))
    return tuple(getattr(target, ANNOTATIONS_ATTR, ()))


def _getter_of(target: Any) -> Any:
    if isinstance(target, property):
        return target.fget
    if isinstance(target, cached_property):
        return target.func
    return target
