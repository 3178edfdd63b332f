"""Introspector for ordinary Python objects.

Understands the ways Python classes declare instance state:

- annotated attributes (plain classes, dataclasses, attrs-style classes)
- ``__slots__``
- attributes that only exist in an instance's ``__dict__``
- ``property`` and ``functools.cached_property``
- plain functions defined in the class body (methods)

Metadata comes from ``typing.Annotated`` and from the ``annotate``
decorator. Deprecation is recognised from the ``Deprecated`` tag and from
the PEP 702 ``__deprecated__`` marker.
"""

import dataclasses
import decimal
import enum
import fractions
import inspect
import typing
from functools import cached_property
from typing import Any, Dict, List, Sequence, Tuple

from cachetools import LRUCache

from ..annotations import Deprecated, declared_tags
from ..core.introspector import TypeIntrospector
from ..core.node import MemberInfo, NodeKind

# Declared types a write converts to, the way a value is coerced when an
# editor hands over text or a number of the wrong kind. bool is left out:
# bool("False") is True.
_CONVERTIBLE_TYPES = (int, float, complex, str, decimal.Decimal, fractions.Fraction)

_SKIPPED_SLOTS = ("__dict__", "__weakref__")


class PythonIntrospector(TypeIntrospector):
    """TypeIntrospector for regular Python classes.

    Per-class member lists are kept in an LRU cache; the cache assumes
    classes are not modified while trees are being built. Call
    ``clear_cache`` after monkeypatching a class.
    """

    def __init__(self, coerce_writes: bool = True, cache_size: int = 1024):
        """
        Initialize the introspector.

        Args:
            coerce_writes: Convert written values to enum and numeric
                declared types before assigning them
            cache_size: Maximum number of classes whose members are cached
        """
        self.coerce_writes = coerce_writes
        self._class_members: LRUCache = LRUCache(maxsize=cache_size)

        # Statistics
        self.cache_hits = 0
        self.cache_misses = 0

    # Discovery

    def members_declared(self, level: type, instance: Any = None) -> List[MemberInfo]:
        members = list(self._members_of_class(level))
        if instance is not None and type(instance) is level:
            members.extend(self._instance_only_fields(level, instance))
        return members

    def clear_cache(self) -> None:
        self._class_members.clear()
        self.cache_hits = 0
        self.cache_misses = 0

    def get_cache_stats(self) -> Dict[str, Any]:
        return {
            'hits': self.cache_hits,
            'misses': self.cache_misses,
            'size': len(self._class_members),
            'max_size': self._class_members.maxsize,
        }

    def _members_of_class(self, level: type) -> Tuple[MemberInfo, ...]:
        cached = self._class_members.get(level)
        if cached is not None:
            self.cache_hits += 1
            return cached

        self.cache_misses += 1
        cached = tuple(self._fields_of(level)) + tuple(self._callables_of(level))
        self._class_members[level] = cached
        return cached

    def _fields_of(self, level: type) -> List[MemberInfo]:
        fields = []
        hints = _own_type_hints(level)
        for name, hint in hints.items():
            if _is_class_level(hint):
                continue
            declared_type, tags = _split_annotated(hint)
            fields.append(MemberInfo(name, NodeKind.FIELD, level, declared_type,
                                     annotations=tags))

        slots = level.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            name = _mangle(level, slot)
            if name in hints or slot in _SKIPPED_SLOTS:
                continue
            fields.append(MemberInfo(name, NodeKind.FIELD, level))
        return fields

    def _callables_of(self, level: type) -> List[MemberInfo]:
        members = []
        for name, attr in vars(level).items():
            if isinstance(attr, property):
                getter = attr.fget
            elif isinstance(attr, cached_property):
                getter = attr.func
            elif inspect.isfunction(attr):
                declared_type, tags = _split_annotated(_return_hint(attr))
                members.append(MemberInfo(name, NodeKind.METHOD, level, declared_type, attr,
                                          declared_tags(attr) + tags))
                continue
            else:
                continue

            declared_type, tags = _split_annotated(_return_hint(getter))
            members.append(MemberInfo(name, NodeKind.PROPERTY, level, declared_type, attr,
                                      declared_tags(attr) + tags))
        return members

    def _instance_only_fields(self, level: type, instance: Any) -> List[MemberInfo]:
        try:
            state = vars(instance)
        except TypeError:
            return []

        declared = set()
        for cls in self.type_levels(level):
            declared.update(m.name for m in self._members_of_class(cls))

        return [MemberInfo(name, NodeKind.FIELD, level)
                for name in state
                if name not in declared and not _is_dunder(name)]

    # Value access

    def read(self, descriptor: MemberInfo, owner: Any) -> Any:
        return getattr(owner, descriptor.name)

    def write(self, descriptor: MemberInfo, owner: Any, value: Any) -> None:
        if descriptor.kind is NodeKind.METHOD:
            raise AttributeError(
                f"Method {descriptor.name!r} of {type(owner).__name__!r} cannot be assigned")
        if self.coerce_writes:
            value = self.convert(value, descriptor.declared_type)
        setattr(owner, descriptor.name, value)

    def convert(self, value: Any, declared_type: Any) -> Any:
        """Convert ``value`` to ``declared_type`` where a conversion applies.

        Enums are looked up by value (or by name for strings), numeric and
        string types are constructed from the value. Conversion errors are
        raised unchanged.
        """
        if value is None or not isinstance(declared_type, type):
            return value
        if typing.get_origin(declared_type) is not None:
            return value
        if isinstance(value, declared_type):
            return value
        if issubclass(declared_type, enum.Enum):
            if isinstance(value, str) and value in declared_type.__members__:
                return declared_type[value]
            return declared_type(value)
        if issubclass(declared_type, bool):
            return value
        if issubclass(declared_type, _CONVERTIBLE_TYPES):
            return declared_type(value)
        return value

    # Metadata

    def annotations_of(self, descriptor: MemberInfo) -> Sequence[Any]:
        return descriptor.annotations

    def type_annotations(self, cls: type) -> Sequence[Any]:
        return declared_tags(cls)

    def is_deprecated(self, descriptor: MemberInfo) -> bool:
        if any(isinstance(tag, Deprecated) for tag in descriptor.annotations):
            return True
        raw = descriptor.raw
        if isinstance(raw, property):
            raw = raw.fget
        elif isinstance(raw, cached_property):
            raw = raw.func
        return getattr(raw, "__deprecated__", None) is not None

    def is_synthesized(self, descriptor: MemberInfo) -> bool:
        return _is_dunder(descriptor.name)


def _own_type_hints(level: type) -> Dict[str, Any]:
    """Annotations declared by ``level`` itself, resolved where possible."""
    raw = inspect.get_annotations(level)
    if not raw:
        return {}
    try:
        resolved = typing.get_type_hints(level, include_extras=True)
    except Exception:
        # Unresolvable forward references: keep the raw annotations
        return dict(raw)
    return {name: resolved.get(name, hint) for name, hint in raw.items()}


def _return_hint(func: Any) -> Any:
    if func is None:
        return None
    try:
        return typing.get_type_hints(func, include_extras=True).get("return")
    except Exception:
        return getattr(func, "__annotations__", {}).get("return")


def _split_annotated(hint: Any) -> Tuple[Any, Tuple[Any, ...]]:
    """Split ``Annotated[T, *tags]`` into ``(T, tags)``."""
    if typing.get_origin(hint) is typing.Annotated:
        return hint.__origin__, tuple(hint.__metadata__)
    return hint, ()


def _is_class_level(hint: Any) -> bool:
    if hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar:
        return True
    if isinstance(hint, dataclasses.InitVar) or hint is dataclasses.InitVar:
        return True
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar", "InitVar", "dataclasses.InitVar"))
    return False


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _mangle(level: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{level.__name__.lstrip('_')}{name}"
    return name
