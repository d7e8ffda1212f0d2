"""Runtime synthesis of resource accessors for arbitrary shapes.

A shape is either a class declaring the wanted resources as public
annotated attributes or properties (a ``typing.Protocol``, an ``abc.ABC``
with abstract properties, or a plain class), or a mapping of member names
to declared types. For each shape a class deriving from ResourceAccessor
and the shape is created at build time; every member becomes a read-only
property that resolves its resource lazily through the accessor's cache.
"""

import inspect
import keyword
import types
import typing
from abc import ABC
from collections.abc import Mapping
from datetime import datetime
from typing import Any, ClassVar, Generic, Protocol

from lazy_resources.discovery.catalog import ResourceCatalog
from lazy_resources.exceptions import ShapeError, UnresolvedMemberError
from lazy_resources.models import AuditEvent, Configuration, MemberDescriptor
from lazy_resources.resources.cache import MemberCache
from lazy_resources.resources.resolver import Resolver


class ResourceAccessor:
    """Base class of every synthesized accessor.

    Holds the member descriptors, the catalog enumerated for this accessor,
    and the accessor's own MemberCache.
    """

    def __init__(
        self,
        members: tuple[MemberDescriptor, ...],
        catalog: ResourceCatalog,
        cache: MemberCache,
    ):
        self._members = {member.name: member for member in members}
        self._catalog = catalog
        self._cache = cache

    def _load(self, name: str) -> str:
        """Return the value of member name, resolving it on first access.

        Raises:
            UnresolvedMemberError: If name is not a declared member
            ResolutionError: If the member's resource cannot be resolved
        """
        member = self._members.get(name)
        if member is None:
            raise UnresolvedMemberError(name)
        return self._cache.get_or_resolve(member)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} members={list(self._members)}>"


# Framework bases contribute no members
_IGNORED_BASES = (object, Generic, Protocol, ABC, ResourceAccessor)


def describe_shape(shape: Any) -> tuple[MemberDescriptor, ...]:
    """Derive member descriptors from a shape class or mapping.

    Members are returned in declaration order, base classes first. Names
    starting with an underscore and ClassVar annotations are ignored.

    Args:
        shape: Class declaring readable members, or a mapping of member
               name to declared type

    Returns:
        Tuple of MemberDescriptor objects

    Raises:
        ShapeError: If the shape is neither a class nor a mapping, declares
                    an abstract method, or uses an invalid member name

    Example:
        >>> class Texts(Protocol):
        ...     Greeting: str
        >>> describe_shape(Texts)
        (MemberDescriptor(name='Greeting', declared_type=<class 'str'>),)
    """
    if isinstance(shape, Mapping):
        members = []
        for name, declared_type in shape.items():
            _check_member_name(name)
            members.append(MemberDescriptor(name, declared_type))
        return tuple(members)

    if not isinstance(shape, type):
        raise ShapeError(
            f"Shape must be a class or a mapping, got {type(shape).__name__}"
        )

    members: dict[str, MemberDescriptor] = {}

    for cls in reversed(shape.__mro__):
        if cls in _IGNORED_BASES:
            continue

        for name, annotation in inspect.get_annotations(cls).items():
            if name.startswith("_") or _is_classvar(annotation):
                continue
            members[name] = MemberDescriptor(name, annotation)

        for name, attr in vars(cls).items():
            if not name.startswith("_") and isinstance(attr, property):
                members[name] = MemberDescriptor(name, _return_type(attr))

    for name in dir(shape):
        if name.startswith("_") or name in members:
            continue
        if _is_unimplemented_method(shape, name):
            raise ShapeError(
                f"{shape.__name__}.{name} is a method; "
                f"only readable members are supported"
            )

    return tuple(members.values())


class AccessorSynthesizer:
    """Produces accessor instances for arbitrary shapes.

    Synthesis never resolves a resource. It enumerates a fresh catalog for
    the new accessor and wires each member to that accessor's cache; a
    missing or ambiguous resource only surfaces on first access.
    """

    def create_class(
        self,
        shape: Any,
        members: tuple[MemberDescriptor, ...],
        name: str | None = None,
    ) -> type:
        """Create the accessor class implementing shape.

        Args:
            shape: Shape class or mapping the members were derived from
            members: Descriptors from describe_shape()
            name: Shape name used for mappings (defaults to "Resources")

        Returns:
            A new subclass of ResourceAccessor (and of shape, for classes)
        """
        if isinstance(shape, type):
            bases = (ResourceAccessor, shape)
            shape_name = shape.__name__
        else:
            bases = (ResourceAccessor,)
            shape_name = name or "Resources"

        namespace = {member.name: _member_property(member) for member in members}
        namespace["__module__"] = __name__
        namespace["__qualname__"] = f"ResourceAccessor{shape_name}"

        try:
            return types.new_class(
                f"ResourceAccessor{shape_name}",
                bases,
                exec_body=lambda ns: ns.update(namespace),
            )
        except TypeError as e:
            raise ShapeError(f"Cannot implement shape {shape_name}: {e}")

    def synthesize(
        self,
        shape: Any,
        configuration: Configuration,
        name: str | None = None,
    ) -> Any:
        """Build an accessor instance implementing shape.

        Args:
            shape: Shape class or mapping of member names to declared types
            configuration: Containers, predicate, decoder and cache mode
            name: Shape name used for mappings

        Returns:
            Instance of the synthesized accessor class

        Raises:
            ShapeError: If the shape is malformed
            ContainerError: If a container cannot be enumerated
        """
        members = describe_shape(shape)
        accessor_class = self.create_class(shape, members, name=name)

        catalog = ResourceCatalog.from_containers(configuration.containers)
        if configuration.audit_sink:
            configuration.audit_sink.log(
                AuditEvent(
                    ts=datetime.now(),
                    kind="catalog",
                    detail={
                        "shape": accessor_class.__name__,
                        "entries": len(catalog),
                        "containers": [c.name for c in configuration.containers],
                    },
                )
            )

        resolver = Resolver(
            catalog,
            configuration.predicate,
            configuration.decoder,
            audit_sink=configuration.audit_sink,
        )
        cache = MemberCache(resolver, configuration.cache_mode)

        return accessor_class(members, catalog, cache)


def _member_property(member: MemberDescriptor) -> property:
    def get(self):
        return self._load(member.name)

    get.__name__ = member.name
    return property(get, doc=f"Resource resolved for member '{member.name}'.")


def _check_member_name(name: Any) -> None:
    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
        raise ShapeError(f"Invalid member name: {name!r}")
    if name.startswith("_"):
        raise ShapeError(f"Member names cannot start with an underscore: {name!r}")


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or typing.get_origin(annotation) is ClassVar


def _is_unimplemented_method(shape: type, name: str) -> bool:
    owner = next((c for c in shape.__mro__ if name in vars(c)), None)
    if owner is None or owner in _IGNORED_BASES:
        return False
    attr = vars(owner)[name]
    if getattr(attr, "__isabstractmethod__", False):
        return True
    # Protocol method bodies are only declarations
    return bool(getattr(owner, "_is_protocol", False)) and callable(attr)


def _return_type(prop: property) -> Any:
    if prop.fget is None:
        return str
    return inspect.get_annotations(prop.fget).get("return", str)
