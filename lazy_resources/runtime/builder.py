"""Fluent entry point for building resource accessors.

This module provides the ResourceBuilder class. A builder collects the
containers to search, an optional matching rule and decoder, then produces
accessors implementing a caller-declared shape:

    >>> from typing import Protocol
    >>> from lazy_resources import ResourceBuilder
    >>>
    >>> class Texts(Protocol):
    ...     Greeting: str
    ...     Farewell: str
    >>>
    >>> texts = ResourceBuilder().add_container("myapp.texts").build(Texts)
    >>> texts.Greeting  # reads myapp/texts/Greeting.txt on first access
"""

from pathlib import Path
from typing import Any, Iterable, Mapping, TypeVar

from lazy_resources.discovery.containers import ResourceContainer, as_container
from lazy_resources.discovery.scanner import ModuleDiscovery
from lazy_resources.exceptions import ConfigurationError
from lazy_resources.models import (
    CacheMode,
    Configuration,
    Decoder,
    ReaderSettings,
    ResourcePredicate,
)
from lazy_resources.observability.audit import AuditSink, JSONLAuditSink
from lazy_resources.resources.predicates import default_predicate
from lazy_resources.resources.reader import read_utf8, text_decoder
from lazy_resources.runtime.accessor import AccessorSynthesizer

T = TypeVar("T")


class ResourceBuilder:
    """Collects configuration and builds accessors.

    Defaults applied when building:
    - no container added: every container found by the discovery
      collaborator (ModuleDiscovery unless replaced with with_discovery())
    - no predicate: default_predicate (case-insensitive suffix match)
    - no decoder: read_utf8 (whole stream as UTF-8)

    A builder is meant to be configured and used from a single thread.
    The accessors it builds are safe to share between threads.
    """

    def __init__(self, skip_suffixes: Iterable[str] | None = None):
        """Initialize an empty builder.

        Args:
            skip_suffixes: File suffixes that are not resources, applied to
                          containers created from package names or paths
        """
        self._skip_suffixes = skip_suffixes
        self._containers: list[ResourceContainer] = []
        self._predicate: ResourcePredicate | None = None
        self._decoder: Decoder | None = None
        self._discovery: Any = None
        self._cache_mode = CacheMode.SINGLE_FLIGHT
        self._audit_sink: AuditSink | None = None
        self._synthesizer = AccessorSynthesizer()

    def add_container(self, container: Any) -> "ResourceBuilder":
        """Add a container to search.

        Adding a container that is already configured has no effect.

        Args:
            container: A ResourceContainer, a package name, an imported
                      package module, or a directory path

        Raises:
            ContainerError: If the value cannot be turned into a container
        """
        container = as_container(container, self._skip_suffixes)
        if all(c.key != container.key for c in self._containers):
            self._containers.append(container)
        return self

    def with_predicate(self, predicate: ResourcePredicate) -> "ResourceBuilder":
        """Replace the matching rule used to pick a resource for a member."""
        self._predicate = predicate
        return self

    def with_decoder(self, decoder: Decoder) -> "ResourceBuilder":
        """Replace the function turning a resource stream into a value.

        The decoder receives a ResolutionContext carrying the resource name,
        the member descriptor and the open stream.
        """
        self._decoder = decoder
        return self

    def with_discovery(self, discovery: Any) -> "ResourceBuilder":
        """Replace the collaborator supplying default containers.

        Any object with a ``discover()`` method returning containers works.
        """
        self._discovery = discovery
        return self

    def with_cache_mode(self, mode: CacheMode | str) -> "ResourceBuilder":
        """Choose how concurrent first accesses are coordinated.

        Raises:
            ConfigurationError: If mode is not a known cache mode
        """
        try:
            self._cache_mode = CacheMode(mode)
        except ValueError:
            raise ConfigurationError(
                f"Unknown cache mode '{mode}'. "
                f"Must be one of: {', '.join(m.value for m in CacheMode)}"
            )
        return self

    def with_audit_sink(self, audit_sink: AuditSink | None) -> "ResourceBuilder":
        """Report catalog and resolution events to audit_sink."""
        self._audit_sink = audit_sink
        return self

    def configuration(self) -> Configuration:
        """Return the Configuration build() would use, defaults applied."""
        containers = self._containers
        if not containers:
            discovery = self._discovery or ModuleDiscovery(skip_suffixes=self._skip_suffixes)
            containers = discovery.discover()

        return Configuration(
            containers=tuple(containers),
            predicate=self._predicate or default_predicate,
            decoder=self._decoder or read_utf8,
            cache_mode=self._cache_mode,
            audit_sink=self._audit_sink,
        )

    def build(self, shape: "type[T] | Mapping[str, Any]", name: str | None = None) -> T:
        """Build an accessor implementing shape.

        No resource is read here. Each member is resolved on first access
        and cached for the lifetime of the returned object.

        Args:
            shape: Class declaring the wanted resources as annotated
                   attributes or properties, or a mapping of member names
                   to declared types
            name: Name for mapping shapes, used in the accessor class name

        Returns:
            Object implementing shape

        Raises:
            ShapeError: If the shape declares something other than
                        readable members
            ContainerError: If a container cannot be enumerated
        """
        return self._synthesizer.synthesize(shape, self.configuration(), name=name)

    @classmethod
    def from_settings(cls, settings: ReaderSettings) -> "ResourceBuilder":
        """Create a builder configured from ReaderSettings.

        Raises:
            ConfigurationError: If the settings hold an unknown cache mode
                                or encoding
            ContainerError: If a listed package or directory is unusable
        """
        _check_scalar_settings(settings)

        builder = cls(skip_suffixes=settings.skip_suffixes)

        for package in settings.packages:
            builder.add_container(package)
        for directory in settings.directories:
            builder.add_container(Path(directory))

        builder.with_discovery(
            ModuleDiscovery(
                exclude_patterns=settings.exclude_patterns,
                skip_suffixes=settings.skip_suffixes,
            )
        )
        builder.with_cache_mode(settings.cache_mode)

        if settings.encoding.lower().replace("_", "-") != "utf-8-sig":
            try:
                builder.with_decoder(text_decoder(settings.encoding))
            except LookupError:
                raise ConfigurationError(f"Unknown encoding '{settings.encoding}'")

        if settings.audit_log:
            builder.with_audit_sink(JSONLAuditSink(Path(settings.audit_log).expanduser()))

        return builder


def _check_scalar_settings(settings: ReaderSettings) -> None:
    if not isinstance(settings.encoding, str):
        raise ConfigurationError(
            f"Setting 'encoding' must be a string, got {type(settings.encoding).__name__}"
        )
    if not isinstance(settings.cache_mode, str):
        raise ConfigurationError(
            f"Setting 'cache_mode' must be a string, got {type(settings.cache_mode).__name__}"
        )
    if settings.audit_log is not None and not isinstance(settings.audit_log, str):
        raise ConfigurationError(
            f"Setting 'audit_log' must be a string, got {type(settings.audit_log).__name__}"
        )
