"""lazy-resources - Typed, lazily resolved access to bundled text resources.

Declare a class whose members are named after the resources you want, and
ResourceBuilder produces an object implementing it whose members find,
decode and cache their resource on first access.
"""

from lazy_resources.exceptions import (
    LazyResourcesError,
    ResolutionError,
    ResourceNotFoundError,
    AmbiguousResourceError,
    UnresolvedMemberError,
    ShapeError,
    ContainerError,
    ConfigurationError,
)

from lazy_resources.models import (
    AuditEvent,
    CacheMode,
    Configuration,
    MemberDescriptor,
    ReaderSettings,
    ResolutionContext,
    ResourceEntry,
)

from lazy_resources.config import load_settings
from lazy_resources.discovery import (
    DirectoryContainer,
    ModuleDiscovery,
    PackageContainer,
    ResourceCatalog,
    ResourceContainer,
)
from lazy_resources.resources import (
    MemberCache,
    Resolver,
    default_predicate,
    read_utf8,
    read_utf8_stream,
    text_decoder,
)
from lazy_resources.observability import AuditSink, JSONLAuditSink, StdoutAuditSink
from lazy_resources.runtime import (
    AccessorSynthesizer,
    ResourceAccessor,
    ResourceBuilder,
    describe_shape,
)

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "LazyResourcesError",
    "ResolutionError",
    "ResourceNotFoundError",
    "AmbiguousResourceError",
    "UnresolvedMemberError",
    "ShapeError",
    "ContainerError",
    "ConfigurationError",
    # Models
    "AuditEvent",
    "CacheMode",
    "Configuration",
    "MemberDescriptor",
    "ReaderSettings",
    "ResolutionContext",
    "ResourceEntry",
    # Configuration
    "load_settings",
    # Discovery
    "DirectoryContainer",
    "ModuleDiscovery",
    "PackageContainer",
    "ResourceCatalog",
    "ResourceContainer",
    # Resolution
    "MemberCache",
    "Resolver",
    "default_predicate",
    "read_utf8",
    "read_utf8_stream",
    "text_decoder",
    # Observability
    "AuditSink",
    "JSONLAuditSink",
    "StdoutAuditSink",
    # Runtime
    "AccessorSynthesizer",
    "ResourceAccessor",
    "ResourceBuilder",
    "describe_shape",
]
