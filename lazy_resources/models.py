"""Data models for lazy-resources."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any, BinaryIO, Callable

if TYPE_CHECKING:
    from lazy_resources.discovery.containers import ResourceContainer
    from lazy_resources.observability.audit import AuditSink


class CacheMode(Enum):
    """How concurrent first accesses to the same member are coordinated."""
    SINGLE_FLIGHT = "single_flight"
    RELAXED = "relaxed"


@dataclass(frozen=True)
class ResourceEntry:
    """One named resource inside a container."""
    container: "ResourceContainer"
    name: str
    location: Any = field(default=None, compare=False, repr=False)

    def open(self) -> BinaryIO:
        """Open a binary stream over this entry's bytes."""
        return self.container.open(self)


@dataclass(frozen=True)
class MemberDescriptor:
    """A readable member requested by the target shape."""
    name: str
    declared_type: Any = str


@dataclass
class ResolutionContext:
    """Everything a decoder gets to know about the resource it decodes."""
    name: str
    member: MemberDescriptor
    stream: BinaryIO
    container: "ResourceContainer | None" = None


ResourcePredicate = Callable[[str, MemberDescriptor], bool]
Decoder = Callable[[ResolutionContext], str]


@dataclass(frozen=True)
class Configuration:
    """Immutable, shareable inputs for building accessors."""
    containers: tuple["ResourceContainer", ...]
    predicate: ResourcePredicate
    decoder: Decoder
    cache_mode: CacheMode = CacheMode.SINGLE_FLIGHT
    audit_sink: "AuditSink | None" = None


@dataclass
class AuditEvent:
    """Record of a catalog or resolution operation."""
    ts: datetime
    kind: str  # "catalog", "resolve"
    member: str | None = None
    resource: str | None = None
    container: str | None = None
    chars: int | None = None
    sha256: str | None = None
    detail: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "ts": self.ts.isoformat(),
            "kind": self.kind,
            "member": self.member,
            "resource": self.resource,
            "container": self.container,
            "chars": self.chars,
            "sha256": self.sha256,
            "detail": self.detail,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEvent":
        """Deserialize from dict."""
        return cls(
            ts=datetime.fromisoformat(data["ts"]),
            kind=data["kind"],
            member=data.get("member"),
            resource=data.get("resource"),
            container=data.get("container"),
            chars=data.get("chars"),
            sha256=data.get("sha256"),
            detail=data.get("detail", {}),
        )


@dataclass
class ReaderSettings:
    """File-based configuration for building accessors."""
    packages: list[str] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)
    exclude_patterns: list[str] = field(
        default_factory=lambda: ["pip", "setuptools", "pkg_resources", "wheel"]
    )
    skip_suffixes: set[str] = field(
        default_factory=lambda: {".py", ".pyi", ".pyc", ".pyo", ".pyd", ".so"}
    )
    encoding: str = "utf-8-sig"
    cache_mode: str = CacheMode.SINGLE_FLIGHT.value
    audit_log: str | None = None

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "packages": list(self.packages),
            "directories": list(self.directories),
            "exclude_patterns": list(self.exclude_patterns),
            "skip_suffixes": sorted(self.skip_suffixes),
            "encoding": self.encoding,
            "cache_mode": self.cache_mode,
            "audit_log": self.audit_log,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ReaderSettings":
        """Deserialize from dict, using defaults for missing keys."""
        defaults = cls()
        return cls(
            packages=list(data.get("packages", [])),
            directories=[str(d) for d in data.get("directories", [])],
            exclude_patterns=list(data.get("exclude_patterns", defaults.exclude_patterns)),
            skip_suffixes=set(data.get("skip_suffixes", defaults.skip_suffixes)),
            encoding=data.get("encoding", defaults.encoding),
            cache_mode=data.get("cache_mode", defaults.cache_mode),
            audit_log=data.get("audit_log"),
        )
