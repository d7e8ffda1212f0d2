"""Resource containers: the bundles a catalog is gathered from.

A container knows how to enumerate the resources it holds and how to open
a byte stream for one of them. Resource names are dot-qualified, starting
with the container name and followed by the relative path of the file with
its separators turned into dots, so a package ``app.texts`` holding
``greetings/Hello.txt`` exposes ``app.texts.greetings.Hello.txt``.
"""

import importlib
import os
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from types import ModuleType
from typing import Any, BinaryIO, Iterable, Iterator

from lazy_resources.exceptions import ContainerError
from lazy_resources.models import ResourceEntry

DEFAULT_SKIP_SUFFIXES = frozenset({".py", ".pyi", ".pyc", ".pyo", ".pyd", ".so"})

_SKIP_DIRS = frozenset({"__pycache__"})

# PEP 561 marker
_SKIP_FILES = frozenset({"py.typed"})


class ResourceContainer(ABC):
    """Abstract bundle of named resources."""

    def __init__(self, name: str, skip_suffixes: Iterable[str] | None = None):
        self.name = name
        self.skip_suffixes = frozenset(
            suffix.lower()
            for suffix in (DEFAULT_SKIP_SUFFIXES if skip_suffixes is None else skip_suffixes)
        )

    @abstractmethod
    def iter_resources(self) -> Iterator[ResourceEntry]:
        """Yield every resource held by this container."""
        pass

    def open(self, entry: ResourceEntry) -> BinaryIO:
        """Open a binary stream for an entry produced by this container.

        Raises:
            ContainerError: If the entry belongs to another container
        """
        if entry.container is not self:
            raise ContainerError(
                f"Resource '{entry.name}' does not belong to container '{self.name}'"
            )
        return entry.location.open("rb")

    def _walk(self, node: Any, parts: tuple[str, ...]) -> Iterator[ResourceEntry]:
        # Works for both pathlib.Path and importlib Traversable nodes
        for child in sorted(node.iterdir(), key=lambda c: c.name):
            if child.is_dir():
                if child.name in _SKIP_DIRS:
                    continue
                yield from self._walk(child, parts + (child.name,))
            elif not self._is_skipped(child.name):
                yield ResourceEntry(
                    container=self,
                    name=".".join((self.name, *parts, child.name)),
                    location=child,
                )

    @property
    def key(self) -> tuple:
        """Identity of the bundle; containers with equal keys hold the same resources."""
        return (type(self).__name__, self.name)

    def _is_skipped(self, filename: str) -> bool:
        if filename in _SKIP_FILES:
            return True
        return os.path.splitext(filename)[1].lower() in self.skip_suffixes

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class PackageContainer(ResourceContainer):
    """Resources bundled inside an importable package.

    Enumeration goes through ``importlib.resources`` so packages installed
    as zip archives or in editable mode are handled the same way as plain
    directories.
    """

    def __init__(
        self,
        package: str | ModuleType,
        skip_suffixes: Iterable[str] | None = None,
    ):
        """Initialize with a package name or an imported package module.

        Args:
            package: Dotted package name or the package module itself
            skip_suffixes: File suffixes that are not treated as resources

        Raises:
            ContainerError: If the package cannot be imported, is a plain
                module, or cannot be traversed
        """
        if isinstance(package, ModuleType):
            module = package
        else:
            try:
                module = importlib.import_module(package)
            except ImportError as e:
                raise ContainerError(f"Cannot import package '{package}': {e}")

        if getattr(module, "__path__", None) is None:
            raise ContainerError(f"'{module.__name__}' is a module, not a package")

        super().__init__(module.__name__, skip_suffixes)

        try:
            self._root = resources.files(module)
        except (AttributeError, OSError, TypeError, ValueError) as e:
            raise ContainerError(f"Cannot traverse package '{self.name}': {e}")

    def iter_resources(self) -> Iterator[ResourceEntry]:
        try:
            yield from self._walk(self._root, ())
        except OSError as e:
            raise ContainerError(f"Cannot enumerate package '{self.name}': {e}")


class DirectoryContainer(ResourceContainer):
    """Resources stored as files below a directory."""

    def __init__(
        self,
        path: Path | str,
        name: str | None = None,
        skip_suffixes: Iterable[str] | None = None,
    ):
        """Initialize with a directory.

        Args:
            path: Directory holding the resources
            name: Prefix for resource names (defaults to the directory name)
            skip_suffixes: File suffixes that are not treated as resources

        Raises:
            ContainerError: If path is not an existing directory
        """
        self.path = Path(path).expanduser().resolve()
        if not self.path.is_dir():
            raise ContainerError(f"Resource directory not found: {self.path}")
        super().__init__(name or self.path.name, skip_suffixes)

    @property
    def key(self) -> tuple:
        return (type(self).__name__, str(self.path), self.name)

    def iter_resources(self) -> Iterator[ResourceEntry]:
        try:
            yield from self._walk(self.path, ())
        except OSError as e:
            raise ContainerError(f"Cannot enumerate directory '{self.path}': {e}")


def as_container(
    source: "ResourceContainer | ModuleType | str | os.PathLike",
    skip_suffixes: Iterable[str] | None = None,
) -> ResourceContainer:
    """Coerce a container-like value into a ResourceContainer.

    Strings are package names, path-like objects are directories.
    """
    if isinstance(source, ResourceContainer):
        return source
    if isinstance(source, (ModuleType, str)):
        return PackageContainer(source, skip_suffixes=skip_suffixes)
    if isinstance(source, os.PathLike):
        return DirectoryContainer(source, skip_suffixes=skip_suffixes)
    raise ContainerError(
        f"Cannot use {type(source).__name__} as a resource container"
    )
