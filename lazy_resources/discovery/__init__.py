"""Discovery module for resource containers and catalogs."""

from lazy_resources.discovery.containers import (
    DirectoryContainer,
    PackageContainer,
    ResourceContainer,
    as_container,
)
from lazy_resources.discovery.catalog import ResourceCatalog
from lazy_resources.discovery.scanner import ModuleDiscovery

__all__ = [
    "ResourceContainer",
    "PackageContainer",
    "DirectoryContainer",
    "as_container",
    "ResourceCatalog",
    "ModuleDiscovery",
]
