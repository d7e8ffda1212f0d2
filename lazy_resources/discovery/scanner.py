"""Default container discovery over the packages loaded in this process."""

import fnmatch
import sys
from types import ModuleType
from typing import Iterable, Mapping

from lazy_resources.exceptions import ContainerError
from lazy_resources.discovery.containers import PackageContainer


class ModuleDiscovery:
    """Finds the packages to search when no container was configured.

    Every top-level package currently imported is a candidate, except
    platform packages (the standard library and private ``_``-prefixed
    modules) and packages matching one of the exclude patterns. Packages that
    cannot be traversed are reported and skipped, so one broken
    installation does not prevent building an accessor.
    """

    DEFAULT_EXCLUDE_PATTERNS = ("pip", "setuptools", "pkg_resources", "wheel")

    def __init__(
        self,
        exclude_patterns: Iterable[str] | None = None,
        skip_suffixes: Iterable[str] | None = None,
        modules: Mapping | None = None,
    ):
        """Initialize discovery.

        Args:
            exclude_patterns: fnmatch patterns of package names never used as containers
            skip_suffixes: Passed on to every PackageContainer
            modules: Module table to inspect (defaults to sys.modules)
        """
        self.exclude_patterns = tuple(
            self.DEFAULT_EXCLUDE_PATTERNS if exclude_patterns is None else exclude_patterns
        )
        self.skip_suffixes = skip_suffixes
        self._modules = modules

    def discover(self) -> list[PackageContainer]:
        """Return a container for every eligible loaded package.

        Returns:
            List of PackageContainer objects sorted by package name

        Example:
            >>> containers = ModuleDiscovery(exclude_patterns=["tests*"]).discover()
            >>> print([c.name for c in containers])
        """
        containers = []

        packages = self._top_level_packages()

        for name in sorted(packages):
            if self._is_platform(name) or self._is_excluded(name):
                continue

            try:
                containers.append(
                    PackageContainer(packages[name], skip_suffixes=self.skip_suffixes)
                )
            except ContainerError as e:
                print(f"Warning: Skipping package {name}: {e}", file=sys.stderr)
                continue

        return containers

    def _top_level_packages(self) -> dict:
        modules = sys.modules if self._modules is None else self._modules
        packages = {}

        # Copy first, imports on other threads may resize sys.modules
        for module_name, module in list(modules.items()):
            if not isinstance(module, ModuleType) or "." in module_name:
                continue
            if getattr(module, "__path__", None) is None:
                continue
            packages[module_name] = module

        return packages

    def _is_platform(self, name: str) -> bool:
        return name.startswith("_") or name in sys.stdlib_module_names

    def _is_excluded(self, name: str) -> bool:
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.exclude_patterns)
