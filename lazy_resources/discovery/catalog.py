"""Flattened, immutable list of the resources available for matching."""

from typing import Iterable, Iterator

from lazy_resources.models import MemberDescriptor, ResourceEntry, ResourcePredicate
from lazy_resources.discovery.containers import ResourceContainer


class ResourceCatalog:
    """Immutable sequence of ResourceEntry objects.

    A catalog is enumerated once from its containers and never refreshed;
    resources added to a container afterwards are not observed.
    """

    def __init__(self, entries: Iterable[ResourceEntry] = ()):
        self._entries = tuple(entries)

    @classmethod
    def from_containers(cls, containers: Iterable[ResourceContainer]) -> "ResourceCatalog":
        """Enumerate every container once and collect their entries.

        Raises:
            ContainerError: If a container cannot be enumerated
        """
        return cls(
            entry
            for container in containers
            for entry in container.iter_resources()
        )

    @property
    def entries(self) -> tuple[ResourceEntry, ...]:
        return self._entries

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def filter(
        self,
        predicate: ResourcePredicate,
        member: MemberDescriptor,
    ) -> list[ResourceEntry]:
        """Return the entries whose name satisfies predicate for member.

        The predicate is called exactly once per entry, in catalog order.
        """
        return [entry for entry in self._entries if predicate(entry.name, member)]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ResourceEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"ResourceCatalog({len(self._entries)} entries)"
