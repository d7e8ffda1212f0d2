"""Resolution of interface members to catalog entries."""

import hashlib
from datetime import datetime

from lazy_resources.discovery.catalog import ResourceCatalog
from lazy_resources.exceptions import AmbiguousResourceError, ResourceNotFoundError
from lazy_resources.models import (
    AuditEvent,
    Decoder,
    MemberDescriptor,
    ResolutionContext,
    ResourcePredicate,
)
from lazy_resources.observability.audit import AuditSink


class Resolver:
    """Finds the single resource answering a member and decodes it.

    The resolver keeps no state between calls: every call filters the whole
    catalog again. Memoization is the job of MemberCache.
    """

    def __init__(
        self,
        catalog: ResourceCatalog,
        predicate: ResourcePredicate,
        decoder: Decoder,
        audit_sink: AuditSink | None = None,
    ):
        """Initialize with the catalog and the matching/decoding functions.

        Args:
            catalog: Entries to search
            predicate: Matching rule, called once per catalog entry
            decoder: Turns the winning entry's stream into a string
            audit_sink: Optional sink receiving a "resolve" event per success
        """
        self.catalog = catalog
        self.predicate = predicate
        self.decoder = decoder
        self._audit_sink = audit_sink

    def resolve(self, member: MemberDescriptor) -> str:
        """Resolve member to the decoded content of its unique resource.

        The resource stream is opened only for the winning entry and is
        closed before this method returns or raises, whatever the decoder
        does.

        Args:
            member: Descriptor of the requested member

        Returns:
            The decoder's return value

        Raises:
            ResourceNotFoundError: If no entry matches
            AmbiguousResourceError: If more than one entry matches
        """
        matches = self.catalog.filter(self.predicate, member)

        if not matches:
            raise ResourceNotFoundError(member.name)

        if len(matches) > 1:
            raise AmbiguousResourceError(member.name, [m.name for m in matches])

        entry = matches[0]
        with entry.open() as stream:
            value = self.decoder(
                ResolutionContext(
                    name=entry.name,
                    member=member,
                    stream=stream,
                    container=entry.container,
                )
            )

        if self._audit_sink:
            self._audit_sink.log(
                AuditEvent(
                    ts=datetime.now(),
                    kind="resolve",
                    member=member.name,
                    resource=entry.name,
                    container=entry.container.name,
                    chars=len(value) if isinstance(value, str) else None,
                    sha256=_sha256(value),
                )
            )

        return value


def _sha256(value) -> str | None:
    if isinstance(value, str):
        value = value.encode("utf-8")
    if isinstance(value, bytes):
        return hashlib.sha256(value).hexdigest()
    return None
