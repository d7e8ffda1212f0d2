"""Per-accessor memo table for resolved member values."""

import threading

from lazy_resources.models import CacheMode, MemberDescriptor
from lazy_resources.resources.resolver import Resolver

_MISSING = object()


class MemberCache:
    """Caches the value resolved for each member of one accessor.

    Values are keyed by member name, which identifies a member within an
    accessor. Only successful resolutions are stored; a failure leaves the
    member unresolved so the next access tries again from scratch.

    Two modes coordinate concurrent first accesses to the same member:

    - ``CacheMode.SINGLE_FLIGHT``: one resolution per member runs at a time.
      Concurrent callers wait for it and return the stored value. If it
      fails, the next waiter resolves again.
    - ``CacheMode.RELAXED``: racing callers may each run the resolver. The
      first store wins and every caller returns the stored value.

    Stores are atomic per key in both modes.
    """

    def __init__(self, resolver: Resolver, mode: CacheMode = CacheMode.SINGLE_FLIGHT):
        """Initialize with the resolver used on cache misses.

        Args:
            resolver: Resolver invoked for members not cached yet
            mode: Coordination of concurrent first accesses
        """
        self.resolver = resolver
        self.mode = CacheMode(mode)
        self._values: dict[str, str] = {}
        self._lock = threading.Lock()
        self._member_locks: dict[str, threading.Lock] = {}

    def get_or_resolve(self, member: MemberDescriptor) -> str:
        """Return the cached value for member, resolving it on a miss.

        Raises:
            ResolutionError: If resolution fails (nothing is cached)
        """
        value = self._values.get(member.name, _MISSING)
        if value is not _MISSING:
            return value

        if self.mode is CacheMode.RELAXED:
            return self._store(member.name, self.resolver.resolve(member))

        with self._member_lock(member.name):
            value = self._values.get(member.name, _MISSING)
            if value is _MISSING:
                value = self._store(member.name, self.resolver.resolve(member))
            return value

    def is_cached(self, name: str) -> bool:
        return name in self._values

    def _store(self, name: str, value: str) -> str:
        # First writer wins, later racers get the stored value back
        with self._lock:
            return self._values.setdefault(name, value)

    def _member_lock(self, name: str) -> threading.Lock:
        with self._lock:
            lock = self._member_locks.get(name)
            if lock is None:
                lock = self._member_locks[name] = threading.Lock()
            return lock

    def __len__(self) -> int:
        return len(self._values)
