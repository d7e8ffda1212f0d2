"""Unit tests for MemberCache."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from lazy_resources.exceptions import ResourceNotFoundError
from lazy_resources.models import CacheMode, MemberDescriptor
from lazy_resources.resources import MemberCache, Resolver


def make_resolver(**kwargs) -> Mock:
    resolver = Mock(spec=Resolver)
    resolver.resolve.configure_mock(**kwargs)
    return resolver


class TestMemberCache:
    """Test caching semantics shared by both modes."""

    @pytest.mark.parametrize("mode", list(CacheMode))
    def test_value_is_resolved_once(self, mode):
        """Repeated access reuses the first resolved value."""
        resolver = make_resolver(return_value="content")
        cache = MemberCache(resolver, mode)
        member = MemberDescriptor("Sample")

        assert cache.get_or_resolve(member) == "content"
        assert cache.get_or_resolve(member) == "content"

        resolver.resolve.assert_called_once_with(member)

    @pytest.mark.parametrize("mode", list(CacheMode))
    def test_failures_are_not_cached(self, mode):
        """A failed resolution is retried on the next access."""
        resolver = make_resolver(side_effect=[ResourceNotFoundError("Sample"), "content"])
        cache = MemberCache(resolver, mode)
        member = MemberDescriptor("Sample")

        with pytest.raises(ResourceNotFoundError):
            cache.get_or_resolve(member)
        assert not cache.is_cached("Sample")

        assert cache.get_or_resolve(member) == "content"
        assert cache.is_cached("Sample")
        assert resolver.resolve.call_count == 2

    def test_members_are_cached_separately(self):
        """Each member has its own entry."""
        resolver = make_resolver(side_effect=lambda member: member.name.lower())
        cache = MemberCache(resolver)

        assert cache.get_or_resolve(MemberDescriptor("First")) == "first"
        assert cache.get_or_resolve(MemberDescriptor("Second")) == "second"
        assert len(cache) == 2

    def test_mode_accepts_string(self):
        """Modes can be given by value."""
        cache = MemberCache(make_resolver(), "relaxed")

        assert cache.mode is CacheMode.RELAXED

    def test_default_mode_is_single_flight(self):
        assert MemberCache(make_resolver()).mode is CacheMode.SINGLE_FLIGHT

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            MemberCache(make_resolver(), "eventually")


class TestMemberCacheConcurrency:
    """Test concurrent first accesses."""

    THREADS = 8

    def test_single_flight_resolves_once(self):
        """Concurrent callers share one resolution."""
        calls = []

        def resolve(member):
            calls.append(member.name)
            time.sleep(0.05)
            return f"value-{len(calls)}"

        cache = MemberCache(make_resolver(side_effect=resolve), CacheMode.SINGLE_FLIGHT)
        member = MemberDescriptor("Sample")
        barrier = threading.Barrier(self.THREADS)

        def access():
            barrier.wait()
            return cache.get_or_resolve(member)

        with ThreadPoolExecutor(max_workers=self.THREADS) as pool:
            results = list(pool.map(lambda _: access(), range(self.THREADS)))

        assert calls == ["Sample"]
        assert results == ["value-1"] * self.THREADS

    def test_single_flight_retries_after_failure(self):
        """A waiter resolves again when the running resolution fails."""
        attempts = []
        started = threading.Event()

        def resolve(member):
            attempts.append(member.name)
            if len(attempts) == 1:
                started.set()
                time.sleep(0.05)
                raise ResourceNotFoundError(member.name)
            return "recovered"

        cache = MemberCache(make_resolver(side_effect=resolve), CacheMode.SINGLE_FLIGHT)
        member = MemberDescriptor("Sample")
        results = {}

        def first():
            try:
                cache.get_or_resolve(member)
            except ResourceNotFoundError as e:
                results["first"] = e

        def second():
            started.wait()
            results["second"] = cache.get_or_resolve(member)

        threads = [threading.Thread(target=first), threading.Thread(target=second)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert isinstance(results["first"], ResourceNotFoundError)
        assert results["second"] == "recovered"
        assert len(attempts) == 2

    def test_relaxed_first_store_wins(self):
        """Racing resolutions all return the single stored value."""
        barrier = threading.Barrier(self.THREADS, timeout=5)
        calls = []
        lock = threading.Lock()

        def resolve(member):
            with lock:
                calls.append(member.name)
                value = f"value-{len(calls)}"
            # Every thread is inside the resolver before any of them stores
            barrier.wait()
            return value

        resolver = make_resolver(side_effect=resolve)
        cache = MemberCache(resolver, CacheMode.RELAXED)
        member = MemberDescriptor("Sample")

        with ThreadPoolExecutor(max_workers=self.THREADS) as pool:
            results = list(pool.map(lambda _: cache.get_or_resolve(member), range(self.THREADS)))

        assert len(calls) == self.THREADS
        assert len(set(results)) == 1
        assert cache.get_or_resolve(member) == results[0]
        assert len(cache) == 1
