"""
Tests for the capability provider — ordering, caching, errors, threads.
"""

import threading
import time

import pytest

from hostcap.adapters.mock import MockConnection
from hostcap.core.errors import NoMatchError, ProbeError, RegistrationError
from hostcap.core.plumbing import Provider
from hostcap.initsystem import NoInitSystemError


class _Counting:
    """Probe stub that counts calls and returns a fixed outcome."""

    def __init__(self, result=None, error: Exception | None = None, delay: float = 0.0):
        self.result = result
        self.error = error
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def __call__(self, conn):
        with self._lock:
            self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class _NotFound(NoMatchError):
    message = "no widget found"


def _provider(*probes) -> Provider:
    provider = Provider("widget", _NotFound)
    for i, probe in enumerate(probes):
        provider.register(probe, name=f"p{i + 1}")
    return provider


# ── Ordering ────────────────────────────────────────────────────────


class TestOrdering:
    def test_first_match_wins(self):
        p1, p2, p3 = _Counting(None), _Counting("two"), _Counting("three")
        provider = _provider(p1, p2, p3)
        assert provider.get(MockConnection("a")) == "two"
        assert p1.calls == 1
        assert p2.calls == 1
        assert p3.calls == 0  # never evaluated

    def test_deterministic_across_providers(self):
        for _ in range(3):
            provider = _provider(_Counting(None), _Counting("x"), _Counting("y"))
            assert provider.get(MockConnection("a")) == "x"

    def test_probe_names_in_order(self):
        provider = _provider(_Counting(), _Counting())
        assert provider.probe_names() == ["p1", "p2"]

    def test_default_name_from_function(self):
        def systemd_probe(conn):
            return None

        provider = Provider("widget")
        provider.register(systemd_probe)
        assert provider.probe_names() == ["systemd_probe"]


# ── Caching ─────────────────────────────────────────────────────────


class TestCaching:
    def test_probes_run_once_per_identity(self):
        probe = _Counting("impl")
        provider = _provider(probe)
        conn = MockConnection("a")
        first = provider.get(conn)
        second = provider.get(conn)
        assert first is second
        assert probe.calls == 1

    def test_same_identity_different_object(self):
        probe = _Counting("impl")
        provider = _provider(probe)
        provider.get(MockConnection("same"))
        provider.get(MockConnection("same"))
        assert probe.calls == 1

    def test_distinct_identities_probe_separately(self):
        probe = _Counting("impl")
        provider = _provider(probe)
        provider.get(MockConnection("a"))
        provider.get(MockConnection("b"))
        assert probe.calls == 2

    def test_cached_flag(self):
        provider = _provider(_Counting("impl"))
        conn = MockConnection("a")
        assert not provider.cached(conn)
        provider.get(conn)
        assert provider.cached(conn)


# ── Not found ───────────────────────────────────────────────────────


class TestNotFound:
    def test_raises_kind_error(self):
        provider = _provider(_Counting(None))
        with pytest.raises(_NotFound, match="no widget found"):
            provider.get(MockConnection("a"))

    def test_not_found_is_cached(self):
        p1, p2 = _Counting(None), _Counting(None)
        provider = _provider(p1, p2)
        conn = MockConnection("a")
        with pytest.raises(_NotFound):
            provider.get(conn)
        with pytest.raises(_NotFound) as second:
            provider.get(conn)
        assert str(second.value) == "no widget found"
        assert p1.calls == 1
        assert p2.calls == 1
        assert provider.cached(conn)

    def test_empty_provider(self):
        provider = Provider("widget", _NotFound)
        with pytest.raises(_NotFound):
            provider.get(MockConnection("a"))

    def test_init_system_message(self):
        assert str(NoInitSystemError()) == "no supported init system found"


# ── Probe errors ────────────────────────────────────────────────────


class TestProbeErrors:
    def test_probe_error_is_distinct_from_no_match(self):
        provider = _provider(_Counting(error=OSError("connection reset")))
        with pytest.raises(ProbeError) as exc:
            provider.get(MockConnection("a"))
        assert not isinstance(exc.value, NoMatchError)
        assert exc.value.probe == "p1"
        assert exc.value.kind == "widget"
        assert isinstance(exc.value.__cause__, OSError)

    def test_probe_error_stops_evaluation(self):
        later = _Counting("impl")
        provider = _provider(_Counting(error=RuntimeError("boom")), later)
        with pytest.raises(ProbeError):
            provider.get(MockConnection("a"))
        assert later.calls == 0

    def test_probe_error_not_cached(self):
        flaky = _Counting(error=OSError("timeout"))
        provider = _provider(flaky)
        conn = MockConnection("a")
        with pytest.raises(ProbeError):
            provider.get(conn)
        assert not provider.cached(conn)

        flaky.error = None
        flaky.result = "impl"
        assert provider.get(conn) == "impl"
        assert flaky.calls == 2

    def test_probe_error_releases_inflight_lock(self):
        provider = _provider(_Counting(error=OSError("timeout")))
        with pytest.raises(ProbeError):
            provider.get(MockConnection("a"))
        assert provider._inflight == {}

    def test_retry_after_probe_error_from_other_thread(self):
        flaky = _Counting(error=OSError("timeout"))
        provider = _provider(flaky)
        errors = []

        def worker():
            try:
                provider.get(MockConnection("a"))
            except ProbeError as e:
                errors.append(e)

        t = threading.Thread(target=worker)
        t.start()
        t.join()
        assert len(errors) == 1

        flaky.error = None
        flaky.result = "impl"
        assert provider.get(MockConnection("a")) == "impl"
        assert provider._inflight == {}


# ── Registration ────────────────────────────────────────────────────


class TestRegistration:
    def test_register_after_resolution_rejected(self):
        provider = _provider(_Counting("impl"))
        provider.get(MockConnection("a"))
        with pytest.raises(RegistrationError):
            provider.register(_Counting("late"), name="late")
        assert provider.probe_names() == ["p1"]


# ── Concurrency ─────────────────────────────────────────────────────


class TestConcurrency:
    def test_concurrent_callers_share_one_probe_run(self):
        probe = _Counting(object(), delay=0.05)
        provider = _provider(probe)
        results = []
        lock = threading.Lock()

        def worker():
            impl = provider.get(MockConnection("shared"))
            with lock:
                results.append(impl)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert probe.calls == 1
        assert len(results) == 10
        assert all(r is results[0] for r in results)
        assert provider._inflight == {}

    def test_concurrent_distinct_targets(self):
        probe = _Counting("impl", delay=0.01)
        provider = _provider(probe)
        threads = [
            threading.Thread(target=provider.get, args=(MockConnection(f"host-{i}"),))
            for i in range(5)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert probe.calls == 5
