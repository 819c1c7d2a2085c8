from __future__ import annotations

from src.facility_tracker.facility_tracker.billing.model import ActiveFlatMap
from src.facility_tracker.facility_tracker.progress.service import ProgressService
from src.facility_tracker.facility_tracker.topology.building import DEFAULT_CATALOG, DEFAULT_TOPOLOGY
from tests.fakes import FakeBilling, make_store, ms

NOW = ms(2026, 3, 2, 10, 0)


def _service(billing):
    return ProgressService(make_store(), billing, DEFAULT_TOPOLOGY, DEFAULT_CATALOG)


def test_reads_use_the_snapshot_only():
    billing = FakeBilling(ActiveFlatMap(flags={"1A1": True}))
    svc = _service(billing)

    assert not svc.daily(now=NOW).payment_status_loaded
    assert billing.calls == 0

    svc.reload_active_flats()
    for _ in range(3):
        assert svc.daily(now=NOW).payment_status_loaded
    assert billing.calls == 1


def test_failed_reload_keeps_the_last_good_snapshot():
    billing = FakeBilling(ActiveFlatMap(flags={"1A1": True}))
    svc = _service(billing)
    svc.reload_active_flats()

    billing.active = ActiveFlatMap.unavailable()
    active = svc.reload_active_flats()

    assert active.loaded
    assert active.is_active(1, "A", 1)
