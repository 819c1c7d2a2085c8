from __future__ import annotations

import pytest

from src.facility_tracker.facility_tracker.core.enums import Role
from src.facility_tracker.facility_tracker.core.exceptions import AuthorizationError, RemoteError, ValidationError
from src.facility_tracker.facility_tracker.staff.model import StaffMember
from src.facility_tracker.facility_tracker.staff.service import StaffService
from tests.fakes import FakeStaffRepo, make_store


def _service(repo):
    store = make_store(staff=repo)
    store.refresh()
    return store, StaffService(store)


def test_manager_adds_housekeeper():
    repo = FakeStaffRepo([StaffMember(1, "Asha", "Housekeeper", "", "Block 1")])
    store, svc = _service(repo)

    member = svc.add_staff(current_role=Role.MANAGER, name=" Ravi ", block_assignment="Block 2")

    assert member.staff_id == 2
    assert member.name == "Ravi"
    assert member.role == "Housekeeper"
    assert [s.staff_id for s in svc.list_staff()] == [1, 2]


def test_staff_role_cannot_add_staff():
    repo = FakeStaffRepo()
    _, svc = _service(repo)

    with pytest.raises(AuthorizationError):
        svc.add_staff(current_role=Role.STAFF, name="Ravi")
    assert repo.staff == []


def test_name_is_required():
    _, svc = _service(FakeStaffRepo())
    with pytest.raises(ValidationError):
        svc.add_staff(current_role=Role.MANAGER, name="  ")


def test_backend_failure_is_not_hidden():
    repo = FakeStaffRepo()
    store, svc = _service(repo)
    repo.fail = True

    with pytest.raises(RemoteError):
        svc.add_staff(current_role=Role.MANAGER, name="Ravi")
    assert store.staff == ()
