from pathlib import Path

import pytest

from recruitportal.application.services.applicant_service import ApplicantService
from recruitportal.domain.errors import ApplicantStatusError, InvalidInputError, NotFoundError
from recruitportal.infrastructure.stores.applicant_store import ApplicantStore


class _RecordingApplicants:
    def __init__(self):
        self.calls = []

    def update_user_fields(self, regno, fields):
        self.calls.append((regno, fields))
        return None


@pytest.fixture()
def store(tmp_path: Path) -> ApplicantStore:
    return ApplicantStore(db_url=f"sqlite:///{tmp_path / 'service.db'}")


def test_update_user_status_applies_partial_update(store: ApplicantStore):
    store.create_user(username="asha", regno="R0001", tech=1, design=0, management=2, admin_notes="")
    service = ApplicantService(store)

    user = service.update_user_status("R0001", {"tech": 2, "admin_notes": "strong"})

    assert (user["tech"], user["design"], user["management"]) == (2, 0, 2)
    assert user["admin_notes"] == "strong"


def test_update_user_status_ignores_missing_fields(store: ApplicantStore):
    store.create_user(username="asha", regno="R0001", tech=1, admin_notes="keep")
    user = ApplicantService(store).update_user_status("R0001", {"design": None})
    assert user["tech"] == 1
    assert user["admin_notes"] == "keep"


def test_update_user_status_unknown_regno(store: ApplicantStore):
    service = ApplicantService(store)
    with pytest.raises(NotFoundError):
        service.update_user_status("R404", {"tech": 1})
    assert store.count_users() == 0


def test_update_user_status_requires_regno_before_touching_store():
    applicants = _RecordingApplicants()
    service = ApplicantService(applicants)
    for regno in (None, "", "   "):
        with pytest.raises(InvalidInputError):
            service.update_user_status(regno, {"tech": 1})
    assert applicants.calls == []


@pytest.mark.parametrize("fields", [{"tech": "2"}, {"design": True}, {"admin_notes": 5}])
def test_update_user_status_rejects_wrong_types(fields):
    with pytest.raises(InvalidInputError):
        ApplicantService(_RecordingApplicants()).update_user_status("R1", fields)


def test_apply_transition_promotes_and_persists(store: ApplicantStore):
    store.create_user(username="asha", regno="R0001", design=1)
    service = ApplicantService(store)

    user = service.apply_transition("R0001", "Design", "promote")

    assert user["design"] == 2
    assert store.get_user_by_regno("R0001")["design"] == 2


def test_apply_transition_blocked_leaves_record_alone(store: ApplicantStore):
    store.create_user(username="asha", regno="R0001", tech=3, management=-1)
    service = ApplicantService(store)

    with pytest.raises(ApplicantStatusError):
        service.apply_transition("R0001", "tech", "promote")
    with pytest.raises(ApplicantStatusError):
        service.apply_transition("R0001", "management", "reject")

    user = store.get_user_by_regno("R0001")
    assert (user["tech"], user["management"]) == (3, -1)
    assert service.apply_transition("R0001", "management", "reset")["management"] == 0


def test_apply_transition_validates_inputs(store: ApplicantStore):
    service = ApplicantService(store)
    with pytest.raises(InvalidInputError):
        service.apply_transition("R0001", "sports", "promote")
    with pytest.raises(InvalidInputError):
        service.apply_transition("R0001", "tech", "demote")
    with pytest.raises(NotFoundError):
        service.apply_transition("R0001", "tech", "promote")


def test_rejecting_management_leaves_other_fields_untouched(store: ApplicantStore):
    store.create_user(username="asha", regno="R0001", tech=1, design=0, management=2, admin_notes="")

    user = ApplicantService(store).update_user_status("R0001", {"management": -1})

    assert user["management"] == -1
    assert (user["tech"], user["design"], user["admin_notes"]) == (1, 0, "")
    assert store.get_user_by_regno("R0001")["management"] == -1
