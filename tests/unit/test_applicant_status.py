import pytest

from recruitportal.domain.applicant_status import (
    FINAL_ROUND,
    REJECTED,
    StatusAction,
    apply_action,
    promote,
    reject,
    reset,
    status_label,
)
from recruitportal.domain.errors import ApplicantStatusError, InvalidInputError


def test_promote_moves_one_round_up():
    assert promote(0) == 1
    assert promote(2) == 3


def test_promote_stops_at_final_round():
    with pytest.raises(ApplicantStatusError):
        promote(FINAL_ROUND)


def test_rejected_applicant_cannot_be_promoted_or_rejected_again():
    with pytest.raises(ApplicantStatusError):
        promote(REJECTED)
    with pytest.raises(ApplicantStatusError):
        reject(REJECTED)


def test_reject_and_reset():
    assert reject(2) == REJECTED
    assert reset(REJECTED) == 0
    assert reset(3) == 0


def test_apply_action_accepts_strings():
    assert apply_action("promote", 1) == 2
    assert apply_action(StatusAction.REJECT, 0) == REJECTED


def test_status_error_is_an_input_error():
    assert issubclass(ApplicantStatusError, InvalidInputError)


def test_status_labels():
    assert status_label(-1) == "Rejected"
    assert status_label(0) == "Pending"
    assert status_label(2) == "Round 2"
