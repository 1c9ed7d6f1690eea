"""Interview-round levels and the transitions the dashboard offers."""

from __future__ import annotations

from enum import Enum

from recruitportal.domain.errors import ApplicantStatusError

REJECTED = -1
NOT_ADVANCED = 0
FINAL_ROUND = 3


class StatusAction(str, Enum):
    PROMOTE = "promote"
    REJECT = "reject"
    RESET = "reset"


def promote(level: int) -> int:
    if level == REJECTED:
        raise ApplicantStatusError("cannot promote a rejected applicant")
    if level >= FINAL_ROUND:
        raise ApplicantStatusError(f"already at round {FINAL_ROUND}")
    return level + 1


def reject(level: int) -> int:
    if level == REJECTED:
        raise ApplicantStatusError("applicant is already rejected")
    return REJECTED


def reset(level: int) -> int:
    return NOT_ADVANCED


_TRANSITIONS = {
    StatusAction.PROMOTE: promote,
    StatusAction.REJECT: reject,
    StatusAction.RESET: reset,
}


def apply_action(action: StatusAction, level: int) -> int:
    return _TRANSITIONS[StatusAction(action)](int(level))


def status_label(level: int) -> str:
    if level == REJECTED:
        return "Rejected"
    if level <= NOT_ADVANCED:
        return "Pending"
    return f"Round {level}"
