from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from recruitportal.infrastructure.stores.applicant_store import ApplicantStore
from recruitportal.infrastructure.stores.submission_store import SubmissionStore

BASE = datetime(2025, 8, 1, 9, 0, tzinfo=timezone.utc)


def _stores(tmp_path: Path):
    db_url = f"sqlite:///{tmp_path / 'submissions.db'}"
    return ApplicantStore(db_url=db_url), SubmissionStore(db_url=db_url)


def test_task_dict_fills_every_question_slot(tmp_path: Path):
    applicants, submissions = _stores(tmp_path)
    user = applicants.create_user(username="asha", regno="R1", domains=["tech"])

    task = submissions.add_task("tech", user_id=user["id"], answers={"question2": ["an answer"]}, subdomain="web")

    assert task["subdomain"] == "web"
    assert task["question2"] == ["an answer"]
    assert task["question1"] == []
    assert task["question5"] == []
    assert "question6" not in task


def test_explicit_subdomain_is_stored_as_given(tmp_path: Path):
    applicants, submissions = _stores(tmp_path)
    user = applicants.create_user(username="asha", regno="R1")

    submissions.add_task("management", user_id=user["id"], subdomain=["Events", "outreach"])
    submissions.add_task("management", user_id=user["id"])

    stored = [t["subdomain"] for t in submissions.list_tasks("management")]
    assert stored == [["Events", "outreach"], None]


def test_list_tasks_for_users_groups_by_owner(tmp_path: Path):
    applicants, submissions = _stores(tmp_path)
    a = applicants.create_user(username="a", regno="R1")
    b = applicants.create_user(username="b", regno="R2")
    submissions.add_task("design", user_id=a["id"], created_at=BASE + timedelta(minutes=5))
    submissions.add_task("design", user_id=a["id"], created_at=BASE)
    submissions.add_task("design", user_id=b["id"], created_at=BASE)

    grouped = submissions.list_tasks_for_users("design", [a["id"]])

    assert list(grouped) == [a["id"]]
    assert len(grouped[a["id"]]) == 2
    assert grouped[a["id"]][0]["created_at"] < grouped[a["id"]][1]["created_at"]
    assert submissions.list_tasks_for_users("design", []) == {}


def test_unknown_task_domain_is_rejected(tmp_path: Path):
    _, submissions = _stores(tmp_path)
    with pytest.raises(ValueError):
        submissions.list_tasks("sports")


def test_meetings_round_trip_and_delete(tmp_path: Path):
    applicants, submissions = _stores(tmp_path)
    user = applicants.create_user(username="a", regno="R1")
    submissions.add_meeting(
        user_id=user["id"],
        scheduled_time=BASE,
        end_time=BASE + timedelta(hours=1),
        gmeet_link="https://meet.example/abc",
        interviewer_emails=["lead@mfc.com"],
    )

    meetings = submissions.list_meetings_for_users([user["id"]])[user["id"]]
    assert meetings[0]["status"] == "scheduled"
    assert meetings[0]["interviewer_emails"] == ["lead@mfc.com"]
    assert meetings[0]["scheduled_time"].startswith("2025-08-01T09:00")

    assert submissions.delete_meetings_for_users([user["id"]]) == 1
    assert submissions.list_meetings_for_users([user["id"]]) == {}


def test_meeting_status_must_be_known(tmp_path: Path):
    applicants, submissions = _stores(tmp_path)
    user = applicants.create_user(username="a", regno="R1")
    with pytest.raises(ValueError):
        submissions.add_meeting(user_id=user["id"], scheduled_time=BASE, end_time=BASE, status="later")
