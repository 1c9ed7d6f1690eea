import pytest

from recruitportal.domain.subdomain import (
    classify_subdomains,
    has_answer,
    has_submission,
    normalize_subdomains,
    resolve_subdomains,
)


def test_has_answer_requires_a_non_blank_string():
    assert has_answer({"question1": ["hello"]}, "question1") is True
    assert has_answer({"question1": ["", "  ", "x"]}, "question1") is True
    assert has_answer({"question1": ["", "   "]}, "question1") is False
    assert has_answer({"question1": []}, "question1") is False
    assert has_answer({}, "question1") is False


def test_has_answer_ignores_non_list_values():
    assert has_answer({"question1": "plain text"}, "question1") is False
    assert has_answer({"question1": None}, "question1") is False
    assert has_answer({"question1": [3, None]}, "question1") is False


def test_has_submission_checks_every_key():
    task = {"question1": [], "question2": [" "], "question3": ["done"]}
    assert has_submission(task, ["question1", "question2", "question3"]) is True
    assert has_submission(task, ["question1", "question2"]) is False


def test_management_classification_prefers_question17():
    task = {"question2": ["x"], "question17": ["y"]}
    assert classify_subdomains(task) == ["editorial"]


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("question12", ["publicity"]),
        ("question16", ["publicity"]),
        ("question7", ["outreach"]),
        ("question11", ["outreach"]),
        ("question2", ["generaloperations"]),
        ("question6", ["generaloperations"]),
    ],
)
def test_management_classification_blocks(key, expected):
    assert classify_subdomains({key: ["answer"]}) == expected


def test_publicity_wins_over_outreach():
    task = {"question8": ["a"], "question13": ["b"]}
    assert classify_subdomains(task) == ["publicity"]


def test_question1_alone_does_not_classify():
    assert classify_subdomains({"question1": ["intro"]}) == []


def test_non_management_domains_have_no_inference():
    assert classify_subdomains({"question17": ["x"]}, "tech") == []
    assert classify_subdomains({"question2": ["x"]}, "design") == []


def test_normalize_string_and_list_forms():
    assert normalize_subdomains(" Web, App ,,ML ") == ["web", "app", "ml"]
    assert normalize_subdomains(["UI", " ux "]) == ["ui", "ux"]
    assert normalize_subdomains("events") == ["editorial"]
    assert normalize_subdomains(["Events", "outreach"]) == ["editorial", "outreach"]


def test_normalize_treats_malformed_values_as_absent():
    assert normalize_subdomains(None) == []
    assert normalize_subdomains(42) == []
    assert normalize_subdomains({"label": "web"}) == []
    assert normalize_subdomains(["web", 7]) == []
    assert normalize_subdomains(" , ") == []


def test_resolve_prefers_explicit_labels():
    task = {"subdomain": "Outreach", "question17": ["x"]}
    assert resolve_subdomains(task, "management") == ["outreach"]


def test_resolve_falls_back_to_inference_on_malformed_label():
    task = {"subdomain": 12, "question14": ["x"]}
    assert resolve_subdomains(task, "management") == ["publicity"]


def test_resolve_without_labels_or_answers_is_empty():
    assert resolve_subdomains({"subdomain": ""}, "management") == []
    assert resolve_subdomains({"question1": ["x"]}, "tech") == []


@pytest.mark.parametrize("raw", ["Events", "events", ["Events"], " publicity , Outreach "])
def test_normalize_is_idempotent(raw):
    once = normalize_subdomains(raw)
    assert normalize_subdomains(once) == once
    assert normalize_subdomains(",".join(once)) == once
