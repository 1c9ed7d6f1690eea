"""
Subdomain classification for task submissions.

Management applicants are bucketed by which block of the questionnaire they
answered. The blocks are checked from the most specific to the most general
and the first block with an answer wins, so an applicant who answered both
the general-operations block and question 17 is classified as editorial.

Tech and design have no inference rule; only their explicit labels count.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

EDITORIAL = "editorial"
PUBLICITY = "publicity"
OUTREACH = "outreach"
GENERAL_OPERATIONS = "generaloperations"
UNSPECIFIED = "unspecified"

MANAGEMENT_SUBDOMAINS: Tuple[str, ...] = (EDITORIAL, PUBLICITY, OUTREACH, GENERAL_OPERATIONS)

# Stored data still carries the old name of the editorial block.
LEGACY_ALIASES: Dict[str, str] = {"events": EDITORIAL}


@dataclass(frozen=True)
class SubdomainRule:
    label: str
    question_keys: Tuple[str, ...]

    def matches(self, task: Mapping[str, Any]) -> bool:
        return any(has_answer(task, key) for key in self.question_keys)


def _slots(first: int, last: int) -> Tuple[str, ...]:
    return tuple(f"question{i}" for i in range(first, last + 1))


# Evaluated in order, first match wins.
MANAGEMENT_RULES: Tuple[SubdomainRule, ...] = (
    SubdomainRule(EDITORIAL, _slots(17, 17)),
    SubdomainRule(PUBLICITY, _slots(12, 16)),
    SubdomainRule(OUTREACH, _slots(7, 11)),
    SubdomainRule(GENERAL_OPERATIONS, _slots(2, 6)),
)

INFERENCE_RULES: Dict[str, Tuple[SubdomainRule, ...]] = {
    "management": MANAGEMENT_RULES,
}


def has_answer(task: Mapping[str, Any], key: str) -> bool:
    """True when ``task[key]`` is a list holding at least one non-blank string."""
    value = task.get(key)
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        return False
    return any(isinstance(ans, str) and ans.strip() for ans in value)


def has_submission(task: Mapping[str, Any], question_keys: Iterable[str]) -> bool:
    return any(has_answer(task, key) for key in question_keys)


def classify_subdomains(task: Mapping[str, Any], domain_type: str = "management") -> List[str]:
    """Infer subdomain labels from which question blocks hold answers."""
    rules = INFERENCE_RULES.get(str(domain_type or "").strip().lower(), ())
    for rule in rules:
        if rule.matches(task):
            return [rule.label]
    return []


def _canonical(label: str) -> str:
    label = label.strip().lower()
    return LEGACY_ALIASES.get(label, label)


def normalize_subdomains(raw: Any) -> List[str]:
    """
    Normalize an explicit subdomain field into canonical labels.

    Accepts a comma-delimited string or a list of strings. Anything else,
    including a list with a non-string element, is treated as absent and
    yields an empty list.
    """
    if isinstance(raw, str):
        parts: List[str] = raw.split(",")
    elif isinstance(raw, (list, tuple)):
        if not all(isinstance(item, str) for item in raw):
            return []
        parts = list(raw)
    else:
        return []

    return [label for label in (_canonical(p) for p in parts) if label]


def resolve_subdomains(task: Mapping[str, Any], domain_type: str = "management") -> List[str]:
    """Explicit labels when present, otherwise the inferred ones."""
    explicit = normalize_subdomains(task.get("subdomain"))
    if explicit:
        return explicit
    return normalize_subdomains(classify_subdomains(task, domain_type))
