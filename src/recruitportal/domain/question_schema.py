"""Question-slot schema shared by the classifier and the submission checks."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple


class Domain(str, Enum):
    TECH = "tech"
    DESIGN = "design"
    MANAGEMENT = "management"


def _question_keys(count: int) -> Tuple[str, ...]:
    return tuple(f"question{i}" for i in range(1, count + 1))


QUESTION_COUNTS: Dict[Domain, int] = {
    Domain.TECH: 5,
    Domain.DESIGN: 13,
    Domain.MANAGEMENT: 17,
}

QUESTION_KEYS: Dict[str, Tuple[str, ...]] = {
    domain.value: _question_keys(count) for domain, count in QUESTION_COUNTS.items()
}

DOMAINS: List[str] = [d.value for d in Domain]


def question_keys_for(domain_type: str) -> Tuple[str, ...]:
    """Return the ordered slot names for a domain; unknown domains have none."""
    return QUESTION_KEYS.get(str(domain_type or "").strip().lower(), ())


def parse_domain(value: str) -> Domain:
    try:
        return Domain(str(value or "").strip().lower())
    except ValueError:
        raise ValueError(f"unknown domain: {value!r}") from None
