"""
Short justifications for ranked places.

Rules are evaluated top to bottom and the first one whose predicate holds
supplies the message. The rules only read already-computed score components.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .scoring import ScoreComponents

EXTREMELY_CLOSE_KM = 0.3
FALLBACK_REASON = "Balanced nearby option"


@dataclass(frozen=True)
class ReasonRule:
    applies: Callable[[ScoreComponents], bool]
    template: str


REASON_RULES: list[ReasonRule] = [
    ReasonRule(
        applies=lambda c: c.distance_km < EXTREMELY_CLOSE_KM,
        template="Extremely close ({distance_km:.2f} km away)",
    ),
    ReasonRule(
        applies=lambda c: c.group_suitability == 1.0,
        template="Good for {group}",
    ),
]


def generate_reason(
    components: ScoreComponents,
    group: str,
    rules: list[ReasonRule] = REASON_RULES,
) -> str:
    for rule in rules:
        if rule.applies(components):
            return rule.template.format(distance_km=components.distance_km, group=group)
    return FALLBACK_REASON
