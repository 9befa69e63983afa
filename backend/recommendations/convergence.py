from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .models import ScoredPlace

DOMINANT_MIN_MATCH = 80
DOMINANT_MIN_LEAD = 15
FATIGUE_MIN_REJECTIONS = 3
FATIGUE_MAX_REMAINING = 2

DOMINANT_WINNER_MESSAGE = "This is a clear winner. You can confidently pick it and stop looking."
REJECTION_FATIGUE_MESSAGE = (
    "You've seen plenty of options. The best remaining choice is a solid pick."
)


@dataclass(frozen=True)
class ConvergenceVerdict:
    converged: bool
    message: str | None = None


NOT_CONVERGED = ConvergenceVerdict(converged=False)


def check_convergence(results: Sequence[ScoredPlace], rejected_count: int) -> ConvergenceVerdict:
    """
    Decide whether the user has enough signal to stop browsing.

    ``results`` is the final, already-truncated ranked list.
    """
    if not results:
        return NOT_CONVERGED

    top = results[0]
    if (
        top.match_percentage >= DOMINANT_MIN_MATCH
        and len(results) > 1
        and top.match_percentage - results[1].match_percentage >= DOMINANT_MIN_LEAD
    ):
        return ConvergenceVerdict(converged=True, message=DOMINANT_WINNER_MESSAGE)

    if rejected_count >= FATIGUE_MIN_REJECTIONS and len(results) <= FATIGUE_MAX_REMAINING:
        return ConvergenceVerdict(converged=True, message=REJECTION_FATIGUE_MESSAGE)

    return NOT_CONVERGED
