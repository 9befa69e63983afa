from __future__ import annotations

from collections import Counter
from typing import Any

from .store import REJECT, SEARCH


def _usage(searches: list[dict[str, Any]], field: str) -> dict[str, int]:
    return dict(Counter(s[field] for s in searches if s.get(field)))


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == SEARCH]
    rejections = [e for e in events if e["type"] == REJECT]
    total = len(searches)

    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    area_counter: Counter[str] = Counter()
    for s in searches:
        area_counter[s.get("area", "unknown")] += 1
    top_areas = [{"name": n, "count": c} for n, c in area_counter.most_common(10)]

    converged = sum(1 for s in searches if s.get("converged"))
    empty = sum(1 for s in searches if s.get("results_returned", 0) == 0)

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "top_areas": top_areas,
        "group_usage": _usage(searches, "group"),
        "budget_usage": _usage(searches, "budget"),
        "transport_usage": _usage(searches, "transport"),
        "empty_results": empty,
        "converged_rate": round(converged / total * 100, 1) if total else 0.0,
        "total_rejections": len(rejections),
    }
