"""
Hangout recommendation engine.

Responsibilities:
- Accept a location, group type, time budget, spending budget and transport mode.
- Filter candidate venues by rejection history, budget tier and distance.
- Score and rank candidates using deterministic heuristics with short reasons.
- Score the curated static dataset with an additive point model.
- Tell the user when the ranked list is good enough to stop browsing.
"""
