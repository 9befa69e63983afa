"""
Data ingestion package.

Responsibilities:
- Clean raw geodata elements into canonical ``Place`` records.
- Load and normalize the curated static dataset of hangout places.
"""
