"""
Geodata integration layer.

Responsibilities:
- Resolve a free-text area and city into coordinates (Nominatim search).
- Resolve coordinates into a human-readable address (Nominatim reverse).
- Fetch raw points of interest around a location (Overpass API).
- Report upstream failures through a small exception hierarchy.
"""
