from __future__ import annotations


class GeodataError(Exception):
    """An upstream geodata service could not be reached or answered with an error."""


class GeocodingError(GeodataError):
    pass


class GeodataSourceError(GeodataError):
    pass
