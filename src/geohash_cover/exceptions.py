"""Exceptions raised by geohash-cover."""


class GeoHashCoverError(Exception):
    """Base exception for all geohash-cover errors."""
    pass


class ValidationError(GeoHashCoverError, ValueError):
    """Raised when search inputs are rejected before traversal starts."""
    pass


class GeoJSONError(GeoHashCoverError, ValueError):
    """Raised when a GeoJSON document cannot be parsed."""
    pass
