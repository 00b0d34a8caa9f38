"""Exceptions raised by the profile, extrusion and assembly layers."""


class WindowGeometryError(ValueError):
    """Base class for recoverable geometry construction errors."""


class InvalidDimension(WindowGeometryError):
    """A profile or ring dimension is non-positive or not finite."""


class InvalidLength(WindowGeometryError):
    """An extrusion length is non-positive or not finite."""
