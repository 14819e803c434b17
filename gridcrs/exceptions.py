"""Exceptions raised while building grid coordinate reference systems."""


class GridCRSError(Exception):
    """Base class for all gridcrs errors."""


class InvalidArgumentError(GridCRSError, ValueError):
    """An argument (unit string, dimension range, axis description) is malformed."""


class IllegalStateError(GridCRSError, RuntimeError):
    """A capability was requested that the object cannot provide in its current state."""


class TransformFactoryError(GridCRSError):
    """The linear-transform factory rejected a matrix."""


__all__ = [
    "GridCRSError",
    "InvalidArgumentError",
    "IllegalStateError",
    "TransformFactoryError",
]
