"""
gridcrs/referencing/identified.py

Name and identifier plumbing shared by every referencing object.

Objects decoded from a dataset have a single name and no alias, so each
object acts as its own identifier: ``obj.name is obj`` and the name text is
``obj.code``.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version as _dist_version

from shapely.geometry import Polygon, box

from gridcrs.globals import configs


@dataclass(frozen=True)
class Citation:
    title: str

    def __str__(self):
        return self.title


NETCDF = Citation(configs.AUTHORITY_TITLE)

WORLD = box(*configs.WORLD_BOUNDS)


def _library_version() -> str | None:
    try:
        return _dist_version("gridcrs")
    except PackageNotFoundError:
        return None


class IdentifiedObject:
    """Base class for objects identified by the name of the wrapped dataset object."""

    @property
    def code(self) -> str:
        raise NotImplementedError

    @property
    def code_space(self) -> str:
        return configs.CODE_SPACE

    @property
    def authority(self) -> Citation:
        return NETCDF

    @property
    def version(self) -> str | None:
        """Version of the installed gridcrs distribution, if known."""
        return _library_version()

    @property
    def name(self) -> IdentifiedObject:
        return self

    @property
    def identifiers(self) -> frozenset:
        return frozenset()

    @property
    def alias(self) -> tuple:
        return ()

    @property
    def domain_of_validity(self) -> Polygon:
        """The whole world; only map projections restrict this."""
        return WORLD

    @property
    def scope(self) -> str | None:
        return None

    @property
    def anchor_point(self) -> str | None:
        return None

    @property
    def realization_epoch(self) -> datetime | None:
        return None

    @property
    def remarks(self) -> str | None:
        return None

    def to_wkt(self) -> str:
        raise NotImplementedError(f"{type(self).__name__} has no Well-Known Text form.")

    def __str__(self):
        name = self.code.strip()
        if " " in name:
            name = f'"{name}"'
        return f"{self.code_space}:{name}"


__all__ = ["Citation", "NETCDF", "WORLD", "IdentifiedObject"]
