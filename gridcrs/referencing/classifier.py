"""
gridcrs/referencing/classifier.py

Split the axes of a grid coordinate system into CRS components.

Axes are visited from the fastest-varying (last) one backward:

- pressure / height / generic vertical -> one vertical group per axis
- time / run time                      -> one temporal group per axis
- runs of latitude/longitude           -> one geographic group per run
- runs of generic x/y                  -> one projected group per run
- anything else                        -> the layout is unclassifiable

One unknown axis makes every component boundary doubtful, so the whole
classification is abandoned and the caller falls back to treating the
coordinate system as a single piece.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Sequence, Union

from gridcrs.axes.axis import Axis, AxisKind
from gridcrs.axes.completion import AxisCompleter
from gridcrs.globals import logutil


class GroupCategory(Enum):
    GEOGRAPHIC = "geographic"
    VERTICAL = "vertical"
    TEMPORAL = "temporal"
    PROJECTED = "projected"
    UNKNOWN = "unknown"


CATEGORY_BY_KIND: dict[AxisKind, GroupCategory] = {
    AxisKind.LONGITUDE: GroupCategory.GEOGRAPHIC,
    AxisKind.LATITUDE: GroupCategory.GEOGRAPHIC,
    AxisKind.GENERIC_X: GroupCategory.PROJECTED,
    AxisKind.GENERIC_Y: GroupCategory.PROJECTED,
    AxisKind.HEIGHT: GroupCategory.VERTICAL,
    AxisKind.PRESSURE: GroupCategory.VERTICAL,
    AxisKind.GENERIC_VERTICAL: GroupCategory.VERTICAL,
    AxisKind.TIME: GroupCategory.TEMPORAL,
    AxisKind.RUN_TIME: GroupCategory.TEMPORAL,
    AxisKind.UNKNOWN: GroupCategory.UNKNOWN,
}


def category_of(kind: AxisKind | None) -> GroupCategory:
    """Component category of an axis kind; a missing kind is UNKNOWN."""
    if kind is None:
        return GroupCategory.UNKNOWN
    return CATEGORY_BY_KIND[kind]


@dataclass(frozen=True)
class AxisGroup:
    """Axes ``[lower, upper)`` of the source list, in source order, forming one component."""
    category: GroupCategory
    lower: int
    upper: int
    axes: tuple[Axis, ...]

    @property
    def size(self) -> int:
        return self.upper - self.lower


@dataclass(frozen=True)
class Grouped:
    groups: tuple[AxisGroup, ...]

    def __len__(self):
        return len(self.groups)

    def __iter__(self):
        return iter(self.groups)


@dataclass(frozen=True)
class Unclassifiable:
    index: int
    reason: str

    @property
    def groups(self) -> tuple[AxisGroup, ...]:
        return ()


Classification = Union[Grouped, Unclassifiable]


def _lower(axes: Sequence[Axis | None], upper: int, category: GroupCategory) -> int:
    """Lowest index of the run of ``category`` axes ending at ``upper`` (inclusive)."""
    while upper != 0:
        prev = axes[upper - 1]
        if prev is None or category_of(prev.kind) is not category:
            break
        upper -= 1
    return upper


def complete_axis(
    completer: AxisCompleter,
    axis: Axis,
    dataset: Any,
    warn: Callable[..., None] = logutil.warn,
) -> Axis:
    """Let ``completer`` upgrade a time axis; keep the axis as is when that fails."""
    try:
        return completer.complete(axis, dataset)
    except Exception as exc:  # any completer failure degrades to the raw axis
        warn(f"Could not complete time axis '{axis.name}'; keeping it as is", exc)
        return axis


def classify(
    axes: Sequence[Axis | None],
    *,
    completer: AxisCompleter | None = None,
    dataset: Any = None,
    warn: Callable[..., None] = logutil.warn,
) -> Classification:
    """Group ``axes`` (file order, slow-varying first) into CRS components.

    Groups come back fastest-varying first. Time axes are passed through
    ``completer`` when both it and ``dataset`` are given.
    """
    groups: list[AxisGroup] = []
    i = len(axes) - 1
    while i >= 0:
        axis = axes[i]
        category = category_of(axis.kind if axis is not None else None)
        if category is GroupCategory.VERTICAL:
            groups.append(AxisGroup(category, i, i + 1, (axis,)))
        elif category is GroupCategory.TEMPORAL:
            if completer is not None and dataset is not None and axis.calendar is None:
                axis = complete_axis(completer, axis, dataset, warn)
            groups.append(AxisGroup(category, i, i + 1, (axis,)))
        elif category in (GroupCategory.GEOGRAPHIC, GroupCategory.PROJECTED):
            upper = i + 1
            i = _lower(axes, i, category)
            groups.append(AxisGroup(category, i, upper, tuple(axes[i:upper])))
        else:
            name = axis.name if axis is not None else None
            return Unclassifiable(index=i, reason=f"axis {i} ({name!r}) has no known kind")
        i -= 1
    return Grouped(tuple(groups))


__all__ = [
    "GroupCategory",
    "CATEGORY_BY_KIND",
    "category_of",
    "AxisGroup",
    "Grouped",
    "Unclassifiable",
    "Classification",
    "complete_axis",
    "classify",
]
