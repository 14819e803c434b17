"""
gridcrs/axes/completion.py

Upgrade generic time axes to calendar-aware ones.

A time axis read from a file only knows its ``"<unit> since <epoch>"``
string. The calendar lives in a separate variable attribute, so completion
needs the dataset attributes as well as the axis.
"""
from __future__ import annotations

from typing import Any, Mapping, Protocol

import cf_units

from gridcrs.axes.axis import Axis
from gridcrs.globals import configs


class AxisCompleter(Protocol):
    def complete(self, axis: Axis, dataset: Any) -> Axis:
        """Return a more accurate version of ``axis``; may raise on I/O or decoding errors."""
        ...


class CalendarCompleter:
    """Attach the CF ``calendar`` attribute of the axis variable to a time axis.

    ``dataset`` maps variable names to their attribute mappings.
    """

    def __init__(self, default_calendar: str = configs.DEFAULT_CALENDAR):
        self.default_calendar = default_calendar

    def complete(self, axis: Axis, dataset: Mapping[str, Mapping[str, Any]]) -> Axis:
        attrs = dataset.get(axis.name) or {}
        calendar = str(attrs.get("calendar") or self.default_calendar).strip().lower()
        unit = cf_units.Unit(axis.units, calendar=calendar)
        if not unit.is_time_reference():
            raise ValueError(f"'{axis.units}' is not a '<unit> since <epoch>' time reference")
        return axis.with_calendar(unit.calendar)


__all__ = ["AxisCompleter", "CalendarCompleter"]
