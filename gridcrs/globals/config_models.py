"""Typed configuration models and YAML loading helpers.

A grid configuration describes the coordinate axes of a dataset variable
when no file reader is at hand: name, kind, units and either a regular
``start``/``increment``/``size`` triple or explicit ``values``.

Example (``config/grid.yml``)
-----------------------------
.. code-block:: yaml

    name: ocean_model
    projection:
      grid_mapping_name: mercator
      standard_parallel: 0.0
    axes:                      # slow-varying first
      - name: time
        kind: Time
        units: hours since 2000-01-01
        start: 0
        increment: 6
        size: 4
        attributes: {calendar: noleap}
      - name: lat
        kind: Lat
        units: degrees_north
        values: [-10, 0, 10]

The public entry point is :func:`read_config_file`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from gridcrs.exceptions import InvalidArgumentError
from gridcrs.globals import configs, directories
from gridcrs.globals.logutil import error, info


# --- Dataclasses ---------------------------------------------------------
@dataclass(frozen=True)
class AxisConfig:
    """One axis entry of a grid configuration."""
    name: str
    kind: str | None = None
    units: str = ""
    start: float | None = None
    increment: float | None = None
    size: int | None = None
    values: List[float] | None = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_explicit(self) -> bool:
        return self.values is not None

@dataclass
class GridConfig:
    """A coordinate system description: axes in file order plus projection parameters."""
    name: str = "grid"
    axes: List[AxisConfig] = field(default_factory=list)
    projection: Any = None

    def dataset_attributes(self) -> Dict[str, Dict[str, Any]]:
        """Variable attributes keyed by axis name, as expected by axis completion."""
        return {a.name: dict(a.attributes) for a in self.axes}


# --- YAML loader ---------------------------------------------------------

def _resolve_path(path: Path | str | None) -> Path:
    """Resolve a config path or fall back to ``<config dir>/grid.yml``."""
    if path is None:
        return directories.CONFIG_DIR / configs.GRID_CONFIG_NAME
    return Path(path)

def load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping, logging what was read."""
    info(f"Loading config from {path}...")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        error(f"Config not found at {path}.")
        raise
    except yaml.YAMLError as exc:
        error(f"Failed to parse YAML config at {path}: {exc}")
        raise InvalidArgumentError(f"Invalid YAML in {path}") from exc
    if not isinstance(data, Mapping):
        raise InvalidArgumentError(f"Config at {path} must be a mapping, got {type(data).__name__}.")
    info(f"Using config: {path}")
    return dict(data)

def build_axis_config(raw: Mapping[str, Any], index: int) -> AxisConfig:
    """Convert one raw ``axes`` entry into :class:`AxisConfig`.

    Raises InvalidArgumentError when neither values nor a complete
    start/increment/size triple is given, or when both are.
    """
    if not isinstance(raw, Mapping):
        raise InvalidArgumentError(f"axes[{index}] must be a mapping, got {type(raw).__name__}.")
    name = str(raw.get("name") or f"axis{index}")

    values = raw.get("values")
    regular = [raw.get(k) for k in ("start", "increment", "size")]
    if values is not None and any(v is not None for v in regular):
        raise InvalidArgumentError(f"Axis '{name}': give either values or start/increment/size, not both.")
    if values is None and any(v is None for v in regular):
        raise InvalidArgumentError(f"Axis '{name}': start, increment and size are all required.")

    try:
        return AxisConfig(
            name=name,
            kind=raw.get("kind"),
            units=str(raw.get("units") or ""),
            start=float(regular[0]) if regular[0] is not None else None,
            increment=float(regular[1]) if regular[1] is not None else None,
            size=int(regular[2]) if regular[2] is not None else None,
            values=[float(v) for v in values] if values is not None else None,
            attributes=dict(raw.get("attributes") or {}),
        )
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"Axis '{name}': {exc}") from exc

def build_grid_config(raw: Mapping[str, Any]) -> GridConfig:
    """Convert a raw dict from YAML into :class:`GridConfig`."""
    if not raw:
        raise InvalidArgumentError("Empty grid configuration provided.")
    axes_raw = raw.get("axes")
    if not isinstance(axes_raw, list) or not axes_raw:
        raise InvalidArgumentError("Grid configuration needs a non-empty 'axes' list.")
    return GridConfig(
        name=str(raw.get("name") or "grid"),
        axes=[build_axis_config(a, i) for i, a in enumerate(axes_raw)],
        projection=raw.get("projection"),
    )

def read_config_file(path: Path | str | None = None) -> GridConfig:
    """Read a YAML grid description into a :class:`GridConfig`.

    Parameters
    ----------
    path
        Path to a YAML file, or ``None`` for ``grid.yml`` in the config
        directory.
    """
    resolved = _resolve_path(path)
    return build_grid_config(load_yaml(resolved))
