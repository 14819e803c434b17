# gridcrs/cli/__main__.py
from pathlib import Path
from typing import Optional, Any, List
import typer
import numpy as np

from gridcrs.axes.sources import axes_from_config, axes_from_raster
from gridcrs.exceptions import GridCRSError
from gridcrs.globals.config_models import read_config_file
from gridcrs.globals.logutil import Logger, info, warn, error, success, process_step, setting_config
from gridcrs.referencing.crs import (
    CompoundCRS, GeographicCRS, GridCRS, ProjectedCRS, TemporalCRS, VerticalCRS, wrap,
)

# --- Typer app (root has no options) ---
app = typer.Typer(no_args_is_help=True)


def _load(config: Optional[Path], raster: Optional[Path], verbose: bool) -> GridCRS:
    '''
    Build the CRS from a YAML grid description or a raster file.
    '''
    if (config is None) == (raster is None):
        error("Give exactly one of --config or --raster.")
        raise typer.Exit(code=2)
    try:
        if config is not None:
            cfg = read_config_file(config)
            cs = axes_from_config(cfg)
            dataset = cfg.dataset_attributes()
        else:
            cs = axes_from_raster(raster, verbose=verbose)
            dataset = None
        process_step(f"Wrapping coordinate system {cs.name} ({cs.rank} axes)...")
        return wrap(cs, dataset=dataset, verbose=verbose)
    except (GridCRSError, ValueError, OSError) as exc:
        error(f"Could not build CRS: {exc}")
        raise typer.Exit(code=2)


def _details(crs: GridCRS) -> List[str]:
    if isinstance(crs, TemporalCRS):
        return [f"origin={crs.origin}", f"unit={crs.unit_seconds:g}s", f"calendar={crs.calendar}"]
    if isinstance(crs, VerticalCRS):
        return [f"datum={crs.datum_type.value}"]
    if isinstance(crs, (GeographicCRS, ProjectedCRS)):
        return [f"datum={crs.datum.name} (R={crs.datum.radius:g} m)"]
    return []


def _describe(crs: GridCRS, depth: int = 0) -> None:
    pad = "  " * depth
    extra = " ".join(_details(crs))
    info(f"{pad}{type(crs).__name__} {crs} dim={crs.dimension} {extra}".rstrip())
    if isinstance(crs, CompoundCRS):
        for c in crs.components:
            _describe(c, depth + 1)
        return
    for i, axis in enumerate(crs.axes):
        kind = axis.kind.value if axis.kind is not None else "?"
        spacing = f"start={axis.start:g} step={axis.increment:g}" if axis.is_regular else "irregular"
        setting_config(f"{pad}  [{i}] {axis.name} ({kind}, {axis.units or '-'}) n={axis.size} {spacing}")


def _print_matrix(matrix: Any) -> None:
    for row in np.asarray(matrix):
        info("  " + " ".join(f"{v:>14.10g}" for v in row))


# --- SUBCOMMANDS ---
@app.command("describe")
def describe(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML grid description.", rich_help_panel="I/O"),
    raster: Optional[Path] = typer.Option(None, "--raster", "-r", help="Georeferenced raster (GeoTIFF, ...).", rich_help_panel="I/O"),
    log: bool = typer.Option(False, "--log", help="Also write output to a log file", rich_help_panel="Utility"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging", rich_help_panel="Utility"),
):
    """Split the axes into CRS components and print them with the grid-to-CRS matrix."""
    logger = Logger.setup() if log else None
    try:
        crs = _load(config, raster, verbose)
        _describe(crs)
        transform = crs.grid_to_crs()
        if transform is None:
            warn("No grid-to-CRS transform: some axis is not regular.")
        else:
            info("Grid to CRS:")
            _print_matrix(transform.matrix)
        success(f"Described {crs}")
    finally:
        if logger is not None:
            logger.teardown()


@app.command("transform")
def transform(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML grid description.", rich_help_panel="I/O"),
    raster: Optional[Path] = typer.Option(None, "--raster", "-r", help="Georeferenced raster (GeoTIFF, ...).", rich_help_panel="I/O"),
    lower: Optional[int] = typer.Option(None, "--lower", help="First CRS dimension (default 0)", rich_help_panel="Range"),
    upper: Optional[int] = typer.Option(None, "--upper", help="Dimension after the last one (default: all)", rich_help_panel="Range"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging", rich_help_panel="Utility"),
):
    """Print the grid-to-CRS affine matrix for a range of CRS dimensions."""
    crs = _load(config, raster, verbose)
    try:
        result = crs.grid_to_crs(lower, upper)
    except GridCRSError as exc:
        error(str(exc))
        raise typer.Exit(code=2)
    if result is None:
        warn("No grid-to-CRS transform available for this range.")
        raise typer.Exit(code=1)
    _print_matrix(result.matrix)


@app.command("test")
def test():
    success("Test command executed successfully!")


def main():
    app()

if __name__ == "__main__":
    main()
