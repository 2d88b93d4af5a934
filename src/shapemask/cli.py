"""CLI entry point for shapemask."""

import logging
from pathlib import Path

import click


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


@click.group()
def main():
    """shapemask: land masks from land/water shapefile polygons."""
    pass


@main.command()
@click.argument("shapefile", type=click.Path(exists=True, dir_okay=False))
@click.argument("resolution", type=click.IntRange(min=1))
@click.option("-w", "--water", is_flag=True,
              help="Shapefile polygons contain water areas instead of land areas.")
@click.option("--geotiff", is_flag=True,
              help="Also write the mask as a GeoTIFF next to the .msk file.")
@click.option("--output", type=click.Path(dir_okay=False), default=None,
              help="Output mask path (default: SHAPEFILE with a .msk extension).")
@click.option("-v", "--verbose", is_flag=True, help="Log per-quadrant progress.")
def mask(shapefile, resolution, water, geotiff, output, verbose):
    """Create a land mask at RESOLUTION (integer metres) from SHAPEFILE.

    The output is ALWAYS a land mask (1 = land, 0 = water) whether the
    shapefile holds land or water polygons. A generic area file with the
    same name and a .are extension (e.g. fred.shp, fred.are) must define
    the whole area to be covered by the mask. The shapefile must contain
    complete polygons for every land (or water) area needed.
    """
    from shapemask.config import MaskConfig
    from shapemask.data.area import AreaFileError
    from shapemask.pipeline import run_pipeline

    shapefile = Path(shapefile)
    if shapefile.suffix.lower() != ".shp":
        raise click.BadParameter(
            f"'{shapefile}' is not a .shp file", param_hint="SHAPEFILE"
        )

    _configure_logging(verbose)

    config = MaskConfig(
        shapefile_path=shapefile,
        resolution=resolution,
        water=water,
        geotiff=geotiff,
        output_path=Path(output) if output else None,
    )

    try:
        result = run_pipeline(config)
    except AreaFileError as exc:
        raise click.UsageError(
            f"{exc}\nA generic area file ({config.area_path.name}) must define "
            "the area covered by the mask."
        ) from exc
    except (OSError, ValueError, MemoryError, RuntimeError) as exc:
        raise click.ClickException(f"{type(exc).__name__}: {exc}") from exc

    grid = result["grid"]
    click.echo(f"Wrote {grid.width}x{grid.height} mask to {result['mask_path']}")


@main.command()
@click.argument("mask_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "json_path", type=click.Path(dir_okay=False), default=None,
              help="Save land/water statistics to this JSON file.")
def inspect(mask_file, json_path):
    """Print the header and land/water statistics of a mask file."""
    from shapemask.io.reader import read_mask_file
    from shapemask.io.summary import compute_mask_statistics

    try:
        header, cells = read_mask_file(Path(mask_file))
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"=== {mask_file} ===\n")
    click.echo(f"Version:          {header.version}")
    click.echo(f"Created:          {header.creation_date}")
    click.echo(f"Start (lat, lon): {header.start_lat:.11f}, {header.start_lon:.11f}")
    click.echo(f"Resolution:       {header.lat_resolution:.11f} x {header.lon_resolution:.11f} deg"
               f" ({header.resolution} m)")
    click.echo(f"Size:             {header.width} x {header.height}")

    stats = compute_mask_statistics(
        cells, output_path=Path(json_path) if json_path else None
    )
    click.echo(f"\nLand cells:  {stats['n_land']:,}")
    click.echo(f"Water cells: {stats['n_water']:,}")
    click.echo(f"Land fraction: {stats['land_fraction']:.4f}")


@main.command()
@click.argument("mask_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("lon", type=float)
@click.argument("lat", type=float)
def lookup(mask_file, lon, lat):
    """Print land, water or outside for the cell containing LON LAT.

    Put -- before negative coordinates: shapemask lookup fred.msk -- -88.5 30.2
    """
    from shapemask.io.reader import read_mask_file, sample_mask

    try:
        header, cells = read_mask_file(Path(mask_file))
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    value = sample_mask(header, cells, lon, lat)
    if value is None:
        click.echo("outside")
    else:
        click.echo("land" if value else "water")


if __name__ == "__main__":
    main()
