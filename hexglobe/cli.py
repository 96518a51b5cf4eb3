"""Click CLI commands for HexGlobe."""

import logging

import click

from .builder import GlobeBuilder
from .constants import DEFAULT_ALTITUDE, OUTPUT_DIR
from .errors import HexGlobeError

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """HexGlobe CLI for viewing the H3 base grid as a 3D globe."""
    pass


def _progress(pct, msg):
    click.echo(f"[{pct:3.0f}%] {msg}")


def _build(altitude: float, workers: int, quiet: bool = False):
    try:
        builder = GlobeBuilder(altitude=altitude, workers=workers)
        return builder.build(progress_callback=None if quiet else _progress)
    except HexGlobeError as e:
        logger.error(f"Error building globe: {e}")
        raise click.ClickException(str(e))


@cli.command()
@click.option('--fly', is_flag=True, help='Free-fly camera instead of orbit (toggle with M)')
@click.option('--altitude', '-a', default=DEFAULT_ALTITUDE, help='Cell height above the ellipsoid (m)')
@click.option('--workers', '-w', default=1, help='Threads used for mesh building')
def view(fly: bool, altitude: float, workers: int):
    """Open an interactive window on the globe."""
    from .viewer import run_viewer

    scene = _build(altitude, workers, quiet=True)
    run_viewer(scene, fly=fly)


@cli.command()
@click.argument('output', default=str(OUTPUT_DIR / 'globe.glb'))
@click.option('--altitude', '-a', default=DEFAULT_ALTITUDE, help='Cell height above the ellipsoid (m)')
@click.option('--workers', '-w', default=1, help='Threads used for mesh building')
def export(output: str, altitude: float, workers: int):
    """Write the globe to a GLB file."""
    scene = _build(altitude, workers)
    path = scene.export_glb(output)
    click.echo(f"Wrote {len(scene.drawable())} cells to {path}")


@cli.command()
@click.argument('output', default=str(OUTPUT_DIR / 'globe.png'))
@click.option('--altitude', '-a', default=DEFAULT_ALTITUDE, help='Cell height above the ellipsoid (m)')
@click.option('--width', default=1280, type=click.IntRange(min=1), help='Image width in pixels')
@click.option('--height', default=960, type=click.IntRange(min=1), help='Image height in pixels')
def render(output: str, altitude: float, width: int, height: int):
    """Render a single frame offscreen to a PNG."""
    from .viewer import render_image

    scene = _build(altitude, workers=1)
    path = render_image(scene, output, size=(width, height))
    click.echo(f"Rendered {path}")


@cli.command()
def info():
    """Print base-grid cell counts."""
    summary = GlobeBuilder().summary()
    click.echo(f"Base cells: {summary['cells']} "
               f"({summary['hexagons']} hexagons, {summary['pentagons']} pentagons)")
