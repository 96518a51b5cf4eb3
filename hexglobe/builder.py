"""GlobeBuilder: thin orchestrator (grid provider -> meshes -> scene repository)."""

import logging
import time
from typing import Optional

from .constants import DEFAULT_ALTITUDE
from .geometry import build_meshes
from .grid import H3GridProvider, require_base_cell_count
from .projection import GeodeticProjector, render_projector
from .scene import Material, SceneRepository

logger = logging.getLogger(__name__)


class GlobeBuilder:
    def __init__(self, provider=None,
                 projector: Optional[GeodeticProjector] = None,
                 altitude: float = DEFAULT_ALTITUDE,
                 material: Optional[Material] = None,
                 workers: int = 1):
        """
        provider: grid-index provider (defaults to H3 resolution 0).
        projector: geodetic projector (defaults to the Y-up render frame).
        altitude: ellipsoid height in metres for every cell.
        workers: threads used for mesh building.
        """
        self.provider = provider or H3GridProvider()
        self.projector = projector or render_projector()
        self.altitude = altitude
        self.material = material or Material()
        self.workers = workers

    def build(self, scene: Optional[SceneRepository] = None,
              progress_callback=None) -> SceneRepository:
        """Mesh every base cell into *scene* (a new repository if omitted).

        Raises GridInvariantError before building anything if the provider
        does not return the full base grid.
        """
        def _progress(pct, msg):
            if progress_callback:
                progress_callback(pct, msg)

        timings = {}
        scene = scene if scene is not None else SceneRepository()

        t0 = time.perf_counter()
        _progress(5, "Enumerating base cells...")
        cells = self.provider.enumerate_base_cells()
        require_base_cell_count(cells)
        boundaries = [self.provider.cell_boundary(c) for c in cells]
        timings['1_grid'] = time.perf_counter() - t0
        logger.info(f"Enumerated {len(cells)} base cells using {self.projector}")

        t0 = time.perf_counter()
        _progress(30, "Building cell meshes...")
        meshes = build_meshes(boundaries, self.altitude, self.projector,
                              workers=self.workers,
                              progress=progress_callback is not None)
        timings['2_meshes'] = time.perf_counter() - t0

        t0 = time.perf_counter()
        _progress(80, "Registering meshes...")
        degenerate = 0
        for cell, mesh in zip(cells, meshes):
            if mesh.is_empty:
                degenerate += 1
            scene.add_mesh(mesh, self.material, name=cell)
        timings['3_register'] = time.perf_counter() - t0

        if degenerate:
            logger.warning(f"{degenerate} cells had unsupported boundaries "
                           f"and will not be drawn")

        total_tris = sum(m.triangle_count for m in meshes)
        logger.info(f"Built {len(meshes)} cell meshes, {total_tris} triangles")
        for label, dur in sorted(timings.items()):
            logger.debug(f"  {label}: {dur * 1000:.1f}ms")
        _progress(100, "Globe ready")
        return scene

    def summary(self) -> dict:
        """Cell counts by shape for the base grid."""
        cells = self.provider.enumerate_base_cells()
        pentagons = sum(1 for c in cells if self.provider.is_pentagon(c))
        return {
            'cells': len(cells),
            'pentagons': pentagons,
            'hexagons': len(cells) - pentagons,
        }
