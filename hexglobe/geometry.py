"""Cell boundary -> triangulated mesh buffer."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from tqdm import tqdm

from .constants import SUPPORTED_ARITIES, VERTEX_NORMAL, VERTEX_UV
from .models import CellBoundary, MeshBuffer, ProjectedVertex
from .projection import GeodeticProjector, project

logger = logging.getLogger(__name__)


def fan_indices(n: int) -> List[int]:
    """Triangle fan anchored at vertex 0: (0, i, i+1) for i in 1..n-2.

    Only valid for convex rings, which H3 cell boundaries are.
    """
    indices = []
    for i in range(1, n - 1):
        indices.extend((0, i, i + 1))
    return indices


def build_mesh(boundary: CellBoundary, altitude: float = 0.0,
               projector: Optional[GeodeticProjector] = None) -> MeshBuffer:
    """Project a cell boundary and triangulate it.

    Every boundary point becomes a vertex.  Pentagons and hexagons are
    fan-triangulated; any other arity keeps its vertices but gets no
    triangles, so a malformed cell renders as nothing instead of aborting
    the whole globe.
    """
    _project = projector.project if projector is not None else project

    vertices = []
    for point in boundary:
        position = _project(point.latitude, point.longitude, altitude)
        vertices.append(ProjectedVertex(position=position,
                                        normal=VERTEX_NORMAL,
                                        uv=VERTEX_UV))

    n = len(vertices)
    if n in SUPPORTED_ARITIES:
        indices = fan_indices(n)
    else:
        logger.debug(f"Skipping triangulation for {n}-vertex boundary")
        indices = []

    return MeshBuffer(vertices=tuple(vertices), indices=tuple(indices))


def build_meshes(boundaries: Iterable[CellBoundary], altitude: float = 0.0,
                 projector: Optional[GeodeticProjector] = None,
                 workers: int = 1, progress: bool = False) -> List[MeshBuffer]:
    """Build many cells; output order matches input order.

    Cells share nothing mutable, so ``workers > 1`` fans the work out to a
    thread pool.
    """
    boundaries = list(boundaries)

    def _one(boundary):
        return build_mesh(boundary, altitude, projector)

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = pool.map(_one, boundaries)
            return list(tqdm(results, total=len(boundaries), desc="Cells",
                             disable=not progress))

    return [_one(b) for b in tqdm(boundaries, desc="Cells", disable=not progress)]
