"""H3 grid-index provider: base cell ids and their boundaries."""

import logging
from typing import List, Sequence

import h3

from .constants import BASE_CELL_COUNT
from .errors import GridInvariantError
from .models import CellBoundary, GeoPoint

logger = logging.getLogger(__name__)


class H3GridProvider:
    """Thin adapter over the ``h3`` library for resolution-0 cells."""

    def enumerate_base_cells(self) -> List[str]:
        """All resolution-0 cells, sorted for a stable build order."""
        return sorted(h3.get_res0_cells())

    def cell_boundary(self, cell: str) -> CellBoundary:
        """Boundary ring as GeoPoints, in the order H3 returns it (CCW)."""
        return tuple(GeoPoint(latitude=lat, longitude=lng)
                     for lat, lng in h3.cell_to_boundary(cell))

    def is_pentagon(self, cell: str) -> bool:
        return h3.is_pentagon(cell)


def require_base_cell_count(cells: Sequence[str],
                            expected: int = BASE_CELL_COUNT) -> None:
    """Abort start-up unless the provider returned the full base grid."""
    if len(cells) != expected:
        logger.error(f"Grid provider returned {len(cells)} base cells, "
                     f"expected {expected}")
        raise GridInvariantError(expected, len(cells))
