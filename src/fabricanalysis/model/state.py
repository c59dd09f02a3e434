"""
Analysis State (Data Model)
===========================
This module defines the container that owns one orientation data set and its
derived contour output.

Why is this file needed?
------------------------
1. State Management: It holds the data, the projection, the view rotation and
   the contour options in one place.
2. Caching: Contours are expensive, so the last result is kept. The cache is
   an explicit two-state machine: every mutation marks it STALE, and only an
   explicit `recompute()` makes it CLEAN again. Reading never recomputes.
3. Identity: Instances get identifiers from an `IdCounter` owned by whoever
   creates them; there is no module-level counter.

Classes:
    IdCounter: Explicit identifier generator.
    ContourCacheState: CLEAN / STALE.
    ContourOptions: Grid size, levels and kernel width.
    AnalysisState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import itertools
import logging
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np

from fabricanalysis.analysis.contouring import compute_contours
from fabricanalysis.analysis.statistics import as_dcos_array, fisher_stats, principal_axes
from fabricanalysis.config import DEFAULT_GRID_SIZE, DEFAULT_LEVELS, DEFAULT_PROJECTION
from fabricanalysis.core import mat3
from fabricanalysis.core.conversions import rotation_from_center, rotation_from_north_pole
from fabricanalysis.model.primitives import ContourLevel, FisherStats, PrincipalAxes
from fabricanalysis.projections import get_projection

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class IdCounter:
    """Hands out '<prefix>-<k>' identifiers, k = 0, 1, 2, ..."""

    def __init__(self, prefix: str = "fabric") -> None:
        self.prefix = prefix
        self._counter = itertools.count()

    def next_id(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


class ContourCacheState(StrEnum):
    CLEAN = "clean"
    STALE = "stale"


@dataclass(frozen=True)
class ContourOptions:
    grid_size: int = DEFAULT_GRID_SIZE
    levels: tuple[float, ...] = DEFAULT_LEVELS
    sigma: Optional[float] = None  # degrees, None = 90 / sqrt(n)


@dataclass
class AnalysisState:
    """
    Owns a direction set and its cached contours.
    Pass an IdCounter to control identifiers; a private one is used otherwise.
    """
    id_counter: Optional[IdCounter] = field(default=None, repr=False)
    projection: str = DEFAULT_PROJECTION
    uid: str = field(init=False)

    dcos: npt.NDArray[np.float64] = field(init=False)
    rotation: Optional[npt.NDArray[np.float64]] = field(init=False, default=None)
    contour_options: ContourOptions = field(init=False, default_factory=ContourOptions)

    cache_state: ContourCacheState = field(init=False, default=ContourCacheState.STALE)
    _contours: list[ContourLevel] = field(init=False, default_factory=list, repr=False)

    def __post_init__(self) -> None:
        get_projection(self.projection)  # fail early on unknown names
        counter = self.id_counter if self.id_counter is not None else IdCounter()
        self.uid = counter.next_id()
        self.dcos = np.empty((0, 3), dtype=np.float64)

    # --------------------------------------------------------------------------
    # Mutations (all mark the contour cache STALE)
    # --------------------------------------------------------------------------
    def _invalidate(self, reason: str) -> None:
        if self.cache_state is ContourCacheState.CLEAN:
            logger.info(f"[{self.uid}] Contours stale: {reason}.")
        self.cache_state = ContourCacheState.STALE

    def set_data(self, dcos: npt.ArrayLike) -> None:
        self.dcos = as_dcos_array(dcos)
        self._invalidate(f"data replaced ({len(self.dcos)} directions)")

    def set_projection(self, projection: str) -> None:
        get_projection(projection)
        self.projection = projection
        self._invalidate(f"projection set to '{projection}'")

    def set_rotation(self, rotation: Optional[npt.ArrayLike]) -> None:
        self.rotation = None if rotation is None else mat3.as_mat3(rotation)
        self._invalidate("rotation changed")

    def set_center(self, trend: float, plunge: float) -> None:
        """Re-centre the view on (trend, plunge)."""
        self.set_rotation(rotation_from_center(trend, plunge))

    def set_north_pole(self, trend: float, plunge: float, spin: float = 0.0) -> None:
        """Place geographic north at (trend, plunge), spun about north by `spin` degrees."""
        self.set_rotation(rotation_from_north_pole(trend, plunge, spin))

    def compose_rotation(self, rotation: npt.ArrayLike) -> None:
        """Apply an additional rotation on top of the current one."""
        current = self.rotation if self.rotation is not None else mat3.identity()
        self.set_rotation(mat3.multiply(rotation, current))

    def reorthonormalize(self) -> None:
        """Replace the rotation by its orthonormalized copy to remove composition drift."""
        if self.rotation is not None:
            self.set_rotation(mat3.orthonormalize(self.rotation))

    def set_contour_options(
        self,
        grid_size: Optional[int] = None,
        levels: Optional[Sequence[float]] = None,
        sigma: Optional[float] = None,
    ) -> None:
        """Update contour options; arguments left as None keep their value (sigma resets to auto)."""
        current = self.contour_options
        self.contour_options = ContourOptions(
            grid_size=current.grid_size if grid_size is None else grid_size,
            levels=current.levels if levels is None else tuple(levels),
            sigma=sigma,
        )
        self._invalidate("contour options changed")

    # --------------------------------------------------------------------------
    # Derived results
    # --------------------------------------------------------------------------
    @property
    def is_stale(self) -> bool:
        return self.cache_state is ContourCacheState.STALE

    @property
    def contours(self) -> list[ContourLevel]:
        """Last computed contours. Never recomputes; may be outdated while STALE."""
        return list(self._contours)

    def recompute(self) -> list[ContourLevel]:
        """Recompute the contours and mark the cache CLEAN."""
        opts = self.contour_options
        contours = compute_contours(
            self.dcos,
            projection=self.projection,
            rotation=self.rotation,
            grid_size=opts.grid_size,
            levels=opts.levels,
            sigma=opts.sigma,
        )
        self._contours = contours
        self.cache_state = ContourCacheState.CLEAN
        logger.info(f"[{self.uid}] Contours recomputed for {len(self.dcos)} directions.")
        return list(contours)

    def fisher(self) -> FisherStats:
        return fisher_stats(self.dcos)

    def principal_axes(self) -> PrincipalAxes:
        return principal_axes(self.dcos)

