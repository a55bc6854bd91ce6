"""Rendering planes sampled by the field sampler.

Two projections of the room are supported:

- ``top_down``: the floor plan at listener ear height. Columns run across the
  room width (x), rows run from the stage to the back wall (z).
- ``side_elevation``: a vertical section through the room. Columns run from
  the stage to the back wall (z), rows run from the floor to the ceiling (y).
  The section sits at ``section_x`` or the room centerline.

Cells are sampled at their centers, like the cell-centered coordinates of a
uniform simulation grid.

Example:
    >>> from sonicfield.sampling import SamplingPlane
    >>> from sonicfield.sources import RoomDimensions
    >>> grid = SamplingPlane("top_down", resolution=0.5).grid_for(RoomDimensions(15, 20, 6))
    >>> grid.shape
    (40, 30)
    >>> grid.point_at(0, 0)
    Point3D(x=0.25, y=1.4, z=0.25)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal

import numpy as np
from numpy.typing import NDArray

from sonicfield.core.geometry import Point3D
from sonicfield.sources.base import RoomDimensions

PlaneKind = Literal["top_down", "side_elevation"]

PLANE_KINDS: tuple[str, ...] = ("top_down", "side_elevation")


def _cell_centers(extent: float, resolution: float) -> NDArray[np.float64]:
    """Cell-center coordinates covering [0, extent]."""
    count = max(1, math.ceil(extent / resolution - 1e-9))
    step = extent / count
    return np.arange(count, dtype=np.float64) * step + step / 2.0


@dataclass(frozen=True)
class SamplingPlane:
    """Projection plane and resolution for a field computation.

    Args:
        kind: "top_down" or "side_elevation"
        resolution: Target cell size in meters (cells are stretched slightly
            so they tile the room exactly)
        listener_height: Height of the top-down plane in meters
        section_x: x position of the side-elevation section (default: center)

    Raises:
        ValueError: If kind is unknown or resolution is not positive
    """

    kind: PlaneKind = "top_down"
    resolution: float = 0.5
    listener_height: float = 1.4
    section_x: float | None = None

    def __post_init__(self):
        if self.kind not in PLANE_KINDS:
            raise ValueError(
                f"Unknown plane kind: {self.kind!r}. Valid options: {', '.join(PLANE_KINDS)}"
            )
        if not self.resolution > 0:
            raise ValueError(f"resolution must be positive, got {self.resolution}")

    def grid_for(self, room: RoomDimensions) -> PlaneGrid:
        """Build the sample grid of this plane for ``room``."""
        if self.kind == "top_down":
            return PlaneGrid(
                plane=self,
                u_coords=_cell_centers(room.width, self.resolution),
                v_coords=_cell_centers(room.depth, self.resolution),
                fixed=self.listener_height,
            )
        section = room.width / 2.0 if self.section_x is None else self.section_x
        return PlaneGrid(
            plane=self,
            u_coords=_cell_centers(room.depth, self.resolution),
            v_coords=_cell_centers(room.height, self.resolution),
            fixed=section,
        )


@dataclass(frozen=True, eq=False)
class PlaneGrid:
    """Concrete sample grid of a plane for one room.

    ``u`` is the column axis and ``v`` the row axis: (x, z) for top-down,
    (z, y) for side elevation. ``fixed`` is the coordinate held constant
    (y for top-down, x for side elevation).
    """

    plane: SamplingPlane
    u_coords: NDArray[np.float64] = field(repr=False)
    v_coords: NDArray[np.float64] = field(repr=False)
    fixed: float = 0.0

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, cols)."""
        return (len(self.v_coords), len(self.u_coords))

    @property
    def num_cells(self) -> int:
        rows, cols = self.shape
        return rows * cols

    def point_at(self, row: int, col: int) -> Point3D:
        """Room position of the cell at (row, col)."""
        u = float(self.u_coords[col])
        v = float(self.v_coords[row])
        if self.plane.kind == "top_down":
            return Point3D(u, self.fixed, v)
        return Point3D(self.fixed, v, u)

    def cell_for(self, u: float, v: float) -> tuple[int, int]:
        """Nearest (row, col) to plane coordinates (u, v), clamped to the grid."""
        col = int(np.abs(self.u_coords - u).argmin())
        row = int(np.abs(self.v_coords - v).argmin())
        return row, col
