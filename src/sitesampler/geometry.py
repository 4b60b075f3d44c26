"""
Geometry utilities for training-location selection.

Contains:
- LocationGeometry: bounding box, packing orientation and nearest-site search
- NeighborhoodIndex: grid-based spatial index for fixed-radius queries
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import GridKey, Locations, Point
from .exceptions import InvalidRequestError


def as_locations(candidates) -> Locations:
    """
    Coerce candidate locations into an (N, 2) float array.

    Accepts an (N, 2) array-like or a column table exposing "x" and "y"
    (a dict of sequences, a pandas DataFrame, ...). Row order is kept.
    """
    if hasattr(candidates, "keys") and "x" in candidates and "y" in candidates:
        xs = np.asarray(candidates["x"], dtype=float)
        ys = np.asarray(candidates["y"], dtype=float)
        if xs.shape != ys.shape or xs.ndim != 1:
            raise InvalidRequestError(
                f"x and y columns must be 1-D and equally long, got {xs.shape} and {ys.shape}"
            )
        locations = np.column_stack([xs, ys])
    else:
        try:
            locations = np.asarray(candidates, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidRequestError(f"candidate locations are not numeric: {exc}") from exc

    if locations.ndim != 2 or locations.shape[1] != 2:
        raise InvalidRequestError(
            f"candidate locations must have shape (N, 2), got {locations.shape}"
        )
    if len(locations) == 0:
        raise InvalidRequestError("candidate location set is empty")
    if not np.all(np.isfinite(locations)):
        raise InvalidRequestError("candidate locations contain non-finite coordinates")

    return locations


class LocationGeometry:
    """Handles geometric calculations over the candidate location set."""

    def __init__(self, candidates, chunk_size: int = 1024):
        if int(chunk_size) < 1:
            raise InvalidRequestError(f"chunk_size must be at least 1, got {chunk_size}")
        self.locations = as_locations(candidates)
        self.chunk_size = int(chunk_size)
        self._compute_bounds()

    def __len__(self) -> int:
        return len(self.locations)

    def _compute_bounds(self) -> None:
        self.min_coords = np.min(self.locations, axis=0)
        self.max_coords = np.max(self.locations, axis=0)
        self.widths = np.abs(self.max_coords - self.min_coords)
        self.center = (self.max_coords - self.min_coords) / 2.0 + self.min_coords

        x_width, y_width = self.widths
        if x_width == 0 or y_width == 0:
            raise InvalidRequestError(
                f"candidate bounding box is degenerate (x width={x_width}, y width={y_width})"
            )

    @property
    def x_width(self) -> float:
        return float(self.widths[0])

    @property
    def y_width(self) -> float:
        return float(self.widths[1])

    @property
    def flip_axes(self) -> bool:
        """Packing sets are long along x; swap them when the sites are not wider than tall."""
        return not self.x_width > self.y_width

    @property
    def scale_width(self) -> float:
        return self.y_width if self.flip_axes else self.x_width

    def fit_packing(self, packing: np.ndarray, offsets: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Map normalised packing coordinates into the candidates' frame.

        The packing is centred on the origin with its long axis along x and
        unit width. It is swapped if needed, scaled by the long side of the
        candidate bounding box, shifted to its centre and optionally offset.
        """
        points = np.array(packing, dtype=float)
        if self.flip_axes:
            points = points[:, ::-1]

        world = points * self.scale_width + self.center
        if offsets is not None:
            world = world + offsets
        return world

    def nearest_indices(self, points: np.ndarray) -> np.ndarray:
        """
        Index of the closest candidate to each point.

        Exact ties go to the lowest candidate index. Distances are computed
        in blocks of chunk_size points.
        """
        points = np.asarray(points, dtype=float).reshape(-1, 2)
        nearest = np.empty(len(points), dtype=int)

        for start in range(0, len(points), self.chunk_size):
            block = points[start:start + self.chunk_size]
            dists = np.linalg.norm(
                block[:, np.newaxis, :] - self.locations[np.newaxis, :, :],
                axis=2
            )
            nearest[start:start + len(block)] = np.argmin(dists, axis=1)

        return nearest

    def indices_within(self, anchor: Point, radius: float) -> np.ndarray:
        """Indices of every candidate strictly closer than radius to anchor, ascending."""
        distances = np.linalg.norm(self.locations - anchor, axis=1)
        return np.flatnonzero(distances < radius)


@dataclass
class NeighborhoodIndex:
    """Grid-based spatial index for strict fixed-radius neighbourhood queries."""
    cell_size: float
    origin: np.ndarray
    grid: Dict[GridKey, List[int]] = field(default_factory=dict)

    _locations: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))

    @classmethod
    def build(cls, locations: Locations, radius: float) -> "NeighborhoodIndex":
        """Index locations on a grid whose cells are one radius wide."""
        if radius <= 0:
            raise InvalidRequestError(f"neighbourhood radius must be positive, got {radius}")

        locations = np.asarray(locations, dtype=float)
        index = cls(cell_size=float(radius), origin=np.min(locations, axis=0))
        index._locations = locations

        cells = ((locations - index.origin) // index.cell_size).astype(int)
        for i, (gx, gy) in enumerate(cells):
            index.grid.setdefault((int(gx), int(gy)), []).append(i)
        return index

    def get_nearby_indices(self, point: Point) -> List[int]:
        """Indices in the 3x3 block of cells around a point."""
        center_key = self._get_cell_key(point)
        nearby = []
        for dx in range(-1, 2):
            for dy in range(-1, 2):
                neighbor_key = (center_key[0] + dx, center_key[1] + dy)
                if neighbor_key in self.grid:
                    nearby.extend(self.grid[neighbor_key])
        return nearby

    def query(self, point: Point, radius: Optional[float] = None) -> np.ndarray:
        """Indices strictly closer than radius (defaults to the cell size) to point, ascending."""
        radius = self.cell_size if radius is None else radius
        if radius > self.cell_size:
            raise InvalidRequestError(
                f"query radius {radius} exceeds index cell size {self.cell_size}"
            )

        indices = np.array(sorted(self.get_nearby_indices(point)), dtype=int)
        if len(indices) == 0:
            return indices

        distances = np.linalg.norm(self._locations[indices] - point, axis=1)
        return indices[distances < radius]

    def _get_cell_key(self, point: Point) -> GridKey:
        """Convert a point to its grid cell coordinates."""
        cell_coords = ((np.asarray(point, dtype=float) - self.origin) // self.cell_size).astype(int)
        return (int(cell_coords[0]), int(cell_coords[1]))
