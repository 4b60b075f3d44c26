import numpy as np
from typing import Iterator, List, Optional

from .config import PackingSets, Request, SamplingConfig, SelectionMode
from .exceptions import InvalidRequestError, MissingPackingDataError
from .geometry import LocationGeometry, NeighborhoodIndex
from .periodic import resolve_sample_count


def resolve_packing_set(packing_sets: PackingSets, count: int) -> np.ndarray:
    """Look up the packing coordinates for exactly ``count`` points."""
    if count not in packing_sets:
        raise MissingPackingDataError(count, available=packing_sets.keys())

    packing = np.asarray(packing_sets[count], dtype=float)
    if packing.shape != (count, 2):
        raise MissingPackingDataError(
            count, detail=f"packing set has shape {packing.shape}, expected ({count}, 2)"
        )
    return packing


class OptimalSpacingSampler:
    """
    Selects training locations by matching optimal circle-packing
    coordinates to the nearest candidate sites.

    The packing for the requested count is fitted to the bounding box of the
    candidates (long axis to long axis), then each packing point picks its
    closest site. With ``group_radius`` every site within sqrt(2) *
    ``random_jitter`` of that anchor is returned instead.
    """

    def __init__(self, candidates, config: Optional[SamplingConfig] = None):
        self.config = config or SamplingConfig()
        self._check_config()
        self.geometry = LocationGeometry(candidates, self.config.chunk_size)
        self._neighborhood_index: Optional[NeighborhoodIndex] = None

    def __len__(self) -> int:
        return len(self.geometry)

    def _check_config(self) -> None:
        jitter = self.config.random_jitter
        if not np.isfinite(jitter) or jitter < 0:
            raise InvalidRequestError(f"random_jitter must be a finite value >= 0, got {jitter}")
        if self.config.group_radius and jitter == 0:
            raise InvalidRequestError("group_radius requires random_jitter > 0 to set the radius")

    def _draw_offsets(self, count: int, rng: np.random.Generator) -> np.ndarray:
        jitter = self.config.random_jitter
        x_offsets = rng.uniform(-jitter, jitter, size=count)
        y_offsets = rng.uniform(-jitter, jitter, size=count)
        return np.column_stack([x_offsets, y_offsets])

    def target_points(self, packing: np.ndarray,
                      rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """Packing coordinates placed in the candidates' frame, jittered if configured."""
        offsets = None
        if self.config.applies_jitter:
            rng = rng if rng is not None else np.random.default_rng()
            offsets = self._draw_offsets(len(packing), rng)
        return self.geometry.fit_packing(packing, offsets)

    def _neighborhood(self, anchor: int) -> np.ndarray:
        radius = self.config.neighborhood_radius
        point = self.geometry.locations[anchor]

        if len(self.geometry) <= self.config.vectorized_threshold:
            return self.geometry.indices_within(point, radius)

        if self._neighborhood_index is None or self._neighborhood_index.cell_size != radius:
            self._neighborhood_index = NeighborhoodIndex.build(self.geometry.locations, radius)
        return self._neighborhood_index.query(point, radius)

    def generate(self, request: Request, packing_sets: PackingSets,
                 rng: Optional[np.random.Generator] = None) -> Iterator[np.ndarray]:
        """
        Yield the selected indices packing point by packing point.

        Indices are one-based, like the periodic sampler. In NEAREST mode
        each yielded array holds one index; in GROUPED mode it holds the
        anchor's whole neighbourhood in ascending order. The config is
        re-checked on every call.
        Everything is validated before the first yield.
        """
        self._check_config()
        count = resolve_sample_count(request, len(self.geometry))
        packing = resolve_packing_set(packing_sets, count)

        if self.config.verbose:
            orientation = "swapped" if self.geometry.flip_axes else "as-is"
            print(f"Resolved {count} points, packing axes {orientation}, "
                  f"scale {self.geometry.scale_width:g}")

        targets = self.target_points(packing, rng)
        anchors = self.geometry.nearest_indices(targets)

        def selections() -> Iterator[np.ndarray]:
            for anchor in anchors:
                if self.config.mode is SelectionMode.GROUPED:
                    yield self._neighborhood(anchor) + 1
                else:
                    yield np.array([anchor + 1], dtype=int)

        return selections()

    def select(self, request: Request, packing_sets: PackingSets,
               rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """Select one-based candidate indices and return them as one array."""
        groups: List[np.ndarray] = list(self.generate(request, packing_sets, rng))
        selection = np.concatenate(groups).astype(int) if groups else np.empty(0, dtype=int)

        if self.config.verbose:
            print(f"Done! Selected {len(selection)} of {len(self.geometry)} locations "
                  f"({len(np.unique(selection))} unique)")

        return selection


def optimal_spacing_sampling(request: Request, candidates, packing_sets: PackingSets,
                             random_jitter: float = 0.0, group_radius: bool = False,
                             rng: Optional[np.random.Generator] = None,
                             num_total: Optional[int] = None,
                             verbose: bool = False) -> np.ndarray:
    """
    Sample candidate locations on an optimal circle-packing pattern.

    Args:
        request: Exact number of points (int) or fraction of the candidates (float)
        candidates: (N, 2) locations or a table with "x" and "y" columns
        packing_sets: Normalised packing coordinates keyed by point count
        random_jitter: Maximum uniform offset per packing point, or the
            neighbourhood scale when group_radius is set
        group_radius: Return every site within sqrt(2) * random_jitter of
            each anchor instead of the anchor alone
        rng: Random generator used for jitter
        num_total: Expected number of candidates, checked when given
        verbose: Print progress lines

    Returns:
        One-based candidate indices in packing-point order.
    """
    config = SamplingConfig(random_jitter=random_jitter, group_radius=group_radius,
                            verbose=verbose)
    sampler = OptimalSpacingSampler(candidates, config)

    if num_total is not None and num_total != len(sampler):
        raise InvalidRequestError(
            f"num_total ({num_total}) does not match the {len(sampler)} candidate locations"
        )

    return sampler.select(request, packing_sets, rng)
