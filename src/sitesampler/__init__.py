"""
sitesampler - Training-location selection for spatial regression.

Usage:
    from sitesampler import periodic_sampling, load_packing_coords, OptimalSpacingSampler

    # Every third measurement, by order
    idx = periodic_sampling(3, 9)           # one-based: [3, 6, 9]
    idx = periodic_sampling(0.2, 10)        # one-based: [1, 6]

    # Well-spread locations from optimal circle packings
    packings = load_packing_coords("./data/packing/", [9, 18, 37], ratio=0.6)
    sampler = OptimalSpacingSampler(locations)
    idx = sampler.select(18, packings)      # one-based rows of locations

    # Neighbourhoods around each packing point
    config = SamplingConfig(random_jitter=0.5, group_radius=True)
    idx = OptimalSpacingSampler(locations, config).select(0.1, packings)

Sampling modes:
    - Periodic: deterministic decimation by count (rounded) or percentage (floored)
    - Nearest: one site per packing point, optionally jittered
    - Grouped: every site within sqrt(2) * random_jitter of each anchor
"""

from .config import SamplingConfig, SelectionMode, Locations, Point, PackingSets
from .exceptions import SamplingError, InvalidRequestError, MissingPackingDataError
from .geometry import LocationGeometry, NeighborhoodIndex
from .loader import load_packing_coords
from .periodic import (
    periodic_sampling,
    periodic_indices_by_count,
    periodic_indices_by_percentage,
    resolve_sample_count,
)
from .sampler import OptimalSpacingSampler, optimal_spacing_sampling

__all__ = [
    "OptimalSpacingSampler",
    "optimal_spacing_sampling",
    "periodic_sampling",
    "periodic_indices_by_count",
    "periodic_indices_by_percentage",
    "resolve_sample_count",
    "load_packing_coords",
    "SamplingConfig",
    "SelectionMode",
    "LocationGeometry",
    "NeighborhoodIndex",
    "SamplingError",
    "InvalidRequestError",
    "MissingPackingDataError",
    "Locations",
    "Point",
    "PackingSets",
]

__version__ = "0.1.0"
