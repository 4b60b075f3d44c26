"""
Configuration and type definitions for training-location sampling.
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, Mapping, Tuple, Union
from enum import Enum

# Type aliases
Locations = np.ndarray
Point = np.ndarray
GridKey = Tuple[int, int]
Request = Union[int, float]
PackingSets = Mapping[int, np.ndarray]
PackingLibrary = Dict[int, np.ndarray]

# Above this many candidates, radius queries go through the grid index
VECTORIZED_THRESHOLD = 750


class SelectionMode(Enum):
    """How each packing point contributes to the selection."""
    NEAREST = "nearest"     # single closest candidate
    GROUPED = "grouped"     # every candidate near the closest one


@dataclass
class SamplingConfig:
    """
    Configuration parameters for optimal-spacing selection.

    Selection behaviour:
        random_jitter: Maximum uniform offset applied to each packing point.
            With group_radius it instead sets the neighbourhood radius
            (sqrt(2) * random_jitter) and no offset is applied.
        group_radius: Return the neighbourhood of each anchor instead of
            the anchor alone.

    Performance tuning:
        chunk_size: Packing points per vectorised distance block
        vectorized_threshold: Candidate count above which radius queries
            use the grid index

    Output:
        verbose: Print short progress lines
    """
    # Selection behaviour
    random_jitter: float = 0.0
    group_radius: bool = False

    # Performance tuning
    chunk_size: int = 1024
    vectorized_threshold: int = VECTORIZED_THRESHOLD

    # Output
    verbose: bool = False

    @property
    def mode(self) -> SelectionMode:
        return SelectionMode.GROUPED if self.group_radius else SelectionMode.NEAREST

    @property
    def neighborhood_radius(self) -> float:
        """Radius of the grouping neighbourhood around each anchor."""
        return float(np.sqrt(2.0) * self.random_jitter)

    @property
    def applies_jitter(self) -> bool:
        return self.random_jitter > 0 and not self.group_radius
