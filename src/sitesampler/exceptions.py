"""
Errors raised while selecting training locations.
"""

from typing import Iterable, Optional


class SamplingError(ValueError):
    """Base class for every sampling failure."""


class InvalidRequestError(SamplingError):
    """The request, the candidate set or a parameter is out of its domain."""


class MissingPackingDataError(SamplingError):
    """No usable packing coordinate set exists for the requested point count."""

    def __init__(self, count: int, available: Optional[Iterable[int]] = None,
                 ratio: Optional[float] = None, detail: str = ""):
        self.count = count
        self.ratio = ratio
        self.available = sorted(available) if available is not None else None

        message = f"no optimal packing coordinates for {count} points"
        if ratio is not None:
            message += f" (ratio={ratio})"
        if detail:
            message += f": {detail}"
        elif self.available is not None:
            message += f"; available counts: {self.available}"
        super().__init__(message)
