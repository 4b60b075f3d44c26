"""
Order-based periodic decimation of a measurement index range.

Two policies share the name, selected by the request type:

- exact count ``k``: index_i = round(n / k * i) for i = 1..k
- percentage ``p``: index_i = floor((i - 1) / p) + 1 for i = 1..round(p * n)

Both return one-based indices into [1, n]. Rounding is half-to-even
throughout (``numpy.rint``), so ``periodic_sampling(4, 10)`` gives
``[2, 5, 8, 10]``.
"""

import numbers

import numpy as np

from .config import Request
from .exceptions import InvalidRequestError


def _check_total(num_total: int) -> int:
    if isinstance(num_total, bool) or not isinstance(num_total, numbers.Integral):
        raise InvalidRequestError(f"total count must be an integer, got {num_total!r}")
    if num_total <= 0:
        raise InvalidRequestError(f"total count must be positive, got {num_total}")
    return int(num_total)


def resolve_sample_count(request: Request, num_total: int) -> int:
    """
    Turn an exact count or a percentage of ``num_total`` into a sample count.

    Integral requests are exact counts and must lie in [1, num_total].
    Real requests are fractions in (0, 1] and are rounded half-to-even.
    """
    num_total = _check_total(num_total)

    if isinstance(request, bool):
        raise InvalidRequestError(f"request must be a count or a percentage, got {request!r}")

    if isinstance(request, numbers.Integral):
        count = int(request)
        if count <= 0:
            raise InvalidRequestError(f"sample count must be positive, got {count}")
        if count > num_total:
            raise InvalidRequestError(
                f"sample count ({count}) is greater than sample size ({num_total})"
            )
        return count

    if isinstance(request, numbers.Real):
        percentage = float(request)
        if not 0.0 < percentage <= 1.0:
            raise InvalidRequestError(f"percentage must be in (0, 1], got {percentage}")
        count = int(np.rint(percentage * num_total))
        if count == 0:
            raise InvalidRequestError(
                f"percentage {percentage} of {num_total} rounds to zero samples"
            )
        return count

    raise InvalidRequestError(f"request must be a count or a percentage, got {request!r}")


def periodic_indices_by_count(num_samples: int, num_total: int) -> np.ndarray:
    """Pick ``num_samples`` one-based indices out of ``num_total`` by rounding multiples of n / k."""
    if isinstance(num_samples, bool) or not isinstance(num_samples, numbers.Integral):
        raise InvalidRequestError(f"sample count must be an integer, got {num_samples!r}")
    count = resolve_sample_count(num_samples, num_total)

    stride = num_total / count
    return np.rint(stride * np.arange(1, count + 1)).astype(int)


def periodic_indices_by_percentage(percentage: float, num_total: int) -> np.ndarray:
    """Pick round(p * n) one-based indices, starting at 1 and stepping by 1 / p (floored)."""
    if isinstance(percentage, numbers.Integral) or not isinstance(percentage, numbers.Real):
        raise InvalidRequestError(f"percentage must be a real number, got {percentage!r}")
    count = resolve_sample_count(percentage, num_total)

    stride = 1.0 / float(percentage)
    return np.floor(stride * np.arange(count)).astype(int) + 1


def periodic_sampling(request: Request, num_total: int) -> np.ndarray:
    """
    Periodically sample the one-based range [1, num_total].

    Args:
        request: Exact number of samples (int) or fraction of num_total (float)
        num_total: Number of values in the range

    Returns:
        Sorted one-based indices.
    """
    if isinstance(request, numbers.Integral) and not isinstance(request, bool):
        return periodic_indices_by_count(request, num_total)
    return periodic_indices_by_percentage(request, num_total)
