"""
Loading of optimal circle-packing coordinates from packomania files.

Files follow the packomania.com naming, ``crc<count>_<ratio>...``, and hold
whitespace-separated rows of ``index x y`` for circles packed in a
rectangle of unit width centred on the origin.
"""

import os
import re

import numpy as np
from typing import Iterable, List, Union

from .config import PackingLibrary
from .exceptions import MissingPackingDataError

DEFAULT_RATIO = 0.6


def packing_filename_pattern(count: int, ratio: float = DEFAULT_RATIO) -> re.Pattern:
    """Pattern matching packomania file names for ``count`` circles at ``ratio``."""
    return re.compile(re.escape(f"crc{int(count)}_{ratio}"))


def find_packing_files(directory: Union[str, os.PathLike], count: int,
                       ratio: float = DEFAULT_RATIO) -> List[str]:
    """Sorted file names in directory holding the packing for count circles."""
    pattern = packing_filename_pattern(count, ratio)
    return sorted(name for name in os.listdir(directory) if pattern.search(name))


def read_packing_file(path: Union[str, os.PathLike]) -> np.ndarray:
    """Read the (x, y) columns of a packomania coordinate file."""
    coords = np.loadtxt(path, usecols=(1, 2), ndmin=2, dtype=float)
    coords.setflags(write=False)
    return coords


def load_packing_coords(directory: Union[str, os.PathLike], counts: Iterable[int],
                        ratio: float = DEFAULT_RATIO,
                        verbose: bool = False) -> PackingLibrary:
    """
    Load packing coordinates for every requested circle count.

    Args:
        directory: Folder holding the packomania files
        counts: Circle counts to load, e.g. [9, 18, 37]
        ratio: Height-to-width ratio of the packing rectangle (packomania
            publishes 0.1 to 1.0 in steps of 0.1)
        verbose: Print each file as it is read

    Returns:
        Mapping from circle count to an (count, 2) read-only array.

    Raises:
        MissingPackingDataError: No file matches a requested count, or the
            matching file does not hold exactly that many points.
        FileNotFoundError: The directory does not exist.
    """
    library: PackingLibrary = {}

    for count in counts:
        count = int(count)
        if count in library:
            continue

        filenames = find_packing_files(directory, count, ratio)
        if not filenames:
            raise MissingPackingDataError(count, ratio=ratio, detail="no files matched")

        coords = read_packing_file(os.path.join(directory, filenames[0]))
        if coords.shape != (count, 2):
            raise MissingPackingDataError(
                count, ratio=ratio,
                detail=f"{filenames[0]} holds {len(coords)} points"
            )
        library[count] = coords

        if verbose:
            print(f"Loaded {filenames[0]}: {len(library[count])} points")

    return library
