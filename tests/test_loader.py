import os
import tempfile
import unittest
import numpy as np
from sitesampler import MissingPackingDataError, OptimalSpacingSampler, load_packing_coords
from sitesampler.loader import find_packing_files, packing_filename_pattern

CRC4 = """    1   -0.350000000000000000000000000000    -0.150000000000000000000000000000
    2    0.350000000000000000000000000000    -0.150000000000000000000000000000
    3   -0.350000000000000000000000000000     0.150000000000000000000000000000
    4    0.350000000000000000000000000000     0.150000000000000000000000000000
"""

CRC1 = "  1  0.0  0.0\n"


class TestPackingLoader(unittest.TestCase):
    def setUp(self):
        """Write a small packomania-style directory."""
        self._tmp = tempfile.TemporaryDirectory()
        self.directory = self._tmp.name
        self._write("crc4_0.6.txt", CRC4)
        self._write("crc1_0.6.txt", CRC1)
        self._write("crc40_0.6.txt", CRC4 * 10)
        self._write("crc4_0.5.txt", CRC4.replace("0.15", "0.10"))
        self._write("crc9_0.6.txt", CRC4)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, name: str, text: str) -> None:
        with open(os.path.join(self.directory, name), "w") as handle:
            handle.write(text)

    # --- File discovery ---

    def test_pattern_is_exact_on_count(self):
        pattern = packing_filename_pattern(4, 0.6)
        self.assertIsNotNone(pattern.search("crc4_0.6.txt"))
        self.assertIsNone(pattern.search("crc40_0.6.txt"))
        self.assertIsNone(pattern.search("crc4_0.5.txt"))

    def test_find_files(self):
        self.assertEqual(find_packing_files(self.directory, 4), ["crc4_0.6.txt"])
        self.assertEqual(find_packing_files(self.directory, 4, ratio=0.5), ["crc4_0.5.txt"])

    # --- Loading ---

    def test_load(self):
        library = load_packing_coords(self.directory, [4, 1])
        self.assertEqual(sorted(library), [1, 4])
        self.assertEqual(library[4].shape, (4, 2))
        self.assertEqual(library[1].shape, (1, 2))
        np.testing.assert_allclose(library[4][0], [-0.35, -0.15])

    def test_loaded_arrays_are_read_only(self):
        library = load_packing_coords(self.directory, [4])
        self.assertFalse(library[4].flags.writeable)

    def test_other_ratio(self):
        library = load_packing_coords(self.directory, [4], ratio=0.5)
        self.assertEqual(library[4].shape, (4, 2))
        np.testing.assert_allclose(library[4][0], [-0.35, -0.10])

    def test_missing_count(self):
        with self.assertRaises(MissingPackingDataError) as ctx:
            load_packing_coords(self.directory, [4, 7])
        self.assertEqual(ctx.exception.count, 7)
        self.assertEqual(ctx.exception.ratio, 0.6)

    def test_row_count_mismatch(self):
        """A file holding the wrong number of points is rejected by name."""
        with self.assertRaises(MissingPackingDataError) as ctx:
            load_packing_coords(self.directory, [9])
        self.assertEqual(ctx.exception.count, 9)
        self.assertIn("crc9_0.6.txt", str(ctx.exception))

    def test_missing_directory(self):
        with self.assertRaises(FileNotFoundError):
            load_packing_coords(os.path.join(self.directory, "nope"), [4])

    def test_loaded_packing_drives_sampler(self):
        """A 0.6 packing on a 10 x 6 grid picks the four interior sites it points at."""
        locations = np.array([(x, y) for y in range(6) for x in range(10)], dtype=float)
        library = load_packing_coords(self.directory, [4])
        idx = OptimalSpacingSampler(locations).select(4, library)
        # x: +-0.35 * 9 + 4.5 -> 1.35, 7.65; y: +-0.15 * 9 + 2.5 -> 1.15, 3.85
        np.testing.assert_array_equal(idx, [12, 19, 42, 49])


if __name__ == '__main__':
    unittest.main()
