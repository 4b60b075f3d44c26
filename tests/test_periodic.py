import unittest
import numpy as np
from sitesampler import InvalidRequestError
from sitesampler.periodic import (
    periodic_sampling,
    periodic_indices_by_count,
    periodic_indices_by_percentage,
    resolve_sample_count,
)


class TestPeriodicByCount(unittest.TestCase):

    def test_exact_multiples(self):
        np.testing.assert_array_equal(periodic_sampling(3, 9), [3, 6, 9])

    def test_half_rounds_to_even(self):
        """Stride 2.5 gives 2.5, 5, 7.5, 10 -> 2, 5, 8, 10."""
        np.testing.assert_array_equal(periodic_indices_by_count(4, 10), [2, 5, 8, 10])

    def test_all_samples(self):
        np.testing.assert_array_equal(periodic_sampling(5, 5), [1, 2, 3, 4, 5])

    def test_indices_are_one_based_and_bounded(self):
        idx = periodic_sampling(7, 23)
        self.assertEqual(len(idx), 7)
        self.assertGreaterEqual(idx.min(), 1)
        self.assertLessEqual(idx.max(), 23)
        self.assertTrue(np.all(np.diff(idx) > 0))

    def test_more_samples_than_total(self):
        with self.assertRaises(InvalidRequestError):
            periodic_sampling(11, 10)

    def test_non_positive_count(self):
        for bad in (0, -3):
            with self.assertRaises(InvalidRequestError):
                periodic_sampling(bad, 10)

    def test_bool_is_not_a_count(self):
        with self.assertRaises(InvalidRequestError):
            periodic_sampling(True, 10)


class TestPeriodicByPercentage(unittest.TestCase):

    def test_floor_plus_offset(self):
        np.testing.assert_array_equal(periodic_sampling(0.2, 10), [1, 6])

    def test_half_count_rounds_to_even(self):
        """0.5 * 9 = 4.5 samples rounds to 4, stride 2."""
        np.testing.assert_array_equal(periodic_indices_by_percentage(0.5, 9), [1, 3, 5, 7])

    def test_full_percentage(self):
        np.testing.assert_array_equal(periodic_sampling(1.0, 5), [1, 2, 3, 4, 5])

    def test_differs_from_count_form(self):
        """Both policies are kept even when they resolve to the same count."""
        by_pct = periodic_sampling(0.2, 10)
        by_count = periodic_sampling(2, 10)
        np.testing.assert_array_equal(by_count, [5, 10])
        self.assertFalse(np.array_equal(by_pct, by_count))

    def test_out_of_range(self):
        for bad in (0.0, -0.1, 1.5):
            with self.assertRaises(InvalidRequestError):
                periodic_sampling(bad, 10)

    def test_rounds_to_zero_samples(self):
        with self.assertRaises(InvalidRequestError):
            periodic_sampling(0.01, 10)

    def test_idempotent(self):
        first = periodic_sampling(0.3, 57)
        for _ in range(3):
            np.testing.assert_array_equal(periodic_sampling(0.3, 57), first)


class TestResolveSampleCount(unittest.TestCase):

    def test_numpy_scalars(self):
        self.assertEqual(resolve_sample_count(np.int64(4), 10), 4)
        self.assertEqual(resolve_sample_count(np.float64(0.25), 100), 25)

    def test_bad_total(self):
        with self.assertRaises(InvalidRequestError):
            resolve_sample_count(1, 0)

    def test_not_a_number(self):
        with self.assertRaises(InvalidRequestError):
            resolve_sample_count("10", 100)


if __name__ == '__main__':
    unittest.main()
