import unittest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from algorithms.lis import (
    LongestIncreasingSubsequence, longest_increasing_subsequence, lis_length, lis_values
)


class TestLongestIncreasingSubsequence(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(longest_increasing_subsequence([]), [])
        self.assertEqual(longest_increasing_subsequence([None, None]), [])

    def test_sorted(self):
        self.assertEqual(longest_increasing_subsequence([1, 2, 3, 4, 5]), [0, 1, 2, 3, 4])

    def test_reversed(self):
        self.assertEqual(longest_increasing_subsequence([5, 4, 3, 2, 1]), [4])

    def test_equal_values_do_not_extend(self):
        self.assertEqual(longest_increasing_subsequence([3, 3, 3]), [0])

    def test_holes_are_skipped(self):
        self.assertEqual(longest_increasing_subsequence([None, 3, 1, None, 2]), [2, 4])

    def test_classic(self):
        seq = [10, 9, 2, 5, 3, 7, 101, 18]
        self.assertEqual(longest_increasing_subsequence(seq), [2, 4, 5, 7])
        self.assertEqual(lis_values(seq), [2, 3, 7, 18])
        self.assertEqual(lis_length(seq), 4)

    def test_correlation_shapes(self):
        self.assertEqual(longest_increasing_subsequence([3, 0, 1, 2]), [1, 2, 3])
        self.assertEqual(longest_increasing_subsequence([4, 3, 2, None]), [2])

    def test_solver_class(self):
        solver = LongestIncreasingSubsequence([2, 1, 3])
        self.assertEqual(solver.compute(), [1, 2])
        self.assertEqual(solver.compute(), [1, 2])


if __name__ == '__main__':
    unittest.main()
