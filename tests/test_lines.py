import unittest
import os
import sys

# Allow running without installing the package
current_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(os.path.dirname(current_dir), "src"))

from ttt_engine.errors import InvalidLineSpecError
from ttt_engine.lines import generate_lines, line_array, line_count


class TestGenerateLines(unittest.TestCase):

    def test_three_by_three_has_rows_columns_and_diagonals(self):
        lines = generate_lines(3, 3)
        self.assertEqual(len(lines), 8)
        self.assertEqual(lines[0], (0, 1, 2))
        self.assertEqual(lines[1], (0, 3, 6))
        self.assertEqual(lines[6], (0, 4, 8))
        self.assertEqual(lines[7], (2, 4, 6))
        self.assertEqual(list(lines[0:6:2]), [(0, 1, 2), (3, 4, 5), (6, 7, 8)])
        self.assertEqual(list(lines[1:6:2]), [(0, 3, 6), (1, 4, 7), (2, 5, 8)])

    def test_four_by_four_has_ten_lines(self):
        lines = generate_lines(4)
        self.assertEqual(len(lines), 10)
        self.assertEqual(lines[-2], (0, 5, 10, 15))
        self.assertEqual(lines[-1], (3, 6, 9, 12))

    def test_default_win_length_is_grid_size(self):
        self.assertEqual(generate_lines(3), generate_lines(3, 3))

    def test_sliding_windows_on_larger_grid(self):
        lines = generate_lines(4, 3)
        # 8 horizontal, 8 vertical, 4 + 4 diagonal
        self.assertEqual(len(lines), 24)
        self.assertEqual(len(set(lines)), 24)
        self.assertIn((1, 6, 11), lines)
        self.assertIn((2, 5, 8), lines)
        self.assertIn((13, 14, 15), lines)
        for line in lines:
            self.assertEqual(len(line), 3)
            self.assertTrue(all(0 <= c < 16 for c in line))

    def test_line_count_formula_for_full_length(self):
        for n in range(2, 7):
            self.assertEqual(line_count(n), 2 * n + 2)

    def test_single_cell_lines_are_not_repeated(self):
        self.assertEqual(generate_lines(1, 1), ((0,),))
        lines = generate_lines(3, 1)
        self.assertEqual(len(lines), 9)
        self.assertEqual(len(set(lines)), len(lines))
        self.assertEqual(sorted(lines), [(i,) for i in range(9)])

    def test_no_duplicates_for_any_window(self):
        for n in range(1, 6):
            for k in range(1, n + 1):
                lines = generate_lines(n, k)
                self.assertEqual(len(set(lines)), len(lines), (n, k))

    def test_rejects_impossible_sizes(self):
        for n, k in [(3, 4), (0, 0), (3, 0), (-1, None), (2, -1)]:
            with self.assertRaises(InvalidLineSpecError):
                generate_lines(n, k)

    def test_lines_are_cached(self):
        self.assertIs(generate_lines(3), generate_lines(3, 3))

    def test_line_array_matches_lines(self):
        arr = line_array(3)
        self.assertEqual(arr.shape, (8, 3))
        self.assertEqual([tuple(int(c) for c in row) for row in arr], list(generate_lines(3)))
        self.assertFalse(arr.flags.writeable)


if __name__ == '__main__':
    unittest.main(verbosity=2)
