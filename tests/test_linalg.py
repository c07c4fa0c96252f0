import unittest

import numpy as np

from fraction64 import Fraction, SingularMatrixError, as_fraction_array, identity, linalg


def matmul(a, b):
    a = as_fraction_array(a)
    b = as_fraction_array(b)
    return a.dot(b)


class InverseTests(unittest.TestCase):
    def test_inverse_is_exact(self):
        matrix = as_fraction_array([[2, 1, 1], [1, 3, 2], [1, 0, 0]])
        inverse = linalg.inv(matrix)
        product = matmul(inverse, matrix)
        self.assertTrue((product == identity(3)).all())

    def test_hilbert_inverse(self):
        n = 4
        hilbert = as_fraction_array([[Fraction(1, i + j + 1) for j in range(n)] for i in range(n)])
        inverse = linalg.inv(hilbert)
        self.assertEqual(inverse[0, 0], Fraction(16))
        self.assertEqual(inverse[3, 3], Fraction(2800))
        self.assertTrue((matmul(hilbert, inverse) == identity(n)).all())

    def test_inverse_requires_row_swap(self):
        matrix = as_fraction_array([[0, 1], [1, 0]])
        inverse = linalg.inv(matrix)
        self.assertEqual(list(inverse.flat), [Fraction(0), Fraction(1), Fraction(1), Fraction(0)])

    def test_input_is_not_modified(self):
        matrix = as_fraction_array([[4, 7], [2, 6]])
        linalg.inv(matrix)
        self.assertEqual(matrix[0, 0], Fraction(4))

    def test_singular_matrix_raises(self):
        with self.assertRaises(SingularMatrixError):
            linalg.inv([[1, 2], [2, 4]])
        with self.assertRaises(ZeroDivisionError):
            linalg.inv([[0, 0], [0, 0]])

    def test_non_square_rejected(self):
        with self.assertRaises(ValueError):
            linalg.inv([[1, 2, 3], [4, 5, 6]])


class SolveTests(unittest.TestCase):
    def test_solve_vector(self):
        matrix = [[Fraction(0.1), 2], [3, 4]]
        rhs = [1, 2]
        x = linalg.solve(matrix, rhs)
        self.assertEqual(x.shape, (2,))
        residual = matmul(matrix, x)
        self.assertEqual(list(residual), [Fraction(1), Fraction(2)])

    def test_solve_matrix(self):
        matrix = [[2, 0], [0, 4]]
        x = linalg.solve(matrix, [[1, 2], [3, 4]])
        self.assertEqual(x.shape, (2, 2))
        self.assertEqual(x[1, 0], Fraction(3, 4))

    def test_solve_shape_mismatch(self):
        with self.assertRaises(ValueError):
            linalg.solve([[1, 0], [0, 1]], [1, 2, 3])


class DeterminantTests(unittest.TestCase):
    def test_triangular(self):
        matrix = [[Fraction(1, 2), 5, 7], [0, Fraction(2, 3), 1], [0, 0, 3]]
        self.assertEqual(linalg.det(matrix), Fraction(1))

    def test_row_swap_flips_sign(self):
        self.assertEqual(linalg.det([[0, 1], [1, 0]]), Fraction(-1))

    def test_singular(self):
        self.assertEqual(linalg.det([[1, 2], [2, 4]]), Fraction(0))

    def test_matches_float_determinant(self):
        matrix = [[2, -1, 0], [-1, 2, -1], [0, -1, 2]]
        self.assertEqual(linalg.det(matrix), Fraction(4))
        self.assertAlmostEqual(float(linalg.det(matrix)), np.linalg.det(np.array(matrix, dtype=float)))


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
