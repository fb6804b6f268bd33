"""
Foundation module tests: field.py, matrix.py, polynomial.py, roots.py
"""
import pytest

from toyplonk.errors import InvalidDegree, NoInverse, PlonkError
from toyplonk.field import PrimeField
from toyplonk.matrix import (
    adjugate_4x4,
    determinant_4x4,
    inverse_4x4,
    multiply_4x4_vector,
)
from toyplonk.polynomial import Polynomial, interpolate, lagrange_1_poly, poly_div
from toyplonk.roots import get_coset, get_primitive_root, get_roots_of_unity


@pytest.fixture(scope="module")
def f17():
    return PrimeField(17)


def _ints(matrix):
    return [[int(v) for v in row] for row in matrix]


# =====================================================================
# PrimeField
# =====================================================================

class TestPrimeField:
    def test_add_wraps(self, f17):
        assert f17.add(10, 10) == 3

    def test_subtract_wraps(self, f17):
        assert f17.subtract(0, 1) == 16

    def test_multiply(self, f17):
        assert f17.multiply(6, 7) == 8

    def test_divide(self, f17):
        assert f17.divide(8, 7) == 6

    def test_exponent(self, f17):
        assert f17.exponent(2, 4) == 16
        assert f17.exponent(5, 0) == 1

    def test_negative_exponent_rejected(self, f17):
        with pytest.raises(ValueError):
            f17.exponent(2, -1)

    def test_additive_inverse(self, f17):
        assert f17.additive_inverse(5) == 12
        assert f17.additive_inverse(0) == 0

    def test_multiplicative_inverse(self, f17):
        assert f17.multiplicative_inverse(3) == 6
        assert f17.multiply(3, f17.multiplicative_inverse(3)) == 1

    def test_zero_has_no_inverse(self, f17):
        with pytest.raises(NoInverse):
            f17.multiplicative_inverse(0)

    def test_divide_by_zero_raises(self, f17):
        with pytest.raises(NoInverse):
            f17.divide(3, 0)

    def test_no_inverse_is_zero_division_error(self, f17):
        with pytest.raises(ZeroDivisionError):
            f17(3) / f17(0)

    def test_non_prime_order_not_coprime(self):
        field = PrimeField(9999999)
        # 9999999 = 3 · 3333333
        with pytest.raises(NoInverse):
            field.multiplicative_inverse(3)

    def test_subtract_add_identity(self, f17):
        for a in range(17):
            for b in range(17):
                assert f17.subtract(f17.add(a, b), b) == a

    def test_divide_multiply_identity(self, f17):
        for a in range(17):
            for b in range(1, 17):
                assert f17.divide(f17.multiply(a, b), b) == a

    def test_vector_dot(self, f17):
        assert f17.vector_dot([1, 2, 3], [4, 5, 6]) == 32 % 17

    def test_vector_dot_length_mismatch(self, f17):
        with pytest.raises(ValueError):
            f17.vector_dot([1, 2], [1])

    def test_elements_reduce(self, f17):
        assert int(f17(20)) == 3
        assert int(f17(-1)) == 16

    def test_elements_hashable(self, f17):
        assert len({f17(3), f17(20)}) == 1

    def test_tiny_order_rejected(self):
        with pytest.raises(ValueError):
            PrimeField(1)


class TestComplexScalar:
    def test_u_squared(self):
        C = PrimeField(101).extension
        assert C.u_squared() == 99

    def test_multiplication(self):
        C = PrimeField(101).extension
        u = C([0, 1])
        assert (u * u).as_tuple() == (99, 0)
        assert (C([2, 3]) * C([4, 5])).as_tuple() == ((8 - 30) % 101, 22)

    def test_parts(self):
        z = PrimeField(101).extension([7, 28])
        assert z.constant == 7
        assert z.u_term == 28
        assert repr(z) == "7 + 28u"


# =====================================================================
# Matrix4
# =====================================================================

SINGULAR = [
    [1, 2, 6, 6],
    [4, 7, 3, 2],
    [0, 0, 0, 0],
    [1, 2, 2, 9],
]

TRIANGULAR = [
    [4, 3, 2, 2],
    [0, 1, 14, 3],
    [0, 16, 3, 3],
    [0, 3, 1, 1],
]

SYMMETRIC = [
    [1, 1, 1, 16],
    [1, 1, 16, 1],
    [1, 16, 1, 1],
    [16, 1, 1, 1],
]

VANDERMONDE = [
    [1, 1, 1, 1],
    [1, 4, 16, 13],
    [1, 16, 1, 16],
    [1, 13, 16, 4],
]

VANDERMONDE_INVERSE = [
    [13, 13, 13, 13],
    [13, 16, 4, 1],
    [13, 4, 13, 4],
    [13, 1, 4, 16],
]


class TestMatrix:
    def test_determinant_singular(self, f17):
        assert int(determinant_4x4(SINGULAR, f17)) == 0

    def test_determinant(self, f17):
        assert int(determinant_4x4(TRIANGULAR, f17)) == 15
        assert int(determinant_4x4(SYMMETRIC, f17)) == 1

    def test_adjugate(self, f17):
        assert _ints(adjugate_4x4(SYMMETRIC, f17)) == [
            [13, 13, 13, 4],
            [13, 13, 4, 13],
            [13, 4, 13, 13],
            [4, 13, 13, 13],
        ]

    def test_inverse(self, f17):
        assert _ints(inverse_4x4(VANDERMONDE, f17)) == VANDERMONDE_INVERSE

    def test_inverse_of_singular_raises(self, f17):
        with pytest.raises(NoInverse):
            inverse_4x4(SINGULAR, f17)

    def test_multiply_vector(self, f17):
        result = multiply_4x4_vector(VANDERMONDE_INVERSE, [3, 4, 5, 9], f17)
        assert [int(v) for v in result] == [1, 13, 3, 3]

    def test_wrong_shape(self, f17):
        with pytest.raises(InvalidDegree):
            determinant_4x4([[1, 2], [3, 4]], f17)
        with pytest.raises(InvalidDegree):
            multiply_4x4_vector(VANDERMONDE, [1, 2, 3], f17)


# =====================================================================
# Polynomial
# =====================================================================

class TestPolynomial:
    def test_trim(self, f17):
        assert Polynomial(f17, [1, 2, 0, 17]).coefficients == [1, 2]
        assert Polynomial(f17, []).coefficients == [0]
        assert Polynomial(f17, [0, 0]).degree == 0

    def test_add_pads_shorter(self, f17):
        p = Polynomial(f17, [1, 2, 3]) + Polynomial(f17, [16])
        assert p.coefficients == [0, 2, 3]

    def test_subtract_and_negate(self, f17):
        p = Polynomial(f17, [1, 2])
        assert (p - p).is_zero()
        assert (-p).coefficients == [16, 15]

    def test_scalar(self, f17):
        assert (Polynomial(f17, [1, 2]) * 3).coefficients == [3, 6]
        assert (Polynomial(f17, [1, 2]) * f17(9)).coefficients == [9, 1]

    def test_multiply(self, f17):
        p = Polynomial(f17, [16, 2, 1]) * Polynomial(f17, [6, 14, 2])
        assert p.coefficients == [11, 15, 15, 1, 2]

    def test_divide(self, f17):
        q, r = poly_div(Polynomial(f17, [2, 1, 2]), Polynomial(f17, [3, 1]))
        assert q.coefficients == [12, 2]
        assert r.coefficients == [0]

    def test_divide_reconstructs(self, f17):
        p = Polynomial(f17, [5, 0, 3, 11, 7])
        d = Polynomial(f17, [2, 9, 1])
        q, r = poly_div(p, d)
        assert q * d + r == p
        assert r.degree < d.degree

    def test_divide_by_zero(self, f17):
        with pytest.raises(ValueError):
            poly_div(Polynomial(f17, [1, 1]), Polynomial.zero(f17))

    def test_evaluate(self, f17):
        assert int(Polynomial(f17, [1, 2, 3]).evaluate(2)) == 0

    def test_shift(self, f17):
        # p(4x) for p = 1 + x + x²
        assert Polynomial(f17, [1, 1, 1]).shift(4).coefficients == [1, 4, 16]

    def test_split(self, f17):
        chunks = Polynomial(f17, list(range(1, 8))).split(3)
        assert [c.coefficients for c in chunks] == [[1, 2, 3], [4, 5, 6], [7]]

    def test_vanishing(self, f17):
        zh = Polynomial.vanishing(f17, 4)
        assert zh.coefficients == [16, 0, 0, 0, 1]
        for root in (1, 4, 16, 13):
            assert int(zh.evaluate(root)) == 0

    def test_repr(self, f17):
        assert repr(Polynomial(f17, [1, 0, 3])) == "Poly(1 + 3*x^2)"
        assert repr(Polynomial.zero(f17)) == "Poly(0)"


class TestInterpolate:
    def test_vector(self, f17):
        p = interpolate(f17, [(1, 3), (4, 4), (16, 5), (13, 9)])
        assert p.coefficients == [1, 13, 3, 3]
        assert p.degree == 3

    def test_reconstructs_points(self, f17):
        points = [(2, 7), (5, 0), (9, 16), (11, 4)]
        p = Polynomial.from_points(f17, points)
        for x, y in points:
            assert int(p.evaluate(x)) == y

    def test_requires_four_points(self, f17):
        with pytest.raises(InvalidDegree):
            interpolate(f17, [(1, 3), (4, 4), (16, 5)])
        with pytest.raises(PlonkError):
            interpolate(f17, [(1, 1)] * 5)

    def test_duplicate_x_has_no_inverse(self, f17):
        with pytest.raises(NoInverse):
            interpolate(f17, [(1, 3), (1, 4), (16, 5), (13, 9)])

    def test_lagrange_1(self, f17):
        l1 = lagrange_1_poly(f17, [f17(r) for r in (1, 4, 16, 13)])
        assert [int(l1.evaluate(r)) for r in (1, 4, 16, 13)] == [1, 0, 0, 0]
        assert int(l1.evaluate(5)) == 5


# =====================================================================
# Roots of unity
# =====================================================================

class TestRoots:
    def test_primitive_root(self, f17):
        assert int(get_primitive_root(4, f17)) == 4

    def test_roots_of_unity(self, f17):
        assert [int(r) for r in get_roots_of_unity(4, f17)] == [1, 4, 16, 13]

    def test_cosets(self, f17):
        roots = get_roots_of_unity(4, f17)
        assert [int(v) for v in get_coset(2, roots, f17)] == [2, 8, 15, 9]
        assert [int(v) for v in get_coset(3, roots, f17)] == [3, 12, 14, 5]

    def test_no_root(self, f17):
        with pytest.raises(InvalidDegree):
            get_primitive_root(5, f17)
