"""
Crypto module tests: ecc.py, pairing.py, srs.py, kzg.py, freivalds.py
"""
import pytest

from toyplonk.config import ProtocolConfig
from toyplonk.ecc import EllipticCurve
from toyplonk.field import PrimeField
from toyplonk.freivalds import Freivalds, ReedSolomon
from toyplonk.kzg import commit, divide_by_linear
from toyplonk.pairing import Pairing, extension_exponent
from toyplonk.polynomial import Polynomial
from toyplonk.srs import SRS


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def ecc():
    return EllipticCurve(PrimeField(101))


@pytest.fixture(scope="module")
def g1(ecc):
    return ecc.point(1, 2)


@pytest.fixture(scope="module")
def srs():
    return SRS.from_config(ProtocolConfig.plonk_by_hand())


@pytest.fixture(scope="module")
def f17():
    return PrimeField(17)


# =====================================================================
# EllipticCurve
# =====================================================================

class TestCurve:
    def test_double(self, ecc, g1):
        assert ecc.affine(ecc.double(g1)) == (68, 74)

    def test_double_equals_add(self, ecc, g1):
        assert ecc.equals(ecc.add(g1, g1), ecc.double(g1))
        assert ecc.equals(ecc.multiply(2, g1), ecc.double(g1))

    def test_multiply(self, ecc, g1):
        assert ecc.affine(ecc.multiply(16, g1)) == (1, 99)

    def test_subgroup_order(self, ecc, g1):
        assert ecc.multiply(17, g1) is None
        assert ecc.multiply(0, g1) is None

    def test_negative_multiply(self, ecc, g1):
        assert ecc.affine(ecc.multiply(-1, g1)) == (1, 99)

    def test_identity(self, ecc, g1):
        assert ecc.add(None, g1) is g1
        assert ecc.add(g1, None) is g1
        assert ecc.add(g1, ecc.inversion(g1)) is None
        assert ecc.double(None) is None
        assert ecc.affine(None) is None

    def test_subtract(self, ecc, g1):
        three = ecc.multiply(3, g1)
        assert ecc.equals(ecc.subtract(three, g1), ecc.multiply(2, g1))

    def test_on_curve(self, ecc, g1):
        assert ecc.is_on_curve(g1)
        assert ecc.is_on_curve(None)
        assert not ecc.is_on_curve(ecc.point(1, 3))
        for k in range(1, 17):
            assert ecc.is_on_curve(ecc.multiply(k, g1))

    def test_double_extension(self, ecc):
        doubled = ecc.double_extension(ecc.extension_point(36, 31))
        assert (int(doubled.x), int(doubled.y), doubled.twisted) == (90, 82, True)

    def test_order_two_point(self, ecc):
        # 48³ + 3 ≡ 0 (mod 101)
        p = ecc.point(48, 0)
        assert ecc.is_on_curve(p)
        assert ecc.double(p) is None
        assert ecc.multiply(2, p) is None
        assert ecc.equals(ecc.multiply(3, p), p)
        assert not ecc.in_subgroup(p, 17)

    def test_in_subgroup(self, ecc, g1):
        assert ecc.in_subgroup(g1, 17)
        assert ecc.in_subgroup(None, 17)
        outside = ecc.point(3, 38)
        assert ecc.is_on_curve(outside)
        assert not ecc.in_subgroup(outside, 17)
        assert ecc.get_generator_multiple(outside, g1, 17) == 0

    def test_add_extension(self, ecc):
        g2 = ecc.extension_point(36, 31)
        total = ecc.add_extension(ecc.double_extension(g2), g2)
        assert (int(total.x), int(total.y), total.twisted) == (10, 16, True)
        assert ecc.add_extension(g2, None) is g2

    def test_multiply_extension(self, ecc):
        g2 = ecc.extension_point(36, 31)
        assert tuple(map(int, ecc.multiply_extension(2, g2)[:2])) == (90, 82)
        assert tuple(map(int, ecc.multiply_extension(3, g2)[:2])) == (10, 16)
        assert ecc.multiply_extension(0, g2) is None

    def test_double_extension_untwisted(self, ecc):
        doubled = ecc.double_extension(ecc.extension_point(1, 2, twisted=False))
        assert (int(doubled.x), int(doubled.y), doubled.twisted) == (68, 74, False)

    def test_generator_multiple(self, ecc, g1):
        assert ecc.get_generator_multiple(ecc.multiply(5, g1), g1, 17) == 5
        assert ecc.get_generator_multiple(None, g1, 17) == 0


class TestLines:
    @pytest.mark.parametrize("p1, p2, expected", [
        ((1, 2), (68, 27), (25, 34, 8)),
        ((68, 74), (65, 3), (30, 3, 61)),
        ((65, 98), (18, 52), (55, 47, 0)),
        ((18, 49), (1, 2), (54, 17, 13)),
    ])
    def test_line_between_points(self, ecc, p1, p2, expected):
        line = ecc.get_line_between_points(ecc.point(*p1), ecc.point(*p2))
        assert tuple(int(v) for v in line) == expected

    def test_vertical_line(self, ecc):
        line = ecc.get_line_between_points(ecc.point(1, 2), ecc.point(1, 99))
        assert tuple(int(v) for v in line) == (1, 0, 100)

    def test_line_through_identity(self, ecc, g1):
        with pytest.raises(ValueError):
            ecc.get_line_between_points(g1, None)

    def test_plug_twisted_point(self, ecc):
        q = ecc.extension_point(36, 31)
        value = ecc.plug_extension_point_in_equation(q, ecc.field(1), ecc.field(1), ecc.field(0))
        assert value.as_tuple() == (36, 31)


# =====================================================================
# Pairing
# =====================================================================

class TestPairing:
    def test_final_exponent(self, ecc):
        assert Pairing(ecc, 17).final_exponent == 600

    def test_rejects_bad_order(self, ecc):
        with pytest.raises(ValueError):
            Pairing(ecc, 13)

    def test_base_pairing(self, srs):
        pairing = Pairing(srs.ecc, 17)
        g1 = srs.g1_points[0]
        assert pairing.get_base_pairing(srs.g2_points[0], g1).as_tuple() == (7, 28)
        assert pairing.get_base_pairing(srs.g2_points[1], g1).as_tuple() == (97, 89)

    def test_bilinear(self, srs):
        # e(2·g2, g1) == e(g2, 2·g1)
        pairing = Pairing(srs.ecc, 17)
        lhs = pairing.get_base_pairing(srs.g2_points[1], srs.g1_points[0])
        rhs = pairing.get_base_pairing(srs.g2_points[0], srs.ecc.multiply(2, srs.g1_points[0]))
        assert lhs.as_tuple() == rhs.as_tuple()

    def test_result_has_order_17(self, srs):
        pairing = Pairing(srs.ecc, 17)
        value = pairing.get_base_pairing(srs.g2_points[0], srs.g1_points[0])
        assert extension_exponent(value, 17).as_tuple() == (1, 0)

    def test_extension_exponent(self):
        C = PrimeField(101).extension
        z = C([7, 28])
        assert extension_exponent(z, 0).as_tuple() == (1, 0)
        assert extension_exponent(z, 1).as_tuple() == (7, 28)
        assert extension_exponent(z, 5).as_tuple() == (z * z * z * z * z).as_tuple()


# =====================================================================
# SRS / KZG
# =====================================================================

class TestSRS:
    def test_g1_points(self, srs):
        assert [srs.ecc.affine(p) for p in srs.g1_points] == [
            (1, 2), (68, 74), (65, 98), (18, 49), (1, 99), (68, 27), (65, 3),
        ]
        assert srs.max_points == 7

    def test_g2_points(self, srs):
        assert [(int(p.x), int(p.y)) for p in srs.g2_points] == [(36, 31), (90, 82)]

    def test_g2_points_follow_secret(self):
        config = ProtocolConfig.plonk_by_hand()
        config.srs_secret = 3
        srs3 = SRS.from_config(config)
        assert srs3.ecc.affine(srs3.g1_points[1]) == srs3.ecc.affine(srs3.ecc.multiply(3, srs3.g1))
        assert (int(srs3.g2_points[1].x), int(srs3.g2_points[1].y)) == (10, 16)

        pairing = Pairing(srs3.ecc, 17)
        g2, s_g2 = srs3.g2_points
        lhs = pairing.get_base_pairing(s_g2, srs3.g1)
        rhs = extension_exponent(pairing.get_base_pairing(g2, srs3.g1), 3)
        assert lhs.as_tuple() == rhs.as_tuple()

    def test_zero_secret(self):
        config = ProtocolConfig.plonk_by_hand()
        config.srs_secret = 17
        with pytest.raises(ValueError):
            SRS.from_config(config)


class TestKZG:
    def test_commit_constant(self, srs, f17):
        assert srs.ecc.affine(commit(Polynomial(f17, [1]), srs)) == (1, 2)

    def test_commit_is_evaluation_at_s(self, srs, f17):
        # p(x) = 3 + x², p(2) = 7
        p = Polynomial(f17, [3, 0, 1])
        assert srs.ecc.equals(commit(p, srs), srs.ecc.multiply(7, srs.g1))

    def test_commit_zero_is_identity(self, srs, f17):
        assert commit(Polynomial.zero(f17), srs) is None

    def test_commit_too_long(self, srs, f17):
        with pytest.raises(ValueError):
            commit(Polynomial(f17, [1] * 8), srs)

    def test_divide_by_linear(self, f17):
        p = Polynomial(f17, [2, 1, 2])
        quotient = divide_by_linear(p - p.evaluate(5), 5)
        assert quotient * Polynomial.linear(f17, 5) == p - p.evaluate(5)


# =====================================================================
# Freivalds
# =====================================================================

class TestFreivalds:
    A = [[1, 2], [3, 4]]
    B = [[2, 3], [4, 5]]

    @pytest.fixture
    def freivalds(self):
        return Freivalds(ReedSolomon(PrimeField(9999999)))

    def test_correct_product(self, freivalds):
        assert freivalds.verify(self.A, self.B, [[10, 13], [22, 29]], 13)

    def test_wrong_product(self, freivalds):
        assert not freivalds.verify(self.A, self.B, [[10, 13], [22, 30]], 13)

    def test_fingerprint(self):
        reed = ReedSolomon(PrimeField(17))
        # 1 + 2·3 + 3·9
        assert reed.fingerprint([1, 2, 3], 3) == 34 % 17
