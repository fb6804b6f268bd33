"""
PLONK Prover 라운드별 테스트
==============================

a² + b² = c² (3, 4, 5) 회로로 각 라운드의 다항식, 커밋먼트, 평가값을
손으로 계산한 값과 비교한다.
"""

import pytest

from toyplonk.config import ProtocolConfig
from toyplonk.errors import CircuitNotSatisfied, CircuitStateError
from toyplonk.field import PrimeField
from toyplonk.prover import Proof, Prover, ProverState
from toyplonk.prover import round1, round2
from toyplonk.public_coin import CHALLENGE_ORDER, PublicCoin
from toyplonk.srs import SRS


# ─────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(scope="module")
def config():
    return ProtocolConfig.plonk_by_hand()


@pytest.fixture(scope="module")
def field(config):
    return PrimeField(config.scalar_order)


@pytest.fixture(scope="module")
def srs(config):
    return SRS.from_config(config)


@pytest.fixture(scope="module")
def prover(field, srs, config):
    p = Prover(field, [3, 4, 5], srs, config)
    p.set_public_coin(config.public_coin)
    p.generate_proof()
    return p


@pytest.fixture(scope="module")
def state(prover):
    return prover.state


def _affine(srs, point):
    return srs.ecc.affine(point)


# =====================================================================
# Round 1
# =====================================================================

class TestRound1:
    def test_blinded_wires(self, state):
        assert state.a.coefficients == [14, 6, 3, 3, 4, 7]
        assert state.b.coefficients == [12, 9, 14, 13, 12, 11]
        assert state.c.coefficients == [4, 6, 11, 4, 2, 16]

    def test_blinding_keeps_domain_values(self, state):
        for root, value in zip(state.circuit.roots, state.circuit.get_left_inputs()):
            assert int(state.a.evaluate(root)) == value

    def test_commitments(self, state, srs):
        assert _affine(srs, state.proof.a) == (91, 66)
        assert _affine(srs, state.proof.b) == (26, 45)
        assert _affine(srs, state.proof.c) == (91, 35)


# =====================================================================
# Round 2
# =====================================================================

class TestRound2:
    def test_challenges(self, state):
        assert int(state.beta) == 12
        assert int(state.gamma) == 13

    def test_z_commitment(self, state, srs):
        assert _affine(srs, state.proof.z) == (32, 59)

    def test_z_starts_at_one(self, state):
        assert int(state.z.evaluate(1)) == 1


# =====================================================================
# Round 3
# =====================================================================

class TestRound3:
    def test_quotient(self, state):
        assert state.t.coefficients == [
            11, 16, 13, 9, 0, 13, 13, 8, 1, 2, 10, 1, 15, 6, 16, 2, 7, 11,
        ]

    def test_split(self, state):
        assert state.t_lo.coefficients == [11, 16, 13, 9, 0, 13]
        assert state.t_mid.coefficients == [13, 8, 1, 2, 10, 1]
        assert state.t_hi.coefficients == [15, 6, 16, 2, 7, 11]

    def test_split_commitments(self, state, srs):
        assert _affine(srs, state.proof.t_lo) == (12, 32)
        assert _affine(srs, state.proof.t_mid) == (26, 45)
        assert _affine(srs, state.proof.t_hi) == (91, 66)

    def test_unsatisfied_witness(self, field, srs, config):
        prover = Prover(field, [3, 4, 6], srs, config)
        prover.set_public_coin(config.public_coin)
        with pytest.raises(CircuitNotSatisfied):
            prover.generate_proof()


# =====================================================================
# Round 4
# =====================================================================

class TestRound4:
    def test_openings(self, state):
        proof = state.proof
        assert int(state.zed) == 5
        assert int(proof.a_bar) == 15
        assert int(proof.b_bar) == 13
        assert int(proof.c_bar) == 5
        assert int(proof.left_copy_bar) == 1
        assert int(proof.right_copy_bar) == 12
        assert int(proof.z_bar) == 15
        assert int(state.t_bar) == 1


# =====================================================================
# Round 5
# =====================================================================

class TestRound5:
    def test_linearisation(self, state):
        assert state.r.coefficients == [0, 16, 9, 13, 8, 15, 16]
        assert int(state.proof.r_bar) == 15

    def test_opening_polynomials(self, state):
        assert state.w.coefficients == [16, 13, 2, 9, 3, 5]
        assert state.wz.coefficients == [13, 14, 2, 13, 2, 14]

    def test_opening_commitments(self, state, srs):
        assert _affine(srs, state.proof.w) == (91, 35)
        assert _affine(srs, state.proof.wz) == (65, 98)


# =====================================================================
# Prover / PublicCoin
# =====================================================================

class TestProver:
    def test_proof_fields_filled(self, prover):
        proof = prover.state.build_proof()
        for name in Proof.COMMITMENTS + Proof.OPENINGS:
            assert getattr(proof, name) is not None

    def test_defaults_to_config_coin(self, field, srs, config, prover):
        proof = Prover(field, [3, 4, 5], srs, config).generate_proof()
        assert _affine(srs, proof.w) == _affine(srs, prover.state.proof.w)

    def test_proof_copy_is_independent(self, prover, field):
        proof = prover.state.proof
        other = proof.copy()
        other.a_bar = field(0)
        assert int(proof.a_bar) == 15


class TestChallengeStream:
    def test_order(self, field):
        stream = PublicCoin.plonk_by_hand().challenges(field)
        values = [int(stream.challenge(name)) for name in CHALLENGE_ORDER]
        assert values == [12, 13, 15, 5, 12, 4]

    def test_out_of_order(self, field):
        stream = PublicCoin.plonk_by_hand().challenges(field)
        with pytest.raises(CircuitStateError):
            stream.challenge("alpha")

    def test_exhausted(self, field):
        stream = PublicCoin.plonk_by_hand().challenges(field)
        for name in CHALLENGE_ORDER:
            stream.challenge(name)
        with pytest.raises(CircuitStateError):
            stream.challenge("u")

    def test_blinding(self, field):
        stream = PublicCoin.plonk_by_hand().challenges(field)
        assert [int(b) for b in stream.blinding(1, 2, 9)] == [7, 4, 7]

    def test_round_out_of_order(self, field, srs, prover):
        """Round 2를 다시 실행하면 이미 꺼낸 β를 또 요청하게 된다."""
        circuit = prover.build_circuit()
        state = ProverState(field, circuit, srs, PublicCoin.plonk_by_hand().challenges(field))
        round1.execute(state)
        round2.execute(state)
        with pytest.raises(CircuitStateError):
            round2.execute(state)

    def test_wrong_blinding_count(self):
        with pytest.raises(ValueError):
            PublicCoin(blinding=(1, 2, 3), alpha=1, beta=1, gamma=1, zed=1, v=1, u=1)
