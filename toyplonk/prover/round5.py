"""
PLONK Prover Round 5: 선형화 + 열기 증명
==========================================

  ┌─────────────────────────────────────────────────┐
  │  PublicCoin → Prover: v                        │
  │  Prover → Verifier: r̄, [W]₁, [W_z]₁           │
  └─────────────────────────────────────────────────┘

**선형화 다항식 r(x)**:
  Round 4의 평가값을 대입하여 다항식의 곱을 "스칼라 × 다항식"으로 바꾼다.

  r(x) = q_M(x)·ā·b̄ + q_L(x)·ā + q_R(x)·b̄ + q_O(x)·c̄
       + z(x)·α·(ā + βζ + γ)(b̄ + β·K1·ζ + γ)(c̄ + β·K2·ζ + γ)
       - S_σ3(x)·α·(ā + β·s̄_σ1 + γ)(b̄ + β·s̄_σ2 + γ)·β·z̄
       + z(x)·α²·L₁(ζ)

**일괄 열기 증명**:
  W(x)   = [t_lo + ζ^k·t_mid + ζ^(2k)·t_hi - t̄
            + v(r - r̄) + v²(a - ā) + v³(b - b̄) + v⁴(c - c̄)
            + v⁵(S_σ1 - s̄_σ1) + v⁶(S_σ2 - s̄_σ2)] / (x - ζ)
  W_z(x) = (z(x) - z̄) / (x - ζω)

예시 (F_17):
  r   = [0, 16, 9, 13, 8, 15, 16],   r̄ = 15
  W   = [16, 13, 2, 9, 3, 5]   → (91, 35)
  W_z = [13, 14, 2, 13, 2, 14] → (65, 98)
"""

import logging

from toyplonk.kzg import commit, divide_by_linear
from toyplonk.polynomial import lagrange_1_poly


logger = logging.getLogger(__name__)


def linearisation(state):
    """r(x)를 만든다."""
    circuit = state.circuit
    polys = circuit.polynomials
    proof = state.proof
    alpha, beta, gamma, zed = state.alpha, state.beta, state.gamma, state.zed
    a_bar, b_bar, c_bar = proof.a_bar, proof.b_bar, proof.c_bar

    l1_zed = lagrange_1_poly(state.field, circuit.roots).evaluate(zed)

    gate = (
        polys.mul_selector * (a_bar * b_bar)
        + polys.left_selector * a_bar
        + polys.right_selector * b_bar
        + polys.output_selector * c_bar
    )

    permutation_z = state.z * (
        alpha
        * (a_bar + beta * zed + gamma)
        * (b_bar + beta * circuit.k1 * zed + gamma)
        * (c_bar + beta * circuit.k2 * zed + gamma)
    )

    permutation_s3 = polys.output_copy * (
        alpha
        * (a_bar + beta * proof.left_copy_bar + gamma)
        * (b_bar + beta * proof.right_copy_bar + gamma)
        * beta
        * proof.z_bar
    )

    boundary = state.z * (alpha * alpha * l1_zed)

    return gate + permutation_z - permutation_s3 + boundary


def execute(state):
    """Round 5를 실행한다.

    Args:
        state: ProverState. Round 1~4의 결과를 읽고 r̄, [W]₁, [W_z]₁를 기록한다.
    """
    state.v = v = state.challenges.challenge("v")
    zed = state.zed
    circuit = state.circuit
    polys = circuit.polynomials
    proof = state.proof

    state.r = linearisation(state)
    proof.r_bar = state.r.evaluate(zed)

    k = circuit.quotient_chunk_size
    zed_k = zed ** k
    numerator = (
        state.t_lo + state.t_mid * zed_k + state.t_hi * (zed_k * zed_k) - state.t_bar
    )

    openings = [
        (state.r, proof.r_bar),
        (state.a, proof.a_bar),
        (state.b, proof.b_bar),
        (state.c, proof.c_bar),
        (polys.left_copy, proof.left_copy_bar),
        (polys.right_copy, proof.right_copy_bar),
    ]
    v_power = v
    for poly, value in openings:
        numerator = numerator + (poly - value) * v_power
        v_power = v_power * v

    state.w = divide_by_linear(numerator, zed)
    state.wz = divide_by_linear(state.z - proof.z_bar, zed * circuit.omega)

    proof.w = commit(state.w, state.srs)
    proof.wz = commit(state.wz, state.srs)

    logger.debug("round5 v=%s r=%s r_bar=%s W=%s Wz=%s", v, state.r, proof.r_bar, state.w, state.wz)
