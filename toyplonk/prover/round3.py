"""
PLONK Prover Round 3: 몫 다항식 t(x) 커밋먼트
================================================

  ┌─────────────────────────────────────────────────┐
  │  PublicCoin → Prover: α                        │
  │  Prover → Verifier: [t_lo]₁, [t_mid]₁, [t_hi]₁│
  └─────────────────────────────────────────────────┘

**네 가지 제약 항**:

  (i)   게이트 제약:
        a·b·q_M + a·q_L + b·q_R + c·q_O

  (ii)  순열 분자 (α 배수):
        α·(a + β·x + γ)(b + β·K1·x + γ)(c + β·K2·x + γ)·z(x)

  (iii) 순열 분모 (α 배수, 부호 반전):
        -α·(a + β·S_σ1 + γ)(b + β·S_σ2 + γ)(c + β·S_σ3 + γ)·z(ω·x)

  (iv)  경계 제약 (α² 배수):
        α²·(z(x) - 1)·L₁(x)

  t(x) = [(i) + (ii) + (iii) + (iv)] / Z_H(x)
  나머지가 0이 아니면 witness가 회로를 만족하지 않는다 (CircuitNotSatisfied).

**t(x) 3-분할** (k = n + 2 = 6):
  t(x) = t_lo(x) + x^k·t_mid(x) + x^(2k)·t_hi(x)

예시 (F_17):
  t_lo  = [11, 16, 13, 9, 0, 13]   → (12, 32)
  t_mid = [13, 8, 1, 2, 10, 1]     → (26, 45)
  t_hi  = [15, 6, 16, 2, 7, 11]    → (91, 66)
"""

import logging

from toyplonk.errors import CircuitNotSatisfied
from toyplonk.kzg import commit
from toyplonk.polynomial import Polynomial, lagrange_1_poly, poly_div


logger = logging.getLogger(__name__)


def execute(state):
    """Round 3을 실행한다.

    Args:
        state: ProverState. Round 1, 2의 결과를 읽고 t와 세 분할의 커밋먼트를 기록한다.

    Raises:
        CircuitNotSatisfied: 제약 다항식이 Z_H(x)로 나누어 떨어지지 않을 때
    """
    state.alpha = state.challenges.challenge("alpha")

    field = state.field
    circuit = state.circuit
    polys = circuit.polynomials
    alpha = state.alpha
    beta = state.beta
    gamma = state.gamma
    a, b, c, z = state.a, state.b, state.c, state.z

    x = Polynomial.x(field)
    z_omega = z.shift(circuit.omega)
    l1 = lagrange_1_poly(field, circuit.roots)

    gate = (
        a * b * polys.mul_selector
        + a * polys.left_selector
        + b * polys.right_selector
        + c * polys.output_selector
    )

    permutation_numerator = (
        (a + x * beta + gamma)
        * (b + x * (beta * circuit.k1) + gamma)
        * (c + x * (beta * circuit.k2) + gamma)
        * z
    ) * alpha

    permutation_denominator = (
        (a + polys.left_copy * beta + gamma)
        * (b + polys.right_copy * beta + gamma)
        * (c + polys.output_copy * beta + gamma)
        * z_omega
    ) * alpha

    boundary = (z - 1) * l1 * (alpha * alpha)

    constraint = gate + permutation_numerator - permutation_denominator + boundary

    t, remainder = poly_div(constraint, polys.z_h)
    if not remainder.is_zero():
        raise CircuitNotSatisfied(
            "제약 다항식이 Z_H(x)로 나누어 떨어지지 않습니다. "
            f"witness {circuit.get_witness()}가 회로를 만족하지 않습니다."
        )
    state.t = t

    chunks = t.split(circuit.quotient_chunk_size)
    while len(chunks) < 3:
        chunks.append(Polynomial.zero(field))
    if len(chunks) > 3:
        raise CircuitNotSatisfied(f"t(x)의 차수 {t.degree}가 3분할 범위를 넘습니다")
    state.t_lo, state.t_mid, state.t_hi = chunks

    state.proof.t_lo = commit(state.t_lo, state.srs)
    state.proof.t_mid = commit(state.t_mid, state.srs)
    state.proof.t_hi = commit(state.t_hi, state.srs)

    logger.debug("round3 alpha=%s t=%s", alpha, t)
