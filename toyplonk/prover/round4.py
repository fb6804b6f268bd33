"""
PLONK Prover Round 4: 다항식 평가값 산출
==========================================

  ┌─────────────────────────────────────────────────┐
  │  PublicCoin → Prover: ζ                        │
  │  Prover → Verifier: ā, b̄, c̄, s̄_σ1, s̄_σ2, z̄   │
  └─────────────────────────────────────────────────┘

  ā = a(ζ), b̄ = b(ζ), c̄ = c(ζ)
  s̄_σ1 = S_σ1(ζ), s̄_σ2 = S_σ2(ζ)
  t̄ = t(ζ)               (Prover 내부에서 Round 5에 사용)
  z̄ = z(ζ·ω)             (다음 도메인 점에서의 누적자)

예시 (F_17, ζ = 5): ā=15, b̄=13, c̄=5, s̄_σ1=1, s̄_σ2=12, t̄=1, z̄=15
"""

import logging


logger = logging.getLogger(__name__)


def execute(state):
    """Round 4를 실행한다."""
    state.zed = zed = state.challenges.challenge("zed")

    circuit = state.circuit
    polys = circuit.polynomials
    proof = state.proof

    proof.a_bar = state.a.evaluate(zed)
    proof.b_bar = state.b.evaluate(zed)
    proof.c_bar = state.c.evaluate(zed)
    proof.left_copy_bar = polys.left_copy.evaluate(zed)
    proof.right_copy_bar = polys.right_copy.evaluate(zed)
    proof.z_bar = state.z.evaluate(zed * circuit.omega)
    state.t_bar = state.t.evaluate(zed)

    logger.debug(
        "round4 zed=%s a_bar=%s b_bar=%s c_bar=%s s1_bar=%s s2_bar=%s z_bar=%s t_bar=%s",
        zed, proof.a_bar, proof.b_bar, proof.c_bar,
        proof.left_copy_bar, proof.right_copy_bar, proof.z_bar, state.t_bar,
    )
