"""
PLONK Prover Round 1: 배선(Witness) 다항식 커밋먼트
=====================================================

  ┌─────────────────────────────────────────────────┐
  │  Prover → Verifier: [a]₁, [b]₁, [c]₁          │
  │                                                 │
  │  입력:  배선 다항식, Z_H, 블라인딩 b1..b6, SRS    │
  │  출력:  3개의 커밋먼트                          │
  └─────────────────────────────────────────────────┘

**블라인딩**:
  a(x) = (b2 + b1·x)·Z_H(x) + left(x)
  b(x) = (b4 + b3·x)·Z_H(x) + right(x)
  c(x) = (b6 + b5·x)·Z_H(x) + output(x)

  Z_H(ωⁱ) = 0 이므로 도메인 위의 값은 변하지 않는다.

예시 (F_17): a(x) = [14, 6, 3, 3, 4, 7], [a]₁ = (91, 66)

사용:
    이 모듈은 직접 호출하지 않고, Prover.generate_proof()를 통해 실행된다.
"""

import logging

from toyplonk.kzg import commit
from toyplonk.polynomial import Polynomial


logger = logging.getLogger(__name__)


def blind(poly, zh, blinding):
    """poly + (blinding[0] + blinding[1]·x + ...)·Z_H."""
    return poly + Polynomial(poly.field, blinding) * zh


def execute(state):
    """Round 1을 실행한다.

    Args:
        state: ProverState. 회로의 배선 다항식을 읽고 a, b, c와 커밋먼트를 기록한다.
    """
    polys = state.circuit.polynomials
    zh = polys.z_h
    b1, b2, b3, b4, b5, b6 = state.challenges.blinding(1, 2, 3, 4, 5, 6)

    state.a = blind(polys.left, zh, [b2, b1])
    state.b = blind(polys.right, zh, [b4, b3])
    state.c = blind(polys.output, zh, [b6, b5])

    state.proof.a = commit(state.a, state.srs)
    state.proof.b = commit(state.b, state.srs)
    state.proof.c = commit(state.c, state.srs)

    logger.debug("round1 a=%s b=%s c=%s", state.a, state.b, state.c)
