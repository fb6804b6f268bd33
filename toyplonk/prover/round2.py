"""
PLONK Prover Round 2: 순열 누적자 z(x) 커밋먼트
=================================================

  ┌─────────────────────────────────────────────────┐
  │  PublicCoin → Prover: β, γ                     │
  │  Prover → Verifier: [z]₁                       │
  └─────────────────────────────────────────────────┘

  acc(x): 회로가 β, γ로 만든 grand product 누적자 (permutation.py)
  z(x) = (b9 + b8·x + b7·x²)·Z_H(x) + acc(x)

예시 (F_17): [z]₁ = (32, 59)
"""

import logging

from toyplonk.kzg import commit
from toyplonk.prover.round1 import blind


logger = logging.getLogger(__name__)


def execute(state):
    """Round 2를 실행한다.

    Args:
        state: ProverState. β, γ를 꺼내 누적자를 만들고 z와 [z]₁을 기록한다.
    """
    state.beta = state.challenges.challenge("beta")
    state.gamma = state.challenges.challenge("gamma")

    circuit = state.circuit
    circuit.build_accumulator(state.beta, state.gamma)

    b7, b8, b9 = state.challenges.blinding(7, 8, 9)
    state.z = blind(circuit.polynomials.acc, circuit.polynomials.z_h, [b9, b8, b7])
    state.proof.z = commit(state.z, state.srs)

    logger.debug("round2 beta=%s gamma=%s z=%s", state.beta, state.gamma, state.z)
