"""
PLONK Prover: 5-라운드 프로토콜 오케스트레이터
=================================================

toy PLONK 증명 생성의 전체 흐름을 관리한다.
블라인딩 스칼라와 챌린지는 PublicCoin에서 프로토콜 순서대로 꺼낸다.

  ┌─────────────────────────────────────────────────────┐
  │  Round 1: 블라인딩된 배선 다항식 커밋                 │
  │  Prover → Verifier: [a]₁, [b]₁, [c]₁              │
  ├─────────────────────────────────────────────────────┤
  │  Round 2: 순열 누적자 z(x) 커밋                     │
  │  PublicCoin → Prover: β, γ                         │
  │  Prover → Verifier: [z]₁                           │
  ├─────────────────────────────────────────────────────┤
  │  Round 3: 몫 다항식 t(x) 커밋                       │
  │  PublicCoin → Prover: α                            │
  │  Prover → Verifier: [t_lo]₁, [t_mid]₁, [t_hi]₁    │
  ├─────────────────────────────────────────────────────┤
  │  Round 4: 다항식 평가값 산출                         │
  │  PublicCoin → Prover: ζ                            │
  │  Prover → Verifier: ā, b̄, c̄, s̄_σ1, s̄_σ2, z̄_ω    │
  ├─────────────────────────────────────────────────────┤
  │  Round 5: 선형화 + 열기 증명                         │
  │  PublicCoin → Prover: v                            │
  │  Prover → Verifier: r̄, [W]₁, [W_z]₁               │
  └─────────────────────────────────────────────────────┘

사용 예시:
    >>> config = ProtocolConfig.plonk_by_hand()
    >>> srs = SRS.from_config(config)
    >>> prover = Prover(PrimeField(17), [3, 4, 5], srs, config)
    >>> prover.set_public_coin(config.public_coin)
    >>> proof = prover.generate_proof()
"""

import logging

from toyplonk.circuit import pythagorean_circuit
from toyplonk.config import ProtocolConfig
from toyplonk.prover import round1, round2, round3, round4, round5


logger = logging.getLogger(__name__)


class Proof:
    """PLONK 증명 데이터 컨테이너.

    커밋먼트 (곡선 점 9개):
        a, b, c          Round 1
        z                Round 2
        t_lo, t_mid, t_hi  Round 3
        w, wz            Round 5

    평가값 (스칼라 필드 원소 7개):
        a_bar, b_bar, c_bar            a(ζ), b(ζ), c(ζ)
        left_copy_bar, right_copy_bar  S_σ1(ζ), S_σ2(ζ)
        r_bar                          r(ζ)
        z_bar                          z(ζ·ω)
    """

    COMMITMENTS = ("a", "b", "c", "z", "t_lo", "t_mid", "t_hi", "w", "wz")
    OPENINGS = ("a_bar", "b_bar", "c_bar", "left_copy_bar", "right_copy_bar", "r_bar", "z_bar")

    def __init__(self):
        for name in self.COMMITMENTS + self.OPENINGS:
            setattr(self, name, None)

    def copy(self):
        other = Proof()
        for name in self.COMMITMENTS + self.OPENINGS:
            setattr(other, name, getattr(self, name))
        return other

    def __repr__(self):
        return f"Proof(a={self.a!r}, ..., z_bar={self.z_bar!r})"


class ProverState:
    """라운드 간 공유되는 Prover 상태.

    각 라운드의 execute(state)는 이 객체를 읽고 결과를 기록한다.

    속성 (입력):
        field, circuit, srs, challenges (ChallengeStream)

    속성 (라운드 간 생성):
        a, b, c          블라인딩된 배선 다항식 (Round 1)
        z                블라인딩된 누적자 (Round 2)
        t, t_lo, t_mid, t_hi  몫 다항식과 분할 (Round 3)
        t_bar            t(ζ) (Round 4)
        r, w, wz         선형화와 열기 다항식 (Round 5)
        beta, gamma, alpha, zed, v  챌린지

    속성 (출력):
        proof: Proof
    """

    def __init__(self, field, circuit, srs, challenges):
        self.field = field
        self.circuit = circuit
        self.srs = srs
        self.challenges = challenges

        self.a = None
        self.b = None
        self.c = None
        self.z = None
        self.t = None
        self.t_lo = None
        self.t_mid = None
        self.t_hi = None
        self.t_bar = None
        self.r = None
        self.w = None
        self.wz = None

        self.beta = None
        self.gamma = None
        self.alpha = None
        self.zed = None
        self.v = None

        self.proof = Proof()

    def build_proof(self):
        """최종 증명 객체를 반환한다."""
        return self.proof


class Prover:
    """피타고라스 회로의 증명자.

    Args:
        field: 스칼라 필드 (F_17)
        inputs: (a, b, c)
        srs: 생성이 끝난 SRS
        config: ProtocolConfig (없으면 plonk_by_hand)
    """

    def __init__(self, field, inputs, srs, config=None):
        self.field = field
        self.inputs = tuple(inputs)
        self.srs = srs
        self.config = config or ProtocolConfig.plonk_by_hand()
        self.public_coin = None
        self.state = None

    def set_public_coin(self, public_coin):
        self.public_coin = public_coin

    def build_circuit(self):
        """이 Prover 전용 회로를 만든다 (누적자를 소유하므로 공유하지 않는다)."""
        circuit = pythagorean_circuit(self.field, self.inputs, self.config)
        circuit.compute_witness()
        circuit.build_polynomials_with_input()
        circuit.build_polynomials()
        return circuit

    def generate_proof(self):
        """5-라운드 프로토콜을 실행하여 증명을 생성한다.

        Returns:
            Proof

        Raises:
            CircuitNotSatisfied: witness가 회로를 만족하지 않을 때 (Round 3)
        """
        coin = self.public_coin or self.config.public_coin
        self.state = state = ProverState(
            self.field, self.build_circuit(), self.srs, coin.challenges(self.field)
        )

        round1.execute(state)
        round2.execute(state)
        round3.execute(state)
        round4.execute(state)
        round5.execute(state)

        logger.info("proof generated for inputs %s", self.inputs)
        return state.build_proof()
