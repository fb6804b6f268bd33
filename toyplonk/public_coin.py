"""
PublicCoin: 검증자 챌린지와 블라인딩 스칼라
=============================================

실제 PLONK에서는 각 챌린지가 지금까지의 커밋먼트를 해시한 트랜스크립트에서
나온다 (Fiat-Shamir). toy 구현에서는 손으로 계산한 예제와 값을 맞추기 위해
고정값을 쓰되, 챌린지를 꺼내는 순서는 프로토콜 단계 순서로 강제한다.

  β, γ  ← 배선 커밋먼트 [a], [b], [c] 이후     (Round 2)
  α     ← 누적자 커밋먼트 [z] 이후             (Round 3)
  ζ     ← 몫 분할 커밋먼트 이후                (Round 4)
  v     ← 평가값 공개 이후                     (Round 5)
  u     ← [W], [W_z] 이후                     (Verifier)

블라인딩 스칼라 b1..b9:
  a(x): (b2 + b1·x)·Z_H      b(x): (b4 + b3·x)·Z_H      c(x): (b6 + b5·x)·Z_H
  z(x): (b9 + b8·x + b7·x²)·Z_H
"""

from toyplonk.errors import CircuitStateError


CHALLENGE_ORDER = ("beta", "gamma", "alpha", "zed", "v", "u")


class PublicCoin:
    """고정 블라인딩 스칼라 9개와 챌린지 6개."""

    def __init__(self, blinding, alpha, beta, gamma, zed, v, u):
        if len(blinding) != 9:
            raise ValueError(f"블라인딩 스칼라는 9개여야 합니다: {len(blinding)}")
        self.blinding = tuple(blinding)
        self.alpha = alpha
        self.beta = beta
        self.gamma = gamma
        self.zed = zed
        self.v = v
        self.u = u

    def b(self, index):
        """b1..b9 (1부터 시작)."""
        return self.blinding[index - 1]

    def challenges(self, field):
        """프로토콜 순서를 강제하는 챌린지 스트림을 새로 만든다."""
        return ChallengeStream(self, field)

    def to_dict(self):
        data = {f"b{i + 1}": value for i, value in enumerate(self.blinding)}
        data.update({name: getattr(self, name) for name in CHALLENGE_ORDER})
        return data

    @classmethod
    def plonk_by_hand(cls):
        """손으로 계산한 예제의 값."""
        return cls(
            blinding=(7, 4, 11, 12, 16, 2, 14, 11, 7),
            alpha=15,
            beta=12,
            gamma=13,
            zed=5,
            v=12,
            u=4,
        )


class ChallengeStream:
    """PublicCoin의 챌린지를 정해진 순서대로만 꺼낸다.

    Prover와 Verifier는 각자 자신의 스트림을 가진다.
    """

    def __init__(self, coin, field):
        self.coin = coin
        self.field = field
        self._position = 0

    def challenge(self, name):
        """다음 챌린지를 꺼낸다.

        Raises:
            CircuitStateError: name이 다음 순서의 챌린지가 아닐 때
        """
        if self._position >= len(CHALLENGE_ORDER) or CHALLENGE_ORDER[self._position] != name:
            expected = CHALLENGE_ORDER[self._position] if self._position < len(CHALLENGE_ORDER) else None
            raise CircuitStateError(f"챌린지 순서 오류: {name} 요청, 다음 순서는 {expected}")
        self._position += 1
        return self.field(getattr(self.coin, name))

    def blinding(self, *indices):
        return [self.field(self.coin.b(i)) for i in indices]
