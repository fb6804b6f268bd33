"""
프로토콜 설정 (ProtocolConfig)
===============================

필드, 곡선, SRS, 회로 크기, 챌린지를 한곳에 모은 설정 객체.
전역 상수 대신 Prover/Verifier/SRS 생성자에 명시적으로 전달한다.

  scalar_order      = 17          PLONK 스칼라 필드 F_17 (= 곡선 부분군 위수)
  curve_order       = 101         곡선 기반 필드 F_101
  curve_b           = 3           y² = x³ + 3
  gate_count        = 4           도메인 크기 n
  witness_size      = 6
  coset_multipliers = (2, 3)      K1, K2
  g1                = (1, 2)
  g2                = (36, 31)    twisted (y에 u가 곱해짐)
  srs_degree        = 4           g1_points 는 degree + 3 개
  srs_secret        = 2           toy trapdoor s (공개)
"""

from toyplonk.public_coin import PublicCoin


class ProtocolConfig:
    """toy PLONK 인스턴스의 모든 매개변수."""

    def __init__(self, scalar_order, curve_order, curve_b, gate_count, witness_size,
                 coset_multipliers, g1, g2, srs_degree, srs_secret, public_coin):
        self.scalar_order = scalar_order
        self.curve_order = curve_order
        self.curve_b = curve_b
        self.gate_count = gate_count
        self.witness_size = witness_size
        self.coset_multipliers = tuple(coset_multipliers)
        self.g1 = tuple(g1)
        self.g2 = tuple(g2)
        self.srs_degree = srs_degree
        self.srs_secret = srs_secret
        self.public_coin = public_coin

    @classmethod
    def plonk_by_hand(cls):
        return cls(
            scalar_order=17,
            curve_order=101,
            curve_b=3,
            gate_count=4,
            witness_size=6,
            coset_multipliers=(2, 3),
            g1=(1, 2),
            g2=(36, 31),
            srs_degree=4,
            srs_secret=2,
            public_coin=PublicCoin.plonk_by_hand(),
        )

    def to_dict(self):
        return {
            "scalar_order": self.scalar_order,
            "curve_order": self.curve_order,
            "curve_b": self.curve_b,
            "gate_count": self.gate_count,
            "witness_size": self.witness_size,
            "coset_multipliers": list(self.coset_multipliers),
            "g1": list(self.g1),
            "g2": list(self.g2),
            "srs_degree": self.srs_degree,
            "srs_secret": self.srs_secret,
            "public_coin": self.public_coin.to_dict(),
        }
