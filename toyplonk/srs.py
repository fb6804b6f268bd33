"""
Toy Structured Reference String (SRS)
======================================

KZG 스타일 커밋먼트에 필요한 공개 파라미터를 만든다.

  g1_points = [g1, s·g1, s²·g1, ..., s^(d+2)·g1]     (d + 3 개, 지수는 mod r)
  g2_points = [g2, s·g2]                              (twisted 점)

실제 시스템에서 trapdoor s는 MPC로 만들고 폐기해야 한다.
여기서는 곡선 부분군 위수가 17로 작아 s를 숨길 수 없으므로 공개값으로 둔다.

예시 (s = 2, d = 4, r = 17, g1 = (1, 2)):
  g1_points = [(1,2), (68,74), (65,98), (18,49), (1,99), (68,27), (65,3)]
  g2_points = [(36,31,u), (90,82,u)]
"""

import logging

from toyplonk.ecc import EllipticCurve
from toyplonk.field import PrimeField


logger = logging.getLogger(__name__)


class SRS:
    """Structured Reference String.

    속성:
        ecc: EllipticCurve
        scalar_field: 스칼라 필드 (지수 sⁱ 를 줄이는 위수 r)
        g1: 곡선 생성자
        g2: twisted 생성자 (ExtensionPoint)
        degree: d
        s: toy trapdoor
        g1_points, g2_points: generate_* 호출 후 채워진다
    """

    def __init__(self, ecc, scalar_field, g1, g2, degree, s):
        self.ecc = ecc
        self.scalar_field = scalar_field
        self.g1 = g1
        self.g2 = g2
        self.degree = degree
        self.s = s
        self.g1_points = []
        self.g2_points = []

    @property
    def max_points(self):
        return len(self.g1_points)

    def generate_g1_points(self):
        """g1_points[i] = (sⁱ mod r)·g1,  i = 0..d+2."""
        points = []
        for i in range(self.degree + 3):
            power = self.scalar_field.exponent(self.s, i)
            points.append(self.ecc.multiply(power, self.g1))
        self.g1_points = points
        logger.debug("g1_points = %s", [self.ecc.affine(p) for p in points])
        return points

    def generate_g2_points(self):
        """[g2, s·g2]. s·g2 는 twisted 점의 2배/덧셈으로 만든다 (s mod r)."""
        secret = int(self.scalar_field(self.s))
        if secret == 0:
            raise ValueError(f"trapdoor s는 위수 {self.scalar_field.order}의 배수일 수 없습니다: {self.s}")
        self.g2_points = [self.g2, self.ecc.multiply_extension(secret, self.g2)]
        logger.debug("g2_points = %s", [(int(p.x), int(p.y)) for p in self.g2_points])
        return self.g2_points

    @classmethod
    def from_config(cls, config):
        """설정값으로 SRS를 만들고 두 생성 단계를 모두 실행한다."""
        ecc = EllipticCurve(PrimeField(config.curve_order), config.curve_b)
        scalar_field = PrimeField(config.scalar_order)
        srs = cls(
            ecc,
            scalar_field,
            ecc.point(*config.g1),
            ecc.extension_point(*config.g2, twisted=True),
            config.srs_degree,
            config.srs_secret,
        )
        srs.generate_g1_points()
        srs.generate_g2_points()
        return srs
