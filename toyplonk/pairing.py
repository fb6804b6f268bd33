"""
Toy 쌍선형 페어링 (Miller loop + 최종 거듭제곱)
================================================

e(Q, P) 를 직선 함수 값의 누적으로 계산한다.

**Miller loop** (r = 17, r - 1 = 16 = 2⁴):
  f ← 1
  m = 1, 2, 4, 8 에 대해:   f ← f² · ℓ(mP, -2mP)(Q)
  마지막 잔여 단계:           f ← f · ℓ(16P, -P)(Q)     (수직선)

**최종 거듭제곱**:
  e(Q, P) = f^((p² - 1) / r),  p = 101 → 지수 600
  F_p 상수는 이 거듭제곱에서 1이 되므로 직선의 스칼라 배수는 결과에 영향이 없다.

참고값 (g1 = (1,2), g2 = (36,31,u)):
  e(g2, g1)   = 7 + 28u
  e(2·g2, g1) = 97 + 89u
"""

import logging


logger = logging.getLogger(__name__)


def extension_exponent(value, exponent):
    """확장체 거듭제곱: 제곱을 반복한 뒤 남은 지수만큼 곱한다.

    exponent = 0 이면 1을 반환한다.
    """
    C = type(value)
    if exponent < 0:
        raise ValueError(f"지수는 0 이상이어야 합니다: {exponent}")
    if exponent == 0:
        return C([1, 0])
    result = value
    power = 1
    while power * 2 <= exponent:
        result = result * result
        power *= 2
    for _ in range(exponent - power):
        result = result * value
    return result


class Pairing:
    """곡선 ecc 위의 위수 r 부분군에 대한 toy 페어링.

    Args:
        ecc: EllipticCurve (기반 필드 F_p)
        order: 부분군 위수 r. r - 1 이 2의 거듭제곱이어야 한다.
    """

    def __init__(self, ecc, order):
        steps = order - 1
        if order < 3 or steps & (steps - 1):
            raise ValueError(f"r - 1이 2의 거듭제곱이어야 합니다: r = {order}")
        p = ecc.field.order
        if (p * p - 1) % order:
            raise ValueError(f"(p² - 1)이 r로 나누어 떨어지지 않습니다: p = {p}, r = {order}")
        self.ecc = ecc
        self.order = order
        self.final_exponent = (p * p - 1) // order

    def _line_value(self, p1, p2, q):
        x_factor, y_factor, constant = self.ecc.get_line_between_points(p1, p2)
        return self.ecc.plug_extension_point_in_equation(q, x_factor, y_factor, constant)

    def miller_loop(self, q, p):
        """최종 거듭제곱 전의 누적값 f."""
        ecc = self.ecc
        f = ecc.field.extension([1, 0])
        current = p
        for _ in range((self.order - 1).bit_length() - 1):
            doubled = ecc.double(current)
            f = f * f * self._line_value(current, ecc.inversion(doubled), q)
            current = doubled
        # (r-1)P + P = O
        return f * self._line_value(current, ecc.inversion(p), q)

    def get_base_pairing(self, q, p):
        """e(q, p) = miller_loop(q, p)^((p² - 1) / r).

        Args:
            q: ExtensionPoint (twisted g2 계열)
            p: 곡선 점 (g1 계열)

        Returns:
            ComplexScalar
        """
        result = extension_exponent(self.miller_loop(q, p), self.final_exponent)
        logger.debug("e(%s, %s) = %r", tuple(q), self.ecc.affine(p), result)
        return result
