"""
KZG 스타일 다항식 커밋먼트
===========================

  C = Σᵢ cᵢ · g1_points[i] = p(s) · g1

SRS의 g1_points에 다항식 계수를 곱하여 선형결합한다.
s를 직접 쓰지 않고 p(s)·g1을 계산하는 것이다.

열기 증명의 몫 (p(x) - p(z)) / (x - z) 는 divide_by_linear로 구한다.

사용 예시:
    >>> C = commit(poly, srs)
    >>> W = divide_by_linear(poly - poly.evaluate(zed), zed)
"""

from toyplonk.polynomial import Polynomial, poly_div


def commit(poly, srs):
    """다항식을 커밋한다.

    Args:
        poly: Polynomial (스칼라 필드 위)
        srs: generate_g1_points가 끝난 SRS

    Returns:
        곡선 점 (항등원이면 None)

    Raises:
        ValueError: 계수 개수가 g1_points 개수를 초과할 때
    """
    if len(poly.coeffs) > srs.max_points:
        raise ValueError(
            f"다항식 차수 {poly.degree}가 SRS 점 개수 {srs.max_points}를 초과합니다"
        )

    result = None
    for coeff, point in zip(poly.coeffs, srs.g1_points):
        if coeff.n == 0:
            continue
        result = srs.ecc.add(result, srs.ecc.multiply(int(coeff), point))
    return result


def divide_by_linear(poly, point):
    """poly / (x - point) 의 몫. 나머지는 버린다.

    poly(point) = 0 이면 나누어 떨어진다 (인수정리).
    """
    quotient, _ = poly_div(poly, Polynomial.linear(poly.field, point))
    return quotient
