"""
단위근(Roots of Unity)과 코셋(Coset)
=====================================

평가 도메인 H = {1, ω, ω², ..., ω^(n-1)} 과 순열 인자에 쓰이는
두 코셋 K1·H, K2·H 를 만든다.

F_17, n = 4 의 경우:
  ω = 4 (가장 작은 4차 원시 단위근)
  H      = [1, 4, 16, 13]
  2·H    = [2, 8, 15, 9]
  3·H    = [3, 12, 14, 5]
"""

from toyplonk.errors import InvalidDegree


def get_primitive_root(n, field):
    """가장 작은 n차 원시 단위근 ω (ω^n = 1, 0 < k < n 에서 ω^k ≠ 1).

    Raises:
        InvalidDegree: n이 order - 1을 나누지 않거나 원시 단위근이 없을 때
    """
    if n < 1 or (field.order - 1) % n != 0:
        raise InvalidDegree(f"F_{field.order}에는 {n}차 원시 단위근이 없습니다")
    for candidate in range(1, field.order):
        omega = field(candidate)
        if (omega ** n).n != 1:
            continue
        if all((omega ** k).n != 1 for k in range(1, n)):
            return omega
    raise InvalidDegree(f"F_{field.order}에는 {n}차 원시 단위근이 없습니다")


def get_roots_of_unity(n, field):
    """[ω⁰, ω¹, ..., ω^(n-1)] (필드 원소 리스트)."""
    omega = get_primitive_root(n, field)
    roots = []
    current = field.one()
    for _ in range(n):
        roots.append(current)
        current = current * omega
    return roots


def get_coset(k, roots, field):
    """k·H = [k·ω⁰, k·ω¹, ...]."""
    k = field(k)
    return [k * root for root in roots]
