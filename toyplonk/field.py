"""
Toy PLONK 기반 모듈: 소수체(Prime Field)와 이차 확장체
========================================================

이 모듈은 toy PLONK 전체에서 사용되는 기본 대수적 도구를 정의한다.

**PrimeField**:
  위수(order)가 작은 유한체. 모든 중간값을 손으로 확인할 수 있도록
  스칼라 필드 F_17, 곡선 기반 필드 F_101 처럼 작은 위수를 사용한다.
  - 정수 API: add, subtract, multiply, divide, exponent, ... → [0, order) 정수
  - 원소 API: field(3) → py_ecc FQ 하위 클래스의 원소 (+, -, *, /, ** 지원)

**ComplexScalar**:
  이차 확장체 F_p[u]/(u² + 2) 의 원소 constant + u_term·u.
  py_ecc의 FQ2를 상속하며, 페어링 결과값이 여기에 속한다.

**역원 정책**:
  py_ecc의 FQ는 0으로 나누면 조용히 0을 돌려준다. toy PLONK에서는
  이런 값이 이후 계산을 오염시키므로 역원이 없으면 NoInverse를 던진다.

사용 예시:
    >>> from toyplonk.field import PrimeField
    >>> f17 = PrimeField(17)
    >>> f17.add(10, 10)        # 3
    >>> x = f17(3)
    >>> x / f17(5)             # 3 · 5⁻¹ mod 17
"""

import functools

from py_ecc.fields.field_elements import FQ, FQ2

from toyplonk.errors import NoInverse


def _inverse(value, order):
    """value의 모듈러 역원. gcd(value, order) != 1 이면 NoInverse."""
    try:
        return pow(value % order, -1, order)
    except ValueError:
        raise NoInverse(f"{value}은(는) 위수 {order}에서 역원이 없습니다") from None


# ─────────────────────────────────────────────────────────────────────
# 소수체 원소 (py_ecc FQ)
# ─────────────────────────────────────────────────────────────────────

class FieldElement(FQ):
    """위수가 정해지지 않은 toy 소수체 원소의 기반 클래스.

    element_class(order)가 field_modulus를 채운 하위 클래스를 만든다.
    나눗셈만 재정의하여 역원이 없을 때 NoInverse를 던진다.
    """

    def __truediv__(self, other):
        on = other.n if isinstance(other, FQ) else other
        return type(self)(self.n * _inverse(on, self.field_modulus))

    def __rtruediv__(self, other):
        return type(self)(other) / self

    def __hash__(self):
        return hash((self.field_modulus, self.n))


@functools.lru_cache(maxsize=None)
def element_class(order):
    """위수 order의 원소 클래스 (위수마다 하나씩 캐시)."""
    return type(f"F{order}", (FieldElement,), {"field_modulus": order})


# ─────────────────────────────────────────────────────────────────────
# 이차 확장체 F_p[u]/(u² + 2)
# ─────────────────────────────────────────────────────────────────────

class ComplexScalar(FQ2):
    """확장체 원소 constant + u_term·u (u² = -2).

    FQ2_MODULUS_COEFFS = (2, 0) 은 u² + 0·u + 2 = 0 을 뜻한다.
    곱셈: (a + bu)(c + du) = (ac - 2bd) + (ad + bc)u

    예시:
        >>> C = PrimeField(101).extension
        >>> z = C([7, 28])
        >>> z.constant, z.u_term   # (7, 28)
    """
    FQ2_MODULUS_COEFFS = (2, 0)

    @property
    def constant(self):
        return int(self.coeffs[0])

    @property
    def u_term(self):
        return int(self.coeffs[1])

    @classmethod
    def u_squared(cls):
        """u² 값 (정수, 여기서는 -2 mod p)."""
        return -cls.FQ2_MODULUS_COEFFS[0] % cls.field_modulus

    def as_tuple(self):
        return (self.constant, self.u_term)

    def __repr__(self):
        return f"{self.constant} + {self.u_term}u"


@functools.lru_cache(maxsize=None)
def extension_class(order):
    """F_order[u]/(u² + 2) 의 원소 클래스."""
    return type(f"F{order}u", (ComplexScalar,), {"field_modulus": order})


# ─────────────────────────────────────────────────────────────────────
# PrimeField
# ─────────────────────────────────────────────────────────────────────

class PrimeField:
    """위수 order 위의 모듈러 산술.

    정수 연산 결과는 항상 [0, order) 범위의 정수이다.
    위수가 소수가 아니어도 생성할 수 있으며 (예: Freivalds의 9999999),
    이 경우 order와 서로소가 아닌 값의 역원은 NoInverse가 된다.

    속성:
        order: 필드 위수
        element: 이 필드의 py_ecc FQ 하위 클래스
        extension: 이 필드 위의 ComplexScalar 하위 클래스
    """

    def __init__(self, order):
        if order < 2:
            raise ValueError(f"필드 위수는 2 이상이어야 합니다: {order}")
        self.order = order
        self.element = element_class(order)
        self.extension = extension_class(order)

    def __call__(self, value):
        """정수 또는 다른 필드의 원소를 이 필드의 원소로 변환한다."""
        return self.element(int(value))

    def __eq__(self, other):
        return isinstance(other, PrimeField) and other.order == self.order

    def __hash__(self):
        return hash(self.order)

    def __repr__(self):
        return f"PrimeField({self.order})"

    def zero(self):
        return self.element(0)

    def one(self):
        return self.element(1)

    def add(self, a, b):
        return int(self(a) + self(b))

    def subtract(self, a, b):
        return int(self(a) - self(b))

    def multiply(self, a, b):
        return int(self(a) * self(b))

    def divide(self, a, b):
        """a / b. b의 역원이 없으면 NoInverse."""
        return int(self(a) / self(b))

    def exponent(self, base, exp):
        """base^exp. exp = 0 이면 1."""
        if exp < 0:
            raise ValueError(f"지수는 0 이상이어야 합니다: {exp}")
        return int(self(base) ** exp)

    def additive_inverse(self, a):
        return int(-self(a))

    def multiplicative_inverse(self, a):
        """a·x ≡ 1 (mod order) 인 x. gcd(a, order) != 1 이면 NoInverse."""
        return _inverse(int(a), self.order)

    def vector_dot(self, u, v):
        """Σ uᵢ·vᵢ mod order."""
        if len(u) != len(v):
            raise ValueError(f"벡터 길이가 다릅니다: {len(u)} != {len(v)}")
        total = self.zero()
        for a, b in zip(u, v):
            total = total + self(a) * self(b)
        return int(total)
