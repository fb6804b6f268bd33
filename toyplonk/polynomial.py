"""
Toy PLONK 기반 모듈: 다항식(Polynomial) 클래스
================================================

이 모듈은 toy PLONK에서 사용되는 모든 다항식 연산을 제공한다.

**Polynomial 클래스**:
  계수(coefficient) 표현 기반 다항식. p(x) = c₀ + c₁·x + c₂·x² + ...
  산술 연산자(+, -, *, 스칼라곱)와 평가(evaluation)를 지원한다.
  모든 연산 뒤에 최고차의 0 계수를 제거한다 (영 다항식은 [0], 차수 0).

**다항식 나눗셈 (poly_div)**:
  몫 다항식 t(x) 계산과 열기 증명 W(x), W_z(x) 계산에 필수적이다.

**보간 (interpolate)**:
  정확히 4개의 점에서 Vandermonde 행렬의 역행렬 (matrix.py)로
  3차 이하 다항식을 복원한다. 도메인 크기가 4로 고정된 toy 회로 전용이다.

사용 예시:
    >>> from toyplonk.field import PrimeField
    >>> from toyplonk.polynomial import Polynomial
    >>> f17 = PrimeField(17)
    >>> p = Polynomial(f17, [1, 2, 3])  # 1 + 2x + 3x²
    >>> int(p.evaluate(2))              # 17 mod 17 = 0
"""

from py_ecc.fields.field_elements import FQ

from toyplonk.errors import InvalidDegree
from toyplonk.matrix import SIZE, inverse_4x4, multiply_4x4_vector


# ─────────────────────────────────────────────────────────────────────
# Polynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class Polynomial:
    """PrimeField 위의 다항식.

    계수 리스트로 표현: coeffs = [c₀, c₁, c₂, ...] → c₀ + c₁x + c₂x² + ...

    toy PLONK에서의 역할:
    - 배선(witness) 다항식 a(x), b(x), c(x)
    - 셀렉터 다항식 q_L(x), q_R(x), q_O(x), q_M(x)
    - 복사 제약 다항식 S_σ1(x), S_σ2(x), S_σ3(x)
    - 누적자 z(x), 몫 t(x), 선형화 r(x), 열기 증명 W(x), W_z(x)

    예시:
        >>> p = Polynomial(f17, [1, 2])  # 1 + 2x
        >>> q = Polynomial(f17, [3, 4])  # 3 + 4x
        >>> (p * q).coefficients          # [3, 10, 8]
    """

    def __init__(self, field, coeffs=None):
        """다항식 생성.

        Args:
            field: PrimeField
            coeffs: 정수 또는 필드 원소의 리스트 [c₀, c₁, ...].
                    None이거나 비어 있으면 영 다항식을 생성한다.
        """
        self.field = field
        if not coeffs:
            self.coeffs = [field.zero()]
        else:
            self.coeffs = [field(c) for c in coeffs]
        self._trim()

    def _trim(self):
        """최고차 계수가 0인 항을 제거하여 정규화한다.

        예: [1, 2, 0, 0] → [1, 2]  (1 + 2x)
        """
        while len(self.coeffs) > 1 and self.coeffs[-1].n == 0:
            self.coeffs.pop()

    @property
    def degree(self):
        """다항식의 차수. 영 다항식의 차수는 0으로 정의한다."""
        return len(self.coeffs) - 1

    @property
    def coefficients(self):
        """계수를 정수 리스트로 반환한다."""
        return [int(c) for c in self.coeffs]

    def is_zero(self):
        return len(self.coeffs) == 1 and self.coeffs[0].n == 0

    def evaluate(self, point):
        """다항식을 주어진 점에서 평가한다 (Horner's method).

        p(x) = c₀ + x(c₁ + x(c₂ + ...))

        Args:
            point: 정수 또는 필드 원소

        Returns:
            필드 원소 p(point)
        """
        point = self.field(point)
        result = self.field.zero()
        for coeff in reversed(self.coeffs):
            result = result * point + coeff
        return result

    def _coerce(self, other):
        if isinstance(other, (int, FQ)):
            return Polynomial(self.field, [other])
        return other

    def __add__(self, other):
        """다항식 덧셈: 짧은 쪽을 0으로 채운다."""
        other = self._coerce(other)
        zero = self.field.zero()
        size = max(len(self.coeffs), len(other.coeffs))
        result = []
        for i in range(size):
            a = self.coeffs[i] if i < len(self.coeffs) else zero
            b = other.coeffs[i] if i < len(other.coeffs) else zero
            result.append(a + b)
        return Polynomial(self.field, result)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        return self + (-self._coerce(other))

    def __rsub__(self, other):
        return self._coerce(other) - self

    def __neg__(self):
        """additive inverse: -p(x)."""
        return Polynomial(self.field, [-c for c in self.coeffs])

    def __mul__(self, other):
        """다항식 곱셈 (convolution) 또는 스칼라곱."""
        if isinstance(other, (int, FQ)):
            return self.scale(other)
        result = [self.field.zero()] * (len(self.coeffs) + len(other.coeffs) - 1)
        for i, a in enumerate(self.coeffs):
            for j, b in enumerate(other.coeffs):
                result[i + j] = result[i + j] + a * b
        return Polynomial(self.field, result)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __eq__(self, other):
        if isinstance(other, (int, FQ)):
            other = self._coerce(other)
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.coefficients == other.coefficients

    def __repr__(self):
        terms = []
        for i, c in enumerate(self.coeffs):
            if c.n == 0:
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    def __len__(self):
        """계수 개수 반환 (차수 + 1)."""
        return len(self.coeffs)

    def scale(self, scalar):
        """스칼라곱: scalar · p(x)."""
        scalar = self.field(scalar)
        return Polynomial(self.field, [c * scalar for c in self.coeffs])

    def shift(self, factor):
        """p(factor·x).

        계수 cᵢ → factorⁱ · cᵢ. Round 3의 z(ω·x) 구성에 사용한다.
        """
        factor = self.field(factor)
        power = self.field.one()
        shifted = []
        for coeff in self.coeffs:
            shifted.append(coeff * power)
            power = power * factor
        return Polynomial(self.field, shifted)

    def split(self, chunk):
        """계수를 chunk개씩 끊어 여러 다항식으로 나눈다.

        p(x) = p₀(x) + x^chunk·p₁(x) + x^(2·chunk)·p₂(x) + ...
        """
        return [
            Polynomial(self.field, self.coeffs[start:start + chunk])
            for start in range(0, len(self.coeffs), chunk)
        ]

    @classmethod
    def zero(cls, field):
        return cls(field, [0])

    @classmethod
    def one(cls, field):
        return cls(field, [1])

    @classmethod
    def x(cls, field):
        """항등 다항식 id(x) = x."""
        return cls(field, [0, 1])

    @classmethod
    def linear(cls, field, root):
        """(x - root)."""
        return cls(field, [-field(root), 1])

    @classmethod
    def vanishing(cls, field, n):
        """소거 다항식 Z_H(x) = x^n - 1.

        도메인 H = {1, ω, ..., ω^(n-1)} 의 모든 점에서 0이 된다.
        """
        return cls(field, [-1] + [0] * (n - 1) + [1])

    @classmethod
    def from_points(cls, field, points):
        return interpolate(field, points)


# ─────────────────────────────────────────────────────────────────────
# 다항식 나눗셈 (Polynomial Long Division)
# ─────────────────────────────────────────────────────────────────────

def poly_div(a, b):
    """다항식 나눗셈: a(x) = b(x) · q(x) + r(x).

    긴 나눗셈(long division) 알고리즘으로 몫 q(x)와 나머지 r(x)를 계산한다.
    나머지가 영 다항식이 되거나 차수가 제수보다 작아지면 멈춘다.

    Args:
        a: 피제수 다항식 (Polynomial)
        b: 제수 다항식 (Polynomial)

    Returns:
        tuple: (몫 Polynomial, 나머지 Polynomial)

    Raises:
        ValueError: 제수가 영 다항식인 경우

    예시 (F_17):
        >>> q, r = poly_div(Polynomial(f17, [2, 1, 2]), Polynomial(f17, [3, 1]))
        >>> q.coefficients, r.coefficients   # ([12, 2], [0])
    """
    if b.is_zero():
        raise ValueError("0으로 나눌 수 없습니다")

    field = a.field
    remainder = list(a.coeffs)
    divisor = b.coeffs
    deg_b = len(divisor) - 1
    deg_a = len(remainder) - 1

    if deg_a < deg_b:
        return Polynomial.zero(field), Polynomial(field, remainder)

    quotient = [field.zero()] * (deg_a - deg_b + 1)
    lead_inv = field.one() / divisor[-1]

    for i in range(deg_a - deg_b, -1, -1):
        coeff = remainder[i + deg_b] * lead_inv
        quotient[i] = coeff
        for j in range(deg_b + 1):
            remainder[i + j] = remainder[i + j] - coeff * divisor[j]

    return Polynomial(field, quotient), Polynomial(field, remainder)


# ─────────────────────────────────────────────────────────────────────
# 보간 (Interpolation)
# ─────────────────────────────────────────────────────────────────────

def interpolate(field, points):
    """(x, y) 점 4개를 지나는 3차 이하 다항식을 반환한다.

    V[i][j] = xᵢ^j 인 Vandermonde 행렬을 만들고
    계수 c = V⁻¹ · y 를 계산한다.

    Args:
        field: PrimeField
        points: [(x₀, y₀), ..., (x₃, y₃)]

    Returns:
        Polynomial: p(xᵢ) = yᵢ

    Raises:
        InvalidDegree: 점이 정확히 4개가 아닐 때
        NoInverse: x 좌표가 중복되어 V가 특이 행렬일 때

    예시 (F_17):
        >>> interpolate(f17, [(1, 3), (4, 4), (16, 5), (13, 9)]).coefficients
        [1, 13, 3, 3]
    """
    if len(points) != SIZE:
        raise InvalidDegree(f"보간에는 정확히 {SIZE}개의 점이 필요합니다: {len(points)}")

    vandermonde = []
    for x, _ in points:
        x = field(x)
        vandermonde.append([x ** j for j in range(SIZE)])
    ys = [y for _, y in points]

    coeffs = multiply_4x4_vector(inverse_4x4(vandermonde, field), ys, field)
    return Polynomial(field, coeffs)


def lagrange_1_poly(field, roots):
    """첫 번째 Lagrange 기저 L₁(x).

    L₁(roots[0]) = 1, L₁(roots[i]) = 0 (i > 0).
    경계 제약 (z(x) - 1)·L₁(x) = 0 에서 z(ω⁰) = 1을 강제하는 데 사용한다.
    """
    return interpolate(field, [(root, 1 if i == 0 else 0) for i, root in enumerate(roots)])
