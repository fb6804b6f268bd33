"""
타원곡선 군 연산 (y² = x³ + 3)
================================

KZG 커밋먼트와 페어링에 필요한 곡선 연산을 정의한다.
덧셈/2배/스칼라 곱은 같은 곡선식을 쓰는 py_ecc.bn128 의 함수에 F_101 좌표를 넘긴다.

**곡선 점(CurvePoint)**:
  기반 필드 원소 튜플 (x, y). 항등원(무한원점)은 py_ecc와 같이 None 이다.
  좌표로 표현되는 특수값(sentinel)을 쓰지 않으므로 실제 점과 충돌하지 않는다.

**확장 곡선 점(ExtensionPoint)**:
  (x, y, twisted). twisted=True 이면 y 좌표에 확장체 생성자 u가
  암묵적으로 곱해져 있다 (실제 점은 (x, y·u), u² = -2).
  페어링의 두 번째 인자 g2가 여기에 속한다.

**직선 함수**:
  Miller loop는 두 점을 지나는 직선 x_factor·x + y_factor·y + constant = 0
  을 확장 점에서 평가한 값(ComplexScalar)을 누적한다.

사용 예시:
    >>> from toyplonk.field import PrimeField
    >>> ecc = EllipticCurve(PrimeField(101))
    >>> g1 = ecc.point(1, 2)
    >>> ecc.affine(ecc.double(g1))          # (68, 74)
    >>> ecc.affine(ecc.multiply(16, g1))    # (1, 99)
"""

from collections import namedtuple

from py_ecc import bn128


ExtensionPoint = namedtuple("ExtensionPoint", ["x", "y", "twisted"])


class EllipticCurve:
    """짧은 바이어슈트라스 곡선 y² = x³ + b (기본 b = 3).

    속성:
        field: 좌표가 속한 기반 필드 (PrimeField)
        b: 곡선 상수
    """

    def __init__(self, field, b=3):
        self.field = field
        self.b = field(b)

    def __repr__(self):
        return f"EllipticCurve(y^2 = x^3 + {int(self.b)} over F_{self.field.order})"

    # ─── 점 생성/변환 ───

    def point(self, x, y):
        """정수 좌표로 곡선 점을 만든다 (곡선 위인지는 확인하지 않음)."""
        return (self.field(x), self.field(y))

    def extension_point(self, x, y, twisted=True):
        return ExtensionPoint(self.field(x), self.field(y), twisted)

    @staticmethod
    def affine(point):
        """점 → (int, int), 항등원 → None."""
        if point is None:
            return None
        return (int(point[0]), int(point[1]))

    @staticmethod
    def equals(p1, p2):
        if p1 is None or p2 is None:
            return p1 is None and p2 is None
        return p1[0].n == p2[0].n and p1[1].n == p2[1].n

    def is_on_curve(self, point):
        """y² == x³ + b ? (항등원은 곡선 위로 본다)."""
        return bn128.is_on_curve(point, self.b)

    def in_subgroup(self, point, order):
        """order·point 가 항등원인지 (위수 order 부분군 소속) 확인한다."""
        return self.multiply(order, point) is None

    # ─── 군 연산 (py_ecc.bn128 위임) ───
    #
    # bn128 의 곡선 함수는 좌표 타입에 무관하므로 F_101 원소를 그대로 넘긴다.
    # y = 0 인 점(위수 2)만 접선 기울기의 분모가 0이 되어 따로 처리한다.

    def add(self, p1, p2):
        """p1 + p2. 같은 점이면 double, p2 = -p1 이면 항등원."""
        if p1 is not None and p2 is not None and self.equals(p1, p2):
            return self.double(p1)
        return bn128.add(p1, p2)

    def double(self, point):
        """2·point. y = 0 이면 위수 2인 점이므로 항등원."""
        if point is not None and point[1].n == 0:
            return None
        return bn128.double(point)

    def double_extension(self, point):
        """확장 점의 2배.

        twisted 점 (x, y·u) 에서 기울기는 M = m/u = m·u·(1/u²) 이므로
        기울기를 제곱하는 곳에만 보정 계수 1/u² = 1/(-2) 가 붙는다:
            m      = 3x² / (2y)
            m_sq   = m² · u_factor
            x'     = m_sq - 2x
            y'     = m·(3x - m_sq)·u_factor - y     (역시 u가 곱해진 값)

        예시 (F_101): (36, 31, u) → (90, 82, u)
        """
        if point is None:
            return None
        if not point.twisted:
            doubled = self.double((point.x, point.y))
            if doubled is None:
                return None
            return ExtensionPoint(doubled[0], doubled[1], False)

        x, y = point.x, point.y
        if y.n == 0:
            return None
        u_factor = self.field.one() / self.field(self.field.extension.u_squared())
        m = (3 * x * x) / (2 * y)
        m_sq = m * m * u_factor
        new_x = m_sq - 2 * x
        new_y = m * (3 * x - m_sq) * u_factor - y
        return ExtensionPoint(new_x, new_y, True)

    def add_extension(self, p1, p2):
        """twisted 점의 덧셈.

        (x₁, y₁·u) + (x₂, y₂·u) 의 기울기는 m·u (m = (y₂ - y₁)/(x₂ - x₁)) 이므로
            x' = m²·u² - x₁ - x₂
            y' = m·(x₁ - x') - y₁              (u가 곱해진 값)

        예시 (F_101): (90, 82, u) + (36, 31, u) → (10, 16, u)
        """
        if p1 is None:
            return p2
        if p2 is None:
            return p1
        if p1.x.n == p2.x.n:
            if p1.y.n == p2.y.n:
                return self.double_extension(p1)
            return None
        m = (p2.y - p1.y) / (p2.x - p1.x)
        new_x = m * m * self.field.extension.u_squared() - p1.x - p2.x
        new_y = m * (p1.x - new_x) - p1.y
        return ExtensionPoint(new_x, new_y, True)

    def multiply_extension(self, scalar, point):
        """scalar · (twisted 점), 2배와 덧셈을 반복한다."""
        result = None
        addend = point
        scalar = int(scalar)
        while scalar:
            if scalar & 1:
                result = self.add_extension(result, addend)
            addend = self.double_extension(addend)
            scalar >>= 1
        return result

    def multiply(self, scalar, point):
        """scalar · point (bn128.multiply, 상수 시간 아님).

        음수는 -point 의 곱으로 바꾸고, 위수 2인 점은 홀짝만 본다.
        """
        scalar = int(scalar)
        if scalar < 0:
            return self.multiply(-scalar, self.inversion(point))
        if point is None:
            return None
        if point[1].n == 0:
            return point if scalar % 2 else None
        return bn128.multiply(point, scalar)

    def inversion(self, point):
        """-point (y 좌표 반전)."""
        return bn128.neg(point)

    def subtract(self, p1, p2):
        return self.add(p1, self.inversion(p2))

    # ─── 직선 함수 (Miller loop) ───

    def get_line_between_points(self, p1, p2):
        """p1, p2를 지나는 직선 (x_factor, y_factor, constant).

        x_factor·x + y_factor·y + constant = 0

        방향은 항상 x_factor = y₂ - y₁, y_factor = -(x₂ - x₁) 로 고정한다:
            constant = y₁·(x₂ - x₁) - x₁·(y₂ - y₁)
        x₁ == x₂ 이면 수직선 x - x₁ = 0, 즉 (1, 0, -x₁) 이다.
        수직선을 twisted 점에서 평가하면 u 항이 없으므로 최종 거듭제곱 후 1이 된다.

        예시 (F_101): (1,2), (68,27) → (25, 34, 8)
        """
        if p1 is None or p2 is None:
            raise ValueError("항등원을 지나는 직선은 정의되지 않습니다")
        x1, y1 = p1
        x2, y2 = p2
        if x1.n == x2.n:
            return (self.field.one(), self.field.zero(), -x1)
        dx = x2 - x1
        dy = y2 - y1
        return (dy, -dx, y1 * dx - x1 * dy)

    def plug_extension_point_in_equation(self, point, x_factor, y_factor, constant):
        """직선을 확장 점에서 평가한다.

        twisted 점 (x, y·u):
            x_factor·x + constant  →  constant 부분
            y_factor·y             →  u 항
        """
        C = self.field.extension
        value = x_factor * point.x + constant
        if point.twisted:
            return C([int(value), int(y_factor * point.y)])
        return C([int(value + y_factor * point.y), 0])

    def get_generator_multiple(self, point, generator, order):
        """k·generator == point 인 k (1 ≤ k < order) 를 시행 곱셈으로 찾는다.

        찾지 못하면 (항등원 포함) 0을 반환한다.
        위수가 열거 가능한 toy 군에서만 쓸 수 있는 이산로그이다.
        """
        current = generator
        for k in range(1, order):
            if self.equals(current, point):
                return k
            current = self.add(current, generator)
        return 0
