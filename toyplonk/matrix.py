"""
4×4 행렬 연산 (보간 전용)
===========================

Polynomial.interpolate가 Vandermonde 행렬의 역행렬을 구할 때만 사용한다.

  V = | 1  x₀  x₀²  x₀³ |        V · c = y  →  c = V⁻¹ · y
      | 1  x₁  x₁²  x₁³ |
      | 1  x₂  x₂²  x₂³ |
      | 1  x₃  x₃²  x₃³ |

역행렬은 수반행렬(adjugate)을 행렬식으로 나누어 구한다:
  V⁻¹ = adj(V) / det(V),   adj(V)[i][j] = (-1)^(i+j) · det(minor(V, j, i))

행렬의 원소는 모두 같은 PrimeField의 원소로 변환되어 계산된다.
"""

from toyplonk.errors import InvalidDegree


SIZE = 4


def _check_square(matrix):
    if len(matrix) != SIZE or any(len(row) != SIZE for row in matrix):
        raise InvalidDegree(f"{SIZE}x{SIZE} 행렬이 필요합니다")


def _minor(matrix, row, col):
    """row행과 col열을 제거한 부분행렬."""
    return [
        [value for j, value in enumerate(line) if j != col]
        for i, line in enumerate(matrix) if i != row
    ]


def _determinant(matrix, field):
    # 첫 행에 대한 여인수 전개 (Laplace expansion)
    if len(matrix) == 1:
        return matrix[0][0]
    total = field.zero()
    for col, value in enumerate(matrix[0]):
        if value.n == 0:
            continue
        cofactor = _determinant(_minor(matrix, 0, col), field)
        if col % 2:
            total = total - value * cofactor
        else:
            total = total + value * cofactor
    return total


def _lift(matrix, field):
    return [[field(value) for value in row] for row in matrix]


def determinant_4x4(matrix, field):
    """4×4 행렬식.

    Args:
        matrix: 4×4 정수 또는 필드 원소 리스트
        field: PrimeField

    Returns:
        필드 원소 det(matrix)

    Raises:
        InvalidDegree: 4×4가 아닐 때
    """
    _check_square(matrix)
    return _determinant(_lift(matrix, field), field)


def adjugate_4x4(matrix, field):
    """수반행렬 adj(M) = cofactor(M)ᵀ."""
    _check_square(matrix)
    lifted = _lift(matrix, field)
    adjugate = []
    for i in range(SIZE):
        row = []
        for j in range(SIZE):
            cofactor = _determinant(_minor(lifted, j, i), field)
            row.append(-cofactor if (i + j) % 2 else cofactor)
        adjugate.append(row)
    return adjugate


def inverse_4x4(matrix, field):
    """M⁻¹ = adj(M) / det(M).

    Raises:
        InvalidDegree: 4×4가 아닐 때
        NoInverse: det(M) = 0 (특이 행렬)
    """
    det = determinant_4x4(matrix, field)
    det_inv = field.one() / det
    return [[value * det_inv for value in row] for row in adjugate_4x4(matrix, field)]


def multiply_4x4_vector(matrix, vector, field):
    """M · v."""
    _check_square(matrix)
    if len(vector) != SIZE:
        raise InvalidDegree(f"길이 {SIZE}의 벡터가 필요합니다: {len(vector)}")
    lifted = _lift(matrix, field)
    column = [field(value) for value in vector]
    result = []
    for row in lifted:
        total = field.zero()
        for value, entry in zip(row, column):
            total = total + value * entry
        result.append(total)
    return result
