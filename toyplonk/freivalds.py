"""
Freivalds 행렬곱 검사
======================

A·B == C 를 O(n³) 곱셈 없이 확률적으로 확인한다.

  x = (1, r, r², ..., r^(n-1))         (Reed-Solomon 스타일 지문 벡터)
  C·x == A·(B·x) ?

C가 틀렸다면 행렬 차이의 한 행이 0이 아닌 다항식의 계수가 되므로
무작위 r에서 우연히 통과할 확률은 (n-1)/|F| 이하이다.

예시 (위수 9999999, r = 13):
  A = [[1, 2], [3, 4]],  B = [[2, 3], [4, 5]]
  C = [[10, 13], [22, 29]]  → True
  C = [[10, 13], [22, 30]]  → False
"""


class ReedSolomon:
    """값 벡터를 챌린지 r에서의 다항식 평가값으로 압축한다."""

    def __init__(self, field):
        self.field = field

    def powers(self, challenge, size):
        """[1, r, r², ..., r^(size-1)] (정수)."""
        return [self.field.exponent(challenge, i) for i in range(size)]

    def fingerprint(self, values, challenge):
        """Σ valuesᵢ · rⁱ mod order."""
        return self.field.vector_dot(values, self.powers(challenge, len(values)))


class Freivalds:

    def __init__(self, reed_solomon):
        self.reed_solomon = reed_solomon
        self.field = reed_solomon.field

    def _apply(self, matrix, vector):
        return [self.field.vector_dot(row, vector) for row in matrix]

    def verify(self, a, b, c, challenge):
        """A·B == C 인지 챌린지 하나로 검사한다.

        Raises:
            ValueError: 행렬 크기가 맞지 않을 때
        """
        size = len(c[0]) if c else 0
        x = self.reed_solomon.powers(challenge, size)
        # C·x 의 각 행은 C의 행 지문과 같다
        expected = [self.reed_solomon.fingerprint(row, challenge) for row in c]
        actual = self._apply(a, self._apply(b, x))
        return expected == actual
