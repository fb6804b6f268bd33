"""
Toy PLONK 오류 계층
====================

PLONK 스택에서 발생하는 대수적/절차적 실패를 타입으로 구분한다.

  PlonkError
  ├── NoInverse            (ZeroDivisionError)  곱셈 역원이 존재하지 않음
  ├── InvalidDegree        (ValueError)         보간/행렬 크기, 단위근 부재
  ├── CircuitNotSatisfied  (ValueError)         몫 다항식 나눗셈의 나머지가 0이 아님
  └── CircuitStateError    (RuntimeError)       회로 생명주기 순서 위반

표준 예외를 함께 상속하므로 호출자는 `except ValueError` 처럼
기존 방식으로도 잡을 수 있다.
"""


class PlonkError(Exception):
    """toyplonk의 모든 오류의 기반 클래스."""


class NoInverse(PlonkError, ZeroDivisionError):
    """gcd(a, order) != 1 이라 a의 곱셈 역원이 없다."""


class InvalidDegree(PlonkError, ValueError):
    """입력 개수나 행렬 크기가 고정된 차수와 맞지 않는다."""


class CircuitNotSatisfied(PlonkError, ValueError):
    """제약 다항식이 Z_H(x)로 나누어 떨어지지 않는다 (witness 오류)."""


class CircuitStateError(PlonkError, RuntimeError):
    """회로 생명주기에서 허용되지 않는 순서로 연산을 호출했다."""
