"""
PLONK 회로 표현 (Circuit Representation)
==========================================

4-게이트 템플릿에 특화된 PLONK 산술화(arithmetization).

**게이트 구조**:
  각 게이트는 공유 witness 벡터를 가리키는 세 인덱스 (left, right, output)와
  종류(add 또는 mul)로 구성된다.

    q_L·a + q_R·b + q_O·c + q_M·(a·b) = 0

  | 종류 | q_L | q_R | q_O | q_M | 의미     |
  |------|-----|-----|-----|-----|----------|
  | mul  |  0  |  0  | -1  |  1  | a·b = c  |
  | add  |  1  |  1  | -1  |  0  | a + b = c|

**생명주기**:
  Unbuilt → Inputs-Set → Witness-Computed → Polynomials-Built → Accumulator-Built
  한 방향으로만 진행한다. 배선 다항식을 만든 뒤 입력을 바꾸려면 회로를 새로 만든다.

**예제 회로**: a² + b² = c² (a=3, b=4, c=5), witness 크기 6
  | 게이트 | 종류 | left | right | output | 값              |
  |--------|------|------|-------|--------|-----------------|
  | 0      | mul  | x0   | x0    | x1     | 3·3 = 9         |
  | 1      | mul  | x2   | x2    | x3     | 4·4 = 16        |
  | 2      | mul  | x4   | x4    | x5     | 5·5 = 25 = 8    |
  | 3      | add  | x1   | x3    | x5     | 9 + 16 = 25 = 8 |

사용 예시:
    >>> circuit = pythagorean_circuit(PrimeField(17), [3, 4, 5])
    >>> circuit.compute_witness()
    >>> circuit.get_left_inputs()   # [3, 4, 5, 9]
"""

import logging

from toyplonk.errors import CircuitStateError, InvalidDegree
from toyplonk.permutation import build_copy_values, build_sigma, compute_accumulator
from toyplonk.polynomial import Polynomial, interpolate
from toyplonk.roots import get_coset, get_roots_of_unity


logger = logging.getLogger(__name__)

ADD = "add"
MUL = "mul"


class Gate:
    """산술 게이트: witness[output] = witness[left] (+ 또는 ·) witness[right]."""

    def __init__(self, left, right, output, kind):
        if kind not in (ADD, MUL):
            raise ValueError(f"알 수 없는 게이트 종류: {kind}")
        self.left = left
        self.right = right
        self.output = output
        self.kind = kind

    def apply(self, a, b):
        return a + b if self.kind == ADD else a * b

    def __repr__(self):
        op = "+" if self.kind == ADD else "*"
        return f"Gate(x{self.output} = x{self.left} {op} x{self.right})"


class CircuitPolynomials:
    """회로가 만든 다항식 묶음.

    배선:     left, right, output
    셀렉터:   left_selector, right_selector, output_selector, mul_selector
    복사 제약: left_copy, right_copy, output_copy   (S_σ1, S_σ2, S_σ3)
    기타:     z_h (소거 다항식), acc (순열 누적자)
    """

    def __init__(self):
        self.left = None
        self.right = None
        self.output = None
        self.left_selector = None
        self.right_selector = None
        self.output_selector = None
        self.mul_selector = None
        self.left_copy = None
        self.right_copy = None
        self.output_copy = None
        self.z_h = None
        self.acc = None


class Circuit:
    """게이트 리스트, witness, 도메인/코셋, 다항식 묶음.

    속성:
        field: 스칼라 필드 (PrimeField)
        gates: Gate 리스트 (삽입 순서)
        witness: 필드 원소 리스트 (계산 전에는 None)
        roots: 도메인 H
        coset1, coset2: K1·H, K2·H
        polynomials: CircuitPolynomials
    """

    def __init__(self, field, gate_count=4, witness_size=6, coset_multipliers=(2, 3)):
        self.field = field
        self.gate_count = gate_count
        self.gates = []
        self.witness = [None] * witness_size
        self.inputs = []
        self.roots = get_roots_of_unity(gate_count, field)
        self.k1, self.k2 = (field(k) for k in coset_multipliers)
        self.coset1 = get_coset(self.k1, self.roots, field)
        self.coset2 = get_coset(self.k2, self.roots, field)
        self.polynomials = CircuitPolynomials()

        self._inputs_set = False
        self._witness_computed = False
        self._copy_values = None
        self._accumulator_values = None

    @classmethod
    def from_config(cls, field, config):
        return cls(field, config.gate_count, config.witness_size, config.coset_multipliers)

    @property
    def omega(self):
        return self.roots[1]

    @property
    def quotient_chunk_size(self):
        """t(x) 분할 길이. 블라인딩된 t의 차수는 최대 3n + 5 이므로 n + 2."""
        return self.gate_count + 2

    # ─── 구성 ───

    def insert_gate(self, gate):
        if len(self.gates) >= self.gate_count:
            raise InvalidDegree(f"게이트는 최대 {self.gate_count}개입니다")
        for index in (gate.left, gate.right, gate.output):
            if not 0 <= index < len(self.witness):
                raise ValueError(f"witness 인덱스 범위 밖: {index}")
        self.gates.append(gate)

    def set_inputs(self, bindings):
        """(value, witness_index) 쌍을 witness에 기록한다.

        Raises:
            CircuitStateError: 배선 다항식이 이미 만들어졌을 때
        """
        if self.polynomials.left is not None:
            raise CircuitStateError("배선 다항식을 만든 뒤에는 입력을 바꿀 수 없습니다")
        for value, index in bindings:
            if not 0 <= index < len(self.witness):
                raise ValueError(f"witness 인덱스 범위 밖: {index}")
            self.witness[index] = self.field(value)
            self.inputs.append((int(value), index))
        self._inputs_set = True

    def compute_witness(self):
        """삽입 순서대로 게이트를 실행해 출력 값을 witness에 기록한다.

        위상 순서는 호출자 책임이다. 읽으려는 값이 아직 없으면 CircuitStateError.
        """
        if not self._inputs_set:
            raise CircuitStateError("입력을 먼저 설정해야 합니다")
        for gate in self.gates:
            a = self.witness[gate.left]
            b = self.witness[gate.right]
            if a is None or b is None:
                raise CircuitStateError(f"{gate}: 입력 값이 아직 없습니다")
            self.witness[gate.output] = gate.apply(a, b)
        self._witness_computed = True
        logger.debug("witness = %s", [None if w is None else int(w) for w in self.witness])

    # ─── 다항식 ───

    def build_poly(self, values):
        """도메인 위의 값 [v₀, v₁, v₂, v₃] 을 보간한 다항식 (vᵢ = p(ωⁱ))."""
        return interpolate(self.field, list(zip(self.roots, values)))

    def _check_gate_count(self):
        if len(self.gates) != self.gate_count:
            raise InvalidDegree(
                f"게이트가 {self.gate_count}개여야 합니다: {len(self.gates)}"
            )

    def build_polynomials_with_input(self):
        """배선 값을 보간해 left/right/output 다항식을 만든다."""
        if not self._witness_computed:
            raise CircuitStateError("witness를 먼저 계산해야 합니다")
        self._check_gate_count()
        left, right, output = self._wire_values()
        self.polynomials.left = self.build_poly(left)
        self.polynomials.right = self.build_poly(right)
        self.polynomials.output = self.build_poly(output)

    def build_polynomials(self):
        """셀렉터, 복사 제약, 소거 다항식을 만든다 (witness와 무관)."""
        self._check_gate_count()
        field = self.field
        polys = self.polynomials

        polys.left_selector = self.build_poly([1 if g.kind == ADD else 0 for g in self.gates])
        polys.right_selector = self.build_poly([1 if g.kind == ADD else 0 for g in self.gates])
        polys.output_selector = self.build_poly([-1] * len(self.gates))
        polys.mul_selector = self.build_poly([1 if g.kind == MUL else 0 for g in self.gates])

        sigma = build_sigma(self.gates)
        self._copy_values = build_copy_values(sigma, self.roots, self.coset1, self.coset2)
        s1, s2, s3 = self._copy_values
        polys.left_copy = self.build_poly(s1)
        polys.right_copy = self.build_poly(s2)
        polys.output_copy = self.build_poly(s3)

        polys.z_h = Polynomial.vanishing(field, self.gate_count)

    def build_accumulator(self, beta, gamma):
        """순열 누적자 다항식 acc(x)를 만든다 (증명마다 다시 만든다).

        Raises:
            CircuitStateError: 배선/복사 제약 다항식이 아직 없을 때
        """
        if self.polynomials.left is None or self._copy_values is None:
            raise CircuitStateError("배선 다항식과 복사 제약 다항식을 먼저 만들어야 합니다")
        beta = self.field(beta)
        gamma = self.field(gamma)
        self._accumulator_values = compute_accumulator(
            self._wire_values(), self._copy_values,
            self.roots, self.coset1, self.coset2, beta, gamma,
        )
        self.polynomials.acc = self.build_poly(self._accumulator_values)
        logger.debug("accumulator = %s", self.get_accumulator_values())

    def get_z_h(self):
        return self.polynomials.z_h

    # ─── 조회 ───

    def _wire_values(self):
        left = [self.witness[g.left] for g in self.gates]
        right = [self.witness[g.right] for g in self.gates]
        output = [self.witness[g.output] for g in self.gates]
        return left, right, output

    def _ints(self, values):
        return [int(v) for v in values]

    def get_witness(self):
        return [None if w is None else int(w) for w in self.witness]

    def get_left_inputs(self):
        return self._ints(self._wire_values()[0])

    def get_right_inputs(self):
        return self._ints(self._wire_values()[1])

    def get_outputs(self):
        return self._ints(self._wire_values()[2])

    def get_left_selector(self):
        return [1 if g.kind == ADD else 0 for g in self.gates]

    def get_right_selector(self):
        return [1 if g.kind == ADD else 0 for g in self.gates]

    def get_output_selector(self):
        return [int(self.field(-1))] * len(self.gates)

    def get_mul_selector(self):
        return [1 if g.kind == MUL else 0 for g in self.gates]

    def _copy(self, index):
        if self._copy_values is None:
            raise CircuitStateError("복사 제약은 build_polynomials 이후에 생깁니다")
        return self._ints(self._copy_values[index])

    def get_left_copy_constraints(self):
        return self._copy(0)

    def get_right_copy_constraints(self):
        return self._copy(1)

    def get_output_copy_constraints(self):
        return self._copy(2)

    def get_accumulator_values(self):
        if self._accumulator_values is None:
            return None
        return self._ints(self._accumulator_values)


def pythagorean_circuit(field, inputs=None, config=None):
    """a² + b² = c² 회로.

    Args:
        field: 스칼라 필드
        inputs: (a, b, c). None이면 게이트만 삽입한다 (Verifier 전처리용).
        config: ProtocolConfig (없으면 기본 크기)
    """
    if config is not None:
        circuit = Circuit.from_config(field, config)
    else:
        circuit = Circuit(field)
    circuit.insert_gate(Gate(0, 0, 1, MUL))
    circuit.insert_gate(Gate(2, 2, 3, MUL))
    circuit.insert_gate(Gate(4, 4, 5, MUL))
    circuit.insert_gate(Gate(1, 3, 5, ADD))
    if inputs is not None:
        if len(inputs) != 3:
            raise ValueError(f"입력은 (a, b, c) 3개여야 합니다: {inputs}")
        a, b, c = inputs
        circuit.set_inputs([(a, 0), (b, 2), (c, 4)])
    return circuit
