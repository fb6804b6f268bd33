"""
PLONK 순열 인자 (Permutation Argument)
========================================

배선 복사 제약(copy constraint)을 순열(permutation)로 인코딩하고,
Grand Product 누적자로 증명하는 모듈.

**배선 위치(slot)**:
  n개 게이트의 3n개 배선 위치를 다음 순서로 번호 매긴다:
  - 위치 0..n-1:    왼쪽 배선 L₀..L_{n-1}   → 도메인 원소 {ω⁰, ..., ω^{n-1}}
  - 위치 n..2n-1:   오른쪽 배선 R₀..R_{n-1} → {K1·ω⁰, ..., K1·ω^{n-1}}
  - 위치 2n..3n-1:  출력 배선 O₀..O_{n-1}   → {K2·ω⁰, ..., K2·ω^{n-1}}

**순열 σ**:
  같은 witness 인덱스를 읽는 위치들이 하나의 사이클을 이루며,
  각 위치는 사이클의 다음 위치로 보내진다.
  피타고라스 회로에서는 모든 사이클의 길이가 2이다:
    L₀ ↔ R₀ (x₀),  L₁ ↔ R₁ (x₂),  L₂ ↔ R₂ (x₄),
    L₃ ↔ O₀ (x₁),  R₃ ↔ O₁ (x₃),  O₂ ↔ O₃ (x₅)

**Grand Product (누적자 acc)**:
  acc[0] = 1
  acc[i+1] = acc[i] ·
      (aᵢ + β·ωⁱ + γ)(bᵢ + β·K1·ωⁱ + γ)(cᵢ + β·K2·ωⁱ + γ)
      ─────────────────────────────────────────────────────────
      (aᵢ + β·S_σ1(ωⁱ) + γ)(bᵢ + β·S_σ2(ωⁱ) + γ)(cᵢ + β·S_σ3(ωⁱ) + γ)
"""


def build_sigma(gates):
    """게이트 리스트에서 순열 σ (길이 3n의 위치 배열)를 만든다."""
    n = len(gates)
    slot_wires = (
        [gate.left for gate in gates]
        + [gate.right for gate in gates]
        + [gate.output for gate in gates]
    )

    cycles = {}
    for position, wire in enumerate(slot_wires):
        cycles.setdefault(wire, []).append(position)

    sigma = list(range(3 * n))
    for positions in cycles.values():
        for i, position in enumerate(positions):
            sigma[position] = positions[(i + 1) % len(positions)]
    return sigma


def position_to_value(position, roots, coset1, coset2):
    """배선 위치를 해당하는 도메인/코셋 원소로 변환.

    위치 i ∈ [0, n):   ωⁱ
    위치 i ∈ [n, 2n):  K1·ω^{i-n}
    위치 i ∈ [2n, 3n): K2·ω^{i-2n}
    """
    n = len(roots)
    if position < n:
        return roots[position]
    if position < 2 * n:
        return coset1[position - n]
    return coset2[position - 2 * n]


def build_copy_values(sigma, roots, coset1, coset2):
    """σ를 세 복사 제약 벡터 (S_σ1, S_σ2, S_σ3의 도메인 위 값)로 인코딩한다.

    예시 (피타고라스 회로, F_17):
        S_σ1 = [2, 8, 15, 3]
        S_σ2 = [1, 4, 16, 12]
        S_σ3 = [13, 9, 5, 14]
    """
    n = len(roots)
    values = [position_to_value(sigma[i], roots, coset1, coset2) for i in range(3 * n)]
    return values[:n], values[n:2 * n], values[2 * n:]


def compute_accumulator(wires, copies, roots, coset1, coset2, beta, gamma):
    """순열 누적자의 도메인 위 값 [acc(ω⁰)=1, acc(ω¹), ...] 을 계산한다.

    분자는 순열을 적용하지 않은 도메인/코셋 원소를,
    분모는 복사 제약 값을 사용한다. n-1번 갱신한다.

    Args:
        wires: (left, right, output) 필드 원소 리스트 3개
        copies: (S_σ1, S_σ2, S_σ3) 도메인 위 값 3개
        roots, coset1, coset2: 도메인과 두 코셋
        beta, gamma: 챌린지 (필드 원소)

    Returns:
        list: 길이 n의 누적자 값

    Raises:
        NoInverse: 분모가 0이 될 때
    """
    left, right, output = wires
    s1, s2, s3 = copies
    acc = [type(beta)(1)]
    for i in range(len(roots) - 1):
        numerator = (
            (left[i] + beta * roots[i] + gamma)
            * (right[i] + beta * coset1[i] + gamma)
            * (output[i] + beta * coset2[i] + gamma)
        )
        denominator = (
            (left[i] + beta * s1[i] + gamma)
            * (right[i] + beta * s2[i] + gamma)
            * (output[i] + beta * s3[i] + gamma)
        )
        acc.append(acc[-1] * numerator / denominator)
    return acc
