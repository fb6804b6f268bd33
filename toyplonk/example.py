"""
toy PLONK E2E 데모: a² + b² = c² (3, 4, 5)
============================================

모든 중간값이 손으로 확인 가능한 F_17 / F_101 위에서
PLONK 프로토콜 전체 흐름을 시연한다.

실행:
    python -m toyplonk.example
    python -m toyplonk.example --debug     # 라운드별 중간값 로그

흐름:
    1. 설정 (ProtocolConfig.plonk_by_hand)
    2. SRS 생성
    3. 회로 구성과 witness
    4. 증명 생성 (5-라운드)
    5. 증명 검증
    6. 조작된 증명 검증
"""

import logging
import sys

from toyplonk.circuit import pythagorean_circuit
from toyplonk.config import ProtocolConfig
from toyplonk.field import PrimeField
from toyplonk.prover import Proof, Prover
from toyplonk.srs import SRS
from toyplonk.verifier import Verifier


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(
        level=logging.DEBUG if "--debug" in argv else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("=" * 60)
    print("  toy PLONK Demo")
    print("  회로: a² + b² = c² (a=3, b=4, c=5) over F_17")
    print("=" * 60)

    # ── 1. 설정 ──
    config = ProtocolConfig.plonk_by_hand()
    field = PrimeField(config.scalar_order)
    print(f"\n[1] 스칼라 필드 F_{config.scalar_order}, 곡선 y² = x³ + {config.curve_b} over F_{config.curve_order}")

    # ── 2. SRS ──
    print("\n[2] SRS 생성...")
    srs = SRS.from_config(config)
    print(f"    g1_points: {[srs.ecc.affine(p) for p in srs.g1_points]}")
    print(f"    g2_points: {[(int(p.x), int(p.y)) for p in srs.g2_points]}")

    # ── 3. 회로 ──
    print("\n[3] 회로 구성...")
    circuit = pythagorean_circuit(field, [3, 4, 5], config)
    circuit.compute_witness()
    print(f"    witness: {circuit.get_witness()}")
    print(f"    left/right/output: {circuit.get_left_inputs()} "
          f"{circuit.get_right_inputs()} {circuit.get_outputs()}")

    # ── 4. 증명 ──
    print("\n[4] 증명 생성...")
    prover = Prover(field, [3, 4, 5], srs, config)
    prover.set_public_coin(config.public_coin)
    proof = prover.generate_proof()
    for name in Proof.COMMITMENTS:
        print(f"    [{name}]₁ = {srs.ecc.affine(getattr(proof, name))}")
    for name in Proof.OPENINGS:
        print(f"    {name} = {int(getattr(proof, name))}")

    # ── 5. 검증 ──
    print("\n[5] 증명 검증...")
    verifier = Verifier(field, srs, config)
    verifier.preprocess()
    verifier.provide_proof(config.public_coin, proof)
    result = verifier.verify_proof()
    print(f"    검증 결과: {'성공 ✓' if result else '실패 ✗'}")

    # ── 6. 조작된 증명 ──
    print("\n[6] 조작된 증명으로 검증 (a_bar 변조)...")
    fake_proof = proof.copy()
    fake_proof.a_bar = field(int(proof.a_bar) + 1)
    verifier.provide_proof(config.public_coin, fake_proof)
    wrong_result = verifier.verify_proof()
    print(f"    검증 결과: {'성공 ✓' if wrong_result else '실패 ✗ (예상대로 실패)'}")

    print("\n" + "=" * 60)
    print("  데모 완료" if result and not wrong_result else "  데모 완료: 일부 검사 실패")
    print("=" * 60)
    return result


if __name__ == "__main__":
    main()
