"""
toy PLONK Flask Blueprint
===========================

피타고라스 회로의 각 단계를 JSON으로 보여주는 엔드포인트.

  GET  /plonk/config                  프로토콜 설정
  GET  /plonk/circuit?inputs=3,4,5    witness, 게이트 벡터, 회로 다항식
  GET  /plonk/setup                   SRS 점
  POST /plonk/prove                   증명 생성 (inputs), DB에 마지막 증명 저장
  POST /plonk/verify                  증명 검증 (본문의 proof 또는 저장된 증명)
  POST /plonk/clear                   저장된 증명 삭제

잘못된 입력은 {"error": ...} 와 400으로 응답한다.
"""

from flask import Blueprint, jsonify, request
from tinydb import Query

from toyplonk.circuit import pythagorean_circuit
from toyplonk.config import ProtocolConfig
from toyplonk.errors import PlonkError
from toyplonk.field import PrimeField
from toyplonk.prover import Prover
from toyplonk.srs import SRS
from toyplonk.verifier import Verifier

from plonk_serializers import (
    serialize_config,
    serialize_fr_list,
    serialize_poly,
    serialize_proof, deserialize_proof,
    serialize_srs,
)

plonk_bp = Blueprint('plonk', __name__, url_prefix='/plonk')

DATA = Query()

# DB는 app.py에서 주입
DB = None

PROOF_KEY = "plonk.prover.proof"
INPUTS_KEY = "plonk.prover.inputs"


def init_plonk_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove(key):
    """DB에서 키를 삭제한다."""
    DB.remove(DATA.type == key)


# ─── 요청 헬퍼 ───

def _config():
    return ProtocolConfig.plonk_by_hand()


def _parse_inputs(raw):
    """"3,4,5" 또는 [3, 4, 5] → (3, 4, 5)."""
    if raw is None:
        return (3, 4, 5)
    if isinstance(raw, str):
        raw = [part for part in raw.split(",") if part.strip()]
    try:
        inputs = tuple(int(value) for value in raw)
    except (TypeError, ValueError):
        raise ValueError(f"입력은 정수 3개여야 합니다: {raw!r}") from None
    if len(inputs) != 3:
        raise ValueError(f"입력은 정수 3개여야 합니다: {raw!r}")
    return inputs


def _request_inputs():
    payload = request.get_json(silent=True) or {}
    return _parse_inputs(payload.get("inputs", request.values.get("inputs")))


@plonk_bp.errorhandler(PlonkError)
@plonk_bp.errorhandler(ValueError)
@plonk_bp.errorhandler(KeyError)
@plonk_bp.errorhandler(TypeError)
def bad_request(error):
    return jsonify({"error": str(error), "type": type(error).__name__}), 400


# ──────────────────────────────────────────────────────────────
# 설정 / 회로 / SRS
# ──────────────────────────────────────────────────────────────

@plonk_bp.route("/config")
def config_view():
    return jsonify(serialize_config(_config()))


@plonk_bp.route("/circuit")
def circuit_view():
    """witness와 회로 다항식."""
    config = _config()
    field = PrimeField(config.scalar_order)
    inputs = _parse_inputs(request.args.get("inputs"))

    circuit = pythagorean_circuit(field, inputs, config)
    circuit.compute_witness()
    circuit.build_polynomials_with_input()
    circuit.build_polynomials()
    polys = circuit.polynomials

    return jsonify({
        "inputs": list(inputs),
        "witness": circuit.get_witness(),
        "gates": [repr(gate) for gate in circuit.gates],
        "left": circuit.get_left_inputs(),
        "right": circuit.get_right_inputs(),
        "output": circuit.get_outputs(),
        "copy_constraints": {
            "left": circuit.get_left_copy_constraints(),
            "right": circuit.get_right_copy_constraints(),
            "output": circuit.get_output_copy_constraints(),
        },
        "polynomials": {
            name: serialize_poly(getattr(polys, name))
            for name in (
                "left", "right", "output",
                "left_selector", "right_selector", "output_selector", "mul_selector",
                "left_copy", "right_copy", "output_copy", "z_h",
            )
        },
        "roots": serialize_fr_list(circuit.roots),
    })


@plonk_bp.route("/setup")
def setup_view():
    return jsonify(serialize_srs(SRS.from_config(_config())))


# ──────────────────────────────────────────────────────────────
# 증명 / 검증
# ──────────────────────────────────────────────────────────────

@plonk_bp.route("/prove", methods=["POST"])
def prove_view():
    """증명을 생성하고 마지막 증명으로 저장한다."""
    config = _config()
    field = PrimeField(config.scalar_order)
    inputs = _request_inputs()

    prover = Prover(field, inputs, SRS.from_config(config), config)
    prover.set_public_coin(config.public_coin)
    proof = serialize_proof(prover.generate_proof())

    db_set(PROOF_KEY, proof)
    db_set(INPUTS_KEY, list(inputs))
    return jsonify({"inputs": list(inputs), "proof": proof})


@plonk_bp.route("/verify", methods=["POST"])
def verify_view():
    """본문의 proof를, 없으면 마지막으로 저장된 증명을 검증한다."""
    payload = request.get_json(silent=True) or {}
    proof_data = payload.get("proof") or db_get(PROOF_KEY)
    if proof_data is None:
        return jsonify({"error": "검증할 증명이 없습니다"}), 400

    config = _config()
    field = PrimeField(config.scalar_order)
    verifier = Verifier(field, SRS.from_config(config), config)
    verifier.preprocess()
    verifier.provide_proof(config.public_coin, deserialize_proof(proof_data))
    result = verifier.verify_proof()

    return jsonify({"result": result, "proof": proof_data})


@plonk_bp.route("/clear", methods=["POST"])
def clear_view():
    db_remove(PROOF_KEY)
    db_remove(INPUTS_KEY)
    return jsonify({"cleared": True})
