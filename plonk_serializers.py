"""
toy PLONK 데이터 직렬화/역직렬화 헬퍼
=======================================

TinyDB와 JSON 응답에 담을 수 있는 형태로 toy PLONK 객체를 변환한다.
스칼라, 곡선 점, 확장 점, 다항식, ProtocolConfig, SRS, Proof.

역직렬화한 Proof는 정수 좌표/정수 평가값을 그대로 담는다.
범위 검사(좌표 < p, 평가값 < r)는 Verifier가 한다.
"""

from toyplonk.prover import Proof


# ─── 스칼라 ───

def serialize_fr(val):
    """필드 원소 → str(int)"""
    return str(int(val))


def deserialize_fr(s):
    """str(int) → int (필드로 줄이지 않는다)"""
    return int(s)


def serialize_fr_list(lst):
    return [serialize_fr(v) for v in lst]


# ─── 곡선 점 ───

def serialize_g1(point):
    """곡선 점 → [str, str] or None"""
    if point is None:
        return None
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(data):
    """[str, str] or None → (int, int) or None"""
    if data is None:
        return None
    x, y = data
    return (int(x), int(y))


def serialize_g2(point):
    """ExtensionPoint → [str, str, bool]"""
    return [str(int(point.x)), str(int(point.y)), bool(point.twisted)]


# ─── 다항식 ───

def serialize_poly(poly):
    """Polynomial → list of str (계수)"""
    if poly is None:
        return None
    return [str(c) for c in poly.coefficients]


# ─── 설정 / SRS ───

def serialize_config(config):
    return config.to_dict()


def serialize_srs(srs):
    """SRS → dict (표시용, 역직렬화는 설정에서 다시 생성한다)"""
    return {
        "degree": srs.degree,
        "s": srs.s,
        "g1_points": [serialize_g1(p) for p in srs.g1_points],
        "g2_points": [serialize_g2(p) for p in srs.g2_points],
    }


# ─── Proof ───

def serialize_proof(proof):
    """Proof → {"commitments": {...}, "openings": {...}}"""
    return {
        "commitments": {name: serialize_g1(getattr(proof, name)) for name in Proof.COMMITMENTS},
        "openings": {name: serialize_fr(getattr(proof, name)) for name in Proof.OPENINGS},
    }


def deserialize_proof(data):
    """dict → Proof.

    Raises:
        KeyError: 커밋먼트나 평가값이 빠졌을 때
        ValueError, TypeError: 정수로 읽을 수 없는 값이 있을 때
    """
    proof = Proof()
    commitments = data["commitments"]
    openings = data["openings"]
    for name in Proof.COMMITMENTS:
        setattr(proof, name, deserialize_g1(commitments[name]))
    for name in Proof.OPENINGS:
        setattr(proof, name, deserialize_fr(openings[name]))
    return proof
