"""
증명/검증키의 바이트 및 필드 원소 표현
=======================================

**증명 바이트 형식** (PROOF_SIZE = 800 바이트):

  ┌──────────────────────────────────────────────────────────┐
  │  Round 1-3 커밋먼트 7개 (G1, 각 64바이트)                 │
  │    [a]₁ [b]₁ [c]₁ [z]₁ [t_lo]₁ [t_mid]₁ [t_hi]₁          │
  ├──────────────────────────────────────────────────────────┤
  │  Round 4-5 평가값 7개 (FR, 각 32바이트)                   │
  │    ā b̄ c̄ s̄_σ1 s̄_σ2 z̄_ω r̄                               │
  ├──────────────────────────────────────────────────────────┤
  │  열기 증명 2개 (G1, 각 64바이트)                           │
  │    [W_ζ]₁ [W_ζω]₁                                        │
  └──────────────────────────────────────────────────────────┘

  G1 점 = x ‖ y (각 32바이트 빅엔디안), 64바이트 0 = 무한원점.

**필드 원소 표현**:
  G1 점은 limb 4개 (x_lo, x_hi, y_lo, y_hi), 스칼라는 그대로 1개.
  순서는 바이트 형식과 같다.
"""

from zkartifacts.plonk.field import (
    FR, FIELD_BYTES,
    g1_from_ints, g1_to_ints, g1_limbs, g2_limbs,
    fr_to_bytes, fr_from_bytes,
)

G1_BYTES = 2 * FIELD_BYTES

COMMITMENTS = (
    "a_comm", "b_comm", "c_comm",
    "z_comm",
    "t_lo_comm", "t_mid_comm", "t_hi_comm",
)
EVALUATIONS = (
    "a_eval", "b_eval", "c_eval",
    "s_sigma1_eval", "s_sigma2_eval", "z_omega_eval",
    "r_eval",
)
OPENINGS = ("W_zeta_comm", "W_zeta_omega_comm")

PROOF_SIZE = (len(COMMITMENTS) + len(OPENINGS)) * G1_BYTES + len(EVALUATIONS) * FIELD_BYTES


class Proof:
    """PLONK 증명 데이터 컨테이너.

    Round 1 (배선 커밋먼트): a_comm, b_comm, c_comm
    Round 2 (순열 누적자): z_comm
    Round 3 (몫 다항식): t_lo_comm, t_mid_comm, t_hi_comm
    Round 4 (평가값): a_eval, b_eval, c_eval, s_sigma1_eval, s_sigma2_eval, z_omega_eval
    Round 5 (선형화 + 열기 증명): r_eval, W_zeta_comm, W_zeta_omega_comm
    """

    def __init__(self):
        for name in COMMITMENTS + OPENINGS:
            setattr(self, name, None)
        for name in EVALUATIONS:
            setattr(self, name, FR(0))


def _layout():
    """(속성 이름, 종류) 목록을 바이트 형식 순서대로 반환한다."""
    return (
        [(name, "g1") for name in COMMITMENTS]
        + [(name, "fr") for name in EVALUATIONS]
        + [(name, "g1") for name in OPENINGS]
    )


def encode_proof(proof):
    """Proof → 바이트 (PROOF_SIZE)."""
    out = bytearray()
    for name, kind in _layout():
        value = getattr(proof, name)
        if kind == "g1":
            x, y = g1_to_ints(value)
            out.extend(x.to_bytes(FIELD_BYTES, "big"))
            out.extend(y.to_bytes(FIELD_BYTES, "big"))
        else:
            out.extend(fr_to_bytes(value))
    return bytes(out)


def decode_proof(data):
    """바이트 → Proof.

    Raises:
        ValueError: 길이가 PROOF_SIZE가 아니거나, 점이 곡선 위에 없거나,
                    스칼라가 필드 위수 이상일 때
    """
    if len(data) != PROOF_SIZE:
        raise ValueError(f"증명 길이가 {PROOF_SIZE}바이트가 아닙니다: {len(data)}")

    proof = Proof()
    offset = 0
    for name, kind in _layout():
        if kind == "g1":
            x = int.from_bytes(data[offset:offset + FIELD_BYTES], "big")
            y = int.from_bytes(data[offset + FIELD_BYTES:offset + G1_BYTES], "big")
            try:
                setattr(proof, name, g1_from_ints(x, y))
            except ValueError as exc:
                raise ValueError(f"{name}: {exc}") from exc
            offset += G1_BYTES
        else:
            try:
                setattr(proof, name, fr_from_bytes(data[offset:offset + FIELD_BYTES]))
            except ValueError as exc:
                raise ValueError(f"{name}: {exc}") from exc
            offset += FIELD_BYTES
    return proof


def proof_to_fields(proof):
    """Proof → 필드 원소 리스트 (공개 입력 제외)."""
    fields = []
    for name, kind in _layout():
        value = getattr(proof, name)
        if kind == "g1":
            fields.extend(g1_limbs(value))
        else:
            fields.append(value)
    return fields


def verification_key_to_fields(vk):
    """검증키 → 필드 원소 리스트.

    [n, 공개 입력 수, ω] + 커밋먼트 8개의 limb (각 4개) + [τ]₂의 limb 8개
    """
    fields = [FR(vk.n), FR(vk.num_public_inputs), vk.omega]
    for commitment in vk.commitments():
        fields.extend(g1_limbs(commitment))
    fields.extend(g2_limbs(vk.g2_tau))
    return fields
