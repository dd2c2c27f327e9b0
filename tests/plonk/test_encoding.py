"""
증명 바이트 형식과 필드 원소 표현 테스트 (encoding.py)
"""
import pytest

from zkartifacts.plonk.circuit import Circuit
from zkartifacts.plonk.encoding import (
    Proof, PROOF_SIZE, G1_BYTES, COMMITMENTS, EVALUATIONS, OPENINGS,
    encode_proof, decode_proof, proof_to_fields, verification_key_to_fields,
)
from zkartifacts.plonk.field import FR, CURVE_ORDER, G1, ec_mul, g1_limbs
from zkartifacts.plonk.preprocessor import preprocess
from zkartifacts.plonk.srs import SRS


# =====================================================================
# 바이트 형식
# =====================================================================

class TestProofBytes:
    def test_size(self):
        assert PROOF_SIZE == 800

    def test_decode(self, proof_bytes):
        proof = decode_proof(proof_bytes)
        assert proof.a_comm == ec_mul(G1, 1)
        assert proof.W_zeta_omega_comm == ec_mul(G1, 9)
        assert proof.a_eval == FR(100)
        assert proof.r_eval == FR(106)
        assert encode_proof(proof) == proof_bytes

    def test_infinity_commitment(self, proof_bytes):
        data = bytearray(proof_bytes)
        data[0:G1_BYTES] = bytes(G1_BYTES)
        assert decode_proof(bytes(data)).a_comm is None

    def test_wrong_length(self, proof_bytes):
        with pytest.raises(ValueError, match="800"):
            decode_proof(proof_bytes[:-1])

    def test_point_off_curve(self, proof_bytes):
        data = bytearray(proof_bytes)
        data[G1_BYTES - 1] ^= 1  # a_comm의 y 좌표
        with pytest.raises(ValueError, match="a_comm"):
            decode_proof(bytes(data))

    def test_scalar_out_of_range(self, proof_bytes):
        data = bytearray(proof_bytes)
        start = len(COMMITMENTS) * G1_BYTES
        data[start:start + 32] = CURVE_ORDER.to_bytes(32, "big")
        with pytest.raises(ValueError, match="a_eval"):
            decode_proof(bytes(data))


# =====================================================================
# 필드 원소 표현
# =====================================================================

class TestProofFields:
    def test_length(self, proof_bytes):
        fields = proof_to_fields(decode_proof(proof_bytes))
        assert len(fields) == 4 * (len(COMMITMENTS) + len(OPENINGS)) + len(EVALUATIONS)

    def test_order(self, proof_bytes):
        fields = proof_to_fields(decode_proof(proof_bytes))
        assert fields[:4] == g1_limbs(ec_mul(G1, 1))
        assert fields[28] == FR(100)
        assert fields[-4:] == g1_limbs(ec_mul(G1, 9))

    def test_empty_proof_defaults(self):
        fields = proof_to_fields(Proof())
        assert all(v == FR(0) for v in fields)


class TestVerificationKeyFields:
    def test_layout(self, circuit_description):
        vk = preprocess(Circuit.from_dict(circuit_description), SRS.generate(16, seed=3))
        fields = verification_key_to_fields(vk)
        assert len(fields) == 3 + 8 * 4 + 8
        assert fields[0] == FR(2)
        assert fields[1] == FR(1)
        assert fields[2] == vk.omega
        assert fields[3:7] == g1_limbs(vk.q_m_comm)
