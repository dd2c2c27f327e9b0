"""
프로세스 내 PLONK 백엔드
=========================

zkartifacts.plonk 위에서 산출물 세 가지를 만든다.

  1. 회로 기술 → Circuit
  2. SRS (설정된 seed, max_degree = 3n + 10) + 전처리 → 검증키
  3. 증명 바이트 → Proof (길이, 곡선 위의 점, 스칼라 범위 검사)
  4. proof_as_fields = 공개 입력 + proof_to_fields(proof)
     vk_as_fields    = verification_key_to_fields(vk)
     vk_hash         = hash_fields(vk_as_fields)

SRS와 전처리는 결정론적이므로 같은 입력이면 같은 산출물이 나온다.
"""

import logging

from zkartifacts.backends import Backend, ConstraintLanguage, ArtifactTriple
from zkartifacts.config import DEFAULT_SRS_SEED
from zkartifacts.errors import BackendError
from zkartifacts.plonk.circuit import Circuit
from zkartifacts.plonk.encoding import decode_proof, proof_to_fields, verification_key_to_fields
from zkartifacts.plonk.field import FR
from zkartifacts.plonk.preprocessor import preprocess, domain_size
from zkartifacts.plonk.srs import cached_srs
from zkartifacts.plonk.transcript import hash_fields

logger = logging.getLogger(__name__)

PLONK_WIDTH = 3
SUPPORTED_OPCODES = frozenset({"arithmetic"})


class PlonkBackend(Backend):
    """PLONK-CSAT (폭 3) 회로용 백엔드."""

    name = "plonk"

    def __init__(self, srs_seed=DEFAULT_SRS_SEED):
        self.srs_seed = srs_seed

    def get_capabilities(self):
        return ConstraintLanguage("PLONK-CSAT", PLONK_WIDTH), SUPPORTED_OPCODES

    def verification_key(self, circuit_description):
        """회로 기술에서 검증키(PreprocessedData)를 만든다."""
        try:
            circuit = Circuit.from_dict(circuit_description)
        except ValueError as exc:
            raise BackendError("circuit", str(exc)) from exc

        n = domain_size(circuit)
        srs = cached_srs(3 * n + 10, self.srs_seed)
        try:
            return preprocess(circuit, srs)
        except ValueError as exc:
            raise BackendError("preprocess", str(exc)) from exc

    def materialize_artifacts(self, circuit_description, raw_proof, public_inputs):
        vk = self.verification_key(circuit_description)

        if len(public_inputs) != vk.num_public_inputs:
            raise BackendError(
                "public_inputs",
                f"회로의 공개 입력 수는 {vk.num_public_inputs}개인데 "
                f"{len(public_inputs)}개가 주어졌습니다",
            )

        try:
            proof = decode_proof(bytes(raw_proof))
        except ValueError as exc:
            raise BackendError("proof", str(exc)) from exc

        proof_as_fields = [FR(v) for v in public_inputs] + proof_to_fields(proof)
        vk_as_fields = verification_key_to_fields(vk)
        vk_hash = hash_fields(vk_as_fields)
        logger.debug(
            "materialized %d proof fields, %d vk fields",
            len(proof_as_fields), len(vk_as_fields),
        )
        return ArtifactTriple(proof_as_fields, vk_hash, vk_as_fields)
