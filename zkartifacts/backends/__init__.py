"""
백엔드 어댑터 계약 (Backend Adapter Contract)
==============================================

이 패키지는 증명 시스템 자체를 구현하지 않는다. 외부(또는 프로세스 내)
백엔드에 다음 두 가지를 요청하는 계약만 정의한다.

  get_capabilities()
      → (ConstraintLanguage, 지원 opcode 집합)
      실행당 한 번 조회하며 컴파일 단계에 그대로 전달한다.

  materialize_artifacts(circuit_description, raw_proof, public_inputs)
      → ArtifactTriple(proof_as_fields, vk_hash, vk_as_fields)

  ┌──────────────────┐   ┌──────────────┐   ┌──────────────────────┐
  │ 회로 기술 (opaque) │ + │ 증명 바이트   │ + │ 인코딩된 공개 입력     │
  └────────┬─────────┘   └──────┬───────┘   └──────────┬───────────┘
           └──────────────┬─────┴──────────────────────┘
                          ▼
      proof_as_fields │ vk_hash │ vk_as_fields   (모두 FR 원소)

계약 불변식:
  - 같은 입력이면 항상 비트 단위로 같은 산출물 (결정론)
  - 모든 실패는 BackendError(stage, message)로 보고하며 재시도하지 않음

구현체:
  - PlonkBackend  (zkartifacts.backends.plonk): 프로세스 내 PLONK
  - BinaryBackend (zkartifacts.backends.binary): 외부 실행 파일
"""

import abc
import collections


ConstraintLanguage = collections.namedtuple("ConstraintLanguage", ["name", "width"])

# 출력/조회 순서가 고정된 산출물 세 가지
ArtifactTriple = collections.namedtuple(
    "ArtifactTriple", ["proof_as_fields", "vk_hash", "vk_as_fields"]
)


class Backend(abc.ABC):
    """증명 백엔드 계약."""

    name = None

    @abc.abstractmethod
    def get_capabilities(self):
        """(ConstraintLanguage, frozenset[str]) 를 반환한다."""

    @abc.abstractmethod
    def materialize_artifacts(self, circuit_description, raw_proof, public_inputs):
        """ArtifactTriple을 반환한다. 실패 시 BackendError."""


def get_backend(settings):
    """설정에 맞는 백엔드 구현체를 만든다."""
    if settings.backend == "plonk":
        from zkartifacts.backends.plonk import PlonkBackend
        return PlonkBackend(srs_seed=settings.srs_seed)
    if settings.backend == "binary":
        from zkartifacts.backends.binary import BinaryBackend
        return BinaryBackend(settings.backend_path)
    raise ValueError(f"알 수 없는 백엔드입니다: {settings.backend!r}")
