"""
Fiat-Shamir 트랜스크립트
=========================

레이블이 붙은 FR 원소를 차례로 흡수하고 SHA-256으로 챌린지를 짜낸다.
같은 순서로 같은 데이터를 넣으면 항상 같은 값이 나온다.

검증키 해시(vk hash)는 검증키 필드 원소 전체를 흡수한 뒤
챌린지 하나를 뽑아 만든다 (hash_fields).

사용 예시:
    >>> t = Transcript(b"plonk_vk")
    >>> t.append_scalar(b"vk", FR(4))
    >>> digest = t.challenge_scalar(b"vk_hash")
"""

import hashlib

from zkartifacts.plonk.field import FR, CURVE_ORDER, fr_to_bytes


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    챌린지를 뽑을 때마다 그 해시 값이 다음 입력 앞에 이어진다.
    """

    def __init__(self, label=b"plonk"):
        self._buffer = bytearray(label)

    def append_scalar(self, label, scalar):
        """레이블 뒤에 FR 원소의 32바이트 빅엔디안 표현을 붙인다."""
        if not isinstance(scalar, FR):
            scalar = FR(scalar)
        self._buffer += label + fr_to_bytes(scalar)

    def challenge_scalar(self, label):
        self._buffer += label
        digest = hashlib.sha256(self._buffer).digest()
        self._buffer += digest
        return FR(int.from_bytes(digest, "big") % CURVE_ORDER)


def hash_fields(fields, label=b"plonk_vk"):
    """필드 원소 나열의 결정론적 해시 (FR 원소 하나)."""
    transcript = Transcript(label)
    for value in fields:
        transcript.append_scalar(b"vk", value)
    return transcript.challenge_scalar(b"vk_hash")
