"""
결정론적 Structured Reference String
=====================================

    g1_powers = [τ⁰·G1, τ¹·G1, ..., τ^d·G1]
    g2_powers = [G2, τ·G2]

검증키의 커밋먼트는 τ에 의존한다. 같은 회로에서 매번 같은 산출물이
나오도록 τ는 설정된 seed의 SHA-256에서 유도한다. 같은 (max_degree, seed)
조합은 프로세스 안에서 한 번만 계산한다.
"""

import functools
import hashlib

from zkartifacts.plonk.field import FR, G1, G2, ec_mul


def derive_tau(seed):
    """seed(정수 또는 문자열) → τ ∈ FR."""
    digest = hashlib.sha256(str(seed).encode()).digest()
    return FR(int.from_bytes(digest, "big"))


class SRS:
    """KZG 공개 파라미터. 생성 후에는 읽기 전용으로 다룬다.

    속성:
        g1_powers: 길이 max_degree + 1
        g2_powers: [G2, τ·G2]
        max_degree: 커밋할 수 있는 최대 차수
    """

    def __init__(self, g1_powers, g2_powers, max_degree):
        self.g1_powers = list(g1_powers)
        self.g2_powers = list(g2_powers)
        self.max_degree = max_degree

    @classmethod
    def generate(cls, max_degree, seed):
        tau = derive_tau(seed)
        powers = [FR(1)]
        while len(powers) <= max_degree:
            powers.append(powers[-1] * tau)
        return cls([ec_mul(G1, p) for p in powers], [G2, ec_mul(G2, tau)], max_degree)


@functools.lru_cache(maxsize=16)
def cached_srs(max_degree, seed):
    return SRS.generate(max_degree, seed)
