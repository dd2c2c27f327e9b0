"""
순열 다항식 (Permutation Polynomials)
======================================

3n개의 배선 위치를 서로 겹치지 않는 세 코셋으로 식별한다:
  - a 배선: {ω⁰, ..., ω^{n-1}}            (1·H)
  - b 배선: {K1·ω⁰, ..., K1·ω^{n-1}}      (K1·H)
  - c 배선: {K2·ω⁰, ..., K2·ω^{n-1}}      (K2·H)

S_σ1, S_σ2, S_σ3는 순열 σ가 가리키는 위치의 식별값을 인코딩한다.
"""

from zkartifacts.plonk.field import FR

# 코셋 식별자: H, K1·H, K2·H가 서로 다른 코셋이 되는 값
K1 = FR(2)
K2 = FR(3)


def build_permutation_polynomials(sigma, n, domain):
    """순열 σ → (S_σ1, S_σ2, S_σ3) 평가값 리스트 (각각 길이 n).

    Args:
        sigma: 순열 배열 (길이 3n, Circuit.build_copy_constraints())
        n: 도메인 크기
        domain: [ω⁰, ω¹, ..., ω^{n-1}]
    """
    def position_to_value(pos):
        if pos < n:
            return domain[pos]
        elif pos < 2 * n:
            return K1 * domain[pos - n]
        return K2 * domain[pos - 2 * n]

    return tuple(
        [position_to_value(sigma[offset + i]) for i in range(n)]
        for offset in (0, n, 2 * n)
    )
