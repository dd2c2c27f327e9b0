"""
KZG 커밋먼트
=============

[p]₁ = Σ cᵢ·[τⁱ]₁ = p(τ)·G1

열기 증명과 페어링 검증은 외부 검증기가 하므로 여기서는 커밋만 한다.
"""

from zkartifacts.plonk.field import ec_add, ec_mul


def commit(poly, srs):
    """계수 표현 다항식을 커밋한다. 영 다항식은 무한원점(None).

    Raises:
        ValueError: 차수가 srs.max_degree보다 클 때
    """
    if poly.degree > srs.max_degree:
        raise ValueError(f"차수 {poly.degree} > SRS 최대 차수 {srs.max_degree}")
    point = None
    for base, coeff in zip(srs.g1_powers, poly.coeffs):
        if int(coeff):
            point = ec_add(point, ec_mul(base, coeff))
    return point


def commit_evaluations(evals, domain, srs):
    """도메인 위의 평가값으로 주어진 다항식을 보간해 커밋한다."""
    return commit(domain.interpolate(evals), srs)
