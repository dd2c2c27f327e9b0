"""
평가 도메인과 다항식 (Evaluation Domain / Polynomial)
=======================================================

검증키의 셀렉터/순열 다항식은 도메인 H = {1, ω, ..., ω^(n-1)} 위의
평가값으로 주어진다. 커밋하려면 계수 표현이 필요하므로 IFFT로 보간한다.

    평가값 ──IFFT──▶ 계수 ──commit──▶ [p(τ)]₁

FFT는 비트 반전 순서로 재배열한 뒤 제자리에서 나비 연산을 하는
반복형 radix-2 구현이다. 도메인 크기는 2의 거듭제곱이어야 한다.
"""

from zkartifacts.plonk.field import FR, get_root_of_unity


class Polynomial:
    """계수 표현 다항식 c₀ + c₁x + c₂x² + ... (최고차 0 계수는 제거됨)."""

    def __init__(self, coeffs=()):
        coeffs = [FR(c) if not isinstance(c, FR) else c for c in coeffs]
        while coeffs and coeffs[-1] == FR(0):
            coeffs.pop()
        self.coeffs = coeffs or [FR(0)]

    @property
    def degree(self):
        # 영 다항식도 0
        return len(self.coeffs) - 1

    def __eq__(self, other):
        return isinstance(other, Polynomial) and self.coeffs == other.coeffs

    def __repr__(self):
        return "Polynomial(%s)" % [int(c) for c in self.coeffs]


class EvaluationDomain:
    """크기 n인 곱셈 부분군 H와 그 위의 (I)FFT.

    속성:
        size: n
        omega: n차 원시 단위근
        elements: [1, ω, ..., ω^(n-1)]
    """

    def __init__(self, size):
        self.size = size
        self.omega = get_root_of_unity(size)
        self.elements = [self.omega ** i for i in range(size)]

    def interpolate(self, evals):
        if len(evals) != self.size:
            raise ValueError(f"평가값 {len(evals)}개는 도메인 크기 {self.size}와 다릅니다")
        return Polynomial(ifft(evals, self.omega))


def _bit_reverse(values):
    n = len(values)
    bits = n.bit_length() - 1
    return [values[int(format(i, f"0{bits}b")[::-1], 2) if bits else 0] for i in range(n)]


def fft(coeffs, omega):
    """계수 → [p(1), p(ω), ..., p(ω^(n-1))]."""
    n = len(coeffs)
    if n & (n - 1):
        raise ValueError(f"FFT 길이는 2의 거듭제곱이어야 합니다: {n}")
    values = _bit_reverse([c if isinstance(c, FR) else FR(c) for c in coeffs])

    span = 1
    while span < n:
        step = omega ** (n // (2 * span))
        for start in range(0, n, 2 * span):
            w = FR(1)
            for j in range(start, start + span):
                lo, hi = values[j], values[j + span] * w
                values[j], values[j + span] = lo + hi, lo - hi
                w = w * step
        span *= 2
    return values


def ifft(evals, omega):
    """평가값 → 계수. ω⁻¹로 FFT한 뒤 n⁻¹을 곱한다."""
    scale = FR(1) / FR(len(evals))
    return [v * scale for v in fft(evals, FR(1) / omega)]
