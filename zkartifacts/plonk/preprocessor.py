"""
PLONK 전처리기 (Preprocessor)
===============================

회로 구조에서 검증키(verification key)를 만든다.

**전처리 출력물**:
  - 도메인 정보: n, ω
  - 셀렉터 커밋먼트: [q_M]₁, [q_L]₁, [q_R]₁, [q_O]₁, [q_C]₁
  - 순열 커밋먼트: [S_σ1]₁, [S_σ2]₁, [S_σ3]₁
  - 공개 입력 수

다항식 원본은 증명 생성에만 필요하므로 보관하지 않고 커밋먼트만 남긴다.

사용 예시:
    >>> srs = SRS.generate(max_degree=3 * n + 10, seed=12345)
    >>> vk = preprocess(circuit, srs)
    >>> vk.q_m_comm
"""

from zkartifacts.plonk.circuit import SELECTORS
from zkartifacts.plonk.kzg import commit_evaluations
from zkartifacts.plonk.polynomial import EvaluationDomain
from zkartifacts.plonk.permutation import build_permutation_polynomials


# 검증키에 나열되는 커밋먼트 순서
COMMITMENT_ORDER = (
    "q_m_comm", "q_l_comm", "q_r_comm", "q_o_comm", "q_c_comm",
    "s_sigma1_comm", "s_sigma2_comm", "s_sigma3_comm",
)


class PreprocessedData:
    """전처리된 회로 데이터 (검증키).

    속성:
        n, omega: 도메인 크기와 n차 원시 단위근
        q_*_comm, s_sigma*_comm: G1 커밋먼트
        num_public_inputs: 공개 입력 수
        g2_tau: SRS의 [τ]₂ (페어링 검증에 쓰이는 유일한 G2 원소)
    """

    def commitments(self):
        """COMMITMENT_ORDER 순서의 커밋먼트 리스트."""
        return [getattr(self, name) for name in COMMITMENT_ORDER]


def next_power_of_2(n):
    """n 이상의 가장 작은 2의 거듭제곱. 예: 3 → 4, 5 → 8"""
    p = 1
    while p < n:
        p <<= 1
    return p


def domain_size(circuit):
    """회로가 패딩될 도메인 크기 n."""
    return next_power_of_2(circuit.n)


def preprocess(circuit, srs):
    """회로를 전처리하여 검증키를 만든다.

    회로 게이트는 도메인 크기까지 더미 게이트로 패딩된다 (circuit 변경).

    Raises:
        ValueError: 다항식 차수가 SRS 최대 차수를 넘을 때
    """
    result = PreprocessedData()

    n = domain_size(circuit)
    circuit.pad_to(n)
    domain = EvaluationDomain(n)
    result.n = n
    result.omega = domain.omega

    selectors = dict(zip(SELECTORS, circuit.get_selector_polynomials()))
    for name in SELECTORS:
        setattr(result, f"{name}_comm", commit_evaluations(selectors[name], domain, srs))

    sigma = circuit.build_copy_constraints()
    s_evals = build_permutation_polynomials(sigma, n, domain.elements)
    for i, evals in enumerate(s_evals, start=1):
        setattr(result, f"s_sigma{i}_comm", commit_evaluations(evals, domain, srs))

    result.num_public_inputs = circuit.num_public_inputs
    result.g2_tau = srs.g2_powers[1]
    return result
