"""
PLONK circuit, permutation, preprocessor 모듈 테스트.

테스트 대상:
  - Gate: 생성, check 메서드, 회로 기술 변환
  - Circuit: 게이트 추가, copy constraint, to_dict / from_dict
  - permutation: build_permutation_polynomials
  - preprocessor: 도메인 크기, 결정론성
"""

import pytest

from zkartifacts.plonk.field import FR, CURVE_ORDER
from zkartifacts.plonk.circuit import Gate, Circuit
from zkartifacts.plonk.permutation import K1, K2, build_permutation_polynomials
from zkartifacts.plonk.polynomial import EvaluationDomain
from zkartifacts.plonk.preprocessor import (
    COMMITMENT_ORDER, next_power_of_2, domain_size, preprocess,
)
from zkartifacts.plonk.srs import SRS


def gate_holds(gate, a, b, c):
    """q_L·a + q_R·b + q_O·c + q_M·(a·b) + q_C == 0"""
    a, b, c = FR(a), FR(b), FR(c)
    return gate.q_l * a + gate.q_r * b + gate.q_o * c + gate.q_m * a * b + gate.q_c == FR(0)


# ─────────────────────────────────────────────────────────────────────
# Gate 테스트
# ─────────────────────────────────────────────────────────────────────

class TestGate:
    """Gate 클래스 테스트."""

    def test_gate_creation_with_int(self):
        """정수로 게이트 생성 (자동 FR 변환)."""
        g = Gate(1, 2, 3, 4, 5)
        assert (g.q_l, g.q_r, g.q_o, g.q_m, g.q_c) == (FR(1), FR(2), FR(3), FR(4), FR(5))

    def test_gate_creation_with_literal(self):
        g = Gate("0", "0", "-1", "0x1", "0")
        assert g.q_o == FR(CURVE_ORDER - 1)
        assert g.q_m == FR(1)

    def test_bool_selector_rejected(self):
        with pytest.raises(ValueError):
            Gate(True, 0, 0, 0, 0)

    def test_multiplication_gate_check(self):
        """곱셈 게이트: a * b = c."""
        g = Gate(0, 0, -1, 1, 0)
        assert gate_holds(g, 3, 7, 21) is True
        assert gate_holds(g, 3, 7, 20) is False

    def test_constant_gate_check(self):
        g = Gate(1, 0, -1, 0, 5)
        assert gate_holds(g, 30, 0, 35) is True

    def test_to_dict(self):
        g = Gate(0, 0, -1, 1, 0)
        assert g.to_dict()["q_o"] == str(CURVE_ORDER - 1)
        assert g.to_dict()["q_m"] == "1"


# ─────────────────────────────────────────────────────────────────────
# Circuit 테스트
# ─────────────────────────────────────────────────────────────────────

class TestCircuit:
    """Circuit 클래스 테스트."""

    def test_builders_return_indices(self):
        c = Circuit()
        assert c.add_public_input_gate() == 0
        assert c.add_multiplication_gate() == 1
        assert c.add_addition_gate() == 2
        assert c.add_constant_gate(5) == 3
        assert c.n == 4
        assert c.num_public_inputs == 1

    def test_pad_to(self):
        c = Circuit()
        c.add_multiplication_gate()
        c.pad_to(4)
        assert c.n == 4
        assert gate_holds(c.gates[3], 123, 456, 789) is True

    def test_copy_constraints_swap(self):
        c = Circuit()
        c.add_multiplication_gate()
        c.add_multiplication_gate()
        c.add_copy_constraint(0, 2, 1, 0)  # gate0.c == gate1.a
        sigma = c.build_copy_constraints()
        # n=2: gate0.c = 2n+0 = 4, gate1.a = 1
        assert sigma[4] == 1
        assert sigma[1] == 4
        assert sorted(sigma) == list(range(6))

    def test_dict_round_trip(self, circuit_description):
        c = Circuit.from_dict(circuit_description)
        assert c.to_dict() == circuit_description

    def test_from_dict_accepts_integer_selectors(self):
        data = {"gates": [{"q_l": 1, "q_r": 1, "q_o": -1, "q_m": 0, "q_c": 0}]}
        c = Circuit.from_dict(data)
        assert gate_holds(c.gates[0], 2, 3, 5)
        assert c.num_public_inputs == 0

    @pytest.mark.parametrize("data", [
        [],
        {"gates": []},
        {"gates": [{"q_l": 0}]},
        {"gates": [{"q_l": 0, "q_r": 0, "q_o": 0, "q_m": 0, "q_c": "x"}]},
        {"gates": [{"q_l": 0, "q_r": 0, "q_o": 0, "q_m": 0, "q_c": 0}],
         "copy_constraints": [[0, 0, 1, 0]]},
        {"gates": [{"q_l": 0, "q_r": 0, "q_o": 0, "q_m": 0, "q_c": 0}],
         "copy_constraints": [[0, 3, 0, 0]]},
        {"gates": [{"q_l": 0, "q_r": 0, "q_o": 0, "q_m": 0, "q_c": 0}],
         "num_public_inputs": -1},
        {"gates": [{"q_l": 0, "q_r": 0, "q_o": 0, "q_m": 0, "q_c": 0}],
         "copy_constraints": 5},
    ])
    def test_from_dict_rejects(self, data):
        with pytest.raises(ValueError):
            Circuit.from_dict(data)


# ─────────────────────────────────────────────────────────────────────
# Permutation 테스트
# ─────────────────────────────────────────────────────────────────────

class TestPermutation:

    def test_identity_permutation(self):
        n = 4
        domain = EvaluationDomain(n).elements
        s1, s2, s3 = build_permutation_polynomials(list(range(3 * n)), n, domain)
        assert s1 == domain
        assert s2 == [K1 * w for w in domain]
        assert s3 == [K2 * w for w in domain]

    def test_swapped_positions(self):
        n = 2
        domain = EvaluationDomain(n).elements
        sigma = [4, 1, 2, 3, 0, 5]
        s1, _, s3 = build_permutation_polynomials(sigma, n, domain)
        assert s1[0] == K2 * domain[0]
        assert s3[0] == domain[0]


# ─────────────────────────────────────────────────────────────────────
# Preprocessor 테스트
# ─────────────────────────────────────────────────────────────────────

class TestPreprocess:

    @pytest.mark.parametrize("n, expected", [(1, 1), (2, 2), (3, 4), (5, 8), (8, 8)])
    def test_next_power_of_2(self, n, expected):
        assert next_power_of_2(n) == expected

    def test_domain_size(self, circuit_description):
        c = Circuit.from_dict(circuit_description)
        assert domain_size(c) == 2

    def test_vk_contents(self, circuit_description):
        srs = SRS.generate(16, seed=1)
        vk = preprocess(Circuit.from_dict(circuit_description), srs)
        assert vk.n == 2
        assert vk.omega == FR(-1)
        assert vk.num_public_inputs == 1
        assert vk.g2_tau == srs.g2_powers[1]
        assert len(vk.commitments()) == len(COMMITMENT_ORDER)

    def test_deterministic(self, circuit_description):
        srs = SRS.generate(16, seed=1)
        vk1 = preprocess(Circuit.from_dict(circuit_description), srs)
        vk2 = preprocess(Circuit.from_dict(circuit_description), srs)
        assert vk1.commitments() == vk2.commitments()

    def test_srs_too_small(self):
        c = Circuit()
        for k in range(1, 5):
            c.add_constant_gate(k)
        with pytest.raises(ValueError):
            preprocess(c, SRS.generate(1, seed=1))
