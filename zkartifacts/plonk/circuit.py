"""
PLONK 회로 표현 (Circuit Representation)
==========================================

각 게이트는 3개의 배선 a, b, c와 5개의 셀렉터로 구성된다:

    q_L·a + q_R·b + q_O·c + q_M·(a·b) + q_C = 0

  | 유형    | q_L | q_R | q_O | q_M | q_C | 의미              |
  |---------|-----|-----|-----|-----|-----|-------------------|
  | 곱셈    |  0  |  0  | -1  |  1  |  0  | a·b = c           |
  | 덧셈    |  1  |  1  | -1  |  0  |  0  | a + b = c         |
  | 상수덧셈|  1  |  0  | -1  |  0  |  k  | a + k = c         |
  | 공개입력|  0  |  0  |  1  |  0  |  0  | (PI로 처리)       |

**회로 기술(circuit description)**:
  컴파일된 프로그램 산출물의 "circuit" 항목은 다음 JSON 형태이다.

    {
      "gates": [{"q_l": "0", "q_r": "0", "q_o": "-1", "q_m": "1", "q_c": "0"}, ...],
      "copy_constraints": [[0, 0, 1, 1], ...],
      "num_public_inputs": 1
    }

  셀렉터 값은 정수 또는 정수 리터럴 문자열 ("-1", "0x..")이다.
  copy constraint (g1, w1, g2, w2)는 "게이트 g1의 w1번 배선 == 게이트 g2의 w2번 배선",
  배선 번호는 0=a, 1=b, 2=c.
"""

from zkartifacts.plonk.field import FR, parse_int_literal

SELECTORS = ("q_l", "q_r", "q_o", "q_m", "q_c")


def _to_fr(value):
    if isinstance(value, FR):
        return value
    if isinstance(value, bool):
        raise ValueError(f"셀렉터 값으로 bool을 쓸 수 없습니다: {value}")
    if isinstance(value, str):
        value = parse_int_literal(value)
    if not isinstance(value, int):
        raise ValueError(f"셀렉터 값은 정수여야 합니다: {value!r}")
    return FR(value)


class Gate:
    """PLONK 산술 게이트. 셀렉터는 SELECTORS 순서의 FR 속성으로 보관한다."""

    def __init__(self, q_l, q_r, q_o, q_m, q_c):
        for name, value in zip(SELECTORS, (q_l, q_r, q_o, q_m, q_c)):
            setattr(self, name, _to_fr(value))

    def to_dict(self):
        return {name: str(int(getattr(self, name))) for name in SELECTORS}


# 빌더가 쓰는 셀렉터 조합 (q_l, q_r, q_o, q_m, q_c). 상수 게이트의 q_c는 호출 시 채운다.
MUL_GATE = (0, 0, -1, 1, 0)
ADD_GATE = (1, 1, -1, 0, 0)
PUBLIC_INPUT_GATE = (0, 0, 1, 0, 0)
DUMMY_GATE = (0, 0, 0, 0, 0)


class Circuit:
    """게이트 목록과 배선 복사 제약.

    속성:
        gates: Gate 리스트
        copy_constraints: (g1, w1, g2, w2) 튜플 리스트
        num_public_inputs: 공개 입력 수
    """

    def __init__(self):
        self.gates = []
        self.copy_constraints = []
        self.num_public_inputs = 0

    @property
    def n(self):
        """게이트 수 (패딩 전)."""
        return len(self.gates)

    def _push(self, selectors):
        self.gates.append(Gate(*selectors))
        return self.n - 1

    def add_multiplication_gate(self):
        """a · b = c. 새 게이트의 인덱스를 돌려준다."""
        return self._push(MUL_GATE)

    def add_addition_gate(self):
        return self._push(ADD_GATE)

    def add_constant_gate(self, constant):
        """a + constant = c"""
        return self._push((1, 0, -1, 0, constant))

    def add_public_input_gate(self):
        self.num_public_inputs += 1
        return self._push(PUBLIC_INPUT_GATE)

    def add_copy_constraint(self, gate1, wire1, gate2, wire2):
        """gate1의 wire1 배선과 gate2의 wire2 배선이 같은 값을 갖도록 묶는다."""
        self.copy_constraints.append((gate1, wire1, gate2, wire2))

    def pad_to(self, n):
        """셀렉터가 모두 0인 게이트로 n개까지 채운다."""
        for _ in range(n - self.n):
            self._push(DUMMY_GATE)

    def get_selector_polynomials(self):
        """SELECTORS 순서의 셀렉터 열 (각각 FR 리스트, 길이 n)."""
        columns = {name: [] for name in SELECTORS}
        for gate in self.gates:
            for name in SELECTORS:
                columns[name].append(getattr(gate, name))
        return tuple(columns[name] for name in SELECTORS)

    def build_copy_constraints(self):
        """배선 순열 σ (길이 3n).

        위치 번호는 배선 w, 게이트 g에 대해 w·n + g (a 블록, b 블록, c 블록 순).
        항등 순열에서 copy constraint마다 두 위치를 맞바꾸면 같은 값이어야 하는
        위치들이 하나의 순환으로 묶인다.
        """
        n = self.n
        sigma = list(range(3 * n))
        for gate_a, wire_a, gate_b, wire_b in self.copy_constraints:
            i, j = wire_a * n + gate_a, wire_b * n + gate_b
            sigma[i], sigma[j] = sigma[j], sigma[i]
        return sigma

    def to_dict(self):
        """회로 기술(JSON 호환 dict)로 변환한다."""
        return {
            "gates": [g.to_dict() for g in self.gates],
            "copy_constraints": [list(c) for c in self.copy_constraints],
            "num_public_inputs": self.num_public_inputs,
        }

    @classmethod
    def from_dict(cls, data):
        """회로 기술에서 Circuit을 복원한다.

        Raises:
            ValueError: 형식이 잘못되었거나 게이트/배선 인덱스가 범위를 벗어날 때
        """
        if not isinstance(data, dict):
            raise ValueError("회로 기술은 JSON 객체여야 합니다")
        gates = data.get("gates")
        if not isinstance(gates, list) or not gates:
            raise ValueError("회로 기술에 게이트가 없습니다")

        circuit = cls()
        for i, gate in enumerate(gates):
            if not isinstance(gate, dict):
                raise ValueError(f"게이트 {i}의 형식이 잘못되었습니다")
            missing = [name for name in SELECTORS if name not in gate]
            if missing:
                raise ValueError(f"게이트 {i}에 셀렉터가 없습니다: {', '.join(missing)}")
            circuit.gates.append(Gate(*(gate[name] for name in SELECTORS)))

        copy_constraints = data.get("copy_constraints", [])
        if not isinstance(copy_constraints, list):
            raise ValueError(f"copy_constraints는 리스트여야 합니다: {copy_constraints!r}")
        for entry in copy_constraints:
            if not isinstance(entry, (list, tuple)) or len(entry) != 4:
                raise ValueError(f"copy constraint 형식이 잘못되었습니다: {entry!r}")
            g1, w1, g2, w2 = entry
            for g, w in ((g1, w1), (g2, w2)):
                if not (isinstance(g, int) and 0 <= g < circuit.n):
                    raise ValueError(f"게이트 인덱스가 범위를 벗어났습니다: {g!r}")
                if w not in (0, 1, 2):
                    raise ValueError(f"배선 번호는 0, 1, 2 중 하나여야 합니다: {w!r}")
            circuit.add_copy_constraint(g1, w1, g2, w2)

        num_public_inputs = data.get("num_public_inputs", 0)
        if not isinstance(num_public_inputs, int) or isinstance(num_public_inputs, bool) \
                or num_public_inputs < 0:
            raise ValueError(f"num_public_inputs 값이 잘못되었습니다: {num_public_inputs!r}")
        circuit.num_public_inputs = num_public_inputs
        return circuit
