"""
PLONK 기반 모듈: 유한체(Finite Field), 타원곡선 점, 필드 원소 표현
====================================================================

산출물(artifact) 파이프라인 전체에서 사용하는 기본 대수 도구를 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드. 공개 입력, 증명, 검증키는 모두
  최종적으로 FR 원소의 나열(field sequence)로 표현된다.

**기저체 좌표의 limb 분할**:
  G1 점의 좌표는 기저체 Fq 원소이고 Fq의 위수는 FR의 위수보다 크다.
  따라서 좌표 하나를 FR 원소 두 개 (하위 136비트, 상위 비트)로 나누어
  표현한다. 온체인 검증기가 FR 원소만 인자로 받기 때문이다.

사용 예시:
    >>> from zkartifacts.plonk.field import FR, split_limbs, to_hex
    >>> split_limbs(2 ** 140 + 1)   # [FR(1), FR(16)]
    >>> to_hex(FR(255))             # '0x00...ff'
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ를 상속하여 +, -, *, /, ** 필드 연산을 제공한다.
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (FR 필드 크기)
CURVE_ORDER = bn128.curve_order

# 기저체 Fq의 위수 (G1/G2 좌표의 범위)
BASE_MODULUS = bn128.field_modulus

# FR 원소 및 좌표 하나의 직렬화 크기 (32바이트 빅엔디안)
FIELD_BYTES = 32

# limb 분할 기준: 하위 limb 136비트, 상위 limb 나머지 (≤ 118비트)
LIMB_BITS = 136

G1 = bn128.G1
G2 = bn128.G2


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 연산
# ─────────────────────────────────────────────────────────────────────

def ec_mul(point, scalar):
    """scalar · point (G1 또는 G2). scalar는 정수나 FR."""
    return bn128.multiply(point, int(scalar) % CURVE_ORDER)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2. 무한원점은 None."""
    return bn128.add(p1, p2)


def g1_from_ints(x, y):
    """정수 좌표 (x, y)로 G1 점을 만든다.

    (0, 0)은 무한원점(None)으로 해석한다.

    Raises:
        ValueError: 좌표가 Fq 범위를 벗어나거나 점이 곡선 위에 없을 때
    """
    if x == 0 and y == 0:
        return None
    if x >= BASE_MODULUS or y >= BASE_MODULUS:
        raise ValueError(f"좌표가 기저체 범위를 벗어났습니다: ({x}, {y})")
    point = (FQ(x), FQ(y))
    if not bn128.is_on_curve(point, bn128.b):
        raise ValueError(f"점이 bn128 곡선 위에 있지 않습니다: ({x}, {y})")
    return point


def g1_to_ints(point):
    """G1 점 → (x, y) 정수 쌍. 무한원점은 (0, 0)."""
    if point is None:
        return 0, 0
    return int(point[0]), int(point[1])


# ─────────────────────────────────────────────────────────────────────
# 단위근 (Roots of Unity)
# ─────────────────────────────────────────────────────────────────────

# p - 1 = 2^28 · m, FR(5)는 곱셈군의 생성자
TWO_ADICITY = 28
MULTIPLICATIVE_GENERATOR = FR(5)


def get_root_of_unity(n):
    """n차 원시 단위근 ω = g^((p-1)/n).

    Raises:
        ValueError: n이 2의 거듭제곱이 아니거나 2^TWO_ADICITY보다 클 때
    """
    if n <= 0 or n & (n - 1):
        raise ValueError(f"도메인 크기는 2의 거듭제곱이어야 합니다: {n}")
    if n.bit_length() - 1 > TWO_ADICITY:
        raise ValueError(f"도메인 크기가 2^{TWO_ADICITY}를 넘습니다: {n}")
    return MULTIPLICATIVE_GENERATOR ** ((CURVE_ORDER - 1) // n)


# ─────────────────────────────────────────────────────────────────────
# 필드 원소 표현 (limb, 바이트, 16진수)
# ─────────────────────────────────────────────────────────────────────

def split_limbs(value):
    """Fq 정수를 [하위 136비트, 상위 비트] 두 개의 FR 원소로 나눈다.

    예시:
        >>> split_limbs((5 << 136) + 7)  # [FR(7), FR(5)]
    """
    value = int(value)
    lo = value & ((1 << LIMB_BITS) - 1)
    hi = value >> LIMB_BITS
    return [FR(lo), FR(hi)]


def g1_limbs(point):
    """G1 점 → [x_lo, x_hi, y_lo, y_hi]. 무한원점은 네 개의 0."""
    x, y = g1_to_ints(point)
    return split_limbs(x) + split_limbs(y)


def g2_limbs(point):
    """G2 점 → 좌표 x.c0, x.c1, y.c0, y.c1 각각의 limb 쌍 (총 8개)."""
    limbs = []
    for coord in point:
        for c in coord.coeffs:
            limbs.extend(split_limbs(int(c)))
    return limbs


def fr_to_bytes(value):
    """FR(또는 정수) → 32바이트 빅엔디안."""
    return (int(value) % CURVE_ORDER).to_bytes(FIELD_BYTES, "big")


def fr_from_bytes(data):
    """32바이트 빅엔디안 → FR.

    Raises:
        ValueError: 값이 필드 위수 이상일 때 (정규형이 아님)
    """
    value = int.from_bytes(data, "big")
    if value >= CURVE_ORDER:
        raise ValueError(f"스칼라 값이 필드 위수 이상입니다: {value}")
    return FR(value)


def parse_int_literal(text):
    """정수 리터럴 문자열을 해석한다: 10진수, '0x' 16진수, 선행 '-' 허용.

    예시:
        >>> parse_int_literal("0x1f")   # 31
        >>> parse_int_literal("-3")     # -3

    Raises:
        ValueError: 정수 리터럴이 아닐 때
    """
    s = text.strip()
    negative = s.startswith("-")
    if negative:
        s = s[1:]
    if s[:2].lower() == "0x":
        digits, base = s[2:], 16
    else:
        digits, base = s, 10
    if not digits or not digits.isalnum():
        raise ValueError(f"정수 리터럴이 아닙니다: {text!r}")
    value = int(digits, base)
    return -value if negative else value


def to_hex(value):
    """FR → '0x' + 64자리 16진수 (출력/저장용 정규 표현)."""
    return "0x" + format(int(value), "064x")


def from_hex(text):
    """'0x...' 16진수 문자열 → FR.

    Raises:
        ValueError: 16진수가 아니거나 필드 위수 이상일 때
    """
    value = int(text, 16)
    if value < 0 or value >= CURVE_ORDER:
        raise ValueError(f"필드 원소 범위를 벗어났습니다: {text}")
    return FR(value)
