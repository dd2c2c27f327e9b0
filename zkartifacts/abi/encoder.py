"""
공개 입력 인코더
=================

이름 붙은 입력 값을 공개 스키마(PublicAbi)의 선언 순서대로 FR 원소 나열로
바꾼다. 이 나열은 증명 생성 때 쓰인 공개 입력과 정확히 같아야 하므로
인코딩은 입력에 대한 순수·결정론적 함수이다.

값 규칙:
  | 타입        | 허용 값                         | 인코딩                       |
  |-------------|---------------------------------|------------------------------|
  | Field       | int, FR                         | v mod p (v ≥ p 는 불일치)     |
  | bool        | bool                            | 1 / 0                        |
  | u<w> / i<w> | int (범위 안)                   | v mod 2^w                    |
  | str<n>      | UTF-8 n바이트인 str             | 바이트마다 원소 하나          |
  | [T; n]      | 길이 n인 list/tuple             | 원소 순서대로                 |
  | struct      | 멤버 이름이 정확히 같은 dict     | 선언된 멤버 순서대로          |
  | tuple       | 길이가 같은 list/tuple          | 위치 순서대로                 |

예시:
    >>> view = derive_public_view(abi)        # [a: Field, b: bool]
    >>> encode(view, {"b": True, "a": 7})     # [FR(7), FR(1)]
"""

from zkartifacts.abi import (
    FieldType, BooleanType, IntegerType, StringType,
    ArrayType, StructType, TupleType,
    MAIN_RETURN_NAME,
)
from zkartifacts.errors import (
    MissingInputError, TypeMismatchError, UnexpectedInputError,
)
from zkartifacts.plonk.field import FR, CURVE_ORDER


def encode(public_view, named_values, return_value=None):
    """공개 입력을 FR 원소 리스트로 인코딩한다.

    Args:
        public_view: PublicAbi
        named_values: 매개변수 이름 → 값. 비공개 매개변수 값은 들어 있어도 읽지 않는다.
        return_value: 공개 반환 슬롯이 있을 때의 반환값. 슬롯이 없으면 무시한다.

    Returns:
        list[FR]: 선언 순서의 필드 원소 나열 (공개 반환값은 마지막)

    Raises:
        UnexpectedInputError: 원본 스키마에 없는 이름이 있을 때
        MissingInputError: 공개 매개변수(또는 공개 반환값)가 없을 때
        TypeMismatchError: 값이 선언된 타입과 맞지 않을 때
    """
    for name in named_values:
        if name not in public_view.schema_names:
            raise UnexpectedInputError(name)

    fields = []
    for param in public_view.parameters:
        if param.name not in named_values:
            raise MissingInputError(param.name)
        fields.extend(encode_value(param.type, named_values[param.name], param.name))

    if public_view.return_type is not None:
        if return_value is None:
            raise MissingInputError(MAIN_RETURN_NAME)
        fields.extend(encode_value(public_view.return_type, return_value, MAIN_RETURN_NAME))

    return fields


def encode_value(abi_type, value, path):
    """값 하나를 타입 정의에 따라 필드 원소 리스트로 바꾼다.

    path는 오류 보고용 경로 (예: "s.inner", "xs[2]").
    """
    if isinstance(abi_type, FieldType):
        return [_encode_field(value, path)]

    if isinstance(abi_type, BooleanType):
        if not isinstance(value, bool):
            raise TypeMismatchError(path, str(abi_type), _describe(value))
        return [FR(1) if value else FR(0)]

    if isinstance(abi_type, IntegerType):
        return [_encode_integer(abi_type, value, path)]

    if isinstance(abi_type, StringType):
        if not isinstance(value, str):
            raise TypeMismatchError(path, str(abi_type), _describe(value))
        data = value.encode("utf-8")
        if len(data) != abi_type.length:
            raise TypeMismatchError(path, str(abi_type), f"str<{len(data)}>")
        return [FR(b) for b in data]

    if isinstance(abi_type, ArrayType):
        if not isinstance(value, (list, tuple)):
            raise TypeMismatchError(path, str(abi_type), _describe(value))
        if len(value) != abi_type.length:
            raise TypeMismatchError(path, str(abi_type), f"array of length {len(value)}")
        fields = []
        for i, item in enumerate(value):
            fields.extend(encode_value(abi_type.element, item, f"{path}[{i}]"))
        return fields

    if isinstance(abi_type, StructType):
        if not isinstance(value, dict):
            raise TypeMismatchError(path, str(abi_type), _describe(value))
        declared = [name for name, _ in abi_type.fields]
        extra = [key for key in value if key not in declared]
        if extra:
            raise TypeMismatchError(
                path, str(abi_type), f"table with unknown member `{extra[0]}`"
            )
        fields = []
        for name, member_type in abi_type.fields:
            member_path = f"{path}.{name}"
            if name not in value:
                raise MissingInputError(member_path)
            fields.extend(encode_value(member_type, value[name], member_path))
        return fields

    if isinstance(abi_type, TupleType):
        if not isinstance(value, (list, tuple)):
            raise TypeMismatchError(path, str(abi_type), _describe(value))
        if len(value) != len(abi_type.fields):
            raise TypeMismatchError(path, str(abi_type), f"tuple of length {len(value)}")
        fields = []
        for i, (member_type, item) in enumerate(zip(abi_type.fields, value)):
            fields.extend(encode_value(member_type, item, f"{path}.{i}"))
        return fields

    raise TypeError(f"지원하지 않는 ABI 타입입니다: {abi_type!r}")


def _encode_field(value, path):
    if isinstance(value, FR):
        return value
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeMismatchError(path, "Field", _describe(value))
    if value >= CURVE_ORDER:
        raise TypeMismatchError(path, "Field", "integer exceeding the field modulus")
    return FR(value)


def _encode_integer(abi_type, value, path):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeMismatchError(path, str(abi_type), _describe(value))
    width = abi_type.width
    if abi_type.signed:
        lo, hi = -(1 << (width - 1)), (1 << (width - 1)) - 1
    else:
        lo, hi = 0, (1 << width) - 1
    if not lo <= value <= hi:
        raise TypeMismatchError(path, str(abi_type), f"integer {value} out of range")
    return FR(value % (1 << width))


def _describe(value):
    """오류 메시지용 값 형태 설명."""
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return f"array of length {len(value)}"
    if isinstance(value, dict):
        return "table"
    return type(value).__name__
