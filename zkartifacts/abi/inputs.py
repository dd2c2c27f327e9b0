"""
입력 파일 읽기
===============

대상(package)마다 사람이 편집하는 구조화 파일 (기본: Verifier.toml)에서
공개 매개변수 값과 반환값을 읽는다.

스키마가 해석을 결정한다:
  - Field / 정수: TOML 정수 또는 문자열 ("0x1f", "42", "-1")
  - bool: TOML boolean
  - str<n>: 문자열
  - 배열, 튜플: 리스트
  - 구조체: 테이블

공개 매개변수와 `return` 키만 해석한다. 비공개 매개변수 값이 파일에 있어도
해석하지 않는다. 없는 키는 건너뛰며, 누락과 스키마에 없는 이름의 보고는 인코더(encode)가 한다.

예시 Verifier.toml:
    a = "0x07"
    b = true
    return = "35"
"""

import enum
import json
import logging
from pathlib import Path

import toml

from zkartifacts.abi import (
    FieldType, BooleanType, IntegerType, StringType,
    ArrayType, StructType, TupleType,
    MAIN_RETURN_NAME,
)
from zkartifacts.errors import NotFoundError, DecodeError, TypeMismatchError
from zkartifacts.plonk.field import parse_int_literal

logger = logging.getLogger(__name__)


class Format(enum.Enum):
    TOML = "toml"
    JSON = "json"

    @property
    def ext(self):
        return self.value

    def parse(self, text):
        if self is Format.TOML:
            return toml.loads(text)
        return json.loads(text)


def read_inputs_from_file(root_dir, file_name, fmt, public_view):
    """<root_dir>/<file_name>.<ext> 에서 공개 입력을 읽는다.

    Returns:
        tuple: (named_values, return_value). 반환값이 없으면 None.

    Raises:
        NotFoundError: 파일이 없을 때
        DecodeError: 파일이 TOML/JSON으로 해석되지 않을 때
        TypeMismatchError: 값을 선언된 타입으로 읽을 수 없을 때
    """
    path = Path(root_dir) / f"{file_name}.{fmt.ext}"
    if not path.is_file():
        raise NotFoundError(path)

    try:
        data = fmt.parse(path.read_text(encoding="utf-8"))
    except (toml.TomlDecodeError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeError(path, str(exc)) from exc
    if not isinstance(data, dict):
        raise DecodeError(path, "최상위 값이 테이블이 아닙니다")

    named_values = {}
    for param in public_view.parameters:
        if param.name in data:
            named_values[param.name] = parse_value(param.type, data[param.name], param.name)
    # 스키마에 없는 키는 해석하지 않고 넘겨 인코더가 UnexpectedInputError로 보고하게 한다
    for key, raw in data.items():
        if key != MAIN_RETURN_NAME and key not in public_view.schema_names:
            named_values[key] = raw

    return_value = None
    if public_view.return_type is not None and MAIN_RETURN_NAME in data:
        return_value = parse_value(public_view.return_type, data[MAIN_RETURN_NAME], MAIN_RETURN_NAME)

    logger.debug("read %d public inputs from %s", len(named_values), path)
    return named_values, return_value


def parse_value(abi_type, raw, path):
    """파일에서 읽은 원시 값을 타입 정의에 맞는 파이썬 값으로 바꾼다."""
    if isinstance(abi_type, (FieldType, IntegerType)):
        if isinstance(raw, bool):
            raise TypeMismatchError(path, str(abi_type), "bool")
        if isinstance(raw, int):
            return raw
        if isinstance(raw, str):
            try:
                return parse_int_literal(raw)
            except ValueError:
                raise TypeMismatchError(path, str(abi_type), f"string {raw!r}") from None
        raise TypeMismatchError(path, str(abi_type), type(raw).__name__)

    if isinstance(abi_type, BooleanType):
        if not isinstance(raw, bool):
            raise TypeMismatchError(path, str(abi_type), type(raw).__name__)
        return raw

    if isinstance(abi_type, StringType):
        if not isinstance(raw, str):
            raise TypeMismatchError(path, str(abi_type), type(raw).__name__)
        return raw

    if isinstance(abi_type, ArrayType):
        if not isinstance(raw, list):
            raise TypeMismatchError(path, str(abi_type), type(raw).__name__)
        return [parse_value(abi_type.element, item, f"{path}[{i}]") for i, item in enumerate(raw)]

    if isinstance(abi_type, StructType):
        if not isinstance(raw, dict):
            raise TypeMismatchError(path, str(abi_type), type(raw).__name__)
        members = dict(abi_type.fields)
        # 선언되지 않은 멤버는 그대로 두어 인코더가 보고하게 한다
        return {
            key: parse_value(members[key], value, f"{path}.{key}") if key in members else value
            for key, value in raw.items()
        }

    if isinstance(abi_type, TupleType):
        if not isinstance(raw, list) or len(raw) != len(abi_type.fields):
            raise TypeMismatchError(path, str(abi_type), type(raw).__name__)
        return [parse_value(t, item, f"{path}.{i}") for i, (t, item) in enumerate(zip(abi_type.fields, raw))]

    raise TypeError(f"지원하지 않는 ABI 타입입니다: {abi_type!r}")
