"""
회로 입출력 스키마 (ABI)
=========================

컴파일된 프로그램의 "abi" 항목을 표현한다.

  {
    "parameters": [
      {"name": "x", "type": {"kind": "field"}, "visibility": "private"},
      {"name": "y", "type": {"kind": "array", "length": 2,
                             "type": {"kind": "integer", "sign": "unsigned", "width": 8}},
       "visibility": "public"}
    ],
    "return_type": {"abi_type": {"kind": "field"}, "visibility": "public"}
  }

**타입과 필드 원소 폭(width)**:
  | kind    | 폭                     | 순회 순서          |
  |---------|------------------------|--------------------|
  | field   | 1                      |                    |
  | boolean | 1                      |                    |
  | integer | 1                      |                    |
  | string  | length (바이트당 1)     | 바이트 순          |
  | array   | length × 원소 폭        | 인덱스 순          |
  | struct  | 멤버 폭의 합            | 선언된 멤버 순     |
  | tuple   | 멤버 폭의 합            | 위치 순            |

매개변수 순서는 컴파일 시 고정되며, 인코딩된 필드 나열의 순서를 결정한다.
"""

from zkartifacts.errors import SchemaError

PUBLIC = "public"
PRIVATE = "private"
VISIBILITIES = (PUBLIC, PRIVATE)

# 입력 파일에서 반환값을 담는 키
MAIN_RETURN_NAME = "return"


# ─────────────────────────────────────────────────────────────────────
# 타입
# ─────────────────────────────────────────────────────────────────────

class AbiType:
    """ABI 타입의 기반 클래스."""

    kind = None

    def field_count(self):
        """이 타입의 값이 차지하는 필드 원소 수."""
        return 1

    def to_dict(self):
        return {"kind": self.kind}

    def __eq__(self, other):
        return type(self) is type(other) and self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(repr(self.to_dict()))

    def __repr__(self):
        return f"{type(self).__name__}({self})"


class FieldType(AbiType):
    kind = "field"

    def __str__(self):
        return "Field"


class BooleanType(AbiType):
    kind = "boolean"

    def __str__(self):
        return "bool"


class IntegerType(AbiType):
    kind = "integer"

    def __init__(self, sign, width):
        if sign not in ("signed", "unsigned"):
            raise SchemaError(f"정수 부호는 signed 또는 unsigned여야 합니다: {sign!r}")
        if not isinstance(width, int) or isinstance(width, bool) or not 0 < width <= 253:
            raise SchemaError(f"정수 폭이 잘못되었습니다: {width!r}")
        self.sign = sign
        self.width = width

    @property
    def signed(self):
        return self.sign == "signed"

    def to_dict(self):
        return {"kind": self.kind, "sign": self.sign, "width": self.width}

    def __str__(self):
        return f"{'i' if self.signed else 'u'}{self.width}"


class StringType(AbiType):
    kind = "string"

    def __init__(self, length):
        self.length = _check_length(length)

    def field_count(self):
        return self.length

    def to_dict(self):
        return {"kind": self.kind, "length": self.length}

    def __str__(self):
        return f"str<{self.length}>"


class ArrayType(AbiType):
    kind = "array"

    def __init__(self, length, element):
        self.length = _check_length(length)
        self.element = element

    def field_count(self):
        return self.length * self.element.field_count()

    def to_dict(self):
        return {"kind": self.kind, "length": self.length, "type": self.element.to_dict()}

    def __str__(self):
        return f"[{self.element}; {self.length}]"


class StructType(AbiType):
    kind = "struct"

    def __init__(self, path, fields):
        names = [name for name, _ in fields]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise SchemaError(f"구조체 {path}의 멤버 이름이 중복됩니다: {', '.join(duplicates)}")
        self.path = path
        self.fields = list(fields)

    def field_count(self):
        return sum(t.field_count() for _, t in self.fields)

    def to_dict(self):
        return {
            "kind": self.kind,
            "path": self.path,
            "fields": [{"name": name, "type": t.to_dict()} for name, t in self.fields],
        }

    def __str__(self):
        return f"struct {self.path}"


class TupleType(AbiType):
    kind = "tuple"

    def __init__(self, fields):
        self.fields = list(fields)

    def field_count(self):
        return sum(t.field_count() for t in self.fields)

    def to_dict(self):
        return {"kind": self.kind, "fields": [t.to_dict() for t in self.fields]}

    def __str__(self):
        return "(" + ", ".join(str(t) for t in self.fields) + ")"


def _check_length(length):
    if not isinstance(length, int) or isinstance(length, bool) or length < 0:
        raise SchemaError(f"길이가 잘못되었습니다: {length!r}")
    return length


def abi_type_from_dict(data):
    """JSON dict → AbiType.

    Raises:
        SchemaError: 알 수 없는 kind이거나 필수 항목이 없을 때
    """
    if not isinstance(data, dict):
        raise SchemaError(f"타입 기술은 객체여야 합니다: {data!r}")
    kind = data.get("kind")
    try:
        if kind == "field":
            return FieldType()
        if kind == "boolean":
            return BooleanType()
        if kind == "integer":
            return IntegerType(data["sign"], data["width"])
        if kind == "string":
            return StringType(data["length"])
        if kind == "array":
            return ArrayType(data["length"], abi_type_from_dict(data["type"]))
        if kind == "struct":
            fields = [(f["name"], abi_type_from_dict(f["type"])) for f in data["fields"]]
            return StructType(data.get("path", ""), fields)
        if kind == "tuple":
            return TupleType([abi_type_from_dict(t) for t in data["fields"]])
    except (KeyError, TypeError) as exc:
        raise SchemaError(f"{kind} 타입 기술에 필요한 항목이 없습니다: {exc}") from exc
    raise SchemaError(f"알 수 없는 타입 kind입니다: {kind!r}")


# ─────────────────────────────────────────────────────────────────────
# 스키마
# ─────────────────────────────────────────────────────────────────────

class AbiParameter:
    """이름, 타입, 공개 여부가 붙은 매개변수."""

    def __init__(self, name, abi_type, visibility):
        self.name = name
        self.type = abi_type
        self.visibility = visibility

    @property
    def is_public(self):
        return self.visibility == PUBLIC

    def __repr__(self):
        return f"AbiParameter({self.name!r}, {self.type}, {self.visibility})"


class AbiReturnType:
    """반환 슬롯: 타입과 공개 여부."""

    def __init__(self, abi_type, visibility=PUBLIC):
        self.abi_type = abi_type
        self.visibility = visibility

    @property
    def is_public(self):
        return self.visibility == PUBLIC


class Abi:
    """회로의 입출력 스키마.

    속성:
        parameters: AbiParameter 리스트 (선언 순서)
        return_type: AbiReturnType 또는 None
    """

    def __init__(self, parameters, return_type=None):
        self.parameters = list(parameters)
        self.return_type = return_type

    def parameter_names(self):
        return [p.name for p in self.parameters]

    def validate(self):
        """스키마 불변식을 확인한다.

        Raises:
            SchemaError: 매개변수 이름이 중복되거나 visibility가 잘못되었을 때
        """
        names = self.parameter_names()
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise SchemaError(f"매개변수 이름이 중복됩니다: {', '.join(duplicates)}")
        for param in self.parameters:
            if not isinstance(param.name, str) or not param.name:
                raise SchemaError(f"매개변수 이름이 잘못되었습니다: {param.name!r}")
            if param.visibility not in VISIBILITIES:
                raise SchemaError(
                    f"`{param.name}`의 visibility가 잘못되었습니다: {param.visibility!r}"
                )
        if self.return_type is not None and self.return_type.visibility not in VISIBILITIES:
            raise SchemaError(f"반환값의 visibility가 잘못되었습니다: {self.return_type.visibility!r}")

    def field_count(self):
        """모든 매개변수(비공개 포함)의 필드 원소 수 합."""
        return sum(p.type.field_count() for p in self.parameters)

    def to_dict(self):
        data = {
            "parameters": [
                {"name": p.name, "type": p.type.to_dict(), "visibility": p.visibility}
                for p in self.parameters
            ],
            "return_type": None,
        }
        if self.return_type is not None:
            data["return_type"] = {
                "abi_type": self.return_type.abi_type.to_dict(),
                "visibility": self.return_type.visibility,
            }
        return data

    @classmethod
    def from_dict(cls, data):
        """JSON dict → Abi (검증 포함).

        return_type이 {"abi_type", "visibility"} 형태가 아니라 타입 기술 자체이면
        공개 반환값으로 취급한다.

        Raises:
            SchemaError: 형식이 잘못되었거나 불변식을 어길 때
        """
        if not isinstance(data, dict) or not isinstance(data.get("parameters", []), list):
            raise SchemaError("abi는 parameters 리스트를 가진 객체여야 합니다")

        parameters = []
        for entry in data.get("parameters", []):
            if not isinstance(entry, dict) or "name" not in entry or "type" not in entry:
                raise SchemaError(f"매개변수 기술이 잘못되었습니다: {entry!r}")
            parameters.append(AbiParameter(
                entry["name"],
                abi_type_from_dict(entry["type"]),
                entry.get("visibility", PRIVATE),
            ))

        return_type = None
        raw_return = data.get("return_type")
        if raw_return is not None:
            if isinstance(raw_return, dict) and "abi_type" in raw_return:
                return_type = AbiReturnType(
                    abi_type_from_dict(raw_return["abi_type"]),
                    raw_return.get("visibility", PUBLIC),
                )
            else:
                return_type = AbiReturnType(abi_type_from_dict(raw_return), PUBLIC)

        abi = cls(parameters, return_type)
        abi.validate()
        return abi


class PublicAbi:
    """Abi의 공개 부분 (derive_public_view의 결과).

    원본 Abi에서 매번 새로 계산되며 독립적으로 변경되지 않는다.

    속성:
        parameters: 공개 매개변수 (선언 순서)
        return_type: 공개 반환 슬롯의 AbiType 또는 None
        schema_names: 원본 스키마의 모든 매개변수 이름 (비공개 포함)
    """

    def __init__(self, parameters, return_type, schema_names):
        self.parameters = tuple(parameters)
        self.return_type = return_type
        self.schema_names = frozenset(schema_names)

    def parameter_names(self):
        return [p.name for p in self.parameters]

    def field_count(self):
        """인코딩 결과의 길이 (반환값 포함)."""
        count = sum(p.type.field_count() for p in self.parameters)
        if self.return_type is not None:
            count += self.return_type.field_count()
        return count


def derive_public_view(schema):
    """공개 매개변수와 (공개일 때만) 반환 슬롯으로 이루어진 PublicAbi를 만든다.

    Raises:
        SchemaError: 스키마가 잘못되었을 때 (컴파일러 결함으로 간주)
    """
    schema.validate()
    parameters = [p for p in schema.parameters if p.is_public]
    return_type = None
    if schema.return_type is not None and schema.return_type.is_public:
        return_type = schema.return_type.abi_type
    return PublicAbi(parameters, return_type, schema.parameter_names())
