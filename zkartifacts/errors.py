"""
오류 분류 (Error taxonomy)
===========================

  SchemaError            컴파일러가 만든 ABI가 잘못됨 (중복 이름 등)
  MissingInputError      공개 매개변수 값이 없음
  TypeMismatchError      값의 형태/범위가 선언된 타입과 다름
  UnexpectedInputError   스키마에 없는 이름이 입력됨
  NotFoundError          증명/입력 파일이 없음
  DecodeError            증명 16진수 또는 입력 파일을 해석할 수 없음
  BackendError           백엔드가 산출물을 만들지 못함 (메시지는 그대로 전달)
  CompileError           컴파일된 프로그램이 없거나 백엔드와 맞지 않음
  WorkspaceError         매니페스트/대상 해석 실패 (실행 전체가 중단됨)

WorkspaceError를 제외한 모든 오류는 해당 대상(target)만 실패시킨다.
"""


class ZkArtifactsError(Exception):
    """모든 오류의 기반 클래스."""


class SchemaError(ZkArtifactsError):
    pass


class AbiError(ZkArtifactsError):
    """입력 값이 스키마를 만족하지 않음."""


class MissingInputError(AbiError):

    def __init__(self, name):
        self.name = name
        super().__init__(f"입력 값이 없습니다: `{name}`")


class TypeMismatchError(AbiError):

    def __init__(self, name, expected, actual):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"`{name}`의 타입이 맞지 않습니다: {expected} 필요, {actual} 입력됨"
        )


class UnexpectedInputError(AbiError):

    def __init__(self, name):
        self.name = name
        super().__init__(f"스키마에 없는 매개변수입니다: `{name}`")


class NotFoundError(ZkArtifactsError):

    def __init__(self, path):
        self.path = path
        super().__init__(f"파일이 없습니다: {path}")


class DecodeError(ZkArtifactsError):

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"{path} 해석 실패: {reason}")


class BackendError(ZkArtifactsError):
    """백엔드 실패. stage는 실패한 백엔드 단계, message는 백엔드 메시지 원문."""

    def __init__(self, stage, message):
        self.stage = stage
        self.message = message
        super().__init__(f"백엔드 오류 ({stage}): {message}")


class CompileError(ZkArtifactsError):

    def __init__(self, package, message):
        self.package = package
        self.message = message
        super().__init__(f"[{package}] {message}")


class WorkspaceError(ZkArtifactsError):
    pass
