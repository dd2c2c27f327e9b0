"""
컴파일 단계 (Compiler collaborator)
====================================

회로 컴파일 자체는 이 패키지의 범위 밖이다. 외부 컴파일러가 남긴
컴파일 산출물을 대상 디렉터리에서 읽어 CompiledProgram으로 만든다.

    <target_dir>/<package>.json
    {
      "name": "main",
      "expression_width": 3,
      "abi": {...},                       # zkartifacts.abi 참고
      "circuit": {...}                    # 백엔드에 그대로 전달 (opaque)
      "opcodes": ["arithmetic"]           # 선택
    }

백엔드 능력(get_capabilities)과 맞지 않으면 CompileError.
"""

import json
import logging
from pathlib import Path

from zkartifacts.abi import Abi
from zkartifacts.errors import CompileError

logger = logging.getLogger(__name__)


class CompileOptions:
    """컴파일 옵션.

    속성:
        target_dir: 컴파일 산출물 디렉터리 (기본: <workspace>/target)
        expression_width: 허용할 최대 식 폭. None이면 백엔드 폭을 쓴다.
    """

    def __init__(self, target_dir=None, expression_width=None):
        self.target_dir = target_dir
        self.expression_width = expression_width


class CompiledProgram:
    """컴파일된 프로그램: 스키마(Abi)와 불투명한 회로 기술."""

    def __init__(self, name, abi, circuit, expression_width=None):
        self.name = name
        self.abi = abi
        self.circuit = circuit
        self.expression_width = expression_width


def artifact_path(workspace, package, options):
    target_dir = Path(options.target_dir) if options.target_dir else workspace.target_directory
    return target_dir / f"{package.name}.json"


def compile_bin_package(workspace, package, options, language, opcode_support):
    """바이너리 패키지의 컴파일 산출물을 읽는다.

    Raises:
        CompileError: 라이브러리 패키지, 산출물 없음/손상, 백엔드와 불일치
        SchemaError: 산출물의 ABI가 잘못되었을 때
    """
    if not package.is_binary:
        raise CompileError(package.name, "바이너리 패키지가 아닙니다")

    path = artifact_path(workspace, package, options)
    if not path.is_file():
        raise CompileError(package.name, f"컴파일 산출물이 없습니다: {path}")
    try:
        data = json.loads(path.read_text())
    except ValueError as exc:
        raise CompileError(package.name, f"{path} 해석 실패: {exc}") from exc
    if not isinstance(data, dict) or "abi" not in data or "circuit" not in data:
        raise CompileError(package.name, f"{path}에 abi 또는 circuit 항목이 없습니다")

    width = data.get("expression_width")
    if width is not None and (not isinstance(width, int) or isinstance(width, bool)):
        raise CompileError(package.name, f"expression_width는 정수여야 합니다: {width!r}")
    limit = options.expression_width if options.expression_width is not None else language.width
    if width is not None and limit is not None and width > limit:
        raise CompileError(
            package.name,
            f"식 폭 {width}은 {language.name} 백엔드의 폭 {limit}을 넘습니다",
        )

    opcodes = data.get("opcodes", [])
    if not isinstance(opcodes, list) or not all(isinstance(op, str) for op in opcodes):
        raise CompileError(package.name, f"opcodes는 문자열 리스트여야 합니다: {opcodes!r}")
    unsupported = sorted(set(opcodes) - set(opcode_support))
    if unsupported:
        raise CompileError(
            package.name,
            f"백엔드가 지원하지 않는 opcode입니다: {', '.join(unsupported)}",
        )

    abi = Abi.from_dict(data["abi"])
    logger.debug("loaded compiled program %s from %s", package.name, path)
    return CompiledProgram(data.get("name", package.name), abi, data["circuit"], width)
