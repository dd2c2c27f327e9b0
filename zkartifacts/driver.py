"""
다중 대상 드라이버 (Driver)
============================

워크스페이스의 대상마다 다음 단계를 순서대로 수행한다.

  Selecting ─▶ [ Compiling ─▶ Encoding ─▶ LoadingProof ─▶ Materializing ─▶ Reporting ] ─▶ Done
                 (대상마다 반복, 한 대상의 실패는 다음 대상에 영향 없음)

  1. compile_bin_package     → CompiledProgram (abi, circuit)
  2. derive_public_view       → PublicAbi
     read_inputs_from_file    → (값, 반환값)
     encode                   → 공개 입력 FR 나열
  3. load_hex_data            → 증명 바이트
  4. materialize_artifacts    → ArtifactTriple
  5. reporter(package, triple)

백엔드 능력은 실행당 한 번만 조회한다. WorkspaceError와 능력 조회 실패는
실행 전체를 중단시키고, 그 외 오류는 TargetResult에 기록된다.
"""

import enum
import logging

from zkartifacts.abi import derive_public_view
from zkartifacts.abi.encoder import encode
from zkartifacts.abi.inputs import read_inputs_from_file
from zkartifacts.compiler import compile_bin_package
from zkartifacts.errors import ZkArtifactsError
from zkartifacts.proof import load_hex_data, proof_path
from zkartifacts.workspace import find_manifest, resolve_workspace

logger = logging.getLogger(__name__)


class Stage(enum.Enum):
    COMPILING = "compiling"
    ENCODING = "encoding"
    LOADING_PROOF = "loading_proof"
    MATERIALIZING = "materializing"
    REPORTING = "reporting"


class RunContext:
    """실행 시작 시 한 번 만들어 모든 단계에 넘기는 공유 상태."""

    def __init__(self, backend, workspace, options, verifier_name, fmt, language, opcodes):
        self.backend = backend
        self.workspace = workspace
        self.options = options
        self.verifier_name = verifier_name
        self.fmt = fmt
        self.language = language
        self.opcodes = opcodes


class TargetResult:
    """대상 하나의 결과. 성공이면 artifacts, 실패면 error와 실패한 stage."""

    def __init__(self, package, artifacts=None, error=None, stage=None):
        self.package = package
        self.artifacts = artifacts
        self.error = error
        self.stage = stage

    @property
    def ok(self):
        return self.error is None

    def __repr__(self):
        if self.ok:
            return f"TargetResult({self.package.name!r}, ok)"
        return f"TargetResult({self.package.name!r}, {self.stage.value}: {self.error})"


class RunReport:
    """워크스페이스 순서대로 나열된 TargetResult 모음."""

    def __init__(self, results):
        self.results = list(results)

    @property
    def ok(self):
        return all(r.ok for r in self.results)

    @property
    def failures(self):
        return [r for r in self.results if not r.ok]

    def __iter__(self):
        return iter(self.results)

    def __len__(self):
        return len(self.results)


def process_target(ctx, package, reporter=None):
    """대상 하나를 처리한다. 실패한 단계는 예외 대신 TargetResult에 담긴다."""
    stage = Stage.COMPILING
    try:
        logger.debug("[%s] %s", package.name, stage.value)
        program = compile_bin_package(
            ctx.workspace, package, ctx.options, ctx.language, ctx.opcodes
        )

        stage = Stage.ENCODING
        logger.debug("[%s] %s", package.name, stage.value)
        public_view = derive_public_view(program.abi)
        named_values, return_value = read_inputs_from_file(
            package.root_dir, ctx.verifier_name, ctx.fmt, public_view
        )
        public_inputs = encode(public_view, named_values, return_value)

        stage = Stage.LOADING_PROOF
        logger.debug("[%s] %s", package.name, stage.value)
        raw_proof = load_hex_data(proof_path(ctx.workspace, package))

        stage = Stage.MATERIALIZING
        logger.debug("[%s] %s", package.name, stage.value)
        artifacts = ctx.backend.materialize_artifacts(program.circuit, raw_proof, public_inputs)

        stage = Stage.REPORTING
        if reporter is not None:
            reporter(package, artifacts)
    except ZkArtifactsError as exc:
        logger.error("[%s] failed at %s: %s", package.name, stage.value, exc)
        return TargetResult(package, error=exc, stage=stage)

    logger.info("[%s] artifacts generated", package.name)
    return TargetResult(package, artifacts=artifacts)


def run(backend, program_dir, selection, options, verifier_name, fmt, reporter=None):
    """선택된 모든 대상의 산출물을 만든다.

    Args:
        backend: Backend 구현체
        program_dir: 매니페스트 탐색을 시작할 디렉터리
        selection: PackageSelection
        options: CompileOptions
        verifier_name: 입력 파일 이름 (확장자 제외)
        fmt: 입력 파일 Format
        reporter: 대상이 성공할 때마다 (package, ArtifactTriple)로 호출됨

    Returns:
        RunReport

    Raises:
        WorkspaceError: 매니페스트/대상 해석 실패
        BackendError: 백엔드 능력 조회 실패
    """
    manifest = find_manifest(program_dir)
    workspace = resolve_workspace(manifest, selection)
    language, opcodes = backend.get_capabilities()
    logger.debug("backend %s: %s (width %s)", backend.name, language.name, language.width)

    ctx = RunContext(backend, workspace, options, verifier_name, fmt, language, opcodes)
    results = [process_target(ctx, package, reporter) for package in workspace]

    report = RunReport(results)
    logger.info("%d/%d targets succeeded", len(report) - len(report.failures), len(report))
    return report
