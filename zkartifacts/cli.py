"""
명령행 인터페이스 (click)
==========================

  zkartifacts gen-artifacts   워크스페이스 대상마다 산출물 세 가지를 출력
  zkartifacts info            백엔드 능력 출력

종료 코드: 모든 대상이 성공하면 0, 하나라도 실패하면 (워크스페이스
오류 포함) 1. 옵션 오류는 click의 사용법 오류 (2).
"""

import json
import logging

import click

from zkartifacts.abi.inputs import Format
from zkartifacts.backends import get_backend
from zkartifacts.compiler import CompileOptions
from zkartifacts.config import BACKENDS, LOG_LEVELS, VERIFIER_INPUT_FILE, ConfigError, load_settings
from zkartifacts.driver import run
from zkartifacts.errors import ZkArtifactsError
from zkartifacts.plonk.field import to_hex
from zkartifacts.store import ArtifactStore, serialize_triple
from zkartifacts.workspace import PackageSelection

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level):
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT, force=True)


def _load(config_path, **overrides):
    try:
        settings = load_settings(config_path).override(**overrides)
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc
    configure_logging(settings.log_level)
    return settings


def _print_text(package, triple):
    click.echo(f"[{package.name}] proof_as_fields:")
    for value in triple.proof_as_fields:
        click.echo(f"  {to_hex(value)}")
    click.echo(f"[{package.name}] vk_hash: {to_hex(triple.vk_hash)}")
    click.echo(f"[{package.name}] vk_as_fields:")
    for value in triple.vk_as_fields:
        click.echo(f"  {to_hex(value)}")


@click.group()
@click.version_option(package_name="zkartifacts")
def cli():
    """증명 검증 산출물 생성기."""


@cli.command("gen-artifacts")
@click.option("--package", "package_name", default=None, help="처리할 패키지 이름")
@click.option("--workspace", "whole_workspace", is_flag=True, help="워크스페이스 전체 처리")
@click.option("--program-dir", type=click.Path(file_okay=False), default=".",
              show_default=True, help="매니페스트 탐색 시작 디렉터리")
@click.option("--verifier-name", "-v", default=VERIFIER_INPUT_FILE, show_default=True,
              help="입력 파일 이름 (확장자 제외)")
@click.option("--input-format", type=click.Choice([f.value for f in Format]),
              default=Format.TOML.value, show_default=True)
@click.option("--target-dir", type=click.Path(file_okay=False), default=None,
              help="컴파일 산출물 디렉터리")
@click.option("--expression-width", type=click.IntRange(min=1), default=None)
@click.option("--backend", type=click.Choice(BACKENDS), default=None)
@click.option("--backend-path", type=click.Path(dir_okay=False), default=None)
@click.option("--srs-seed", type=int, default=None)
@click.option("--store", "db_path", type=click.Path(dir_okay=False), default=None,
              help="산출물을 저장할 TinyDB 파일")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", show_default=True)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None)
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None)
def gen_artifacts(package_name, whole_workspace, program_dir, verifier_name, input_format,
                  target_dir, expression_width, backend, backend_path, srs_seed, db_path,
                  output_format, config_path, log_level):
    """대상마다 proof-as-fields, vk hash, vk-as-fields를 출력한다."""
    if package_name is not None and whole_workspace:
        raise click.UsageError("--package와 --workspace는 함께 쓸 수 없습니다")

    settings = _load(config_path, backend=backend, backend_path=backend_path,
                     srs_seed=srs_seed, db_path=db_path, log_level=log_level)

    if package_name is not None:
        selection = PackageSelection.selected(package_name)
    elif whole_workspace:
        selection = PackageSelection.all()
    else:
        selection = PackageSelection.default_or_all()

    store = ArtifactStore(settings.db_path) if settings.db_path else None
    collected = {}

    def reporter(package, triple):
        if store is not None:
            store.save(package.name, triple)
        if output_format == "json":
            collected[package.name] = serialize_triple(triple)
        else:
            _print_text(package, triple)

    options = CompileOptions(target_dir=target_dir, expression_width=expression_width)
    try:
        report = run(get_backend(settings), program_dir, selection, options,
                     verifier_name, Format(input_format), reporter)
    except ZkArtifactsError as exc:
        logger.error("run aborted: %s", exc)
        click.echo(f"error: {exc}", err=True)
        raise SystemExit(1)
    finally:
        if store is not None:
            store.close()

    if output_format == "json":
        failures = {
            r.package.name: {"stage": r.stage.value, "error": str(r.error)}
            for r in report.failures
        }
        click.echo(json.dumps({"artifacts": collected, "failures": failures}, indent=2))
    else:
        for result in report.failures:
            click.echo(f"[{result.package.name}] failed at {result.stage.value}: {result.error}",
                       err=True)

    raise SystemExit(0 if report.ok else 1)


@cli.command()
@click.option("--backend", type=click.Choice(BACKENDS), default=None)
@click.option("--backend-path", type=click.Path(dir_okay=False), default=None)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None)
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None)
def info(backend, backend_path, config_path, log_level):
    """백엔드의 제약 언어와 지원 opcode를 출력한다."""
    settings = _load(config_path, backend=backend, backend_path=backend_path, log_level=log_level)
    try:
        language, opcodes = get_backend(settings).get_capabilities()
    except ZkArtifactsError as exc:
        click.echo(f"error: {exc}", err=True)
        raise SystemExit(1)
    click.echo(f"backend: {settings.backend}")
    click.echo(f"language: {language.name} (width {language.width})")
    click.echo(f"opcodes: {', '.join(sorted(opcodes))}")


if __name__ == "__main__":
    cli()
