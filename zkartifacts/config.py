"""
설정 (Configuration)
=====================

**고정 상수**: 파일 이름과 디렉터리 규칙.

**Settings**: 실행 설정. 우선순위는 낮은 것부터
  1. 기본값
  2. 설정 파일 (TOML, [zkartifacts] 테이블)
  3. 환경 변수 ZKARTIFACTS_<KEY>
  4. CLI 옵션 (Settings.override)

예시 설정 파일:
    [zkartifacts]
    backend = "plonk"
    srs_seed = 12345
    log_level = "INFO"
"""

import logging
import os
from pathlib import Path

import toml

logger = logging.getLogger(__name__)

MANIFEST_FILE = "Circuit.toml"
PROOF_EXT = "proof"
VERIFIER_INPUT_FILE = "Verifier"
TARGET_DIR = "target"
PROOFS_DIR = "proofs"

DEFAULT_SRS_SEED = 12345
DEFAULT_CONFIG_FILE = "zkartifacts.toml"
CONFIG_TABLE = "zkartifacts"
ENV_PREFIX = "ZKARTIFACTS_"

BACKENDS = ("plonk", "binary")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ConfigError(ValueError):
    pass


class Settings:
    """실행 설정.

    속성:
        backend: 백엔드 이름 ("plonk" 또는 "binary")
        backend_path: binary 백엔드 실행 파일 경로
        srs_seed: plonk 백엔드의 SRS 시드
        db_path: 산출물 저장소 (TinyDB) 경로. None이면 저장하지 않음
        log_level: 로그 레벨 이름
    """

    FIELDS = ("backend", "backend_path", "srs_seed", "db_path", "log_level")

    def __init__(self, backend="plonk", backend_path=None, srs_seed=DEFAULT_SRS_SEED,
                 db_path=None, log_level="WARNING"):
        self.backend = backend
        self.backend_path = backend_path
        self.srs_seed = srs_seed
        self.db_path = db_path
        self.log_level = log_level
        self.validate()

    def validate(self):
        if self.backend not in BACKENDS:
            raise ConfigError(f"알 수 없는 백엔드입니다: {self.backend!r} ({', '.join(BACKENDS)})")
        if self.backend == "binary" and not self.backend_path:
            raise ConfigError("binary 백엔드에는 backend_path가 필요합니다")
        if not isinstance(self.srs_seed, int) or isinstance(self.srs_seed, bool):
            raise ConfigError(f"srs_seed는 정수여야 합니다: {self.srs_seed!r}")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigError(f"알 수 없는 로그 레벨입니다: {self.log_level!r}")
        self.log_level = str(self.log_level).upper()

    def override(self, **values):
        """None이 아닌 값만 덮어쓴 새 Settings를 반환한다."""
        current = {name: getattr(self, name) for name in self.FIELDS}
        current.update({k: v for k, v in values.items() if v is not None})
        return Settings(**current)

    def __repr__(self):
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.FIELDS)
        return f"Settings({fields})"


def load_settings(config_path=None, environ=None):
    """기본값 → 설정 파일 → 환경 변수 순으로 Settings를 만든다.

    config_path가 없으면 현재 디렉터리의 zkartifacts.toml을 (있을 때만) 읽는다.

    Raises:
        ConfigError: 설정 파일이 없거나(명시한 경우) 값이 잘못되었을 때
    """
    environ = os.environ if environ is None else environ
    values = {}

    if config_path is None:
        candidate = Path(DEFAULT_CONFIG_FILE)
        path = candidate if candidate.is_file() else None
    else:
        path = Path(config_path)
        if not path.is_file():
            raise ConfigError(f"설정 파일이 없습니다: {path}")

    if path is not None:
        try:
            table = toml.load(path).get(CONFIG_TABLE, {})
        except toml.TomlDecodeError as exc:
            raise ConfigError(f"{path} 해석 실패: {exc}") from exc
        unknown = sorted(set(table) - set(Settings.FIELDS))
        if unknown:
            raise ConfigError(f"알 수 없는 설정 항목입니다: {', '.join(unknown)}")
        values.update(table)
        logger.debug("loaded settings from %s", path)

    for name in Settings.FIELDS:
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is None:
            continue
        if name == "srs_seed":
            try:
                raw = int(raw)
            except ValueError:
                raise ConfigError(f"{ENV_PREFIX}SRS_SEED는 정수여야 합니다: {raw!r}") from None
        values[name] = raw

    return Settings(**values)
