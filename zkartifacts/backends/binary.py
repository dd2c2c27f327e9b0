"""
외부 실행 파일 백엔드
======================

증명 시스템 실행 파일을 하위 프로세스로 호출한다. 실행 파일은 다음
명령을 지원해야 한다 (모든 필드 원소는 "0x.." 16진수 문자열).

  info
      stdout: {"language": {"name": "PLONK-CSAT", "width": 3},
               "opcodes_supported": ["arithmetic", ...]}
  write_vk -b <circuit.json> -o <vk>
  proof_as_fields -p <proof> -k <vk> -o <proof_fields.json>
      출력: ["0x..", ...]
  vk_as_fields -k <vk> -o <vk_fields.json>
      출력: [vk_hash, vk_field_0, vk_field_1, ...]

증명 파일에는 공개 입력 (각 32바이트 빅엔디안)이 증명 바이트 앞에 붙는다.
모든 파일은 호출마다 새 임시 디렉터리에 만들고 호출이 끝나면 지운다.
"""

import json
import logging
import subprocess
import tempfile
from pathlib import Path

from zkartifacts.backends import Backend, ConstraintLanguage, ArtifactTriple
from zkartifacts.errors import BackendError
from zkartifacts.plonk.field import fr_to_bytes, from_hex

logger = logging.getLogger(__name__)


class BinaryBackend(Backend):
    """외부 실행 파일에 위임하는 백엔드."""

    name = "binary"

    def __init__(self, binary_path):
        self.binary_path = str(binary_path)

    def _run(self, stage, *args):
        """명령을 실행하고 stdout을 반환한다. 실패는 BackendError(stage, stderr)."""
        cmd = [self.binary_path, stage, *args]
        logger.debug("running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as exc:
            raise BackendError(stage, f"{self.binary_path} 실행 실패: {exc}") from exc
        if proc.returncode != 0:
            raise BackendError(stage, proc.stderr.strip() or f"exit status {proc.returncode}")
        return proc.stdout

    def get_capabilities(self):
        output = self._run("info")
        try:
            info = json.loads(output)
            language = ConstraintLanguage(info["language"]["name"], info["language"].get("width"))
            opcodes = frozenset(info.get("opcodes_supported", []))
        except (ValueError, KeyError, TypeError) as exc:
            raise BackendError("info", f"info 출력을 해석할 수 없습니다: {exc}") from exc
        return language, opcodes

    def materialize_artifacts(self, circuit_description, raw_proof, public_inputs):
        with tempfile.TemporaryDirectory(prefix="zkartifacts-") as tmp:
            tmp = Path(tmp)
            circuit_path = tmp / "circuit.json"
            proof_file = tmp / "proof"
            vk_path = tmp / "vk"
            proof_fields_path = tmp / "proof_fields.json"
            vk_fields_path = tmp / "vk_fields.json"

            circuit_path.write_text(json.dumps(circuit_description, sort_keys=True))
            prefix = b"".join(fr_to_bytes(v) for v in public_inputs)
            proof_file.write_bytes(prefix + bytes(raw_proof))

            self._run("write_vk", "-b", str(circuit_path), "-o", str(vk_path))
            self._run("proof_as_fields", "-p", str(proof_file), "-k", str(vk_path),
                      "-o", str(proof_fields_path))
            self._run("vk_as_fields", "-k", str(vk_path), "-o", str(vk_fields_path))

            proof_as_fields = _read_fields("proof_as_fields", proof_fields_path)
            vk_fields = _read_fields("vk_as_fields", vk_fields_path)

        if not vk_fields:
            raise BackendError("vk_as_fields", "검증키 출력이 비어 있습니다")
        return ArtifactTriple(proof_as_fields, vk_fields[0], vk_fields[1:])


def _read_fields(stage, path):
    """명령이 쓴 JSON 필드 원소 배열을 읽는다."""
    try:
        values = json.loads(path.read_text())
        if not isinstance(values, list):
            raise ValueError("JSON 배열이 아닙니다")
        return [from_hex(v) for v in values]
    except OSError as exc:
        raise BackendError(stage, f"출력 파일을 읽을 수 없습니다: {exc}") from exc
    except (ValueError, TypeError) as exc:
        raise BackendError(stage, f"출력을 해석할 수 없습니다: {exc}") from exc
