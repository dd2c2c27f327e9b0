"""
외부 실행 파일 백엔드 테스트

실제 증명 시스템 대신 같은 명령 규약을 따르는 파이썬 스크립트를 쓴다.
"""
import json
import os
import stat
import sys

import pytest

from zkartifacts.backends import get_backend
from zkartifacts.backends.binary import BinaryBackend
from zkartifacts.config import Settings
from zkartifacts.errors import BackendError
from zkartifacts.plonk.field import FR, to_hex

FAKE_PROVER = """#!{python}
import json
import sys

cmd, args = sys.argv[1], sys.argv[2:]
opts = dict(zip(args[0::2], args[1::2]))
mode = {mode!r}

if cmd == "info":
    if mode == "bad_info":
        print("not json")
    else:
        print(json.dumps({{"language": {{"name": "PLONK-CSAT", "width": 3}},
                          "opcodes_supported": ["arithmetic", "range"]}}))
elif cmd == "write_vk":
    if mode == "fail_vk":
        sys.stderr.write("circuit is unsatisfiable\\n")
        sys.exit(3)
    circuit = json.load(open(opts["-b"]))
    with open(opts["-o"], "w") as f:
        f.write(str(len(circuit["gates"])))
elif cmd == "proof_as_fields":
    data = open(opts["-p"], "rb").read()
    fields = [hex(int.from_bytes(data[i:i + 32], "big")) for i in range(0, 64, 32)]
    fields.append(hex(len(data)))
    json.dump(fields, open(opts["-o"], "w"))
elif cmd == "vk_as_fields":
    gates = int(open(opts["-k"]).read())
    if mode == "empty_vk":
        json.dump([], open(opts["-o"], "w"))
    else:
        json.dump(["0xabc", hex(gates), "0x1"], open(opts["-o"], "w"))
else:
    sys.exit(1)
"""


@pytest.fixture
def make_prover(tmp_path):
    def _make(mode="ok"):
        path = tmp_path / f"prover_{mode}"
        path.write_text(FAKE_PROVER.format(python=sys.executable, mode=mode))
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(path)
    return _make


class TestBinaryBackend:
    def test_capabilities(self, make_prover):
        language, opcodes = BinaryBackend(make_prover()).get_capabilities()
        assert language.name == "PLONK-CSAT"
        assert language.width == 3
        assert opcodes == {"arithmetic", "range"}

    def test_bad_info_output(self, make_prover):
        with pytest.raises(BackendError) as excinfo:
            BinaryBackend(make_prover("bad_info")).get_capabilities()
        assert excinfo.value.stage == "info"

    def test_materialize(self, make_prover, circuit_description):
        proof = b"\x01" * 32 + b"\x02" * 16
        triple = BinaryBackend(make_prover()).materialize_artifacts(
            circuit_description, proof, [FR(7)]
        )
        # 공개 입력이 증명 앞에 붙는다
        assert triple.proof_as_fields[0] == FR(7)
        assert triple.proof_as_fields[1] == FR(int.from_bytes(b"\x01" * 32, "big"))
        assert triple.proof_as_fields[2] == FR(32 + len(proof))
        assert triple.vk_hash == FR(0xabc)
        assert triple.vk_as_fields == [FR(len(circuit_description["gates"])), FR(1)]

    def test_stage_failure_passes_stderr(self, make_prover, circuit_description):
        with pytest.raises(BackendError) as excinfo:
            BinaryBackend(make_prover("fail_vk")).materialize_artifacts(
                circuit_description, b"", [FR(7)]
            )
        assert excinfo.value.stage == "write_vk"
        assert excinfo.value.message == "circuit is unsatisfiable"

    def test_empty_vk(self, make_prover, circuit_description):
        with pytest.raises(BackendError) as excinfo:
            BinaryBackend(make_prover("empty_vk")).materialize_artifacts(
                circuit_description, b"\x00" * 64, []
            )
        assert excinfo.value.stage == "vk_as_fields"

    def test_missing_executable(self, tmp_path):
        with pytest.raises(BackendError):
            BinaryBackend(tmp_path / "nope").get_capabilities()

    def test_get_backend(self, make_prover):
        backend = get_backend(Settings(backend="binary", backend_path=make_prover()))
        assert isinstance(backend, BinaryBackend)


def test_to_hex_is_accepted_by_reader(tmp_path):
    from zkartifacts.backends.binary import _read_fields
    path = tmp_path / "fields.json"
    path.write_text(json.dumps([to_hex(FR(5)), "0x0"]))
    assert _read_fields("x", path) == [FR(5), FR(0)]
    path.write_text(json.dumps({"not": "a list"}))
    with pytest.raises(BackendError):
        _read_fields("x", path)
    os.remove(path)
    with pytest.raises(BackendError):
        _read_fields("x", path)
