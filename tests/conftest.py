import json
import os
import sys

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkartifacts.plonk.circuit import Circuit
from zkartifacts.plonk.encoding import Proof, encode_proof, COMMITMENTS, EVALUATIONS, OPENINGS
from zkartifacts.plonk.field import FR, G1, ec_mul


def build_circuit():
    """공개 입력 y 하나와 x·x = y 곱셈 게이트로 이루어진 회로."""
    circuit = Circuit()
    pi = circuit.add_public_input_gate()
    mul = circuit.add_multiplication_gate()
    circuit.add_copy_constraint(mul, 0, mul, 1)
    circuit.add_copy_constraint(pi, 2, mul, 2)
    return circuit


def build_proof_bytes(offset=1):
    """곡선 위의 점과 작은 스칼라로 채운 800바이트 증명."""
    proof = Proof()
    for i, name in enumerate(COMMITMENTS + OPENINGS):
        setattr(proof, name, ec_mul(G1, offset + i))
    for i, name in enumerate(EVALUATIONS):
        setattr(proof, name, FR(100 * offset + i))
    return encode_proof(proof)


ABI = {
    "parameters": [
        {"name": "x", "type": {"kind": "field"}, "visibility": "private"},
        {"name": "y", "type": {"kind": "field"}, "visibility": "public"},
    ],
    "return_type": None,
}


@pytest.fixture
def circuit_description():
    return build_circuit().to_dict()


@pytest.fixture
def proof_bytes():
    return build_proof_bytes()


@pytest.fixture
def abi_dict():
    return json.loads(json.dumps(ABI))


def write_program(root, name, abi=None, circuit=None, proof=None, inputs='y = "9"\n',
                  package_dir=None, expression_width=3):
    """대상 하나의 컴파일 산출물, 증명, 입력 파일을 쓴다.

    proof 또는 inputs가 None이면 해당 파일을 만들지 않는다.
    """
    package_dir = root if package_dir is None else package_dir
    target = root / "target"
    target.mkdir(parents=True, exist_ok=True)
    artifact = {
        "name": name,
        "expression_width": expression_width,
        "abi": abi if abi is not None else ABI,
        "circuit": circuit if circuit is not None else build_circuit().to_dict(),
        "opcodes": ["arithmetic"],
    }
    (target / f"{name}.json").write_text(json.dumps(artifact))

    if proof is not None:
        proofs = root / "proofs"
        proofs.mkdir(parents=True, exist_ok=True)
        (proofs / f"{name}.proof").write_text(proof.hex() + "\n")

    if inputs is not None:
        (package_dir / "Verifier.toml").write_text(inputs)


@pytest.fixture
def single_package(tmp_path, proof_bytes):
    """[package] 매니페스트 하나로 된 프로그램 디렉터리."""
    (tmp_path / "Circuit.toml").write_text('[package]\nname = "main"\ntype = "bin"\n')
    write_program(tmp_path, "main", proof=proof_bytes)
    return tmp_path


@pytest.fixture
def make_workspace(tmp_path):
    """멤버 이름 목록으로 [workspace] 매니페스트와 각 멤버를 만든다.

    missing_proofs에 든 멤버는 증명 파일 없이 만든다.
    """
    def _make(names, default_member=None, missing_proofs=()):
        members = ", ".join(f'"{name}"' for name in names)
        manifest = f"[workspace]\nmembers = [{members}]\n"
        if default_member is not None:
            manifest += f'default-member = "{default_member}"\n'
        (tmp_path / "Circuit.toml").write_text(manifest)
        for i, name in enumerate(names):
            member_dir = tmp_path / name
            member_dir.mkdir()
            (member_dir / "Circuit.toml").write_text(f'[package]\nname = "{name}"\n')
            proof = None if name in missing_proofs else build_proof_bytes(offset=i + 1)
            write_program(tmp_path, name, proof=proof, package_dir=member_dir)
        return tmp_path
    return _make
