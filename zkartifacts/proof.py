"""
증명 로더 (Proof Loader)
=========================

증명 파일은 대상마다 하나이며 16진수 텍스트로 저장된다:

    <proofs_directory>/<package>.proof

파일 내용은 해석하지 않는다. 바이트의 유효성 검사는 백엔드의 책임이다.
"""

import logging
import string
from pathlib import Path

from zkartifacts.config import PROOF_EXT
from zkartifacts.errors import NotFoundError, DecodeError

logger = logging.getLogger(__name__)

HEX_DIGITS = frozenset(string.hexdigits)


def load_hex_data(path):
    """16진수 텍스트 파일을 읽어 바이트로 디코딩한다.

    앞뒤 공백(줄바꿈 포함)은 무시한다.

    Raises:
        NotFoundError: 파일이 없을 때
        DecodeError: 홀수 길이이거나 16진수가 아닌 문자가 있을 때

    예시:
        >>> load_hex_data("proofs/main.proof")   # 파일 내용 "deadbeef"
        b'\\xde\\xad\\xbe\\xef'
    """
    path = Path(path)
    if not path.is_file():
        raise NotFoundError(path)

    try:
        text = path.read_bytes().decode("ascii").strip()
    except UnicodeDecodeError as exc:
        raise DecodeError(path, f"16진수 텍스트가 아닙니다: {exc.reason} (위치 {exc.start})") from exc
    if len(text) % 2 != 0:
        raise DecodeError(path, f"16진수 길이가 홀수입니다 ({len(text)})")
    bad = next((c for c in text if c not in HEX_DIGITS), None)
    if bad is not None:
        raise DecodeError(path, f"16진수가 아닌 문자가 있습니다: {bad!r}")

    data = bytes.fromhex(text)
    logger.debug("loaded %d proof bytes from %s", len(data), path)
    return data


def proof_path(workspace, package):
    """대상의 증명 파일 경로."""
    return Path(workspace.proofs_directory) / f"{package.name}.{PROOF_EXT}"
