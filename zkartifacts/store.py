"""
산출물 저장소 (TinyDB)
=======================

대상 이름별로 산출물 세 가지를 저장한다. 필드 원소는 "0x" + 64자리
16진수 문자열로 직렬화한다.

    {"type": "main",
     "data": {"proof_as_fields": ["0x..", ...],
              "vk_hash": "0x..",
              "vk_as_fields": ["0x..", ...]}}
"""

from tinydb import TinyDB, Query
from tinydb.storages import MemoryStorage

from zkartifacts.backends import ArtifactTriple
from zkartifacts.plonk.field import to_hex, from_hex

DATA = Query()


def serialize_triple(triple):
    return {
        "proof_as_fields": [to_hex(v) for v in triple.proof_as_fields],
        "vk_hash": to_hex(triple.vk_hash),
        "vk_as_fields": [to_hex(v) for v in triple.vk_as_fields],
    }


def deserialize_triple(data):
    return ArtifactTriple(
        [from_hex(v) for v in data["proof_as_fields"]],
        from_hex(data["vk_hash"]),
        [from_hex(v) for v in data["vk_as_fields"]],
    )


class ArtifactStore:
    """path가 None이면 메모리 DB를 쓴다."""

    def __init__(self, path=None):
        if path is None:
            self.db = TinyDB(storage=MemoryStorage)
        else:
            self.db = TinyDB(path)

    def save(self, name, triple):
        self.db.upsert({"type": name, "data": serialize_triple(triple)}, DATA.type == name)

    def load_raw(self, name):
        """직렬화된 형태 그대로 조회한다. 없으면 None."""
        result = self.db.search(DATA.type == name)
        if not result:
            return None
        return result[0]["data"]

    def load(self, name):
        data = self.load_raw(name)
        if data is None:
            return None
        return deserialize_triple(data)

    def names(self):
        return [doc["type"] for doc in self.db.all()]

    def remove(self, name):
        self.db.remove(DATA.type == name)

    def clear(self):
        self.db.truncate()

    def close(self):
        self.db.close()
