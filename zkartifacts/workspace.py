"""
워크스페이스와 빌드 대상 (Workspace / Package)
===============================================

매니페스트 Circuit.toml은 두 가지 형태 중 하나이다.

단일 패키지:
    [package]
    name = "main"
    type = "bin"

여러 패키지:
    [workspace]
    members = ["circuits/a", "circuits/b"]
    default-member = "circuits/a"      # 선택

각 멤버 디렉터리에는 [package] 형태의 Circuit.toml이 있다.
멤버 순서는 매니페스트에 적힌 순서이며 다시 정렬하지 않는다.

워크스페이스 해석 실패(WorkspaceError)는 실행 전체를 중단시킨다.
"""

import enum
import logging
from pathlib import Path

import toml

from zkartifacts.config import MANIFEST_FILE, TARGET_DIR, PROOFS_DIR
from zkartifacts.errors import WorkspaceError

logger = logging.getLogger(__name__)

PACKAGE_TYPES = ("bin", "lib")


class Package:
    """이름과 루트 디렉터리를 가진 빌드 대상. 실행 중에는 변경하지 않는다."""

    def __init__(self, name, root_dir, package_type="bin"):
        self.name = name
        self.root_dir = Path(root_dir)
        self.package_type = package_type

    @property
    def is_binary(self):
        return self.package_type == "bin"

    def __repr__(self):
        return f"Package({self.name!r}, {str(self.root_dir)!r}, {self.package_type!r})"


class Workspace:
    """선택된 빌드 대상들과 출력 디렉터리.

    속성:
        root_dir: 워크스페이스 루트
        members: 선택된 Package 리스트 (매니페스트 순서)
    """

    def __init__(self, root_dir, members):
        self.root_dir = Path(root_dir)
        self.members = list(members)

    @property
    def target_directory(self):
        return self.root_dir / TARGET_DIR

    @property
    def proofs_directory(self):
        return self.root_dir / PROOFS_DIR

    def __iter__(self):
        return iter(self.members)

    def __len__(self):
        return len(self.members)


class SelectionKind(enum.Enum):
    SELECTED = "selected"
    DEFAULT_OR_ALL = "default_or_all"
    ALL = "all"


class PackageSelection:
    """처리할 대상 선택: 이름 하나 / 기본 멤버(없으면 전체) / 전체."""

    def __init__(self, kind, name=None):
        self.kind = kind
        self.name = name

    @classmethod
    def selected(cls, name):
        return cls(SelectionKind.SELECTED, name)

    @classmethod
    def default_or_all(cls):
        return cls(SelectionKind.DEFAULT_OR_ALL)

    @classmethod
    def all(cls):
        return cls(SelectionKind.ALL)

    def __repr__(self):
        if self.kind is SelectionKind.SELECTED:
            return f"PackageSelection.selected({self.name!r})"
        return f"PackageSelection.{self.kind.value}()"


def find_manifest(program_dir):
    """program_dir에서 위로 올라가며 Circuit.toml을 찾는다.

    Raises:
        WorkspaceError: 찾지 못했을 때
    """
    start = Path(program_dir).resolve()
    for directory in (start, *start.parents):
        candidate = directory / MANIFEST_FILE
        if candidate.is_file():
            return candidate
    raise WorkspaceError(f"{start} 또는 상위 디렉터리에서 {MANIFEST_FILE}을 찾을 수 없습니다")


def _load_manifest(path):
    try:
        return toml.load(path)
    except toml.TomlDecodeError as exc:
        raise WorkspaceError(f"{path} 해석 실패: {exc}") from exc
    except OSError as exc:
        raise WorkspaceError(f"{path}를 읽을 수 없습니다: {exc}") from exc


def _package_from_manifest(path, table):
    if not isinstance(table, dict):
        raise WorkspaceError(f"{path}: [package]는 테이블이어야 합니다")
    name = table.get("name")
    if not isinstance(name, str) or not name or "/" in name or "\\" in name:
        raise WorkspaceError(f"{path}: 패키지 이름이 잘못되었습니다: {name!r}")
    package_type = table.get("type", "bin")
    if package_type not in PACKAGE_TYPES:
        raise WorkspaceError(f"{path}: 알 수 없는 패키지 유형입니다: {package_type!r}")
    return Package(name, path.parent, package_type)


def _read_member(root_dir, member):
    path = root_dir / member / MANIFEST_FILE
    if not path.is_file():
        raise WorkspaceError(f"워크스페이스 멤버 `{member}`에 {MANIFEST_FILE}이 없습니다")
    manifest = _load_manifest(path)
    if "package" not in manifest:
        raise WorkspaceError(f"{path}: [package] 항목이 없습니다")
    return _package_from_manifest(path, manifest["package"])


def resolve_workspace(manifest_path, selection):
    """매니페스트를 읽고 선택 규칙에 따라 Workspace를 만든다.

    Raises:
        WorkspaceError: 매니페스트가 잘못되었거나, 선택한 패키지가 없을 때
    """
    manifest_path = Path(manifest_path)
    root_dir = manifest_path.parent
    manifest = _load_manifest(manifest_path)

    default_member = None
    if "workspace" in manifest:
        table = manifest["workspace"]
        if not isinstance(table, dict):
            raise WorkspaceError(f"{manifest_path}: [workspace]는 테이블이어야 합니다")
        members = table.get("members", [])
        if not isinstance(members, list) or not members:
            raise WorkspaceError(f"{manifest_path}: workspace.members가 비어 있습니다")
        bad = [m for m in members if not isinstance(m, str)]
        if bad:
            raise WorkspaceError(f"{manifest_path}: 멤버 경로는 문자열이어야 합니다: {bad[0]!r}")
        packages = [_read_member(root_dir, member) for member in members]
        if "default-member" in table:
            if not isinstance(table["default-member"], str):
                raise WorkspaceError(f"{manifest_path}: default-member는 문자열이어야 합니다")
            default_dir = (root_dir / table["default-member"]).resolve()
            default_member = next(
                (p for p in packages if p.root_dir.resolve() == default_dir), None
            )
            if default_member is None:
                raise WorkspaceError(
                    f"default-member `{table['default-member']}`가 멤버 목록에 없습니다"
                )
    elif "package" in manifest:
        packages = [_package_from_manifest(manifest_path, manifest["package"])]
    else:
        raise WorkspaceError(f"{manifest_path}: [package] 또는 [workspace] 항목이 필요합니다")

    names = [p.name for p in packages]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise WorkspaceError(f"패키지 이름이 중복됩니다: {', '.join(duplicates)}")

    if selection.kind is SelectionKind.SELECTED:
        selected = [p for p in packages if p.name == selection.name]
        if not selected:
            raise WorkspaceError(f"선택한 패키지 `{selection.name}`를 찾을 수 없습니다")
    elif selection.kind is SelectionKind.DEFAULT_OR_ALL and default_member is not None:
        selected = [default_member]
    else:
        selected = packages

    logger.debug("resolved workspace %s: %s", root_dir, [p.name for p in selected])
    return Workspace(root_dir, selected)
