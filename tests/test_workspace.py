import pytest

from zkartifacts.errors import WorkspaceError
from zkartifacts.workspace import (
    PackageSelection, SelectionKind, find_manifest, resolve_workspace,
)


class TestFindManifest:
    def test_in_directory(self, single_package):
        assert find_manifest(single_package) == (single_package / "Circuit.toml").resolve()

    def test_walks_upward(self, single_package):
        nested = single_package / "src" / "deep"
        nested.mkdir(parents=True)
        assert find_manifest(nested) == (single_package / "Circuit.toml").resolve()

    def test_missing(self, tmp_path):
        with pytest.raises(WorkspaceError):
            find_manifest(tmp_path)


class TestResolveWorkspace:
    def test_single_package(self, single_package):
        ws = resolve_workspace(single_package / "Circuit.toml", PackageSelection.default_or_all())
        assert [p.name for p in ws] == ["main"]
        assert ws.target_directory == single_package / "target"
        assert ws.proofs_directory == single_package / "proofs"
        assert ws.members[0].is_binary

    def test_members_in_manifest_order(self, make_workspace):
        root = make_workspace(["zeta", "alpha", "mid"])
        ws = resolve_workspace(root / "Circuit.toml", PackageSelection.all())
        assert [p.name for p in ws] == ["zeta", "alpha", "mid"]
        assert ws.members[1].root_dir == root / "alpha"
        assert len(ws) == 3

    def test_default_member(self, make_workspace):
        root = make_workspace(["a", "b"], default_member="b")
        ws = resolve_workspace(root / "Circuit.toml", PackageSelection.default_or_all())
        assert [p.name for p in ws] == ["b"]

    def test_all_ignores_default_member(self, make_workspace):
        root = make_workspace(["a", "b"], default_member="b")
        ws = resolve_workspace(root / "Circuit.toml", PackageSelection.all())
        assert [p.name for p in ws] == ["a", "b"]

    def test_default_or_all_without_default(self, make_workspace):
        root = make_workspace(["a", "b"])
        ws = resolve_workspace(root / "Circuit.toml", PackageSelection.default_or_all())
        assert [p.name for p in ws] == ["a", "b"]

    def test_selected(self, make_workspace):
        root = make_workspace(["a", "b"])
        ws = resolve_workspace(root / "Circuit.toml", PackageSelection.selected("b"))
        assert [p.name for p in ws] == ["b"]

    def test_selected_unknown(self, make_workspace):
        root = make_workspace(["a", "b"])
        with pytest.raises(WorkspaceError):
            resolve_workspace(root / "Circuit.toml", PackageSelection.selected("c"))

    def test_unknown_default_member(self, make_workspace):
        root = make_workspace(["a"], default_member="zzz")
        with pytest.raises(WorkspaceError):
            resolve_workspace(root / "Circuit.toml", PackageSelection.default_or_all())

    def test_member_without_manifest(self, tmp_path):
        (tmp_path / "Circuit.toml").write_text('[workspace]\nmembers = ["ghost"]\n')
        with pytest.raises(WorkspaceError):
            resolve_workspace(tmp_path / "Circuit.toml", PackageSelection.all())

    def test_duplicate_names(self, tmp_path):
        (tmp_path / "Circuit.toml").write_text('[workspace]\nmembers = ["a", "b"]\n')
        for d in ("a", "b"):
            (tmp_path / d).mkdir()
            (tmp_path / d / "Circuit.toml").write_text('[package]\nname = "same"\n')
        with pytest.raises(WorkspaceError):
            resolve_workspace(tmp_path / "Circuit.toml", PackageSelection.all())

    @pytest.mark.parametrize("manifest", [
        "[other]\nx = 1\n",
        "[package]\ntype = \"bin\"\n",
        "[package]\nname = \"m\"\ntype = \"dylib\"\n",
        "[workspace]\nmembers = []\n",
        "not toml at all = = =\n",
        "workspace = 5\n",
        "[workspace]\nmembers = [1, 2]\n",
        "[workspace]\nmembers = [[\"a\"]]\n",
        "[workspace]\nmembers = [\"a\"]\ndefault-member = 3\n",
        "package = \"main\"\n",
    ])
    def test_bad_manifest(self, tmp_path, manifest):
        (tmp_path / "Circuit.toml").write_text(manifest)
        with pytest.raises(WorkspaceError):
            resolve_workspace(tmp_path / "Circuit.toml", PackageSelection.all())

    def test_library_package(self, tmp_path):
        (tmp_path / "Circuit.toml").write_text('[package]\nname = "util"\ntype = "lib"\n')
        ws = resolve_workspace(tmp_path / "Circuit.toml", PackageSelection.all())
        assert not ws.members[0].is_binary


class TestPackageSelection:
    def test_constructors(self):
        assert PackageSelection.selected("x").kind is SelectionKind.SELECTED
        assert PackageSelection.selected("x").name == "x"
        assert PackageSelection.default_or_all().kind is SelectionKind.DEFAULT_OR_ALL
        assert PackageSelection.all().kind is SelectionKind.ALL
