import pytest

from pathwalk.services.workspace import OutsideWorkspaceError, Workspace, nested_roots


@pytest.fixture
def workspace(tmp_workspace):
    root = tmp_workspace / "ws"
    (root / "pkg" / "src").mkdir(parents=True)
    (root / "other").mkdir()
    (root / "package.json").write_text("{}")
    (root / "pkg" / "package.json").write_text("{}")
    return Workspace.open(root)


def test_check_returns_path_inside(workspace):
    target = workspace.root / "pkg" / "src" / "main.ts"
    assert workspace.check(target) == target


def test_check_rejects_symlink_escape(workspace, tmp_workspace, symlink):
    outside = tmp_workspace / "outside"
    outside.mkdir()
    symlink(workspace.root / "escape", outside)

    with pytest.raises(OutsideWorkspaceError) as exc_info:
        workspace.check(workspace.root / "escape" / "main.ts")
    assert exc_info.value.root == workspace.root
    assert isinstance(exc_info.value, ValueError)


def test_filter_inside_keeps_order(workspace, tmp_workspace):
    inside_a = workspace.root / "other" / "a.ts"
    inside_b = workspace.root / "pkg" / "b.ts"
    outside = tmp_workspace / "elsewhere.ts"
    assert workspace.filter_inside([inside_b, outside, inside_a]) == [inside_b, inside_a]


def test_nearest_root_prefers_closest_marker(workspace):
    file = workspace.root / "pkg" / "src" / "main.ts"
    assert workspace.nearest_root(file, ["package.json"]) == workspace.root / "pkg"


def test_nearest_root_falls_back_to_workspace_root(workspace):
    file = workspace.root / "other" / "util.ts"
    assert workspace.nearest_root(file, ["package.json"]) == workspace.root


def test_nearest_root_outside_workspace(workspace, tmp_workspace):
    assert workspace.nearest_root(tmp_workspace / "stray.ts", ["package.json"]) is None


def test_nearest_root_without_marker(workspace):
    file = workspace.root / "pkg" / "src" / "main.ts"
    assert workspace.nearest_root(file, ["pathwalk-absent.marker"]) is None


def test_nested_roots(tmp_workspace):
    a = tmp_workspace / "a"
    pairs = nested_roots([a, a / "b", tmp_workspace / "c", a])
    assert pairs == [(a, a / "b")]


def test_nearest_root_through_symlink_into_workspace(workspace, tmp_workspace, symlink):
    other = tmp_workspace / "other"
    other.mkdir()
    (other / "package.json").write_text("{}")
    symlink(other / "link", workspace.root / "pkg" / "src")

    file = other / "link" / "main.ts"
    assert workspace.nearest_root(file, ["package.json"]) == workspace.root / "pkg"


def test_nearest_root_through_alias_of_root(workspace, tmp_workspace, symlink):
    alias = symlink(tmp_workspace / "alias", workspace.root)
    (tmp_workspace / "marker.txt").write_text("")
    (workspace.root / "marker.txt").write_text("")

    file = alias / "other" / "util.ts"
    assert workspace.nearest_root(file, ["marker.txt"]) == workspace.root
