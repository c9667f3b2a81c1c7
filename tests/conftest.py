import pytest
from pathlib import Path
from click.testing import CliRunner
from pathwalk.cli import cli

@pytest.fixture
def runner():
    """Click CLI runner fixture."""
    return CliRunner()

@pytest.fixture
def tmp_workspace(tmp_path: Path):
    """Temporary directory with symlinks already resolved (macOS /tmp)."""
    return tmp_path.resolve()

@pytest.fixture
def initialized_workspace(runner, tmp_workspace):
    """Fixture for a directory that already has a pathwalk.toml."""
    result = runner.invoke(cli, ["init", "--path", str(tmp_workspace)])
    assert result.exit_code == 0
    return tmp_workspace

@pytest.fixture
def proj(tmp_workspace):
    """proj/src/components with package.json in proj and proj/src only."""
    root = tmp_workspace / "proj"
    components = root / "src" / "components"
    components.mkdir(parents=True)
    (root / "package.json").write_text("{}")
    (root / "src" / "package.json").write_text("{}")
    return root

@pytest.fixture
def symlink():
    """Create a symlink, skipping the test where the platform refuses."""
    def _make(link: Path, target: Path, *, is_dir: bool = True) -> Path:
        try:
            link.symlink_to(target, target_is_directory=is_dir)
        except (OSError, NotImplementedError) as exc:
            pytest.skip(f"symlinks unavailable: {exc}")
        return link
    return _make
