import os
from pathlib import Path

from pathwalk.core import env, paths
from pathwalk.core.models import WalkConfig
from pathwalk.repo import config


def test_dump_and_load(tmp_workspace):
    cfg = config.create_default("demo")
    cfg.walk = WalkConfig(markers=[".git", "go.mod"], stop="../..")
    target = paths.config_path(tmp_workspace)
    config.save(cfg, target)

    assert "# pathwalk configuration" in target.read_text()
    assert config.load(target) == cfg


def test_default_dump_comments_out_stop():
    text = config.dump(config.create_default("demo"))
    assert '# stop = ".."' in text
    assert config.loads(text).walk.stop == ""


def test_loads_missing_walk_table_uses_defaults():
    cfg = config.loads('[project]\nname = "bare"\n')
    assert cfg.project.name == "bare"
    assert cfg.walk.markers == list(paths.DEFAULT_MARKERS)
    assert cfg.walk.stop_path(Path("/repo")) is None


def test_loads_drops_blank_markers():
    cfg = config.loads('[walk]\nmarkers = ["", "Cargo.toml"]\n')
    assert cfg.walk.markers == ["Cargo.toml"]


def test_resolve_root_nearest_marker(proj):
    (proj / ".git").mkdir()
    components = proj / "src" / "components"
    assert paths.resolve_root(components, ["package.json"]) == proj / "src"
    assert paths.resolve_root(components, [".git"]) == proj


def test_resolve_root_falls_back_to_start(proj):
    start = proj / "src" / "components"
    assert paths.resolve_root(start, ["pathwalk-absent.marker"], stop=proj) == start


def test_user_env_does_not_override(tmp_workspace, monkeypatch):
    env_file = tmp_workspace / "env"
    env_file.write_text(
        "# comment\n"
        "export PATHWALK_TEST_A='quoted'\n"
        "PATHWALK_TEST_B = plain\n"
        "not a pair\n"
    )
    monkeypatch.setenv("PATHWALK_ENV_FILE", str(env_file))
    monkeypatch.setenv("PATHWALK_TEST_B", "kept")
    monkeypatch.setenv("PATHWALK_TEST_A", "")
    monkeypatch.delenv("PATHWALK_TEST_A")
    monkeypatch.setattr(env, "_USER_ENV_LOADED", False)

    env.load_user_env()

    assert os.environ["PATHWALK_TEST_A"] == "quoted"
    assert os.environ["PATHWALK_TEST_B"] == "kept"
