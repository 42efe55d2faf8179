from pathlib import Path

import pytest

from leaf.config import LeafConfig, find_config, load_config, resolve_config
from leaf.exceptions import ConfigError
from leaf.stem import Stem


def test_defaults():
    config = LeafConfig()
    assert config.root == Path.cwd()
    assert config.suffix == ".leaf"
    assert config.cache is True


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "leaf.yaml"
    path.write_text("")
    assert load_config(path) == LeafConfig(root=Path.cwd())


def test_relative_root_is_resolved_against_config_file(tmp_path):
    path = tmp_path / "leaf.yaml"
    path.write_text("root: templates\nsuffix: .html\ncache: false\n")

    config = load_config(path)
    assert config.root == tmp_path / "templates"
    assert config.suffix == ".html"
    assert config.cache is False


@pytest.mark.parametrize(
    "content",
    ["cache: [1, 2]\n", "- just\n- a list\n", "root: [unclosed\n"],
)
def test_invalid_config(tmp_path, content):
    path = tmp_path / "leaf.yaml"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.yaml")


def test_find_config_walks_up(tmp_path, monkeypatch):
    (tmp_path / "leaf.yaml").write_text("suffix: .txt\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert find_config().resolve() == (tmp_path / "leaf.yaml").resolve()
    assert resolve_config().suffix == ".txt"


def test_env_overrides_root(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LEAF_ROOT", str(tmp_path / "elsewhere"))
    assert resolve_config().root == tmp_path / "elsewhere"


def test_stem_from_config(tmp_path):
    (tmp_path / "hello.txt").write_text("Hello, @(name)!")
    config = LeafConfig(root=tmp_path, suffix=".txt", cache=False)

    stem = Stem.from_config(config)
    assert stem.cache is False
    assert stem.render_named("hello", {"name": "Ada"}) == b"Hello, Ada!"
